"""Core engine re-exported for convenient access."""

from .async_coordinator import AsyncCoordinator, CoordinatorState
from .engine import EvaluationEngine
from .error_bag import ErrorBag
from .messages import Messages
from .rule import Rule
from .rule_normalizer import CanonicalRuleMap, RuleNormalizer, RuleSpec, parse_rules
from .rule_registry import RuleDescriptor, RuleRegistry, get_default_registry, reset_default_registry

__all__ = [
    "AsyncCoordinator",
    "CoordinatorState",
    "EvaluationEngine",
    "ErrorBag",
    "Messages",
    "Rule",
    "CanonicalRuleMap",
    "RuleNormalizer",
    "RuleSpec",
    "parse_rules",
    "RuleDescriptor",
    "RuleRegistry",
    "get_default_registry",
    "reset_default_registry",
]
