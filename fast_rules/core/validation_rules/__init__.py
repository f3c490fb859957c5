"""Built-in rule catalog."""

from __future__ import annotations

from typing import TYPE_CHECKING

from . import comparison_rules, presence_rules, size_rules, type_rules

if TYPE_CHECKING:
    from fast_rules.core.rule_registry import RuleRegistry


def register_builtin_rules(registry: 'RuleRegistry') -> None:
    presence_rules.register(registry)
    type_rules.register(registry)
    size_rules.register(registry)
    comparison_rules.register(registry)


__all__ = ["register_builtin_rules"]
