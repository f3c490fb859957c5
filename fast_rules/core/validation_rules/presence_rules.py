"""Implicit rules: they run even when the value is absent or empty."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fast_rules.utils.path_resolver import MISSING
from fast_rules.utils.serialisation import stringify

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule
    from fast_rules.core.rule_registry import RuleRegistry


def required(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    if value is MISSING or value is None:
        return False
    if isinstance(value, str):
        return len(value.strip()) > 0
    if isinstance(value, (list, tuple, dict, set)):
        return len(value) > 0
    return True


def required_if(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    parameters = rule.get_parameters()
    if not parameters:
        return True
    other = rule.resolve(parameters[0])
    if other is not MISSING and stringify(other) in [stringify(p) for p in parameters[1:]]:
        return required(value)
    return True


def required_unless(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    parameters = rule.get_parameters()
    if not parameters:
        return True
    other = rule.resolve(parameters[0])
    if other is MISSING or stringify(other) not in [stringify(p) for p in parameters[1:]]:
        return required(value)
    return True


def required_with(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    if any(required(rule.resolve(field)) for field in rule.get_parameters()):
        return required(value)
    return True


def required_with_all(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    fields = rule.get_parameters()
    if fields and all(required(rule.resolve(field)) for field in fields):
        return required(value)
    return True


def required_without(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    if any(not required(rule.resolve(field)) for field in rule.get_parameters()):
        return required(value)
    return True


def required_without_all(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    fields = rule.get_parameters()
    if fields and not any(required(rule.resolve(field)) for field in fields):
        return required(value)
    return True


def present(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return value is not MISSING


def accepted(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return stringify(value).lower() in ("on", "yes", "1", "true")


def sometimes(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    # Only marks the attribute as optional; the gating happens in the engine
    return True


def register(registry: 'RuleRegistry') -> None:
    registry.register_implicit("required", required)
    registry.register_implicit("present", present)
    registry.register_implicit("accepted", accepted)
    for name, handler in (
        ("required_if", required_if),
        ("required_unless", required_unless),
        ("required_with", required_with),
        ("required_with_all", required_with_all),
        ("required_without", required_without),
        ("required_without_all", required_without_all),
    ):
        registry.register_implicit(name, handler, pass_rule=True)
    registry.register("sometimes", sometimes)
