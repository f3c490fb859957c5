from __future__ import annotations

from typing import TYPE_CHECKING, Any

from fast_rules.utils.path_resolver import MISSING, is_sequence
from fast_rules.utils.serialisation import stringify

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule
    from fast_rules.core.rule_registry import RuleRegistry


def in_(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    allowed = [stringify(p) for p in rule.get_parameters()]
    if is_sequence(value):
        return all(stringify(item) in allowed for item in value)
    return stringify(value) in allowed


def not_in(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    denied = [stringify(p) for p in rule.get_parameters()]
    if is_sequence(value):
        return not any(stringify(item) in denied for item in value)
    return stringify(value) not in denied


def same(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    other = rule.resolve(stringify(parameter))
    return other is not MISSING and other == value


def different(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    return rule.resolve(stringify(parameter)) != value


def confirmed(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    other = rule.resolve(f"{attribute}_confirmation")
    return other is not MISSING and other == value


def register(registry: 'RuleRegistry') -> None:
    for name, handler in (
        ("in", in_),
        ("not_in", not_in),
        ("same", same),
        ("different", different),
        ("confirmed", confirmed),
    ):
        registry.register(name, handler, pass_rule=True)
