"""
Size rules compare numbers numerically and everything else by length.

A value counts as a number when it is one, or when the attribute also
carries a numeric rule (`integer`, `numeric`), so `"12"` with
`"numeric|min:10"` passes while `"12"` with `"min:10"` (two characters) fails.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any

from fast_rules.utils.serialisation import stringify, to_number

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule
    from fast_rules.core.rule_registry import RuleRegistry

DIGITS_RE = re.compile(r"^\d+$")


def _bounds(rule: 'Rule') -> tuple[float, float]:
    parameters = rule.get_parameters()
    low = to_number(parameters[0]) if len(parameters) > 0 else float("nan")
    high = to_number(parameters[1]) if len(parameters) > 1 else float("nan")
    return low, high


def min_(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    return rule.get_size() >= _bounds(rule)[0]


def max_(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    return rule.get_size() <= _bounds(rule)[0]


def between(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    low, high = _bounds(rule)
    return low <= rule.get_size() <= high


def size(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    return rule.get_size() == _bounds(rule)[0]


def digits(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    text = stringify(value)
    return DIGITS_RE.match(text) is not None and len(text) == _bounds(rule)[0]


def digits_between(value: Any, parameter: Any, attribute: str, *, rule: 'Rule') -> bool:
    text = stringify(value)
    low, high = _bounds(rule)
    return DIGITS_RE.match(text) is not None and low <= len(text) <= high


def register(registry: 'RuleRegistry') -> None:
    for name, handler in (
        ("min", min_),
        ("max", max_),
        ("between", between),
        ("size", size),
        ("digits", digits),
        ("digits_between", digits_between),
    ):
        registry.register(name, handler, pass_rule=True)
