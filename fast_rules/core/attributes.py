"""
Attribute naming and rule specific message placeholders.

`replacements` maps a rule name to a function that fills the extra
placeholders its message template uses (`:min`, `:other`, ...). Every
function receives the `Messages` renderer, the template and the bound rule,
and returns the final message.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Callable, Dict

if TYPE_CHECKING:
    from fast_rules.core.messages import Messages
    from fast_rules.core.rule import Rule


def formatter(attribute: str) -> str:
    """Default attribute formatter: `first_name` -> `first name`, `items[0]` -> `items 0`."""
    return re.sub(r"[_\[]", " ", attribute).replace("]", "")


def _between(messages: 'Messages', template: str, rule: 'Rule') -> str:
    parameters = rule.get_parameters()
    data = {
        "min": parameters[0] if len(parameters) > 0 else "",
        "max": parameters[1] if len(parameters) > 1 else "",
    }
    return messages.replace_placeholders(rule, template, data)


def _other_and_value(messages: 'Messages', template: str, rule: 'Rule') -> str:
    parameters = rule.get_parameters()
    data = {
        "other": messages.get_attribute_name(parameters[0]) if parameters else "",
        "value": ",".join(parameters[1:]),
    }
    return messages.replace_placeholders(rule, template, data)


def _field(messages: 'Messages', template: str, rule: 'Rule') -> str:
    names = [messages.get_attribute_name(parameter) for parameter in rule.get_parameters()]
    return messages.replace_placeholders(rule, template, {"field": ", ".join(names)})


def _other_attribute(messages: 'Messages', template: str, rule: 'Rule') -> str:
    parameters = rule.get_parameters()
    other = messages.get_attribute_name(parameters[0]) if parameters else ""
    return messages.replace_placeholders(rule, template, {rule.name: other})


replacements: Dict[str, Callable[['Messages', str, 'Rule'], str]] = {
    "between": _between,
    "digits_between": _between,
    "required_if": _other_and_value,
    "required_unless": _other_and_value,
    "required_with": _field,
    "required_with_all": _field,
    "required_without": _field,
    "required_without_all": _field,
    "same": _other_attribute,
    "different": _other_attribute,
}
