from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional

from fast_rules.core.attributes import replacements
from fast_rules.utils.path_resolver import replace_wildcards
from fast_rules.utils.serialisation import stringify

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule


class Messages:
    """
    Renders failure messages for bound rules.

    Template lookup order:
      1. custom message for the rule on this attribute (`min.age`, or `age.min`)
      2. custom message for the rule (`min`)
      3. catalog message for the rule on this attribute
      4. catalog message for the rule
      5. catalog `def`
    """

    def __init__(self, lang: str, messages: Dict[str, Any]):
        self.lang = lang
        self.messages = messages
        self.custom_messages: Dict[str, str] = {}
        self.attribute_names: Dict[str, str] = {}
        self.attribute_formatter: Optional[Callable[[str], str]] = None

    def set_custom(self, custom_messages: Optional[Dict[str, str]]) -> None:
        self.custom_messages = dict(custom_messages or {})

    def set_attribute_names(self, attributes: Optional[Dict[str, str]]) -> None:
        self.attribute_names = dict(attributes or {})

    def set_attribute_formatter(self, func: Optional[Callable[[str], str]]) -> None:
        self.attribute_formatter = func

    def bind_wildcards(self, bindings: List[int]) -> None:
        """
        Make custom messages keyed with `*` apply to expanded attributes.

        With bindings [2], `min.items.*.qty` is also registered as
        `min.items.2.qty`. Messages already registered for a concrete key win.
        """
        if not bindings:
            return
        for key in [key for key in self.custom_messages if "*" in key]:
            self.custom_messages.setdefault(replace_wildcards(key, bindings), self.custom_messages[key])

    def get_attribute_name(self, attribute: str) -> str:
        if attribute in self.attribute_names:
            return self.attribute_names[attribute]

        name = attribute
        catalog_names = self.messages.get('attributes') or {}
        if attribute in catalog_names:
            name = catalog_names[attribute]

        if self.attribute_formatter:
            name = self.attribute_formatter(name)
        return name

    def all(self) -> Dict[str, Any]:
        return self.messages

    def render(self, rule: 'Rule', message: Optional[str] = None) -> str:
        """Render the failure message for `rule`. A message supplied by the predicate wins."""
        if message:
            return message

        template = self._get_template(rule)
        if rule.name in replacements:
            return replacements[rule.name](self, template, rule)
        return self.replace_placeholders(rule, template, {})

    def _get_template(self, rule: 'Rule') -> str:
        attribute_formats = [f"{rule.name}.{rule.attribute}", f"{rule.attribute}.{rule.name}"]

        template: Any = None
        for formats, source in (
            (attribute_formats, self.custom_messages),
            ([rule.name], self.custom_messages),
            ([f"{rule.name}.{rule.attribute}"], self.messages),
            ([rule.name], self.messages),
        ):
            template = next((source[key] for key in formats if key in source), None)
            if template is not None:
                break

        if template is None:
            template = self.messages.get('def', 'The :attribute attribute has errors.')

        if isinstance(template, dict):
            value_type = rule.get_value_type()
            template = template.get(value_type) or template.get('string') or next(iter(template.values()), '')

        return template

    def replace_placeholders(self, rule: 'Rule', template: str, data: Dict[str, Any]) -> str:
        data = dict(data)
        data['attribute'] = self.get_attribute_name(rule.attribute)
        if not data.get(rule.name):
            data[rule.name] = ",".join(stringify(p) for p in rule.get_parameters())

        message = template
        # Longest first, so `:digits_between` is not eaten by `:digits`
        for placeholder in sorted(data, key=len, reverse=True):
            replacement = stringify(data[placeholder])
            message = re.sub(":" + re.escape(placeholder), lambda _: replacement, message)
        return message
