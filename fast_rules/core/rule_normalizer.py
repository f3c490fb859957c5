from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional

from fast_rules.utils.path_resolver import expand_wildcards, flatten, is_sequence, replace_wildcards

if TYPE_CHECKING:
    from fast_rules.core.messages import Messages
    from fast_rules.core.rule_registry import RuleRegistry


@dataclass(slots=True)
class RuleSpec:
    """One rule on one attribute: `min:3` -> RuleSpec("min", "3")."""

    name: str
    value: Any = None


CanonicalRuleMap = Dict[str, List[RuleSpec]]


def extract_rule(token: str) -> RuleSpec:
    """Split `name:value` on the first colon. A token without a colon has no value."""
    name, separator, value = token.partition(":")
    if not separator:
        return RuleSpec(token)
    return RuleSpec(name, value)


def parse_rules(rules: Any) -> List[RuleSpec]:
    """
    Normalize one attribute's rules into RuleSpecs.

    Accepted shapes:
      - "required|min:3"
      - ["required", "min:3"]
      - ["required", {"min": 3}, RuleSpec("max", 10)]
      - {"required": None, "min": 3}
    Anything else becomes a RuleSpec named after its string form, which no
    registered rule matches.
    """
    if isinstance(rules, str):
        return [extract_rule(token) for token in rules.split("|")]

    if isinstance(rules, RuleSpec):
        return [RuleSpec(rules.name, rules.value)]

    if isinstance(rules, Mapping):
        return [RuleSpec(str(name), value) for name, value in rules.items()]

    if is_sequence(rules):
        parsed: List[RuleSpec] = []
        for item in rules:
            if isinstance(item, str):
                parsed.append(extract_rule(item))
            elif isinstance(item, RuleSpec):
                parsed.append(RuleSpec(item.name, item.value))
            elif isinstance(item, Mapping):
                parsed.extend(RuleSpec(str(name), value) for name, value in item.items())
            else:
                logging.debug(f"[RULES] Unrecognised rule token {item!r}")
                parsed.append(RuleSpec(str(item)))
        return parsed

    logging.debug(f"[RULES] Unrecognised rule definition {rules!r}")
    return [RuleSpec(str(rules))]


class RuleNormalizer:
    """
    Turns a caller's rule definition into the canonical rule map.

    Wildcard attributes (`items.*.qty`) are expanded against the live input,
    so the map only holds concrete paths. `has_async` is set when any of the
    normalized rules is registered as asynchronous.
    """

    def __init__(self, registry: 'RuleRegistry', messages: Optional['Messages'] = None):
        self.registry = registry
        self.messages = messages
        self.has_async = False

    def normalize(self, input_root: Any, rule_spec: Any) -> CanonicalRuleMap:
        parsed: CanonicalRuleMap = {}
        for attribute, rules in flatten(rule_spec).items():
            self._normalize_attribute(input_root, attribute, rules, parsed)
        return parsed

    def _normalize_attribute(self, input_root: Any, attribute: str, rules: Any, parsed: CanonicalRuleMap) -> None:
        if "*" not in attribute:
            self._add_rules(attribute, rules, parsed, [])
            return

        expanded = expand_wildcards(input_root, attribute)
        if not expanded:
            logging.debug(f"[RULES] `{attribute}` matched no list in the input, no rules generated")
        for concrete, bindings in expanded:
            self._add_rules(concrete, rules, parsed, bindings)

    def _add_rules(self, attribute: str, rules: Any, parsed: CanonicalRuleMap, bindings: List[int]) -> None:
        attribute_rules = parse_rules(rules)
        if not attribute_rules:
            return

        for rule in attribute_rules:
            if rule.value is not None:
                rule.value = replace_wildcards(rule.value, bindings)
            if self.registry.is_async(rule.name):
                self.has_async = True

        if bindings and self.messages is not None:
            self.messages.bind_wildcards(bindings)

        parsed[attribute] = attribute_rules
