from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, Callable, Iterator, List, Optional

from fast_rules.core.async_coordinator import AsyncCoordinator
from fast_rules.utils.path_resolver import has_path, is_sequence, resolve

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule
    from fast_rules.core.rule_normalizer import RuleSpec
    from fast_rules.validator import Validator


class EvaluationEngine:
    """
    Runs a validator's canonical rule map.

    `check()` evaluates every rule inline and returns the verdict.
    `check_async()` dispatches every rule through an `AsyncCoordinator` and
    reports the verdict through the `passes`/`fails` callbacks once all
    checks resolved. Both modes share the same attribute and rule gating.
    """

    def __init__(self, validator: 'Validator'):
        self.validator = validator

    def check(self) -> bool:
        validator = self.validator
        validator.reset_errors()

        for attribute, value, rules in self._attributes():
            for spec, rule in self._validatable_rules(attribute, value, rules):
                passed = rule.validate(value, spec.value, attribute)
                if not passed:
                    validator.add_failure(rule)
                    if validator.config.should_stop_on(attribute):
                        break

        return validator.error_count == 0

    def check_async(
        self,
        passes: Optional[Callable[[], Any]] = None,
        fails: Optional[Callable[[], Any]] = None,
    ) -> AsyncCoordinator:
        validator = self.validator
        validator.reset_errors()

        def resolved_all(all_passed: bool) -> None:
            if all_passed:
                if passes is not None:
                    passes()
            elif fails is not None:
                fails()

        coordinator = AsyncCoordinator(validator.add_failure, resolved_all)

        for attribute, value, rules in self._attributes():
            for spec, rule in self._validatable_rules(attribute, value, rules):
                token = coordinator.register(rule)
                rule.validate(value, spec.value, attribute, functools.partial(coordinator.resolve, token))

        coordinator.mark_dispatch_complete()
        return coordinator

    def is_validatable(self, rule: 'Rule', value: Any, attribute: str) -> bool:
        """Non implicit rules only run on lists and on values `required` accepts."""
        if is_sequence(value) or rule.is_implicit:
            return True
        required = self.validator.get_rule("required")
        if required is None:
            return True
        return bool(required.validate(value, None, attribute))

    def _attributes(self) -> Iterator[tuple[str, Any, List['RuleSpec']]]:
        validator = self.validator
        for attribute, rules in validator.rules.items():
            if validator.has_rule(attribute, ["sometimes"]) and not has_path(validator.input, attribute):
                logging.debug(f"[VALIDATOR] Skipping `{attribute}`: sometimes and not supplied")
                continue
            yield attribute, resolve(validator.input, attribute), rules

    def _validatable_rules(self, attribute: str, value: Any, rules: List['RuleSpec']) -> Iterator[tuple['RuleSpec', 'Rule']]:
        for spec in rules:
            rule = self.validator.get_rule(spec.name)
            if rule is None:
                logging.debug(f"[VALIDATOR] Skipping unknown rule `{spec.name}` on `{attribute}`")
                continue
            if not self.is_validatable(rule, value, attribute):
                continue
            yield spec, rule
