from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Callable, Dict, Optional, Union

from fast_rules.contracts.validator_rule import AsyncValidatorRule, ValidatorRule
from fast_rules.core.rule import Rule

if TYPE_CHECKING:
    from fast_rules.validator import Validator


@dataclass(frozen=True, slots=True)
class RuleDescriptor:
    """Registration metadata of one rule name."""

    name: str
    handler: Callable
    implicit: bool = False
    is_async: bool = False
    pass_rule: bool = False


class RuleRegistry:
    """
    Mapping of rule names to predicate descriptors.

    Sync/async and implicit membership are read from here, never from the
    predicate's signature. Registries are populated at startup; a validation
    run only reads from them.
    """

    def __init__(self):
        self._descriptors: Dict[str, RuleDescriptor] = {}
        self._missed_rule: Optional[RuleDescriptor] = None

    def register(
        self,
        name: str,
        handler: Callable,
        *,
        implicit: bool = False,
        is_async: bool = False,
        pass_rule: bool = False,
    ) -> RuleDescriptor:
        """
        Register a predicate under `name`, replacing any earlier registration.

        Args:
            name: Rule name used in rule strings.
            handler: `(value, parameter, attribute)` returning a bool, or for async
                rules `(value, parameter, attribute, done)` calling `done(passed, message=None)`
                once (or returning an awaitable whose result is the verdict).
            implicit: Run the rule even when the value is absent or empty.
            is_async: The rule completes through `done` instead of returning.
            pass_rule: Also pass the bound `Rule` as the `rule` keyword argument.
        """
        descriptor = RuleDescriptor(name, handler, implicit=implicit, is_async=is_async, pass_rule=pass_rule)
        if name in self._descriptors:
            logging.debug(f"[RULES] Replacing rule `{name}`")
        self._descriptors[name] = descriptor
        return descriptor

    def register_implicit(self, name: str, handler: Callable, **kwargs) -> RuleDescriptor:
        return self.register(name, handler, implicit=True, **kwargs)

    def register_async(self, name: str, handler: Callable, **kwargs) -> RuleDescriptor:
        return self.register(name, handler, is_async=True, **kwargs)

    def register_async_implicit(self, name: str, handler: Callable, **kwargs) -> RuleDescriptor:
        return self.register(name, handler, implicit=True, is_async=True, **kwargs)

    def register_rule(self, rule: Union[ValidatorRule, AsyncValidatorRule]) -> RuleDescriptor:
        """Register a class based rule implementing one of the rule contracts."""
        if isinstance(rule, AsyncValidatorRule):
            impl = rule

            def handler(value, parameter, attribute, done, *, rule: Rule):
                return impl.validate(value, parameter, attribute, rule)

            return self.register(rule.name, handler, implicit=rule.implicit, is_async=True, pass_rule=True)

        if isinstance(rule, ValidatorRule):
            return self.register(rule.name, rule.validate, implicit=rule.implicit, pass_rule=True)

        raise TypeError(f"Expected a ValidatorRule or AsyncValidatorRule, got {type(rule).__name__}")

    def register_missed_rule_validator(self, handler: Optional[Callable], *, pass_rule: bool = False) -> None:
        """
        Set the predicate used for rule names nothing is registered under.

        By default unknown rule names are skipped. Pass `None` to restore that.
        """
        if handler is None:
            self._missed_rule = None
            return
        self._missed_rule = RuleDescriptor("missed_rule", handler, pass_rule=pass_rule)

    def get(self, name: str) -> Optional[RuleDescriptor]:
        descriptor = self._descriptors.get(name)
        if descriptor is None and self._missed_rule is not None:
            return replace(self._missed_rule, name=name)
        return descriptor

    def has(self, name: str) -> bool:
        return name in self._descriptors

    def is_async(self, name: str) -> bool:
        descriptor = self._descriptors.get(name)
        return descriptor is not None and descriptor.is_async

    def is_implicit(self, name: str) -> bool:
        descriptor = self._descriptors.get(name)
        return descriptor is not None and descriptor.implicit

    def names(self) -> list[str]:
        return list(self._descriptors)

    def make(self, name: str, validator: 'Validator') -> Optional[Rule]:
        """Bind the rule named `name` to `validator`. None when the name is unknown."""
        descriptor = self.get(name)
        if descriptor is None:
            return None
        return Rule(descriptor, validator)

    def copy(self) -> RuleRegistry:
        registry = RuleRegistry()
        registry._descriptors = dict(self._descriptors)
        registry._missed_rule = self._missed_rule
        return registry


_default_registry: Optional[RuleRegistry] = None


def get_default_registry() -> RuleRegistry:
    """The process-wide registry, pre-loaded with the built-in rules."""
    global _default_registry
    if _default_registry is None:
        from fast_rules.core.validation_rules import register_builtin_rules

        registry = RuleRegistry()
        register_builtin_rules(registry)
        _default_registry = registry
    return _default_registry


def reset_default_registry() -> None:
    """Forget custom registrations on the default registry (useful for testing)."""
    global _default_registry
    _default_registry = None
