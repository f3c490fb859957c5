from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, Iterable, Optional, Union

from fast_rules.config import ValidatorConfig, configure, get_default_config
from fast_rules.contracts.validator_rule import AsyncValidatorRule, ValidatorRule
from fast_rules.core import localization
from fast_rules.core.async_coordinator import AsyncCoordinator
from fast_rules.core.engine import EvaluationEngine
from fast_rules.core.error_bag import ErrorBag
from fast_rules.core.rule import Rule
from fast_rules.core.rule_normalizer import CanonicalRuleMap, RuleNormalizer
from fast_rules.core.rule_registry import RuleRegistry, get_default_registry
from fast_rules.exceptions import AsyncCallbackRequiredException, ValidationException
from fast_rules.utils.path_resolver import has_path, resolve


class Validator:
    """
    Validate an input dict against per-attribute rules.

    Example:
        validator = Validator(
            {"name": "", "items": [{"qty": 0}]},
            {"name": "required", "items.*.qty": "integer|min:1"},
            {"required.name": "Tell us your name."},
        )
        if validator.fails():
            validator.errors.all()
            # {'name': ['Tell us your name.'], 'items.0.qty': ['The items.0.qty must be at least 1.']}

    Rule sets containing async rules must be run with callbacks
    (`validator.passes(callback)`) or awaited (`await validator.validate_async()`).
    """

    def __init__(
        self,
        input: Optional[Dict[str, Any]],
        rules: Dict[str, Any],
        custom_messages: Optional[Dict[str, str]] = None,
        *,
        config: Optional[ValidatorConfig] = None,
        registry: Optional[RuleRegistry] = None,
    ):
        self.config = config or get_default_config()
        self.registry = registry or get_default_registry()
        self.input = input if input is not None else {}

        self.messages = localization.make_messages(self.config.lang)
        self.messages.set_custom(custom_messages)
        self.messages.set_attribute_formatter(self.config.attribute_formatter)

        self.errors = ErrorBag()
        self.error_count = 0

        normalizer = RuleNormalizer(self.registry, self.messages)
        self.rules: CanonicalRuleMap = normalizer.normalize(self.input, rules)
        self.has_async = normalizer.has_async
        self.engine = EvaluationEngine(self)

    def check(self) -> bool:
        """Run every rule synchronously. True when the input passes."""
        if self.has_async:
            raise AsyncCallbackRequiredException("check")
        return self.engine.check()

    def check_async(
        self,
        passes: Optional[Callable[[], Any]] = None,
        fails: Optional[Callable[[], Any]] = None,
    ) -> AsyncCoordinator:
        """Dispatch every rule; exactly one of `passes`/`fails` is called once all resolved."""
        return self.engine.check_async(passes, fails)

    def passes(self, callback: Optional[Callable[[], Any]] = None) -> Optional[bool]:
        if self._should_run_async("passes", callback):
            self.check_async(callback)
            return None
        return self.check()

    def fails(self, callback: Optional[Callable[[], Any]] = None) -> Optional[bool]:
        if self._should_run_async("fails", callback):
            self.check_async(None, callback)
            return None
        return not self.check()

    def validate(self) -> Dict[str, Any]:
        """
        Run the rules and return the validated attributes.

        Raises:
            ValidationException: If any rule fails.
        """
        if not self.passes():
            raise ValidationException(self.errors.all())
        return self._validated()

    async def validate_async(self) -> bool:
        """Run the rules on the running event loop and return the verdict."""
        loop = asyncio.get_running_loop()
        future = loop.create_future()

        def settle(result: bool) -> None:
            if not future.done():
                future.set_result(result)

        self.check_async(lambda: settle(True), lambda: settle(False))
        return await future

    def stop_on_error(self, attributes: Union[bool, str, Iterable[str]]) -> None:
        """Stop at the first failure of every attribute (True), of one attribute or of the listed ones."""
        if isinstance(attributes, str):
            attributes = [attributes]
        elif not isinstance(attributes, bool):
            attributes = list(attributes)
        self.config = self.config.with_options(stop_on_error=attributes)

    def set_attribute_names(self, attributes: Dict[str, str]) -> None:
        self.messages.set_attribute_names(attributes)

    def set_attribute_formatter(self, func: Optional[Callable[[str], str]]) -> None:
        self.messages.set_attribute_formatter(func)

    def get_rule(self, name: str) -> Optional[Rule]:
        return self.registry.make(name, self)

    def has_rule(self, attribute: str, names: Iterable[str]) -> bool:
        names = set(names)
        return any(rule.name in names for rule in self.rules.get(attribute, []))

    def has_numeric_rule(self, attribute: Optional[str]) -> bool:
        return attribute is not None and self.has_rule(attribute, self.config.numeric_rules)

    def add_failure(self, rule: Rule, message: Optional[str] = None) -> None:
        self.errors.add(rule.attribute, self.messages.render(rule, message))
        self.error_count += 1
        logging.debug(f"[VALIDATOR] `{rule.attribute}` failed `{rule.name}`")

    def reset_errors(self) -> None:
        self.errors = ErrorBag()
        self.error_count = 0

    def _validated(self) -> Dict[str, Any]:
        return {attribute: resolve(self.input, attribute) for attribute in self.rules if has_path(self.input, attribute)}

    def _should_run_async(self, func_name: str, callback: Optional[Callable[[], Any]]) -> bool:
        has_callback = callable(callback)
        if self.has_async and not has_callback:
            raise AsyncCallbackRequiredException(func_name)
        return self.has_async or has_callback

    # Process-wide registration, meant for application startup

    @classmethod
    def register(cls, name: str, fn: Callable, message: Optional[str] = None, *, pass_rule: bool = False) -> None:
        get_default_registry().register(name, fn, pass_rule=pass_rule)
        localization.set_rule_message(cls.get_default_lang(), name, message)

    @classmethod
    def register_implicit(cls, name: str, fn: Callable, message: Optional[str] = None, *, pass_rule: bool = False) -> None:
        get_default_registry().register_implicit(name, fn, pass_rule=pass_rule)
        localization.set_rule_message(cls.get_default_lang(), name, message)

    @classmethod
    def register_async(cls, name: str, fn: Callable, message: Optional[str] = None, *, pass_rule: bool = False) -> None:
        get_default_registry().register_async(name, fn, pass_rule=pass_rule)
        localization.set_rule_message(cls.get_default_lang(), name, message)

    @classmethod
    def register_async_implicit(cls, name: str, fn: Callable, message: Optional[str] = None, *, pass_rule: bool = False) -> None:
        get_default_registry().register_async_implicit(name, fn, pass_rule=pass_rule)
        localization.set_rule_message(cls.get_default_lang(), name, message)

    @classmethod
    def register_rule(cls, rule: Union[ValidatorRule, AsyncValidatorRule]) -> None:
        get_default_registry().register_rule(rule)
        localization.set_rule_message(cls.get_default_lang(), rule.name, rule.message)

    @classmethod
    def register_missed_rule_validator(cls, fn: Optional[Callable], *, pass_rule: bool = False) -> None:
        get_default_registry().register_missed_rule_validator(fn, pass_rule=pass_rule)

    @classmethod
    def set_messages(cls, lang: str, messages: Dict[str, Any]) -> type[Validator]:
        localization.set_messages(lang, messages)
        return cls

    @classmethod
    def get_messages(cls, lang: str) -> Dict[str, Any]:
        return localization.get_messages(lang)

    @classmethod
    def use_lang(cls, lang: str) -> None:
        configure(lang=lang)

    @classmethod
    def get_default_lang(cls) -> str:
        return get_default_config().lang
