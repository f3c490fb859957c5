from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any, Callable, List, Optional

from fast_rules.exceptions import ValidatorException
from fast_rules.utils.path_resolver import MISSING, is_sequence, resolve
from fast_rules.utils.serialisation import stringify, to_number

if TYPE_CHECKING:
    from fast_rules.core.rule_registry import RuleDescriptor
    from fast_rules.validator import Validator


class Rule:
    """
    One rule bound to one validator for one check.

    A fresh instance is made for every check so that async checks in flight
    never share state. After `validate()` the instance carries the attribute,
    the input value and the raw parameter, which is what the message renderer
    needs to build the failure message.
    """

    def __init__(self, descriptor: 'RuleDescriptor', validator: 'Validator'):
        self.name = descriptor.name
        self.descriptor = descriptor
        self.validator = validator
        self.attribute: Optional[str] = None
        self.input_value: Any = MISSING
        self.rule_value: Any = None
        self.passes: Optional[bool] = None
        self.custom_message: Optional[str] = None
        self._callback: Optional[Callable[[bool, Optional[str]], None]] = None
        self._responded = False
        self._task: Optional[asyncio.Task] = None

    @property
    def is_async(self) -> bool:
        return self.descriptor.is_async

    @property
    def is_implicit(self) -> bool:
        return self.descriptor.implicit

    def validate(
        self,
        input_value: Any,
        rule_value: Any = None,
        attribute: Optional[str] = None,
        callback: Optional[Callable[[bool, Optional[str]], None]] = None,
    ) -> Optional[bool]:
        """
        Run the predicate.

        Without a callback the verdict is returned. With a callback the verdict
        is delivered through it exactly once: immediately for sync predicates,
        whenever the predicate calls `done` for async ones.
        """
        self.input_value = input_value
        self.rule_value = rule_value
        self.attribute = attribute

        if callback is None:
            self.passes = bool(self._apply())
            return self.passes

        self._callback = callback
        if self.is_async:
            self._apply_async()
            return None
        self.response(bool(self._apply()))
        return None

    def response(self, passed: Optional[bool] = True, message: Optional[str] = None) -> None:
        """Completion callback handed to async predicates as `done`. `done()` means passed."""
        verdict = passed is None or passed is True
        self._responded = True
        self._callback(verdict, message)
        self.passes = verdict
        self.custom_message = message

    def _apply(self) -> Any:
        handler = self.descriptor.handler
        if self.descriptor.pass_rule:
            return handler(self.input_value, self.rule_value, self.attribute, rule=self)
        return handler(self.input_value, self.rule_value, self.attribute)

    def _apply_async(self) -> None:
        handler = self.descriptor.handler
        if self.descriptor.pass_rule:
            result = handler(self.input_value, self.rule_value, self.attribute, self.response, rule=self)
        else:
            result = handler(self.input_value, self.rule_value, self.attribute, self.response)

        if inspect.isawaitable(result):
            try:
                loop = asyncio.get_running_loop()
            except RuntimeError as e:
                if inspect.iscoroutine(result):
                    result.close()
                raise ValidatorException(
                    f"Rule `{self.name}` returned a coroutine but no event loop is running. "
                    f"Use `await validator.validate_async()`."
                ) from e
            self._task = loop.create_task(self._await_verdict(result))
            self._task.add_done_callback(self._log_task_failure)

    def _log_task_failure(self, task: asyncio.Task) -> None:
        # Raised after the verdict, by the `passes`/`fails` callbacks or the coordinator
        if task.cancelled():
            return
        error = task.exception()
        if error is not None:
            logging.error(
                f"[ASYNC] Completing rule `{self.name}` on `{self.attribute}` failed: {error}",
                exc_info=error,
            )

    async def _await_verdict(self, awaitable) -> None:
        try:
            verdict = await awaitable
        except Exception as e:
            logging.exception(f"[ASYNC] Rule `{self.name}` raised while validating `{self.attribute}`", exc_info=e)
            verdict = False
        # The coroutine may already have answered through `done`
        if not self._responded:
            self.response(verdict is None or bool(verdict))

    def get_parameters(self) -> List[Any]:
        """Split the raw parameter: `"3,10"` -> `["3", "10"]`."""
        value = self.rule_value
        if value is None or value == "":
            return []
        if isinstance(value, str):
            return value.split(",")
        if is_sequence(value):
            return list(value)
        return [value]

    def get_size(self) -> float:
        """Number for numeric values, length for strings and collections."""
        value = self.input_value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
        if self.validator.has_numeric_rule(self.attribute):
            return to_number(value)
        if value is MISSING or value is None:
            return 0
        if isinstance(value, (list, tuple, dict, str)):
            return len(value)
        return len(stringify(value))

    def get_value_type(self) -> str:
        value = self.input_value
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return "numeric"
        if self.validator.has_numeric_rule(self.attribute):
            return "numeric"
        if is_sequence(value):
            return "array"
        return "string"

    def resolve(self, path: str) -> Any:
        """Look up another field of the input under validation."""
        return resolve(self.validator.input, path)

    def __repr__(self) -> str:
        return f"Rule(name={self.name!r}, attribute={self.attribute!r}, passes={self.passes!r})"
