from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, Optional

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule


class ValidatorRule(ABC):
    """
    Contract for class based synchronous rules.

    Register an instance with `Validator.register_rule(MyRule())`; the rule is
    then addressable by `name` in rule strings (`"my_rule:param"`).
    """

    name: str
    implicit: bool = False
    message: Optional[str] = None

    @abstractmethod
    def validate(self, value: Any, parameter: Any, attribute: str, rule: 'Rule') -> bool:
        """
        Validate a value.

        Args:
            value: The value at the attribute path (may be `MISSING` for implicit rules).
            parameter: The raw parameter after `:` in the rule string, if any.
            attribute: The concrete attribute path being validated.
            rule: The bound rule, giving access to `get_parameters()`, `get_size()` and other fields.

        Returns:
            True when the value passes.
        """
        raise NotImplementedError


class AsyncValidatorRule(ABC):
    """
    Contract for class based asynchronous rules (e.g. lookups against a database).

    `validate` is a coroutine and its return value is the verdict. Validators
    holding such a rule must be run with a callback or through
    `await validator.validate_async()`.
    """

    name: str
    implicit: bool = False
    message: Optional[str] = None

    @abstractmethod
    async def validate(self, value: Any, parameter: Any, attribute: str, rule: 'Rule') -> bool:
        raise NotImplementedError
