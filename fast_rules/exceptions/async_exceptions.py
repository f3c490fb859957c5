from typing import Optional

from fast_rules.exceptions.common_exceptions import ValidatorException


class AsyncCallbackRequiredException(ValidatorException, TypeError):
    """A synchronous entry point was used on a rule set that contains async rules."""

    def __init__(self, func_name: str):
        super().__init__(f"{func_name} expects a callback when async rules are being tested.")
        self.func_name = func_name


class AsyncResolverException(ValidatorException, RuntimeError):
    """
    The async coordinator was driven out of protocol.

    Typically a predicate invoked its completion callback more than once, or a
    check was registered after dispatch had already been marked complete.
    """

    def __init__(self, message: str, *, token: Optional[int] = None):
        super().__init__(message, data={"token": token} if token is not None else None)
        self.token = token
