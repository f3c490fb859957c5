"""Custom exceptions for fast-rules."""

from .async_exceptions import (
    AsyncCallbackRequiredException,
    AsyncResolverException,
)
from .common_exceptions import (
    ValidatorException,
    ValidationException,
    ConfigInvalidException,
)


__all__ = [
    # common
    "ValidatorException",
    "ValidationException",
    "ConfigInvalidException",
    # async
    "AsyncCallbackRequiredException",
    "AsyncResolverException",
]
