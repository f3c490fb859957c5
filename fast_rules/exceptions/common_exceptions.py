from typing import Optional

from fast_rules.utils.serialisation import get_exception_error_type


class ValidatorException(Exception):
    def __init__(self,
        message: str,
        *,
        error_type: Optional[str] = None,
        data: Optional[dict] = None
    ):
        """
        Base exception for the package.

        Args:
            message: The error message.
            error_type: Machine readable error type (if not provided, it will be inferred from the exception class name).
            data: Extra payload (for example the collected validation errors).
        """
        self.message = message
        self.error_type = error_type or get_exception_error_type(self)
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict:
        return {"error_type": self.error_type, "message": self.message, "data": self.data}


class ValidationException(ValidatorException):
    """
    Raised by `Validator.validate()` when the input does not pass.

    `errors` maps every failing attribute to its list of messages, in the order
    the failures were recorded.
    """

    def __init__(self, errors: dict[str, list[str]], message: str = "The given data was invalid."):
        super().__init__(message, data=errors)
        self.errors = errors


class ConfigInvalidException(ValidatorException, ValueError):
    def __init__(self, option: str, value=None, supported_values: list[str] = None):
        message = f"[CONFIG INVALID] Invalid validator option: `{option}`"
        if value is not None:
            message += f" (value: `{value}`)"
        if supported_values:
            message += f" (supported values: {', '.join(supported_values)})"
        super().__init__(message)
