import re
from typing import Any

from fast_rules.utils.path_resolver import MISSING

NUMBER_RE = re.compile(r"^\s*[-+]?(\d+\.?\d*|\.\d+)([eE][-+]?\d+)?\s*$")


def pascal_case_to_snake_case(pascal: type | str) -> str:
    """
    Convert a class name (CamelCase or PascalCase) to snake_case.

    Args:
        pascal: The class or class name as a string.

    Returns:
        str: The snake_case version of the class name.
    """
    if not isinstance(pascal, str):
        pascal = pascal.__name__
    # Insert underscores before capital letters, except at the start
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', pascal)
    snake = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1).lower()
    return snake


def get_exception_error_type(exception: Exception) -> str:
    return pascal_case_to_snake_case(remove_suffix(exception.__class__.__name__, 'Exception'))


def remove_suffix(text: str, suffix: str) -> str:
    """
    Remove an exact suffix from the given text if present.

    Unlike str.rstrip, this removes only the provided suffix once,
    not any combination of its characters.
    """
    if text.endswith(suffix):
        return text[: -len(suffix)]
    return text


def stringify(value: Any) -> str:
    """
    Render an input value the way rule parameters are written.

    Rule parameters always arrive as strings (`in:1,2`, `required_if:paid,true`),
    so comparisons against input values go through this function.
    """
    if value is None or value is MISSING:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, (list, tuple)):
        return ",".join(stringify(item) for item in value)
    return str(value)


def to_number(value: Any) -> float:
    """Parse a value as a number. Returns NaN when it is not numeric."""
    if isinstance(value, bool):
        return float('nan')
    if isinstance(value, (int, float)):
        return value
    if isinstance(value, str) and NUMBER_RE.match(value):
        return float(value)
    return float('nan')
