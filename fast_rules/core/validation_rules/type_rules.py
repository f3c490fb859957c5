from __future__ import annotations

import logging
import math
import re
from datetime import date, datetime
from typing import Any, TYPE_CHECKING

from fast_rules.utils.serialisation import NUMBER_RE, stringify

if TYPE_CHECKING:
    from fast_rules.core.rule_registry import RuleRegistry

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]{2,}$")
URL_RE = re.compile(r"^(https?|ftp)://[^\s/$.?#][^\s]*$", re.IGNORECASE)
ALPHA_RE = re.compile(r"^[a-zA-Z]+$")
ALPHA_NUM_RE = re.compile(r"^[a-zA-Z0-9]+$")
ALPHA_DASH_RE = re.compile(r"^[a-zA-Z0-9_\-]+$")
HEX_RE = re.compile(r"^[0-9a-f]+$", re.IGNORECASE)
INTEGER_RE = re.compile(r"^\s*[-+]?\d+\s*$")
REGEX_LITERAL_RE = re.compile(r"^/(.*)/([imsx]*)$", re.DOTALL)

_REGEX_FLAGS = {"i": re.IGNORECASE, "m": re.MULTILINE, "s": re.DOTALL, "x": re.VERBOSE}


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def numeric(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    if _is_number(value):
        return math.isfinite(value)
    return isinstance(value, str) and NUMBER_RE.match(value) is not None


def integer(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    if isinstance(value, int) and not isinstance(value, bool):
        return True
    if isinstance(value, float):
        return value.is_integer()
    return isinstance(value, str) and INTEGER_RE.match(value) is not None


def boolean(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, (int, str)):
        return stringify(value).lower() in ("0", "1", "true", "false")
    return False


def string(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return isinstance(value, str)


def array(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return isinstance(value, (list, tuple))


def email(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return isinstance(value, str) and EMAIL_RE.match(value) is not None


def url(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return isinstance(value, str) and URL_RE.match(value) is not None


def alpha(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return ALPHA_RE.match(stringify(value)) is not None


def alpha_num(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return ALPHA_NUM_RE.match(stringify(value)) is not None


def alpha_dash(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return ALPHA_DASH_RE.match(stringify(value)) is not None


def hex_(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    return HEX_RE.match(stringify(value)) is not None


def date_(value: Any, parameter: Any = None, attribute: str = None) -> bool:
    if isinstance(value, (date, datetime)):
        return True
    if not isinstance(value, str):
        return False
    try:
        datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    except ValueError:
        return False
    return True


def regex(value: Any, parameter: Any, attribute: str = None) -> bool:
    """`regex:/^[a-z]+$/i`. The pattern may also be given without slashes."""
    pattern = stringify(parameter)
    flags = 0
    match = REGEX_LITERAL_RE.match(pattern)
    if match:
        pattern = match.group(1)
        for flag in match.group(2):
            flags |= _REGEX_FLAGS[flag]
    try:
        compiled = re.compile(pattern, flags)
    except re.error as e:
        logging.warning(f"[RULES] Invalid pattern for `regex` on `{attribute}`: {e}")
        return False
    return compiled.search(stringify(value)) is not None


def register(registry: 'RuleRegistry') -> None:
    for name, handler in (
        ("numeric", numeric),
        ("integer", integer),
        ("boolean", boolean),
        ("string", string),
        ("array", array),
        ("email", email),
        ("url", url),
        ("alpha", alpha),
        ("alpha_num", alpha_num),
        ("alpha_dash", alpha_dash),
        ("hex", hex_),
        ("date", date_),
        ("regex", regex),
    ):
        registry.register(name, handler)
