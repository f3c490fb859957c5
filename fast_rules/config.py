"""
Validator configuration.

A `ValidatorConfig` is immutable. Every `Validator` receives one at
construction; when none is passed the process-wide default is used. The
default is meant to be set once at startup through `configure()` and only
read afterwards.
"""

from __future__ import annotations

import logging
import os
from typing import Any, Callable, Optional, Union

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from fast_rules.exceptions import ConfigInvalidException

# Language of the message catalog
LANG_DEFAULT = os.getenv("FAST_RULES_LANG", "en")

# Rules that make size based rules (min, max, between, size) compare numerically
NUMERIC_RULES = ("integer", "numeric")


class ValidatorConfig(BaseModel):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    lang: str = LANG_DEFAULT
    stop_on_error: Union[bool, tuple[str, ...]] = False
    attribute_formatter: Optional[Callable[[str], str]] = None
    numeric_rules: tuple[str, ...] = NUMERIC_RULES

    @field_validator("stop_on_error", mode="before")
    @classmethod
    def _normalize_stop_on_error(cls, value: Any) -> Any:
        if value is None:
            return False
        if isinstance(value, str):
            return (value,)
        if isinstance(value, (list, set, frozenset)):
            return tuple(value)
        return value

    @field_validator("lang")
    @classmethod
    def _validate_lang(cls, value: str) -> str:
        if not value or not value.strip():
            raise ValueError("lang must be a non-empty string")
        return value

    def should_stop_on(self, attribute: str) -> bool:
        """Whether a failed rule on `attribute` ends the attribute's rule sequence."""
        if isinstance(self.stop_on_error, tuple):
            return attribute in self.stop_on_error
        return bool(self.stop_on_error)

    def with_options(self, **overrides: Any) -> ValidatorConfig:
        return build_config(self, **overrides)


def build_config(base: Optional[ValidatorConfig] = None, **overrides: Any) -> ValidatorConfig:
    """Create a config from `base` with `overrides` applied, validating every value."""
    values = base.model_dump() if base is not None else {}
    values.update(overrides)
    try:
        return ValidatorConfig(**values)
    except ValidationError as e:
        error = e.errors()[0]
        option = str(error["loc"][0]) if error.get("loc") else "unknown"
        raise ConfigInvalidException(option, values.get(option)) from e


_default_config: Optional[ValidatorConfig] = None


def _initial_config() -> ValidatorConfig:
    from fast_rules.core.attributes import formatter

    return ValidatorConfig(attribute_formatter=formatter)


def get_default_config() -> ValidatorConfig:
    global _default_config
    if _default_config is None:
        _default_config = _initial_config()
    return _default_config


def configure(**overrides: Any) -> ValidatorConfig:
    """
    Replace the process-wide default config.

    Call once during application startup. Validators already constructed keep
    the config they were built with.
    """
    global _default_config
    _default_config = build_config(get_default_config(), **overrides)
    logging.debug(f"[VALIDATOR] Default config set: lang={_default_config.lang}")
    return _default_config


def reset_default_config() -> None:
    """Drop the process-wide default (useful for testing)."""
    global _default_config
    _default_config = None
