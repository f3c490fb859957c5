"""Contract classes and abstract interfaces.

These are exported so they can be imported directly from :mod:`fast_rules`.
"""

from .validator_rule import AsyncValidatorRule, ValidatorRule

__all__ = [
    "AsyncValidatorRule",
    "ValidatorRule",
]
