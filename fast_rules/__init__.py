"""
fast-rules - Laravel-style validation rules for Python dicts

This package provides:
- A Validator taking an input dict, per-attribute rules and custom messages
- Nested (`address.city`) and wildcard (`items.*.qty`) attribute paths
- Rule strings (`"required|min:3"`), lists and dicts, normalized to one form
- Synchronous and asynchronous rules, with a barrier coordinating async checks
- Message catalogs with per-attribute and per-rule overrides

Think of it as Laravel's validator for plain Python data.
"""

__version__ = "0.1.0"
__author__ = "Patrik Mojzis"
__email__ = "patrikm53@gmail.com"
__license__ = "MIT"
__url__ = "https://github.com/patrikmojzis/fast-rules"

from .config import ValidatorConfig, configure, get_default_config, reset_default_config
from .contracts import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
from .exceptions import *  # noqa: F401,F403
from .utils.path_resolver import MISSING
from .validator import Validator
