from .path_resolver import MISSING, expand_wildcards, flatten, has_path, resolve
from .serialisation import stringify, to_number

__all__ = [
    "MISSING",
    "expand_wildcards",
    "flatten",
    "has_path",
    "resolve",
    "stringify",
    "to_number",
]
