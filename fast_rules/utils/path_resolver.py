from __future__ import annotations

import re
from typing import Any, Dict, List, Mapping

_BRACKET_RE = re.compile(r"\[(\w+)\]")


class _Missing:
    """Sentinel for a path that does not exist in the input (distinct from `None`)."""

    _instance: _Missing | None = None

    def __new__(cls) -> _Missing:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "MISSING"


MISSING = _Missing()


def is_sequence(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def flatten(nested: Any) -> Dict[str, Any]:
    """
    Flatten nested dicts into dotted keys: {"a": {"b": 1}} -> {"a.b": 1}.

    Lists are terminal values, they are not descended into. An empty dict found
    below the root is kept as `{}` so that "empty object" differs from absent.
    """
    flattened: Dict[str, Any] = {}

    def recurse(current: Any, prefix: str) -> None:
        if not isinstance(current, Mapping):
            flattened[prefix] = current
            return
        if not current:
            if prefix:
                flattened[prefix] = {}
            return
        for key, value in current.items():
            recurse(value, f"{prefix}.{key}" if prefix else str(key))

    if nested:
        recurse(nested, "")
    return flattened


def split_path(path: str) -> List[str]:
    """Normalize `a[0].b` into `a.0.b` and split it into segments."""
    normalized = _BRACKET_RE.sub(r".\1", path)
    if normalized.startswith("."):
        normalized = normalized[1:]
    return normalized.split(".")


def _step(current: Any, segment: str) -> Any:
    if isinstance(current, Mapping):
        return current[segment] if segment in current else MISSING
    if is_sequence(current) and segment.isdigit():
        index = int(segment)
        return current[index] if index < len(current) else MISSING
    return MISSING


def resolve(root: Any, path: str) -> Any:
    """
    Resolve a dotted/bracket path against a nested structure.

    A literal top-level key wins over dotted traversal, so `{"a.b": 1}` resolves
    `a.b` to 1. Returns `MISSING` the moment a segment is absent or the
    intermediate value is not a container.
    """
    if isinstance(root, Mapping) and path in root:
        return root[path]

    current = root
    for segment in split_path(path):
        current = _step(current, segment)
        if current is MISSING:
            return MISSING
    return current


def has_path(root: Any, path: str) -> bool:
    """Existence check: True even when the stored value is `None` or empty."""
    return resolve(root, path) is not MISSING


def expand_wildcards(root: Any, pattern: str, bindings: List[int] | None = None) -> List[tuple[str, List[int]]]:
    """
    Expand every `*` segment of `pattern` over the indices of the addressed list.

    Returns (concrete_path, bindings) pairs, where bindings lists the index
    substituted for each `*` from left to right. When the prefix before a `*`
    is absent or not a list, nothing is produced.
    """
    bindings = list(bindings or [])
    position = pattern.find("*")
    if position == -1:
        return [(pattern, bindings)]

    # `items.*` and `items[*]` both address the list at `items`
    prefix = pattern[:position]
    if prefix.endswith((".", "[")):
        prefix = prefix[:-1]
    parent = resolve(root, prefix) if prefix else root
    if not is_sequence(parent):
        return []

    results: List[tuple[str, List[int]]] = []
    for index in range(len(parent)):
        concrete = pattern[:position] + str(index) + pattern[position + 1:]
        results.extend(expand_wildcards(root, concrete, bindings + [index]))
    return results


def replace_wildcards(text: Any, bindings: List[int] | None) -> Any:
    """Substitute `*` placeholders left to right with bound indices."""
    if not bindings:
        return text
    if is_sequence(text):
        return type(text)(replace_wildcards(item, bindings) for item in text)
    if not isinstance(text, str):
        return text
    for index in bindings:
        position = text.find("*")
        if position == -1:
            break
        text = text[:position] + str(index) + text[position + 1:]
    return text
