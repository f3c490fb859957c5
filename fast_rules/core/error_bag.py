from __future__ import annotations

from typing import Dict, Iterator, List, Optional


class ErrorBag:
    """Failure messages per attribute, kept in the order they were recorded."""

    def __init__(self):
        self.errors: Dict[str, List[str]] = {}
        self.records: List[tuple[str, str]] = []

    def add(self, attribute: str, message: str) -> None:
        self.errors.setdefault(attribute, []).append(message)
        self.records.append((attribute, message))

    def get(self, attribute: str) -> List[str]:
        return list(self.errors.get(attribute, []))

    def first(self, attribute: str) -> Optional[str]:
        messages = self.errors.get(attribute)
        return messages[0] if messages else None

    def has(self, attribute: str) -> bool:
        return bool(self.errors.get(attribute))

    def all(self) -> Dict[str, List[str]]:
        return {attribute: list(messages) for attribute, messages in self.errors.items()}

    def count(self) -> int:
        """Total number of recorded messages across all attributes."""
        return sum(len(messages) for messages in self.errors.values())

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[tuple[str, str]]:
        """(attribute, message) pairs across attributes, in recording order."""
        return iter(list(self.records))

    def __bool__(self) -> bool:
        return bool(self.errors)

    def __repr__(self) -> str:
        return f"ErrorBag({self.errors!r})"
