from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Callable, Dict, Optional

from fast_rules.exceptions import AsyncResolverException

if TYPE_CHECKING:
    from fast_rules.core.rule import Rule


class CoordinatorState(str, Enum):
    CREATED = "created"
    DISPATCHING = "dispatching"
    DISPATCH_COMPLETE = "dispatch_complete"
    FIRED = "fired"
    DISPOSED = "disposed"


class AsyncCoordinator:
    """
    Counting barrier for one asynchronous validation run.

    Checks are registered as they are dispatched and resolved whenever their
    predicate answers, possibly before dispatch of later checks has started.
    `on_resolved_all(all_passed)` fires exactly once: after
    `mark_dispatch_complete()` and after the last pending check resolved,
    whichever comes last.

    Example:
        coordinator = AsyncCoordinator(on_failed, on_resolved_all)
        token = coordinator.register(rule)
        rule.validate(value, parameter, attribute, lambda passed, message: coordinator.resolve(token, passed, message))
        coordinator.mark_dispatch_complete()
    """

    def __init__(
        self,
        on_failed: Callable[['Rule', Optional[str]], None],
        on_resolved_all: Callable[[bool], None],
    ):
        self.on_failed = on_failed
        self.on_resolved_all = on_resolved_all
        self.state = CoordinatorState.CREATED
        self.registered: Dict[int, 'Rule'] = {}
        self.pending: set[int] = set()
        self.resolved_count = 0
        self.failed_count = 0
        self.all_passed = True
        self._next_token = 0

    @property
    def dispatch_complete(self) -> bool:
        return self.state not in (CoordinatorState.CREATED, CoordinatorState.DISPATCHING)

    def register(self, rule: 'Rule') -> int:
        """Track a check about to be dispatched and return its token."""
        if self.dispatch_complete:
            raise AsyncResolverException(
                f"Cannot register rule `{rule.name}`: dispatch is already complete ({self.state.value})."
            )
        token = self._next_token
        self._next_token += 1
        self.registered[token] = rule
        self.pending.add(token)
        self.state = CoordinatorState.DISPATCHING
        return token

    def resolve(self, token: int, passed: bool, message: Optional[str] = None) -> None:
        """Record the outcome of one check. Every token resolves exactly once."""
        if token not in self.pending:
            reason = "was already resolved" if token in self.registered else "is unknown"
            raise AsyncResolverException(f"Resolver token {token} {reason}.", token=token)

        self.pending.discard(token)
        self.resolved_count += 1
        rule = self.registered[token]
        if not passed:
            self.failed_count += 1
            self.all_passed = False
            self.on_failed(rule, message)

        logging.debug(f"[ASYNC] Resolved `{rule.name}` on `{rule.attribute}` ({len(self.pending)} pending)")
        self._fire()

    def mark_dispatch_complete(self) -> None:
        """Signal that no further checks will be registered."""
        if self.dispatch_complete:
            raise AsyncResolverException(f"Dispatch was already marked complete ({self.state.value}).")
        self.state = CoordinatorState.DISPATCH_COMPLETE
        self._fire()

    def is_all_resolved(self) -> bool:
        return not self.pending

    def _fire(self) -> None:
        if self.state is not CoordinatorState.DISPATCH_COMPLETE or self.pending:
            return

        self.state = CoordinatorState.FIRED
        all_passed = self.all_passed
        logging.debug(f"[ASYNC] All {self.resolved_count} check(s) resolved, passed={all_passed}")
        try:
            self.on_resolved_all(all_passed)
        finally:
            self.registered.clear()
            self.state = CoordinatorState.DISPOSED
