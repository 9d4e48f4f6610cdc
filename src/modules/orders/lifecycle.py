"""State tracking for one pass of an order through the service.

A pass starts in ``draft`` (create/update) or ``persisted`` (delete) and
moves along ``VALID_TRANSITIONS``.  Every transition is logged with the
pass's bound context.
"""

from __future__ import annotations

from typing import Any, List

import structlog

from modules.orders.constants import TERMINAL_STATES, VALID_TRANSITIONS, LifecycleState
from modules.orders.exceptions import InvalidLifecycleTransition

logger = structlog.get_logger(__name__)


class OrderLifecycle:
    def __init__(
        self, state: str = LifecycleState.DRAFT, **log_context: Any
    ) -> None:
        self._state = LifecycleState(state)
        self._history: List[LifecycleState] = [self._state]
        self._log = logger.bind(**log_context)

    @property
    def state(self) -> LifecycleState:
        return self._state

    @property
    def history(self) -> List[LifecycleState]:
        return list(self._history)

    @property
    def is_terminal(self) -> bool:
        return self._state in TERMINAL_STATES

    def can_transition_to(self, new_state: str) -> bool:
        return new_state in VALID_TRANSITIONS.get(self._state, set())

    def advance(self, new_state: str) -> LifecycleState:
        """Move to *new_state*.

        Raises:
            InvalidLifecycleTransition: the move is not allowed.
        """
        if not self.can_transition_to(new_state):
            raise InvalidLifecycleTransition(
                f"Cannot transition from {self._state} to {new_state}."
            )
        old_state = self._state
        self._state = LifecycleState(new_state)
        self._history.append(self._state)
        self._log.debug(
            "order.lifecycle.transition",
            old_state=str(old_state),
            new_state=str(self._state),
        )
        return self._state
