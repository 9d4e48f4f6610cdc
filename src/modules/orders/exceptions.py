"""Order domain exceptions.

Raised by the Service Layer; the API layer (Views) catches these and
translates them into HTTP responses.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence, Tuple

if TYPE_CHECKING:
    from modules.orders.engine import Violation


class OrderNotFound(Exception):
    """The requested order does not exist."""


class OrderValidationFailed(Exception):
    """One or more admissibility rules failed.

    Carries every violation, in evaluation order.  Expected and
    recoverable: callers report it to the end user, never log it as an
    error.
    """

    def __init__(self, violations: Sequence[Violation]) -> None:
        self.violations: Tuple[Violation, ...] = tuple(violations)
        kinds = ", ".join(str(v.kind) for v in self.violations)
        super().__init__(f"Order rejected: {kinds}")


class InvalidLifecycleTransition(Exception):
    """An order pass attempted a state change the lifecycle does not allow."""
