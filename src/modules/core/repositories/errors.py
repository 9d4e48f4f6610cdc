"""Translation of storage faults into the domain ``StoreUnavailable`` error.

Repositories decorate their public methods with ``translate_store_errors``
so the Service Layer only ever sees one exception type for I/O failures.
Integrity errors are *not* translated: they signal a data conflict, not an
unavailable store.
"""

from __future__ import annotations

import functools
from typing import Any, Callable, TypeVar

import structlog
from django.db import InterfaceError, OperationalError

from modules.core.exceptions import StoreUnavailable

logger = structlog.get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Any])


def translate_store_errors(func: F) -> F:
    """Re-raise driver connectivity errors as ``StoreUnavailable``."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return func(*args, **kwargs)
        except (OperationalError, InterfaceError) as exc:
            logger.error(
                "store.unavailable",
                operation=func.__qualname__,
                error=str(exc),
            )
            raise StoreUnavailable(str(exc)) from exc

    return wrapper  # type: ignore[return-value]
