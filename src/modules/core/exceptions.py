"""Cross-module exceptions and the DRF exception handler.

Domain modules raise plain exceptions; views translate the expected ones
into responses.  ``api_exception_handler`` covers the remaining
infrastructure case (``StoreUnavailable``) so no view has to.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = structlog.get_logger(__name__)


class StoreUnavailable(Exception):
    """A storage collaborator failed (connection lost, database down).

    Unrecoverable for the current request and never retried by the
    Service Layer.
    """


class ConfirmationRequired(Exception):
    """A delete was attempted without an exact boolean ``True`` confirmation."""


def require_confirmation(confirm: Any) -> None:
    """Raise ``ConfirmationRequired`` unless *confirm* is the boolean ``True``.

    ``"true"``, ``1`` and other truthy values are rejected on purpose.
    """
    if confirm is not True:
        raise ConfirmationRequired("Deletion requires confirm=true.")


def confirmation_from(body: Any) -> Any:
    """Return the ``confirm`` flag of a parsed request body.

    A body that is not a JSON object carries no flag.
    """
    if isinstance(body, Mapping):
        return body.get("confirm")
    return None


def api_exception_handler(exc: Exception, context: dict) -> Optional[Response]:
    """DRF exception handler: default behaviour plus ``StoreUnavailable`` -> 503."""
    response = exception_handler(exc, context)
    if response is not None:
        return response

    if isinstance(exc, StoreUnavailable):
        from modules.core.messages import get_message_catalog

        view = context.get("view")
        logger.error(
            "api.store_unavailable",
            view=type(view).__name__ if view else None,
        )
        return Response(
            {"detail": get_message_catalog().get("store_unavailable")},
            status=status.HTTP_503_SERVICE_UNAVAILABLE,
        )

    return None
