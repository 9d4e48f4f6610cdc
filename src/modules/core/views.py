import time
from typing import Any, Dict
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

import structlog
from django.conf import settings
from django.db import DatabaseError, connections
from django.http import HttpRequest, JsonResponse
from django.utils import timezone

logger = structlog.get_logger()


def _check_database() -> Dict[str, Any]:
    start = time.monotonic()
    conn = connections["default"]
    conn.ensure_connection()
    with conn.cursor() as cursor:
        cursor.execute("SELECT 1")
        cursor.fetchone()
    return {
        "status": "up",
        "response_time_ms": round((time.monotonic() - start) * 1000, 2),
    }


def _check_ordering() -> Dict[str, Any]:
    zone_name = settings.ORDER_REFERENCE_TIME_ZONE
    ZoneInfo(zone_name)
    return {
        "status": "up",
        "reference_time_zone": zone_name,
        "message_language": settings.ORDER_MESSAGE_LANGUAGE,
        "recheck_before_commit": settings.ORDER_RECHECK_BEFORE_COMMIT,
    }


def health_check(request: HttpRequest) -> JsonResponse:
    """Report whether the order store answers and the engine can resolve its zone."""
    services: Dict[str, Dict[str, Any]] = {}

    try:
        services["database"] = _check_database()
    except DatabaseError:
        services["database"] = {"status": "down"}
        logger.error("health_check_db_failure")

    try:
        services["ordering"] = _check_ordering()
    except (ZoneInfoNotFoundError, ValueError):
        services["ordering"] = {"status": "down"}
        logger.error(
            "health_check_time_zone_failure",
            reference_time_zone=settings.ORDER_REFERENCE_TIME_ZONE,
        )

    healthy = all(s["status"] == "up" for s in services.values())
    logger.info("health_check_completed", status="healthy" if healthy else "unhealthy")

    return JsonResponse(
        {
            "status": "healthy" if healthy else "unhealthy",
            "timestamp": timezone.now().isoformat(),
            "services": services,
        },
        status=200 if healthy else 503,
    )
