"""Order window boundaries.

Windows are daily ``[from, to]`` ranges compared on hour and minute in
the engine's reference zone, inclusive at both ends.
"""

from __future__ import annotations

from datetime import datetime, timezone
from zoneinfo import ZoneInfo

import pytest

from modules.orders.constants import ViolationKind
from modules.orders.engine import OrderAdmissibilityEngine, OrderWindow, TimeOfDay

from tests.unit.orders.helpers import draft, product_snapshot, snapshot

pytestmark = pytest.mark.unit


def _window(fh, fm, th, tm) -> OrderWindow:
    return OrderWindow(TimeOfDay(fh, fm), TimeOfDay(th, tm))


class TestOrderWindowContains:
    @pytest.mark.parametrize(
        "hour, minute, expected",
        [
            (8, 29, False),
            (8, 30, True),
            (9, 0, True),
            (10, 0, True),
            (10, 59, True),
            (11, 15, True),
            (11, 16, False),
            (7, 59, False),
            (12, 0, False),
        ],
    )
    def test_boundaries_inclusive(self, hour, minute, expected):
        assert _window(8, 30, 11, 15).contains(hour, minute) is expected

    def test_single_hour_window(self):
        window = _window(9, 10, 9, 20)
        assert window.contains(9, 10)
        assert window.contains(9, 20)

    def test_full_day_window(self):
        window = _window(0, 0, 23, 59)
        assert window.contains(0, 0)
        assert window.contains(23, 59)

    def test_time_of_day_formatting(self):
        assert str(TimeOfDay(7, 5)) == "07:05"


class TestOrderWindowInEngine:
    @pytest.mark.parametrize(
        "utc_time, accepted",
        [
            ((6, 29), False),
            ((6, 30), True),
            ((9, 15), True),
            ((9, 16), False),
        ],
    )
    def test_evaluated_in_reference_zone(self, utc_time, accepted):
        # Copenhagen is UTC+2 in May: 08:30-11:15 local is 06:30-09:15 UTC.
        engine = OrderAdmissibilityEngine(tz=ZoneInfo("Europe/Copenhagen"))
        now = datetime(2024, 5, 6, *utc_time, tzinfo=timezone.utc)
        catalog = snapshot(products=[product_snapshot(window=(8, 30, 11, 15))])

        result = engine.evaluate(draft(), catalog, now)

        assert result.accepted is accepted
        if not accepted:
            assert result.kinds == [ViolationKind.PRODUCT_OUTSIDE_ORDER_WINDOW]

    def test_now_in_other_zone_is_converted(self):
        engine = OrderAdmissibilityEngine()
        # 10:30 in Copenhagen is 08:30 UTC.
        now = datetime(2024, 5, 6, 10, 30, tzinfo=ZoneInfo("Europe/Copenhagen"))
        catalog = snapshot(products=[product_snapshot(window=(8, 30, 8, 30))])
        assert engine.evaluate(draft(), catalog, now).accepted

    def test_window_checked_per_product(self):
        from tests.unit.orders.helpers import OTHER_PRODUCT_ID, PRODUCT_ID

        engine = OrderAdmissibilityEngine()
        now = datetime(2024, 5, 6, 9, 0, tzinfo=timezone.utc)
        catalog = snapshot(
            products=[
                product_snapshot(window=(8, 0, 10, 0)),
                product_snapshot(id=OTHER_PRODUCT_ID, window=(11, 0, 13, 0)),
            ]
        )
        order = draft(
            products=[
                {"product_id": PRODUCT_ID, "quantity": 1},
                {"product_id": OTHER_PRODUCT_ID, "quantity": 1},
            ]
        )

        result = engine.evaluate(order, catalog, now)

        assert [(v.field, v.kind) for v in result.violations] == [
            ("products[1]", ViolationKind.PRODUCT_OUTSIDE_ORDER_WINDOW)
        ]
