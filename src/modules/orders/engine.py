"""Order admissibility engine.

Decides whether a draft order may be accepted, given a snapshot of the
catalog entries it references and an explicit evaluation instant.

Properties:
- Every rule runs; all violations are collected and returned together.
- Rules are plain functions ``(RuleContext) -> Iterable[Finding]`` and can
  be recombined by passing ``rules=`` to the engine.
- The engine never reads the ambient clock and never mutates the catalog:
  the same draft, snapshot and instant always produce the same result.
- Messages are resolved through a ``MessageCatalog``; rules only emit
  stable violation kinds plus formatting parameters.

Order windows are compared as daily ``[from, to]`` ranges in the reference
time zone, boundaries inclusive.  Windows that wrap past midnight
(``from > to``) are not supported.
"""

from __future__ import annotations

import hashlib
import json
from dataclasses import dataclass, field
from datetime import date, datetime, timezone, tzinfo
from types import MappingProxyType
from typing import (
    TYPE_CHECKING,
    Any,
    Callable,
    Dict,
    Iterable,
    Iterator,
    List,
    Mapping,
    NamedTuple,
    Optional,
    Sequence,
    Tuple,
)
from uuid import UUID

from modules.core.messages import MessageCatalog
from modules.orders.constants import ViolationKind

if TYPE_CHECKING:
    from modules.options.models import Option
    from modules.orders.dtos import OrderDraftDTO
    from modules.products.models import Product
    from modules.rooms.models import Room


# ---------------------------------------------------------------------------
# Catalog snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TimeOfDay:
    hour: int
    minute: int

    def __str__(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"


@dataclass(frozen=True)
class OrderWindow:
    """Daily recurring admission window, inclusive at both ends."""

    start: TimeOfDay
    end: TimeOfDay

    def contains(self, hour: int, minute: int) -> bool:
        within_hours = self.start.hour < hour < self.end.hour
        at_start_hour = hour == self.start.hour and minute >= self.start.minute
        at_end_hour = hour == self.end.hour and minute <= self.end.minute
        return within_hours or at_start_hour or at_end_hour


@dataclass(frozen=True)
class RoomSnapshot:
    id: UUID
    name: str = ""

    @classmethod
    def from_entity(cls, room: Room) -> RoomSnapshot:
        return cls(id=room.id, name=room.name)


@dataclass(frozen=True)
class OptionSnapshot:
    id: UUID
    availability: int
    max_order_quantity: int

    @classmethod
    def from_entity(cls, option: Option) -> OptionSnapshot:
        return cls(
            id=option.id,
            availability=option.availability,
            max_order_quantity=option.max_order_quantity,
        )


@dataclass(frozen=True)
class ProductSnapshot:
    id: UUID
    availability: int
    max_order_quantity: int
    order_window: OrderWindow

    @classmethod
    def from_entity(cls, product: Product) -> ProductSnapshot:
        return cls(
            id=product.id,
            availability=product.availability,
            max_order_quantity=product.max_order_quantity,
            order_window=OrderWindow(
                start=TimeOfDay(
                    product.order_window_from_hour, product.order_window_from_minute
                ),
                end=TimeOfDay(
                    product.order_window_to_hour, product.order_window_to_minute
                ),
            ),
        )


@dataclass(frozen=True)
class CatalogSnapshot:
    """Catalog entries fetched for one evaluation pass, keyed by id.

    An id missing from a mapping means the entry did not exist when the
    snapshot was taken.
    """

    rooms: Mapping[UUID, RoomSnapshot] = field(default_factory=dict)
    products: Mapping[UUID, ProductSnapshot] = field(default_factory=dict)
    options: Mapping[UUID, OptionSnapshot] = field(default_factory=dict)

    def find_room(self, id: Optional[UUID]) -> Optional[RoomSnapshot]:
        return self.rooms.get(id) if id is not None else None

    def find_product(self, id: Optional[UUID]) -> Optional[ProductSnapshot]:
        return self.products.get(id) if id is not None else None

    def find_option(self, id: Optional[UUID]) -> Optional[OptionSnapshot]:
        return self.options.get(id) if id is not None else None


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """One failed rule: where, what, and the localized explanation."""

    field: str
    kind: str
    message: str

    def as_dict(self) -> Dict[str, str]:
        return {"field": self.field, "kind": str(self.kind), "message": self.message}


@dataclass(frozen=True)
class ValidatedOrder:
    """A draft that passed every rule, not yet persisted.

    ``delivery_date`` is the requested delivery date reduced to a calendar
    date in the reference zone.  ``token`` fingerprints the draft, the
    catalog values the decision depended on and the evaluation instant.
    """

    draft: OrderDraftDTO
    delivery_date: date
    validated_at: datetime
    token: str


@dataclass(frozen=True)
class EvaluationResult:
    validated: Optional[ValidatedOrder] = None
    violations: Tuple[Violation, ...] = ()

    @property
    def accepted(self) -> bool:
        return self.validated is not None and not self.violations

    @property
    def kinds(self) -> List[str]:
        return [str(v.kind) for v in self.violations]


# ---------------------------------------------------------------------------
# Rules
# ---------------------------------------------------------------------------


class Finding(NamedTuple):
    field: str
    kind: str
    params: Mapping[str, Any] = MappingProxyType({})


@dataclass(frozen=True)
class RuleContext:
    draft: OrderDraftDTO
    snapshot: CatalogSnapshot
    now: datetime
    tz: tzinfo

    @property
    def local_now(self) -> datetime:
        return self.now.astimezone(self.tz)

    @property
    def today(self) -> date:
        return self.local_now.date()

    def delivery_date(self) -> Optional[date]:
        return to_reference_date(self.draft.requested_delivery_date, self.tz)


Rule = Callable[[RuleContext], Iterable[Finding]]


def to_reference_date(value: Optional[date], tz: tzinfo) -> Optional[date]:
    """Reduce a date or datetime to a calendar date in *tz*.

    Naive datetimes are taken to be expressed in *tz* already.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            value = value.replace(tzinfo=tz)
        return value.astimezone(tz).date()
    return value


def usable_quantity(quantity: Any) -> Optional[int]:
    """Return *quantity* as an int if it is a positive whole number."""
    if quantity is None or isinstance(quantity, bool):
        return None
    if isinstance(quantity, float):
        if not quantity.is_integer():
            return None
        quantity = int(quantity)
    if not isinstance(quantity, int) or quantity < 1:
        return None
    return quantity


def _quantity_findings(
    path: str, quantity: Any, required: str, not_integer: str, not_positive: str
) -> Iterator[Finding]:
    if quantity is None:
        yield Finding(f"{path}.quantity", required)
        return
    is_number = isinstance(quantity, (int, float)) and not isinstance(quantity, bool)
    if not is_number or (isinstance(quantity, float) and not quantity.is_integer()):
        yield Finding(f"{path}.quantity", not_integer, {"quantity": quantity})
    if is_number and quantity <= 0:
        yield Finding(f"{path}.quantity", not_positive, {"quantity": quantity})


def _duplicates(ids: Iterable[Optional[UUID]]) -> bool:
    present = [i for i in ids if i is not None]
    return len(set(present)) != len(present)


def check_delivery_date_present(ctx: RuleContext) -> Iterator[Finding]:
    if ctx.draft.requested_delivery_date is None:
        yield Finding("requested_delivery_date", ViolationKind.DELIVERY_DATE_REQUIRED)


def check_delivery_date_not_past(ctx: RuleContext) -> Iterator[Finding]:
    requested = ctx.delivery_date()
    if requested is not None and requested < ctx.today:
        yield Finding(
            "requested_delivery_date",
            ViolationKind.DELIVERY_DATE_IN_PAST,
            {"requested": requested.isoformat(), "today": ctx.today.isoformat()},
        )


def check_delivery_date_is_today(ctx: RuleContext) -> Iterator[Finding]:
    requested = ctx.delivery_date()
    if requested is not None and requested != ctx.today:
        yield Finding(
            "requested_delivery_date",
            ViolationKind.DELIVERY_DATE_NOT_TODAY,
            {"requested": requested.isoformat(), "today": ctx.today.isoformat()},
        )


def check_room_present(ctx: RuleContext) -> Iterator[Finding]:
    if ctx.draft.room_id is None:
        yield Finding("room_id", ViolationKind.ROOM_REQUIRED)


def check_room_exists(ctx: RuleContext) -> Iterator[Finding]:
    room_id = ctx.draft.room_id
    if room_id is not None and ctx.snapshot.find_room(room_id) is None:
        yield Finding("room_id", ViolationKind.ROOM_NOT_FOUND, {"room_id": room_id})


def check_products_present(ctx: RuleContext) -> Iterator[Finding]:
    if ctx.draft.products is None:
        yield Finding("products", ViolationKind.PRODUCTS_REQUIRED)


def check_products_not_empty(ctx: RuleContext) -> Iterator[Finding]:
    if ctx.draft.products is not None and len(ctx.draft.products) == 0:
        yield Finding("products", ViolationKind.PRODUCTS_EMPTY)


def check_products_unique(ctx: RuleContext) -> Iterator[Finding]:
    if _duplicates(line.product_id for line in ctx.draft.products or []):
        yield Finding("products", ViolationKind.PRODUCTS_NOT_UNIQUE)


def check_product_lines(ctx: RuleContext) -> Iterator[Finding]:
    """Per line: reference present and known, quantity a positive integer."""
    for index, line in enumerate(ctx.draft.products or []):
        path = f"products[{index}]"
        if line.product_id is None:
            yield Finding(f"{path}.product_id", ViolationKind.PRODUCT_REQUIRED)
        elif ctx.snapshot.find_product(line.product_id) is None:
            yield Finding(
                f"{path}.product_id",
                ViolationKind.PRODUCT_NOT_FOUND,
                {"product_id": line.product_id},
            )
        yield from _quantity_findings(
            path,
            line.quantity,
            ViolationKind.PRODUCT_QUANTITY_REQUIRED,
            ViolationKind.PRODUCT_QUANTITY_NOT_INTEGER,
            ViolationKind.PRODUCT_QUANTITY_NOT_POSITIVE,
        )


def check_product_bounds(ctx: RuleContext) -> Iterator[Finding]:
    """Per line: quantity within availability and the per-order cap.

    Skipped for lines whose product is unknown or whose quantity is
    already reported as unusable.
    """
    for index, line in enumerate(ctx.draft.products or []):
        product = ctx.snapshot.find_product(line.product_id)
        quantity = usable_quantity(line.quantity)
        if product is None or quantity is None:
            continue
        params = {
            "quantity": quantity,
            "availability": product.availability,
            "max_order_quantity": product.max_order_quantity,
        }
        if quantity > product.availability:
            yield Finding(
                f"products[{index}]",
                ViolationKind.PRODUCT_QUANTITY_EXCEEDS_AVAILABILITY,
                params,
            )
        if quantity > product.max_order_quantity:
            yield Finding(
                f"products[{index}]", ViolationKind.PRODUCT_QUANTITY_EXCEEDS_MAX, params
            )


def check_product_order_windows(ctx: RuleContext) -> Iterator[Finding]:
    local_now = ctx.local_now
    for index, line in enumerate(ctx.draft.products or []):
        product = ctx.snapshot.find_product(line.product_id)
        if product is None:
            continue
        window = product.order_window
        if not window.contains(local_now.hour, local_now.minute):
            yield Finding(
                f"products[{index}]",
                ViolationKind.PRODUCT_OUTSIDE_ORDER_WINDOW,
                {
                    "window_from": str(window.start),
                    "window_to": str(window.end),
                    "now": f"{local_now:%H:%M}",
                },
            )


def check_options_unique(ctx: RuleContext) -> Iterator[Finding]:
    if _duplicates(line.option_id for line in ctx.draft.options or []):
        yield Finding("options", ViolationKind.OPTIONS_NOT_UNIQUE)


def check_option_lines(ctx: RuleContext) -> Iterator[Finding]:
    for index, line in enumerate(ctx.draft.options or []):
        path = f"options[{index}]"
        if line.option_id is None:
            yield Finding(f"{path}.option_id", ViolationKind.OPTION_REQUIRED)
        elif ctx.snapshot.find_option(line.option_id) is None:
            yield Finding(
                f"{path}.option_id",
                ViolationKind.OPTION_NOT_FOUND,
                {"option_id": line.option_id},
            )
        yield from _quantity_findings(
            path,
            line.quantity,
            ViolationKind.OPTION_QUANTITY_REQUIRED,
            ViolationKind.OPTION_QUANTITY_NOT_INTEGER,
            ViolationKind.OPTION_QUANTITY_NOT_POSITIVE,
        )


def check_option_bounds(ctx: RuleContext) -> Iterator[Finding]:
    for index, line in enumerate(ctx.draft.options or []):
        option = ctx.snapshot.find_option(line.option_id)
        quantity = usable_quantity(line.quantity)
        if option is None or quantity is None:
            continue
        params = {
            "quantity": quantity,
            "availability": option.availability,
            "max_order_quantity": option.max_order_quantity,
        }
        if quantity > option.availability:
            yield Finding(
                f"options[{index}]",
                ViolationKind.OPTION_QUANTITY_EXCEEDS_AVAILABILITY,
                params,
            )
        if quantity > option.max_order_quantity:
            yield Finding(
                f"options[{index}]", ViolationKind.OPTION_QUANTITY_EXCEEDS_MAX, params
            )


DEFAULT_RULES: Tuple[Rule, ...] = (
    check_delivery_date_present,
    check_delivery_date_not_past,
    check_delivery_date_is_today,
    check_room_present,
    check_room_exists,
    check_products_present,
    check_products_not_empty,
    check_products_unique,
    check_product_lines,
    check_product_bounds,
    check_product_order_windows,
    check_options_unique,
    check_option_lines,
    check_option_bounds,
)


# ---------------------------------------------------------------------------
# Engine
# ---------------------------------------------------------------------------


class OrderAdmissibilityEngine:
    """Evaluate drafts against a catalog snapshot at a given instant."""

    def __init__(
        self,
        rules: Optional[Sequence[Rule]] = None,
        messages: Optional[MessageCatalog] = None,
        tz: Optional[tzinfo] = None,
    ) -> None:
        self._rules: Tuple[Rule, ...] = (
            tuple(rules) if rules is not None else DEFAULT_RULES
        )
        self._messages = messages or MessageCatalog()
        self.tz: tzinfo = tz or timezone.utc

    def evaluate(
        self, draft: OrderDraftDTO, snapshot: CatalogSnapshot, now: datetime
    ) -> EvaluationResult:
        """Run every rule and return acceptance or the full violation list.

        Raises:
            ValueError: *now* is naive.
        """
        if now.tzinfo is None or now.utcoffset() is None:
            raise ValueError("Evaluation instant must be timezone-aware.")

        ctx = RuleContext(draft=draft, snapshot=snapshot, now=now, tz=self.tz)
        violations: Dict[Violation, None] = {}
        for rule in self._rules:
            for finding in rule(ctx):
                message = self._messages.get(str(finding.kind), **finding.params)
                violations[Violation(finding.field, str(finding.kind), message)] = None

        if violations:
            return EvaluationResult(violations=tuple(violations))

        delivery_date = ctx.delivery_date()
        return EvaluationResult(
            validated=ValidatedOrder(
                draft=draft,
                delivery_date=delivery_date,
                validated_at=now,
                token=fingerprint(draft, snapshot, now),
            )
        )


def fingerprint(draft: OrderDraftDTO, snapshot: CatalogSnapshot, now: datetime) -> str:
    """SHA-256 over the draft, the referenced catalog values and *now*."""
    products = {
        str(line.product_id): snapshot.find_product(line.product_id)
        for line in draft.products or []
    }
    options = {
        str(line.option_id): snapshot.find_option(line.option_id)
        for line in draft.options or []
    }
    payload = {
        "draft": draft.model_dump(mode="json"),
        "products": {
            key: [
                p.availability,
                p.max_order_quantity,
                str(p.order_window.start),
                str(p.order_window.end),
            ]
            for key, p in sorted(products.items())
            if p is not None
        },
        "options": {
            key: [o.availability, o.max_order_quantity]
            for key, o in sorted(options.items())
            if o is not None
        },
        "now": now.astimezone(timezone.utc).isoformat(),
    }
    encoded = json.dumps(payload, sort_keys=True, separators=(",", ":"))
    return hashlib.sha256(encoded.encode("utf-8")).hexdigest()
