"""Order domain constants.

Defines the lifecycle states of an order pass and their valid
transitions, and the stable identifiers of every admissibility violation.
"""

from django.db import models


class LifecycleState(models.TextChoices):
    DRAFT = "draft", "Draft"
    VALIDATING = "validating", "Validating"
    ACCEPTED = "accepted", "Accepted"
    REJECTED = "rejected", "Rejected"
    PERSISTED = "persisted", "Persisted"
    DELETED = "deleted", "Deleted"


VALID_TRANSITIONS: dict[str, set[str]] = {
    LifecycleState.DRAFT: {LifecycleState.VALIDATING},
    LifecycleState.VALIDATING: {LifecycleState.ACCEPTED, LifecycleState.REJECTED},
    LifecycleState.ACCEPTED: {LifecycleState.PERSISTED},
    LifecycleState.REJECTED: set(),
    LifecycleState.PERSISTED: {LifecycleState.DELETED},
    LifecycleState.DELETED: set(),
}

# A create/update pass ends in REJECTED or PERSISTED; deletion resumes from
# PERSISTED in a separate pass.
TERMINAL_STATES: set[str] = {
    LifecycleState.REJECTED,
    LifecycleState.PERSISTED,
    LifecycleState.DELETED,
}


class ViolationKind(models.TextChoices):
    DELIVERY_DATE_REQUIRED = "delivery_date_required"
    DELIVERY_DATE_IN_PAST = "delivery_date_in_past"
    DELIVERY_DATE_NOT_TODAY = "delivery_date_not_today"
    ROOM_REQUIRED = "room_required"
    ROOM_NOT_FOUND = "room_not_found"
    PRODUCTS_REQUIRED = "products_required"
    PRODUCTS_EMPTY = "products_empty"
    PRODUCTS_NOT_UNIQUE = "products_not_unique"
    PRODUCT_REQUIRED = "product_required"
    PRODUCT_NOT_FOUND = "product_not_found"
    PRODUCT_QUANTITY_REQUIRED = "product_quantity_required"
    PRODUCT_QUANTITY_NOT_INTEGER = "product_quantity_not_integer"
    PRODUCT_QUANTITY_NOT_POSITIVE = "product_quantity_not_positive"
    PRODUCT_QUANTITY_EXCEEDS_AVAILABILITY = "product_quantity_exceeds_availability"
    PRODUCT_QUANTITY_EXCEEDS_MAX = "product_quantity_exceeds_max"
    PRODUCT_OUTSIDE_ORDER_WINDOW = "product_outside_order_window"
    OPTIONS_NOT_UNIQUE = "options_not_unique"
    OPTION_REQUIRED = "option_required"
    OPTION_NOT_FOUND = "option_not_found"
    OPTION_QUANTITY_REQUIRED = "option_quantity_required"
    OPTION_QUANTITY_NOT_INTEGER = "option_quantity_not_integer"
    OPTION_QUANTITY_NOT_POSITIVE = "option_quantity_not_positive"
    OPTION_QUANTITY_EXCEEDS_AVAILABILITY = "option_quantity_exceeds_availability"
    OPTION_QUANTITY_EXCEEDS_MAX = "option_quantity_exceeds_max"
