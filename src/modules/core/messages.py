"""Localized message tables.

Every user-facing string is looked up here by a stable key: violation
kinds produced by the order engine (see ``modules.orders.constants``) and
API-level errors (``not_found.*``, ``confirmation_required`` ...).

The Danish table carries the service's original wording and is the
default.  ``ORDER_MESSAGE_LANGUAGE`` picks a table and
``ORDER_MESSAGE_OVERRIDES`` replaces individual entries.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

DANISH: Dict[str, str] = {
    # Order violations
    "delivery_date_required": "Leveringstidspunkt er påkrevet",
    "delivery_date_in_past": "Leveringstidspunkt skal være i fremtiden",
    "delivery_date_not_today": "Leveringstidspunkt skal være i dag",
    "room_required": "Rum er påkrevet",
    "room_not_found": "Rummet eksisterer ikke",
    "products_required": "Produkter er påkrævet",
    "products_empty": "Mindst et produkt er påkrævet",
    "products_not_unique": "Produkterne skal være unikke",
    "product_required": "Produkt er påkrevet",
    "product_not_found": "Produktet eksisterer ikke",
    "product_quantity_required": "Mængde er påkrevet",
    "product_quantity_not_integer": "Produkt mængde skal være et heltal",
    "product_quantity_not_positive": "Mængde skal være større end 0",
    "product_quantity_exceeds_availability": (
        "Kan ikke bestille flere produkter end der er til rådighed"
    ),
    "product_quantity_exceeds_max": "Kan ikke bestille så mange produkter på en gang",
    "product_outside_order_window": "Bestillingen er uden for bestillingsvinduet",
    "options_not_unique": "Tilvalgene skal være unikke",
    "option_required": "Tilvalg er påkrevet",
    "option_not_found": "Tilvalget eksisterer ikke",
    "option_quantity_required": "Mængde er påkrevet",
    "option_quantity_not_integer": "Tilvalg mængde skal være et heltal",
    "option_quantity_not_positive": "Mængde skal være større end 0",
    "option_quantity_exceeds_availability": (
        "Kan ikke bestille flere tilvalg end der er til rådighed"
    ),
    "option_quantity_exceeds_max": "Kan ikke bestille så mange tilvalg på en gang",
    # API
    "validation_failed": "Ordren opfylder ikke betingelserne",
    "confirmation_required": "Kræver konfirmering",
    "invalid_input": "Ugyldigt input",
    "store_unavailable": "Tjenesten er midlertidigt utilgængelig",
    "not_found.room": "Rum ikke fundet",
    "not_found.product": "Produkt ikke fundet",
    "not_found.option": "Tilvalg ikke fundet",
    "not_found.order": "Ordre ikke fundet",
    "already_exists.room": "Et rum med dette navn findes allerede",
    "already_exists.product": "Et produkt med dette navn findes allerede",
    "already_exists.option": "Et tilvalg med dette navn findes allerede",
}

ENGLISH: Dict[str, str] = {
    "delivery_date_required": "Requested delivery date is required.",
    "delivery_date_in_past": "Requested delivery date must not be in the past.",
    "delivery_date_not_today": "Requested delivery date must be today.",
    "room_required": "Room is required.",
    "room_not_found": "Room {room_id} does not exist.",
    "products_required": "Products are required.",
    "products_empty": "At least one product is required.",
    "products_not_unique": "Products must be unique.",
    "product_required": "Product is required.",
    "product_not_found": "Product {product_id} does not exist.",
    "product_quantity_required": "Quantity is required.",
    "product_quantity_not_integer": "Product quantity must be a whole number.",
    "product_quantity_not_positive": "Quantity must be greater than 0.",
    "product_quantity_exceeds_availability": (
        "Requested {quantity} but only {availability} available."
    ),
    "product_quantity_exceeds_max": (
        "Requested {quantity} but at most {max_order_quantity} per order."
    ),
    "product_outside_order_window": (
        "Product can only be ordered between {window_from} and {window_to}."
    ),
    "options_not_unique": "Options must be unique.",
    "option_required": "Option is required.",
    "option_not_found": "Option {option_id} does not exist.",
    "option_quantity_required": "Quantity is required.",
    "option_quantity_not_integer": "Option quantity must be a whole number.",
    "option_quantity_not_positive": "Quantity must be greater than 0.",
    "option_quantity_exceeds_availability": (
        "Requested {quantity} but only {availability} available."
    ),
    "option_quantity_exceeds_max": (
        "Requested {quantity} but at most {max_order_quantity} per order."
    ),
    "validation_failed": "The order does not satisfy the ordering rules.",
    "confirmation_required": "Deletion requires confirmation.",
    "invalid_input": "Invalid input.",
    "store_unavailable": "Service temporarily unavailable.",
    "not_found.room": "Room not found.",
    "not_found.product": "Product not found.",
    "not_found.option": "Option not found.",
    "not_found.order": "Order not found.",
    "already_exists.room": "A room with this name already exists.",
    "already_exists.product": "A product with this name already exists.",
    "already_exists.option": "An option with this name already exists.",
}

TABLES: Dict[str, Dict[str, str]] = {"da": DANISH, "en": ENGLISH}

DEFAULT_LANGUAGE = "da"


class _KeepMissing(dict):
    def __missing__(self, key: str) -> str:
        return "{" + key + "}"


class MessageCatalog:
    """Resolve message keys to localized strings.

    Unknown keys resolve to the key itself so a missing translation never
    hides the underlying violation kind.
    """

    def __init__(
        self,
        language: str = DEFAULT_LANGUAGE,
        overrides: Optional[Mapping[str, str]] = None,
    ) -> None:
        if language not in TABLES:
            raise ValueError(f"Unsupported message language: {language!r}")
        self.language = language
        self._messages: Dict[str, str] = {**TABLES[language], **(overrides or {})}

    def get(self, key: str, **params: Any) -> str:
        template = self._messages.get(key, key)
        if not params:
            return template
        return template.format_map(_KeepMissing(params))

    def __contains__(self, key: object) -> bool:
        return key in self._messages


def get_message_catalog() -> MessageCatalog:
    """Build the catalog configured in Django settings."""
    from django.conf import settings

    return MessageCatalog(
        language=getattr(settings, "ORDER_MESSAGE_LANGUAGE", DEFAULT_LANGUAGE),
        overrides=getattr(settings, "ORDER_MESSAGE_OVERRIDES", None),
    )
