"""Product service layer (Use Cases).

Orchestrates business logic for the Product aggregate, delegating
persistence to the injected ``IProductRepository``.

Business rules enforced here:
- Product names are unique.
- Price > 0, availability >= 0, max_order_quantity >= 1 and a
  non-wrapping order window (validated by the DTOs).
- Deletion requires an explicit boolean confirmation.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import require_confirmation
from modules.products.exceptions import ProductAlreadyExists, ProductNotFound
from modules.products.models import Product

if TYPE_CHECKING:
    from modules.products.dtos import (
        CreateProductDTO,
        OrderWindowDTO,
        UpdateProductDTO,
    )
    from modules.products.repositories.interfaces import IProductRepository

logger = structlog.get_logger(__name__)


def _apply_window(product: Product, window: OrderWindowDTO) -> None:
    product.set_order_window(
        window.start.hour, window.start.minute, window.end.hour, window.end.minute
    )


class ProductService:
    """Application service for Product use-cases.

    Receives an ``IProductRepository`` via constructor injection (DIP).
    """

    def __init__(self, repository: IProductRepository) -> None:
        self._repo = repository

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    @transaction.atomic
    def create_product(self, dto: CreateProductDTO) -> Product:
        """Create a new product after enforcing uniqueness rules.

        Raises:
            ProductAlreadyExists: if the name is already taken.
        """
        log = logger.bind(name=dto.name)

        if self._repo.get_by_name(dto.name):
            log.warning("product.duplicate_name")
            raise ProductAlreadyExists(f"Product '{dto.name}' already exists.")

        product = Product(
            name=dto.name,
            price=dto.price,
            description=dto.description,
            availability=dto.availability,
            max_order_quantity=dto.max_order_quantity,
        )
        _apply_window(product, dto.order_window)
        product = self._repo.save(product)
        log.info("product.created", product_id=str(product.id))
        return product

    @transaction.atomic
    def update_product(self, id: str, dto: UpdateProductDTO) -> Product:
        """Update an existing product with the supplied fields.

        Raises:
            ProductNotFound: if the product does not exist.
            ProductAlreadyExists: if the new name collides.
        """
        product = self.get_product(id)
        log = logger.bind(product_id=str(id))

        if dto.name is not None and dto.name != product.name:
            if self._repo.get_by_name(dto.name):
                log.warning("product.duplicate_name", name=dto.name)
                raise ProductAlreadyExists(f"Product '{dto.name}' already exists.")
            product.name = dto.name

        for field in ("price", "description", "availability", "max_order_quantity"):
            value = getattr(dto, field)
            if value is not None:
                setattr(product, field, value)
        if dto.order_window is not None:
            _apply_window(product, dto.order_window)

        product = self._repo.save(product)
        log.info("product.updated")
        return product

    def delete_product(self, id: str, confirm: Any) -> None:
        """Delete a product.

        Orders that reference it are left untouched; re-validating such an
        order reports the product as missing.

        Raises:
            ConfirmationRequired: *confirm* is not the boolean ``True``.
            ProductNotFound: if the product does not exist.
        """
        require_confirmation(confirm)
        with transaction.atomic():
            if not self._repo.delete(id):
                raise ProductNotFound(f"Product {id} not found.")
        logger.info("product.deleted", product_id=str(id))

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def list_products(self, filters: Optional[Dict[str, Any]] = None) -> List[Product]:
        """Return a list of products, optionally filtered."""
        return self._repo.list(filters)

    def get_product(self, id: str) -> Product:
        """Retrieve a single product by ID.

        Raises:
            ProductNotFound: if the product does not exist.
        """
        product = self._repo.get_by_id(id)
        if not product:
            raise ProductNotFound(f"Product {id} not found.")
        return product
