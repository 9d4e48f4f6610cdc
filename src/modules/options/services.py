"""Option service layer (Use Cases).

Mirrors the product catalog rules: unique names, non-negative
availability, a per-order cap of at least one and confirmed deletion.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, List, Optional

import structlog
from django.db import transaction

from modules.core.exceptions import require_confirmation
from modules.options.exceptions import OptionAlreadyExists, OptionNotFound
from modules.options.models import Option

if TYPE_CHECKING:
    from modules.options.dtos import CreateOptionDTO, UpdateOptionDTO
    from modules.options.repositories.interfaces import IOptionRepository

logger = structlog.get_logger(__name__)


class OptionService:
    def __init__(self, repository: IOptionRepository) -> None:
        self._repo = repository

    @transaction.atomic
    def create_option(self, dto: CreateOptionDTO) -> Option:
        """Raises ``OptionAlreadyExists`` if the name is taken."""
        if self._repo.get_by_name(dto.name):
            logger.warning("option.duplicate_name", name=dto.name)
            raise OptionAlreadyExists(f"Option '{dto.name}' already exists.")

        option = self._repo.save(Option(**dto.model_dump()))
        logger.info("option.created", option_id=str(option.id))
        return option

    @transaction.atomic
    def update_option(self, id: str, dto: UpdateOptionDTO) -> Option:
        option = self.get_option(id)

        if dto.name is not None and dto.name != option.name:
            if self._repo.get_by_name(dto.name):
                raise OptionAlreadyExists(f"Option '{dto.name}' already exists.")
            option.name = dto.name

        for field in ("description", "price", "availability", "max_order_quantity"):
            value = getattr(dto, field)
            if value is not None:
                setattr(option, field, value)

        option = self._repo.save(option)
        logger.info("option.updated", option_id=str(id))
        return option

    def get_option(self, id: str) -> Option:
        option = self._repo.get_by_id(id)
        if not option:
            raise OptionNotFound(f"Option {id} not found.")
        return option

    def list_options(self, filters: Optional[Dict[str, Any]] = None) -> List[Option]:
        return self._repo.list(filters)

    def delete_option(self, id: str, confirm: Any) -> None:
        """Raises ``ConfirmationRequired`` before touching storage, then
        ``OptionNotFound`` if nothing was deleted."""
        require_confirmation(confirm)
        with transaction.atomic():
            if not self._repo.delete(id):
                raise OptionNotFound(f"Option {id} not found.")
        logger.info("option.deleted", option_id=str(id))
