"""Django ORM implementation of the Option repository."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import structlog
from django.core.exceptions import ValidationError
from django.db import transaction

from modules.core.repositories.errors import translate_store_errors
from modules.options.models import Option
from modules.options.repositories.interfaces import IOptionRepository

logger = structlog.get_logger(__name__)


class OptionDjangoRepository(IOptionRepository):
    @translate_store_errors
    def get_by_id(self, id: str) -> Optional[Option]:
        """Returns ``None`` for non-existent or invalid IDs."""
        try:
            return Option.objects.filter(id=id).first()
        except (ValueError, ValidationError):
            return None

    @translate_store_errors
    def list(self, filters: Optional[Dict[str, Any]] = None) -> List[Option]:
        queryset = Option.objects.all()
        if filters:
            queryset = queryset.filter(**filters)
        return list(queryset)

    @translate_store_errors
    @transaction.atomic
    def save(self, entity: Option) -> Option:
        entity.save()
        logger.info("option.saved", option_id=str(entity.id))
        return entity

    @translate_store_errors
    @transaction.atomic
    def delete(self, id: str) -> bool:
        option = self.get_by_id(id)
        if not option:
            return False
        option.delete()
        logger.info("option.deleted", option_id=str(id))
        return True

    @translate_store_errors
    def get_by_name(self, name: str) -> Optional[Option]:
        return Option.objects.filter(name=name.strip()).first()
