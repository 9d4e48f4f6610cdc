"""Option repositories package."""

from modules.options.repositories.django_repository import OptionDjangoRepository
from modules.options.repositories.interfaces import IOptionRepository

__all__ = ["IOptionRepository", "OptionDjangoRepository"]
