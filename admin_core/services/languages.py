"""
Language administration.

Maintains the single-default invariant: promoting a language demotes every
other one in the same repository call, and the default language cannot be
demoted directly or deleted.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from admin_core.db import schemas
from admin_core.db.repositories import BulkUpdateResult, QueryOptions, Repository
from admin_core.db.types import NO, YES, InternalKey
from admin_core.errors import (
    DefaultLanguageDeletionError,
    GuardViolationError,
    InvalidReferenceError,
    NoDefaultLanguageError,
)
from admin_core.services.base import EntityService
from admin_core.utils.cache import CachePort, cached

logger = logging.getLogger(__name__)

_UNIQUE_FIELDS = ("name", "folder", "iso2", "iso3")


class LanguageService(EntityService[schemas.Language]):
    entity_label = "language"
    cache_tag = "languages"
    search_fields = ["name", "folder", "iso2", "iso3"]

    def __init__(self, languages: Repository[schemas.Language], cache: Optional[CachePort] = None):
        super().__init__(languages, cache)
        self.languages = languages

    def create(self, data: schemas.LanguageCreate) -> schemas.Language:
        payload = data.model_dump()
        self._ensure_unique({field: payload[field] for field in _UNIQUE_FIELDS})
        make_default = payload["is_default"] == YES
        if make_default and not payload["status"]:
            raise InvalidReferenceError(f"Inactive language '{payload['name']}' cannot become the default")
        payload["is_default"] = NO
        language = self.languages.insert(payload)
        if make_default:
            language = self._promote(language)
        self._invalidate()
        logger.info(f"Created language {language.name} ({language.public_id})")
        return language

    def update(self, public_id: str, data: schemas.LanguageUpdate) -> schemas.Language:
        language = self.get_by_public_id(public_id)
        changes = data.model_dump(exclude_unset=True)
        self._ensure_unique(
            {field: changes.get(field) for field in _UNIQUE_FIELDS},
            exclude_id=InternalKey(language.id),
        )
        requested_default = changes.pop("is_default", None)
        if requested_default == NO and language.is_default == YES:
            raise GuardViolationError(
                f"Language '{language.name}' is the default; promote another language instead",
                details={"public_id": public_id},
            )
        if changes:
            language = self.languages.update_by_id(InternalKey(language.id), changes)
        if requested_default == YES and language.is_default != YES:
            language = self._promote(language)
        self._invalidate()
        return language

    def set_as_default(self, public_id: str) -> schemas.Language:
        language = self.get_by_public_id(public_id)
        language = self._promote(language)
        self._invalidate()
        return language

    def get_default_language(self) -> schemas.Language:
        language = self.languages.get_detail({"is_default": YES})
        if language is None:
            raise NoDefaultLanguageError()
        return language

    def get_front_languages(self) -> List[schemas.Language]:
        """Active languages sorted by name, cached until the next language write."""
        return cached(
            self.cache,
            "languages:front",
            lambda: self.languages.get_all({"status": True}, QueryOptions(sort={"name": 1})),
            tags=[self.cache_tag],
        )

    def delete(self, public_id: str) -> bool:
        language = self.get_by_public_id(public_id)
        if language.is_default == YES:
            raise DefaultLanguageDeletionError(language.name)
        deleted = self.languages.delete_by_id(InternalKey(language.id))
        self._invalidate()
        return deleted

    def bulk_update_status(self, public_ids: List[str], status: bool) -> BulkUpdateResult[schemas.Language]:
        result = self.languages.update_many({"public_id": public_ids}, {"status": status})
        self._invalidate()
        return result

    def bulk_delete(self, public_ids: List[str]) -> BulkUpdateResult[schemas.Language]:
        """Deactivate the given languages, leaving the default language untouched."""
        targets = self.languages.get_all({"public_id": public_ids})
        keep = [language for language in targets if language.is_default == YES]
        for language in keep:
            logger.warning(f"Skipping deletion of default language '{language.name}'")
        ids = [language.id for language in targets if language.is_default != YES]
        if not ids:
            return BulkUpdateResult(count=0, updated=[])
        result = self.languages.update_many({"id": ids}, {"status": False})
        self._invalidate()
        return result

    def _promote(self, language: schemas.Language) -> schemas.Language:
        if not language.status:
            raise InvalidReferenceError(
                f"Inactive language '{language.name}' cannot become the default",
                details={"public_id": language.public_id},
            )
        promoted = self.languages.set_exclusive(InternalKey(language.id), "is_default", YES, NO)
        logger.info(f"Default language is now {promoted.name} ({promoted.public_id})")
        return promoted
