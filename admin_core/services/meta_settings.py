"""Per-language SEO meta settings: at most one record per language."""
from __future__ import annotations

import logging
from typing import Optional

from admin_core.db import schemas
from admin_core.db.repositories import PaginatedResult, PaginationOptions, Repository
from admin_core.db.types import InternalKey
from admin_core.errors import BackendError, ConflictError, NotFoundError
from admin_core.services.base import EntityService
from admin_core.services.fanout import FanOutCoordinator
from admin_core.services.language_resolution import LanguageResolver
from admin_core.utils.cache import CachePort, cached

logger = logging.getLogger(__name__)


class MetaSettingService(EntityService[schemas.MetaSetting]):
    entity_label = "meta setting"
    cache_tag = "meta_settings"
    search_fields = ["site_name", "meta_title"]

    def __init__(
        self,
        settings: Repository[schemas.MetaSetting],
        resolver: LanguageResolver,
        fanout: FanOutCoordinator,
        cache: Optional[CachePort] = None,
    ):
        super().__init__(settings, cache)
        self.settings = settings
        self.resolver = resolver
        self.fanout = fanout

    def create(self, data: schemas.MetaSettingCreate) -> schemas.MetaSetting:
        """Copy ``data`` to every active language that has no meta setting yet."""
        created = self.fanout.create_for_all_active_languages(self.settings, data.model_dump())
        if not created:
            raise ConflictError("No meta settings were created; every active language already has one")
        self._invalidate()
        return created[0]

    def get_by_language(self, language_identifier: Optional[str] = None) -> schemas.MetaSetting:
        language_id = self.resolver.resolve(language_identifier)

        def load() -> schemas.MetaSetting:
            setting = self.settings.get_detail({"language_id": language_id})
            if setting is None:
                raise NotFoundError(
                    "Meta setting not found for language",
                    details={"language_id": language_id},
                )
            return setting

        return cached(self.cache, f"meta_settings:{language_id}", load, tags=[self.cache_tag])

    def list_for_language(
        self,
        language_identifier: Optional[str] = None,
        options: Optional[PaginationOptions] = None,
    ) -> PaginatedResult[schemas.MetaSetting]:
        return self.list({"language_id": self.resolver.resolve(language_identifier)}, options)

    def update(self, public_id: str, data: schemas.MetaSettingUpdate) -> schemas.MetaSetting:
        setting = self.get_by_public_id(public_id)
        updated = self.settings.update_by_id(InternalKey(setting.id), data.model_dump(exclude_unset=True))
        self._invalidate()
        return updated

    def delete(self, public_id: str) -> bool:
        setting = self.get_by_public_id(public_id)
        if not self.settings.delete_by_id(InternalKey(setting.id)):
            raise BackendError(f"Failed to delete meta setting {public_id}")
        self._invalidate()
        return True
