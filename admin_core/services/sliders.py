"""
Home page slider administration.

A slide is stored once per language; the variants share a random 10-digit
``unique_code``. Edits touch a single variant, deletes remove every variant
of the slide. Image upload is handled by the caller, which passes the stored
path in ``slider_image``.
"""
from __future__ import annotations

import logging
import random
from typing import Callable, List, Optional

from admin_core.db import schemas
from admin_core.db.repositories import (
    BulkDeleteResult,
    BulkUpdateResult,
    PaginatedResult,
    PaginationOptions,
    QueryOptions,
    Repository,
)
from admin_core.db.types import InternalKey
from admin_core.errors import ConflictError, NoActiveLanguagesError, NotFoundError
from admin_core.services.base import EntityService
from admin_core.services.fanout import FanOutCoordinator
from admin_core.services.language_resolution import LanguageResolver
from admin_core.utils.cache import CachePort, cached

logger = logging.getLogger(__name__)

UNIQUE_CODE_MIN = 1_000_000_000
UNIQUE_CODE_MAX = 9_999_999_999
MAX_CODE_ATTEMPTS = 100


def random_unique_code() -> int:
    return random.randint(UNIQUE_CODE_MIN, UNIQUE_CODE_MAX)


class SliderService(EntityService[schemas.Slider]):
    entity_label = "slider"
    cache_tag = "sliders"
    search_fields = ["title"]

    def __init__(
        self,
        sliders: Repository[schemas.Slider],
        resolver: LanguageResolver,
        fanout: FanOutCoordinator,
        cache: Optional[CachePort] = None,
        code_generator: Callable[[], int] = random_unique_code,
    ):
        super().__init__(sliders, cache)
        self.sliders = sliders
        self.resolver = resolver
        self.fanout = fanout
        self.code_generator = code_generator

    def generate_unique_code(self) -> int:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = self.code_generator()
            if not self.sliders.exists({"unique_code": code}):
                return code
        raise ConflictError(f"Could not generate a unique slider code after {MAX_CODE_ATTEMPTS} attempts")

    def create(self, data: schemas.SliderCreate) -> schemas.Slider:
        """Create the slide for the selected (or all active) languages.

        Returns the variant for ``data.language_id`` (default language when
        omitted), or the first variant created.
        """
        requested_language = self.resolver.resolve(data.language_id)
        if data.language_ids:
            language_ids = [self.resolver.resolve(identifier) for identifier in data.language_ids]
        else:
            language_ids = self.resolver.get_all_active_language_ids()
        if not language_ids:
            raise NoActiveLanguagesError()

        unique_code = self.generate_unique_code()
        content = {**data.model_dump(exclude={"language_id", "language_ids"}), "unique_code": unique_code}
        created = self.fanout.create_multi_language(self.sliders, content, language_ids)
        self._invalidate()
        logger.info(f"Created {len(created)} slider variants with unique code {unique_code}")
        return next((item for item in created if item.language_id == requested_language), created[0])

    def get_active(self, language_identifier: Optional[str] = None) -> List[schemas.Slider]:
        """Active slides of one language, newest first. Raises when there are none."""
        language_id = self.resolver.resolve(language_identifier)

        def load() -> List[schemas.Slider]:
            sliders = self.sliders.get_all(
                {"language_id": language_id, "status": True},
                QueryOptions(sort={"created_at": -1}),
            )
            if not sliders:
                raise NotFoundError(
                    "No sliders found for language",
                    details={"language_id": language_id},
                )
            return sliders

        return cached(self.cache, f"sliders:{language_id}:active", load, tags=[self.cache_tag])

    def list_for_language(
        self,
        language_identifier: Optional[str] = None,
        options: Optional[PaginationOptions] = None,
        *,
        include_inactive: bool = True,
        unique_code: Optional[int] = None,
    ) -> PaginatedResult[schemas.Slider]:
        filter = {"language_id": self.resolver.resolve(language_identifier)}
        if not include_inactive:
            filter["status"] = True
        if unique_code is not None:
            filter["unique_code"] = unique_code
        return self.list(filter, options)

    def get_variants(self, unique_code: int) -> List[schemas.Slider]:
        variants = self.sliders.get_all({"unique_code": unique_code})
        if not variants:
            raise NotFoundError(f"Slider with unique code '{unique_code}' not found", details={"unique_code": unique_code})
        return variants

    def update(self, public_id: str, data: schemas.SliderUpdate) -> schemas.Slider:
        slider = self.get_by_public_id(public_id)
        updated = self.sliders.update_by_id(InternalKey(slider.id), data.model_dump(exclude_unset=True))
        self._invalidate()
        return updated

    def delete(self, public_id: str) -> BulkDeleteResult[schemas.Slider]:
        """Delete the slide in every language."""
        slider = self.get_by_public_id(public_id)
        result = self.sliders.delete_many({"unique_code": slider.unique_code})
        self._invalidate()
        logger.info(f"Deleted {result.count} slider variants with unique code {slider.unique_code}")
        return result

    def bulk_update_status(self, public_ids: List[str], status: bool) -> BulkUpdateResult[schemas.Slider]:
        """Set ``status`` on exactly the given variants; every id must exist."""
        for public_id in public_ids:
            self.get_by_public_id(public_id)
        result = self.sliders.update_many({"public_id": public_ids}, {"status": status})
        self._invalidate()
        return result

    def bulk_delete(self, public_ids: List[str]) -> BulkDeleteResult[schemas.Slider]:
        """Delete every variant of the given slides; unknown ids are skipped."""
        targets = self.sliders.get_all({"public_id": public_ids})
        unique_codes = sorted({slider.unique_code for slider in targets})
        if not unique_codes:
            return BulkDeleteResult(count=0, deleted=[])
        result = self.sliders.delete_many({"unique_code": unique_codes})
        self._invalidate()
        return result
