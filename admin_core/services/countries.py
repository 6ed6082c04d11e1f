"""Country administration: one default country, usage-guarded deletion."""
from __future__ import annotations

import logging
from typing import Optional

from admin_core.db import schemas
from admin_core.db.repositories import Repository
from admin_core.db.types import NO, YES, InternalKey
from admin_core.errors import BackendError, GuardViolationError, ResourceInUseError
from admin_core.services.base import EntityService
from admin_core.utils.cache import CachePort

logger = logging.getLogger(__name__)


class CountryService(EntityService[schemas.Country]):
    entity_label = "country"
    cache_tag = "countries"
    search_fields = ["name", "iso2", "iso3"]

    def __init__(self, countries: Repository[schemas.Country], cache: Optional[CachePort] = None):
        super().__init__(countries, cache)
        self.countries = countries

    def create(self, data: schemas.CountryCreate) -> schemas.Country:
        payload = data.model_dump()
        self._ensure_unique({"name": payload["name"]})
        make_default = payload["is_default"] == YES
        payload["is_default"] = NO
        country = self.countries.insert({**payload, "use_count": 0})
        if make_default:
            country = self.countries.set_exclusive(InternalKey(country.id), "is_default", YES, NO)
        self._invalidate()
        return country

    def update(self, public_id: str, data: schemas.CountryUpdate) -> schemas.Country:
        country = self.get_by_public_id(public_id)
        changes = data.model_dump(exclude_unset=True)
        self._ensure_unique({"name": changes.get("name")}, exclude_id=InternalKey(country.id))
        updated = self.countries.update_by_id(InternalKey(country.id), changes)
        self._invalidate()
        return updated

    def set_as_default(self, public_id: str) -> schemas.Country:
        country = self.get_by_public_id(public_id)
        promoted = self.countries.set_exclusive(InternalKey(country.id), "is_default", YES, NO)
        self._invalidate()
        logger.info(f"Default country is now {promoted.name}")
        return promoted

    def delete(self, public_id: str) -> bool:
        country = self.get_by_public_id(public_id)
        if country.is_default == YES:
            raise GuardViolationError(f"Country '{country.name}' is the default and cannot be deleted")
        if country.use_count > 0:
            raise ResourceInUseError("country", country.name, country.use_count)
        if not self.countries.delete_by_id(InternalKey(country.id)):
            raise BackendError(f"Failed to delete country {country.name}")
        self._invalidate()
        return True
