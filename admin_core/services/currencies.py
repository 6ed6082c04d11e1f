"""
Currency administration with a usage guard: a currency referenced by
campaigns (``use_count > 0``) cannot be deleted.
"""
from __future__ import annotations

import logging
from typing import List, Literal, Optional

from admin_core.db import schemas
from admin_core.db.repositories import BulkDeleteResult, BulkUpdateResult, QueryOptions, Repository
from admin_core.db.types import InternalKey
from admin_core.errors import BackendError, NotFoundError, ResourceInUseError
from admin_core.services.base import EntityService
from admin_core.utils.cache import CachePort, cached

logger = logging.getLogger(__name__)

BulkAction = Literal["activate", "deactivate", "delete"]


class CurrencyService(EntityService[schemas.Currency]):
    entity_label = "currency"
    cache_tag = "currencies"
    search_fields = ["name", "code", "symbol"]

    def __init__(self, currencies: Repository[schemas.Currency], cache: Optional[CachePort] = None):
        super().__init__(currencies, cache)
        self.currencies = currencies

    def create(self, data: schemas.CurrencyCreate) -> schemas.Currency:
        self._ensure_unique({"name": data.name, "code": data.code})
        currency = self.currencies.insert({**data.model_dump(), "use_count": 0})
        self._invalidate()
        return currency

    def update(self, public_id: str, data: schemas.CurrencyUpdate) -> schemas.Currency:
        currency = self.get_by_public_id(public_id)
        changes = data.model_dump(exclude_unset=True)
        self._ensure_unique(
            {"name": changes.get("name"), "code": changes.get("code")},
            exclude_id=InternalKey(currency.id),
        )
        updated = self.currencies.update_by_id(InternalKey(currency.id), changes)
        self._invalidate()
        return updated

    def get_public_currencies(self) -> List[schemas.Currency]:
        return cached(
            self.cache,
            "currencies:public",
            lambda: self.currencies.get_all({"status": True}, QueryOptions(sort={"name": 1})),
            tags=[self.cache_tag],
        )

    def delete(self, public_id: str) -> bool:
        """Hard-delete a currency that nothing uses.

        Raises ``ResourceInUseError`` while ``use_count > 0``.
        """
        currency = self.get_by_public_id(public_id)
        if currency.use_count > 0:
            raise ResourceInUseError("currency", currency.name, currency.use_count)
        if not self.currencies.delete_by_id(InternalKey(currency.id)):
            raise BackendError(f"Failed to delete currency {currency.name}")
        self._invalidate()
        logger.info(f"Deleted currency {currency.code}")
        return True

    def bulk_operation(self, public_ids: List[str], action: BulkAction) -> BulkUpdateResult[schemas.Currency] | BulkDeleteResult[schemas.Currency]:
        if action == "delete":
            targets = self.currencies.get_all({"public_id": public_ids})
            deletable = []
            for currency in targets:
                if currency.use_count > 0:
                    logger.warning(
                        f"Skipping deletion of currency '{currency.name}' due to use_count: {currency.use_count}"
                    )
                    continue
                deletable.append(currency.id)
            result = self.currencies.delete_many({"id": deletable}) if deletable else BulkDeleteResult(count=0, deleted=[])
        elif action in ("activate", "deactivate"):
            result = self.currencies.update_many({"public_id": public_ids}, {"status": action == "activate"})
        else:
            raise ValueError(f"Unsupported bulk action: {action}")
        self._invalidate()
        return result

    def increment_use_count(self, public_id: str) -> schemas.Currency:
        currency = self.get_by_public_id(public_id)
        updated = self.currencies.increment(InternalKey(currency.id), "use_count", 1)
        if updated is None:
            raise NotFoundError(f"Currency with public id {public_id} not found")
        return updated

    def decrement_use_count(self, public_id: str) -> schemas.Currency:
        currency = self.get_by_public_id(public_id)
        if currency.use_count <= 0:
            return currency
        updated = self.currencies.increment(InternalKey(currency.id), "use_count", -1)
        if updated is None:
            raise NotFoundError(f"Currency with public id {public_id} not found")
        return updated
