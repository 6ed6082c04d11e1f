"""
Campaign sub-resources (FAQs, lead investors).

Both are plain CRUD scoped by ``equity_id``. Reads of one campaign's list are
cached under the tag ``<collection>:<equity_id>``; every write to that
campaign drops the tag.
"""
from __future__ import annotations

import logging
from typing import Generic, List, Optional, TypeVar

from pydantic import BaseModel

from admin_core.db import schemas
from admin_core.db.repositories import QueryOptions, Repository
from admin_core.db.types import InternalKey
from admin_core.errors import BackendError, NotFoundError
from admin_core.services.base import EntityService
from admin_core.utils.cache import CachePort, cached

logger = logging.getLogger(__name__)

T = TypeVar("T")


class CampaignResourceService(EntityService[T], Generic[T]):
    collection: str = ""

    def __init__(self, repository: Repository[T], cache: Optional[CachePort] = None):
        super().__init__(repository, cache)

    def _campaign_tag(self, equity_id: str) -> str:
        return f"{self.collection}:{equity_id}"

    def list_for_campaign(self, equity_id: str) -> List[T]:
        return cached(
            self.cache,
            f"{self.collection}:{equity_id}:all",
            lambda: self.repository.get_all({"equity_id": equity_id}, QueryOptions(sort={"created_at": 1})),
            tags=[self._campaign_tag(equity_id)],
        )

    def get(self, equity_id: str, public_id: str) -> T:
        record = self.repository.get_detail({"equity_id": equity_id, "public_id": public_id})
        if record is None:
            raise NotFoundError(
                f"{self.entity_label.capitalize()} with public id {public_id} not found",
                details={"equity_id": equity_id, "public_id": public_id},
            )
        return record

    def create(self, equity_id: str, data: BaseModel) -> T:
        record = self.repository.insert({**data.model_dump(), "equity_id": equity_id})
        self._invalidate(self._campaign_tag(equity_id))
        return record

    def update(self, equity_id: str, public_id: str, data: BaseModel) -> T:
        record = self.get(equity_id, public_id)
        updated = self.repository.update_by_id(InternalKey(record.id), data.model_dump(exclude_unset=True))
        self._invalidate(self._campaign_tag(equity_id))
        return updated

    def delete(self, equity_id: str, public_id: str) -> bool:
        record = self.get(equity_id, public_id)
        if not self.repository.delete_by_id(InternalKey(record.id)):
            raise BackendError(f"Failed to delete {self.entity_label} {public_id}")
        self._invalidate(self._campaign_tag(equity_id))
        logger.info(f"Deleted {self.entity_label} {public_id} from campaign {equity_id}")
        return True


class CampaignFaqService(CampaignResourceService[schemas.CampaignFaq]):
    entity_label = "campaign FAQ"
    collection = "campaign_faqs"


class LeadInvestorService(CampaignResourceService[schemas.LeadInvestor]):
    entity_label = "lead investor"
    collection = "lead_investors"
