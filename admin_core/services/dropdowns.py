"""
Dropdown option administration.

An option exists once per language; the variants share a numeric
``unique_code``. Types are normalized to lower case and validated before
any lookup.
"""
from __future__ import annotations

import logging
import re
from typing import List, Literal, Optional

from admin_core.db import schemas
from admin_core.db.repositories import (
    BulkDeleteResult,
    BulkUpdateResult,
    IEquals,
    Not,
    PaginatedResult,
    PaginationOptions,
    QueryOptions,
    Repository,
)
from admin_core.db.schemas.dropdowns import DROPDOWN_TYPE_PATTERN
from admin_core.db.types import InternalKey
from admin_core.errors import (
    ConflictError,
    InvalidReferenceError,
    NoActiveLanguagesError,
    NotFoundError,
    ResourceInUseError,
)
from admin_core.services.base import EntityService
from admin_core.services.fanout import FanOutCoordinator
from admin_core.services.language_resolution import LanguageResolver
from admin_core.utils.cache import CachePort, cached

logger = logging.getLogger(__name__)

_TYPE_RE = re.compile(DROPDOWN_TYPE_PATTERN)

BulkAction = Literal["activate", "deactivate", "delete"]


def validate_dropdown_type(dropdown_type: str) -> str:
    normalized = schemas.normalize_dropdown_type(dropdown_type or "")
    if not normalized or len(normalized) > 50 or not _TYPE_RE.match(normalized):
        raise InvalidReferenceError(f"Invalid dropdown type: {dropdown_type}", details={"dropdown_type": dropdown_type})
    return normalized


class ManageDropdownService(EntityService[schemas.ManageDropdown]):
    entity_label = "dropdown option"
    search_fields = ["name"]

    def __init__(
        self,
        dropdowns: Repository[schemas.ManageDropdown],
        resolver: LanguageResolver,
        fanout: FanOutCoordinator,
        cache: Optional[CachePort] = None,
    ):
        super().__init__(dropdowns, cache)
        self.dropdowns = dropdowns
        self.resolver = resolver
        self.fanout = fanout

    @staticmethod
    def _type_tag(dropdown_type: str) -> str:
        return f"dropdowns:{dropdown_type}"

    def create(self, data: schemas.ManageDropdownCreate) -> schemas.ManageDropdown:
        """Create the option for the selected (or all active) languages.

        Returns the variant for ``data.language_id`` (default language when
        omitted), or the first variant created.
        """
        dropdown_type = validate_dropdown_type(data.dropdown_type)
        if self.dropdowns.exists({"dropdown_type": dropdown_type, "name": IEquals(data.name)}):
            raise ConflictError(
                f"Dropdown option '{data.name}' already exists for type '{dropdown_type}'",
                details={"name": data.name, "dropdown_type": dropdown_type},
            )

        requested_language = self.resolver.resolve(data.language_id)
        if data.language_ids:
            language_ids = [self.resolver.resolve(identifier) for identifier in data.language_ids]
        else:
            language_ids = self.resolver.get_all_active_language_ids()
        if not language_ids:
            raise NoActiveLanguagesError()

        unique_code = (self.dropdowns.max_value("unique_code") or 0) + 1
        content = {
            "name": data.name,
            "unique_code": unique_code,
            "dropdown_type": dropdown_type,
            "country_short_code": data.country_short_code,
            "is_default": data.is_default,
            "status": data.status,
            "use_count": 0,
        }
        created = self.fanout.create_multi_language(self.dropdowns, content, language_ids)
        self._invalidate(self._type_tag(dropdown_type))
        logger.info(
            f"Created dropdown entries for type {dropdown_type}: {data.name} with unique code {unique_code}"
        )
        return next((item for item in created if item.language_id == requested_language), created[0])

    def list_by_type(
        self,
        dropdown_type: str,
        language_id: Optional[str] = None,
        options: Optional[PaginationOptions] = None,
        status: Optional[bool] = None,
    ) -> PaginatedResult[schemas.ManageDropdown]:
        dropdown_type = validate_dropdown_type(dropdown_type)
        filter = {"dropdown_type": dropdown_type, "language_id": self.resolver.resolve(language_id)}
        if status is not None:
            filter["status"] = status
        return self.list(filter, options)

    def get_options(self, dropdown_type: str, language_id: Optional[str] = None) -> List[schemas.ManageDropdown]:
        """Active options of a type for one language, sorted by name and cached per type."""
        dropdown_type = validate_dropdown_type(dropdown_type)
        resolved = self.resolver.resolve(language_id)
        return cached(
            self.cache,
            f"dropdowns:{dropdown_type}:{resolved}",
            lambda: self.dropdowns.get_all(
                {"dropdown_type": dropdown_type, "language_id": resolved, "status": True},
                QueryOptions(sort={"name": 1}),
            ),
            tags=[self._type_tag(dropdown_type)],
        )

    def update(self, public_id: str, data: schemas.ManageDropdownUpdate) -> schemas.ManageDropdown:
        dropdown = self.get_by_public_id(public_id)
        changes = data.model_dump(exclude_unset=True)
        name = changes.get("name")
        # other language variants of the same option may share the name
        if name is not None and self.dropdowns.exists({
            "dropdown_type": dropdown.dropdown_type,
            "name": IEquals(name),
            "unique_code": Not(dropdown.unique_code),
        }):
            raise ConflictError(
                f"Dropdown option '{name}' already exists for type '{dropdown.dropdown_type}'",
                details={"name": name, "dropdown_type": dropdown.dropdown_type},
            )
        updated = self.dropdowns.update_by_id(InternalKey(dropdown.id), changes)
        self._invalidate(self._type_tag(dropdown.dropdown_type))
        return updated

    def delete_by_id(self, public_id: str) -> bool:
        """Deactivate one language variant."""
        dropdown = self.get_by_public_id(public_id)
        deleted = self.dropdowns.delete_by_id(InternalKey(dropdown.id))
        self._invalidate(self._type_tag(dropdown.dropdown_type))
        return deleted

    def delete_by_unique_code(self, dropdown_type: str, unique_code: int) -> BulkDeleteResult[schemas.ManageDropdown]:
        """Remove every language variant of an option that is not in use."""
        dropdown_type = validate_dropdown_type(dropdown_type)
        variants = self.dropdowns.get_all({"unique_code": unique_code})
        if not variants:
            raise NotFoundError(f"No dropdown found with unique code: {unique_code}")
        if any(item.dropdown_type != dropdown_type for item in variants):
            raise InvalidReferenceError(
                f"Dropdown with unique code {unique_code} does not belong to type '{dropdown_type}'"
            )
        in_use = next((item for item in variants if item.use_count > 0), None)
        if in_use is not None:
            raise ResourceInUseError("dropdown option", in_use.name, in_use.use_count)

        result = self.dropdowns.delete_many({"unique_code": unique_code})
        self._invalidate(self._type_tag(dropdown_type))
        logger.info(
            f"Deleted {result.count} dropdown variants with unique code {unique_code} from type {dropdown_type}"
        )
        return result

    def bulk_operation(self, public_ids: List[str], action: BulkAction) -> BulkUpdateResult[schemas.ManageDropdown]:
        if action not in ("activate", "deactivate", "delete"):
            raise ValueError(f"Unsupported bulk action: {action}")
        # delete is a soft delete, same as deactivate
        result = self.dropdowns.update_many({"public_id": public_ids}, {"status": action == "activate"})
        for dropdown_type in {item.dropdown_type for item in result.updated}:
            self._invalidate(self._type_tag(dropdown_type))
        return result

    def increment_use_count(self, public_id: str) -> schemas.ManageDropdown:
        dropdown = self.get_by_public_id(public_id)
        updated = self.dropdowns.increment(InternalKey(dropdown.id), "use_count", 1)
        if updated is None:
            raise NotFoundError(f"Dropdown option with public id {public_id} not found")
        return updated
