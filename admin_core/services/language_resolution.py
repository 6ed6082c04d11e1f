"""
Language resolution: turn a caller-supplied language identifier into an internal key.

Callers may hold either a language's public id (public API) or its internal
key (admin tooling), so ``resolve`` tries both, in that order, and only
accepts active languages.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from admin_core.db import schemas
from admin_core.db.repositories import QueryOptions, Repository
from admin_core.db.types import YES, InternalKey
from admin_core.errors import InvalidReferenceError, NoDefaultLanguageError

logger = logging.getLogger(__name__)


class LanguageResolver:
    def __init__(self, languages: Repository[schemas.Language]):
        self.languages = languages

    def resolve(self, identifier: Optional[str] = None) -> InternalKey:
        """Return the internal key for ``identifier`` or the default language when absent.

        Raises ``NoDefaultLanguageError`` when no identifier is given and no
        active default exists, and ``InvalidReferenceError`` when the
        identifier matches no active language.
        """
        if not identifier:
            return self.get_default_language_id()

        language = self.languages.get_detail({"public_id": identifier})
        if language is not None and language.status:
            return InternalKey(language.id)

        language = self.languages.get_detail_by_id(InternalKey(identifier))
        if language is not None and language.status:
            return InternalKey(language.id)

        logger.info(f"Rejected language identifier {identifier!r}: unknown or inactive")
        raise InvalidReferenceError(
            f"Invalid or inactive language: {identifier}",
            details={"language_id": identifier},
        )

    def get_default_language_id(self) -> InternalKey:
        language = self.languages.get_detail({"is_default": YES, "status": True})
        if language is None:
            raise NoDefaultLanguageError()
        return InternalKey(language.id)

    def get_all_active_language_ids(self) -> List[InternalKey]:
        active = self.languages.get_all({"status": True}, QueryOptions(select=["id"], sort={"name": 1}))
        return [InternalKey(language.id) for language in active]

    def get_by_code(self, code: str) -> Optional[schemas.LanguageRef]:
        """Look up an active language by folder code."""
        language = self.languages.get_detail({"folder": code, "status": True})
        if language is None:
            return None
        return schemas.LanguageRef(id=language.id, folder=language.folder)
