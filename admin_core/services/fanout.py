"""
Multi-language fan-out: create one record per language from one submission.

Used by the language-scoped entities (dropdown options, email templates,
meta settings, sliders). When an insert fails part way, the records already created
by the same call are removed again before the error propagates.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Sequence, TypeVar

from admin_core.db.repositories import Repository
from admin_core.db.types import InternalKey
from admin_core.errors import NoActiveLanguagesError
from admin_core.services.language_resolution import LanguageResolver

logger = logging.getLogger(__name__)

T = TypeVar("T")


class FanOutCoordinator:
    def __init__(self, resolver: LanguageResolver):
        self.resolver = resolver

    def create_for_all_active_languages(
        self,
        repository: Repository[T],
        content: Mapping[str, Any],
        key_fields: Sequence[str] = (),
    ) -> List[T]:
        """Insert ``content`` for every active language that lacks a record.

        A language is skipped when a record already matches ``key_fields`` of
        ``content`` plus that language. Returns the records actually created;
        an empty list means every language was already covered.
        """
        language_ids = self.resolver.get_all_active_language_ids()
        if not language_ids:
            raise NoActiveLanguagesError()

        content_key = {name: content[name] for name in key_fields}
        pending: List[InternalKey] = []
        for language_id in language_ids:
            if repository.exists({**content_key, "language_id": language_id}):
                logger.debug(f"{repository.entity_name}: {content_key} already exists for language {language_id}")
                continue
            pending.append(language_id)

        created = self._insert_each(repository, content, pending)
        logger.info(
            f"{repository.entity_name}: created {len(created)} of {len(language_ids)} language variants for {content_key}"
        )
        return created

    def create_multi_language(
        self,
        repository: Repository[T],
        content: Mapping[str, Any],
        language_ids: Iterable[InternalKey],
    ) -> List[T]:
        """Insert ``content`` once per given language, without checking for existing records."""
        return self._insert_each(repository, content, list(dict.fromkeys(language_ids)))

    def _insert_each(self, repository: Repository[T], content: Mapping[str, Any], language_ids: Sequence[InternalKey]) -> List[T]:
        created: List[T] = []
        try:
            for language_id in language_ids:
                created.append(repository.insert({**content, "language_id": language_id}))
        except Exception:
            logger.warning(
                f"{repository.entity_name}: fan-out failed after {len(created)} inserts, removing partial results"
            )
            for record in created:
                repository.delete_many({"id": record.id})
            raise
        return created
