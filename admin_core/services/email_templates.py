"""
Email template administration.

Templates are keyed by ``task`` and exist once per language. Creating a
template without a language copies it to every active language that does
not have one for the task yet.
"""
from __future__ import annotations

import logging
from typing import List, Optional

from admin_core.db import schemas
from admin_core.db.repositories import BulkDeleteResult, BulkUpdateResult, PaginatedResult, PaginationOptions, Repository
from admin_core.db.types import InternalKey
from admin_core.errors import ConflictError, NoDefaultLanguageError, NotFoundError
from admin_core.services.base import EntityService
from admin_core.services.fanout import FanOutCoordinator
from admin_core.services.language_resolution import LanguageResolver
from admin_core.utils.cache import CachePort

logger = logging.getLogger(__name__)


class EmailTemplateService(EntityService[schemas.EmailTemplate]):
    entity_label = "email template"
    cache_tag = "email_templates"
    search_fields = ["task", "subject", "sender_name", "sender_email"]

    def __init__(
        self,
        templates: Repository[schemas.EmailTemplate],
        resolver: LanguageResolver,
        fanout: FanOutCoordinator,
        cache: Optional[CachePort] = None,
    ):
        super().__init__(templates, cache)
        self.templates = templates
        self.resolver = resolver
        self.fanout = fanout

    def create(self, data: schemas.EmailTemplateCreate) -> schemas.EmailTemplate:
        content = data.model_dump(exclude={"language_id"})

        if data.language_id:
            language_id = self.resolver.resolve(data.language_id)
            if self.templates.exists({"task": data.task, "language_id": language_id}):
                raise ConflictError(
                    f"Email template for task '{data.task}' already exists in this language",
                    details={"task": data.task, "language_id": language_id},
                )
            template = self.templates.insert({**content, "language_id": language_id})
            self._invalidate()
            return template

        created = self.fanout.create_for_all_active_languages(self.templates, content, key_fields=("task",))
        if not created:
            raise ConflictError(
                f"No email templates were created; task '{data.task}' already exists for every active language",
                details={"task": data.task},
            )
        self._invalidate()
        try:
            default_language = self.resolver.get_default_language_id()
        except NoDefaultLanguageError:
            return created[0]
        return next((item for item in created if item.language_id == default_language), created[0])

    def get_by_task(self, task: str, language_identifier: Optional[str] = None) -> schemas.EmailTemplate:
        """Template for ``task`` in the given (or default) language."""
        language_id = self.resolver.resolve(language_identifier)
        template = self.templates.get_detail({"task": task, "language_id": language_id})
        if template is None:
            raise NotFoundError(
                f"Email template for task '{task}' not found",
                details={"task": task, "language_id": language_id},
            )
        return template

    def list(self, filter=None, options: Optional[PaginationOptions] = None, *, language_identifier: Optional[str] = None) -> PaginatedResult[schemas.EmailTemplate]:
        """List templates of one language.

        Without an explicit language the default language is used; when it has
        no templates the first active language (by name) that has some is
        listed instead.
        """
        filter = dict(filter or {})
        if language_identifier:
            filter["language_id"] = self.resolver.resolve(language_identifier)
            return super().list(filter, options)

        try:
            language_id = self.resolver.get_default_language_id()
        except NoDefaultLanguageError:
            language_id = None
        if language_id is None or not self.templates.exists({"language_id": language_id}):
            language_id = next(
                (candidate for candidate in self.resolver.get_all_active_language_ids()
                 if self.templates.exists({"language_id": candidate})),
                language_id,
            )
        if language_id is not None:
            filter["language_id"] = language_id
        return super().list(filter, options)

    def update(self, public_id: str, data: schemas.EmailTemplateUpdate) -> schemas.EmailTemplate:
        template = self.get_by_public_id(public_id)
        updated = self.templates.update_by_id(InternalKey(template.id), data.model_dump(exclude_unset=True))
        self._invalidate()
        return updated

    def delete(self, public_id: str) -> BulkDeleteResult[schemas.EmailTemplate]:
        """Delete the template and every other language variant of its task."""
        template = self.get_by_public_id(public_id)
        result = self.templates.delete_many({"task": template.task})
        self._invalidate()
        logger.info(f"Deleted {result.count} email templates for task {template.task}")
        return result

    def bulk_update_status(self, public_ids: List[str], status: bool) -> BulkUpdateResult[schemas.EmailTemplate]:
        """Set ``status`` on the given templates and all their language variants."""
        targets = self.templates.get_all({"public_id": public_ids})
        tasks = sorted({template.task for template in targets})
        if not tasks:
            return BulkUpdateResult(count=0, updated=[])
        result = self.templates.update_many({"task": tasks}, {"status": status})
        self._invalidate()
        return result
