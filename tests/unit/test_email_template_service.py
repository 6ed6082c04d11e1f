import pytest

from admin_core.db import schemas
from admin_core.errors import ConflictError, InvalidReferenceError, NotFoundError
from tests.factories import template_payload


def test_create_without_language_covers_all_active_languages(container, languages):
    created = container.email_templates.create(template_payload("welcome"))

    assert created.language_id == languages["en"].id
    variants = container.bindings.email_templates.get_all({"task": "welcome"})
    assert sorted(t.language_id for t in variants) == sorted([languages["en"].id, languages["fr"].id])


def test_create_again_for_same_task_conflicts(container, languages):
    container.email_templates.create(template_payload("welcome"))
    with pytest.raises(ConflictError, match="No email templates were created"):
        container.email_templates.create(template_payload("welcome"))


def test_fan_out_fills_only_missing_languages(container, languages):
    french = container.email_templates.create(template_payload("welcome", language_id=languages["fr"].public_id))
    assert french.language_id == languages["fr"].id

    english = container.email_templates.create(template_payload("welcome"))

    assert english.language_id == languages["en"].id
    assert container.bindings.email_templates.count({"task": "welcome"}) == 2


def test_explicit_language_duplicate_conflicts(container, languages):
    container.email_templates.create(template_payload("welcome", language_id=languages["fr"].id))
    with pytest.raises(ConflictError):
        container.email_templates.create(template_payload("welcome", language_id=languages["fr"].public_id))


def test_explicit_inactive_language_is_rejected(container, languages):
    with pytest.raises(InvalidReferenceError):
        container.email_templates.create(template_payload("welcome", language_id=languages["de"].public_id))


def test_get_by_task(container, languages):
    container.email_templates.create(template_payload("welcome"))

    assert container.email_templates.get_by_task("welcome").language_id == languages["en"].id
    french = container.email_templates.get_by_task("welcome", languages["fr"].public_id)
    assert french.language_id == languages["fr"].id

    with pytest.raises(NotFoundError):
        container.email_templates.get_by_task("missing")


def test_list_falls_back_to_a_language_with_templates(container, languages):
    container.email_templates.create(template_payload("welcome", language_id=languages["fr"].public_id))
    container.email_templates.create(template_payload("reset", language_id=languages["fr"].public_id))

    result = container.email_templates.list()

    assert {t.task for t in result.items} == {"welcome", "reset"}
    assert {t.language_id for t in result.items} == {languages["fr"].id}


def test_list_for_explicit_language(container, languages):
    container.email_templates.create(template_payload("welcome"))
    result = container.email_templates.list(language_identifier=languages["en"].public_id)
    assert [t.language_id for t in result.items] == [languages["en"].id]


def test_update_leaves_task_untouched(container, languages):
    created = container.email_templates.create(template_payload("welcome"))

    updated = container.email_templates.update(created.public_id, schemas.EmailTemplateUpdate(subject="Hello there"))

    assert updated.subject == "Hello there"
    assert updated.task == "welcome"
    assert "task" not in schemas.EmailTemplateUpdate.model_fields


def test_delete_removes_every_variant_of_the_task(container, languages):
    created = container.email_templates.create(template_payload("welcome"))
    container.email_templates.create(template_payload("reset"))

    result = container.email_templates.delete(created.public_id)

    assert result.count == 2
    assert {t.task for t in container.bindings.email_templates.get_all()} == {"reset"}


def test_bulk_update_status_applies_per_task(container, languages):
    created = container.email_templates.create(template_payload("welcome"))
    container.email_templates.create(template_payload("reset"))

    result = container.email_templates.bulk_update_status([created.public_id], False)

    assert result.count == 2
    assert container.bindings.email_templates.count({"status": False}) == 2
    assert container.bindings.email_templates.count({"task": "reset", "status": True}) == 2
