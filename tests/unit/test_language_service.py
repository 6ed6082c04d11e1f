import pytest

from admin_core.db import schemas
from admin_core.db.repositories import PaginationOptions
from admin_core.db.types import NO, YES
from admin_core.errors import (
    ConflictError,
    DefaultLanguageDeletionError,
    GuardViolationError,
    InvalidReferenceError,
    NotFoundError,
)
from tests.factories import language_payload


def _defaults(container):
    return [language.name for language in container.bindings.languages.get_all({"is_default": YES})]


def test_iso_codes_are_uppercased(container, languages):
    assert languages["en"].iso2 == "EN"
    assert languages["en"].iso3 == "ENG"


def test_duplicate_name_is_rejected_case_insensitively(container, languages):
    with pytest.raises(ConflictError) as excinfo:
        container.languages.create(language_payload("english", "en-gb", "eg", "egb"))
    assert excinfo.value.details["field"] == "name"


def test_duplicate_folder_is_rejected(container, languages):
    with pytest.raises(ConflictError):
        container.languages.create(language_payload("Spanish", "FR", "es", "spa"))


def test_creating_a_new_default_demotes_the_old_one(container, languages):
    spanish = container.languages.create(language_payload("Spanish", "es", "es", "spa", is_default="YES"))

    assert spanish.is_default == YES
    assert _defaults(container) == ["Spanish"]


def test_inactive_language_cannot_be_created_as_default(container, languages):
    with pytest.raises(InvalidReferenceError):
        container.languages.create(language_payload("Spanish", "es", "es", "spa", is_default="YES", status=False))
    assert _defaults(container) == ["English"]


def test_set_as_default_keeps_a_single_default(container, languages):
    promoted = container.languages.set_as_default(languages["fr"].public_id)

    assert promoted.is_default == YES
    assert _defaults(container) == ["French"]
    assert container.languages.get_default_language().public_id == languages["fr"].public_id
    assert container.resolver.resolve() == languages["fr"].id


def test_inactive_language_cannot_become_default(container, languages):
    with pytest.raises(InvalidReferenceError):
        container.languages.set_as_default(languages["de"].public_id)
    assert _defaults(container) == ["English"]


def test_update_can_promote(container, languages):
    updated = container.languages.update(languages["fr"].public_id, schemas.LanguageUpdate(is_default="YES"))
    assert updated.is_default == YES
    assert _defaults(container) == ["French"]


def test_default_cannot_be_demoted_directly(container, languages):
    with pytest.raises(GuardViolationError):
        container.languages.update(languages["en"].public_id, schemas.LanguageUpdate(is_default=NO))


def test_update_rejects_name_taken_by_another_language(container, languages):
    with pytest.raises(ConflictError):
        container.languages.update(languages["fr"].public_id, schemas.LanguageUpdate(name="ENGLISH"))

    renamed = container.languages.update(languages["fr"].public_id, schemas.LanguageUpdate(name="French"))
    assert renamed.name == "French"


def test_default_language_cannot_be_deleted(container, languages):
    with pytest.raises(DefaultLanguageDeletionError):
        container.languages.delete(languages["en"].public_id)


def test_delete_is_a_soft_delete(container, languages):
    assert container.languages.delete(languages["fr"].public_id) is True

    stored = container.languages.get_by_public_id(languages["fr"].public_id)
    assert stored.status is False


def test_unknown_public_id(container, languages):
    with pytest.raises(NotFoundError):
        container.languages.get_by_public_id("missing")


def test_bulk_delete_skips_the_default(container, languages):
    result = container.languages.bulk_delete([languages["en"].public_id, languages["fr"].public_id])

    assert result.count == 1
    assert container.languages.get_by_public_id(languages["en"].public_id).status is True
    assert container.languages.get_by_public_id(languages["fr"].public_id).status is False


def test_bulk_update_status(container, languages):
    result = container.languages.bulk_update_status([languages["de"].public_id], True)
    assert result.count == 1
    assert [language.name for language in result.updated] == ["German"]


def test_list_searches_default_fields(container, languages):
    result = container.languages.list(options=PaginationOptions(search="fre"))
    assert [language.name for language in result.items] == ["French"]
    assert result.pagination.total_count == 1


def test_front_languages_are_cached_until_a_language_write(container, languages):
    assert [language.name for language in container.languages.get_front_languages()] == ["English", "French"]

    # written behind the service's back, so the cache is not invalidated
    container.bindings.languages.insert({
        "name": "Arabic", "folder": "ar", "iso2": "AR", "iso3": "ARA",
        "direction": "rtl", "status": True, "is_default": NO,
    })
    assert len(container.languages.get_front_languages()) == 2

    container.languages.delete(languages["fr"].public_id)
    assert [language.name for language in container.languages.get_front_languages()] == ["Arabic", "English"]
