import mongomock
import pytest
from bson import ObjectId

from admin_core.db import entities, schemas
from admin_core.db.repositories import QueryOptions
from admin_core.db.repositories.document import DocumentRepository, document_mapping
from admin_core.db.repositories.mapping import Reference
from admin_core.db.types import NO


@pytest.fixture
def database():
    return mongomock.MongoClient()["equity_admin_test"]


def _repo(database, descriptor):
    return DocumentRepository(database, descriptor.document)


def _language(repo, name, folder):
    return repo.insert({
        "name": name, "folder": folder, "iso2": folder.upper(), "iso3": f"{folder}x".upper(),
        "direction": "ltr", "status": True, "is_default": NO,
    })


def test_internal_key_is_the_object_id_hex(database):
    languages = _repo(database, entities.LANGUAGES)
    language = _language(languages, "English", "en")

    stored = database["languages"].find_one({"public_id": language.public_id})
    assert stored["_id"] == ObjectId(language.id)
    assert "id" not in stored
    assert stored["created_at"] is not None


def test_language_reference_is_stored_as_object_id(database):
    languages = _repo(database, entities.LANGUAGES)
    dropdowns = _repo(database, entities.MANAGE_DROPDOWNS)
    language = _language(languages, "English", "en")

    dropdown = dropdowns.insert({
        "name": "Fintech", "unique_code": 1, "dropdown_type": "industry",
        "language_id": language.id, "status": True, "use_count": 0,
    })

    stored = database["manage_dropdowns"].find_one({"_id": ObjectId(dropdown.id)})
    assert stored["language_id"] == ObjectId(language.id)
    assert dropdown.language_id == language.id
    assert [d.id for d in dropdowns.get_all({"language_id": language.id})] == [dropdown.id]


def test_populate_never_exposes_the_referenced_internal_key(database):
    languages = _repo(database, entities.LANGUAGES)
    templates = _repo(database, entities.EMAIL_TEMPLATES)
    language = _language(languages, "French", "fr")
    templates.insert({
        "task": "welcome", "language_id": language.id, "sender_email": "a@example.com",
        "reply_email": "b@example.com", "sender_name": "Team", "subject": "Bienvenue",
        "message": "Bonjour", "status": True,
    })

    [template] = templates.get_all({}, QueryOptions(populate=["language"]))

    assert template.language_id == schemas.LanguageSummary(public_id=language.public_id, name="French")
    assert language.id not in template.model_dump_json()


def test_non_object_id_keys_never_match(database):
    currencies = _repo(database, entities.CURRENCIES)
    currencies.insert({"name": "Euro", "code": "EUR", "symbol": "E", "status": True, "use_count": 0})

    assert currencies.get_detail_by_id("not-an-object-id") is None
    assert currencies.delete_by_id("not-an-object-id") is False


def test_email_template_subject_filter_is_case_insensitive_substring(database):
    languages = _repo(database, entities.LANGUAGES)
    templates = _repo(database, entities.EMAIL_TEMPLATES)
    language = _language(languages, "English", "en")
    for task, subject in [("welcome", "Welcome aboard"), ("reset", "Reset your password")]:
        templates.insert({
            "task": task, "language_id": language.id, "sender_email": "a@example.com",
            "reply_email": "b@example.com", "sender_name": "Team", "subject": subject,
            "message": "Hi", "status": True,
        })

    assert [t.task for t in templates.get_all({"subject": "PASSWORD"})] == ["reset"]
    # task is not a text field, so this stays an exact match
    assert templates.get_all({"task": "welc"}) == []


def test_document_mapping_round_trip():
    reference = Reference(path="language", field="language_id", target="languages")
    to_entity, to_document = document_mapping(schemas.MetaSetting, [reference])
    language_key = ObjectId()

    document = to_document({"id": str(ObjectId()), "language_id": str(language_key)})
    assert isinstance(document["_id"], ObjectId)
    assert document["language_id"] == language_key

    partial = to_entity({"_id": document["_id"], "language_id": language_key, "site_name": "Equity"}, partial=True)
    assert partial.id == str(document["_id"])
    assert partial.language_id == str(language_key)
    assert partial.site_name == "Equity"


def test_populated_reference_without_public_id_falls_back_to_key():
    reference = Reference(path="language", field="language_id", target="languages")
    to_entity, _ = document_mapping(schemas.MetaSetting, [reference])
    key = ObjectId()

    partial = to_entity({"_id": ObjectId(), "language_id": {"_id": key}}, partial=True)
    assert partial.language_id == str(key)
