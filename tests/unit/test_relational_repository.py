from sqlalchemy import event

from admin_core.db import entities
from admin_core.db.database import create_session_factory
from admin_core.db.repositories import Contains, PaginationOptions, Repository
from admin_core.db.repositories.relational import RelationalRepository
from admin_core.db.types import NO, YES


def _repo(engine, descriptor, **kwargs):
    return RelationalRepository(create_session_factory(engine), descriptor.relational, **kwargs)


def _language(repo, name, folder, is_default=NO):
    return repo.insert({
        "name": name, "folder": folder, "iso2": folder.upper(), "iso3": f"{folder}x".upper(),
        "direction": "ltr", "status": True, "is_default": is_default,
    })


def test_sqlite_disables_parallel_page_reads(engine):
    assert _repo(engine, entities.CURRENCIES).parallel_reads is False
    assert _repo(engine, entities.CURRENCIES, parallel_reads=True).parallel_reads is True


def test_contains_escapes_like_wildcards(engine):
    repo = _repo(engine, entities.CURRENCIES)
    repo.insert({"name": "100% Gold", "code": "XAU", "symbol": "G", "status": True, "use_count": 0})
    repo.insert({"name": "1000 Gold", "code": "XAG", "symbol": "S", "status": True, "use_count": 0})

    assert [c.code for c in repo.get_all({"name": Contains("100%")})] == ["XAU"]
    assert [c.code for c in repo.get_all({"name": Contains("_")})] == []


def test_dropdown_name_filter_is_a_substring_match(engine):
    languages = _repo(engine, entities.LANGUAGES)
    dropdowns = _repo(engine, entities.MANAGE_DROPDOWNS)
    language = _language(languages, "English", "en")
    for code, name in enumerate(["Fintech", "Biotech", "Retail"], start=1):
        dropdowns.insert({
            "name": name, "unique_code": code, "dropdown_type": "industry",
            "language_id": language.id, "status": True, "use_count": 0,
        })

    assert {d.name for d in dropdowns.get_all({"name": "TECH"})} == {"Fintech", "Biotech"}


def test_set_exclusive_is_a_single_update(engine):
    languages = _repo(engine, entities.LANGUAGES)
    _language(languages, "English", "en", is_default=YES)
    french = _language(languages, "French", "fr")

    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("UPDATE"):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", capture)
    try:
        languages.set_exclusive(french.id, "is_default", YES, NO)
    finally:
        event.remove(engine, "before_cursor_execute", capture)

    assert len(statements) == 1
    assert "CASE" in statements[0].upper()


def test_pagination_runs_sequentially_on_sqlite(engine):
    repo = _repo(engine, entities.CURRENCIES)
    for index in range(3):
        repo.insert({"name": f"C{index}", "code": f"C{index}", "symbol": "c", "status": True, "use_count": 0})

    result = repo.find_with_pagination({}, PaginationOptions(limit=2, sort={"code": -1}))
    assert [c.code for c in result.items] == ["C2", "C1"]
    assert result.pagination.total_pages == 2


class TwoStepRepository(RelationalRepository):
    """Adapter without a native exclusive update; uses the generic fallback."""

    def set_exclusive(self, id, field, on_value, off_value):
        return Repository.set_exclusive(self, id, field, on_value, off_value)


def test_fallback_set_exclusive_demotes_then_promotes(engine):
    languages = TwoStepRepository(create_session_factory(engine), entities.LANGUAGES.relational)
    english = _language(languages, "English", "en", is_default=YES)
    french = _language(languages, "French", "fr")

    statements = []

    def capture(conn, cursor, statement, parameters, context, executemany):
        if statement.lstrip().upper().startswith("UPDATE"):
            statements.append(statement)

    event.listen(engine, "before_cursor_execute", capture)
    try:
        promoted = languages.set_exclusive(french.id, "is_default", YES, NO)
    finally:
        event.remove(engine, "before_cursor_execute", capture)

    assert len(statements) == 2
    assert promoted.id == french.id and promoted.is_default == YES
    assert languages.get_detail_by_id(english.id).is_default == NO
    assert languages.count({"is_default": YES}) == 1
