from admin_core.db.repositories import AnyOf, Contains
from admin_core.db.repositories.filters import text_filter, with_search


def test_text_filter_only_converts_configured_string_fields():
    convert = text_filter(["name"])
    converted = convert({"name": "usd", "status": True, "code": "EUR"})
    assert converted == {"name": Contains("usd"), "status": True, "code": "EUR"}


def test_text_filter_leaves_operators_alone():
    convert = text_filter(["name"])
    criterion = Contains("x")
    assert convert({"name": criterion})["name"] is criterion


def test_with_search_adds_any_of_clause():
    merged = with_search({"status": True}, "  euro ", ["name", "code"])
    assert merged["status"] is True
    assert merged["$or"] == AnyOf([{"name": Contains("euro")}, {"code": Contains("euro")}])


def test_with_search_without_term_is_a_no_op():
    assert with_search({"status": True}, "   ", ["name"]) == {"status": True}
    assert with_search({"status": True}, "euro", []) == {"status": True}


def test_with_search_does_not_overwrite_existing_any_of():
    existing = AnyOf([{"code": "EUR"}])
    merged = with_search({"$or": existing}, "dollar", ["name"])
    assert merged["$or"] is existing
    assert merged["$or_"] == AnyOf([{"name": Contains("dollar")}])
