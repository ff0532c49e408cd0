"""Tests for PredicateMatcher."""

import pytest

from docmock.exceptions import UnsupportedQueryOperatorError
from docmock.query import IdentityResolver, PredicateMatcher
from docmock.store import InMemoryCollectionStore


def _pointer(collection: str, object_id: str) -> dict:
    return {"__type": "Pointer", "className": collection, "objectId": object_id}


@pytest.fixture
def store() -> InMemoryCollectionStore:
    store = InMemoryCollectionStore()
    for object_id, price in (("i1", 20), ("i2", 30), ("i3", 40)):
        store.insert("Item", {"id": object_id, "collection": "Item", "price": price})
    store.insert("Store", {"id": "s1", "collection": "Store", "item": _pointer("Item", "i1"), "name": "North"})
    store.insert("Store", {"id": "s2", "collection": "Store", "item": _pointer("Item", "i2"), "name": "South"})
    store.insert("Store", {"id": "s3", "collection": "Store", "name": "Empty"})
    return store


@pytest.fixture
def matcher(store) -> PredicateMatcher:
    resolver = IdentityResolver(store)
    calls: list[str] = []

    def run_subquery(collection, where):
        calls.append(collection)
        predicate = matcher_ref.build(where)
        return [d for d in store.scan(collection) if predicate(d)]

    matcher_ref = PredicateMatcher(resolver, run_subquery)
    matcher_ref.subquery_calls = calls
    return matcher_ref


def _ids(matcher: PredicateMatcher, store, collection: str, where) -> list[str]:
    predicate = matcher.build(where)
    return [d["id"] for d in store.scan(collection) if predicate(d)]


class TestEquality:
    """Tests for literal equality clauses."""

    def test_scalar_match(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": 30}) == ["i2"]

    def test_scalar_no_match(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": 25}) == []

    def test_conjunction(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": 30, "name": "pants"}) == []

    def test_empty_clause_matches_everything(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {}) == ["i1", "i2", "i3"]
        assert _ids(matcher, store, "Item", None) == ["i1", "i2", "i3"]

    def test_none_literal_is_vacuous(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": None}) == ["i1", "i2", "i3"]

    def test_numeric_equality_across_types(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": 30.0}) == ["i2"]

    def test_number_matches_numeric_string(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": "30"}) == ["i2"]
        assert _ids(matcher, store, "Item", {"price": "30.0"}) == ["i2"]
        assert _ids(matcher, store, "Item", {"price": "thirty"}) == []

    def test_in_is_loose(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$in": ["20", "40"]}}) == ["i1", "i3"]


class TestIdFastPath:
    """Tests for get-by-id matching."""

    def test_object_id(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"objectId": "i3"}) == ["i3"]

    def test_id_bypasses_other_fields(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"objectId": "i3", "price": 1}) == ["i3"]

    def test_object_id_operator_uses_alias(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"objectId": {"$in": ["i1", "i3"]}}) == ["i1", "i3"]


class TestMembership:
    """Tests for $in / $nin."""

    def test_in(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$in": [20, 30]}}) == ["i1", "i2"]
        assert _ids(matcher, store, "Item", {"price": {"in": [40, 90]}}) == ["i3"]

    def test_in_without_matches(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$in": [50, 90]}}) == []

    def test_not_in(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$nin": [20, 30]}}) == ["i3"]
        assert _ids(matcher, store, "Item", {"price": {"notIn": [40]}}) == ["i1", "i2"]

    def test_not_in_empty_list_matches_all(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$nin": []}}) == ["i1", "i2", "i3"]

    @pytest.mark.parametrize("values", [[20], [20, 30], [99], [20, 30, 40]])
    def test_not_in_negates_in(self, matcher, store, values) -> None:
        contained = set(_ids(matcher, store, "Item", {"price": {"$in": values}}))
        excluded = set(_ids(matcher, store, "Item", {"price": {"$nin": values}}))
        assert contained | excluded == {"i1", "i2", "i3"}
        assert not contained & excluded

    def test_in_with_pointers(self, matcher, store) -> None:
        where = {"item": {"$in": [_pointer("Item", "i2"), _pointer("Item", "i3")]}}
        assert _ids(matcher, store, "Store", where) == ["s2"]

    def test_not_in_with_pointers(self, matcher, store) -> None:
        where = {"item": {"$nin": [_pointer("Item", "i2")]}}
        assert _ids(matcher, store, "Store", where) == ["s1", "s3"]

    def test_in_with_bare_ids_on_pointer_field(self, matcher, store) -> None:
        assert _ids(matcher, store, "Store", {"item": {"$in": ["i1"]}}) == ["s1"]

    def test_in_requires_list(self, matcher) -> None:
        with pytest.raises(UnsupportedQueryOperatorError):
            matcher.build({"price": {"$in": 20}})


class TestNotEqual:
    """Tests for $ne."""

    def test_not_equal(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$ne": 30}}) == ["i1", "i3"]
        assert _ids(matcher, store, "Item", {"price": {"notEqual": 20}}) == ["i2", "i3"]

    def test_not_equal_missing_field(self, matcher, store) -> None:
        assert _ids(matcher, store, "Store", {"item": {"$ne": _pointer("Item", "i1")}}) == ["s2", "s3"]

    def test_combined_operators(self, matcher, store) -> None:
        where = {"price": {"$ne": 20, "$nin": [40]}}
        assert _ids(matcher, store, "Item", where) == ["i2"]

    def test_not_equal_is_strict(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"price": {"$ne": "30"}}) == ["i1", "i2", "i3"]


class TestPointerEquality:
    """Tests for pointer equality clauses."""

    def test_pointer_literal(self, matcher, store) -> None:
        assert _ids(matcher, store, "Store", {"item": _pointer("Item", "i1")}) == ["s1"]

    def test_reference_operator(self, matcher, store) -> None:
        assert _ids(matcher, store, "Store", {"item": {"reference": _pointer("Item", "i2")}}) == ["s2"]

    def test_embedded_literal(self, matcher, store) -> None:
        embedded = {"__type": "Object", "collection": "Item", "id": "i2", "price": 30}
        assert _ids(matcher, store, "Store", {"item": embedded}) == ["s2"]

    def test_unresolvable_pointer_matches_nothing(self, matcher, store) -> None:
        assert _ids(matcher, store, "Store", {"item": _pointer("Item", "gone")}) == []


class TestSubqueries:
    """Tests for $select and $inQuery."""

    def test_select_from(self, matcher, store) -> None:
        store.insert("Product", {"id": "p1", "collection": "Product", "sku": "A", "price": 30})
        store.insert("Product", {"id": "p2", "collection": "Product", "sku": "B", "price": 20})
        store.insert("Order", {"id": "o1", "collection": "Order", "sku": "A"})
        store.insert("Order", {"id": "o2", "collection": "Order", "sku": "B"})

        where = {"sku": {"$select": {"key": "sku", "query": {"className": "Product", "where": {"price": 30}}}}}
        assert _ids(matcher, store, "Order", where) == ["o1"]

    def test_select_from_descriptive_spelling(self, matcher, store) -> None:
        where = {
            "item": {
                "selectFrom": {
                    "field": "objectId",
                    "subquery": {"collection": "Item", "where": {"price": {"$in": [30, 40]}}},
                }
            }
        }
        assert _ids(matcher, store, "Store", where) == ["s2"]

    def test_matches_query(self, matcher, store) -> None:
        where = {"item": {"$inQuery": {"className": "Item", "where": {"price": 30}}}}
        assert _ids(matcher, store, "Store", where) == ["s2"]

    def test_matches_query_descriptive_spelling(self, matcher, store) -> None:
        where = {"item": {"matchesQuery": {"collection": "Item", "where": {"price": {"$ne": 30}}}}}
        assert _ids(matcher, store, "Store", where) == ["s1"]

    def test_subquery_runs_once_per_clause(self, matcher, store) -> None:
        where = {"item": {"$inQuery": {"className": "Item", "where": {"price": 30}}}}
        _ids(matcher, store, "Store", where)
        assert matcher.subquery_calls == ["Item"]

    def test_malformed_select(self, matcher) -> None:
        with pytest.raises(UnsupportedQueryOperatorError):
            matcher.build({"sku": {"$select": {"query": {"className": "Product"}}}})


class TestDisjunction:
    """Tests for $or."""

    def test_or_is_union(self, matcher, store) -> None:
        first = set(_ids(matcher, store, "Item", {"price": 20}))
        second = set(_ids(matcher, store, "Item", {"price": 40}))
        combined = _ids(matcher, store, "Item", {"$or": [{"price": 20}, {"price": 40}]})
        assert set(combined) == first | second
        assert combined == ["i1", "i3"]

    def test_empty_or_matches_nothing(self, matcher, store) -> None:
        assert _ids(matcher, store, "Item", {"$or": []}) == []
        assert _ids(matcher, store, "Item", {"or": []}) == []

    def test_or_with_other_keys(self, matcher, store) -> None:
        where = {"$or": [{"name": "North"}, {"name": "Empty"}], "item": {"$ne": None}}
        assert _ids(matcher, store, "Store", where) == ["s1"]

    def test_nested_or(self, matcher, store) -> None:
        where = {"$or": [{"$or": [{"price": 20}]}, {"price": {"$in": [40]}}]}
        assert _ids(matcher, store, "Item", where) == ["i1", "i3"]


class TestUnsupportedOperators:
    """Tests for unknown clause shapes."""

    @pytest.mark.parametrize(
        "where",
        [
            {"price": {"$regex": "x"}},
            {"price": {}},
            {"price": {"$in": [1], "$near": 2}},
            {"$or": {"price": 1}},
            {"$or": [30]},
        ],
    )
    def test_raises(self, matcher, where) -> None:
        with pytest.raises(UnsupportedQueryOperatorError):
            matcher.build(where)

    def test_error_names_clause(self, matcher) -> None:
        with pytest.raises(UnsupportedQueryOperatorError) as exc_info:
            matcher.build({"price": {"$regex": "x"}})
        assert exc_info.value.key == "price"
        assert exc_info.value.clause == {"$regex": "x"}
        assert "$regex" in str(exc_info.value)
