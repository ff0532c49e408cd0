"""Where-clause evaluation against stored documents.

A where clause maps field names to either a literal (equality) or an
operator object. Operators are accepted in the remote service's wire
spelling ($in, $nin, $ne, $select, $inQuery, $or) and in descriptive
spelling (in, notIn, notEqual, selectFrom, matchesQuery, or).
"""

from collections.abc import Callable, Mapping
from typing import Any

from docmock.exceptions import UnsupportedQueryOperatorError
from docmock.models import (
    ID_FIELD,
    OBJECT_ID_ALIAS,
    OBJECT_TYPE,
    POINTER_TYPE,
    TYPE_KEY,
    Document,
)
from docmock.query.identity import IdentityResolver

Predicate = Callable[[Document], bool]
SubqueryRunner = Callable[[str, Mapping[str, Any] | None], list[Document]]

_OR_KEYS = ("$or", "or")

_OPERATORS = {
    "$in": "in",
    "in": "in",
    "$nin": "not_in",
    "notIn": "not_in",
    "$ne": "not_equal",
    "notEqual": "not_equal",
    "$select": "select_from",
    "selectFrom": "select_from",
    "$inQuery": "matches_query",
    "matchesQuery": "matches_query",
    "reference": "reference",
}


def field_for_key(key: str) -> str:
    """Map a where-clause key to the stored field it addresses.

    objectId always addresses the reserved id field.
    """
    return ID_FIELD if key == OBJECT_ID_ALIAS else key


def _match_all(_document: Document) -> bool:
    return True


def _match_none(_document: Document) -> bool:
    return False


class PredicateMatcher:
    """Builds document predicates from where clauses.

    Clauses are compiled eagerly so an unsupported operator fails before
    any document is scanned. Sub-queries run through run_subquery, which
    the read pipeline provides, so nested queries see the same store.
    """

    def __init__(self, resolver: IdentityResolver, run_subquery: SubqueryRunner) -> None:
        self._resolver = resolver
        self._run_subquery = run_subquery

    def build(self, where: Mapping[str, Any] | None) -> Predicate:
        """Compile a where clause into a predicate over stored documents."""
        if where is None:
            return _match_all
        if not isinstance(where, Mapping):
            raise UnsupportedQueryOperatorError(where)

        clause = dict(where)
        disjunction: list[Predicate] | None = None
        for or_key in _OR_KEYS:
            if or_key in clause:
                subclauses = clause.pop(or_key)
                if not isinstance(subclauses, list):
                    raise UnsupportedQueryOperatorError(subclauses, or_key)
                disjunction = (disjunction or []) + [self.build(sub) for sub in subclauses]

        object_id = clause.get(OBJECT_ID_ALIAS, clause.get(ID_FIELD))
        if object_id is not None and not isinstance(object_id, Mapping | list):
            # get-by-id: direct id equality, other keys are not consulted
            target = str(object_id)
            return lambda document: str(document.get(ID_FIELD)) == target

        field_predicates = [
            self._field_predicate(key, value) for key, value in clause.items()
        ]

        if disjunction is not None and not disjunction:
            return _match_none

        def predicate(document: Document) -> bool:
            if disjunction is not None and not any(p(document) for p in disjunction):
                return False
            return all(p(document) for p in field_predicates)

        return predicate

    def _field_predicate(self, key: str, clause: Any) -> Predicate:
        field = field_for_key(key)

        if clause is None:
            return _match_all

        if not isinstance(clause, Mapping):
            return lambda document: self._resolver.references_equal(document.get(field), clause)

        if clause.get(TYPE_KEY) in (POINTER_TYPE, OBJECT_TYPE):
            return self._reference_predicate(field, clause)

        if not clause:
            raise UnsupportedQueryOperatorError(clause, key)

        predicates: list[Predicate] = []
        for operator, operand in clause.items():
            name = _OPERATORS.get(operator)
            if name is None:
                raise UnsupportedQueryOperatorError(clause, key)
            builder = getattr(self, f"_{name}_predicate")
            predicates.append(builder(field, operand, clause, key))

        if len(predicates) == 1:
            return predicates[0]
        return lambda document: all(p(document) for p in predicates)

    def _in_predicate(self, field: str, operand: Any, clause: Any, key: str) -> Predicate:
        if not isinstance(operand, list):
            raise UnsupportedQueryOperatorError(clause, key)

        def predicate(document: Document) -> bool:
            value = document.get(field)
            return any(self._resolver.references_equal(target, value) for target in operand)

        return predicate

    def _not_in_predicate(self, field: str, operand: Any, clause: Any, key: str) -> Predicate:
        if not isinstance(operand, list):
            raise UnsupportedQueryOperatorError(clause, key)
        if not operand:
            return _match_all
        contained = self._in_predicate(field, operand, clause, key)
        return lambda document: not contained(document)

    def _not_equal_predicate(
        self, field: str, operand: Any, clause: Any, key: str  # noqa: ARG002
    ) -> Predicate:
        def predicate(document: Document) -> bool:
            value = document.get(field)
            if value == operand:
                return False
            return not self._resolver.references_equal(value, operand, strict=True)

        return predicate

    def _reference_predicate(self, field: str, pointer: Any, *_: Any) -> Predicate:
        target = self._resolver.resolve(pointer)
        if target is None:
            return _match_none
        return lambda document: self._resolver.references_equal(document.get(field), target)

    def _select_from_predicate(self, field: str, operand: Any, clause: Any, key: str) -> Predicate:
        if not isinstance(operand, Mapping):
            raise UnsupportedQueryOperatorError(clause, key)
        foreign_key = operand.get("key", operand.get("field"))
        subquery = operand.get("query", operand.get("subquery"))
        if not isinstance(foreign_key, str) or not isinstance(subquery, Mapping):
            raise UnsupportedQueryOperatorError(clause, key)

        matches = self._subquery_matches(subquery, clause, key)
        foreign_field = field_for_key(foreign_key)
        candidates = [match.get(foreign_field) for match in matches]

        def predicate(document: Document) -> bool:
            value = document.get(field)
            return any(self._resolver.references_equal(value, c) for c in candidates)

        return predicate

    def _matches_query_predicate(
        self, field: str, operand: Any, clause: Any, key: str
    ) -> Predicate:
        if not isinstance(operand, Mapping):
            raise UnsupportedQueryOperatorError(clause, key)
        matches = self._subquery_matches(operand, clause, key)

        def predicate(document: Document) -> bool:
            value = document.get(field)
            return any(self._resolver.references_equal(value, m) for m in matches)

        return predicate

    def _subquery_matches(
        self, subquery: Mapping[str, Any], clause: Any, key: str
    ) -> list[Document]:
        collection = subquery.get("className", subquery.get("collection"))
        if not isinstance(collection, str):
            raise UnsupportedQueryOperatorError(clause, key)
        return self._run_subquery(collection, subquery.get("where"))
