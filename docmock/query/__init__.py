"""Query evaluation: identity resolution, predicate matching, include expansion."""

from docmock.query.identity import IdentityResolver
from docmock.query.include import IncludeExpander, split_include
from docmock.query.matcher import PredicateMatcher, field_for_key

__all__ = [
    "IdentityResolver",
    "IncludeExpander",
    "PredicateMatcher",
    "field_for_key",
    "split_include",
]
