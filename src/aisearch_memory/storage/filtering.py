"""
Translation of memory filters into OData filter expressions.

See https://learn.microsoft.com/azure/search/search-query-understand-collection-filters
"""

from typing import Iterable, List, Optional

from ..core.models import MemoryFilter, TagConstraint
from .records import TAGS_FIELD, encode_tag


def escape_odata_string(value: str) -> str:
    """Single quotes inside OData string literals are escaped by doubling them"""
    return value.replace("'", "''")


def _constraint_expression(constraint: TagConstraint, field_name: str) -> str:
    tag = escape_odata_string(encode_tag(constraint.key, constraint.value))
    expression = f"{field_name}/any(s: s eq '{tag}')"
    if constraint.negate:
        return f"not {expression}"
    return expression


def build_search_filter(
    filters: Optional[Iterable[MemoryFilter]],
    field_name: str = TAGS_FIELD,
) -> Optional[str]:
    """
    Build the OData filter for a list of memory filters.

    Constraints inside a filter are ANDed, filters are ORed. Empty filters
    are ignored.

    Args:
        filters: Filters to translate, may be None
        field_name: Name of the string collection field holding the tags

    Returns:
        Filter expression, or None when there is nothing to filter on
    """
    if not filters:
        return None

    clauses: List[str] = []
    for memory_filter in filters:
        if memory_filter is None or memory_filter.is_empty():
            continue
        conditions = [_constraint_expression(c, field_name) for c in memory_filter.get_filters()]
        clauses.append(f"({' and '.join(conditions)})")

    if not clauses:
        return None

    return " or ".join(clauses)
