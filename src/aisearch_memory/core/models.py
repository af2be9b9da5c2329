"""
Memory records and tag filters shared by every memory storage backend
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Tuple

from .errors import InvalidArgumentError

# Separates tag keys from tag values when tags are flattened to strings
TAG_SEPARATOR = ":"


class TagCollection(Dict[str, List[Optional[str]]]):
    """Multi-valued tags: each key maps to a list of values"""

    def add(self, key: str, value: Optional[str] = None) -> "TagCollection":
        if TAG_SEPARATOR in key:
            raise InvalidArgumentError(f"Tag key '{key}' cannot contain '{TAG_SEPARATOR}'")
        values = self.setdefault(key, [])
        if value is not None:
            values.append(value)
        return self

    def pairs(self) -> Iterator[Tuple[str, Optional[str]]]:
        """Yield one (key, value) pair per value, and (key, None) for keys without values"""
        for key, values in self.items():
            if not values:
                yield key, None
            for value in values:
                yield key, value


@dataclass
class MemoryRecord:
    """A unit of stored knowledge: identifier, embedding, tags and payload"""
    id: str
    vector: List[float] = field(default_factory=list)
    tags: TagCollection = field(default_factory=TagCollection)
    payload: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class TagConstraint:
    """Single tag comparison inside a filter"""
    key: str
    value: Optional[str]
    negate: bool = False


class MemoryFilter:
    """
    Conjunction of tag constraints.

    Constraints inside one filter are ANDed; a list of filters is ORed.
    """

    def __init__(self):
        self._constraints: List[TagConstraint] = []

    def by_tag(self, key: str, value: Optional[str]) -> "MemoryFilter":
        self._constraints.append(TagConstraint(key, value))
        return self

    def by_not_tag(self, key: str, value: Optional[str]) -> "MemoryFilter":
        self._constraints.append(TagConstraint(key, value, negate=True))
        return self

    def is_empty(self) -> bool:
        return not self._constraints

    def get_filters(self) -> List[TagConstraint]:
        return list(self._constraints)

    def __repr__(self) -> str:
        return f"MemoryFilter({self._constraints!r})"


class MemoryFilters:
    """Shortcuts to start a filter chain"""

    @staticmethod
    def by_tag(key: str, value: Optional[str]) -> MemoryFilter:
        return MemoryFilter().by_tag(key, value)

    @staticmethod
    def by_not_tag(key: str, value: Optional[str]) -> MemoryFilter:
        return MemoryFilter().by_not_tag(key, value)
