"""
Memory Database Interface implemented by every memory storage backend
"""

from abc import ABC, abstractmethod
from typing import AsyncIterator, Iterable, List, Optional, Sequence, Tuple

from .models import MemoryFilter, MemoryRecord


class MemoryDb(ABC):
    """
    Abstract interface for vector memory storage.

    All operations are coroutines or async generators. Cancelling the
    awaiting task aborts the operation at its next I/O step.
    """

    @abstractmethod
    async def create_index(self, index: str, vector_size: int) -> None:
        """Create an index, doing nothing if it already exists"""
        pass

    @abstractmethod
    async def get_indexes(self) -> List[str]:
        """List the names of the existing indexes"""
        pass

    @abstractmethod
    async def delete_index(self, index: str) -> None:
        """Delete an index and all its records"""
        pass

    @abstractmethod
    async def upsert(self, index: str, record: MemoryRecord) -> str:
        """Insert or replace a record, returning its ID"""
        pass

    @abstractmethod
    def upsert_batch(self, index: str, records: Iterable[MemoryRecord]) -> AsyncIterator[str]:
        """Insert or replace many records, yielding their IDs in input order"""
        pass

    @abstractmethod
    def get_similar_list(
        self,
        index: str,
        text: str,
        filters: Optional[Sequence[MemoryFilter]] = None,
        min_relevance: float = 0.0,
        limit: int = 1,
        with_embeddings: bool = False,
    ) -> AsyncIterator[Tuple[MemoryRecord, float]]:
        """Yield records similar to ``text`` paired with their relevance"""
        pass

    @abstractmethod
    def get_list(
        self,
        index: str,
        filters: Optional[Sequence[MemoryFilter]] = None,
        limit: int = 1,
        with_embeddings: bool = False,
    ) -> AsyncIterator[MemoryRecord]:
        """Yield records matching the filters, without similarity ranking"""
        pass

    @abstractmethod
    async def delete(self, index: str, record: MemoryRecord) -> None:
        """Delete a record; deleting a missing record is not an error"""
        pass
