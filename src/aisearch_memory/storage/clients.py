"""
Cache of per-index search clients.
"""

import logging
import threading
from typing import Callable, Dict, Generic, List, TypeVar

from .index_names import normalize_index_name

logger = logging.getLogger(__name__)

ClientT = TypeVar("ClientT")


class SearchClientRegistry(Generic[ClientT]):
    """
    Creates one search client per index and reuses it afterwards.

    Clients are keyed by normalized index name, so equivalent spellings of
    the same name share a client. The index might not exist: clients are not
    validated on creation, and a client for a deleted index simply starts
    returning not-found errors.

    Thread-safe: lookups and inserts happen under a lock, the client factory
    is never called twice for the same name.
    """

    def __init__(self, factory: Callable[[str], ClientT]):
        """
        Args:
            factory: Builds a client bound to a normalized index name
        """
        self._factory = factory
        self._clients: Dict[str, ClientT] = {}
        self._lock = threading.Lock()

    def get_client(self, index: str) -> ClientT:
        """
        Get the search client for an index, creating it on first use.

        Raises:
            InvalidArgumentError: If the index name is invalid
        """
        normalized = normalize_index_name(index)

        if index != normalized:
            logger.debug(f"Preparing search client, index name '{index}' normalized to '{normalized}'")
        else:
            logger.debug(f"Preparing search client, index name '{normalized}'")

        with self._lock:
            client = self._clients.get(normalized)
            if client is None:
                client = self._factory(normalized)
                self._clients[normalized] = client
        return client

    def clear(self) -> List[ClientT]:
        """Forget every cached client, returning them so they can be closed"""
        with self._lock:
            clients = list(self._clients.values())
            self._clients.clear()
        return clients

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    def __contains__(self, index: str) -> bool:
        normalized = normalize_index_name(index)
        with self._lock:
            return normalized in self._clients
