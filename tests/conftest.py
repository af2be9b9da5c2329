"""
Shared fakes for the Azure AI Search SDK clients.

The fakes record every call so tests can assert on the requests the
connector builds, and serve canned documents through lazy async iterators.
"""

import sys
import os
from types import SimpleNamespace
from typing import Any, Dict, List, Optional

# Add src to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

import pytest
from azure.core.exceptions import HttpResponseError

from aisearch_memory.config.search import AzureAISearchConfig


def make_http_error(status_code: int, message: str) -> HttpResponseError:
    """Build a service error with the given status, as raised by the SDK"""
    error = HttpResponseError(message=message)
    error.status_code = status_code
    return error


class FakeEmbedder:
    """Returns a fixed embedding and records the texts it was asked to embed"""

    def __init__(self, vector: Optional[List[float]] = None):
        self.vector = vector or [0.1, 0.2, 0.3]
        self.calls: List[str] = []

    async def generate_embedding(self, text: str) -> List[float]:
        self.calls.append(text)
        return list(self.vector)


class FakeSearchResults:
    """Lazy async iterator over documents, counting how many were pulled"""

    def __init__(self, documents: List[Dict[str, Any]], error: Optional[Exception] = None, error_at: int = 0):
        self._documents = documents
        self._error = error
        self._error_at = error_at
        self.consumed = 0

    def __aiter__(self):
        return self

    async def __anext__(self) -> Dict[str, Any]:
        if self._error is not None and self.consumed >= self._error_at:
            raise self._error
        if self.consumed >= len(self._documents):
            raise StopAsyncIteration
        document = self._documents[self.consumed]
        self.consumed += 1
        return document


def _action_document(action) -> Dict[str, Any]:
    """Document carried by an upload action, on 11.x models and 12.x mapping models alike"""
    document = getattr(action, "additional_properties", None)
    if document is None:
        document = {key: value for key, value in action.items() if key != "@search.action"}
    return dict(document)


class FakeSearchClient:
    """Per-index client: search, upload and delete"""

    def __init__(self, index_name: str):
        self.index_name = index_name
        self.documents: List[Dict[str, Any]] = []
        self.search_error: Optional[Exception] = None
        # Number of documents served before search_error is raised
        self.search_error_at = 0
        self.index_error: Optional[Exception] = None
        self.delete_error: Optional[Exception] = None
        self.failed_keys: List[str] = []
        self.search_calls: List[Dict[str, Any]] = []
        self.uploaded_batches: List[List[Dict[str, Any]]] = []
        self.deleted: List[Dict[str, Any]] = []
        self.last_results: Optional[FakeSearchResults] = None
        self.closed = False

    async def search(self, search_text=None, **kwargs) -> FakeSearchResults:
        self.search_calls.append(dict(kwargs, search_text=search_text))
        # Errors surface when the first page is fetched, like the SDK pager
        self.last_results = FakeSearchResults(self.documents, self.search_error, self.search_error_at)
        return self.last_results

    async def index_documents(self, batch, **kwargs):
        if self.index_error is not None:
            raise self.index_error
        documents = [_action_document(action) for action in batch.actions]
        self.uploaded_batches.append(documents)
        return [
            SimpleNamespace(key=document["id"], succeeded=document["id"] not in self.failed_keys,
                            status_code=201)
            for document in documents
        ]

    async def delete_documents(self, documents, **kwargs):
        if self.delete_error is not None:
            raise self.delete_error
        self.deleted.extend(documents)
        return [SimpleNamespace(key=d["id"], succeeded=True, status_code=200) for d in documents]

    async def close(self) -> None:
        self.closed = True


class _AsyncNames:
    def __init__(self, names: List[str]):
        self._names = iter(list(names))

    def __aiter__(self):
        return self

    async def __anext__(self) -> str:
        try:
            return next(self._names)
        except StopIteration:
            raise StopAsyncIteration


class FakeIndexClient:
    """Admin client: index CRUD and search client factory"""

    def __init__(self, index_names: Optional[List[str]] = None):
        self.index_names: List[str] = list(index_names or [])
        self.created: List[Any] = []
        self.deleted: List[str] = []
        self.create_error: Optional[Exception] = None
        self.search_clients: Dict[str, FakeSearchClient] = {}
        self.factory_calls: List[str] = []
        self.closed = False

    def get_search_client(self, index_name: str) -> FakeSearchClient:
        self.factory_calls.append(index_name)
        client = self.search_clients.get(index_name)
        if client is None:
            client = FakeSearchClient(index_name)
            self.search_clients[index_name] = client
        return client

    def list_index_names(self) -> _AsyncNames:
        return _AsyncNames(self.index_names)

    async def create_index(self, index):
        if self.create_error is not None:
            raise self.create_error
        self.created.append(index)
        self.index_names.append(index.name)
        return index

    async def delete_index(self, index_name: str) -> None:
        self.deleted.append(index_name)

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def config():
    return AzureAISearchConfig(endpoint="https://test.search.windows.net", api_key="secret")


@pytest.fixture
def embedder():
    return FakeEmbedder()


@pytest.fixture
def index_client():
    return FakeIndexClient()
