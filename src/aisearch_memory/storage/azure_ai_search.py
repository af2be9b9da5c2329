"""
Azure AI Search Memory Implementation

Stores memory records in Azure AI Search indexes and serves vector and hybrid
similarity search over them.

Not-found errors on read paths yield an empty stream when raised before the
first result, and make delete a no-op. Writes surface them as
IndexNotFoundError. Every other service error propagates unchanged; retries
are left to the SDK pipeline.
"""

import logging
import uuid
from typing import Any, AsyncIterator, Dict, Iterable, List, Optional, Sequence, Tuple

from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import HttpResponseError
from azure.search.documents import IndexDocumentsBatch
from azure.search.documents.indexes.aio import SearchIndexClient
from azure.search.documents.models import VectorFilterMode, VectorizedQuery

from ..config.search import AzureAISearchConfig
from ..core.errors import (
    AzureAISearchMemoryError,
    ConfigurationError,
    IndexNotFoundError,
    InvalidArgumentError,
)
from ..core.memory_db import MemoryDb
from ..core.models import MemoryFilter, MemoryRecord
from ..core.relevance import cosine_similarity_to_score, score_to_cosine_similarity
from ..core.schema import MemoryDbSchema
from .clients import SearchClientRegistry
from .filtering import build_search_filter
from .index_names import normalize_index_name
from .index_schema import compile_index_schema
from .records import (
    ID_FIELD,
    PAYLOAD_FIELD,
    TAGS_FIELD,
    VECTOR_FIELD,
    decode_id,
    encode_id,
    from_document,
    get_schema,
    to_document,
)

logger = logging.getLogger(__name__)

SCORE_FIELD = "@search.score"

# Engines reject vector fields with less than 2 dimensions
MIN_VECTOR_SIZE = 2


def _is_not_found(e: HttpResponseError) -> bool:
    return e.status_code == 404


def _is_index_not_found(e: HttpResponseError) -> bool:
    message = (e.message or str(e)).lower()
    return _is_not_found(e) and "index" in message and "not found" in message


class AzureAISearchMemory(MemoryDb):
    """
    Azure AI Search implementation of MemoryDb.

    When hybrid search is enabled, similarity results carry the service's
    fused keyword+vector score instead of a cosine similarity, and
    ``min_relevance`` is compared against that score as is.
    """

    def __init__(self,
                 config: AzureAISearchConfig,
                 embedder: Any,
                 credential: Optional[Any] = None,
                 index_client: Optional[SearchIndexClient] = None):
        """
        Initialize the connector

        Args:
            config: Endpoint, key and query settings
            embedder: Object exposing ``async generate_embedding(text)``
            credential: Optional azure-core credential used instead of the API key
            index_client: Prebuilt admin client, mostly useful for tests

        Raises:
            ConfigurationError: If the endpoint, the key/credential or the embedder is missing
        """
        if embedder is None:
            logger.critical("Azure AI Search embedding generator is not configured")
            raise ConfigurationError("Azure AI Search: embedding generator is not configured")

        config.validate(has_credential=credential is not None or index_client is not None)

        self._embedder = embedder
        self._use_hybrid_search = config.use_hybrid_search
        self._use_sticky_sessions = config.use_sticky_sessions
        self._exhaustive_vector_search = config.exhaustive_vector_search

        if index_client is None:
            index_client = SearchIndexClient(
                config.endpoint,
                credential if credential is not None else AzureKeyCredential(config.api_key),
                **self._client_options(config, credential)
            )
        self._admin_client = index_client
        self._clients = SearchClientRegistry(self._admin_client.get_search_client)

    @staticmethod
    def _client_options(config: AzureAISearchConfig, credential: Optional[Any]) -> Dict[str, Any]:
        options: Dict[str, Any] = {"user_agent": config.user_agent}
        # Custom audience for sovereign clouds, only meaningful with token credentials
        if credential is not None and config.audience and config.audience.strip():
            options["audience"] = config.audience
        return options

    async def close(self) -> None:
        """Close the admin client and every cached search client"""
        for client in self._clients.clear():
            await client.close()
        await self._admin_client.close()

    async def __aenter__(self) -> "AzureAISearchMemory":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    # =========================================================================
    # Index Operations
    # =========================================================================

    async def create_index(self, index: str, vector_size: int) -> None:
        """
        Create an index with the default memory schema.

        Creating an existing index is a no-op.
        """
        vector_size = max(MIN_VECTOR_SIZE, vector_size)
        await self.create_index_with_schema(index, get_schema(vector_size))

    async def create_index_with_schema(self, index: str, schema: MemoryDbSchema) -> None:
        """
        Create an index from an abstract schema.

        Raises:
            InvalidArgumentError: If the index name is invalid
            InvalidSchemaError, UnsupportedFieldTypeError, UnsupportedVectorMetricError:
                If the schema cannot be compiled, before any request is sent
        """
        index_schema = compile_index_schema(index, schema)

        if await self._index_exists(index_schema.name):
            logger.debug(f"Index '{index_schema.name}' already exists")
            return

        try:
            await self._admin_client.create_index(index_schema)
            logger.info(f"Created index '{index_schema.name}'")
        except HttpResponseError as e:
            if e.status_code != 409:
                raise
            logger.warning(f"Index already exists, nothing to do: {e.message}")

    async def _index_exists(self, normalized_index: str) -> bool:
        expected = normalized_index.casefold()
        async for name in self._admin_client.list_index_names():
            if name is not None and name.casefold() == expected:
                return True
        return False

    async def get_indexes(self) -> List[str]:
        return [name async for name in self._admin_client.list_index_names()]

    async def delete_index(self, index: str) -> None:
        index = normalize_index_name(index)
        await self._admin_client.delete_index(index)
        logger.info(f"Deleted index '{index}'")

    # =========================================================================
    # Record Operations
    # =========================================================================

    async def upsert(self, index: str, record: MemoryRecord) -> str:
        ids = [record_id async for record_id in self.upsert_batch(index, [record])]
        return ids[0]

    async def upsert_batch(self, index: str, records: Iterable[MemoryRecord]) -> AsyncIterator[str]:
        """
        Upload records in a single batch.

        The batch fails as a whole if any document fails. IDs are yielded
        after the upload succeeds, one per input record and in input order.

        Raises:
            IndexNotFoundError: If the index does not exist
            AzureAISearchMemoryError: If any document in the batch was rejected
        """
        client = self._clients.get_client(index)
        records = list(records)
        if not records:
            return

        batch = IndexDocumentsBatch()
        batch.add_upload_actions([to_document(record) for record in records])

        try:
            results = await client.index_documents(batch)
        except HttpResponseError as e:
            if _is_index_not_found(e):
                raise IndexNotFoundError(e.message) from e
            raise

        failed = [decode_id(result.key) for result in results if not result.succeeded]
        if failed:
            raise AzureAISearchMemoryError(
                f"Failed to upload {len(failed)} of {len(records)} records to index '{index}': {', '.join(failed)}")

        logger.debug(f"Uploaded {len(records)} records to index '{index}'")
        for record in records:
            yield record.id

    async def delete(self, index: str, record: MemoryRecord) -> None:
        document_id = encode_id(record.id)
        client = self._clients.get_client(index)

        try:
            logger.debug(f"Deleting record {record.id} from index {index}")
            results = await client.delete_documents(documents=[{ID_FIELD: document_id}])
            for result in results:
                logger.debug(f"Delete result for {result.key}: status {result.status_code}")
        except HttpResponseError as e:
            if not _is_not_found(e):
                raise
            logger.debug(f"Index {index} record {record.id} not found, nothing to delete")

    # =========================================================================
    # Search Operations
    # =========================================================================

    async def get_similar_list(
        self,
        index: str,
        text: str,
        filters: Optional[Sequence[MemoryFilter]] = None,
        min_relevance: float = 0.0,
        limit: int = 1,
        with_embeddings: bool = False,
    ) -> AsyncIterator[Tuple[MemoryRecord, float]]:
        """
        Yield records similar to ``text``, most relevant first.

        Filters narrow the candidates before the vector comparison. Results
        below ``min_relevance`` are skipped, and iteration stops after
        ``limit`` results even if the service has more (``limit <= 0`` means
        no cap). Searching a missing index yields nothing.

        Yields:
            (record, relevance) where relevance is a cosine similarity, or the
            raw hybrid score when hybrid search is enabled

        Raises:
            InvalidArgumentError: If ``min_relevance`` is outside [-1, 1] in vector mode
        """
        if self._use_hybrid_search:
            min_score = min_relevance
        elif -1.0 <= min_relevance <= 1.0:
            min_score = cosine_similarity_to_score(min_relevance)
        else:
            raise InvalidArgumentError(f"min_relevance must be a cosine similarity in [-1, 1], got {min_relevance}")

        client = self._clients.get_client(index)

        embedding = await self._embedder.generate_embedding(text)
        vector_query = VectorizedQuery(
            vector=list(embedding),
            fields=VECTOR_FIELD,
            # Exhaustive search ignores the HNSW graph and compares every vector
            exhaustive=self._exhaustive_vector_search,
        )
        if limit > 0:
            vector_query.k_nearest_neighbors = limit
            logger.debug(f"KNearestNeighborsCount: {limit}")

        options = self._prepare_search_options(with_embeddings, filters, limit)

        count = 0
        try:
            results = await client.search(
                search_text=text if self._use_hybrid_search else None,
                vector_queries=[vector_query],
                vector_filter_mode=VectorFilterMode.PRE_FILTER,
                **options
            )
            async for document in results:
                if document is None:
                    continue

                score = document.get(SCORE_FIELD) or 0.0
                if score < min_score:
                    continue

                record = from_document(document, with_embeddings)
                relevance = score if self._use_hybrid_search else score_to_cosine_similarity(score)
                yield record, relevance

                # Stop after returning the amount requested, even if the service returns more
                count += 1
                if 0 < limit <= count:
                    break
        except HttpResponseError as e:
            # Only a missing index before the first result means an empty stream
            if count or not _is_not_found(e):
                raise
            logger.warning(f"Not found: {e.message}")

    async def get_list(
        self,
        index: str,
        filters: Optional[Sequence[MemoryFilter]] = None,
        limit: int = 1,
        with_embeddings: bool = False,
    ) -> AsyncIterator[MemoryRecord]:
        """
        Yield records matching the filters, without vector ranking.

        Listing a missing index yields nothing.
        """
        client = self._clients.get_client(index)
        options = self._prepare_search_options(with_embeddings, filters, limit)

        count = 0
        try:
            results = await client.search(search_text=None, **options)
            async for document in results:
                if document is None:
                    continue

                yield from_document(document, with_embeddings)

                count += 1
                if 0 < limit <= count:
                    break
        except HttpResponseError as e:
            # Only a missing index before the first result means an empty stream
            if count or not _is_not_found(e):
                raise
            logger.warning(f"Not found: {e.message}")

    def _prepare_search_options(
        self,
        with_embeddings: bool,
        filters: Optional[Sequence[MemoryFilter]] = None,
        limit: int = 1,
    ) -> Dict[str, Any]:
        # Vectors are only selected when requested
        select = [ID_FIELD, TAGS_FIELD, PAYLOAD_FIELD]
        if with_embeddings:
            select.append(VECTOR_FIELD)

        options: Dict[str, Any] = {"select": select}

        search_filter = build_search_filter(filters)
        if search_filter:
            options["filter"] = search_filter
            logger.debug(f"Filtering vectors, condition: {search_filter}")

        if limit > 0:
            options["top"] = limit
            logger.debug(f"Max results: {limit}")

        if self._use_sticky_sessions:
            options["session_id"] = uuid.uuid4().hex

        return options
