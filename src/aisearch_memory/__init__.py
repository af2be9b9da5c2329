"""
aisearch-memory - Vector memory storage on Azure AI Search

This package provides:
- Index management from a storage-agnostic schema
- Batched upserts and idempotent deletes of memory records
- Vector and hybrid similarity search with tag filters
- Relevance scores normalized to cosine similarity

Quick Start:
    from aisearch_memory import AzureAISearchConfig, MemoryFilters, get_azure_ai_search_memory

    AzureAISearchMemory = get_azure_ai_search_memory()
    async with AzureAISearchMemory(AzureAISearchConfig.from_env(), embedder) as memory:
        await memory.create_index("notes", vector_size=384)
        async for record, relevance in memory.get_similar_list(
                "notes", "how does auth work", filters=[MemoryFilters.by_tag("user", "ann")], limit=5):
            print(record.id, relevance)
"""

from typing import TYPE_CHECKING

# Core types - lightweight, always available
from .core.models import MemoryRecord, TagCollection, MemoryFilter, MemoryFilters
from .core.schema import MemoryDbSchema, MemoryDbField, FieldType, VectorMetricType
from .core.memory_db import MemoryDb
from .core.embedder import Embedder
from .core.relevance import score_to_cosine_similarity, cosine_similarity_to_score
from .core.errors import (
    AISearchMemoryError,
    ConfigurationError,
    InvalidArgumentError,
    InvalidSchemaError,
    IndexNotFoundError,
    AzureAISearchMemoryError,
    UnsupportedFieldTypeError,
    UnsupportedVectorMetricError,
)

# Configuration
from .config.search import AzureAISearchConfig

# Type hints only - not imported at runtime for faster startup
if TYPE_CHECKING:
    from .storage.azure_ai_search import AzureAISearchMemory
    from .embedding.sentence_transformer import SentenceTransformerEmbedder


# Lazy loaders for heavy modules
def get_azure_ai_search_memory():
    """Lazy import of AzureAISearchMemory (loads the Azure SDK)"""
    from .storage.azure_ai_search import AzureAISearchMemory
    return AzureAISearchMemory


def get_sentence_transformer_embedder():
    """Lazy import of SentenceTransformerEmbedder (loads PyTorch)"""
    from .embedding.sentence_transformer import SentenceTransformerEmbedder
    return SentenceTransformerEmbedder


_LAZY_ATTRIBUTES = {
    "AzureAISearchMemory": get_azure_ai_search_memory,
    "SentenceTransformerEmbedder": get_sentence_transformer_embedder,
}


def __getattr__(name):
    """Module-level __getattr__ for lazy loading"""
    if name in _LAZY_ATTRIBUTES:
        return _LAZY_ATTRIBUTES[name]()
    raise AttributeError(f"module 'aisearch_memory' has no attribute '{name}'")


__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",

    # Core types
    "MemoryRecord", "TagCollection", "MemoryFilter", "MemoryFilters",
    "MemoryDbSchema", "MemoryDbField", "FieldType", "VectorMetricType",
    "MemoryDb", "Embedder",
    "score_to_cosine_similarity", "cosine_similarity_to_score",

    # Errors
    "AISearchMemoryError", "ConfigurationError", "InvalidArgumentError",
    "InvalidSchemaError", "IndexNotFoundError", "AzureAISearchMemoryError",
    "UnsupportedFieldTypeError", "UnsupportedVectorMetricError",

    # Configuration
    "AzureAISearchConfig",

    # Lazy-loaded (use get_* functions for explicit loading)
    "get_azure_ai_search_memory",
    "get_sentence_transformer_embedder",
    "AzureAISearchMemory", "SentenceTransformerEmbedder",
]
