"""Core interfaces and data models for aisearch-memory"""

from .models import MemoryRecord, TagCollection, TagConstraint, MemoryFilter, MemoryFilters
from .schema import MemoryDbSchema, MemoryDbField, FieldType, VectorMetricType
from .memory_db import MemoryDb
from .embedder import Embedder
from .relevance import score_to_cosine_similarity, cosine_similarity_to_score
from .errors import (
    AISearchMemoryError,
    ConfigurationError,
    InvalidArgumentError,
    InvalidSchemaError,
    IndexNotFoundError,
    AzureAISearchMemoryError,
    UnsupportedFieldTypeError,
    UnsupportedVectorMetricError,
)

__all__ = [
    "MemoryRecord", "TagCollection", "TagConstraint", "MemoryFilter", "MemoryFilters",
    "MemoryDbSchema", "MemoryDbField", "FieldType", "VectorMetricType",
    "MemoryDb", "Embedder",
    "score_to_cosine_similarity", "cosine_similarity_to_score",
    "AISearchMemoryError", "ConfigurationError", "InvalidArgumentError",
    "InvalidSchemaError", "IndexNotFoundError", "AzureAISearchMemoryError",
    "UnsupportedFieldTypeError", "UnsupportedVectorMetricError",
]
