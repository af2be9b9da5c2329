"""
Storage-agnostic index schema.

A schema is built once per index type by the caller and is only consumed
when an index is created; the connector never persists it.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from .errors import InvalidSchemaError


class FieldType(str, Enum):
    """
    Type of a schema field.

    - VECTOR: fixed-length array of floats used for similarity search
    - TEXT: string
    - INTEGER: 64-bit integer
    - DECIMAL: double precision number
    - BOOL: boolean
    - LIST_OF_STRINGS: collection of strings, e.g. serialized tags
    """
    UNKNOWN = "unknown"
    VECTOR = "vector"
    TEXT = "text"
    INTEGER = "integer"
    DECIMAL = "decimal"
    BOOL = "bool"
    LIST_OF_STRINGS = "list_of_strings"


class VectorMetricType(str, Enum):
    """Distance metric configured on a vector field"""
    UNKNOWN = "unknown"
    COSINE = "cosine"
    EUCLIDEAN = "euclidean"
    DOT_PRODUCT = "dot_product"


@dataclass
class MemoryDbField:
    """A single field of a memory index schema"""
    name: str
    type: FieldType = FieldType.UNKNOWN
    is_key: bool = False
    is_filterable: bool = False
    vector_size: int = 0
    vector_metric: VectorMetricType = VectorMetricType.COSINE


@dataclass
class MemoryDbSchema:
    """Ordered list of fields describing a memory index"""
    fields: List[MemoryDbField] = field(default_factory=list)

    def validate(self, vector_size_required: bool = False) -> None:
        """
        Check the schema is usable for index creation.

        Args:
            vector_size_required: Whether the vector field must declare a positive size

        Raises:
            InvalidSchemaError: If the schema has no fields, more or less than one
                vector field, more or less than one key field, or a missing vector size
        """
        if not self.fields:
            raise InvalidSchemaError("The schema cannot be empty")

        vector_fields = [f for f in self.fields if f.type == FieldType.VECTOR]
        if len(vector_fields) != 1:
            raise InvalidSchemaError(
                f"The schema must contain exactly one vector field, found {len(vector_fields)}")

        key_fields = [f for f in self.fields if f.is_key]
        if len(key_fields) != 1:
            raise InvalidSchemaError(
                f"The schema must contain exactly one key field, found {len(key_fields)}")

        if vector_size_required and vector_fields[0].vector_size <= 0:
            raise InvalidSchemaError(
                f"The vector field '{vector_fields[0].name}' requires a positive vector size")

