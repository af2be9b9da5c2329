"""
Compiles a MemoryDbSchema into an Azure AI Search index definition.

Field attributes, see https://learn.microsoft.com/azure/search/search-what-is-an-index
- searchable: full-text searchable, subject to lexical analysis such as word-breaking
- filterable: string and string collection fields are not word-broken
- facetable/sortable: not needed by memory queries, and they add index cost
"""

import logging
from typing import Callable, Dict

from azure.search.documents.indexes.models import (
    HnswAlgorithmConfiguration,
    HnswParameters,
    SearchField,
    SearchFieldDataType,
    SearchIndex,
    VectorSearch,
    VectorSearchAlgorithmMetric,
    VectorSearchProfile,
)

from ..core.errors import UnsupportedFieldTypeError, UnsupportedVectorMetricError
from ..core.schema import FieldType, MemoryDbField, MemoryDbSchema, VectorMetricType
from .index_names import normalize_index_name

logger = logging.getLogger(__name__)

VECTOR_SEARCH_PROFILE_NAME = "memory-default-profile"
VECTOR_SEARCH_CONFIG_NAME = "memory-default-algorithm"

SUPPORTED_VECTOR_METRICS = (
    VectorMetricType.COSINE,
    VectorMetricType.EUCLIDEAN,
    VectorMetricType.DOT_PRODUCT,
)


def _vector_field(field: MemoryDbField) -> SearchField:
    return SearchField(
        name=field.name,
        type=SearchFieldDataType.Collection(SearchFieldDataType.Single),
        searchable=True,
        hidden=False,
        stored=True,
        vector_search_dimensions=field.vector_size,
        vector_search_profile_name=VECTOR_SEARCH_PROFILE_NAME,
    )


def _text_field(field: MemoryDbField) -> SearchField:
    # Queries with a search string fail with CannotSearchWithoutSearchableFields
    # when the index has no searchable string field, so text fields, key
    # included, are always searchable.
    return SearchField(
        name=field.name,
        type=SearchFieldDataType.String,
        key=field.is_key,
        searchable=True,
        filterable=field.is_key or field.is_filterable,
        facetable=False,
        sortable=False,
    )


def _scalar_field(data_type: str) -> Callable[[MemoryDbField], SearchField]:
    def build(field: MemoryDbField) -> SearchField:
        return SearchField(
            name=field.name,
            type=data_type,
            key=field.is_key,
            searchable=False,
            filterable=field.is_key or field.is_filterable,
            facetable=False,
            sortable=False,
        )
    return build


def _non_key_field(data_type: str) -> Callable[[MemoryDbField], SearchField]:
    def build(field: MemoryDbField) -> SearchField:
        return SearchField(
            name=field.name,
            type=data_type,
            key=False,
            searchable=False,
            filterable=field.is_filterable,
            facetable=False,
            sortable=False,
        )
    return build


_FIELD_BUILDERS: Dict[FieldType, Callable[[MemoryDbField], SearchField]] = {
    FieldType.VECTOR: _vector_field,
    FieldType.TEXT: _text_field,
    FieldType.INTEGER: _scalar_field(SearchFieldDataType.Int64),
    FieldType.DECIMAL: _scalar_field(SearchFieldDataType.Double),
    FieldType.BOOL: _non_key_field(SearchFieldDataType.Boolean),
    FieldType.LIST_OF_STRINGS: _non_key_field(SearchFieldDataType.Collection(SearchFieldDataType.String)),
}


def validate_schema(schema: MemoryDbSchema) -> None:
    """
    Raises:
        InvalidSchemaError: If the schema lacks a single vector or key field
        UnsupportedVectorMetricError: If the vector metric is not supported
    """
    schema.validate(vector_size_required=True)

    for field in schema.fields:
        if field.type == FieldType.VECTOR and field.vector_metric not in SUPPORTED_VECTOR_METRICS:
            raise UnsupportedVectorMetricError(f"Vector metric '{field.vector_metric}' not supported")


def compile_index_schema(index: str, schema: MemoryDbSchema) -> SearchIndex:
    """
    Build the Azure AI Search index definition for a schema.

    Vector search always uses an HNSW graph with cosine distance, shared by
    the vector field through a named profile. The vector field is added last
    so the portal shows scalar fields before the long list of numbers.

    Args:
        index: Index name, normalized before use
        schema: Abstract schema to compile

    Returns:
        SearchIndex ready to pass to SearchIndexClient.create_index

    Raises:
        InvalidSchemaError, UnsupportedFieldTypeError, UnsupportedVectorMetricError
    """
    validate_schema(schema)

    index_schema = SearchIndex(
        name=normalize_index_name(index),
        fields=[],
        vector_search=VectorSearch(
            profiles=[
                VectorSearchProfile(
                    name=VECTOR_SEARCH_PROFILE_NAME,
                    algorithm_configuration_name=VECTOR_SEARCH_CONFIG_NAME,
                )
            ],
            algorithms=[
                HnswAlgorithmConfiguration(
                    name=VECTOR_SEARCH_CONFIG_NAME,
                    parameters=HnswParameters(metric=VectorSearchAlgorithmMetric.COSINE),
                )
            ],
        ),
    )

    vector_field = None
    for field in schema.fields:
        builder = _FIELD_BUILDERS.get(field.type)
        if builder is None:
            raise UnsupportedFieldTypeError(f"Unsupported field type {field.type}")

        search_field = builder(field)
        if field.type == FieldType.VECTOR:
            vector_field = search_field
        else:
            index_schema.fields.append(search_field)

    index_schema.fields.append(vector_field)

    logger.debug(f"Compiled schema for index '{index_schema.name}' with {len(index_schema.fields)} fields")
    return index_schema
