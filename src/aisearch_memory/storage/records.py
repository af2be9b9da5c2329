"""
Mapping between MemoryRecord and Azure AI Search documents
"""

import base64
import json
import logging
from typing import Any, Dict, List

from ..core.errors import InvalidArgumentError
from ..core.models import MemoryRecord, TagCollection, TAG_SEPARATOR
from ..core.schema import FieldType, MemoryDbField, MemoryDbSchema, VectorMetricType

logger = logging.getLogger(__name__)

ID_FIELD = "id"
VECTOR_FIELD = "vector"
TAGS_FIELD = "tags"
PAYLOAD_FIELD = "payload"


def get_schema(vector_size: int) -> MemoryDbSchema:
    """Default schema used for memory indexes"""
    return MemoryDbSchema(fields=[
        MemoryDbField(name=ID_FIELD, type=FieldType.TEXT, is_key=True),
        MemoryDbField(name=VECTOR_FIELD, type=FieldType.VECTOR,
                      vector_size=vector_size, vector_metric=VectorMetricType.COSINE),
        MemoryDbField(name=TAGS_FIELD, type=FieldType.LIST_OF_STRINGS, is_filterable=True),
        MemoryDbField(name=PAYLOAD_FIELD, type=FieldType.TEXT, is_filterable=False),
    ])


def encode_id(record_id: str) -> str:
    """Document keys only accept letters, digits, '-', '_' and '='"""
    return base64.urlsafe_b64encode(record_id.encode("utf-8")).decode("ascii")


def decode_id(document_id: str) -> str:
    return base64.urlsafe_b64decode(document_id.encode("ascii")).decode("utf-8")


def encode_tag(key: str, value: Any) -> str:
    """
    Flatten a tag to "key:value".

    Raises:
        InvalidArgumentError: If the key contains the separator
    """
    if TAG_SEPARATOR in key:
        raise InvalidArgumentError(f"Tag key '{key}' cannot contain '{TAG_SEPARATOR}'")
    return f"{key}{TAG_SEPARATOR}{'' if value is None else value}"


def to_document(record: MemoryRecord) -> Dict[str, Any]:
    """Convert a record to the document uploaded to the index"""
    return {
        ID_FIELD: encode_id(record.id),
        VECTOR_FIELD: [float(x) for x in record.vector],
        TAGS_FIELD: [encode_tag(key, value) for key, value in record.tags.pairs()],
        PAYLOAD_FIELD: json.dumps(record.payload),
    }


def from_document(document: Dict[str, Any], with_embeddings: bool = False) -> MemoryRecord:
    """
    Rebuild a record from a search result document.

    Args:
        document: Document as returned by the search client
        with_embeddings: Whether to copy the vector into the record

    Returns:
        MemoryRecord; its vector is empty unless embeddings were requested
    """
    tags = TagCollection()
    for tag in document.get(TAGS_FIELD) or []:
        key, _, value = tag.partition(TAG_SEPARATOR)
        tags.add(key, value)

    payload_json = document.get(PAYLOAD_FIELD)
    payload = json.loads(payload_json) if payload_json else {}

    vector: List[float] = []
    if with_embeddings:
        vector = list(document.get(VECTOR_FIELD) or [])

    return MemoryRecord(
        id=decode_id(document[ID_FIELD]),
        vector=vector,
        tags=tags,
        payload=payload,
    )
