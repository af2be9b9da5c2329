"""
Tests for mapping memory records to search documents and back.
"""

import json

import pytest

from aisearch_memory.core.errors import InvalidArgumentError
from aisearch_memory.core.models import MemoryRecord, TagCollection
from aisearch_memory.storage.records import (
    decode_id,
    encode_id,
    from_document,
    to_document,
)


def _record() -> MemoryRecord:
    tags = TagCollection()
    tags.add("user", "ann").add("user", "bob").add("type", "note")
    return MemoryRecord(
        id="doc/1 part:2",
        vector=[0.5, -0.25, 1.0],
        tags=tags,
        payload={"text": "hello", "url": "https://example.com/a?b=c"},
    )


class TestDocumentIds:

    @pytest.mark.parametrize("record_id", ["simple", "doc/1 part:2", "ünïcödé", "a+b=c", "?" * 40])
    def test_encoded_ids_use_key_safe_chars(self, record_id):
        encoded = encode_id(record_id)
        allowed = set("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_=")
        assert set(encoded) <= allowed
        assert decode_id(encoded) == record_id


class TestToDocument:

    def test_document_shape(self):
        document = to_document(_record())

        assert set(document) == {"id", "vector", "tags", "payload"}
        assert document["id"] == encode_id("doc/1 part:2")
        assert document["vector"] == [0.5, -0.25, 1.0]
        assert document["tags"] == ["user:ann", "user:bob", "type:note"]
        assert json.loads(document["payload"]) == {"text": "hello", "url": "https://example.com/a?b=c"}

    def test_key_without_values(self):
        record = MemoryRecord(id="1", tags=TagCollection().add("flag"))
        assert to_document(record)["tags"] == ["flag:"]

    def test_separator_in_key_from_constructor(self):
        record = MemoryRecord(id="1", tags=TagCollection({"a:b": ["c"]}))
        with pytest.raises(InvalidArgumentError):
            to_document(record)

    def test_separator_in_key_from_item_assignment(self):
        record = MemoryRecord(id="1", tags=TagCollection())
        record.tags["x:y"] = ["z"]
        with pytest.raises(InvalidArgumentError):
            to_document(record)

    def test_separator_in_key_from_update(self):
        record = MemoryRecord(id="1", tags=TagCollection())
        record.tags.update({"x:y": ["z"]})
        with pytest.raises(InvalidArgumentError):
            to_document(record)

    def test_separator_in_key_from_setdefault(self):
        record = MemoryRecord(id="1", tags=TagCollection())
        record.tags.setdefault("x:y", [])
        with pytest.raises(InvalidArgumentError):
            to_document(record)


class TestFromDocument:

    def test_restores_record(self):
        document = to_document(_record())
        document["@search.score"] = 0.8

        record = from_document(document, with_embeddings=True)

        assert record.id == "doc/1 part:2"
        assert record.vector == [0.5, -0.25, 1.0]
        assert record.tags == {"user": ["ann", "bob"], "type": ["note"]}
        assert record.payload["text"] == "hello"

    def test_embeddings_not_requested(self):
        record = from_document(to_document(_record()), with_embeddings=False)
        assert record.vector == []

    def test_tag_values_may_contain_separator(self):
        document = to_document(MemoryRecord(id="1"))
        document["tags"] = ["time:12:30"]

        record = from_document(document)
        assert record.tags == {"time": ["12:30"]}

    def test_missing_optional_fields(self):
        record = from_document({"id": encode_id("1")}, with_embeddings=True)

        assert record.id == "1"
        assert record.vector == []
        assert record.tags == {}
        assert record.payload == {}


class TestTagCollection:

    def test_rejects_separator_in_key(self):
        with pytest.raises(InvalidArgumentError):
            TagCollection().add("a:b", "c")

    def test_pairs(self):
        tags = TagCollection().add("a", "1").add("a", "2").add("b")
        assert list(tags.pairs()) == [("a", "1"), ("a", "2"), ("b", None)]
