#!/usr/bin/env python3
"""
Basic usage example for aisearch-memory

This example demonstrates:
1. Loading the configuration from the environment
2. Creating an index sized for the local embedding model
3. Storing memories with tags
4. Similarity search and filtered listing

Requires AZURE_AI_SEARCH_ENDPOINT and AZURE_AI_SEARCH_API_KEY, and the
'embeddings' extra: pip install aisearch-memory[embeddings]
"""

import asyncio

from aisearch_memory import (
    AzureAISearchConfig,
    MemoryFilters,
    MemoryRecord,
    TagCollection,
    get_azure_ai_search_memory,
    get_sentence_transformer_embedder,
)

INDEX = "example-notes"

NOTES = [
    ("jwt", "Use JWT tokens for API authentication, no server-side session state", "decision"),
    ("retry", "The SDK retry policy already handles throttling, do not retry twice", "lesson"),
    ("cache", "Search clients are cached per index name", "lesson"),
]


async def main():
    config = AzureAISearchConfig.from_env()
    embedder = get_sentence_transformer_embedder()()
    AzureAISearchMemory = get_azure_ai_search_memory()

    async with AzureAISearchMemory(config, embedder) as memory:
        await memory.create_index(INDEX, embedder.get_dimension())

        # Store a few memories
        records = [
            MemoryRecord(
                id=note_id,
                vector=await embedder.generate_embedding(text),
                tags=TagCollection().add("type", note_type),
                payload={"text": text},
            )
            for note_id, text, note_type in NOTES
        ]
        async for record_id in memory.upsert_batch(INDEX, records):
            print(f"Stored {record_id}")

        # Search only lessons
        print("\n--- Searching lessons about retries ---")
        async for record, relevance in memory.get_similar_list(
                INDEX, "what about retrying requests?",
                filters=[MemoryFilters.by_tag("type", "lesson")],
                min_relevance=0.2, limit=3):
            print(f"{relevance:.3f}  {record.payload['text']}")

        # List decisions
        print("\n--- Decisions ---")
        async for record in memory.get_list(INDEX, filters=[MemoryFilters.by_tag("type", "decision")], limit=10):
            print(f"{record.id}: {record.payload['text']}")


if __name__ == "__main__":
    asyncio.run(main())
