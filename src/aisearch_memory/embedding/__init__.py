"""Embedding implementations for aisearch-memory"""

from .sentence_transformer import SentenceTransformerEmbedder

__all__ = ["SentenceTransformerEmbedder"]
