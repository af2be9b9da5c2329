"""
Sentence Transformer Embedder

Local embedding generator for the memory connector, using the
sentence-transformers library.
"""

import logging
from typing import List, Optional
from sentence_transformers import SentenceTransformer

from ..core.embedder import Embedder

logger = logging.getLogger(__name__)


class SentenceTransformerEmbedder(Embedder):
    """
    SentenceTransformer-based implementation of Embedder.

    Errors raised by the model propagate to the caller, so a failed
    embedding never turns into a zero vector sent to the search service.
    """

    def __init__(self,
                 model_name: str = "all-MiniLM-L6-v2",
                 device: Optional[str] = None,
                 cache_folder: Optional[str] = None):
        """
        Initialize the sentence transformer embedder

        Args:
            model_name: Name of the sentence transformer model
            device: 'cpu', 'cuda', 'mps', or None to auto-detect
            cache_folder: Folder to cache downloaded models
        """
        self.model_name = model_name

        logger.info(f"Loading sentence transformer model: {model_name} on device: {device or 'auto'}")
        self.model = SentenceTransformer(model_name, device=device, cache_folder=cache_folder)
        logger.info(f"Model loaded on {self.model.device}. Embedding dimension: {self.get_dimension()}")

    def generate(self, text: str) -> List[float]:
        """
        Generate embedding for a single text

        Args:
            text: Text to embed

        Returns:
            List of floats representing the embedding
        """
        embedding = self.model.encode(text, convert_to_numpy=True, show_progress_bar=False)
        return embedding.tolist()

    def generate_batch(self, texts: List[str], batch_size: int = 32) -> List[List[float]]:
        if not texts:
            return []
        embeddings = self.model.encode(texts, convert_to_numpy=True, batch_size=batch_size, show_progress_bar=False)
        return [embedding.tolist() for embedding in embeddings]

    def get_dimension(self) -> int:
        """Embedding size, i.e. the vector size to use when creating indexes"""
        return self.model.get_sentence_embedding_dimension()
