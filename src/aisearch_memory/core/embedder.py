"""
Embedder Interface for the memory connector
"""

import asyncio
from abc import ABC, abstractmethod
from typing import List


class Embedder(ABC):
    """Abstract interface for embedding generation"""

    @abstractmethod
    def generate(self, text: str) -> List[float]:
        """Generate a single embedding for the given text"""
        pass

    @abstractmethod
    def generate_batch(self, texts: List[str]) -> List[List[float]]:
        """Generate embeddings for a batch of texts"""
        pass

    async def generate_embedding(self, text: str) -> List[float]:
        """Generate an embedding without blocking the event loop"""
        return await asyncio.to_thread(self.generate, text)
