"""Configuration classes for aisearch-memory"""

from .search import AzureAISearchConfig

__all__ = ["AzureAISearchConfig"]
