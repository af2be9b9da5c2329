"""Azure AI Search storage for aisearch-memory"""

from typing import TYPE_CHECKING

from .clients import SearchClientRegistry
from .filtering import build_search_filter
from .index_names import normalize_index_name

# The connector and schema compiler load the Azure SDK, import them on first use
if TYPE_CHECKING:
    from .azure_ai_search import AzureAISearchMemory
    from .index_schema import compile_index_schema


def __getattr__(name):
    """Module-level __getattr__ for lazy loading"""
    if name == "AzureAISearchMemory":
        from .azure_ai_search import AzureAISearchMemory
        return AzureAISearchMemory
    if name == "compile_index_schema":
        from .index_schema import compile_index_schema
        return compile_index_schema
    raise AttributeError(f"module 'aisearch_memory.storage' has no attribute '{name}'")


__all__ = [
    "AzureAISearchMemory",
    "SearchClientRegistry",
    "build_search_filter",
    "normalize_index_name",
    "compile_index_schema",
]
