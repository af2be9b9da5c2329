"""
Exceptions raised by the Azure AI Search memory connector.
"""


class AISearchMemoryError(Exception):
    """Base exception for memory connector errors."""
    pass


class ConfigurationError(AISearchMemoryError):
    """Raised when connection settings or collaborators are missing or invalid."""
    pass


class InvalidArgumentError(AISearchMemoryError, ValueError):
    """Raised when a caller-supplied argument is malformed, e.g. an empty index name."""
    pass


class InvalidSchemaError(AISearchMemoryError):
    """Raised when a schema does not define exactly one vector field and one key field."""
    pass


class IndexNotFoundError(AISearchMemoryError):
    """Raised when writing to an index that does not exist."""
    pass


class AzureAISearchMemoryError(AISearchMemoryError):
    """Raised for errors specific to the Azure AI Search engine."""
    pass


class UnsupportedFieldTypeError(AzureAISearchMemoryError):
    """Raised when a schema field type has no engine counterpart."""
    pass


class UnsupportedVectorMetricError(AzureAISearchMemoryError):
    """Raised when the vector field uses a metric the engine cannot serve."""
    pass
