"""
Configuration for the Azure AI Search memory connector
"""

import os
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any
from dataclasses import dataclass

from ..core.errors import ConfigurationError

logger = logging.getLogger(__name__)

_TRUE_VALUES = ('1', 'true', 'yes', 'on')


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


@dataclass
class AzureAISearchConfig:
    """Connection and query settings for Azure AI Search"""
    # Service endpoint, e.g. https://<service>.search.windows.net
    endpoint: str = ""

    # Admin API key. Leave empty when passing a token credential to the connector
    api_key: Optional[str] = None

    # Combine keyword and vector search. Hybrid scores are returned unconverted
    use_hybrid_search: bool = False

    # Ask the service to route queries to the same replica for consistent scores
    use_sticky_sessions: bool = False

    # Compare the query against every vector instead of using the HNSW graph
    exhaustive_vector_search: bool = False

    # Token audience for sovereign clouds, only used with token credentials
    audience: Optional[str] = None

    user_agent: str = "aisearch-memory"

    @classmethod
    def from_env(cls) -> 'AzureAISearchConfig':
        """Create config from environment variables"""
        return cls(
            endpoint=os.getenv("AZURE_AI_SEARCH_ENDPOINT", ""),
            api_key=os.getenv("AZURE_AI_SEARCH_API_KEY"),
            use_hybrid_search=_env_flag("AZURE_AI_SEARCH_HYBRID"),
            use_sticky_sessions=_env_flag("AZURE_AI_SEARCH_STICKY_SESSIONS"),
            exhaustive_vector_search=_env_flag("AZURE_AI_SEARCH_EXHAUSTIVE"),
            audience=os.getenv("AZURE_AI_SEARCH_AUDIENCE"),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'AzureAISearchConfig':
        """Create from dictionary"""
        return cls(
            endpoint=data.get('endpoint', ''),
            api_key=data.get('api_key'),
            use_hybrid_search=data.get('use_hybrid_search', False),
            use_sticky_sessions=data.get('use_sticky_sessions', False),
            exhaustive_vector_search=data.get('exhaustive_vector_search', False),
            audience=data.get('audience'),
            user_agent=data.get('user_agent', 'aisearch-memory'),
        )

    @classmethod
    def from_file(cls, config_path: str) -> 'AzureAISearchConfig':
        """Load configuration from a JSON or YAML file"""
        config_path = Path(config_path)

        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")

        with open(config_path, 'r', encoding='utf-8') as f:
            content = f.read()

        if config_path.suffix in ('.yaml', '.yml'):
            try:
                import yaml
            except ImportError:
                raise ImportError("PyYAML is required to load YAML config files. Install with: pip install pyyaml")
            data = yaml.safe_load(content) or {}
        else:
            data = json.loads(content)

        logger.debug(f"Loaded Azure AI Search configuration from: {config_path}")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization. The API key is never included."""
        return {
            'endpoint': self.endpoint,
            'use_hybrid_search': self.use_hybrid_search,
            'use_sticky_sessions': self.use_sticky_sessions,
            'exhaustive_vector_search': self.exhaustive_vector_search,
            'audience': self.audience,
            'user_agent': self.user_agent,
        }

    def validate(self, has_credential: bool = False) -> None:
        """
        Check the settings needed to build a client.

        Args:
            has_credential: Whether the caller supplies a token credential

        Raises:
            ConfigurationError: If the endpoint is empty, or no API key and no
                credential are available
        """
        if not self.endpoint or not self.endpoint.strip():
            logger.critical("Azure AI Search endpoint is empty")
            raise ConfigurationError("Azure AI Search: endpoint is empty")

        if not has_credential and not (self.api_key and self.api_key.strip()):
            logger.critical("Azure AI Search API key is empty and no credential was provided")
            raise ConfigurationError("Azure AI Search: api_key is empty and no credential was provided")
