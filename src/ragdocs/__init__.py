"""
ragdocs - Documentation Queue Ingestion

Drains a file-backed queue of documentation URLs into a Qdrant vector
collection, embedding page content through the OpenAI embeddings API.
"""

__version__ = "1.0.0"

from .core.environment_manager import EnvironmentManager
from .core.queue_processor import QueueProcessor
from .core.queue_store import QueueStore
from .models.config_models import RagDocsConfig

__all__ = [
    "EnvironmentManager",
    "QueueProcessor",
    "QueueStore",
    "RagDocsConfig",
]
