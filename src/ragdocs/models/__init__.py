"""
Data models, configuration models and exception types for ragdocs.
"""

from .config_models import (
    CollectionConfig,
    ConsumptionPolicy,
    EmbeddingConfig,
    QueueConfig,
    RagDocsConfig,
    VectorStoreConfig,
)
from .error_models import (
    ConfigurationError,
    EmbeddingError,
    EmbeddingRetrievalError,
    EmbeddingUnavailableError,
    IngestionError,
    InvalidEmbeddingResponseError,
    RagDocsError,
    VectorStoreAuthenticationError,
    VectorStoreConnectionError,
    VectorStoreError,
    VectorStoreInitializationError,
)
from .queue_models import (
    BatchResult,
    DrainState,
    IngestionFailure,
    IngestionOutcome,
    IngestionSuccess,
    OperationResponse,
)

__all__ = [
    # Configuration
    "CollectionConfig",
    "ConsumptionPolicy",
    "EmbeddingConfig",
    "QueueConfig",
    "RagDocsConfig",
    "VectorStoreConfig",
    # Errors
    "RagDocsError",
    "ConfigurationError",
    "EmbeddingError",
    "EmbeddingUnavailableError",
    "InvalidEmbeddingResponseError",
    "EmbeddingRetrievalError",
    "VectorStoreError",
    "VectorStoreAuthenticationError",
    "VectorStoreConnectionError",
    "VectorStoreInitializationError",
    "IngestionError",
    # Queue processing
    "BatchResult",
    "DrainState",
    "IngestionFailure",
    "IngestionOutcome",
    "IngestionSuccess",
    "OperationResponse",
]
