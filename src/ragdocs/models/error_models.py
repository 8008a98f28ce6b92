"""
Exception hierarchy for ragdocs operations.
"""

from typing import Optional


class RagDocsError(Exception):
    """Base exception for all ragdocs errors."""

    pass


class ConfigurationError(RagDocsError):
    """Required configuration is missing or invalid."""

    pass


class EmbeddingError(RagDocsError):
    """Base exception for embedding provider errors."""

    pass


class EmbeddingUnavailableError(EmbeddingError):
    """Embedding was requested but no provider credential is configured."""

    pass


class InvalidEmbeddingResponseError(EmbeddingError):
    """Provider answered with a payload that does not contain embeddings."""

    pass


class EmbeddingRetrievalError(EmbeddingError):
    """All embedding attempts failed."""

    def __init__(
        self,
        message: str,
        attempts: int,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(message)
        self.attempts = attempts
        self.last_error = last_error


class VectorStoreError(RagDocsError):
    """Base exception for vector store errors."""

    pass


class VectorStoreAuthenticationError(VectorStoreError):
    """Vector store rejected the configured credentials."""

    pass


class VectorStoreConnectionError(VectorStoreError):
    """Vector store could not be reached."""

    pass


class VectorStoreInitializationError(VectorStoreError):
    """Collection bootstrap failed for an unclassified reason."""

    pass


class IngestionError(RagDocsError):
    """A page could not be fetched, parsed or stored."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.url = url
