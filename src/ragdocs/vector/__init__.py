"""
Vector layer for ragdocs.

- OpenAI embeddings client with bounded retries and per-attempt timeouts
- Qdrant collection bootstrap and point storage
"""

from .embedding_client import EmbeddingClient, extract_embedding
from .qdrant_vector_store import QdrantVectorStore, VectorDocument, classify_bootstrap_error

__all__ = [
    "EmbeddingClient",
    "extract_embedding",
    "QdrantVectorStore",
    "VectorDocument",
    "classify_bootstrap_error",
]
