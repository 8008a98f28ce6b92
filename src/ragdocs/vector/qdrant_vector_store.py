"""
Qdrant Vector Store - collection bootstrap and point storage.

Provides:
- Async client lifecycle with context manager support
- Idempotent collection creation with a fixed schema
- Classification of bootstrap failures into auth / connectivity / unknown
- Point upserts for ingested documentation chunks
"""

import asyncio
import logging
import uuid
from typing import Any, Dict, Iterator, List, Optional

try:
    from qdrant_client import AsyncQdrantClient
    from qdrant_client.http.exceptions import ResponseHandlingException, UnexpectedResponse
    from qdrant_client.models import (
        Distance, OptimizersConfigDiff, PointStruct, UpdateStatus, VectorParams
    )
except ImportError as e:
    raise ImportError(
        "Qdrant client not installed. Install with: pip install qdrant-client"
    ) from e

import httpx
from pydantic import BaseModel, Field

from ..models.config_models import CollectionConfig, VectorStoreConfig
from ..models.error_models import (
    VectorStoreAuthenticationError,
    VectorStoreConnectionError,
    VectorStoreError,
    VectorStoreInitializationError,
)

logger = logging.getLogger(__name__)

AUTH_KEYWORDS = ("unauthorized", "401", "forbidden")
CONNECTION_KEYWORDS = (
    "connection refused",
    "all connection attempts failed",
    "econnrefused",
    "etimedout",
    "timed out",
    "timeout",
)


class VectorDocument(BaseModel):
    """Vector document model for storage."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    vector: List[float] = Field(..., description="Vector embeddings")
    payload: Dict[str, Any] = Field(default_factory=dict, description="Metadata payload")


AUTH_STATUS_CODES = (401, 403)
CONNECTION_ERROR_TYPES = (
    httpx.ConnectError,
    httpx.TimeoutException,
    ConnectionError,
    asyncio.TimeoutError,
)


def _error_chain(error: BaseException) -> Iterator[BaseException]:
    """Yield the error and every exception it wraps.

    qdrant-client wraps transport failures in ``ResponseHandlingException``
    and keeps the original error on ``source``.
    """
    pending = [error]
    seen = set()
    while pending:
        link = pending.pop(0)
        if link is None or id(link) in seen:
            continue
        seen.add(id(link))
        yield link
        if isinstance(link, ResponseHandlingException):
            source = getattr(link, "source", None)
            if isinstance(source, BaseException):
                pending.append(source)
        pending.extend([link.__cause__, link.__context__])


def classify_bootstrap_error(error: Exception) -> VectorStoreError:
    """Translate a raw client error into a vector store error."""
    chain = list(_error_chain(error))
    messages = [str(link).lower() for link in chain]

    if any(
        isinstance(link, UnexpectedResponse) and link.status_code in AUTH_STATUS_CODES
        for link in chain
    ) or any(keyword in message for message in messages for keyword in AUTH_KEYWORDS):
        return VectorStoreAuthenticationError(
            "Failed to authenticate with Qdrant. Please check your API key."
        )

    if any(isinstance(link, CONNECTION_ERROR_TYPES) for link in chain) or any(
        keyword in message for message in messages for keyword in CONNECTION_KEYWORDS
    ):
        return VectorStoreConnectionError(
            "Failed to connect to Qdrant. Please check your QDRANT_URL."
        )

    return VectorStoreInitializationError(f"Failed to initialize Qdrant collection: {error}")


class QdrantVectorStore:
    """Qdrant vector store used as the ingestion destination."""

    def __init__(
        self,
        config: VectorStoreConfig,
        collection: CollectionConfig,
        client: Optional[AsyncQdrantClient] = None,
    ):
        """
        Initialize the vector store.

        Args:
            config: Connection settings
            collection: Schema of the destination collection
            client: Pre-built client, mainly for tests
        """
        self.config = config
        self.collection = collection
        self.client = client
        self._owns_client = client is None

    async def initialize(self) -> None:
        """Create the async client."""
        if self.client is not None:
            return

        logger.info(f"Connecting to Qdrant at {self.config.url}")
        self.client = AsyncQdrantClient(
            url=self.config.url,
            api_key=self.config.api_key,
            timeout=int(self.config.timeout),
        )

    async def cleanup(self) -> None:
        """Close connections."""
        if self.client is not None and self._owns_client:
            await self.client.close()
            self.client = None
            logger.info("Qdrant vector store cleanup completed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.cleanup()

    async def ensure_collection(self, config: Optional[CollectionConfig] = None) -> bool:
        """
        Create the collection unless one with the same name exists.

        An existing collection is left untouched, even if its schema differs.

        Args:
            config: Collection schema; defaults to the store's collection

        Returns:
            True if the collection was created, False if it already existed

        Raises:
            VectorStoreAuthenticationError: Credentials were rejected
            VectorStoreConnectionError: Qdrant could not be reached
            VectorStoreInitializationError: Any other failure
        """
        config = config or self.collection
        await self.initialize()

        try:
            collections = await self.client.get_collections()
            if any(c.name == config.name for c in collections.collections):
                logger.debug(f"Collection '{config.name}' already exists")
                return False

            logger.info(f"Creating collection: {config.name}")
            await self.client.create_collection(
                collection_name=config.name,
                vectors_config=VectorParams(
                    size=config.vector_size,
                    distance=Distance(config.distance_metric),
                ),
                optimizers_config=OptimizersConfigDiff(
                    default_segment_number=config.segment_count,
                    memmap_threshold=config.memmap_threshold,
                ),
                replication_factor=config.replication_factor,
            )
            logger.info(f"Collection '{config.name}' created successfully")
            return True

        except Exception as e:
            logger.error(f"Failed to ensure collection exists: {e}")
            raise classify_bootstrap_error(e) from e

    async def upsert_documents(self, documents: List[VectorDocument]) -> int:
        """
        Insert or update documents in the collection.

        Returns:
            Number of points written

        Raises:
            VectorStoreError: If the upsert did not complete
        """
        if not documents:
            return 0

        await self.initialize()
        points = [
            PointStruct(id=doc.id, vector=doc.vector, payload=doc.payload)
            for doc in documents
        ]

        result = await self.client.upsert(
            collection_name=self.collection.name,
            points=points,
            wait=True,
        )
        if result.status != UpdateStatus.COMPLETED:
            raise VectorStoreError(f"Upsert finished with status: {result.status}")

        logger.debug(f"Upserted {len(points)} points into '{self.collection.name}'")
        return len(points)
