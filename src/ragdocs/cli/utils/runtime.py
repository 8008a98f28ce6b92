"""
Wiring of the queue processor and its collaborators from configuration.
"""

from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncGenerator

from ...core.queue_processor import QueueProcessor
from ...core.queue_store import QueueStore
from ...ingestion.page_ingestor import PageIngestor
from ...models.config_models import RagDocsConfig
from ...vector.embedding_client import EmbeddingClient
from ...vector.qdrant_vector_store import QdrantVectorStore


@dataclass
class Runtime:
    """Live collaborators for one CLI invocation."""

    config: RagDocsConfig
    store: QueueStore
    vector_store: QdrantVectorStore
    embedding_client: EmbeddingClient
    ingestor: PageIngestor
    processor: QueueProcessor


@asynccontextmanager
async def open_runtime(config: RagDocsConfig) -> AsyncGenerator[Runtime, None]:
    """Build every collaborator and close network clients on exit."""
    store = QueueStore(config.queue.path)
    vector_store = QdrantVectorStore(config.vector_store, config.collection)
    embedding_client = EmbeddingClient(config.embedding)
    ingestor = PageIngestor(
        embedding_client,
        vector_store,
        chunk_size=config.chunk_size,
        request_timeout=config.embedding.timeout,
    )
    processor = QueueProcessor(
        store,
        ingestor,
        policy=config.queue.policy,
        batch_size=config.queue.batch_size,
    )

    try:
        yield Runtime(
            config=config,
            store=store,
            vector_store=vector_store,
            embedding_client=embedding_client,
            ingestor=ingestor,
            processor=processor,
        )
    finally:
        await ingestor.close()
        await embedding_client.close()
        await vector_store.cleanup()
