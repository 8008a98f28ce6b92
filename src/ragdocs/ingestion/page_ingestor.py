"""
Page ingestion - fetch a documentation page, embed its text, store the chunks.

This is the collaborator the queue processor hands each URL to. It reports
its outcome as a value (IngestionSuccess or IngestionFailure) so the caller
never has to catch per-URL errors.
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import List, Optional, Tuple

import httpx
from bs4 import BeautifulSoup

from ..models.error_models import IngestionError
from ..models.queue_models import IngestionFailure, IngestionOutcome, IngestionSuccess
from ..vector.embedding_client import EmbeddingClient
from ..vector.qdrant_vector_store import QdrantVectorStore, VectorDocument
from .text_chunker import chunk_text

logger = logging.getLogger(__name__)

STRIPPED_TAGS = ["script", "style", "noscript", "nav", "header", "footer", "aside", "svg"]


def extract_page(html: str) -> Tuple[str, str]:
    """
    Extract the title and readable text of an HTML page.

    Returns:
        (title, text) tuple; title may be empty
    """
    soup = BeautifulSoup(html, "html.parser")

    title_tag = soup.find("title")
    title = title_tag.get_text().strip() if title_tag else ""

    for tag in soup(STRIPPED_TAGS):
        tag.decompose()

    root = soup.find("main") or soup.find("article") or soup.body or soup
    text = root.get_text(separator="\n")
    return title, text


def point_id(url: str, chunk_index: int) -> str:
    """Stable point id so re-ingesting a page overwrites its old chunks."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{url}#{chunk_index}"))


class PageIngestor:
    """Fetches, embeds and stores one documentation page at a time."""

    def __init__(
        self,
        embedding_client: EmbeddingClient,
        vector_store: QdrantVectorStore,
        chunk_size: int = 1500,
        http_client: Optional[httpx.AsyncClient] = None,
        request_timeout: float = 30.0,
    ):
        self.embedding_client = embedding_client
        self.vector_store = vector_store
        self.chunk_size = chunk_size
        self.request_timeout = request_timeout
        self._client = http_client
        self._owns_client = http_client is None

    async def close(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def ingest(self, url: str) -> IngestionOutcome:
        """
        Ingest a single URL.

        Chunks are embedded one after the other and written in a single
        upsert once every chunk has a vector.
        """
        try:
            title, text = await self._fetch(url)
            chunks = chunk_text(text, self.chunk_size)
            if not chunks:
                raise IngestionError(f"No text content found at {url}", url=url)

            fetched_at = datetime.now(timezone.utc).isoformat()
            documents: List[VectorDocument] = []
            for chunk in chunks:
                vector = await self.embedding_client.embed(chunk.content)
                documents.append(
                    VectorDocument(
                        id=point_id(url, chunk.index),
                        vector=vector,
                        payload={
                            "_type": "DocumentChunk",
                            "url": url,
                            "title": title,
                            "text": chunk.content,
                            "chunk_index": chunk.index,
                            "total_chunks": len(chunks),
                            "timestamp": fetched_at,
                        },
                    )
                )

            stored = await self.vector_store.upsert_documents(documents)

        except Exception as e:
            logger.error(f"Failed to process URL {url}: {e}")
            return IngestionFailure(url=url, reason=str(e))

        logger.info(f"Ingested {url}: {stored} chunks")
        return IngestionSuccess(url=url, chunks_stored=stored)

    async def _fetch(self, url: str) -> Tuple[str, str]:
        if self._client is None:
            self._client = httpx.AsyncClient(
                follow_redirects=True,
                timeout=httpx.Timeout(self.request_timeout),
                headers={"User-Agent": "ragdocs/1.0"},
            )

        try:
            response = await self._client.get(url)
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise IngestionError(f"Failed to fetch {url}: {e}", url=url) from e

        media_type = response.headers.get("content-type", "").split(";")[0].strip().lower()
        if not media_type or "html" in media_type:
            return extract_page(response.text)
        if media_type.startswith("text/"):
            return "", response.text
        raise IngestionError(f"Unsupported content type {media_type} at {url}", url=url)
