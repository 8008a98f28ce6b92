"""
Tests for the page ingestor used by the queue processor.
"""

from unittest.mock import AsyncMock

import httpx
import pytest
import pytest_asyncio

from ragdocs.ingestion.page_ingestor import PageIngestor, extract_page, point_id
from ragdocs.models.error_models import EmbeddingRetrievalError
from ragdocs.models.queue_models import IngestionFailure, IngestionSuccess

PAGE = """
<html>
  <head><title> Asyncio Guide </title><style>body { color: red; }</style></head>
  <body>
    <nav>Home | Docs</nav>
    <main>
      <h1>Event loop</h1>
      <p>The event loop runs tasks.</p>
      <script>console.log("ignored")</script>
    </main>
    <footer>Copyright</footer>
  </body>
</html>
"""


def page_transport(routes):
    def handler(request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        if url not in routes:
            return httpx.Response(404, text="not found")
        status, content_type, body = routes[url]
        return httpx.Response(status, headers={"content-type": content_type}, text=body)

    return httpx.MockTransport(handler)


@pytest.fixture
def embedding_client():
    client = AsyncMock()
    client.embed.return_value = [0.5] * 1536
    return client


@pytest.fixture
def vector_store():
    store = AsyncMock()
    store.upsert_documents.side_effect = lambda documents: len(documents)
    return store


@pytest_asyncio.fixture
async def make_ingestor(embedding_client, vector_store):
    clients = []

    def factory(routes, chunk_size=1500):
        http_client = httpx.AsyncClient(transport=page_transport(routes))
        clients.append(http_client)
        return PageIngestor(
            embedding_client, vector_store, chunk_size=chunk_size, http_client=http_client
        )

    yield factory

    for client in clients:
        await client.aclose()


class TestExtractPage:

    def test_title_and_main_text(self):
        title, text = extract_page(PAGE)

        assert title == "Asyncio Guide"
        assert "The event loop runs tasks." in text
        assert "Event loop" in text
        assert "ignored" not in text
        assert "Home | Docs" not in text
        assert "Copyright" not in text

    def test_page_without_title(self):
        title, text = extract_page("<p>Just text</p>")

        assert title == ""
        assert "Just text" in text

    def test_point_id_is_stable(self):
        assert point_id("https://a.dev", 0) == point_id("https://a.dev", 0)
        assert point_id("https://a.dev", 0) != point_id("https://a.dev", 1)


@pytest.mark.asyncio
class TestPageIngestor:

    async def test_ingests_page(self, make_ingestor, embedding_client, vector_store):
        url = "https://docs.example.com/asyncio"
        ingestor = make_ingestor({url: (200, "text/html; charset=utf-8", PAGE)})

        outcome = await ingestor.ingest(url)

        assert outcome == IngestionSuccess(url=url, chunks_stored=1)
        embedding_client.embed.assert_awaited_once()
        documents = vector_store.upsert_documents.call_args.args[0]
        assert len(documents) == 1
        payload = documents[0].payload
        assert payload["url"] == url
        assert payload["title"] == "Asyncio Guide"
        assert payload["chunk_index"] == 0
        assert payload["total_chunks"] == 1
        assert "event loop runs tasks" in payload["text"]
        assert documents[0].id == point_id(url, 0)

    async def test_embeds_each_chunk(self, make_ingestor, embedding_client, vector_store):
        url = "https://docs.example.com/long"
        body = "\n\n".join(f"Paragraph {i} " + "text " * 30 for i in range(6))
        ingestor = make_ingestor({url: (200, "text/plain", body)}, chunk_size=200)

        outcome = await ingestor.ingest(url)

        assert outcome.ok
        assert outcome.chunks_stored == embedding_client.embed.await_count
        assert outcome.chunks_stored > 1

    async def test_http_error_is_failure(self, make_ingestor, vector_store):
        ingestor = make_ingestor({})

        outcome = await ingestor.ingest("https://docs.example.com/missing")

        assert isinstance(outcome, IngestionFailure)
        assert "404" in outcome.reason
        vector_store.upsert_documents.assert_not_called()

    async def test_empty_page_is_failure(self, make_ingestor):
        url = "https://docs.example.com/empty"
        ingestor = make_ingestor({url: (200, "text/html", "<html><body></body></html>")})

        outcome = await ingestor.ingest(url)

        assert not outcome.ok
        assert "No text content" in outcome.reason

    async def test_embedding_error_is_failure(
        self, make_ingestor, embedding_client, vector_store
    ):
        url = "https://docs.example.com/asyncio"
        embedding_client.embed.side_effect = EmbeddingRetrievalError(
            "Failed to generate embeddings after 3 retries: boom", attempts=3
        )
        ingestor = make_ingestor({url: (200, "text/html", PAGE)})

        outcome = await ingestor.ingest(url)

        assert outcome == IngestionFailure(
            url=url, reason="Failed to generate embeddings after 3 retries: boom"
        )
        vector_store.upsert_documents.assert_not_called()

    @pytest.mark.parametrize("content_type", ["application/pdf", "image/png"])
    async def test_binary_content_is_failure(
        self, make_ingestor, embedding_client, vector_store, content_type
    ):
        url = "https://docs.example.com/manual"
        ingestor = make_ingestor({url: (200, content_type, "%PDF-1.7 binary")})

        outcome = await ingestor.ingest(url)

        assert isinstance(outcome, IngestionFailure)
        assert f"Unsupported content type {content_type}" in outcome.reason
        embedding_client.embed.assert_not_called()
        vector_store.upsert_documents.assert_not_called()
