"""
OpenAI Embeddings HTTP Client

Turns text into embedding vectors through the OpenAI embeddings API with
bounded retries and a per-attempt timeout.
"""

import asyncio
import logging
from numbers import Real
from typing import Any, List, Optional

import httpx
from tenacity import (
    AsyncRetrying,
    RetryCallState,
    RetryError,
    retry_if_not_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from ..models.config_models import EmbeddingConfig
from ..models.error_models import (
    EmbeddingError,
    EmbeddingRetrievalError,
    EmbeddingUnavailableError,
    InvalidEmbeddingResponseError,
)

logger = logging.getLogger(__name__)


def extract_embedding(payload: Any) -> List[float]:
    """
    Pull the first embedding out of an embeddings API response.

    The payload must hold a non-empty ``data`` list whose records each carry
    an ``embedding`` list of numbers.

    Raises:
        InvalidEmbeddingResponseError: If the payload has any other shape
    """
    if not isinstance(payload, dict):
        raise InvalidEmbeddingResponseError("Invalid response from OpenAI embeddings API")

    records = payload.get("data")
    if not isinstance(records, list) or not records:
        raise InvalidEmbeddingResponseError("Invalid response from OpenAI embeddings API")

    for record in records:
        embedding = record.get("embedding") if isinstance(record, dict) else None
        if not isinstance(embedding, list) or not all(
            isinstance(value, Real) and not isinstance(value, bool) for value in embedding
        ):
            raise InvalidEmbeddingResponseError(
                "Invalid response from OpenAI embeddings API"
            )

    return [float(value) for value in records[0]["embedding"]]


class EmbeddingClient:
    """OpenAI embeddings client with retry and timeout handling."""

    def __init__(
        self,
        config: EmbeddingConfig,
        http_client: Optional[httpx.AsyncClient] = None,
    ):
        self.config = config
        self._client = http_client
        self._owns_client = http_client is None
        self.last_attempts = 0

    @property
    def available(self) -> bool:
        return self.config.enabled

    async def initialize(self) -> None:
        """Create the HTTP client if one was not injected."""
        if self._client is not None:
            return

        self._client = httpx.AsyncClient(
            headers={
                "Authorization": f"Bearer {self.config.api_key}",
                "Content-Type": "application/json",
                "User-Agent": "ragdocs/1.0",
            },
            timeout=httpx.Timeout(self.config.timeout),
        )
        logger.info("OpenAI embeddings client initialized")

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            logger.info("OpenAI embeddings client closed")

    async def __aenter__(self):
        await self.initialize()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def embed(self, text: str) -> List[float]:
        """
        Generate an embedding for a single text.

        Each attempt is cancelled if it runs past ``config.timeout``. Failed
        attempts are retried after ``config.retry_delay`` seconds, up to
        ``config.max_retries`` attempts in total.

        Args:
            text: Text to embed

        Returns:
            Embedding vector

        Raises:
            EmbeddingUnavailableError: If no API key is configured
            EmbeddingRetrievalError: If every attempt failed
        """
        if not self.config.enabled:
            raise EmbeddingUnavailableError("OpenAI API key not configured")

        await self.initialize()
        self.last_attempts = 0

        try:
            async for attempt in AsyncRetrying(
                stop=stop_after_attempt(self.config.max_retries),
                wait=wait_fixed(self.config.retry_delay),
                retry=retry_if_not_exception_type(EmbeddingUnavailableError),
                before_sleep=self._log_retry,
            ):
                with attempt:
                    self.last_attempts = attempt.retry_state.attempt_number
                    vector = await self._request_with_timeout(text)
        except RetryError as e:
            last_error = e.last_attempt.exception()
            raise EmbeddingRetrievalError(
                f"Failed to generate embeddings after {self.config.max_retries} "
                f"retries: {last_error}",
                attempts=self.last_attempts,
                last_error=last_error,
            ) from last_error

        if len(vector) != self.config.dimension:
            logger.warning(
                f"Embedding dimension {len(vector)} differs from expected "
                f"{self.config.dimension}"
            )
        return vector

    async def _request_with_timeout(self, text: str) -> List[float]:
        try:
            return await asyncio.wait_for(
                self._request_embedding(text), timeout=self.config.timeout
            )
        except asyncio.TimeoutError as e:
            raise EmbeddingError("OpenAI embeddings request timed out") from e

    async def _request_embedding(self, text: str) -> List[float]:
        response = await self._client.post(
            f"{self.config.base_url.rstrip('/')}/embeddings",
            json={"model": self.config.model, "input": text},
        )
        response.raise_for_status()

        try:
            payload = response.json()
        except ValueError as e:
            raise InvalidEmbeddingResponseError(
                "Invalid response from OpenAI embeddings API"
            ) from e

        return extract_embedding(payload)

    @staticmethod
    def _log_retry(retry_state: RetryCallState) -> None:
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            f"Embedding attempt {retry_state.attempt_number} failed: {error}; retrying"
        )
