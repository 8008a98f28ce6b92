"""
Queue processing - drains pending URLs through the ingestion collaborator.

State flow of a single run:

    IDLE -> EMPTY                      (no pending entries, nothing written)
    IDLE -> DRAINING -> COMPLETED      (every selected entry succeeded, none left)
    IDLE -> DRAINING -> COMPLETED_WITH_FAILURES
                                       (an entry failed or entries remain)
    IDLE -> DRAINING -> FAILED         (the queue file could not be rewritten)

Selected entries are removed from the queue whatever their outcome; failures
are reported, not re-enqueued.
"""

import logging
from typing import List, Optional, Protocol, Tuple

from ..models.config_models import ConsumptionPolicy
from ..models.queue_models import (
    BatchResult,
    DrainState,
    IngestionFailure,
    IngestionOutcome,
    OperationResponse,
)
from .queue_store import QueueStore

logger = logging.getLogger(__name__)


class DocumentIngestor(Protocol):
    """Anything that can ingest a single URL and report the outcome."""

    async def ingest(self, url: str) -> IngestionOutcome:
        ...


class Processor(Protocol):
    """A top-level operation that produces a textual response."""

    async def process(self) -> OperationResponse:
        ...


def select_entries(
    entries: List[str], policy: ConsumptionPolicy, batch_size: int = 5
) -> Tuple[List[str], List[str]]:
    """
    Split queue entries into the work for this run and the remainder.

    Returns:
        (selected, remaining) in queue order
    """
    if policy is ConsumptionPolicy.FULL:
        count = len(entries)
    elif policy is ConsumptionPolicy.BATCH:
        count = batch_size
    elif policy is ConsumptionPolicy.SINGLE:
        count = 1
    else:
        raise ValueError(f"Unknown consumption policy: {policy}")

    return entries[:count], entries[count:]


class QueueProcessor:
    """Drains the queue file one entry at a time."""

    def __init__(
        self,
        store: QueueStore,
        ingestor: DocumentIngestor,
        policy: ConsumptionPolicy = ConsumptionPolicy.FULL,
        batch_size: int = 5,
    ):
        if batch_size < 1:
            raise ValueError("batch_size must be at least 1")

        self.store = store
        self.ingestor = ingestor
        self.policy = policy
        self.batch_size = batch_size
        self.state = DrainState.IDLE

    async def drain(self) -> Optional[BatchResult]:
        """
        Process the selected part of the queue.

        Returns:
            Batch result, or None if the queue was empty

        Raises:
            OSError: If the queue file exists but cannot be read or written
        """
        self.state = DrainState.IDLE
        entries = await self.store.load()

        if not entries:
            self.state = DrainState.EMPTY
            logger.info("Queue is empty")
            return None

        selected, remaining = select_entries(entries, self.policy, self.batch_size)
        self.state = DrainState.DRAINING
        logger.info(
            f"Draining {len(selected)} of {len(entries)} queued URLs "
            f"(policy={self.policy.value})"
        )

        result = BatchResult(remaining_count=len(remaining))
        for url in selected:
            outcome = await self._ingest(url)
            result.record(outcome)

        try:
            await self.store.persist(remaining)
        except Exception:
            self.state = DrainState.FAILED
            raise

        if result.has_failures or remaining:
            self.state = DrainState.COMPLETED_WITH_FAILURES
        else:
            self.state = DrainState.COMPLETED
        result.state = self.state

        logger.info(
            f"Queue drain finished: {result.processed_count} processed, "
            f"{result.failed_count} failed, {result.remaining_count} remaining"
        )
        return result

    async def process(self) -> OperationResponse:
        """Run the queue and render the outcome as text."""
        try:
            queue_exists = await self.store.exists()
            result = await self.drain()
        except Exception as e:
            logger.error(f"Failed to process queue: {e}")
            return OperationResponse(text=f"Failed to process queue: {e}", is_error=True)

        if result is None:
            if not queue_exists:
                return OperationResponse(text="Queue is empty (queue file does not exist)")
            return OperationResponse(text="Queue is empty")

        return OperationResponse(text=result.summary())

    async def _ingest(self, url: str) -> IngestionOutcome:
        try:
            return await self.ingestor.ingest(url)
        except Exception as e:
            logger.error(f"Failed to process URL {url}: {e}")
            return IngestionFailure(url=url, reason=str(e))
