"""
Result models produced while draining the documentation queue.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Union


class DrainState(Enum):
    """Queue processor states."""

    IDLE = "idle"
    DRAINING = "draining"
    COMPLETED = "completed"
    COMPLETED_WITH_FAILURES = "completed_with_failures"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass(frozen=True)
class IngestionSuccess:
    """A URL was fetched, embedded and stored."""

    url: str
    chunks_stored: int = 0

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True)
class IngestionFailure:
    """A URL could not be ingested."""

    url: str
    reason: str

    @property
    def ok(self) -> bool:
        return False


IngestionOutcome = Union[IngestionSuccess, IngestionFailure]


@dataclass
class BatchResult:
    """Outcome of one drain invocation. Never persisted."""

    processed_count: int = 0
    failed_count: int = 0
    failed_urls: List[str] = field(default_factory=list)
    remaining_count: int = 0
    state: DrainState = DrainState.IDLE

    @property
    def has_failures(self) -> bool:
        return self.failed_count > 0

    def record(self, outcome: IngestionOutcome) -> None:
        """Count a single entry's outcome."""
        if outcome.ok:
            self.processed_count += 1
        else:
            self.failed_count += 1
            self.failed_urls.append(outcome.url)

    def summary(self) -> str:
        """Human-readable report of the drain."""
        text = (
            "Queue processing complete.\n"
            f"Processed: {self.processed_count} URLs\n"
            f"Failed: {self.failed_count} URLs"
        )
        if self.failed_urls:
            text += "\n\nFailed URLs:\n" + "\n".join(self.failed_urls)
        if self.remaining_count > 0:
            text += f"\n\nRemaining in queue: {self.remaining_count} URLs"
        return text


@dataclass(frozen=True)
class OperationResponse:
    """Textual response of a top-level operation."""

    text: str
    is_error: bool = False
