"""
Core queue handling for ragdocs.
"""

from .environment_manager import EnvironmentManager
from .queue_processor import DocumentIngestor, Processor, QueueProcessor, select_entries
from .queue_store import QueueStore

__all__ = [
    # Configuration
    "EnvironmentManager",
    # Queue
    "QueueStore",
    "QueueProcessor",
    "Processor",
    "DocumentIngestor",
    "select_entries",
]
