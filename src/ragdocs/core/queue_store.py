"""
File-backed queue of pending documentation URLs.
"""

import asyncio
import logging
from pathlib import Path
from typing import Iterable, List, Sequence, Union

logger = logging.getLogger(__name__)


class QueueStore:
    """
    Newline-delimited queue file.

    The file is the only record of pending work. There is no locking:
    one process, one writer. Two drains running against the same file
    will lose each other's updates.
    """

    def __init__(self, path: Union[str, Path], encoding: str = "utf-8"):
        """
        Initialize the queue store.

        Args:
            path: Location of the queue file
            encoding: Text encoding of the queue file
        """
        self.path = Path(path)
        self.encoding = encoding

    @staticmethod
    def parse(content: str) -> List[str]:
        """Split queue file content into entries, dropping blank lines."""
        return [line.strip() for line in content.split("\n") if line.strip()]

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, func, *args)

    async def exists(self) -> bool:
        return await self._run(self.path.exists)

    async def load(self) -> List[str]:
        """
        Read pending entries in file order.

        Returns:
            Entries in the order they appear; empty if the file is absent

        Raises:
            OSError: For any read failure other than a missing file
        """
        try:
            content = await self._run(self.path.read_text, self.encoding)
        except FileNotFoundError:
            logger.debug(f"Queue file not found: {self.path}")
            return []

        entries = self.parse(content)
        logger.debug(f"Loaded {len(entries)} entries from {self.path}")
        return entries

    async def persist(self, remaining: Sequence[str]) -> None:
        """Overwrite the queue file. An empty sequence truncates it."""
        content = "\n".join(remaining)
        await self._run(self._write, content)
        logger.debug(f"Persisted {len(remaining)} entries to {self.path}")

    async def append(self, urls: Iterable[str]) -> int:
        """
        Add entries to the end of the queue.

        Args:
            urls: Entries to enqueue; blank values are skipped

        Returns:
            Queue length after the append
        """
        new_entries = [url.strip() for url in urls if url and url.strip()]
        entries = await self.load()
        if new_entries:
            entries.extend(new_entries)
            await self.persist(entries)
            logger.info(f"Enqueued {len(new_entries)} URLs ({len(entries)} pending)")
        return len(entries)

    async def clear(self) -> None:
        await self.persist([])

    def _write(self, content: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(content, encoding=self.encoding)
