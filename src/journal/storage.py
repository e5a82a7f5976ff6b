# src/journal/storage.py
"""Key-value persistence of journal documents as JSON files."""
import json
import logging
import re
from pathlib import Path
from typing import Any

import aiofiles
import aiofiles.os

logger = logging.getLogger(__name__)

TRADES_KEY = "trades"
TRANSACTIONS_KEY = "transactions"
OBJECTIVES_KEY = "objectives"
SETTINGS_KEY = "appSettings"

STORE_KEYS = (TRADES_KEY, TRANSACTIONS_KEY, OBJECTIVES_KEY, SETTINGS_KEY)

_KEY_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class JsonKeyValueStore:
    """Stores one JSON document per key.

    Documents live in ``{data_dir}/{key}.json``. Writes are best effort:
    failures are logged and reported through the return value, never raised.
    An unreadable document is moved aside to ``{key}.json.corrupt`` so that
    the next write cannot replace it; if it cannot be moved, the key stays
    read-only until the process restarts.
    """

    def __init__(self, data_dir: str | Path) -> None:
        """Initialize the store.

        Args:
            data_dir: Directory holding the documents.
        """
        self._data_dir = Path(data_dir)
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._read_only: set[str] = set()

    @property
    def data_dir(self) -> Path:
        """Directory holding the documents."""
        return self._data_dir

    def _get_file_path(self, key: str) -> Path:
        """Get the JSON file path for a key."""
        if not _KEY_PATTERN.match(key):
            raise ValueError(f"Invalid store key: {key!r}")
        return self._data_dir / f"{key}.json"

    def _get_quarantine_path(self, file_path: Path) -> Path:
        """First free ``.corrupt`` name next to a document."""
        target = file_path.with_name(f"{file_path.name}.corrupt")
        counter = 1
        while target.exists():
            target = file_path.with_name(f"{file_path.name}.corrupt.{counter}")
            counter += 1
        return target

    def is_read_only(self, key: str) -> bool:
        """Check if writes to a key are refused."""
        return key in self._read_only

    async def load(self, key: str) -> Any | None:
        """Read the document stored under a key.

        Args:
            key: Document key.

        Returns:
            The decoded document, or None when absent or unreadable.
        """
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return None

        try:
            async with aiofiles.open(file_path, "r", encoding="utf-8") as f:
                content = await f.read()
            return json.loads(content)
        except (OSError, ValueError) as e:
            logger.warning(f"Could not read {file_path.name}: {e}")
            await self.quarantine(key)
            return None

    async def quarantine(self, key: str) -> Path | None:
        """Move the document of a key aside, keeping its content.

        Args:
            key: Document key.

        Returns:
            The new location, or None if there was nothing to move or the
            move failed. After a failed move the key is read-only.
        """
        file_path = self._get_file_path(key)
        if not file_path.exists():
            return None

        target = self._get_quarantine_path(file_path)
        try:
            await aiofiles.os.rename(file_path, target)
        except OSError as e:
            self._read_only.add(key)
            logger.error(f"Could not move {file_path.name} aside, refusing writes to it: {e}")
            return None

        logger.error(f"Moved unreadable {file_path.name} to {target.name}")
        return target

    async def save(self, key: str, data: Any) -> bool:
        """Write the document stored under a key.

        Args:
            key: Document key.
            data: JSON-serializable document.

        Returns:
            True if written, False otherwise.
        """
        file_path = self._get_file_path(key)
        if key in self._read_only:
            logger.warning(f"Not writing {file_path.name}: unreadable original kept in place")
            return False

        try:
            content = json.dumps(data, indent=2, ensure_ascii=False)
            async with aiofiles.open(file_path, "w", encoding="utf-8") as f:
                await f.write(content)
            return True
        except (OSError, TypeError, ValueError) as e:
            logger.warning(f"Could not write {file_path.name}: {e}")
            return False
