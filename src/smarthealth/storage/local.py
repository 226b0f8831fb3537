"""
Local filesystem key-value store.

One UTF-8 file per key under ``base_path``, read and written with aiofiles.
"""

from pathlib import Path

import aiofiles
import aiofiles.os
from loguru import logger

from smarthealth.core.exceptions import StoragePermissionError

from .base import KeyValueStore


class LocalKeyValueStore(KeyValueStore):
    """Persist each key as a small text file on disk."""

    def __init__(self, base_path: str = "~/.smarthealth-data/store", **config):
        super().__init__(**config)
        self.base_path = Path(base_path).expanduser().resolve()
        self.base_path.mkdir(parents=True, exist_ok=True)

    def _get_full_path(self, key: str) -> Path:
        """Resolve a key to a file under ``base_path``.

        Rejects unsafe keys (empty, null bytes, backslashes, absolute paths,
        traversal) so nothing is written outside ``base_path``.
        """
        raw_key = key.strip()
        if not raw_key:
            raise StoragePermissionError("Storage key cannot be empty.")
        if "\x00" in raw_key:
            raise StoragePermissionError("Storage key cannot contain null bytes.")
        if "\\" in raw_key:
            raise StoragePermissionError("Storage key cannot contain backslashes. Use '/' separators.")

        key_path = Path(raw_key)
        if key_path.is_absolute() or raw_key.startswith("~"):
            raise StoragePermissionError(f"Unsafe storage key '{key}': absolute paths are not allowed.")

        full_path = (self.base_path / key_path).resolve()
        try:
            full_path.relative_to(self.base_path)
        except ValueError as e:
            raise StoragePermissionError(f"Unsafe storage key '{key}': path traversal is not allowed.") from e
        if full_path == self.base_path:
            raise StoragePermissionError(f"Unsafe storage key '{key}': resolves to the store root.")
        return full_path

    async def get_item(self, key: str) -> str | None:
        path = self._get_full_path(key)
        if not path.is_file():
            return None
        try:
            async with aiofiles.open(path, encoding="utf-8") as f:
                return await f.read()
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot read {path}: {e}") from e

    async def set_item(self, key: str, value: str) -> None:
        path = self._get_full_path(key)
        path.parent.mkdir(parents=True, exist_ok=True)
        try:
            async with aiofiles.open(path, "w", encoding="utf-8") as f:
                await f.write(value)
        except PermissionError as e:
            raise StoragePermissionError(f"Cannot write to {path}: {e}") from e
        logger.debug(f"Stored key {key!r} ({len(value)} chars)")

    async def remove_item(self, key: str) -> bool:
        path = self._get_full_path(key)
        if not path.is_file():
            return False
        await aiofiles.os.remove(path)
        return True
