"""
Local filesystem project store.

Reads and writes project files under a root directory with aiofiles, keeping
every key inside the root.
"""

from __future__ import annotations

from pathlib import Path

import aiofiles

from .interface import ProjectStore


class LocalProjectStore(ProjectStore):
    """Filesystem-backed project store."""

    def __init__(self, base_path: Path) -> None:
        """Initialize local storage.

        Args:
            base_path: Root directory of the Expo project
        """
        self.base_path = base_path.resolve()

    def _get_full_path(self, key: str) -> Path:
        """Get full filesystem path for a key.

        Normalizes the key so that the resulting path stays within the project
        root.

        Args:
            key: Project-relative key.

        Returns:
            The resolved absolute path within the project root.
        """
        clean_key = key.lstrip("/\\").replace("..", "").replace(":", "")
        full_path = (self.base_path / clean_key).resolve()

        try:
            full_path.relative_to(self.base_path)
        except ValueError:
            clean_key = clean_key.replace("/", "_").replace("\\", "_")
            full_path = self.base_path / clean_key

        return full_path

    async def read_text(self, key: str) -> str:
        full_path = self._get_full_path(key)
        if not full_path.is_file():
            raise FileNotFoundError(f"Key not found: {key}")

        # newline="" keeps CRLF files byte-identical when left unchanged
        async with aiofiles.open(full_path, "r", encoding="utf-8", newline="") as f:
            return await f.read()

    async def write_text(self, key: str, content: str) -> str:
        full_path = self._get_full_path(key)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(full_path, "w", encoding="utf-8", newline="") as f:
            await f.write(content)
        return key

    async def read_bytes(self, key: str) -> bytes:
        full_path = self._get_full_path(key)
        if not full_path.is_file():
            raise FileNotFoundError(f"Key not found: {key}")

        async with aiofiles.open(full_path, "rb") as f:
            return await f.read()

    async def write_bytes(self, key: str, data: bytes) -> str:
        full_path = self._get_full_path(key)
        full_path.parent.mkdir(parents=True, exist_ok=True)

        async with aiofiles.open(full_path, "wb") as f:
            await f.write(data)
        return key

    async def exists(self, key: str) -> bool:
        return self._get_full_path(key).exists()

    async def glob(self, pattern: str) -> list[str]:
        keys = [
            path.relative_to(self.base_path).as_posix()
            for path in self.base_path.glob(pattern)
            if path.is_file()
        ]
        return sorted(keys)
