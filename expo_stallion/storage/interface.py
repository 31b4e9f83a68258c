"""
Project file store interface.

Defines the abstract interface through which services read and write native
project files. The patch engine itself never opens files.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class ProjectStore(ABC):
    """Abstract access to the files of one Expo project."""

    @abstractmethod
    async def read_text(self, key: str) -> str:
        """Load text content.

        Args:
            key: Path relative to the project root.

        Returns:
            The file contents.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        ...

    @abstractmethod
    async def write_text(self, key: str, content: str) -> str:
        """Store text content and return the key."""
        ...

    @abstractmethod
    async def read_bytes(self, key: str) -> bytes:
        """Load raw bytes.

        Raises:
            FileNotFoundError: If the key does not exist.
        """
        ...

    @abstractmethod
    async def write_bytes(self, key: str, data: bytes) -> str:
        """Store raw bytes and return the key."""
        ...

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists."""
        ...

    @abstractmethod
    async def glob(self, pattern: str) -> list[str]:
        """List keys matching a glob pattern, sorted.

        Args:
            pattern: Glob relative to the project root (``**`` recurses).

        Returns:
            Matching keys, "/"-separated.
        """
        ...
