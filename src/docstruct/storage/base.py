"""Storage writer interface for projection output."""

from abc import ABC, abstractmethod
from typing import Optional


class StorageWriter(ABC):
    """Destination for output payloads.

    Implementations write bytes to a location path and may attach tags.
    """

    @abstractmethod
    def write(
        self,
        content: bytes,
        path: str,
        tags: Optional[dict[str, str]] = None,
    ) -> None:
        """Write a payload.

        Args:
            content: Payload bytes.
            path: Location path, '/'-separated.
            tags: Optional key/value tags for the object.

        Raises:
            StorageError: If the write fails.
        """

    def write_text(
        self,
        text: str,
        path: str,
        tags: Optional[dict[str, str]] = None,
    ) -> None:
        """Write a UTF-8 encoded text payload."""
        self.write(text.encode("utf-8"), path, tags)
