"""Filesystem and in-memory storage writers."""

import json
import logging
from pathlib import Path
from typing import Optional, Union

from docstruct.errors import StorageError

from .base import StorageWriter

logger = logging.getLogger(__name__)

TAGS_SUFFIX = ".tags.json"


class LocalStorage(StorageWriter):
    """Writes payloads under a root directory.

    Tags are stored next to the file in a ``<name>.tags.json`` sidecar.
    """

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def resolve(self, path: str) -> Path:
        """Map a location path to a file under the root."""
        target = (self.root / path.lstrip("/")).resolve()
        if not target.is_relative_to(self.root.resolve()):
            raise StorageError(path, "path escapes storage root")
        return target

    def write(
        self,
        content: bytes,
        path: str,
        tags: Optional[dict[str, str]] = None,
    ) -> None:
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_bytes(content)
            if tags:
                tags_path = target.with_name(target.name + TAGS_SUFFIX)
                tags_path.write_text(json.dumps(tags, sort_keys=True), encoding="utf-8")
        except OSError as e:
            raise StorageError(path, str(e)) from e

        logger.info("Wrote %d bytes to %s", len(content), target)


class InMemoryStorage(StorageWriter):
    """Keeps payloads in a dict, keyed by location path."""

    def __init__(self):
        self.objects: dict[str, bytes] = {}
        self.tags: dict[str, dict[str, str]] = {}

    def write(
        self,
        content: bytes,
        path: str,
        tags: Optional[dict[str, str]] = None,
    ) -> None:
        self.objects[path] = content
        if tags:
            self.tags[path] = dict(tags)

    def read_text(self, path: str) -> str:
        return self.objects[path].decode("utf-8")
