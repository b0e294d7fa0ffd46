# src/taskflow/storage/file_store.py

from __future__ import annotations

import asyncio
import logging
import os
from pathlib import Path

from ..core.errors import StorageUnavailable

logger = logging.getLogger(__name__)


class LocalFileStore:
    """
    Text file store rooted at a local directory (the app-documents-root).

    Paths passed in are relative to the root; absolute paths and `..` escapes
    are rejected. Writes go through a temp file + os.replace so a crash never
    leaves a half-written JSON file behind.
    """

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root).expanduser()
        self._root.mkdir(parents=True, exist_ok=True)

    def resolve(self, path: str) -> Path:
        full = (self._root / path).resolve()
        root = self._root.resolve()
        if full != root and root not in full.parents:
            raise ValueError(f"path escapes store root: {path}")
        return full

    @staticmethod
    def _write_atomic(target: Path, text: str) -> None:
        tmp = target.with_suffix(target.suffix + ".tmp")
        tmp.write_text(text, "utf-8")
        os.replace(tmp, target)

    async def exists(self, path: str) -> bool:
        return self.resolve(path).exists()

    async def read_text(self, path: str) -> str:
        target = self.resolve(path)
        try:
            return await asyncio.to_thread(target.read_text, "utf-8")
        except OSError as e:
            raise StorageUnavailable(f"file read failed path={target}: {e}") from e

    async def write_text(self, path: str, text: str) -> None:
        target = self.resolve(path)
        try:
            await asyncio.to_thread(self._write_atomic, target, text)
        except OSError as e:
            raise StorageUnavailable(f"file write failed path={target}: {e}") from e
        logger.debug("Wrote %d bytes to %s", len(text), target)

    async def make_dirs(self, path: str) -> None:
        target = self.resolve(path)
        if target.is_dir():
            return
        try:
            await asyncio.to_thread(target.mkdir, parents=True, exist_ok=True)
        except OSError as e:
            raise StorageUnavailable(f"mkdir failed path={target}: {e}") from e
        logger.info("Created directory at %s", target)
