"""
Module: ingest.sources

Purpose:
    Concrete implementations of the file access contracts: the local
    filesystem (what a dropped folder or a file selection resolves to)
    and in-memory files.

Key Classes:
    - LocalFile: FileHandle over a path; reads run in a worker thread
    - LocalFileEntry / LocalDirectoryEntry: Entries over paths
    - LocalDirectoryReader: Batched os.scandir listing
    - MemoryFile: FileHandle over bytes already in memory

Key Functions:
    - entry_for_path(): Entry for a file or directory path
    - transfer_from_paths(): DataTransfer for dropped paths
    - files_from_paths(): Flat file selection

Dependencies:
    - asyncio (std): to_thread for blocking reads
    - mimetypes (std): Declared media types for local files

Used By:
    - cli: Builds the ingestion input from command-line paths
    - tests: In-memory fixtures
"""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import os
from itertools import islice
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Union

from livremele.core.models import (
    DataTransfer,
    DirectoryEntry,
    DirectoryReader,
    Entry,
    FileEntry,
    FileHandle,
    TransferItem,
)

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 100

PathLike = Union[str, Path]


class LocalFile(FileHandle):
    """File on the local filesystem."""

    def __init__(self, path: PathLike, media_type: Optional[str] = None):
        self._path = Path(path)
        self.name = self._path.name
        self.path = str(self._path)
        if media_type is None:
            media_type = mimetypes.guess_type(self.name)[0] or ""
        self.media_type = media_type

    async def read_bytes(self) -> bytes:
        return await asyncio.to_thread(self._path.read_bytes)


class MemoryFile(FileHandle):
    """File whose content is already in memory."""

    def __init__(
        self,
        name: str,
        data: Union[bytes, str],
        media_type: str = "",
        path: Optional[str] = None,
    ):
        self.name = name
        self.path = path or name
        self.media_type = media_type
        self._data = data.encode("utf-8") if isinstance(data, str) else data

    async def read_bytes(self) -> bytes:
        return self._data


def _full_path(path: Path, root: Path) -> str:
    relative = path.relative_to(root.parent).as_posix()
    return f"/{relative}"


class LocalFileEntry(FileEntry):
    def __init__(self, path: Path, root: Optional[Path] = None):
        self._path = path
        self.name = path.name
        self.full_path = _full_path(path, root or path)

    async def get_file(self) -> FileHandle:
        if not self._path.is_file():
            raise FileNotFoundError(f"Not a file: {self._path}")
        return LocalFile(self._path)


class LocalDirectoryReader(DirectoryReader):
    """
    Lists a directory in batches of at most batch_size entries.

    Symlinked directories are not listed, so link cycles cannot loop the
    traversal.
    """

    def __init__(self, path: Path, root: Path, batch_size: int = DEFAULT_BATCH_SIZE):
        if batch_size <= 0:
            raise ValueError(f"batch_size must be positive: {batch_size}")
        self._path = path
        self._root = root
        self._batch_size = batch_size
        self._iterator: Optional[Iterator[os.DirEntry]] = None
        self._exhausted = False

    def _next_batch(self) -> List[Entry]:
        if self._exhausted:
            return []
        if self._iterator is None:
            self._iterator = os.scandir(self._path)

        # An empty list means "done", so keep reading past all-skipped batches
        while True:
            batch = list(islice(self._iterator, self._batch_size))
            if not batch:
                self._exhausted = True
                self._iterator.close()
                return []

            entries: List[Entry] = []
            for item in batch:
                child = Path(item.path)
                if item.is_dir() and item.is_symlink():
                    logger.debug(f"Not following directory link {child}")
                    continue
                if item.is_dir(follow_symlinks=False):
                    entries.append(LocalDirectoryEntry(child, self._root, self._batch_size))
                else:
                    entries.append(LocalFileEntry(child, self._root))
            if entries:
                return entries

    async def read_entries(self) -> List[Entry]:
        return await asyncio.to_thread(self._next_batch)


class LocalDirectoryEntry(DirectoryEntry):
    def __init__(
        self,
        path: Path,
        root: Optional[Path] = None,
        batch_size: int = DEFAULT_BATCH_SIZE,
    ):
        self._path = path
        self._root = root or path
        self._batch_size = batch_size
        self.name = path.name
        self.full_path = _full_path(path, self._root)

    def create_reader(self) -> DirectoryReader:
        return LocalDirectoryReader(self._path, self._root, self._batch_size)


def entry_for_path(path: PathLike, batch_size: int = DEFAULT_BATCH_SIZE) -> Entry:
    """
    Wrap a dropped path as an entry.

    Raises:
        FileNotFoundError: If the path does not exist
    """
    path = Path(path).resolve()
    if not path.exists():
        raise FileNotFoundError(f"Path does not exist: {path}")
    if path.is_dir():
        return LocalDirectoryEntry(path, path, batch_size)
    return LocalFileEntry(path, path)


def transfer_from_paths(
    paths: Iterable[PathLike],
    batch_size: int = DEFAULT_BATCH_SIZE,
) -> DataTransfer:
    """Build a drop transfer from files and folders."""
    return DataTransfer(
        items=tuple(
            TransferItem(kind="file", entry=entry_for_path(p, batch_size))
            for p in paths
        )
    )


def files_from_paths(paths: Iterable[PathLike]) -> List[FileHandle]:
    """Build a flat file selection; directories are not expanded."""
    return [LocalFile(p) for p in paths]
