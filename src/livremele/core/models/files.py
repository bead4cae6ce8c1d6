"""
Module: core.models.files

Purpose:
    Contracts for the host's file access primitives. The pipeline never
    touches the filesystem directly; it only reads bytes from FileHandles
    and lists directories through batched DirectoryReaders.

Key Classes:
    - FileHandle: Named file with an async byte reader
    - Entry / FileEntry / DirectoryEntry: Hierarchical dropped entries
    - DirectoryReader: Batched directory listing (empty batch = done)
    - TransferItem / DataTransfer: A dropped transfer (entries + flat files)

Dependencies:
    - abc (std)

Used By:
    - ingest.sources: Local filesystem and in-memory implementations
    - ingest.traversal: Flattens entries into FileHandles
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional, Tuple


class FileHandle(ABC):
    """
    A readable file.

    Attributes:
        name: Base filename (original case)
        path: Optional path hint for diagnostics
        media_type: Declared media type; empty string when unknown
    """

    name: str
    path: Optional[str] = None
    media_type: str = ""

    @abstractmethod
    async def read_bytes(self) -> bytes:
        """Read the full content."""

    async def read_text(self) -> str:
        """Read the full content as UTF-8, replacing undecodable bytes."""
        data = await self.read_bytes()
        return data.decode("utf-8", errors="replace")

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r})"


class Entry(ABC):
    """
    A node of a dropped hierarchy.

    Attributes:
        name: Entry name
        full_path: Slash-separated path from the drop root, e.g. "/book/p1.svg"
    """

    name: str
    full_path: str

    @property
    def is_file(self) -> bool:
        return False

    @property
    def is_directory(self) -> bool:
        return False


class FileEntry(Entry):
    """Entry that resolves to a single file."""

    @property
    def is_file(self) -> bool:
        return True

    @abstractmethod
    async def get_file(self) -> FileHandle:
        """Resolve the entry to a readable file."""


class DirectoryReader(ABC):
    """
    Paginated directory listing.

    A single call may return only part of the children. Callers must keep
    calling read_entries() until it returns an empty list.
    """

    @abstractmethod
    async def read_entries(self) -> List[Entry]:
        """Return the next batch of child entries, or [] when exhausted."""


class DirectoryEntry(Entry):
    """Entry whose children are listed through a DirectoryReader."""

    @property
    def is_directory(self) -> bool:
        return True

    @abstractmethod
    def create_reader(self) -> DirectoryReader:
        """Create a fresh reader positioned at the first child."""


@dataclass(frozen=True)
class TransferItem:
    """
    One item of a drag-and-drop transfer.

    Items carrying an entry are traversed; items without one fall back to
    the flat file when kind == "file". Other kinds (e.g. "string") are ignored.
    """
    kind: str = "file"
    entry: Optional[Entry] = None
    file: Optional[FileHandle] = None


@dataclass(frozen=True)
class DataTransfer:
    """A dropped transfer: an ordered collection of TransferItems."""
    items: Tuple[TransferItem, ...] = ()

    def __len__(self) -> int:
        return len(self.items)
