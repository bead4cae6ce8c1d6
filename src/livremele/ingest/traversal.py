"""
Module: ingest.traversal

Purpose:
    Flatten a dropped transfer (flat files plus hierarchical entries) or a
    flat file selection into one list of FileHandles.

Key Functions:
    - collect_files(): Main entry point; normalizes both input shapes
    - traverse_entry(): Depth-first flattening of one entry
    - read_all_entries(): Drain a batched DirectoryReader

Algorithm:
    1. Flat files of the transfer are taken as-is, in item order
    2. Each entry is walked depth-first with an explicit stack; a
       directory's children are fully listed (batch after batch until an
       empty batch) and then visited in the order received
    3. Files whose name starts with the hidden prefix are dropped

    Failure policy is strict: any listing or file resolution error
    aborts with FatalIngestError and no partial list is returned.

Dependencies:
    - core.models.files: Entry contracts

Used By:
    - ingest.pipeline: First stage
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Union

from livremele.core.errors import FatalIngestError
from livremele.core.models import (
    DataTransfer,
    DirectoryEntry,
    DirectoryReader,
    Entry,
    FileEntry,
    FileHandle,
)

from .classification import is_hidden
from .config import IngestConfig

logger = logging.getLogger(__name__)

IngestSource = Union[DataTransfer, Iterable[FileHandle]]


async def read_all_entries(reader: DirectoryReader) -> List[Entry]:
    """
    Read every child of a directory.

    read_entries() may return partial batches; an empty batch marks the end.
    """
    entries: List[Entry] = []
    batch = await reader.read_entries()
    while batch:
        entries.extend(batch)
        batch = await reader.read_entries()
    return entries


async def _resolve_file(entry: FileEntry) -> FileHandle:
    try:
        return await entry.get_file()
    except Exception as e:
        raise FatalIngestError(f"Failed to read {entry.full_path}: {e}", entry.full_path) from e


async def _list_directory(entry: DirectoryEntry) -> List[Entry]:
    try:
        return await read_all_entries(entry.create_reader())
    except Exception as e:
        raise FatalIngestError(f"Failed to list {entry.full_path}: {e}", entry.full_path) from e


async def traverse_entry(entry: Entry) -> List[FileHandle]:
    """
    Flatten one entry into files, depth-first pre-order.

    Raises:
        FatalIngestError: If any file or directory cannot be read
    """
    files: List[FileHandle] = []
    stack: List[Entry] = [entry]
    while stack:
        current = stack.pop()
        if current.is_file:
            files.append(await _resolve_file(current))
        elif current.is_directory:
            children = await _list_directory(current)
            # Reversed so children pop in the order they were listed
            stack.extend(reversed(children))
    return files


async def collect_files(
    source: IngestSource,
    config: Optional[IngestConfig] = None,
) -> List[FileHandle]:
    """
    Normalize a transfer or a flat selection into visible files.

    Args:
        source: DataTransfer from a drop, or any iterable of FileHandles
        config: Supplies the hidden-file prefix

    Returns:
        Files in traversal order, hidden files removed

    Raises:
        FatalIngestError: On any traversal failure
    """
    config = config or IngestConfig()
    files: List[FileHandle] = []

    if isinstance(source, DataTransfer):
        entries: List[Entry] = []
        for item in source.items:
            if item.entry is not None:
                entries.append(item.entry)
            elif item.kind == "file" and item.file is not None:
                files.append(item.file)
        for entry in entries:
            files.extend(await traverse_entry(entry))
    else:
        files = list(source)

    visible = [f for f in files if not is_hidden(f, config)]
    if len(visible) < len(files):
        logger.debug(f"Dropped {len(files) - len(visible)} hidden file(s)")
    logger.info(f"Collected {len(visible)} files")
    return visible
