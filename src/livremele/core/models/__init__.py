"""
Core Models Package

Immutable data models shared by the ingestion pipeline and the spread
layout engine, plus the abstract file access contracts.

All page and layout models are frozen dataclasses: records are created
once during transformation and replaced (never mutated) when the
sequencer assigns their canonical index.
"""

from .files import (
    FileHandle,
    Entry,
    FileEntry,
    DirectoryEntry,
    DirectoryReader,
    TransferItem,
    DataTransfer,
)
from .pages import (
    DEFAULT_PAGE_WIDTH,
    DEFAULT_PAGE_HEIGHT,
    SVG_MEDIA_TYPE,
    PageDocument,
    BookLayoutConfig,
    SpreadResult,
    Spacer,
    SPACER,
    Slot,
)

__all__ = [
    "FileHandle",
    "Entry",
    "FileEntry",
    "DirectoryEntry",
    "DirectoryReader",
    "TransferItem",
    "DataTransfer",
    "DEFAULT_PAGE_WIDTH",
    "DEFAULT_PAGE_HEIGHT",
    "SVG_MEDIA_TYPE",
    "PageDocument",
    "BookLayoutConfig",
    "SpreadResult",
    "Spacer",
    "SPACER",
    "Slot",
]
