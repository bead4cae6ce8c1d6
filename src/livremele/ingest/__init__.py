"""
Module: ingest

Purpose:
    Ingestion pipeline: turn a dropped folder tree or a file selection
    into ordered, self-contained SVG pages.

Key Functions:
    - process_files(): Main entry point (async)
    - process_files_sync(): Blocking wrapper
    - collect_files(): Traversal only
    - build_asset_registry(): Asset embedding only
    - transform_document(): One document
    - sequence_pages(): Natural ordering and indexing

Key Classes:
    - IngestConfig: Configuration for ingestion settings
    - AssetRegistry: Frozen filename -> data: URL lookup
    - TimingLog: Per-phase durations

Dependencies:
    - lxml: SVG parsing and serialization
    - PIL: Asset media-type sniffing

Used By:
    - livremele.cli: Command-line front end
"""

from .config import IngestConfig
from .pipeline import process_files, process_files_sync
from .traversal import collect_files
from .registry import AssetRegistry, build_asset_registry
from .transformer import transform_document, render_document
from .sequencer import sequence_pages, natural_sort_key
from .sources import (
    LocalFile,
    MemoryFile,
    entry_for_path,
    transfer_from_paths,
    files_from_paths,
)
from .timing import TimingLog

__all__ = [
    "IngestConfig",
    "process_files",
    "process_files_sync",
    "collect_files",
    "AssetRegistry",
    "build_asset_registry",
    "transform_document",
    "render_document",
    "sequence_pages",
    "natural_sort_key",
    "LocalFile",
    "MemoryFile",
    "entry_for_path",
    "transfer_from_paths",
    "files_from_paths",
    "TimingLog",
]
