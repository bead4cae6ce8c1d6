"""
Module: ingest.classification

Purpose:
    Split ingested files into documents (SVG pages) and assets (anything
    a page may reference: images, fonts, stylesheets).

Key Functions:
    - is_document(): Classification rule for one file
    - is_hidden(): Hidden-file rule
    - split_documents_and_assets(): Partition a file list

Used By:
    - ingest.pipeline: Classification stage
"""

from __future__ import annotations

from typing import Iterable, List, Optional, Tuple

from livremele.core.models import FileHandle

from .config import IngestConfig


def is_document(handle: FileHandle, config: Optional[IngestConfig] = None) -> bool:
    """
    Declared media type matches, or the name ends with the document
    extension (case-insensitive).
    """
    config = config or IngestConfig()
    if handle.media_type == config.document_media_type:
        return True
    return handle.name.lower().endswith(config.document_extension.lower())


def is_hidden(handle: FileHandle, config: Optional[IngestConfig] = None) -> bool:
    config = config or IngestConfig()
    return handle.name.startswith(config.hidden_prefix)


def split_documents_and_assets(
    files: Iterable[FileHandle],
    config: Optional[IngestConfig] = None,
) -> Tuple[List[FileHandle], List[FileHandle]]:
    """
    Partition files, preserving input order within each group.

    Returns:
        (documents, assets)
    """
    config = config or IngestConfig()
    documents: List[FileHandle] = []
    assets: List[FileHandle] = []
    for handle in files:
        if is_document(handle, config):
            documents.append(handle)
        else:
            assets.append(handle)
    return documents, assets
