"""
Module: core.errors

Purpose:
    Error hierarchy for the ingestion pipeline. Strict failures (traversal,
    directory listing, document reads) and lenient failures (one asset,
    one document parse) are kept as separate named categories because
    they propagate differently.

Key Classes:
    - IngestError: Base class for all ingestion errors
    - FatalIngestError: Aborts the whole batch; no pages are produced
    - RecoverableAssetError: One asset could not be embedded
    - RecoverableParseError: One document could not be parsed as a tree

Used By:
    - ingest.traversal: Raises FatalIngestError
    - ingest.registry: Logs RecoverableAssetError and continues
    - ingest.transformer: Logs RecoverableParseError and falls back
    - cli: Reports FatalIngestError once
"""

from __future__ import annotations

from typing import Optional


class IngestError(Exception):
    """Base class for ingestion errors."""
    pass


class FatalIngestError(IngestError):
    """
    Unrecoverable failure: the whole ingestion is abandoned.

    Raised for traversal and listing failures and for documents whose raw
    content cannot be read.

    Attributes:
        source: Name or path of the entry that failed (if known)
    """

    def __init__(self, message: str, source: Optional[str] = None):
        super().__init__(message)
        self.source = source


class RecoverableAssetError(IngestError):
    """An asset could not be read; it is left out of the registry."""

    def __init__(self, message: str, asset_name: str):
        super().__init__(message)
        self.asset_name = asset_name


class RecoverableParseError(IngestError):
    """A document failed structured parsing; raw text is kept instead."""

    def __init__(self, message: str, document_name: str):
        super().__init__(message)
        self.document_name = document_name
