"""
Core Package

Immutable data models and the error hierarchy shared by the ingestion
pipeline and the spread layout engine.
"""

from .errors import (
    IngestError,
    FatalIngestError,
    RecoverableAssetError,
    RecoverableParseError,
)

__all__ = [
    "IngestError",
    "FatalIngestError",
    "RecoverableAssetError",
    "RecoverableParseError",
]
