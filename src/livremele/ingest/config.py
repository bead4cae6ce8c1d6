"""
Module: ingest.config

Purpose:
    Configuration for the ingestion pipeline. Provides immutable settings
    for document classification, hidden-file filtering, default page size
    and redaction.

Key Classes:
    - IngestConfig: Main configuration for ingestion

Dependencies:
    - dataclasses: For frozen dataclass support

Used By:
    - ingest.pipeline: Threads the config through every stage
    - ingest.transformer: Dimension defaults and redaction settings
"""

from __future__ import annotations

from dataclasses import dataclass

from livremele.core.models import (
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    SVG_MEDIA_TYPE,
)


@dataclass(frozen=True)
class IngestConfig:
    """
    Configuration for the ingestion pipeline (immutable).

    Attributes:
        document_media_type: Declared media type that marks a document
        document_extension: Filename suffix that marks a document (any case)
        hidden_prefix: Files whose name starts with this are dropped
        default_width: Page width when the document declares none
        default_height: Page height when the document declares none
        tags_attribute: Attribute holding comma-separated classification tags
        redaction_token: Tag prefix that flags an element for redaction
        blur_std_deviation: Blur radius applied to redacted images
        redaction_glyph: Replacement for every non-whitespace redacted character

    Example:
        >>> config = IngestConfig(redaction_token="secret")
        >>> config.is_redaction_tag("Secret-Draft")
        True
    """

    # Classification
    document_media_type: str = SVG_MEDIA_TYPE
    document_extension: str = ".svg"
    hidden_prefix: str = "."

    # Page size fallback
    default_width: float = DEFAULT_PAGE_WIDTH
    default_height: float = DEFAULT_PAGE_HEIGHT

    # Redaction
    tags_attribute: str = "data-tags"
    redaction_token: str = "redact"
    blur_std_deviation: int = 150
    redaction_glyph: str = "▮"

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        if not self.document_extension.startswith("."):
            raise ValueError(
                f"document_extension must start with '.': {self.document_extension!r}"
            )
        if self.default_width <= 0:
            raise ValueError(f"default_width must be positive: {self.default_width}")
        if self.default_height <= 0:
            raise ValueError(f"default_height must be positive: {self.default_height}")
        if not self.redaction_token:
            raise ValueError("redaction_token must not be empty")
        if self.blur_std_deviation <= 0:
            raise ValueError(
                f"blur_std_deviation must be positive: {self.blur_std_deviation}"
            )
        if len(self.redaction_glyph) != 1 or self.redaction_glyph.isspace():
            raise ValueError(
                f"redaction_glyph must be one non-whitespace character: {self.redaction_glyph!r}"
            )

    def is_redaction_tag(self, tag: str) -> bool:
        """Check whether one classification tag flags redaction."""
        return tag.strip().lower().startswith(self.redaction_token.lower())
