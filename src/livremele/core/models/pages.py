"""
Module: core.models.pages

Purpose:
    Page and spread models handed to the presentation layer.

Key Classes:
    - PageDocument: One transformed SVG page (immutable)
    - BookLayoutConfig: Cover / spacer switches for spread layout
    - SpreadResult: The two slots shown at a navigation position
    - Spacer / SPACER: Blank filler slot marker (distinct from empty)

Dependencies:
    - dataclasses (std)
    - base64 (std)

Used By:
    - ingest.transformer: Creates PageDocuments
    - ingest.sequencer: Assigns canonical indices
    - layout.spreads: Builds SpreadResults
"""

from __future__ import annotations

import base64
from dataclasses import dataclass
from typing import Optional, Tuple, Union

# A4 in points, used when a document declares no usable size
DEFAULT_PAGE_WIDTH = 595.0
DEFAULT_PAGE_HEIGHT = 842.0

SVG_MEDIA_TYPE = "image/svg+xml"


@dataclass(frozen=True)
class PageDocument:
    """
    A single book page (immutable).

    The index is a placeholder (0) until the sequencer runs; the
    sequencer returns new records with the canonical index.

    Attributes:
        id: Unique page identifier
        name: Source filename
        content: Serialized SVG markup with embedded assets
        index: Canonical page number (0-indexed)
        width: Page width in user units
        height: Page height in user units

    Example:
        >>> page = PageDocument(id="p", name="page1.svg", content="<svg/>")
        >>> page.data_url
        'data:image/svg+xml;base64,PHN2Zy8+'
    """
    id: str
    name: str
    content: str
    index: int = 0
    width: float = DEFAULT_PAGE_WIDTH
    height: float = DEFAULT_PAGE_HEIGHT

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"index must be >= 0: {self.index}")

    @property
    def data_url(self) -> str:
        """Self-contained URL a viewer can load without further fetches."""
        encoded = base64.b64encode(self.content.encode("utf-8")).decode("ascii")
        return f"data:{SVG_MEDIA_TYPE};base64,{encoded}"

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    def __repr__(self) -> str:
        return (
            f"PageDocument(index={self.index}, name={self.name!r}, "
            f"size={self.width:g}x{self.height:g})"
        )


class Spacer:
    """Marker for a deliberate blank filler slot."""

    _instance: Optional["Spacer"] = None

    def __new__(cls) -> "Spacer":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SPACER"


SPACER = Spacer()

# A slot holds a page, the spacer marker, or None (renders nothing)
Slot = Union[PageDocument, Spacer, None]


@dataclass(frozen=True)
class BookLayoutConfig:
    """
    Spread layout switches (immutable).

    Attributes:
        has_cover: First page is shown alone on the right as a cover
        use_spacer: Insert a blank filler so pages land on the intended side
    """
    has_cover: bool = True
    use_spacer: bool = True


@dataclass(frozen=True)
class SpreadResult:
    """
    Pages displayed at one spread position.

    Attributes:
        left: Left slot
        right: Right slot
        is_cover_view: True for the single-page cover spread
    """
    left: Slot = None
    right: Slot = None
    is_cover_view: bool = False

    @property
    def left_is_spacer(self) -> bool:
        return self.left is SPACER

    @property
    def pages(self) -> Tuple[PageDocument, ...]:
        """Real pages shown, left to right."""
        return tuple(s for s in (self.left, self.right) if isinstance(s, PageDocument))

    @property
    def is_blank(self) -> bool:
        """True when no real page is shown."""
        return not self.pages

    @property
    def page_numbers(self) -> Tuple[int, ...]:
        """1-based page labels; the cover carries no number."""
        if self.is_cover_view:
            return ()
        return tuple(p.index + 1 for p in self.pages)
