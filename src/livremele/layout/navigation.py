"""
Module: layout.navigation

Purpose:
    Headless navigation state for a spread viewer: current spread,
    cover/spacer toggles and the bounds used to enable prev/next.

Key Classes:
    - BookNavigator: Mutable session state over an immutable page tuple

Used By:
    - cli: Spread listing and the --spread option
"""

from __future__ import annotations

from typing import Optional, Sequence, Tuple

from livremele.core.models import (
    DEFAULT_PAGE_HEIGHT,
    DEFAULT_PAGE_WIDTH,
    BookLayoutConfig,
    PageDocument,
    SpreadResult,
)

from .spreads import compute_spread, total_spreads


class BookNavigator:
    """
    Navigation state for one loaded book.

    Attributes:
        pages: Sequenced pages
        spread_index: Current spread (0-based)
        config: Current cover/spacer switches

    Example:
        >>> nav = BookNavigator(pages)
        >>> nav.next()
        >>> nav.page_info
        '2 / 3'
    """

    def __init__(
        self,
        pages: Sequence[PageDocument] = (),
        config: Optional[BookLayoutConfig] = None,
    ):
        self.pages: Tuple[PageDocument, ...] = tuple(pages)
        self.config = config or BookLayoutConfig()
        self.spread_index = 0

    @property
    def total_spreads(self) -> int:
        return total_spreads(len(self.pages), self.config)

    @property
    def can_go_prev(self) -> bool:
        return self.spread_index > 0

    @property
    def can_go_next(self) -> bool:
        return self.spread_index < self.total_spreads - 1

    @property
    def page_info(self) -> str:
        """Position label such as "2 / 5"."""
        return f"{self.spread_index + 1} / {max(1, self.total_spreads)}"

    @property
    def spread_aspect_ratio(self) -> float:
        """Width/height of a full spread, sized from the first page."""
        width, height = DEFAULT_PAGE_WIDTH, DEFAULT_PAGE_HEIGHT
        if self.pages and self.pages[0].width and self.pages[0].height:
            width, height = self.pages[0].width, self.pages[0].height
        return (width * 2) / height

    def current_spread(self) -> SpreadResult:
        return compute_spread(self.pages, self.spread_index, self.config)

    def load(self, pages: Sequence[PageDocument]) -> None:
        """Show a new book from the cover, with default switches."""
        self.pages = tuple(pages)
        self.spread_index = 0
        self.config = BookLayoutConfig()

    def reset(self) -> None:
        self.pages = ()
        self.spread_index = 0

    def next(self) -> None:
        self.spread_index = min(self.total_spreads - 1, self.spread_index + 1)
        self._clamp()

    def prev(self) -> None:
        self.spread_index = max(0, self.spread_index - 1)

    def go_to(self, spread_index: int) -> None:
        self.spread_index = spread_index
        self._clamp()

    def toggle_cover(self) -> None:
        self.config = BookLayoutConfig(
            has_cover=not self.config.has_cover,
            use_spacer=self.config.use_spacer,
        )
        self.spread_index = 0

    def toggle_spacer(self) -> None:
        """Flip the spacer; stays on the same spread number where it still exists."""
        self.config = BookLayoutConfig(
            has_cover=self.config.has_cover,
            use_spacer=not self.config.use_spacer,
        )
        self._clamp()

    def _clamp(self) -> None:
        last = max(0, self.total_spreads - 1)
        self.spread_index = min(max(0, self.spread_index), last)
