"""
Module: layout.spreads

Purpose:
    Map (pages, spread index, layout config) to the two slots shown at
    that position, and count how many spreads a book has.

Key Functions:
    - compute_spread(): Slots for one spread (pure, synchronous)
    - total_spreads(): Closed-form spread count
    - spread_page_indices(): Raw left/right positions before bounds checks

Algorithm:
    Cover on, spread 0: right = page 0 alone (cover view).
    Cover on, spread i > 0, c = i - 1:
        spacer:    right = 1 + 2c, left = right - 1 (spacer if that is the cover)
        no spacer: left = 1 + 2c, right = left + 1
    Cover off, spread i:
        spacer:    right = 2i, left = right - 1 (spacer if < 0)
        no spacer: left = 2i, right = left + 1
    Any position outside [0, N) is an empty slot, never a spacer.

Used By:
    - layout.navigation: Current spread and navigation bounds
    - cli: Spread listing
"""

from __future__ import annotations

import math
from typing import Optional, Sequence, Tuple

from livremele.core.models import (
    SPACER,
    BookLayoutConfig,
    PageDocument,
    Slot,
    SpreadResult,
)

# Sentinel position for a spacer slot
SPACER_POSITION = -1


def spread_page_indices(spread_index: int, config: BookLayoutConfig) -> Tuple[int, int, bool]:
    """
    Raw page positions for a spread, before bounds checking.

    Returns:
        (left, right, left_is_spacer); left is SPACER_POSITION for a spacer
    """
    if config.has_cover:
        content_index = spread_index - 1
        if config.use_spacer:
            right = 1 + content_index * 2
            left = right - 1
            if left == 0:
                return SPACER_POSITION, right, True
            return left, right, False
        left = 1 + content_index * 2
        return left, left + 1, False

    if config.use_spacer:
        right = spread_index * 2
        left = right - 1
        if left < 0:
            return SPACER_POSITION, right, True
        return left, right, False
    left = spread_index * 2
    return left, left + 1, False


def _page_at(pages: Sequence[PageDocument], position: int) -> Optional[PageDocument]:
    if 0 <= position < len(pages):
        return pages[position]
    return None


def compute_spread(
    pages: Sequence[PageDocument],
    spread_index: int,
    config: Optional[BookLayoutConfig] = None,
) -> SpreadResult:
    """
    Slots displayed at a spread position.

    Args:
        pages: Sequenced pages (index i at position i)
        spread_index: 0-based spread position
        config: Cover and spacer switches

    Returns:
        SpreadResult with each slot a page, SPACER, or None

    Raises:
        ValueError: If spread_index is negative

    Example:
        >>> compute_spread(pages[:3], 1, BookLayoutConfig(True, True))
        SpreadResult(left=SPACER, right=PageDocument(index=1, ...), is_cover_view=False)
    """
    if spread_index < 0:
        raise ValueError(f"spread_index must be >= 0: {spread_index}")
    config = config or BookLayoutConfig()

    if config.has_cover and spread_index == 0:
        return SpreadResult(left=None, right=_page_at(pages, 0), is_cover_view=True)

    left_index, right_index, left_is_spacer = spread_page_indices(spread_index, config)
    left: Slot = SPACER if left_is_spacer else _page_at(pages, left_index)
    return SpreadResult(left=left, right=_page_at(pages, right_index), is_cover_view=False)


def total_spreads(page_count: int, config: Optional[BookLayoutConfig] = None) -> int:
    """
    Number of spreads for a book.

    Every spread below the total shows at least one real page; the
    spread at the total shows none.

    Example:
        >>> total_spreads(3, BookLayoutConfig(has_cover=True, use_spacer=True))
        3
    """
    if page_count < 0:
        raise ValueError(f"page_count must be >= 0: {page_count}")
    if page_count == 0:
        return 0
    config = config or BookLayoutConfig()

    if config.has_cover:
        if config.use_spacer:
            # [cover] [spacer, 1] [2, 3] ...; a lone cover has no content spread
            return 1 + (math.ceil(page_count / 2) if page_count > 1 else 0)
        return 1 + math.ceil((page_count - 1) / 2)
    if config.use_spacer:
        return math.ceil((page_count + 1) / 2)
    return math.ceil(page_count / 2)
