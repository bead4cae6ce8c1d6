"""
Module: layout

Purpose:
    Two-page spread layout for a sequenced book.

Key Functions:
    - compute_spread(): Slots shown at one spread position
    - total_spreads(): Number of spreads for a page count

Key Classes:
    - BookNavigator: Headless navigation state

Used By:
    - livremele.cli: Spread listing
"""

from .spreads import compute_spread, total_spreads, spread_page_indices
from .navigation import BookNavigator

__all__ = [
    "compute_spread",
    "total_spreads",
    "spread_page_indices",
    "BookNavigator",
]
