"""
Module: ingest.sequencer

Purpose:
    Order pages the way a person reads filenames and assign the
    canonical page index.

Key Functions:
    - natural_sort_key(): Case- and accent-insensitive, numeric-aware key
    - sequence_pages(): Sort and reindex 0..N-1

Example:
    >>> [p.name for p in sequence_pages(pages)]
    ['page1.svg', 'page2.svg', 'page10.svg']
"""

from __future__ import annotations

import re
import unicodedata
from dataclasses import replace
from typing import Iterable, Tuple, Union

from livremele.core.models import PageDocument

_DIGITS = re.compile(r"(\d+)")


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text.casefold())
    return "".join(c for c in decomposed if not unicodedata.combining(c))


def natural_sort_key(name: str) -> Tuple[Union[str, int], ...]:
    """
    Split name into alternating text and number runs.

    re.split with a capturing group puts text at even positions and digit
    runs at odd positions, so keys of any two names compare type-safely.
    """
    parts = _DIGITS.split(_fold(name))
    return tuple(int(part) if i % 2 else part for i, part in enumerate(parts))


def sequence_pages(pages: Iterable[PageDocument]) -> Tuple[PageDocument, ...]:
    """
    Sort pages naturally by name and assign index 0..N-1.

    Equal keys keep their incoming order (stable sort).

    Returns:
        New PageDocument records; inputs are not modified
    """
    ordered = sorted(pages, key=lambda page: natural_sort_key(page.name))
    return tuple(replace(page, index=i) for i, page in enumerate(ordered))
