"""
Module: ingest.dimensions

Purpose:
    Resolve a document's page size from its root element.

Key Functions:
    - extract_dimensions(): viewBox, then width/height, then defaults
    - parse_view_box(): Four-number viewBox parsing
    - parse_length(): Leading number of a length attribute ("210mm" -> 210)

Algorithm:
    1. viewBox "min-x min-y width height" (spaces and/or commas) wins
       when both its width and height are positive
    2. Otherwise each of width/height comes from the numeric prefix of
       the root's width/height attribute, if positive
    3. Each dimension still unresolved takes the configured default

Used By:
    - ingest.transformer: Step 2 of the document pass sequence
"""

from __future__ import annotations

import math
import re
from typing import Optional, Tuple

from lxml import etree

from .config import IngestConfig

_VIEW_BOX_SEPARATORS = re.compile(r"[\s,]+")
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _positive(value: Optional[float]) -> Optional[float]:
    if value is None or not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_view_box(value: Optional[str]) -> Optional[Tuple[float, float, float, float]]:
    """
    Parse a viewBox attribute.

    Returns:
        (min_x, min_y, width, height), or None unless exactly four numbers
    """
    if not value:
        return None
    parts = [p for p in _VIEW_BOX_SEPARATORS.split(value.strip()) if p]
    if len(parts) != 4:
        return None
    try:
        min_x, min_y, width, height = (float(p) for p in parts)
    except ValueError:
        return None
    return min_x, min_y, width, height


def parse_length(value: Optional[str]) -> Optional[float]:
    """Numeric prefix of a length such as "100", "12.5px" or "50%"."""
    if not value:
        return None
    match = _LEADING_NUMBER.match(value)
    if not match:
        return None
    return float(match.group(1))


def extract_dimensions(root: etree._Element, config: Optional[IngestConfig] = None) -> Tuple[float, float]:
    """
    Resolve (width, height) for a document root.

    Example:
        >>> root = etree.fromstring('<svg viewBox="0 0 800 600" width="10"/>')
        >>> extract_dimensions(root)
        (800.0, 600.0)
    """
    config = config or IngestConfig()
    width: Optional[float] = None
    height: Optional[float] = None

    view_box = parse_view_box(root.get("viewBox"))
    if view_box is not None:
        width, height = _positive(view_box[2]), _positive(view_box[3])

    if width is None or height is None:
        width = _positive(parse_length(root.get("width"))) or width
        height = _positive(parse_length(root.get("height"))) or height

    return (
        width if width is not None else config.default_width,
        height if height is not None else config.default_height,
    )
