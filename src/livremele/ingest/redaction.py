"""
Module: ingest.redaction

Purpose:
    Redact elements flagged through their classification tags: blur the
    images they contain and replace their text with block glyphs.

Key Functions:
    - find_redacted_elements(): Elements with a redaction tag
    - apply_redactions(): Full redaction pass over one document
    - ensure_defs(): Shared <defs> container as a direct child of the root
    - add_blur_filter(): Shared Gaussian blur filter definition
    - redact_text(): Glyph substitution that keeps whitespace layout

Algorithm:
    1. Collect elements whose tags attribute (comma-separated) has any
       trimmed, lowercased value starting with the redaction token
    2. If none: the document is left untouched (no <defs>, no filter)
    3. One filter per document with a fresh id, region -50%/-50%/200%/200%
       and edgeMode="duplicate" so blurred images neither clip nor fade
    4. Per element: the element itself if it is an <image>, else every
       descendant <image>, gets filter="url(#id)" plus an inline CSS blur;
       every descendant text node is glyph-substituted

Dependencies:
    - lxml (via ingest.markup)

Used By:
    - ingest.transformer: Step 4 of the document pass sequence
"""

from __future__ import annotations

import logging
import re
import uuid
from typing import List, Optional

from lxml import etree

from .config import IngestConfig
from .markup import (
    ParsedDocument,
    iter_descendants,
    iter_elements,
    iter_text_nodes,
    local_name,
    make_element,
)

logger = logging.getLogger(__name__)

_NON_WHITESPACE = re.compile(r"\S")

FILTER_ID_PREFIX = "redact-blur-"


def new_filter_id() -> str:
    return f"{FILTER_ID_PREFIX}{uuid.uuid4().hex[:12]}"


def is_redacted(element: etree._Element, config: IngestConfig) -> bool:
    tags = element.get(config.tags_attribute)
    if not tags:
        return False
    return any(config.is_redaction_tag(tag) for tag in tags.split(","))


def find_redacted_elements(root: etree._Element, config: Optional[IngestConfig] = None) -> List[etree._Element]:
    config = config or IngestConfig()
    return [el for el in iter_elements(root) if is_redacted(el, config)]


def ensure_defs(root: etree._Element) -> etree._Element:
    """Return the root's <defs> as its first child, moving or creating it as needed."""
    for child in root:
        if local_name(child) == "defs":
            if root.index(child) != 0:
                root.insert(0, child)
            return child
    return make_element(root, "defs", index=0)


def add_blur_filter(defs: etree._Element, filter_id: str, std_deviation: int) -> etree._Element:
    """Append the shared blur filter definition to <defs>."""
    blur_filter = make_element(defs, "filter")
    blur_filter.set("id", filter_id)
    blur_filter.set("x", "-50%")
    blur_filter.set("y", "-50%")
    blur_filter.set("width", "200%")
    blur_filter.set("height", "200%")

    blur = make_element(blur_filter, "feGaussianBlur")
    blur.set("in", "SourceGraphic")
    blur.set("stdDeviation", str(std_deviation))
    blur.set("edgeMode", "duplicate")
    return blur_filter


def blur_image(image: etree._Element, filter_id: str, std_deviation: int) -> None:
    """Attach the shared filter plus an inline CSS blur to one image."""
    reference = f"url(#{filter_id})"
    if image.get("filter") == reference:
        return
    image.set("filter", reference)

    existing = (image.get("style") or "").strip().rstrip(";").strip()
    css_blur = f"filter: blur({std_deviation}px);"
    image.set("style", f"{existing}; {css_blur}" if existing else css_blur)


def redact_text(element: etree._Element, glyph: str) -> int:
    """
    Replace each non-whitespace character under element with glyph.

    Returns:
        Number of text nodes changed
    """
    changed = 0
    for node in iter_text_nodes(element):
        redacted = _NON_WHITESPACE.sub(glyph, node.value)
        if redacted != node.value:
            node.replace(redacted)
            changed += 1
    return changed


def apply_redactions(document: ParsedDocument, config: Optional[IngestConfig] = None) -> Optional[str]:
    """
    Redact every flagged element of a document in place.

    Args:
        document: Parsed document (mutated)
        config: Tag attribute, token, blur radius and glyph

    Returns:
        The blur filter id, or None when nothing was flagged
    """
    config = config or IngestConfig()
    targets = find_redacted_elements(document.root, config)
    if not targets:
        return None

    filter_id = new_filter_id()
    defs = ensure_defs(document.root)
    add_blur_filter(defs, filter_id, config.blur_std_deviation)

    image_count = 0
    for element in targets:
        images = [element] if local_name(element) == "image" else list(iter_descendants(element, "image"))
        for image in images:
            blur_image(image, filter_id, config.blur_std_deviation)
        image_count += len(images)
        redact_text(element, config.redaction_glyph)

    logger.debug(
        f"{document.name}: redacted {len(targets)} element(s), "
        f"{image_count} image(s) blurred with #{filter_id}"
    )
    return filter_id
