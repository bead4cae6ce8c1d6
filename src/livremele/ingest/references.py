"""
Module: ingest.references

Purpose:
    Rewrite external resource references into embedded data: URLs.
    Two passes share one filename extraction rule and the registry's
    ordered lookup: an element-attribute pass over the parsed tree and a
    textual url(...) pass over the serialized text.

Key Functions:
    - filename_from_reference(): Reduce a reference to a bare filename
    - resolve_attribute_references(): Attribute pass (in place)
    - resolve_stylesheet_urls(): url(...) pass over text

Used By:
    - ingest.transformer: Steps 3 and 6 of the document pass sequence
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Tuple

from .markup import XLINK_NS, ParsedDocument, iter_elements
from .registry import AssetRegistry, decode_uri_component

logger = logging.getLogger(__name__)

# Values that are already self-contained or must stay remote
EXTERNAL_PREFIXES = ("data:", "http://", "https://")

_PATH_SEPARATORS = re.compile(r"[/\\]")
_QUERY_OR_FRAGMENT = re.compile(r"[?#]")

# url(a.png), url('a.png'), url("a.png")
CSS_URL_PATTERN = re.compile(r"""url\((['"]?)(.*?)\1\)""")

XLINK_HREF = f"{{{XLINK_NS}}}href"


@dataclass(frozen=True)
class ReferenceAttribute:
    """
    An attribute that may carry an external reference.

    Attributes:
        key: Attribute key as lxml reports it
        write_key: Key the resolved value is written to
    """
    key: str
    write_key: str


REFERENCE_ATTRIBUTES: Tuple[ReferenceAttribute, ...] = (
    ReferenceAttribute("href", "href"),
    ReferenceAttribute("src", "src"),
    ReferenceAttribute(XLINK_HREF, XLINK_HREF),
    # Undeclared prefix: rewritten as a proper xlink:href
    ReferenceAttribute("xlink:href", XLINK_HREF),
)


def filename_from_reference(value: str) -> str:
    """
    Reduce a reference to the filename to look up.

    Returns "" for empty values, data: URLs and absolute http(s) URLs.

    Example:
        >>> filename_from_reference("../img/My%20Photo.PNG?v=2#top")
        'My Photo.PNG'
    """
    if not value:
        return ""
    if value.lstrip().lower().startswith(EXTERNAL_PREFIXES):
        return ""
    filename = _PATH_SEPARATORS.split(value)[-1]
    filename = _QUERY_OR_FRAGMENT.split(filename, 1)[0]
    return decode_uri_component(filename)


def resolve_reference(value: str, registry: AssetRegistry) -> Optional[str]:
    """Data URL for a reference value, or None to leave it untouched."""
    filename = filename_from_reference(value)
    if not filename:
        return None
    return registry.resolve(filename)


def resolve_attribute_references(document: ParsedDocument, registry: AssetRegistry) -> int:
    """
    Rewrite reference attributes of every element in place.

    Args:
        document: Parsed document (mutated)
        registry: Frozen asset registry

    Returns:
        Number of attributes rewritten
    """
    rewritten = 0
    for element in iter_elements(document.root):
        for attribute in REFERENCE_ATTRIBUTES:
            value = element.get(attribute.key)
            if not value:
                continue
            url = resolve_reference(value, registry)
            if url is None:
                continue
            if attribute.key != attribute.write_key:
                del element.attrib[attribute.key]
            element.set(attribute.write_key, url)
            rewritten += 1
    if rewritten:
        logger.debug(f"{document.name}: embedded {rewritten} attribute reference(s)")
    return rewritten


def resolve_stylesheet_urls(text: str, registry: AssetRegistry) -> str:
    """
    Embed url(...) references found anywhere in the text.

    Reaches <style> blocks and style attributes the attribute pass cannot
    see. Already-embedded references are left alone.
    """
    def _replace(match: re.Match) -> str:
        quote, value = match.group(1), match.group(2)
        url = resolve_reference(value, registry)
        if url is None:
            return match.group(0)
        return f"url({quote}{url}{quote})"

    return CSS_URL_PATTERN.sub(_replace, text)
