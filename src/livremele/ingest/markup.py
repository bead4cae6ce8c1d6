"""
Module: ingest.markup

Purpose:
    Thin tree abstraction over lxml for SVG documents: tagged node kinds,
    explicit-stack walks over elements and text nodes, and strict-enough
    parsing that separates structural errors from tolerable namespace
    slips.

Key Classes:
    - NodeKind: element / text / comment / instruction / entity
    - TextNode: One text slot (an element's .text or a node's .tail)
    - ParsedDocument: Exclusively owned, mutable parse result

Key Functions:
    - parse_markup(): Parse bytes, raising RecoverableParseError on structural errors
    - iter_elements(): Pre-order element walk (no recursion)
    - iter_text_nodes(): Every text node inside an element (no recursion)
    - local_name(): Namespace-free tag name

Dependencies:
    - lxml: XML parsing, namespace handling and serialization

Used By:
    - ingest.transformer, ingest.references, ingest.dimensions, ingest.redaction
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional

from lxml import etree

from livremele.core.errors import RecoverableParseError

logger = logging.getLogger(__name__)

SVG_NS = "http://www.w3.org/2000/svg"
XLINK_NS = "http://www.w3.org/1999/xlink"

# Newly created xlink attributes serialize as xlink:href, not ns0:href
etree.register_namespace("xlink", XLINK_NS)


class NodeKind(Enum):
    """Kinds of nodes in a parsed document."""
    ELEMENT = "element"
    TEXT = "text"
    COMMENT = "comment"
    INSTRUCTION = "instruction"
    ENTITY = "entity"


def node_kind(node: etree._Element) -> NodeKind:
    """Classify an lxml node. Text is never a node in lxml; see TextNode."""
    if isinstance(node, etree._Comment):
        return NodeKind.COMMENT
    if isinstance(node, etree._ProcessingInstruction):
        return NodeKind.INSTRUCTION
    if isinstance(node, etree._Entity):
        return NodeKind.ENTITY
    return NodeKind.ELEMENT


def is_element(node: etree._Element) -> bool:
    return node_kind(node) is NodeKind.ELEMENT


def local_name(node: etree._Element) -> str:
    """Tag without namespace, e.g. "image" for {http://www.w3.org/2000/svg}image."""
    if not is_element(node):
        return ""
    return etree.QName(node).localname


def namespace_of(node: etree._Element) -> Optional[str]:
    if not is_element(node):
        return None
    return etree.QName(node).namespace


@dataclass(frozen=True)
class TextNode:
    """
    A text node in DOM terms.

    lxml stores character data on elements: text before the first child
    lives in element.text, text after a node (up to its next sibling)
    lives in node.tail. A TextNode names one of those slots.

    Attributes:
        owner: Node holding the slot
        slot: "text" or "tail"
    """
    owner: etree._Element
    slot: str

    kind = NodeKind.TEXT

    @property
    def value(self) -> str:
        return getattr(self.owner, self.slot) or ""

    def replace(self, value: str) -> None:
        setattr(self.owner, self.slot, value)


def iter_elements(root: etree._Element) -> Iterator[etree._Element]:
    """Yield root and every descendant element in document order."""
    stack: List[etree._Element] = [root]
    while stack:
        node = stack.pop()
        if not is_element(node):
            continue
        yield node
        stack.extend(reversed(list(node)))


def iter_descendants(root: etree._Element, name: str) -> Iterator[etree._Element]:
    """Descendant elements (excluding root) with the given local name."""
    for element in iter_elements(root):
        if element is not root and local_name(element) == name:
            yield element


def iter_text_nodes(root: etree._Element) -> Iterator[TextNode]:
    """
    Yield every non-empty text node contained in root.

    Includes root.text and the tails of all descendants; excludes root's
    own tail (it follows root, outside it) and comment/instruction bodies.
    """
    stack: List[etree._Element] = [root]
    while stack:
        node = stack.pop()
        if node.text:
            yield TextNode(node, "text")
        children = list(node)
        for child in children:
            if child.tail:
                yield TextNode(child, "tail")
        stack.extend(reversed([c for c in children if is_element(c)]))


@dataclass
class ParsedDocument:
    """
    A parsed document owned by exactly one transformation.

    Attributes:
        name: Source filename (for diagnostics)
        tree: The lxml element tree, mutated in place by each pass
    """
    name: str
    tree: etree._ElementTree

    @property
    def root(self) -> etree._Element:
        return self.tree.getroot()

    def serialize(self) -> str:
        """Serialize the whole tree (doctype and top-level comments included)."""
        return etree.tostring(self.tree, encoding="unicode")


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        recover=True,
        # Lifts libxml2's depth (256) and text-node size (10 MB) caps
        huge_tree=True,
        resolve_entities=False,
        no_network=True,
        load_dtd=False,
        remove_blank_text=False,
    )


def parse_markup(data: bytes, name: str) -> ParsedDocument:
    """
    Parse document bytes into a tree.

    The parser recovers from namespace slips (such as an undeclared
    xlink prefix) so those documents stay rewritable; any other error
    is structural.

    Args:
        data: Raw document bytes (declared encodings are honoured)
        name: Filename for diagnostics

    Returns:
        ParsedDocument

    Raises:
        RecoverableParseError: On structural errors or an empty document
    """
    parser = _make_parser()
    try:
        root = etree.fromstring(data, parser)
    except (etree.XMLSyntaxError, ValueError) as e:
        raise RecoverableParseError(f"Cannot parse {name}: {e}", name) from e

    structural = [
        entry for entry in parser.error_log
        if entry.level >= etree.ErrorLevels.ERROR
        and entry.domain != etree.ErrorDomains.NAMESPACE
    ]
    if structural:
        first = structural[0]
        raise RecoverableParseError(
            f"Cannot parse {name}: {first.message} (line {first.line})", name
        )
    if root is None:
        raise RecoverableParseError(f"Cannot parse {name}: no root element", name)

    for entry in parser.error_log:
        logger.debug(f"{name}: tolerated {entry.domain_name} issue: {entry.message}")
    return ParsedDocument(name=name, tree=root.getroottree())


def make_element(parent: etree._Element, name: str, index: Optional[int] = None) -> etree._Element:
    """
    Create a child element in the parent's namespace.

    Args:
        parent: Parent element
        name: Local name
        index: Insert position; appended when None
    """
    namespace = namespace_of(parent)
    tag = etree.QName(namespace, name).text if namespace else name
    # Inherits the parent's namespace prefix
    element = etree.SubElement(parent, tag)
    if index is not None:
        parent.insert(index, element)
    return element
