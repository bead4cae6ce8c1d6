"""
Module: ingest.transformer

Purpose:
    Turn one SVG document into a page: parse, measure, embed assets,
    redact, serialize, then run the stylesheet url(...) pass.

Key Functions:
    - transform_document(): Read a FileHandle and build its PageDocument
    - render_document(): The pass sequence over already-read bytes

Algorithm:
    1. Read raw bytes (failure is fatal for the whole batch)
    2. Parse; a structural error skips steps 3-6 and keeps the raw text
    3. Extract dimensions
    4. Rewrite reference attributes through the registry
    5. Apply redactions
    6. Serialize the mutated tree
    7. Always run the stylesheet url(...) pass over the resulting text
    8. Emit a PageDocument with placeholder index 0

Dependencies:
    - lxml (via ingest.markup)

Used By:
    - ingest.pipeline: One call per document, run concurrently
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import Optional

from livremele.core.errors import FatalIngestError, RecoverableParseError
from livremele.core.models import FileHandle, PageDocument

from .config import IngestConfig
from .dimensions import extract_dimensions
from .markup import parse_markup
from .redaction import apply_redactions
from .references import resolve_attribute_references, resolve_stylesheet_urls
from .registry import AssetRegistry

logger = logging.getLogger(__name__)


def render_document(
    name: str,
    data: bytes,
    registry: AssetRegistry,
    config: Optional[IngestConfig] = None,
) -> PageDocument:
    """
    Run the transformation passes over one document's bytes.

    Parse failures never raise: the document keeps its original text and
    still goes through the stylesheet pass.

    Args:
        name: Source filename
        data: Raw document bytes
        registry: Frozen asset registry
        config: Ingestion configuration

    Returns:
        PageDocument with index 0
    """
    config = config or IngestConfig()
    content = data.decode("utf-8", errors="replace")
    width, height = config.default_width, config.default_height

    try:
        document = parse_markup(data, name)
    except RecoverableParseError as e:
        logger.warning(f"{e}; using text-only rewriting")
    else:
        width, height = extract_dimensions(document.root, config)
        resolve_attribute_references(document, registry)
        apply_redactions(document, config)
        content = document.serialize()

    content = resolve_stylesheet_urls(content, registry)

    return PageDocument(
        id=str(uuid.uuid4()),
        name=name,
        content=content,
        index=0,
        width=width,
        height=height,
    )


async def transform_document(
    handle: FileHandle,
    registry: AssetRegistry,
    config: Optional[IngestConfig] = None,
) -> PageDocument:
    """
    Read and transform one document.

    Raises:
        FatalIngestError: If the document's content cannot be read
    """
    try:
        data = await handle.read_bytes()
    except Exception as e:
        raise FatalIngestError(f"Failed to read document {handle.name}: {e}", handle.name) from e

    page = await asyncio.to_thread(render_document, handle.name, data, registry, config)
    logger.debug(f"Transformed {page.name} ({page.width:g}x{page.height:g})")
    return page
