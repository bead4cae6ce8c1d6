"""
Module: ingest.pipeline

Purpose:
    Main ingestion orchestrator. Coordinates traversal, classification,
    the asset registry, per-document transformation and sequencing, and
    publishes the finished book atomically.

Key Functions:
    - process_files(): Main entry point (async)
    - process_files_sync(): Blocking wrapper for synchronous callers

Pipeline:
    1. Collect visible files from a transfer or flat selection (strict)
    2. Split into documents and assets
    3. Build the asset registry once (lenient per asset)
    4. Transform all documents concurrently over the frozen registry
    5. Sort naturally and assign canonical indices
    The caller receives the complete tuple or an exception; never a
    partial book.

Dependencies:
    - asyncio (std)

Used By:
    - cli: Command-line ingestion
"""

from __future__ import annotations

import asyncio
import logging
from typing import Optional, Tuple

from livremele.core.errors import FatalIngestError
from livremele.core.models import PageDocument

from .classification import split_documents_and_assets
from .config import IngestConfig
from .registry import build_asset_registry
from .sequencer import sequence_pages
from .timing import TimingLog, timed_phase
from .transformer import transform_document
from .traversal import IngestSource, collect_files

logger = logging.getLogger(__name__)


async def process_files(
    source: IngestSource,
    *,
    config: Optional[IngestConfig] = None,
    timing_log: Optional[TimingLog] = None,
) -> Tuple[PageDocument, ...]:
    """
    Ingest dropped or selected files into an ordered book.

    Args:
        source: DataTransfer (drag and drop) or iterable of FileHandles
        config: Optional ingestion configuration
        timing_log: Optional collector for per-phase durations

    Returns:
        Pages sorted naturally by name with index 0..N-1

    Raises:
        FatalIngestError: Traversal, listing or document read failure

    Example:
        >>> pages = asyncio.run(process_files(transfer_from_paths(["book/"])))
        >>> [p.index for p in pages]
        [0, 1, 2]
    """
    config = config or IngestConfig()

    try:
        with timed_phase(timing_log, "traversal"):
            files = await collect_files(source, config)

        documents, assets = split_documents_and_assets(files, config)
        logger.info(f"Found {len(documents)} document(s) and {len(assets)} asset(s)")

        with timed_phase(timing_log, "asset_registry"):
            registry = await build_asset_registry(assets)

        with timed_phase(timing_log, "transform"):
            results = await asyncio.gather(
                *(transform_document(doc, registry, config) for doc in documents),
                return_exceptions=True,
            )
        failures = [r for r in results if isinstance(r, BaseException)]
        if failures:
            raise failures[0]

        with timed_phase(timing_log, "sequencing"):
            book = sequence_pages(results)
    except FatalIngestError as e:
        logger.error(f"Ingestion aborted: {e}")
        raise

    if timing_log is not None:
        logger.debug(timing_log.summary())
    logger.info(f"Bound {len(book)} page(s)")
    return book


def process_files_sync(
    source: IngestSource,
    *,
    config: Optional[IngestConfig] = None,
    timing_log: Optional[TimingLog] = None,
) -> Tuple[PageDocument, ...]:
    """Run process_files() to completion on a fresh event loop."""
    return asyncio.run(process_files(source, config=config, timing_log=timing_log))
