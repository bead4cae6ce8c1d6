"""
Module: ingest.registry

Purpose:
    Case-tolerant filename -> data: URL lookup for every non-document
    file. Built once per ingestion, then passed explicitly (read-only) to
    every document transformation.

Key Classes:
    - AssetRegistry: Exact-case and lowercase indices over the same URLs
    - LookupStrategy: One named step of the ordered lookup

Key Functions:
    - build_asset_registry(): Encode all assets concurrently (lenient)
    - decode_uri_component(): Percent-decoding that never raises

Algorithm:
    Lookup tries LOOKUP_STRATEGIES in order, first hit wins:
    1. exact filename against the exact index
    2. lowercased filename against the lowercase index
    3. percent-decoded filename against the exact index
    4. percent-decoded, lowercased filename against the lowercase index

Dependencies:
    - asyncio (std): Concurrent asset encoding
    - ingest.media: Media typing and encoding

Used By:
    - ingest.pipeline: Builds the registry
    - ingest.references: Resolves references
"""

from __future__ import annotations

import asyncio
import logging
import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Iterable, Mapping, Optional, Sequence, Tuple
from urllib.parse import unquote

from livremele.core.errors import RecoverableAssetError
from livremele.core.models import FileHandle

from .media import guess_media_type, to_data_url

logger = logging.getLogger(__name__)

# A "%" not followed by two hex digits
_MALFORMED_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


def decode_uri_component(value: str) -> str:
    """Percent-decode value; malformed sequences leave it unchanged."""
    if _MALFORMED_ESCAPE.search(value):
        return value
    try:
        return unquote(value, errors="strict")
    except UnicodeDecodeError:
        return value


@dataclass(frozen=True)
class LookupStrategy:
    """
    One step of the ordered registry lookup.

    Attributes:
        name: Strategy label (used in debug logs and tests)
        normalize: Maps a reference filename to a registry key
        lowercase_index: Query the lowercase index instead of the exact one
    """
    name: str
    normalize: Callable[[str], str]
    lowercase_index: bool = False


LOOKUP_STRATEGIES: Tuple[LookupStrategy, ...] = (
    LookupStrategy("exact", lambda f: f),
    LookupStrategy("lowercase", lambda f: f.lower(), lowercase_index=True),
    LookupStrategy("decoded", decode_uri_component),
    LookupStrategy(
        "decoded_lowercase",
        lambda f: decode_uri_component(f).lower(),
        lowercase_index=True,
    ),
)


class AssetRegistry:
    """
    Read-only filename -> data: URL registry.

    Both indices are populated from the same (name, url) pairs; for
    colliding keys the later pair wins.

    Example:
        >>> registry = AssetRegistry.from_pairs([("Logo.PNG", "data:image/png;base64,AA==")])
        >>> registry.resolve("logo.png")
        'data:image/png;base64,AA=='
    """

    def __init__(self, exact: Mapping[str, str], lowercase: Mapping[str, str]):
        self._exact = MappingProxyType(dict(exact))
        self._lowercase = MappingProxyType(dict(lowercase))

    @classmethod
    def from_pairs(cls, pairs: Iterable[Tuple[str, str]]) -> "AssetRegistry":
        exact: dict[str, str] = {}
        lowercase: dict[str, str] = {}
        for name, url in pairs:
            exact[name] = url
            lowercase[name.lower()] = url
        return cls(exact, lowercase)

    @classmethod
    def empty(cls) -> "AssetRegistry":
        return cls({}, {})

    @property
    def exact(self) -> Mapping[str, str]:
        return self._exact

    @property
    def lowercase(self) -> Mapping[str, str]:
        return self._lowercase

    def __len__(self) -> int:
        return len(self._exact)

    def __contains__(self, name: object) -> bool:
        return name in self._exact

    def lookup(
        self,
        filename: str,
        strategies: Sequence[LookupStrategy] = LOOKUP_STRATEGIES,
    ) -> Optional[Tuple[LookupStrategy, str]]:
        """
        Resolve filename, reporting which strategy matched.

        Returns:
            (strategy, data_url) for the first hit, or None on a miss
        """
        if not filename:
            return None
        for strategy in strategies:
            index = self._lowercase if strategy.lowercase_index else self._exact
            url = index.get(strategy.normalize(filename))
            if url is not None:
                return strategy, url
        return None

    def resolve(self, filename: str) -> Optional[str]:
        """Resolve filename to a data: URL; None is a silent miss."""
        hit = self.lookup(filename)
        return hit[1] if hit else None

    def __repr__(self) -> str:
        return f"AssetRegistry({len(self._exact)} assets)"


def _encode_bytes(name: str, data: bytes, declared: str) -> str:
    return to_data_url(data, guess_media_type(name, data, declared))


async def _encode_asset(handle: FileHandle) -> Tuple[str, str]:
    try:
        data = await handle.read_bytes()
    except Exception as e:
        raise RecoverableAssetError(
            f"Could not read asset {handle.name}: {e}", handle.name
        ) from e
    url = await asyncio.to_thread(_encode_bytes, handle.name, data, handle.media_type)
    return handle.name, url


async def build_asset_registry(assets: Sequence[FileHandle]) -> AssetRegistry:
    """
    Encode every asset concurrently and index the results.

    A failed read is logged and the asset is left out; this never raises.
    Pairs are indexed in completion order, so when two assets collide on
    a key the one finishing last wins.

    Args:
        assets: Non-document files

    Returns:
        Frozen AssetRegistry
    """
    pairs: list[Tuple[str, str]] = []
    for next_done in asyncio.as_completed([_encode_asset(h) for h in assets]):
        try:
            pairs.append(await next_done)
        except RecoverableAssetError as e:
            logger.warning(f"Skipping asset {e.asset_name}: {e.__cause__ or e}")

    registry = AssetRegistry.from_pairs(pairs)
    if len(registry.lowercase) < len(pairs):
        logger.debug(
            f"{len(pairs) - len(registry.lowercase)} asset name(s) collided "
            f"case-insensitively; last encoded wins"
        )
    logger.info(f"Registered {len(registry)} of {len(assets)} assets")
    return registry
