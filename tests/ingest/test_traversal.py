"""
Unit Tests for File Collection

Tests for collect_files() and traverse_entry(): batched directory
listing, depth-first ordering, hidden-file filtering and strict failure.
"""

import pytest

from conftest import FakeDirectoryEntry, FakeFileEntry
from livremele.core.errors import FatalIngestError
from livremele.core.models import DataTransfer, TransferItem
from livremele.ingest.sources import MemoryFile
from livremele.ingest.traversal import (
    collect_files,
    read_all_entries,
    traverse_entry,
)


NESTED = {
    "p1.svg": "<svg/>",
    "chapter": {
        "p2.svg": "<svg/>",
        "deep": {"p3.svg": "<svg/>", "bg.png": b"\x89PNG"},
    },
    "logo.png": b"\x89PNG",
}


class TestReadAllEntries:
    """Tests for draining a batched reader."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("batch_size", [1, 2, 3, 10])
    async def test_read_when_batched_then_returns_every_child(self, make_tree, batch_size):
        """Partial batches must be drained until an empty batch."""
        tree = make_tree({f"p{i}.svg": "<svg/>" for i in range(7)}, batch_size=batch_size)

        entries = await read_all_entries(tree.create_reader())

        assert [e.name for e in entries] == [f"p{i}.svg" for i in range(7)]

    @pytest.mark.asyncio
    async def test_read_when_empty_directory_then_empty_list(self, make_tree):
        entries = await read_all_entries(make_tree({}).create_reader())
        assert entries == []


class TestTraverseEntry:
    """Tests for depth-first flattening."""

    @pytest.mark.asyncio
    async def test_traverse_when_nested_then_depth_first_preorder(self, make_tree):
        """Subfolders are fully visited before later siblings."""
        files = await traverse_entry(make_tree(NESTED, batch_size=1))

        assert [f.path for f in files] == [
            "/book/p1.svg",
            "/book/chapter/p2.svg",
            "/book/chapter/deep/p3.svg",
            "/book/chapter/deep/bg.png",
            "/book/logo.png",
        ]

    @pytest.mark.asyncio
    async def test_traverse_when_many_levels_then_no_depth_limit(self, make_tree):
        """Deep nesting must not be truncated."""
        layout = {"leaf.svg": "<svg/>"}
        for level in range(60):
            layout = {f"level{level}": layout}

        files = await traverse_entry(make_tree(layout))

        assert [f.name for f in files] == ["leaf.svg"]

    @pytest.mark.asyncio
    async def test_traverse_when_file_entry_then_resolved_once(self):
        entry = FakeFileEntry("a.svg", "/a.svg", "<svg/>")

        files = await traverse_entry(entry)

        assert [f.name for f in files] == ["a.svg"]
        assert entry.resolve_count == 1

    @pytest.mark.asyncio
    async def test_traverse_when_file_unreadable_then_fatal(self):
        """A file entry that cannot be resolved aborts the traversal."""
        root = FakeDirectoryEntry(
            "book",
            "/book",
            [
                FakeFileEntry("a.svg", "/book/a.svg", "<svg/>"),
                FakeFileEntry("b.svg", "/book/b.svg", "<svg/>", fail=True),
            ],
        )

        with pytest.raises(FatalIngestError) as exc_info:
            await traverse_entry(root)

        assert exc_info.value.source == "/book/b.svg"
        assert isinstance(exc_info.value.__cause__, PermissionError)

    @pytest.mark.asyncio
    async def test_traverse_when_listing_fails_midway_then_fatal(self):
        """A reader failing after its first batch aborts with no partial result."""
        children = [FakeFileEntry(f"p{i}.svg", f"/book/p{i}.svg", "<svg/>") for i in range(4)]
        root = FakeDirectoryEntry("book", "/book", children, batch_size=2, fail_after=1)

        with pytest.raises(FatalIngestError, match="Failed to list /book"):
            await traverse_entry(root)


class TestCollectFiles:
    """Tests for collect_files() input normalization."""

    @pytest.mark.asyncio
    async def test_collect_when_transfer_has_entries_then_each_file_once(self, make_tree):
        transfer = DataTransfer(items=(TransferItem(entry=make_tree(NESTED, batch_size=2)),))

        files = await collect_files(transfer)

        paths = [f.path for f in files]
        assert len(paths) == len(set(paths)) == 5

    @pytest.mark.asyncio
    async def test_collect_when_mixed_transfer_then_flat_files_first(self, make_tree):
        """Flat files come before traversed entries, in item order."""
        transfer = DataTransfer(items=(
            TransferItem(entry=make_tree({"p2.svg": "<svg/>"})),
            TransferItem(kind="file", file=MemoryFile("loose.svg", "<svg/>")),
            TransferItem(kind="string"),
        ))

        files = await collect_files(transfer)

        assert [f.name for f in files] == ["loose.svg", "p2.svg"]

    @pytest.mark.asyncio
    async def test_collect_when_hidden_files_then_dropped(self, make_tree):
        transfer = DataTransfer(items=(TransferItem(entry=make_tree({
            ".DS_Store": b"\x00",
            "p1.svg": "<svg/>",
            "sub": {"._p2.svg": "<svg/>", "p2.svg": "<svg/>"},
        })),))

        files = await collect_files(transfer)

        assert [f.name for f in files] == ["p1.svg", "p2.svg"]

    @pytest.mark.asyncio
    async def test_collect_when_flat_list_then_kept_in_order(self):
        files = await collect_files([
            MemoryFile("b.svg", "<svg/>"),
            MemoryFile(".hidden.svg", "<svg/>"),
            MemoryFile("a.png", b"\x89PNG"),
        ])

        assert [f.name for f in files] == ["b.svg", "a.png"]

    @pytest.mark.asyncio
    async def test_collect_when_empty_transfer_then_empty(self):
        assert await collect_files(DataTransfer()) == []
