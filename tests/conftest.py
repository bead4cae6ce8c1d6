import io
import sys
from pathlib import Path
from typing import Dict, List, Optional, Union

import pytest
from PIL import Image

# Add src to sys.path so we can import livremele
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from livremele.core.models import (  # noqa: E402
    DirectoryEntry,
    DirectoryReader,
    Entry,
    FileEntry,
    FileHandle,
)
from livremele.ingest.sources import MemoryFile  # noqa: E402


# ─────────────────────────────────────────────────────────────────────────────
# Fake drop hierarchy
# ─────────────────────────────────────────────────────────────────────────────

TreeLayout = Dict[str, Union[str, bytes, "TreeLayout"]]


class FakeFileEntry(FileEntry):
    def __init__(self, name: str, full_path: str, data: Union[str, bytes], fail: bool = False):
        self.name = name
        self.full_path = full_path
        self._data = data
        self._fail = fail
        self.resolve_count = 0

    async def get_file(self) -> FileHandle:
        self.resolve_count += 1
        if self._fail:
            raise PermissionError(f"denied: {self.full_path}")
        return MemoryFile(self.name, self._data, path=self.full_path)


class FakeDirectoryReader(DirectoryReader):
    """Hands out children batch_size at a time, then empty batches."""

    def __init__(self, children: List[Entry], batch_size: int, fail_after: Optional[int] = None):
        self._children = children
        self._batch_size = batch_size
        self._position = 0
        self._calls = 0
        self._fail_after = fail_after

    async def read_entries(self) -> List[Entry]:
        if self._fail_after is not None and self._calls >= self._fail_after:
            raise OSError("listing interrupted")
        self._calls += 1
        batch = self._children[self._position:self._position + self._batch_size]
        self._position += len(batch)
        return batch


class FakeDirectoryEntry(DirectoryEntry):
    def __init__(
        self,
        name: str,
        full_path: str,
        children: List[Entry],
        batch_size: int = 2,
        fail_after: Optional[int] = None,
    ):
        self.name = name
        self.full_path = full_path
        self.children = children
        self._batch_size = batch_size
        self._fail_after = fail_after

    def create_reader(self) -> DirectoryReader:
        return FakeDirectoryReader(self.children, self._batch_size, self._fail_after)


def build_tree(layout: TreeLayout, name: str = "book", parent: str = "", batch_size: int = 2) -> FakeDirectoryEntry:
    full_path = f"{parent}/{name}"
    children: List[Entry] = []
    for child_name, value in layout.items():
        if isinstance(value, dict):
            children.append(build_tree(value, child_name, full_path, batch_size))
        else:
            children.append(FakeFileEntry(child_name, f"{full_path}/{child_name}", value))
    return FakeDirectoryEntry(name, full_path, children, batch_size)


class FailingFile(FileHandle):
    """FileHandle whose read always fails."""

    def __init__(self, name: str, media_type: str = ""):
        self.name = name
        self.path = name
        self.media_type = media_type

    async def read_bytes(self) -> bytes:
        raise OSError(f"cannot read {self.name}")


# ─────────────────────────────────────────────────────────────────────────────
# Fixtures
# ─────────────────────────────────────────────────────────────────────────────

@pytest.fixture
def make_tree():
    """Factory for nested fake directories from a nested dict."""
    return build_tree


@pytest.fixture
def png_bytes() -> bytes:
    """A small PNG image."""
    img = Image.new("RGB", (4, 4), color="white")
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def sample_image(tmp_path: Path, png_bytes: bytes) -> Path:
    """A PNG written to disk."""
    img_path = tmp_path / "sample.png"
    img_path.write_bytes(png_bytes)
    return img_path


@pytest.fixture
def failing_file():
    return FailingFile


SVG_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" '
    'xmlns:xlink="http://www.w3.org/1999/xlink"{attrs}>{body}</svg>'
)


@pytest.fixture
def make_svg():
    """Factory for SVG text: make_svg(body, attrs=' viewBox="0 0 10 10"')."""
    def _make(body: str = "", attrs: str = "") -> str:
        return SVG_TEMPLATE.format(attrs=attrs, body=body)
    return _make
