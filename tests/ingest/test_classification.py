"""
Unit Tests for Document / Asset Classification
"""

from livremele.ingest.classification import (
    is_document,
    is_hidden,
    split_documents_and_assets,
)
from livremele.ingest.config import IngestConfig
from livremele.ingest.sources import MemoryFile


class TestClassification:
    """Tests for is_document(), is_hidden() and the split."""

    def test_is_document_when_svg_extension_any_case_then_true(self):
        assert is_document(MemoryFile("Page1.SVG", b"")) is True

    def test_is_document_when_declared_svg_type_then_true(self):
        assert is_document(MemoryFile("drawing", b"", media_type="image/svg+xml")) is True

    def test_is_document_when_image_then_false(self):
        assert is_document(MemoryFile("logo.png", b"", media_type="image/png")) is False

    def test_is_hidden_when_dot_prefix_then_true(self):
        assert is_hidden(MemoryFile(".DS_Store", b"")) is True
        assert is_hidden(MemoryFile("p1.svg", b"")) is False

    def test_split_when_mixed_then_order_preserved_in_each_group(self):
        files = [
            MemoryFile("b.svg", b""),
            MemoryFile("logo.png", b""),
            MemoryFile("a.svg", b""),
            MemoryFile("font.woff", b""),
        ]

        documents, assets = split_documents_and_assets(files)

        assert [f.name for f in documents] == ["b.svg", "a.svg"]
        assert [f.name for f in assets] == ["logo.png", "font.woff"]

    def test_split_when_custom_extension_then_used(self):
        config = IngestConfig(document_extension=".xml", document_media_type="application/xml")

        documents, assets = split_documents_and_assets(
            [MemoryFile("p.xml", b""), MemoryFile("p.svg", b"")], config
        )

        assert [f.name for f in documents] == ["p.xml"]
        assert [f.name for f in assets] == ["p.svg"]
