"""
Unit Tests for Page Sequencing
"""

import pytest

from livremele.core.models import PageDocument
from livremele.ingest.sequencer import natural_sort_key, sequence_pages


def _pages(*names: str):
    return [PageDocument(id=f"id-{i}", name=name, content="") for i, name in enumerate(names)]


class TestNaturalSortKey:
    """Tests for natural_sort_key()."""

    def test_key_when_digits_then_compared_numerically(self):
        assert natural_sort_key("page2.svg") < natural_sort_key("page10.svg")

    def test_key_when_case_differs_then_equal(self):
        assert natural_sort_key("Page1.svg") == natural_sort_key("page1.svg")

    def test_key_when_accented_then_folds_to_base_letter(self):
        assert natural_sort_key("Élan.svg") == natural_sort_key("elan.svg")

    def test_key_when_leading_number_vs_text_then_comparable(self):
        """Mixed shapes must compare without TypeError."""
        keys = sorted([natural_sort_key("intro.svg"), natural_sort_key("01.svg")])
        assert keys[0] == natural_sort_key("01.svg")


class TestSequencePages:
    """Tests for sequence_pages()."""

    def test_sequence_when_numbered_names_then_natural_order(self):
        """page10, page2, page1 become 1, 2, 10 with indices 0..2."""
        book = sequence_pages(_pages("page10.svg", "page2.svg", "page1.svg"))

        assert [p.name for p in book] == ["page1.svg", "page2.svg", "page10.svg"]
        assert [p.index for p in book] == [0, 1, 2]

    def test_sequence_when_mixed_case_then_case_insensitive(self):
        book = sequence_pages(_pages("b.svg", "A.svg", "c.svg"))
        assert [p.name for p in book] == ["A.svg", "b.svg", "c.svg"]

    def test_sequence_when_keys_tie_then_input_order_kept(self):
        book = sequence_pages(_pages("Page1.svg", "page1.svg"))
        assert [p.id for p in book] == ["id-0", "id-1"]

    def test_sequence_when_called_then_inputs_unmodified(self):
        pages = _pages("b.svg", "a.svg")

        book = sequence_pages(pages)

        assert [p.index for p in pages] == [0, 0]
        assert book[0] is not pages[1]
        assert book[0].id == pages[1].id

    @pytest.mark.parametrize("count", [0, 1, 25])
    def test_sequence_when_any_count_then_indices_contiguous(self, count):
        book = sequence_pages(_pages(*(f"p{i}.svg" for i in reversed(range(count)))))
        assert [p.index for p in book] == list(range(count))
        assert isinstance(book, tuple)
