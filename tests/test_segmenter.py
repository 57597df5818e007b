"""
Testy segmentera (segmenter/parser.py).

Run: python -m pytest tests/test_segmenter.py -q
"""

from data_model import SourceSpan
from segmenter import match_attribute, match_heading, segment


# ---------------------------------------------------------------------------
# Wzorce linii
# ---------------------------------------------------------------------------

class TestMatchHeading:
    def test_document_title(self):
        m = match_heading("= Tytuł")
        assert m.depth == 1 and m.title == "Tytuł"

    def test_section_depth_is_run_length(self):
        assert match_heading("==== Głęboko").depth == 4

    def test_requires_whitespace_after_marks(self):
        assert match_heading("==Nie") is None
        assert match_heading("====") is None

    def test_trailing_whitespace_trimmed(self):
        assert match_heading("== Tytuł   ").title == "Tytuł"


class TestMatchAttribute:
    def test_key_value(self):
        assert match_attribute(":author: Ada") == ("author", "Ada")

    def test_empty_value(self):
        assert match_attribute(":toc:") == ("toc", "")

    def test_value_with_colon(self):
        assert match_attribute(":source: https://example.org") == ("source", "https://example.org")

    def test_plain_text_is_not_attribute(self):
        assert match_attribute("Uwaga: to nie atrybut") is None


# ---------------------------------------------------------------------------
# segment()
# ---------------------------------------------------------------------------

class TestSegment:
    def test_round_trip_document(self, round_trip_text):
        doc = segment(round_trip_text)
        assert doc.title == "Doc"
        assert doc.title_lines == (1,)
        assert [s.title for s in doc.sections] == ["One", "Two"]
        assert [s.body for s in doc.sections] == ["Body1", "Body2"]
        assert all(s.depth == 2 for s in doc.sections)
        assert doc.metadata.authors == ["Ada"]
        assert doc.preamble_body == ""

    def test_no_heading_yields_no_sections(self):
        doc = segment("tylko tekst\nbez nagłówków")
        assert doc.title is None
        assert doc.sections == ()

    def test_leading_blank_lines_ignored(self):
        doc = segment("\n\n= Doc\n== A\nText, a.")
        assert doc.title == "Doc"
        assert doc.title_lines == (3,)
        assert doc.sections[0].body == "Text, a."

    def test_crlf_normalised(self):
        doc = segment("= Doc\r\n== A\r\nText, one.\r\n")
        assert doc.sections[0].body == "Text, one."
        assert "\r" not in doc.text

    def test_duplicate_titles_counted_not_rejected(self):
        doc = segment("= A\n= B\n== S\nx y z.")
        assert doc.title == "A"
        assert doc.title_lines == (1, 2)
        assert len(doc.sections) == 1

    def test_title_after_section_stays_in_body(self):
        doc = segment(
            "== A\nalpha, x.\n= Doc\nlate paragraph, here.\n:mood: calm\n== B\nbeta, y."
        )
        assert doc.title_lines == (3,)
        assert doc.preamble_body == ""
        assert [s.title for s in doc.sections] == ["A", "B"]
        assert doc.sections[0].body == (
            "alpha, x.\n= Doc\nlate paragraph, here.\n:mood: calm"
        )

    def test_body_includes_nested_sections_verbatim(self, book_text):
        doc = segment(book_text)
        part_one = doc.sections[0]
        assert part_one.title == "Part One"
        assert part_one.body == (
            "Wstęp do części 1.\n\n"
            "=== Chapter A\nTreść A, akapit 1.\n\n"
            "=== Chapter B\nTreść B, akapit 2."
        )
        assert [s.depth for s in doc.sections] == [2, 3, 3, 2]

    def test_body_ends_at_heading_of_same_or_lower_depth(self, book_text):
        doc = segment(book_text)
        chapter_b = doc.sections[2]
        assert chapter_b.body == "Treść B, akapit 2."

    def test_delimited_block_suspends_headings(self):
        text = "= Doc\n== A\n----\n== nie nagłówek\n----\nafter, text.\n== B\nb text."
        doc = segment(text)
        assert [s.title for s in doc.sections] == ["A", "B"]
        assert "== nie nagłówek" in doc.sections[0].body

    def test_backtick_fence_with_language(self):
        text = "= Doc\n== A\n```python\n== x = 1\n```\n== B\nb text."
        doc = segment(text)
        assert [s.title for s in doc.sections] == ["A", "B"]

    def test_section_span(self):
        doc = segment("= Doc\n== A\nline one.\n\n== B\nline two.")
        assert doc.sections[0].span == SourceSpan(2, 3)
        assert doc.sections[1].span == SourceSpan(5, 6)

    def test_document_preamble_body(self, book_text):
        doc = segment(book_text)
        assert doc.preamble_body == "Preambuła książki."
        assert doc.metadata.type == "book"
        assert doc.custom_attributes == [("language", "pl")]

    def test_attributes_before_title(self):
        doc = segment(":language: en\n= Doc\n== A\nText, here.")
        assert doc.custom_attributes == [("language", "en")]
        assert doc.title == "Doc"

    def test_section_metadata(self):
        doc = segment("= Doc\n== A\n:summary: Short.\n:keywords: x, y\n\nBody, text.")
        section = doc.sections[0]
        assert section.metadata.summary == "Short."
        assert section.metadata.tags == ["x", "y"]
        assert section.attributes == (("summary", "Short."), ("keywords", "x"), ("keywords", "y"))
        assert section.body == "Body, text."

    def test_min_section_depth(self):
        doc = segment("=== C\nc, c.\n== B\nb, b.")
        assert doc.min_section_depth == 2
        assert segment("= Doc").min_section_depth is None

    def test_scattered_document_has_no_title(self, scattered_text):
        doc = segment(scattered_text)
        assert doc.title is None
        assert [s.title for s in doc.sections] == ["Alpha", "Beta", "Beta detail"]
