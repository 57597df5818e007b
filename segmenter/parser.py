"""
segmenter/parser.py — podział tekstu na nagłówek dokumentu i płaską listę sekcji.

Architektura:
  text → normalizacja końców linii → _locate_headings() (z pominięciem bloków
  ograniczonych) → nagłówek dokumentu + sekcje → extract_header() dla każdego
  nagłówka → RawDocument

Segmenter nie odtwarza zagnieżdżenia: treść sekcji zawiera podsekcje dosłownie,
a głębokość pochodzi wyłącznie z długości ciągu '='. Duplikaty tytułu są tylko
zliczane (RawDocument.title_lines) — zgłasza je walidator.

Kluczowe funkcje publiczne:
  segment(text) -> RawDocument
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from data_model.documents import ParseWarning, RawDocument, Section, SourceSpan
from segmenter.heading_patterns import match_attribute, match_fence, match_heading
from segmenter.metadata import ExtractedHeader, extract_header

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Typy wewnętrzne
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class _Heading:
    index: int      # 0-based indeks linii
    depth: int
    title: str


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n")


def segment(text: str) -> RawDocument:
    """
    Dzieli tekst na nagłówek dokumentu i płaską listę sekcji.

    Args:
        text: tekst źródłowy (UTF-8, dowolne końce linii)
    """
    text = normalize_newlines(text)
    lines = text.split("\n")

    headings = _locate_headings(lines)
    title_headings = [h for h in headings if h.depth == 1]
    document_heading = title_headings[0] if title_headings else None

    # Granice sekcji wyznaczają nagłówki sekcji i tytuł dokumentu stojący przed
    # pierwszą sekcją; pozostałe linie '= …' zostają w treści (duplikat albo
    # tytuł po sekcji zgłosi walidator).
    section_headings = [h for h in headings if h.depth >= 2]
    first_section = section_headings[0].index if section_headings else len(lines)
    structural = [
        h for h in headings
        if h.depth >= 2 or (h is document_heading and h.index < first_section)
    ]

    warnings: list[ParseWarning] = []
    header = _extract_document_header(lines, document_heading, section_headings)
    warnings.extend(header.warnings)

    sections: list[Section] = []
    for pos, heading in enumerate(structural):
        if heading.depth < 2:
            continue
        end = _section_end(structural, pos, len(lines))
        section, section_warnings = _build_section(lines, heading, end)
        sections.append(section)
        warnings.extend(section_warnings)

    title = document_heading.title if document_heading else None
    doc = RawDocument(
        text=text,
        title=title,
        title_lines=tuple(h.index + 1 for h in title_headings),
        preamble_body=_join_body(header.body_lines),
        attributes=tuple(header.attributes),
        authors=tuple(header.authors),
        metadata=header.metadata,
        custom_attributes=header.custom_attributes,
        sections=tuple(sections),
        warnings=tuple(warnings),
    )
    log.debug(
        "Segmentacja: tytuł=%r, linii tytułu=%d, sekcji=%d, ostrzeżeń=%d",
        title, len(title_headings), len(sections), len(warnings),
    )
    return doc


# ---------------------------------------------------------------------------
# Wewnętrzna implementacja
# ---------------------------------------------------------------------------

def _locate_headings(lines: list[str]) -> list[_Heading]:
    """Nagłówki w kolejności dokumentu, z pominięciem bloków ograniczonych."""
    headings: list[_Heading] = []
    open_fence: str | None = None

    for idx, line in enumerate(lines):
        fence = match_fence(line)
        if open_fence is not None:
            if fence == open_fence:
                open_fence = None
            continue
        if fence is not None:
            open_fence = fence
            continue

        heading = match_heading(line)
        if heading is not None:
            headings.append(_Heading(index=idx, depth=heading.depth, title=heading.title))
    return headings


def _section_end(structural: list[_Heading], pos: int, n_lines: int) -> int:
    """Indeks (wyłączny) końca sekcji: następny nagłówek o głębokości <= własnej."""
    depth = structural[pos].depth
    for nxt in structural[pos + 1:]:
        if nxt.depth <= depth:
            return nxt.index
    return n_lines


def _extract_document_header(
    lines: list[str],
    document_heading: _Heading | None,
    section_headings: list[_Heading],
) -> ExtractedHeader:
    """
    Preambuła dokumentu: atrybuty przed tytułem + linie od tytułu do pierwszej
    sekcji. Bez tytułu: linie przed pierwszą sekcją.
    """
    first_section = section_headings[0].index if section_headings else len(lines)

    if document_heading is None or document_heading.index > first_section:
        stop = first_section
        numbers = list(range(1, stop + 1))
        return extract_header(lines[:stop], is_section=False, line_numbers=numbers)

    start = document_heading.index
    # atrybuty przed tytułem (np. ustawienia na początku pliku)
    numbers = [i + 1 for i in range(start) if match_attribute(lines[i]) is not None]
    header_lines = [lines[n - 1] for n in numbers]

    numbers.extend(range(start + 2, first_section + 1))
    header_lines.extend(lines[start + 1:first_section])
    return extract_header(header_lines, is_section=False, line_numbers=numbers)


def _build_section(
    lines: list[str],
    heading: _Heading,
    end: int,
) -> tuple[Section, list[ParseWarning]]:
    header = extract_header(
        lines[heading.index + 1:end],
        is_section=True,
        first_line=heading.index + 2,
    )

    last = end
    while last > heading.index + 1 and not lines[last - 1].strip():
        last -= 1

    section = Section(
        title=heading.title,
        depth=heading.depth,
        body=_join_body(header.body_lines),
        attributes=tuple(header.attributes),
        authors=tuple(header.authors),
        metadata=header.metadata,
        custom_attributes=header.custom_attributes,
        span=SourceSpan(heading.index + 1, max(last, heading.index + 1)),
    )
    return section, header.warnings


def _join_body(body_lines: list[str]) -> str:
    """Łączy linie treści, obcinając puste linie na początku i końcu."""
    start, stop = 0, len(body_lines)
    while start < stop and not body_lines[start].strip():
        start += 1
    while stop > start and not body_lines[stop - 1].strip():
        stop -= 1
    return "\n".join(line.rstrip() for line in body_lines[start:stop])
