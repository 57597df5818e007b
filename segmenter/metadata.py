"""
segmenter/metadata.py — ekstrakcja metadanych z preambuły nagłówka.

extract_header(lines, is_section=...) -> ExtractedHeader

Preambuła to linie zaraz po nagłówku aż do pierwszej linii, która nie jest
pusta, nie jest atrybutem i nie jest linią autora. Reszta to treść (body).

Zasady:
  - Linie ':klucz: wartość' to zawsze atrybuty; nie przerywają szukania autorów.
  - Autorzy tylko w liniach bezpośrednio po nagłówku (do pierwszej pustej linii):
      a) 'Imię <email>' (także kilku autorów rozdzielonych ';')
      b) w sekcjach: <= 2 słowa z samych liter → autor + ostrzeżenie
         W_AMBIGUOUS_AUTHOR (to może być też krótki akapit)
  - Linia rewizji 'v1.0, 2024-01-01: uwaga' tylko w dokumencie, zaraz po autorze;
    jej wartości mają pierwszeństwo przed atrybutami.
  - tags/keywords: rozbijane po przecinku, bez duplikatów, kolejność pierwszego
    wystąpienia.
  - summary/description: wielokrotne wartości łączone spacją; pozostałe pola
    kanoniczne: ostatnia wartość wygrywa.
  - Klucze spoza mapowania i spoza listy zarezerwowanej → CustomAttributes.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from data_model.documents import Author, ParseWarning
from data_model.metadata import AutoUpdate, CustomAttributes, PublicationMetadata
from segmenter.heading_patterns import (
    AUTHOR_EMAIL_RE,
    AUTHOR_NAME_RE,
    REVISION_RE,
    is_unset_attribute,
    match_attribute,
    match_heading,
)

log = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Mapowanie atrybutów na pola PublicationMetadata
# ---------------------------------------------------------------------------

ATTRIBUTE_MAP: dict[str, str] = {
    # standardowe atrybuty Asciidoctora
    "author":        "authors",
    "description":   "summary",
    "keywords":      "tags",
    "revnumber":     "version",
    "revdate":       "publication_date",
    "revremark":     "edition",
    "title":         "title",
    # atrybuty publikacji
    "published_by":  "published_by",
    "publisher":     "publisher",
    "summary":       "summary",
    "image":         "cover_image",
    "cover":         "cover_image",
    "isbn":          "isbn",
    "source":        "source",
    "type":          "type",
    "auto-update":   "auto_update",
    "version":       "version",
    "edition":       "edition",
    "published_on":  "publication_date",
    "date":          "publication_date",
    "version-label": "version",
    "tags":          "tags",
}

# Atrybuty systemowe Asciidoctora — nie trafiają do CustomAttributes.
RESERVED_ATTRIBUTES: frozenset[str] = frozenset({
    "attribute-undefined", "attribute-missing",
    "appendix-caption", "appendix-refsig",
    "caution-caption", "chapter-refsig",
    "example-caption", "figure-caption",
    "important-caption", "last-update-label",
    "manname-title", "note-caption",
    "part-refsig", "preface-title",
    "section-refsig", "table-caption",
    "tip-caption", "toc-title",
    "untitled-label", "warning-caption",
    "asciidoctor", "asciidoctor-version",
    "safe-mode-name", "backend", "doctype", "basebackend",
    "filetype", "outfilesuffix", "stylesdir", "iconsdir",
    "localdate", "localyear", "localtime", "localdatetime",
    "docdate", "docyear", "doctime", "docdatetime",
    "doctitle", "embedded", "notitle",
    # ustawienia renderowania
    "toc", "toclevels", "sectnums", "sectnumlevels", "sectanchors",
    "sectids", "idprefix", "idseparator", "icons", "imagesdir",
    "source-highlighter", "experimental", "stem", "nofooter", "noheader",
})


# ---------------------------------------------------------------------------
# Wynik ekstrakcji
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ExtractedHeader:
    """
    Wynik extract_header().

    - metadata:          pola kanoniczne
    - authors:           autorzy (linie autora + :author:), bez duplikatów nazw
    - custom_attributes: atrybuty spoza mapowania i listy zarezerwowanej
    - attributes:        wszystkie atrybuty; tags/keywords rozwinięte
    - body_lines:        linie treści (po preambule)
    - warnings:          ostrzeżenia (W_AMBIGUOUS_AUTHOR, W_INVALID_ATTRIBUTE)
    """
    metadata: PublicationMetadata = field(default_factory=PublicationMetadata)
    authors: list[Author] = field(default_factory=list)
    custom_attributes: CustomAttributes = field(default_factory=list)
    attributes: list[tuple[str, str]] = field(default_factory=list)
    body_lines: list[str] = field(default_factory=list)
    warnings: list[ParseWarning] = field(default_factory=list)


@dataclass(slots=True)
class _Revision:
    number: str
    date: str | None
    remark: str | None


# ---------------------------------------------------------------------------
# Publiczne API
# ---------------------------------------------------------------------------

def split_tags(value: str) -> list[str]:
    """'a, b,,c' → ['a', 'b', 'c'] (puste fragmenty pomijane)."""
    return [frag.strip() for frag in value.split(",") if frag.strip()]


def extract_header(
    lines: list[str],
    *,
    is_section: bool,
    first_line: int = 1,
    line_numbers: list[int] | None = None,
) -> ExtractedHeader:
    """
    Rozdziela linie pod nagłówkiem na preambułę (metadane) i treść.

    Args:
        lines:        linie pod nagłówkiem (bez samego nagłówka)
        is_section:   True dla sekcji, False dla nagłówka dokumentu
        first_line:   numer linii (1-based) odpowiadający lines[0]
        line_numbers: jawne numery linii (gdy lines nie są ciągłe w źródle)
    """
    result = ExtractedHeader()
    raw_attributes: list[tuple[str, str, int]] = []
    revision: _Revision | None = None

    scanning_authors = True
    last_was_author = False
    i = 0
    while i < len(lines):
        stripped = lines[i].strip()
        lineno = line_numbers[i] if line_numbers else first_line + i

        if not stripped:
            # pusta linia kończy szukanie autorów, ale nie preambułę
            scanning_authors = False
            last_was_author = False
            i += 1
            continue

        if match_heading(stripped) is not None:
            break

        attr = match_attribute(stripped)
        if attr is not None:
            key, value = attr
            if not is_unset_attribute(key):
                raw_attributes.append((key, value, lineno))
            last_was_author = False
            i += 1
            continue

        if scanning_authors:
            authors = _match_authors(stripped, is_section)
            if authors:
                for author in authors:
                    _add_author(result.authors, author)
                if authors[0].email is None:
                    result.warnings.append(ParseWarning(
                        code="W_AMBIGUOUS_AUTHOR",
                        line=lineno,
                        message=(
                            f"Linia '{stripped}' potraktowana jako autor sekcji "
                            "(krótka linia bez adresu e-mail)."
                        ),
                    ))
                last_was_author = True
                i += 1
                continue

            if not is_section and last_was_author and revision is None:
                revision = _match_revision(stripped)
                if revision is not None:
                    last_was_author = False
                    i += 1
                    continue

        break

    result.body_lines = list(lines[i:])
    _apply_attributes(result, raw_attributes)

    if revision is not None:
        # wartości z linii rewizji mają pierwszeństwo przed atrybutami
        result.metadata.version = revision.number
        if revision.date:
            result.metadata.publication_date = revision.date
        if revision.remark:
            result.metadata.edition = revision.remark

    result.metadata.authors = [a.name for a in result.authors]
    return result


# ---------------------------------------------------------------------------
# Autorzy i rewizja
# ---------------------------------------------------------------------------

def _match_authors(line: str, is_section: bool) -> list[Author]:
    if line.startswith(":"):
        return []

    if "<" in line:
        authors: list[Author] = []
        for part in line.split(";"):
            part = part.strip()
            if not part:
                continue
            m = AUTHOR_EMAIL_RE.match(part)
            if m is None or not m.group("name").strip():
                return []
            authors.append(Author(name=m.group("name").strip(), email=m.group("email")))
        return authors

    if is_section and AUTHOR_NAME_RE.match(line):
        return [Author(name=" ".join(line.split()))]

    return []


def _match_revision(line: str) -> _Revision | None:
    m = REVISION_RE.match(line)
    if m is None:
        return None
    return _Revision(
        number=m.group("number"),
        date=(m.group("date") or "").strip() or None,
        remark=(m.group("remark") or "").strip() or None,
    )


def _add_author(authors: list[Author], author: Author) -> None:
    if all(a.name != author.name for a in authors):
        authors.append(author)


# ---------------------------------------------------------------------------
# Atrybuty → metadane
# ---------------------------------------------------------------------------

def _apply_attributes(
    result: ExtractedHeader,
    raw_attributes: list[tuple[str, str, int]],
) -> None:
    meta = result.metadata
    seen_tags: set[str] = set()

    for key, value, lineno in raw_attributes:
        norm = key.lower()
        field_name = ATTRIBUTE_MAP.get(norm)

        if field_name == "tags":
            for tag in split_tags(value):
                result.attributes.append((key, tag))
                if tag not in seen_tags:
                    seen_tags.add(tag)
                    meta.tags.append(tag)
            continue

        result.attributes.append((key, value))
        if not value:
            continue

        if field_name == "authors":
            _add_author(result.authors, Author(name=value))
        elif field_name == "summary":
            meta.summary = f"{meta.summary} {value}" if meta.summary else value
        elif field_name == "auto_update":
            try:
                meta.auto_update = AutoUpdate(value.lower())
            except ValueError:
                log.warning("Nieznana wartość :auto-update: '%s' (linia %d)", value, lineno)
                result.warnings.append(ParseWarning(
                    code="W_INVALID_ATTRIBUTE",
                    line=lineno,
                    message=(
                        f"Atrybut :{key}: ma wartość '{value}'; "
                        "dozwolone: yes, ask, no."
                    ),
                ))
        elif field_name is not None:
            setattr(meta, field_name, value)
        elif norm not in RESERVED_ATTRIBUTES:
            result.custom_attributes.append((key, value))
