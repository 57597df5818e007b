"""
segmenter/heading_patterns.py — wzorce linii rozpoznawanych przez segmenter.

Rozpoznajemy tylko trzy rodzaje linii specjalnych:
  - nagłówek:   ciąg '=' + biała spacja + tytuł; długość ciągu = głębokość
                (1 = tytuł dokumentu, >= 2 = sekcja)
  - atrybut:    :klucz: wartość   (:klucz!: / :!klucz: = odwołanie, ignorowane)
  - autor:      'Imię Nazwisko <email>' (dokument i sekcje) albo samo
                imię/nazwisko (<= 2 słowa, tylko litery; wyłącznie sekcje)

Bloki ograniczone (----, ...., ++++, ////, ```) wyłączają rozpoznawanie
nagłówków — linia '== x' w listingu nie otwiera sekcji.
"""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class HeadingMatch:
    depth: int
    title: str


def _p(pattern: str) -> re.Pattern[str]:
    return re.compile(pattern, re.UNICODE)


# Nagłówek: "== Tytuł". Sam ciąg "====" bez spacji to delimiter bloku, nie nagłówek.
HEADING_RE = _p(r"^(?P<marks>=+)[ \t]+(?P<title>.*?)[ \t]*$")

# Atrybut: ":klucz: wartość" lub ":klucz:" (pusta wartość)
ATTRIBUTE_RE = _p(r"^:(?P<key>[^:\s][^:]*?):(?:[ \t]+(?P<value>.*?))?[ \t]*$")

# Autor z adresem: "Ada Lovelace <ada@example.org>"
AUTHOR_EMAIL_RE = _p(r"^(?P<name>[^<:;]*?)\s*<(?P<email>[^<>\s]+)>$")

# Autor bez adresu (tylko sekcje): jedno lub dwa słowa złożone z liter
AUTHOR_NAME_RE = _p(r"^[^\W\d_]+(?:[ \t]+[^\W\d_]+)?$")

# Linia rewizji (tylko nagłówek dokumentu, zaraz po autorze):
#   "v1.2, 2024-03-01: poprawki"  /  "1.2, 2024-03-01"  /  "v2"
REVISION_RE = _p(
    r"^v?(?P<number>\d[\w.\-]*)"
    r"(?:,[ \t]*(?P<date>[^:]+?))?"
    r"(?:[ \t]*:[ \t]*(?P<remark>.+?))?[ \t]*$"
)

# Delimitery bloków dosłownych / listingów / komentarzy
DELIMITER_RE = _p(r"^(?P<fence>-{4,}|\.{4,}|\+{4,}|/{4,}|`{3,})[^`]*$")

# Druga (i jedyna poza tytułem) niepusta linia "pustej publikacji"
EMPTY_PUBLICATION_MARKER = "index card"


def match_heading(line: str) -> HeadingMatch | None:
    """Zwraca HeadingMatch dla linii nagłówka lub None."""
    m = HEADING_RE.match(line)
    if m is None:
        return None
    return HeadingMatch(depth=len(m.group("marks")), title=m.group("title").strip())


def match_attribute(line: str) -> tuple[str, str] | None:
    """
    Zwraca (klucz, wartość) dla linii atrybutu lub None.

    Odwołania atrybutów (':klucz!:', ':!klucz:') zwracają klucz z '!' —
    wywołujący decyduje, czy je pominąć.
    """
    m = ATTRIBUTE_RE.match(line.strip())
    if m is None:
        return None
    return m.group("key").strip(), (m.group("value") or "").strip()


def match_fence(line: str) -> str | None:
    """Zwraca znacznik delimitera bloku (np. '----', '```') lub None."""
    m = DELIMITER_RE.match(line.strip())
    if m is None:
        return None
    fence = m.group("fence")
    # Delimitery AsciiDoc muszą stać same w linii; ``` może mieć język.
    if not fence.startswith("`") and line.strip() != fence:
        return None
    return fence


def is_unset_attribute(key: str) -> bool:
    return key.startswith("!") or key.endswith("!")


def is_empty_publication(lines: list[str]) -> bool:
    """
    True dla formy "pustej publikacji": dokładnie dwie niepuste linie —
    tytuł dokumentu ('= …') i znacznik EMPTY_PUBLICATION_MARKER.
    """
    non_empty = [ln.strip() for ln in lines if ln.strip()]
    if len(non_empty) != 2:
        return False
    heading = match_heading(non_empty[0])
    return (
        heading is not None
        and heading.depth == 1
        and bool(heading.title)
        and non_empty[1].lower() == EMPTY_PUBLICATION_MARKER
    )
