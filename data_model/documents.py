"""
data_model/documents.py — model dokumentu wejściowego (RawDocument) i sekcji.

Segmenter tworzy RawDocument raz na wywołanie kompilacji; obiekt nie jest
potem modyfikowany. Section odpowiada jednemu nagłówkowi o głębokości >= 2
(liczba znaków '=' w nagłówku). Treść sekcji (body) obejmuje wszystko do
następnego nagłówka o głębokości <= jej własnej — także zagnieżdżone
podsekcje, dosłownie. Zagnieżdżenie odtwarza dopiero compiler.build_tree.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from .metadata import CustomAttributes, PublicationMetadata


@dataclass(frozen=True, slots=True)
class SourceSpan:
    """Zakres linii w tekście źródłowym (1-based, włącznie)."""
    start_line: int
    end_line: int

    def __str__(self) -> str:
        if self.start_line == self.end_line:
            return str(self.start_line)
        return f"{self.start_line}–{self.end_line}"


@dataclass(frozen=True, slots=True)
class Author:
    """Autor z linii autora: 'Imię Nazwisko <email>' lub samo nazwisko."""
    name: str
    email: str | None = None


@dataclass(frozen=True, slots=True)
class ParseWarning:
    """
    Niekrytyczna uwaga zgłoszona podczas segmentacji / ekstrakcji metadanych.

    - code:    kod ostrzeżenia, np. "W_AMBIGUOUS_AUTHOR" (patrz validator.ErrorCode)
    - line:    numer linii (1-based) lub None
    - message: czytelny opis
    """
    code: str
    line: int | None
    message: str


@dataclass(frozen=True, slots=True)
class Section:
    """
    Jedna sekcja dokumentu (nagłówek '==', '===', …).

    - title:             tekst nagłówka bez znaczników '='
    - depth:             głębokość = długość ciągu '=' (>= 2)
    - body:              treść bez preambuły (atrybuty/autorzy), z podsekcjami
    - attributes:        wszystkie atrybuty preambuły; tags/keywords rozwinięte
                         na powtarzające się wpisy
    - authors:           autorzy z linii autora i atrybutu :author:
    - metadata:          pola kanoniczne
    - custom_attributes: pozostałe atrybuty (bez zarezerwowanych)
    - span:              linie od nagłówka do końca sekcji
    """
    title: str
    depth: int
    body: str
    attributes: tuple[tuple[str, str], ...] = ()
    authors: tuple[Author, ...] = ()
    metadata: PublicationMetadata = field(default_factory=PublicationMetadata)
    custom_attributes: CustomAttributes = field(default_factory=list)
    span: SourceSpan = SourceSpan(0, 0)

    @property
    def is_empty(self) -> bool:
        return not self.body.strip()


@dataclass(frozen=True, slots=True)
class RawDocument:
    """
    Dokument po segmentacji.

    - text:              pełny tekst wejściowy (po normalizacji końców linii)
    - title:             tytuł z pierwszego nagłówka '=' (None gdy brak)
    - title_lines:       numery wszystkich linii z nagłówkiem '=' (duplikaty
                         zgłasza walidator, nie segmenter)
    - preamble_body:     treść między nagłówkiem dokumentu a pierwszą sekcją
    - attributes:        atrybuty nagłówka dokumentu
    - authors:           autorzy dokumentu
    - metadata:          pola kanoniczne dokumentu
    - custom_attributes: pozostałe atrybuty dokumentu
    - sections:          płaska lista sekcji w kolejności dokumentu
    - warnings:          uwagi z segmentacji
    """
    text: str
    title: str | None
    title_lines: tuple[int, ...] = ()
    preamble_body: str = ""
    attributes: tuple[tuple[str, str], ...] = ()
    authors: tuple[Author, ...] = ()
    metadata: PublicationMetadata = field(default_factory=PublicationMetadata)
    custom_attributes: CustomAttributes = field(default_factory=list)
    sections: tuple[Section, ...] = ()
    warnings: tuple[ParseWarning, ...] = ()

    @property
    def has_title(self) -> bool:
        return bool(self.title and self.title.strip())

    @property
    def min_section_depth(self) -> int | None:
        """Najmniejsza głębokość sekcji (None dla dokumentu bez sekcji)."""
        return min((s.depth for s in self.sections), default=None)

