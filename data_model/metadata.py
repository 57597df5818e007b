"""
data_model/metadata.py — metadane publikacji i sekcji.

PublicationMetadata to stała struktura pól kanonicznych (tytuł, autorzy,
wersja, ISBN, tagi …). Klucze atrybutów spoza mapowania kanonicznego trafiają
do osobnej listy CustomAttributes (par klucz/wartość), więc podział
znane/nieznane jest jawny w typach, a nie w słowniku o dowolnych kluczach.

Mapowanie na tagi rekordu (kolejność emisji):
  title, author*, version, edition, published_on, published_by, publisher,
  summary, image, i (ISBN), source, type, auto-update, t*
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import TypeAlias

# ---------------------------------------------------------------------------
# Aliasy typów
# ---------------------------------------------------------------------------

# Pojedynczy tag rekordu: (klucz, wartość), np. ("t", "poezja")
MetadataTag: TypeAlias = tuple[str, str]

# Atrybuty spoza mapowania kanonicznego, w kolejności wystąpienia w dokumencie.
CustomAttributes: TypeAlias = list[tuple[str, str]]


class AutoUpdate(StrEnum):
    """Polityka automatycznej aktualizacji publikacji (atrybut :auto-update:)."""
    YES = "yes"
    ASK = "ask"
    NO  = "no"


# ---------------------------------------------------------------------------
# PublicationMetadata
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class PublicationMetadata:
    """
    Kanoniczne metadane dokumentu lub sekcji.

    - title:            tytuł z atrybutu :title: (nagłówek ma pierwszeństwo w rekordzie)
    - authors:          autorzy w kolejności wystąpienia, bez duplikatów
    - version:          :version: / :revnumber: / numer z linii rewizji
    - edition:          :edition: / :revremark: / uwaga z linii rewizji
    - publication_date: :published_on: / :date: / :revdate: / data z linii rewizji
    - publisher:        :publisher:
    - summary:          :summary: / :description: (wielokrotne łączone spacją)
    - cover_image:      :image: / :cover:
    - isbn:             :isbn:
    - source:           :source:
    - published_by:     :published_by:
    - type:             :type:
    - auto_update:      :auto-update: (yes | ask | no)
    - tags:             :tags: / :keywords: rozbite po przecinku, bez duplikatów
    """
    title: str | None = None
    authors: list[str] = field(default_factory=list)
    version: str | None = None
    edition: str | None = None
    publication_date: str | None = None
    publisher: str | None = None
    summary: str | None = None
    cover_image: str | None = None
    isbn: str | None = None
    source: str | None = None
    published_by: str | None = None
    type: str | None = None
    auto_update: AutoUpdate | None = None
    tags: list[str] = field(default_factory=list)

    def to_tags(self, *, include_title: bool = True) -> list[MetadataTag]:
        """Zwraca metadane jako uporządkowaną listę tagów rekordu."""
        tags: list[MetadataTag] = []
        if include_title and self.title:
            tags.append(("title", self.title))
        for author in self.authors:
            tags.append(("author", author))

        scalar_fields: tuple[tuple[str, str | None], ...] = (
            ("version",      self.version),
            ("edition",      self.edition),
            ("published_on", self.publication_date),
            ("published_by", self.published_by),
            ("publisher",    self.publisher),
            ("summary",      self.summary),
            ("image",        self.cover_image),
            ("i",            self.isbn),
            ("source",       self.source),
            ("type",         self.type),
            ("auto-update",  self.auto_update.value if self.auto_update else None),
        )
        for key, value in scalar_fields:
            if value:
                tags.append((key, value))

        for tag in self.tags:
            tags.append(("t", tag))
        return tags

    @property
    def is_empty(self) -> bool:
        return not self.to_tags()
