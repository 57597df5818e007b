"""
compiler/types.py — opcje kompilacji i raport wynikowy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any

from data_model.records import Record
from data_model.tree import SectionTree
from validator.types import Problem

# Domyślny poziom parsowania: jeden liść na sekcję najwyższego poziomu.
DEFAULT_PARSE_LEVEL = 2


class CollisionPolicy(StrEnum):
    """Zachowanie przy dwóch rekordach o tym samym identyfikatorze."""
    ERROR  = "error"     # błąd strukturalny E_IDENTIFIER_COLLISION
    SUFFIX = "suffix"    # kolejne wystąpienia dostają -2, -3, …


class ContentType(StrEnum):
    """Klasyfikacja dokumentu wejściowego."""
    ARTICLE    = "article"            # tytuł + sekcje
    SCATTERED  = "scattered-notes"    # sekcje bez tytułu
    INDEX_CARD = "index-card"         # tytuł + 'index card'
    NONE       = "none"               # brak treści do opublikowania


@dataclass(frozen=True, slots=True)
class CompileOptions:
    """
    Parametry kompilacji.

    - parse_level:           próg głębokości (>= 2); wyżej = drobniejszy podział
    - namespace_identifiers: prefiks abbreviate(tytuł) + '-' dla identyfikatorów
                             poniżej korzenia
    - collision_policy:      'error' | 'suffix'
    - require_title:         brak tytułu dokumentu to błąd
    """
    parse_level: int = DEFAULT_PARSE_LEVEL
    namespace_identifiers: bool = False
    collision_policy: CollisionPolicy = CollisionPolicy.ERROR
    require_title: bool = False

    def __post_init__(self) -> None:
        # 'suffix' z CLI / zmiennej środowiskowej → CollisionPolicy.SUFFIX
        object.__setattr__(self, "collision_policy", CollisionPolicy(self.collision_policy))


@dataclass(slots=True)
class CompilationReport:
    """
    Wynik compile_document().

    - is_valid:     True gdy brak błędów
    - errors:       błędy strukturalne (E_*); przy błędach records jest puste
    - warnings:     ostrzeżenia (W_*)
    - content_type: klasyfikacja dokumentu
    - root:         agregator całego dokumentu (None bez tytułu lub przy błędach)
    - records:      wszystkie rekordy, pre-order; root == records[0] gdy istnieje
    - tree:         sklasyfikowane drzewo sekcji (None przy błędach)
    """
    is_valid: bool
    errors: list[Problem] = field(default_factory=list)
    warnings: list[Problem] = field(default_factory=list)
    content_type: ContentType = ContentType.NONE
    root: Record | None = None
    records: list[Record] = field(default_factory=list)
    tree: SectionTree | None = None

    @property
    def aggregators(self) -> list[Record]:
        return [r for r in self.records if r.is_aggregator]

    @property
    def leaves(self) -> list[Record]:
        return [r for r in self.records if not r.is_aggregator]

    def events(self, owner: str | None = None) -> list[dict[str, Any]]:
        """Niepodpisane zdarzenia; owner podmienia znacznik właściciela w adresach."""
        records = self.records if owner is None else [r.with_owner(owner) for r in self.records]
        return [r.to_event() for r in records]
