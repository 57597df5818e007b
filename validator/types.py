"""
validator/types.py — kody problemów i struktury raportu walidacji.

Problem — pojedynczy błąd lub ostrzeżenie z kodem, numerem linii (dla
    dokumentu) albo ścieżką JSON Pointer (dla zdarzeń), komunikatem
    i mechaniczną instrukcją naprawy.
ValidationReport — wynik walidacji: is_valid, errors, warnings.

Kody E_* to błędy strukturalne (blokują kompilację), W_* to ostrzeżenia
o metadanych (kompilacja przebiega dalej).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Stałe kody problemów (walidacja dokumentu, kompilacja, zdarzenia)."""

    # A — tytuł dokumentu
    TITLE_DUPLICATE        = "E_TITLE_DUPLICATE"
    TITLE_EMPTY            = "E_TITLE_EMPTY"
    TITLE_MISSING          = "E_TITLE_MISSING"
    TITLE_MISPLACED        = "E_TITLE_MISPLACED"

    # B — treść
    NO_SECTIONS            = "E_NO_SECTIONS"
    NO_CONTENT             = "E_NO_CONTENT"

    # C — kompilacja
    PARSE_LEVEL_INVALID    = "E_PARSE_LEVEL_INVALID"
    IDENTIFIER_COLLISION   = "E_IDENTIFIER_COLLISION"

    # D — zdarzenia
    SCHEMA_VIOLATION       = "E_SCHEMA_VIOLATION"
    ADDRESS_INVALID        = "E_ADDRESS_INVALID"

    # Ostrzeżenia
    SECTION_EMPTY          = "W_SECTION_EMPTY"
    AMBIGUOUS_AUTHOR       = "W_AMBIGUOUS_AUTHOR"
    INVALID_ATTRIBUTE      = "W_INVALID_ATTRIBUTE"
    PREAMBLE_DROPPED       = "W_PREAMBLE_DROPPED"
    REFERENCE_UNRESOLVED   = "W_REFERENCE_UNRESOLVED"

    @property
    def is_warning(self) -> bool:
        return self.value.startswith("W_")


@dataclass(slots=True)
class Problem:
    """
    Pojedynczy problem walidacji.

    - code:         stały identyfikator klasy problemu (ErrorCode)
    - line:         numer linii dokumentu (1-based) lub None
    - message:      czytelny opis
    - expected_fix: krótka mechaniczna instrukcja naprawy
    - path:         JSON Pointer (tylko problemy zdarzeń), np. "/0/tags/3"
    - details:      opcjonalny słownik z dodatkowymi danymi
    """

    code: ErrorCode
    line: int | None
    message: str
    expected_fix: str = ""
    path: str | None = None
    details: dict[str, Any] | None = None

    @property
    def location(self) -> str:
        if self.path is not None:
            return self.path
        return "" if self.line is None else str(self.line)

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code.value,
            "line": self.line,
            "message": self.message,
            "expected_fix": self.expected_fix,
        }
        if self.path is not None:
            data["path"] = self.path
        if self.details:
            data["details"] = self.details
        return data


@dataclass(slots=True)
class ValidationReport:
    """
    Wynik walidacji.

    - is_valid: True gdy brak błędów (ostrzeżenia nie wpływają)
    - errors:   lista błędów E_*
    - warnings: lista ostrzeżeń W_*
    """

    is_valid: bool
    errors: list[Problem] = field(default_factory=list)
    warnings: list[Problem] = field(default_factory=list)

    @property
    def codes(self) -> list[ErrorCode]:
        return [p.code for p in self.errors] + [p.code for p in self.warnings]

    def to_dict(self) -> dict[str, Any]:
        return {
            "is_valid": self.is_valid,
            "errors": [p.to_dict() for p in self.errors],
            "warnings": [p.to_dict() for p in self.warnings],
        }
