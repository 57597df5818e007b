"""
validator/document_validator.py — warunki strukturalne dokumentu przed syntezą.

validate_document(text, require_title=False) -> ValidationReport

Etapy:
  A — tytuł       (co najwyżej jedna linia '=', przed pierwszą sekcją,
                   tytuł niepusty, opcjonalnie wymagany)
  B — treść       (co najmniej jedna sekcja albo forma "pustej publikacji";
                   bez tytułu i bez sekcji → brak treści)
  C — ostrzeżenia (puste sekcje, niejednoznaczni autorzy, złe atrybuty,
                   porzucona preambuła dokumentu bez tytułu)

Ostrzeżenia nie wpływają na is_valid.
"""

from __future__ import annotations

import logging

from data_model.documents import RawDocument
from segmenter import is_empty_publication, segment

from .types import ErrorCode, Problem, ValidationReport

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Publiczny interfejs
# ---------------------------------------------------------------------------

def validate_document(text: str, *, require_title: bool = False) -> ValidationReport:
    """
    Waliduje tekst dokumentu i zwraca ValidationReport.

    Args:
        text:          tekst źródłowy
        require_title: True → brak tytułu to błąd E_TITLE_MISSING
                       (domyślnie dokument bez tytułu to notatki rozproszone)
    """
    return validate_segmented(segment(text), require_title=require_title)


def validate_segmented(doc: RawDocument, *, require_title: bool = False) -> ValidationReport:
    """Jak validate_document(), dla dokumentu już podzielonego przez segment()."""
    errors: list[Problem] = []
    warnings: list[Problem] = []

    _stage_title(doc, require_title, errors)
    _stage_content(doc, errors)
    _stage_warnings(doc, warnings)

    log.debug(
        "Walidacja dokumentu: %d błędów, %d ostrzeżeń", len(errors), len(warnings),
    )
    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


# ---------------------------------------------------------------------------
# Stage A — tytuł
# ---------------------------------------------------------------------------

def _stage_title(doc: RawDocument, require_title: bool, errors: list[Problem]) -> None:
    if len(doc.title_lines) > 1:
        errors.append(Problem(
            code=ErrorCode.TITLE_DUPLICATE,
            line=doc.title_lines[1],
            message=(
                f"Dokument ma {len(doc.title_lines)} linie tytułu '= …' "
                f"(linie {', '.join(str(n) for n in doc.title_lines)})."
            ),
            expected_fix="Zostaw jedną linię '= Tytuł'; pozostałe zamień na sekcje '=='.",
            details={"lines": list(doc.title_lines)},
        ))

    if doc.title_lines and not doc.has_title:
        errors.append(Problem(
            code=ErrorCode.TITLE_EMPTY,
            line=doc.title_lines[0],
            message="Linia tytułu dokumentu nie zawiera tekstu.",
            expected_fix="Dopisz tytuł po '= '.",
        ))

    if doc.title_lines and doc.sections and doc.title_lines[0] > doc.sections[0].span.start_line:
        errors.append(Problem(
            code=ErrorCode.TITLE_MISPLACED,
            line=doc.title_lines[0],
            message=(
                f"Tytuł dokumentu stoi w linii {doc.title_lines[0]}, po pierwszej sekcji "
                f"'{doc.sections[0].title}' (linia {doc.sections[0].span.start_line})."
            ),
            expected_fix="Przenieś linię '= Tytuł' przed pierwszą sekcję '== …'.",
            details={"section": doc.sections[0].title},
        ))

    if not doc.title_lines and require_title:
        errors.append(Problem(
            code=ErrorCode.TITLE_MISSING,
            line=None,
            message="Dokument nie ma linii tytułu '= …'.",
            expected_fix="Dodaj '= Tytuł' na początku dokumentu.",
        ))


# ---------------------------------------------------------------------------
# Stage B — treść
# ---------------------------------------------------------------------------

def _stage_content(doc: RawDocument, errors: list[Problem]) -> None:
    if doc.sections:
        return

    if not doc.title_lines:
        errors.append(Problem(
            code=ErrorCode.NO_CONTENT,
            line=None,
            message="Dokument nie ma ani tytułu, ani sekcji.",
            expected_fix="Dodaj '= Tytuł' i co najmniej jedną sekcję '== …'.",
        ))
        return

    if not is_empty_publication(doc.text.split("\n")):
        errors.append(Problem(
            code=ErrorCode.NO_SECTIONS,
            line=doc.title_lines[0],
            message="Dokument z tytułem nie ma żadnej sekcji '== …'.",
            expected_fix=(
                "Dodaj sekcję '== …' albo zostaw tylko tytuł i linię "
                "'index card' (pusta publikacja)."
            ),
        ))


# ---------------------------------------------------------------------------
# Stage C — ostrzeżenia
# ---------------------------------------------------------------------------

def _stage_warnings(doc: RawDocument, warnings: list[Problem]) -> None:
    for warning in doc.warnings:
        warnings.append(Problem(
            code=ErrorCode(warning.code),
            line=warning.line,
            message=warning.message,
            expected_fix=_WARNING_FIXES.get(warning.code, ""),
        ))

    for section in doc.sections:
        if section.is_empty:
            warnings.append(Problem(
                code=ErrorCode.SECTION_EMPTY,
                line=section.span.start_line,
                message=f"Sekcja '{section.title}' nie ma treści.",
                expected_fix="Dopisz treść albo usuń sekcję.",
                details={"title": section.title},
            ))

    if not doc.title_lines and doc.sections and doc.preamble_body.strip():
        warnings.append(Problem(
            code=ErrorCode.PREAMBLE_DROPPED,
            line=1,
            message=(
                "Tekst przed pierwszą sekcją dokumentu bez tytułu "
                "nie trafi do żadnego rekordu."
            ),
            expected_fix="Przenieś tekst do sekcji albo dodaj '= Tytuł'.",
        ))


_WARNING_FIXES: dict[str, str] = {
    ErrorCode.AMBIGUOUS_AUTHOR: (
        "Jeśli to nie autor, dodaj pustą linię pod nagłówkiem; "
        "jeśli autor, dopisz adres '<email>'."
    ),
    ErrorCode.INVALID_ATTRIBUTE: "Użyj jednej z dozwolonych wartości: yes, ask, no.",
}
