"""
validator — walidacja dokumentu przed kompilacją i kontrola zdarzeń wynikowych.

Interfejs publiczny:
    validate_document  — warunki strukturalne tekstu (tytuł, sekcje, ostrzeżenia)
    validate_segmented — to samo dla gotowego RawDocument
    check_events       — JSON Schema + adresy 'a' dla zdarzeń 30040/30041
    ValidationReport, Problem, ErrorCode — typy raportu

Typowe użycie:
    from validator import validate_document

    report = validate_document(text)
    if not report.is_valid:
        for p in report.errors:
            print(p.code, p.line, p.message)
"""

from .types import ErrorCode, Problem, ValidationReport
from .document_validator import validate_document, validate_segmented
from .event_schema import check_events, load_event_schema

__all__ = [
    "ErrorCode",
    "Problem",
    "ValidationReport",
    "validate_document",
    "validate_segmented",
    "check_events",
    "load_event_schema",
]
