"""
validator/event_schema.py — kontrola wygenerowanych zdarzeń 30040/30041.

check_events(events) -> ValidationReport

Etapy:
  A — JSON Schema    (schemas/event.schema.json, Draft 2020-12)
  B — adresy 'a'     (format kind:owner:identifier, kind 30040/30041)
  C — identyfikatory (unikalność tagu 'd' w obrębie rodzaju)
  D — referencje     (adres wskazuje zdarzenie spoza zestawu → ostrzeżenie)
"""

from __future__ import annotations

import json
import logging
from functools import cache
from pathlib import Path
from typing import Any

import jsonschema

from data_model.records import Address

from .types import ErrorCode, Problem, ValidationReport

log = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schemas" / "event.schema.json"


@cache
def load_event_schema() -> dict[str, Any]:
    return json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))


# ---------------------------------------------------------------------------
# Publiczny interfejs
# ---------------------------------------------------------------------------

def check_events(events: Any) -> ValidationReport:
    """
    Sprawdza listę zdarzeń (słowniki jak z Record.to_event()).

    Zdarzenia z błędem schematu pomijane są w dalszych etapach.
    """
    errors: list[Problem] = []
    warnings: list[Problem] = []

    if not isinstance(events, list):
        errors.append(Problem(
            code=ErrorCode.SCHEMA_VIOLATION,
            line=None,
            path="/",
            message="Oczekiwano listy zdarzeń.",
            expected_fix="Podaj tablicę JSON obiektów zdarzeń.",
        ))
        return ValidationReport(is_valid=False, errors=errors, warnings=warnings)

    validator = jsonschema.Draft202012Validator(load_event_schema())
    valid: list[tuple[int, dict[str, Any]]] = []

    # A — JSON Schema
    for i, event in enumerate(events):
        schema_errors = _stage_schema(validator, i, event)
        errors.extend(schema_errors)
        if not schema_errors:
            valid.append((i, event))

    # B — adresy
    references: list[tuple[str, Address]] = []
    for i, event in valid:
        for j, tag in enumerate(event["tags"]):
            if tag[0] != "a":
                continue
            path = f"/{i}/tags/{j}"
            try:
                references.append((path, Address.parse(tag[1])))
            except ValueError:
                errors.append(Problem(
                    code=ErrorCode.ADDRESS_INVALID,
                    line=None,
                    path=path,
                    message=f"Nieprawidłowy adres '{tag[1]}'.",
                    expected_fix="Użyj formatu 'kind:owner:identifier' z kind 30040 lub 30041.",
                    details={"value": tag[1]},
                ))

    # C — identyfikatory
    known: dict[tuple[int, str], int] = {}
    for i, event in valid:
        key = (event["kind"], _d_tag(event))
        if key in known:
            errors.append(Problem(
                code=ErrorCode.IDENTIFIER_COLLISION,
                line=None,
                path=f"/{i}",
                message=(
                    f"Identyfikator '{key[1]}' (kind {key[0]}) występuje także "
                    f"w zdarzeniu /{known[key]}."
                ),
                expected_fix="Nadaj sekcjom unikalne tytuły albo użyj polityki 'suffix'.",
                details={"identifier": key[1], "kind": key[0]},
            ))
        else:
            known[key] = i

    # D — referencje
    for path, address in references:
        if (int(address.kind), address.identifier) not in known:
            warnings.append(Problem(
                code=ErrorCode.REFERENCE_UNRESOLVED,
                line=None,
                path=path,
                message=f"Adres '{address}' wskazuje zdarzenie spoza zestawu.",
                expected_fix="Upewnij się, że zdarzenie docelowe zostało opublikowane.",
            ))

    log.debug(
        "Kontrola zdarzeń: %d zdarzeń, %d błędów, %d ostrzeżeń",
        len(events), len(errors), len(warnings),
    )
    return ValidationReport(is_valid=not errors, errors=errors, warnings=warnings)


# ---------------------------------------------------------------------------
# Funkcje pomocnicze
# ---------------------------------------------------------------------------

def _stage_schema(
    validator: jsonschema.Draft202012Validator,
    index: int,
    event: Any,
) -> list[Problem]:
    problems: list[Problem] = []
    for e in validator.iter_errors(event):
        path = f"/{index}" + "".join(f"/{p}" for p in e.absolute_path)
        problems.append(Problem(
            code=ErrorCode.SCHEMA_VIOLATION,
            line=None,
            path=path,
            message=e.message,
            expected_fix=f"Popraw naruszenie schematu JSON na ścieżce {path}.",
        ))
    return problems


def _d_tag(event: dict[str, Any]) -> str:
    return next(tag[1] for tag in event["tags"] if tag[0] == "d")
