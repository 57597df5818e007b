"""
compiler/engine.py — pełny potok kompilacji dokumentu.

compile_document(text, options) -> CompilationReport

Etapy:
  0 — opcje          (poziom parsowania)
  1 — segmentacja    (segment)
  2 — walidacja      (validate_segmented; błędy → koniec bez rekordów)
  3 — drzewo         (build_tree)
  4 — klasyfikacja   (classify; notatki rozproszone → najpłytszy poziom)
  5 — synteza        (synthesize; kolizje przy polityce 'error' → koniec)

Błędy wejścia nigdy nie są rzucane jako wyjątki. Raport z błędami nie zawiera
żadnych rekordów.
"""

from __future__ import annotations

import logging

from segmenter import segment
from validator import ErrorCode, Problem, validate_segmented

from .identifiers import Collision
from .partitioner import MIN_PARSE_LEVEL, classify, is_valid_parse_level
from .synthesizer import detect_content_type, synthesize
from .tree_builder import build_tree
from .types import CompilationReport, CompileOptions, ContentType

log = logging.getLogger(__name__)


def compile_document(text: str, options: CompileOptions | None = None) -> CompilationReport:
    """
    Kompiluje tekst dokumentu do rekordów.

    Args:
        text:    tekst źródłowy
        options: parametry kompilacji (domyślnie CompileOptions())
    """
    options = options or CompileOptions()

    # 0 — opcje
    if not is_valid_parse_level(options.parse_level):
        return CompilationReport(
            is_valid=False,
            errors=[Problem(
                code=ErrorCode.PARSE_LEVEL_INVALID,
                line=None,
                message=f"Nieprawidłowy poziom parsowania: {options.parse_level!r}.",
                expected_fix=f"Podaj liczbę całkowitą >= {MIN_PARSE_LEVEL}.",
                details={"parse_level": options.parse_level},
            )],
        )

    # 1 — segmentacja
    document = segment(text)
    content_type = detect_content_type(document)

    # 2 — walidacja
    validation = validate_segmented(document, require_title=options.require_title)
    if not validation.is_valid:
        log.info("Dokument odrzucony: %s", ", ".join(p.code for p in validation.errors))
        return CompilationReport(
            is_valid=False,
            errors=validation.errors,
            warnings=validation.warnings,
            content_type=content_type,
        )

    # 3 — drzewo
    tree = build_tree(document.sections)

    # 4 — klasyfikacja: notatki rozproszone to zawsze jeden liść na sekcję
    level = options.parse_level
    if content_type is ContentType.SCATTERED:
        level = document.min_section_depth or MIN_PARSE_LEVEL
    classify(tree, level)

    # 5 — synteza
    synthesis = synthesize(tree, document, options)
    if synthesis.collisions:
        errors = [_collision_problem(c) for c in synthesis.collisions]
        log.info("Kolizje identyfikatorów: %d", len(errors))
        return CompilationReport(
            is_valid=False,
            errors=errors,
            warnings=validation.warnings,
            content_type=content_type,
        )

    log.info(
        "Skompilowano %s: %d rekordów (L=%d)",
        content_type, len(synthesis.records), options.parse_level,
    )
    return CompilationReport(
        is_valid=True,
        warnings=validation.warnings,
        content_type=content_type,
        root=synthesis.root,
        records=synthesis.records,
        tree=tree,
    )


def _collision_problem(collision: Collision) -> Problem:
    return Problem(
        code=ErrorCode.IDENTIFIER_COLLISION,
        line=collision.line,
        message=(
            f"'{collision.second}' daje ten sam identyfikator '{collision.identifier}' "
            f"co '{collision.first}'."
        ),
        expected_fix="Zmień jeden z tytułów albo użyj polityki kolizji 'suffix'.",
        details={
            "identifier": collision.identifier,
            "first": collision.first,
            "second": collision.second,
        },
    )
