"""Komenda: pubtree validate — warunki strukturalne dokumentu."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console

from pubtree._report import print_problems
from validator import validate_document

console = Console()


def run(args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.exists():
        console.print(f"[red]Brak pliku:[/red] {path}")
        raise SystemExit(1)

    report = validate_document(
        path.read_text(encoding="utf-8"),
        require_title=args.require_title,
    )

    if args.json_output:
        print(json.dumps(report.to_dict(), ensure_ascii=False, indent=2))
    else:
        if report.is_valid:
            console.print(f"[green]OK[/green]  Dokument [bold]{path.name}[/bold] jest poprawny.")
        else:
            console.print(
                f"[red]BŁĄD[/red]  Dokument [bold]{path.name}[/bold] — "
                f"{len(report.errors)} błąd(ów)."
            )
        print_problems(console, report.errors, report.warnings)

    if not report.is_valid:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "validate",
        help="Sprawdza tytuł, sekcje i ostrzeżenia dokumentu.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje dokument przed kompilacją (etapy A–C):

  A  Tytuł          (jedna linia '=', niepusty, opcjonalnie wymagany)
  B  Treść          (sekcje albo pusta publikacja 'index card')
  C  Ostrzeżenia    (puste sekcje, autorzy, atrybuty)

Przykłady:
  pubtree validate artykuł.adoc
  pubtree validate artykuł.adoc --require-title --json-output
        """,
    )
    p.add_argument(
        "file",
        metavar="PLIK",
        help="Ścieżka do pliku dokumentu.",
    )
    p.add_argument(
        "--require-title",
        action="store_true",
        help="Brak tytułu dokumentu to błąd (domyślnie: notatki rozproszone).",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz raport walidacji jako JSON na stdout.",
    )
    p.set_defaults(func=run)
