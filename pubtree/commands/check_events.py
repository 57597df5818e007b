"""Komenda: pubtree check-events — kontrola pliku JSON ze zdarzeniami."""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path

from rich.console import Console

from pubtree._report import print_problems
from validator import check_events

console = Console()


def run(args: argparse.Namespace) -> None:
    path = Path(args.events)
    if not path.exists():
        console.print(f"[red]Brak pliku:[/red] {path}")
        raise SystemExit(1)

    try:
        events = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        console.print(f"[red]Błąd parsowania JSON:[/red] {exc}")
        raise SystemExit(1)

    report = check_events(events)

    if report.is_valid:
        console.print(
            f"[green]OK[/green]  {len(events)} zdarzeń w [bold]{path.name}[/bold] jest poprawnych."
        )
    else:
        console.print(
            f"[red]BŁĄD[/red]  [bold]{path.name}[/bold] — {len(report.errors)} błąd(ów)."
        )
    print_problems(console, report.errors, report.warnings)

    if not report.is_valid:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check-events",
        help="Sprawdza zdarzenia 30040/30041 (JSON Schema, adresy 'a').",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Sprawdza plik JSON z listą zdarzeń (np. wynik 'pubtree compile'):

  A  JSON Schema       (schemas/event.schema.json, Draft 2020-12)
  B  Adresy 'a'        (kind:owner:identifier)
  C  Identyfikatory    (unikalny tag 'd' w obrębie rodzaju)
  D  Referencje        (adres spoza zestawu → ostrzeżenie)

Przykłady:
  pubtree check-events zdarzenia.json
        """,
    )
    p.add_argument(
        "events",
        metavar="PLIK.json",
        help="Ścieżka do pliku JSON z listą zdarzeń.",
    )
    p.set_defaults(func=run)
