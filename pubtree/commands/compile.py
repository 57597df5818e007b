"""Komenda: pubtree compile — kompilacja dokumentu do zdarzeń 30040/30041."""

from __future__ import annotations

import argparse
import json
from pathlib import Path

from rich import box
from rich.console import Console
from rich.table import Table

from compiler import CollisionPolicy, CompilationReport, compile_document
from data_model import OWNER_PLACEHOLDER
from pubtree._report import print_problems
from pubtree._settings import get_compile_options, get_owner

err_console = Console(stderr=True)


# ---------------------------------------------------------------------------
# Wyświetlanie w terminalu
# ---------------------------------------------------------------------------

def _show_table(report: CompilationReport) -> None:
    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("KIND",  justify="right", no_wrap=True)
    table.add_column("D",     no_wrap=True, style="bold cyan")
    table.add_column("REFS",  justify="right", no_wrap=True)
    table.add_column("LEN",   justify="right", no_wrap=True)
    table.add_column("TYTUŁ", no_wrap=False, max_width=50)

    for record in report.records:
        table.add_row(
            str(int(record.kind)),
            record.identifier,
            str(len(record.references)) if record.is_aggregator else "-",
            str(len(record.body)),
            record.title[:80],
        )

    err_console.print()
    err_console.print(table)
    err_console.print(
        f"  [dim]{len(report.records)} rekordów "
        f"({len(report.aggregators)} agregatorów, {len(report.leaves)} liści), "
        f"typ: {report.content_type}[/dim]\n"
    )


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.exists():
        err_console.print(f"[red]Plik nie istnieje:[/red] {path}")
        raise SystemExit(1)

    try:
        options = get_compile_options(
            parse_level=args.level,
            namespace=args.namespace,
            collision=args.collision,
        )
    except ValueError as e:
        err_console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    report = compile_document(path.read_text(encoding="utf-8"), options)
    print_problems(err_console, report.errors, report.warnings)
    if not report.is_valid:
        err_console.print(
            f"[red]BŁĄD[/red]  {path.name} — {len(report.errors)} błąd(ów), "
            "nic nie wygenerowano."
        )
        raise SystemExit(1)

    owner = args.owner or get_owner()
    events = report.events(owner=None if owner == OWNER_PLACEHOLDER else owner)
    payload = json.dumps(events, ensure_ascii=False, indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.write_text(payload + "\n", encoding="utf-8")
        err_console.print(f"[green]JSON:[/green] {out_path}  ({len(events)} rekordów)")
    else:
        print(payload)

    if args.show:
        _show_table(report)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "compile",
        help="Kompiluje dokument do zdarzeń 30040/30041 (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Kompiluje dokument (nagłówki '=', atrybuty ':klucz: wartość') do listy
niepodpisanych zdarzeń: agregatory 30040 i liście 30041, pre-order.

Zmienne środowiskowe (flagi mają pierwszeństwo):
  PUBTREE_PARSE_LEVEL, PUBTREE_NAMESPACE_IDS, PUBTREE_COLLISION_POLICY,
  PUBTREE_OWNER

Przykłady:
  pubtree compile artykuł.adoc
  pubtree compile artykuł.adoc --level 3 --show
  pubtree compile artykuł.adoc --owner <hex> --out zdarzenia.json
  pubtree compile notatki.adoc --collision suffix --namespace
        """,
    )
    p.add_argument(
        "file",
        metavar="PLIK",
        help="Ścieżka do pliku dokumentu.",
    )
    p.add_argument(
        "--level", "-l",
        type=int,
        default=None,
        metavar="N",
        help="Poziom parsowania >= 2 (domyślnie: PUBTREE_PARSE_LEVEL lub 2).",
    )
    p.add_argument(
        "--owner",
        default=None,
        metavar="HEX",
        help="Klucz publiczny wydawcy wstawiany do tagów 'a'.",
    )
    p.add_argument(
        "--namespace",
        action="store_true",
        default=None,
        help="Prefiksuj identyfikatory skrótem tytułu dokumentu.",
    )
    p.add_argument(
        "--collision",
        choices=[c.value for c in CollisionPolicy],
        default=None,
        help="Polityka kolizji identyfikatorów (domyślnie: error).",
    )
    p.add_argument(
        "--out", "-o",
        default=None,
        metavar="PLIK",
        help="Zapisz JSON do pliku zamiast na stdout.",
    )
    p.add_argument(
        "--show",
        action="store_true",
        help="Wyświetl tabelę rekordów na stderr (stdout zostaje czystym JSON).",
    )
    p.set_defaults(func=run)
