"""Komenda: pubtree slug — podgląd identyfikatora i skrótu dla tytułów."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.table import Table

from compiler import abbreviate, slug

console = Console()


def run(args: argparse.Namespace) -> None:
    table = Table(box=box.SIMPLE_HEAD, show_header=True, header_style="bold white")
    table.add_column("TYTUŁ")
    table.add_column("SLUG",  style="bold cyan", no_wrap=True)
    table.add_column("SKRÓT", style="yellow",    no_wrap=True)

    for title in args.titles:
        table.add_row(title, slug(title), abbreviate(title))

    console.print(table)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "slug",
        help="Pokazuje identyfikator (tag 'd') i skrót dla podanych tytułów.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Przykłady:
  pubtree slug "Rozdział 1: Wstęp"
  pubtree slug "Wojna i pokój" "Księga pierwsza"
        """,
    )
    p.add_argument(
        "titles",
        nargs="+",
        metavar="TYTUŁ",
        help="Jeden lub więcej tytułów.",
    )
    p.set_defaults(func=run)
