"""
pubtree — narzędzie CLI kompilatora publikacji.

Użycie:
  pubtree [--verbose] <komenda> [opcje]

Komendy:
  compile       Kompiluje dokument do zdarzeń 30040/30041 (JSON).
  validate      Sprawdza tytuł, sekcje i ostrzeżenia dokumentu.
  tree          Pokazuje drzewo sekcji z podziałem na agregatory i liście.
  slug          Pokazuje identyfikator i skrót dla tytułów.
  check-events  Sprawdza plik JSON ze zdarzeniami.
"""

from __future__ import annotations

import argparse

from pubtree import __version__
from pubtree._logging import setup_logging
from pubtree.commands import compile as cmd_compile
from pubtree.commands import validate as cmd_validate
from pubtree.commands import tree as cmd_tree
from pubtree.commands import slug as cmd_slug
from pubtree.commands import check_events as cmd_check_events


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pubtree",
        description="pubtree — kompilator dokumentów do rekordów 30040/30041.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"pubtree {__version__}"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logi diagnostyczne (DEBUG) na stderr.",
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_compile.add_parser(subparsers)
    cmd_validate.add_parser(subparsers)
    cmd_tree.add_parser(subparsers)
    cmd_slug.add_parser(subparsers)
    cmd_check_events.add_parser(subparsers)

    return parser


def main(argv: list[str] | None = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(args.verbose)
    args.func(args)


if __name__ == "__main__":
    main()
