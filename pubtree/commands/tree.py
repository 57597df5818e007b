"""Komenda: pubtree tree — podgląd sklasyfikowanego drzewa sekcji."""

from __future__ import annotations

import argparse
from pathlib import Path

from rich.console import Console
from rich.tree import Tree

from compiler import CompilationReport, compile_document
from data_model import NodeKind, SectionTree, TreeNode
from pubtree._report import print_problems
from pubtree._settings import get_compile_options

console = Console()

# Kolory per klasyfikacja
KIND_STYLE: dict[NodeKind, str] = {
    NodeKind.AGGREGATOR: "bold cyan",
    NodeKind.LEAF:       "green",
}


def _label(node: TreeNode, absorbed: bool) -> str:
    if absorbed:
        return f"[dim]{'=' * node.depth} {node.title}  (w treści rodzica)[/dim]"
    style = KIND_STYLE[node.kind]
    return (
        f"[{style}]{node.kind}[/{style}] {'=' * node.depth} {node.title}  "
        f"[dim]d={node.identifier}[/dim]"
    )


def _add_nodes(branch: Tree, tree: SectionTree, node: TreeNode, absorbed: bool) -> None:
    sub = branch.add(_label(node, absorbed))
    if not absorbed and node.intro_identifier:
        sub.add(f"[green]leaf[/green] (wprowadzenie)  [dim]d={node.intro_identifier}[/dim]")
    children_absorbed = absorbed or node.kind is not NodeKind.AGGREGATOR
    for child in tree.children_of(node.index):
        _add_nodes(sub, tree, child, children_absorbed)


def _preamble_identifier(report: CompilationReport) -> str | None:
    """Identyfikator liścia z preambułą dokumentu (pierwsza referencja korzenia)."""
    if report.root is None or report.tree is None or not report.root.references:
        return None
    first = report.root.references[0].identifier
    owned = {n.identifier for n in report.tree.nodes} | {n.intro_identifier for n in report.tree.nodes}
    return None if first in owned else first


def render(report: CompilationReport) -> Tree:
    if report.root is not None:
        label = (
            f"[bold cyan]aggregator[/bold cyan] = {report.root.title}  "
            f"[dim]d={report.root.identifier}[/dim]"
        )
    else:
        label = f"[dim]({report.content_type})[/dim]"
    top = Tree(label)

    preamble = _preamble_identifier(report)
    if preamble is not None:
        top.add(f"[green]leaf[/green] (preambuła)  [dim]d={preamble}[/dim]")

    if report.tree is not None:
        for index in report.tree.roots:
            _add_nodes(top, report.tree, report.tree.nodes[index], absorbed=False)
    return top


def run(args: argparse.Namespace) -> None:
    path = Path(args.file)
    if not path.exists():
        console.print(f"[red]Plik nie istnieje:[/red] {path}")
        raise SystemExit(1)

    try:
        options = get_compile_options(parse_level=args.level, collision=args.collision)
    except ValueError as e:
        console.print(f"[red]Błąd konfiguracji:[/red] {e}")
        raise SystemExit(1)

    report = compile_document(path.read_text(encoding="utf-8"), options)
    if not report.is_valid:
        print_problems(console, report.errors, report.warnings)
        raise SystemExit(1)

    console.print(render(report))
    console.print(
        f"  [dim]L={options.parse_level}: {len(report.aggregators)} agregatorów, "
        f"{len(report.leaves)} liści[/dim]"
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "tree",
        help="Pokazuje drzewo sekcji z podziałem na agregatory i liście.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyświetla drzewo sekcji po klasyfikacji dla danego poziomu parsowania.
Sekcje poniżej liścia są częścią jego treści (oznaczone jako 'w treści rodzica').

Przykłady:
  pubtree tree artykuł.adoc
  pubtree tree artykuł.adoc --level 4
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
        "--collision",
        choices=["error", "suffix"],
        default=None,
        help="Polityka kolizji identyfikatorów (domyślnie: error).",
    )
    p.set_defaults(func=run)
