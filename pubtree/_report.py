"""Wspólne wyświetlanie problemów walidacji (tabela rich)."""

from __future__ import annotations

from rich import box
from rich.console import Console
from rich.table import Table

from validator import Problem


def print_problems(
    console: Console,
    errors: list[Problem],
    warnings: list[Problem],
) -> None:
    if errors:
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Kod",       style="yellow", no_wrap=True)
        table.add_column("Miejsce",   style="cyan",   no_wrap=True)
        table.add_column("Komunikat")
        table.add_column("Poprawka",  style="dim")

        for e in errors:
            table.add_row(e.code, e.location, e.message, e.expected_fix)

        console.print(table)

    if warnings:
        console.print("[yellow]Ostrzeżenia:[/yellow]")
        for w in warnings:
            where = f" (linia {w.line})" if w.line is not None else ""
            console.print(f"  [yellow]·[/yellow] {w.code}{where}: {w.message}")
