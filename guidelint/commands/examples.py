"""Komenda: guidelint examples — listowanie przykładów kodu wyodrębnionych z przewodnika."""

from __future__ import annotations

import argparse
import json
import sys
from dataclasses import asdict

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from extractor import INPUT_FORMATS
from guide_model import Document, ExampleLabel
from guidelint.commands.lint import prepare, read_document

console = Console()

LABEL_STYLE: dict[ExampleLabel, str] = {
    ExampleLabel.BAD:     "red",
    ExampleLabel.BETTER:  "green",
    ExampleLabel.NEUTRAL: "dim",
}


def _first_line(source: str, max_width: int = 60) -> str:
    line = next((l.strip() for l in source.splitlines() if l.strip()), "")
    return line if len(line) <= max_width else line[:max_width] + "…"


def _write_json(document: Document) -> None:
    data = [asdict(ex) for ex in document.examples]
    sys.stdout.write(json.dumps(data, ensure_ascii=False, indent=2) + "\n")


def _show_table(document: Document) -> None:
    examples = document.examples
    if not examples:
        console.print("[yellow]Brak przykładów kodu.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("REF",      no_wrap=True, style="bold cyan")
    table.add_column("SEKCJA",   no_wrap=False, max_width=40)
    table.add_column("ETYKIETA", no_wrap=True)
    table.add_column("JĘZYK",    no_wrap=True, style="dim")
    table.add_column("LINIA",    justify="right", no_wrap=True)
    table.add_column("POCZĄTEK", no_wrap=False, max_width=60)

    for ex in examples:
        table.add_row(
            ex.ref,
            Text(ex.section_title or "-"),
            Text(str(ex.label), style=LABEL_STYLE[ex.label]),
            Text(ex.language or "-"),
            str(ex.line) if ex.line else "-",
            Text(_first_line(ex.source)),
        )

    console.print()
    console.print(table)
    console.print(
        f"  [dim]{len(examples)} przykładów w {len(document.sections)} sekcjach[/dim]\n"
    )


def run(args: argparse.Namespace) -> None:
    prepare(args)
    document = read_document(args.path, args.input_format)
    if args.json:
        _write_json(document)
    else:
        _show_table(document)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "examples",
        help="Listuje przykłady kodu wyodrębnione z przewodnika.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyodrębnia przykłady kodu z przewodnika i pokazuje ich etykiety
(bad / better / neutral), sekcje i położenie — bez uruchamiania reguł.

Przykłady:
  guidelint examples przewodnik.md
  guidelint examples przewodnik.html --json
        """,
    )
    p.add_argument(
        "path",
        nargs="?",
        default="-",
        metavar="PLIK",
        help="Ścieżka do przewodnika; '-' = stdin (domyślnie).",
    )
    p.add_argument(
        "--input-format",
        choices=INPUT_FORMATS,
        default="auto",
        help="Format wejścia: auto, markdown lub html (domyślnie: auto).",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Wypisz przykłady jako JSON na stdout.",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logi diagnostyczne (DEBUG) na stderr.",
    )
    p.set_defaults(func=run)
