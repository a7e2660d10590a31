"""Komenda: guidelint rules — listowanie efektywnego katalogu reguł."""

from __future__ import annotations

import argparse

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from guide_model import Applicability
from guidelint.commands.lint import load_rules, prepare

console = Console(width=160)

APPLIES_STYLE: dict[Applicability, str] = {
    Applicability.BAD:    "red",
    Applicability.BETTER: "green",
    Applicability.ANY:    "cyan",
    Applicability.ALL:    "yellow",
}


def run(args: argparse.Namespace) -> None:
    settings = prepare(args)
    rules = load_rules(args, settings)

    if not rules:
        console.print("[yellow]Wszystkie reguły są wyłączone.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("ID",      no_wrap=True, style="bold")
    table.add_column("DOTYCZY", no_wrap=True)
    table.add_column("TEMATY",  no_wrap=False, max_width=40)
    table.add_column("OPIS",    no_wrap=False, max_width=70)

    for rule in rules:
        topics = escape(", ".join(rule.topics)) if rule.topics else "[dim](wszystkie sekcje)[/dim]"
        table.add_row(
            str(rule.id),
            Text(str(rule.applies_to), style=APPLIES_STYLE[rule.applies_to]),
            topics,
            rule.description,
        )

    console.print()
    console.print(table)
    console.print(f"  [dim]{len(rules)} reguł[/dim]\n")


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "rules",
        help="Listuje efektywny katalog reguł.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Listuje reguły wbudowane po zastosowaniu manifestu (wyłączenia, nadpisania
applies_to i topics).

Przykłady:
  guidelint rules
  guidelint rules --manifest reguly.json
        """,
    )
    p.add_argument(
        "--manifest", "-m",
        default=None,
        metavar="PLIK",
        help="Manifest reguł JSON (domyślnie: $GUIDELINT_MANIFEST).",
    )
    p.set_defaults(func=run)
