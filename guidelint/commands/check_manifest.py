"""Komenda: guidelint check-manifest — waliduje manifest reguł (JSON Schema + referencje)."""

from __future__ import annotations

import argparse
import dataclasses
import json
import pathlib
import sys

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from evaluator import ManifestError, load_manifest, validate_manifest

console = Console(stderr=True)


def run(args: argparse.Namespace) -> None:
    manifest_path = pathlib.Path(args.manifest)
    if not manifest_path.exists():
        console.print(f"[red]Brak pliku manifestu:[/red] {escape(str(manifest_path))}")
        raise SystemExit(2)

    try:
        manifest = load_manifest(manifest_path)
        issues = validate_manifest(manifest)
    except ManifestError as exc:
        issues = exc.issues

    if not issues:
        console.print(f"[green]OK[/green]  Manifest [bold]{escape(manifest_path.name)}[/bold] jest poprawny.")
    else:
        console.print(
            f"[red]BŁĄD[/red]  Manifest [bold]{escape(manifest_path.name)}[/bold] — "
            f"{len(issues)} błąd(ów)."
        )
        table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
        table.add_column("Ścieżka", style="cyan", no_wrap=True)
        table.add_column("Komunikat")
        for issue in issues:
            table.add_row(escape(issue.path), escape(issue.message))
        console.print(table)

    if args.json_output:
        out = {
            "is_valid": not issues,
            "errors": [dataclasses.asdict(i) for i in issues],
        }
        print(json.dumps(out, ensure_ascii=False, indent=2))

    if issues:
        sys.exit(1)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "check-manifest",
        help="Waliduje manifest reguł (JSON).",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""\
Waliduje plik manifestu reguł:

  A  JSON Schema   (Draft 2020-12: pola id, enabled, applies_to, topics)
  B  Referencje    (nieznane lub zduplikowane id reguł)

Przykłady:
  guidelint check-manifest reguly.json
  guidelint check-manifest reguly.json --json-output
        """,
    )
    p.add_argument(
        "manifest",
        metavar="PLIK",
        help="Ścieżka do pliku JSON z manifestem reguł.",
    )
    p.add_argument(
        "--json-output",
        action="store_true",
        help="Wypisz wynik walidacji jako JSON na stdout.",
    )
    p.set_defaults(func=run)
