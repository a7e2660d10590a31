"""Komenda: guidelint lint-url — pobiera przewodnik spod URL i sprawdza go regułami."""

from __future__ import annotations

import argparse

import requests

from rich.markup import escape

from extractor import ParseError, fetch_document
from guidelint.commands.lint import EXIT_ERROR, add_lint_options, console, finish, prepare


def run(args: argparse.Namespace) -> None:
    settings = prepare(args)
    timeout = args.timeout if args.timeout is not None else settings.http_timeout

    console.print(f"Pobieranie [bold]{escape(args.url)}[/bold] …")
    try:
        document = fetch_document(args.url, timeout=timeout, input_format=args.input_format)
    except ParseError as exc:
        console.print(f"[red]Błąd parsowania:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)
    except requests.RequestException as exc:
        console.print(f"[red]Błąd pobierania:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)

    console.print(
        f"Znaleziono [bold]{len(document.examples)}[/bold] przykładów "
        f"w {len(document.sections)} sekcjach."
    )
    finish(document, args, settings)


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "lint-url",
        help="Pobiera przewodnik spod URL (HTML/Markdown) i sprawdza go regułami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Pobiera przewodnik spod URL (requests) i uruchamia ten sam potok co lint.
Strony HTML: nagłówki h1–h6 to sekcje, bloki <pre> to przykłady kodu.

Przykłady:
  guidelint lint-url https://example.org/unit-testing-best-practices
  guidelint lint-url https://raw.githubusercontent.com/org/docs/main/guide.md --format json
        """,
    )
    p.add_argument("url", metavar="URL", help="Adres strony z przewodnikiem.")
    p.add_argument(
        "--timeout",
        type=float,
        default=None,
        metavar="SEK",
        help="Timeout HTTP w sekundach (domyślnie: $GUIDELINT_HTTP_TIMEOUT lub 30).",
    )
    add_lint_options(p)
    p.set_defaults(func=run)
