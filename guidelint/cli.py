"""
guidelint — narzędzie CLI.

Użycie:
  guidelint <komenda> [opcje]

Komendy:
  lint            Sprawdza przykłady kodu przewodnika (plik lub stdin) regułami.
  lint-url        Pobiera przewodnik spod URL i sprawdza go regułami.
  examples        Listuje przykłady kodu wyodrębnione z przewodnika.
  rules           Listuje efektywny katalog reguł.
  check-manifest  Waliduje manifest reguł (JSON).
"""

from __future__ import annotations

import argparse
import sys

from guidelint import __version__
from guidelint.commands import lint as cmd_lint
from guidelint.commands import lint_url as cmd_lint_url
from guidelint.commands import examples as cmd_examples
from guidelint.commands import rules as cmd_rules
from guidelint.commands import check_manifest as cmd_check_manifest


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="guidelint",
        description="guidelint — linter przykładów kodu w przewodnikach o testach.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version", action="version", version=f"guidelint {__version__}"
    )

    subparsers = parser.add_subparsers(
        title="komendy",
        metavar="<komenda>",
        dest="command",
    )
    subparsers.required = True

    cmd_lint.add_parser(subparsers)
    cmd_lint_url.add_parser(subparsers)
    cmd_examples.add_parser(subparsers)
    cmd_rules.add_parser(subparsers)
    cmd_check_manifest.add_parser(subparsers)

    return parser


def _force_utf8() -> None:
    # Windows: terminal może używać cp1252, więc wymuszamy UTF-8, żeby polskie znaki
    # w tekstach pomocy argparse były wypisywane poprawnie.
    for stream in (sys.stdout, sys.stderr):
        encoding = (getattr(stream, "encoding", None) or "").lower()
        if encoding not in ("utf-8", "utf8") and hasattr(stream, "reconfigure"):
            stream.reconfigure(encoding="utf-8", errors="replace")


def main(argv: list[str] | None = None) -> None:
    _force_utf8()
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == "__main__":
    main()
