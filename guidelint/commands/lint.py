"""Komenda: guidelint lint — ekstrakcja → ewaluacja → raport dla pliku lub stdin."""

from __future__ import annotations

import argparse
import sys

from rich.console import Console
from rich.markup import escape

from extractor import INPUT_FORMATS, ParseError, load_document
from evaluator import ManifestError, RuleEvaluator, resolve_rules
from guide_model import Document, Rule
from guidelint._config import Settings, load_settings
from guidelint._logging import err_console, setup_logging
from reporter import (
    OUTPUT_FORMATS,
    Report,
    ReportMode,
    build_report,
    render_json,
    render_table,
    render_text,
)

console = err_console

EXIT_ERROR = 2

MODES: tuple[str, ...] = tuple(m.value for m in ReportMode)


# ---------------------------------------------------------------------------
# Wspólne kroki (używane też przez lint-url i examples)
# ---------------------------------------------------------------------------

def _setting(value: str | None, default: str, choices: tuple[str, ...], env: str) -> str:
    resolved = value or default
    if resolved not in choices:
        console.print(
            f"[red]Nieprawidłowa wartość {env}:[/red] '{resolved}' "
            f"(dozwolone: {', '.join(choices)})"
        )
        raise SystemExit(EXIT_ERROR)
    return resolved


def prepare(args: argparse.Namespace) -> Settings:
    """Ustawia logowanie i zwraca konfigurację ze środowiska."""
    try:
        settings = load_settings()
    except ValueError as exc:
        console.print(f"[red]Nieprawidłowa konfiguracja:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)
    setup_logging(settings.log_level, verbose=getattr(args, "verbose", False))
    return settings


def load_rules(args: argparse.Namespace, settings: Settings) -> list[Rule]:
    manifest = getattr(args, "manifest", None) or settings.manifest
    try:
        return resolve_rules(manifest, getattr(args, "rule", None))
    except ManifestError as exc:
        console.print("[red]Niepoprawny manifest reguł:[/red]")
        for issue in exc.issues:
            console.print(f"  [yellow]{escape(issue.path)}[/yellow]  {escape(issue.message)}")
        raise SystemExit(EXIT_ERROR)
    except OSError as exc:
        console.print(f"[red]Nie można wczytać manifestu:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)


def read_document(path: str, input_format: str) -> Document:
    try:
        return load_document(path, input_format)  # type: ignore[arg-type]
    except ParseError as exc:
        console.print(f"[red]Błąd parsowania:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)
    except (OSError, UnicodeDecodeError) as exc:
        console.print(f"[red]Nie można wczytać dokumentu:[/red] {escape(str(exc))}")
        raise SystemExit(EXIT_ERROR)


def lint_document(document: Document, rules: list[Rule], mode: str) -> Report:
    findings = RuleEvaluator(rules).evaluate_document(document)
    return build_report(findings, mode)


def emit_report(report: Report, output_format: str) -> None:
    match output_format:
        case "json":
            sys.stdout.write(render_json(report))
        case "table":
            render_table(report, Console())
        case _:
            sys.stdout.write(render_text(report))
    sys.stdout.flush()


def finish(document: Document, args: argparse.Namespace, settings: Settings) -> None:
    """Ewaluacja + raport; kod wyjścia z raportu (0 = brak problemów)."""
    mode = _setting(args.mode, settings.mode, MODES, "GUIDELINT_MODE")
    output_format = _setting(args.format, settings.output_format, OUTPUT_FORMATS, "GUIDELINT_FORMAT")
    rules = load_rules(args, settings)

    report = lint_document(document, rules, mode)
    emit_report(report, output_format)

    if report.exit_code:
        sys.exit(report.exit_code)


# ---------------------------------------------------------------------------
# Główna logika komendy
# ---------------------------------------------------------------------------

def run(args: argparse.Namespace) -> None:
    settings = prepare(args)
    document = read_document(args.path, args.input_format)
    finish(document, args, settings)


# ---------------------------------------------------------------------------
# Rejestracja parsera
# ---------------------------------------------------------------------------

def add_lint_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--input-format",
        choices=INPUT_FORMATS,
        default="auto",
        help="Format wejścia: auto, markdown lub html (domyślnie: auto).",
    )
    p.add_argument(
        "--format", "-f",
        choices=OUTPUT_FORMATS,
        default=None,
        help="Format raportu: text, json lub table (domyślnie: $GUIDELINT_FORMAT lub text).",
    )
    p.add_argument(
        "--mode",
        choices=MODES,
        default=None,
        help=(
            "strict: błąd gdy jakikolwiek FAIL; consistency: przykłady bad "
            "muszą łamać reguły, better je spełniać (domyślnie: $GUIDELINT_MODE lub strict)."
        ),
    )
    p.add_argument(
        "--manifest", "-m",
        default=None,
        metavar="PLIK",
        help="Manifest reguł JSON (domyślnie: $GUIDELINT_MANIFEST).",
    )
    p.add_argument(
        "--rule", "-r",
        nargs="+",
        metavar="ID",
        help="Uruchom tylko wskazane reguły (można podać kilka).",
    )
    p.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Logi diagnostyczne (DEBUG) na stderr.",
    )


def add_parser(subparsers: argparse._SubParsersAction) -> None:  # type: ignore[type-arg]
    p = subparsers.add_parser(
        "lint",
        help="Sprawdza przykłady kodu przewodnika regułami.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        description="""
Wyodrębnia przykłady kodu (Bad: / Better:) z przewodnika i sprawdza je
regułami wynikającymi z samego przewodnika.

Raport (text): jedna linia na wynik
  sekcja | indeks-przykładu | id-reguły | PASS|FAIL|SKIP

Kody wyjścia: 0 — brak problemów, 1 — problemy w raporcie, 2 — błąd wejścia.

Przykłady:
  guidelint lint unit-testing-best-practices.md
  cat przewodnik.md | guidelint lint -
  guidelint lint przewodnik.md --format table --mode consistency
  guidelint lint przewodnik.md --rule arrange-act-assert no-magic-strings
        """,
    )
    p.add_argument(
        "path",
        nargs="?",
        default="-",
        metavar="PLIK",
        help="Ścieżka do przewodnika (Markdown/HTML); '-' = stdin (domyślnie).",
    )
    add_lint_options(p)
    p.set_defaults(func=run)
