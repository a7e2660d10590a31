"""
reporter/render.py — formaty wyjściowe raportu.

render_text  — jedna linia na wynik: "sekcja | przykład | reguła | STATUS"
render_json  — obiekt JSON (klucze sortowane, deterministyczny)
render_table — tabele rich (wyniki + podsumowanie per reguła) do terminala

Tekst i JSON są bajtowo identyczne dla identycznego wejścia.
"""

from __future__ import annotations

import json
from typing import Any

from rich import box
from rich.console import Console
from rich.table import Table
from rich.text import Text

from guide_model import Finding, FindingStatus

from .summary import Report, is_inconsistent

OUTPUT_FORMATS: tuple[str, ...] = ("text", "json", "table")

STATUS_STYLE: dict[FindingStatus, str] = {
    FindingStatus.PASS: "green",
    FindingStatus.FAIL: "red",
    FindingStatus.SKIP: "yellow",
}


def _section_name(finding: Finding) -> str:
    return finding.example.section_title or "-"


def format_finding(finding: Finding) -> str:
    return (
        f"{_section_name(finding)} | {finding.example.index} | "
        f"{finding.rule_id} | {finding.status}"
    )


def render_text(report: Report) -> str:
    """Pusty raport → pusty napis (bez linii podsumowania)."""
    return "".join(format_finding(f) + "\n" for f in report.findings)


def report_to_dict(report: Report) -> dict[str, Any]:
    return {
        "mode": str(report.mode),
        "exit_code": report.exit_code,
        "totals": {
            "passed": report.passed,
            "failed": report.failed,
            "skipped": report.skipped,
        },
        "rules": [
            {
                "rule_id": s.rule_id,
                "passed": s.passed,
                "failed": s.failed,
                "skipped": s.skipped,
            }
            for s in report.rules
        ],
        "findings": [
            {
                "section": f.example.section_title,
                "section_index": f.example.section_index,
                "example_index": f.example.index,
                "label": str(f.example.label),
                "line": f.example.line,
                "rule_id": str(f.rule_id),
                "status": str(f.status),
                "message": f.message,
            }
            for f in report.findings
        ],
    }


def render_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2, sort_keys=True) + "\n"


def render_table(report: Report, console: Console) -> None:
    if not report.findings:
        console.print("[yellow]Brak przykładów kodu podlegających regułom.[/yellow]")
        return

    table = Table(
        box=box.SIMPLE_HEAD,
        show_header=True,
        header_style="bold white",
        row_styles=["", "dim"],
        expand=False,
    )
    table.add_column("SEKCJA",   no_wrap=False, max_width=40, style="bold cyan")
    table.add_column("#",        justify="right", no_wrap=True)
    table.add_column("ETYKIETA", no_wrap=True)
    table.add_column("REGUŁA",   no_wrap=True)
    table.add_column("STATUS",   no_wrap=True)
    table.add_column("KOMUNIKAT", no_wrap=False, max_width=70, style="dim")

    for f in report.findings:
        status = Text(str(f.status), style=STATUS_STYLE[f.status])
        if is_inconsistent(f):
            status.append(" ≠", style="bold magenta")
        table.add_row(
            Text(_section_name(f)),
            str(f.example.index),
            str(f.example.label),
            str(f.rule_id),
            status,
            Text(f.message or ""),
        )

    summary = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    summary.add_column("REGUŁA", style="yellow", no_wrap=True)
    summary.add_column("PASS", justify="right", style="green")
    summary.add_column("FAIL", justify="right", style="red")
    summary.add_column("SKIP", justify="right", style="dim")
    for s in report.rules:
        summary.add_row(s.rule_id, str(s.passed), str(s.failed), str(s.skipped))

    console.print()
    console.print(table)
    console.print(summary)
    console.print(
        f"  [dim]{len(report.findings)} wyników: "
        f"{report.passed} PASS, {report.failed} FAIL, {report.skipped} SKIP "
        f"(tryb {report.mode})[/dim]\n"
    )
