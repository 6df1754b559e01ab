"""Interface for layout reporting."""

from __future__ import annotations

from collections import Counter
from collections.abc import Sequence
from typing import TYPE_CHECKING, Protocol

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from layout_linter.domain.rule_msgs import RuleMsgBuilder

if TYPE_CHECKING:
    from layout_linter.domain.entities import Diagnostic, FileReport, FixResult


class LayoutReporter(Protocol):
    """Protocol for reporting check and fix results."""

    def report_check(self, reports: Sequence[FileReport]) -> None:
        """Report diagnostics of a check run."""
        ...

    def report_fixes(self, results: Sequence[FixResult], dry_run: bool = False) -> None:
        """Report the outcome of a fix run."""
        ...


class TerminalLayoutReporter:
    """Terminal reporter using rich: one line per diagnostic, then a summary table."""

    def __init__(self, console: Console | None = None) -> None:
        self.console = console or Console(highlight=False)

    def format_diagnostic(self, path: str, diagnostic: Diagnostic) -> str:
        """``path:line:col: CODE message (symbol)`` with a marker for fixable diagnostics."""
        definition = RuleMsgBuilder.get(diagnostic.msgid)
        marker = " [*]" if diagnostic.fixable else ""
        return (
            f"{diagnostic.location(path)}: {definition.code} {diagnostic.message} "
            f"({definition.symbol}){marker}"
        )

    def _print_diagnostics(self, path: str, diagnostics: Sequence[Diagnostic]) -> None:
        for diagnostic in diagnostics:
            self.console.print(escape(self.format_diagnostic(path, diagnostic)), soft_wrap=True)

    def _summary(self, diagnostics: list[Diagnostic], title: str) -> None:
        counts = Counter((d.rule, d.msgid) for d in diagnostics)
        fixable = Counter((d.rule, d.msgid) for d in diagnostics if d.fixable)
        table = Table(title=title)
        table.add_column("Code")
        table.add_column("Rule")
        table.add_column("Message id")
        table.add_column("Count", justify="right")
        table.add_column("Fixable", justify="right")
        for (rule, msgid), count in sorted(counts.items(), key=lambda kv: RuleMsgBuilder.get(kv[0][1]).code):
            table.add_row(RuleMsgBuilder.get(msgid).code, rule, msgid, str(count), str(fixable[(rule, msgid)]))
        self.console.print(table)

    def report_check(self, reports: Sequence[FileReport]) -> None:
        diagnostics: list[Diagnostic] = []
        for report in reports:
            if report.error:
                self.console.print(f"[red]{escape(report.path)}: could not analyse: {escape(report.error)}[/]")
                continue
            self._print_diagnostics(report.path, report.diagnostics)
            diagnostics.extend(report.diagnostics)
        if not diagnostics:
            self.console.print("[bold green]No layout violations found.[/]")
            return
        self._summary(diagnostics, "Layout violations")
        fixable = sum(1 for d in diagnostics if d.fixable)
        self.console.print(
            f"Found {len(diagnostics)} violation(s) in {sum(1 for r in reports if r.diagnostics)} file(s); "
            f"{fixable} fixable with `layout-linter fix` (marked [*])."
        )

    def report_fixes(self, results: Sequence[FixResult], dry_run: bool = False) -> None:
        remaining: list[Diagnostic] = []
        verb = "Would fix" if dry_run else "Fixed"
        for result in results:
            if result.changed:
                self.console.print(
                    f"{verb} {escape(result.path)}: {result.applied} edit(s) in {result.passes} pass(es)"
                )
            self._print_diagnostics(result.path, result.remaining)
            remaining.extend(result.remaining)
        changed = sum(1 for r in results if r.changed)
        self.console.print(f"{verb} {changed} file(s).")
        if remaining:
            self._summary(remaining, "Remaining layout violations")
