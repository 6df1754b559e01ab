"""Use Case: Check Layout - run the configured rules over files and collect diagnostics."""

from __future__ import annotations

import logging
import tokenize
from collections.abc import Iterable
from typing import TYPE_CHECKING

import astroid

from layout_linter.domain.entities import Diagnostic, FileReport
from layout_linter.domain.navigation import SourceNavigator
from layout_linter.domain.protocols import AstroidProtocol, FileSystemProtocol, TelemetryPort
from layout_linter.domain.rules import RuleContext
from layout_linter.domain.rules.catalog import RuleCatalog

if TYPE_CHECKING:
    from layout_linter.domain.config import ConfigurationLoader
    from layout_linter.domain.rules import LayoutRule

logger = logging.getLogger(__name__)

# Failures of a single rule on a single file; logged and skipped.
RULE_ERRORS = (astroid.AstroidError, tokenize.TokenError, ValueError)

# Failures that make a whole file unreadable or unparsable.
FILE_ERRORS = (astroid.AstroidError, tokenize.TokenError, SyntaxError, UnicodeDecodeError, OSError)


class CheckLayoutUseCase:
    """Analyse source files with the enabled layout rules."""

    def __init__(
        self,
        filesystem: FileSystemProtocol,
        astroid_gateway: AstroidProtocol,
        telemetry: TelemetryPort,
        config_loader: ConfigurationLoader,
    ) -> None:
        self.filesystem = filesystem
        self.astroid_gateway = astroid_gateway
        self.telemetry = telemetry
        self.config_loader = config_loader

    def build_rules(self, rule_names: Iterable[str] | None = None) -> list[LayoutRule]:
        """Instantiate the enabled rules, or only ``rule_names`` when given."""
        return RuleCatalog.build_enabled(self.config_loader, rule_names)

    def analyze_source(self, source: str, path: str, rules: list[LayoutRule]) -> list[Diagnostic]:
        """
        Run every rule over one source text.

        Raises the parser's error when ``source`` is not valid Python; a rule
        that fails on a parsed file is logged and skipped.
        """
        module = self.astroid_gateway.parse_source(source, path)
        context = RuleContext(module=module, navigator=SourceNavigator(source))
        diagnostics: list[Diagnostic] = []
        for rule in rules:
            try:
                diagnostics.extend(rule.check(context))
            except RULE_ERRORS as exc:
                logger.warning("Rule %s failed on %s: %s", rule.name, path, exc)
        diagnostics.sort(key=lambda d: (d.line, d.column, d.rule))
        return diagnostics

    def analyze_file(self, path: str, rules: list[LayoutRule]) -> FileReport:
        rel = self.filesystem.relative_path(path)
        try:
            source = self.filesystem.read_text(path)
            diagnostics = self.analyze_source(source, path, rules)
        except FILE_ERRORS as exc:
            logger.debug("Could not analyse %s", path, exc_info=True)
            self.telemetry.error(f"file={rel} status=skipped reason={exc}")
            return FileReport(path=rel, error=str(exc))
        return FileReport(path=rel, diagnostics=tuple(diagnostics))

    def execute(self, target_path: str, rule_names: Iterable[str] | None = None) -> list[FileReport]:
        """Check every Python file under ``target_path``."""
        rules = self.build_rules(rule_names)
        self.telemetry.step(
            f"Checking layout of {target_path} with rules: {', '.join(r.name for r in rules)}"
        )
        files = sorted(self.filesystem.glob_python_files(target_path))
        reports = [self.analyze_file(path, rules) for path in files]
        found = sum(len(r.diagnostics) for r in reports)
        self.telemetry.step(f"Checked {len(files)} file(s): {found} layout violation(s)")
        return reports
