"""Use Case: Apply Fixes - drive layout fixes to a fixpoint and write the results."""

from __future__ import annotations

import logging
import shutil
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path
from typing import TYPE_CHECKING

from layout_linter.domain.entities import FixResult, apply_edits, select_disjoint
from layout_linter.domain.protocols import FileSystemProtocol, TelemetryPort
from layout_linter.use_cases.check_layout import FILE_ERRORS

if TYPE_CHECKING:
    from layout_linter.domain.rules import LayoutRule
    from layout_linter.use_cases.check_layout import CheckLayoutUseCase

logger = logging.getLogger(__name__)

DEFAULT_MAX_PASSES = 10


class ApplyFixesUseCase:
    """
    Apply the fixes carried by layout diagnostics.

    Each pass re-analyses the current text, applies a batch of non-overlapping
    edits and re-parses the result. Overlapping edits are deferred to the next
    pass. The loop stops when nothing fixable remains, when a batch leaves the
    text unchanged, or after ``max_passes``. A batch that produces unparsable
    text is discarded and the last valid text kept.
    """

    def __init__(
        self,
        check_layout: CheckLayoutUseCase,
        filesystem: FileSystemProtocol,
        telemetry: TelemetryPort,
        max_passes: int = DEFAULT_MAX_PASSES,
        create_backups: bool = False,
    ) -> None:
        if max_passes < 1:
            raise ValueError(f"max_passes must be at least 1, got {max_passes}")
        self.check_layout = check_layout
        self.filesystem = filesystem
        self.telemetry = telemetry
        self.max_passes = max_passes
        self.create_backups = create_backups

    def fix_source(self, source: str, path: str, rules: list[LayoutRule]) -> FixResult:
        """Fix one source text in memory. ``path`` is used for parsing and messages only."""
        try:
            diagnostics = self.check_layout.analyze_source(source, path, rules)
        except FILE_ERRORS as exc:
            return FixResult(path=path, original=source, fixed=source, passes=0, applied=0, error=str(exc))

        text = source
        passes = applied = 0
        error: str | None = None
        while passes < self.max_passes:
            edits = select_disjoint(d.fix for d in diagnostics if d.fix is not None)
            if not edits:
                break
            candidate = apply_edits(text, edits)
            if candidate == text:
                break
            try:
                next_diagnostics = self.check_layout.analyze_source(candidate, path, rules)
            except FILE_ERRORS as exc:
                # Keep the last text that parsed; the batch is dropped.
                logger.warning("Fixes for %s produced invalid source, reverting pass: %s", path, exc)
                error = f"pass {passes + 1} produced invalid source: {exc}"
                break
            passes += 1
            applied += len(edits)
            text, diagnostics = candidate, next_diagnostics
            logger.debug("%s: pass %d applied %d edit(s)", path, passes, len(edits))

        return FixResult(
            path=path,
            original=source,
            fixed=text,
            passes=passes,
            applied=applied,
            remaining=tuple(diagnostics),
            error=error,
        )

    def fix_file(self, path: str, rules: list[LayoutRule], dry_run: bool = False) -> FixResult:
        rel = self._rel_path(path)
        try:
            source = self.filesystem.read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            self.telemetry.error(f"file={rel} status=failed reason={exc}")
            return FixResult(path=rel, original="", fixed="", passes=0, applied=0, error=str(exc))

        result = replace(self.fix_source(source, path, rules), path=rel)
        if result.error:
            self.telemetry.warning(f"file={rel} status=partial reason={result.error}")
        if not result.changed:
            self.telemetry.step(f"file={rel} status=skipped reason=no_fixable_violations")
            return result
        if dry_run:
            self.telemetry.step(f"file={rel} status=would_fix edits={result.applied} passes={result.passes}")
            return result
        if self.create_backups:
            self._create_backup(path)
        self.filesystem.write_text(path, result.fixed)
        self.telemetry.step(f"file={rel} status=fixed edits={result.applied} passes={result.passes}")
        return result

    def execute(
        self, target_path: str, rule_names: Iterable[str] | None = None, dry_run: bool = False
    ) -> list[FixResult]:
        """Fix every Python file under ``target_path``; returns one result per file."""
        rules = self.check_layout.build_rules(rule_names)
        mode = "dry run" if dry_run else "writing changes"
        self.telemetry.step(f"🔧 Starting layout fixes on {target_path} ({mode})")
        results = [
            self.fix_file(path, rules, dry_run=dry_run)
            for path in sorted(self.filesystem.glob_python_files(target_path))
        ]
        changed = sum(1 for r in results if r.changed)
        remaining = sum(len(r.remaining) for r in results)
        self.telemetry.step(f"🛠️ Fix run complete. Files repaired: {changed}, remaining violations: {remaining}")
        return results

    def _rel_path(self, file_path_str: str) -> str:
        return self.filesystem.relative_path(file_path_str)

    def _create_backup(self, file_path_str: str) -> str:
        """Create a .bak copy of the file. Returns the backup path."""
        file_path = Path(file_path_str)
        backup_path = file_path.with_suffix(file_path.suffix + ".bak")
        shutil.copy2(file_path, backup_path)
        return str(backup_path)
