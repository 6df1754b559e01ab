"""Helpers for running a single layout rule over source text."""

from layout_linter.domain.entities import Diagnostic, apply_edits, select_disjoint
from layout_linter.domain.rules import RuleContext


def run_rule(rule, code: str) -> list[Diagnostic]:
    return rule.check(RuleContext.from_text(code))


def msgids(diagnostics: list[Diagnostic]) -> list[str]:
    return [d.msgid for d in diagnostics]


def fix_code(rule, code: str, max_passes: int = 10) -> str:
    """Apply the rule's fixes until nothing fixable is left."""
    text = code
    for _ in range(max_passes):
        edits = select_disjoint(d.fix for d in run_rule(rule, text) if d.fix is not None)
        if not edits:
            break
        text = apply_edits(text, edits)
    return text
