"""Domain entities: tokens, text edits and diagnostics."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

from layout_linter.domain.rule_msgs import RuleMsgBuilder

if TYPE_CHECKING:
    import astroid


class TokenKind(Enum):
    """Lexical categories the navigator distinguishes."""

    OP = "op"
    NAME = "name"
    NUMBER = "number"
    STRING = "string"
    COMMENT = "comment"
    NEWLINE = "newline"
    NL = "nl"
    INDENT = "indent"
    DEDENT = "dedent"
    ENDMARKER = "endmarker"
    OTHER = "other"

    @property
    def is_layout(self) -> bool:
        """Layout tokens carry no code and are never returned by navigation queries."""
        return self in _LAYOUT_KINDS


_LAYOUT_KINDS = frozenset(
    {TokenKind.NEWLINE, TokenKind.NL, TokenKind.INDENT, TokenKind.DEDENT, TokenKind.ENDMARKER}
)


@dataclass(frozen=True)
class Token:
    """
    A lexical unit of the source text.

    ``start``/``end`` form a half-open character range into the source.
    Lines are 1-based, columns 0-based and counted in characters.
    """

    kind: TokenKind
    value: str
    start: int
    end: int
    start_line: int
    start_col: int
    end_line: int
    end_col: int

    @property
    def is_comment(self) -> bool:
        return self.kind is TokenKind.COMMENT

    def is_op(self, *values: str) -> bool:
        """True if this is an operator token with one of the given values."""
        return self.kind is TokenKind.OP and (not values or self.value in values)


@dataclass(frozen=True)
class TextEdit:
    """Replace the half-open range ``[start, end)`` of the source with ``replacement``."""

    start: int
    end: int
    replacement: str

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(f"Invalid edit range [{self.start}, {self.end})")

    def overlaps(self, other: TextEdit) -> bool:
        """Two edits conflict when their ranges intersect or both insert at one point."""
        if self.start == self.end == other.start == other.end:
            return True
        return self.start < other.end and other.start < self.end

    def apply(self, text: str) -> str:
        return text[: self.start] + self.replacement + text[self.end :]

    @classmethod
    def insert(cls, offset: int, text: str) -> TextEdit:
        return cls(offset, offset, text)

    @classmethod
    def remove(cls, start: int, end: int) -> TextEdit:
        return cls(start, end, "")


def select_disjoint(edits: Iterable[TextEdit]) -> list[TextEdit]:
    """
    Pick a conflict-free batch of edits.

    Edits are ordered by position; identical duplicates collapse into one and
    an edit overlapping an already selected one is deferred (dropped from this
    batch). Callers re-analyse after applying the batch to pick up the rest.
    """
    selected: list[TextEdit] = []
    for edit in sorted(set(edits), key=lambda e: (e.start, e.end, e.replacement)):
        if any(edit.overlaps(kept) for kept in selected):
            continue
        selected.append(edit)
    return selected


def apply_edits(text: str, edits: Iterable[TextEdit]) -> str:
    """Apply non-overlapping edits to ``text``; raises ValueError on overlap."""
    ordered = sorted(edits, key=lambda e: (e.start, e.end))
    for previous, current in zip(ordered, ordered[1:]):
        if previous.overlaps(current):
            raise ValueError(f"Overlapping edits: {previous} and {current}")
    # Right to left so earlier offsets stay valid.
    for edit in reversed(ordered):
        text = edit.apply(text)
    return text


@dataclass(frozen=True)
class Diagnostic:
    """A layout violation found by one rule, optionally carrying a fix."""

    rule: str
    msgid: str
    line: int
    column: int
    node: astroid.nodes.NodeNG | None = None
    data: Mapping[str, object] = field(default_factory=dict)
    fix: TextEdit | None = None

    @property
    def fixable(self) -> bool:
        return self.fix is not None

    @property
    def message(self) -> str:
        """Human readable message rendered from the catalog template."""
        return RuleMsgBuilder.render(self.msgid, self.data)

    @classmethod
    def from_node(
        cls,
        *,
        rule: str,
        msgid: str,
        node: astroid.nodes.NodeNG,
        line: int,
        column: int,
        data: Mapping[str, object] | None = None,
        fix: TextEdit | None = None,
    ) -> Diagnostic:
        """Build a diagnostic anchored to ``node`` at an explicit position."""
        return cls(
            rule=rule,
            msgid=msgid,
            line=line,
            column=column,
            node=node,
            data=dict(data or {}),
            fix=fix,
        )

    def location(self, path: str = "") -> str:
        """``path:line:column`` string used by reporters."""
        return f"{path}:{self.line}:{self.column}"


@dataclass(frozen=True)
class FileReport:
    """Diagnostics found in one file, or the reason it could not be analysed."""

    path: str
    diagnostics: tuple[Diagnostic, ...] = ()
    error: str | None = None

    @property
    def fixable_count(self) -> int:
        return sum(1 for d in self.diagnostics if d.fixable)


@dataclass(frozen=True)
class FixResult:
    """Outcome of driving one file's fixes to a fixpoint."""

    path: str
    original: str
    fixed: str
    passes: int
    applied: int
    remaining: tuple[Diagnostic, ...] = ()
    error: str | None = None

    @property
    def changed(self) -> bool:
        return self.fixed != self.original
