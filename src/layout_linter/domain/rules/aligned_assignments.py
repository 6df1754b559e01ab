"""Vertical alignment of ``=`` (and annotation ``:``) across runs of assignments."""

from __future__ import annotations

from dataclasses import dataclass

import astroid

from layout_linter.domain.config import AlignmentOptions
from layout_linter.domain.entities import Diagnostic, TextEdit, Token
from layout_linter.domain.navigation import SourceNavigator
from layout_linter.domain.rules import BlockKind, RuleContext, iter_statement_blocks

_TARGET_KINDS = {
    astroid.nodes.AssignName: "name",
    astroid.nodes.AssignAttr: "attribute",
}


@dataclass(frozen=True)
class Declarator:
    """
    A single-target assignment with a value.

    Offsets are character offsets into the source: ``start`` is the target's
    first character, ``head_end`` the end of the target or annotation and
    ``end`` the end of the value.
    """

    node: astroid.nodes.NodeNG
    keyword: str
    start: int
    start_col: int
    head_end: int
    end: int
    start_line: int
    end_line: int
    equals: Token
    colon: Token | None
    annotation: str | None
    has_comments: bool

    @property
    def equals_col(self) -> int:
        return self.equals.start_col

    @property
    def colon_col(self) -> int | None:
        return self.colon.start_col if self.colon is not None else None


class AlignedAssignmentsRule:
    """Align the assignment operators of consecutive declarations in a block."""

    name: str = "aligned-assignments"

    def __init__(self, options: AlignmentOptions | None = None) -> None:
        self.options = options or AlignmentOptions()

    def check(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for block in iter_statement_blocks(context.module):
            if block.kind is BlockKind.CASES:
                continue
            declarators = [
                d
                for d in (self.declarator(context.navigator, node) for node in block.statements)
                if d is not None
            ]
            if len(declarators) < self.options.block_size:
                continue
            for run in self._runs(declarators):
                diagnostics.extend(self._check_run(context.navigator, run))
        return diagnostics

    @staticmethod
    def declarator(nav: SourceNavigator, node: astroid.nodes.NodeNG) -> Declarator | None:
        """Describe ``node`` as a declarator, or None if it is not one."""
        if isinstance(node, astroid.nodes.Assign):
            if len(node.targets) != 1:
                return None
            target, annotation = node.targets[0], None
        elif isinstance(node, astroid.nodes.AnnAssign):
            if node.value is None:
                return None
            target, annotation = node.target, node.annotation
        else:
            return None
        keyword = _TARGET_KINDS.get(type(target))
        first = nav.first_token(node)
        if keyword is None or first is None or not nav.is_own_line(first):
            return None

        start, target_end = nav.span_of(target)
        value_start, value_end = nav.span_of(node.value)
        head_end = target_end
        colon = None
        annotation_text = None
        if annotation is not None:
            annotation_start, head_end = nav.span_of(annotation)
            colons = [t for t in nav.tokens_between(target_end, annotation_start, False) if t.is_op(":")]
            if not colons:
                return None
            colon = colons[-1]
            annotation_text = nav.text[annotation_start:head_end]
        equals = [t for t in nav.tokens_between(head_end, value_start, False) if t.is_op("=")]
        if not equals or equals[-1].start_line != first.start_line:
            return None
        if colon is not None and colon.start_line != first.start_line:
            return None
        between = nav.tokens_between(start, value_start)
        return Declarator(
            node=node,
            keyword=keyword,
            start=start,
            start_col=first.start_col,
            head_end=head_end,
            end=value_end,
            start_line=first.start_line,
            end_line=nav.node_end(node)[0],
            equals=equals[-1],
            colon=colon,
            annotation=annotation_text,
            has_comments=any(t.is_comment for t in between),
        )

    def _runs(self, declarators: list[Declarator]) -> list[list[Declarator]]:
        if not self.options.ignore_adjacent:
            return [declarators]
        runs: list[list[Declarator]] = []
        current = [declarators[0]]
        for previous, declarator in zip(declarators, declarators[1:]):
            if declarator.start_line == previous.end_line + 1:
                current.append(declarator)
                continue
            runs.append(current)
            current = [declarator]
        runs.append(current)
        return [run for run in runs if len(run) >= self.options.block_size]

    def _type_column(self, run: list[Declarator]) -> int | None:
        if not self.options.align_types:
            return None
        annotated = [d for d in run if d.colon is not None]
        if not annotated:
            return None
        if self.options.ignore_types_mismatch and len(annotated) != len(run):
            return None
        return max(d.colon_col for d in annotated)  # type: ignore[type-var]

    def _head(self, nav: SourceNavigator, declarator: Declarator, type_col: int | None) -> str:
        """Target (and annotation) text as it will be rewritten."""
        if declarator.colon is None or type_col is None:
            return nav.text[declarator.start : declarator.head_end]
        target = nav.text[declarator.start : declarator.colon.start].rstrip()
        padding = " " * (type_col - declarator.start_col - len(target))
        return f"{target}{padding}: {declarator.annotation}"

    def _check_run(self, nav: SourceNavigator, run: list[Declarator]) -> list[Diagnostic]:
        if self.options.ignore_if_assignments_not_in_block and len({d.keyword for d in run}) > 1:
            return []
        type_col = self._type_column(run)
        heads = {id(d): self._head(nav, d, type_col) for d in run}
        equals_col = max(d.equals_col for d in run)
        if type_col is not None:
            # A realigned annotation may push its operator further right.
            equals_col = max(
                [equals_col]
                + [d.start_col + len(heads[id(d)]) + 1 for d in run if d.colon is not None]
            )

        diagnostics: list[Diagnostic] = []
        for declarator in run:
            fix = self._fix(nav, declarator, heads[id(declarator)], equals_col)
            if declarator.equals_col != equals_col:
                diagnostics.append(self._report("misalignedAssignment", declarator, fix))
            if type_col is not None and declarator.colon_col is not None and declarator.colon_col != type_col:
                diagnostics.append(self._report("misalignedTypes", declarator, fix))
        return diagnostics

    @staticmethod
    def _fix(nav: SourceNavigator, declarator: Declarator, head: str, equals_col: int) -> TextEdit | None:
        if declarator.has_comments:
            return None
        value_start = nav.span_of(declarator.node.value)[0]
        value = nav.text[value_start : declarator.end]
        padding = " " * (equals_col - declarator.start_col - len(head))
        return TextEdit(declarator.start, declarator.end, f"{head}{padding}= {value}")

    def _report(self, msgid: str, declarator: Declarator, fix: TextEdit | None) -> Diagnostic:
        return Diagnostic.from_node(
            rule=self.name,
            msgid=msgid,
            node=declarator.node,
            line=declarator.start_line,
            column=declarator.start_col,
            fix=fix,
        )
