"""Blank-line padding between sibling statements, after doc comments and at the file edges."""

from __future__ import annotations

import astroid

from layout_linter.domain.config import BlockPaddingOptions
from layout_linter.domain.doc_comments import find_doc_block
from layout_linter.domain.entities import Diagnostic, TextEdit
from layout_linter.domain.rule_msgs import RuleMsgBuilder
from layout_linter.domain.rules import BlockKind, RuleContext, StatementBlock, iter_statement_blocks


class BlockPaddingRule:
    """
    Enforce blank lines between root-level and nested statements.

    Comments written directly above a statement belong to it, so the gap is
    measured up to the first of those comments.
    """

    name: str = "block-padding"

    def __init__(self, options: BlockPaddingOptions | None = None) -> None:
        self.options = options or BlockPaddingOptions()

    def check(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        doc_checked: set[int] = set()
        module = context.module

        if module.body or module.doc_node is not None:
            if self.options.enforce_beginning_padding:
                diagnostics.extend(self._check_beginning(context))
            if self.options.enforce_end_padding:
                diagnostics.extend(self._check_end(context))

        for block in iter_statement_blocks(module):
            if block.kind is BlockKind.ROOT:
                diagnostics.extend(
                    self._check_siblings(
                        context, block, self.options.root_block_padding, "missingPaddingBetweenRootBlocks"
                    )
                )
                candidates = block.statements
            elif len(block.statements) > 1:
                diagnostics.extend(
                    self._check_siblings(
                        context, block, self.options.nested_block_padding, "missingPaddingBetweenNestedBlocks"
                    )
                )
                candidates = () if block.kind is BlockKind.CASES else block.statements
            else:
                candidates = ()
            if isinstance(block.owner, (astroid.nodes.FunctionDef, astroid.nodes.ClassDef)):
                candidates = (block.owner, *candidates)
            for node in candidates:
                if id(node) in doc_checked:
                    continue
                doc_checked.add(id(node))
                diagnostic = self._check_docstring(context, node)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)
        return diagnostics

    def _report(
        self,
        msgid: str,
        node: astroid.nodes.NodeNG,
        line: int,
        column: int,
        expected: int | None = None,
        actual: int | None = None,
        fix: TextEdit | None = None,
    ) -> Diagnostic:
        data: dict[str, object] = {}
        if expected is not None:
            data = {"expected": expected, "actual": actual, "line_text": RuleMsgBuilder.line_text(expected)}
        return Diagnostic.from_node(
            rule=self.name, msgid=msgid, node=node, line=line, column=column, data=data, fix=fix
        )

    def _check_siblings(
        self, context: RuleContext, block: StatementBlock, required: int, msgid: str
    ) -> list[Diagnostic]:
        nav = context.navigator
        diagnostics: list[Diagnostic] = []
        for current in block.statements[1:]:
            anchor = nav.leading_anchor(current)
            if anchor is None:
                continue
            before = nav.token_before(anchor, include_comments=True)
            if before is None:
                continue
            actual = nav.blank_lines_between(before, anchor)
            if actual == required:
                continue
            line, column = nav.node_start(current)
            diagnostics.append(
                self._report(
                    msgid,
                    current,
                    line,
                    column,
                    expected=required,
                    actual=actual,
                    fix=nav.whitespace_edit(before, anchor, required + 1),
                )
            )
        return diagnostics

    def _check_docstring(self, context: RuleContext, node: astroid.nodes.NodeNG) -> Diagnostic | None:
        nav = context.navigator
        block = find_doc_block(nav.leading_comments(node), self.options.treat_comments_as_docstrings)
        if not block:
            return None
        first = nav.first_token(node)
        if first is None:
            return None
        last_comment = block[-1]
        required = self.options.docstring_padding
        actual = nav.blank_lines_between(last_comment, first)
        if actual == required:
            return None
        return self._report(
            "missingPaddingAfterDocstring",
            node,
            first.start_line,
            first.start_col,
            expected=required,
            actual=actual,
            fix=nav.whitespace_edit(last_comment, first, required + 1),
        )

    def _check_beginning(self, context: RuleContext) -> list[Diagnostic]:
        nav = context.navigator
        if not nav.tokens:
            return []
        first = nav.tokens[0]
        if first.start_line <= 1:
            return []
        return [
            self._report(
                "missingPaddingAtBeginning",
                context.module,
                first.start_line,
                first.start_col,
                fix=TextEdit.remove(0, first.start),
            )
        ]

    def _check_end(self, context: RuleContext) -> list[Diagnostic]:
        nav = context.navigator
        if not nav.tokens:
            return []
        last = nav.tokens[-1]
        required = self.options.root_block_padding
        actual = nav.total_lines - last.end_line
        if actual == required:
            return []
        return [
            self._report(
                "missingPaddingAtEnd",
                context.module.body[-1] if context.module.body else context.module,
                last.end_line,
                last.end_col,
                expected=required,
                actual=actual,
                fix=TextEdit(last.end, len(nav.text), "\n" * required),
            )
        ]
