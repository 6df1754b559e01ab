"""Blank lines before and after imports, ``__all__``, classes, functions and block comments."""

from __future__ import annotations

from dataclasses import dataclass

import astroid

from layout_linter.domain.config import StatementSpacingOptions
from layout_linter.domain.entities import Diagnostic, Token
from layout_linter.domain.navigation import SourceNavigator
from layout_linter.domain.rule_msgs import RuleMsgBuilder
from layout_linter.domain.rules import BlockKind, RuleContext, iter_statement_blocks

IMPORT = "import declaration"
EXPORT = "export declaration"
CLASS = "class declaration"
FUNCTION = "function declaration"
COMMENT = "block comment"

# Adjacent statements of these categories form a group with no required gap.
_GROUPING_CATEGORIES = frozenset({IMPORT, EXPORT})


@dataclass(frozen=True)
class _Required:
    before: int
    after: int | None


class StatementSpacingRule:
    """
    Enforce configured blank lines around categories of statements.

    Methods are class members and fall under ``block-padding`` instead of
    the function category.
    """

    name: str = "consistent-line-spacing"

    def __init__(self, options: StatementSpacingOptions | None = None) -> None:
        self.options = options or StatementSpacingOptions()

    def _required(self, category: str) -> _Required:
        opts = self.options
        return {
            IMPORT: _Required(opts.before_imports, opts.after_imports),
            EXPORT: _Required(opts.before_exports, opts.after_exports),
            CLASS: _Required(opts.before_class, opts.after_class),
            FUNCTION: _Required(opts.before_function, opts.after_function),
            COMMENT: _Required(opts.before_comment, None),
        }[category]

    @staticmethod
    def category_of(node: astroid.nodes.NodeNG, block_kind: BlockKind) -> str | None:
        if isinstance(node, (astroid.nodes.Import, astroid.nodes.ImportFrom)):
            return IMPORT
        if block_kind is BlockKind.CLASS:
            return None
        if isinstance(node, astroid.nodes.ClassDef):
            return CLASS
        if isinstance(node, astroid.nodes.FunctionDef):
            return FUNCTION
        if block_kind is BlockKind.ROOT and StatementSpacingRule._is_export(node):
            return EXPORT
        return None

    @staticmethod
    def _is_export(node: astroid.nodes.NodeNG) -> bool:
        if isinstance(node, astroid.nodes.Assign):
            targets = node.targets
        elif isinstance(node, (astroid.nodes.AugAssign, astroid.nodes.AnnAssign)):
            targets = [node.target]
        else:
            return False
        return any(isinstance(t, astroid.nodes.AssignName) and t.name == "__all__" for t in targets)

    def check(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for block in iter_statement_blocks(context.module):
            if block.kind is BlockKind.CASES:
                continue
            categories = [self.category_of(node, block.kind) for node in block.statements]
            for index, (node, category) in enumerate(zip(block.statements, categories)):
                if category is None:
                    continue
                required = self._required(category)
                top_level = block.kind is BlockKind.ROOT
                skip_grouped = self.options.skip_import_groups and category in _GROUPING_CATEGORIES
                previous = categories[index - 1] if index > 0 else None
                following = categories[index + 1] if index + 1 < len(categories) else None

                first_in_parent = index == 0
                if not (first_in_parent and self.options.ignore_top_level_code and top_level):
                    if not (skip_grouped and previous == category):
                        diagnostic = self._check_before(context, node, required.before, category)
                        if diagnostic is not None:
                            diagnostics.append(diagnostic)

                last_in_parent = index == len(block.statements) - 1
                if required.after is None or (last_in_parent and self.options.ignore_top_level_code and top_level):
                    continue
                if skip_grouped and following == category:
                    continue
                diagnostic = self._check_after(context, node, required.after, category)
                if diagnostic is not None:
                    diagnostics.append(diagnostic)

        diagnostics.extend(self._check_block_comments(context))
        return diagnostics

    def _diagnostic(
        self,
        nav: SourceNavigator,
        msgid: str,
        node: astroid.nodes.NodeNG,
        at: Token,
        required: int,
        actual: int,
        category: str,
        before: Token,
        after: Token,
    ) -> Diagnostic:
        return Diagnostic.from_node(
            rule=self.name,
            msgid=msgid,
            node=node,
            line=at.start_line,
            column=at.start_col,
            data={
                "expected": required,
                "actual": actual,
                "node_type": category,
                "line_text": RuleMsgBuilder.line_text(required),
            },
            fix=nav.whitespace_edit(before, after, required + 1),
        )

    def _check_before(
        self, context: RuleContext, node: astroid.nodes.NodeNG, required: int, category: str
    ) -> Diagnostic | None:
        nav = context.navigator
        first = nav.first_token(node)
        if first is None:
            return None
        previous = nav.token_before(first, include_comments=True)
        if previous is None:
            return None
        actual = nav.blank_lines_between(previous, first)
        if actual == required:
            return None
        return self._diagnostic(nav, "missingLinesBefore", node, first, required, actual, category, previous, first)

    def _check_after(
        self, context: RuleContext, node: astroid.nodes.NodeNG, required: int, category: str
    ) -> Diagnostic | None:
        nav = context.navigator
        trailing = nav.trailing_anchor(node)
        if trailing is None:
            return None
        following = nav.token_after(trailing, include_comments=True)
        if following is None:
            return None
        actual = nav.blank_lines_between(trailing, following)
        if actual == required:
            return None
        first = nav.first_token(node) or trailing
        return self._diagnostic(nav, "missingLinesAfter", node, first, required, actual, category, trailing, following)

    def _check_block_comments(self, context: RuleContext) -> list[Diagnostic]:
        """A run of full-line comments starting at column 0 needs ``before_comment`` blank lines above it."""
        nav = context.navigator
        diagnostics: list[Diagnostic] = []
        required = self.options.before_comment
        for comment in nav.comments:
            if comment.start_col != 0:
                continue
            previous = nav.token_before(comment, include_comments=True)
            if previous is None:
                continue
            if previous.is_comment and nav.is_own_line(previous) and previous.end_line + 1 == comment.start_line:
                # Continuation of a run that started above.
                continue
            actual = nav.blank_lines_between(previous, comment)
            if actual == required:
                continue
            diagnostics.append(
                self._diagnostic(
                    nav, "missingLinesBefore", context.module, comment, required, actual, COMMENT, previous, comment
                )
            )
        return diagnostics
