"""Shared pylint checker that runs one layout rule per module."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import astroid
from pylint.checkers import BaseChecker

from layout_linter.domain.rule_msgs import RuleMsgBuilder
from layout_linter.domain.rules import RuleContext
from layout_linter.domain.rules.catalog import RuleCatalog
from layout_linter.use_cases.check_layout import RULE_ERRORS

if TYPE_CHECKING:
    from pylint.lint import PyLinter

    from layout_linter.domain.config import ConfigurationLoader
    from layout_linter.domain.entities import Diagnostic

logger = logging.getLogger(__name__)


class LayoutChecker(BaseChecker):
    """
    Thin adapter from a layout rule to pylint.

    Subclasses set ``name`` and ``RULE``; messages are built from the rule's
    catalog entries. Diagnostics without an anchor node are reported on the
    module.
    """

    name: str = "layout"
    RULE: str = ""

    def __init__(self, linter: PyLinter, config_loader: ConfigurationLoader) -> None:
        self.msgs = RuleMsgBuilder.build_msgs_for_rule(self.RULE)  # type: ignore[assignment]
        super().__init__(linter)
        self.config_loader = config_loader
        self._rule = RuleCatalog.build(self.RULE, config_loader)

    def visit_module(self, node: astroid.nodes.Module) -> None:
        """Delegate the whole module to the domain rule."""
        if not self.config_loader.is_enabled(self.RULE):
            return
        try:
            context = RuleContext.from_module(node)
            diagnostics = self._rule.check(context)
        except (*RULE_ERRORS, SyntaxError, OSError) as exc:
            logger.warning("Rule %s failed on %s: %s", self.RULE, node.file or node.name, exc)
            return
        for diagnostic in diagnostics:
            self._add(node, diagnostic)

    def _add(self, module: astroid.nodes.Module, diagnostic: Diagnostic) -> None:
        self.add_message(
            RuleMsgBuilder.get(diagnostic.msgid).symbol,
            node=diagnostic.node if diagnostic.node is not None else module,
            line=diagnostic.line,
            col_offset=diagnostic.column,
            args=dict(diagnostic.data),
        )
