"""Layout rules and the shared context they run against."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Protocol

import astroid

from layout_linter.domain.navigation import SourceNavigator

if TYPE_CHECKING:
    from layout_linter.domain.config import RuleOptions
    from layout_linter.domain.entities import Diagnostic

__all__ = [
    "BlockKind",
    "LayoutRule",
    "RuleContext",
    "StatementBlock",
    "iter_statement_blocks",
]

# Statement list fields of compound statements. ``handlers`` is left out:
# except clauses are parts of one ``try``, not sibling statements.
_BODY_FIELDS: tuple[str, ...] = ("body", "orelse", "finalbody")


@dataclass(frozen=True)
class RuleContext:
    """Everything a rule needs for one analysis pass over one file."""

    module: astroid.nodes.Module
    navigator: SourceNavigator

    @classmethod
    def from_module(cls, module: astroid.nodes.Module) -> RuleContext:
        return cls(module=module, navigator=SourceNavigator.from_module(module))

    @classmethod
    def from_text(cls, text: str, path: str = "<string>") -> RuleContext:
        module = astroid.parse(text, path=path)
        return cls(module=module, navigator=SourceNavigator(text))


class LayoutRule(Protocol):
    """A configured rule: one ``check`` call per file, returning diagnostics."""

    name: str
    options: RuleOptions

    def check(self, context: RuleContext) -> list[Diagnostic]:
        """Inspect one file and report violations, each optionally carrying a fix."""
        ...


class BlockKind(Enum):
    ROOT = "root"
    NESTED = "nested"
    CLASS = "class"
    CASES = "cases"


@dataclass(frozen=True)
class StatementBlock:
    """An ordered list of sibling statements and the node owning it."""

    kind: BlockKind
    owner: astroid.nodes.NodeNG
    statements: tuple[astroid.nodes.NodeNG, ...]


def iter_statement_blocks(module: astroid.nodes.Module) -> Iterator[StatementBlock]:
    """Yield the module body, then every nested statement list in source order."""
    yield StatementBlock(BlockKind.ROOT, module, tuple(module.body))
    for node in module.nodes_of_class(astroid.nodes.NodeNG):
        if node is module:
            continue
        if isinstance(node, astroid.nodes.ClassDef):
            yield StatementBlock(BlockKind.CLASS, node, tuple(node.body))
            continue
        if isinstance(node, astroid.nodes.Match):
            yield StatementBlock(BlockKind.CASES, node, tuple(node.cases))
            continue
        # Literal nodes proxy attribute lookups to their builtin class, so only
        # the child fields declared on the node class are read.
        child_fields = type(node)._astroid_fields
        for field_name in _BODY_FIELDS:
            if field_name not in child_fields:
                continue
            statements = getattr(node, field_name)
            if isinstance(statements, list) and statements:
                yield StatementBlock(BlockKind.NESTED, node, tuple(statements))
