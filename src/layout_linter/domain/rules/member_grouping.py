"""Ordering, sorting and spacing of class members by configured groups."""

from __future__ import annotations

import locale
from dataclasses import dataclass

import astroid

from layout_linter.domain.config import MemberGroup, MemberGroupingOptions
from layout_linter.domain.entities import Diagnostic, TextEdit
from layout_linter.domain.rule_msgs import RuleMsgBuilder
from layout_linter.domain.rules import BlockKind, RuleContext, iter_statement_blocks

CONSTRUCTORS = frozenset({"__init__", "__new__"})
STATIC_DECORATORS = frozenset({"staticmethod", "classmethod"})


@dataclass(frozen=True)
class Member:
    node: astroid.nodes.NodeNG
    name: str
    kind: str
    is_static: bool
    is_constructor: bool
    group: MemberGroup | None


class MemberGroupingRule:
    """
    Keep class members in group order.

    Each member is classified into the first group whose kinds and predicates
    match it; members matching no group are ignored by every check.
    """

    name: str = "class-property-grouping"

    def __init__(self, options: MemberGroupingOptions | None = None) -> None:
        self.options = options or MemberGroupingOptions()

    def check(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for block in iter_statement_blocks(context.module):
            if block.kind is not BlockKind.CLASS or len(block.statements) <= 1:
                continue
            members = [self.classify(node) for node in block.statements]
            grouped = [m for m in members if m is not None and m.group is not None]
            diagnostics.extend(self._check_order(context, grouped))
            if self.options.enforce_alphabetical_sorting:
                diagnostics.extend(self._check_alphabetical(context, grouped))
            if self.options.padding_between_groups > 0:
                diagnostics.extend(self._check_padding(context, members))
        return diagnostics

    # ------------------------------------------------------------------
    # Classification
    # ------------------------------------------------------------------

    def classify(self, node: astroid.nodes.NodeNG) -> Member | None:
        """Describe a class body statement as a member, or None for other statements."""
        if isinstance(node, astroid.nodes.FunctionDef):
            decorators = node.decorators.nodes if node.decorators else []
            is_static = any(_trailing_name(d) in STATIC_DECORATORS for d in decorators)
            is_constructor = node.name in CONSTRUCTORS
            return self._member(node, node.name, "method", is_static, is_constructor)
        if isinstance(node, (astroid.nodes.Assign, astroid.nodes.AnnAssign)):
            targets = node.targets if isinstance(node, astroid.nodes.Assign) else [node.target]
            if len(targets) != 1 or not isinstance(targets[0], astroid.nodes.AssignName):
                return None
            if isinstance(node, astroid.nodes.AnnAssign):
                is_static = _is_classvar(node.annotation)
            else:
                is_static = True
            return self._member(node, targets[0].name, "attribute", is_static, False)
        return None

    def _member(
        self, node: astroid.nodes.NodeNG, name: str, kind: str, is_static: bool, is_constructor: bool
    ) -> Member:
        return Member(
            node=node,
            name=name,
            kind=kind,
            is_static=is_static,
            is_constructor=is_constructor,
            group=self._group_for(kind, is_static, is_constructor),
        )

    def _group_for(self, kind: str, is_static: bool, is_constructor: bool) -> MemberGroup | None:
        for group in self.options.groups:
            if kind not in group.types:
                continue
            if is_constructor and "constructor" in group.matches:
                return group
            if is_static and "static" in group.matches:
                return group
            if not is_static and not is_constructor and not {"static", "constructor"} & set(group.matches):
                return group
        return None

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _report(
        self,
        context: RuleContext,
        msgid: str,
        member: Member,
        data: dict[str, object],
        fix: TextEdit | None = None,
    ) -> Diagnostic:
        line, column = context.navigator.node_start(member.node)
        return Diagnostic.from_node(
            rule=self.name, msgid=msgid, node=member.node, line=line, column=column, data=data, fix=fix
        )

    def _check_order(self, context: RuleContext, members: list[Member]) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        last: MemberGroup | None = None
        for member in members:
            group = member.group
            if group is None:
                continue
            if last is not None and group.order < last.order:
                diagnostics.append(
                    self._report(
                        context,
                        "wrongGroupOrder",
                        member,
                        {
                            "member": member.name,
                            "expected_group": last.name,
                            "expected_group_order": last.order,
                            "actual_group": group.name,
                            "actual_group_order": group.order,
                        },
                    )
                )
            last = group
        return diagnostics

    def _check_alphabetical(self, context: RuleContext, members: list[Member]) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        by_group: dict[str, list[Member]] = {}
        for member in members:
            by_group.setdefault(member.group.name, []).append(member)  # type: ignore[union-attr]
        for group_members in by_group.values():
            for previous, current in zip(group_members, group_members[1:]):
                if sort_key(previous.name) > sort_key(current.name):
                    diagnostics.append(
                        self._report(
                            context,
                            "wrongAlphabeticalOrder",
                            current,
                            {"member_a": current.name, "member_b": previous.name},
                        )
                    )
        return diagnostics

    def _check_padding(self, context: RuleContext, members: list[Member | None]) -> list[Diagnostic]:
        nav = context.navigator
        required = self.options.padding_between_groups
        diagnostics: list[Diagnostic] = []
        for previous, current in zip(members, members[1:]):
            if previous is None or current is None or previous.group is None or current.group is None:
                continue
            if previous.group.name == current.group.name:
                continue
            anchor = nav.leading_anchor(current.node)
            if anchor is None:
                continue
            before = nav.token_before(anchor, include_comments=True)
            if before is None:
                continue
            actual = nav.blank_lines_between(before, anchor)
            if actual == required:
                continue
            diagnostics.append(
                self._report(
                    context,
                    "incorrectPaddingBetweenGroups",
                    current,
                    {"expected": required, "actual": actual, "line_text": RuleMsgBuilder.line_text(required)},
                    fix=nav.whitespace_edit(before, anchor, required + 1),
                )
            )
        return diagnostics


def sort_key(name: str) -> str:
    """Locale-aware, case-insensitive collation key for member names."""
    return locale.strxfrm(name.casefold())


def _trailing_name(decorator: astroid.nodes.NodeNG) -> str:
    if isinstance(decorator, astroid.nodes.Name):
        return decorator.name
    if isinstance(decorator, astroid.nodes.Attribute):
        return decorator.attrname
    return ""


def _is_classvar(annotation: astroid.nodes.NodeNG) -> bool:
    if isinstance(annotation, astroid.nodes.Subscript):
        annotation = annotation.value
    return _trailing_name(annotation) == "ClassVar"
