"""Single-line versus multiline layout of list, set, tuple and dict displays."""

from __future__ import annotations

import re
from dataclasses import dataclass

import astroid
from astroid.const import Context

from layout_linter.domain.config import CollectionFormatOptions
from layout_linter.domain.entities import Diagnostic, TextEdit, Token
from layout_linter.domain.navigation import SourceNavigator
from layout_linter.domain.rules import RuleContext

_COLLAPSE = re.compile(r"\n\s*")

_LITERAL_TYPES = (astroid.nodes.Dict, astroid.nodes.List, astroid.nodes.Set, astroid.nodes.Tuple)


@dataclass(frozen=True)
class Item:
    """
    One element of a display, as a character range.

    For dict entries ``key`` and ``value`` hold the separate ranges and
    ``colon`` the separator token; ``**mapping`` entries have no key.
    """

    start: int
    end: int
    line: int
    column: int
    end_line: int
    key: tuple[int, int] | None = None
    value: tuple[int, int] | None = None
    colon: Token | None = None


@dataclass(frozen=True)
class Literal:
    node: astroid.nodes.NodeNG
    opening: Token
    closing: Token
    items: tuple[Item, ...]
    is_dict: bool
    is_single_tuple: bool
    has_comments: bool

    @property
    def is_multiline(self) -> bool:
        return self.opening.start_line != self.closing.start_line


class CollectionFormatRule:
    """
    Enforce consistent layout of collection displays.

    A single-line display that should be multiline is rebuilt entirely; a
    multiline display is checked in a fixed order and only the first failure
    is reported.
    """

    name: str = "multiline-format"

    def __init__(self, options: CollectionFormatOptions | None = None) -> None:
        self.options = options or CollectionFormatOptions()

    def check(self, context: RuleContext) -> list[Diagnostic]:
        diagnostics: list[Diagnostic] = []
        for node in context.module.nodes_of_class(_LITERAL_TYPES):
            literal = self.literal(context.navigator, node)
            if literal is None or not literal.items:
                continue
            diagnostic = self._check_literal(context.navigator, literal)
            if diagnostic is not None:
                diagnostics.append(diagnostic)
        return diagnostics

    # ------------------------------------------------------------------
    # Model
    # ------------------------------------------------------------------

    def literal(self, nav: SourceNavigator, node: astroid.nodes.NodeNG) -> Literal | None:
        """Describe a display node, or None for tuples without parentheses and assignment targets."""
        if getattr(node, "ctx", None) not in (None, Context.Load):
            return None
        tokens = nav.tokens_in(node)
        code = [t for t in tokens if not t.is_comment]
        if len(code) < 2 or not _brackets_match(code):
            return None
        if isinstance(node, astroid.nodes.Dict):
            items = tuple(self._dict_item(nav, key, value) for key, value in node.items)
        else:
            items = tuple(self._item(nav, *nav.span_of(element)) for element in node.elts)
        return Literal(
            node=node,
            opening=code[0],
            closing=code[-1],
            items=items,
            is_dict=isinstance(node, astroid.nodes.Dict),
            is_single_tuple=isinstance(node, astroid.nodes.Tuple) and len(items) == 1,
            has_comments=any(t.is_comment for t in tokens),
        )

    @staticmethod
    def _item(nav: SourceNavigator, start: int, end: int, **extra: object) -> Item:
        line, column = nav.position(start)
        end_line, _ = nav.position(end)
        return Item(start=start, end=end, line=line, column=column, end_line=end_line, **extra)  # type: ignore[arg-type]

    def _dict_item(self, nav: SourceNavigator, key: astroid.nodes.NodeNG, value: astroid.nodes.NodeNG) -> Item:
        value_span = nav.span_of(value)
        if isinstance(key, astroid.nodes.DictUnpack):
            stars = nav.token_before_offset(value_span[0])
            start = stars.start if stars is not None and stars.is_op("**") else value_span[0]
            return self._item(nav, start, value_span[1])
        key_span = nav.span_of(key)
        colons = [t for t in nav.tokens_between(key_span[1], value_span[0], False) if t.is_op(":")]
        return self._item(
            nav,
            key_span[0],
            value_span[1],
            key=key_span,
            value=value_span,
            colon=colons[0] if colons else None,
        )

    # ------------------------------------------------------------------
    # Checks
    # ------------------------------------------------------------------

    def _single_line_text(self, nav: SourceNavigator, literal: Literal) -> str:
        return _COLLAPSE.sub(" ", nav.text[literal.opening.start : literal.closing.end])

    def _would_exceed(self, nav: SourceNavigator, literal: Literal) -> bool:
        rendered = self._single_line_text(nav, literal)
        return literal.opening.start_col + len(rendered) > self.options.max_line_length

    def _should_be_multiline(self, nav: SourceNavigator, literal: Literal) -> bool:
        return (
            len(literal.items) >= self.options.min_items
            or self._would_exceed(nav, literal)
            or self.options.multiline_style == "always"
        )

    def _report(
        self, msgid: str, literal: Literal, fix: TextEdit | None, data: dict[str, object] | None = None
    ) -> Diagnostic:
        return Diagnostic.from_node(
            rule=self.name,
            msgid=msgid,
            node=literal.node,
            line=literal.opening.start_line,
            column=literal.opening.start_col,
            data=data,
            fix=fix,
        )

    def _check_literal(self, nav: SourceNavigator, literal: Literal) -> Diagnostic | None:
        opts = self.options
        if not literal.is_multiline:
            if self._should_be_multiline(nav, literal) and opts.multiline_style != "never":
                return self._report(
                    "singleLineToMultiline",
                    literal,
                    self.rebuild(nav, literal),
                    {"count": len(literal.items)},
                )
            return None

        expected = literal.opening.start_col + opts.indentation
        if any(i.line != literal.opening.start_line and i.column != expected for i in literal.items):
            return self._report(
                "inconsistentIndentation", literal, self.rebuild(nav, literal), {"spaces": opts.indentation}
            )

        if opts.multiline_style == "always" and not self._all_separate(literal):
            return self._report(
                "inconsistentNewlines", literal, self.rebuild(nav, literal), {"style": "separate"}
            )

        diagnostic = self._check_trailing_comma(nav, literal)
        if diagnostic is not None:
            return diagnostic

        if not literal.is_dict:
            return None
        keyed = [i for i in literal.items if i.colon is not None]
        if opts.consistent_spacing and not self._consistent_spacing(nav, keyed):
            return self._report("inconsistentSpacing", literal, self.rebuild(nav, literal))
        if opts.object_alignment == "colon" and len(keyed) > 1:
            if len({i.colon.start_col for i in keyed}) > 1:  # type: ignore[union-attr]
                return self._report("incorrectColonAlignment", literal, self.rebuild(nav, literal))
        return None

    def _all_separate(self, literal: Literal) -> bool:
        items = literal.items
        if self.options.bracket_style == "new-line" and items[0].line == literal.opening.start_line:
            return False
        if any(a.end_line == b.line for a, b in zip(items, items[1:])):
            return False
        return items[-1].end_line != literal.closing.start_line

    def _check_trailing_comma(self, nav: SourceNavigator, literal: Literal) -> Diagnostic | None:
        last = literal.items[-1]
        following = nav.tokens_between(last.end, literal.closing.end, False)
        after = following[0] if following else None
        if after is None:
            return None
        if self.options.trailing_comma == "always" and not after.is_op(","):
            return self._report("missingTrailingComma", literal, TextEdit.insert(last.end, ","))
        if self.options.trailing_comma == "never" and after.is_op(",") and not literal.is_single_tuple:
            return self._report("unexpectedTrailingComma", literal, TextEdit.remove(last.end, after.end))
        return None

    def _consistent_spacing(self, nav: SourceNavigator, keyed: list[Item]) -> bool:
        spacings = set()
        for item in keyed:
            colon = item.colon
            if colon is None or item.key is None or item.value is None:
                continue
            before = colon.start - item.key[1]
            after = item.value[0] - colon.end
            if self.options.object_alignment == "colon":
                before = 0
            spacings.add((before, after))
        return len(spacings) <= 1

    # ------------------------------------------------------------------
    # Reconstruction
    # ------------------------------------------------------------------

    def _item_text(self, nav: SourceNavigator, literal: Literal, item: Item, key_width: int) -> str:
        if item.key is None or item.value is None:
            return nav.text[item.start : item.end]
        key = nav.text[item.key[0] : item.key[1]]
        value = nav.text[item.value[0] : item.value[1]]
        padding = " " * (key_width - len(key)) if self.options.object_alignment == "colon" else ""
        return f"{key}{padding}: {value}"

    def rebuild(self, nav: SourceNavigator, literal: Literal) -> TextEdit | None:
        """
        Rewrite the whole display.

        Returns None when the display contains comments, which a rebuild
        would drop.
        """
        if literal.has_comments:
            return None
        opts = self.options
        keys = [nav.text[i.key[0] : i.key[1]] for i in literal.items if i.key is not None]
        key_width = max((len(k) for k in keys), default=0)
        texts = [self._item_text(nav, literal, item, key_width) for item in literal.items]
        opening, closing = literal.opening.value, literal.closing.value

        same_line = all(i.line == literal.items[0].line for i in literal.items)
        if same_line and opts.allow_single_line and not self._should_be_multiline(nav, literal):
            body = ", ".join(texts) + ("," if literal.is_single_tuple else "")
            replacement = f"{opening}{body}{closing}"
        else:
            indent = " " * literal.opening.start_col
            item_indent = " " * (literal.opening.start_col + opts.indentation)
            lines = [opening]
            for index, text in enumerate(texts):
                last = index == len(texts) - 1
                comma = "," if not last or opts.trailing_comma == "always" or literal.is_single_tuple else ""
                lines.append(f"{item_indent}{text}{comma}")
            lines.append(f"{indent}{closing}")
            replacement = "\n".join(lines)
        return TextEdit(literal.opening.start, literal.closing.end, replacement)


def _brackets_match(code: list[Token]) -> bool:
    """True if the first token opens a bracket that the last token closes."""
    pairs = {"(": ")", "[": "]", "{": "}"}
    first = code[0]
    if not first.is_op(*pairs) or not code[-1].is_op(pairs[first.value]):
        return False
    depth = 0
    for index, token in enumerate(code):
        if token.is_op("(", "[", "{"):
            depth += 1
        elif token.is_op(")", "]", "}"):
            depth -= 1
            if depth == 0:
                return index == len(code) - 1
    return False
