"""Token and position queries shared by every layout rule.

All positions use 1-based lines and 0-based columns counted in characters.
astroid reports column offsets in UTF-8 bytes; they are converted on the way
in so node and token columns can be compared directly.
"""

from __future__ import annotations

import io
import re
import tokenize
from bisect import bisect_left, bisect_right
from typing import Union

import astroid

from layout_linter.domain.entities import TextEdit, Token, TokenKind

Anchor = Union[Token, "astroid.nodes.NodeNG"]

_KIND_BY_TYPE: dict[int, TokenKind] = {
    tokenize.OP: TokenKind.OP,
    tokenize.NAME: TokenKind.NAME,
    tokenize.NUMBER: TokenKind.NUMBER,
    tokenize.STRING: TokenKind.STRING,
    tokenize.COMMENT: TokenKind.COMMENT,
    tokenize.NEWLINE: TokenKind.NEWLINE,
    tokenize.NL: TokenKind.NL,
    tokenize.INDENT: TokenKind.INDENT,
    tokenize.DEDENT: TokenKind.DEDENT,
    tokenize.ENDMARKER: TokenKind.ENDMARKER,
}

# Only whitespace, statement separators and line continuations may be rewritten.
_REPLACEABLE_GAP = re.compile(r"[ \t\f\r\n;\\]*")


def _token_kind(token_type: int) -> TokenKind:
    kind = _KIND_BY_TYPE.get(token_type)
    if kind is not None:
        return kind
    # f-string (3.12+) and t-string (3.14+) pieces behave like string tokens.
    if tokenize.tok_name.get(token_type, "").startswith(("FSTRING", "TSTRING")):
        return TokenKind.STRING
    return TokenKind.OTHER


class SourceNavigator:
    """
    Read-only view over one file's text and tokens.

    Built once per analysis pass; every rule queries the same instance.
    Navigation never raises for missing neighbours: it returns None and the
    caller skips the check.
    """

    def __init__(self, text: str) -> None:
        self.text = text
        self.lines = text.split("\n")
        self._line_starts = [0]
        for index, char in enumerate(text):
            if char == "\n":
                self._line_starts.append(index + 1)
        self.tokens = self._tokenize(text)
        self.code_tokens = [t for t in self.tokens if not t.is_comment]
        self.comments = [t for t in self.tokens if t.is_comment]
        self._starts = [t.start for t in self.tokens]
        self._ends = [t.end for t in self.tokens]
        self._code_starts = [t.start for t in self.code_tokens]
        self._code_ends = [t.end for t in self.code_tokens]

    @classmethod
    def from_module(cls, module: astroid.nodes.Module) -> SourceNavigator:
        """Build a navigator from the source an astroid module was parsed from."""
        with module.stream() as stream:
            data = stream.read()
        text = data.decode(module.file_encoding or "utf-8") if isinstance(data, bytes) else data
        return cls(text)

    def _tokenize(self, text: str) -> list[Token]:
        tokens: list[Token] = []
        for tok in tokenize.generate_tokens(io.StringIO(text).readline):
            kind = _token_kind(tok.type)
            if kind.is_layout:
                continue
            (start_line, start_col), (end_line, end_col) = tok.start, tok.end
            tokens.append(
                Token(
                    kind=kind,
                    value=tok.string,
                    start=self.offset(start_line, start_col),
                    end=self.offset(end_line, end_col),
                    start_line=start_line,
                    start_col=start_col,
                    end_line=end_line,
                    end_col=end_col,
                )
            )
        return tokens

    # ------------------------------------------------------------------
    # Positions
    # ------------------------------------------------------------------

    @property
    def total_lines(self) -> int:
        return len(self.lines)

    def offset(self, line: int, column: int) -> int:
        """Character offset of a (line, column) position."""
        if line > len(self._line_starts):
            return len(self.text)
        return self._line_starts[line - 1] + column

    def position(self, offset: int) -> tuple[int, int]:
        """(line, column) of a character offset."""
        line = bisect_right(self._line_starts, offset)
        return line, offset - self._line_starts[line - 1]

    def char_column(self, line: int, byte_column: int) -> int:
        """Convert an astroid (UTF-8 byte) column to a character column."""
        if line < 1 or line > len(self.lines):
            return byte_column
        source_line = self.lines[line - 1]
        if source_line.isascii():
            return byte_column
        return len(source_line.encode("utf-8")[:byte_column].decode("utf-8", errors="ignore"))

    def line_indent(self, line: int) -> str:
        """Leading whitespace of ``line``."""
        source_line = self.lines[line - 1] if 0 < line <= len(self.lines) else ""
        return source_line[: len(source_line) - len(source_line.lstrip(" \t\f"))]

    def _node_offsets(self, node: astroid.nodes.NodeNG) -> tuple[int, int]:
        if node.lineno is None or node.end_lineno is None:
            return self._offsets_from_children(node)
        start = self.offset(node.lineno, self.char_column(node.lineno, node.col_offset))
        end = self.offset(node.end_lineno, self.char_column(node.end_lineno, node.end_col_offset))
        return start, end

    def _offsets_from_children(self, node: astroid.nodes.NodeNG) -> tuple[int, int]:
        """Span of a node without positions (``match`` cases) from its children."""
        children = list(node.get_children())
        if not children:
            raise ValueError(f"{type(node).__name__} node has no source position")
        start = self._node_offsets(children[0])[0]
        end = self._node_offsets(children[-1])[1]
        if isinstance(node, astroid.nodes.MatchCase):
            # Walk back over grouping parentheses to the ``case`` keyword.
            index = bisect_right(self._code_ends, start) - 1
            while index >= 0 and self.code_tokens[index].is_op("("):
                index -= 1
            if index >= 0 and self.code_tokens[index].value == "case":
                start = self.code_tokens[index].start
        return start, end

    def _bounds(self, anchor: Anchor) -> tuple[int, int]:
        if isinstance(anchor, Token):
            return anchor.start, anchor.end
        first = self.first_token(anchor)
        last = self.last_token(anchor)
        if first is None or last is None:
            return self._node_offsets(anchor)
        return first.start, last.end

    # ------------------------------------------------------------------
    # Token queries
    # ------------------------------------------------------------------

    def first_token(self, node: astroid.nodes.NodeNG) -> Token | None:
        """
        First token of a node.

        A decorated ``def``/``class`` starts at the ``@`` of its first
        decorator.
        """
        decorators = getattr(node, "decorators", None)
        if decorators is not None and decorators.nodes:
            at_sign = self.token_before(decorators.nodes[0])
            if at_sign is not None and at_sign.is_op("@"):
                return at_sign
        start, _ = self._node_offsets(node)
        index = bisect_left(self._code_starts, start)
        return self.code_tokens[index] if index < len(self.code_tokens) else None

    def last_token(self, node: astroid.nodes.NodeNG) -> Token | None:
        """Last code token inside a node's span."""
        _, end = self._node_offsets(node)
        index = bisect_right(self._code_ends, end) - 1
        return self.code_tokens[index] if index >= 0 else None

    def token_before(self, anchor: Anchor, include_comments: bool = False) -> Token | None:
        """Nearest token ending at or before the anchor's start, or None at file start."""
        if isinstance(anchor, Token):
            start = anchor.start
        else:
            start = self._node_offsets(anchor)[0]
            decorators = getattr(anchor, "decorators", None)
            if decorators is not None and decorators.nodes:
                first = self.first_token(anchor)
                if first is not None:
                    start = first.start
        return self.token_before_offset(start, include_comments)

    def token_before_offset(self, offset: int, include_comments: bool = False) -> Token | None:
        """Nearest token ending at or before a character offset."""
        tokens, ends = (self.tokens, self._ends) if include_comments else (self.code_tokens, self._code_ends)
        index = bisect_right(ends, offset) - 1
        return tokens[index] if index >= 0 else None

    def token_after(self, anchor: Anchor, include_comments: bool = False) -> Token | None:
        """Nearest token starting at or after the anchor's end, or None at file end."""
        end = anchor.end if isinstance(anchor, Token) else self._bounds(anchor)[1]
        tokens, starts = (self.tokens, self._starts) if include_comments else (self.code_tokens, self._code_starts)
        index = bisect_left(starts, end)
        return tokens[index] if index < len(tokens) else None

    def tokens_between(self, start: int, end: int, include_comments: bool = True) -> list[Token]:
        """Tokens lying entirely inside the character range ``[start, end)``."""
        tokens, starts = (self.tokens, self._starts) if include_comments else (self.code_tokens, self._code_starts)
        index = bisect_left(starts, start)
        result = []
        while index < len(tokens) and tokens[index].end <= end:
            result.append(tokens[index])
            index += 1
        return result

    def tokens_in(self, node: astroid.nodes.NodeNG, include_comments: bool = True) -> list[Token]:
        start, end = self._bounds(node)
        return self.tokens_between(start, end, include_comments)

    # ------------------------------------------------------------------
    # Comments and anchors
    # ------------------------------------------------------------------

    def is_own_line(self, token: Token) -> bool:
        """True if nothing but whitespace precedes the token on its line."""
        return not self.lines[token.start_line - 1][: token.start_col].strip()

    def leading_comments(self, node: astroid.nodes.NodeNG) -> list[Token]:
        """
        Comments written above a statement that belong to it.

        These are the own-line comments after the previous code token whose
        column is at or left of the statement's column. Comments indented
        deeper belong to the block before and end the run.
        """
        first = self.first_token(node)
        if first is None:
            return []
        leading: list[Token] = []
        for comment in reversed(self.comments_before(node)):
            if comment.start_col > first.start_col or not self.is_own_line(comment):
                break
            leading.insert(0, comment)
        return leading

    def leading_anchor(self, node: astroid.nodes.NodeNG) -> Token | None:
        """First leading comment of a statement, else its first token."""
        comments = self.leading_comments(node)
        return comments[0] if comments else self.first_token(node)

    def trailing_anchor(self, node: astroid.nodes.NodeNG) -> Token | None:
        """A comment sharing the statement's last line, else its last token."""
        last = self.last_token(node)
        if last is None:
            return None
        following = self.token_after(last, include_comments=True)
        if following is not None and following.is_comment and following.start_line == last.end_line:
            return following
        return last

    # ------------------------------------------------------------------
    # Measurements and edits
    # ------------------------------------------------------------------

    def start_line(self, anchor: Anchor) -> int:
        if isinstance(anchor, Token):
            return anchor.start_line
        first = self.first_token(anchor)
        return first.start_line if first is not None else anchor.lineno

    def end_line(self, anchor: Anchor) -> int:
        if isinstance(anchor, Token):
            return anchor.end_line
        return anchor.end_lineno

    def blank_lines_between(self, first: Anchor, second: Anchor) -> int:
        """Lines strictly between two anchors: ``second.start_line - first.end_line - 1``."""
        return self.start_line(second) - self.end_line(first) - 1

    def whitespace_edit(self, before: Token, after: Token, newlines: int) -> TextEdit | None:
        """
        Replace the gap between two anchors with ``newlines`` line breaks.

        The indentation of ``after``'s line is kept. Returns None when the gap
        holds code, or when ``after`` shares a line with other code, since the
        right indentation cannot be derived then.
        """
        gap = self.text[before.end : after.start]
        if not _REPLACEABLE_GAP.fullmatch(gap):
            return None
        prefix = self.lines[after.start_line - 1][: after.start_col]
        if after.start_line == before.end_line or prefix.strip():
            return None
        return TextEdit(before.end, after.start, "\n" * newlines + prefix)

    def span_of(self, node: astroid.nodes.NodeNG) -> tuple[int, int]:
        """
        Character range of an expression, widened over enclosing parentheses.

        Meant for expressions in item or value position, where a ``(`` right
        before and a ``)`` right after can only be grouping parentheses.
        """
        first, last = self.first_token(node), self.last_token(node)
        if first is None or last is None:
            return self._node_offsets(node)
        while True:
            opening = self.token_before(first)
            closing = self.token_after(last)
            if opening is None or closing is None:
                break
            if not (opening.is_op("(") and closing.is_op(")")):
                break
            first, last = opening, closing
        return first.start, last.end

    def node_start(self, node: astroid.nodes.NodeNG) -> tuple[int, int]:
        first = self.first_token(node)
        if first is None:
            return node.lineno, self.char_column(node.lineno, node.col_offset)
        return first.start_line, first.start_col

    def node_end(self, node: astroid.nodes.NodeNG) -> tuple[int, int]:
        last = self.last_token(node)
        if last is None:
            return node.end_lineno, self.char_column(node.end_lineno, node.end_col_offset)
        return last.end_line, last.end_col

    def comments_before(self, node: astroid.nodes.NodeNG) -> list[Token]:
        """Comment tokens between the previous code token and the node, in source order."""
        first = self.first_token(node)
        if first is None:
            return []
        previous = self.token_before(first)
        lower = previous.end if previous is not None else 0
        return [t for t in self.tokens_between(lower, first.start) if t.is_comment]
