"""Heuristic detection of documentation comments.

Python has no block comments, so a "documentation block" is a run of
consecutive ``#`` comment lines written directly above a statement. The
classification is pattern matching only: it can both under- and
over-classify. The keyword fragments are matched as bare substrings, so
ordinary prose such as "# returns early" is treated as documentation too.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from layout_linter.domain.entities import Token

DOC_PATTERN = re.compile(r"\s*@\w+|param|return|description|example|author", re.IGNORECASE)


def is_doc_comment(text: str, multiline: bool) -> bool:
    """Return True if a comment (or a joined run of comments) reads like documentation."""
    return multiline or DOC_PATTERN.search(text) is not None


def comment_text(token: Token) -> str:
    """Comment body without the leading ``#`` marker."""
    return token.value[1:] if token.value.startswith("#") else token.value


def consecutive_run(comments: Sequence[Token]) -> list[Token]:
    """
    Trailing run of comments on consecutive lines.

    Walks ``comments`` backwards from the last one and stops at the first
    line gap.
    """
    run: list[Token] = []
    for comment in reversed(comments):
        if run and comment.end_line + 1 != run[0].start_line:
            break
        run.insert(0, comment)
    return run


def find_doc_block(comments: Sequence[Token], treat_comments_as_docstrings: bool) -> list[Token]:
    """
    Documentation block among the comments preceding a statement.

    Returns the comments forming the block, or an empty list when there is
    none. Two or more consecutive comments always form a block; a single one
    only when it matches DOC_PATTERN.
    """
    if not comments or not treat_comments_as_docstrings:
        return []
    run = consecutive_run(comments)
    text = "\n".join(comment_text(token) for token in run)
    if is_doc_comment(text, multiline=len(run) >= 2):
        return run
    return []
