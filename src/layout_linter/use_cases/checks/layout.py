"""Layout checkers (C9101-C9119), one per rule."""

from layout_linter.use_cases.checks.base import LayoutChecker


class BlockPaddingChecker(LayoutChecker):
    """C9101-C9105: blank lines around and inside blocks."""

    name: str = "block-padding"
    RULE = "block-padding"


class StatementSpacingChecker(LayoutChecker):
    """C9106-C9107: blank lines around imports, exports, classes, functions and block comments."""

    name: str = "consistent-line-spacing"
    RULE = "consistent-line-spacing"


class AlignedAssignmentsChecker(LayoutChecker):
    """C9108-C9109: aligned assignment runs."""

    name: str = "aligned-assignments"
    RULE = "aligned-assignments"


class MemberGroupingChecker(LayoutChecker):
    """C9110-C9112: class member order and group spacing."""

    name: str = "class-property-grouping"
    RULE = "class-property-grouping"


class CollectionFormatChecker(LayoutChecker):
    """C9113-C9119: multiline layout of collection displays."""

    name: str = "multiline-format"
    RULE = "multiline-format"


LAYOUT_CHECKERS: tuple[type[LayoutChecker], ...] = (
    BlockPaddingChecker,
    StatementSpacingChecker,
    AlignedAssignmentsChecker,
    MemberGroupingChecker,
    CollectionFormatChecker,
)
