"""Unit tests for AlignedAssignmentsRule."""

from layout_linter.domain.config import AlignmentOptions
from layout_linter.domain.rules.aligned_assignments import AlignedAssignmentsRule
from tests.rule_test_utils import fix_code, msgids, run_rule


class TestAssignmentAlignment:
    """Test alignment of '=' across adjacent assignments."""

    def test_short_name_is_padded(self) -> None:
        code = "a = 1\nlong_name = 2\n"
        diagnostics = run_rule(AlignedAssignmentsRule(), code)
        assert msgids(diagnostics) == ["misalignedAssignment"]
        assert diagnostics[0].line == 1
        assert fix_code(AlignedAssignmentsRule(), code) == "a         = 1\nlong_name = 2\n"

    def test_aligned_block_passes(self) -> None:
        assert run_rule(AlignedAssignmentsRule(), "a    = 1\nbbbb = 2\n") == []

    def test_fix_is_idempotent(self) -> None:
        code = "def f():\n    x = 1\n    total = x + 2\n    y=3\n"
        fixed = fix_code(AlignedAssignmentsRule(), code)
        assert fixed == "def f():\n    x     = 1\n    total = x + 2\n    y     = 3\n"
        assert run_rule(AlignedAssignmentsRule(), fixed) == []

    def test_blank_line_splits_runs(self) -> None:
        assert run_rule(AlignedAssignmentsRule(), "a = 1\n\nlong_name = 2\n") == []

    def test_ignore_adjacent_off_groups_whole_block(self) -> None:
        rule = AlignedAssignmentsRule(AlignmentOptions(ignore_adjacent=False))
        assert msgids(run_rule(rule, "a = 1\n\nlong_name = 2\n")) == ["misalignedAssignment"]

    def test_block_size(self) -> None:
        rule = AlignedAssignmentsRule(AlignmentOptions(block_size=3))
        assert run_rule(rule, "a = 1\nlong_name = 2\n") == []

    def test_mixed_target_kinds_are_skipped(self) -> None:
        assert run_rule(AlignedAssignmentsRule(), "a = 1\nself.long_name = 2\n") == []

    def test_mixed_target_kinds_checked_when_allowed(self) -> None:
        rule = AlignedAssignmentsRule(AlignmentOptions(ignore_if_assignments_not_in_block=False))
        assert msgids(run_rule(rule, "a = 1\nself.long_name = 2\n")) == ["misalignedAssignment"]

    def test_chained_and_augmented_assignments_break_nothing(self) -> None:
        assert run_rule(AlignedAssignmentsRule(), "a = b = 1\nlong_name = 2\ncount += 1\n") == []


class TestTypeAlignment:
    """Test alignment of annotations."""

    def test_types_and_operators_are_aligned(self) -> None:
        rule = AlignedAssignmentsRule(AlignmentOptions(align_types=True))
        code = 'a: int = 1\nlong_name: str = "x"\n'
        diagnostics = run_rule(rule, code)
        assert msgids(diagnostics) == ["misalignedAssignment", "misalignedTypes"]
        assert diagnostics[0].fix == diagnostics[1].fix
        fixed = fix_code(rule, code)
        assert fixed == 'a        : int = 1\nlong_name: str = "x"\n'
        assert run_rule(rule, fixed) == []

    def test_types_ignored_without_option(self) -> None:
        code = 'a: int = 1\nlong_name: str = "x"\n'
        diagnostics = run_rule(AlignedAssignmentsRule(), code)
        assert msgids(diagnostics) == ["misalignedAssignment"]
        assert fix_code(AlignedAssignmentsRule(), code) == 'a: int         = 1\nlong_name: str = "x"\n'

    def test_type_mismatch_ignored(self) -> None:
        rule = AlignedAssignmentsRule(AlignmentOptions(align_types=True))
        code = "a: int = 1\nlong_name = 2\n"
        # Only the operators are compared when some declarations have no annotation.
        assert msgids(run_rule(rule, code)) == ["misalignedAssignment"]

    def test_type_mismatch_checked(self) -> None:
        code = "a: int = 1\nlong_name = 2\nbb: str = 3\n"
        assert msgids(run_rule(AlignedAssignmentsRule(AlignmentOptions(align_types=True)), code)) == [
            "misalignedAssignment",
            "misalignedAssignment",
        ]

        rule = AlignedAssignmentsRule(AlignmentOptions(align_types=True, ignore_types_mismatch=False))
        diagnostics = run_rule(rule, code)
        assert [(d.msgid, d.line) for d in diagnostics] == [
            ("misalignedAssignment", 1),
            ("misalignedTypes", 1),
            ("misalignedAssignment", 3),
        ]
        fixed = fix_code(rule, code)
        assert fixed == "a : int   = 1\nlong_name = 2\nbb: str   = 3\n"
        assert run_rule(rule, fixed) == []
