"""Unit tests for StatementSpacingRule."""

from layout_linter.domain.config import StatementSpacingOptions
from layout_linter.domain.rules.statement_spacing import StatementSpacingRule
from tests.rule_test_utils import fix_code, msgids, run_rule


class TestImports:
    """Test spacing around import statements."""

    def test_import_group_is_not_split(self) -> None:
        assert run_rule(StatementSpacingRule(), "import os\nimport sys\n") == []

    def test_import_group_checked_when_skipping_disabled(self) -> None:
        rule = StatementSpacingRule(StatementSpacingOptions(skip_import_groups=False))
        assert msgids(run_rule(rule, "import os\nimport sys\n")) == ["missingLinesAfter", "missingLinesBefore"]

    def test_import_followed_by_export(self) -> None:
        diagnostics = run_rule(StatementSpacingRule(), "import os\n__all__ = ['os']\n")
        assert [(d.msgid, d.data["node_type"]) for d in diagnostics] == [
            ("missingLinesAfter", "import declaration"),
            ("missingLinesBefore", "export declaration"),
        ]

    def test_export_group_is_not_split(self) -> None:
        code = "__all__ = ['a']\n__all__ += ['b']\n"
        assert run_rule(StatementSpacingRule(), code) == []

        rule = StatementSpacingRule(StatementSpacingOptions(skip_import_groups=False))
        diagnostics = run_rule(rule, code)
        assert [(d.msgid, d.line, d.data["node_type"]) for d in diagnostics] == [
            ("missingLinesAfter", 1, "export declaration"),
            ("missingLinesBefore", 2, "export declaration"),
        ]

    def test_trailing_comment_belongs_to_import(self) -> None:
        code = "import os  # os\nx = 1\n"
        diagnostics = run_rule(StatementSpacingRule(), code)
        assert msgids(diagnostics) == ["missingLinesAfter"]
        assert fix_code(StatementSpacingRule(), code) == "import os  # os\n\nx = 1\n"


class TestDeclarations:
    """Test spacing around classes and functions."""

    def test_function_between_statements(self) -> None:
        code = "x = 1\ndef f():\n    pass\ny = 2\n"
        diagnostics = run_rule(StatementSpacingRule(), code)
        assert msgids(diagnostics) == ["missingLinesBefore", "missingLinesAfter"]
        assert diagnostics[0].data["node_type"] == "function declaration"
        assert diagnostics[0].data["expected"] == 2
        assert fix_code(StatementSpacingRule(), code) == "x = 1\n\n\ndef f():\n    pass\n\n\ny = 2\n"

    def test_class_declaration(self) -> None:
        diagnostics = run_rule(StatementSpacingRule(), "x = 1\nclass A:\n    pass\n")
        assert msgids(diagnostics) == ["missingLinesBefore"]
        assert diagnostics[0].data["node_type"] == "class declaration"

    def test_methods_are_not_function_declarations(self) -> None:
        code = "class A:\n    def f(self):\n        pass\n    def g(self):\n        pass\n"
        assert run_rule(StatementSpacingRule(), code) == []

    def test_nested_function(self) -> None:
        code = "def outer():\n    x = 1\n    def inner():\n        pass\n    return inner\n"
        diagnostics = run_rule(StatementSpacingRule(), code)
        assert msgids(diagnostics) == ["missingLinesBefore", "missingLinesAfter"]
        assert diagnostics[0].line == 3

    def test_ignore_top_level_code(self) -> None:
        code = "def f():\n    pass\n# end\n"
        default = run_rule(StatementSpacingRule(), code)
        assert sorted(msgids(default)) == ["missingLinesAfter", "missingLinesBefore"]

        rule = StatementSpacingRule(StatementSpacingOptions(ignore_top_level_code=True))
        diagnostics = run_rule(rule, code)
        assert [(d.msgid, d.data["node_type"]) for d in diagnostics] == [("missingLinesBefore", "block comment")]


class TestBlockComments:
    """Test spacing before top-level comment runs."""

    def test_comment_run_needs_blank_line_before(self) -> None:
        code = "x = 1\n# Section\ny = 2\n"
        diagnostics = run_rule(StatementSpacingRule(), code)
        assert [(d.msgid, d.data["node_type"], d.line) for d in diagnostics] == [
            ("missingLinesBefore", "block comment", 2)
        ]
        assert fix_code(StatementSpacingRule(), code) == "x = 1\n\n# Section\ny = 2\n"

    def test_only_first_comment_of_run_is_checked(self) -> None:
        assert run_rule(StatementSpacingRule(), "x = 1\n\n# one\n# two\ny = 2\n") == []

    def test_indented_comments_are_not_block_comments(self) -> None:
        assert run_rule(StatementSpacingRule(), "if x:\n    y = 1\n    # note\n    z = 2\n") == []
