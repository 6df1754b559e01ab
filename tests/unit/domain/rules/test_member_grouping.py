"""Unit tests for MemberGroupingRule."""

import astroid

from layout_linter.domain.config import MemberGroupingOptions
from layout_linter.domain.rules.member_grouping import MemberGroupingRule
from tests.rule_test_utils import fix_code, msgids, run_rule


class TestGroupOrder:
    """Test ordering of members by group."""

    def test_static_method_after_instance_property(self) -> None:
        code = "class Foo:\n    value: int = 0\n    @staticmethod\n    def make():\n        pass\n"
        diagnostics = run_rule(MemberGroupingRule(), code)
        assert msgids(diagnostics) == ["wrongGroupOrder", "incorrectPaddingBetweenGroups"]

        order = diagnostics[0]
        assert (order.line, order.column) == (3, 4)
        assert order.data["member"] == "make"
        assert order.data["expected_group"] == "instance-properties"
        assert order.data["expected_group_order"] == 2
        assert order.data["actual_group"] == "static-methods"
        assert order.data["actual_group_order"] == 1
        assert order.fix is None

        padding = diagnostics[1]
        assert padding.fix is not None
        assert padding.fix.replacement == "\n\n    "

    def test_order_is_not_fixed(self) -> None:
        code = "class Foo:\n    value: int = 0\n    @staticmethod\n    def make():\n        pass\n"
        fixed = fix_code(MemberGroupingRule(), code)
        assert fixed == "class Foo:\n    value: int = 0\n\n    @staticmethod\n    def make():\n        pass\n"
        assert msgids(run_rule(MemberGroupingRule(), fixed)) == ["wrongGroupOrder"]

    def test_well_ordered_class_passes(self) -> None:
        code = (
            "class Foo:\n"
            "    count = 0\n"
            "\n"
            "    @classmethod\n"
            "    def create(cls):\n"
            "        return cls()\n"
            "\n"
            "    name: str = ''\n"
            "\n"
            "    def __init__(self):\n"
            "        self.items = []\n"
            "\n"
            "    def run(self):\n"
            "        pass\n"
        )
        assert run_rule(MemberGroupingRule(), code) == []

    def test_constructor_before_static_property(self) -> None:
        code = "class Foo:\n    def __init__(self):\n        pass\n\n    count = 0\n"
        diagnostics = run_rule(MemberGroupingRule(), code)
        assert msgids(diagnostics) == ["wrongGroupOrder"]
        assert diagnostics[0].line == 5
        assert diagnostics[0].data["actual_group"] == "static-properties"

    def test_classvar_annotation_is_static(self) -> None:
        code = "class Foo:\n    name: str = ''\n\n    registry: ClassVar[dict] = {}\n"
        diagnostics = run_rule(MemberGroupingRule(), code)
        assert msgids(diagnostics) == ["wrongGroupOrder"]
        assert diagnostics[0].data["member"] == "registry"

    def test_qualified_classvar(self) -> None:
        code = "class Foo:\n    registry: typing.ClassVar[dict] = {}\n\n    name: str = ''\n"
        assert run_rule(MemberGroupingRule(), code) == []

    def test_other_statements_are_ignored(self) -> None:
        code = "class Foo:\n    def run(self):\n        pass\n\n    if DEBUG:\n        pass\n\n    a, b = 1, 2\n"
        assert run_rule(MemberGroupingRule(), code) == []


class TestAlphabeticalOrder:
    """Test sorting inside a group."""

    CODE = "class Foo:\n    def beta(self):\n        pass\n\n    def alpha(self):\n        pass\n"

    def test_disabled_by_default(self) -> None:
        assert run_rule(MemberGroupingRule(), self.CODE) == []

    def test_unsorted_members_reported(self) -> None:
        rule = MemberGroupingRule(MemberGroupingOptions(enforce_alphabetical_sorting=True))
        diagnostics = run_rule(rule, self.CODE)
        assert msgids(diagnostics) == ["wrongAlphabeticalOrder"]
        assert diagnostics[0].line == 5
        assert diagnostics[0].data == {"member_a": "alpha", "member_b": "beta"}

    def test_case_is_ignored(self) -> None:
        rule = MemberGroupingRule(MemberGroupingOptions(enforce_alphabetical_sorting=True))
        code = "class Foo:\n    Alpha = 1\n    beta = 2\n    Gamma = 3\n"
        assert run_rule(rule, code) == []


class TestGroupPadding:
    """Test blank lines between groups."""

    def test_padding_disabled(self) -> None:
        rule = MemberGroupingRule(MemberGroupingOptions(padding_between_groups=0))
        code = "class Foo:\n    count = 0\n    name: str = ''\n"
        assert run_rule(rule, code) == []

    def test_too_many_blank_lines_are_collapsed(self) -> None:
        code = "class Foo:\n    count = 0\n\n\n    name: str = ''\n"
        diagnostics = run_rule(MemberGroupingRule(), code)
        assert msgids(diagnostics) == ["incorrectPaddingBetweenGroups"]
        assert diagnostics[0].data["actual"] == 2
        assert fix_code(MemberGroupingRule(), code) == "class Foo:\n    count = 0\n\n    name: str = ''\n"

    def test_same_group_needs_no_padding(self) -> None:
        code = "class Foo:\n    a = 1\n    b = 2\n"
        assert run_rule(MemberGroupingRule(), code) == []


class TestCustomGroups:
    """Test user supplied group tables."""

    def test_methods_first(self) -> None:
        options = MemberGroupingOptions.from_mapping(
            {
                "groups": [
                    {"name": "methods", "order": 0, "types": ["method"]},
                    {"name": "attributes", "order": 1, "types": ["property"]},
                ]
            }
        )
        code = "class Foo:\n    name: str = ''\n\n    def run(self):\n        pass\n"
        diagnostics = run_rule(MemberGroupingRule(options), code)
        assert msgids(diagnostics) == ["wrongGroupOrder"]
        assert diagnostics[0].data["expected_group"] == "attributes"
        assert diagnostics[0].data["actual_group"] == "methods"

    def test_unmatched_members_are_ignored(self) -> None:
        options = MemberGroupingOptions.from_mapping(
            {"groups": [{"name": "methods", "order": 0, "types": ["method"]}]}
        )
        code = "class Foo:\n    def run(self):\n        pass\n    name: str = ''\n"
        assert run_rule(MemberGroupingRule(options), code) == []

    def test_group_without_types_matches_nothing(self) -> None:
        options = MemberGroupingOptions.from_mapping(
            {
                "groups": [
                    {"name": "catch-all", "order": 0},
                    {"name": "methods", "order": 1, "types": ["method"]},
                    {"name": "attributes", "order": 2, "types": ["attribute"]},
                ]
            }
        )
        rule = MemberGroupingRule(options)
        code = "class Foo:\n    name: str = ''\n\n    def run(self):\n        pass\n"
        diagnostics = run_rule(rule, code)
        assert msgids(diagnostics) == ["wrongGroupOrder"]
        assert diagnostics[0].data["expected_group"] == "attributes"
        assert diagnostics[0].data["actual_group"] == "methods"

        members = [rule.classify(node) for node in astroid.parse(code).body[0].body]
        assert [member.group.name for member in members] == ["attributes", "methods"]
