"""Message catalog shared by the rules, the pylint checkers and the reporters."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass


@dataclass(frozen=True)
class MessageDefinition:
    """One stable message: pylint code, camelCase id, template and help text."""

    code: str
    msgid: str
    rule: str
    template: str
    description: str

    @property
    def symbol(self) -> str:
        """Kebab-case pylint symbol derived from the message id."""
        chars = []
        for char in self.msgid:
            if char.isupper():
                chars.append("-")
            chars.append(char.lower())
        return "layout-" + "".join(chars)


MESSAGES: tuple[MessageDefinition, ...] = (
    MessageDefinition(
        "C9101",
        "missingPaddingBetweenRootBlocks",
        "block-padding",
        "Expected %(expected)s empty %(line_text)s between root-level blocks, but found %(actual)s.",
        "Top-level statements must be separated by the configured number of blank lines.",
    ),
    MessageDefinition(
        "C9102",
        "missingPaddingBetweenNestedBlocks",
        "block-padding",
        "Expected %(expected)s empty %(line_text)s between nested blocks, but found %(actual)s.",
        "Statements inside blocks, match cases and class members must be separated "
        "by the configured number of blank lines.",
    ),
    MessageDefinition(
        "C9103",
        "missingPaddingAtBeginning",
        "block-padding",
        "Expected no empty lines at the beginning of the file.",
        "The file must not start with blank lines.",
    ),
    MessageDefinition(
        "C9104",
        "missingPaddingAtEnd",
        "block-padding",
        "Expected %(expected)s empty %(line_text)s at the end of the file, but found %(actual)s.",
        "The file must end with the configured number of line breaks.",
    ),
    MessageDefinition(
        "C9105",
        "missingPaddingAfterDocstring",
        "block-padding",
        "Expected %(expected)s empty %(line_text)s after docstring, but found %(actual)s.",
        "Documentation comments above a statement must be followed by the configured "
        "number of blank lines.",
    ),
    MessageDefinition(
        "C9106",
        "missingLinesBefore",
        "consistent-line-spacing",
        "Expected %(expected)s empty %(line_text)s before %(node_type)s, but found %(actual)s.",
        "Imports, __all__, classes, functions and block comments must be preceded by "
        "the configured number of blank lines.",
    ),
    MessageDefinition(
        "C9107",
        "missingLinesAfter",
        "consistent-line-spacing",
        "Expected %(expected)s empty %(line_text)s after %(node_type)s, but found %(actual)s.",
        "Imports, __all__, classes and functions must be followed by the configured "
        "number of blank lines.",
    ),
    MessageDefinition(
        "C9108",
        "misalignedAssignment",
        "aligned-assignments",
        "Assignment operators should be vertically aligned within blocks.",
        "Adjacent assignments must place their '=' in the same column.",
    ),
    MessageDefinition(
        "C9109",
        "misalignedTypes",
        "aligned-assignments",
        "Type declarations should be vertically aligned within blocks.",
        "Adjacent annotated assignments must place their ':' in the same column.",
    ),
    MessageDefinition(
        "C9110",
        "wrongGroupOrder",
        "class-property-grouping",
        "Class member '%(member)s' should be in group '%(expected_group)s' "
        "(%(expected_group_order)s) but is in group '%(actual_group)s' (%(actual_group_order)s).",
        "Class members must follow the configured group order.",
    ),
    MessageDefinition(
        "C9111",
        "wrongAlphabeticalOrder",
        "class-property-grouping",
        "Class members in the same group should be ordered alphabetically. "
        "'%(member_a)s' should come before '%(member_b)s'.",
        "Members of one group must be sorted by name.",
    ),
    MessageDefinition(
        "C9112",
        "incorrectPaddingBetweenGroups",
        "class-property-grouping",
        "Expected %(expected)s empty %(line_text)s between class member groups, but found %(actual)s.",
        "Member groups must be separated by the configured number of blank lines.",
    ),
    MessageDefinition(
        "C9113",
        "singleLineToMultiline",
        "multiline-format",
        "Collection literal with %(count)s items should be multiline.",
        "Literals with many items or long renderings must span several lines.",
    ),
    MessageDefinition(
        "C9114",
        "inconsistentNewlines",
        "multiline-format",
        "Collection items should consistently be on %(style)s lines.",
        "Every item of a multiline literal must be on its own line.",
    ),
    MessageDefinition(
        "C9115",
        "inconsistentIndentation",
        "multiline-format",
        "Collection items should be indented by %(spaces)s spaces.",
        "Items of a multiline literal must be indented relative to the opening bracket.",
    ),
    MessageDefinition(
        "C9116",
        "missingTrailingComma",
        "multiline-format",
        "Multiline collection should have trailing commas.",
        "The last item of a multiline literal must be followed by a comma.",
    ),
    MessageDefinition(
        "C9117",
        "unexpectedTrailingComma",
        "multiline-format",
        "Multiline collection should not have trailing commas.",
        "The last item of a multiline literal must not be followed by a comma.",
    ),
    MessageDefinition(
        "C9118",
        "inconsistentSpacing",
        "multiline-format",
        "Inconsistent spacing in collection items.",
        "Whitespace around ':' must be identical for every dict entry.",
    ),
    MessageDefinition(
        "C9119",
        "incorrectColonAlignment",
        "multiline-format",
        "Dict entry colons should be aligned.",
        "The ':' of every dict entry must be in the same column.",
    ),
)


class RuleMsgBuilder:
    """Lookup and rendering helpers over MESSAGES. No top-level functions."""

    _by_msgid: dict[str, MessageDefinition] = {m.msgid: m for m in MESSAGES}

    @classmethod
    def get(cls, msgid: str) -> MessageDefinition:
        try:
            return cls._by_msgid[msgid]
        except KeyError:
            raise KeyError(f"Unknown message id: {msgid}") from None

    @classmethod
    def render(cls, msgid: str, data: Mapping[str, object]) -> str:
        """Interpolate ``data`` into the template of ``msgid``."""
        template = cls.get(msgid).template
        return template % dict(data) if data else template

    @staticmethod
    def build_msgs_for_rule(rule: str) -> dict[str, tuple[str, str, str]]:
        """Build a pylint ``msgs`` dict: ``{code: (template, symbol, description)}``."""
        return {
            m.code: (m.template, m.symbol, m.description)
            for m in MESSAGES
            if m.rule == rule
        }

    @staticmethod
    def line_text(count: int) -> str:
        """Pluralised unit used by the blank-line messages."""
        return "line" if count == 1 else "lines"
