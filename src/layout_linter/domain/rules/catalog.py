"""Rule registry: maps rule names to implementations and builds configured instances."""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING

from layout_linter.domain.config import ConfigurationError
from layout_linter.domain.rules.aligned_assignments import AlignedAssignmentsRule
from layout_linter.domain.rules.block_padding import BlockPaddingRule
from layout_linter.domain.rules.collection_format import CollectionFormatRule
from layout_linter.domain.rules.member_grouping import MemberGroupingRule
from layout_linter.domain.rules.statement_spacing import StatementSpacingRule

if TYPE_CHECKING:
    from layout_linter.domain.config import ConfigurationLoader
    from layout_linter.domain.rules import LayoutRule


class RuleCatalog:
    """Known rules by name. No top-level functions."""

    RULE_TYPES = {
        BlockPaddingRule.name: BlockPaddingRule,
        StatementSpacingRule.name: StatementSpacingRule,
        AlignedAssignmentsRule.name: AlignedAssignmentsRule,
        MemberGroupingRule.name: MemberGroupingRule,
        CollectionFormatRule.name: CollectionFormatRule,
    }

    @classmethod
    def names(cls) -> tuple[str, ...]:
        return tuple(cls.RULE_TYPES)

    @classmethod
    def build(cls, name: str, config_loader: ConfigurationLoader) -> LayoutRule:
        """Create one rule with its validated options."""
        try:
            rule_type = cls.RULE_TYPES[name]
        except KeyError:
            raise ConfigurationError(f"unknown rule: {name}") from None
        return rule_type(config_loader.options_for(name))  # type: ignore[arg-type]

    @classmethod
    def build_enabled(
        cls, config_loader: ConfigurationLoader, only: Iterable[str] | None = None
    ) -> list[LayoutRule]:
        """Create every enabled rule, optionally restricted to ``only``."""
        selected = list(only) if only else list(config_loader.enabled_rules)
        return [cls.build(name, config_loader) for name in selected]
