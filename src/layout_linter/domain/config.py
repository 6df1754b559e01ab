"""Rule options and the configuration loader. Immutable value objects created at startup."""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar, TypeVar

logger = logging.getLogger(__name__)

_OptionsT = TypeVar("_OptionsT", bound="RuleOptions")

_CAMEL_BOUNDARY = re.compile(r"(?<!^)(?=[A-Z])")


class ConfigurationError(ValueError):
    """Raised when rule options violate their schema."""


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).replace("-", "_").lower()


class RuleOptions:
    """
    Mixin for the per-rule option dataclasses.

    Subclasses declare ``_minimums`` and ``_choices``; ``from_mapping``
    accepts camelCase or snake_case keys and rejects anything outside the
    declared fields.
    """

    rule: ClassVar[str] = ""
    _minimums: ClassVar[Mapping[str, int]] = {}
    _choices: ClassVar[Mapping[str, tuple[str, ...]]] = {}

    @classmethod
    def from_mapping(cls: type[_OptionsT], raw: Mapping[str, Any] | None) -> _OptionsT:
        if raw is None:
            return cls()
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"{cls.rule}: options must be a table, got {type(raw).__name__}")
        return cls().merged(raw)

    def merged(self: _OptionsT, raw: Mapping[str, Any]) -> _OptionsT:
        """Return a copy with ``raw`` validated and applied on top."""
        known = {f.name: f for f in fields(self)}  # type: ignore[arg-type]
        changes: dict[str, Any] = {}
        for key, value in raw.items():
            name = _snake(str(key))
            if name not in known:
                raise ConfigurationError(f"{self.rule}: unknown option '{key}'")
            changes[name] = self._validated(name, value, getattr(self, name))
        return replace(self, **changes)  # type: ignore[type-var]

    def _validated(self, name: str, value: Any, default: Any) -> Any:
        if isinstance(default, bool):
            if not isinstance(value, bool):
                raise ConfigurationError(f"{self.rule}: '{name}' must be a boolean")
            return value
        if isinstance(default, int):
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{self.rule}: '{name}' must be an integer")
            minimum = self._minimums.get(name, 0)
            if value < minimum:
                raise ConfigurationError(f"{self.rule}: '{name}' must be >= {minimum}, got {value}")
            return value
        if isinstance(default, str):
            choices = self._choices.get(name, ())
            if not isinstance(value, str) or (choices and value not in choices):
                raise ConfigurationError(
                    f"{self.rule}: '{name}' must be one of {', '.join(choices)}, got {value!r}"
                )
            return value
        return self._validated_complex(name, value)

    def _validated_complex(self, name: str, value: Any) -> Any:
        raise ConfigurationError(f"{self.rule}: '{name}' cannot be configured")


@dataclass(frozen=True)
class BlockPaddingOptions(RuleOptions):
    rule: ClassVar[str] = "block-padding"

    root_block_padding: int = 2
    nested_block_padding: int = 1
    enforce_beginning_padding: bool = False
    enforce_end_padding: bool = False
    docstring_padding: int = 1
    treat_comments_as_docstrings: bool = True


@dataclass(frozen=True)
class StatementSpacingOptions(RuleOptions):
    rule: ClassVar[str] = "consistent-line-spacing"

    before_imports: int = 1
    after_imports: int = 1
    before_exports: int = 1
    after_exports: int = 1
    before_class: int = 2
    after_class: int = 2
    before_function: int = 2
    after_function: int = 2
    before_comment: int = 1
    ignore_top_level_code: bool = False
    skip_import_groups: bool = True


@dataclass(frozen=True)
class AlignmentOptions(RuleOptions):
    rule: ClassVar[str] = "aligned-assignments"
    _minimums: ClassVar[Mapping[str, int]] = {"block_size": 2}

    block_size: int = 2
    ignore_adjacent: bool = True
    ignore_if_assignments_not_in_block: bool = True
    align_types: bool = False
    ignore_types_mismatch: bool = True


@dataclass(frozen=True)
class MemberGroup:
    """
    One entry of the member grouping table.

    ``types`` lists normalised member kinds (``attribute``, ``method``); a
    group without types matches no member. ``matches`` holds the predicates
    ``static`` and ``constructor``.
    """

    name: str
    order: int
    types: tuple[str, ...] = ()
    matches: tuple[str, ...] = ()

    KIND_ALIASES: ClassVar[Mapping[str, str]] = {
        "attribute": "attribute",
        "property": "attribute",
        "ClassProperty": "attribute",
        "PropertyDefinition": "attribute",
        "method": "method",
        "MethodDefinition": "method",
    }

    @classmethod
    def from_mapping(cls, raw: Any) -> MemberGroup:
        if not isinstance(raw, Mapping):
            raise ConfigurationError("class-property-grouping: each group must be a table")
        unknown = set(raw) - {"name", "types", "matches", "order"}
        if unknown:
            raise ConfigurationError(
                f"class-property-grouping: unknown group keys {', '.join(sorted(unknown))}"
            )
        if "name" not in raw or "order" not in raw:
            raise ConfigurationError("class-property-grouping: a group requires 'name' and 'order'")
        name, order = raw["name"], raw["order"]
        if not isinstance(name, str):
            raise ConfigurationError("class-property-grouping: group 'name' must be a string")
        if isinstance(order, bool) or not isinstance(order, int) or order < 0:
            raise ConfigurationError(f"class-property-grouping: group '{name}' order must be an integer >= 0")
        return cls(
            name=name,
            order=order,
            types=tuple(cls._kind(t) for t in cls._strings(raw.get("types", []), name, "types")),
            matches=tuple(cls._strings(raw.get("matches", []), name, "matches")),
        )

    @staticmethod
    def _strings(value: Any, group: str, key: str) -> list[str]:
        if not isinstance(value, (list, tuple)) or not all(isinstance(v, str) for v in value):
            raise ConfigurationError(f"class-property-grouping: group '{group}' {key} must be a list of strings")
        return list(value)

    @classmethod
    def _kind(cls, value: str) -> str:
        # Unknown kinds are kept; they simply never match a member.
        return cls.KIND_ALIASES.get(value, value)


DEFAULT_MEMBER_GROUPS: tuple[MemberGroup, ...] = (
    MemberGroup("static-properties", 0, ("attribute",), ("static",)),
    MemberGroup("static-methods", 1, ("method",), ("static",)),
    MemberGroup("instance-properties", 2, ("attribute",), ()),
    MemberGroup("constructor", 3, ("method",), ("constructor",)),
    MemberGroup("instance-methods", 4, ("method",), ()),
)


@dataclass(frozen=True)
class MemberGroupingOptions(RuleOptions):
    rule: ClassVar[str] = "class-property-grouping"

    groups: tuple[MemberGroup, ...] = DEFAULT_MEMBER_GROUPS
    padding_between_groups: int = 1
    enforce_alphabetical_sorting: bool = False

    def _validated_complex(self, name: str, value: Any) -> Any:
        if name != "groups":
            return super()._validated_complex(name, value)
        if not isinstance(value, (list, tuple)):
            raise ConfigurationError(f"{self.rule}: 'groups' must be a list of tables")
        return tuple(MemberGroup.from_mapping(item) for item in value)


@dataclass(frozen=True)
class CollectionFormatOptions(RuleOptions):
    rule: ClassVar[str] = "multiline-format"
    _minimums: ClassVar[Mapping[str, int]] = {"min_items": 2, "max_line_length": 40, "indentation": 1}
    _choices: ClassVar[Mapping[str, tuple[str, ...]]] = {
        "multiline_style": ("consistent", "always", "never"),
        "bracket_style": ("same-line", "new-line"),
        "trailing_comma": ("always", "never"),
        "object_alignment": ("colon", "value", "none"),
    }

    allow_single_line: bool = True
    multiline_style: str = "consistent"
    min_items: int = 3
    max_line_length: int = 80
    bracket_style: str = "same-line"
    indentation: int = 2
    trailing_comma: str = "always"
    consistent_spacing: bool = True
    object_alignment: str = "none"


OPTION_TYPES: dict[str, type[RuleOptions]] = {
    cls.rule: cls
    for cls in (
        BlockPaddingOptions,
        StatementSpacingOptions,
        AlignmentOptions,
        MemberGroupingOptions,
        CollectionFormatOptions,
    )
}

RECOMMENDED: dict[str, dict[str, Any]] = {
    "block-padding": {"enforceEndPadding": True},
    "aligned-assignments": {"alignTypes": True},
}


@dataclass(frozen=True)
class ConfigurationLoader:
    """
    Validated options for every rule.

    Created by Infrastructure from the ``[tool.layout-linter]`` table; the
    domain never reads the filesystem. Validation happens once, here.
    """

    options: Mapping[str, RuleOptions] = field(
        default_factory=lambda: {name: cls() for name, cls in OPTION_TYPES.items()}
    )
    enabled_rules: tuple[str, ...] = tuple(OPTION_TYPES)

    @classmethod
    def from_tool_section(cls, section: Mapping[str, Any] | None) -> ConfigurationLoader:
        """
        Build from a ``[tool.layout-linter]`` table.

        ``preset = "recommended"`` starts from the recommended bundle;
        ``disable = [...]`` removes rules; other keys name rule sub-tables.
        """
        section = dict(section or {})
        preset = section.pop("preset", None)
        if preset not in (None, "recommended"):
            raise ConfigurationError(f"unknown preset {preset!r}")
        disabled = section.pop("disable", [])
        if not isinstance(disabled, list) or any(name not in OPTION_TYPES for name in disabled):
            raise ConfigurationError(f"'disable' must list rule names from: {', '.join(OPTION_TYPES)}")

        unknown = set(section) - set(OPTION_TYPES)
        if unknown:
            raise ConfigurationError(f"unknown rule(s): {', '.join(sorted(unknown))}")

        options: dict[str, RuleOptions] = {}
        for name, option_type in OPTION_TYPES.items():
            base = option_type()
            if preset == "recommended" and name in RECOMMENDED:
                base = base.merged(RECOMMENDED[name])
            raw = section.get(name)
            if raw is not None:
                if not isinstance(raw, Mapping):
                    raise ConfigurationError(f"{name}: options must be a table")
                base = base.merged(raw)
            options[name] = base
        enabled = tuple(name for name in OPTION_TYPES if name not in disabled)
        logger.debug("Layout configuration loaded: preset=%s enabled=%s", preset, enabled)
        return cls(options=options, enabled_rules=enabled)

    @classmethod
    def recommended(cls) -> ConfigurationLoader:
        return cls.from_tool_section({"preset": "recommended"})

    def options_for(self, rule: str) -> RuleOptions:
        try:
            return self.options[rule]
        except KeyError:
            raise ConfigurationError(f"unknown rule: {rule}") from None

    def is_enabled(self, rule: str) -> bool:
        return rule in self.enabled_rules
