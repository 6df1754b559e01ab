"""Unit tests for text edits and diagnostics."""

import pytest

from layout_linter.domain.entities import Diagnostic, TextEdit, apply_edits, select_disjoint


class TestTextEdit:
    """Test TextEdit range semantics."""

    def test_apply_replaces_half_open_range(self) -> None:
        assert TextEdit(2, 4, "XY").apply("abcdef") == "abXYef"

    def test_insert_and_remove(self) -> None:
        assert TextEdit.insert(3, ",").apply("abc") == "abc,"
        assert TextEdit.remove(0, 2).apply("\n\nx") == "x"

    def test_invalid_range_rejected(self) -> None:
        with pytest.raises(ValueError):
            TextEdit(5, 2, "")

    def test_overlaps(self) -> None:
        assert TextEdit(0, 5, "").overlaps(TextEdit(4, 6, ""))
        assert not TextEdit(0, 5, "").overlaps(TextEdit(5, 6, ""))
        assert TextEdit.insert(3, "a").overlaps(TextEdit.insert(3, "b"))
        assert not TextEdit.insert(3, "a").overlaps(TextEdit(3, 4, ""))


class TestEditBatches:
    """Test batch selection and application."""

    def test_select_disjoint_defers_overlapping_edits(self) -> None:
        first = TextEdit(0, 4, "a")
        overlapping = TextEdit(2, 6, "b")
        later = TextEdit(8, 9, "c")
        assert select_disjoint([later, overlapping, first]) == [first, later]

    def test_select_disjoint_collapses_duplicates(self) -> None:
        edit = TextEdit(1, 2, "x")
        assert select_disjoint([edit, TextEdit(1, 2, "x")]) == [edit]

    def test_apply_edits_keeps_offsets_valid(self) -> None:
        text = "a=1\nb=2\n"
        edits = [TextEdit(1, 2, " = "), TextEdit(5, 6, " = ")]
        assert apply_edits(text, edits) == "a = 1\nb = 2\n"

    def test_apply_edits_rejects_overlap(self) -> None:
        with pytest.raises(ValueError):
            apply_edits("abcdef", [TextEdit(0, 3, ""), TextEdit(2, 4, "")])


class TestDiagnostic:
    """Test Diagnostic rendering."""

    def test_message_interpolates_data(self) -> None:
        diagnostic = Diagnostic(
            rule="block-padding",
            msgid="missingPaddingBetweenRootBlocks",
            line=3,
            column=0,
            data={"expected": 2, "actual": 0, "line_text": "lines"},
        )
        assert diagnostic.message == "Expected 2 empty lines between root-level blocks, but found 0."
        assert not diagnostic.fixable
        assert diagnostic.location("mod.py") == "mod.py:3:0"

    def test_fixable_when_fix_present(self) -> None:
        diagnostic = Diagnostic(
            rule="multiline-format",
            msgid="missingTrailingComma",
            line=1,
            column=0,
            fix=TextEdit.insert(3, ","),
        )
        assert diagnostic.fixable
