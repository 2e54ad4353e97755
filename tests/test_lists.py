"""Tests for list continuation on Enter."""

import pytest

from flowtext.core.model import ListAction, PrefixKind, TextSelection
from flowtext.editing.lists import apply_newline, classify_line, continue_list


def test_classify_checkbox_before_bullet():
    """Test that checkbox lines are not mistaken for bullets."""
    prefix = classify_line("- [x] done")
    assert prefix.kind is PrefixKind.CHECKBOX
    assert prefix.checked is True
    assert prefix.length == 6


def test_classify_kinds():
    """Test every prefix kind."""
    assert classify_line("* item").kind is PrefixKind.BULLET
    assert classify_line("  - item").indent == "  "
    assert classify_line("12. item").number == 12
    assert classify_line("> quoted").kind is PrefixKind.QUOTE
    assert classify_line("plain").kind is PrefixKind.NONE
    assert classify_line("-no space").kind is PrefixKind.NONE


def test_continue_checkbox_unchecked():
    """Test that a checkbox continues unchecked."""
    result = continue_list("- [ ] buy milk")
    assert result.action is ListAction.CONTINUE
    assert result.continuation == "- [ ] "


def test_continue_checked_checkbox_starts_unchecked():
    """Test that a checked parent still yields an unchecked item."""
    assert continue_list("  - [x] done").continuation == "  - [ ] "


def test_continue_bullet_keeps_marker_and_indent():
    """Test bullet continuation."""
    assert continue_list("    * nested").continuation == "    * "
    assert continue_list("- item").continuation == "- "


def test_continue_numbered_increments():
    """Test numbered continuation."""
    assert continue_list("9. ninth").continuation == "10. "
    assert continue_list("  3. third").continuation == "  4. "


def test_continue_quote():
    """Test quote continuation."""
    assert continue_list("> some words").continuation == "> "


@pytest.mark.parametrize("line", ["- ", "* ", "- [ ] ", "  - [x] ", "3. ", "> ", "-   "])
def test_prefix_only_line_removes_prefix(line):
    """Test that an empty list item ends the list."""
    assert continue_list(line).action is ListAction.REMOVE_PREFIX


def test_no_prefix_is_none():
    """Test ordinary text."""
    result = continue_list("just text")
    assert result.action is ListAction.NONE
    assert result.continuation == ""


def test_continue_list_deterministic():
    """Test that the same line gives the same decision."""
    assert continue_list("- [ ] a") == continue_list("- [ ] a")


def test_apply_newline_continue():
    """Test inserting the continuation at the caret."""
    text = "- [ ] buy milk"
    result = apply_newline(text, TextSelection.caret(len(text)))
    assert result is not None
    assert result.text == "- [ ] buy milk\n- [ ] "
    assert result.selection == TextSelection.caret(len(result.text))


def test_apply_newline_mid_buffer():
    """Test continuation on a middle line keeps the rest of the buffer."""
    text = "intro\n1. one\nafter"
    caret = text.index("\nafter")
    result = apply_newline(text, TextSelection.caret(caret))
    assert result.text == "intro\n1. one\n2. \nafter"
    assert result.selection.start == caret + len("\n2. ")


def test_apply_newline_remove_prefix():
    """Test that a bare bullet is cleared without a newline."""
    result = apply_newline("- ", TextSelection.caret(2))
    assert result is not None
    assert result.text == ""
    assert result.selection == TextSelection.caret(0)


def test_apply_newline_remove_prefix_second_line():
    """Test clearing an empty item after a filled one."""
    text = "- a\n- "
    result = apply_newline(text, TextSelection.caret(len(text)))
    assert result.text == "- a\n"
    assert result.selection.start == 4


def test_apply_newline_plain_line_not_handled():
    """Test that a plain line is left to the host."""
    assert apply_newline("hello", TextSelection.caret(5)) is None


def test_apply_newline_range_selection_not_handled():
    """Test that a range selection is rejected."""
    assert apply_newline("- item", TextSelection(2, 6)) is None


def test_apply_newline_uses_text_before_caret():
    """Test that only the text before the caret is classified."""
    text = "- item"
    result = apply_newline(text, TextSelection.caret(2))
    assert result.text == "item"
    assert result.selection.start == 0
