"""Structural editing: list continuation, marker toggles and suggestions."""

from .checkbox import checkbox_offsets, is_checkbox_at, toggle_checkbox_at
from .lists import apply_newline, classify_line, continue_list
from .suggest import active_query, cycle_index, filter_candidates, insert_suggestion, match
from .wrap import (
    is_wrapped,
    toggle_bold,
    toggle_highlight,
    toggle_italic,
    toggle_strikethrough,
    toggle_wrap,
)

__all__ = [
    "active_query",
    "apply_newline",
    "checkbox_offsets",
    "classify_line",
    "continue_list",
    "cycle_index",
    "filter_candidates",
    "insert_suggestion",
    "is_checkbox_at",
    "is_wrapped",
    "match",
    "toggle_bold",
    "toggle_checkbox_at",
    "toggle_highlight",
    "toggle_italic",
    "toggle_strikethrough",
    "toggle_wrap",
]
