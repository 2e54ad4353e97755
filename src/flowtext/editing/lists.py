"""List continuation when the user presses Enter inside a list line.

Recognized prefixes, checked in this order:

- checkbox  ``- [ ] `` / ``- [x] ``
- bullet    ``- `` / ``* ``
- numbered  ``1. ``
- quote     ``> ``

A line holding only its prefix ends the list (the prefix is removed). Any
other list line is continued on a new line with a matching prefix.
"""

import logging
import re

from ..core.model import (
    EditResult,
    LinePrefix,
    ListAction,
    ListContinuation,
    PrefixKind,
    TextSelection,
)
from ..core.utils import line_start

logger = logging.getLogger(__name__)

# Checkbox first: it is a refinement of the "- " bullet form
CHECKBOX_RE = re.compile(r"^(\s*)-\s\[([x ])\]\s")
BULLET_RE = re.compile(r"^(\s*)([-*])\s")
NUMBERED_RE = re.compile(r"^(\s*)(\d+)\.\s")
QUOTE_RE = re.compile(r"^(\s*)>\s")

_NO_PREFIX = LinePrefix(PrefixKind.NONE)


def classify_line(line: str) -> LinePrefix:
    """Classify the list prefix at the start of a single line."""
    # Only the last line counts if a caller hands over more than one
    line = line.rsplit("\n", 1)[-1]

    m = CHECKBOX_RE.match(line)
    if m:
        return LinePrefix(
            PrefixKind.CHECKBOX, indent=m.group(1), length=m.end(), checked=m.group(2) == "x"
        )

    m = BULLET_RE.match(line)
    if m:
        return LinePrefix(PrefixKind.BULLET, indent=m.group(1), length=m.end(), marker=m.group(2))

    m = NUMBERED_RE.match(line)
    if m:
        return LinePrefix(
            PrefixKind.NUMBERED, indent=m.group(1), length=m.end(), number=int(m.group(2))
        )

    m = QUOTE_RE.match(line)
    if m:
        return LinePrefix(PrefixKind.QUOTE, indent=m.group(1), length=m.end())

    return _NO_PREFIX


def _continuation(prefix: LinePrefix) -> str:
    if prefix.kind is PrefixKind.CHECKBOX:
        # New items always start unchecked
        return f"{prefix.indent}- [ ] "
    if prefix.kind is PrefixKind.BULLET:
        return f"{prefix.indent}{prefix.marker} "
    if prefix.kind is PrefixKind.NUMBERED:
        return f"{prefix.indent}{(prefix.number or 0) + 1}. "
    if prefix.kind is PrefixKind.QUOTE:
        return f"{prefix.indent}> "
    return ""


def continue_list(line: str) -> ListContinuation:
    """Decide what Enter does at the end of line.

    Args:
        line: Text of the current line up to the caret

    Returns:
        REMOVE_PREFIX for a prefix-only line, CONTINUE with the continuation
        prefix for a list line with content, NONE otherwise.
    """
    line = line.rsplit("\n", 1)[-1]
    prefix = classify_line(line)

    if prefix.kind is PrefixKind.NONE:
        return ListContinuation(ListAction.NONE, prefix)

    if not line[prefix.length :].strip():
        logger.debug("Empty %s item, ending list", prefix.kind.value)
        return ListContinuation(ListAction.REMOVE_PREFIX, prefix)

    return ListContinuation(ListAction.CONTINUE, prefix, _continuation(prefix))


def apply_newline(text: str, selection: TextSelection) -> EditResult | None:
    """Apply list continuation for an Enter key press at the caret.

    Returns None when nothing special applies (no list prefix, or a range
    selection); the host then inserts a plain newline itself.
    """
    selection = selection.clamp(len(text))
    if not selection.is_caret:
        return None

    caret = selection.start
    start = line_start(text, caret)
    decision = continue_list(text[start:caret])

    if decision.action is ListAction.REMOVE_PREFIX:
        return EditResult(text[:start] + text[caret:], TextSelection.caret(start))

    if decision.action is ListAction.CONTINUE:
        inserted = "\n" + decision.continuation
        return EditResult(
            text[:caret] + inserted + text[caret:],
            TextSelection.caret(caret + len(inserted)),
        )

    return None
