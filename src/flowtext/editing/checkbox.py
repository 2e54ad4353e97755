"""Checkbox markers in plain-text descriptions."""

import logging
import re

logger = logging.getLogger(__name__)

UNCHECKED = "- [ ]"
CHECKED = "- [x]"
TOKEN_LENGTH = 5

_CHECKBOX_LINE_RE = re.compile(r"^([ \t]*)- \[[x ]\]", re.MULTILINE)


def toggle_checkbox_at(text: str, offset: int) -> str:
    """Flip the checkbox token starting at offset.

    The caller must point offset at a ``- [ ]`` or ``- [x]`` token (see
    checkbox_offsets). Any other offset is a caller error; the text is then
    returned untouched, which callers must not rely on.
    """
    token = text[offset : offset + TOKEN_LENGTH] if offset >= 0 else ""

    if token == CHECKED:
        replacement = UNCHECKED
    elif token == UNCHECKED:
        replacement = CHECKED
    else:
        logger.debug("No checkbox token at offset %d", offset)
        return text

    return text[:offset] + replacement + text[offset + TOKEN_LENGTH :]


def checkbox_offsets(text: str) -> list[int]:
    """Offsets of the checkbox token on every checkbox line, in order."""
    return [m.end(1) for m in _CHECKBOX_LINE_RE.finditer(text)]


def is_checkbox_at(text: str, offset: int) -> bool:
    return offset >= 0 and text[offset : offset + TOKEN_LENGTH] in (CHECKED, UNCHECKED)
