"""Toggle emphasis markers around a selection."""

from ..core.model import EditResult, TextSelection

BOLD = "**"
ITALIC = "*"
STRIKETHROUGH = "~~"
HIGHLIGHT = "=="


def is_wrapped(text: str, selection: TextSelection, before: str, after: str) -> bool:
    """True when before/after sit directly outside the selection."""
    selection = selection.clamp(len(text))
    start, end = selection.start, selection.end
    if start < len(before) or end + len(after) > len(text):
        return False
    return text[start - len(before) : start] == before and text[end : end + len(after)] == after


def toggle_wrap(
    text: str,
    selection: TextSelection,
    before: str,
    after: str | None = None,
) -> EditResult:
    """Wrap the selection in before/after, or unwrap it if already wrapped.

    The returned selection always covers the same selected text, so calling
    this twice with the returned selection gives back the original text,
    unless the selection already sat directly inside a marker pair: then both
    calls unwrap (``"**a**"`` with "*" around "a" gives "*a*", then "a"). A
    caret is wrapped with an empty pair and left between the markers.

    Args:
        text: Buffer contents
        selection: Current selection (clamped to the text)
        before: Opening marker, e.g. "**"
        after: Closing marker (defaults to before)
    """
    if after is None:
        after = before

    selection = selection.clamp(len(text))
    start, end = selection.start, selection.end
    selected = selection.text_inside(text)

    if is_wrapped(text, selection, before, after):
        new_start = start - len(before)
        new_text = text[:new_start] + selected + text[end + len(after) :]
        return EditResult(new_text, TextSelection(new_start, new_start + len(selected)))

    new_text = text[:start] + before + selected + after + text[end:]
    new_start = start + len(before)
    return EditResult(new_text, TextSelection(new_start, new_start + len(selected)))


def toggle_bold(text: str, selection: TextSelection, marker: str = BOLD) -> EditResult:
    return toggle_wrap(text, selection, marker, marker)


def toggle_italic(text: str, selection: TextSelection, marker: str = ITALIC) -> EditResult:
    return toggle_wrap(text, selection, marker, marker)


def toggle_strikethrough(text: str, selection: TextSelection) -> EditResult:
    return toggle_wrap(text, selection, STRIKETHROUGH, STRIKETHROUGH)


def toggle_highlight(text: str, selection: TextSelection) -> EditResult:
    return toggle_wrap(text, selection, HIGHLIGHT, HIGHLIGHT)
