"""Offset helpers shared by the markup and editing modules."""


def clamp(value: int, low: int, high: int) -> int:
    """Clamp value into [low, high]."""
    return max(low, min(value, high))


def char_at(text: str, index: int) -> str:
    """
    Return the character at index, or "" when index falls outside the text.

    Unlike text[index], negative indexes never wrap around.
    """
    if 0 <= index < len(text):
        return text[index]
    return ""


def line_start(text: str, offset: int) -> int:
    """Offset of the first character of the line containing offset."""
    offset = clamp(offset, 0, len(text))
    return text.rfind("\n", 0, offset) + 1

