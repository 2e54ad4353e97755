"""Hashtag (list reference) utilities.

A hashtag is '#' followed by word characters, optionally followed by '/' and
more word characters: ``#Work`` or ``#Work/Projects``. The part after '#' is
the list path.
"""

import re

# ASCII word characters only; the tokenizer uses the same rule
HASHTAG_RE = re.compile(r"#([A-Za-z0-9_]+(?:/[A-Za-z0-9_]+)?)")
IMAGE_REF_RE = re.compile(r"\[img(\d+|\.\.\.)\]")

_HASHTAG_WITH_SPACE_RE = re.compile(HASHTAG_RE.pattern + r"\s*")


def extract_hashtags(text: str) -> list[str]:
    """Return the list path of every hashtag in text, left to right.

    Duplicates are kept.
    """
    return [m.group(1) for m in HASHTAG_RE.finditer(text)]


def find_hashtags(text: str) -> list[tuple[int, int, str]]:
    """Return (start, end, path) for every hashtag in text."""
    return [(m.start(), m.end(), m.group(1)) for m in HASHTAG_RE.finditer(text)]


def remove_hashtags(text: str) -> str:
    """Remove all hashtags and the whitespace run after each one.

    The result is trimmed. Characters that directly follow a tag without
    whitespace (punctuation, for instance) are kept. Removal is repeated until
    no tag is left, since dropping a tag can glue a stray '#' onto the word
    that followed it ("##a b" -> "#b").
    """
    result = text
    while True:
        stripped = _HASHTAG_WITH_SPACE_RE.sub("", result)
        if stripped == result:
            break
        result = stripped
    return result.strip()


def add_hashtag_to_text(text: str, list_path: str) -> str:
    """Prepend ``#list_path`` to text unless the tag is already present.

    The presence check is a plain substring test. Blank text yields the tag
    alone. This is not the inverse of remove_hashtags: only presence of the
    tag round-trips, not where it sits in the text.
    """
    hashtag = f"#{list_path}"

    if hashtag in text:
        return text

    if not text.strip():
        return hashtag

    return f"{hashtag} {text}"


def extract_image_refs(text: str) -> list[int]:
    """Return the attachment indexes referenced as ``[imgN]``.

    Upload placeholders (``[img...]``) are skipped.
    """
    refs = []
    for m in IMAGE_REF_RE.finditer(text):
        if m.group(1).isdigit():
            refs.append(int(m.group(1)))
    return refs
