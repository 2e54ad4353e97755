"""Hashtag autocomplete: query extraction, matching and insertion."""

from typing import Iterable

from ..core.model import (
    EditResult,
    HashtagQuery,
    ListCandidate,
    SuggestionMatch,
    TextSelection,
)
from ..core.utils import clamp


def active_query(text: str, selection: TextSelection) -> HashtagQuery | None:
    """Find the hashtag being typed at the caret.

    The query is everything between the last '#' before the caret and the
    caret. There is no active query for a range selection, when no '#'
    precedes the caret, or when a space or newline separates them.
    """
    selection = selection.clamp(len(text))
    if not selection.is_caret:
        return None

    caret = selection.start
    hash_index = text.rfind("#", 0, caret)
    if hash_index == -1:
        return None

    query = text[hash_index + 1 : caret]
    if " " in query or "\n" in query:
        return None

    return HashtagQuery(query=query, start=hash_index, end=caret)


def match(query: str, candidates: Iterable[ListCandidate]) -> SuggestionMatch:
    """Decide between picking an existing list and offering to create one."""
    needle = query.lower()
    has_exact_match = any(
        c.name.lower() == needle or c.full_path.lower() == needle for c in candidates
    )
    return SuggestionMatch(
        has_exact_match=has_exact_match,
        show_create_option=bool(query) and not has_exact_match,
    )


def filter_candidates(
    query: str,
    candidates: Iterable[ListCandidate],
    limit: int | None = None,
) -> list[ListCandidate]:
    """Candidates whose name or path contains query (case-insensitive).

    Exact matches come first; otherwise the source order is kept.
    """
    needle = query.lower()
    hits = [
        c for c in candidates if needle in c.name.lower() or needle in c.full_path.lower()
    ]
    hits.sort(key=lambda c: not (c.name.lower() == needle or c.full_path.lower() == needle))
    if limit is not None:
        hits = hits[: max(limit, 0)]
    return hits


def insert_suggestion(text: str, query: HashtagQuery, full_path: str) -> EditResult:
    """Replace the typed ``#query`` with ``#full_path`` and a trailing space."""
    start = clamp(query.start, 0, len(text))
    end = clamp(query.end, start, len(text))
    inserted = f"#{full_path} "
    new_text = text[:start] + inserted + text[end:]
    return EditResult(new_text, TextSelection.caret(start + len(inserted)))


def cycle_index(index: int, step: int, count: int) -> int:
    """Move a keyboard highlight through count suggestions, wrapping around."""
    if count <= 0:
        return 0
    return (index + step) % count
