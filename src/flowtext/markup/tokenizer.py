"""Span tokenizer for task titles and descriptions.

Text is scanned left to right. At each position the marker forms are tried in
a fixed order and the first one that matches wins:

1. bold ``**text**``
2. bold ``__text__``
3. italic ``*text*`` (a single '*' not touching another '*')
4. italic ``_text_`` (same rule for '_')
5. hashtag ``#List`` or ``#List/Sublist``

Anything between matches is emitted verbatim as a plain span, so the raw
slices of the returned spans always add up to the input.
"""

import logging
from dataclasses import dataclass
from functools import partial
from typing import Callable, Iterator

from ..core.model import Span, SpanKind
from ..core.ports import HashtagTapHandler
from ..core.utils import char_at
from .hashtags import HASHTAG_RE, IMAGE_REF_RE

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Match:
    kind: SpanKind
    end: int
    content: str


Matcher = Callable[[str, int], "_Match | None"]


def _double(delim: str, kind: SpanKind) -> Matcher:
    """``<delim>content<delim>`` with the shortest non-empty one-line content."""
    size = len(delim)

    def match(text: str, pos: int) -> _Match | None:
        if not text.startswith(delim, pos):
            return None
        close = text.find(delim, pos + size + 1)
        if close == -1:
            return None
        content = text[pos + size : close]
        if "\n" in content:
            return None
        return _Match(kind, close + size, content)

    return match


def _single(delim: str, kind: SpanKind) -> Matcher:
    """A lone delimiter char on both sides, never part of a doubled run."""

    def lone(text: str, index: int) -> bool:
        return (
            char_at(text, index) == delim
            and char_at(text, index - 1) != delim
            and char_at(text, index + 1) != delim
        )

    def match(text: str, pos: int) -> _Match | None:
        if not lone(text, pos):
            return None
        first = char_at(text, pos + 1)
        if not first or first == "\n":
            return None
        for close in range(pos + 2, len(text)):
            ch = text[close]
            if ch == "\n":
                return None
            if lone(text, close):
                return _Match(kind, close + 1, text[pos + 1 : close])
        return None

    return match


def _hashtag(text: str, pos: int) -> _Match | None:
    m = HASHTAG_RE.match(text, pos)
    if m is None:
        return None
    return _Match(SpanKind.HASHTAG, m.end(), m.group(0))


_BOLD_STAR = _double("**", SpanKind.BOLD)
_BOLD_UNDERSCORE = _double("__", SpanKind.BOLD)
_ITALIC_STAR = _single("*", SpanKind.ITALIC)
_ITALIC_UNDERSCORE = _single("_", SpanKind.ITALIC)


def _matchers(recognize_hashtags: bool, recognize_emphasis: bool) -> list[Matcher]:
    matchers: list[Matcher] = []
    if recognize_emphasis:
        matchers += [_BOLD_STAR, _BOLD_UNDERSCORE, _ITALIC_STAR, _ITALIC_UNDERSCORE]
    if recognize_hashtags:
        matchers.append(_hashtag)
    return matchers


def _scan(text: str, matchers: list[Matcher]) -> Iterator[tuple[int, _Match]]:
    """Yield (start, match) pairs, left to right, never overlapping."""
    if not matchers:
        return
    pos = 0
    while pos < len(text):
        for matcher in matchers:
            found = matcher(text, pos)
            if found is not None:
                yield pos, found
                pos = found.end
                break
        else:
            pos += 1


def _plain(text: str, start: int, end: int) -> Span:
    chunk = text[start:end]
    return Span(SpanKind.PLAIN, chunk, start, end, chunk)


def _tokenize(
    text: str,
    matchers: list[Matcher],
    on_hashtag_tap: HashtagTapHandler | None = None,
) -> list[Span]:
    spans: list[Span] = []
    last = 0

    for start, found in _scan(text, matchers):
        if start > last:
            spans.append(_plain(text, last, start))

        on_tap = None
        if on_hashtag_tap is not None and found.kind is SpanKind.HASHTAG:
            on_tap = partial(on_hashtag_tap, found.content[1:])

        spans.append(
            Span(found.kind, found.content, start, found.end, text[start : found.end], on_tap)
        )
        last = found.end

    # Trailing plain text, or the whole input when nothing matched
    if last < len(text) or not spans:
        spans.append(_plain(text, last, len(text)))

    return spans


def tokenize(
    text: str,
    recognize_hashtags: bool = True,
    recognize_emphasis: bool = True,
) -> list[Span]:
    """Split text into plain, hashtag, bold and italic spans.

    Args:
        text: Raw text
        recognize_hashtags: Emit hashtag spans (otherwise '#tags' stay plain)
        recognize_emphasis: Emit bold/italic spans (otherwise markers stay plain)

    Returns:
        Contiguous spans covering the whole text. Empty input gives a single
        empty plain span.
    """
    return _tokenize(text, _matchers(recognize_hashtags, recognize_emphasis))


def tokenize_interactive(
    text: str,
    on_hashtag_tap: HashtagTapHandler,
    recognize_hashtags: bool = True,
    recognize_emphasis: bool = True,
) -> list[Span]:
    """Like tokenize(), with an ``on_tap`` callable on every hashtag span.

    Calling ``span.on_tap()`` invokes ``on_hashtag_tap(span.path)``. Span
    boundaries and text are identical to tokenize().
    """
    return _tokenize(
        text,
        _matchers(recognize_hashtags, recognize_emphasis),
        on_hashtag_tap=on_hashtag_tap,
    )


# Live editing keeps the delimiters on screen, so only forms whose content
# cannot contain the delimiter are highlighted while typing.


def _live_bold(text: str, pos: int) -> _Match | None:
    if not text.startswith("**", pos):
        return None
    close = text.find("*", pos + 2)
    if close <= pos + 2 or not text.startswith("**", close):
        return None
    return _Match(SpanKind.BOLD, close + 2, text[pos + 2 : close])


def _live_italic(text: str, pos: int) -> _Match | None:
    if char_at(text, pos) != "*" or char_at(text, pos - 1) == "*":
        return None
    close = text.find("*", pos + 1)
    if close <= pos + 1 or char_at(text, close + 1) == "*":
        return None
    return _Match(SpanKind.ITALIC, close + 1, text[pos + 1 : close])


def _image_ref(text: str, pos: int) -> _Match | None:
    m = IMAGE_REF_RE.match(text, pos)
    if m is None:
        return None
    return _Match(SpanKind.IMAGE, m.end(), m.group(0))


def tokenize_live(text: str, recognize_images: bool = True) -> list[Span]:
    """Tokenize text for an editing surface.

    Bold (``**``) and italic (``*``) content is emitted between MARKER spans
    holding the delimiters, hashtags are emitted whole and ``[imgN]`` /
    ``[img...]`` attachment references become IMAGE spans. Every span's text
    equals its raw slice.
    """
    matchers: list[Matcher] = [_live_bold, _live_italic, _hashtag]
    if recognize_images:
        matchers.append(_image_ref)

    spans: list[Span] = []
    for span in _tokenize(text, matchers):
        if span.kind not in (SpanKind.BOLD, SpanKind.ITALIC):
            spans.append(span)
            continue
        size = (len(span.raw) - len(span.text)) // 2
        inner_start = span.start + size
        inner_end = span.end - size
        delim = span.raw[:size]
        spans.append(Span(SpanKind.MARKER, delim, span.start, inner_start, delim))
        spans.append(Span(span.kind, span.text, inner_start, inner_end, span.text))
        spans.append(Span(SpanKind.MARKER, delim, inner_end, span.end, delim))

    logger.debug("Live tokenized %d chars into %d spans", len(text), len(spans))
    return spans
