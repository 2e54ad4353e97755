"""Value types passed between the markup, editing and adapter layers."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable


class SpanKind(str, Enum):
    PLAIN = "plain"
    HASHTAG = "hashtag"
    BOLD = "bold"
    ITALIC = "italic"
    # only produced by the live editing tokenizer
    MARKER = "marker"
    IMAGE = "image"


@dataclass(frozen=True)
class Span:
    kind: SpanKind
    text: str  # rendered content: inner text for emphasis, "#path" for hashtags
    start: int  # char offsets into the tokenized text
    end: int
    raw: str  # source[start:end], delimiters included
    on_tap: Callable[[], None] | None = field(default=None, compare=False, repr=False)

    @property
    def path(self) -> str | None:
        """List path of a hashtag span (the text without its leading '#')."""
        if self.kind is SpanKind.HASHTAG:
            return self.text[1:]
        return None

    def as_dict(self) -> dict[str, Any]:
        out: dict[str, Any] = {
            "kind": self.kind.value,
            "text": self.text,
            "start": self.start,
            "end": self.end,
        }
        if self.kind is SpanKind.HASHTAG:
            out["path"] = self.path
        return out


@dataclass(frozen=True)
class TextSelection:
    start: int
    end: int

    @classmethod
    def caret(cls, offset: int) -> TextSelection:
        return cls(offset, offset)

    @property
    def is_caret(self) -> bool:
        return self.start == self.end

    def clamp(self, length: int) -> TextSelection:
        """Order the bounds and clamp them into [0, length]."""
        lo, hi = sorted((self.start, self.end))
        lo = min(max(lo, 0), length)
        hi = min(max(hi, 0), length)
        if (lo, hi) == (self.start, self.end):
            return self
        return TextSelection(lo, hi)

    def text_inside(self, text: str) -> str:
        return text[self.start : self.end]

    def as_dict(self) -> dict[str, int]:
        return {"start": self.start, "end": self.end}


@dataclass(frozen=True)
class EditResult:
    """New buffer contents plus the selection to apply with them."""

    text: str
    selection: TextSelection

    def as_dict(self) -> dict[str, Any]:
        return {"text": self.text, "selection": self.selection.as_dict()}


class PrefixKind(str, Enum):
    NONE = "none"
    BULLET = "bullet"
    CHECKBOX = "checkbox"
    NUMBERED = "numbered"
    QUOTE = "quote"


@dataclass(frozen=True)
class LinePrefix:
    kind: PrefixKind
    indent: str = ""
    length: int = 0  # chars matched by the prefix pattern, indent included
    marker: str | None = None  # "-" or "*" for bullets
    number: int | None = None  # numbered lists
    checked: bool | None = None  # checkboxes


class ListAction(str, Enum):
    NONE = "none"
    CONTINUE = "continue"
    REMOVE_PREFIX = "remove_prefix"


@dataclass(frozen=True)
class ListContinuation:
    action: ListAction
    prefix: LinePrefix
    continuation: str = ""


@dataclass(frozen=True)
class ListCandidate:
    """A task list offered as a hashtag suggestion."""

    name: str
    full_path: str
    task_count: int = 0
    depth: int = 0
    color: str | None = None

    @property
    def hashtag(self) -> str:
        return f"#{self.full_path}"

    def as_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "full_path": self.full_path,
            "task_count": self.task_count,
            "depth": self.depth,
            "color": self.color,
        }


@dataclass(frozen=True)
class HashtagQuery:
    query: str  # text typed after '#', may be empty
    start: int  # offset of the '#'
    end: int  # caret offset


@dataclass(frozen=True)
class SuggestionMatch:
    has_exact_match: bool
    show_create_option: bool


@dataclass(frozen=True)
class CompletionState:
    """Completion flag of a task: pending until the host commits it."""

    committed: bool = False

    def commit(self) -> CompletionState:
        if self.committed:
            return self
        return CompletionState(committed=True)

    @property
    def status(self) -> str:
        return "committed" if self.committed else "pending"
