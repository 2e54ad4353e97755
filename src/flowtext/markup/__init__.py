"""Inline markup: span tokenization and hashtag utilities."""

from .hashtags import (
    HASHTAG_RE,
    add_hashtag_to_text,
    extract_hashtags,
    extract_image_refs,
    find_hashtags,
    remove_hashtags,
)
from .tokenizer import tokenize, tokenize_interactive, tokenize_live

__all__ = [
    "HASHTAG_RE",
    "add_hashtag_to_text",
    "extract_hashtags",
    "extract_image_refs",
    "find_hashtags",
    "remove_hashtags",
    "tokenize",
    "tokenize_interactive",
    "tokenize_live",
]
