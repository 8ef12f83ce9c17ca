"""
Lightweight data structures for the token stream.

Raw tokens come out of the lexer carrying a split marker; the tokenizer
rewrites marked tokens into derived tokens built with derive_token().
Tokens are never modified in place.
"""

import dataclasses
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional


class Marker(Enum):
    """Which splitting strategy, if any, should process a raw token."""
    NONE = "none"
    CONTRACTION = "contraction"
    VERB_PRONOUN = "verb_pronoun"
    COMPOUND = "compound"


@dataclass(frozen=True, slots=True)
class Token:
    """
    A token produced by the lexer or by a splitting strategy.

    Attributes:
        word: Surface text used for matching
        value: Canonical text (normally equal to word)
        original_text: Text as it appeared before normalization
        marker: Split marker assigned by the lexer
        begin: Start offset in the input stream (-1 if unknown)
        end: End offset in the input stream (-1 if unknown)
        metadata: Opaque lexer data, copied to derived tokens untouched
    """
    word: str
    value: Optional[str] = None
    original_text: Optional[str] = None
    marker: Marker = Marker.NONE
    begin: int = -1
    end: int = -1
    metadata: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def __post_init__(self):
        # value and original_text default to the surface word
        if self.value is None:
            object.__setattr__(self, "value", self.word)
        if self.original_text is None:
            object.__setattr__(self, "original_text", self.word)

    def __repr__(self) -> str:
        if self.marker is Marker.NONE:
            return f"Token({self.word!r})"
        return f"Token({self.word!r}, marker={self.marker.name})"


def derive_token(source: Token, text: str) -> Token:
    """
    Build a sub-token of source.

    Every field is copied from source; the text-bearing fields are replaced
    by text and the marker is cleared. Offsets are copied as-is, so all
    sub-tokens of one split share the span of their source.

    Args:
        source: The raw token being split
        text: Text of the new sub-token

    Returns:
        A new Token
    """
    return dataclasses.replace(
        source,
        word=text,
        value=text,
        original_text=text,
        marker=Marker.NONE,
        metadata=dict(source.metadata),
    )


def clear_marker(token: Token) -> Token:
    """Return token without a split marker."""
    if token.marker is Marker.NONE:
        return token
    return dataclasses.replace(token, marker=Marker.NONE)
