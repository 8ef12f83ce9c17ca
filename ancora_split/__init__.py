"""
ancora-split: Spanish tokenizer with AnCora-style splitting

Splits raw Spanish text into tokens and, on request, separates
contractions (del -> de el), clitic pronouns attached to verbs
(dámelo -> da me lo) and hyphenated compounds (punto-final -> punto - final).

Basic Usage:
    import ancora_split

    tokens = ancora_split.tokenize("Dámelo del cajón.", "splitAll")
    print([t.word for t in tokens])
    # ['Da', 'me', 'lo', 'de', 'el', 'cajón', '.']

Streaming:
    tf = ancora_split.ancora_factory()
    with open("corpus.txt", encoding="utf-8") as f:
        for token in tf.get_tokenizer(f):
            ...
"""

import io
from typing import List, Optional

from ancora_split.errors import TokenizerError, TokenizerIOError
from ancora_split.lexer import NEWLINE_TOKEN, SpanishLexer
from ancora_split.options import TokenizerOptions, parse_options
from ancora_split.raw_types import Marker, Token, derive_token
from ancora_split.tokenizer import (
    ANCORA_OPTIONS,
    FACTORIES,
    SpanishTokenizer,
    TokenizerFactory,
    ancora_factory,
    factory,
    get_factory,
)
from ancora_split.verb_stripper import separate_pronouns

__version__ = "0.1.0"


# =============================================================================
# Main API
# =============================================================================

def tokenize(text: str, options: Optional[str] = None) -> List[Token]:
    """
    Tokenize a Spanish text.

    Args:
        text: Text to tokenize
        options: Comma-separated tokenizer options (e.g. "splitAll")

    Returns:
        List of Token objects

    Example:
        >>> [t.word for t in ancora_split.tokenize("al punto-final", "splitAll")]
        ['a', 'el', 'punto', '-', 'final']
    """
    return TokenizerFactory(options).get_tokenizer(io.StringIO(text)).tokenize()


def get_version() -> str:
    """Get the library version."""
    return __version__


# =============================================================================
# Module-level exports
# =============================================================================

__all__ = [
    # Data classes
    "Token",
    "Marker",
    "TokenizerOptions",
    "derive_token",
    # Tokenizer
    "tokenize",
    "SpanishTokenizer",
    "SpanishLexer",
    "TokenizerFactory",
    "factory",
    "ancora_factory",
    "get_factory",
    "FACTORIES",
    "ANCORA_OPTIONS",
    "NEWLINE_TOKEN",
    "parse_options",
    "separate_pronouns",
    "get_version",
    # Exceptions
    "TokenizerError",
    "TokenizerIOError",
    # Version
    "__version__",
]
