"""
Splitting strategies for marked tokens.

Each strategy takes one raw token and returns the ordered, non-empty list
of tokens that replaces it:

    del         -> de + el              (contraction)
    dámelo      -> da + me + lo         (verb + clitic pronouns)
    punto-final -> punto + - + final    (compound)

Sub-tokens are built with derive_token(), so they carry the source
token's metadata and offsets and never carry a marker.
"""

import re
from typing import Callable, List, Optional, Tuple

from ancora_split.raw_types import Token, clear_marker, derive_token

# Pronoun separator: word -> (stem, clitics) or None
Separator = Callable[[str], Optional[Tuple[str, List[str]]]]


# ============================================================================
# Contractions
# ============================================================================

ARTICLE = "el"


def split_contraction(token: Token) -> List[Token]:
    """
    Split a preposition + article contraction (del, al).

    The article's case follows the last character of the token only, so
    'Del' gives 'De' + 'el' and 'DEL' gives 'DE' + 'EL'.

    Args:
        token: Token marked as a contraction

    Returns:
        [preposition, article]
    """
    text = token.original_text
    stem = text[:-1]
    article = ARTICLE if text[-1].islower() else ARTICLE.upper()
    return [derive_token(token, stem), derive_token(token, article)]


# ============================================================================
# Verbs with clitic pronouns
# ============================================================================

def split_verb(token: Token, separator: Separator) -> List[Token]:
    """
    Split the clitic pronouns off a verb form.

    Args:
        token: Token marked as a verb with attached pronouns
        separator: Pronoun separation function

    Returns:
        [stem, clitic, ...], or [token] (marker cleared) if the word does
        not decompose
    """
    parts = separator(token.word)
    if parts is None:
        return [clear_marker(token)]

    stem, pronouns = parts
    return [derive_token(token, stem)] + [derive_token(token, p) for p in pronouns]


# ============================================================================
# Compounds
# ============================================================================

HYPHEN_PATTERN = re.compile(r"-")


def split_compound(token: Token) -> List[Token]:
    """
    Split a compound on hyphens and whitespace.

    Every hyphen becomes a token of its own.

    Args:
        token: Token marked as a compound

    Returns:
        The parts in left-to-right order, or [token] (marker cleared) if
        nothing is left after splitting
    """
    parts = HYPHEN_PATTERN.sub(" - ", token.word).split()
    if not parts:
        return [clear_marker(token)]
    return [derive_token(token, part) for part in parts]
