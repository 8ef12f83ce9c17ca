"""
Pronoun separation for verb forms with attached clitics.

Spanish attaches clitic pronouns to infinitives, gerunds and affirmative
imperatives: 'dámelo' -> 'da' + 'me' + 'lo'. This module finds the
clitic cluster at the end of a word and checks that the remaining stem
is a verb form known to the lexicon.

Rules:
1. One to three clitics (me, te, se, nos, os, le, les, lo, los, la, las)
2. The longest clitic cluster whose stem validates wins
3. The stem loses the written accent added by the clitics, except
   infinitives in -ír (reírse -> reír + se)
4. Letters dropped before a clitic are restored:
   vámonos -> vamos + nos, sentaos -> sentad + os
"""

from typing import List, Optional, Tuple

from ancora_split.lexicon import is_verb_form

# =============================================================================
# Clitic Configuration
# =============================================================================

CLITICS = ("nos", "les", "los", "las", "me", "te", "se", "os", "le", "lo", "la")

MAX_CLITICS = 3

# Shortest stem accepted before a clitic cluster (e.g. 'da', 'di', 'id')
MIN_STEM_LENGTH = 2

ACCENT_MAP = str.maketrans("áéíóúÁÉÍÓÚ", "aeiouAEIOU")

VOWELS = frozenset("aeiouáéíóú")


# =============================================================================
# Helpers
# =============================================================================

def strip_accents(text: str) -> str:
    """
    Remove acute accents from vowels, preserving case.

    Only á, é, í, ó, ú are affected; ñ and ü are left alone.
    """
    return text.translate(ACCENT_MAP)


def split_clitics(suffix: str, limit: int = MAX_CLITICS) -> Optional[List[str]]:
    """
    Split a string into a sequence of clitic pronouns.

    Args:
        suffix: Candidate clitic cluster (e.g. "selo")
        limit: Maximum number of clitics

    Returns:
        Ordered list of clitics (with the case of the input), or None if
        the string is not a clitic cluster
    """
    if not suffix:
        return []
    if limit == 0:
        return None

    lowered = suffix.lower()
    for clitic in CLITICS:
        if lowered.startswith(clitic):
            rest = split_clitics(suffix[len(clitic):], limit - 1)
            if rest is not None:
                return [suffix[:len(clitic)]] + rest
    return None


def normalize_stem(stem: str, first_clitic: str) -> str:
    """
    Undo the spelling changes that attaching clitics causes on a stem.

    Args:
        stem: Verb stem as found in the word
        first_clitic: The clitic directly following the stem

    Returns:
        The stem as written without clitics
    """
    if not stem.lower().endswith("ír"):
        stem = strip_accents(stem)

    lowered = stem.lower()
    first = first_clitic.lower()

    # vámonos: the final -s of the nosotros form is dropped before 'nos'
    if first == "nos" and lowered.endswith("mo"):
        stem += "S" if stem[-1].isupper() else "s"
    # sentaos: the final -d of the vosotros form is dropped before 'os'
    elif first == "os" and lowered[-1] in VOWELS and not lowered.endswith(("ar", "er", "ir")):
        stem += "D" if stem[-1].isupper() else "d"

    return stem


# =============================================================================
# Main API
# =============================================================================

def separate_pronouns(word: str) -> Optional[Tuple[str, List[str]]]:
    """
    Separate the attached clitic pronouns of a verb form.

    Args:
        word: A verb form with attached clitics

    Returns:
        (stem, clitics) with clitics in the order they appear, or None if
        the word does not decompose

    Example:
        >>> separate_pronouns("dámelo")
        ('da', ['me', 'lo'])
        >>> separate_pronouns("diciéndole")
        ('diciendo', ['le'])
        >>> separate_pronouns("casa") is None
        True
    """
    if not word:
        return None

    for start in range(MIN_STEM_LENGTH, len(word)):
        clitics = split_clitics(word[start:])
        if not clitics:
            continue

        stem = normalize_stem(word[:start], clitics[0])
        if is_verb_form(stem):
            return stem, clitics

    return None
