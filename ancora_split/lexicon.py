"""
Verb lexicon for ancora-split.

The pronoun separator only splits a clitic cluster off a word when the
remaining stem is a known verb form. Known forms are kept in a
marisa_trie.Trie holding infinitives plus irregular imperatives and
gerunds; regular imperatives and gerunds are checked by deriving their
infinitive.

The lexicon is loaded once, either from the plain word list shipped with
the package (data/verbs.txt) or from a prebuilt .trie file produced by
scripts/build_lexicon.py.
"""

import logging
import os
from pathlib import Path
from typing import Iterable, Iterator, Optional

import marisa_trie

logger = logging.getLogger(__name__)

# Environment variable overriding the default lexicon path
LEXICON_ENV_VAR = "ANCORA_SPLIT_LEXICON"


# ============================================================================
# Lexicon Loading
# ============================================================================

# Module-level singleton
_LEXICON: Optional[marisa_trie.Trie] = None


def get_lexicon_path() -> Path:
    """Get the lexicon path (environment override or packaged word list)."""
    env_path = os.environ.get(LEXICON_ENV_VAR)
    if env_path:
        return Path(os.path.expanduser(env_path))
    return Path(__file__).parent / "data" / "verbs.txt"


def read_word_list(path: Path) -> Iterator[str]:
    """
    Read a word list, one form per line.

    Blank lines and lines starting with '#' are skipped; forms are
    lowercased.
    """
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line and not line.startswith("#"):
                yield line.lower()


def build_lexicon(words: Iterable[str]) -> marisa_trie.Trie:
    """Build a lexicon trie from an iterable of verb forms."""
    return marisa_trie.Trie(words)


def is_lexicon_loaded() -> bool:
    """Check if the lexicon is loaded."""
    return _LEXICON is not None


def load_lexicon(path: Optional[Path] = None) -> marisa_trie.Trie:
    """
    Load the verb lexicon.

    A path ending in .trie is memory-mapped; anything else is read as a
    plain word list.

    Args:
        path: Path to the lexicon. Uses get_lexicon_path() if not specified.

    Returns:
        The loaded Trie

    Raises:
        FileNotFoundError: If the lexicon file doesn't exist
    """
    global _LEXICON

    if _LEXICON is not None and path is None:
        return _LEXICON

    if path is None:
        path = get_lexicon_path()
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(
            f"Verb lexicon not found at {path}. "
            "Run 'python scripts/build_lexicon.py' to build it."
        )

    if path.suffix == ".trie":
        trie = marisa_trie.Trie()
        trie.mmap(str(path))
    else:
        trie = build_lexicon(read_word_list(path))

    logger.debug(f"Loaded verb lexicon from {path} ({len(trie)} forms)")
    _LEXICON = trie
    return _LEXICON


def unload_lexicon():
    """Unload the lexicon so the next lookup reloads it."""
    global _LEXICON
    _LEXICON = None


def lexicon_size() -> int:
    """Get the number of forms in the lexicon (0 if not loaded)."""
    if _LEXICON is None:
        return 0
    return len(_LEXICON)


def contains(form: str) -> bool:
    """Check if a form is listed in the lexicon."""
    if _LEXICON is None:
        load_lexicon()
    return form.lower() in _LEXICON


# ============================================================================
# Verb Form Validation
# ============================================================================

INFINITIVE_ENDINGS = ("ar", "er", "ir", "ír")


def _any_known(*candidates: str) -> bool:
    return any(contains(c) for c in candidates)


def is_verb_form(form: str) -> bool:
    """
    Check whether a clitic-free stem is a verb form that takes clitics.

    Accepts infinitives, gerunds and imperatives. The form is expected
    without the written accent it carries when clitics are attached
    (e.g. 'da' for 'dámelo'), except for infinitives in -ír.

    Args:
        form: Candidate stem

    Returns:
        True if the form is listed or derives from a listed infinitive

    Example:
        >>> is_verb_form("comprando")   # comprar
        True
        >>> is_verb_form("fuer")
        False
    """
    form = form.lower()
    if len(form) < 2:
        return False

    if contains(form):
        return True

    if form.endswith(INFINITIVE_ENDINGS):
        return False

    # Gerunds
    if form.endswith("ando"):
        return _any_known(form[:-4] + "ar")
    if form.endswith(("iendo", "yendo")):
        stem = form[:-5]
        return _any_known(stem + "er", stem + "ir", stem + "ír")

    # Imperatives: vosotros (sentad), nosotros (sentemos, comamos)
    if form.endswith(("ad", "ed", "id")):
        return _any_known(form[:-1] + "r")
    if form.endswith("emos"):
        return _any_known(form[:-4] + "ar")
    if form.endswith("amos"):
        return _any_known(form[:-4] + "er", form[:-4] + "ir")

    # Imperatives: tú (compra, come) and usted/ustedes (compre, coma, compren)
    if form.endswith("n"):
        form = form[:-1]
    if form.endswith("a"):
        return _any_known(form + "r", form[:-1] + "er", form[:-1] + "ir")
    if form.endswith("e"):
        return _any_known(form[:-1] + "er", form[:-1] + "ir", form[:-1] + "ar")

    return False
