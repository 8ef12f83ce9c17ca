from __future__ import annotations

from typing import Iterable, List, Optional

import pytest

from ancora_split import lexicon
from ancora_split.raw_types import Token


class ListScanner:
    """Scanner over a fixed list of raw tokens; counts pulls."""

    def __init__(self, tokens: Iterable[Token]):
        self.tokens: List[Token] = list(tokens)
        self.pulls = 0

    def next_token(self) -> Optional[Token]:
        self.pulls += 1
        if not self.tokens:
            return None
        return self.tokens.pop(0)


@pytest.fixture
def scanner_of():
    """Build a ListScanner from (word, marker) pairs or Tokens."""
    def _make(*items) -> ListScanner:
        tokens = []
        for item in items:
            if isinstance(item, Token):
                tokens.append(item)
            elif isinstance(item, tuple):
                word, marker = item
                tokens.append(Token(word, marker=marker))
            else:
                tokens.append(Token(item))
        return ListScanner(tokens)
    return _make


@pytest.fixture(autouse=True)
def fresh_lexicon(monkeypatch):
    """Load the packaged word list for every test, whatever the environment says."""
    monkeypatch.delenv(lexicon.LEXICON_ENV_VAR, raising=False)
    lexicon.unload_lexicon()
    yield
    lexicon.unload_lexicon()

