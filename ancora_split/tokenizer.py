"""
Tokenizer module for ancora-split.

SpanishTokenizer pulls raw tokens from the lexer one at a time and
rewrites the marked ones with the splitting strategies. Sub-tokens wait
in a FIFO buffer and are always handed out before the next raw token is
read, so the output keeps the order of the input.

TokenizerFactory holds an option set and builds tokenizers over readers.
"""

from collections import deque
from typing import Callable, Deque, Dict, Iterator, List, Optional, Protocol, TextIO

from ancora_split.lexer import SpanishLexer
from ancora_split.options import TokenizerOptions, parse_options
from ancora_split.raw_types import Marker, Token, clear_marker
from ancora_split.splits import Separator, split_compound, split_contraction, split_verb
from ancora_split.verb_stripper import separate_pronouns


# =============================================================================
# Constants
# =============================================================================

# Produces the tokenization of the AnCora corpus
ANCORA_OPTIONS = "ptb3Ellipsis=true,normalizeParentheses=true,ptb3Dashes=false,splitAll=true"


class Scanner(Protocol):
    """Anything that produces raw tokens: next_token() returns None at the end."""

    def next_token(self) -> Optional[Token]:
        ...


# =============================================================================
# Tokenizer
# =============================================================================

class SpanishTokenizer:
    """
    Lazy iterator over the corrected token stream.

    Not reentrant: drive one instance from a single consumer.

    Args:
        scanner: Source of raw marked tokens
        options: Options fixed for the lifetime of the tokenizer
        separator: Pronoun separation function for verb splitting

    Example:
        >>> tokenizer = factory().get_tokenizer(io.StringIO("dámelo"), "splitAll")
        >>> [t.word for t in tokenizer]
        ['da', 'me', 'lo']
    """

    def __init__(
        self,
        scanner: Scanner,
        options: Optional[TokenizerOptions] = None,
        separator: Separator = separate_pronouns,
    ):
        self.scanner = scanner
        self.options = options if options is not None else TokenizerOptions()
        self.separator = separator

        self._buffer: Optional[Deque[Token]] = deque() if self.options.split_any else None
        self._peeked: Optional[Token] = None
        self._has_peeked = False

        self._strategies: Dict[Marker, Callable[[Token], List[Token]]] = {}
        if self.options.split_compounds:
            self._strategies[Marker.COMPOUND] = split_compound
        if self.options.split_verbs:
            self._strategies[Marker.VERB_PRONOUN] = lambda t: split_verb(t, self.separator)
        if self.options.split_contractions:
            self._strategies[Marker.CONTRACTION] = split_contraction

    def get_next(self) -> Optional[Token]:
        """
        Get the next token.

        Returns:
            The next Token, or None at end of stream

        Raises:
            TokenizerIOError: If the lexer fails to read its input
        """
        if self._has_peeked:
            self._has_peeked = False
            token, self._peeked = self._peeked, None
            return token
        return self._advance()

    def _advance(self) -> Optional[Token]:
        # Sub-tokens already went through dispatch
        if self._buffer:
            return self._buffer.popleft()

        # Tokens obliterated by normalization are dropped here
        while True:
            token = self.scanner.next_token()
            if token is None:
                return None
            if token.word:
                break

        strategy = self._strategies.get(token.marker)
        if strategy is None:
            return clear_marker(token)

        parts = strategy(token)
        self._buffer.extend(parts[1:])
        return parts[0]

    def peek(self) -> Optional[Token]:
        """Return the next token without consuming it (None at end of stream)."""
        if not self._has_peeked:
            self._peeked = self._advance()
            self._has_peeked = True
        return self._peeked

    def has_next(self) -> bool:
        """Check if another token is available."""
        return self.peek() is not None

    def tokenize(self) -> List[Token]:
        """Consume the rest of the stream into a list."""
        return list(self)

    def __iter__(self) -> Iterator[Token]:
        return self

    def __next__(self) -> Token:
        token = self.get_next()
        if token is None:
            raise StopIteration
        return token


# =============================================================================
# Factory
# =============================================================================

class TokenizerFactory:
    """
    Builds SpanishTokenizer instances with a shared option set.

    Options can be added at any time; tokenizers already created keep the
    options they were created with.

    Args:
        options: Initial comma-separated option string
        separator: Pronoun separation function passed to every tokenizer
    """

    def __init__(self, options: Optional[str] = None, separator: Separator = separate_pronouns):
        self._options = parse_options(options)
        self.separator = separator

    @property
    def options(self) -> TokenizerOptions:
        """The current option set."""
        return self._options

    def set_options(self, options: str):
        """
        Apply more options; later keys override earlier ones.

        Args:
            options: Comma-separated option string
        """
        self._options = parse_options(options, self._options)

    def get_tokenizer(self, reader: TextIO, extra_options: Optional[str] = None) -> SpanishTokenizer:
        """
        Create a tokenizer over a text stream.

        Args:
            reader: Text stream to tokenize
            extra_options: Options applied to this factory before creating
                the tokenizer

        Returns:
            A new SpanishTokenizer
        """
        if extra_options:
            self.set_options(extra_options)
        options = self._options
        lexer = SpanishLexer(reader, options.lexer_properties)
        return SpanishTokenizer(lexer, options, self.separator)

    def get_iterator(self, reader: TextIO) -> Iterator[Token]:
        """Same as get_tokenizer(reader)."""
        return self.get_tokenizer(reader)


def factory() -> TokenizerFactory:
    """Get a factory with default options (no splitting)."""
    return TokenizerFactory()


def ancora_factory() -> TokenizerFactory:
    """Get a factory that replicates the AnCora tokenization."""
    tf = TokenizerFactory()
    tf.set_options(ANCORA_OPTIONS)
    return tf


# =============================================================================
# Factory Registry
# =============================================================================

FACTORIES: Dict[str, Callable[[], TokenizerFactory]] = {
    "default": factory,
    "ancora": ancora_factory,
}


def get_factory(name: str) -> TokenizerFactory:
    """
    Create a factory by preset name.

    Args:
        name: One of FACTORIES ("default", "ancora")

    Returns:
        A new TokenizerFactory

    Raises:
        KeyError: If the name is not registered
    """
    if name not in FACTORIES:
        raise KeyError(f"Unknown tokenizer preset {name!r}; known: {', '.join(sorted(FACTORIES))}")
    return FACTORIES[name]()
