"""
Lexer for raw Spanish text.

Scans a text stream into raw tokens and marks the ones the tokenizer may
split later:
- del/al                      -> Marker.CONTRACTION
- hyphen-joined words         -> Marker.COMPOUND
- verb forms ending in clitics -> Marker.VERB_PRONOUN

Orthographic normalization (brackets, ellipses, dashes, quotes) is driven
by lexer properties. Characters that cannot be tokenized are either kept
or turned into zero-length tokens, which the tokenizer drops.

Usage:
    lexer = SpanishLexer(io.StringIO("Dámelo del cajón."), {"tokenizeNLs": "true"})
    while (token := lexer.next_token()) is not None:
        ...
"""

import logging
import re
import unicodedata
from typing import Dict, Iterator, Mapping, Optional, TextIO

from ancora_split.errors import TokenizerIOError
from ancora_split.options import parse_bool
from ancora_split.raw_types import Marker, Token

logger = logging.getLogger(__name__)


# ============================================================================
# Constants
# ============================================================================

# Emitted for each line break when tokenizeNLs is on
NEWLINE_TOKEN = "*NL*"

CONTRACTIONS = frozenset(["del", "al"])

# Abbreviations that keep their trailing period
ABBREVIATIONS = frozenset([
    "sr", "sra", "srta", "sres", "dr", "dra", "ud", "uds", "vd", "vds",
    "etc", "pág", "págs", "núm", "art", "av", "avda", "ej", "vol", "cap",
    "tel", "aprox", "depto", "dpto", "admón", "prof", "profa", "lic",
])

BRACKETS = {
    "(": "=LRB=", ")": "=RRB=",
}

OTHER_BRACKETS = {
    "[": "=LSB=", "]": "=RSB=",
    "{": "=LCB=", "}": "=RCB=",
}

DASHES = frozenset(["—", "–", "―"])

ASCII_QUOTES = {
    "«": '"', "»": '"', "“": '"', "”": '"', "„": '"',
    "‘": "'", "’": "'", "‚": "'",
}

# none|first|all: which occurrences are logged; Delete|Keep: what is emitted
UNTOKENIZABLE_POLICY_PATTERN = re.compile(r"^(none|first|all)(Delete|Keep)$")

# Property name -> default value
DEFAULT_PROPERTIES: Dict[str, str] = {
    "tokenizeNLs": "false",
    "ptb3Ellipsis": "false",
    "unicodeEllipsis": "false",
    "normalizeParentheses": "false",
    "normalizeOtherBrackets": "false",
    "ptb3Dashes": "true",
    "asciiQuotes": "false",
    "untokenizable": "firstDelete",
}


# ============================================================================
# Patterns
# ============================================================================

LETTER = r"[^\W\d_]"
WORD = rf"{LETTER}+(?:[-'’]{LETTER}+)*"

CLITIC = r"(?:me|te|se|nos|os|l[aeo]s?)"

# Infinitive or gerund followed by clitics (hacerlo, diciéndole, irse)
VERB_CLITIC_PATTERN = re.compile(
    rf"^{LETTER}+(?:[aeiáéí]r|[aá]ndo|[iy][eé]ndo){CLITIC}{{1,3}}$",
    re.IGNORECASE,
)

# Imperative with the accent clitics force on it (dámelo, siéntate)
IMPERATIVE_CLITIC_PATTERN = re.compile(
    rf"^{LETTER}*[áéíóú]{LETTER}*?{CLITIC}{{1,3}}$",
    re.IGNORECASE,
)

TOKEN_PATTERN = re.compile(
    r"""
    (?P<newline>\r\n|[\n\r\u2028\u2029])
    |(?P<space>[^\S\r\n\u2028\u2029]+)
    |(?P<url>(?:https?://|www\.)[^\s<>"«»]+[^\s<>"«».,;:!?)\]])
    |(?P<email>[\w.+-]+@[\w-]+(?:\.[\w-]+)+)
    |(?P<number>[+-]?\d+(?:[.,:/]\d+)*(?:º|ª|%)?)
    |(?P<word>""" + WORD + r""")
    |(?P<ellipsis>\.\.\.|…)
    |(?P<dash>---?|[—–―])
    |(?P<punct>[^\w\s])
    |(?P<other>.)
    """,
    re.VERBOSE,
)


def is_untokenizable(char: str) -> bool:
    """True for control and format characters (soft hyphen, zero-width space...)."""
    return unicodedata.category(char) in ("Cc", "Cf", "Co", "Cn")


def classify_word(word: str) -> Marker:
    """
    Decide which split marker a word gets.

    Args:
        word: A word token as matched by the lexer

    Returns:
        The marker (Marker.NONE for ordinary words)
    """
    lowered = word.lower()
    if lowered in CONTRACTIONS:
        return Marker.CONTRACTION
    if "-" in word:
        return Marker.COMPOUND
    if len(word) > 3 and (VERB_CLITIC_PATTERN.match(word) or IMPERATIVE_CLITIC_PATTERN.match(word)):
        return Marker.VERB_PRONOUN
    return Marker.NONE


# ============================================================================
# Lexer
# ============================================================================

class SpanishLexer:
    """
    Stateful scanner over one text stream.

    Not reentrant: one lexer serves one tokenizer. Input is read line by
    line as tokens are requested.

    Args:
        reader: Text stream to tokenize
        properties: Lexer properties (see DEFAULT_PROPERTIES)
    """

    def __init__(self, reader: TextIO, properties: Optional[Mapping[str, str]] = None):
        self.reader = reader
        self.properties = dict(DEFAULT_PROPERTIES)
        for key, value in (properties or {}).items():
            if key not in DEFAULT_PROPERTIES:
                logger.warning(f"Unknown lexer option {key!r}: ignored")
                continue
            self.properties[key] = value

        self.tokenize_newlines = self._flag("tokenizeNLs")
        self.ptb3_ellipsis = self._flag("ptb3Ellipsis")
        self.unicode_ellipsis = self._flag("unicodeEllipsis")
        self.normalize_parentheses = self._flag("normalizeParentheses")
        self.normalize_other_brackets = self._flag("normalizeOtherBrackets")
        self.ptb3_dashes = self._flag("ptb3Dashes")
        self.ascii_quotes = self._flag("asciiQuotes")

        policy = UNTOKENIZABLE_POLICY_PATTERN.match(self.properties["untokenizable"])
        if policy is None:
            logger.warning(
                f"Unknown untokenizable policy {self.properties['untokenizable']!r}: using firstDelete"
            )
            policy = UNTOKENIZABLE_POLICY_PATTERN.match("firstDelete")
        self.report_untokenizable = policy.group(1)
        self.delete_untokenizable = policy.group(2) == "Delete"
        self._reported = False

        self._offset = 0
        self._tokens = self._scan()

    def _flag(self, name: str) -> bool:
        return parse_bool(self.properties[name])

    def next_token(self) -> Optional[Token]:
        """
        Get the next raw token.

        Returns:
            The next Token, or None at end of input

        Raises:
            TokenizerIOError: If reading the input fails
        """
        return next(self._tokens, None)

    def _read_lines(self) -> Iterator[str]:
        while True:
            try:
                line = self.reader.readline()
            except (OSError, UnicodeDecodeError) as e:
                raise TokenizerIOError(f"Failed to read input: {e}") from e
            if not line:
                return
            yield line

    def _scan(self) -> Iterator[Token]:
        for line in self._read_lines():
            resume = 0
            for match in TOKEN_PATTERN.finditer(line):
                # Skip matches already consumed by the previous token
                if match.start() < resume:
                    continue
                token = self._make_token(match, line)
                if token is not None:
                    resume = token.end - self._offset
                    yield token
            self._offset += len(line)

    def _make_token(self, match: re.Match, line: str) -> Optional[Token]:
        kind = match.lastgroup
        text = match.group()
        begin = self._offset + match.start()
        end = self._offset + match.end()

        if kind == "space":
            return None

        if kind == "newline":
            if not self.tokenize_newlines:
                return None
            return Token(NEWLINE_TOKEN, original_text=text, begin=begin, end=end)

        if kind == "word":
            # An abbreviation swallows a following period, but not the
            # first dot of an ellipsis
            if text.lower() in ABBREVIATIONS:
                following = TOKEN_PATTERN.match(line, match.end())
                if following is not None and following.group() == ".":
                    return Token(text + ".", begin=begin, end=end + 1)
            return Token(text, marker=classify_word(text), begin=begin, end=end)

        if kind in ("punct", "other") and is_untokenizable(text):
            return self._untokenizable(text, begin, end)

        return Token(self._normalize(kind, text), original_text=text, begin=begin, end=end)

    def _untokenizable(self, char: str, begin: int, end: int) -> Token:
        if self.report_untokenizable == "all" or (
            self.report_untokenizable == "first" and not self._reported
        ):
            action = "Deleting" if self.delete_untokenizable else "Keeping"
            logger.warning(f"Untokenizable: {char!r} (U+{ord(char):04X}, offset {begin}). {action}")
            self._reported = True

        word = "" if self.delete_untokenizable else char
        return Token(word, original_text=char, begin=begin, end=end)

    def _normalize(self, kind: str, text: str) -> str:
        if kind == "ellipsis":
            if self.ptb3_ellipsis:
                return "..."
            if self.unicode_ellipsis:
                return "…"
            return text
        if kind == "dash":
            if self.ptb3_dashes and text in DASHES:
                return "--"
            return text
        if kind == "punct":
            if self.normalize_parentheses and text in BRACKETS:
                return BRACKETS[text]
            if self.normalize_other_brackets and text in OTHER_BRACKETS:
                return OTHER_BRACKETS[text]
            if self.ascii_quotes and text in ASCII_QUOTES:
                return ASCII_QUOTES[text]
        return text
