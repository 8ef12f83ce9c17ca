from __future__ import annotations

import io
import logging

import pytest

from ancora_split.errors import TokenizerIOError
from ancora_split.lexer import NEWLINE_TOKEN, SpanishLexer, classify_word
from ancora_split.raw_types import Marker

"""
Tests: lexer.py
"""


def scan(text, **properties):
    lexer = SpanishLexer(io.StringIO(text), properties)
    tokens = []
    while (token := lexer.next_token()) is not None:
        tokens.append(token)
    return tokens


def words(tokens):
    return [t.word for t in tokens]


# ─────────────────────────────────────────────────────────────────────────────
# Markers
# ─────────────────────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "word,marker",
    [
        ("del", Marker.CONTRACTION),
        ("Al", Marker.CONTRACTION),
        ("DEL", Marker.CONTRACTION),
        ("punto-final", Marker.COMPOUND),
        ("hacerlo", Marker.VERB_PRONOUN),
        ("levantarse", Marker.VERB_PRONOUN),
        ("diciéndole", Marker.VERB_PRONOUN),
        ("dámelo", Marker.VERB_PRONOUN),
        ("siéntate", Marker.VERB_PRONOUN),
        ("casa", Marker.NONE),
        ("cajón", Marker.NONE),
        ("dale", Marker.NONE),       # no accent, no infinitive: left alone
        ("delta", Marker.NONE),
    ],
)
def test_classify_word(word, marker):
    assert classify_word(word) is marker


def test_scan_marks_tokens():
    tokens = scan("Vino del norte a hacerlo bien-hecho")
    assert [(t.word, t.marker) for t in tokens] == [
        ("Vino", Marker.NONE),
        ("del", Marker.CONTRACTION),
        ("norte", Marker.NONE),
        ("a", Marker.NONE),
        ("hacerlo", Marker.VERB_PRONOUN),
        ("bien-hecho", Marker.COMPOUND),
    ]


# ─────────────────────────────────────────────────────────────────────────────
# Basic tokenization
# ─────────────────────────────────────────────────────────────────────────────

def test_punctuation_numbers_and_abbreviations():
    tokens = scan("¿Cuánto cuesta? 1.250,50 euros, Sr. Pérez.")
    assert words(tokens) == [
        "¿", "Cuánto", "cuesta", "?", "1.250,50", "euros", ",", "Sr.", "Pérez", ".",
    ]


def test_urls_and_emails():
    tokens = scan("Visita https://example.com/a?b=1. Escribe a ana@correo.es")
    assert words(tokens) == [
        "Visita", "https://example.com/a?b=1", ".", "Escribe", "a", "ana@correo.es",
    ]


@pytest.mark.parametrize(
    "text,expected",
    [
        ("etc... y", ["etc", "...", "y"]),
        ("etc. y", ["etc.", "y"]),
        ("etc.. y", ["etc.", ".", "y"]),
        ("(etc.)", ["(", "etc.", ")"]),
        ("Sr.…", ["Sr.", "…"]),
    ],
)
def test_abbreviation_period(text, expected):
    assert words(scan(text)) == expected


@pytest.mark.parametrize(
    "text",
    [
        "Vino el Sr. Pérez, etc... y se fue.",
        "Págs. 3-5 (etc.).. fin",
        "¡Hola! ¿Qué tal?, dijo: «bien»; 3,5% - Dra.... ok",
        "Ud.!! etc.? Avda.) núm... [vol.]",
        "a@b.es https://x.es/p. … ...",
    ],
)
def test_tokens_rebuild_the_input(text):
    assert "".join(words(scan(text))) == "".join(text.split())


def test_offsets_span_lines():
    tokens = scan("ab cd\nef")
    assert [(t.word, t.begin, t.end) for t in tokens] == [
        ("ab", 0, 2), ("cd", 3, 5), ("ef", 6, 8),
    ]


def test_newlines_skipped_by_default():
    assert words(scan("uno\ndos\r\ntres")) == ["uno", "dos", "tres"]


def test_tokenize_newlines():
    tokens = scan("uno\ndos\r\n", tokenizeNLs="true")
    assert words(tokens) == ["uno", NEWLINE_TOKEN, "dos", NEWLINE_TOKEN]
    assert tokens[3].original_text == "\r\n"


# ─────────────────────────────────────────────────────────────────────────────
# Normalization
# ─────────────────────────────────────────────────────────────────────────────

def test_parentheses_kept_by_default():
    assert words(scan("(sí)")) == ["(", "sí", ")"]


def test_normalize_parentheses():
    tokens = scan("(sí) [no]", normalizeParentheses="true")
    assert words(tokens) == ["=LRB=", "sí", "=RRB=", "[", "no", "]"]
    assert tokens[0].original_text == "("


def test_normalize_other_brackets():
    assert words(scan("[no]{x}", normalizeOtherBrackets="true")) == [
        "=LSB=", "no", "=RSB=", "=LCB=", "x", "=RCB=",
    ]


@pytest.mark.parametrize(
    "properties,expected",
    [
        ({}, ["…", "..."]),
        ({"ptb3Ellipsis": "true"}, ["...", "..."]),
        ({"unicodeEllipsis": "true"}, ["…", "…"]),
    ],
)
def test_ellipsis(properties, expected):
    assert words(scan("… ...", **properties)) == expected


def test_dashes():
    assert words(scan("a — b")) == ["a", "--", "b"]
    assert words(scan("a — b", ptb3Dashes="false")) == ["a", "—", "b"]


def test_ascii_quotes():
    assert words(scan("«hola»", asciiQuotes="true")) == ['"', "hola", '"']
    assert words(scan("«hola»")) == ["«", "hola", "»"]


# ─────────────────────────────────────────────────────────────────────────────
# Untokenizable characters
# ─────────────────────────────────────────────────────────────────────────────

def test_untokenizable_deleted_to_zero_length(caplog):
    with caplog.at_level(logging.WARNING, logger="ancora_split.lexer"):
        tokens = scan("a\u200bb\u00adc")
    assert words(tokens) == ["a", "", "b", "", "c"]
    assert tokens[1].original_text == "\u200b"
    # firstDelete reports only the first one
    assert len([r for r in caplog.records if "Untokenizable" in r.getMessage()]) == 1


def test_untokenizable_all_keep(caplog):
    with caplog.at_level(logging.WARNING, logger="ancora_split.lexer"):
        tokens = scan("a\u200bb\u200bc", untokenizable="allKeep")
    assert words(tokens) == ["a", "\u200b", "b", "\u200b", "c"]
    assert len([r for r in caplog.records if "Keeping" in r.getMessage()]) == 2


def test_untokenizable_none_delete_is_silent(caplog):
    with caplog.at_level(logging.WARNING, logger="ancora_split.lexer"):
        scan("a\u200bb", untokenizable="noneDelete")
    assert not caplog.records


def test_bad_untokenizable_policy_falls_back(caplog):
    with caplog.at_level(logging.WARNING, logger="ancora_split.lexer"):
        tokens = scan("a\u200b", untokenizable="sometimes")
    assert words(tokens) == ["a", ""]
    assert any("sometimes" in r.getMessage() for r in caplog.records)


def test_unknown_property_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="ancora_split.lexer"):
        assert words(scan("hola", frobnicate="true")) == ["hola"]
    assert any("frobnicate" in r.getMessage() for r in caplog.records)


# ─────────────────────────────────────────────────────────────────────────────
# Errors and laziness
# ─────────────────────────────────────────────────────────────────────────────

class BrokenReader:
    def __init__(self, lines):
        self.lines = list(lines)

    def readline(self):
        if self.lines:
            return self.lines.pop(0)
        raise OSError("disk on fire")


def test_read_error_is_wrapped():
    lexer = SpanishLexer(BrokenReader(["hola\n"]))
    assert lexer.next_token().word == "hola"
    with pytest.raises(TokenizerIOError) as excinfo:
        lexer.next_token()
    assert isinstance(excinfo.value.__cause__, OSError)


def test_decode_error_is_wrapped():
    reader = io.TextIOWrapper(io.BytesIO(b"caf\xe9\n"), encoding="utf-8")
    with pytest.raises(TokenizerIOError):
        SpanishLexer(reader).next_token()


def test_reads_lazily():
    reader = BrokenReader(["uno dos\n"])
    lexer = SpanishLexer(reader)
    assert lexer.next_token().word == "uno"
    assert lexer.next_token().word == "dos"
    assert reader.lines == []
