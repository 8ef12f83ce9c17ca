from __future__ import annotations

import ancora_split

"""
Tests: package-level API
"""


def test_tokenize_without_options():
    assert [t.word for t in ancora_split.tokenize("Vino del norte.")] == ["Vino", "del", "norte", "."]


def test_tokenize_split_all():
    tokens = ancora_split.tokenize("Dámelo del cajón.", "splitAll")
    assert [t.word for t in tokens] == ["Da", "me", "lo", "de", "el", "cajón", "."]
    assert all(t.marker is ancora_split.Marker.NONE for t in tokens)


def test_tokenize_keeps_ellipsis_after_abbreviation():
    tokens = ancora_split.tokenize("Libros, revistas, etc... y más.", "splitAll")
    assert "".join(t.word for t in tokens) == "Libros,revistas,etc...ymás."


def test_tokenize_empty_text():
    assert ancora_split.tokenize("") == []


def test_version():
    assert ancora_split.get_version() == ancora_split.__version__
