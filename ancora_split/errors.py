"""Exceptions raised by ancora-split."""


class TokenizerError(Exception):
    """Base class for tokenizer errors."""
    pass


class TokenizerIOError(TokenizerError, IOError):
    """Raised when the input of a tokenization session cannot be read."""
    pass
