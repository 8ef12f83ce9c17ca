"""
CLI interface for ancora-split.

Tokenizes a text file (or stdin) line by line and writes the tokens
separated by spaces, one input line per output line.

Usage:
    ancora-split corpus.txt
    ancora-split --ancora < corpus.txt
    ancora-split --encoding latin-1 --ortho-opts "asciiQuotes" corpus.txt
"""

import argparse
import logging
import sys
import time
from typing import Optional, TextIO, Tuple

from ancora_split import __version__
from ancora_split.errors import TokenizerIOError
from ancora_split.lexer import NEWLINE_TOKEN
from ancora_split.tokenizer import SpanishTokenizer, get_factory

logger = logging.getLogger(__name__)


# ============================================================================
# Output
# ============================================================================

def write_tokens(tokenizer: SpanishTokenizer, out: TextIO, lower_case: bool = False) -> Tuple[int, int]:
    """
    Write tokens space-separated, ending a line at each newline token.

    Args:
        tokenizer: Tokenizer to drain
        out: Output stream
        lower_case: Lowercase every token

    Returns:
        (number of lines, number of tokens)
    """
    n_lines = 0
    n_tokens = 0
    print_space = False

    for token in tokenizer:
        n_tokens += 1
        word = token.word
        if word == NEWLINE_TOKEN:
            n_lines += 1
            print_space = False
            out.write("\n")
        else:
            if print_space:
                out.write(" ")
            out.write(word.lower() if lower_case else word)
            print_space = True

    return n_lines, n_tokens


def open_input(path: Optional[str], encoding: str) -> TextIO:
    """Open the input file, or reopen stdin, with the given encoding."""
    if path is None or path == "-":
        # Closing the returned stream leaves the process's stdin open
        return open(sys.stdin.fileno(), encoding=encoding, closefd=False)
    return open(path, encoding=encoding)


# ============================================================================
# Main
# ============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="ancora-split",
        description="Tokenizer for raw Spanish text",
    )
    parser.add_argument(
        "input",
        nargs="?",
        help="Text file to tokenize (default: stdin)",
    )
    parser.add_argument(
        "--ancora", "-a",
        action="store_true",
        help="Tokenization style of AnCora",
    )
    parser.add_argument(
        "--lower-case", "-l",
        action="store_true",
        help="Lowercase the output",
    )
    parser.add_argument(
        "--encoding", "-e",
        default="utf-8",
        help="Input encoding (default: utf-8)",
    )
    parser.add_argument(
        "--ortho-opts", "-o",
        default="",
        help="Orthographic options for the lexer, comma-separated",
    )
    parser.add_argument(
        "--options",
        default="",
        help="Extra tokenizer options, e.g. splitVerbs,splitContractions",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Show debug logging",
    )
    parser.add_argument(
        "--version", "-v",
        action="version",
        version=f"ancora-split {__version__}",
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s - %(levelname)s - %(message)s',
    )

    tf = get_factory("ancora" if args.ancora else "default")
    tf.set_options(args.ortho_opts)
    tf.set_options(args.options)
    # Split on newlines only; no finer sentence splitting
    tf.set_options("tokenizeNLs")

    start_time = time.perf_counter()
    try:
        with open_input(args.input, args.encoding) as reader:
            n_lines, n_tokens = write_tokens(tf.get_tokenizer(reader), sys.stdout, args.lower_case)
    except (TokenizerIOError, OSError, LookupError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)

    elapsed = time.perf_counter() - start_time
    lines_per_sec = n_lines / elapsed if elapsed > 0 else 0.0
    logger.info(f"Done! Tokenized {n_lines} lines ({n_tokens} tokens) at {lines_per_sec:.2f} lines/sec")


if __name__ == "__main__":
    main()
