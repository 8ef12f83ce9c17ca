#!/usr/bin/env python3
"""
Lexicon Builder for ancora-split.

This script builds the binary verb lexicon used by the pronoun separator.
It collects verb forms from AnCora XML files (infinitive lemmas plus
gerund and imperative word forms) and from plain word lists, and saves
them to a marisa_trie.Trie file that ancora_split.lexicon memory-maps.

Usage:
    python scripts/build_lexicon.py --ancora path/to/ancora/ --output verbs.trie
    python scripts/build_lexicon.py --words extra_verbs.txt

Requirements:
    pip install ancora-split[build]  # Installs lxml for reading AnCora
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, Iterator, List, Set

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import marisa_trie
from lxml import etree

from ancora_split.lexicon import read_word_list
from ancora_split.verb_stripper import strip_accents

logger = logging.getLogger(__name__)


# ============================================================================
# Paths
# ============================================================================

DEFAULT_WORDS = Path(__file__).parent.parent / "ancora_split" / "data" / "verbs.txt"
DEFAULT_OUTPUT = Path(__file__).parent.parent / "ancora_split" / "data" / "verbs.trie"

# AnCora EAGLES tags: v + type + mood; mood G = gerund, M = imperative,
# N = infinitive
KEPT_MOODS = frozenset("gmn")


# ============================================================================
# AnCora Parsing
# ============================================================================

def normalize_form(form: str) -> str:
    """Lowercase a form and drop its accents, except infinitives in -ír."""
    form = form.lower()
    if form.endswith("ír"):
        return form
    return strip_accents(form)


def collect_ancora_forms(xml_path: Path) -> Iterator[str]:
    """
    Collect verb forms from one AnCora XML file.

    Every verb element contributes its lemma (an infinitive); gerunds,
    imperatives and infinitives also contribute their word form.

    Args:
        xml_path: Path to an AnCora .xml file

    Yields:
        Normalized verb forms (may repeat)
    """
    context = etree.iterparse(
        str(xml_path),
        events=('end',),
        recover=True,
        no_network=True,
    )

    for event, elem in context:
        pos = (elem.get('pos') or '').lower()
        if pos.startswith('v'):
            lemma = elem.get('lem')
            if lemma and '_' not in lemma:
                yield normalize_form(lemma)

            word = elem.get('wd')
            if word and len(pos) > 2 and pos[2] in KEPT_MOODS and '_' not in word:
                yield normalize_form(word)
        elem.clear()


def find_xml_files(paths: Iterable[Path]) -> List[Path]:
    """Expand directories into the .xml files they contain."""
    files = []
    for path in paths:
        if path.is_dir():
            files.extend(sorted(path.rglob('*.xml')))
        else:
            files.append(path)
    return files


# ============================================================================
# Lexicon Building
# ============================================================================

def build_lexicon_file(forms: Set[str], output_path: Path) -> marisa_trie.Trie:
    """Build and save the binary lexicon."""
    logger.info(f"Building marisa_trie.Trie from {len(forms)} forms...")

    trie = marisa_trie.Trie(forms)

    output_path.parent.mkdir(parents=True, exist_ok=True)
    trie.save(str(output_path))

    file_size = output_path.stat().st_size / 1024
    logger.info(f"Saved lexicon to {output_path} ({file_size:.1f} KB)")

    return trie


# ============================================================================
# Main
# ============================================================================

def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Build the ancora-split verb lexicon"
    )
    parser.add_argument(
        '--ancora', '-a',
        type=Path,
        nargs='*',
        default=[],
        help="AnCora XML files or directories"
    )
    parser.add_argument(
        '--words', '-w',
        type=Path,
        nargs='*',
        default=[DEFAULT_WORDS],
        help=f"Plain word lists, one form per line (default: {DEFAULT_WORDS})"
    )
    parser.add_argument(
        '--output', '-o',
        type=Path,
        default=DEFAULT_OUTPUT,
        help=f"Output lexicon path (default: {DEFAULT_OUTPUT})"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(levelname)s - %(message)s')

    start_time = time.time()
    forms: Set[str] = set()

    for words_path in args.words:
        if not words_path.exists():
            logger.error(f"Word list not found: {words_path}")
            sys.exit(1)
        before = len(forms)
        forms.update(read_word_list(words_path))
        logger.info(f"Read {len(forms) - before} new forms from {words_path}")

    xml_files = find_xml_files(args.ancora)
    for count, xml_path in enumerate(xml_files, 1):
        forms.update(collect_ancora_forms(xml_path))
        if count % 100 == 0:
            logger.info(f"  Parsed {count}/{len(xml_files)} AnCora files...")
    if xml_files:
        logger.info(f"Parsed {len(xml_files)} AnCora files")

    if not forms:
        logger.error("No verb forms collected")
        sys.exit(1)

    build_lexicon_file(forms, args.output)

    elapsed = time.time() - start_time
    logger.info(f"Build completed in {elapsed:.1f} seconds")


if __name__ == '__main__':
    main()
