#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
word_index.py
-------------

Collect the distinct words of a text file into a persistent red‑black tree
and write them out in sorted order, one per line.

Typical usage
~~~~~~~~~~~~~
>>> sorted_unique_words(["the", "quick", "fox", "the", "Fox"])
['Fox', 'fox', 'quick', 'the']

From the shell::

    word-index war_and_peace.txt -o output.txt
"""

from __future__ import annotations

import argparse
import functools
import logging
import re
import sys
from typing import Iterable, Iterator, List, Optional, Sequence

from persistent_red_black_tree import PersistentRedBlackTree, empty, in_order, insert

logger = logging.getLogger(__name__)

WORD_PATTERN = re.compile(r"[a-zA-Z0-9]+")
DEFAULT_OUTPUT = "output.txt"


# ----------------------------------------------------------------------
#  Aggregation
# ----------------------------------------------------------------------
def build_index(tokens: Iterable[str]) -> PersistentRedBlackTree[str]:
    """Fold *tokens* into an initially empty tree, left to right."""
    return functools.reduce(insert, tokens, empty())


def sorted_unique_words(tokens: Iterable[str]) -> List[str]:
    return in_order(build_index(tokens))


# ----------------------------------------------------------------------
#  Text handling
# ----------------------------------------------------------------------
def tokenize(line: str) -> List[str]:
    """Return the alphanumeric runs of *line* in order of appearance."""
    return WORD_PATTERN.findall(line)


def iter_words(lines: Iterable[str], fold_case: bool = True) -> Iterator[str]:
    for line in lines:
        for word in tokenize(line):
            yield word.lower() if fold_case else word


def index_lines(
    lines: Iterable[str], fold_case: bool = True
) -> PersistentRedBlackTree[str]:
    tree = build_index(iter_words(lines, fold_case))
    logger.debug("indexed %d distinct words", len(tree))
    return tree


# ----------------------------------------------------------------------
#  File I/O
# ----------------------------------------------------------------------
def read_lines(path: str) -> List[str]:
    """
    Read *path* as UTF‑8 and return its lines without terminators.

    Undecodable bytes become U+FFFD, which the tokenizer treats as a word
    boundary.
    """
    with open(path, "r", encoding="utf-8", errors="replace") as handle:
        lines = handle.read().splitlines()
    logger.debug("read %d lines from %s", len(lines), path)
    return lines


def write_lines(path: str, words: Iterable[str]) -> None:
    """Write each word to *path* followed by a newline."""
    count = 0
    with open(path, "w", encoding="utf-8") as handle:
        for word in words:
            handle.write(word + "\n")
            count += 1
    logger.info("wrote %d words to %s", count, path)


# ----------------------------------------------------------------------
#  Command line
# ----------------------------------------------------------------------
def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="word-index",
        description="Write the distinct words of a text file in sorted order.",
    )
    parser.add_argument("input", help="Text file to index")
    parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT,
        help="File the sorted words are written to",
        dest="output",
    )
    parser.add_argument(
        "--case-sensitive",
        action="store_false",
        help="Keep the case of each word instead of lower-casing it",
        dest="fold_case",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log more (repeat for debug output)",
        dest="verbose",
    )
    return parser


def _log_level(verbose: int) -> int:
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=_log_level(args.verbose),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        lines = read_lines(args.input)
    except OSError as exc:
        logger.error("could not read input file %s: %s", args.input, exc)
        return 1
    if not lines:
        logger.error("input file is empty: %s", args.input)
        return 1

    tree = index_lines(lines, fold_case=args.fold_case)

    try:
        write_lines(args.output, in_order(tree))
    except OSError as exc:
        logger.error("could not write output file %s: %s", args.output, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
