"""
Command line for the word pair search.

Reads a corpus, finds the pairs of words that together use the most distinct
characters, and prints them.

Usage (from repo root):
    python -m muhkeat.pair_cli -f alastalon_salissa.txt
    python -m muhkeat.pair_cli -f book.txt -c abcdefghijklmnopqrstuvwxyz --workers 4
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Iterable

from .maximizer import top_weight_and_pairs, top_weight_and_pairs_parallel
from .results import format_report, mask_pairs_to_word_pairs, result_to_dict
from .tokenizer import read_unique_words
from .word_set import WordSet

logger = logging.getLogger(__name__)

DEFAULT_SOURCE = Path("alastalon_salissa.txt")
DEFAULT_WHITELIST = "abcdefghijklmnopqrstuvwzyxåäö"


def find_pairs(
    sources: list[Path],
    whitelist: str = DEFAULT_WHITELIST,
    workers: int = 1,
    as_json: bool = False,
) -> str:
    """
    Run the whole pipeline and return the rendered output.
    workers=1 searches in this process; 0 uses one worker per CPU.
    Raises FileNotFoundError, ValueError (including AlphabetOverflowError).
    """
    words = read_unique_words(*sources, whitelist=whitelist)
    word_set = WordSet(words)

    if workers != 1:
        result = top_weight_and_pairs_parallel(word_set, workers)
    else:
        result = top_weight_and_pairs(word_set)
    word_pairs = mask_pairs_to_word_pairs(word_set, result.mask_pairs)

    if as_json:
        data = result_to_dict(sources, whitelist, word_set, result, word_pairs)
        return json.dumps(data, indent=2, ensure_ascii=False)
    return format_report(sources, whitelist, word_set, result, word_pairs)


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Find word pairs covering the most distinct characters."
    )
    parser.add_argument(
        "-f",
        "--file",
        type=Path,
        action="append",
        default=None,
        help=f"Source file, may be repeated (default: {DEFAULT_SOURCE}).",
    )
    parser.add_argument(
        "-c",
        "--chars",
        default=DEFAULT_WHITELIST,
        help="Handled characters; everything else is stripped from words.",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Worker processes for the pair search; 0 uses one per CPU (default: 1).",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the result as JSON.",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log progress to stderr.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    sources = args.file or [DEFAULT_SOURCE]
    try:
        output = find_pairs(
            sources,
            whitelist=args.chars,
            workers=args.workers,
            as_json=args.json,
        )
    except (OSError, ValueError) as e:
        logger.debug("Pair search failed", exc_info=True)
        print(e, file=sys.stderr)
        sys.exit(1)

    print(output)


if __name__ == "__main__":
    main()
