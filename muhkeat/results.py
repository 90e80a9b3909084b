"""
Result expansion and reporting.

Winning mask pairs are expanded back into the concrete words sharing each
mask, then rendered either as the plain text report or as a JSON-friendly dict.
"""

from pathlib import Path
from typing import Iterable, Sequence

from .maximizer import PairSearchResult
from .word_set import MaskPair, WordPair, WordSet


def mask_pairs_to_word_pairs(
    word_set: WordSet,
    mask_pairs: Iterable[MaskPair],
) -> list[WordPair]:
    """Cartesian product of the words behind each mask pair."""
    word_pairs: list[WordPair] = []
    for pair in mask_pairs:
        for word_a in word_set.get_words(pair.a):
            for word_b in word_set.get_words(pair.b):
                word_pairs.append(WordPair(word_a, word_b))
    return word_pairs


def format_report(
    sources: Sequence[Path | str],
    whitelist: str,
    word_set: WordSet,
    result: PairSearchResult,
    word_pairs: list[WordPair],
) -> str:
    """
    Text report: input summary, then one line per top word pair.
    """
    stats = word_set.stats()
    lines = [
        f"{'Input file':>32}: {', '.join(str(s) for s in sources)}",
        f"{'Characters handled':>32}: {whitelist}",
        f"{'Unique (case insensitive) words':>32}: {stats['words']}",
        f"{'Unique sets of chars':>32}: {stats['masks']}",
        "",
    ]
    header = f" Top pairs found (weight {result.weight})"
    lines.append(header)
    lines.append("-" * len(header))
    for pair in word_pairs:
        lines.append(f"{pair.a} {pair.b}")
    return "\n".join(lines)


def result_to_dict(
    sources: Sequence[Path | str],
    whitelist: str,
    word_set: WordSet,
    result: PairSearchResult,
    word_pairs: list[WordPair],
) -> dict:
    """Serialize to a JSON-serializable dict."""
    stats = word_set.stats()
    return {
        "sources": [str(s) for s in sources],
        "characters": whitelist,
        "alphabet": word_set.alphabet(),
        "unique_words": stats["words"],
        "unique_masks": stats["masks"],
        "weights": stats["weights"],
        "weight": result.weight,
        "pairs": [[p.a, p.b] for p in word_pairs],
    }
