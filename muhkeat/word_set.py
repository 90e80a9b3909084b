"""
Word set: groups words by character mask and masks by weight.

The pair search only needs to look at distinct masks, of which there are far
fewer than distinct words. words_by_mask maps back from a winning mask to the
words that produce it.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator

from .masks import build_char_bits, popcount, word_mask

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MaskPair:
    """Two distinct masks; a is the mask visited first by the search."""

    a: int
    b: int


@dataclass(frozen=True)
class WordPair:
    a: str
    b: str

    def __iter__(self) -> Iterator[str]:
        return iter((self.a, self.b))


class WordSet:
    """
    Read-only index over a list of distinct words.
    - char_bits: character -> bit value
    - words_by_mask: mask -> words with that mask (input order)
    - masks_by_weight: weight -> distinct masks with that weight
    """

    def __init__(self, words: Iterable[str]) -> None:
        self.words: list[str] = list(words)
        self.char_bits: dict[str, int] = build_char_bits(self.words)

        self.words_by_mask: dict[int, list[str]] = {}
        for word in self.words:
            mask = word_mask(word, self.char_bits)
            if mask not in self.words_by_mask:
                self.words_by_mask[mask] = []
            self.words_by_mask[mask].append(word)

        self.masks_by_weight: dict[int, list[int]] = {}
        for mask in self.words_by_mask:
            weight = popcount(mask)
            if weight not in self.masks_by_weight:
                self.masks_by_weight[weight] = []
            self.masks_by_weight[weight].append(mask)

        logger.info(
            "Indexed %d words into %d masks over %d characters",
            len(self.words),
            len(self.words_by_mask),
            len(self.char_bits),
        )

    def get_words(self, mask: int) -> list[str]:
        """Words sharing mask, or empty list."""
        return self.words_by_mask.get(mask, [])

    def masks(self) -> Iterator[int]:
        return iter(self.words_by_mask)

    def weight_classes(self) -> list[tuple[int, list[int]]]:
        """(weight, masks) pairs, heaviest first."""
        return sorted(self.masks_by_weight.items(), key=lambda x: x[0], reverse=True)

    def alphabet(self) -> str:
        return "".join(self.char_bits)

    def __len__(self) -> int:
        return len(self.words_by_mask)

    def stats(self) -> dict:
        return {
            "words": len(self.words),
            "masks": len(self.words_by_mask),
            "characters": len(self.char_bits),
            "weights": {w: len(m) for w, m in self.weight_classes()},
        }
