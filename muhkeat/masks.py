"""
Character masks for words.

Every distinct character seen in the corpus gets one bit of a 64-bit mask.
A word's mask is the OR of the bits of its characters, so words using the
same set of characters share a mask regardless of order or repetition.
The weight of a mask is its popcount: the number of distinct characters.
"""

import logging
from typing import Iterable

logger = logging.getLogger(__name__)

# Masks are treated as unsigned 64-bit integers
MASK_WIDTH = 64

_M1 = 0x5555555555555555  # 0101...
_M2 = 0x3333333333333333  # 0011...
_M4 = 0x0F0F0F0F0F0F0F0F  # 00001111...
_ALL_ONES = (1 << MASK_WIDTH) - 1


class AlphabetOverflowError(ValueError):
    """Raised when the corpus uses more characters than a mask can hold."""

    def __init__(self, char_count: int, width: int = MASK_WIDTH) -> None:
        super().__init__(
            f"{char_count} distinct characters do not fit in a {width}-bit mask"
        )
        self.char_count = char_count
        self.width = width


def unique_chars(words: Iterable[str]) -> list[str]:
    """Distinct characters across all words, in order of first appearance."""
    seen: dict[str, None] = {}
    for word in words:
        for ch in word:
            if ch not in seen:
                seen[ch] = None
    return list(seen)


def build_char_bits(words: Iterable[str], width: int = MASK_WIDTH) -> dict[str, int]:
    """
    Map each distinct character to a single-bit mask value.

    Bits are assigned 0..N-1 in order of first appearance.
    Raises AlphabetOverflowError if N exceeds the mask width.
    """
    chars = unique_chars(words)
    if len(chars) > width:
        raise AlphabetOverflowError(len(chars), width)
    logger.debug("Assigned %d characters to mask bits", len(chars))
    return {ch: 1 << i for i, ch in enumerate(chars)}


def word_mask(word: str, char_bits: dict[str, int]) -> int:
    """Mask of the distinct characters in word."""
    mask = 0
    for ch in word:
        mask |= char_bits[ch]
    return mask


def union(a: int, b: int) -> int:
    return a | b


def popcount(mask: int) -> int:
    """
    Number of set bits in a 64-bit mask (Hamming weight, SWAR reduction).
    """
    x = mask & _ALL_ONES
    x = x - ((x >> 1) & _M1)
    x = (x & _M2) + ((x >> 2) & _M2)
    x = (x + (x >> 4)) & _M4
    x = x + (x >> 8)
    x = x + (x >> 16)
    x = x + (x >> 32)
    return x & 0x7F
