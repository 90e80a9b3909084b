"""Maximum joint alphabet coverage: word pairs using the most distinct characters."""

from .masks import AlphabetOverflowError, build_char_bits, popcount, word_mask
from .word_set import MaskPair, WordPair, WordSet
from .maximizer import PairSearchResult, top_weight_and_pairs, top_weight_and_pairs_parallel
from .results import mask_pairs_to_word_pairs
from .tokenizer import tokenize, read_unique_words, unique_words
