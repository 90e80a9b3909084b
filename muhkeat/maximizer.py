"""
Pairwise weight maximizer.

Finds the largest popcount(a | b) over all pairs of distinct masks, together
with every mask pair reaching it.

Masks are laid out in a fixed order (weight classes heaviest first, masks in
index order within a class) and each mask gets a position. A mask is only
paired with masks at later positions, so every unordered pair is examined
once and no mask is paired with itself. Whole weight classes are skipped when
i_weight + j_weight < top_weight: the union of two masks cannot have more
bits than the two masks together.
"""

import logging
import os
import time
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, field
from typing import Iterable

from .masks import popcount, union
from .word_set import MaskPair, WordSet

logger = logging.getLogger(__name__)

# (weight, position of first mask, masks)
WeightClass = tuple[int, int, list[int]]

# Outer-position chunks handed out per worker
CHUNKS_PER_WORKER = 4


@dataclass
class PairSearchResult:
    """Best union weight and the mask pairs reaching it. weight is 0 when no pair exists."""

    weight: int = 0
    mask_pairs: list[MaskPair] = field(default_factory=list)

    def __bool__(self) -> bool:
        return bool(self.mask_pairs)


def layout_weight_classes(word_set: WordSet) -> list[WeightClass]:
    """Assign contiguous positions to masks, heaviest weight class first."""
    classes: list[WeightClass] = []
    position = 0
    for weight, masks in word_set.weight_classes():
        classes.append((weight, position, list(masks)))
        position += len(masks)
    return classes


def _search_outer_range(
    classes: list[WeightClass],
    lo: int,
    hi: int,
    prune: bool = True,
    floor: int = 0,
) -> PairSearchResult:
    """
    Search all pairs whose first mask has a position in [lo, hi).

    floor is a weight some pair is known to reach; pairs lighter than it are
    not recorded. It must not exceed the true maximum.
    """
    top_weight = floor
    top_pairs: list[MaskPair] = []

    for i_weight, i_start, i_masks in classes:
        first = max(lo - i_start, 0)
        last = min(hi - i_start, len(i_masks))
        for k in range(first, last):
            i_mask = i_masks[k]
            position = i_start + k
            for j_weight, j_start, j_masks in classes:
                if prune and i_weight + j_weight < top_weight:
                    break  # lighter classes follow, none can win
                skip = position + 1 - j_start
                if skip >= len(j_masks):
                    continue  # class entirely visited as outer
                for j_mask in j_masks[max(skip, 0):]:
                    pair_weight = popcount(union(i_mask, j_mask))
                    if pair_weight > top_weight:
                        top_weight = pair_weight
                        top_pairs = []
                    if pair_weight == top_weight:
                        top_pairs.append(MaskPair(i_mask, j_mask))

    if not top_pairs:
        return PairSearchResult()
    return PairSearchResult(weight=top_weight, mask_pairs=top_pairs)


def seed_floor(classes: list[WeightClass]) -> int:
    """Union weight of the two heaviest masks: a lower bound on the maximum."""
    heaviest = [m for _w, _s, masks in classes for m in masks[:2]][:2]
    if len(heaviest) < 2:
        return 0
    return popcount(union(heaviest[0], heaviest[1]))


# Layout shared by the worker processes, set once per process
_worker_classes: list[WeightClass] = []


def _init_worker(classes: list[WeightClass]) -> None:
    global _worker_classes
    _worker_classes = classes


def _search_chunk(args: tuple[int, int, bool, int]) -> PairSearchResult:
    lo, hi, prune, floor = args
    return _search_outer_range(_worker_classes, lo, hi, prune, floor)


def _mask_count(classes: list[WeightClass]) -> int:
    return sum(len(masks) for _w, _s, masks in classes)


def top_weight_and_pairs(word_set: WordSet, *, prune: bool = True) -> PairSearchResult:
    """
    Find the maximum union weight over pairs of distinct masks and all pairs
    achieving it. Fewer than two distinct masks gives weight 0 and no pairs.
    prune=False evaluates every pair (same result, slower).
    """
    classes = layout_weight_classes(word_set)
    total = _mask_count(classes)
    if total < 2:
        return PairSearchResult()

    started = time.perf_counter()
    result = _search_outer_range(classes, 0, total, prune)
    logger.info(
        "Searched %d masks in %.3fs: weight %d, %d mask pairs",
        total,
        time.perf_counter() - started,
        result.weight,
        len(result.mask_pairs),
    )
    return result


def merge_results(results: Iterable[PairSearchResult]) -> PairSearchResult:
    """
    Merge partial results: the larger weight wins; on equal weight the pair
    lists are unioned in the given order without duplicates.
    """
    results = list(results)
    best = max((r.weight for r in results if r.mask_pairs), default=0)
    if best == 0:
        return PairSearchResult()
    merged: dict[MaskPair, None] = {}
    for r in results:
        if r.weight == best:
            for pair in r.mask_pairs:
                merged[pair] = None
    return PairSearchResult(weight=best, mask_pairs=list(merged))


def resolve_workers(workers: int | None) -> int:
    """
    Number of worker processes: None or 0 means one per CPU.
    Raises ValueError for a negative count.
    """
    if workers is not None and workers < 0:
        raise ValueError(f"workers must be >= 0, got {workers}")
    return workers or os.cpu_count() or 1


def top_weight_and_pairs_parallel(
    word_set: WordSet,
    workers: int | None = None,
    *,
    prune: bool = True,
) -> PairSearchResult:
    """
    Same result as top_weight_and_pairs, with the outer positions split into
    chunks searched in worker processes.

    workers=None or 0 uses one process per CPU; 1 runs in this process. The
    layout is sent to each worker once, and every chunk starts from the union
    weight of the two heaviest masks. Results are merged in chunk order.
    """
    workers = resolve_workers(workers)
    classes = layout_weight_classes(word_set)
    total = _mask_count(classes)
    if workers <= 1 or total < 2:
        return top_weight_and_pairs(word_set, prune=prune)

    floor = seed_floor(classes) if prune else 0
    n_chunks = min(total, workers * CHUNKS_PER_WORKER)
    bounds = [total * c // n_chunks for c in range(n_chunks + 1)]
    chunk_args = [
        (bounds[c], bounds[c + 1], prune, floor)
        for c in range(n_chunks)
        if bounds[c] < bounds[c + 1]
    ]

    started = time.perf_counter()
    with ProcessPoolExecutor(
        max_workers=workers,
        initializer=_init_worker,
        initargs=(classes,),
    ) as executor:
        result = merge_results(executor.map(_search_chunk, chunk_args))
    logger.info(
        "Searched %d masks with %d workers in %.3fs: weight %d, %d mask pairs",
        total,
        workers,
        time.perf_counter() - started,
        result.weight,
        len(result.mask_pairs),
    )
    return result
