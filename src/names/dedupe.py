from __future__ import annotations

import logging
from collections import defaultdict
from typing import Iterable

from rapidfuzz.distance import Levenshtein

from contracts.extraction import Candidate
from contracts.fragments import InvalidArgument

logger = logging.getLogger(__name__)

DEFAULT_FUZZY_THRESHOLD = 2


def validate_fuzzy_threshold(threshold: int) -> int:
    if isinstance(threshold, bool) or not isinstance(threshold, int):
        raise InvalidArgument(f"fuzzy threshold must be an int, got {type(threshold).__name__}")
    if threshold < 0:
        raise InvalidArgument(f"fuzzy threshold must be >= 0, got {threshold}")
    return threshold


def edit_distance(a: str, b: str) -> int:
    """Levenshtein distance with unit insert/delete/substitute costs (case-sensitive)."""
    return Levenshtein.distance(a, b)


class _SeenIndex:
    """
    Case-folded strings kept so far, bucketed by length.

    |len(a) - len(b)| is a lower bound on the edit distance, so only buckets
    within `threshold` of the probe length can hold a near-duplicate.
    """

    def __init__(self, threshold: int) -> None:
        self.threshold = threshold
        self._exact: set[str] = set()
        self._by_len: dict[int, list[str]] = defaultdict(list)

    def has_near(self, key: str) -> bool:
        if key in self._exact:
            return True
        t = self.threshold
        if t == 0:
            return False
        n = len(key)
        for length in range(max(0, n - t), n + t + 1):
            for seen in self._by_len.get(length, ()):
                # score_cutoff: rapidfuzz returns t + 1 as soon as the distance exceeds t
                if Levenshtein.distance(key, seen, score_cutoff=t) <= t:
                    return True
        return False

    def add(self, key: str) -> None:
        self._exact.add(key)
        self._by_len[len(key)].append(key)


def dedupe(candidates: Iterable[Candidate], threshold: int = DEFAULT_FUZZY_THRESHOLD) -> list[str]:
    """
    Drop near-duplicate strings, keeping the first occurrence of each cluster.

    A string is a duplicate when its case-insensitive edit distance to any string
    already kept is <= `threshold`. Threshold 0 is exact case-insensitive dedup.
    Rejected (None) candidates are skipped, so the unfiltered per-row list can be
    passed directly.
    """

    threshold = validate_fuzzy_threshold(threshold)
    index = _SeenIndex(threshold)
    out: list[str] = []
    dropped = 0

    for s in candidates:
        if not isinstance(s, str):
            continue
        key = s.casefold()
        if index.has_near(key):
            dropped += 1
            continue
        index.add(key)
        out.append(s)

    if dropped:
        logger.debug("fuzzy dedupe dropped %d near-duplicates (threshold=%d)", dropped, threshold)
    return out
