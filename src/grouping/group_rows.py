from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Iterable

from contracts.fragments import Fragment, InvalidArgument
from contracts.rows import Row

logger = logging.getLogger(__name__)


def validate_y_threshold(y_threshold: float) -> float:
    if isinstance(y_threshold, bool) or not isinstance(y_threshold, (int, float)):
        raise InvalidArgument(f"y_threshold must be a number, got {type(y_threshold).__name__}")
    if not math.isfinite(y_threshold) or y_threshold <= 0:
        raise InvalidArgument(f"y_threshold must be > 0, got {y_threshold!r}")
    return float(y_threshold)


@dataclass(frozen=True, slots=True)
class _RowBuilder:
    fragments: tuple[Fragment, ...]
    cy: float

    def add(self, frag: Fragment) -> "_RowBuilder":
        n = len(self.fragments)
        return _RowBuilder(fragments=self.fragments + (frag,), cy=(self.cy * n + frag.cy) / (n + 1))


def _first_fit(builders: list[_RowBuilder], cy: float, y_threshold: float) -> int | None:
    # Earliest-created row wins; a fragment is never compared against later rows
    # once a match is found.
    for i, rb in enumerate(builders):
        if abs(rb.cy - cy) <= y_threshold:
            return i
    return None


def group_into_rows(fragments: Iterable[Fragment], y_threshold: float) -> list[Row]:
    """
    Cluster fragments into text rows by vertical proximity.

    Deterministic sweep over fragments sorted by (cy, cx); each fragment joins the
    first existing row whose running y-center is within `y_threshold`, otherwise
    it starts a new row. Running centers are the mean of all member centers.

    Returns rows ordered by final cy, each with its fragments ordered by
    ascending cx (stable on equal cx).
    """

    y_threshold = validate_y_threshold(y_threshold)

    # sorted() is stable: exact (cy, cx) ties keep caller order.
    sweep = sorted(fragments, key=lambda f: (f.cy, f.cx))
    builders: list[_RowBuilder] = []

    for frag in sweep:
        i = _first_fit(builders, frag.cy, y_threshold)
        if i is None:
            builders.append(_RowBuilder(fragments=(frag,), cy=frag.cy))
        else:
            builders[i] = builders[i].add(frag)

    # Creation order is already ascending final cy: once a row starts at cy=c, every
    # later fragment has cy >= c > (earlier row cy) + y_threshold, so earlier rows
    # never grow again.
    rows = [Row(fragments=tuple(sorted(b.fragments, key=lambda f: f.cx)), cy=b.cy) for b in builders]

    logger.debug("grouped %d fragments into %d rows (y_threshold=%s)", len(sweep), len(rows), y_threshold)
    return rows
