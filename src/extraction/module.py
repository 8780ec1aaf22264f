from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterable

from contracts.extraction import DroppedFragment, DropReason, ExtractionResult
from contracts.fragments import BBox, Fragment, InvalidArgument
from grouping.group_rows import group_into_rows
from names.dedupe import dedupe
from names.normalize import rows_to_candidates

from .config import ExtractionOptions

logger = logging.getLogger(__name__)

PIPELINE_VERSION = "name_rows_v1"


def _coerce_one(record: Any) -> Fragment:
    if isinstance(record, Fragment):
        return record
    if not isinstance(record, Mapping):
        raise TypeError(type(record).__name__)
    return Fragment(text=record.get("text"), bbox=BBox.from_any(record.get("bbox")))


def coerce_fragments(records: Iterable[Any]) -> tuple[list[Fragment], list[DroppedFragment]]:
    """
    Turn OCR records into Fragments, skipping (and reporting) the malformed ones.

    A bad individual record never aborts the batch.
    """

    fragments: list[Fragment] = []
    dropped: list[DroppedFragment] = []

    for idx, record in enumerate(records):
        if isinstance(record, Mapping) and not isinstance(record.get("text"), str):
            dropped.append(DroppedFragment(index=idx, reason=DropReason.MISSING_TEXT))
            continue
        try:
            frag = _coerce_one(record)
        except TypeError as e:
            dropped.append(DroppedFragment(index=idx, reason=DropReason.NOT_A_RECORD, detail=str(e)))
            continue
        except InvalidArgument as e:
            dropped.append(DroppedFragment(index=idx, reason=DropReason.BBOX_INVALID, detail=str(e)))
            continue

        if frag.text.strip() == "":
            dropped.append(DroppedFragment(index=idx, reason=DropReason.WHITESPACE))
            continue
        fragments.append(frag)

    if dropped:
        logger.debug("dropped %d malformed fragments", len(dropped))
    return fragments, dropped


def extract_names(records: Iterable[Any], options: ExtractionOptions | None = None) -> ExtractionResult:
    """
    Fragments -> rows -> candidates -> (optionally) fuzzy-deduplicated names.

    Raises InvalidArgument only for bad options; per-fragment and per-row problems
    are reported in the result.
    """

    if options is None:
        options = ExtractionOptions()
    options.validate()

    records = list(records)
    fragments, dropped = coerce_fragments(records)

    rows = group_into_rows(fragments, options.y_threshold)
    candidates = rows_to_candidates(rows)
    accepted = [c for c in candidates if c is not None]
    names = dedupe(accepted, options.fuzzy_threshold) if options.fuzzy_enabled else accepted

    warnings: list[dict[str, Any]] = []
    if records and not fragments:
        warnings.append(
            {"code": "NO_USABLE_FRAGMENTS", "message": "Every input fragment was dropped before grouping."}
        )
    elif rows and not accepted:
        warnings.append(
            {"code": "ALL_ROWS_REJECTED", "message": "Every row normalized to noise."}
        )

    meta: dict[str, Any] = {
        "version": PIPELINE_VERSION,
        "options": options.to_dict(),
        "counts": {
            "fragments_in": len(records),
            "fragments_used": len(fragments),
            "fragments_dropped": len(dropped),
            "rows": len(rows),
            "rows_rejected": len(candidates) - len(accepted),
            "candidates": len(accepted),
            "names": len(names),
            "fuzzy_duplicates": len(accepted) - len(names),
        },
        "warnings": warnings,
    }

    logger.info(
        "extracted %d names from %d fragments (%d rows, %d rejected)",
        len(names),
        len(records),
        len(rows),
        len(candidates) - len(accepted),
    )

    return ExtractionResult(
        names=names,
        rows=rows,
        candidates=candidates,
        dropped_fragments=dropped,
        meta=meta,
    )
