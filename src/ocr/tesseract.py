from __future__ import annotations

import csv
from collections.abc import Mapping
from typing import Any

from contracts.fragments import InvalidArgument


def _normalize_confidence(raw_conf: float | None) -> float | None:
    if raw_conf is None:
        return None
    if raw_conf < 0:
        return None
    # Tesseract confidences are 0..100; clamp into [0, 1]
    return max(0.0, min(1.0, raw_conf / 100.0))


def fragments_from_tesseract_tsv(tsv: str, *, confidence_floor: float = 0.0) -> list[dict[str, Any]]:
    """
    Parse `tesseract ... tsv` output into fragment records `{text, bbox}`.

    Only word-level rows are used. Text is passed through untouched; malformed
    geometry rows are skipped (no guessing). Confidence is only a floor.
    """

    if not (0.0 <= confidence_floor <= 1.0):
        raise InvalidArgument("confidence_floor must be within [0, 1]")

    words: list[tuple[tuple[int, int, int, int, int], dict[str, Any]]] = []
    reader = csv.DictReader(tsv.splitlines(), delimiter="\t", quoting=csv.QUOTE_NONE)

    for row in reader:
        # level meanings: 1=page,2=block,3=para,4=line,5=word
        try:
            level = int(row.get("level", "") or "0")
        except ValueError:
            continue
        if level != 5:
            continue

        text = row.get("text") or ""
        if text == "":
            continue

        try:
            order_key = (
                int(row.get("page_num", "") or "1"),
                int(row.get("block_num", "") or "0"),
                int(row.get("par_num", "") or "0"),
                int(row.get("line_num", "") or "0"),
                int(row.get("word_num", "") or "0"),
            )
            left = int(row.get("left", "") or "0")
            top = int(row.get("top", "") or "0")
            width = int(row.get("width", "") or "0")
            height = int(row.get("height", "") or "0")
        except ValueError:
            continue

        conf_str = row.get("conf", "") or ""
        try:
            raw_conf = float(conf_str) if conf_str != "" else None
        except ValueError:
            raw_conf = None
        conf = _normalize_confidence(raw_conf)
        if conf is not None and conf < confidence_floor:
            continue

        words.append(
            (
                order_key,
                {"text": text, "bbox": {"x0": left, "y0": top, "x1": left + width, "y1": top + height}},
            )
        )

    # Stable structural order; grouping re-sorts by geometry anyway.
    return [w for _, w in sorted(words, key=lambda x: x[0])]


def fragments_from_tesseract_words(payload: Any) -> list[Any]:
    """
    Pull word records out of a Tesseract.js `recognize()` result.

    Accepts the full result (`{"data": {"words": [...]}}`), its `data` object, or a
    bare word list. Each word keeps only `text` and `bbox`; anything malformed is
    passed through for `coerce_fragments` to report.
    """

    if isinstance(payload, Mapping):
        data = payload.get("data", payload)
        words = data.get("words") if isinstance(data, Mapping) else None
    else:
        words = payload
    if not isinstance(words, list):
        raise InvalidArgument("expected a Tesseract result with data.words or a list of words")

    out: list[Any] = []
    for w in words:
        if isinstance(w, Mapping):
            out.append({"text": w.get("text"), "bbox": w.get("bbox")})
        else:
            out.append(w)
    return out
