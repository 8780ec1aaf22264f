from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .rows import Row

# None marks a row rejected as noise; never the empty string.
Candidate = Optional[str]


class DropReason:
    MISSING_TEXT = "MISSING_TEXT"
    WHITESPACE = "WHITESPACE"
    BBOX_INVALID = "BBOX_INVALID"
    NOT_A_RECORD = "NOT_A_RECORD"


@dataclass(frozen=True, slots=True)
class DroppedFragment:
    index: int  # position in the caller's input sequence
    reason: str
    detail: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"index": self.index, "reason": self.reason, "detail": self.detail}


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    """
    Plain result of one pipeline call.

    `candidates` is aligned with `rows` (None for rows rejected as noise);
    `names` is the final, optionally deduplicated list.
    """

    names: list[str]
    rows: list[Row]
    candidates: list[Candidate]
    dropped_fragments: list[DroppedFragment]
    meta: dict[str, Any]

    def to_dict(self) -> dict[str, Any]:
        return {
            "names": list(self.names),
            "rows": [{**r.to_dict(), "candidate": c} for r, c in zip(self.rows, self.candidates)],
            "dropped_fragments": [d.to_dict() for d in self.dropped_fragments],
            "meta": dict(self.meta),
        }

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "ExtractionResult":
        rows_raw = d.get("rows") or []
        return ExtractionResult(
            names=[str(x) for x in (d.get("names") or [])],
            rows=[Row.from_dict(r) for r in rows_raw],
            candidates=[(None if r.get("candidate") is None else str(r["candidate"])) for r in rows_raw],
            dropped_fragments=[
                DroppedFragment(
                    index=int(x["index"]),
                    reason=str(x["reason"]),
                    detail=(None if x.get("detail") is None else str(x["detail"])),
                )
                for x in (d.get("dropped_fragments") or [])
            ],
            meta=dict(d.get("meta") or {}),
        )
