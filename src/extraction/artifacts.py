from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from contracts.extraction import ExtractionResult


def serialize_extraction_result(result: ExtractionResult) -> str:
    """
    Stable JSON serialization (sorted keys, UTF-8 text, trailing newline).
    """

    payload: dict[str, Any] = result.to_dict()
    return json.dumps(payload, ensure_ascii=False, sort_keys=True, indent=2) + "\n"


def write_extraction_json_artifact(*, result: ExtractionResult, out_file: Path) -> None:
    out_file.parent.mkdir(parents=True, exist_ok=True)
    out_file.write_text(serialize_extraction_result(result), encoding="utf-8")


def read_extraction_json_artifact(path: Path) -> ExtractionResult:
    return ExtractionResult.from_dict(json.loads(path.read_text(encoding="utf-8")))
