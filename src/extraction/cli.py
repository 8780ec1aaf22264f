from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any

from contracts.fragments import InvalidArgument
from grouping.config import DEFAULT_Y_THRESHOLD_PX, derive_y_threshold
from names.dedupe import DEFAULT_FUZZY_THRESHOLD
from ocr.tesseract import fragments_from_tesseract_tsv, fragments_from_tesseract_words

from .artifacts import write_extraction_json_artifact
from .config import ExtractionOptions
from .module import extract_names

logger = logging.getLogger(__name__)

INPUT_FORMATS = ("json", "tesseract-json", "tsv")


def _build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="name-extract",
        description="Rebuild name rows from OCR fragments (fragments -> rows -> names).",
    )
    p.add_argument("--input", required=True, type=Path, help="OCR output file.")
    p.add_argument("--output", required=True, type=Path, help="Path to write the extraction JSON artifact.")
    p.add_argument(
        "--input-format",
        choices=INPUT_FORMATS,
        default="json",
        help="json: list of {text, bbox}; tesseract-json: Tesseract.js result; tsv: tesseract CLI TSV.",
    )
    threshold = p.add_mutually_exclusive_group()
    threshold.add_argument("--y-threshold", type=float, default=None, help="Row tolerance in pixels.")
    threshold.add_argument(
        "--image-height",
        type=float,
        default=None,
        help="Derive the row tolerance from the rendered image height (2%%, floor 8px).",
    )
    # Fuzzy dedupe is on by default; provide a single explicit opt-out flag.
    p.add_argument("--no-fuzzy", action="store_false", dest="fuzzy_enabled", default=True)
    p.add_argument("--fuzzy-threshold", type=int, default=DEFAULT_FUZZY_THRESHOLD)
    p.add_argument("--confidence-floor", type=float, default=0.0, help="TSV input only (0..1).")
    p.add_argument("--log-level", default="WARNING", choices=("DEBUG", "INFO", "WARNING", "ERROR"))
    return p


def _load_records(path: Path, input_format: str, confidence_floor: float) -> list[Any]:
    text = path.read_text(encoding="utf-8")
    if input_format == "tsv":
        return fragments_from_tesseract_tsv(text, confidence_floor=confidence_floor)
    raw = json.loads(text)
    if input_format == "tesseract-json":
        return fragments_from_tesseract_words(raw)
    if isinstance(raw, dict):
        raw = raw.get("fragments")
    if not isinstance(raw, list):
        raise InvalidArgument("expected a JSON list of fragments or an object with a 'fragments' list")
    return raw


def main(argv: list[str] | None = None) -> int:
    args = _build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    try:
        if args.image_height is not None:
            y_threshold = derive_y_threshold(args.image_height)
        elif args.y_threshold is not None:
            y_threshold = args.y_threshold
        else:
            y_threshold = DEFAULT_Y_THRESHOLD_PX

        options = ExtractionOptions(
            y_threshold=y_threshold,
            fuzzy_enabled=args.fuzzy_enabled,
            fuzzy_threshold=args.fuzzy_threshold,
        )
        records = _load_records(args.input, args.input_format, args.confidence_floor)
    except (InvalidArgument, json.JSONDecodeError, OSError, UnicodeDecodeError) as e:
        logger.error("invalid input: %s", e)
        return 2

    result = extract_names(records, options)
    write_extraction_json_artifact(result=result, out_file=args.output)

    summary = {
        "names": len(result.names),
        "rows": len(result.rows),
        "dropped_fragments": len(result.dropped_fragments),
    }
    print(json.dumps(summary, sort_keys=True, separators=(",", ":"), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
