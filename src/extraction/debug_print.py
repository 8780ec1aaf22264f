from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any

from .artifacts import read_extraction_json_artifact


def _bbox_str(b: Any) -> str:
    # b is contracts.fragments.BBox
    return f"({b.x0:g},{b.y0:g})-({b.x1:g},{b.y1:g})"


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(prog="name-rows-debug")
    ap.add_argument("--result", required=True, type=Path, help="Extraction JSON artifact.")
    ap.add_argument("--max-rows", type=int, default=0, help="If >0, truncate after N rows.")
    ap.add_argument("--no-fragments", action="store_true", help="Only print one line per row.")
    args = ap.parse_args(argv)

    result = read_extraction_json_artifact(args.result)

    print(f"rows={len(result.rows)} names={len(result.names)} dropped={len(result.dropped_fragments)}")

    print("\n-- ROWS (reading order) --")
    for i, (row, candidate) in enumerate(zip(result.rows, result.candidates)):
        if args.max_rows and i >= args.max_rows:
            print(f"... (truncated at {args.max_rows})")
            break

        shown = "<rejected>" if candidate is None else candidate
        print(f"r{i:04d} cy={row.cy:.1f} bbox={_bbox_str(row.bbox)} :: {row.text!r} -> {shown}")

        if not args.no_fragments:
            for f in row.fragments:
                print(f"  - cx={f.cx:>7.1f} cy={f.cy:>7.1f} text={f.text!r}")

    if result.dropped_fragments:
        print("\n-- DROPPED FRAGMENTS --")
        for d in result.dropped_fragments:
            print(f"#{d.index} {d.reason}" + (f" ({d.detail})" if d.detail else ""))

    print("\n-- NAMES --")
    for n in result.names:
        print(n)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
