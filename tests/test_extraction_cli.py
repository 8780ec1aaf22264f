from __future__ import annotations

import contextlib
import io
import json
import tempfile
import unittest
from pathlib import Path

from extraction.cli import main as extract_main
from extraction.debug_print import main as debug_main


def _rec(text, x0, y0, x1, y1) -> dict:
    return {"text": text, "bbox": {"x0": x0, "y0": y0, "x1": x1, "y1": y1}}


class TestExtractionCli(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def _run(self, main, argv: list[str]) -> tuple[int, str]:
        buf = io.StringIO()
        with contextlib.redirect_stdout(buf):
            code = main(argv)
        return code, buf.getvalue()

    def test_json_fragments_to_artifact(self) -> None:
        inp = self.root / "fragments.json"
        out = self.root / "out" / "names.json"
        inp.write_text(
            json.dumps(
                [
                    _rec("Smith", 70, 102, 130, 122),
                    _rec("John", 10, 100, 60, 120),
                    _rec("Jon", 10, 200, 50, 220),
                    _rec("Smith", 60, 200, 120, 220),
                    _rec("|||", 10, 300, 30, 320),
                ]
            ),
            encoding="utf-8",
        )

        code, stdout = self._run(extract_main, ["--input", str(inp), "--output", str(out), "--image-height", "1000"])

        self.assertEqual(code, 0)
        self.assertEqual(json.loads(stdout), {"dropped_fragments": 0, "names": 1, "rows": 3})
        payload = json.loads(out.read_text(encoding="utf-8"))
        self.assertEqual(payload["names"], ["John Smith"])
        self.assertEqual(payload["meta"]["options"], {"y_threshold": 20.0, "fuzzy_enabled": True, "fuzzy_threshold": 2})
        self.assertTrue(out.read_text(encoding="utf-8").endswith("\n"))

        code, stdout = self._run(extract_main, ["--input", str(inp), "--output", str(out), "--no-fuzzy"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out.read_text(encoding="utf-8"))["names"], ["John Smith", "Jon Smith"])

        code, stdout = self._run(debug_main, ["--result", str(out)])
        self.assertEqual(code, 0)
        self.assertIn("<rejected>", stdout)
        self.assertIn("-> John Smith", stdout)

    def test_wrapped_fragments_and_tsv_input(self) -> None:
        wrapped = self.root / "wrapped.json"
        wrapped.write_text(json.dumps({"fragments": [_rec("ada", 0, 0, 30, 20), _rec("lovelace", 40, 0, 120, 20)]}), encoding="utf-8")
        out = self.root / "wrapped.out.json"
        code, _ = self._run(extract_main, ["--input", str(wrapped), "--output", str(out)])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out.read_text(encoding="utf-8"))["names"], ["Ada Lovelace"])

        tsv = self.root / "page.tsv"
        tsv.write_text(
            "level\tpage_num\tblock_num\tpar_num\tline_num\tword_num\tleft\ttop\twidth\theight\tconf\ttext\n"
            "5\t1\t1\t1\t1\t1\t10\t10\t40\t20\t90\tgrace\n"
            "5\t1\t1\t1\t1\t2\t60\t11\t60\t20\t90\thopper\n",
            encoding="utf-8",
        )
        out = self.root / "tsv.out.json"
        code, _ = self._run(extract_main, ["--input", str(tsv), "--output", str(out), "--input-format", "tsv"])
        self.assertEqual(code, 0)
        self.assertEqual(json.loads(out.read_text(encoding="utf-8"))["names"], ["Grace Hopper"])

    def test_invalid_arguments_exit_2(self) -> None:
        inp = self.root / "fragments.json"
        inp.write_text(json.dumps([_rec("Ada", 0, 0, 30, 20)]), encoding="utf-8")
        out = self.root / "never.json"

        for extra in (["--fuzzy-threshold", "-1"], ["--y-threshold", "0"]):
            with self.subTest(extra=extra):
                code, _ = self._run(extract_main, ["--input", str(inp), "--output", str(out), *extra])
                self.assertEqual(code, 2)
        self.assertFalse(out.exists())

        bad = self.root / "bad.json"
        bad.write_text(json.dumps({"not_fragments": []}), encoding="utf-8")
        code, _ = self._run(extract_main, ["--input", str(bad), "--output", str(out)])
        self.assertEqual(code, 2)

        latin1 = self.root / "latin1.json"
        latin1.write_bytes(b"[\"Jos\xe9\"]")
        for unreadable in (self.root / "missing.json", latin1):
            with self.subTest(input=unreadable.name):
                code, _ = self._run(extract_main, ["--input", str(unreadable), "--output", str(out)])
                self.assertEqual(code, 2)
        self.assertFalse(out.exists())


if __name__ == "__main__":
    unittest.main()
