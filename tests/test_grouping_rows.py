from __future__ import annotations

import math
import unittest

from contracts.fragments import BBox, Fragment, InvalidArgument
from grouping.config import derive_y_threshold
from grouping.group_rows import group_into_rows


def _frag(text: str, x0: float, y0: float, x1: float, y1: float) -> Fragment:
    return Fragment(text=text, bbox=BBox(x0, y0, x1, y1))


def _at(text: str, cx: float, cy: float, half_w: float = 10.0, half_h: float = 5.0) -> Fragment:
    return _frag(text, cx - half_w, cy - half_h, cx + half_w, cy + half_h)


def _texts(rows) -> list[list[str]]:
    return [[f.text for f in r.fragments] for r in rows]


class TestGroupIntoRows(unittest.TestCase):
    def test_same_line_fragments_form_one_row_left_to_right(self) -> None:
        john = _frag("John", 10, 100, 60, 120)
        smith = _frag("Smith", 70, 102, 130, 122)

        rows = group_into_rows([smith, john], 10)

        self.assertEqual(_texts(rows), [["John", "Smith"]])
        self.assertAlmostEqual(rows[0].cy, 111.0)
        self.assertEqual(rows[0].bbox, BBox(10, 100, 130, 122))
        self.assertEqual(rows[0].text, "John Smith")

    def test_rows_follow_vertical_reading_order(self) -> None:
        bob = _frag("Bob", 10, 90, 50, 110)  # cy=100
        alice = _frag("Alice", 10, 0, 60, 20)  # cy=10

        rows = group_into_rows([bob, alice], 10)

        self.assertEqual(_texts(rows), [["Alice"], ["Bob"]])

    def test_empty_and_single_inputs(self) -> None:
        self.assertEqual(group_into_rows([], 10), [])

        only = _at("Solo", 50, 40)
        rows = group_into_rows([only], 10)
        self.assertEqual(len(rows), 1)
        self.assertEqual(rows[0].fragments, (only,))
        self.assertEqual(rows[0].cy, 40.0)

    def test_degenerate_threshold_fails_fast(self) -> None:
        frags = [_at("A", 10, 10)]
        for bad in (0, -1, -0.5, math.nan, math.inf, "10", None, True):
            with self.subTest(threshold=bad):
                with self.assertRaises(InvalidArgument):
                    group_into_rows(frags, bad)

    def test_running_center_is_mean_of_all_members(self) -> None:
        # mean(100, 110) = 105 keeps 112 within 10px; the first member alone would not.
        rows = group_into_rows([_at("a", 10, 100), _at("b", 20, 110), _at("c", 30, 112)], 10)
        self.assertEqual(len(rows), 1)
        self.assertAlmostEqual(rows[0].cy, (100 + 110 + 112) / 3)

        # mean(100, 110) = 105 puts 119 out of reach; the last member alone would not.
        rows = group_into_rows([_at("a", 10, 100), _at("b", 20, 110), _at("c", 30, 119)], 10)
        self.assertEqual(_texts(rows), [["a", "b"], ["c"]])

    def test_threshold_boundary_is_inclusive(self) -> None:
        rows = group_into_rows([_at("a", 10, 100), _at("b", 40, 110)], 10)
        self.assertEqual(len(rows), 1)
        rows = group_into_rows([_at("a", 10, 100), _at("b", 40, 110.5)], 10)
        self.assertEqual(len(rows), 2)

    def test_fragments_within_row_sorted_by_x_center(self) -> None:
        right_high = _at("right", 300, 100)
        left_low = _at("left", 50, 104)

        rows = group_into_rows([right_high, left_low], 10)

        self.assertEqual(_texts(rows), [["left", "right"]])

    def test_equal_centers_keep_input_order(self) -> None:
        a = _frag("a", 0, 0, 20, 10)
        b = _frag("b", 0, 0, 20, 10)

        self.assertEqual(_texts(group_into_rows([a, b], 5)), [["a", "b"]])
        self.assertEqual(_texts(group_into_rows([b, a], 5)), [["b", "a"]])

    def test_ordering_invariants_and_determinism(self) -> None:
        frags = [
            _at("w1", 200, 301),
            _at("w2", 40, 52),
            _at("w3", 120, 49),
            _at("w4", 60, 298),
            _at("w5", 10, 175),
            _at("w6", 90, 180),
            _at("w7", 300, 55),
        ]

        r1 = group_into_rows(frags, 8)
        r2 = group_into_rows(list(frags), 8)
        self.assertEqual(r1, r2)

        self.assertEqual(_texts(r1), [["w2", "w3", "w7"], ["w5", "w6"], ["w4", "w1"]])
        cys = [r.cy for r in r1]
        self.assertEqual(cys, sorted(cys))
        for r in r1:
            cxs = [f.cx for f in r.fragments]
            self.assertEqual(cxs, sorted(cxs))

    def test_larger_threshold_never_adds_rows(self) -> None:
        cys = [100, 102, 104, 140, 141, 180, 183]
        frags = [_at(f"t{i}", 20 + 10 * i, cy) for i, cy in enumerate(cys)]

        counts = [len(group_into_rows(frags, t)) for t in (1, 2, 4, 8, 16, 32, 64, 128)]

        self.assertEqual(counts, [6, 5, 3, 3, 3, 3, 1, 1])
        self.assertEqual(counts, sorted(counts, reverse=True))

    def test_input_is_not_mutated(self) -> None:
        frags = [_at("b", 50, 100), _at("a", 10, 100)]
        before = list(frags)
        group_into_rows(frags, 10)
        self.assertEqual(frags, before)


class TestDeriveYThreshold(unittest.TestCase):
    def test_two_percent_of_height_with_floor(self) -> None:
        self.assertEqual(derive_y_threshold(100), 8.0)
        self.assertEqual(derive_y_threshold(1000), 20.0)
        self.assertEqual(derive_y_threshold(425), 9.0)  # 8.5 rounds half-up
        self.assertEqual(derive_y_threshold(1000, ratio=0.05, floor=4), 50.0)

    def test_rejects_non_positive_inputs(self) -> None:
        for kwargs in ({"image_height": 0}, {"image_height": -10}, {"image_height": 100, "ratio": 0}, {"image_height": 100, "floor": -1}):
            with self.subTest(**kwargs):
                with self.assertRaises(InvalidArgument):
                    derive_y_threshold(**kwargs)


if __name__ == "__main__":
    unittest.main()
