from __future__ import annotations

import unittest
from unittest import mock

import numpy as np

from linechart.errors import ChartDataError
from linechart.geometry import build_segments, contiguous_true_runs
from linechart.scales import (
    Domain,
    LinearScale,
    compute_x_domain,
    format_ticks_for_axis,
    linear_ticks,
    nice_domain,
    tick_increment,
)


class LinearScaleTests(unittest.TestCase):
    def test_inverted_range_puts_large_values_on_top(self) -> None:
        scale = LinearScale(domain=Domain(0.0, 10.0), range_start=330.0, range_stop=0.0)
        self.assertEqual(scale(np.asarray([0.0, 5.0, 10.0])).tolist(), [330.0, 165.0, 0.0])

    def test_degenerate_domain_maps_to_range_midpoint(self) -> None:
        scale = LinearScale(domain=Domain(4.0, 4.0), range_start=0.0, range_stop=530.0)
        self.assertEqual(scale.map_value(4.0), 265.0)

    def test_nice_keeps_range(self) -> None:
        scale = LinearScale(domain=Domain(-3.2, 47.0), range_start=330.0, range_stop=0.0).nice()
        self.assertEqual(scale.domain, Domain(-5.0, 50.0))
        self.assertEqual((scale.range_start, scale.range_stop), (330.0, 0.0))


class NiceDomainTests(unittest.TestCase):
    def test_extends_fractional_bounds_to_round_values(self) -> None:
        self.assertEqual(nice_domain(Domain(0.13, 9.87)), Domain(0.0, 10.0))

    def test_already_round_domain_is_unchanged(self) -> None:
        self.assertEqual(nice_domain(Domain(0.0, 100.0)), Domain(0.0, 100.0))

    def test_degenerate_domain_is_left_alone(self) -> None:
        self.assertEqual(nice_domain(Domain(2.5, 2.5)), Domain(2.5, 2.5))

    def test_unsettled_step_keeps_input_bounds(self) -> None:
        with mock.patch("linechart.scales._NICE_MAX_ITERATIONS", 1):
            self.assertEqual(nice_domain(Domain(0.13, 9.87)), Domain(0.13, 9.87))

    def test_tick_increment_encodes_sub_unit_steps_as_negative_reciprocals(self) -> None:
        self.assertEqual(tick_increment(0.0, 1.0, 10), -10.0)
        self.assertEqual(tick_increment(0.0, 100.0, 10), 10.0)
        self.assertEqual(tick_increment(0.0, 50.0, 10), 5.0)
        self.assertEqual(tick_increment(3.0, 3.0, 10), 0.0)


class TickTests(unittest.TestCase):
    def test_linear_ticks_use_round_steps(self) -> None:
        self.assertEqual(linear_ticks(0.0, 10.0, 10).tolist(), [float(v) for v in range(11)])
        self.assertEqual(linear_ticks(-5.0, 50.0, 10).tolist(), [-5.0, 0.0, 5.0, 10.0, 15.0, 20.0, 25.0, 30.0, 35.0, 40.0, 45.0, 50.0])

    def test_sub_unit_ticks_are_exact_decimals(self) -> None:
        ticks = linear_ticks(0.0, 1.0, 10)
        self.assertEqual(ticks.tolist()[:4], [0.0, 0.1, 0.2, 0.3])

    def test_reversed_bounds_give_descending_ticks(self) -> None:
        self.assertEqual(linear_ticks(10.0, 0.0, 5).tolist(), [10.0, 8.0, 6.0, 4.0, 2.0, 0.0])

    def test_equal_bounds_give_single_tick(self) -> None:
        self.assertEqual(linear_ticks(7.0, 7.0, 10).tolist(), [7.0])

    def test_tick_count_must_be_positive(self) -> None:
        with self.assertRaises(ValueError):
            linear_ticks(0.0, 1.0, 0)

    def test_sub_unit_ticks_are_exact_and_labelled_to_the_step(self) -> None:
        ticks = linear_ticks(0.0, 1.0, 10)
        self.assertEqual(
            format_ticks_for_axis(ticks),
            ["0", "0.1", "0.2", "0.3", "0.4", "0.5", "0.6", "0.7", "0.8", "0.9", "1"],
        )

    def test_negative_domain_ticks_cross_zero(self) -> None:
        ticks = linear_ticks(-50.0, 0.0, 5)
        self.assertEqual(format_ticks_for_axis(ticks), ["-50", "-40", "-30", "-20", "-10", "0"])

    def test_niced_axis_labels_keep_one_decimal(self) -> None:
        domain = nice_domain(Domain(1.0, 5.0))
        ticks = linear_ticks(domain.min, domain.max, 10)
        labels = format_ticks_for_axis(ticks)
        self.assertEqual(labels[:3], ["1", "1.5", "2"])
        self.assertEqual(labels[-1], "5")


class DomainAndSegmentTests(unittest.TestCase):
    def test_x_domain_ignores_non_finite_values(self) -> None:
        self.assertEqual(compute_x_domain(np.asarray([np.nan, 3.0, -1.0])), Domain(-1.0, 3.0))

    def test_x_domain_requires_a_finite_value(self) -> None:
        with self.assertRaises(ChartDataError):
            compute_x_domain(np.asarray([np.nan]))

    def test_contiguous_runs(self) -> None:
        mask = np.asarray([True, True, False, True, False, False, True, True, True])
        self.assertEqual(contiguous_true_runs(mask), [(0, 2), (3, 4), (6, 9)])
        self.assertEqual(contiguous_true_runs(np.zeros(3, dtype=bool)), [])

    def test_segments_break_on_nan_and_keep_source_points(self) -> None:
        x = np.asarray([0.0, 1.0, 2.0, 3.0])
        y = np.asarray([0.0, np.nan, 2.0, 4.0])
        x_scale = LinearScale(domain=Domain(0.0, 4.0), range_start=0.0, range_stop=40.0)
        y_scale = LinearScale(domain=Domain(0.0, 4.0), range_start=40.0, range_stop=0.0)
        segments = build_segments(x, y, x_scale=x_scale, y_scale=y_scale)
        self.assertEqual(len(segments), 2)
        self.assertEqual(segments[0].vertices, ((0.0, 40.0),))
        self.assertEqual(segments[1].vertices, ((20.0, 20.0), (30.0, 0.0)))
        self.assertEqual(segments[1].points, ((2.0, 2.0), (3.0, 4.0)))


if __name__ == "__main__":
    unittest.main()
