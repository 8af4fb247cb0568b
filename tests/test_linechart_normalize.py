from __future__ import annotations

from decimal import Decimal
import unittest

import numpy as np
import torch

from linechart.adapters.normalize import detect_shape, normalize_samples, normalize_xy
from linechart.errors import ChartDataError, NoValidDataError, SeriesShapeError
from linechart.series import ScalarShape, VectorShape


class NormalizeSamplesTests(unittest.TestCase):
    def test_scalar_series_marks_missing_values_with_nan(self) -> None:
        data = normalize_samples([(0, Decimal("1.5")), (1, None), (2, 3)])
        self.assertEqual(data.shape, ScalarShape())
        self.assertEqual(data.x.tolist(), [0.0, 1.0, 2.0])
        self.assertTrue(np.array_equal(data.mask[:, 0], np.asarray([True, False, True])))
        self.assertEqual(data.y[0, 0], 1.5)

    def test_vector_series_is_two_dimensional(self) -> None:
        data = normalize_samples([(0, [1, None, 3]), (1, None), (2, (4, 5, 6))])
        self.assertEqual(data.shape, VectorShape(length=3))
        self.assertEqual(data.y.shape, (3, 3))
        self.assertTrue(np.all(np.isnan(data.y[1])))
        self.assertEqual(data.column(2).tolist()[2], 6.0)

    def test_vector_values_may_be_arrays_or_tensors(self) -> None:
        data = normalize_samples([(0, np.asarray([1.0, 2.0])), (1, torch.tensor([3.0, 4.0]))])
        self.assertEqual(data.shape, VectorShape(length=2))
        self.assertEqual(data.y.tolist(), [[1.0, 2.0], [3.0, 4.0]])

    def test_non_finite_x_hides_the_sample(self) -> None:
        data = normalize_samples([(0, 1), (float("nan"), 2), (2, 3)])
        self.assertFalse(bool(data.mask[1, 0]))

    def test_missing_x_is_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_samples([(None, 1)])

    def test_non_numeric_value_is_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_samples([(0, "high")])

    def test_integers_beyond_float_range_are_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_samples([(0, 10**400)])
        with self.assertRaises(ChartDataError):
            normalize_xy([0, 1], [1, 10**400])

    def test_malformed_sample_is_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_samples([(0, 1, 2)])

    def test_inconsistent_lengths_are_rejected(self) -> None:
        with self.assertRaises(SeriesShapeError):
            normalize_samples([(0, [1, 2]), (1, [3])])

    def test_vector_after_scalar_is_rejected(self) -> None:
        with self.assertRaises(SeriesShapeError):
            normalize_samples([(0, 1), (1, [1])])

    def test_scalar_after_vector_is_rejected(self) -> None:
        with self.assertRaises(SeriesShapeError):
            normalize_samples([(0, [1, 2]), (1, 5)])

    def test_empty_vector_is_rejected(self) -> None:
        with self.assertRaises(SeriesShapeError):
            normalize_samples([(0, [])])

    def test_empty_and_all_null_have_no_valid_data(self) -> None:
        with self.assertRaises(NoValidDataError):
            normalize_samples([])
        with self.assertRaises(NoValidDataError):
            normalize_samples([(0, None)])

    def test_detect_shape_skips_leading_nulls(self) -> None:
        self.assertEqual(detect_shape([None, None, [1, None]]), VectorShape(length=2))
        self.assertEqual(detect_shape([None, 4.0]), ScalarShape())
        self.assertIsNone(detect_shape([None, None]))


class NormalizeColumnsTests(unittest.TestCase):
    def test_one_dimensional_y_is_scalar(self) -> None:
        data = normalize_xy([0, 1, 2], [1.0, None, 2.0])
        self.assertEqual(data.shape, ScalarShape())
        self.assertEqual(data.y.shape, (3, 1))
        self.assertTrue(np.isnan(data.y[1, 0]))

    def test_torch_matrix_is_vector(self) -> None:
        data = normalize_xy(torch.arange(3), torch.ones((3, 4), dtype=torch.int64))
        self.assertEqual(data.shape, VectorShape(length=4))
        self.assertEqual(data.y.dtype, np.float64)

    def test_length_mismatch_is_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_xy([0, 1], [1.0, 2.0, 3.0])

    def test_all_nan_column_has_no_valid_data(self) -> None:
        with self.assertRaises(NoValidDataError):
            normalize_xy([0, 1], [np.nan, np.nan])

    def test_unsupported_input_type_is_rejected(self) -> None:
        with self.assertRaises(ChartDataError):
            normalize_xy("abc", [1.0, 2.0, 3.0])


if __name__ == "__main__":
    unittest.main()
