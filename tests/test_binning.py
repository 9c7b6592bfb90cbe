#!/usr/bin/env python3
"""
LTdiag Detection-Year Binning Unit Tests

This module provides unit tests for the detection-year range binner including the bin
width computation, the scalar and lazy per-pixel classification rules, bin bounds and
labels, and the derived visualization parameters of the classified layer. Synthetic
dask-backed xarray fields stand in for the change image produced by the detection
algorithm.

Tests Performed:
    TestComputeBinSize:
        - test_default_domain: 1985-2025 with 7 bins gives 6-year bins
        - test_single_year_domain: A one-year domain with one bin has width 1
        - test_invalid_inputs: Degenerate domains and bin counts raise ConfigurationError

    TestClassifyValue:
        - test_reference_years: Known years map to classes 0, 0, 1 and 6
        - test_clamp_and_mask: Over-range years clamp, under-range years and NaN are no-data
        - test_monotonic_and_in_range: Classes never decrease and stay in [0, n_bins - 1]

    TestLazyClassification:
        - test_classify_stays_lazy: classify builds a dask graph and computes nothing
        - test_evaluated_classes_and_mask: Evaluated classes and mask match the scalar rule
        - test_existing_mask_preserved: Pixels masked upstream stay masked
        - test_repeated_evaluation_identical: evaluate() is idempotent
        - test_extreme_over_range_clamped: Huge and infinite years clamp onto the last class

    TestRangeBinner:
        - test_bins_cover_domain: Every domain year falls in the bin of its class
        - test_visualization_parameters: Derived parameters span 0..n_bins - 1
        - test_palette_length_mismatch: Wrong palette length raises ConfigurationError
        - test_from_config_and_equality: Binners built from equal inputs compare equal

Testing Approach:
    unittest test cases run by pytest, with small hand-checked arrays.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import sys
import unittest
import numpy as np
import dask.array as da
from pathlib import Path

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

from ltdiag.processing.binning import Bin, RangeBinner, classify, classify_value, compute_bin_size
from ltdiag.processing.deferred import DeferredField
from ltdiag.processing.utils_config import LTConfig, VisualizationParameters
from ltdiag.processing.utils_validator import ConfigurationError

PALETTE = ['#9400D3', '#4B0082', '#0000FF', '#00FF00', '#FFFF00', '#FF7F00', '#FF0000']


class TestComputeBinSize(unittest.TestCase):
    """
    Tests for the ceiling-division bin width.

    Scope:
        Default analysis domain, single-year domain and rejected inputs.
    """

    def test_default_domain(self) -> None:
        """
        Verify the bin width of the default 1985-2025 analysis period split into seven classes. The domain spans 41 years, and ceil(41 / 7) is 6, so every bin but the last covers six years.

        Parameters:
            None

        Returns:
            None
        """
        self.assertEqual(compute_bin_size(1985, 2025, 7), 6)

    def test_single_year_domain(self) -> None:
        self.assertEqual(compute_bin_size(2000, 2000, 1), 1)
        self.assertEqual(compute_bin_size(2000, 2001, 3), 1)

    def test_invalid_inputs(self) -> None:
        """
        Verify that degenerate domains, fractional years and non-positive or boolean bin counts are rejected with ConfigurationError before any bin is computed.

        Parameters:
            None

        Returns:
            None
        """
        with self.assertRaises(ConfigurationError):
            compute_bin_size(2025, 1985, 7)

        with self.assertRaises(ConfigurationError):
            compute_bin_size(1985, 2025, 0)

        with self.assertRaises(ConfigurationError):
            compute_bin_size(1985, 2025, True)

        with self.assertRaises(ConfigurationError):
            compute_bin_size(1985.5, 2025, 7)


class TestClassifyValue(unittest.TestCase):
    """
    Tests for the scalar classification rule.

    Scope:
        Reference years of the default domain, clamping, masking and monotonicity.
    """

    def test_reference_years(self) -> None:
        """
        Verify the classes of the first year, the last year of the first bin, the first year of the second bin and the last analysis year for 1985-2025 with seven bins.

        Parameters:
            None

        Returns:
            None
        """
        self.assertEqual(classify_value(1985, 1985, 2025, 7), 0)
        self.assertEqual(classify_value(1990, 1985, 2025, 7), 0)
        self.assertEqual(classify_value(1991, 1985, 2025, 7), 1)
        self.assertEqual(classify_value(2025, 1985, 2025, 7), 6)

    def test_clamp_and_mask(self) -> None:
        """
        Verify the asymmetric handling of out-of-domain values: years after the domain are clamped onto the last class while years before it, missing values and NaN are reported as no-data.

        Parameters:
            None

        Returns:
            None
        """
        self.assertEqual(classify_value(2030, 1985, 2025, 7), 6)
        self.assertEqual(classify_value(3000, 1985, 2025, 7), 6)
        self.assertEqual(classify_value(1e20, 1985, 2025, 7), 6)
        self.assertEqual(classify_value(float('inf'), 1985, 2025, 7), 6)
        self.assertEqual(classify_value(np.inf, 1985, 2025, 7), 6)
        self.assertIsNone(classify_value(1984, 1985, 2025, 7))
        self.assertIsNone(classify_value(0, 1985, 2025, 7))
        self.assertIsNone(classify_value(float('nan'), 1985, 2025, 7))
        self.assertIsNone(classify_value(None, 1985, 2025, 7))

    def test_monotonic_and_in_range(self) -> None:
        classes = [classify_value(year, 1985, 2025, 7) for year in range(1985, 2041)]

        self.assertTrue(all(0 <= c <= 6 for c in classes))
        self.assertEqual(classes, sorted(classes))

    def test_fractional_years(self) -> None:
        self.assertEqual(classify_value(1990.9, 1985, 2025, 7), 0)
        self.assertEqual(classify_value(1991.0, 1985, 2025, 7), 1)


class TestLazyClassification(unittest.TestCase):
    """
    Tests for the deferred per-pixel classification.

    Scope:
        Laziness of the transform, evaluated classes and masks, and repeatable evaluation.
    Test data:
        A 2x4 detection-year field chunked into 1x2 dask blocks.
    """

    def setUp(self) -> None:
        self.years = np.array([
            [1984.0, 1985.0, 1990.0, 1991.0],
            [2025.0, 2030.0, np.nan, 2003.0],
        ])
        self.field = DeferredField.from_array(self.years, chunks={'y': 1, 'x': 2}, name='yod')

    def test_classify_stays_lazy(self) -> None:
        """
        Verify that classify returns a field still backed by a dask graph, together with the bin width, instead of computing the classes.

        Parameters:
            None

        Returns:
            None
        """
        classified, bin_size = classify(self.field, 1985, 2025, 7)

        self.assertEqual(bin_size, 6)
        self.assertTrue(classified.is_lazy)
        self.assertIsInstance(classified.data.data, da.Array)
        self.assertIsInstance(classified.valid.data, da.Array)
        self.assertEqual(classified.name, 'yod_class')

    def test_evaluated_classes_and_mask(self) -> None:
        """
        Verify the evaluated classified field: integer dtype, classes equal to the scalar rule on every valid pixel, and a mask exactly on the pre-domain and NaN pixels.

        Parameters:
            None

        Returns:
            None
        """
        classified, _ = classify(self.field, 1985, 2025, 7)
        result = classified.evaluate()

        self.assertTrue(np.issubdtype(result.dtype, np.integer))
        np.testing.assert_array_equal(
            result.mask,
            np.array([[True, False, False, False], [False, False, True, False]])
        )
        np.testing.assert_array_equal(
            result.compressed(),
            np.array([0, 0, 1, 6, 6, 3])
        )

        for (row, col), year in np.ndenumerate(self.years):
            expected = classify_value(year, 1985, 2025, 7)
            if expected is None:
                self.assertTrue(result.mask[row, col])
            else:
                self.assertEqual(int(result[row, col]), expected)

    def test_existing_mask_preserved(self) -> None:
        masked_upstream = self.field.update_mask(self.field.data < 2020)
        classified, _ = classify(masked_upstream, 1985, 2025, 7)
        result = classified.evaluate()

        self.assertTrue(result.mask[1, 0])
        self.assertTrue(result.mask[1, 1])
        self.assertFalse(result.mask[0, 3])

    def test_repeated_evaluation_identical(self) -> None:
        classified, _ = classify(self.field, 1985, 2025, 7)
        first = classified.evaluate()
        second = classified.evaluate()

        np.testing.assert_array_equal(first.data, second.data)
        np.testing.assert_array_equal(first.mask, second.mask)

    def test_extreme_over_range_clamped(self) -> None:
        """
        Verify that very large and infinite detection years are clamped onto the last class and stay unmasked, rather than overflowing the int64 cast.

        Parameters:
            None

        Returns:
            None
        """
        field = DeferredField.from_array(np.array([[2025.0, 1e20, np.inf]]), chunks={'y': 1, 'x': 2})
        classified, _ = classify(field, 1985, 2025, 7)
        result = classified.evaluate()

        np.testing.assert_array_equal(result.data, np.array([[6, 6, 6]]))
        self.assertFalse(result.mask.any())

    def test_invalid_configuration_raises_before_graph(self) -> None:
        with self.assertRaises(ConfigurationError):
            classify(self.field, 2025, 1985, 7)

        with self.assertRaises(ConfigurationError):
            classify(self.field, 1985, 2025, 0)


class TestRangeBinner(unittest.TestCase):
    """
    Tests for the RangeBinner helper.

    Scope:
        Bin records, label agreement with classes, derived visualization parameters and value semantics.
    """

    def setUp(self) -> None:
        self.binner = RangeBinner(1985, 2025, 7)

    def test_bins_cover_domain(self) -> None:
        """
        Verify that the bin records agree with the classification rule: for every year of the domain the bin indexed by its class contains that year, and the final bin ends at the last analysis year.

        Parameters:
            None

        Returns:
            None
        """
        bins = self.binner.bins()

        self.assertEqual(len(bins), 7)
        self.assertEqual(bins[0], Bin(index=0, lower_bound=1985, upper_bound=1990, label='1985 - 1990'))
        self.assertEqual(bins[-1].upper_bound, 2025)

        for year in range(1985, 2026):
            self.assertTrue(bins[self.binner.classify_value(year)].contains(year))

    def test_labels(self) -> None:
        labels = self.binner.labels()

        self.assertEqual(len(labels), 7)
        self.assertEqual(labels[0], '1985 - 1990')
        self.assertEqual(labels[-1], '2021 - 2025')

    def test_visualization_parameters(self) -> None:
        params = self.binner.visualization_parameters(PALETTE)

        self.assertEqual(params, VisualizationParameters(min=0, max=6, palette=tuple(PALETTE)))

    def test_single_bin_parameters(self) -> None:
        binner = RangeBinner(1985, 2025, 1)
        params = binner.visualization_parameters(['#FF0000'])

        self.assertEqual((params.min, params.max), (0, 0))
        self.assertEqual(binner.labels(), ['1985 - 2025'])

    def test_palette_length_mismatch(self) -> None:
        with self.assertRaises(ConfigurationError):
            self.binner.visualization_parameters(PALETTE[:5])

    def test_from_config_and_equality(self) -> None:
        binner = RangeBinner.from_config(LTConfig())

        self.assertEqual(binner, self.binner)
        self.assertEqual(hash(binner), hash(self.binner))
        self.assertEqual(binner.bin_size, 6)
        self.assertIn('bin_size=6', repr(binner))

    def test_classify_method(self) -> None:
        field = DeferredField.from_array(np.array([[1984, 2025]]), name='yod')
        result = self.binner.classify(field).evaluate()

        self.assertTrue(result.mask[0, 0])
        self.assertEqual(int(result[0, 1]), 6)


if __name__ == '__main__':
    unittest.main()
