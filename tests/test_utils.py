#!/usr/bin/env python3
"""
LTdiag Utility Module Unit Tests

This module provides unit tests for the LTdiag infrastructure classes: configuration
management (LTConfig, VisualizationParameters), logging (LTLogger), validation
(ConfigValidator, DataValidator), performance monitoring (PerformanceMonitor) and the
deferred raster handles (DeferredField, DeferredBandStack).

Tests Performed:
    TestLTConfig:
        - test_default_initialization: Default domain, palette, layout and output values
        - test_derived_parameters: n_bins, yod_visualization and layer order
        - test_invalid_configurations: Degenerate domains, empty palettes, bad choices
        - test_from_dict_normalizes: Lists and mappings become tuples and parameters
        - test_unknown_keys_rejected: Misspelled keys raise ConfigurationError
        - test_save_and_load_file: YAML round trip preserves the configuration
        - test_load_non_numeric_output_settings: Non-numeric dpi or figure_size raise ConfigurationError

    TestLTLogger:
        - test_logger_initialization: Named logger with a console handler
        - test_logger_with_file: Messages reach the log file

    TestConfigValidator / TestDataValidator:
        - palette, arity, year and summary checks

    TestPerformanceMonitor:
        - test_timer_context_manager: Durations are recorded and reported
        - test_repeated_operation_keeps_latest: Re-timing a name replaces its duration

    TestDeferredField:
        - test_from_array_is_lazy, test_mask_combination, test_band_stack

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import os
import sys
import unittest
import tempfile
import yaml
import numpy as np
import xarray as xr
from pathlib import Path
from unittest.mock import MagicMock

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))

from ltdiag.processing.deferred import DeferredBandStack, DeferredField
from ltdiag.processing.utils_config import LTConfig, VisualizationParameters
from ltdiag.processing.utils_logger import LTLogger
from ltdiag.processing.utils_monitor import PerformanceMonitor
from ltdiag.processing.utils_validator import ConfigurationError, ConfigValidator, DataValidator


class TestLTConfig(unittest.TestCase):
    """
    Tests for LTConfig dataclass behavior.

    Scope:
        Verifies default values, derived parameters, validation failures and serialization
        (save/load) using temporary YAML files.
    Test data:
        Synthetic config dictionaries and temporary files on disk.
    """

    def test_default_initialization(self) -> None:
        """
        Verify LTConfig instantiation with default values: the 1985-2025 analysis period, the seven-color detection-year palette, the default magnitude stretch, a side-by-side legend anchored bottom-left with whole-number labels, histograms of yod and mag, and PNG output.

        Parameters:
            None

        Returns:
            None
        """
        config = LTConfig()

        self.assertEqual((config.start_year, config.end_year), (1985, 2025))
        self.assertEqual(len(config.yod_palette), 7)
        self.assertEqual(config.magnitude, VisualizationParameters(
            200, 800, ('#ffffcc', '#a1dab4', '#41b6c4', '#2c7fb8', '#253494')))
        self.assertEqual(config.legend_orientation, 'side-by-side')
        self.assertEqual(config.legend_position, 'bottom-left')
        self.assertEqual(config.legend_decimals, 0)
        self.assertEqual(config.histogram_bands, ('yod', 'mag'))
        self.assertEqual(config.output_formats, ('png',))
        self.assertTrue(config.verbose)
        self.assertFalse(config.quiet)

    def test_derived_parameters(self) -> None:
        config = LTConfig()
        params = config.visualization_parameters()

        self.assertEqual(config.n_bins, 7)
        self.assertEqual(config.yod_visualization, VisualizationParameters(0, 6, config.yod_palette))
        self.assertEqual(list(params), ['mag', 'yod', 'dur', 'preval', 'rate'])
        self.assertEqual(params['rate'].min, -100)

    def test_single_color_palette(self) -> None:
        config = LTConfig(yod_palette=['#FF0000'])

        self.assertEqual(config.n_bins, 1)
        self.assertEqual((config.yod_visualization.min, config.yod_visualization.max), (0, 0))

    def test_invalid_configurations(self) -> None:
        """
        Verify that every invalid setting is rejected with ConfigurationError at construction time: an end year before the start year, a fractional year, an empty or unparsable palette, a layer whose min is not below its max, an unknown legend orientation or position, negative label decimals and an unknown histogram band.

        Parameters:
            None

        Returns:
            None
        """
        invalid = [
            {'start_year': 2025, 'end_year': 1985},
            {'start_year': 1985.5},
            {'yod_palette': []},
            {'yod_palette': ['#9400D3', 'not-a-color']},
            {'magnitude': {'min': 800, 'max': 200, 'palette': ['#ffffcc']}},
            {'rate': {'min': -100, 'max': 100, 'palette': []}},
            {'legend_orientation': 'diagonal'},
            {'legend_position': 'center'},
            {'legend_decimals': -1},
            {'histogram_bands': ['ndvi']},
            {'histogram_bins': 0},
            {'dpi': 'high'},
            {'dpi': 0},
            {'figure_size': ['wide', 4]},
            {'figure_size': 'large'},
            {'figure_size': [12, 4, 1]},
        ]

        for kwargs in invalid:
            with self.subTest(kwargs=kwargs):
                with self.assertRaises(ConfigurationError):
                    LTConfig(**kwargs)

    def test_configuration_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            LTConfig(start_year=2030, end_year=2000)

    def test_from_dict_normalizes(self) -> None:
        config = LTConfig.from_dict({
            'start_year': 2000,
            'end_year': 2020,
            'yod_palette': ['#000000', '#777777', '#ffffff'],
            'duration': {'min': 1, 'max': 10, 'palette': ['#ffffff', '#000000']},
            'figure_size': [10, 3],
        })

        self.assertEqual(config.yod_palette, ('#000000', '#777777', '#ffffff'))
        self.assertEqual(config.duration, VisualizationParameters(1, 10, ('#ffffff', '#000000')))
        self.assertEqual(config.figure_size, (10, 3))

    def test_unknown_keys_rejected(self) -> None:
        with self.assertRaises(ConfigurationError):
            LTConfig.from_dict({'start_yaer': 1990})

    def test_to_dict(self) -> None:
        config_dict = LTConfig(dpi=300).to_dict()

        self.assertEqual(config_dict['dpi'], 300)
        self.assertIsInstance(config_dict['yod_palette'], list)
        self.assertIsInstance(config_dict['magnitude']['palette'], list)

    def test_save_and_load_file(self) -> None:
        """
        Validate the YAML persistence round trip: a customized configuration written with save_to_file loads back equal to the original, and the file is plain YAML with lists rather than Python-specific tuple tags.

        Parameters:
            None

        Returns:
            None
        """
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            config_file = f.name

        try:
            config = LTConfig(start_year=1990, end_year=2020, dpi=150,
                              output_formats=['png', 'svg'], legend_orientation='stacked')
            config.save_to_file(config_file)

            with open(config_file, 'r') as f:
                raw = yaml.safe_load(f)

            loaded = LTConfig.load_from_file(config_file)

            self.assertEqual(raw['output_formats'], ['png', 'svg'])
            self.assertEqual(loaded, config)
        finally:
            os.unlink(config_file)

    def test_load_non_numeric_output_settings(self) -> None:
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            yaml.safe_dump({'dpi': '300dpi', 'figure_size': ['12in', 4]}, f)
            config_file = f.name

        try:
            with self.assertRaises(ConfigurationError):
                LTConfig.load_from_file(config_file)
        finally:
            os.unlink(config_file)

    def test_load_empty_file(self) -> None:
        with tempfile.NamedTemporaryFile(mode='w', suffix='.yaml', delete=False) as f:
            config_file = f.name

        try:
            self.assertEqual(LTConfig.load_from_file(config_file), LTConfig())
        finally:
            os.unlink(config_file)


class TestLTLogger(unittest.TestCase):
    """
    Tests for LTLogger behavior.

    Scope:
        Ensures logger attaches handlers and writes messages to files when requested.
    """

    def test_logger_initialization(self) -> None:
        logger = LTLogger("test_ltdiag_logger", verbose=True)

        self.assertEqual(logger.logger.name, "test_ltdiag_logger")
        self.assertEqual(len(logger.logger.handlers), 1)

    def test_logger_with_file(self) -> None:
        with tempfile.NamedTemporaryFile(delete=False) as f:
            log_file = f.name

        try:
            logger = LTLogger("test_ltdiag_file_logger", log_file=log_file, verbose=False)
            logger.info("Test message")
            logger.warning("Warning message")
            logger.debug("Hidden debug message")

            for handler in logger.logger.handlers:
                handler.flush()

            with open(log_file, 'r') as f:
                content = f.read()

            self.assertIn("Test message", content)
            self.assertIn("WARNING", content)
            self.assertNotIn("Hidden debug message", content)
        finally:
            for handler in list(logger.logger.handlers):
                handler.close()
            os.unlink(log_file)


class TestConfigValidator(unittest.TestCase):
    """
    Tests for ConfigValidator static methods.

    Scope:
        Years, palettes, arity and choices.
    """

    def test_validate_year(self) -> None:
        self.assertEqual(ConfigValidator.validate_year(1985.0, 'start'), 1985)

        for value in (True, '1985', 1985.5, None):
            with self.subTest(value=value):
                with self.assertRaises(ConfigurationError):
                    ConfigValidator.validate_year(value, 'start')

    def test_validate_palette(self) -> None:
        self.assertEqual(ConfigValidator.validate_palette(['red', '#00ff00']), ('red', '#00ff00'))

        with self.assertRaises(ConfigurationError):
            ConfigValidator.validate_palette('#ff0000')

        with self.assertRaises(ConfigurationError):
            ConfigValidator.validate_palette(None)

    def test_validate_arity(self) -> None:
        ConfigValidator.validate_arity(['a', 'b'], ['1', '2'])

        with self.assertRaises(ConfigurationError):
            ConfigValidator.validate_arity(['a', 'b', 'c', 'd', 'e'], ['1', '2', '3', '4'])

    def test_validate_choice(self) -> None:
        self.assertEqual(ConfigValidator.validate_choice('a', ['a', 'b'], 'option'), 'a')

        with self.assertRaises(ConfigurationError):
            ConfigValidator.validate_choice('c', ['a', 'b'], 'option')


class TestDataValidator(unittest.TestCase):
    """
    Tests for DataValidator.summarize_field.

    Scope:
        Masked arrays, non-finite values and fully invalid fields.
    """

    def test_summarize_masked(self) -> None:
        data = np.ma.MaskedArray([1.0, 2.0, np.nan, 4.0], mask=[False, False, False, True])
        summary = DataValidator.summarize_field(data)

        self.assertTrue(summary['valid'])
        self.assertEqual(summary['stats']['total_points'], 4)
        self.assertEqual(summary['stats']['valid_points'], 2)
        self.assertAlmostEqual(summary['stats']['valid_percentage'], 50.0)
        self.assertAlmostEqual(summary['stats']['mean'], 1.5)

    def test_summarize_all_invalid(self) -> None:
        summary = DataValidator.summarize_field(np.array([np.nan, np.inf]))

        self.assertFalse(summary['valid'])
        self.assertEqual(len(summary['issues']), 1)


class TestPerformanceMonitor(unittest.TestCase):
    """
    Tests for PerformanceMonitor.

    Scope:
        Duration recording, reporting through a logger and timing of failing blocks.
    """

    def test_timer_context_manager(self) -> None:
        logger = MagicMock()
        monitor = PerformanceMonitor(logger)

        with monitor.timer("operation"):
            sum(range(1000))

        summary = monitor.get_summary()
        self.assertIn("operation", summary)
        self.assertGreaterEqual(summary["operation"], 0.0)
        logger.info.assert_called_once()

    def test_timer_records_failures(self) -> None:
        monitor = PerformanceMonitor(MagicMock())

        with self.assertRaises(RuntimeError):
            with monitor.timer("failing"):
                raise RuntimeError("boom")

        self.assertIn("failing", monitor.get_summary())

    def test_repeated_operation_keeps_latest(self) -> None:
        monitor = PerformanceMonitor(MagicMock())

        with monitor.timer("stage"):
            pass
        first = monitor.durations["stage"]

        with monitor.timer("stage"):
            sum(range(10000))

        self.assertEqual(list(monitor.get_summary()), ["stage"])
        self.assertIsNot(monitor.durations["stage"], first)
        self.assertEqual(set(vars(monitor)), {"logger", "durations"})

    def test_print_summary(self) -> None:
        logger = MagicMock()
        monitor = PerformanceMonitor(logger)

        with monitor.timer("first"):
            pass
        monitor.print_summary()

        messages = [call.args[0] for call in logger.info.call_args_list]
        self.assertTrue(any(message.startswith("Total time") for message in messages))


class TestDeferredField(unittest.TestCase):
    """
    Tests for DeferredField and DeferredBandStack.

    Scope:
        Lazy construction, transforms, mask combination, evaluation and band selection.
    """

    def test_from_array_is_lazy(self) -> None:
        field = DeferredField.from_array(np.arange(6.0).reshape(2, 3), chunks=1, name='mag')

        self.assertTrue(field.is_lazy)
        self.assertEqual(field.shape, (2, 3))
        self.assertIn('lazy', repr(field))

    def test_apply_and_evaluate(self) -> None:
        field = DeferredField.from_array(np.arange(4.0).reshape(2, 2), name='mag')
        doubled = field.apply(lambda data: data * 2, name='double')
        result = doubled.evaluate()

        self.assertEqual(doubled.name, 'double')
        np.testing.assert_array_equal(result, np.array([[0.0, 2.0], [4.0, 6.0]]))
        self.assertFalse(result.mask.any())

    def test_mask_combination(self) -> None:
        field = DeferredField.from_array(np.arange(4.0).reshape(2, 2))
        masked = field.update_mask(field.data > 0).update_mask(field.data < 3)
        result = masked.evaluate()

        np.testing.assert_array_equal(result.mask, np.array([[True, False], [False, True]]))

    def test_rejects_non_dataarray(self) -> None:
        with self.assertRaises(TypeError):
            DeferredField(np.zeros((2, 2)))

        with self.assertRaises(ValueError):
            DeferredField(xr.DataArray(np.zeros((2, 2))), valid=xr.DataArray(np.ones(3, dtype=bool)))

    def test_band_stack(self) -> None:
        stack = DeferredBandStack.from_arrays({band: np.zeros((2, 2)) for band in
                                               ('yod', 'mag', 'dur', 'preval', 'rate')})

        self.assertEqual(stack.bands, ('yod', 'mag', 'dur', 'preval', 'rate'))
        self.assertEqual(stack.select('mag').name, 'mag')

        with self.assertRaises(ConfigurationError):
            stack.select('ndvi')

        with self.assertRaises(ConfigurationError):
            DeferredBandStack.from_arrays({'yod': np.zeros((2, 2))})


if __name__ == '__main__':
    unittest.main()
