#!/usr/bin/env python3
"""
LTdiag Package Test Suite Runner

This module provides the test runner for the LTdiag test collection. It loads every test
module of the package, executes the aggregated suite with the unittest text runner and
prints a summary of passed, failed, errored and skipped tests. It is the entry point for
running the complete suite without pytest.

Tests Performed:
    Test Module Discovery and Execution:
        - test_binning: Detection-year bin size, lazy classification, clamping and masking
        - test_labels: Discrete year labels and continuous range labels
        - test_legend: Legend entries, panels and the ordered legend container
        - test_visualization: Colormaps, legend renderers, layer and histogram sinks
        - test_diagnostics: End-to-end disturbance product pipeline on a lazy change image
        - test_utils: Configuration, logging, validation, monitoring and deferred fields
        - test_cli: Unified command-line interface commands and exit statuses

Expected Results:
    - Core dependencies (numpy, pandas, xarray, dask, matplotlib, yaml) available before testing
    - Summary displays total counts, failed and errored test names and the success rate
    - Exit code 0 when all tests pass, 1 when failures or errors occur

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import unittest
import sys
from pathlib import Path

package_dir = Path(__file__).parent.parent
sys.path.insert(0, str(package_dir))


def run_all_tests() -> unittest.TestResult:
    """
    Load every LTdiag test module into one suite and execute it with verbose, buffered output. Modules that fail to import are reported as warnings and skipped so that the remaining modules still run.

    Parameters:
        None

    Returns:
        unittest.TestResult: Results of the complete run.
    """
    loader = unittest.TestLoader()
    suite = unittest.TestSuite()

    test_modules = [
        'tests.test_binning',
        'tests.test_labels',
        'tests.test_legend',
        'tests.test_visualization',
        'tests.test_diagnostics',
        'tests.test_utils',
        'tests.test_cli',
    ]

    for module_name in test_modules:
        try:
            module = __import__(module_name, fromlist=[''])
            suite.addTests(loader.loadTestsFromModule(module))
        except ImportError as e:
            print(f"Warning: Could not import {module_name}: {e}")

    runner = unittest.TextTestRunner(verbosity=2, buffer=True)
    result = runner.run(suite)

    return result


def print_test_summary(result: unittest.TestResult) -> None:
    """
    Print test counts, the names of failed, errored and skipped tests, and the success rate.

    Parameters:
        result (unittest.TestResult): Results of the completed run.

    Returns:
        None
    """
    print("\n" + "="*60)
    print("TEST SUMMARY")
    print("="*60)

    total_tests = result.testsRun
    failures = len(result.failures)
    errors = len(result.errors)
    skipped = len(result.skipped)

    passed = total_tests - failures - errors - skipped

    print(f"Total tests run: {total_tests}")
    print(f"Passed: {passed}")
    print(f"Failed: {failures}")
    print(f"Errors: {errors}")
    print(f"Skipped: {skipped}")

    if failures > 0:
        print("\nFAILURES:")
        for test, _ in result.failures:
            print(f"  - {test}")

    if errors > 0:
        print("\nERRORS:")
        for test, _ in result.errors:
            print(f"  - {test}")

    if skipped > 0:
        print("\nSKIPPED:")
        for test, reason in result.skipped:
            print(f"  - {test}: {reason}")

    success_rate = (passed / total_tests) * 100 if total_tests > 0 else 0
    print(f"\nSuccess rate: {success_rate:.1f}%")

    if failures == 0 and errors == 0:
        print("All tests passed!")
    else:
        print("Some tests failed or had errors")


if __name__ == '__main__':
    print("Running LTdiag Package Tests")
    print("="*50)

    try:
        import numpy
        import pandas
        import xarray
        import dask
        import matplotlib
        import yaml
        print("Core dependencies available")
    except ImportError as e:
        print(f"Missing core dependency: {e}")
        sys.exit(1)

    print("\nStarting test execution...\n")

    result = run_all_tests()
    print_test_summary(result)

    if result.failures or result.errors:
        sys.exit(1)
    else:
        sys.exit(0)
