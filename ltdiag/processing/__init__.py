#!/usr/bin/env python3

"""
LTdiag Processing Package

This package provides the numeric and configuration core of LTdiag including
deferred raster fields, detection-year range binning, legend label generation,
configuration management, validation, logging and performance monitoring.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

from .deferred import DeferredField, DeferredBandStack
from .binning import Bin, RangeBinner, classify, classify_value, compute_bin_size
from .labels import bin_bounds, format_fixed, make_bin_labels, make_continuous_labels
from .utils_config import LTConfig, VisualizationParameters
from .utils_logger import LTLogger
from .utils_validator import ConfigurationError, ConfigValidator, DataValidator
from .utils_monitor import PerformanceMonitor

__all__ = [
    'DeferredField',
    'DeferredBandStack',
    'Bin',
    'RangeBinner',
    'classify',
    'classify_value',
    'compute_bin_size',
    'bin_bounds',
    'format_fixed',
    'make_bin_labels',
    'make_continuous_labels',
    'LTConfig',
    'VisualizationParameters',
    'LTLogger',
    'ConfigurationError',
    'ConfigValidator',
    'DataValidator',
    'PerformanceMonitor'
]
