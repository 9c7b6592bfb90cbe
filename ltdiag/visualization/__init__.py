#!/usr/bin/env python3

"""
LTdiag Visualization Package

This package provides the legend tree (entries, panels, containers), the
matplotlib and dictionary legend renderers, colormap styling utilities and
the map layer and histogram sinks.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

from .legend import (
    LegendContainer,
    LegendEntry,
    LegendPanel,
    LegendPosition,
    Orientation,
    build_continuous_panel,
    build_discrete_panel,
    build_entries,
)
from .legend_renderer import DictLegendRenderer, MatplotlibLegendRenderer
from .styling import LTVisualizationStyle
from .layers import HistogramSink, MapLayer, MatplotlibLayerSink

__all__ = [
    'LegendContainer',
    'LegendEntry',
    'LegendPanel',
    'LegendPosition',
    'Orientation',
    'build_continuous_panel',
    'build_discrete_panel',
    'build_entries',
    'DictLegendRenderer',
    'MatplotlibLegendRenderer',
    'LTVisualizationStyle',
    'HistogramSink',
    'MapLayer',
    'MatplotlibLayerSink'
]
