#!/usr/bin/env python3

"""
LTdiag - LandTrendr Disturbance Classification and Legend Composition

A Python package for turning the multi-band output of a LandTrendr-style
disturbance detection into classified map layers and a composite legend
whose colors and ranges match the rendered layers.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

__version__ = "1.0.0"
__author__ = "Rubaiat Islam"
__email__ = "mrislam@ucar.edu"
__institution__ = "Mesoscale & Microscale Meteorology Laboratory, NCAR"

__all__ = [
    '__version__',
    '__author__',
    '__email__',
    '__institution__'
]
