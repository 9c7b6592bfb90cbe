#!/usr/bin/env python3

"""
LTdiag Diagnostics Package

This package provides the disturbance product pipeline that turns one change
image and one configuration into map layers, a composite legend, bin tables,
histograms and product descriptions.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

from ltdiag.diagnostics.disturbance import DisturbanceDiagnostics, DisturbanceProducts

__all__ = ['DisturbanceDiagnostics', 'DisturbanceProducts']
