#!/usr/bin/env python3

"""
LTdiag Legend Label Generation

This module produces the human-readable range labels shown next to each legend swatch. Two distinct rules are implemented and intentionally kept apart. The discrete rule is aware of the integer-year detection domain: it walks the ceiling-division bins produced by the range binner, clamps the final bin's upper bound to the last analysis year and prints single-year bins as one year. The continuous rule is a plain linear partition of a visualization range into one equal-width interval per palette color, with each bound printed at a fixed decimal precision. Both rules are pure functions of static configuration and never evaluate raster data, so legend labels can be built before (or without) any layer being rendered.

Functions:
    bin_bounds: Inclusive (lower, upper) year bounds of each detection-year bin.
    make_bin_labels: Ordered labels for the discrete detection-year classes.
    make_continuous_labels: Ordered labels for a continuous, linearly interpolated palette.
    format_fixed: Fixed-precision number formatting with half-away-from-zero rounding.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import warnings
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, List, Tuple

from .constants import CONTINUOUS_LABEL_SEPARATOR, DISCRETE_LABEL_SEPARATOR
from .utils_validator import ConfigValidator


def bin_bounds(domain_min: int, domain_max: int, bin_size: int, n_bins: int) -> List[Tuple[int, int]]:
    """
    Compute the inclusive year bounds of every detection-year bin. Bin i starts at domain_min + i * bin_size and ends one year before the next bin starts, except that no upper bound may exceed domain_max; this is the same clamp the binner applies to pixel classes, so bounds, labels and classified pixels always agree. When n_bins exceeds the number of years in the domain the trailing bins start after domain_max, so their clamped upper bound falls below their lower bound and they cannot receive any pixel; a UserWarning lists them.

    Parameters:
        domain_min (int): First year of the analysis domain.
        domain_max (int): Last year of the analysis domain.
        bin_size (int): Width of each bin in years.
        n_bins (int): Number of bins.

    Returns:
        List[Tuple[int, int]]: One (lower, upper) pair per bin in ascending order.
    """
    domain_min, domain_max = ConfigValidator.validate_domain(domain_min, domain_max)
    n_bins = ConfigValidator.validate_bin_count(n_bins)
    bin_size = ConfigValidator.validate_bin_size(bin_size)

    bounds = []

    for i in range(n_bins):
        lower = domain_min + i * bin_size
        upper = min(domain_min + (i + 1) * bin_size - 1, domain_max)
        bounds.append((lower, upper))

    empty = [i for i, (lower, _) in enumerate(bounds) if lower > domain_max]

    if empty:
        warnings.warn(
            f"Bins {empty} start after {domain_max} and will never be assigned a pixel; "
            f"{n_bins} bins exceed the {domain_max - domain_min + 1}-year domain",
            UserWarning,
            stacklevel=2,
        )

    return bounds


def make_bin_labels(domain_min: int, domain_max: int, bin_size: int, n_bins: int) -> List[str]:
    """
    Build the ordered labels of the discrete detection-year classes. Each bin is labelled "{lower} - {upper}", or just "{lower}" when the bin covers a single year, using the clamped bounds from bin_bounds. Exactly n_bins labels are returned, in ascending bin order, and the last label never names a year beyond domain_max. Identical label texts are never merged.

    Parameters:
        domain_min (int): First year of the analysis domain.
        domain_max (int): Last year of the analysis domain.
        bin_size (int): Width of each bin in years.
        n_bins (int): Number of bins.

    Returns:
        List[str]: Bin labels, e.g. ['1985 - 1990', ..., '2021 - 2025'].
    """
    labels = []

    for lower, upper in bin_bounds(domain_min, domain_max, bin_size, n_bins):
        if lower == upper:
            labels.append(str(lower))
        else:
            labels.append(f"{lower}{DISCRETE_LABEL_SEPARATOR}{upper}")

    return labels


def format_fixed(value: Any, decimals: int = 0) -> str:
    """
    Format a number with a fixed count of decimal places. Ties round away from zero (2.5 -> '3', -2.5 -> '-3') rather than to even, and a result that rounds to zero is printed without a sign, so a bound computed as -1e-14 shows as '0'.

    Parameters:
        value (Any): Real number to format.
        decimals (int): Number of digits after the decimal point (default: 0).

    Returns:
        str: Formatted number.
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    quantum = Decimal(1).scaleb(-decimals)
    rounded = Decimal(float(value)).quantize(quantum, rounding=ROUND_HALF_UP)

    if rounded == 0:
        rounded = abs(rounded)

    return format(rounded, 'f')


def make_continuous_labels(params: Any, decimals: int = 0) -> List[str]:
    """
    Build the ordered labels of a continuous legend from its visualization parameters. The range [min, max] is split into len(palette) equal-width intervals; interval i runs from min + i * step to min + (i + 1) * step, and the last interval ends exactly at max. Both bounds are printed with format_fixed and joined by an en dash. This rule is a pure linear interpolation over a possibly fractional range and deliberately differs from the integer-year rule of make_bin_labels.

    Parameters:
        params (Any): Visualization parameters exposing min, max and palette.
        decimals (int): Decimal places printed for each bound (default: 0).

    Returns:
        List[str]: One label per palette color, e.g. ['200 – 320', ..., '680 – 800'].
    """
    palette = ConfigValidator.validate_palette(params.palette)
    n_colors = len(palette)
    step = (params.max - params.min) / n_colors

    labels = []

    for idx in range(n_colors):
        start = params.min + idx * step
        end = params.max if idx == n_colors - 1 else params.min + (idx + 1) * step
        labels.append(
            f"{format_fixed(start, decimals)}{CONTINUOUS_LABEL_SEPARATOR}{format_fixed(end, decimals)}"
        )

    return labels
