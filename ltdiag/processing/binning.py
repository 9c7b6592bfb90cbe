#!/usr/bin/env python3

"""
LTdiag Detection-Year Range Binning

This module converts the continuous year-of-detection band of a LandTrendr-style change image into a small number of discrete ordinal classes, one per color of the discrete palette. The bin width is the ceiling of the domain length divided by the bin count, each pixel is assigned the floor of its offset from the first analysis year divided by that width, classes beyond the last bin are clamped onto it, and pixels detected before the first analysis year are masked as no-data. Over-range values are clamped while under-range values, the no-data sentinel of the detection algorithm, are masked. The classification is emitted as a lazy transform on a DeferredField so the compute engine evaluates it only when the classified layer is rendered or summarized. All preconditions are checked before the lazy graph is built.

Classes:
    Bin: One detection-year class with its index, inclusive bounds and legend label.
    RangeBinner: Immutable binner bound to one analysis domain and bin count.

Functions:
    compute_bin_size: Ceiling-division bin width for a domain and bin count.
    classify: Lazy per-pixel classification of a deferred detection-year field.
    classify_value: Scalar reference implementation of the same classification rule.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import math
import numbers
import numpy as np
from dataclasses import dataclass
from typing import Any, List, Optional, Sequence, Tuple

from .deferred import DeferredField
from .labels import bin_bounds, make_bin_labels
from .utils_config import LTConfig, VisualizationParameters
from .utils_validator import ConfigValidator, ConfigurationError


@dataclass(frozen=True)
class Bin:
    """
    One discrete detection-year class.

    Attributes:
        index (int): Class value written to classified pixels, in [0, n_bins - 1].
        lower_bound (int): First year of the bin.
        upper_bound (int): Last year of the bin, clamped to the end of the domain.
        label (str): Legend label for the bin.
    """
    index: int
    lower_bound: int
    upper_bound: int
    label: str

    def contains(self, year: float) -> bool:
        return self.lower_bound <= year <= self.upper_bound


def compute_bin_size(domain_min: int, domain_max: int, n_bins: int) -> int:
    """
    Compute the width in years of each detection-year bin as ceil((domain_max - domain_min + 1) / n_bins). The domain is validated first (whole years, end not before start) together with the bin count; a non-positive width raises ConfigurationError.

    Parameters:
        domain_min (int): First year of the analysis domain.
        domain_max (int): Last year of the analysis domain.
        n_bins (int): Number of bins (normally the discrete palette length).

    Returns:
        int: Bin width in years, e.g. 6 for 1985-2025 with 7 bins.
    """
    domain_min, domain_max = ConfigValidator.validate_domain(domain_min, domain_max)
    n_bins = ConfigValidator.validate_bin_count(n_bins)

    bin_size = math.ceil((domain_max - domain_min + 1) / n_bins)

    if bin_size <= 0:
        raise ConfigurationError(f"Computed non-positive bin size {bin_size}")

    return int(bin_size)


def classify(raw_field: DeferredField, domain_min: int, domain_max: int,
             n_bins: int) -> Tuple[DeferredField, int]:
    """
    Classify a deferred detection-year field into discrete ordinal classes without evaluating it. The returned field describes the per-pixel transform floor((v - domain_min) / bin_size) with classes above n_bins - 1 clamped to n_bins - 1 and pixels where v < domain_min (or v is missing) masked as no-data. Masked pixels are zero-filled and the clamp is applied before the int64 cast, so the cast never sees a NaN, an infinity or a value beyond the int64 range. Configuration errors are raised immediately, before any part of the graph is built.

    Parameters:
        raw_field (DeferredField): Lazy year-of-detection band.
        domain_min (int): First year of the analysis domain.
        domain_max (int): Last year of the analysis domain.
        n_bins (int): Number of classes.

    Returns:
        Tuple[DeferredField, int]: Two-element tuple (classified_field, bin_size).
    """
    bin_size = compute_bin_size(domain_min, domain_max, n_bins)
    domain_min = int(domain_min)
    last_class = int(n_bins) - 1

    raw = raw_field.data
    in_domain = raw >= domain_min

    offset = (raw - domain_min).where(in_domain, 0)
    classes = np.floor(offset / bin_size)
    classes = classes.where(classes <= last_class, last_class).astype(np.int64)
    class_name = f"{raw_field.name}_class" if raw_field.name else None

    classified = DeferredField(classes, valid=raw_field.valid, name=class_name)
    return classified.update_mask(in_domain), bin_size


def classify_value(value: Any, domain_min: int, domain_max: int, n_bins: int) -> Optional[int]:
    """
    Classify a single detection year with the same rule as classify. Returns None for no-data (a value before domain_min or a missing/NaN value) and clamps values past the last bin to n_bins - 1.

    Parameters:
        value (Any): Detection year of one pixel.
        domain_min (int): First year of the analysis domain.
        domain_max (int): Last year of the analysis domain.
        n_bins (int): Number of classes.

    Returns:
        Optional[int]: Class index in [0, n_bins - 1], or None for no-data.
    """
    bin_size = compute_bin_size(domain_min, domain_max, n_bins)

    if value is None or not isinstance(value, numbers.Real) or math.isnan(value):
        return None

    if value < domain_min:
        return None

    class_index = math.floor((value - domain_min) / bin_size) if math.isfinite(value) else math.inf
    return int(min(class_index, int(n_bins) - 1))


class RangeBinner:
    """
    Immutable detection-year binner bound to one analysis domain and bin count. The constructor validates the configuration and fixes the bin width, so every later call (bins, labels, classify) works from the same rule and the legend labels can never disagree with the classified pixels.
    """

    def __init__(self, domain_min: int, domain_max: int, n_bins: int) -> None:
        """
        Validate the domain and bin count and compute the bin width.

        Parameters:
            domain_min (int): First year of the analysis domain.
            domain_max (int): Last year of the analysis domain.
            n_bins (int): Number of classes.

        Returns:
            None
        """
        self._bin_size = compute_bin_size(domain_min, domain_max, n_bins)
        self._domain_min, self._domain_max = ConfigValidator.validate_domain(domain_min, domain_max)
        self._n_bins = int(n_bins)

    @classmethod
    def from_config(cls, config: LTConfig) -> 'RangeBinner':
        """Build a binner for the configured analysis years and discrete palette length."""
        return cls(config.start_year, config.end_year, config.n_bins)

    @property
    def domain_min(self) -> int:
        return self._domain_min

    @property
    def domain_max(self) -> int:
        return self._domain_max

    @property
    def n_bins(self) -> int:
        return self._n_bins

    @property
    def bin_size(self) -> int:
        return self._bin_size

    def labels(self) -> List[str]:
        return make_bin_labels(self._domain_min, self._domain_max, self._bin_size, self._n_bins)

    def bins(self) -> List[Bin]:
        """
        Describe every class as a Bin with clamped bounds and its legend label.

        Parameters:
            None

        Returns:
            List[Bin]: n_bins Bin records in ascending order.
        """
        bounds = bin_bounds(self._domain_min, self._domain_max, self._bin_size, self._n_bins)
        return [
            Bin(index=idx, lower_bound=lower, upper_bound=upper, label=label)
            for idx, ((lower, upper), label) in enumerate(zip(bounds, self.labels()))
        ]

    def classify(self, raw_field: DeferredField) -> DeferredField:
        classified, _ = classify(raw_field, self._domain_min, self._domain_max, self._n_bins)
        return classified

    def classify_value(self, value: Any) -> Optional[int]:
        return classify_value(value, self._domain_min, self._domain_max, self._n_bins)

    def visualization_parameters(self, palette: Sequence[str]) -> VisualizationParameters:
        """
        Visualization parameters for rendering the classified layer: class indices 0 to n_bins - 1 stretched over the discrete palette. The palette length must equal the bin count.

        Parameters:
            palette (Sequence[str]): Discrete palette, one color per class.

        Returns:
            VisualizationParameters: Parameters {min: 0, max: n_bins - 1, palette}.
        """
        colors = ConfigValidator.validate_palette(palette, "yod_palette")

        if len(colors) != self._n_bins:
            raise ConfigurationError(
                f"Discrete palette has {len(colors)} colors for {self._n_bins} bins"
            )

        return VisualizationParameters(min=0, max=self._n_bins - 1, palette=colors)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RangeBinner):
            return NotImplemented
        return (self._domain_min, self._domain_max, self._n_bins) == \
            (other._domain_min, other._domain_max, other._n_bins)

    def __hash__(self) -> int:
        return hash((self._domain_min, self._domain_max, self._n_bins))

    def __repr__(self) -> str:
        return (f"RangeBinner(domain_min={self._domain_min}, domain_max={self._domain_max}, "
                f"n_bins={self._n_bins}, bin_size={self._bin_size})")
