#!/usr/bin/env python3

"""
LTdiag Configuration and Data Validation Utilities

This module provides the validation layer that guards every LTdiag builder before any per-pixel or per-panel work begins. It defines the ConfigurationError exception raised for degenerate analysis domains, empty or malformed palettes, mismatched palette/label arity and unknown layout choices, and the ConfigValidator class whose static methods perform those checks eagerly so that invalid configurations fail fast instead of being discovered lazily when a deferred field is finally evaluated. The DataValidator class complements the configuration checks with a statistical summary of evaluated (possibly masked) raster arrays used by the histogram sink and by verbose diagnostics output.

Classes:
    ConfigurationError: Fatal configuration problem detected before any output is produced.
    ConfigValidator: Static validation methods for domains, bin counts, palettes and visualization parameters.
    DataValidator: Statistical summary of evaluated raster arrays including masked pixels.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import numbers
import numpy as np
import matplotlib.colors as mcolors
from typing import Any, Dict, Iterable, Sequence


class ConfigurationError(ValueError):
    """
    Raised when the static configuration of a classification or legend build is invalid. This covers degenerate analysis domains, non-positive bin counts or bin sizes, empty palettes, colors matplotlib cannot interpret, palette and label sequences of different lengths, unknown legend orientations or anchor positions, and change images lacking a required band. The error is always raised before any output is produced so that no partial map layers or legend panels are ever rendered.
    """


class ConfigValidator:
    """
    Static validators for LTdiag configuration values. Each method either returns the normalized value or raises ConfigurationError with a message naming the offending setting. The validators never touch raster data, which lets every builder run them eagerly before constructing any lazy per-pixel computation.
    """

    @staticmethod
    def validate_year(value: Any, name: str) -> int:
        """
        Validate that a domain bound is a whole calendar year and return it as a Python int. Floats with an integral value (e.g. 1985.0 read from YAML) are accepted and converted, while booleans, fractional values and non-numeric inputs are rejected because bin bounds and labels are integer years.

        Parameters:
            value (Any): Candidate year value.
            name (str): Setting name used in the error message.

        Returns:
            int: The year as an integer.
        """
        if isinstance(value, bool) or not isinstance(value, numbers.Real):
            raise ConfigurationError(f"{name} must be a whole year, got {value!r}")

        if not float(value).is_integer():
            raise ConfigurationError(f"{name} must be a whole year, got {value!r}")

        return int(value)

    @staticmethod
    def validate_domain(domain_min: Any, domain_max: Any) -> tuple:
        """
        Validate the analysis start and end years of the detection-year domain. Both bounds must be whole years and the end year may not precede the start year; a single-year domain (start == end) is valid.

        Parameters:
            domain_min (Any): First year of the analysis domain.
            domain_max (Any): Last year of the analysis domain.

        Returns:
            tuple: Normalized (domain_min, domain_max) integer pair.
        """
        lower = ConfigValidator.validate_year(domain_min, "domain_min")
        upper = ConfigValidator.validate_year(domain_max, "domain_max")

        if upper < lower:
            raise ConfigurationError(
                f"Degenerate domain: domain_max ({upper}) is before domain_min ({lower})"
            )

        return lower, upper

    @staticmethod
    def validate_bin_count(n_bins: Any) -> int:
        """
        Validate the number of discrete detection-year classes. The count is usually the length of the discrete palette and must be an integer of at least one.

        Parameters:
            n_bins (Any): Requested number of bins.

        Returns:
            int: The validated bin count.
        """
        if isinstance(n_bins, bool) or not isinstance(n_bins, numbers.Integral):
            raise ConfigurationError(f"Bin count must be an integer, got {n_bins!r}")

        if n_bins < 1:
            raise ConfigurationError(f"Bin count must be at least 1, got {n_bins} (empty palette?)")

        return int(n_bins)

    @staticmethod
    def validate_bin_size(bin_size: Any) -> int:
        """Reject non-positive bin widths."""
        if isinstance(bin_size, bool) or not isinstance(bin_size, numbers.Integral) or bin_size <= 0:
            raise ConfigurationError(f"Bin size must be a positive integer, got {bin_size!r}")
        return int(bin_size)

    @staticmethod
    def validate_palette(palette: Any, name: str = "palette") -> tuple:
        """
        Validate an ordered palette and return it as a tuple of color strings. The palette must be a non-empty sequence (a bare string is rejected, since iterating it would yield characters) whose every entry matplotlib recognizes as a color specification, such as '#9400D3' or 'white'.

        Parameters:
            palette (Any): Candidate palette sequence.
            name (str): Setting name used in the error message (default: "palette").

        Returns:
            tuple: Palette colors in their original order.
        """
        if palette is None or isinstance(palette, (str, bytes)) or not isinstance(palette, Iterable):
            raise ConfigurationError(f"{name} must be a sequence of colors, got {palette!r}")

        colors = tuple(palette)

        if not colors:
            raise ConfigurationError(f"{name} must contain at least one color")

        for idx, color in enumerate(colors):
            if not isinstance(color, str) or not mcolors.is_color_like(color):
                raise ConfigurationError(f"{name}[{idx}] is not a valid color: {color!r}")

        return colors

    @staticmethod
    def validate_visualization_parameters(params: Any, name: str) -> None:
        """
        Validate an authored set of visualization parameters (min, max, palette). The range must be finite with min strictly below max, and the palette must pass validate_palette. Derived parameters such as the classified detection-year layer's {min: 0, max: n_bins-1} are built internally and are not passed through this check.

        Parameters:
            params (Any): Object exposing min, max and palette attributes.
            name (str): Layer name used in error messages.

        Returns:
            None
        """
        for attr in ("min", "max"):
            value = getattr(params, attr, None)
            if isinstance(value, bool) or not isinstance(value, numbers.Real) or not np.isfinite(value):
                raise ConfigurationError(f"{name}.{attr} must be a finite number, got {value!r}")

        if not params.min < params.max:
            raise ConfigurationError(
                f"{name}: min ({params.min}) must be less than max ({params.max})"
            )

        ConfigValidator.validate_palette(params.palette, f"{name}.palette")

    @staticmethod
    def validate_arity(palette: Sequence[Any], labels: Sequence[Any]) -> None:
        """
        Check that a palette and its label list can be paired one-to-one. Continuous and discrete legends produce their palettes and labels along two independent code paths, so this check is explicit rather than relying on zip truncation.

        Parameters:
            palette (Sequence[Any]): Palette colors.
            labels (Sequence[Any]): Legend labels.

        Returns:
            None
        """
        if len(palette) != len(labels):
            raise ConfigurationError(
                f"Mismatched legend arity: {len(palette)} colors but {len(labels)} labels"
            )

        if not palette:
            raise ConfigurationError("Legend requires at least one palette entry")

    @staticmethod
    def validate_choice(value: Any, choices: Iterable[str], name: str) -> str:
        """Validate that value is one of the allowed string choices."""
        allowed = list(choices)
        if value not in allowed:
            raise ConfigurationError(f"Invalid {name}: {value!r}. Choose from: {allowed}")
        return value


class DataValidator:
    """
    Summary statistics for evaluated raster arrays. Masked pixels (no-data) and non-finite values are counted separately from valid pixels so that a classified detection-year array reports how much of the scene carried a detection.
    """

    @staticmethod
    def summarize_field(data: np.ndarray) -> Dict[str, Any]:
        """
        Compute a statistical summary of an evaluated field. The input may be a numpy masked array (as returned by DeferredField.evaluate) or a plain array; masked and non-finite entries are excluded from the statistics and reported through the valid_points and valid_percentage counts. When no valid pixel remains the result is flagged invalid with an explanatory issue.

        Parameters:
            data (np.ndarray): Evaluated field values, optionally masked.

        Returns:
            dict: Dictionary with 'valid' (bool), 'issues' (list of str) and 'stats' (dict with total_points, valid_points, valid_percentage and, when available, min, max, mean, std, median).
        """
        results: Dict[str, Any] = {
            "valid": True,
            "issues": [],
            "stats": {}
        }

        masked = np.ma.masked_invalid(np.ma.asarray(data, dtype=float))
        total_count = int(masked.size)
        valid_values = masked.compressed()
        valid_count = int(valid_values.size)

        results["stats"]["total_points"] = total_count
        results["stats"]["valid_points"] = valid_count
        results["stats"]["valid_percentage"] = (valid_count / total_count) * 100 if total_count else 0.0

        if valid_count == 0:
            results["valid"] = False
            results["issues"].append("No valid (unmasked, finite) values found")
            return results

        results["stats"]["min"] = float(np.min(valid_values))
        results["stats"]["max"] = float(np.max(valid_values))
        results["stats"]["mean"] = float(np.mean(valid_values))
        results["stats"]["std"] = float(np.std(valid_values))
        results["stats"]["median"] = float(np.median(valid_values))

        return results
