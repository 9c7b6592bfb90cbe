#!/usr/bin/env python3

"""
LTdiag Configuration Management Utilities

This module provides the configuration record shared by every LTdiag builder: the analysis domain of the detection-year band, the discrete detection-year palette, the authored visualization parameters of the four continuous layers (magnitude, duration, prevalence, rate), the layout of the composite legend and the histogram and output options. It implements the VisualizationParameters record describing how one layer is stretched over its palette and the LTConfig dataclass that validates all of its values at construction time, so an invalid configuration fails with a ConfigurationError before any deferred field is classified or any legend panel is built. Configurations are serialized to and from YAML for reproducible runs and are never mutated after construction; command-line overrides produce a new record through dataclasses.replace.

Classes:
    VisualizationParameters: Immutable (min, max, palette) stretch of one rendered layer.
    LTConfig: Validated configuration dataclass for disturbance classification and legend composition.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import numbers
import yaml
from dataclasses import asdict, dataclass, field, fields
from typing import Any, Dict, Optional, Tuple

from .constants import (
    BAND_DUR, BAND_MAG, BAND_PREVAL, BAND_RATE, BAND_YOD, CHANGE_BANDS,
    DEFAULT_END_YEAR, DEFAULT_LEGEND_POSITION, DEFAULT_START_YEAR, DEFAULT_VIS_PARAMS,
    DEFAULT_YOD_PALETTE, LAYER_ORDER, LEGEND_POSITIONS, ORIENTATION_SIDE_BY_SIDE,
    ORIENTATION_STACKED,
)
from .utils_validator import ConfigValidator, ConfigurationError


@dataclass(frozen=True)
class VisualizationParameters:
    """
    Stretch of one rendered layer over its palette.

    Attributes:
        min (float): Value mapped to the first palette color.
        max (float): Value mapped to the last palette color.
        palette (Tuple[str, ...]): Ordered color specifications.
    """
    min: float
    max: float
    palette: Tuple[str, ...]

    def __post_init__(self) -> None:
        if isinstance(self.palette, list):
            object.__setattr__(self, 'palette', tuple(self.palette))

    def to_dict(self) -> Dict[str, Any]:
        return {'min': self.min, 'max': self.max, 'palette': list(self.palette)}

    @classmethod
    def from_dict(cls, params: Dict[str, Any]) -> 'VisualizationParameters':
        """
        Build parameters from a mapping with min, max and palette keys.

        Parameters:
            params (Dict[str, Any]): Mapping as found in a YAML configuration file.

        Returns:
            VisualizationParameters: Parameters with the palette stored as a tuple.
        """
        missing = [key for key in ('min', 'max', 'palette') if key not in params]

        if missing:
            raise ConfigurationError(f"Visualization parameters missing keys: {missing}")

        return cls(min=params['min'], max=params['max'], palette=params['palette'])


def _default_params(band: str):
    return lambda: VisualizationParameters.from_dict(DEFAULT_VIS_PARAMS[band])


@dataclass(frozen=True)
class LTConfig:
    """
    Configuration class for LandTrendr-style disturbance diagnostics.

    Holds every static input of a classification and legend-composition run. All values are validated in __post_init__; list and dict inputs (as read from YAML) are normalized to tuples and VisualizationParameters.

    Attributes:
        Domain Parameters:
            start_year, end_year (int): First and last analysis year of the detection-year band.
            yod_palette (Tuple[str, ...]): Discrete palette, one color per detection-year bin.

        Layer Parameters:
            magnitude, duration, prevalence, rate (VisualizationParameters): Authored stretches of the continuous layers.

        Legend Parameters:
            legend_orientation (str): 'side-by-side' or 'stacked' panel arrangement.
            legend_position (str): Anchor corner of the composite legend.
            legend_decimals (int): Decimal places of continuous legend labels.

        Output Parameters:
            histogram_bands (Tuple[str, ...]): Bands summarized as histograms.
            histogram_bins (int): Number of histogram buckets.
            figure_size (Tuple[float, float]): Figure dimensions in inches.
            dpi (int): Output resolution.
            output_formats (Tuple[str, ...]): File formats written by the CLI.
            output (Optional[str]): Output path without extension.
            verbose, quiet (bool): Logging verbosity switches.
    """
    start_year: int = DEFAULT_START_YEAR
    end_year: int = DEFAULT_END_YEAR
    yod_palette: Tuple[str, ...] = tuple(DEFAULT_YOD_PALETTE)

    magnitude: VisualizationParameters = field(default_factory=_default_params(BAND_MAG))
    duration: VisualizationParameters = field(default_factory=_default_params(BAND_DUR))
    prevalence: VisualizationParameters = field(default_factory=_default_params(BAND_PREVAL))
    rate: VisualizationParameters = field(default_factory=_default_params(BAND_RATE))

    legend_orientation: str = ORIENTATION_SIDE_BY_SIDE
    legend_position: str = DEFAULT_LEGEND_POSITION
    legend_decimals: int = 0

    histogram_bands: Tuple[str, ...] = (BAND_YOD, BAND_MAG)
    histogram_bins: int = 20

    figure_size: Tuple[float, float] = (12.0, 4.0)
    dpi: int = 100
    output_formats: Tuple[str, ...] = ('png',)
    output: Optional[str] = None

    verbose: bool = True
    quiet: bool = False

    def __post_init__(self) -> None:
        """
        Normalize container types and validate every setting after dataclass instantiation. Lists become tuples and mappings become VisualizationParameters so that YAML-loaded and programmatic configurations compare equal. Validation covers the analysis domain, the discrete palette, the four authored visualization parameter sets, the legend layout choices, the label precision and the histogram settings. Any failure raises ConfigurationError so that no downstream builder ever sees an invalid record.

        Parameters:
            None

        Returns:
            None
        """
        for name in ('magnitude', 'duration', 'prevalence', 'rate'):
            value = getattr(self, name)
            if isinstance(value, dict):
                object.__setattr__(self, name, VisualizationParameters.from_dict(value))
            elif not isinstance(value, VisualizationParameters):
                raise ConfigurationError(f"{name} must be visualization parameters, got {value!r}")

        for name in ('yod_palette', 'histogram_bands', 'figure_size', 'output_formats'):
            value = getattr(self, name)
            if isinstance(value, list):
                object.__setattr__(self, name, tuple(value))

        self._validate()

    def _validate(self) -> None:
        start, end = ConfigValidator.validate_domain(self.start_year, self.end_year)
        object.__setattr__(self, 'start_year', start)
        object.__setattr__(self, 'end_year', end)

        ConfigValidator.validate_palette(self.yod_palette, "yod_palette")

        for name in ('magnitude', 'duration', 'prevalence', 'rate'):
            ConfigValidator.validate_visualization_parameters(getattr(self, name), name)

        ConfigValidator.validate_choice(
            self.legend_orientation, (ORIENTATION_SIDE_BY_SIDE, ORIENTATION_STACKED), "legend_orientation"
        )
        ConfigValidator.validate_choice(self.legend_position, LEGEND_POSITIONS, "legend_position")

        if isinstance(self.legend_decimals, bool) or not isinstance(self.legend_decimals, int) \
                or self.legend_decimals < 0:
            raise ConfigurationError(
                f"legend_decimals must be a non-negative integer, got {self.legend_decimals!r}"
            )

        for band in self.histogram_bands:
            ConfigValidator.validate_choice(band, CHANGE_BANDS, "histogram band")

        if isinstance(self.histogram_bins, bool) or not isinstance(self.histogram_bins, int) \
                or self.histogram_bins < 1:
            raise ConfigurationError(f"histogram_bins must be a positive integer, got {self.histogram_bins!r}")

        if not isinstance(self.figure_size, tuple) or len(self.figure_size) != 2 \
                or any(isinstance(size, bool) or not isinstance(size, numbers.Real) or size <= 0
                       for size in self.figure_size):
            raise ConfigurationError(f"figure_size must be two positive numbers, got {self.figure_size!r}")

        if isinstance(self.dpi, bool) or not isinstance(self.dpi, numbers.Integral) or self.dpi <= 0:
            raise ConfigurationError(f"dpi must be a positive integer, got {self.dpi!r}")

    @property
    def n_bins(self) -> int:
        """Number of detection-year classes, one per discrete palette color."""
        return len(self.yod_palette)

    @property
    def yod_visualization(self) -> VisualizationParameters:
        """
        Derived parameters of the classified detection-year layer: class indices 0 to n_bins - 1 stretched over the discrete palette. These are built here rather than authored, so the single-bin case (min == max == 0) is allowed.

        Parameters:
            None

        Returns:
            VisualizationParameters: Parameters {min: 0, max: n_bins - 1, palette: yod_palette}.
        """
        return VisualizationParameters(min=0, max=self.n_bins - 1, palette=self.yod_palette)

    def visualization_parameters(self) -> Dict[str, VisualizationParameters]:
        """
        Map every layer key to its visualization parameters in layer composition order (magnitude, detection year, duration, prevalence, rate).

        Parameters:
            None

        Returns:
            Dict[str, VisualizationParameters]: Ordered mapping keyed by band name.
        """
        by_band = {
            BAND_MAG: self.magnitude,
            BAND_YOD: self.yod_visualization,
            BAND_DUR: self.duration,
            BAND_PREVAL: self.prevalence,
            BAND_RATE: self.rate,
        }
        return {band: by_band[band] for band in LAYER_ORDER}

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the configuration to plain dictionaries and lists for YAML export. Nested visualization parameters become mappings and every tuple becomes a list, so the result round-trips through from_dict.

        Parameters:
            None

        Returns:
            Dict[str, Any]: Dictionary containing all configuration parameters.
        """
        config_dict = asdict(self)
        for key, value in config_dict.items():
            if isinstance(value, tuple):
                config_dict[key] = list(value)
            elif isinstance(value, dict) and isinstance(value.get('palette'), tuple):
                value['palette'] = list(value['palette'])
        return config_dict

    @classmethod
    def from_dict(cls, config_dict: Dict[str, Any]) -> 'LTConfig':
        """
        Construct a configuration from a dictionary of parameter values. Unknown keys are rejected with ConfigurationError so that misspelled settings in a YAML file do not silently fall back to defaults.

        Parameters:
            config_dict (Dict[str, Any]): Dictionary with keys matching LTConfig attribute names.

        Returns:
            LTConfig: Newly constructed and validated configuration object.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(config_dict) - known)

        if unknown:
            raise ConfigurationError(f"Unknown configuration keys: {unknown}")

        return cls(**config_dict)

    def save_to_file(self, filepath: str) -> None:
        """
        Persist the configuration to a YAML file for reproducibility and sharing.

        Parameters:
            filepath (str): Path to output YAML file.

        Returns:
            None
        """
        config_dict = self.to_dict()

        with open(filepath, 'w') as f:
            yaml.dump(config_dict, f, default_flow_style=False, indent=2, allow_unicode=True)

        print(f"Configuration saved to: {filepath}")

    @classmethod
    def load_from_file(cls, filepath: str) -> 'LTConfig':
        """
        Load configuration parameters from a YAML file and construct a validated configuration object. The file is read with yaml.safe_load; an empty file yields the default configuration.

        Parameters:
            filepath (str): Path to YAML configuration file to load.

        Returns:
            LTConfig: Loaded and validated configuration object.
        """
        with open(filepath, 'r') as f:
            config_dict = yaml.safe_load(f)

        if config_dict is None:
            config_dict = {}

        if not isinstance(config_dict, dict):
            raise ConfigurationError(f"Configuration file {filepath} must contain a mapping")

        return cls.from_dict(config_dict)
