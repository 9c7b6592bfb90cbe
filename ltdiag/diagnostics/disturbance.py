#!/usr/bin/env python3

"""
LTdiag Disturbance Diagnostics

This module assembles the disturbance products of one change image: the five map layers in their fixed composition order (magnitude, binned detection year, duration, prevalence, rate), the matching composite legend, the table of detection-year bins, optional value histograms and the interpretation texts of each product. DisturbanceDiagnostics validates its configuration and builds the range binner when it is constructed, builds the legend from static visualization parameters only, and classifies the detection-year band lazily, so a run either produces every layer and every legend panel or fails with a ConfigurationError before any output exists. Raster values are only computed when a sink renders a layer or a histogram is requested.

Classes:
    DisturbanceProducts: Immutable bundle of layers, legend and bins produced by one run.
    DisturbanceDiagnostics: Builds layers, legend, bins, histograms and product descriptions from one configuration.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import pandas as pd
import xarray as xr
from dataclasses import dataclass
from typing import Dict, Optional, Tuple, Union

from ..processing.binning import Bin, RangeBinner
from ..processing.constants import (
    BAND_YOD, LAYER_NAMES, LAYER_ORDER, LEGEND_TITLES, PRODUCT_DESCRIPTIONS, PRODUCT_REFERENCE,
)
from ..processing.deferred import DeferredBandStack
from ..processing.utils_config import LTConfig
from ..processing.utils_logger import LTLogger
from ..visualization.layers import HistogramSink, MapLayer
from ..visualization.legend import (
    LegendContainer, LegendPanel, build_continuous_panel, build_discrete_panel,
)


@dataclass(frozen=True)
class DisturbanceProducts:
    """
    Everything handed to the rendering and legend sinks for one change image.

    Attributes:
        layers (Tuple[MapLayer, ...]): Map layers in composition order.
        legend (LegendContainer): Composite legend whose panels follow the layer order.
        bins (Tuple[Bin, ...]): Detection-year classes used for the binned layer.
    """
    layers: Tuple[MapLayer, ...]
    legend: LegendContainer
    bins: Tuple[Bin, ...]


class DisturbanceDiagnostics:
    """
    Builder of the disturbance products of a LandTrendr-style change image.

    The builder keeps no state besides its configuration and range binner, so calling run twice with the same inputs yields equal legends, equal bins and layers describing the same lazy transforms.
    """

    def __init__(self, config: Optional[LTConfig] = None, logger: Optional[LTLogger] = None) -> None:
        """
        Bind the builder to a configuration and create the detection-year binner. The configuration record was validated when it was created; building the binner here surfaces any remaining domain or bin-count problem before any layer is requested.

        Parameters:
            config (Optional[LTConfig]): Validated configuration (default: LTConfig()).
            logger (Optional[LTLogger]): Logger for progress messages (default: None).

        Returns:
            None
        """
        self.config = config if config is not None else LTConfig()
        self.logger = logger
        self.binner = RangeBinner.from_config(self.config)

    def _log(self, message: str) -> None:
        if self.logger is not None and self.config.verbose:
            self.logger.info(message)

    @staticmethod
    def _as_stack(change_image: Union[DeferredBandStack, xr.Dataset]) -> DeferredBandStack:
        if isinstance(change_image, DeferredBandStack):
            return change_image
        return DeferredBandStack(change_image)

    def build_legend(self) -> LegendContainer:
        """
        Build the composite legend from the configuration alone. Panels follow the layer order; the detection-year panel uses the integer-year bin labels while the other four use the continuous labels of their visualization parameters.

        Parameters:
            None

        Returns:
            LegendContainer: Composite legend with five panels.
        """
        decimals = self.config.legend_decimals
        continuous = {
            band: params for band, params in self.config.visualization_parameters().items()
            if band != BAND_YOD
        }

        panels = []

        for band in LAYER_ORDER:
            if band == BAND_YOD:
                panel: LegendPanel = build_discrete_panel(LEGEND_TITLES[band], self.config.yod_palette, self.binner)
            else:
                panel = build_continuous_panel(LEGEND_TITLES[band], continuous[band], decimals)
            panels.append(panel)

        legend = LegendContainer.build(panels, self.config.legend_orientation, self.config.legend_position)
        self._log(f"Built legend with panels: {', '.join(legend.titles)}")
        return legend

    def build_layers(self, change_image: Union[DeferredBandStack, xr.Dataset]) -> Tuple[MapLayer, ...]:
        """
        Build the map layers of a change image without evaluating it. The detection-year band is replaced by its lazy classification and drawn with the derived class parameters; the other bands are passed through with their authored parameters.

        Parameters:
            change_image (Union[DeferredBandStack, xr.Dataset]): Multi-band output of the detection algorithm.

        Returns:
            Tuple[MapLayer, ...]: Layers in composition order.
        """
        stack = self._as_stack(change_image)
        params = self.config.visualization_parameters()
        layers = []

        for band in LAYER_ORDER:
            field = stack.select(band)

            if band == BAND_YOD:
                field = self.binner.classify(field)

            layers.append(MapLayer(field=field, params=params[band], name=LAYER_NAMES[band],
                                   discrete=(band == BAND_YOD)))

        self._log(f"Built {len(layers)} map layers ({self.binner!r})")
        return tuple(layers)

    def run(self, change_image: Union[DeferredBandStack, xr.Dataset]) -> DisturbanceProducts:
        """
        Produce layers, legend and bins for one change image. The band stack is checked and the legend is built before any layer, so a ConfigurationError leaves nothing half built.

        Parameters:
            change_image (Union[DeferredBandStack, xr.Dataset]): Multi-band output of the detection algorithm.

        Returns:
            DisturbanceProducts: Layers, legend and bins.
        """
        stack = self._as_stack(change_image)
        legend = self.build_legend()
        bins = tuple(self.binner.bins())
        layers = self.build_layers(stack)

        return DisturbanceProducts(layers=layers, legend=legend, bins=bins)

    def histograms(self, change_image: Union[DeferredBandStack, xr.Dataset],
                   sink: Optional[HistogramSink] = None) -> Dict[str, pd.DataFrame]:
        """
        Histogram the raw values of the configured bands. This evaluates the selected bands.

        Parameters:
            change_image (Union[DeferredBandStack, xr.Dataset]): Multi-band output of the detection algorithm.
            sink (Optional[HistogramSink]): Histogram sink (default: one sharing this builder's logger).

        Returns:
            Dict[str, pd.DataFrame]: Band name mapped to its histogram table, in configured order.
        """
        stack = self._as_stack(change_image)
        sink = sink or HistogramSink(self.logger)

        return {
            band: sink.histogram(stack.select(band), bins=self.config.histogram_bins, name=f"hist_{band}")
            for band in self.config.histogram_bands
        }

    def describe_products(self) -> Dict[str, str]:
        """
        Return the interpretation text of each product, followed by the reference under the 'Reference' key. The texts are logged when a logger is attached and the configuration is verbose.

        Parameters:
            None

        Returns:
            Dict[str, str]: Product title mapped to its description.
        """
        descriptions = dict(PRODUCT_DESCRIPTIONS)
        descriptions['Reference'] = PRODUCT_REFERENCE

        self._log("--- LandTrendr Product Summaries (from OpenMRV) ---")
        for title, text in descriptions.items():
            self._log(f"{title}: {text}")

        return descriptions
