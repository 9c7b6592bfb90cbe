#!/usr/bin/env python3

"""
LTdiag Map Layer and Histogram Sinks

This module defines the declarative map layer handed to a rendering sink and the two sinks shipped with LTdiag. A MapLayer is the (field, visualization parameters, name) triple of one rendered product; its field stays a deferred computation until a sink evaluates it. MatplotlibLayerSink evaluates each layer once, draws the layers in order with imshow so that later layers sit on top, makes no-data pixels transparent and overlays the composite legend. HistogramSink evaluates a field and returns its value histogram as a pandas DataFrame for the statistics display. Evaluation happens only inside these sinks, and since DeferredField keeps no cache each sink call re-runs the lazy graph.

Classes:
    MapLayer: Declarative (field, params, name) triple of one rendered product.
    MatplotlibLayerSink: Renders map layers and a composite legend on a matplotlib figure.
    HistogramSink: Summarizes an evaluated field as a histogram table.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..processing.deferred import DeferredField
from ..processing.utils_config import VisualizationParameters
from ..processing.utils_logger import LTLogger
from ..processing.utils_validator import DataValidator
from .legend import LegendContainer
from .legend_renderer import MatplotlibLegendRenderer
from .styling import LTVisualizationStyle


@dataclass(frozen=True)
class MapLayer:
    """
    One rendered product.

    Attributes:
        field (DeferredField): Lazy per-pixel values.
        params (VisualizationParameters): Stretch and palette used to draw the values.
        name (str): Display name of the layer.
        discrete (bool): True when the values are integer classes drawn one color per class.
    """
    field: DeferredField
    params: VisualizationParameters
    name: str
    discrete: bool = False


class MatplotlibLayerSink:
    """
    Rendering sink drawing map layers with matplotlib. Layers are drawn in the order given, and masked pixels are left transparent so lower layers show through.
    """

    def __init__(self, figsize: Tuple[float, float] = (12.0, 4.0), dpi: int = 100,
                 legend_renderer: Optional[MatplotlibLegendRenderer] = None,
                 logger: Optional[LTLogger] = None) -> None:
        self.figsize = figsize
        self.dpi = dpi
        self.legend_renderer = legend_renderer or MatplotlibLegendRenderer()
        self.logger = logger

    def draw_layer(self, ax: Axes, layer: MapLayer):
        """
        Evaluate one layer and draw it on the axes.

        Parameters:
            ax (Axes): Target axes.
            layer (MapLayer): Layer to draw.

        Returns:
            AxesImage: The image artist.
        """
        values = layer.field.evaluate()

        if values.ndim != 2:
            raise ValueError(f"Layer {layer.name!r} must be two-dimensional, got shape {values.shape}")

        if layer.discrete:
            cmap, norm = LTVisualizationStyle.discrete_colormap(layer.params)
        else:
            cmap, norm = LTVisualizationStyle.continuous_colormap(layer.params)

        cmap = cmap.with_extremes(bad=(0.0, 0.0, 0.0, 0.0))

        if self.logger is not None:
            self.logger.debug(f"Drawing layer {layer.name!r} ({int(values.count())} valid pixels)")

        return ax.imshow(values, cmap=cmap, norm=norm, interpolation='nearest', label=layer.name)

    def render(self, layers: Sequence[MapLayer], legend: Optional[LegendContainer] = None,
               title: Optional[str] = None) -> Figure:
        """
        Draw all layers in order, later layers on top, then overlay the composite legend.

        Parameters:
            layers (Sequence[MapLayer]): Layers in z-order, bottom first.
            legend (Optional[LegendContainer]): Composite legend to overlay (default: None).
            title (Optional[str]): Axes title (default: None).

        Returns:
            Figure: Rendered figure.
        """
        fig, ax = plt.subplots(figsize=self.figsize, dpi=self.dpi)

        for layer in layers:
            self.draw_layer(ax, layer)

        ax.set_axis_off()

        if title:
            ax.set_title(title)

        if legend is not None:
            self.legend_renderer.draw(ax, legend)

        return fig


class HistogramSink:
    """Histogram statistics sink; masked and non-finite pixels are excluded."""

    COLUMNS = ['bin_start', 'bin_end', 'count']

    def __init__(self, logger: Optional[LTLogger] = None) -> None:
        self.logger = logger

    def histogram(self, field: DeferredField, bins: int = 20, name: Optional[str] = None) -> pd.DataFrame:
        """
        Evaluate a field and count its valid values into equal-width buckets spanning their range.

        Parameters:
            field (DeferredField): Field to summarize.
            bins (int): Number of buckets (default: 20).
            name (Optional[str]): Name used in log messages (default: the field name).

        Returns:
            pd.DataFrame: One row per bucket with bin_start, bin_end and count columns; empty when no pixel is valid.
        """
        label = name or field.name or "field"
        values = field.evaluate()
        summary = DataValidator.summarize_field(values)

        if self.logger is not None:
            stats = summary["stats"]
            self.logger.info(
                f"{label}: {stats['valid_points']}/{stats['total_points']} valid pixels "
                f"({stats['valid_percentage']:.1f}%)"
            )
            for issue in summary["issues"]:
                self.logger.warning(f"{label}: {issue}")

        if not summary["valid"]:
            return pd.DataFrame(columns=self.COLUMNS)

        valid = np.ma.masked_invalid(np.ma.asarray(values, dtype=float)).compressed()
        counts, edges = np.histogram(valid, bins=bins)

        return pd.DataFrame({
            'bin_start': edges[:-1],
            'bin_end': edges[1:],
            'count': counts.astype(np.int64),
        })
