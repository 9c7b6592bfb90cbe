#!/usr/bin/env python3

"""
LTdiag Legend Rendering Adaptors

This module translates the renderer-agnostic legend tree built in legend.py into concrete output. MatplotlibLegendRenderer draws a LegendContainer on a matplotlib Axes with offsetbox artists: every panel becomes a vertical pack of a bold title followed by one row per entry (a bordered color swatch and its label), panels are packed horizontally or vertically according to the container orientation, and the composite is anchored to the configured corner inside a translucent white frame. DictLegendRenderer produces the same tree as nested dictionaries for web front ends or JSON export. Neither adaptor evaluates raster data.

Classes:
    MatplotlibLegendRenderer: Draws a LegendContainer with matplotlib offsetbox artists.
    DictLegendRenderer: Serializes a LegendContainer into JSON-ready dictionaries.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.figure import Figure
from matplotlib.offsetbox import AnchoredOffsetbox, DrawingArea, HPacker, TextArea, VPacker
from matplotlib.patches import Rectangle
from typing import Any, Dict, Optional, Tuple

from .legend import LegendContainer, LegendPanel, LegendPosition, Orientation


class MatplotlibLegendRenderer:
    """
    Matplotlib adaptor for composite legends. Styling mirrors the map legend of the disturbance products: 20 px swatches with a grey border, a bold 12 pt panel title, 10 pt entry labels and a white background at 85 % opacity.
    """

    LOCATIONS = {
        LegendPosition.TOP_LEFT: 'upper left',
        LegendPosition.TOP_RIGHT: 'upper right',
        LegendPosition.BOTTOM_LEFT: 'lower left',
        LegendPosition.BOTTOM_RIGHT: 'lower right',
    }

    def __init__(self, swatch_size: Tuple[float, float] = (20.0, 12.0), border_color: str = '#666',
                 title_fontsize: float = 12.0, label_fontsize: float = 10.0,
                 background: str = 'white', background_alpha: float = 0.85,
                 panel_sep: float = 16.0) -> None:
        """
        Store the drawing style.

        Parameters:
            swatch_size (Tuple[float, float]): Swatch width and height in points (default: (20, 12)).
            border_color (str): Swatch border color (default: '#666').
            title_fontsize (float): Panel title font size (default: 12).
            label_fontsize (float): Entry label font size (default: 10).
            background (str): Frame face color (default: 'white').
            background_alpha (float): Frame opacity (default: 0.85).
            panel_sep (float): Spacing between panels in points (default: 16).

        Returns:
            None
        """
        self.swatch_size = swatch_size
        self.border_color = border_color
        self.title_fontsize = title_fontsize
        self.label_fontsize = label_fontsize
        self.background = background
        self.background_alpha = background_alpha
        self.panel_sep = panel_sep

    def _swatch(self, color: str) -> DrawingArea:
        width, height = self.swatch_size
        area = DrawingArea(width, height, 0, 0)
        area.add_artist(Rectangle((0, 0), width, height, facecolor=color,
                                  edgecolor=self.border_color, linewidth=1.0))
        return area

    def panel_box(self, panel: LegendPanel) -> VPacker:
        """
        Build the offsetbox of one panel: its title followed by entry rows in entry order, first entry on top.

        Parameters:
            panel (LegendPanel): Panel to draw.

        Returns:
            VPacker: Packed title and rows.
        """
        title = TextArea(panel.title, textprops={'fontweight': 'bold', 'fontsize': self.title_fontsize})
        rows = [
            HPacker(children=[self._swatch(entry.swatch_color),
                              TextArea(entry.label, textprops={'fontsize': self.label_fontsize})],
                    align='center', pad=0, sep=6)
            for entry in panel.entries
        ]
        return VPacker(children=[title] + rows, align='left', pad=0, sep=4)

    def draw(self, ax: Axes, container: LegendContainer) -> AnchoredOffsetbox:
        """
        Draw the composite legend on an axes. Panels keep the container order, left to right when side by side and top to bottom when stacked.

        Parameters:
            ax (Axes): Target axes.
            container (LegendContainer): Composite legend.

        Returns:
            AnchoredOffsetbox: The artist added to the axes.
        """
        boxes = [self.panel_box(panel) for panel in container.panels]

        if container.orientation is Orientation.SIDE_BY_SIDE:
            packed = HPacker(children=boxes, align='top', pad=0, sep=self.panel_sep)
        else:
            packed = VPacker(children=boxes, align='left', pad=0, sep=self.panel_sep)

        anchored = AnchoredOffsetbox(loc=self.LOCATIONS[container.position], child=packed,
                                     pad=0.6, borderpad=0.5, frameon=True)
        anchored.patch.set_facecolor(self.background)
        anchored.patch.set_alpha(self.background_alpha)
        anchored.patch.set_edgecolor('none')

        ax.add_artist(anchored)
        return anchored

    def render_figure(self, container: LegendContainer,
                      figsize: Optional[Tuple[float, float]] = None) -> Figure:
        """
        Draw the composite legend alone on a new figure with hidden axes.

        Parameters:
            container (LegendContainer): Composite legend.
            figsize (Optional[Tuple[float, float]]): Figure size in inches (default: matplotlib default).

        Returns:
            Figure: Figure holding the legend.
        """
        fig, ax = plt.subplots(figsize=figsize)
        ax.set_axis_off()
        self.draw(ax, container)
        return fig


class DictLegendRenderer:
    """Serializes a legend tree into plain dictionaries and lists."""

    def render(self, container: LegendContainer) -> Dict[str, Any]:
        """
        Convert the container into a JSON-ready mapping that keeps panel and entry order.

        Parameters:
            container (LegendContainer): Composite legend.

        Returns:
            Dict[str, Any]: Mapping with orientation, position and panels keys.
        """
        return {
            'orientation': container.orientation.value,
            'position': container.position.value,
            'panels': [
                {
                    'title': panel.title,
                    'entries': [{'color': entry.swatch_color, 'label': entry.label}
                                for entry in panel.entries],
                }
                for panel in container.panels
            ],
        }
