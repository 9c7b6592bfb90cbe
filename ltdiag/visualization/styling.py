#!/usr/bin/env python3

"""
LTdiag Visualization Styling and Colormaps

This module turns visualization parameters into matplotlib colormaps and normalizations and provides the shared figure finishing helpers. Continuous layers (magnitude, duration, prevalence, rate) are drawn with a colormap linearly interpolated through the authored palette and a Normalize spanning [min, max], matching how the continuous legend labels partition the same range. The classified detection-year layer is drawn with a ListedColormap holding exactly one color per class and a BoundaryNorm with one bucket per integer class, so class i is always painted with palette[i], the same color its legend entry shows. The save_plot helper writes a figure in several formats with fast PNG compression.

Classes:
    LTVisualizationStyle: Static styling utilities shared by the layer and legend renderers.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import os
import numpy as np
import matplotlib.colors as mcolors
from matplotlib.figure import Figure
from datetime import datetime
from typing import List, Optional, Tuple

from ..processing.utils_config import VisualizationParameters
from ..processing.utils_validator import ConfigValidator


class LTVisualizationStyle:
    """
    Static styling utilities providing colormaps, normalizations and figure saving for LTdiag plots. All methods are stateless so that the layer sink and the legend renderer derive identical colors from identical parameters.
    """

    @staticmethod
    def continuous_colormap(params: VisualizationParameters,
                            name: str = "lt_continuous") -> Tuple[mcolors.Colormap, mcolors.Normalize]:
        """
        Build the colormap and normalization of a continuous layer. The palette is interpolated linearly in RGB between its colors over [min, max]; a single-color palette yields a flat ListedColormap.

        Parameters:
            params (VisualizationParameters): Stretch of the layer.
            name (str): Colormap name (default: "lt_continuous").

        Returns:
            Tuple[mcolors.Colormap, mcolors.Normalize]: Two-element tuple (colormap, norm).
        """
        colors = ConfigValidator.validate_palette(params.palette)

        if len(colors) == 1:
            cmap = mcolors.ListedColormap(list(colors), name=name)
        else:
            cmap = mcolors.LinearSegmentedColormap.from_list(name, list(colors))

        return cmap, mcolors.Normalize(vmin=params.min, vmax=params.max, clip=True)

    @staticmethod
    def discrete_colormap(params: VisualizationParameters,
                          name: str = "lt_discrete") -> Tuple[mcolors.ListedColormap, mcolors.BoundaryNorm]:
        """
        Build the colormap and normalization of a classified layer whose values are integer classes min..max. Boundaries sit half-way between consecutive classes so class i maps to palette[i - min] with no interpolation.

        Parameters:
            params (VisualizationParameters): Derived class-layer parameters, e.g. {min: 0, max: n_bins - 1}.
            name (str): Colormap name (default: "lt_discrete").

        Returns:
            Tuple[mcolors.ListedColormap, mcolors.BoundaryNorm]: Two-element tuple (colormap, norm).
        """
        colors = ConfigValidator.validate_palette(params.palette)
        n_classes = int(params.max) - int(params.min) + 1

        if n_classes != len(colors):
            raise ValueError(
                f"Class range {params.min}..{params.max} does not match {len(colors)} palette colors"
            )

        boundaries = np.arange(int(params.min), int(params.max) + 2) - 0.5
        cmap = mcolors.ListedColormap(list(colors), name=name)

        return cmap, mcolors.BoundaryNorm(boundaries, cmap.N)

    @staticmethod
    def add_timestamp_and_branding(fig: Figure) -> None:
        """Annotate the bottom-left corner of the figure with the LTdiag version and generation time."""
        if fig is not None:
            from .. import __version__

            timestamp = datetime.now().strftime('%Y-%m-%d %H:%M:%S UTC')
            fig.text(0.02, 0.02, f'Generated with LTdiag v{__version__} on: {timestamp}',
                     fontsize=8, alpha=0.7, transform=fig.transFigure)

    @staticmethod
    def save_plot(fig: Figure,
                  output_path: str,
                  formats: Optional[List[str]] = None,
                  bbox_inches: str = 'tight',
                  pad_inches: float = 0.1,
                  dpi: int = 100) -> List[str]:
        """
        Save a figure in one or more formats next to each other, creating the output directory when needed. PNG files use compression level 1, which writes several times faster than the default for a modest size increase.

        Parameters:
            fig (Figure): Figure to save.
            output_path (str): Base output path without extension.
            formats (Optional[List[str]]): Output formats (default: ['png']).
            bbox_inches (str): Bounding box mode (default: 'tight').
            pad_inches (float): Padding around the figure in inches (default: 0.1).
            dpi (int): Resolution of raster formats (default: 100).

        Returns:
            List[str]: Paths of the written files.

        Raises:
            ValueError: If figure is None.
        """
        if fig is None:
            raise ValueError("No figure to save. Create a plot first.")

        output_dir = os.path.dirname(output_path)
        if output_dir:
            os.makedirs(output_dir, exist_ok=True)

        written = []

        for fmt in formats or ['png']:
            full_path = f"{output_path}.{fmt}"
            save_kwargs = {'dpi': dpi, 'bbox_inches': bbox_inches, 'pad_inches': pad_inches, 'format': fmt}
            if fmt.lower() == 'png':
                save_kwargs['pil_kwargs'] = {'compress_level': 1}
            fig.savefig(full_path, **save_kwargs)
            print(f"Saved plot: {full_path}")
            written.append(full_path)

        return written
