#!/usr/bin/env python3

"""
LTdiag Legend Composition

This module builds the renderer-agnostic legend tree of a disturbance map. A LegendEntry pairs one swatch color with one range label, a LegendPanel groups the entries of one rendered layer under a title, and a LegendContainer arranges several panels side by side or stacked and anchors the whole composite to one corner of the map. All three are frozen dataclasses built from static visualization parameters only; no raster data is ever evaluated to build a legend, so legends may be composed before, after or without rendering the layers. Construction preserves the order of entries and panels exactly as supplied, which is how the composite legend stays aligned with the order in which the layers were added to the map. Concrete drawing is left to the adaptors in legend_renderer.

Classes:
    Orientation: Arrangement of panels inside a container.
    LegendPosition: Screen corner the composite legend is anchored to.
    LegendEntry: One (swatch color, label) pair.
    LegendPanel: Titled, ordered group of legend entries for one layer.
    LegendContainer: Ordered composite of legend panels.

Functions:
    build_entries: Pair a palette with its labels slot by slot.
    build_continuous_panel: Panel for a linearly interpolated palette.
    build_discrete_panel: Panel for the binned detection-year classes.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, Sequence, Tuple, Union

from ..processing.binning import RangeBinner
from ..processing.constants import LEGEND_POSITIONS, ORIENTATION_SIDE_BY_SIDE, ORIENTATION_STACKED
from ..processing.labels import make_continuous_labels
from ..processing.utils_config import VisualizationParameters
from ..processing.utils_validator import ConfigValidator, ConfigurationError


class Orientation(Enum):
    STACKED = ORIENTATION_STACKED
    SIDE_BY_SIDE = ORIENTATION_SIDE_BY_SIDE

    @classmethod
    def parse(cls, value: Union[str, 'Orientation']) -> 'Orientation':
        """Accept an Orientation or its string value ('stacked', 'side-by-side')."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Invalid legend orientation: {value!r}. Choose from: {[o.value for o in cls]}"
            ) from None


class LegendPosition(Enum):
    TOP_LEFT = LEGEND_POSITIONS[0]
    TOP_RIGHT = LEGEND_POSITIONS[1]
    BOTTOM_LEFT = LEGEND_POSITIONS[2]
    BOTTOM_RIGHT = LEGEND_POSITIONS[3]

    @classmethod
    def parse(cls, value: Union[str, 'LegendPosition']) -> 'LegendPosition':
        """Accept a LegendPosition or its string value such as 'bottom-left'."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ConfigurationError(
                f"Invalid legend position: {value!r}. Choose from: {[p.value for p in cls]}"
            ) from None


@dataclass(frozen=True)
class LegendEntry:
    """One legend row: a color swatch and the range label printed next to it."""
    swatch_color: str
    label: str


def build_entries(palette: Sequence[str], labels: Sequence[str]) -> Tuple[LegendEntry, ...]:
    """
    Pair a palette with its labels slot by slot. Entry i always holds palette[i] and labels[i]; nothing is reordered, deduplicated or dropped. The lengths are compared explicitly because palettes and labels reach this function along two independent code paths (continuous and discrete) and a silent zip truncation would hide a configuration mistake.

    Parameters:
        palette (Sequence[str]): Ordered swatch colors in ascending value order.
        labels (Sequence[str]): Ordered labels, one per palette slot.

    Returns:
        Tuple[LegendEntry, ...]: Entries in palette order.
    """
    colors = tuple(palette)
    texts = tuple(labels)

    ConfigValidator.validate_arity(colors, texts)

    return tuple(LegendEntry(swatch_color=color, label=str(text)) for color, text in zip(colors, texts))


@dataclass(frozen=True)
class LegendPanel:
    """
    Titled block of legend entries for one rendered layer. The first entry is rendered first (topmost).

    Attributes:
        title (str): Panel heading, normally the layer name.
        entries (Tuple[LegendEntry, ...]): Rows in display order.
    """
    title: str
    entries: Tuple[LegendEntry, ...]

    @classmethod
    def build(cls, title: str, entries: Sequence[LegendEntry]) -> 'LegendPanel':
        """
        Compose a title and an ordered sequence of entries into a panel, preserving entry order.

        Parameters:
            title (str): Panel heading.
            entries (Sequence[LegendEntry]): Legend rows in display order.

        Returns:
            LegendPanel: Immutable panel.
        """
        if not isinstance(title, str):
            raise ConfigurationError(f"Legend panel title must be a string, got {title!r}")

        rows = tuple(entries)

        if not rows:
            raise ConfigurationError(f"Legend panel {title!r} has no entries")

        for row in rows:
            if not isinstance(row, LegendEntry):
                raise ConfigurationError(f"Legend panel {title!r} received a non-entry item: {row!r}")

        return cls(title=title, entries=rows)

    @property
    def colors(self) -> Tuple[str, ...]:
        return tuple(entry.swatch_color for entry in self.entries)

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(entry.label for entry in self.entries)

    def __len__(self) -> int:
        return len(self.entries)


def build_continuous_panel(title: str, params: VisualizationParameters, decimals: int = 0) -> LegendPanel:
    """
    Build the panel of a continuous layer. The range [min, max] of the visualization parameters is split into one equal-width interval per palette color and each interval is labelled with its bounds printed at the requested precision.

    Parameters:
        title (str): Panel heading.
        params (VisualizationParameters): Authored stretch of the layer.
        decimals (int): Decimal places printed for each bound (default: 0).

    Returns:
        LegendPanel: Panel with one entry per palette color.
    """
    labels = make_continuous_labels(params, decimals)
    return LegendPanel.build(title, build_entries(params.palette, labels))


def build_discrete_panel(title: str, palette: Sequence[str], binner: RangeBinner) -> LegendPanel:
    """
    Build the panel of the classified detection-year layer. Labels come from the binner's integer-year bins, so the panel reads exactly as the pixels were classified; the palette must hold one color per bin.

    Parameters:
        title (str): Panel heading.
        palette (Sequence[str]): Discrete palette, one color per bin.
        binner (RangeBinner): Binner used to classify the layer.

    Returns:
        LegendPanel: Panel with one entry per detection-year bin.
    """
    colors = ConfigValidator.validate_palette(palette, "yod_palette")
    return LegendPanel.build(title, build_entries(colors, binner.labels()))


@dataclass(frozen=True)
class LegendContainer:
    """
    Composite legend made of several panels. Panel order is the left-to-right (side-by-side) or top-to-bottom (stacked) display order and matches the order the layers were added to the map.

    Attributes:
        panels (Tuple[LegendPanel, ...]): Panels in display order.
        orientation (Orientation): Arrangement of the panels.
        position (LegendPosition): Anchor corner on the map.
    """
    panels: Tuple[LegendPanel, ...]
    orientation: Orientation = Orientation.SIDE_BY_SIDE
    position: LegendPosition = LegendPosition.BOTTOM_LEFT

    @classmethod
    def build(cls, panels: Sequence[LegendPanel],
              orientation: Union[str, Orientation] = Orientation.SIDE_BY_SIDE,
              position: Union[str, LegendPosition] = LegendPosition.BOTTOM_LEFT) -> 'LegendContainer':
        """
        Compose panels into a container in exactly the order supplied. Reordering the input reorders the output identically; panels are never sorted or merged.

        Parameters:
            panels (Sequence[LegendPanel]): Panels in display order.
            orientation (Union[str, Orientation]): 'side-by-side' or 'stacked' (default: side-by-side).
            position (Union[str, LegendPosition]): Anchor corner (default: bottom-left).

        Returns:
            LegendContainer: Immutable composite legend.
        """
        layout = Orientation.parse(orientation)
        anchor = LegendPosition.parse(position)
        blocks = tuple(panels)

        if not blocks:
            raise ConfigurationError("Legend container requires at least one panel")

        for block in blocks:
            if not isinstance(block, LegendPanel):
                raise ConfigurationError(f"Legend container received a non-panel item: {block!r}")

        return cls(panels=blocks, orientation=layout, position=anchor)

    @property
    def titles(self) -> Tuple[str, ...]:
        return tuple(panel.title for panel in self.panels)

    def __iter__(self) -> Iterator[LegendPanel]:
        return iter(self.panels)

    def __len__(self) -> int:
        return len(self.panels)
