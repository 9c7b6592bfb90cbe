#!/usr/bin/env python3
"""
LTdiag Example: Disturbance map layers with a composite legend

This script demonstrates how to classify and render the products of a LandTrendr-style change image with LTdiag. A synthetic, dask-backed change image stands in for the output of the disturbance-detection algorithm; the script bins the year-of-detection band into the discrete palette classes, composes the magnitude, detection-year, duration, prevalence and rate legend panels, draws the layers with the composite legend and writes histograms of the detection year and magnitude bands to CSV.

It demonstrates the following key features:
- Lazy detection-year binning (nothing is computed until a layer is drawn)
- Legend labels that agree with the classified pixels
- Stacked legend anchored in the top-right corner
- Histogram summaries as pandas DataFrames

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

# Load relevant LTdiag modules
from ltdiag.processing import DeferredBandStack, LTConfig, LTLogger, PerformanceMonitor
from ltdiag.diagnostics import DisturbanceDiagnostics
from ltdiag.visualization import MatplotlibLayerSink, LTVisualizationStyle

import os
import numpy as np
import matplotlib.pyplot as plt

# Output location
outputDir = './output/'
os.makedirs(outputDir, exist_ok=True)

# Build a synthetic 200 x 300 change image with a fire scar and a slow decline patch
rng = np.random.default_rng(42)
ny, nx = 200, 300
yy, xx = np.mgrid[0:ny, 0:nx]

fire = (yy - 70) ** 2 + (xx - 90) ** 2 < 40 ** 2
decline = (yy > 110) & (xx > 160)

yod = np.full((ny, nx), np.nan)
yod[fire] = rng.integers(2002, 2004, fire.sum())
yod[decline] = rng.integers(1985, 2026, decline.sum())

mag = np.where(fire, rng.uniform(500, 800, (ny, nx)), rng.uniform(200, 400, (ny, nx)))
dur = np.where(fire, 1, rng.integers(5, 21, (ny, nx))).astype(float)
preval = rng.uniform(300, 800, (ny, nx))
rate = -mag / dur / 4.0

change_image = DeferredBandStack.from_arrays(
    {'yod': yod, 'mag': mag, 'dur': dur, 'preval': preval, 'rate': rate},
    chunks={'y': 100, 'x': 100},
)

# Define configuration: default domain and palettes, stacked legend in the top-right corner
cfg = LTConfig(legend_orientation='stacked', legend_position='top-right', figure_size=(12.0, 8.0))

logger = LTLogger(verbose=True)
monitor = PerformanceMonitor(logger)
diagnostics = DisturbanceDiagnostics(cfg, logger)

# -------------- Classify bands and compose legend (lazy) --------------

with monitor.timer("Product composition"):
    products = diagnostics.run(change_image)

for bin_ in products.bins:
    logger.info(f"class {bin_.index}: {bin_.label}")

# -------------- Draw layers: magnitude at the bottom, detection year on top --------------

sink = MatplotlibLayerSink(figsize=cfg.figure_size, dpi=cfg.dpi, logger=logger)

with monitor.timer("Rendering"):
    fig = sink.render(products.layers[:2], legend=products.legend,
                      title='LTdiag: Magnitude of Change and Year of Detection (binned)')
    LTVisualizationStyle.add_timestamp_and_branding(fig)
    LTVisualizationStyle.save_plot(fig, os.path.join(outputDir, 'ltdiag_disturbance_map'), ['png'], dpi=cfg.dpi)
    plt.close(fig)

# -------------- Histogram summaries --------------

with monitor.timer("Histograms"):
    tables = diagnostics.histograms(change_image)

for band, table in tables.items():
    table.to_csv(os.path.join(outputDir, f'ltdiag_hist_{band}.csv'), index=False)

monitor.print_summary()
