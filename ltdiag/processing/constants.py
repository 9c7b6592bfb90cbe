#!/usr/bin/env python3

"""
Shared constants for the ltdiag package.

Band names, layer display names, legend titles, default palettes and the
interpretation texts of the disturbance products live here so that the
configuration, pipeline and CLI modules agree on them.
"""

BAND_YOD = "yod"
BAND_MAG = "mag"
BAND_DUR = "dur"
BAND_PREVAL = "preval"
BAND_RATE = "rate"

CHANGE_BANDS = (BAND_YOD, BAND_MAG, BAND_DUR, BAND_PREVAL, BAND_RATE)

# Map layers and legend panels are composed in this order.
LAYER_ORDER = (BAND_MAG, BAND_YOD, BAND_DUR, BAND_PREVAL, BAND_RATE)

LAYER_NAMES = {
    BAND_MAG: "Magnitude of Change",
    BAND_YOD: "Year of Detection (binned)",
    BAND_DUR: "Duration",
    BAND_PREVAL: "Prevalence",
    BAND_RATE: "Rate",
}

LEGEND_TITLES = {
    BAND_MAG: "Magnitude of Change",
    BAND_YOD: "Year of Detection (binned)",
    BAND_DUR: "Duration (years)",
    BAND_PREVAL: "Prevalence",
    BAND_RATE: "Rate",
}

DEFAULT_START_YEAR = 1985
DEFAULT_END_YEAR = 2025

DEFAULT_YOD_PALETTE = ['#9400D3', '#4B0082', '#0000FF', '#00FF00', '#FFFF00', '#FF7F00', '#FF0000']

DEFAULT_VIS_PARAMS = {
    BAND_MAG: {'min': 200, 'max': 800,
               'palette': ['#ffffcc', '#a1dab4', '#41b6c4', '#2c7fb8', '#253494']},
    BAND_DUR: {'min': 1, 'max': 20,
               'palette': ['#f7fcf0', '#ccebc5', '#7bccc4', '#2b8cbe', '#084081']},
    BAND_PREVAL: {'min': 100, 'max': 800,
                  'palette': ['#fff7ec', '#fee8c8', '#fdd49e', '#fc8d59', '#d7301f', '#7f0000']},
    BAND_RATE: {'min': -100, 'max': 100,
                'palette': ['#67001f', '#d6604d', '#fddbc7', '#d1e5f0', '#4393c3', '#2166ac']},
}

ORIENTATION_STACKED = "stacked"
ORIENTATION_SIDE_BY_SIDE = "side-by-side"

LEGEND_POSITIONS = ("top-left", "top-right", "bottom-left", "bottom-right")
DEFAULT_LEGEND_POSITION = "bottom-left"

DISCRETE_LABEL_SEPARATOR = " - "
CONTINUOUS_LABEL_SEPARATOR = " – "

PRODUCT_DESCRIPTIONS = {
    "Magnitude of Change": (
        "Represents the absolute spectral distance (usually from NBR or NDVI) between the "
        "pre-disturbance state and the lowest point of disturbance.\n"
        "- Higher magnitude means more severe vegetation loss or disturbance.\n"
        "- Lower magnitude suggests subtle change, possibly selective thinning or minor events.\n"
        "- Useful for distinguishing high-severity fire, clearcut logging, or stand-replacing "
        "events from lighter disturbances."
    ),
    "Duration": (
        "Duration is the number of consecutive years over which a disturbance occurs.\n"
        "- Short duration (1-2 years) often represents abrupt events (fire, clearcut).\n"
        "- Long duration (5-20 years) indicates gradual processes (insect outbreak, slow "
        "decline, chronic stress).\n"
        "- Helps differentiate pulse disturbances from long-term degradation."
    ),
    "Year of Detection": (
        "The calendar year when LandTrendr identifies the start of a disturbance segment.\n"
        "- Mapped discretely into bins or per-year colors.\n"
        "- Key for linking disturbance events with known drivers (fire records, storm events, "
        "land-use change).\n"
        "- Provides temporal precision for disturbance monitoring."
    ),
    "Rate of Change": (
        "The slope of the fitted LandTrendr segment representing disturbance.\n"
        "- Calculated as magnitude divided by duration.\n"
        "- Steeper rates imply abrupt disturbances (e.g., fire).\n"
        "- Gentle slopes imply slow declines or progressive thinning.\n"
        "- Complements magnitude and duration to describe disturbance dynamics."
    ),
    "Prevalence (Pre-Change Value)": (
        "The spectral index value before the disturbance event.\n"
        "- High pre-change values suggest dense, healthy vegetation before disturbance.\n"
        "- Low pre-change values indicate already sparse or degraded vegetation.\n"
        "- Useful for contextualizing magnitude: the same drop in index can mean different "
        "ecological impacts depending on the starting condition."
    ),
}

PRODUCT_REFERENCE = (
    "OpenMRV LandTrendr Module - "
    "https://openmrv.org/web/guest/w/modules/mrv/modules_2/landtrendr"
)
