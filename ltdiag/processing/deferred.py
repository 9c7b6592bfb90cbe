#!/usr/bin/env python3

"""
LTdiag Deferred Raster Fields

This module isolates the lazy evaluation model of the upstream change-detection products behind one seam. The disturbance bands produced by the external detection algorithm are never held as concrete in-memory arrays by LTdiag; they are xarray DataArrays, normally dask-backed, that describe a computation graph evaluated only when a layer is rendered or a statistic is requested. DeferredField wraps such an array together with an optional lazy validity mask and exposes pure transforms that return new deferred fields, plus an explicit evaluate() contract that materializes a numpy masked array without caching anything, so the same field can be evaluated repeatedly (once per render, once per histogram) with identical results. DeferredBandStack wraps the multi-band change image and hands out one deferred field per named band.

Classes:
    DeferredField: Immutable handle over a lazy xarray DataArray with an optional validity mask and an explicit evaluate() contract.
    DeferredBandStack: Multi-band change image exposing the yod, mag, dur, preval and rate bands as deferred fields.

Author: Rubaiat Islam
Institution: Mesoscale & Microscale Meteorology Laboratory, NCAR
Email: mrislam@ucar.edu
Date: October 2026
Version: 1.0.0
"""

import numpy as np
import xarray as xr
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

from .constants import CHANGE_BANDS
from .utils_validator import ConfigurationError


class DeferredField:
    """
    Immutable handle over a lazily evaluated raster field. The handle stores an xarray DataArray describing the per-pixel values and, optionally, a boolean DataArray of the same shape marking valid pixels; pixels where the mask is False are no-data. All transforms (apply, update_mask) build new handles around new lazy expressions and never compute. Only evaluate() triggers computation, and it keeps no reference to the computed result, which makes the handle side-effect free and idempotent under repeated evaluation.
    """

    def __init__(self, data: xr.DataArray, valid: Optional[xr.DataArray] = None,
                 name: Optional[str] = None) -> None:
        """
        Wrap a DataArray and an optional validity mask into a deferred field handle. The mask must have the same shape as the data; it is kept lazy alongside the data so that masking and value transforms are evaluated together by the compute engine.

        Parameters:
            data (xr.DataArray): Lazy (dask-backed) or eager per-pixel values.
            valid (Optional[xr.DataArray]): Boolean DataArray, True where the pixel carries data (default: None meaning every pixel is valid).
            name (Optional[str]): Display name of the field (default: the DataArray name).

        Returns:
            None
        """
        if not isinstance(data, xr.DataArray):
            raise TypeError(f"DeferredField expects an xarray.DataArray, got {type(data).__name__}")

        if valid is not None and valid.shape != data.shape:
            raise ValueError(f"Mask shape {valid.shape} does not match data shape {data.shape}")

        self._data = data
        self._valid = valid
        self._name = name if name is not None else data.name

    @classmethod
    def from_array(cls, values: Any, dims: Tuple[str, ...] = ("y", "x"),
                   chunks: Optional[Union[int, Dict[str, int]]] = None,
                   name: Optional[str] = None) -> 'DeferredField':
        """
        Build a deferred field from an in-memory array, chunking it with dask so that every downstream transform stays lazy. This is the entry point used by tests and examples to stand in for the remote detection output.

        Parameters:
            values (Any): Array-like per-pixel values.
            dims (Tuple[str, ...]): Dimension names for the DataArray (default: ("y", "x")).
            chunks (Optional[Union[int, Dict[str, int]]]): Dask chunk specification, None for a single chunk (default: None).
            name (Optional[str]): Field name (default: None).

        Returns:
            DeferredField: Lazy handle over the chunked values.
        """
        array = xr.DataArray(np.asarray(values), dims=dims, name=name)
        array = array.chunk(chunks if chunks is not None else {})
        return cls(array, name=name)

    @property
    def data(self) -> xr.DataArray:
        return self._data

    @property
    def valid(self) -> Optional[xr.DataArray]:
        return self._valid

    @property
    def name(self) -> Optional[str]:
        return self._name

    @property
    def shape(self) -> Tuple[int, ...]:
        return tuple(self._data.shape)

    @property
    def dtype(self) -> np.dtype:
        return self._data.dtype

    @property
    def is_lazy(self) -> bool:
        """True when the values are backed by a dask graph rather than a loaded array."""
        return self._data.chunks is not None

    def apply(self, func: Callable[[xr.DataArray], xr.DataArray],
              name: Optional[str] = None) -> 'DeferredField':
        """
        Apply a lazy per-pixel transform to the values and return a new handle carrying the same validity mask. The function receives and must return an xarray DataArray; with dask-backed data the result remains an unevaluated graph.

        Parameters:
            func (Callable[[xr.DataArray], xr.DataArray]): Transform expressed with xarray operations.
            name (Optional[str]): Name of the derived field (default: keep current name).

        Returns:
            DeferredField: New handle over the transformed values.
        """
        return DeferredField(func(self._data), valid=self._valid,
                             name=name if name is not None else self._name)

    def update_mask(self, condition: xr.DataArray) -> 'DeferredField':
        """
        Return a new handle whose validity is the logical AND of the current mask and condition. A pixel masked before stays masked; values are untouched.

        Parameters:
            condition (xr.DataArray): Boolean DataArray, True where pixels remain valid.

        Returns:
            DeferredField: New handle with the combined mask.
        """
        combined = condition if self._valid is None else (self._valid & condition)
        return DeferredField(self._data, valid=combined, name=self._name)

    def evaluate(self) -> np.ma.MaskedArray:
        """
        Materialize the field as a numpy masked array. Values and mask are computed together in a single dask pass; the computed arrays are returned to the caller and not retained by the handle, so every call re-runs the graph and yields identical results for identical inputs.

        Parameters:
            None

        Returns:
            np.ma.MaskedArray: Evaluated values with no-data pixels masked.
        """
        if self._valid is None:
            values = self._data.compute().values
            return np.ma.MaskedArray(values, mask=np.zeros(values.shape, dtype=bool))

        values, valid = xr.align(self._data, self._valid, join="exact")
        evaluated = xr.Dataset({"field": values, "valid": valid}).compute()
        mask = ~np.asarray(evaluated["valid"].values, dtype=bool)
        return np.ma.MaskedArray(evaluated["field"].values, mask=mask)

    def __repr__(self) -> str:
        state = "lazy" if self.is_lazy else "loaded"
        masked = ", masked" if self._valid is not None else ""
        return f"DeferredField(name={self._name!r}, shape={self.shape}, dtype={self.dtype}, {state}{masked})"


class DeferredBandStack:
    """
    Multi-band change image returned by the external disturbance-detection algorithm. The stack wraps an xarray Dataset whose data variables are the co-registered bands (yod, mag, dur, preval, rate) and hands each band out as a DeferredField without computing it.
    """

    def __init__(self, dataset: xr.Dataset, required_bands: Iterable[str] = CHANGE_BANDS) -> None:
        """
        Wrap a change-image Dataset, checking up front that every required band is present.

        Parameters:
            dataset (xr.Dataset): Dataset holding one data variable per band.
            required_bands (Iterable[str]): Bands that must exist (default: CHANGE_BANDS).

        Returns:
            None
        """
        missing = [band for band in required_bands if band not in dataset.data_vars]

        if missing:
            raise ConfigurationError(f"Change image is missing required bands: {missing}")

        self._dataset = dataset

    @classmethod
    def from_arrays(cls, bands: Mapping[str, Any], dims: Tuple[str, ...] = ("y", "x"),
                    chunks: Optional[Union[int, Dict[str, int]]] = None) -> 'DeferredBandStack':
        """
        Assemble a dask-backed change image from in-memory band arrays.

        Parameters:
            bands (Mapping[str, Any]): Band name to array-like values, all of the same shape.
            dims (Tuple[str, ...]): Dimension names (default: ("y", "x")).
            chunks (Optional[Union[int, Dict[str, int]]]): Dask chunk specification (default: single chunk).

        Returns:
            DeferredBandStack: Lazy multi-band stack.
        """
        dataset = xr.Dataset({band: (dims, np.asarray(values)) for band, values in bands.items()})
        return cls(dataset.chunk(chunks if chunks is not None else {}))

    @property
    def bands(self) -> Tuple[str, ...]:
        return tuple(str(name) for name in self._dataset.data_vars)

    def select(self, band: str) -> DeferredField:
        """Return one band as a deferred field."""
        if band not in self._dataset.data_vars:
            raise ConfigurationError(f"Unknown band {band!r}; available bands: {list(self.bands)}")
        return DeferredField(self._dataset[band], name=band)
