"""Read gridded ocean-colour and SST rasters into validated variable groups.

This module handles loading per-variable directories of NetCDF rasters (one
file per time slice, e.g. NASA OB.DAAC Level-3 mapped monthly composites)
and turning them into explicit in-memory containers:

- RasterLayer: one 2D (lat, lon) snapshot of one variable at one date
- VariableGroup: the time series of layers for one variable
- LayerCollection: variable name -> VariableGroup, in configured order

Key capabilities:
- Decodes files with xarray (``_FillValue``/scale handled by mask-and-scale)
- Masks extra configured sentinels to NaN
- Takes the layer date from the coverage-start global attribute
- Validates that every layer in a group, and every group in a collection,
  sits on the exact same lon/lat grid

Unlike a streaming reader, failures here are fatal: a missing variable or a
shifted grid would silently corrupt every downstream feature column.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Iterable, Iterator, Optional, Sequence

import numpy as np
import pandas as pd
import xarray as xr

from seascape.contracts import (
    DuplicateLayerError,
    EmptyGroupError,
    MissingAttributeError,
    MissingVariableError,
    assert_layer_shape,
    assert_same_grid,
    require,
)

if TYPE_CHECKING:
    from seascape.schemas import InternalConfig

__all__ = [
    'RasterLayer',
    'VariableGroup',
    'LayerCollection',
    'GridLoader',
    'validate_group',
    'validate_collection',
    'parse_coverage_date',
]

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class RasterLayer:
    """One decoded grid snapshot for one variable at one date.

    ``values`` has shape (len(lat), len(lon)); missing cells are NaN.
    """
    variable: str
    timestamp: pd.Timestamp
    lon: np.ndarray = field(repr=False)
    lat: np.ndarray = field(repr=False)
    values: np.ndarray = field(repr=False)
    source: Optional[str] = None

    def __post_init__(self):
        assert_layer_shape(self.values, self.lon, self.lat, self.source or self.label)

    @property
    def label(self) -> str:
        """Feature column label, ``<variable>_<YYYY-MM-DD>``."""
        return f"{self.variable}_{self.timestamp:%Y-%m-%d}"


def validate_group(variable: str, layers: Sequence[RasterLayer]) -> None:
    """Validate that layers form one consistent variable group.

    Raises
    ------
    EmptyGroupError
        If there are no layers.
    CoordinateMismatchError
        If any layer's lon/lat differ from the first layer's.
    DuplicateLayerError
        If two layers share a date (they would map to one column).
    ContractViolation
        If a layer belongs to another variable.
    """
    require(len(layers) > 0, f"No layers for variable '{variable}'", EmptyGroupError)

    ref = layers[0]
    seen = {}
    for layer in layers:
        require(
            layer.variable == variable,
            f"Layer from {layer.source} holds '{layer.variable}', expected '{variable}'",
        )
        assert_same_grid(ref.lon, ref.lat, layer.lon, layer.lat,
                         variable=variable, reference=ref.source, source=layer.source)
        if layer.label in seen:
            raise DuplicateLayerError(
                f"Layers {seen[layer.label]} and {layer.source} both map to column '{layer.label}'"
            )
        seen[layer.label] = layer.source


class VariableGroup:
    """Time series of RasterLayers for one variable, sorted by date."""

    def __init__(self, variable: str, layers: Iterable[RasterLayer]):
        layers = sorted(layers, key=lambda layer: layer.timestamp)
        validate_group(variable, layers)
        self.variable = variable
        self.layers = tuple(layers)

    @property
    def lon(self) -> np.ndarray:
        return self.layers[0].lon

    @property
    def lat(self) -> np.ndarray:
        return self.layers[0].lat

    @property
    def labels(self) -> list[str]:
        return [layer.label for layer in self.layers]

    def __len__(self) -> int:
        return len(self.layers)

    def __iter__(self) -> Iterator[RasterLayer]:
        return iter(self.layers)

    def __repr__(self) -> str:
        return f"VariableGroup({self.variable!r}, n_layers={len(self)})"


def validate_collection(groups: Sequence[VariableGroup]) -> None:
    """All variable groups must share one grid (CoordinateMismatchError otherwise)."""
    if not groups:
        return
    ref = groups[0]
    for group in groups[1:]:
        assert_same_grid(ref.lon, ref.lat, group.lon, group.lat,
                         variable=group.variable,
                         reference=f"variable '{ref.variable}'",
                         source=f"variable '{group.variable}'")


class LayerCollection(Mapping):
    """Variable name -> VariableGroup, iterated in insertion order.

    Replaces positional list-of-lists bookkeeping: each group is looked up
    by its variable name.
    """

    def __init__(self, groups: Iterable[VariableGroup]):
        groups = list(groups)
        names = [g.variable for g in groups]
        require(len(set(names)) == len(names), f"Duplicate variable groups: {names}")
        validate_collection(groups)
        self._groups = {g.variable: g for g in groups}

    def __getitem__(self, variable: str) -> VariableGroup:
        return self._groups[variable]

    def __iter__(self) -> Iterator[str]:
        return iter(self._groups)

    def __len__(self) -> int:
        return len(self._groups)

    @property
    def lon(self) -> np.ndarray:
        return next(iter(self._groups.values())).lon

    @property
    def lat(self) -> np.ndarray:
        return next(iter(self._groups.values())).lat


def parse_coverage_date(raw, source: str = None) -> pd.Timestamp:
    """Parse a coverage-start attribute into a naive, day-truncated Timestamp.

    Accepts ISO strings such as ``2003-01-01T00:00:00.000Z`` or ``20030101``.
    """
    try:
        ts = pd.Timestamp(raw)
    except (TypeError, ValueError) as e:
        raise MissingAttributeError(
            f"Unparseable coverage date {raw!r} in {source}: {e}"
        ) from e
    if ts is pd.NaT:
        raise MissingAttributeError(f"Empty coverage date in {source}")
    if ts.tzinfo is not None:
        ts = ts.tz_convert(None)
    return ts.normalize()


class GridLoader:
    """Load per-variable raster time series from ``<input_dir>/<variable>/``.

    Configuration (from InternalConfig)
    ===================================
    - `input_dir` : root directory, one sub-directory per variable
    - `reader.file_glob` : file pattern inside each directory (default ``*.nc``)
    - `reader.lon_name`, `reader.lat_name` : coordinate names
    - `reader.date_attribute` : global attribute with the coverage start date
    - `reader.missing_values` : extra sentinels masked to NaN

    Notes
    -----
    - Files are opened one at a time and closed after extraction
    - Layers are returned sorted by date regardless of file name order

    Examples
    --------
    >>> loader = GridLoader(config)
    >>> collection = loader.load_collection()
    >>> collection["sst"].labels[:2]
    ['sst_2003-01-01', 'sst_2003-02-01']
    """

    def __init__(self, config: "InternalConfig"):
        self.config = config
        self.input_dir = Path(config.input_dir)
        self.file_glob = config.reader.file_glob
        self.lon_name = config.reader.lon_name
        self.lat_name = config.reader.lat_name
        self.date_attribute = config.reader.date_attribute
        self.missing_values = list(config.reader.missing_values)

    def list_files(self, variable: str) -> list[Path]:
        """Sorted raster files for one variable."""
        var_dir = self.input_dir / variable
        if not var_dir.is_dir():
            raise FileNotFoundError(f"Variable directory not found: {var_dir}")
        files = sorted(p for p in var_dir.glob(self.file_glob) if p.is_file())
        require(
            len(files) > 0,
            f"No files matching '{self.file_glob}' in {var_dir}",
            EmptyGroupError,
        )
        return files

    def read_layer(self, filepath: Path | str, variable: str) -> RasterLayer:
        """Read one raster file into a RasterLayer.

        Raises
        ------
        MissingVariableError
            If the variable is not in the file.
        MissingAttributeError
            If the coverage-date attribute is absent or unparseable.
        ContractViolation
            If the variable is not 2D over (lat, lon) after dropping
            singleton dimensions.
        """
        filepath = Path(filepath)
        source = str(filepath)

        with xr.open_dataset(filepath, mask_and_scale=True) as ds:
            if variable not in ds.data_vars:
                raise MissingVariableError(
                    f"Variable '{variable}' not found in {source} "
                    f"(available: {sorted(ds.data_vars)})",
                    variable=variable,
                    source=source,
                )
            if self.date_attribute not in ds.attrs:
                raise MissingAttributeError(
                    f"Attribute '{self.date_attribute}' not found in {source}"
                )
            timestamp = parse_coverage_date(ds.attrs[self.date_attribute], source)

            da = ds[variable]
            grid_dims = (self.lat_name, self.lon_name)
            for dim in grid_dims:
                require(dim in da.dims,
                        f"Variable '{variable}' in {source} has dims {da.dims}, missing '{dim}'")

            extra = [d for d in da.dims if d not in grid_dims]
            for dim in extra:
                require(da.sizes[dim] == 1,
                        f"Variable '{variable}' in {source} has non-singleton dim '{dim}'")
            if extra:
                da = da.isel({d: 0 for d in extra})

            da = da.transpose(*grid_dims)
            values = np.asarray(da.values, dtype=float)
            lon = np.asarray(ds[self.lon_name].values, dtype=float)
            lat = np.asarray(ds[self.lat_name].values, dtype=float)

        for sentinel in self.missing_values:
            values[values == sentinel] = np.nan

        logger.debug("Read %s %s from %s: shape=%s, valid=%d",
                     variable, timestamp.date(), filepath.name, values.shape,
                     int(np.isfinite(values).sum()))

        return RasterLayer(variable=variable, timestamp=timestamp,
                           lon=lon, lat=lat, values=values, source=source)

    def load_group(self, variable: str, files: Optional[Sequence[Path | str]] = None) -> VariableGroup:
        """Read every file of one variable and validate the group."""
        if files is None:
            files = self.list_files(variable)
        layers = [self.read_layer(f, variable) for f in files]
        group = VariableGroup(variable, layers)
        logger.info("Loaded %s: %d layers, %s to %s, grid %dx%d (lat x lon)",
                    variable, len(group),
                    group.layers[0].timestamp.date(), group.layers[-1].timestamp.date(),
                    len(group.lat), len(group.lon))
        return group

    def load_collection(self, variables: Optional[Sequence[str]] = None) -> LayerCollection:
        """Load all configured variables, in configured order."""
        variables = list(variables) if variables is not None else list(self.config.variables)
        return LayerCollection(self.load_group(v) for v in variables)
