"""Assemble variable groups into one wide per-cell feature matrix.

Each 2D layer is flattened row-major (latitude-major, longitude-minor) and
becomes one column labelled ``<variable>_<YYYY-MM-DD>``. Rows are the grid
cells of the shared lon/lat grid that fall strictly inside the bounding box.

The bounding-box mask is computed once, when the builder is created, and
reused for every appended layer, so every column has the same row count and
row order by construction.
"""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from seascape.contracts import (
    KEY_COLUMNS,
    DuplicateLayerError,
    EmptyMatrixError,
    assert_feature_matrix,
    assert_same_grid,
    require,
)
from seascape.ocean.loader import LayerCollection, RasterLayer, VariableGroup

__all__ = [
    'FeatureMatrixBuilder',
    'assemble_feature_matrix',
    'feature_columns',
    'variable_of',
]

logger = logging.getLogger(__name__)


def feature_columns(df: pd.DataFrame) -> list[str]:
    """All non-key columns, in order."""
    return [c for c in df.columns if c not in KEY_COLUMNS]


def variable_of(label: str) -> str:
    """Variable name of a feature label (``chlor_a_2003-01-01`` -> ``chlor_a``)."""
    return label.rsplit("_", 1)[0]


class FeatureMatrixBuilder:
    """Incrementally build a FeatureMatrix one layer (column) at a time.

    Parameters
    ----------
    lon, lat : array-like
        Shared coordinate vectors of every layer to be appended.
    bbox : tuple of float
        (lon_min, lon_max, lat_min, lat_max). Bounds are exclusive:
        a cell lying exactly on a bound is dropped.

    Examples
    --------
    >>> builder = FeatureMatrixBuilder(group.lon, group.lat, (-72, -64, 40, 46))
    >>> builder.append_group(group)
    >>> df = builder.build()
    """

    def __init__(self, lon, lat, bbox: Sequence[float]):
        self.lon = np.asarray(lon, dtype=float)
        self.lat = np.asarray(lat, dtype=float)
        lon_min, lon_max, lat_min, lat_max = bbox

        # meshgrid(lon, lat) has shape (nlat, nlon): ravel() matches the
        # row-major flatten of a (lat, lon) layer.
        lon_grid, lat_grid = np.meshgrid(self.lon, self.lat)
        flat_lon = lon_grid.ravel()
        flat_lat = lat_grid.ravel()

        self._mask = (
            (flat_lon > lon_min) & (flat_lon < lon_max)
            & (flat_lat > lat_min) & (flat_lat < lat_max)
        )
        require(
            bool(self._mask.any()),
            f"No grid cells strictly inside bbox lon ({lon_min}, {lon_max}), lat ({lat_min}, {lat_max})",
            EmptyMatrixError,
        )
        self._keys = pd.DataFrame({"lon": flat_lon[self._mask], "lat": flat_lat[self._mask]})
        self._columns: dict[str, np.ndarray] = {}

        logger.debug("Bounding box keeps %d of %d grid cells", self.n_cells, self._mask.size)

    @property
    def n_cells(self) -> int:
        return len(self._keys)

    @property
    def labels(self) -> list[str]:
        return list(self._columns)

    def append_layer(self, layer: RasterLayer) -> None:
        """Flatten, bbox-filter and append one layer as a column."""
        assert_same_grid(self.lon, self.lat, layer.lon, layer.lat,
                         variable=layer.variable, reference="feature matrix grid",
                         source=layer.source)
        if layer.label in self._columns:
            raise DuplicateLayerError(
                f"Column '{layer.label}' already in feature matrix (from {layer.source})"
            )
        self._columns[layer.label] = layer.values.ravel()[self._mask].astype(float)

    def append_group(self, group: VariableGroup) -> None:
        """Append every layer of a group, in date order."""
        for layer in group:
            self.append_layer(layer)
        logger.debug("Appended %d columns for %s", len(group), group.variable)

    def build(self) -> pd.DataFrame:
        """Return the FeatureMatrix: lon, lat, then feature columns in append order."""
        require(len(self._columns) > 0, "Feature matrix has no feature columns")
        features = pd.DataFrame(self._columns, index=self._keys.index)
        df = pd.concat([self._keys, features], axis=1)
        assert_feature_matrix(df)
        return df


def assemble_feature_matrix(collection: LayerCollection, bbox: Sequence[float]) -> pd.DataFrame:
    """Build the FeatureMatrix from every group of a collection, in order."""
    builder = FeatureMatrixBuilder(collection.lon, collection.lat, bbox)
    for variable in collection:
        builder.append_group(collection[variable])
    df = builder.build()
    logger.info("Feature matrix: %d cells x %d features (%d variables)",
                len(df), len(df.columns) - len(KEY_COLUMNS), len(collection))
    return df
