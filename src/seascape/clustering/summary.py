"""Cluster reports: per-cluster statistics and gridded label maps.

These are hand-off artifacts for the people drawing model polygons: a
table describing each cluster in physical units, and the labels put back
onto the lon/lat grid for mapping tools.
"""

import logging

import numpy as np
import pandas as pd
import xarray as xr

from seascape.contracts import KEY_COLUMNS, require
from seascape.ocean.feature_matrix import feature_columns, variable_of

__all__ = ['partition_columns', 'summarize_partitions', 'partitions_to_grid']

logger = logging.getLogger(__name__)

FILL_LABEL = -1


def partition_columns(partitions: pd.DataFrame) -> list[str]:
    """The ``k_<k>`` columns of a partition table, in order."""
    return [c for c in partitions.columns if c.startswith("k_")]


def summarize_partitions(partitions: pd.DataFrame, raw_matrix: pd.DataFrame) -> pd.DataFrame:
    """One row per (k, label): size, centroid and per-variable means.

    Parameters
    ----------
    partitions : pd.DataFrame
        Output of extract_partitions().
    raw_matrix : pd.DataFrame
        Feature matrix in physical units (before standardization). Rows are
        matched on (lon, lat); extra rows are ignored.

    Returns
    -------
    pd.DataFrame
        Columns: k, label, n_cells, lon_centroid, lat_centroid, then
        ``<variable>_mean`` averaged over all dates and member cells.
    """
    features = feature_columns(raw_matrix)
    variables = list(dict.fromkeys(variable_of(c) for c in features))

    per_cell = raw_matrix[list(KEY_COLUMNS)].copy()
    for var in variables:
        cols = [c for c in features if variable_of(c) == var]
        per_cell[var] = raw_matrix[cols].mean(axis=1, skipna=True)

    merged = partitions.merge(per_cell, on=list(KEY_COLUMNS), how="left", validate="one_to_one")

    rows = []
    for col in partition_columns(partitions):
        k = int(col[2:])
        grouped = merged.groupby(col, sort=True)
        stats = grouped.agg(
            n_cells=("lon", "size"),
            lon_centroid=("lon", "mean"),
            lat_centroid=("lat", "mean"),
        )
        means = grouped[variables].mean().add_suffix("_mean")
        stats = stats.join(means).reset_index().rename(columns={col: "label"})
        stats.insert(0, "k", k)
        rows.append(stats)

    summary = pd.concat(rows, ignore_index=True)
    logger.debug("Summarized %d clusters across %d partitions", len(summary), len(rows))
    return summary


def partitions_to_grid(partitions: pd.DataFrame, lon, lat) -> xr.Dataset:
    """Scatter partition labels back onto the full (lat, lon) grid.

    Cells outside the bounding box or dropped as empty get FILL_LABEL (-1).
    """
    lon = np.asarray(lon, dtype=float)
    lat = np.asarray(lat, dtype=float)
    lon_idx = pd.Index(lon).get_indexer(partitions["lon"].to_numpy())
    lat_idx = pd.Index(lat).get_indexer(partitions["lat"].to_numpy())
    require(
        bool((lon_idx >= 0).all() and (lat_idx >= 0).all()),
        "Partition cells do not lie on the given lon/lat grid",
    )

    data_vars = {}
    for col in partition_columns(partitions):
        grid = np.full((len(lat), len(lon)), FILL_LABEL, dtype=np.int32)
        grid[lat_idx, lon_idx] = partitions[col].to_numpy(dtype=np.int32)
        data_vars[col] = xr.DataArray(
            grid,
            dims=("lat", "lon"),
            attrs={
                "long_name": f"Cluster label, {col[2:]} clusters",
                "units": "1",
                "missing_label": FILL_LABEL,
            },
        )

    ds = xr.Dataset(
        data_vars=data_vars,
        coords={"lat": lat, "lon": lon},
        attrs={"title": "Ocean physical regime clusters", "linkage": "complete"},
    )
    return ds
