"""Tests for cluster summaries and gridded label maps."""

import numpy as np
import pandas as pd
import pytest

from seascape.clustering.summary import (
    FILL_LABEL,
    partition_columns,
    partitions_to_grid,
    summarize_partitions,
)
from seascape.contracts import ContractViolation

pytestmark = pytest.mark.unit


@pytest.fixture
def partitions():
    return pd.DataFrame({
        "lon": [1.0, 2.0, 1.0, 2.0],
        "lat": [11.0, 11.0, 12.0, 12.0],
        "k_2": [0, 0, 1, 1],
        "k_3": [0, 1, 2, 2],
    })


@pytest.fixture
def raw_matrix():
    return pd.DataFrame({
        "lon": [1.0, 2.0, 1.0, 2.0, 3.0],
        "lat": [11.0, 11.0, 12.0, 12.0, 12.0],
        "sst_2003-01-01": [10.0, 12.0, 20.0, 22.0, 99.0],
        "sst_2003-02-01": [12.0, np.nan, 22.0, 24.0, 99.0],
        "chlor_a_2003-01-01": [0.1, 0.3, 1.0, 2.0, 9.0],
    })


def test_partition_columns(partitions):
    assert partition_columns(partitions) == ["k_2", "k_3"]


class TestSummarize:

    def test_one_row_per_cluster(self, partitions, raw_matrix):
        summary = summarize_partitions(partitions, raw_matrix)

        assert len(summary) == 2 + 3
        assert summary["k"].tolist() == [2, 2, 3, 3, 3]
        assert summary["label"].tolist() == [0, 1, 0, 1, 2]
        assert list(summary.columns) == [
            "k", "label", "n_cells", "lon_centroid", "lat_centroid", "sst_mean", "chlor_a_mean",
        ]

    def test_values_in_physical_units(self, partitions, raw_matrix):
        summary = summarize_partitions(partitions, raw_matrix).set_index(["k", "label"])

        row = summary.loc[(2, 0)]
        assert row["n_cells"] == 2
        assert row["lon_centroid"] == pytest.approx(1.5)
        assert row["lat_centroid"] == pytest.approx(11.0)
        # per-cell sst means: 11.0 and 12.0 (NaN skipped)
        assert row["sst_mean"] == pytest.approx(11.5)
        assert row["chlor_a_mean"] == pytest.approx(0.2)

    def test_cells_outside_partitions_ignored(self, partitions, raw_matrix):
        summary = summarize_partitions(partitions, raw_matrix)
        assert summary.loc[summary["k"] == 2, "n_cells"].sum() == 4
        assert summary["sst_mean"].max() < 99.0


class TestPartitionsToGrid:

    def test_labels_on_grid(self, partitions):
        lon = np.array([1.0, 2.0, 3.0])
        lat = np.array([11.0, 12.0])
        ds = partitions_to_grid(partitions, lon, lat)

        assert set(ds.data_vars) == {"k_2", "k_3"}
        assert ds["k_2"].dims == ("lat", "lon")
        np.testing.assert_array_equal(ds["k_2"].values, [[0, 0, FILL_LABEL], [1, 1, FILL_LABEL]])
        np.testing.assert_array_equal(ds["k_3"].values, [[0, 1, FILL_LABEL], [2, 2, FILL_LABEL]])
        assert ds["k_3"].dtype == np.int32

    def test_attributes(self, partitions):
        ds = partitions_to_grid(partitions, [1.0, 2.0], [11.0, 12.0])
        assert ds.attrs["linkage"] == "complete"
        assert ds["k_2"].attrs["missing_label"] == FILL_LABEL

    def test_off_grid_cells_rejected(self, partitions):
        with pytest.raises(ContractViolation):
            partitions_to_grid(partitions, [1.5, 2.5], [11.0, 12.0])
