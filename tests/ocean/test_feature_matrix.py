"""Tests for FeatureMatrixBuilder and assemble_feature_matrix."""

import numpy as np
import pandas as pd
import pytest

from seascape.contracts import CoordinateMismatchError, DuplicateLayerError, EmptyMatrixError
from seascape.ocean.feature_matrix import (
    FeatureMatrixBuilder,
    assemble_feature_matrix,
    feature_columns,
    variable_of,
)
from seascape.ocean.loader import LayerCollection, RasterLayer, VariableGroup

pytestmark = pytest.mark.unit

LON = np.array([0.0, 1.0, 2.0, 3.0, 4.0])
LAT = np.array([10.0, 11.0, 12.0, 13.0])


def _layer(variable, date, fill=None, lon=LON, lat=LAT):
    if fill is None:
        # encode position so row mapping can be checked: value = 100*j + i
        values = 100.0 * np.arange(len(lat))[:, None] + np.arange(len(lon))[None, :]
    else:
        values = np.full((len(lat), len(lon)), fill, dtype=float)
    return RasterLayer(variable, pd.Timestamp(date), lon, lat, values, source=f"{variable}_{date}.nc")


def _collection(variables=("sst", "chlor_a"), dates=("2003-01-01", "2003-02-01")):
    return LayerCollection(
        VariableGroup(v, [_layer(v, d) for d in dates]) for v in variables
    )


class TestBoundingBox:

    def test_row_count_is_strict_product(self):
        # lon in (0, 4) -> 1, 2, 3; lat in (10, 13) -> 11, 12
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        assert builder.n_cells == 3 * 2

    def test_cells_on_bounds_excluded(self):
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        builder.append_layer(_layer("sst", "2003-01-01"))
        df = builder.build()

        assert not df["lon"].isin([0.0, 4.0]).any()
        assert not df["lat"].isin([10.0, 13.0]).any()

    def test_wide_bbox_keeps_all(self):
        builder = FeatureMatrixBuilder(LON, LAT, (-1.0, 5.0, 9.0, 14.0))
        assert builder.n_cells == 20

    def test_empty_bbox(self):
        with pytest.raises(EmptyMatrixError):
            FeatureMatrixBuilder(LON, LAT, (0.2, 0.8, 10.0, 13.0))


class TestBuild:

    def test_row_order_lat_major(self):
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        builder.append_layer(_layer("sst", "2003-01-01"))
        df = builder.build()

        assert df["lat"].tolist() == [11.0, 11.0, 11.0, 12.0, 12.0, 12.0]
        assert df["lon"].tolist() == [1.0, 2.0, 3.0, 1.0, 2.0, 3.0]
        # value = 100 * lat_index + lon_index
        assert df["sst_2003-01-01"].tolist() == [101.0, 102.0, 103.0, 201.0, 202.0, 203.0]

    def test_columns_grouped_by_variable_then_date(self):
        df = assemble_feature_matrix(_collection(), (-1.0, 5.0, 9.0, 14.0))

        assert list(df.columns) == [
            "lon", "lat",
            "sst_2003-01-01", "sst_2003-02-01",
            "chlor_a_2003-01-01", "chlor_a_2003-02-01",
        ]
        assert feature_columns(df) == list(df.columns[2:])

    def test_missing_values_kept(self):
        layer = _layer("sst", "2003-01-01")
        layer.values[2, 2] = np.nan
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        builder.append_layer(layer)
        df = builder.build()

        row = df[(df["lon"] == 2.0) & (df["lat"] == 12.0)]
        assert row["sst_2003-01-01"].isna().all()
        assert df["sst_2003-01-01"].notna().sum() == 5

    def test_mismatched_layer_rejected(self):
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        with pytest.raises(CoordinateMismatchError):
            builder.append_layer(_layer("sst", "2003-01-01", lon=LON + 0.25))

    def test_duplicate_column_rejected(self):
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        builder.append_layer(_layer("sst", "2003-01-01"))
        with pytest.raises(DuplicateLayerError):
            builder.append_layer(_layer("sst", "2003-01-01", fill=1.0))

    def test_labels_in_append_order(self):
        builder = FeatureMatrixBuilder(LON, LAT, (0.0, 4.0, 10.0, 13.0))
        builder.append_group(VariableGroup("par", [_layer("par", "2003-02-01"),
                                                   _layer("par", "2003-01-01")]))
        assert builder.labels == ["par_2003-01-01", "par_2003-02-01"]


@pytest.mark.parametrize("label, variable", [
    ("sst_2003-01-01", "sst"),
    ("chlor_a_2003-01-01", "chlor_a"),
    ("Kd_490_2010-12-01", "Kd_490"),
])
def test_variable_of(label, variable):
    assert variable_of(label) == variable
