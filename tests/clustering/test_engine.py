"""Tests for distances and the complete-linkage ClusterEngine."""

import numpy as np
import pandas as pd
import pytest
from scipy.spatial.distance import squareform

from seascape.clustering.engine import (
    ClusterEngine,
    ClusterHierarchy,
    pairwise_distances,
)
from seascape.contracts import ContractViolation

pytestmark = pytest.mark.unit


class TestDistances:

    def test_symmetric_zero_diagonal(self, cells):
        D = squareform(pairwise_distances(cells.iloc[:, 2:].to_numpy()))

        assert D.shape == (12, 12)
        np.testing.assert_array_equal(D, D.T)
        np.testing.assert_array_equal(np.diag(D), 0.0)

    def test_euclidean_values(self):
        X = np.array([[0.0, 0.0], [3.0, 4.0], [6.0, 8.0]])
        np.testing.assert_allclose(pairwise_distances(X), [5.0, 10.0, 5.0])

    def test_single_row_has_no_pairs(self):
        assert pairwise_distances(np.ones((1, 3))).shape == (0,)

    def test_package_exports_condensed_distances_only(self):
        import seascape.clustering as clustering

        assert "pairwise_distances" in clustering.__all__
        assert not any("matrix" in name for name in clustering.__all__)


class TestClusterEngine:

    def test_init_from_config(self, internal_config):
        engine = ClusterEngine(internal_config)
        assert engine.method == "complete"
        assert engine.metric == "euclidean"
        assert engine.max_cells == 15000

    def test_hierarchy_shape(self, internal_config, cells):
        hierarchy = ClusterEngine(internal_config).fit(cells)

        assert isinstance(hierarchy, ClusterHierarchy)
        assert hierarchy.linkage.shape == (11, 4)
        assert hierarchy.n_cells == 12
        assert hierarchy.linkage[-1, 3] == 12
        assert np.all(np.diff(hierarchy.heights) >= 0)

    def test_root_height_is_max_distance(self, internal_config, cells):
        # Complete linkage: the final merge height is the diameter of the data
        hierarchy = ClusterEngine(internal_config).fit(cells)
        D = squareform(pairwise_distances(cells.iloc[:, 2:].to_numpy()))
        assert hierarchy.heights[-1] == pytest.approx(D.max())

    def test_keys_follow_row_order(self, internal_config, cells):
        hierarchy = ClusterEngine(internal_config).fit(cells)
        pd.testing.assert_frame_equal(hierarchy.keys, cells[["lon", "lat"]])

    def test_deterministic(self, internal_config, cells):
        a = ClusterEngine(internal_config).fit(cells)
        b = ClusterEngine(internal_config).fit(cells.copy())
        np.testing.assert_array_equal(a.linkage, b.linkage)

    def test_to_dataframe(self, internal_config, cells):
        table = ClusterEngine(internal_config).fit(cells).to_dataframe()

        assert list(table.columns) == ["step", "cluster_a", "cluster_b", "height", "size"]
        assert table["step"].tolist() == list(range(1, 12))
        assert table["size"].iloc[-1] == 12

    def test_missing_values_rejected(self, internal_config, cells):
        cells.iloc[0, 2] = np.nan
        with pytest.raises(ContractViolation):
            ClusterEngine(internal_config).fit(cells)

    def test_single_cell_rejected(self, internal_config, cells):
        with pytest.raises(ContractViolation, match="at least 2"):
            ClusterEngine(internal_config).fit(cells.iloc[:1])

    def test_max_cells_enforced(self, make_config, cells):
        config = make_config(clustering={"max_cells": 10})
        with pytest.raises(ContractViolation, match="max_cells=10"):
            ClusterEngine(config).fit(cells)
