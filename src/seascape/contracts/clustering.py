"""Clustering stage contracts.

Enforces the structure of the merge hierarchy and of the partition table.
"""

import numpy as np
import pandas as pd

from seascape.contracts.base import require


def assert_hierarchy(linkage: np.ndarray, n_cells: int) -> None:
    """Enforce hierarchy contract.

    A complete-linkage hierarchy over n cells has n-1 merges, each row
    (id_a, id_b, height, size), with non-decreasing heights and a final
    merge containing every cell.
    """
    require(
        linkage.shape == (n_cells - 1, 4),
        f"Hierarchy contract violated: linkage shape {linkage.shape}, expected ({n_cells - 1}, 4)",
    )
    heights = linkage[:, 2]
    require(
        bool(np.all(np.diff(heights) >= 0)),
        "Hierarchy contract violated: merge heights are not monotonic",
    )
    require(
        int(linkage[-1, 3]) == n_cells,
        f"Hierarchy contract violated: root holds {int(linkage[-1, 3])} cells, expected {n_cells}",
    )


def assert_partitions(df: pd.DataFrame, ks) -> None:
    """Enforce partition contract: column k_<k> holds exactly k labels in [0, k)."""
    for k in ks:
        col = f"k_{k}"
        require(col in df.columns, f"Partition contract violated: missing column '{col}'")
        labels = df[col]
        require(
            not labels.isna().any(),
            f"Partition contract violated: '{col}' has missing labels",
        )
        require(
            labels.min() >= 0 and labels.max() < k,
            f"Partition contract violated: '{col}' labels outside [0, {k})",
        )
        require(
            labels.nunique() == k,
            f"Partition contract violated: '{col}' has {labels.nunique()} clusters, expected {k}",
        )
