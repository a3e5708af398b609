"""Feature matrix and cell record contracts.

Enforces the guarantees between assembly, filtering, normalization and
clustering: key columns present and unique, at least one feature column,
and no missing values once the missing-value policy has run.
"""

import numpy as np
import pandas as pd

from seascape.contracts.base import require
from seascape.contracts.failure import EmptyMatrixError

KEY_COLUMNS = ("lon", "lat")


def assert_feature_matrix(df: pd.DataFrame) -> None:
    """Enforce assembly stage contract.

    Raises
    ------
    ContractViolation
        If key columns are missing or duplicated, or no feature column exists.
    EmptyMatrixError
        If the matrix has no rows.
    """
    require(
        isinstance(df, pd.DataFrame),
        f"Matrix contract violated: got {type(df)}, expected DataFrame",
    )
    for col in KEY_COLUMNS:
        require(col in df.columns, f"Matrix contract violated: missing key column '{col}'")

    require(
        len(df.columns) > len(KEY_COLUMNS),
        "Matrix contract violated: no feature columns",
    )
    require(len(df) > 0, "Matrix contract violated: no grid cells", EmptyMatrixError)
    require(
        not df.duplicated(subset=list(KEY_COLUMNS)).any(),
        "Matrix contract violated: duplicate (lon, lat) keys",
    )


def assert_cell_records(df: pd.DataFrame) -> None:
    """Enforce the pre-clustering contract: every feature is finite."""
    assert_feature_matrix(df)
    features = df.drop(columns=list(KEY_COLUMNS)).to_numpy(dtype=float)
    n_bad = int((~np.isfinite(features)).sum())
    require(
        n_bad == 0,
        f"Cell record contract violated: {n_bad} missing or non-finite feature values",
    )
