"""Row filtering, standardization and missing-value handling.

Raw variables live on incompatible scales (degrees C, mg m^-3, Einstein
m^-2 d^-1, m^-1). Without standardization the distance between cells is
dominated by whichever variable has the largest numeric spread, so these
steps are mandatory before clustering.

Policies are explicit and configurable:

- Degenerate columns (zero or undefined variance): ``"zero"`` sets the
  column to 0 where observed, ``"fail"`` raises DegenerateColumnError.
- Partially missing cells after standardization: ``"impute"`` fills with
  the column mean (0 in standardized space), ``"reject"`` drops the row.
"""

import logging
from dataclasses import dataclass
from typing import Literal

import pandas as pd

from seascape.contracts import (
    DegenerateColumnError,
    EmptyMatrixError,
    assert_cell_records,
    require,
)
from seascape.ocean.feature_matrix import feature_columns

__all__ = [
    'ScalingTable',
    'drop_empty_rows',
    'standardize',
    'apply_missing_policy',
]

logger = logging.getLogger(__name__)


def drop_empty_rows(df: pd.DataFrame) -> pd.DataFrame:
    """Drop cells with no valid observation in any feature column.

    Typically land or permanently cloud-covered cells. A cell with a single
    valid value anywhere is kept.

    Raises
    ------
    EmptyMatrixError
        If every cell is empty.
    """
    features = feature_columns(df)
    empty = df[features].isna().all(axis=1)
    out = df.loc[~empty].reset_index(drop=True)

    require(
        len(out) > 0,
        f"All {len(df)} grid cells have no valid observation",
        EmptyMatrixError,
    )
    if empty.any():
        logger.info("Dropped %d of %d cells with no valid observation", int(empty.sum()), len(df))
    return out


@dataclass(frozen=True)
class ScalingTable:
    """Per-column statistics used for standardization.

    ``stats`` is indexed by feature label with columns mean, std, n_valid,
    degenerate.
    """
    stats: pd.DataFrame

    @property
    def degenerate_columns(self) -> list[str]:
        return list(self.stats.index[self.stats["degenerate"].to_numpy(dtype=bool)])


def standardize(df: pd.DataFrame,
                degenerate: Literal["zero", "fail"] = "zero") -> tuple[pd.DataFrame, ScalingTable]:
    """Rescale every feature column to zero mean and unit sample variance.

    Mean and standard deviation (ddof=1) are computed over non-missing
    values; missing entries stay missing.

    Parameters
    ----------
    df : pd.DataFrame
        Filtered feature matrix.
    degenerate : {"zero", "fail"}
        Policy for columns whose std is zero or undefined (fewer than two
        valid values).

    Returns
    -------
    (pd.DataFrame, ScalingTable)
        New standardized frame and the statistics used.

    Raises
    ------
    DegenerateColumnError
        Under the "fail" policy, naming every degenerate column.
    """
    features = feature_columns(df)
    values = df[features]

    mean = values.mean(axis=0)
    std = values.std(axis=0, ddof=1)
    n_valid = values.notna().sum(axis=0)
    is_degenerate = ~(std > 0)  # catches 0 and NaN

    stats = pd.DataFrame({
        "mean": mean,
        "std": std,
        "n_valid": n_valid,
        "degenerate": is_degenerate,
    })
    table = ScalingTable(stats)

    bad = table.degenerate_columns
    if bad:
        if degenerate == "fail":
            raise DegenerateColumnError(
                f"{len(bad)} feature column(s) have zero or undefined variance: {bad}",
                columns=bad,
            )
        logger.warning("Zeroing %d degenerate column(s): %s", len(bad), bad)

    safe_std = std.where(~is_degenerate, 1.0)
    scaled = (values - mean) / safe_std
    if bad:
        scaled[bad] = scaled[bad].where(values[bad].isna(), 0.0)

    out = df.copy()
    out[features] = scaled
    logger.debug("Standardized %d columns over %d cells", len(features), len(df))
    return out, table


def apply_missing_policy(df: pd.DataFrame,
                         policy: Literal["impute", "reject"] = "impute") -> pd.DataFrame:
    """Remove the remaining partial missingness before distance computation.

    Parameters
    ----------
    df : pd.DataFrame
        Standardized feature matrix.
    policy : {"impute", "reject"}
        "impute" replaces missing entries with 0.0 (the column mean after
        standardization). "reject" drops any row with a missing entry.

    Raises
    ------
    EmptyMatrixError
        If "reject" leaves no rows.
    ValueError
        On an unknown policy.
    """
    features = feature_columns(df)
    missing = df[features].isna()
    n_missing = int(missing.to_numpy().sum())

    if policy == "impute":
        out = df.copy()
        out[features] = out[features].fillna(0.0)
        if n_missing:
            logger.warning("Imputed %d missing values (%.2f%% of matrix) with column mean",
                           n_missing, 100.0 * n_missing / missing.size)
    elif policy == "reject":
        incomplete = missing.any(axis=1)
        out = df.loc[~incomplete].reset_index(drop=True)
        require(
            len(out) > 0,
            f"All {len(df)} cells have at least one missing value",
            EmptyMatrixError,
        )
        if incomplete.any():
            logger.warning("Rejected %d cells with partially missing features", int(incomplete.sum()))
    else:
        raise ValueError(f"Unknown missing-value policy: {policy}")

    assert_cell_records(out)
    return out
