"""Cut the merge hierarchy into flat partitions at several cluster counts.

Cutting into k clusters severs the k-1 highest merges. All partitions come
from the one hierarchy, so no clustering is repeated per k.

Labels are renumbered by first appearance in cell order (the first cell is
always in cluster 0). This keeps map colours comparable between adjacent k,
but no cross-k label stability is promised: only co-membership is defined
by the tree.
"""

import logging
from typing import Iterable, Literal

import numpy as np
import pandas as pd
from scipy.cluster.hierarchy import cut_tree

from seascape.clustering.engine import ClusterHierarchy
from seascape.contracts import FailurePolicy, InvalidKError, assert_partitions

__all__ = ['extract_partitions', 'cut_hierarchy', 'check_k', 'relabel_by_first_appearance']

logger = logging.getLogger(__name__)


def check_k(k: int, n_cells: int) -> None:
    """Raise InvalidKError unless 1 <= k <= n_cells."""
    if not 1 <= k <= n_cells:
        raise InvalidKError(
            f"Cluster count k={k} outside [1, {n_cells}] for {n_cells} cells",
            k=k,
            n_cells=n_cells,
        )


def relabel_by_first_appearance(labels: np.ndarray) -> np.ndarray:
    """Renumber: first-seen label=0, next new label=1, ..."""
    labels = np.asarray(labels)
    _, first_index, inverse = np.unique(labels, return_index=True, return_inverse=True)
    order = np.argsort(first_index)
    new_ids = np.empty_like(order)
    new_ids[order] = np.arange(len(order))
    return new_ids[inverse.ravel()].astype(np.int64)


def cut_hierarchy(hierarchy: ClusterHierarchy, k: int) -> np.ndarray:
    """Labels in [0, k) for one cluster count."""
    check_k(k, hierarchy.n_cells)
    labels = cut_tree(hierarchy.linkage, n_clusters=[k])[:, 0]
    return relabel_by_first_appearance(labels)


def extract_partitions(hierarchy: ClusterHierarchy, ks: Iterable[int],
                       on_invalid: Literal["skip", "fail"] = "skip") -> pd.DataFrame:
    """Partition table: lon, lat, then one ``k_<k>`` column per valid k.

    Parameters
    ----------
    hierarchy : ClusterHierarchy
        Output of ClusterEngine.fit().
    ks : iterable of int
        Requested cluster counts; processed in ascending order.
    on_invalid : {"skip", "fail"}
        "skip" logs and drops invalid k; "fail" raises on the first one.

    Raises
    ------
    InvalidKError
        For an invalid k under "fail", or when no requested k is valid.
    """
    n = hierarchy.n_cells
    valid = []
    for k in sorted(set(ks)):
        try:
            check_k(k, n)
        except InvalidKError:
            if FailurePolicy(on_invalid) is FailurePolicy.FAIL:
                raise
            logger.warning("Skipping k=%d: only %d cells", k, n)
            continue
        valid.append(k)

    if not valid:
        raise InvalidKError(f"No valid cluster count in {sorted(set(ks))} for {n} cells", n_cells=n)

    # One cut per k: a multi-k cut_tree call loses the k == n column
    out = hierarchy.keys.copy()
    for k in valid:
        out[f"k_{k}"] = cut_hierarchy(hierarchy, k)

    assert_partitions(out, valid)
    logger.info("Extracted %d partitions (k=%s) over %d cells",
                len(valid), ",".join(str(k) for k in valid), n)
    return out
