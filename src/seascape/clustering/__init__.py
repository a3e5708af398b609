"""Hierarchical clustering of grid cells and partition extraction."""

from seascape.clustering.engine import (
    ClusterEngine,
    ClusterHierarchy,
    pairwise_distances,
)
from seascape.clustering.partition import (
    check_k,
    cut_hierarchy,
    extract_partitions,
    relabel_by_first_appearance,
)
from seascape.clustering.summary import (
    partition_columns,
    partitions_to_grid,
    summarize_partitions,
)

__all__ = [
    'ClusterEngine',
    'ClusterHierarchy',
    'pairwise_distances',
    'check_k',
    'cut_hierarchy',
    'extract_partitions',
    'relabel_by_first_appearance',
    'partition_columns',
    'partitions_to_grid',
    'summarize_partitions',
]
