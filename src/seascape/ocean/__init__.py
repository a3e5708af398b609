"""Ocean raster ingestion: loading, feature matrix assembly, preprocessing."""

from seascape.ocean.loader import (
    GridLoader,
    LayerCollection,
    RasterLayer,
    VariableGroup,
    validate_collection,
    validate_group,
)
from seascape.ocean.feature_matrix import (
    FeatureMatrixBuilder,
    assemble_feature_matrix,
    feature_columns,
)
from seascape.ocean.preprocess import (
    ScalingTable,
    apply_missing_policy,
    drop_empty_rows,
    standardize,
)

__all__ = [
    'GridLoader',
    'LayerCollection',
    'RasterLayer',
    'VariableGroup',
    'validate_collection',
    'validate_group',
    'FeatureMatrixBuilder',
    'assemble_feature_matrix',
    'feature_columns',
    'ScalingTable',
    'apply_missing_policy',
    'drop_empty_rows',
    'standardize',
]
