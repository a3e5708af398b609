"""Pipeline contracts: fail-fast enforcement of stage invariants.

Contracts fail immediately and loudly when a stage does not produce its
promised invariants.

Key principle:
- Pydantic validates config correctness
- Contracts validate data and pipeline correctness
- Algorithms handle science edge cases through explicit policies
"""

from seascape.contracts.failure import (
    ContractViolation,
    CoordinateMismatchError,
    DegenerateColumnError,
    DuplicateLayerError,
    EmptyGroupError,
    EmptyMatrixError,
    FailurePolicy,
    InvalidKError,
    MissingAttributeError,
    MissingVariableError,
)
from seascape.contracts.base import require
from seascape.contracts.grid import assert_layer_shape, assert_same_grid
from seascape.contracts.matrix import KEY_COLUMNS, assert_feature_matrix, assert_cell_records
from seascape.contracts.clustering import assert_hierarchy, assert_partitions

__all__ = [
    "ContractViolation",
    "CoordinateMismatchError",
    "DegenerateColumnError",
    "DuplicateLayerError",
    "EmptyGroupError",
    "EmptyMatrixError",
    "FailurePolicy",
    "InvalidKError",
    "MissingAttributeError",
    "MissingVariableError",
    "KEY_COLUMNS",
    "require",
    "assert_layer_shape",
    "assert_same_grid",
    "assert_feature_matrix",
    "assert_cell_records",
    "assert_hierarchy",
    "assert_partitions",
]
