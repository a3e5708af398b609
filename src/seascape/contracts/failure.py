"""Centralized failure types for the clustering pipeline.

Every stage raises a subclass of ContractViolation so callers can catch
pipeline failures uniformly. Nothing is retried: the workload is offline
and deterministic, so the only recovery is fixing the input or the
configuration and rerunning.
"""

from enum import Enum


class FailurePolicy(str, Enum):
    """How a stage reacts to a recoverable condition.

    FAIL: raise immediately
    SKIP: log a warning and continue with the remaining work
    """
    FAIL = "fail"
    SKIP = "skip"


class ContractViolation(RuntimeError):
    """Raised when a pipeline stage does not produce its promised invariants.

    Key distinction:
    - ValueError / ValidationError: configuration error (handled by Pydantic)
    - ContractViolation: input data or stage output breaks an invariant
    """
    pass


class CoordinateMismatchError(ContractViolation):
    """Two layers that must share a grid have different coordinate vectors."""

    def __init__(self, message: str, variable: str = None, source: str = None):
        super().__init__(message)
        self.variable = variable
        self.source = source


class DuplicateLayerError(ContractViolation):
    """Two layers of one variable map to the same feature column."""


class MissingVariableError(ContractViolation):
    """A raster file does not contain the requested variable."""

    def __init__(self, message: str, variable: str = None, source: str = None):
        super().__init__(message)
        self.variable = variable
        self.source = source


class MissingAttributeError(ContractViolation):
    """A raster file lacks a usable coverage-start date attribute."""


class EmptyGroupError(ContractViolation):
    """A variable directory holds no raster files."""


class EmptyMatrixError(ContractViolation):
    """No grid cells remain to cluster."""


class DegenerateColumnError(ContractViolation):
    """A feature column has zero or undefined variance."""

    def __init__(self, message: str, columns=None):
        super().__init__(message)
        self.columns = list(columns or [])


class InvalidKError(ContractViolation, ValueError):
    """A requested cluster count is outside [1, number of cells]."""

    def __init__(self, message: str, k: int = None, n_cells: int = None):
        super().__init__(message)
        self.k = k
        self.n_cells = n_cells
