"""Grid stage contract.

Enforces the guarantee that layers which are combined cell-by-cell sit on
exactly the same lon/lat grid. Equality is exact, not tolerance-based: a
half-cell shift would silently misalign every feature column.
"""

import numpy as np

from seascape.contracts.base import require
from seascape.contracts.failure import CoordinateMismatchError


def assert_layer_shape(values: np.ndarray, lon: np.ndarray, lat: np.ndarray, label: str) -> None:
    """Enforce values.shape == (len(lat), len(lon)) for one layer."""
    require(
        values.ndim == 2,
        f"Grid contract violated: '{label}' has {values.ndim} dims, expected 2 (lat, lon)",
    )
    require(
        values.shape == (len(lat), len(lon)),
        f"Grid contract violated: '{label}' has shape {values.shape}, "
        f"expected ({len(lat)}, {len(lon)}) from its coordinate vectors",
    )


def assert_same_grid(ref_lon: np.ndarray, ref_lat: np.ndarray,
                     lon: np.ndarray, lat: np.ndarray,
                     variable: str = None, reference: str = None, source: str = None) -> None:
    """Enforce identical coordinate vectors between two layers.

    Parameters
    ----------
    ref_lon, ref_lat : np.ndarray
        Coordinate vectors of the reference (first) layer.

    lon, lat : np.ndarray
        Coordinate vectors of the layer under test.

    variable, reference, source : str, optional
        Names used in the diagnostic.

    Raises
    ------
    CoordinateMismatchError
        If either vector differs in length or in any value.
    """
    for axis, ref, other in (("lon", ref_lon, lon), ("lat", ref_lat, lat)):
        if not np.array_equal(ref, other):
            raise CoordinateMismatchError(
                f"Grid contract violated: {axis} coordinates of {source or 'layer'} "
                f"differ from {reference or 'reference layer'}"
                + (f" (variable '{variable}')" if variable else ""),
                variable=variable,
                source=source,
            )
