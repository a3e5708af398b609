import numpy as np
import pandas as pd
import pytest


@pytest.fixture
def cells():
    """Standardized-looking cell records: three well separated blobs of 4 cells."""
    rng = np.random.default_rng(42)
    centers = np.array([[0.0, 0.0, 0.0], [5.0, 5.0, 0.0], [0.0, 5.0, 5.0]])
    X = np.vstack([c + rng.normal(0.0, 0.2, size=(4, 3)) for c in centers])
    df = pd.DataFrame(X, columns=["sst_2003-01-01", "chlor_a_2003-01-01", "par_2003-01-01"])
    df.insert(0, "lat", np.repeat([11.0, 12.0, 13.0], 4))
    df.insert(0, "lon", np.tile([1.0, 2.0, 3.0, 4.0], 3))
    return df
