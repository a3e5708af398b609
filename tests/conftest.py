"""Root-level pytest fixtures for the Seascape test suite.

Provides shared configuration fixtures following the Pydantic-based
architecture. Tests should use these fixtures instead of raw dict configs.
"""

import pytest
from pathlib import Path
import tempfile
import shutil

from seascape.schemas import ParamConfig, UserConfig, resolve_config


# =============================================================================
# Directory Fixtures
# =============================================================================

@pytest.fixture
def temp_dir():
    """Temporary directory that is cleaned up after test."""
    d = tempfile.mkdtemp()
    yield Path(d)
    shutil.rmtree(d, ignore_errors=True)


@pytest.fixture
def input_dir(temp_dir):
    """Empty input root; tests write per-variable sub-directories into it."""
    d = temp_dir / "input"
    d.mkdir()
    return d


# =============================================================================
# Configuration Fixtures (Pydantic-based)
# =============================================================================

@pytest.fixture
def param_config():
    """Expert configuration with all defaults.

    input_dir and base_dir are unset here; they are supplied per test.
    """
    return ParamConfig()


@pytest.fixture
def internal_config(param_config, input_dir, temp_dir):
    """Fully validated runtime configuration pointing at temp directories."""
    user = UserConfig(input_dir=str(input_dir), base_dir=str(temp_dir / "out"))
    return resolve_config(param_config, user, None)


@pytest.fixture
def make_config(param_config, input_dir, temp_dir):
    """Factory fixture for creating custom test configs.

    Returns a callable that accepts UserConfig-compatible kwargs. Paths
    default to the temp directories.

    Examples
    --------
    >>> def test_small_k(make_config):
    ...     config = make_config(k_max=4)
    ...     assert config.clustering.cluster_counts == [2, 3, 4]
    """
    def _make(**user_overrides):
        user_overrides.setdefault("input_dir", str(input_dir))
        user_overrides.setdefault("base_dir", str(temp_dir / "out"))
        return resolve_config(param_config, UserConfig(**user_overrides), None)

    return _make
