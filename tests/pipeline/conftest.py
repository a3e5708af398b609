import logging

import pytest

from tests.helpers.ocean_netcdf import DEFAULT_BBOX, write_ocean_inputs


@pytest.fixture
def ocean_inputs(input_dir):
    """4 variables x 3 dates on a 5 x 4 grid; cell (lat 2, lon 3) missing everywhere."""
    return write_ocean_inputs(input_dir, missing_cells=[(2, 3)])


@pytest.fixture
def pipeline_config(make_config, ocean_inputs):
    """InternalConfig for pipeline tests: whole synthetic grid inside the bbox."""
    return make_config(bbox=DEFAULT_BBOX)


@pytest.fixture
def restore_logging():
    """Undo root logger changes made by ClusteringProcessor.start()."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
