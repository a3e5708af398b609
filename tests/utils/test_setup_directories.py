import re
from pathlib import Path

from seascape.setup_directories import (
    generate_run_id,
    get_log_path,
    get_output_path,
    setup_output_directories,
)


def test_setup_output_directories_creates_all(tmp_path):
    dirs = setup_output_directories(tmp_path)

    assert set(dirs.keys()) == {"base", "output", "logs"}

    for path in dirs.values():
        assert isinstance(path, Path)
        assert path.exists()
        assert path.is_dir()


def test_setup_output_directories_is_idempotent(tmp_path):
    dirs1 = setup_output_directories(tmp_path)
    dirs2 = setup_output_directories(tmp_path)

    assert dirs1 == dirs2


def test_nested_base_dir_created(tmp_path):
    dirs = setup_output_directories(tmp_path / "a" / "b")
    assert dirs["output"] == (tmp_path / "a" / "b" / "output").resolve()


def test_output_path_naming(tmp_path):
    dirs = setup_output_directories(tmp_path)

    path = get_output_path(dirs, "partitions", "RUN1", "parquet")
    assert path == dirs["output"] / "partitions_RUN1.parquet"
    assert get_output_path(dirs, "linkage", "RUN1", ".csv").name == "linkage_RUN1.csv"


def test_log_path(tmp_path):
    dirs = setup_output_directories(tmp_path)

    assert get_log_path(dirs, "RUN1") == dirs["logs"] / "pipeline_RUN1.log"
    assert get_log_path(dirs).name == "pipeline_latest.log"


def test_log_path_accepts_string_dirs(tmp_path):
    dirs = {k: str(v) for k, v in setup_output_directories(tmp_path).items()}
    assert get_log_path(dirs, "X").parent == Path(dirs["logs"])


def test_run_id_format_and_uniqueness():
    a, b = generate_run_id(), generate_run_id()

    assert re.fullmatch(r"\d{8}T\d{6}Z_[0-9a-f]{6}", a)
    assert a != b
