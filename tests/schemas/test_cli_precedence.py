from seascape.schemas.user import UserConfig
from seascape.schemas.cli import CLIConfig
from seascape.schemas.param import ParamConfig
from seascape.schemas.resolve import resolve_config

import pytest
from pydantic import ValidationError


def test_cli_overrides_do_not_mutate_user():
    user = UserConfig.model_validate({"INPUT_DIR": "/data/a", "BASE_DIR": "/tmp", "K_MAX": 12})

    cli = CLIConfig.model_validate({"input_dir": "/data/b", "k_max": 4})

    internal = resolve_config(ParamConfig(), user, cli)

    # CLI should take precedence
    assert internal.input_dir == "/data/b"
    assert internal.clustering.cluster_counts == [2, 3, 4]

    # But the original user model should remain unchanged
    assert user.input_dir == "/data/a"
    assert user.k_max == 12


def test_cli_variables_override():
    user = UserConfig(input_dir="/data", base_dir="/tmp", variables=["sst", "par"])
    cli = CLIConfig(variables=["chlor_a"])

    config = resolve_config(ParamConfig(), user, cli)

    assert config.variables == ["chlor_a"]
    assert config.base_dir == "/tmp"  # User value preserved


def test_cli_log_level():
    user = UserConfig(input_dir="/data", base_dir="/tmp", LOG_LEVEL="WARNING")
    config = resolve_config(ParamConfig(), user, CLIConfig(log_level="DEBUG"))
    assert config.logging.level == "DEBUG"


def test_cli_supplies_paths():
    config = resolve_config(ParamConfig(), None, CLIConfig(input_dir="/data", base_dir="/out"))
    assert (config.input_dir, config.base_dir) == ("/data", "/out")


def test_cli_dict_accepted():
    config = resolve_config(ParamConfig(), None, {"input_dir": "/data", "base_dir": "/out", "k_max": 3})
    assert config.clustering.cluster_counts == [2, 3]


def test_empty_cli_changes_nothing():
    user = UserConfig(input_dir="/data", base_dir="/tmp", K_MAX=5)
    assert resolve_config(ParamConfig(), user, CLIConfig()) == resolve_config(ParamConfig(), user, None)


def test_cli_k_max_below_two_rejected():
    with pytest.raises(ValidationError):
        CLIConfig(k_max=1)


def test_cli_rejects_unknown_fields():
    with pytest.raises(ValidationError):
        CLIConfig(bbox=(0, 1, 0, 1))
