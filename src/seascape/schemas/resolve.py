"""Configuration resolution.

resolve_config() is the one place where the three configuration layers meet.
Later layers win:

    ParamConfig (expert defaults)  <  UserConfig (file)  <  CLIConfig (flags)

The merged dict is validated twice: once against ParamConfig so the expert
validators (bbox ordering, ascending cluster counts, unique variables) see
the final values, then into the frozen InternalConfig.
"""

from typing import Optional, Type, TypeVar, Union

from pydantic import BaseModel

from seascape.schemas.param import ParamConfig
from seascape.schemas.user import UserConfig
from seascape.schemas.cli import CLIConfig
from seascape.schemas.internal import InternalConfig

Layer = TypeVar("Layer", bound=BaseModel)

REQUIRED_PATHS = ("input_dir", "base_dir")


def deep_merge(base: dict, *overrides: dict) -> dict:
    """Merge override dicts into a copy of ``base``.

    Nested dicts merge key by key; any other value, lists included, is
    replaced wholesale.

    >>> deep_merge({"region": {"lon_min": -80, "lon_max": -60}}, {"region": {"lon_min": -72}})
    {'region': {'lon_min': -72, 'lon_max': -60}}
    """
    merged = dict(base)
    for override in overrides:
        for key, value in override.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, dict):
                merged[key] = deep_merge(current, value)
            else:
                merged[key] = value
    return merged


def _as_layer(value: Union[dict, Layer, None], model: Type[Layer]) -> Layer:
    """Accept a model instance, a raw dict, or None (empty layer)."""
    if isinstance(value, model):
        return value
    return model.model_validate(value or {})


def resolve_config(
    param_cfg: Union[dict, ParamConfig],
    user_cfg: Optional[Union[dict, UserConfig]] = None,
    cli_cfg: Optional[Union[dict, CLIConfig]] = None,
) -> InternalConfig:
    """Resolve the runtime configuration from param, user and CLI layers.

    Parameters
    ----------
    param_cfg : dict or ParamConfig
        Expert configuration with complete defaults.
    user_cfg : dict or UserConfig, optional
        User file overrides (uppercase aliases accepted).
    cli_cfg : dict or CLIConfig, optional
        Command-line overrides.

    Returns
    -------
    InternalConfig
        Validated and immutable.

    Raises
    ------
    ValueError
        If the merged values fail validation (pydantic ValidationError is a
        ValueError) or input_dir/base_dir end up unset.

    Examples
    --------
    >>> user = UserConfig(INPUT_DIR="/data/ocean", BASE_DIR="/tmp/out", K_MAX=6)
    >>> resolve_config(ParamConfig(), user).clustering.cluster_counts
    [2, 3, 4, 5, 6]
    """
    param = _as_layer(param_cfg, ParamConfig)
    user = _as_layer(user_cfg, UserConfig)
    cli = _as_layer(cli_cfg, CLIConfig)

    merged = deep_merge(
        param.model_dump(),
        user.to_internal_overrides(),
        cli.to_internal_overrides(),
    )
    ParamConfig.model_validate(merged)

    missing = [name for name in REQUIRED_PATHS if not merged.get(name)]
    if missing:
        name = missing[0]
        raise ValueError(
            f"{name} is required: set {name.upper()} in the user config "
            f"or pass --{name.replace('_', '-')}"
        )

    return InternalConfig.model_validate(merged)
