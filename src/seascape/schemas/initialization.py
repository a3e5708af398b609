"""Runtime initialization: from a user config file to a ready InternalConfig.

init_runtime_config() is what runners call. It resolves Param < User < CLI,
optionally wipes the previous run (--rerun), creates the output tree, stamps
a run ID and writes ``runtime_config_<run_id>.json`` next to the outputs so
every result can be traced back to the exact settings that produced it.
"""

import importlib.util
import json
import logging
import shutil
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

from seascape.schemas.cli import CLIConfig
from seascape.schemas.internal import InternalConfig
from seascape.schemas.param import ParamConfig
from seascape.schemas.resolve import resolve_config
from seascape.schemas.user import UserConfig
from seascape.setup_directories import generate_run_id, setup_output_directories

__all__ = ['init_runtime_config', 'load_user_config_dict', 'persist_runtime_config']

logger = logging.getLogger(__name__)


def load_user_config_dict(config_path) -> dict:
    """Execute a Python config file and return its first ``CONFIG*`` dict.

    The dict is returned raw; UserConfig does the validation.

    Raises
    ------
    FileNotFoundError
        If the file does not exist.
    ValueError
        If the module defines no CONFIG dict.
    """
    config_path = Path(config_path)
    if not config_path.is_file():
        raise FileNotFoundError(f"User config not found: {config_path}")

    module_spec = importlib.util.spec_from_file_location("seascape_user_config", config_path)
    if module_spec is None or module_spec.loader is None:
        raise ImportError(f"Cannot import user config from {config_path}")
    module = importlib.util.module_from_spec(module_spec)
    module_spec.loader.exec_module(module)

    candidates = [getattr(module, name) for name in sorted(vars(module)) if name.startswith("CONFIG")]
    for candidate in candidates:
        if isinstance(candidate, dict):
            return candidate

    raise ValueError(f"No CONFIG dict found in {config_path}")


def persist_runtime_config(config: InternalConfig, output_dirs: Dict[str, Path]) -> Path:
    """Write the resolved configuration as JSON under the base directory."""
    base = Path(output_dirs["base"])
    base.mkdir(parents=True, exist_ok=True)
    target = base / f"runtime_config_{config.run_id}.json"

    payload = config.model_dump()
    payload["created_at"] = datetime.now(timezone.utc).isoformat()
    target.write_text(json.dumps(payload, indent=2, default=str))

    logger.info("Runtime config saved: %s", target)
    return target


def init_runtime_config(
    config_path: Optional[str] = None,
    cli_args: Optional[Dict[str, Any]] = None,
    rerun: bool = False,
    user_config: Optional[dict] = None,
) -> InternalConfig:
    """Build the InternalConfig for one run.

    Parameters
    ----------
    config_path : str, optional
        Python file holding a CONFIG dict.
    cli_args : dict, optional
        CLIConfig fields. Entries set to None are ignored, so argparse
        namespaces can be passed through unfiltered.
    rerun : bool
        Remove ``base_dir`` and everything in it first.
    user_config : dict, optional
        Raw user settings, used instead of reading ``config_path``.

    Returns
    -------
    InternalConfig
        ``run_id`` and ``output_dirs`` filled in.

    Examples
    --------
    >>> config = init_runtime_config("scripts/user_config.py", {"k_max": 8})
    >>> ClusteringProcessor(config).start()
    """
    if user_config is None:
        if not config_path:
            raise ValueError("init_runtime_config needs config_path or user_config")
        user_config = load_user_config_dict(config_path)

    overrides = {key: value for key, value in (cli_args or {}).items() if value is not None}
    resolved = resolve_config(
        ParamConfig(),
        UserConfig.model_validate(user_config),
        CLIConfig.model_validate(overrides),
    )

    base_dir = Path(resolved.base_dir)
    if rerun and base_dir.exists():
        print(f"--rerun: removing {base_dir}")
        shutil.rmtree(base_dir)

    output_dirs = setup_output_directories(base_dir)
    config = resolved.model_copy(update={
        "run_id": generate_run_id(),
        "output_dirs": {name: str(path) for name, path in output_dirs.items()},
    })

    persist_runtime_config(config, output_dirs)
    print(f"Run ID: {config.run_id}")
    return config
