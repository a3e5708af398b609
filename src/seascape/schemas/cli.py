"""CLIConfig: Command-line operational overrides.

Minimal configuration for parameters that commonly change between runs:
input and output paths, variable subset, largest cluster count, verbosity.
"""

from typing import Literal, Optional
from pydantic import Field
from seascape.schemas.base import SeascapeBaseModel


class CLIConfig(SeascapeBaseModel):
    """Command-line configuration overrides.

    Highest priority in config resolution.

    Usage
    -----
        cli_cfg = CLIConfig(
            input_dir="/data/ocean",
            base_dir="/scratch/seascape",
            k_max=8,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    input_dir: Optional[str] = None
    base_dir: Optional[str] = None
    variables: Optional[list[str]] = None
    k_max: Optional[int] = Field(None, ge=2)
    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = None

    def to_internal_overrides(self) -> dict:
        """Convert CLI config to internal config structure.

        ``k_max`` replaces the cluster counts with ``2..k_max``.
        """
        overrides = {}

        if self.input_dir is not None:
            overrides["input_dir"] = str(self.input_dir)
        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        if self.variables is not None:
            overrides["variables"] = list(self.variables)
        if self.k_max is not None:
            overrides["clustering"] = {"cluster_counts": list(range(2, self.k_max + 1))}
        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
