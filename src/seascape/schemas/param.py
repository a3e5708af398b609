"""ParamConfig: Expert defaults for the Seascape pipeline.

This module defines the complete default configuration. ALL pipeline
parameters must have defaults here. No runtime code should define fallback
values - this is the single source of truth for defaults.

Runtime code NEVER reads from ParamConfig directly - it only receives InternalConfig.
"""

from typing import Literal, Optional
from pydantic import Field, field_validator, model_validator
from seascape.schemas.base import SeascapeBaseModel


# =============================================================================
# Nested Configuration Models
# =============================================================================

class ReaderConfig(SeascapeBaseModel):
    """Raster file reader configuration."""
    file_glob: str = "*.nc"
    lon_name: str = "lon"
    lat_name: str = "lat"
    date_attribute: str = Field(
        "time_coverage_start", description="Global attribute holding the coverage start date"
    )
    missing_values: list[float] = Field(
        default_factory=list, description="Extra sentinels masked to NaN besides _FillValue"
    )


class RegionConfig(SeascapeBaseModel):
    """Bounding box; bounds are exclusive (cells on a bound are dropped)."""
    lon_min: float = -180.0
    lon_max: float = 180.0
    lat_min: float = -90.0
    lat_max: float = 90.0

    @field_validator("lon_min", "lon_max", "lat_min", "lat_max", mode="before")
    @classmethod
    def coerce_bounds_to_float(cls, v):
        """Allow int or float for bounds."""
        return float(v)

    @model_validator(mode="after")
    def check_ordering(self):
        """Minimum bounds must be strictly below maximum bounds."""
        if self.lon_min >= self.lon_max:
            raise ValueError(f"lon_min ({self.lon_min}) must be < lon_max ({self.lon_max})")
        if self.lat_min >= self.lat_max:
            raise ValueError(f"lat_min ({self.lat_min}) must be < lat_max ({self.lat_max})")
        return self


class PreprocessConfig(SeascapeBaseModel):
    """Row filtering and normalization policies."""
    degenerate_columns: Literal["zero", "fail"] = "zero"
    missing_policy: Literal["impute", "reject"] = "impute"


class ClusteringConfig(SeascapeBaseModel):
    """Hierarchical clustering configuration."""
    method: Literal["complete"] = "complete"
    metric: Literal["euclidean"] = "euclidean"
    cluster_counts: list[int] = Field(default_factory=lambda: list(range(2, 13)))
    on_invalid_k: Literal["skip", "fail"] = "skip"
    max_cells: int = Field(15000, ge=2, description="Refuse larger inputs (quadratic memory)")

    @field_validator("method", "metric", mode="before")
    @classmethod
    def normalize_names(cls, v):
        """Normalize method names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("cluster_counts")
    @classmethod
    def check_cluster_counts(cls, v):
        """Cluster counts must be ascending, unique, and >= 2."""
        if not v:
            raise ValueError("cluster_counts must not be empty")
        if any(k < 2 for k in v):
            raise ValueError(f"cluster_counts must be >= 2, got {v}")
        if list(v) != sorted(set(v)):
            raise ValueError(f"cluster_counts must be strictly ascending, got {v}")
        return v


class OutputConfig(SeascapeBaseModel):
    """Output file configuration."""
    compression: Literal["snappy", "gzip", "lz4", "none"] = "snappy"
    write_netcdf: bool = True
    write_summary: bool = True


class LoggingConfig(SeascapeBaseModel):
    """Logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"


# =============================================================================
# Main ParamConfig
# =============================================================================

class ParamConfig(SeascapeBaseModel):
    """Complete expert configuration with all defaults.

    Usage
    -----
    This config is NOT used directly by runtime code. It serves as the
    base layer in config resolution:

        internal_cfg = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    input_dir: Optional[str] = None
    base_dir: Optional[str] = None
    variables: list[str] = Field(
        default_factory=lambda: ["sst", "chlor_a", "par", "Kd_490"]
    )
    reader: ReaderConfig = Field(default_factory=ReaderConfig)
    region: RegionConfig = Field(default_factory=RegionConfig)
    preprocess: PreprocessConfig = Field(default_factory=PreprocessConfig)
    clustering: ClusteringConfig = Field(default_factory=ClusteringConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @field_validator("variables")
    @classmethod
    def check_variables(cls, v):
        """At least one variable, no duplicates."""
        if not v:
            raise ValueError("variables must not be empty")
        if len(set(v)) != len(v):
            raise ValueError(f"variables must be unique, got {v}")
        return v
