"""InternalConfig: Authoritative runtime configuration.

This is the ONLY config schema that runtime code sees. It is fully validated,
normalized, and contains NO optional fields that processing code depends on.
"""

from typing import Literal, Optional
from pydantic import ConfigDict, field_validator
from seascape.schemas.base import SeascapeBaseModel


# =============================================================================
# Nested Configuration Models (Runtime)
# =============================================================================

class InternalReaderConfig(SeascapeBaseModel):
    """Runtime reader configuration."""
    file_glob: str
    lon_name: str
    lat_name: str
    date_attribute: str
    missing_values: list[float]


class InternalRegionConfig(SeascapeBaseModel):
    """Runtime bounding box (exclusive bounds)."""
    lon_min: float
    lon_max: float
    lat_min: float
    lat_max: float

    def as_tuple(self) -> tuple[float, float, float, float]:
        """Return (lon_min, lon_max, lat_min, lat_max)."""
        return (self.lon_min, self.lon_max, self.lat_min, self.lat_max)


class InternalPreprocessConfig(SeascapeBaseModel):
    """Runtime preprocessing policies."""
    degenerate_columns: Literal["zero", "fail"]
    missing_policy: Literal["impute", "reject"]


class InternalClusteringConfig(SeascapeBaseModel):
    """Runtime clustering configuration."""
    method: Literal["complete"]
    metric: Literal["euclidean"]
    cluster_counts: list[int]
    on_invalid_k: Literal["skip", "fail"]
    max_cells: int


class InternalOutputConfig(SeascapeBaseModel):
    """Runtime output configuration."""
    compression: Literal["snappy", "gzip", "lz4", "none"]
    write_netcdf: bool
    write_summary: bool


class InternalLoggingConfig(SeascapeBaseModel):
    """Runtime logging configuration."""
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


# =============================================================================
# Main InternalConfig
# =============================================================================

class InternalConfig(SeascapeBaseModel):
    """Authoritative runtime configuration.

    Runtime modules receive InternalConfig and access fields directly:

        def __init__(self, config: InternalConfig):
            self.bbox = config.region.as_tuple()   # NOT .get()

    Rules
    -----
    - NO .get() calls
    - NO fallback defaults
    - NO validation in runtime code

    All of that happens during config resolution.
    """

    input_dir: str
    base_dir: str
    variables: list[str]
    reader: InternalReaderConfig
    region: InternalRegionConfig
    preprocess: InternalPreprocessConfig
    clustering: InternalClusteringConfig
    output: InternalOutputConfig
    logging: InternalLoggingConfig
    run_id: Optional[str] = None
    output_dirs: Optional[dict[str, str]] = None

    model_config = ConfigDict(
        extra='forbid',
        validate_assignment=True,
        use_enum_values=True,
        str_strip_whitespace=True,
        frozen=True,  # Immutable after construction
    )

    @field_validator("input_dir", "base_dir")
    @classmethod
    def require_non_empty_path(cls, v, info):
        """Paths are required at runtime."""
        if not v:
            raise ValueError(f"{info.field_name} is required")
        return v
