"""UserConfig: Forgiving, minimal user-facing configuration.

This schema accepts user inputs in a variety of formats, with aliases for
common naming patterns (e.g., INPUT_DIR -> input_dir, BBOX -> region bounds).

UserConfig is intentionally minimal - users only specify what they want to
override from the expert defaults.
"""

from typing import Any, Literal, Optional
from pydantic import Field, field_validator, model_validator
from seascape.schemas.base import SeascapeBaseModel


class UserReaderConfig(SeascapeBaseModel):
    """User-facing reader config."""
    file_glob: Optional[str] = None
    lon_name: Optional[str] = None
    lat_name: Optional[str] = None
    date_attribute: Optional[str] = None
    missing_values: Optional[list[float]] = None


class UserRegionConfig(SeascapeBaseModel):
    """User-facing region config."""
    lon_min: Optional[float] = None
    lon_max: Optional[float] = None
    lat_min: Optional[float] = None
    lat_max: Optional[float] = None


class UserPreprocessConfig(SeascapeBaseModel):
    """User-facing preprocessing config."""
    degenerate_columns: Optional[str] = None
    missing_policy: Optional[str] = None

    @field_validator("degenerate_columns", "missing_policy", mode="before")
    @classmethod
    def normalize_policy(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v


class UserClusteringConfig(SeascapeBaseModel):
    """User-facing clustering config."""
    method: Optional[str] = None
    metric: Optional[str] = None
    cluster_counts: Optional[list[int]] = None
    on_invalid_k: Optional[str] = None
    max_cells: Optional[int] = None


class UserOutputConfig(SeascapeBaseModel):
    """User-facing output config."""
    compression: Optional[str] = None
    write_netcdf: Optional[bool] = None
    write_summary: Optional[bool] = None


class UserConfig(SeascapeBaseModel):
    """User-facing configuration schema.

    Minimal, forgiving, and uses common aliases. Users only specify what
    they want to override from ParamConfig defaults.

    Usage
    -----
        user_cfg = UserConfig(
            input_dir="/data/ocean",
            base_dir="/scratch/seascape",
            bbox=(-72.0, -64.0, 40.0, 46.0),
            k_max=8,
        )

        internal = resolve_config(param_cfg, user_cfg, cli_cfg)
    """

    # Paths
    input_dir: Optional[str] = Field(None, alias="INPUT_DIR")
    base_dir: Optional[str] = Field(None, alias="BASE_DIR")

    # Variables, in column-block order
    variables: Optional[list[str]] = Field(None, alias="VARIABLES")

    # Region (flat aliases); bbox is (lon_min, lon_max, lat_min, lat_max)
    bbox: Optional[tuple[float, float, float, float]] = Field(None, alias="BBOX")
    lon_min: Optional[float] = Field(None, alias="LON_MIN")
    lon_max: Optional[float] = Field(None, alias="LON_MAX")
    lat_min: Optional[float] = Field(None, alias="LAT_MIN")
    lat_max: Optional[float] = Field(None, alias="LAT_MAX")

    # Reader (flat aliases)
    file_glob: Optional[str] = Field(None, alias="FILE_GLOB")
    date_attribute: Optional[str] = Field(None, alias="DATE_ATTRIBUTE")
    missing_values: Optional[list[float]] = Field(None, alias="MISSING_VALUES")

    # Clustering (flat aliases)
    cluster_counts: Optional[list[int]] = Field(None, alias="CLUSTER_COUNTS")
    k_min: Optional[int] = Field(None, alias="K_MIN")
    k_max: Optional[int] = Field(None, alias="K_MAX")
    on_invalid_k: Optional[str] = Field(None, alias="ON_INVALID_K")

    # Preprocessing (flat aliases)
    missing_policy: Optional[str] = Field(None, alias="MISSING_POLICY")
    degenerate_policy: Optional[str] = Field(None, alias="DEGENERATE_POLICY")

    log_level: Optional[Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]] = Field(
        None, alias="LOG_LEVEL"
    )

    # Nested overrides (advanced users)
    reader: Optional[UserReaderConfig] = None
    region: Optional[UserRegionConfig] = None
    preprocess: Optional[UserPreprocessConfig] = None
    clustering: Optional[UserClusteringConfig] = None
    output: Optional[UserOutputConfig] = None

    model_config = SeascapeBaseModel.model_config.copy()
    # Allow forgiving input dictionaries (ignore unknown legacy keys)
    model_config.update({"populate_by_name": True, "extra": "ignore"})

    @field_validator("missing_policy", "degenerate_policy", "on_invalid_k", mode="before")
    @classmethod
    def normalize_policy_names(cls, v):
        """Normalize policy names to lowercase."""
        if isinstance(v, str):
            return v.lower().strip()
        return v

    @field_validator("lon_min", "lon_max", "lat_min", "lat_max", mode="before")
    @classmethod
    def coerce_numeric_fields(cls, v):
        """Accept int or float for bounds."""
        if v is not None:
            return float(v)
        return v

    @model_validator(mode="after")
    def check_k_range(self):
        """A K_MIN/K_MAX range cannot be combined with explicit CLUSTER_COUNTS."""
        if self.cluster_counts is not None and (self.k_min is not None or self.k_max is not None):
            raise ValueError("Give either cluster_counts or k_min/k_max, not both")
        if self.k_min is not None and self.k_max is None:
            raise ValueError("k_min requires k_max")
        return self

    def _cluster_counts(self) -> Optional[list[int]]:
        if self.cluster_counts is not None:
            return list(self.cluster_counts)
        if self.k_max is not None:
            k_min = self.k_min if self.k_min is not None else 2
            return list(range(k_min, self.k_max + 1))
        return None

    def to_internal_overrides(self) -> dict:
        """Convert flat UserConfig to nested InternalConfig structure.

        Returns
        -------
        dict
            Nested dictionary matching InternalConfig structure
        """
        overrides: dict[str, Any] = {}

        if self.input_dir is not None:
            overrides["input_dir"] = str(self.input_dir)
        if self.base_dir is not None:
            overrides["base_dir"] = str(self.base_dir)
        if self.variables is not None:
            overrides["variables"] = list(self.variables)

        # Reader section
        reader = {}
        if self.file_glob is not None:
            reader["file_glob"] = self.file_glob
        if self.date_attribute is not None:
            reader["date_attribute"] = self.date_attribute
        if self.missing_values is not None:
            reader["missing_values"] = list(self.missing_values)
        if self.reader is not None:
            reader.update(self.reader.model_dump(exclude_none=True))
        if reader:
            overrides["reader"] = reader

        # Region section: bbox first, single bounds refine it
        region = {}
        if self.bbox is not None:
            lon_min, lon_max, lat_min, lat_max = self.bbox
            region.update(lon_min=lon_min, lon_max=lon_max, lat_min=lat_min, lat_max=lat_max)
        for name in ("lon_min", "lon_max", "lat_min", "lat_max"):
            value = getattr(self, name)
            if value is not None:
                region[name] = value
        if self.region is not None:
            region.update(self.region.model_dump(exclude_none=True))
        if region:
            overrides["region"] = region

        # Preprocess section
        preprocess = {}
        if self.missing_policy is not None:
            preprocess["missing_policy"] = self.missing_policy
        if self.degenerate_policy is not None:
            preprocess["degenerate_columns"] = self.degenerate_policy
        if self.preprocess is not None:
            preprocess.update(self.preprocess.model_dump(exclude_none=True))
        if preprocess:
            overrides["preprocess"] = preprocess

        # Clustering section
        clustering = {}
        counts = self._cluster_counts()
        if counts is not None:
            clustering["cluster_counts"] = counts
        if self.on_invalid_k is not None:
            clustering["on_invalid_k"] = self.on_invalid_k
        if self.clustering is not None:
            clustering.update(self.clustering.model_dump(exclude_none=True))
        if clustering:
            overrides["clustering"] = clustering

        if self.output is not None:
            output = self.output.model_dump(exclude_none=True)
            if output:
                overrides["output"] = output

        if self.log_level is not None:
            overrides["logging"] = {"level": self.log_level}

        return overrides
