"""Seascape User Configuration.

This is the user-facing configuration file. Modify settings here to customize
the pipeline behavior. Expert defaults live in seascape.schemas.param.

Usage:
    python scripts/run_clustering_pipeline.py scripts/user_config.py
    python scripts/run_clustering_pipeline.py scripts/user_config.py --k-max 8
    python scripts/run_clustering_pipeline.py scripts/user_config.py --variables sst chlor_a
"""

CONFIG = {
    # ========================================================================
    # INPUT & OUTPUT
    # ========================================================================
    "INPUT_DIR": "./data/modis_monthly",  # One sub-directory per variable
    "BASE_DIR": "./seascape_output",      # All outputs go here

    # ========================================================================
    # VARIABLES (order sets the column grouping)
    # ========================================================================
    "VARIABLES": ["sst", "chlor_a", "par", "Kd_490"],
    "FILE_GLOB": "*.nc",
    "DATE_ATTRIBUTE": "time_coverage_start",

    # ========================================================================
    # REGION (strict-exclusive: cells exactly on a bound are left out)
    # ========================================================================
    "BBOX": (-127.0, -113.0, 30.0, 45.0),  # (lon_min, lon_max, lat_min, lat_max)

    # ========================================================================
    # CLUSTERING
    # ========================================================================
    "K_MIN": 2,
    "K_MAX": 12,
    "ON_INVALID_K": "skip",   # "skip" or "fail"

    # ========================================================================
    # PREPROCESSING
    # ========================================================================
    "MISSING_POLICY": "impute",     # "impute" (column mean) or "reject" (drop cell)
    "DEGENERATE_POLICY": "zero",    # "zero" or "fail" for constant columns

    "LOG_LEVEL": "INFO",
}
