"""Formal pipeline invariants.

This file documents what each stage MUST produce. Use it as a reviewer
anchor and system reference; enforcement lives in the sibling modules.
"""

PIPELINE_INVARIANTS = {
    "load": [
        "Every layer is 2D with shape (len(lat), len(lon))",
        "All layers of a variable share identical lon/lat vectors (exact)",
        "All variables share the same grid",
        "One layer per timestamp per variable, sorted by timestamp",
    ],

    "assemble": [
        "Columns: lon, lat, then one block per variable in configured order",
        "Feature labels are '<variable>_<YYYY-MM-DD>'",
        "Rows are the strict bounding-box subset of the lon x lat product",
        "Row order is latitude-major, longitude-minor",
    ],

    "filter": [
        "No row has every feature missing",
        "At least one row remains",
    ],

    "normalize": [
        "Non-degenerate columns have mean 0 and sample std 1",
        "Degenerate columns are zeroed or rejected, never divided by zero",
        "No missing values remain after the missing-value policy",
    ],

    "cluster": [
        "Linkage has n-1 merges with non-decreasing heights",
        "Identical input yields a bit-identical linkage",
    ],

    "partition": [
        "Column k_<k> holds exactly k distinct labels in [0, k)",
        "Labels are numbered by first appearance in row order",
        "Every cell has a label for every retained k",
    ],
}

# Which stages are optional vs required
STAGE_REQUIREMENTS = {
    "load": "REQUIRED",
    "assemble": "REQUIRED",
    "filter": "REQUIRED",
    "normalize": "REQUIRED",
    "cluster": "REQUIRED",
    "partition": "REQUIRED",
    "report": "OPTIONAL",    # summary table and gridded NetCDF
}
