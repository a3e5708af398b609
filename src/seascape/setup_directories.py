"""
Directory setup for the clustering pipeline.

Flat layout under one base directory:
- output/: partition tables, linkage, cluster summary, gridded labels
- logs/: one log file per run
- runtime_config_<run_id>.json at the base

Every artifact of a run carries the same run ID so reruns never overwrite
each other.
"""

import uuid
from pathlib import Path
from datetime import datetime, timezone


def generate_run_id() -> str:
    """UTC timestamp plus a short random suffix, e.g. ``20250305T153000Z_1a2b3c``."""
    stamp = datetime.now(timezone.utc).strftime("%Y%m%dT%H%M%SZ")
    return f"{stamp}_{uuid.uuid4().hex[:6]}"


def setup_output_directories(base_output_dir):
    """
    Set up the output directory structure.

    Parameters
    ----------
    base_output_dir : str or Path
        Base output directory. Created if missing.

    Returns
    -------
    dict
        Dictionary with paths: 'base', 'output', 'logs'
    """
    base_output_dir = Path(base_output_dir).expanduser().resolve()

    directories = {
        "base": base_output_dir,
        "output": base_output_dir / "output",
        "logs": base_output_dir / "logs",
    }

    for path in directories.values():
        path.mkdir(parents=True, exist_ok=True)

    return directories


def get_output_path(output_dirs, artifact, run_id, ext):
    """
    Get the path of one run artifact.

    Parameters
    ----------
    output_dirs : dict
        Output directories from setup_output_directories()
    artifact : str
        Artifact name: 'partitions', 'linkage', 'cluster_summary', ...
    run_id : str
        Run identifier shared by all artifacts of a run
    ext : str
        File extension, with or without the leading dot

    Example
    -------
    >>> get_output_path(dirs, 'partitions', '20250305T153000Z_1a2b3c', 'parquet')
    Path('out/output/partitions_20250305T153000Z_1a2b3c.parquet')
    """
    ext = ext[1:] if ext.startswith('.') else ext
    output_dir = Path(output_dirs["output"])
    output_dir.mkdir(parents=True, exist_ok=True)
    return output_dir / f"{artifact}_{run_id}.{ext}"


def get_log_path(output_dirs, run_id=None):
    """
    Get the log file path for a run.

    Returns
    -------
    Path
        logs/pipeline_<run_id>.log, or logs/pipeline_latest.log without a run ID
    """
    log_dir = Path(output_dirs["logs"])
    log_dir.mkdir(parents=True, exist_ok=True)

    if run_id:
        filename = f"pipeline_{run_id}.log"
    else:
        filename = "pipeline_latest.log"

    return log_dir / filename
