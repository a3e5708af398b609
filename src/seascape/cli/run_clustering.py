"""Core clustering pipeline execution logic.

This module contains the actual pipeline runner and its argument parser.
scripts/run_clustering_pipeline.py and the ``seascape-cluster`` console
script are thin wrappers around main().
"""

import argparse
import json
import sys
import logging
from typing import Optional, Dict, Any

from seascape.contracts import ContractViolation
from seascape.pipeline.processor import ClusteringProcessor, ClusteringResult
from seascape.schemas.initialization import init_runtime_config


logger = logging.getLogger(__name__)


def run_clustering_pipeline(
    user_config_path: str,
    cli_args: Optional[Dict[str, Any]] = None,
    rerun: bool = False,
    verbose: bool = False
) -> ClusteringResult:
    """Execute the ocean regime clustering pipeline.

    1. Loads and resolves configuration (Param < User < CLI)
    2. Optionally cleans the base directory if rerun=True
    3. Sets up output directories and persists the runtime config
    4. Runs every stage and writes the results

    Parameters
    ----------
    user_config_path : str
        Path to user config file (Python file with CONFIG dict).
    cli_args : dict, optional
        CLI argument overrides. Keys: input_dir, base_dir, variables, k_max,
        log_level. All optional.
    rerun : bool, optional
        If True, delete the base directory before running.
    verbose : bool, optional
        If True, enable DEBUG logging and print full resolved config.

    Returns
    -------
    ClusteringResult

    Raises
    ------
    FileNotFoundError
        If user_config_path or an input directory does not exist.
    ValueError
        If configuration validation fails.
    ContractViolation
        If a pipeline stage fails; logged before re-raising.

    Examples
    --------
    >>> run_clustering_pipeline("scripts/user_config.py", cli_args={"k_max": 8})
    """
    cli_args = dict(cli_args or {})
    if verbose and not cli_args.get("log_level"):
        cli_args["log_level"] = "DEBUG"

    config = init_runtime_config(user_config_path, cli_args, rerun=rerun)

    print(f"\n{'='*60}")
    print("Seascape Ocean Regime Clustering")
    print('='*60)
    print(f"Config:    {user_config_path}")
    print(f"Input:     {config.input_dir}")
    print(f"Variables: {', '.join(config.variables)}")
    print(f"k:         {config.clustering.cluster_counts}")
    print(f"Output:    {config.base_dir}")
    print(f"Run ID:    {config.run_id}")
    print('='*60)

    if verbose:
        print("\nFull Internal Configuration:")
        print(json.dumps(config.model_dump(), indent=2))
        print('='*60)

    processor = ClusteringProcessor(config)
    try:
        result = processor.start()
    except (ContractViolation, OSError):
        logger.exception("Pipeline failed (run %s)", config.run_id)
        raise

    print(f"\nClustered {result.hierarchy.n_cells} cells into k={result.cluster_counts}")
    for name, path in result.outputs.items():
        print(f"  {name:<20} {path}")

    return result


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Cluster ocean grid cells into physical regimes")
    parser.add_argument("config", help="Path to user config file")
    parser.add_argument("--input-dir", help="Override input directory")
    parser.add_argument("--base-dir", help="Output directory")
    parser.add_argument("--variables", nargs="+", help="Variables to cluster, in column order")
    parser.add_argument("--k-max", type=int, help="Largest cluster count (clusters 2..k_max)")
    parser.add_argument("--rerun", action="store_true", help="Delete the output directory before running")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def main(argv=None) -> int:
    """Console entry point; returns the process exit code."""
    args = build_parser().parse_args(argv)
    cli_args = {
        "input_dir": args.input_dir,
        "base_dir": args.base_dir,
        "variables": args.variables,
        "k_max": args.k_max,
    }
    try:
        run_clustering_pipeline(args.config, cli_args, rerun=args.rerun, verbose=args.verbose)
    except (ContractViolation, OSError, ValueError) as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1
    return 0
