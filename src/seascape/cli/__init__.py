"""Command-line entry points."""

from seascape.cli.run_clustering import run_clustering_pipeline

__all__ = ['run_clustering_pipeline']
