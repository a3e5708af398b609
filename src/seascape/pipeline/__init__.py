"""Batch pipeline: load, assemble, preprocess, cluster, partition, save."""

from seascape.pipeline.processor import ClusteringProcessor, ClusteringResult

__all__ = ['ClusteringProcessor', 'ClusteringResult']
