"""`Seascape` - hierarchical clustering of ocean physical regimes.

Subpackages:
- ocean: Raster layer loading, feature matrix assembly, preprocessing
- clustering: Complete-linkage hierarchy, partitions, cluster reports
- pipeline: Batch processor that runs the stages in order

Used to delineate spatial polygons for ecosystem model domains from
satellite SST, chlorophyll-a, PAR and Kd time series.
"""

__version__ = "0.1.0"
