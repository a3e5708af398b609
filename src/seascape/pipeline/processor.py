"""Ocean regime clustering pipeline.

Runs one batch through every stage, in order, and persists the results:

1. **Load**: per-variable raster time series from ``<input_dir>/<variable>/``
2. **Assemble**: one row per grid cell strictly inside the bounding box,
   one column per (variable, date)
3. **Filter**: drop cells with no valid observation at all
4. **Normalize**: zero mean, unit variance per column, then the missing-value
   policy
5. **Cluster**: pairwise Euclidean distances and complete linkage
6. **Partition**: cut the hierarchy at each configured cluster count

Every stage returns a new artifact; nothing is mutated in place. Any
ContractViolation halts the run.
"""

import logging
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, TYPE_CHECKING

import pandas as pd
import xarray as xr

from seascape.ocean.loader import GridLoader, LayerCollection
from seascape.ocean.feature_matrix import assemble_feature_matrix, feature_columns
from seascape.ocean.preprocess import (
    ScalingTable,
    apply_missing_policy,
    drop_empty_rows,
    standardize,
)
from seascape.clustering.engine import ClusterEngine, ClusterHierarchy
from seascape.clustering.partition import extract_partitions
from seascape.clustering.summary import FILL_LABEL, partitions_to_grid, summarize_partitions
from seascape.setup_directories import (
    generate_run_id,
    get_log_path,
    get_output_path,
    setup_output_directories,
)

if TYPE_CHECKING:
    from seascape.schemas import InternalConfig

__all__ = ['ClusteringProcessor', 'ClusteringResult']

logger = logging.getLogger(__name__)


@dataclass
class ClusteringResult:
    """Artifacts of one pipeline run.

    ``raw_matrix`` is the filtered feature matrix in physical units, ``cells``
    the standardized matrix that was clustered.
    """
    run_id: str
    collection: LayerCollection = field(repr=False)
    raw_matrix: pd.DataFrame = field(repr=False)
    cells: pd.DataFrame = field(repr=False)
    scaling: ScalingTable = field(repr=False)
    hierarchy: ClusterHierarchy = field(repr=False)
    partitions: pd.DataFrame = field(repr=False)
    summary: Optional[pd.DataFrame] = field(default=None, repr=False)
    grid: Optional[xr.Dataset] = field(default=None, repr=False)
    outputs: Dict[str, Path] = field(default_factory=dict)

    @property
    def cluster_counts(self) -> list[int]:
        return [int(c[2:]) for c in self.partitions.columns if c.startswith("k_")]


class ClusteringProcessor:
    """Run the clustering pipeline for one resolved configuration.

    Parameters
    ----------
    config : InternalConfig
        Resolved configuration. ``run_id`` and ``output_dirs`` are used when
        set (see ``init_runtime_config``); otherwise a run ID is generated
        and the directories are created under ``base_dir``.

    Examples
    --------
    >>> processor = ClusteringProcessor(config)
    >>> result = processor.start()          # logging + run + save
    >>> result.partitions.columns.tolist()[:4]
    ['lon', 'lat', 'k_2', 'k_3']

    Use ``run()`` and ``save_results()`` separately to skip logging setup.
    """

    def __init__(self, config: "InternalConfig", output_dirs: Optional[Dict[str, Path]] = None):
        self.config = config
        self.run_id = config.run_id or generate_run_id()

        if output_dirs is None:
            if config.output_dirs:
                output_dirs = {k: Path(v) for k, v in config.output_dirs.items()}
            else:
                output_dirs = setup_output_directories(config.base_dir)
        self.output_dirs = output_dirs

        self.loader = GridLoader(config)
        self.engine = ClusterEngine(config)

    def _setup_logging(self) -> Path:
        """Configure the root logger with file and console handlers."""
        log_level = getattr(logging, self.config.logging.level.upper(), logging.INFO)
        log_path = get_log_path(self.output_dirs, self.run_id)

        formatter = logging.Formatter(
            fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

        # Clear existing handlers and add new ones
        root = logging.getLogger()
        root.setLevel(log_level)
        for handler in root.handlers[:]:
            root.removeHandler(handler)
            handler.close()

        fh = logging.FileHandler(log_path)
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        root.addHandler(fh)

        ch = logging.StreamHandler()
        ch.setLevel(log_level)
        ch.setFormatter(formatter)
        root.addHandler(ch)

        logger.info("Logging: level=%s, file=%s", logging.getLevelName(log_level), log_path)
        return log_path

    def run(self) -> ClusteringResult:
        """Execute every stage and return the in-memory result.

        Raises
        ------
        ContractViolation
            From whichever stage fails; nothing is written.
        """
        cfg = self.config
        t0 = time.perf_counter()

        collection = self.loader.load_collection(cfg.variables)

        matrix = assemble_feature_matrix(collection, cfg.region.as_tuple())
        raw_matrix = drop_empty_rows(matrix)

        scaled, scaling = standardize(raw_matrix, degenerate=cfg.preprocess.degenerate_columns)
        cells = apply_missing_policy(scaled, policy=cfg.preprocess.missing_policy)

        hierarchy = self.engine.fit(cells)
        partitions = extract_partitions(hierarchy, cfg.clustering.cluster_counts,
                                        on_invalid=cfg.clustering.on_invalid_k)

        summary = None
        if cfg.output.write_summary:
            summary = summarize_partitions(partitions, raw_matrix)

        grid = None
        if cfg.output.write_netcdf:
            grid = partitions_to_grid(partitions, collection.lon, collection.lat)

        logger.info("Run %s: %d of %d cells clustered on %d features in %.2fs",
                    self.run_id, len(cells), len(matrix), len(feature_columns(cells)),
                    time.perf_counter() - t0)

        return ClusteringResult(
            run_id=self.run_id,
            collection=collection,
            raw_matrix=raw_matrix,
            cells=cells,
            scaling=scaling,
            hierarchy=hierarchy,
            partitions=partitions,
            summary=summary,
            grid=grid,
        )

    def save_results(self, result: ClusteringResult) -> Dict[str, Path]:
        """Write partitions, linkage, summary and gridded labels.

        Returns
        -------
        dict
            Artifact name -> written path. Also stored on ``result.outputs``.
        """
        run_id = result.run_id
        outputs = {}

        path = get_output_path(self.output_dirs, "partitions", run_id, "csv")
        result.partitions.to_csv(path, index=False)
        outputs["partitions_csv"] = path

        compression = self.config.output.compression
        path = get_output_path(self.output_dirs, "partitions", run_id, "parquet")
        result.partitions.to_parquet(path, engine='pyarrow',
                                     compression=None if compression == "none" else compression,
                                     index=False)
        outputs["partitions_parquet"] = path

        path = get_output_path(self.output_dirs, "linkage", run_id, "csv")
        result.hierarchy.to_dataframe().to_csv(path, index=False)
        outputs["linkage"] = path

        if result.summary is not None:
            path = get_output_path(self.output_dirs, "cluster_summary", run_id, "csv")
            result.summary.to_csv(path, index=False)
            outputs["cluster_summary"] = path

        if result.grid is not None:
            path = get_output_path(self.output_dirs, "partitions", run_id, "nc")
            encoding = {
                name: {"_FillValue": FILL_LABEL, "zlib": True, "complevel": 4}
                for name in result.grid.data_vars
            }
            result.grid.to_netcdf(path, mode='w', engine='netcdf4', format='NETCDF4',
                                  encoding=encoding)
            outputs["grid"] = path

        for name, path in outputs.items():
            logger.info("Saved %s: %s", name, path)

        result.outputs.update(outputs)
        return outputs

    def start(self) -> ClusteringResult:
        """Set up logging, run the pipeline and save every artifact."""
        self._setup_logging()

        logger.info("=" * 60)
        logger.info("Starting Ocean Regime Clustering (run %s)", self.run_id)
        logger.info("=" * 60)
        logger.info("Input: %s, variables: %s", self.config.input_dir, self.config.variables)
        logger.info("Region: lon (%g, %g), lat (%g, %g)", *self.config.region.as_tuple())

        result = self.run()
        self.save_results(result)

        logger.info("Pipeline complete: %d partitions over %d cells",
                    len(result.cluster_counts), result.hierarchy.n_cells)
        return result
