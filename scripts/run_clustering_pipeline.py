#!/usr/bin/env python3
"""Seascape ocean regime clustering runner.

Usage:
    python scripts/run_clustering_pipeline.py scripts/user_config.py
    python scripts/run_clustering_pipeline.py scripts/user_config.py --k-max 8
    python scripts/run_clustering_pipeline.py scripts/user_config.py --input-dir /data/ocean

Note: User config in scripts/user_config.py, expert defaults in seascape.schemas.param
"""

import sys
from pathlib import Path

# Add src to path
project_root = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(project_root / "src"))

from seascape.cli.run_clustering import main


if __name__ == "__main__":
    sys.exit(main())
