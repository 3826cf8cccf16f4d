"""Configuration and dataset helpers for the command-line glue layer.

Configuration files are YAML (or JSON).  City tables are CSV/Parquet files
with ``x`` and ``y`` columns read through Pandas; precomputed distance
matrices come as ``.npz`` archives holding a ``dist`` array.
"""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Mapping

import numpy as np

from ..data.generate_data import compute_euclid


def load_config(path_yaml: Path) -> Dict:
    """Read a YAML (or JSON) configuration file.

    Parameters
    ----------
    path_yaml:
        Path to the configuration file.

    Returns
    -------
    dict
        Parsed configuration dictionary.  Empty files resolve to ``{}``.
    """

    import json

    import yaml

    path = Path(path_yaml)
    if not path.exists():
        raise FileNotFoundError(path)

    text = path.read_text(encoding="utf-8").strip()
    if not text:
        return {}

    if path.suffix.lower() == ".json":
        return json.loads(text)

    cfg = yaml.safe_load(text)
    return cfg or {}


def _read_frame(path_like: Path):
    """Return a Pandas ``DataFrame`` from CSV or Parquet input."""

    import pandas as pd

    path = Path(path_like)
    if path.suffix.lower() in {".parquet", ".pq"}:
        return pd.read_parquet(path)
    return pd.read_csv(path)


def load_cities(path_table: Path) -> np.ndarray:
    """Load city coordinates ``(n, 2)`` from a CSV/Parquet table."""

    df = _read_frame(path_table)
    if not {"x", "y"}.issubset(df.columns):
        raise ValueError("city table must contain 'x' and 'y' columns")
    if df[["x", "y"]].isna().to_numpy().any():
        raise ValueError("city table contains missing coordinates")
    return df[["x", "y"]].to_numpy(dtype=np.float64, copy=True)


def load_matrices(path_npz: Path) -> np.ndarray:
    """Load the distance matrix from an ``.npz`` archive."""

    path = Path(path_npz)
    with np.load(path) as data:
        dist = np.array(data["dist"], dtype=np.float64)
    return dist


def validate_inputs(data: Mapping[str, np.ndarray]) -> None:
    """Run lightweight shape and value checks on the assembled dataset."""

    coords = np.asarray(data["coords"])
    dist = np.asarray(data["dist"])

    if coords.ndim != 2 or coords.shape[1] != 2:
        raise ValueError("coords must have shape (n, 2)")
    n = coords.shape[0]
    if n < 3:
        raise ValueError("at least three cities are required")
    if dist.shape != (n, n):
        raise ValueError("dist must have shape (n, n)")
    if not np.all(np.isfinite(dist)):
        raise ValueError("dist must be finite")
    if np.any(dist < 0):
        raise ValueError("dist must be non-negative")
    if not np.allclose(dist, dist.T):
        raise ValueError("dist must be symmetric")


__all__ = [
    "compute_euclid",
    "load_cities",
    "load_config",
    "load_matrices",
    "validate_inputs",
]
