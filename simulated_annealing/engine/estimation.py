"""Initial temperature and energy reference from a sample of configurations."""

from __future__ import annotations

import math
from typing import Callable, Sequence, Tuple

import numpy as np


def sample_energies(samples: Sequence, energy: Callable) -> np.ndarray:
    if len(samples) == 0:
        raise ValueError("the sample of configurations is empty")
    return np.fromiter((float(energy(s)) for s in samples), dtype=np.float64, count=len(samples))


def estimate_initial_parameters(samples: Sequence, energy: Callable) -> Tuple[float, float]:
    """Return ``(initial_temperature, energy_reference)`` for ``samples``.

    The initial temperature is the standard deviation of the sample energies
    (White criterion) and the reference is their mean.  A few hundred
    configurations drawn uniformly are usually enough.
    """

    energies = sample_energies(samples, energy)
    if energies.size < 2:
        raise ValueError("at least two sample configurations are needed to estimate a temperature")
    temperature = float(energies.std(ddof=1))
    if not (math.isfinite(temperature) and temperature > 0.0):
        raise ValueError(
            "sample energies have no spread; cannot derive a positive initial temperature"
        )
    return temperature, float(energies.mean())


__all__ = ["estimate_initial_parameters", "sample_energies"]
