"""Travelling salesman problem as an annealing client.

A configuration is a :class:`Tour`, an immutable permutation of the cities.
Neighbours are obtained by reversing the segment between two random
positions (2-opt move), whose length delta only involves four edges.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from ..data.generate_data import compute_euclid
from ._numba_utils import reversal_delta, tour_length


def _readonly(order) -> np.ndarray:
    arr = np.array(order, dtype=np.int64, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Tour:
    """Order in which the cities are visited; the tour returns to its start."""

    order: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "order", _readonly(self.order))

    def __len__(self) -> int:
        return int(self.order.shape[0])

    def __eq__(self, other) -> bool:
        if not isinstance(other, Tour):
            return NotImplemented
        return np.array_equal(self.order, other.order)

    def __hash__(self) -> int:
        return hash(self.order.tobytes())


class TravellingSalesman:
    """Energy, neighbourhood and sampling for tours over a distance matrix.

    Parameters
    ----------
    dist:
        Square matrix of pairwise distances, shared by every tour.
    rng:
        Seed or ``numpy.random.Generator`` driving proposals and samples.
    """

    def __init__(self, dist, rng=None):
        dist = np.array(dist, dtype=np.float64, copy=True)
        if dist.ndim != 2 or dist.shape[0] != dist.shape[1]:
            raise ValueError("distance matrix must be square")
        if dist.shape[0] < 3:
            raise ValueError("a tour needs at least three cities")
        dist.setflags(write=False)
        self.dist = dist
        self.rng = np.random.default_rng(rng)

    @property
    def n_cities(self) -> int:
        return int(self.dist.shape[0])

    def energy(self, tour: Tour) -> float:
        return float(tour_length(self.dist, tour.order))

    def propose_candidate(self, tour: Tour) -> Tuple[Tour, float]:
        n = len(tour)
        i, j = (int(v) for v in self.rng.integers(0, n, size=2))
        if i > j:
            i, j = j, i
        if i == 0 and j == n - 1:
            return tour, 0.0
        dE = float(reversal_delta(self.dist, tour.order, i, j))
        order = tour.order.copy()
        order[i : j + 1] = order[i : j + 1][::-1]
        return Tour(order), dE

    def random_tour(self) -> Tour:
        return Tour(self.rng.permutation(self.n_cities))

    def sample(self, count: int) -> List[Tour]:
        """Draw ``count`` uniformly random tours."""
        if count <= 0:
            raise ValueError(f"sample size must be positive, got {count}")
        return [self.random_tour() for _ in range(count)]


def tour_problem(coords: Optional[np.ndarray] = None, dist: Optional[np.ndarray] = None, rng=None):
    """Build a :class:`TravellingSalesman` from coordinates or a distance matrix."""

    if dist is None:
        if coords is None:
            raise ValueError("either coords or dist must be given")
        dist = compute_euclid(np.asarray(coords, dtype=np.float64))
    return TravellingSalesman(dist, rng=rng)
