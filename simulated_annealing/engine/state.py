"""Snapshot of the annealing process at the end of a Markov chain."""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Generic, Tuple, TypeVar

import numpy as np

C = TypeVar("C")


def chain_statistics(energies) -> Tuple[float, float]:
    """Return ``(mean, std)`` of the energies recorded during a chain.

    The standard deviation is the sample one (``ddof=1``).  Fewer than two
    energies carry no spread information and yield ``std = 0``.
    """

    energies = np.asarray(energies, dtype=np.float64)
    if energies.size == 0:
        return 0.0, 0.0
    mean = float(energies.mean())
    if energies.size < 2:
        return mean, 0.0
    return mean, float(energies.std(ddof=1))


def _frozen(energies) -> np.ndarray:
    arr = np.array(energies, dtype=np.float64, copy=True)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class AnnealingState(Generic[C]):
    """State of the annealing after one completed Markov chain.

    Attributes
    ----------
    temperature:
        Temperature the next chain runs at.
    current_configuration, current_energy:
        Position of the chain when it ended.
    best_configuration, best_energy:
        Best configuration encountered so far over the whole run.
    energies:
        Read-only array of the energies recorded at every step of the chain.
        Empty for the initial state.
    chain:
        Index of the chain that produced the state, ``0`` before any chain.
    n_accepted:
        Number of accepted proposals during the chain.
    """

    temperature: float
    current_configuration: C
    current_energy: float
    best_configuration: C
    best_energy: float
    energies: np.ndarray = field(default_factory=lambda: _frozen(()))
    chain: int = 0
    n_accepted: int = 0

    def __post_init__(self) -> None:
        object.__setattr__(self, "energies", _frozen(self.energies))

    @classmethod
    def initial(cls, temperature: float, configuration: C, energy: float) -> "AnnealingState[C]":
        energy = float(energy)
        return cls(float(temperature), configuration, energy, configuration, energy)

    @property
    def mean_energy(self) -> float:
        return chain_statistics(self.energies)[0]

    @property
    def std_energy(self) -> float:
        return chain_statistics(self.energies)[1]

    @property
    def acceptance_ratio(self) -> float:
        if self.energies.size == 0:
            return 0.0
        return self.n_accepted / float(self.energies.size)

    def with_temperature(self, temperature: float) -> "AnnealingState[C]":
        return replace(self, temperature=float(temperature))
