"""Capabilities the annealing driver expects from its collaborators.

The driver only needs two functions of the configuration type ``C``:

``energy(config) -> float``
    Total energy of a configuration.  Must return the same value for equal
    configurations.

``propose_candidate(config) -> (candidate, delta_energy)``
    A neighbouring configuration together with
    ``energy(candidate) - energy(config)``.  The delta is trusted as is; a
    wrong delta silently corrupts the best-so-far bookkeeping.

``sample(count)`` is optional and only used to estimate the initial
temperature and the energy reference.
"""

from __future__ import annotations

from typing import List, Protocol, Tuple, TypeVar, runtime_checkable

from .state import AnnealingState

C = TypeVar("C")


class EnergyFunction(Protocol[C]):
    def __call__(self, config: C) -> float: ...


class CandidateProposer(Protocol[C]):
    def __call__(self, config: C) -> Tuple[C, float]: ...


class Sampler(Protocol[C]):
    def __call__(self, count: int) -> List[C]: ...


class DecrementRule(Protocol):
    def __call__(self, state: AnnealingState) -> float: ...


class StopCriterion(Protocol):
    def __call__(self, state: AnnealingState) -> bool: ...


@runtime_checkable
class AnnealingProblem(Protocol[C]):
    """An object bundling the three client functions."""

    def energy(self, config: C) -> float: ...

    def propose_candidate(self, config: C) -> Tuple[C, float]: ...

    def sample(self, count: int) -> List[C]: ...
