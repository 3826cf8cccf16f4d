"""Stop criteria deciding when the annealing has converged.

Criteria are called once per completed Markov chain with the resulting
:class:`AnnealingState`.  Some of them keep counters between calls, so an
instance belongs to a single run and must never be shared.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from ..config.config import DEFAULTS
from ..config.enums import STOP_CRITERIA, STOP_OVG, STOP_SSV
from .state import AnnealingState


@dataclass(frozen=True)
class OVGCriterion:
    """Otten and van Ginneken adaptive stop criterion.

    The measure ``sigma**2 / (T * (mu0 - mu))`` compares the spread of the
    chain energies with the improvement of their mean ``mu`` over the
    reference ``mu0``, usually the mean energy of a random sample.

    A chain without spread is treated as converged.  A chain whose mean is
    still above the reference never stops the run.
    """

    energy_reference: float
    threshold: float = 0.001

    def __post_init__(self) -> None:
        if not math.isfinite(float(self.energy_reference)):
            raise ValueError("energy reference must be finite")
        if not float(self.threshold) > 0.0:
            raise ValueError(f"stop threshold must be positive, got {self.threshold}")

    def stop_measure(self, state: AnnealingState) -> float:
        mean, sigma = state.mean_energy, state.std_energy
        if sigma == 0.0:
            return 0.0
        d_mu = self.energy_reference - mean
        if d_mu < 0.0:
            return math.inf
        if d_mu == 0.0:
            return 0.0
        return sigma * sigma / (state.temperature * d_mu)

    def __call__(self, state: AnnealingState) -> bool:
        if state.std_energy == 0.0:
            return True
        return self.stop_measure(state) < self.threshold


@dataclass
class SSVCriterion:
    """Sechen and Sangiovanni-Vincentelli stop criterion.

    Stops once the same best-so-far energy has been seen at the end of
    ``maximum_repeat`` consecutive chains.  The count is compared for
    equality, a count already past the limit never triggers.
    """

    maximum_repeat: int = 3
    last_energy: float = math.inf
    repeat_count: int = 1

    def __post_init__(self) -> None:
        if int(self.maximum_repeat) < 1:
            raise ValueError(f"maximum repeat must be >= 1, got {self.maximum_repeat}")
        self.maximum_repeat = int(self.maximum_repeat)

    def reset(self) -> None:
        self.last_energy = math.inf
        self.repeat_count = 1

    def __call__(self, state: AnnealingState) -> bool:
        if state.best_energy == self.last_energy:
            self.repeat_count += 1
        else:
            self.last_energy = state.best_energy
            self.repeat_count = 1
        return self.repeat_count == self.maximum_repeat


def build_stop_criterion(params: Mapping[str, Any], energy_reference: Optional[float] = None):
    """Instantiate a fresh stop criterion named by ``params["stop_criterion"]``."""

    name = str(params.get("stop_criterion", DEFAULTS["stop_criterion"])).lower()
    if name == STOP_OVG:
        if energy_reference is None:
            raise ValueError("the OVG stop criterion requires an energy reference")
        return OVGCriterion(
            energy_reference=float(energy_reference),
            threshold=float(params.get("stop_threshold", DEFAULTS["stop_threshold"])),
        )
    if name == STOP_SSV:
        repeat = params.get("maximum_repeat", DEFAULTS["maximum_repeat"])
        return SSVCriterion(maximum_repeat=int(repeat))
    raise ValueError(f"unknown stop criterion {name!r}; expected one of {STOP_CRITERIA}")


__all__ = ["OVGCriterion", "SSVCriterion", "build_stop_criterion"]
