"""Single stage homogeneous simulated annealing driver.

The process runs Markov chains of fixed length at constant temperature.
After every chain the decrement rule lowers the temperature and the stop
criterion decides whether the run is over.  Naming follows Varanelli (1996),
*On the acceleration of simulated annealing*, chapter 2.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Generic, Iterator, Optional, Sequence, Tuple, TypeVar

import numpy as np

from .acceptance import accept_candidate
from .decrement import AVLDecrementRule
from .estimation import estimate_initial_parameters
from .interface import CandidateProposer, DecrementRule, EnergyFunction, StopCriterion
from .state import AnnealingState
from .stop_criterion import OVGCriterion

logger = logging.getLogger(__name__)

C = TypeVar("C")


@dataclass(frozen=True, eq=False)
class AnnealingOptimization(Generic[C]):
    """Definition of an annealing run.

    The definition is frozen once built; only the stop criterion and the
    random generator change state while the run is consumed.

    Iterating the object yields one :class:`AnnealingState` per completed
    Markov chain until ``stop_criterion`` returns ``True``.  The loop itself
    is unbounded; a criterion that never fires runs forever, so callers who
    need a deadline should consume :meth:`iterate` incrementally and break
    out between chains.

    Parameters
    ----------
    energy, propose_candidate:
        Client functions, see :mod:`simulated_annealing.engine.interface`.
    stop_criterion:
        Callable ``state -> bool``.  It may keep counters and is owned by
        this run.
    decrement_rule:
        Callable ``state -> new temperature``.
    initial_temperature:
        Temperature of the first chain, must be positive.
    initial_configuration:
        Starting point of the first chain.
    neighborhood_size:
        Number of proposal/acceptance steps per chain.
    energy_reference:
        Optional mean energy of a random sample, kept for reporting.
    rng:
        Seed or ``numpy.random.Generator`` used for the acceptance draws.
    """

    energy: EnergyFunction[C]
    propose_candidate: CandidateProposer[C]
    stop_criterion: StopCriterion
    decrement_rule: DecrementRule
    initial_temperature: float
    initial_configuration: C
    neighborhood_size: int
    energy_reference: Optional[float] = None
    rng: Any = None
    _started: bool = field(default=False, init=False, repr=False)

    def __post_init__(self) -> None:
        if isinstance(self.neighborhood_size, bool) or not isinstance(
            self.neighborhood_size, (int, np.integer)
        ):
            raise ValueError(
                f"neighborhood_size must be an integer, got {self.neighborhood_size!r}"
            )
        if self.neighborhood_size <= 0:
            raise ValueError(f"neighborhood_size must be positive, got {self.neighborhood_size}")
        object.__setattr__(self, "neighborhood_size", int(self.neighborhood_size))

        temp = float(self.initial_temperature)
        if not (math.isfinite(temp) and temp > 0.0):
            raise ValueError(f"initial temperature must be positive, got {self.initial_temperature}")
        object.__setattr__(self, "initial_temperature", temp)

        for name in ("energy", "propose_candidate", "stop_criterion", "decrement_rule"):
            if not callable(getattr(self, name)):
                raise ValueError(f"{name} must be callable")

        object.__setattr__(self, "rng", np.random.default_rng(self.rng))

    @classmethod
    def from_samples(
        cls,
        samples: Sequence[C],
        energy: EnergyFunction[C],
        propose_candidate: CandidateProposer[C],
        neighborhood_size: int,
        *,
        decrement_rule: Optional[DecrementRule] = None,
        stop_criterion: Optional[StopCriterion] = None,
        distance_parameter: float = 0.085,
        stop_threshold: float = 0.0001,
        rng: Any = None,
    ) -> "AnnealingOptimization[C]":
        """Build a run whose temperature and reference come from ``samples``.

        The first sample is the initial configuration.  Without explicit
        policies the Aarts-van Laarhoven rule and the Otten-van Ginneken
        criterion are used.
        """

        temperature, reference = estimate_initial_parameters(samples, energy)
        if decrement_rule is None:
            decrement_rule = AVLDecrementRule(distance_parameter=distance_parameter)
        if stop_criterion is None:
            stop_criterion = OVGCriterion(energy_reference=reference, threshold=stop_threshold)
        return cls(
            energy,
            propose_candidate,
            stop_criterion,
            decrement_rule,
            temperature,
            samples[0],
            neighborhood_size,
            energy_reference=reference,
            rng=rng,
        )

    def initial_state(self) -> AnnealingState[C]:
        return AnnealingState.initial(
            self.initial_temperature,
            self.initial_configuration,
            self.energy(self.initial_configuration),
        )

    def markov_chain(self, state: AnnealingState[C], chain: int) -> AnnealingState[C]:
        """Run one chain at ``state.temperature`` and return its raw snapshot.

        The returned state still carries the temperature the chain ran at.
        """

        temp = state.temperature
        config = state.current_configuration
        E = state.current_energy
        best = state.best_configuration
        best_E = state.best_energy

        energies = np.zeros(self.neighborhood_size, dtype=np.float64)
        accepted = 0
        for k in range(self.neighborhood_size):
            candidate, dE = self.propose_candidate(config)
            if accept_candidate(dE, temp, self.rng):
                config = candidate
                E += dE
                accepted += 1
                if E < best_E:
                    best = config
                    best_E = E
            energies[k] = E

        return AnnealingState(temp, config, E, best, best_E, energies, chain, accepted)

    def iterate(self) -> Iterator[AnnealingState[C]]:
        """Yield the state after every chain until the stop criterion fires."""

        if self._started:
            raise RuntimeError("annealing run already started; build a new AnnealingOptimization")
        object.__setattr__(self, "_started", True)
        return self._states()

    def _states(self) -> Iterator[AnnealingState[C]]:
        state = self.initial_state()
        logger.debug(
            "annealing start: T0=%.6g E0=%.6g chain length=%d",
            state.temperature,
            state.current_energy,
            self.neighborhood_size,
        )
        chain = 0
        while True:
            chain += 1
            chain_state = self.markov_chain(state, chain)
            state = chain_state.with_temperature(self.decrement_rule(chain_state))
            logger.debug(
                "chain %d: T=%.6g E=%.6g best=%.6g accepted=%d/%d",
                chain,
                chain_state.temperature,
                state.current_energy,
                state.best_energy,
                state.n_accepted,
                self.neighborhood_size,
            )
            yield state
            if self.stop_criterion(state):
                logger.debug("stop criterion met after %d chains", chain)
                return

    def __iter__(self) -> Iterator[AnnealingState[C]]:
        return self.iterate()

    def run(self) -> Tuple[C, float]:
        """Drive the run to completion; return the best configuration and energy."""

        state = None
        for state in self.iterate():
            pass
        return state.best_configuration, state.best_energy


def simulated_annealing(
    samples: Sequence[C],
    energy: EnergyFunction[C],
    propose_candidate: CandidateProposer[C],
    neighborhood_size: int,
    **kwargs,
) -> Tuple[C, float]:
    """One-call optimization from a sample of configurations.

    Keyword arguments are forwarded to :meth:`AnnealingOptimization.from_samples`.
    """

    search = AnnealingOptimization.from_samples(
        samples, energy, propose_candidate, neighborhood_size, **kwargs
    )
    return search.run()


__all__ = ["AnnealingOptimization", "simulated_annealing"]
