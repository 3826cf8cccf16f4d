import dataclasses
import itertools
import math

import numpy as np
import pytest

from simulated_annealing.engine.annealing import AnnealingOptimization, simulated_annealing
from simulated_annealing.engine.decrement import AVLDecrementRule, ConstantDecrementRule
from simulated_annealing.engine.estimation import estimate_initial_parameters
from simulated_annealing.engine.state import AnnealingState, chain_statistics
from simulated_annealing.engine.stop_criterion import OVGCriterion, SSVCriterion


class Parabola:
    """Integers in [-50, 50] with energy (x - 7)^2, neighbours x +/- 1."""

    def __init__(self, seed=0):
        self.rng = np.random.default_rng(seed)

    def energy(self, x):
        return float((x - 7) ** 2)

    def propose_candidate(self, x):
        step = 1 if self.rng.random() < 0.5 else -1
        y = min(50, max(-50, x + step))
        return y, self.energy(y) - self.energy(x)

    def sample(self, count):
        return [int(v) for v in self.rng.integers(-50, 51, size=count)]


def _search(seed=0, stop=None, rule=None, neighborhood_size=20, start=-40):
    problem = Parabola(seed)
    return AnnealingOptimization(
        problem.energy,
        problem.propose_candidate,
        stop if stop is not None else SSVCriterion(),
        rule if rule is not None else ConstantDecrementRule(0.8),
        50.0,
        start,
        neighborhood_size,
        rng=seed,
    )


def test_best_energy_is_monotone_and_below_current():
    states = list(_search())
    assert states
    best = [s.best_energy for s in states]
    assert all(b2 <= b1 for b1, b2 in zip(best, best[1:]))
    for s in states:
        assert s.best_energy <= s.current_energy


def test_states_record_one_energy_per_step():
    search = _search(neighborhood_size=13)
    for k, state in enumerate(itertools.islice(search, 5), start=1):
        assert state.chain == k
        assert state.energies.shape == (13,)
        assert state.energies[-1] == state.current_energy
        assert 0 <= state.n_accepted <= 13
        assert not state.energies.flags.writeable


def test_temperature_follows_decrement_rule():
    states = list(itertools.islice(_search(stop=SSVCriterion(maximum_repeat=10**6)), 4))
    temps = [50.0] + [s.temperature for s in states]
    for before, after in zip(temps, temps[1:]):
        assert after == 0.8 * before


def test_energy_tracks_configuration():
    problem = Parabola(3)
    search = AnnealingOptimization(
        problem.energy,
        problem.propose_candidate,
        SSVCriterion(),
        AVLDecrementRule(),
        10.0,
        30,
        25,
        rng=3,
    )
    for state in search:
        assert state.current_energy == pytest.approx(problem.energy(state.current_configuration))
        assert state.best_energy == pytest.approx(problem.energy(state.best_configuration))


def test_run_finds_minimum():
    best, best_energy = _search(neighborhood_size=50).run()
    assert best == 7
    assert best_energy == 0.0


def test_stop_criterion_not_called_on_initial_state():
    seen = []

    def stop(state):
        seen.append(state.chain)
        return True

    states = list(_search(stop=stop))
    assert len(states) == 1
    assert seen == [1]


def test_chain_runs_before_stop_check():
    calls = []

    def stop(state):
        calls.append(state.energies.size)
        return len(calls) == 3

    states = list(_search(stop=stop, neighborhood_size=7))
    assert len(states) == 3
    assert calls == [7, 7, 7]


def test_same_seed_reproduces_sequence():
    a = list(_search(seed=11))
    b = list(_search(seed=11))
    assert len(a) == len(b)
    for sa, sb in zip(a, b):
        assert sa.temperature == sb.temperature
        assert sa.current_configuration == sb.current_configuration
        assert sa.best_energy == sb.best_energy
        np.testing.assert_array_equal(sa.energies, sb.energies)


def test_iteration_is_not_restartable():
    search = _search()
    list(search)
    with pytest.raises(RuntimeError):
        search.iterate()


@pytest.mark.parametrize("size", [0, -3, 2.5, True])
def test_invalid_neighborhood_size(size):
    with pytest.raises(ValueError):
        _search(neighborhood_size=size)


@pytest.mark.parametrize("temp", [0.0, -1.0, math.inf, math.nan])
def test_invalid_initial_temperature(temp):
    problem = Parabola()
    with pytest.raises(ValueError):
        AnnealingOptimization(
            problem.energy, problem.propose_candidate, SSVCriterion(), AVLDecrementRule(), temp, 0, 10
        )


def test_non_callable_policy_rejected():
    problem = Parabola()
    with pytest.raises(ValueError):
        AnnealingOptimization(problem.energy, problem.propose_candidate, None, AVLDecrementRule(), 1.0, 0, 10)


def test_from_samples_uses_sample_statistics():
    problem = Parabola(5)
    samples = problem.sample(500)
    search = AnnealingOptimization.from_samples(
        samples, problem.energy, problem.propose_candidate, 30, rng=5
    )
    energies = np.array([problem.energy(s) for s in samples])
    assert search.initial_temperature == pytest.approx(energies.std(ddof=1))
    assert search.energy_reference == pytest.approx(energies.mean())
    assert search.initial_configuration == samples[0]
    assert isinstance(search.decrement_rule, AVLDecrementRule)
    assert isinstance(search.stop_criterion, OVGCriterion)
    assert search.stop_criterion.threshold == 0.0001


def test_from_samples_rejects_empty_sample():
    problem = Parabola()
    with pytest.raises(ValueError):
        AnnealingOptimization.from_samples([], problem.energy, problem.propose_candidate, 10)


def test_estimation_rejects_degenerate_samples():
    problem = Parabola()
    with pytest.raises(ValueError):
        estimate_initial_parameters([3], problem.energy)
    with pytest.raises(ValueError):
        estimate_initial_parameters([3, 3, 3], problem.energy)


def test_simulated_annealing_convenience():
    problem = Parabola(2)
    samples = problem.sample(300)
    best, best_energy = simulated_annealing(
        samples,
        problem.energy,
        problem.propose_candidate,
        40,
        stop_criterion=SSVCriterion(maximum_repeat=5),
        rng=2,
    )
    assert best_energy == problem.energy(best)
    assert best_energy <= problem.energy(samples[0])


def test_initial_state():
    state = AnnealingState.initial(2.0, 4, 9.0)
    assert state.chain == 0
    assert state.energies.size == 0
    assert state.best_energy == state.current_energy == 9.0
    assert state.acceptance_ratio == 0.0


def test_chain_statistics():
    assert chain_statistics([]) == (0.0, 0.0)
    assert chain_statistics([4.0]) == (4.0, 0.0)
    mean, std = chain_statistics([1.0, 3.0])
    assert mean == 2.0
    assert std == pytest.approx(math.sqrt(2.0))


def test_run_definition_is_frozen():
    search = _search()
    with pytest.raises(dataclasses.FrozenInstanceError):
        search.stop_criterion = SSVCriterion(maximum_repeat=10)
    with pytest.raises(dataclasses.FrozenInstanceError):
        search.neighborhood_size = 5
