import numpy as np
import pytest

from simulated_annealing.data.generate_data import compute_euclid, random_cities, square_loop_cities
from simulated_annealing.tsp import Tour, TravellingSalesman, reversal_delta, tour_length, tour_problem


def _square_problem(seed=0):
    return TravellingSalesman(compute_euclid(square_loop_cities(3)), rng=seed)


def test_square_loop_layout():
    coords = square_loop_cities(3)
    assert coords.shape == (12, 2)
    assert len({tuple(p) for p in coords}) == 12
    assert coords.min() == 0.0 and coords.max() == 3.0


def test_perimeter_tour_has_length_twelve():
    problem = _square_problem()
    assert problem.energy(Tour(np.arange(12))) == 12.0


def test_tour_length_kernel():
    dist = compute_euclid(np.array([[0.0, 0.0], [3.0, 0.0], [3.0, 4.0]]))
    assert tour_length(dist, np.array([0, 1, 2])) == pytest.approx(12.0)


def test_proposal_delta_matches_energy_difference():
    problem = TravellingSalesman(compute_euclid(random_cities(15, seed=4)), rng=4)
    tour = problem.random_tour()
    for _ in range(300):
        candidate, dE = problem.propose_candidate(tour)
        assert dE == pytest.approx(problem.energy(candidate) - problem.energy(tour), abs=1e-9)
        tour = candidate


def test_proposal_keeps_permutation_and_input():
    problem = _square_problem(1)
    tour = problem.random_tour()
    before = tour.order.copy()
    for _ in range(50):
        candidate, _ = problem.propose_candidate(tour)
        assert sorted(candidate.order.tolist()) == list(range(12))
    np.testing.assert_array_equal(tour.order, before)


def test_full_reversal_has_zero_delta():
    dist = compute_euclid(square_loop_cities(3))
    order = np.arange(12)
    assert reversal_delta(dist, order, 0, 11) == 0.0
    assert reversal_delta(dist, order, 4, 4) == 0.0


def test_segment_reversal_delta():
    dist = compute_euclid(square_loop_cities(3))
    order = np.arange(12)
    reversed_order = order.copy()
    reversed_order[2:6] = reversed_order[2:6][::-1]
    expected = tour_length(dist, reversed_order) - tour_length(dist, order)
    assert reversal_delta(dist, order, 2, 5) == pytest.approx(expected)


def test_tour_is_immutable():
    tour = Tour([2, 0, 1])
    with pytest.raises(ValueError):
        tour.order[0] = 1
    assert tour == Tour(np.array([2, 0, 1]))
    assert hash(tour) == hash(Tour([2, 0, 1]))


def test_sample_returns_permutations():
    problem = _square_problem()
    samples = problem.sample(20)
    assert len(samples) == 20
    for tour in samples:
        assert sorted(tour.order.tolist()) == list(range(12))
    with pytest.raises(ValueError):
        problem.sample(0)


def test_invalid_distance_matrix():
    with pytest.raises(ValueError):
        TravellingSalesman(np.zeros((3, 4)))
    with pytest.raises(ValueError):
        TravellingSalesman(np.zeros((2, 2)))


def test_tour_problem_from_coords():
    problem = tour_problem(coords=square_loop_cities(3), rng=0)
    assert problem.n_cities == 12
    with pytest.raises(ValueError):
        tour_problem()


def test_tour_problem_satisfies_protocol():
    from simulated_annealing.engine.interface import AnnealingProblem

    assert isinstance(_square_problem(), AnnealingProblem)
