import numpy as np


def compute_euclid(coords):
    """Pairwise Euclidean distances between the rows of ``coords``."""
    coords = np.asarray(coords, dtype=np.float64)
    diff = coords[:, None, :] - coords[None, :, :]
    return np.sqrt(np.sum(diff * diff, axis=-1))


def square_loop_cities(side=3):
    """Cities at unit spacing on the perimeter of a ``side`` x ``side`` square.

    Walking the perimeter is the unique shortest tour, of length ``4 * side``.
    ``side=3`` gives the classic 12-city instance with optimum 12.
    """
    if side < 1:
        raise ValueError("side must be >= 1")
    pts = []
    pts += [(float(x), 0.0) for x in range(0, side)]           # bottom, left to right
    pts += [(float(side), float(y)) for y in range(0, side)]   # right, upwards
    pts += [(float(x), float(side)) for x in range(side, 0, -1)]  # top, right to left
    pts += [(0.0, float(y)) for y in range(side, 0, -1)]       # left, downwards
    return np.array(pts, dtype=np.float64)


def random_cities(n_cities=30, seed=0):
    rng = np.random.default_rng(seed)
    return rng.uniform(0.0, 1.0, size=(n_cities, 2))


def generate_data(benchmark="square", n_cities=30, side=3, seed=0):
    """Coordinates and distance matrix of a built-in instance."""
    if benchmark == "square":
        coords = square_loop_cities(side)
    elif benchmark == "random":
        coords = random_cities(n_cities, seed)
    else:
        raise ValueError(f"unknown benchmark {benchmark!r}")
    return {
        "n": coords.shape[0],
        "coords": coords,
        "dist": compute_euclid(coords),
    }
