import numpy as np


def accept_candidate(delta, temp, rng):
    """Metropolis criterion: improvements always pass, uphill moves with
    probability ``exp(-delta / temp)``."""
    if delta < 0.0:
        return True
    if temp <= 0.0:
        return False
    p = np.exp(-delta / temp)
    return rng.random() < p
