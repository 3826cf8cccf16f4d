"""Numba-accelerated tour kernels."""

from __future__ import annotations

from numba import njit


@njit(cache=True)
def tour_length(dist, order):
    """Length of the closed tour visiting cities in ``order``."""

    n = order.shape[0]
    s = 0.0
    for k in range(n):
        s += dist[order[k], order[(k + 1) % n]]
    return s


@njit(cache=True)
def reversal_delta(dist, order, i, j):
    """Change of tour length when ``order[i:j + 1]`` is reversed (``i <= j``).

    Only the two edges at the segment boundaries change.  Reversing the
    whole tour gives the same cycle and a zero delta.
    """

    n = order.shape[0]
    if i == 0 and j == n - 1:
        return 0.0
    a = order[i]
    b = order[j]
    prev = order[(i - 1) % n]
    nxt = order[(j + 1) % n]
    return dist[prev, b] + dist[a, nxt] - dist[prev, a] - dist[b, nxt]
