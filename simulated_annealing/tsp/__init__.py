"""Travelling salesman client used as benchmark and example problem."""

from ._numba_utils import reversal_delta, tour_length
from .tour import Tour, TravellingSalesman, tour_problem

__all__ = [
    "Tour",
    "TravellingSalesman",
    "reversal_delta",
    "tour_length",
    "tour_problem",
]
