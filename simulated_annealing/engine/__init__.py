"""Annealing driver, temperature decrement rules and stop criteria."""

from .acceptance import accept_candidate
from .annealing import AnnealingOptimization, simulated_annealing
from .decrement import AVLDecrementRule, ConstantDecrementRule, build_decrement_rule
from .estimation import estimate_initial_parameters
from .state import AnnealingState, chain_statistics
from .stop_criterion import OVGCriterion, SSVCriterion, build_stop_criterion

__all__ = [
    "AnnealingOptimization",
    "AnnealingState",
    "AVLDecrementRule",
    "ConstantDecrementRule",
    "OVGCriterion",
    "SSVCriterion",
    "accept_candidate",
    "build_decrement_rule",
    "build_stop_criterion",
    "chain_statistics",
    "estimate_initial_parameters",
    "simulated_annealing",
]
