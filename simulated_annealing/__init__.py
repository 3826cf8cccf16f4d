"""Generic simulated annealing with pluggable cooling and stop policies."""

from .engine import (
    AnnealingOptimization,
    AnnealingState,
    AVLDecrementRule,
    ConstantDecrementRule,
    OVGCriterion,
    SSVCriterion,
    build_decrement_rule,
    build_stop_criterion,
    estimate_initial_parameters,
    simulated_annealing,
)

__version__ = "0.1.0"

__all__ = [
    "AnnealingOptimization",
    "AnnealingState",
    "AVLDecrementRule",
    "ConstantDecrementRule",
    "OVGCriterion",
    "SSVCriterion",
    "build_decrement_rule",
    "build_stop_criterion",
    "estimate_initial_parameters",
    "simulated_annealing",
]
