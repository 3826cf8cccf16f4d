"""Temperature decrement rules applied after each Markov chain."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Mapping

from ..config.config import DEFAULTS
from ..config.enums import DECREMENT_AVL, DECREMENT_CONSTANT, DECREMENT_RULES
from .state import AnnealingState


@dataclass(frozen=True)
class ConstantDecrementRule:
    """Multiply the temperature by a fixed ``factor`` after every chain."""

    factor: float = 0.9

    def __post_init__(self) -> None:
        if not 0.0 < float(self.factor) < 1.0:
            raise ValueError(f"decrement factor must lie in (0, 1), got {self.factor}")

    def __call__(self, state: AnnealingState) -> float:
        return self.factor * state.temperature


@dataclass(frozen=True)
class AVLDecrementRule:
    """Aarts and van Laarhoven decrement rule.

    ``T' = T / (1 + T * ln(1 + delta) / (3 * sigma))`` where ``sigma`` is the
    standard deviation of the energies of the chain just completed and
    ``delta`` the distance parameter.  Small ``delta`` cools slowly.

    A chain with no energy spread leaves the temperature unchanged.
    """

    distance_parameter: float = 0.085

    def __post_init__(self) -> None:
        if not float(self.distance_parameter) > 0.0:
            raise ValueError(
                f"distance parameter must be positive, got {self.distance_parameter}"
            )

    def __call__(self, state: AnnealingState) -> float:
        temp = state.temperature
        sigma = state.std_energy
        if sigma == 0.0:
            return temp
        return temp / (1.0 + temp * math.log1p(self.distance_parameter) / (3.0 * sigma))


def build_decrement_rule(params: Mapping[str, Any]):
    """Instantiate the decrement rule named by ``params["decrement_rule"]``."""

    name = str(params.get("decrement_rule", DEFAULTS["decrement_rule"])).lower()
    if name == DECREMENT_CONSTANT:
        factor = params.get("decrement_factor", DEFAULTS["decrement_factor"])
        return ConstantDecrementRule(factor=float(factor))
    if name == DECREMENT_AVL:
        distance = params.get("distance_parameter", DEFAULTS["distance_parameter"])
        return AVLDecrementRule(distance_parameter=float(distance))
    raise ValueError(f"unknown decrement rule {name!r}; expected one of {DECREMENT_RULES}")


__all__ = ["AVLDecrementRule", "ConstantDecrementRule", "build_decrement_rule"]
