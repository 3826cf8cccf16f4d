import csv
import json

import numpy as np

from ..config.enums import M_ACCEPT, M_BEST, M_CHAIN, M_CURR, M_MEAN, M_STD, M_TEMP


class Metrics:
    """Per-chain trace of an annealing run."""

    def __init__(self):
        self.rows = []

    def append(self, chain, temp, curr, best, mean=0.0, std=0.0, accept_ratio=0.0):
        self.rows.append(
            (
                int(chain),
                float(temp),
                float(curr),
                float(best),
                float(mean),
                float(std),
                float(accept_ratio),
            )
        )

    def record(self, state):
        mean, std = state.mean_energy, state.std_energy
        self.append(
            state.chain,
            state.temperature,
            state.current_energy,
            state.best_energy,
            mean=mean,
            std=std,
            accept_ratio=state.acceptance_ratio,
        )

    def column(self, idx):
        return np.array([row[idx] for row in self.rows], dtype=np.float64)

    def save_csv(self, path):
        with open(path, "w", newline="", encoding="utf-8") as f:
            w = csv.writer(f)
            w.writerow(
                [
                    "chain",
                    "temp",
                    "curr_energy",
                    "best_energy",
                    "mean_energy",
                    "std_energy",
                    "accept_ratio",
                ]
            )
            for row in self.rows:
                w.writerow(
                    [
                        row[M_CHAIN],
                        row[M_TEMP],
                        row[M_CURR],
                        row[M_BEST],
                        row[M_MEAN],
                        row[M_STD],
                        row[M_ACCEPT],
                    ]
                )


def save_metrics_json(path, metrics, final_state, params, *, extra=None):
    data = {
        "final_best_energy": float(final_state.best_energy),
        "final_temperature": float(final_state.temperature),
        "chains": int(final_state.chain),
        "chains_logged": len(metrics.rows),
        "params": params,
    }
    if extra:
        data.update(extra)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)


def save_tour_csv(path, order, coords=None):
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.writer(f)
        if coords is None:
            w.writerow(["pos", "city_id"])
            for i, c in enumerate(order):
                w.writerow([i + 1, int(c)])
        else:
            w.writerow(["pos", "city_id", "x", "y"])
            for i, c in enumerate(order):
                w.writerow([i + 1, int(c), float(coords[c, 0]), float(coords[c, 1])])
