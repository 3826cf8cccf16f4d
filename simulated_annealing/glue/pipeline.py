"""Command line pipeline orchestrating dataset loading and annealing runs."""

from __future__ import annotations

import json
import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..config.config import DEFAULTS
from ..config.enums import BENCHMARK_RANDOM, BENCHMARK_SQUARE, M_BEST, M_CHAIN, M_CURR, M_TEMP
from ..data.generate_data import generate_data
from ..engine.annealing import AnnealingOptimization
from ..engine.decrement import build_decrement_rule
from ..engine.estimation import estimate_initial_parameters
from ..engine.stop_criterion import build_stop_criterion
from ..logging.metrics import Metrics, save_metrics_json, save_tour_csv
from ..tsp.tour import TravellingSalesman
from .io import compute_euclid, load_cities, load_config, load_matrices, validate_inputs

logger = logging.getLogger(__name__)


def _resolve(base: Path, maybe_path: Optional[str]) -> Optional[Path]:
    if maybe_path is None:
        return None
    return (base / maybe_path).resolve()


def assemble_data(cfg: Dict[str, Any], base_dir: Path) -> Dict[str, Any]:
    """Load the city instance following the configuration contract."""

    dataset = cfg.get("dataset", {}) or {}

    cities_path = dataset.get("cities")
    matrices_path = dataset.get("matrices")

    if cities_path is None:
        benchmark = dataset.get("benchmark", BENCHMARK_SQUARE)
        if benchmark not in (BENCHMARK_SQUARE, BENCHMARK_RANDOM):
            raise ValueError(f"unknown benchmark {benchmark!r}")
        data = generate_data(
            benchmark=benchmark,
            n_cities=int(dataset.get("n_cities", 30)),
            side=int(dataset.get("side", 3)),
            seed=int(cfg.get("seed", 0)),
        )
    else:
        coords = load_cities(_resolve(base_dir, cities_path))
        if matrices_path is not None:
            dist = load_matrices(_resolve(base_dir, matrices_path))
        else:
            dist = compute_euclid(coords)
        data = {"n": coords.shape[0], "coords": coords, "dist": dist}

    validate_inputs(data)
    return data


def build_params(cfg: Dict[str, Any]) -> Dict[str, Any]:
    params = DEFAULTS.copy()
    params.update(cfg.get("params", {}) or {})
    for key in ("neighborhood_size", "decrement_rule", "stop_criterion", "max_chains", "time_limit"):
        if key in cfg:
            params[key] = cfg[key]
    return params


def build_search(
    data: Dict[str, Any], params: Dict[str, Any], *, seed: int = 0
) -> Tuple[AnnealingOptimization, TravellingSalesman]:
    """Create the tour problem and the annealing run for ``data``.

    Proposals and acceptance draws use independent generators spawned from
    the same seed so that a seed reproduces the whole run.
    """

    problem_seq, accept_seq = np.random.SeedSequence(seed).spawn(2)
    problem = TravellingSalesman(data["dist"], rng=np.random.default_rng(problem_seq))

    samples = problem.sample(int(params.get("n_samples", 1000)))
    temperature, reference = estimate_initial_parameters(samples, problem.energy)

    n = problem.n_cities
    neighborhood_size = params.get("neighborhood_size")
    if neighborhood_size is None:
        neighborhood_size = n * (n - 1)

    search = AnnealingOptimization(
        problem.energy,
        problem.propose_candidate,
        build_stop_criterion(params, energy_reference=reference),
        build_decrement_rule(params),
        temperature,
        samples[0],
        neighborhood_size,
        energy_reference=reference,
        rng=np.random.default_rng(accept_seq),
    )
    return search, problem


def anneal(search: AnnealingOptimization, params: Dict[str, Any], metrics: Metrics):
    """Consume the state sequence, honouring the chain cap and time limit.

    Returns the last state and the reason the run ended.
    """

    max_chains = int(params.get("max_chains", 0) or 0)
    time_limit = float(params.get("time_limit", 0.0) or 0.0)
    log_period = max(1, int(params.get("log_period", 1)))

    started = time.perf_counter()
    state = None
    reason = "stop_criterion"
    for state in search.iterate():
        if state.chain == 1 or (state.chain % log_period) == 0:
            metrics.record(state)
        if max_chains and state.chain >= max_chains:
            reason = "max_chains"
            break
        if time_limit and time.perf_counter() - started >= time_limit:
            reason = "time_limit"
            break

    if metrics.rows and metrics.rows[-1][M_CHAIN] != state.chain:
        metrics.record(state)
    return state, reason


def run_pipeline(
    cfg: Dict[str, Any],
    *,
    base_dir: Path,
    outdir: Path,
    export_trace: bool = False,
) -> Dict[str, Any]:
    """Execute an annealing run according to ``cfg`` and return the final state."""

    outdir.mkdir(parents=True, exist_ok=True)

    seed = int(cfg.get("seed", 0))
    data = assemble_data(cfg, base_dir)
    params = build_params(cfg)
    metrics = Metrics()

    search, problem = build_search(data, params, seed=seed)
    logger.info(
        "annealing %d cities: T0=%.6g reference=%.6g chain length=%d",
        problem.n_cities,
        search.initial_temperature,
        search.energy_reference,
        search.neighborhood_size,
    )

    started = time.perf_counter()
    final, reason = anneal(search, params, metrics)
    elapsed = time.perf_counter() - started
    logger.info(
        "finished after %d chains (%s): best=%.6g in %.2fs",
        final.chain,
        reason,
        final.best_energy,
        elapsed,
    )

    meta = {
        "seed": seed,
        "config_version": cfg.get("version", "dev"),
        "stopped_by": reason,
        "initial_temperature": search.initial_temperature,
        "energy_reference": search.energy_reference,
        "neighborhood_size": search.neighborhood_size,
        "elapsed_s": elapsed,
        "best_order": [int(c) for c in final.best_configuration.order],
    }

    if export_trace:
        trace_path = outdir / "trace.npz"
        np.savez(
            trace_path,
            chain=metrics.column(M_CHAIN).astype(np.int32),
            temp=metrics.column(M_TEMP),
            curr=metrics.column(M_CURR),
            best=metrics.column(M_BEST),
            best_order=np.asarray(final.best_configuration.order),
            last_energies=final.energies,
        )
        meta["trace"] = str(trace_path)

    save_metrics_json(outdir / "metrics.json", metrics, final, params, extra=meta)
    save_tour_csv(outdir / "tour.csv", final.best_configuration.order, data["coords"])
    metrics.save_csv(outdir / "metrics_log.csv")

    return {
        "final": final,
        "best": final.best_configuration,
        "best_energy": final.best_energy,
        "metrics": metrics,
        "params": params,
        "meta": meta,
    }


def load_and_run(
    config_path: Path,
    outdir: Path,
    *,
    seed_override: Optional[int] = None,
    export_trace: bool = False,
) -> Dict[str, Any]:
    """Convenience wrapper combining ``load_config`` and :func:`run_pipeline`."""

    cfg = load_config(config_path)
    if seed_override is not None:
        cfg["seed"] = int(seed_override)

    base_dir = Path(config_path).resolve().parent
    return run_pipeline(cfg, base_dir=base_dir, outdir=outdir, export_trace=export_trace)


def build_arg_parser():
    import argparse

    ap = argparse.ArgumentParser(description="Simulated annealing travelling salesman solver")
    ap.add_argument("--config", required=True, help="Path to YAML/JSON configuration")
    ap.add_argument("--outdir", required=True, help="Output directory")
    ap.add_argument("--seed", type=int, default=None, help="Optional RNG seed override")
    ap.add_argument(
        "--trace",
        action="store_true",
        help="Export compact trace.npz alongside metrics",
    )
    ap.add_argument("--verbose", action="store_true", help="Log every chain")
    return ap


def main(argv: Optional[list[str]] = None) -> Dict[str, Any]:
    ap = build_arg_parser()
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    outdir = Path(args.outdir).resolve()
    cfg_path = Path(args.config).resolve()

    result = load_and_run(
        cfg_path,
        outdir,
        seed_override=args.seed,
        export_trace=args.trace,
    )

    final = result["final"]
    summary = {
        "best_energy": float(final.best_energy),
        "best_order": result["meta"]["best_order"],
        "chains": int(final.chain),
        "final_temperature": float(final.temperature),
        "stopped_by": result["meta"]["stopped_by"],
    }

    print("\n[DONE]")
    print(json.dumps(summary, indent=2))
    return result


__all__ = [
    "anneal",
    "assemble_data",
    "build_params",
    "build_search",
    "build_arg_parser",
    "load_and_run",
    "main",
    "run_pipeline",
]
