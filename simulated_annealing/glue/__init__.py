"""Glue helpers exposed for CLI and integration harnesses."""

from .io import (
    compute_euclid,
    load_cities,
    load_config,
    load_matrices,
    validate_inputs,
)
from .pipeline import (
    anneal,
    assemble_data,
    build_arg_parser,
    build_params,
    build_search,
    load_and_run,
    main,
    run_pipeline,
)

__all__ = [
    "anneal",
    "assemble_data",
    "build_arg_parser",
    "build_params",
    "build_search",
    "compute_euclid",
    "load_and_run",
    "load_cities",
    "load_config",
    "load_matrices",
    "main",
    "run_pipeline",
    "validate_inputs",
]
