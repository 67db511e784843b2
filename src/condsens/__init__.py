"""condsens — LHS uncertainty propagation and PRCC sensitivity for atmospheric conductance."""

from .doe import design, parse_params, parse_params_json, lhs_unit, apply_distributions, lhs_sample, write_doe_csv
from .model import conductance, evaluate
from .correlation import prcc, prcc_significance, bootstrap_prcc_ci, sensitivity_table
from .analyze import analyze, run
from .utils import write_params_template, DEFAULT_PARAMS, PARAM_NAMES

__all__ = [
    "design",
    "parse_params",
    "parse_params_json",
    "lhs_unit",
    "apply_distributions",
    "lhs_sample",
    "write_doe_csv",
    "conductance",
    "evaluate",
    "prcc",
    "prcc_significance",
    "bootstrap_prcc_ci",
    "sensitivity_table",
    "analyze",
    "run",
    "write_params_template",
    "DEFAULT_PARAMS",
    "PARAM_NAMES",
]
