import json
import os
from collections import namedtuple

import numpy as np
import pandas as pd

from .utils import ensure_outdir, DEFAULT_PARAMS, DEFAULT_N_SAMPLES, PARAM_NAMES
from .doe import parse_params, parse_params_json, lhs_sample
from .model import evaluate
from .correlation import sensitivity_table
from .plotting import plot_bar_sorted, scatter_grid, output_histogram

OUTPUT_LABEL = "conductance"

Result = namedtuple("Result", ["X", "y", "names", "table"])


def order_for_model(names, specs):
    """Return (names, specs) reordered to the model's argument order. Raises if mismatched."""
    unexpected = [n for n in names if n not in PARAM_NAMES]
    if unexpected:
        raise ValueError(f"Parameter file contains parameters the model does not take: {unexpected}")
    missing = [n for n in PARAM_NAMES if n not in names]
    if missing:
        raise ValueError(f"Parameter file is missing model parameters: {missing}")
    by_name = dict(zip(names, specs))
    return list(PARAM_NAMES), [by_name[n] for n in PARAM_NAMES]


def report(X, y, names, label, out_dir, alpha=0.05, n_boot=0, seed=0, do_plots=True):
    """Sensitivity table, plots and summary for one response; prints the table."""
    ensure_outdir(os.path.join(out_dir, "_"))
    table = sensitivity_table(X, y, names, alpha=alpha, n_boot=n_boot, seed=seed)
    table.to_csv(os.path.join(out_dir, f"prcc_{label}.csv"), index=False)

    print(f"[PRCC] Partial rank correlation — {label} (n={len(y)}, alpha={alpha}):")
    print(table.to_string(index=False, float_format=lambda v: f"{v: .4f}"))

    if do_plots:
        scatter_grid(X, y, names, label, out_dir)
        output_histogram(y, label, os.path.join(out_dir, f"hist_{label}.png"))
        plot_bar_sorted(names, table["prcc"].values, f"PRCC — {label}",
                        os.path.join(out_dir, f"prcc_{label}.png"), xlabel="PRCC",
                        invert=True, xlim=(-1.0, 1.0))
        print(f"[PLOT] Wrote scatter_grid_{label}.png, hist_{label}.png, prcc_{label}.png")

    y = np.asarray(y, dtype=float)
    summary = {
        "response": label,
        "n_samples": int(y.size),
        "mean": float(np.mean(y)),
        "std": float(np.std(y, ddof=1)) if y.size > 1 else 0.0,
        "q05": float(np.percentile(y, 5)),
        "q95": float(np.percentile(y, 95)),
        "alpha": alpha,
        "prcc": {n: float(v) for n, v in zip(table["name"], table["prcc"])},
    }
    with open(os.path.join(out_dir, f"summary_{label}.json"), "w", encoding="utf-8") as f:
        json.dump(summary, f, indent=2)
    return table


def run(params_json=None, n_samples=DEFAULT_N_SAMPLES, seed=None, out_dir="outputs",
        alpha=0.05, n_boot=0, do_plots=True, params=None):
    """
    Sample the conductance inputs by LHS, evaluate the model and report PRCC.

    Parameters come from ``params_json`` if given, else ``params`` (a dict),
    else the built-in defaults. Returns a Result(X, y, names, table).
    """
    if params_json is not None:
        names, specs = parse_params_json(params_json)
    else:
        names, specs = parse_params(params if params is not None else DEFAULT_PARAMS)
    names, specs = order_for_model(names, specs)

    X = lhs_sample(specs, n_samples, seed=seed)
    y = evaluate(X)
    print(f"[INFO] Evaluated {OUTPUT_LABEL} for {len(y)} LHS samples (seed={seed}).")

    ensure_outdir(os.path.join(out_dir, "_"))
    df = pd.DataFrame(X, columns=names)
    df.insert(0, "id", range(len(df)))
    df[OUTPUT_LABEL] = y
    df.to_csv(os.path.join(out_dir, "samples.csv"), index=False)

    table = None
    if len(y) < len(names) + 2:
        print(f"[WARN] {len(y)} sample(s) are too few for PRCC with {len(names)} parameters. "
              f"Skipping sensitivity report.")
    else:
        table = report(X, y, names, OUTPUT_LABEL, out_dir, alpha=alpha, n_boot=n_boot,
                       seed=seed or 0, do_plots=do_plots)
    print(f"Analysis complete. See {out_dir}/ for results.")
    return Result(X, y, names, table)


def analyze(design_csv, response_col, out_dir="outputs", alpha=0.05, n_boot=0, seed=0,
            do_plots=True):
    """PRCC report for a design CSV whose response column has been filled in."""
    df_input = pd.read_csv(design_csv)
    if response_col not in df_input.columns:
        raise ValueError(f"Response column '{response_col}' not found in {design_csv}.")
    exclude = {"id", response_col}
    param_cols = [h for h in df_input.columns if h not in exclude]
    if not param_cols:
        raise ValueError("No parameter columns found.")
    print("[INFO] Using features (in order):", param_cols)

    X = df_input[param_cols].apply(pd.to_numeric, errors="coerce").values
    y = pd.to_numeric(df_input[response_col], errors="coerce").values
    mask = np.isfinite(y) & np.all(np.isfinite(X), axis=1)
    n_used = int(np.sum(mask))
    if n_used < len(param_cols) + 2:
        raise ValueError(f"Response '{response_col}': not enough filled rows ({n_used}) "
                         f"for {len(param_cols)} parameters.")
    if n_used < len(y):
        print(f"[WARN] Response '{response_col}': {len(y) - n_used} unfilled row(s) skipped.")

    table = report(X[mask], y[mask], param_cols, response_col, out_dir, alpha=alpha,
                   n_boot=n_boot, seed=seed, do_plots=do_plots)
    print(f"Analysis complete. See {out_dir}/ for results.")
    return table
