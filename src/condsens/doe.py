import json
import os
from datetime import datetime

import numpy as np
import pandas as pd
from scipy import stats
from scipy.stats import qmc

from .utils import ensure_outdir

DISTRIBUTIONS = ("normal", "uniform")


def _finite_float(name, spec, key, default=None):
    if key not in spec:
        if default is None:
            raise ValueError(f"Parameter '{name}' must have '{key}'.")
        return float(default)
    value = float(spec[key])
    if not np.isfinite(value):
        raise ValueError(f"Parameter '{name}': '{key}' must be finite.")
    return value


def parse_params(params):
    """Validate a parameter mapping and return (names, specs) in declaration order.

    Each spec is normalised to a dict with keys ``dist``, ``factor`` and the
    distribution's own keys (``mean``/``sd`` or ``min``/``max``).
    """
    if not isinstance(params, dict):
        raise ValueError("Parameter specification must be an object keyed by parameter name.")
    names = []
    specs = []
    for name, spec in params.items():
        if name == "_meta":
            continue
        if not isinstance(spec, dict):
            raise ValueError(f"Parameter '{name}' must be an object with a 'dist' key.")
        dist = str(spec.get("dist", "uniform")).lower()
        if dist not in DISTRIBUTIONS:
            raise ValueError(f"Parameter '{name}': dist must be 'normal' or 'uniform'.")
        out = {"dist": dist}
        if dist == "normal":
            out["mean"] = _finite_float(name, spec, "mean")
            out["sd"] = _finite_float(name, spec, "sd")
            if out["sd"] <= 0:
                raise ValueError(f"Parameter '{name}': sd must be > 0.")
        else:
            out["min"] = _finite_float(name, spec, "min")
            out["max"] = _finite_float(name, spec, "max")
            if out["max"] <= out["min"]:
                raise ValueError(f"Parameter '{name}': max must be > min.")
        out["factor"] = _finite_float(name, spec, "factor", default=1.0)
        if out["factor"] <= 0:
            raise ValueError(f"Parameter '{name}': factor must be > 0.")
        if "unit" in spec:
            out["unit"] = str(spec["unit"])
        names.append(name)
        specs.append(out)
    if not names:
        raise ValueError("Parameter specification contains no parameters.")
    return names, specs


def parse_params_json(path):
    with open(path, "r", encoding="utf-8") as f:
        params = json.load(f)
    return parse_params(params)


def lhs_unit(n, d, seed=None):
    """Latin hypercube design in [0, 1): one point per 1/n stratum in every column."""
    if n is None or int(n) <= 0:
        raise ValueError(f"Sample count must be a positive integer (got {n}).")
    if d is None or int(d) <= 0:
        raise ValueError(f"Parameter count must be a positive integer (got {d}).")
    engine = qmc.LatinHypercube(d=int(d), seed=seed)
    return engine.random(n=int(n))


def apply_distributions(u, specs):
    u = np.asarray(u, dtype=float)
    if u.ndim != 2 or u.shape[1] != len(specs):
        raise ValueError(f"Unit sample has shape {u.shape}, expected (n, {len(specs)}).")
    out = np.empty_like(u)
    for j, spec in enumerate(specs):
        if spec["dist"] == "normal":
            col = stats.norm.ppf(u[:, j], loc=spec["mean"], scale=spec["sd"])
        else:
            col = stats.uniform.ppf(u[:, j], loc=spec["min"], scale=spec["max"] - spec["min"])
        out[:, j] = col * spec.get("factor", 1.0)
    return out


def lhs_sample(specs, n, seed=None):
    u = lhs_unit(n, len(specs), seed=seed)
    return apply_distributions(u, specs)


def write_doe_csv(path, names, X, response_cols=()):
    response_cols = list(response_cols)
    ensure_outdir(path)
    df = pd.DataFrame(X, columns=names)
    df.insert(0, "id", range(len(df)))
    for col in response_cols:
        df[col] = ""
    df.to_csv(path, index=False)


def design(params_json, n_samples, out_csv, seed=None, response_cols=()):
    names, specs = parse_params_json(params_json)
    p = len(names)
    if n_samples is None or n_samples <= 0:
        n_samples = max(10 * p, 50)
    X = lhs_sample(specs, n_samples, seed=seed)
    if out_csv is None:
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        out_csv = f"DOE_{ts}.csv"
    write_doe_csv(out_csv, names, X, response_cols=response_cols)
    sidecar = os.path.splitext(out_csv)[0] + ".params.json"
    sidecar_data = {"_meta": {"seed": seed, "n_samples": n_samples}}
    sidecar_data.update(dict(zip(names, specs)))
    with open(sidecar, "w", encoding="utf-8") as f:
        json.dump(sidecar_data, f, indent=2)
    print(f"Design written to: {out_csv}")
    print(f"Wrote sidecar parameter spec: {sidecar}")
    print("Fill the response columns with your model results and run 'analyze'.")
    return out_csv
