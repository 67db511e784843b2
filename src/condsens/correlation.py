from typing import Tuple

import numpy as np
import pandas as pd
from scipy import stats
from sklearn.linear_model import LinearRegression


def correlation_vector(X, y, method="spearman"):
    df = pd.DataFrame(X)
    return df.corrwith(pd.Series(y), method=method).values


def _check_xy(X, y):
    X = np.asarray(X, float)
    y = np.asarray(y, float).reshape(-1)
    if X.ndim != 2:
        raise ValueError(f"X must be a 2-D sample matrix, got shape {X.shape}.")
    if X.shape[0] != y.shape[0]:
        raise ValueError(f"X has {X.shape[0]} rows but y has {y.shape[0]} values.")
    n, p = X.shape
    if n < p + 2:
        raise ValueError(f"PRCC needs at least p + 2 = {p + 2} rows, got {n}.")
    return X, y


def _residuals(Z, v):
    if Z.shape[1] == 0:
        return v - v.mean()
    reg = LinearRegression().fit(Z, v)
    return v - reg.predict(Z)


def _corr(a, b, eps):
    if np.std(a) <= eps or np.std(b) <= eps:
        return 0.0
    return float(np.corrcoef(a, b)[0, 1])


def prcc(X, y, eps=1e-12):
    """
    Partial rank correlation coefficient of each column of X with y.

    Ranks are taken per column (average ranks for ties); for column j the
    ranked x_j and ranked y are both regressed on the remaining ranked
    columns and the residuals correlated. Degenerate (constant) columns or
    output give 0.
    """
    X, y = _check_xy(X, y)
    p = X.shape[1]
    R = np.column_stack([stats.rankdata(X[:, j]) for j in range(p)])
    ry = stats.rankdata(y)
    out = np.zeros(p)
    for j in range(p):
        Z = np.delete(R, j, axis=1)
        out[j] = _corr(_residuals(Z, R[:, j]), _residuals(Z, ry), eps)
    return np.clip(out, -1.0, 1.0)


def prcc_significance(r, n, p, alpha=0.05):
    """
    Two-sided p-values and Fisher-z confidence bounds for PRCC values.

    ``p`` is the total number of inputs, so each coefficient controls for
    ``p - 1`` others. Returns (p_values, ci_lo, ci_hi); entries are NaN when
    n is too small for the corresponding statistic.
    """
    r = np.asarray(r, float)
    k = p - 1
    dof = n - 2 - k
    p_values = np.full(r.shape, np.nan)
    ci_lo = np.full(r.shape, np.nan)
    ci_hi = np.full(r.shape, np.nan)
    r_safe = np.clip(r, -1.0 + 1e-15, 1.0 - 1e-15)
    if dof >= 1:
        t = r_safe * np.sqrt(dof / (1.0 - r_safe ** 2))
        p_values = 2.0 * stats.t.sf(np.abs(t), dof)
    if n - 3 - k >= 1:
        z = np.arctanh(r_safe)
        half = stats.norm.ppf(1.0 - alpha / 2.0) / np.sqrt(n - 3 - k)
        ci_lo = np.tanh(z - half)
        ci_hi = np.tanh(z + half)
    return p_values, ci_lo, ci_hi


def bootstrap_prcc_ci(
    X: np.ndarray,
    y: np.ndarray,
    n_boot: int = 1000,
    alpha: float = 0.05,
    random_state: int = 0,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Percentile bootstrap CIs for PRCC (paired row resamples).
    Degenerate resamples contribute 0 for the affected columns.
    """
    X, y = _check_xy(X, y)
    rng = np.random.default_rng(random_state)
    n, p = X.shape
    boot = np.empty((n_boot, p))
    for b in range(n_boot):
        idx = rng.integers(0, n, size=n)
        boot[b] = prcc(X[idx], y[idx])
    lo = np.nanpercentile(boot, 100.0 * alpha / 2.0, axis=0)
    hi = np.nanpercentile(boot, 100.0 * (1.0 - alpha / 2.0), axis=0)
    return lo, hi


def sensitivity_table(X, y, names, alpha=0.05, n_boot=0, seed=0):
    """One row per parameter: PRCC, p-value, Fisher-z bounds and Spearman rho."""
    X, y = _check_xy(X, y)
    mask = np.isfinite(y) & np.all(np.isfinite(X), axis=1)
    if not np.all(mask):
        print(f"[WARN] Dropping {int(np.sum(~mask))} row(s) with non-finite values.")
        X, y = _check_xy(X[mask], y[mask])
    n, p = X.shape
    if len(names) != p:
        raise ValueError(f"Got {len(names)} names for {p} parameter columns.")

    r = prcc(X, y)
    p_values, ci_lo, ci_hi = prcc_significance(r, n, p, alpha=alpha)
    table = pd.DataFrame({
        "name": list(names), "prcc": r, "p_value": p_values,
        "ci_lo": ci_lo, "ci_hi": ci_hi,
        "spearman": correlation_vector(X, y, method="spearman"),
    })
    if n_boot and n_boot > 0:
        boot_lo, boot_hi = bootstrap_prcc_ci(X, y, n_boot=n_boot, alpha=alpha, random_state=seed)
        table["boot_lo"] = boot_lo
        table["boot_hi"] = boot_hi
    return table
