"""Atmospheric (aerodynamic) conductance of a vegetated surface."""

import numpy as np

# Height of the wind measurement above the canopy top, cm.
MEASUREMENT_OFFSET = 200.0

# (von Karman constant 0.4) ** -2
VON_KARMAN_FACTOR = 6.25


def _check_domain(windspeed, height, k_d, k_o, z_m, z_d, z_0):
    checks = [
        ("inputs must be finite",
         ~(np.isfinite(windspeed) & np.isfinite(height) & np.isfinite(k_d) & np.isfinite(k_o))),
        ("windspeed must be >= 0", windspeed < 0),
        ("height must be > 0", height <= 0),
        ("k_o must be > 0", k_o <= 0),
        ("z_m - z_d must exceed z_0", (z_m - z_d) <= z_0),
    ]
    for message, bad in checks:
        n_bad = int(np.count_nonzero(bad))
        if n_bad:
            raise ValueError(f"Conductance undefined: {message} ({n_bad} offending value(s)).")


def conductance(windspeed, height, k_d, k_o):
    """
    Atmospheric conductance C_at in cm/s.

        z_m  = height + 200
        z_d  = k_d * height
        z_0  = k_o * height
        C_at = windspeed / (6.25 * ln((z_m - z_d) / z_0) ** 2)

    Parameters
    ----------
    windspeed : float or array
        Wind speed at the measurement height, cm/s.
    height : float or array
        Canopy height, cm.
    k_d : float or array
        Zero-plane displacement as a fraction of height.
    k_o : float or array
        Roughness length as a fraction of height.

    Raises ValueError for non-physical inputs instead of returning NaN/inf.
    Scalar inputs give a float, array inputs an array.
    """
    windspeed, height, k_d, k_o = np.broadcast_arrays(
        np.asarray(windspeed, dtype=float), np.asarray(height, dtype=float),
        np.asarray(k_d, dtype=float), np.asarray(k_o, dtype=float))
    z_m = height + MEASUREMENT_OFFSET
    z_d = k_d * height
    z_0 = k_o * height
    with np.errstate(all="ignore"):
        _check_domain(windspeed, height, k_d, k_o, z_m, z_d, z_0)
    c_at = windspeed / (VON_KARMAN_FACTOR * np.log((z_m - z_d) / z_0) ** 2)
    if c_at.ndim == 0:
        return float(c_at)
    return c_at


def evaluate(X):
    X = np.asarray(X, dtype=float)
    if X.ndim != 2 or X.shape[1] != 4:
        raise ValueError(f"Expected an (n, 4) sample matrix "
                         f"(windspeed, height, k_d, k_o), got shape {X.shape}.")
    return np.asarray(conductance(X[:, 0], X[:, 1], X[:, 2], X[:, 3]), dtype=float).reshape(-1)
