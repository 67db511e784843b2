import math
import os

import numpy as np
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt  # noqa: E402

from .utils import ensure_outdir


def plot_bar_sorted(names, values, title, out_path, xlabel="Value", invert=False, xlim=None):
    values = np.asarray(values, dtype=float)
    idx = np.argsort(-np.abs(values))
    names_sorted = [names[i] for i in idx]
    values_sorted = [values[i] for i in idx]

    plt.figure()
    y_pos = np.arange(len(names_sorted))
    colors = ["tab:blue" if v >= 0 else "tab:red" for v in values_sorted]
    plt.barh(y_pos, values_sorted, color=colors)
    plt.axvline(0.0, color="black", linewidth=0.8)
    plt.yticks(y_pos, names_sorted)
    plt.xlabel(xlabel)
    if xlim is not None:
        plt.xlim(*xlim)
    plt.title(title)
    if invert:
        plt.gca().invert_yaxis()
    ensure_outdir(out_path)
    plt.tight_layout()
    plt.savefig(out_path, dpi=150)
    plt.close()


def scatter_grid(X, y, names, label, out_dir):
    """Scatter plot grid: one subplot per parameter vs response."""
    p = len(names)
    ncols = min(2, p)
    nrows = math.ceil(p / ncols)
    fig, axes = plt.subplots(nrows, ncols, figsize=(5 * ncols, 4 * nrows), squeeze=False)
    for j in range(p):
        ax = axes[j // ncols][j % ncols]
        ax.scatter(X[:, j], y, s=10, alpha=0.6)
        ax.set_xlabel(names[j])
        ax.set_ylabel(label)
    for j in range(p, nrows * ncols):
        axes[j // ncols][j % ncols].set_visible(False)
    fig.suptitle(f"Scatter grid — {label}", fontsize=14)
    fig.tight_layout()
    out_path = os.path.join(out_dir, f"scatter_grid_{label}.png")
    ensure_outdir(out_path)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path


def output_histogram(y, label, out_path, bins=20):
    """Histogram of the model output with mean and 5/95 % quantiles marked."""
    y = np.asarray(y, dtype=float)
    mean = float(np.mean(y))
    q05, q95 = np.percentile(y, [5, 95])
    fig, ax = plt.subplots(figsize=(6, 4))
    ax.hist(y, bins=bins, color="tab:blue", alpha=0.7, edgecolor="white")
    ax.axvline(mean, color="black", linestyle="-", label=f"mean = {mean:.4g}")
    ax.axvline(q05, color="red", linestyle="--", label=f"5% = {q05:.4g}")
    ax.axvline(q95, color="red", linestyle="--", label=f"95% = {q95:.4g}")
    ax.set_xlabel(label)
    ax.set_ylabel("Count")
    ax.set_title(f"Output distribution — {label} (n={y.size})")
    ax.legend()
    fig.tight_layout()
    ensure_outdir(out_path)
    fig.savefig(out_path, dpi=150)
    plt.close(fig)
    return out_path
