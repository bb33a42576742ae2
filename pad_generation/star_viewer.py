"""
Matplotlib preview of a star pad contour with its breakpoint circles
(s1: felt top, s2: end of compression recovery, s3: jag tip).
"""

from typing import Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt

from pad_generation.star_contour import StarGeometry, breakpoints


# ---------------- Defaults ----------------
DEFAULT_FIGSIZE = (6.0, 6.0)
DEFAULT_DPI = 150
BREAKPOINT_STYLES = (
    ("s1", "tab:blue"),
    ("s2", "tab:orange"),
    ("s3", "tab:green"),
)
# ------------------------------------------


def compute_equal_box_center_radius(points: np.ndarray, pad_frac: float = 0.04) -> Tuple[Tuple[float, float], float]:
    x_min, x_max = float(np.min(points[:, 0])), float(np.max(points[:, 0]))
    y_min, y_max = float(np.min(points[:, 1])), float(np.max(points[:, 1]))

    cx = 0.5 * (x_min + x_max)
    cy = 0.5 * (y_min + y_max)
    dx = max(x_max - x_min, 1e-9)
    dy = max(y_max - y_min, 1e-9)
    return (cx, cy), 0.5 * max(dx, dy) * (1.0 + pad_frac)


def plot_star(points: np.ndarray, geometry: Optional[StarGeometry] = None, ax=None):
    if ax is None:
        _, ax = plt.subplots(figsize=DEFAULT_FIGSIZE)

    closed = np.vstack([points, points[:1]])
    ax.plot(closed[:, 0], closed[:, 1], lw=0.8, color="black", label="contour")

    extent_pts = points
    if geometry is not None:
        theta = np.linspace(0.0, 2.0 * np.pi, 361)
        for (name, color), s in zip(BREAKPOINT_STYLES, breakpoints(geometry)):
            ax.plot(s * np.cos(theta), s * np.sin(theta), ls="--", lw=0.6, color=color, label=f"{name} = {s:.2f}")
        s3 = breakpoints(geometry)[2]
        extent_pts = np.vstack([points, [[-s3, -s3], [s3, s3]]])
        ax.set_title(f"R = {geometry.radius:.1f}, N = {geometry.n_jags}, K = {geometry.n_samples}")

    (cx, cy), r = compute_equal_box_center_radius(extent_pts)
    ax.set_xlim(cx - r, cx + r)
    ax.set_ylim(cy - r, cy + r)
    ax.set_aspect("equal", "box")
    ax.set_xlabel("x")
    ax.set_ylabel("y")
    ax.grid(True)
    ax.legend(loc="upper right", fontsize="small")
    return ax


def save_preview(points: np.ndarray, out_path: str, geometry: Optional[StarGeometry] = None, dpi: int = DEFAULT_DPI) -> str:
    fig, ax = plt.subplots(figsize=DEFAULT_FIGSIZE)
    try:
        plot_star(points, geometry=geometry, ax=ax)
        fig.savefig(out_path, dpi=dpi, bbox_inches="tight")
    finally:
        plt.close(fig)
    return out_path


def show_preview(points: np.ndarray, geometry: Optional[StarGeometry] = None) -> None:
    plot_star(points, geometry=geometry)
    plt.show()
