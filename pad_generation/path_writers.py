"""
Writers for closed star contours: SVG path and plotter/cutter G-code.

Both take an (n, 2) array of x, y points and close the loop back to the
first point.
"""

from pathlib import Path
from typing import Optional

import numpy as np

from pad_generation.star_contour import StarGeometry, breakpoints


# ---------------- Defaults (CLI-overridable) ----------------
DEFAULT_STROKE_WIDTH = 0.1
VIEWBOX_PAD_FRAC = 0.05
COORD_DECIMALS = 4

DEFAULT_CUT_FEED = 600.0
DEFAULT_TRAVEL_FEED = 1500.0
DEFAULT_PLUNGE_FEED = 300.0
DEFAULT_Z_UP = 5.0
DEFAULT_Z_DOWN = 0.0
# ------------------------------------------------------------


def _check_points(points: np.ndarray) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2 or pts.shape[0] == 0:
        raise ValueError(f"Expected a non-empty (n, 2) point array, got shape {pts.shape}")
    if not np.all(np.isfinite(pts)):
        raise ValueError("Point array contains NaN or Inf.")
    return pts


def svg_path_data(points: np.ndarray, decimals: int = COORD_DECIMALS) -> str:
    """
    'M x0 y0 L x1 y1 ... Z' for a closed polygon.
    """
    pts = _check_points(points)
    fmt = f"{{:.{decimals}f}} {{:.{decimals}f}}"
    parts = ["M " + fmt.format(pts[0, 0], pts[0, 1])]
    parts.extend("L " + fmt.format(x, y) for x, y in pts[1:])
    parts.append("Z")
    return " ".join(parts)


def svg_viewbox(points: np.ndarray, pad_frac: float = VIEWBOX_PAD_FRAC) -> str:
    pts = _check_points(points)
    extent = float(np.max(np.abs(pts)))
    half = max(extent, 1e-9) * (1.0 + pad_frac)
    return f"{-half:.{COORD_DECIMALS}f} {-half:.{COORD_DECIMALS}f} {2*half:.{COORD_DECIMALS}f} {2*half:.{COORD_DECIMALS}f}"


def write_star_svg(points: np.ndarray, out_path: str, stroke_width: float = DEFAULT_STROKE_WIDTH) -> Path:
    d = svg_path_data(points)
    out = Path(out_path)

    with out.open("w") as f:
        f.write('<?xml version="1.0" encoding="UTF-8" standalone="no"?>\n')
        f.write(f'<svg version="1.1" xmlns="http://www.w3.org/2000/svg" viewBox="{svg_viewbox(points)}">\n')
        f.write("<g\n")
        f.write(f'style="fill:none;stroke:#000000;stroke-opacity:1;stroke-width:{stroke_width}">\n')
        f.write(f'<path d="{d}"\n')
        f.write('id="path1" />\n')
        f.write("</g>\n")
        f.write("</svg>\n")
    return out


def write_star_gcode(
    points: np.ndarray,
    out_path: str,
    geometry: Optional[StarGeometry] = None,
    cut_feed: float = DEFAULT_CUT_FEED,
    travel_feed: float = DEFAULT_TRAVEL_FEED,
    plunge_feed: float = DEFAULT_PLUNGE_FEED,
    z_up: float = DEFAULT_Z_UP,
    z_down: float = DEFAULT_Z_DOWN,
) -> Path:
    """
    Emit G-code:
      lift -> travel to first vertex -> plunge -> cut every vertex -> close -> lift
    """
    pts = _check_points(points)
    if z_up <= z_down:
        raise ValueError(f"z_up ({z_up}) must be above z_down ({z_down})")

    out = Path(out_path)
    with out.open("w") as f:
        f.write("; generated by pad_generation.path_writers\n")
        f.write("; closed star pad contour, one G1 per vertex plus a closing move\n")
        if geometry is not None:
            s1, s2, s3 = breakpoints(geometry)
            f.write(
                f"; R={geometry.radius:.3f} h={geometry.felt_height:.3f} "
                f"rf={geometry.overlap_fraction:.4f} hf={geometry.recovery_fraction:.4f} "
                f"K={geometry.n_samples} N={geometry.n_jags}\n"
            )
            f.write(f"; breakpoints: s1={s1:.3f}, s2={s2:.3f}, s3={s3:.3f} mm\n")
        f.write(f"; vertices={len(pts)}, z_up={z_up:.3f}, z_down={z_down:.3f}\n")
        f.write("G21\n")
        f.write("G90\n")

        f.write("; --- startup ---\n")
        f.write(f"G1 Z{z_up:.3f} F{travel_feed:.0f}\n")
        f.write(f"G1 X{pts[0, 0]:.3f} Y{pts[0, 1]:.3f} F{travel_feed:.0f}\n")
        f.write(f"G1 Z{z_down:.3f} F{plunge_feed:.0f}\n")

        f.write("; --- contour ---\n")
        for x, y in pts[1:]:
            f.write(f"G1 X{x:.3f} Y{y:.3f} F{cut_feed:.0f}\n")
        f.write(f"G1 X{pts[0, 0]:.3f} Y{pts[0, 1]:.3f} F{cut_feed:.0f}\n")

        f.write("; --- finish ---\n")
        f.write(f"G1 Z{z_up:.3f} F{travel_feed:.0f}\n")
    return out
