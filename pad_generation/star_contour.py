#!/usr/bin/env python3
"""
Contour of a star-shaped (jagged) felt pad, built from one half-jag.

The half-jag is described in an "unrolled" space:
  s = radial distance travelled outward from the pad center (through the felt
      and the overlap)
  c = arc length travelled around the circle of radius s

Profile c(s), three regions anchored on each other's endpoint values:
  BASE      s <  s1 : c1(s) = 2*pi*s
  RECOVERY  s1 <= s < s2 : c2(s) = c1(s1) - 2*pi*(h + R*hf*rf)*(s - s1)/(R*hf*rf)
  TIP       s >= s2 : c3(s) = c2(s2) - 2*pi*(s - s2)
with
  s1 = R + h,  s2 = R*(1 + hf*rf) + h,  s3 = R*(1 + rf) + h

Pipeline:
  1) sample the profile (uniform in s over [s1, s3), then a tail uniform in c
     at the pinned radius s1 + K*ds),
  2) map (s, c) -> (x, y) with angle = c*frac/s, frac = 0.5/N,
  3) replicate the half-jag N times: reversed + rotated, then rotated + mirrored
     about the wedge bisector (n + 0.5)*2*pi/N.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np
from numpy.typing import ArrayLike


class Region(Enum):
    BASE = "base"
    RECOVERY = "recovery"
    TIP = "tip"


@dataclass(frozen=True)
class StarGeometry:
    radius: float               # R, pad radius
    felt_height: float          # h
    overlap_fraction: float     # rf, fraction of R used for the jag
    recovery_fraction: float    # hf, fraction of the overlap used to recover compression
    n_samples: int              # K, samples in the radial part of the half-jag
    n_jags: int                 # N

    def __post_init__(self):
        validate_geometry(self)


def _is_positive_int(v) -> bool:
    if isinstance(v, bool) or not math.isfinite(v):
        return False
    return int(v) == v and v > 0


def validate_geometry(geom: StarGeometry) -> None:
    """
    Reject parameter sets for which the star shape is undefined.
    """
    for name in ("radius", "felt_height", "overlap_fraction", "recovery_fraction"):
        if not math.isfinite(getattr(geom, name)):
            raise ValueError(f"{name} must be finite, got {getattr(geom, name)}")
    if not geom.radius > 0.0:
        raise ValueError(f"radius must be > 0, got {geom.radius}")
    if not geom.felt_height >= 0.0:
        raise ValueError(f"felt_height must be >= 0, got {geom.felt_height}")
    if not 0.0 < geom.overlap_fraction <= 1.0:
        raise ValueError(f"overlap_fraction must be in (0, 1], got {geom.overlap_fraction}")
    if not 0.0 < geom.recovery_fraction <= 1.0:
        raise ValueError(f"recovery_fraction must be in (0, 1], got {geom.recovery_fraction}")
    if not _is_positive_int(geom.n_samples):
        raise ValueError(f"n_samples must be a positive integer, got {geom.n_samples}")
    if not _is_positive_int(geom.n_jags):
        raise ValueError(f"n_jags must be a positive integer, got {geom.n_jags}")


def breakpoints(geom: StarGeometry) -> Tuple[float, float, float]:
    R, h = geom.radius, geom.felt_height
    s1 = R + h
    s2 = R * (1.0 + geom.recovery_fraction * geom.overlap_fraction) + h
    s3 = R * (1.0 + geom.overlap_fraction) + h
    return s1, s2, s3


# ---------------- Profile function ----------------
def _c_base(geom: StarGeometry, s):
    return 2.0 * math.pi * s


def _c_recovery(geom: StarGeometry, s):
    s1, _, _ = breakpoints(geom)
    span = geom.radius * geom.recovery_fraction * geom.overlap_fraction
    return _c_base(geom, s1) - 2.0 * math.pi * (geom.felt_height + span) * (s - s1) / span


def _c_tip(geom: StarGeometry, s):
    _, s2, _ = breakpoints(geom)
    return _c_recovery(geom, s2) - 2.0 * math.pi * (s - s2)


_BRANCHES: Dict[Region, Callable] = {
    Region.BASE: _c_base,
    Region.RECOVERY: _c_recovery,
    Region.TIP: _c_tip,
}


def profile_region(geom: StarGeometry, s: float) -> Region:
    if s < 0.0:
        raise ValueError(f"Profile is undefined for s < 0 (s={s})")
    s1, s2, _ = breakpoints(geom)
    if s < s1:
        return Region.BASE
    if s < s2:
        return Region.RECOVERY
    return Region.TIP


def arc_length(geom: StarGeometry, s: float) -> float:
    """
    Cumulative arc length c(s) swept while moving outward to radius s.
    """
    return float(_BRANCHES[profile_region(geom, s)](geom, float(s)))


def arc_lengths(geom: StarGeometry, s: ArrayLike) -> np.ndarray:
    s = np.asarray(s, dtype=float)
    if np.any(s < 0.0):
        raise ValueError("Profile is undefined for s < 0.")
    s1, s2, _ = breakpoints(geom)
    return np.select(
        [s < s1, s < s2],
        [_c_base(geom, s), _c_recovery(geom, s)],
        default=_c_tip(geom, s),
    )


# ---------------- Sampler ----------------
def sample_step(geom: StarGeometry) -> float:
    s1, _, s3 = breakpoints(geom)
    return (s3 - s1) / float(geom.n_samples)


def half_jag_length(geom: StarGeometry) -> int:
    """
    Kappa: K radial samples plus the tail, sized so the tail spacing matches
    2N times the radial spacing.
    """
    _, _, s3 = breakpoints(geom)
    ds = sample_step(geom)
    # c(s3) = 2*pi*R*(1 - rf) is exactly 0 at rf == 1; clamp the rounding.
    c_end = max(arc_length(geom, s3), 0.0)
    return int(math.floor(geom.n_samples + c_end / (ds * geom.n_jags * 2.0)))


def radial_samples(geom: StarGeometry) -> np.ndarray:
    s1, _, _ = breakpoints(geom)
    s = s1 + sample_step(geom) * np.arange(geom.n_samples, dtype=float)
    return np.column_stack([s, arc_lengths(geom, s)])


def tail_samples(geom: StarGeometry) -> np.ndarray:
    s1, _, _ = breakpoints(geom)
    ds = sample_step(geom)
    s_tip = s1 + ds * geom.n_samples
    steps = np.arange(half_jag_length(geom) - geom.n_samples, dtype=float)
    c = arc_length(geom, s_tip) - 2.0 * ds * geom.n_jags * steps
    return np.column_stack([np.full_like(c, s_tip), c])


def sample_contour(geom: StarGeometry) -> np.ndarray:
    """
    Ordered (s, c) samples of one half-jag, shape (Kappa, 2).
    """
    sc = np.vstack([radial_samples(geom), tail_samples(geom)])

    kappa = half_jag_length(geom)
    if sc.shape[0] != kappa or kappa < geom.n_samples:
        raise RuntimeError(
            f"Half-jag sampling consistency check failed: got {sc.shape[0]} samples, "
            f"expected Kappa={kappa} >= K={geom.n_samples}"
        )
    return sc


# ---------------- Polar -> Cartesian ----------------
def sc_to_xy(s: float, c: float, offset: float = 0.0) -> Tuple[float, float]:
    angle = c / s + offset
    return s * math.cos(angle), s * math.sin(angle)


def contour_to_xy(sc: np.ndarray, n_jags: int, offset: float = 0.0) -> np.ndarray:
    frac = 0.5 / float(n_jags)
    s = sc[:, 0]
    angle = sc[:, 1] * frac / s + offset
    return np.column_stack([s * np.cos(angle), s * np.sin(angle)])


# ---------------- Symmetry ----------------
def rotate(xy: ArrayLike, alpha: float) -> np.ndarray:
    p = np.asarray(xy, dtype=float)
    ca, sa = math.cos(alpha), math.sin(alpha)
    x, y = p[..., 0], p[..., 1]
    return np.stack([x * ca - y * sa, x * sa + y * ca], axis=-1)


def mirror(xy: ArrayLike, axis_angle: float) -> np.ndarray:
    """
    Reflect across the line through the origin at angle axis_angle.
    """
    p = np.asarray(xy, dtype=float)
    mx, my = math.cos(axis_angle), math.sin(axis_angle)
    x, y = p[..., 0], p[..., 1]
    proj = x * mx + y * my
    return np.stack([2.0 * proj * mx - x, 2.0 * proj * my - y], axis=-1)


@dataclass(frozen=True)
class WedgeTransform:
    rotation: float
    mirror_axis: Optional[float] = None
    reverse: bool = False

    def apply(self, xy: np.ndarray) -> np.ndarray:
        pts = xy[::-1] if self.reverse else xy
        pts = rotate(pts, self.rotation)
        if self.mirror_axis is not None:
            pts = mirror(pts, self.mirror_axis)
        return pts


def symmetry_transforms(n_jags: int) -> List[Tuple[WedgeTransform, WedgeTransform]]:
    """
    (outgoing, incoming) edge transforms for each jag n:
      outgoing: half-jag reversed, rotated by n*dalpha
      incoming: half-jag rotated by n*dalpha, mirrored about (n + 0.5)*dalpha
    """
    if not _is_positive_int(n_jags):
        raise ValueError(f"n_jags must be a positive integer, got {n_jags}")
    dalpha = 2.0 * math.pi / float(n_jags)
    return [
        (
            WedgeTransform(rotation=n * dalpha, reverse=True),
            WedgeTransform(rotation=n * dalpha, mirror_axis=(n + 0.5) * dalpha),
        )
        for n in range(n_jags)
    ]


def expand_half_jag(xy0: np.ndarray, n_jags: int) -> np.ndarray:
    """
    Assemble the closed star from one half-jag contour, shape (2*N*I, 2).
    """
    xy0 = np.asarray(xy0, dtype=float)
    if xy0.ndim != 2 or xy0.shape[1] != 2:
        raise ValueError(f"Expected an (I, 2) half-jag contour, got shape {xy0.shape}")

    pieces = [t.apply(xy0) for pair in symmetry_transforms(n_jags) for t in pair]
    xy = np.vstack(pieces)

    if xy.shape[0] != 2 * n_jags * xy0.shape[0]:
        raise RuntimeError("Symmetry expansion produced an unexpected number of points.")
    return xy


# ---------------- Jag count ----------------
def jags_for_radius(radius: float, max_circumference: float) -> int:
    """
    Smallest N for which each jag's outer circumference is <= max_circumference.
    """
    if not (math.isfinite(radius) and radius > 0.0):
        raise ValueError(f"radius must be finite and > 0, got {radius}")
    if not (math.isfinite(max_circumference) and max_circumference > 0.0):
        raise ValueError(f"max_circumference must be finite and > 0, got {max_circumference}")
    jags = 2.0 * math.pi * radius / max_circumference
    if not math.isfinite(jags):
        raise ValueError(f"jag count is not finite for radius={radius}, max_circumference={max_circumference}")
    return int(math.ceil(jags))


# ---------------- Full pipeline ----------------
@dataclass(frozen=True)
class StarContour:
    geometry: StarGeometry
    sc: np.ndarray          # (Kappa, 2) half-jag samples
    half_jag: np.ndarray    # (Kappa, 2) half-jag in x, y
    points: np.ndarray      # (2*N*Kappa, 2) closed star

    @property
    def kappa(self) -> int:
        return int(self.sc.shape[0])

    @property
    def max_radius(self) -> float:
        return float(np.max(np.hypot(self.points[:, 0], self.points[:, 1])))


def build_star(geom: StarGeometry) -> StarContour:
    sc = sample_contour(geom)
    xy0 = contour_to_xy(sc, geom.n_jags)
    return StarContour(geometry=geom, sc=sc, half_jag=xy0, points=expand_half_jag(xy0, geom.n_jags))
