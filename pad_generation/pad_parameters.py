"""
Pad parameter files and the per-radius star geometry derived from them.

Text format (whitespace separated, '#' starts a comment line):
  resolution felt_height max_jag_circumference min_radius max_overlap_delta recovery_fraction
  R1 R2 R3 ...

JSON format:
  {"resolution": ..., "felt_height": ..., "max_jag_circumference": ...,
   "min_radius": ..., "max_overlap_delta": ..., "recovery_fraction": ...,
   "radii": [...]}

Per radius R:
  N  = ceil(2*pi*R / max_jag_circumference)
  K  = int(R / resolution)
  rf = min(R - min_radius, max_overlap_delta) / R
"""

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from pad_generation.star_contour import StarGeometry, jags_for_radius


# ---------------- Defaults ----------------
DEFAULT_RECOVERY_FRACTION = 0.5
OUTPUT_NAME_DECIMALS = 1
# ------------------------------------------

PARAMETER_FIELDS = (
    "resolution",
    "felt_height",
    "max_jag_circumference",
    "min_radius",
    "max_overlap_delta",
    "recovery_fraction",
)


@dataclass(frozen=True)
class PadParameters:
    resolution: float               # radial sample spacing
    felt_height: float              # h
    max_jag_circumference: float    # cmax
    min_radius: float               # rmin
    max_overlap_delta: float        # drmax
    recovery_fraction: float        # hf

    def __post_init__(self):
        for name in PARAMETER_FIELDS:
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if not self.resolution > 0.0:
            raise ValueError(f"resolution must be > 0, got {self.resolution}")
        if not self.felt_height >= 0.0:
            raise ValueError(f"felt_height must be >= 0, got {self.felt_height}")
        if not self.max_jag_circumference > 0.0:
            raise ValueError(f"max_jag_circumference must be > 0, got {self.max_jag_circumference}")
        if not self.max_overlap_delta > 0.0:
            raise ValueError(f"max_overlap_delta must be > 0, got {self.max_overlap_delta}")
        if not 0.0 < self.recovery_fraction <= 1.0:
            raise ValueError(f"recovery_fraction must be in (0, 1], got {self.recovery_fraction}")


def _to_float(token, what: str) -> float:
    try:
        return float(token)
    except (TypeError, ValueError):
        raise ValueError(f"Expected a number for {what}, got {token!r}") from None


def parse_parameter_text(text: str) -> Tuple[PadParameters, List[float]]:
    tokens: List[str] = []
    for line in text.splitlines():
        if line.lstrip().startswith("#"):
            continue
        tokens.extend(line.split())

    if len(tokens) < len(PARAMETER_FIELDS):
        raise ValueError(
            f"Parameter file needs {len(PARAMETER_FIELDS)} scalars "
            f"({', '.join(PARAMETER_FIELDS)}), got {len(tokens)}"
        )

    values = [_to_float(t, name) for t, name in zip(tokens, PARAMETER_FIELDS)]
    radii = [_to_float(t, "radius") for t in tokens[len(PARAMETER_FIELDS):]]
    return PadParameters(*values), radii


def parse_parameter_json(data: dict) -> Tuple[PadParameters, List[float]]:
    missing = [k for k in PARAMETER_FIELDS[:-1] if k not in data]
    if missing:
        raise ValueError(f"Parameter JSON is missing keys: {', '.join(missing)}")

    params = PadParameters(
        resolution=_to_float(data["resolution"], "resolution"),
        felt_height=_to_float(data["felt_height"], "felt_height"),
        max_jag_circumference=_to_float(data["max_jag_circumference"], "max_jag_circumference"),
        min_radius=_to_float(data["min_radius"], "min_radius"),
        max_overlap_delta=_to_float(data["max_overlap_delta"], "max_overlap_delta"),
        recovery_fraction=_to_float(data.get("recovery_fraction", DEFAULT_RECOVERY_FRACTION), "recovery_fraction"),
    )
    radii = [_to_float(r, "radius") for r in data.get("radii", [])]
    return params, radii


def load_parameters(path: str) -> Tuple[PadParameters, List[float]]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Parameter file not found: {path}")

    with p.open("r") as f:
        if p.suffix.lower() == ".json":
            return parse_parameter_json(json.load(f))
        return parse_parameter_text(f.read())


def geometry_for_radius(params: PadParameters, radius: float) -> StarGeometry:
    """
    Derive N, K and rf for one pad radius. Raises ValueError when the
    resulting star is undefined (e.g. radius <= min_radius gives rf <= 0).
    """
    if not (math.isfinite(radius) and radius > 0.0):
        raise ValueError(f"radius must be finite and > 0, got {radius}")

    n_jags = jags_for_radius(radius, params.max_jag_circumference)
    samples = radius / params.resolution
    if not math.isfinite(samples):
        raise ValueError(f"radial sample count is not finite for radius={radius}, resolution={params.resolution}")
    n_samples = int(samples)
    overlap_fraction = min(radius - params.min_radius, params.max_overlap_delta) / radius

    return StarGeometry(
        radius=radius,
        felt_height=params.felt_height,
        overlap_fraction=overlap_fraction,
        recovery_fraction=params.recovery_fraction,
        n_samples=n_samples,
        n_jags=n_jags,
    )


def output_name(radius: float, suffix: str = ".svg") -> str:
    return f"{radius:.{OUTPUT_NAME_DECIMALS}f}{suffix}"
