"""Shared test fixtures."""

import json

import matplotlib

matplotlib.use("Agg")

import pytest

from pad_generation.star_contour import StarGeometry


# Reference star: s1=11, s2=12.5, s3=14, ds=0.6, Kappa=11
EXAMPLE_GEOMETRY = dict(
    radius=10.0,
    felt_height=1.0,
    overlap_fraction=0.3,
    recovery_fraction=0.5,
    n_samples=5,
    n_jags=6,
)

# resolution felt_height max_jag_circumference min_radius max_overlap_delta recovery_fraction, then radii
PARAMETER_TEXT = """# pad parameters
0.5 1.0 8.0 5.0 3.0 0.5
10 20
"""

PARAMETER_JSON = {
    "resolution": 0.5,
    "felt_height": 1.0,
    "max_jag_circumference": 8.0,
    "min_radius": 5.0,
    "max_overlap_delta": 3.0,
    "recovery_fraction": 0.5,
    "radii": [10, 20],
}


@pytest.fixture
def example_geometry() -> StarGeometry:
    return StarGeometry(**EXAMPLE_GEOMETRY)


@pytest.fixture
def parameter_text() -> str:
    return PARAMETER_TEXT


@pytest.fixture
def parameter_file(tmp_path):
    p = tmp_path / "pads.txt"
    p.write_text(PARAMETER_TEXT)
    return p


@pytest.fixture
def parameter_json_file(tmp_path):
    p = tmp_path / "pads.json"
    p.write_text(json.dumps(PARAMETER_JSON))
    return p
