"""Tests for SVG and G-code writers."""

import re
import xml.etree.ElementTree as ET

import numpy as np
import pytest

from pad_generation.path_writers import svg_path_data, svg_viewbox, write_star_gcode, write_star_svg
from pad_generation.star_contour import build_star

SVG_NS = "{http://www.w3.org/2000/svg}"

SQUARE = np.array([[0.0, 0.0], [1.0, 0.0], [1.0, 1.0], [0.0, 1.0]])


def test_svg_path_data_square():
    assert svg_path_data(SQUARE, decimals=1) == "M 0.0 0.0 L 1.0 0.0 L 1.0 1.0 L 0.0 1.0 Z"


def test_svg_path_data_rejects_bad_points():
    with pytest.raises(ValueError):
        svg_path_data(np.zeros((0, 2)))
    with pytest.raises(ValueError):
        svg_path_data(np.array([[0.0, np.nan]]))


def test_svg_viewbox_is_centered():
    x, y, w, h = map(float, svg_viewbox(SQUARE, pad_frac=0.0).split())
    assert (x, y, w, h) == pytest.approx((-1.0, -1.0, 2.0, 2.0))


def test_write_star_svg(tmp_path, example_geometry):
    star = build_star(example_geometry)
    out = write_star_svg(star.points, str(tmp_path / "10.0.svg"), stroke_width=0.2)

    root = ET.parse(out).getroot()
    assert root.tag == f"{SVG_NS}svg"
    group = root.find(f"{SVG_NS}g")
    assert "stroke-width:0.2" in group.get("style")

    path = group.find(f"{SVG_NS}path")
    assert path.get("id") == "path1"
    d = path.get("d")
    assert d.startswith("M ") and d.endswith(" Z")
    assert d.count(" L ") + 1 == 2 * example_geometry.n_jags * star.kappa


def test_write_star_gcode(tmp_path, example_geometry):
    star = build_star(example_geometry)
    out = write_star_gcode(star.points, str(tmp_path / "10.0.gcode"), geometry=example_geometry, z_up=3.0, z_down=-0.5)
    lines = out.read_text().splitlines()

    assert "G21" in lines and "G90" in lines
    assert any("N=6" in ln for ln in lines if ln.startswith(";"))

    xy_moves = [ln for ln in lines if re.match(r"G1 X", ln)]
    assert len(xy_moves) == len(star.points) + 1
    # closing move returns to the first vertex
    assert xy_moves[-1].split(" F")[0] == xy_moves[0].split(" F")[0]

    z_moves = [ln for ln in lines if re.match(r"G1 Z", ln)]
    assert [m.split()[1] for m in z_moves] == ["Z3.000", "Z-0.500", "Z3.000"]


def test_write_star_gcode_rejects_inverted_z(tmp_path):
    with pytest.raises(ValueError):
        write_star_gcode(SQUARE, str(tmp_path / "x.gcode"), z_up=0.0, z_down=1.0)
