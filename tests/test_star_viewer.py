"""Tests for the matplotlib preview."""

import matplotlib.pyplot as plt
import numpy as np

from pad_generation.star_contour import build_star
from pad_generation.star_viewer import compute_equal_box_center_radius, plot_star, save_preview


def test_equal_box_is_square():
    pts = np.array([[-2.0, 0.0], [4.0, 1.0]])
    (cx, cy), r = compute_equal_box_center_radius(pts, pad_frac=0.0)
    assert (cx, cy) == (1.0, 0.5)
    assert r == 3.0


def test_plot_star_draws_contour_and_breakpoints(example_geometry):
    star = build_star(example_geometry)
    fig, ax = plt.subplots()
    try:
        plot_star(star.points, geometry=example_geometry, ax=ax)
        labels = [ln.get_label() for ln in ax.get_lines()]
        assert labels[0] == "contour"
        assert len(ax.get_lines()) == 4
        # closed outline: one extra point back to the start
        assert len(ax.get_lines()[0].get_xdata()) == len(star.points) + 1
        x0, x1 = ax.get_xlim()
        assert x1 - x0 >= 2 * 14.0
    finally:
        plt.close(fig)


def test_save_preview(tmp_path, example_geometry):
    star = build_star(example_geometry)
    out = save_preview(star.points, str(tmp_path / "10.0.png"), geometry=example_geometry)
    assert (tmp_path / "10.0.png").stat().st_size > 0
    assert out.endswith("10.0.png")
