import matplotlib

matplotlib.use("Agg")

import numpy as np  # noqa: E402
import pytest  # noqa: E402

from diffgraph_pkg.layout import compute_layout  # noqa: E402
from diffgraph_pkg.plotting import draw_graph, render_session, save_figure  # noqa: E402
from diffgraph_pkg.sampling import build_graph  # noqa: E402
from diffgraph_pkg.session import build_session  # noqa: E402


def test_one_axes_per_point():
    fig = render_session(build_session("x^2"), 4)
    assert len(fig.axes) == 4


def test_figure_size_follows_layout():
    fig = render_session(build_session("x^2"), 7, dpi=100)
    width, height = fig.get_size_inches()
    assert width == pytest.approx(12.0)
    assert height == pytest.approx(13.5)


def test_subplot_titles_and_labels():
    fig = render_session(build_session("x^2"), 3)
    first = fig.axes[0]
    assert first.texts[0].get_text() == "x = -10.00"
    assert first.texts[1].get_text() == "y = -20.00x + -100.00"
    assert fig.axes[1].texts[0].get_text() == "x = 0.00"
    assert fig.axes[2].texts[1].get_text() == "y = 20.00x + -100.00"


def test_curve_tangent_and_point_drawn():
    fig = render_session(build_session("sin(x)"), 2)
    lines = fig.axes[0].get_lines()
    assert len(lines) == 3
    curve, tangent, dot = lines
    assert curve.get_color() == "blue"
    assert tangent.get_color() == "red"
    assert list(dot.get_xdata()) == [-10.0]


def test_undefined_point_has_no_marker():
    fig = render_session(build_session("1/x"), 3)
    # the middle point sits on the pole at x = 0
    assert len(fig.axes[1].get_lines()) == 2
    assert len(fig.axes[0].get_lines()) == 3


def test_y_limits_ignore_gaps():
    session = build_session("log(x)")
    fig = render_session(session, 2)
    low, high = fig.axes[0].get_ylim()
    assert np.isfinite(low) and np.isfinite(high)
    assert low < 0 < high


def test_flat_curve_gets_unit_margin():
    fig = render_session(build_session("2"), 2)
    assert fig.axes[0].get_ylim() == pytest.approx((1.0, 3.0))


def test_draw_graph_uses_layout_cells():
    session = build_session("x^2")
    layout = compute_layout(2)
    fig = draw_graph(build_graph(session, 2), layout)
    left, bottom, width, height = fig.axes[1].get_position().bounds
    assert left == pytest.approx(layout.cells[1].rect[0])
    assert width == pytest.approx(layout.cells[1].rect[2])


def test_save_figure(tmp_path):
    fig = render_session(build_session("x^2"), 2)
    path = tmp_path / "plot.png"
    assert save_figure(fig, str(path)) == str(path)
    assert path.exists()
    assert path.stat().st_size > 0
