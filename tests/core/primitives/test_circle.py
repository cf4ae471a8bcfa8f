"""Circle / Spiral のサンプリングとラスタライズに関するテスト群。"""

from __future__ import annotations

import math

import numpy as np
import pytest

from asciidraw.core.canvas import Canvas
from asciidraw.core.errors import CanvasIndexError, DegenerateGeometryError
from asciidraw.core.geometry import Point, Rect
from asciidraw.core.primitives.circle import CELL_ASPECT_RATIO, Circle, Spiral


def _plotted(cv: Canvas) -> set[tuple[int, int]]:
    ys, xs = np.nonzero(cv.cells() != "")
    return {(int(x), int(y)) for x, y in zip(xs, ys)}


def test_circle_stays_within_stretched_bounds() -> None:
    cv = Canvas(5, 5)
    c = Circle(Point(2, 2), 1)
    cv.draw(c, "o")

    cells = _plotted(cv)
    assert cells
    for x, y in cells:
        assert 0 <= x <= 4
        assert 1 <= y <= 3
    assert {(0, 2), (4, 2), (2, 1), (2, 3)} <= cells


def test_circle_bounds_are_asymmetric() -> None:
    c = Circle(Point(10, 5), 3)
    assert CELL_ASPECT_RATIO == 2.0
    assert c.bounds() == Rect(Point(4, 2), Point(16, 8))


def test_circle_point_parametrization() -> None:
    c = Circle(Point(0, 0), 2)
    np.testing.assert_allclose(c.point(0.0).as_array(), [0.0, 2.0], atol=1e-12)
    np.testing.assert_allclose(c.point(math.pi / 2).as_array(), [4.0, 0.0], atol=1e-12)


def test_circle_samples_cover_full_turn() -> None:
    c = Circle(Point(0, 0), 3)
    pts = c.sample_points()
    step = 1.0 / c.circumference()

    expected = int(math.floor(2.0 * math.pi / step)) + 1
    assert pts.shape[1] == 2
    assert expected - 1 <= pts.shape[0] <= expected
    np.testing.assert_allclose(pts[0], [0.0, -3.0], atol=1e-12)
    # 最後のサンプルは t=pi の 1 ステップ手前以内にある。
    assert pts[-1, 1] == pytest.approx(-3.0, abs=1e-2)


def test_circle_aspect_can_be_overridden() -> None:
    c = Circle(Point(0, 0), 2, aspect=1.0)
    assert c.bounds() == Rect(Point(-2, -2), Point(2, 2))
    pts = c.sample_points()
    np.testing.assert_allclose(np.hypot(pts[:, 0], pts[:, 1]), 2.0, atol=1e-9)


@pytest.mark.parametrize("radius", [0.0, -1.0, float("nan")])
def test_degenerate_circle_is_rejected_before_drawing(radius: float) -> None:
    cv = Canvas(3, 3)
    with pytest.raises(DegenerateGeometryError):
        cv.draw(Circle(Point(1, 1), radius), "o")
    assert _plotted(cv) == set()


def test_circle_outside_canvas_fails() -> None:
    cv = Canvas(5, 5)
    with pytest.raises(IndexError):
        cv.draw(Circle(Point(2, 2), 2), "o")


@pytest.mark.parametrize("radius", [0.0, -3.0])
def test_spiral_with_non_positive_radius_draws_nothing(radius: float) -> None:
    cv = Canvas(3, 3)
    cv.draw(Spiral(Point(1, 1), radius), "@")
    assert _plotted(cv) == set()
    assert Spiral(Point(1, 1), radius).sample_points().shape == (0, 2)


def test_spiral_radius_shrinks_towards_center() -> None:
    s = Spiral(Point(10, 5), 3)
    pts = s.sample_points()

    assert pts.shape[0] > 1
    np.testing.assert_allclose(pts[0], [10.0, 2.0], atol=1e-12)
    dx = (pts[:, 0] - 10.0) / CELL_ASPECT_RATIO
    dy = pts[:, 1] - 5.0
    radii = np.hypot(dx, dy)
    assert np.all(np.diff(radii) < 0)
    assert radii[0] == pytest.approx(3.0)


def test_spiral_non_positive_delta_defaults_to_one() -> None:
    c = Point(10, 5)
    np.testing.assert_array_equal(
        Spiral(c, 3, delta=0).sample_points(),
        Spiral(c, 3, delta=1).sample_points(),
    )
    np.testing.assert_array_equal(
        Spiral(c, 3, delta=-2).sample_points(),
        Spiral(c, 3).sample_points(),
    )


def test_spiral_larger_delta_uses_fewer_points() -> None:
    c = Point(10, 5)
    assert Spiral(c, 3, delta=2).sample_points().shape[0] < Spiral(c, 3).sample_points().shape[0]


def test_spiral_draws_inside_circle_bounds() -> None:
    cv = Canvas(21, 11)
    s = Spiral(Point(10, 5), 3)
    cv.draw(s, "@")

    cells = _plotted(cv)
    assert cells
    assert s.bounds() == Rect(Point(4, 2), Point(16, 8))
    for x, y in cells:
        assert 4 <= x <= 16
        assert 2 <= y <= 8


def test_spiral_phase_carries_over_then_restarts_at_top() -> None:
    center = Point(10, 5)
    pts = Spiral(center, 3, delta=0.5).sample_points()

    dx = (pts[:, 0] - center.x) / CELL_ASPECT_RATIO
    dy = pts[:, 1] - center.y
    radii = np.hypot(dx, dy)
    phase = (np.arctan2(dx, dy) + math.pi) / (2.0 * math.pi)
    # t=-pi と t=pi は同じ点（真上）。
    phase[phase > 1.0 - 1e-9] = 0.0

    wraps = np.flatnonzero(np.diff(phase) < -0.5)
    assert wraps.size > 0
    k = int(wraps[0]) + 1

    # 1 周目: 半径が減っても位相は 1/(2*pi*r) ずつ途切れずに進む。
    assert phase[0] == pytest.approx(0.0, abs=1e-12)
    np.testing.assert_allclose(np.diff(phase[:k]), 1.0 / (2.0 * math.pi * radii[: k - 1]), rtol=1e-9)
    assert np.all(np.diff(phase[:k], n=2) > 0)
    assert phase[k - 1] + 1.0 / (2.0 * math.pi * radii[k - 1]) > 1.0

    # 1 を超えた次の点は、位相の端数を持ち越さずに真上から始まる。
    assert pts[k, 0] == pytest.approx(center.x, abs=1e-9)
    assert pts[k, 1] == pytest.approx(center.y - radii[k], abs=1e-9)
    assert radii[k] < radii[k - 1]


@pytest.mark.parametrize(
    "shape",
    [
        Circle(Point(2, 2), 1e12),
        Circle(Point(2, 2), 1e6, aspect=1.0),
        Spiral(Point(2, 2), 1e6),
    ],
)
def test_huge_radius_fails_before_sampling(shape: object) -> None:
    cv = Canvas(5, 5)
    with pytest.raises(CanvasIndexError):
        cv.draw(shape, "o")  # type: ignore[arg-type]
    assert _plotted(cv) == set()


def test_circle_touching_canvas_edge_still_draws() -> None:
    cv = Canvas(13, 13)
    cv.draw(Circle(Point(6, 6), 6, aspect=1.0), "o")
    assert {(0, 6), (12, 6), (6, 0), (6, 12)} <= _plotted(cv)
