"""Canvas（セルの読み書き・範囲検査・直列化）のテスト群。"""

from __future__ import annotations

import io

import numpy as np
import pytest

from asciidraw.core.canvas import Canvas
from asciidraw.core.errors import CanvasIndexError
from asciidraw.core.geometry import Point, Rect


def test_new_canvas_is_blank() -> None:
    cv = Canvas(4, 2)
    assert cv.width == 4
    assert cv.height == 2
    assert cv.cells().shape == (2, 4)
    assert cv.to_text() == "    \n    "


def test_point_scenario_only_center_is_set() -> None:
    cv = Canvas(3, 3)
    cv.draw(Point(1, 1), "*")

    assert cv.to_text() == "   \n * \n   "
    for x in range(3):
        for y in range(3):
            expected = "*" if (x, y) == (1, 1) else ""
            assert cv.at(x, y) == expected


@pytest.mark.parametrize("x, y", [(3, 0), (0, 3), (-1, 0), (0, -1)])
def test_out_of_range_access_fails(x: int, y: int) -> None:
    cv = Canvas(3, 3)
    with pytest.raises(CanvasIndexError):
        cv.set_at(x, y, "x")
    with pytest.raises(IndexError):
        cv.at(x, y)


def test_non_integer_coordinates_are_rejected() -> None:
    cv = Canvas(3, 3)
    with pytest.raises(TypeError):
        cv.set_at(1.0, 1, "x")  # type: ignore[arg-type]


def test_plot_is_all_or_nothing() -> None:
    cv = Canvas(3, 1)
    with pytest.raises(CanvasIndexError):
        cv.plot(np.array([0, 1, 3]), np.array([0, 0, 0]), "x")
    assert cv.to_text() == "   "


def test_plot_accepts_per_cell_glyphs() -> None:
    cv = Canvas(3, 1)
    cv.plot(np.array([0, 2]), np.array([0, 0]), np.array(["a", "b"]))
    assert cv.to_text() == "a b"


@pytest.mark.parametrize("width, height", [(0, 1), (1, 0), (-2, 3), (2.5, 1), (True, 1)])
def test_invalid_size_raises(width: object, height: object) -> None:
    with pytest.raises(ValueError):
        Canvas(width, height)  # type: ignore[arg-type]


def test_invalid_glyph_raises() -> None:
    cv = Canvas(2, 2)
    with pytest.raises(ValueError):
        cv.set_at(0, 0, "ab")
    with pytest.raises(ValueError):
        cv.set_at(0, 0, 7)  # type: ignore[arg-type]


@pytest.mark.parametrize("glyph", ["\n", "\r"])
def test_line_break_glyph_is_rejected(glyph: str) -> None:
    cv = Canvas(2, 1)
    with pytest.raises(ValueError):
        cv.set_at(0, 0, glyph)
    with pytest.raises(ValueError):
        cv.plot(np.array([0, 1]), np.array([0, 0]), np.array(["a", glyph]))
    assert cv.to_text() == "  "


def test_plot_rejects_multi_char_glyph_array() -> None:
    cv = Canvas(3, 1)
    with pytest.raises(ValueError):
        cv.plot(np.array([0, 1]), np.array([0, 0]), np.array(["a", "bc"]))
    assert cv.to_text() == "   "


def test_none_glyph_clears_cell() -> None:
    cv = Canvas(2, 1)
    cv.set_at(0, 0, "x")
    cv.set_at(0, 0, None)
    assert cv.at(0, 0) == ""


def test_bounds_and_center() -> None:
    cv = Canvas(5, 3)
    assert cv.bounds() == Rect(Point(0, 0), Point(4, 2))
    assert cv.center() == Point(2, 1)


def test_frame_wraps_each_row() -> None:
    cv = Canvas(2, 2)
    cv.set_at(0, 0, "a")
    assert cv.to_text(frame="|") == "|a |\n|  |"
    assert str(cv) == "a \n  "


def test_write_to_stream() -> None:
    cv = Canvas(2, 1)
    cv.set_at(1, 0, "z")
    buf = io.StringIO()
    cv.write_to(buf, frame="!")
    assert buf.getvalue() == "! z!"


def test_draw_requires_drawer() -> None:
    cv = Canvas(2, 2)
    with pytest.raises(TypeError):
        cv.draw(object(), "x")  # type: ignore[arg-type]


def test_cells_view_is_read_only() -> None:
    cv = Canvas(2, 2)
    view = cv.cells()
    with pytest.raises(ValueError):
        view[0, 0] = "x"


def test_clear_resets_all_cells() -> None:
    cv = Canvas(2, 2)
    cv.draw(Point(0, 0), "x")
    cv.clear()
    assert cv.to_text() == "  \n  "
