"""
どこで: `src/asciidraw/core/canvas.py`。固定サイズの文字グリッド。
何を: セルの読み書き（範囲検査つき）、primitive への描画委譲、テキストへの直列化を提供する。
なぜ: 描画状態を保持する唯一の可変オブジェクトとして、範囲外アクセスの検査を 1 箇所に集約するため。
"""

from __future__ import annotations

import logging
from typing import TextIO

import numpy as np

from asciidraw.core.capabilities import Drawer
from asciidraw.core.errors import CanvasIndexError
from asciidraw.core.geometry import Point, Rect

logger = logging.getLogger(__name__)

BLANK = ""
"""空セルの内部表現。直列化時は空白 1 文字になる。"""

_CELL_DTYPE = "<U1"
# 1 行 1 行の直列化を壊すため、セルには書かせない。
_LINE_BREAKS = ("\n", "\r")


def normalize_glyph(glyph: str | None) -> str:
    """glyph を 1 文字の str（空セルは `""`）に正規化して返す。"""

    if glyph is None:
        return BLANK
    if not isinstance(glyph, str):
        raise ValueError(f"glyph は 1 文字の str である必要がある: got={glyph!r}")
    if len(glyph) > 1 or glyph in _LINE_BREAKS:
        raise ValueError(f"glyph は改行以外の 1 文字である必要がある: got={glyph!r}")
    return glyph


class Canvas:
    """width x height の文字セルを持つ描画先。

    Parameters
    ----------
    width : int
        列数（正の整数）。
    height : int
        行数（正の整数）。

    Notes
    -----
    セルは長さ `width * height` の 1 次元配列に `y * width + x` で格納する。
    範囲外アクセスはクリップせず `CanvasIndexError` を送出する。
    ロックは持たないため、同一インスタンスへの並行描画は呼び出し側で直列化すること。
    """

    def __init__(self, width: int, height: int) -> None:
        w = _as_positive_int(width, name="width")
        h = _as_positive_int(height, name="height")
        self._width = w
        self._height = h
        self._cells = np.full(w * h, BLANK, dtype=_CELL_DTYPE)

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def bounds(self) -> Rect:
        """セル座標全体を覆う矩形 `(0, 0)`-`(width-1, height-1)` を返す。"""
        return Rect(Point(0, 0), Point(self._width - 1, self._height - 1))

    def center(self) -> Point:
        return self.bounds().center()

    def _index(self, x: int, y: int) -> int:
        if isinstance(x, bool) or isinstance(y, bool):
            raise TypeError("セル座標に bool は使えない")
        if not isinstance(x, (int, np.integer)) or not isinstance(y, (int, np.integer)):
            raise TypeError(f"セル座標は整数である必要がある: x={x!r}, y={y!r}")
        if not (0 <= x < self._width and 0 <= y < self._height):
            raise CanvasIndexError(
                f"セル ({x}, {y}) は canvas {self._width}x{self._height} の範囲外"
            )
        return int(y) * self._width + int(x)

    def at(self, x: int, y: int) -> str:
        """セル (x, y) の glyph を返す。空セルは `""`。"""
        return str(self._cells[self._index(x, y)])

    def set_at(self, x: int, y: int, glyph: str | None) -> None:
        """セル (x, y) に glyph を書く。None/`""` は空セルに戻す。"""
        self._cells[self._index(x, y)] = normalize_glyph(glyph)

    def plot(
        self,
        xs: np.ndarray,
        ys: np.ndarray,
        glyphs: str | None | np.ndarray,
    ) -> None:
        """複数セルへまとめて書き込む。

        Parameters
        ----------
        xs, ys : np.ndarray
            整数のセル座標配列（同じ長さ）。
        glyphs : str or None or np.ndarray
            全セル共通の glyph、またはセルごとの glyph 配列。

        Notes
        -----
        書き込み前に全座標と glyph を検査するため、失敗した呼び出しは canvas を変更しない。
        セルごとの glyph 配列で同じセルを複数回指定した場合、どの値が残るかは決めない。
        """
        x_arr, y_arr = self.require_inside(xs, ys)
        if x_arr.size == 0:
            return

        if isinstance(glyphs, np.ndarray):
            if glyphs.shape != x_arr.shape:
                raise ValueError("glyphs 配列は座標と同じ長さである必要がある")
            raw = glyphs.astype(str)
            bad = (np.char.str_len(raw) > 1) | np.isin(raw, _LINE_BREAKS)
            if np.any(bad):
                raise ValueError(
                    f"glyph は改行以外の 1 文字である必要がある: got={str(raw[np.argmax(bad)])!r}"
                )
            values = raw.astype(_CELL_DTYPE)
        else:
            values = normalize_glyph(glyphs)

        self._cells[y_arr * self._width + x_arr] = values

    def require_inside(self, xs: np.ndarray, ys: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
        """セル座標配列がすべて canvas 内にあることを検査し、int64 配列にして返す。

        Raises
        ------
        CanvasIndexError
            1 つでも範囲外のセルがある場合（最初に見つかったセルを報告する）。
        """
        x_arr = np.asarray(xs)
        y_arr = np.asarray(ys)
        if x_arr.shape != y_arr.shape or x_arr.ndim != 1:
            raise ValueError(
                f"xs と ys は同じ長さの 1 次元配列である必要がある: {x_arr.shape} vs {y_arr.shape}"
            )
        if x_arr.size == 0:
            return x_arr.astype(np.int64), y_arr.astype(np.int64)
        if not (np.issubdtype(x_arr.dtype, np.integer) and np.issubdtype(y_arr.dtype, np.integer)):
            raise TypeError("セル座標は整数配列である必要がある")

        outside = (x_arr < 0) | (x_arr >= self._width) | (y_arr < 0) | (y_arr >= self._height)
        if np.any(outside):
            i = int(np.argmax(outside))
            raise CanvasIndexError(
                f"セル ({int(x_arr[i])}, {int(y_arr[i])}) は canvas "
                f"{self._width}x{self._height} の範囲外"
            )
        return x_arr.astype(np.int64), y_arr.astype(np.int64)

    def draw(self, drawer: Drawer, glyph: str | None = None) -> None:
        """drawer 自身のラスタライズ処理へ委譲する。"""
        if not isinstance(drawer, Drawer):
            raise TypeError(f"draw() には Drawer が必要: got={type(drawer).__name__}")
        logger.debug("draw %s glyph=%r", drawer, glyph)
        drawer.draw(self, glyph)

    def cells(self) -> np.ndarray:
        """shape (height, width) の読み取り専用ビューを返す。"""
        view = self._cells.reshape(self._height, self._width).view()
        view.setflags(write=False)
        return view

    def clear(self) -> None:
        self._cells[:] = BLANK

    def rows(self, frame: str | None = None) -> list[str]:
        """各行を文字列にして返す。空セルは空白、frame は行頭と行末に付ける。"""
        edge = normalize_glyph(frame)
        grid = np.where(self._cells == BLANK, " ", self._cells).reshape(self._height, self._width)
        return [edge + "".join(row.tolist()) + edge for row in grid]

    def to_text(self, frame: str | None = None) -> str:
        """行を改行で連結したテキストを返す（末尾改行なし）。"""
        return "\n".join(self.rows(frame))

    def write_to(self, stream: TextIO, frame: str | None = None) -> None:
        stream.write(self.to_text(frame))

    def __str__(self) -> str:
        return self.to_text()

    def __repr__(self) -> str:
        return f"Canvas(width={self._width}, height={self._height})"


def _as_positive_int(value: object, *, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} は正の整数である必要がある: got={value!r}")
    if int(value) <= 0:
        raise ValueError(f"{name} は正の整数である必要がある: got={value!r}")
    return int(value)


__all__ = ["BLANK", "Canvas", "normalize_glyph"]
