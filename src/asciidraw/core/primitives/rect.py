"""
どこで: `src/asciidraw/core/primitives/rect.py`。矩形ベースの装飾 primitive。
何を: 辺ごとに固定 glyph を使う Box / Border、面を塗る Fill、任意の Bounder を囲む highlight を提供する。
なぜ: Rect の 4 辺と面列挙を再利用して、枠や強調表示を primitive として合成できるようにするため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from asciidraw.core.capabilities import Bounder
from asciidraw.core.geometry import Rect, round_half_away_array

if TYPE_CHECKING:
    from asciidraw.core.canvas import Canvas

BOX_HORIZONTAL = "-"
BOX_VERTICAL = "|"
BORDER_CORNER = "+"
HIGHLIGHT_MARGIN = 1.0


def _draw_layers(canvas: Canvas, layers: list[tuple[np.ndarray, np.ndarray, str]]) -> None:
    """(xs, ys, glyph) を順に書く。先に全セルを検査するので、失敗時は何も書かない。"""

    canvas.require_inside(
        np.concatenate([xs for xs, _, _ in layers]),
        np.concatenate([ys for _, ys, _ in layers]),
    )
    for xs, ys, glyph in layers:
        canvas.plot(xs, ys, glyph)


def _box_layers(rect: Rect) -> list[tuple[np.ndarray, np.ndarray, str]]:
    top, bottom, left, right = rect.edge_coords()
    # 垂直辺を後に描くので、角は `|` になる。
    return [
        (np.concatenate([top[0], bottom[0]]), np.concatenate([top[1], bottom[1]]), BOX_HORIZONTAL),
        (np.concatenate([left[0], right[0]]), np.concatenate([left[1], right[1]]), BOX_VERTICAL),
    ]


@dataclass(frozen=True, slots=True)
class Box:
    """水平辺を `-`、垂直辺を `|` で描く矩形。渡された glyph は使わない。"""

    rect: Rect

    def bounds(self) -> Rect:
        return self.rect

    def draw(self, canvas: Canvas, glyph: str | None = None) -> None:
        _draw_layers(canvas, _box_layers(self.rect))


@dataclass(frozen=True, slots=True)
class Border:
    """Box と同じ辺に加えて、4 隅を `+` で描く枠。渡された glyph は使わない。"""

    rect: Rect

    def bounds(self) -> Rect:
        return self.rect

    def draw(self, canvas: Canvas, glyph: str | None = None) -> None:
        corners = [
            p.round()
            for p in (
                self.rect.top_left(),
                self.rect.top_right(),
                self.rect.bottom_left(),
                self.rect.bottom_right(),
            )
        ]
        xs = np.array([c[0] for c in corners], dtype=np.int64)
        ys = np.array([c[1] for c in corners], dtype=np.int64)
        _draw_layers(canvas, [*_box_layers(self.rect), (xs, ys, BORDER_CORNER)])


@dataclass(frozen=True, slots=True)
class Fill:
    """矩形内部を 1 つの glyph で塗りつぶす。"""

    rect: Rect

    def bounds(self) -> Rect:
        return self.rect

    def coords(self) -> tuple[np.ndarray, np.ndarray]:
        """塗るセル座標 (xs, ys) を返す。

        min から 1 刻みで max 以下まで両軸を列挙する。
        整数に揃った矩形では `(w + 1) * (h + 1)` 個になり、反転した矩形では空になる。
        """
        lo, hi = self.rect.min, self.rect.max
        nx = int(math.floor(hi.x - lo.x)) + 1 if hi.x >= lo.x else 0
        ny = int(math.floor(hi.y - lo.y)) + 1 if hi.y >= lo.y else 0
        fx = lo.x + np.arange(nx, dtype=np.float64)
        fy = lo.y + np.arange(ny, dtype=np.float64)
        gx, gy = np.meshgrid(fx, fy, indexing="xy")
        return round_half_away_array(gx.ravel()), round_half_away_array(gy.ravel())

    def draw(self, canvas: Canvas, glyph: str | None) -> None:
        xs, ys = self.coords()
        canvas.plot(xs, ys, glyph)


def highlight(target: Bounder, margin: float = HIGHLIGHT_MARGIN) -> Box:
    """target のバウンディング矩形を margin だけ広げた Box を返す。"""

    if not isinstance(target, Bounder):
        raise TypeError(f"highlight() には Bounder が必要: got={type(target).__name__}")
    return Box(target.bounds().grow(margin))


__all__ = [
    "BORDER_CORNER",
    "BOX_HORIZONTAL",
    "BOX_VERTICAL",
    "Border",
    "Box",
    "Fill",
    "HIGHLIGHT_MARGIN",
    "highlight",
]
