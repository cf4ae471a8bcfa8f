"""
どこで: `src/asciidraw/core/geometry.py`。点・線分・矩形の値型とラスタライズ。
何を: Point / Line / Rect のベクトル演算、向き判定、canvas への描画を提供する。
なぜ: 円・テキスト・箱など他の primitive がすべてこの 3 つの上に組み立てられるため。
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

import numpy as np

from asciidraw.core.errors import DegenerateGeometryError

if TYPE_CHECKING:
    from asciidraw.core.canvas import Canvas
    from asciidraw.core.capabilities import Bounder

ORIENTATION_EPSILON = 1e-5
"""線分を垂直/水平とみなす座標差の閾値。

長い準対角線では数値的に脆い調整値であり、普遍的な幾何述語ではない。
"""


def round_half_away(value: float) -> int:
    """0.5 を 0 から遠ざかる方向へ丸めて int を返す（`round()` の偶数丸めは使わない）。"""

    return int(math.copysign(math.floor(abs(value) + 0.5), value))


def round_half_away_array(values: np.ndarray) -> np.ndarray:
    """`round_half_away` の配列版。int64 配列を返す。"""

    v = np.asarray(values, dtype=np.float64)
    return np.copysign(np.floor(np.abs(v) + 0.5), v).astype(np.int64)


@dataclass(frozen=True, slots=True)
class Point:
    """2 次元の点（浮動小数座標）。

    Notes
    -----
    x=0, y=0 が canvas の左上で、y は下向きに増える。
    """

    x: float
    y: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "x", float(self.x))
        object.__setattr__(self, "y", float(self.y))

    @classmethod
    def from_array(cls, value: object) -> Point:
        """長さ 2 のシーケンス/配列から Point を作る。"""
        arr = np.asarray(value, dtype=np.float64).reshape(-1)
        if arr.shape != (2,):
            raise ValueError(f"Point には長さ 2 の配列が必要: shape={arr.shape}")
        return cls(float(arr[0]), float(arr[1]))

    def as_array(self) -> np.ndarray:
        """`[x, y]` の float64 配列を返す。"""
        return np.array([self.x, self.y], dtype=np.float64)

    def add_xy(self, x: float, y: float) -> Point:
        return Point(self.x + x, self.y + y)

    def add(self, other: Point) -> Point:
        return self.add_xy(other.x, other.y)

    def sub(self, other: Point) -> Point:
        return Point(self.x - other.x, self.y - other.y)

    def min(self, other: Point) -> Point:
        """成分ごとの最小値。"""
        return Point(min(self.x, other.x), min(self.y, other.y))

    def max(self, other: Point) -> Point:
        """成分ごとの最大値。"""
        return Point(max(self.x, other.x), max(self.y, other.y))

    def __add__(self, other: Point) -> Point:
        return self.add(other)

    def __sub__(self, other: Point) -> Point:
        return self.sub(other)

    def round(self) -> tuple[int, int]:
        """最も近い整数座標 (x, y) を返す。0.5 は 0 から遠ざかる方向へ丸める。"""
        return round_half_away(self.x), round_half_away(self.y)

    def distance(self, other: Point) -> float:
        """ユークリッド距離。"""
        return math.hypot(self.x - other.x, self.y - other.y)

    def between(self, other: Point, factor: float) -> Point:
        """self から other への線形補間点を返す。

        Parameters
        ----------
        other : Point
            終点。
        factor : float
            0 で self、1 で other。[0, 1] の外側は外挿になる。
        """
        f = float(factor)
        return Point(
            self.x + (other.x - self.x) * f,
            self.y + (other.y - self.y) * f,
        )

    def bounds(self) -> Rect:
        return Rect(self, self)

    def draw(self, canvas: Canvas, glyph: str | None) -> None:
        """丸めた座標のセル 1 つだけを塗る。"""
        x, y = self.round()
        canvas.set_at(x, y, glyph)

    def __str__(self) -> str:
        return f"Point({self.x:f}, {self.y:f})"


class Orientation(Enum):
    """線分のラスタライズ方式を選ぶための向き分類。"""

    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    ANGLED = "angled"


@dataclass(frozen=True, slots=True)
class Line:
    """2 点 a, b を結ぶ線分。"""

    a: Point
    b: Point

    def bounds(self) -> Rect:
        return Rect(self.a.min(self.b), self.a.max(self.b))

    def mid(self) -> Point:
        return self.a.between(self.b, 0.5)

    def length(self) -> float:
        return self.a.distance(self.b)

    def orientation(self, epsilon: float = ORIENTATION_EPSILON) -> Orientation:
        """垂直 → 水平 → 斜めの順で判定する。"""
        eps = float(epsilon)
        if abs(self.a.x - self.b.x) < eps:
            return Orientation.VERTICAL
        if abs(self.a.y - self.b.y) < eps:
            return Orientation.HORIZONTAL
        return Orientation.ANGLED

    def raster_coords(self) -> tuple[np.ndarray, np.ndarray]:
        """描画するセル座標 (xs, ys) を int64 配列で返す。

        Returns
        -------
        tuple[np.ndarray, np.ndarray]
            両端点の丸め座標を必ず含む連結な経路。
            最小ではなく、急な斜線では同じセルが重複し得る。

        Raises
        ------
        DegenerateGeometryError
            端点が一致する、または座標が非有限な場合。
        """
        length = self.length()
        if not math.isfinite(length) or length <= 0.0:
            raise DegenerateGeometryError(
                f"線分の長さが 0 または非有限のため描画できない: {self}"
            )

        orientation = self.orientation()
        lo = self.a.min(self.b)
        hi = self.a.max(self.b)
        if orientation is Orientation.VERTICAL:
            ys = np.arange(round_half_away(lo.y), round_half_away(hi.y) + 1, dtype=np.int64)
            xs = np.full_like(ys, round_half_away(self.a.x))
            return xs, ys
        if orientation is Orientation.HORIZONTAL:
            xs = np.arange(round_half_away(lo.x), round_half_away(hi.x) + 1, dtype=np.int64)
            ys = np.full_like(xs, round_half_away(self.a.y))
            return xs, ys
        if orientation is Orientation.ANGLED:
            step = 1.0 / length
            # factor = 0, step, 2*step, ... (< 1)。終点は浮動小数誤差に依らず明示的に足す。
            factors = np.arange(int(math.ceil(length)), dtype=np.float64) * step
            factors = factors[factors < 1.0]
            fx = self.a.x + (self.b.x - self.a.x) * factors
            fy = self.a.y + (self.b.y - self.a.y) * factors
            xs = np.append(round_half_away_array(fx), round_half_away(self.b.x))
            ys = np.append(round_half_away_array(fy), round_half_away(self.b.y))
            return xs, ys
        raise AssertionError(f"invalid orientation: {orientation!r}")

    def draw(self, canvas: Canvas, glyph: str | None) -> None:
        xs, ys = self.raster_coords()
        canvas.plot(xs, ys, glyph)

    def __str__(self) -> str:
        return f"Line({self.a}, {self.b})"


@dataclass(frozen=True, slots=True)
class Rect:
    """min/max の 2 隅で表す軸平行矩形。

    Notes
    -----
    min <= max は構築時に検証しない。逆順で渡すと幾何的に反転した結果になる。
    """

    min: Point
    max: Point

    def bounds(self) -> Rect:
        return self

    def width(self) -> float:
        return self.max.x - self.min.x

    def height(self) -> float:
        return self.max.y - self.min.y

    def center(self) -> Point:
        return self.min.between(self.max, 0.5)

    def grow(self, n: float) -> Rect:
        """全方向へ n だけ広げた矩形を返す。"""
        amount = Point(n, n)
        return Rect(self.min - amount, self.max + amount)

    def shrink(self, n: float) -> Rect:
        """全方向へ n だけ縮めた矩形を返す。"""
        amount = Point(n, n)
        return Rect(self.min + amount, self.max - amount)

    def contains(self, other: Bounder) -> bool:
        """other のバウンディング矩形が self の内側（境界含む）に収まるかを返す。"""
        b = other.bounds()
        return (
            self.min.x <= b.min.x
            and self.min.y <= b.min.y
            and self.max.x >= b.max.x
            and self.max.y >= b.max.y
        )

    def top_left(self) -> Point:
        return self.min

    def top_right(self) -> Point:
        return Point(self.max.x, self.min.y)

    def bottom_left(self) -> Point:
        return Point(self.min.x, self.max.y)

    def bottom_right(self) -> Point:
        return self.max

    def top(self) -> Line:
        return Line(self.top_left(), self.top_right())

    def bottom(self) -> Line:
        return Line(self.bottom_left(), self.bottom_right())

    def left(self) -> Line:
        return Line(self.top_left(), self.bottom_left())

    def right(self) -> Line:
        return Line(self.top_right(), self.bottom_right())

    def edge_coords(self) -> tuple[tuple[np.ndarray, np.ndarray], ...]:
        """top / bottom / left / right の順で各辺のセル座標 (xs, ys) を返す。

        幅や高さが 0 の矩形では長さ 0 の辺が生じるが、これは端点 1 セルとして扱う
        （1 行のテキストや水平線のバウンディング矩形も枠として描けるようにするため）。
        """
        out: list[tuple[np.ndarray, np.ndarray]] = []
        for edge in (self.top(), self.bottom(), self.left(), self.right()):
            if edge.a == edge.b:
                x, y = edge.a.round()
                out.append((np.array([x], dtype=np.int64), np.array([y], dtype=np.int64)))
            else:
                out.append(edge.raster_coords())
        return tuple(out)

    def draw(self, canvas: Canvas, glyph: str | None) -> None:
        """4 辺を同じ glyph で描く。角は隣接 2 辺から 2 回塗られる。

        4 辺すべての座標を求めてから 1 回で書き込むので、失敗時に一部の辺だけが残ることはない。
        """
        edges = self.edge_coords()
        xs = np.concatenate([e[0] for e in edges])
        ys = np.concatenate([e[1] for e in edges])
        canvas.plot(xs, ys, glyph)

    def __str__(self) -> str:
        return f"Rect({self.min}, {self.max})"


__all__ = [
    "ORIENTATION_EPSILON",
    "Line",
    "Orientation",
    "Point",
    "Rect",
    "round_half_away",
    "round_half_away_array",
]
