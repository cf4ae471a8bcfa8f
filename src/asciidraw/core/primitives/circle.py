"""
どこで: `src/asciidraw/core/primitives/circle.py`。円と渦巻きのラスタライズ。
何を: 位相パラメータで外周をサンプリングし、横方向に引き伸ばした円/渦巻きを canvas に描く。
なぜ: 文字セルは横より縦に長いため、横を伸ばさないと端末上で縦長の楕円に見えるため。
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from asciidraw.core.errors import CanvasIndexError, DegenerateGeometryError
from asciidraw.core.geometry import Point, Rect, round_half_away_array

if TYPE_CHECKING:
    from asciidraw.core.canvas import Canvas

logger = logging.getLogger(__name__)

CELL_ASPECT_RATIO = 2.0
"""X 方向の引き伸ばし係数。特定の端末フォントの縦横比に合わせた値。"""


def _reject_outside_extent(canvas: Canvas, center: Point, radius: float, aspect: float) -> None:
    """半径 radius の楕円が canvas から確実にはみ出すなら `CanvasIndexError` を送出する。

    サンプル数は半径に比例して増えるため、巨大な半径は配列を確保する前に弾く。
    `radius >= max(1, 2*|aspect|)` のときサンプルと外周のずれは 0.25 セル未満なので、
    ここで弾く図形はサンプリングしても必ず範囲外のセルを含む。
    """
    a = abs(float(aspect))
    if not math.isfinite(radius) or radius < max(1.0, 2.0 * a):
        return
    left, right = center.x - radius * a, center.x + radius * a
    top, bottom = center.y - radius, center.y + radius
    if left < -1.0 or top < -1.0 or right > canvas.width or bottom > canvas.height:
        raise CanvasIndexError(
            f"半径 {radius!r} の円は canvas {canvas.width}x{canvas.height} に収まらない: center={center}"
        )


@dataclass(frozen=True, slots=True)
class Circle:
    """中心と半径で表す円。

    Parameters
    ----------
    center : Point
        中心座標。
    radius : float
        半径。描画には正の値が必要。
    aspect : float, optional
        X 方向の引き伸ばし係数。既定は `CELL_ASPECT_RATIO`。

    Notes
    -----
    引き伸ばしのため、幾何的なバウンディング矩形は幅 `2*aspect*r`・高さ `2*r` になる。
    サンプリング間隔は引き伸ばし前の周長から決めるので、見た目の点密度は一様ではない。
    """

    center: Point
    radius: float
    aspect: float = CELL_ASPECT_RATIO

    def bounds(self) -> Rect:
        p = Point(self.radius * self.aspect, self.radius)
        return Rect(self.center - p, self.center + p)

    def circumference(self) -> float:
        """引き伸ばし前の周長 `2*pi*r`。"""
        return 2.0 * math.pi * float(self.radius)

    def point(self, t: float) -> Point:
        """位相 t [rad] における外周上の点を返す。t=0 で中心の真下。"""
        r = float(self.radius)
        return Point(
            self.center.x + math.sin(t) * (r * self.aspect),
            self.center.y + math.cos(t) * r,
        )

    def sample_points(self) -> np.ndarray:
        """外周のサンプル点を shape (N, 2) の float64 配列で返す。

        t は -pi から pi まで（両端含む）`1 / circumference` 刻みで進める。

        Raises
        ------
        DegenerateGeometryError
            半径が 0 以下、または非有限の場合。
        """
        r = float(self.radius)
        if not math.isfinite(r) or r <= 0.0:
            raise DegenerateGeometryError(f"円の半径は正である必要がある: radius={self.radius!r}")

        step = 1.0 / self.circumference()
        n = int(math.floor((2.0 * math.pi) / step)) + 1
        t = -math.pi + step * np.arange(n, dtype=np.float64)
        t = t[t <= math.pi]
        x = self.center.x + np.sin(t) * (r * self.aspect)
        y = self.center.y + np.cos(t) * r
        return np.stack([x, y], axis=1)

    def draw(self, canvas: Canvas, glyph: str | None) -> None:
        _reject_outside_extent(canvas, self.center, float(self.radius), self.aspect)
        pts = self.sample_points()
        canvas.plot(round_half_away_array(pts[:, 0]), round_half_away_array(pts[:, 1]), glyph)


@dataclass(frozen=True, slots=True)
class Spiral:
    """中心へ向かって半径が減っていく渦巻き。

    Parameters
    ----------
    center : Point
        中心座標。
    radius : float
        開始半径。0 以下なら何も描かない。
    delta : float, optional
        1 周あたりの半径の減少量。0 以下は 1 として扱う。
    aspect : float, optional
        X 方向の引き伸ばし係数。
    """

    center: Point
    radius: float
    delta: float = 1.0
    aspect: float = CELL_ASPECT_RATIO

    def bounds(self) -> Rect:
        r = max(float(self.radius), 0.0)
        return Circle(self.center, r, self.aspect).bounds()

    def effective_delta(self) -> float:
        d = float(self.delta)
        if d > 0.0:
            return d
        logger.debug("Spiral.delta=%r は正でないため 1 を使う", self.delta)
        return 1.0

    def sample_points(self) -> np.ndarray:
        """渦巻きのサンプル点を shape (N, 2) の float64 配列で返す。

        1 ステップごとに現在の半径の円周上の点を 1 つだけ置く。
        位相（1 周を 1 とする比率）は半径が減っても引き継ぎ、1 を超えたら 0 に戻す。
        位相の厳密な連続性より、腕が途切れずに見えることを優先した規則である。
        """
        radius = float(self.radius)
        if not math.isfinite(radius):
            raise DegenerateGeometryError(f"渦巻きの半径が非有限: radius={self.radius!r}")
        delta = self.effective_delta()

        out: list[tuple[float, float]] = []
        phase = 0.0
        while radius > 0.0:
            circle = Circle(self.center, radius, self.aspect)
            p = circle.point(-math.pi + 2.0 * math.pi * phase)
            out.append((p.x, p.y))
            step = 1.0 / circle.circumference()
            phase += step
            next_radius = radius - delta * step
            if next_radius >= radius:
                raise DegenerateGeometryError(
                    f"渦巻きの半径が浮動小数精度で減らない: radius={radius!r}, delta={delta!r}"
                )
            radius = next_radius
            if phase > 1.0:
                phase = 0.0

        return np.asarray(out, dtype=np.float64).reshape(-1, 2)

    def draw(self, canvas: Canvas, glyph: str | None) -> None:
        # 最初の 1 周では半径が 2*delta より大きくは減らない。
        inner = float(self.radius) - 2.0 * self.effective_delta()
        _reject_outside_extent(canvas, self.center, inner, self.aspect)
        pts = self.sample_points()
        canvas.plot(round_half_away_array(pts[:, 0]), round_half_away_array(pts[:, 1]), glyph)


__all__ = ["CELL_ASPECT_RATIO", "Circle", "Spiral"]
