"""
どこで: `src/asciidraw/core/primitives/text.py`。テキストプリミティブ。
何を: 原点から 1 行 1 行を canvas のセルへ直接書き込み、行数と最長行からバウンディング矩形を返す。
なぜ: ラベルや注記を他の primitive と同じ draw/bounds の入口で扱えるようにするため。
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

from asciidraw.core.geometry import Point, Rect

if TYPE_CHECKING:
    from asciidraw.core.canvas import Canvas


@dataclass(frozen=True, slots=True)
class Text:
    """原点と文字列で表すテキスト。

    Parameters
    ----------
    origin : Point
        1 行目・1 文字目を置く座標（左上）。
    text : str
        描画する文字列。
    multiline : bool, optional
        True なら `\\n` で行に分ける。False なら全体を 1 行として扱う。
    """

    origin: Point
    text: str
    multiline: bool = True

    def lines(self) -> list[str]:
        if not self.multiline:
            return [self.text]
        return self.text.split("\n")

    def dims(self) -> tuple[int, int]:
        """(最長行の文字数, 行数) を返す。"""
        lines = self.lines()
        return max(len(line) for line in lines), len(lines)

    def bounds(self) -> Rect:
        w, h = self.dims()
        return Rect(self.origin, self.origin + Point(w - 1, h - 1))

    def draw(self, canvas: Canvas, glyph: str | None = None) -> None:
        """各文字をそのまま書く。テキストは自分の文字で描かれるので glyph は使わない。"""
        x0, y0 = self.origin.round()
        xs: list[int] = []
        ys: list[int] = []
        chars: list[str] = []
        for row, line in enumerate(self.lines()):
            for col, ch in enumerate(line):
                xs.append(x0 + col)
                ys.append(y0 + row)
                chars.append(ch)
        canvas.plot(
            np.asarray(xs, dtype=np.int64),
            np.asarray(ys, dtype=np.int64),
            np.asarray(chars, dtype="<U1"),
        )


__all__ = ["Text"]
