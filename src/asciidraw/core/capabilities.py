# どこで: `src/asciidraw/core/capabilities.py`。
# 何を: primitive が実装する 2 つの能力（Drawer / Bounder）を Protocol として定義する。
# なぜ: canvas 側を変更せずに新しい primitive 種を追加できるようにするため。

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from asciidraw.core.canvas import Canvas
    from asciidraw.core.geometry import Rect


@runtime_checkable
class Drawer(Protocol):
    """自身を canvas にラスタライズできるもの。"""

    def draw(self, canvas: Canvas, glyph: str | None) -> None: ...


@runtime_checkable
class Bounder(Protocol):
    """軸平行なバウンディング矩形を返せるもの（副作用なし）。"""

    def bounds(self) -> Rect: ...


__all__ = ["Bounder", "Drawer"]
