"""
どこで: `src/asciidraw/core/pipeline.py`。
何を: primitive の並び（シーン）を正規化し、新しい canvas に順番に描いて返す。
なぜ: 「canvas を作る → 各 primitive を draw する」の定型手順を 1 箇所にまとめるため。
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Union

from asciidraw.core.canvas import Canvas, normalize_glyph
from asciidraw.core.capabilities import Drawer
from asciidraw.core.runtime_config import runtime_config


@dataclass(frozen=True, slots=True)
class DrawItem:
    """描画 1 回分（drawer と glyph の組）。"""

    drawer: Drawer
    glyph: str | None = None


SceneItem = Union[DrawItem, Drawer, tuple, Sequence["SceneItem"]]


def normalize_scene(scene: SceneItem) -> list[DrawItem]:
    """シーン表現を DrawItem のフラットな list に正規化する。

    受理する形:
    - `DrawItem`
    - `Drawer`（glyph なし）
    - `(drawer, glyph)` タプル
    - 上記のネストしたシーケンス
    """

    out: list[DrawItem] = []

    def _walk(item: object) -> None:
        if isinstance(item, DrawItem):
            out.append(item)
            return
        if (
            isinstance(item, tuple)
            and len(item) == 2
            and isinstance(item[0], Drawer)
            and (item[1] is None or isinstance(item[1], str))
        ):
            out.append(DrawItem(item[0], normalize_glyph(item[1])))
            return
        if isinstance(item, Drawer):
            out.append(DrawItem(item))
            return
        if isinstance(item, (list, tuple)):
            for child in item:
                _walk(child)
            return
        raise TypeError(f"シーンに描画できない要素が含まれている: {type(item).__name__}")

    _walk(scene)
    return out


def render_scene(
    scene: SceneItem,
    *,
    canvas_size: tuple[int, int] | None = None,
) -> Canvas:
    """シーンを新しい canvas に描いて返す。

    Parameters
    ----------
    scene : SceneItem
        DrawItem / Drawer / (drawer, glyph) またはそのシーケンス。
    canvas_size : tuple[int, int] or None
        canvas の (width, height)。None の場合は `config.yaml` の `canvas` を使う。

    Returns
    -------
    Canvas
        描画済みの canvas。

    Raises
    ------
    CanvasIndexError
        いずれかの primitive が canvas の範囲外に触れた場合。
    """

    items = normalize_scene(scene)
    if canvas_size is None:
        canvas_size = runtime_config().canvas_size
    width, height = canvas_size
    canvas = Canvas(width, height)
    for item in items:
        canvas.draw(item.drawer, item.glyph)
    return canvas


__all__ = ["DrawItem", "SceneItem", "normalize_scene", "render_scene"]
