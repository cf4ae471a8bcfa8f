"""
どこで: `src/asciidraw/__init__.py`。
何を: 利用者向けの公開 API（canvas・primitive・描画/出力ヘルパ）を再エクスポートする。
なぜ: `from asciidraw import Canvas, Line, Point` の短い導線で使えるようにするため。
"""

from __future__ import annotations

from asciidraw.core.canvas import Canvas
from asciidraw.core.capabilities import Bounder, Drawer
from asciidraw.core.errors import CanvasIndexError, DegenerateGeometryError
from asciidraw.core.geometry import Line, Orientation, Point, Rect
from asciidraw.core.pipeline import DrawItem, render_scene
from asciidraw.core.primitives.circle import Circle, Spiral
from asciidraw.core.primitives.rect import Border, Box, Fill, highlight
from asciidraw.core.primitives.text import Text
from asciidraw.export.text import TextExportParams, export_text

__all__ = [
    "Border",
    "Bounder",
    "Box",
    "Canvas",
    "CanvasIndexError",
    "Circle",
    "DegenerateGeometryError",
    "DrawItem",
    "Drawer",
    "Fill",
    "Line",
    "Orientation",
    "Point",
    "Rect",
    "Spiral",
    "Text",
    "TextExportParams",
    "export_text",
    "highlight",
    "render_scene",
]
