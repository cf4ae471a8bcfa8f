"""
どこで: `src/asciidraw/core/errors.py`。
何を: canvas アクセスと幾何の前提違反を表す例外型をまとめる。
なぜ: 呼び出し側が「範囲外」と「退化した図形」を区別して捕捉できるようにするため。
"""

from __future__ import annotations


class CanvasIndexError(IndexError):
    """canvas の範囲外セルへのアクセス。

    Notes
    -----
    クリップやクランプは行わず、アクセスした時点で即座に送出する。
    """


class DegenerateGeometryError(ValueError):
    """ラスタライズのステップ幅が 0 や非有限になる図形が渡された。"""


__all__ = ["CanvasIndexError", "DegenerateGeometryError"]
