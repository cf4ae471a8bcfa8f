"""
どこで: `src/asciidraw/export/text.py`。
何を: 描画済み canvas をテキストファイルとして保存する関数を提供する。
なぜ: 標準出力以外にも、決定的な ASCII アート出力をファイルで残せるようにするため。
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path

from asciidraw.core.canvas import Canvas
from asciidraw.core.runtime_config import output_root_dir, runtime_config

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class TextExportParams:
    """テキスト出力パラメータ。

    Parameters
    ----------
    frame : str or None
        各行の先頭と末尾に付ける 1 文字。None で枠なし。
    trailing_newline : bool
        True の場合、最終行の後に改行を 1 つ付ける。
    """

    frame: str | None = None
    trailing_newline: bool = True


def _params_from_config() -> TextExportParams:
    cfg = runtime_config().text
    return TextExportParams(frame=cfg.frame, trailing_newline=bool(cfg.trailing_newline))


def render_text(canvas: Canvas, *, params: TextExportParams | None = None) -> str:
    """canvas を出力用テキストにして返す。params が None なら `config.yaml` の `export.text` を使う。"""

    p = params if params is not None else _params_from_config()
    text = canvas.to_text(p.frame)
    if p.trailing_newline:
        text += "\n"
    return text


def export_text(
    canvas: Canvas,
    path: str | Path,
    *,
    params: TextExportParams | None = None,
) -> Path:
    """canvas を UTF-8 のテキストファイルとして保存する。

    Parameters
    ----------
    canvas : Canvas
        描画済みの canvas。
    path : str or Path
        出力先パス。親ディレクトリが無ければ作成する。
    params : TextExportParams or None
        出力パラメータ。None の場合は `config.yaml`（`export.text`）の設定値を使う。

    Returns
    -------
    Path
        保存先パス。
    """

    _path = Path(path)
    text = render_text(canvas, params=params)
    _path.parent.mkdir(parents=True, exist_ok=True)
    _path.write_text(text, encoding="utf-8")
    logger.info("wrote %s (%dx%d)", _path, canvas.width, canvas.height)
    return _path


def default_text_output_path(name: str) -> Path:
    """`{output_dir}/text/{name}.txt` を返す。name はファイル名として安全な文字に正規化する。"""

    sanitized = re.sub(r"[^A-Za-z0-9._-]+", "_", str(name)).strip("_")
    if not sanitized:
        raise ValueError(f"出力名が空になる: name={name!r}")
    return output_root_dir() / "text" / f"{sanitized}.txt"


__all__ = ["TextExportParams", "default_text_output_path", "export_text", "render_text"]
