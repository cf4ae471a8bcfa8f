# どこで: `src/asciidraw/core/runtime_config.py`。
# 何を: config.yaml による実行時設定（探索・ロード・キャッシュ）を提供する。
# なぜ: 既定の canvas サイズやテキスト出力の枠・出力先をユーザーが指定できるようにするため。

"""実行時設定 `RuntimeConfig` の読み込み。

設定は 3 層を後勝ちで重ねる。

1. 同梱 `asciidraw/resource/default_config.yaml`
2. `./.asciidraw/config.yaml`、無ければ `~/.config/asciidraw/config.yaml`
3. `set_config_path()` で指定したファイル

重ね合わせはトップレベルのキー単位で、`canvas:` などのネストした mapping は丸ごと置き換わる。
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

SUPPORTED_VERSION = 1


@dataclass(frozen=True, slots=True)
class TextExportConfig:
    """`export.text` セクション。"""

    frame: str | None
    trailing_newline: bool


@dataclass(frozen=True, slots=True)
class RuntimeConfig:
    """asciidraw の実行時設定。

    Attributes
    ----------
    config_path:
        最後に重ねたユーザー設定ファイル。同梱デフォルトだけなら None。
    output_dir:
        生成物の出力先ディレクトリ。
    canvas_size:
        canvas サイズ省略時の (width, height)。
    text:
        テキスト出力設定。
    """

    config_path: Path | None
    output_dir: Path
    canvas_size: tuple[int, int]
    text: TextExportConfig


_explicit_path: Path | None = None
_cached: RuntimeConfig | None = None


def set_config_path(path: str | Path | None) -> None:
    """明示 config を差し替える（None で解除）。キャッシュも破棄する。"""

    global _explicit_path, _cached
    _explicit_path = None if path is None else Path(path).expanduser()
    _cached = None


def _parse(text: str, source: str) -> dict[str, Any]:
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise RuntimeError(f"config.yaml を解析できない: {source}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RuntimeError(f"config.yaml のトップレベルは mapping である必要がある: {source}")
    return data


def _user_config_paths() -> list[Path]:
    """重ねる順にユーザー設定ファイルを返す。探索は CWD 優先で 1 つだけ、明示指定は最後。"""

    if _explicit_path is not None and not _explicit_path.is_file():
        raise FileNotFoundError(f"config.yaml が見つからない: {_explicit_path}")
    found: list[Path] = []
    for candidate in (
        Path.cwd() / ".asciidraw" / "config.yaml",
        Path.home() / ".config" / "asciidraw" / "config.yaml",
    ):
        if candidate.is_file():
            found.append(candidate)
            break
    if _explicit_path is not None:
        found.append(_explicit_path)
    return found


def _lookup(payload: dict[str, Any], dotted: str) -> Any:
    """`"export.text.frame"` のようなキーでネストした値を引く。途中が無ければ None。"""

    node: Any = payload
    walked: list[str] = []
    for part in dotted.split("."):
        if node is None:
            return None
        if not isinstance(node, dict):
            raise RuntimeError(f"{'.'.join(walked)} は mapping である必要がある: got={node!r}")
        node = node.get(part)
        walked.append(part)
    return node


def _required(payload: dict[str, Any], dotted: str) -> Any:
    value = _lookup(payload, dotted)
    if value is None:
        raise RuntimeError(f"{dotted} が未設定（同梱 default_config.yaml を確認すること）")
    return value


def _positive_int(payload: dict[str, Any], dotted: str) -> int:
    value = _required(payload, dotted)
    if isinstance(value, bool) or not isinstance(value, int):
        raise RuntimeError(f"{dotted} は整数である必要がある: got={value!r}")
    if value <= 0:
        raise ValueError(f"{dotted} は正の値である必要がある: got={value}")
    return value


def _output_dir(payload: dict[str, Any]) -> Path:
    raw = str(_lookup(payload, "paths.output_dir") or "").strip()
    if not raw:
        raise RuntimeError("paths.output_dir が未設定（同梱 default_config.yaml を確認すること）")
    return Path(os.path.expandvars(os.path.expanduser(raw)))


def _text_export(payload: dict[str, Any]) -> TextExportConfig:
    frame = _lookup(payload, "export.text.frame")
    if frame is not None:
        frame = str(frame) or None
    if frame is not None and len(frame) != 1:
        raise ValueError(f"export.text.frame は 1 文字である必要がある: got={frame!r}")

    trailing_newline = _required(payload, "export.text.trailing_newline")
    if not isinstance(trailing_newline, bool):
        raise RuntimeError(
            f"export.text.trailing_newline は true/false である必要がある: got={trailing_newline!r}"
        )
    return TextExportConfig(frame=frame, trailing_newline=trailing_newline)


def runtime_config() -> RuntimeConfig:
    """実行時設定を返す。初回にロードし、`set_config_path()` まではキャッシュを返す。"""

    global _cached
    if _cached is not None:
        return _cached

    default_blob = resources.files("asciidraw").joinpath("resource", "default_config.yaml")
    payload = _parse(default_blob.read_text(encoding="utf-8"), "asciidraw/resource/default_config.yaml")
    user_paths = _user_config_paths()
    for path in user_paths:
        payload.update(_parse(path.read_text(encoding="utf-8"), str(path)))

    version = payload.get("version")
    if version != SUPPORTED_VERSION:
        raise RuntimeError(f"未対応の config.yaml version: got={version!r}")

    cfg = RuntimeConfig(
        config_path=user_paths[-1] if user_paths else None,
        output_dir=_output_dir(payload),
        canvas_size=(
            _positive_int(payload, "canvas.width"),
            _positive_int(payload, "canvas.height"),
        ),
        text=_text_export(payload),
    )
    logger.debug("runtime config loaded: config_path=%s", cfg.config_path)
    _cached = cfg
    return cfg


def output_root_dir() -> Path:
    """出力ファイルを保存する既定ルートディレクトリを返す。"""

    return runtime_config().output_dir


__all__ = [
    "RuntimeConfig",
    "TextExportConfig",
    "output_root_dir",
    "runtime_config",
    "set_config_path",
]
