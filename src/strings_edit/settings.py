# settings.py
from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError
from .fs import write_text_atomic

DEFAULT_SETTINGS_NAME = ".box_strings_edit.yaml"


def default_settings_path() -> Path:
    return Path.home() / DEFAULT_SETTINGS_NAME


@dataclass(frozen=True)
class Settings:
    path_selected: bool = False     # 是否已经选择过语言目录（决定下次启动展示哪种状态）
    root: Optional[str] = None      # 上次选择的目录
    max_workers: int = 0            # 0 = 自动

    def root_path(self) -> Optional[Path]:
        if not self.root:
            return None
        return Path(self.root).expanduser()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "path_selected": self.path_selected,
            "root": self.root,
            "max_workers": self.max_workers,
        }


def validate_settings(raw: Dict[str, Any]) -> None:
    if not isinstance(raw, dict):
        raise ValueError("settings 顶层必须是 object")

    if "path_selected" in raw and not isinstance(raw["path_selected"], bool):
        raise ValueError("path_selected 必须是 bool")

    root = raw.get("root")
    if root is not None and (not isinstance(root, str) or not root.strip()):
        raise ValueError("root 必须是非空字符串或 null")

    mw = raw.get("max_workers", 0)
    if isinstance(mw, bool) or not isinstance(mw, int) or mw < 0:
        raise ValueError("max_workers 必须是 >= 0 的整数")


def load_settings(path: Path) -> Settings:
    """读取 settings；文件不存在时返回默认值（path_selected=False）。"""
    path = Path(path).expanduser()
    if not path.exists():
        return Settings()

    try:
        raw = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(
            f"settings 文件无法解析为 YAML：{path}\n"
            f"原因：{e}\n"
            f"解决方法：修复 YAML 格式，或删除该文件后重新运行 `box_strings_edit select <folder>`。"
        ) from e

    try:
        validate_settings(raw)
    except ValueError as e:
        raise ConfigError(
            f"settings 文件校验失败：{path}\n"
            f"原因：{e}\n"
            f"解决方法：修复字段/类型，或删除该文件后重新运行 `box_strings_edit select <folder>`。"
        ) from e

    return Settings(
        path_selected=bool(raw.get("path_selected", False)),
        root=raw.get("root"),
        max_workers=int(raw.get("max_workers", 0)),
    )


def save_settings(path: Path, settings: Settings) -> None:
    path = Path(path).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    text = yaml.safe_dump(settings.to_dict(), allow_unicode=True, sort_keys=False)
    write_text_atomic(path, text)


def mark_root_selected(path: Path, root: Path) -> Settings:
    """记录已选择的目录，并置 path_selected=True。"""
    current = load_settings(path)
    updated = replace(current, path_selected=True, root=str(Path(root).expanduser().resolve()))
    save_settings(path, updated)
    return updated
