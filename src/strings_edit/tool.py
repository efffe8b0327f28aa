#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
box_strings_edit tool.py
CLI 入口：参数解析 + action 路由 + exit code
commands：
- select / status
- add / update / delete / sort（对 root 下所有 *.lproj/Localizable.strings 生效）
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import actions
from . import settings as st
from .errors import ConfigError, error_message
from .fs import find_localizable_files
from .models import EditRequest, Operation

EXIT_OK = 0
EXIT_FAIL = 1
EXIT_BAD = 2


MENU = [
    ("select",  "选择语言目录根路径（记录到 settings）：select <folder>"),
    ("status",  "查看已保存的目录与扫描到的 Localizable.strings"),
    ("add",     "新增 key/value：add <key> <value>"),
    ("update",  "更新第一个匹配 key 的 value：update <key> <value>"),
    ("delete",  "删除所有匹配 key 的条目：delete <key>"),
    ("sort",    "按 key 自然序排序（去掉空行）"),
]

# action -> 需要的位置参数
_ARITY = {
    "select": ["folder"],
    "status": [],
    "add": ["key", "value"],
    "update": ["key", "value"],
    "delete": ["key"],
    "sort": [],
}


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="box_strings_edit",
        description="iOS/Xcode Localizable.strings：批量新增/更新/删除/排序（所有 *.lproj 同步）",
    )
    p.add_argument("action", nargs="?", choices=[k for k, _ in MENU], help="命令")
    p.add_argument("params", nargs="*", help="命令参数（folder / key / value）")
    p.add_argument("--root", default=None, help="语言目录根路径（覆盖 settings 中已保存的 root）")
    p.add_argument("--settings", default=None, help=f"settings 文件路径（默认 ~/{st.DEFAULT_SETTINGS_NAME}）")
    p.add_argument("--workers", type=int, default=None, help="并发写文件的线程数（默认自动）")
    p.add_argument("--quiet", action="store_true", help="不逐个文件输出结果，只输出汇总")
    return p


def _print_menu() -> None:
    print("❌ 需要指定 action。可选：")
    for k, desc in MENU:
        print(f"  - {k:<8} {desc}")


def _print_error(err: BaseException) -> None:
    msg = error_message(err)
    print(f"❌ {msg.title}：{msg.description}")
    print(f"   {msg.suggestion}")
    print(f"   ({err})")


def _cmd_select(settings_path: Path, folder: str) -> int:
    root = Path(folder).expanduser()
    if not root.is_dir():
        print(f"❌ 目录不存在：{root}")
        return EXIT_BAD
    saved = st.mark_root_selected(settings_path, root)
    files = find_localizable_files(saved.root_path())
    print(f"✅ 已选择：{saved.root}（发现 {len(files)} 个 Localizable.strings）")
    return EXIT_OK


def _cmd_status(cfg: st.Settings, root: Optional[Path]) -> int:
    print(f"- path_selected: {cfg.path_selected}")
    print(f"- root:          {root if root is not None else '-'}")
    if root is None:
        print("⚠️ 尚未选择目录：运行 `box_strings_edit select <folder>`")
        return EXIT_OK
    files = find_localizable_files(root)
    print(f"- files:         {len(files)}")
    for fp in files:
        print(f"  - {fp}")
    return EXIT_OK


def main(argv: Optional[List[str]] = None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    args = build_parser().parse_args(argv)

    action = args.action
    if not action:
        _print_menu()
        return EXIT_BAD

    expected = _ARITY[action]
    if len(args.params) != len(expected):
        names = " ".join(f"<{x}>" for x in expected)
        print(f"❌ 参数个数不对：box_strings_edit {action} {names}".rstrip())
        return EXIT_BAD

    settings_path = Path(args.settings).expanduser() if args.settings else st.default_settings_path()
    try:
        cfg = st.load_settings(settings_path)
    except ConfigError as e:
        print(str(e))
        return EXIT_BAD

    if action == "select":
        return _cmd_select(settings_path, args.params[0])

    root = Path(args.root).expanduser() if args.root else cfg.root_path()

    if action == "status":
        return _cmd_status(cfg, root)

    op = Operation(action)
    params = dict(zip(expected, args.params))
    request = EditRequest(
        root=root,
        operation=op,
        key=params.get("key", ""),
        value=params.get("value", ""),
    )

    result = actions.run_edit(
        request,
        max_workers=args.workers if args.workers is not None else cfg.max_workers,
        on_result=None if args.quiet else actions.print_file_result,
    )

    if result.error is not None:
        _print_error(result.error)
        return EXIT_BAD

    actions.print_summary(result)
    if not result.ok:
        _print_error(result.first_error)
        return EXIT_FAIL
    return EXIT_OK


if __name__ == "__main__":
    raise SystemExit(main())
