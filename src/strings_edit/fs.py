from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional

BUNDLE_SUFFIX = ".lproj"
STRINGS_FILENAME = "Localizable.strings"


def find_localizable_files(
    root: Optional[Path],
    *,
    bundle_suffix: str = BUNDLE_SUFFIX,
    filename: str = STRINGS_FILENAME,
) -> List[Path]:
    """
    规则：
    - root 下任意深度、名称以 bundle_suffix 结尾的目录
    - 目录内直接存在 filename（普通文件）才算
    - root 不存在 / 不是目录 / 没有任何 bundle：返回空列表（不是错误）
    - 结果按路径字典序，保证输出可复现
    """
    if root is None:
        return []
    root = Path(root).expanduser()
    if not root.is_dir():
        return []

    out: List[Path] = []
    for bundle in root.rglob(f"*{bundle_suffix}"):
        if not bundle.is_dir():
            continue
        fp = bundle / filename
        if fp.is_file():
            out.append(fp)
    return sorted(out)


# ----------------------------
# IO：整文件读写（原子替换）/ 追加写
# ----------------------------
def read_text(path: Path) -> str:
    # newline="" 保留原始换行，写回时字节级一致
    with open(path, "r", encoding="utf-8", newline="") as f:
        return f.read()


def write_text_atomic(path: Path, content: str) -> None:
    tmp = path.with_suffix(path.suffix + ".tmp")
    try:
        with open(tmp, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        tmp.replace(path)
    finally:
        if tmp.exists():
            tmp.unlink()


def append_text(path: Path, content: str) -> None:
    """O_APPEND 追加写；文件不存在时失败（不会新建）。"""
    data = content.encode("utf-8")
    fd = os.open(path, os.O_WRONLY | os.O_APPEND)
    with os.fdopen(fd, "ab") as f:
        f.write(data)
