from __future__ import annotations

import re
import unicodedata
from pathlib import Path
from typing import List, Tuple

from . import fs
from .errors import ErrorKind, FileOperationError, KeyNotFoundError

# 只处理最简单的行格式： "KEY" = "VALUE";
# key 一律 re.escape，按字面量匹配（否则 '.'、'(' 之类会误匹配或编译失败）
_ENTRY_TEMPLATE = r'"{key}"\s*=\s*"(.*?)";'

_DIGITS_RE = re.compile(r"(\d+)")
_BOM = "\ufeff"


def format_entry(key: str, value: str) -> str:
    # 不转义内嵌引号：与旧版 .strings 简单格式保持一致
    return f"\"{key}\" = \"{value}\";\n"


def key_pattern(key: str) -> "re.Pattern[str]":
    return re.compile(_ENTRY_TEMPLATE.format(key=re.escape(key)), re.IGNORECASE)


def _wrap(e: Exception, path: Path, fallback: ErrorKind) -> FileOperationError:
    if isinstance(e, UnicodeDecodeError):
        kind = ErrorKind.DECODING_ERROR
    elif isinstance(e, UnicodeEncodeError):
        kind = ErrorKind.ENCODING_ERROR
    elif isinstance(e, re.error):
        kind = ErrorKind.REGEX_ERROR
    else:
        kind = fallback
    return FileOperationError(kind, path=path, reason=f"{type(e).__name__}: {e}")


# ----------------------------
# 单文件操作
# ----------------------------
def append_entry(path: Path, key: str, value: str) -> None:
    """在文件末尾追加一行；不检查 key 是否已存在（允许重复）。"""
    try:
        fs.append_text(path, format_entry(key, value))
    except (OSError, UnicodeError) as e:
        raise _wrap(e, path, ErrorKind.WRITE_ERROR) from e


def delete_key(path: Path, key: str) -> int:
    """
    删除所有匹配 key 的条目（大小写不敏感），返回删除条数。
    只删除匹配到的文本本身，行尾换行保留；没有匹配不算错误。
    """
    try:
        text = fs.read_text(path)
        new_text, n = key_pattern(key).subn("", text)
        if n:
            fs.write_text_atomic(path, new_text)
        return n
    except (OSError, UnicodeError, re.error) as e:
        raise _wrap(e, path, ErrorKind.FILE_OPERATION_ERROR) from e


def update_value(path: Path, key: str, value: str) -> None:
    """只替换第一个匹配条目引号内的 value；key/引号/分号保持原样。"""
    try:
        text = fs.read_text(path)
        m = key_pattern(key).search(text)
    except (OSError, UnicodeError, re.error) as e:
        raise _wrap(e, path, ErrorKind.FILE_OPERATION_ERROR) from e

    if m is None:
        raise KeyNotFoundError(key, path=path)

    start, end = m.span(1)
    try:
        fs.write_text_atomic(path, text[:start] + value + text[end:])
    except (OSError, UnicodeError) as e:
        raise _wrap(e, path, ErrorKind.FILE_OPERATION_ERROR) from e


def sort_file(path: Path) -> int:
    """
    排序规则：
    - 按换行拆分，丢弃空行
    - 以每行第一个 '=' 之前（去空白）的文本为排序 key；没有 '=' 的行 key 为空
    - 自然序比较（数字按数值、忽略大小写/重音优先），稳定排序
    返回写回的行数。
    """
    try:
        text = fs.read_text(path)
        # BOM 只能留在文件开头，不参与排序
        bom = _BOM if text.startswith(_BOM) else ""
        lines = [ln for ln in text[len(bom):].splitlines() if ln]
        lines.sort(key=lambda ln: natural_sort_key(line_sort_key(ln)))
        fs.write_text_atomic(path, bom + "\n".join(lines) + ("\n" if lines else ""))
        return len(lines)
    except (OSError, UnicodeError) as e:
        raise _wrap(e, path, ErrorKind.FILE_OPERATION_ERROR) from e


# ----------------------------
# 排序 key
# ----------------------------
def line_sort_key(line: str) -> str:
    if "=" not in line:
        return ""
    return line.split("=", 1)[0].strip()


def _fold(s: str) -> str:
    # 去掉重音 + casefold：é -> e，Ä -> a
    decomposed = unicodedata.normalize("NFKD", s)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def natural_sort_key(text: str) -> Tuple[Tuple[Tuple[int, int, str], ...], str, str]:
    """
    类似 Finder 的自然序：
    1) 数字段按数值比较（先比位数再比字面），文本段忽略大小写和重音（item2 < item10，Apple ≈ apple）
    2) 平局时区分重音
    3) 再平局时小写在前
    """
    chunks: List[Tuple[int, int, str]] = []
    for i, part in enumerate(_DIGITS_RE.split(text)):
        if not part:
            continue
        if i % 2:
            # 不走 int()：超长数字段会触发 int/str 转换上限
            digits = part.lstrip("0")
            chunks.append((0, len(digits), digits))
        else:
            chunks.append((1, 0, _fold(part)))
    return tuple(chunks), unicodedata.normalize("NFC", text).casefold(), text.swapcase()
