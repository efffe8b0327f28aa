import sys
from pathlib import Path

import pytest


# Ensure 'src/' is on sys.path so 'strings_edit' can be imported when running tests from repo root.
REPO_ROOT = Path(__file__).resolve().parents[1]
SRC_DIR = REPO_ROOT / "src"
if SRC_DIR.exists():
    sys.path.insert(0, str(SRC_DIR))


def write_strings(path: Path, text: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(text.encode("utf-8"))
    return path


def read_strings(path: Path) -> str:
    return path.read_bytes().decode("utf-8")


@pytest.fixture
def lang_root(tmp_path):
    """两个语言目录：en.lproj / zh-Hans.lproj，各带一个 Localizable.strings。"""
    root = tmp_path / "Resources"
    write_strings(root / "en.lproj" / "Localizable.strings", "\"hello\" = \"Hello\";\n")
    write_strings(root / "zh-Hans.lproj" / "Localizable.strings", "\"hello\" = \"你好\";\n")
    return root
