import pytest

from strings_edit import fs

from conftest import read_strings, write_strings


def test_find_only_localizable_inside_lproj(tmp_path):
    write_strings(tmp_path / "A.lproj" / "Localizable.strings")
    write_strings(tmp_path / "B.lproj" / "Other.strings")
    write_strings(tmp_path / "C" / "Localizable.strings")

    assert fs.find_localizable_files(tmp_path) == [tmp_path / "A.lproj" / "Localizable.strings"]


def test_find_nested_and_sorted(tmp_path):
    write_strings(tmp_path / "App" / "zh-Hans.lproj" / "Localizable.strings")
    write_strings(tmp_path / "App" / "Base.lproj" / "Localizable.strings")
    write_strings(tmp_path / "Widget" / "deep" / "en.lproj" / "Localizable.strings")

    found = fs.find_localizable_files(tmp_path)
    assert found == sorted(found)
    assert [p.parent.name for p in found] == ["Base.lproj", "zh-Hans.lproj", "en.lproj"]


def test_find_requires_file_directly_in_bundle(tmp_path):
    write_strings(tmp_path / "en.lproj" / "sub" / "Localizable.strings")
    (tmp_path / "fr.lproj" / "Localizable.strings").mkdir(parents=True)

    assert fs.find_localizable_files(tmp_path) == []


def test_find_missing_root_is_empty(tmp_path):
    assert fs.find_localizable_files(tmp_path / "nope") == []
    assert fs.find_localizable_files(None) == []


def test_write_text_atomic_keeps_bytes_and_no_tmp(tmp_path):
    fp = write_strings(tmp_path / "en.lproj" / "Localizable.strings", "old")
    fs.write_text_atomic(fp, "\"a\" = \"1\";\r\n")

    assert read_strings(fp) == "\"a\" = \"1\";\r\n"
    assert not fp.with_suffix(".strings.tmp").exists()


def test_append_text_does_not_create(tmp_path):
    missing = tmp_path / "missing.strings"
    with pytest.raises(FileNotFoundError):
        fs.append_text(missing, "x")
    assert not missing.exists()
