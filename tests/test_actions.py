import os

import pytest

from strings_edit import actions, strings_file
from strings_edit.errors import ErrorKind, FileOperationError, InputError, InputErrorKind, KeyNotFoundError
from strings_edit.models import EditRequest, Operation

from conftest import read_strings, write_strings


def _files(root):
    return {
        "en": root / "en.lproj" / "Localizable.strings",
        "zh": root / "zh-Hans.lproj" / "Localizable.strings",
    }


def test_add_fans_out_to_every_file(lang_root):
    result = actions.run_edit(EditRequest(lang_root, Operation.ADD, "greeting", "hello"))

    assert result.ok
    assert len(result.files) == 2
    for fp in _files(lang_root).values():
        assert read_strings(fp).endswith("\"greeting\" = \"hello\";\n")


def test_update_delete_sort_roundtrip(lang_root):
    files = _files(lang_root)

    assert actions.run_edit(EditRequest(lang_root, Operation.ADD, "bye", "Bye")).ok
    assert actions.run_edit(EditRequest(lang_root, Operation.UPDATE, "hello", "Hi")).ok
    assert actions.run_edit(EditRequest(lang_root, Operation.SORT)).ok
    assert read_strings(files["zh"]) == "\"bye\" = \"Bye\";\n\"hello\" = \"Hi\";\n"

    assert actions.run_edit(EditRequest(lang_root, Operation.DELETE, "bye")).ok
    assert read_strings(files["en"]) == "\n\"hello\" = \"Hi\";\n"


def test_input_error_short_circuits(lang_root):
    before = {k: read_strings(p) for k, p in _files(lang_root).items()}

    result = actions.run_edit(EditRequest(lang_root, Operation.ADD, "", "hello"))

    assert not result.ok
    assert result.files == []
    assert isinstance(result.error, InputError)
    assert result.error.input_kind is InputErrorKind.KEY_EMPTY
    assert {k: read_strings(p) for k, p in _files(lang_root).items()} == before


def test_key_not_valid_with_valid_value(lang_root):
    result = actions.run_edit(EditRequest(lang_root, Operation.ADD, "k", "hello"))
    assert result.first_error.input_kind is InputErrorKind.KEY_NOT_VALID


def test_no_root_is_file_not_found():
    result = actions.run_edit(EditRequest(None, Operation.SORT))
    assert not result.ok
    assert result.first_error.kind is ErrorKind.FILE_NOT_FOUND


def test_no_bundles_is_success(tmp_path):
    result = actions.run_edit(EditRequest(tmp_path, Operation.ADD, "greeting", "hello"))
    assert result.ok
    assert result.files == []


def test_update_missing_key_in_one_file(lang_root):
    files = _files(lang_root)
    write_strings(files["zh"], "\"other\" = \"x\";\n")

    result = actions.run_edit(EditRequest(lang_root, Operation.UPDATE, "hello", "Hi"))

    assert not result.ok
    assert isinstance(result.first_error, KeyNotFoundError)
    assert [r.path for r in result.failed] == [files["zh"]]
    assert read_strings(files["en"]) == "\"hello\" = \"Hi\";\n"
    assert read_strings(files["zh"]) == "\"other\" = \"x\";\n"


def test_partial_success_when_one_file_fails(lang_root, monkeypatch):
    files = _files(lang_root)
    real_append = strings_file.append_entry

    def flaky_append(path, key, value):
        if path == files["zh"]:
            raise FileOperationError(ErrorKind.WRITE_ERROR, path=path, reason="read-only")
        real_append(path, key, value)

    monkeypatch.setattr(strings_file, "append_entry", flaky_append)

    result = actions.run_edit(EditRequest(lang_root, Operation.ADD, "greeting", "hello"))

    assert not result.ok
    assert result.first_error.kind is ErrorKind.WRITE_ERROR
    assert len(result.succeeded) == 1
    assert read_strings(files["en"]).endswith("\"greeting\" = \"hello\";\n")
    assert "greeting" not in read_strings(files["zh"])


@pytest.mark.skipif(not hasattr(os, "geteuid") or os.geteuid() == 0, reason="root 忽略文件权限")
def test_read_only_file_reports_failure(lang_root):
    files = _files(lang_root)
    files["zh"].chmod(0o444)
    try:
        result = actions.run_edit(EditRequest(lang_root, Operation.ADD, "greeting", "hello"))
    finally:
        files["zh"].chmod(0o644)

    assert not result.ok
    assert result.first_error.kind is ErrorKind.WRITE_ERROR
    assert read_strings(files["en"]).endswith("\"greeting\" = \"hello\";\n")


def test_on_result_called_per_file(lang_root):
    seen = []

    def on_result(res, done, total):
        seen.append((res.ok, done, total))

    actions.run_edit(EditRequest(lang_root, Operation.SORT), max_workers=1, on_result=on_result)
    assert seen == [(True, 1, 2), (True, 2, 2)]


def test_compute_workers():
    assert actions._compute_workers(None, 0) == 1
    assert actions._compute_workers(None, 3) == 3
    assert actions._compute_workers(8, 3) == 3
    assert actions._compute_workers(2, 10) == 2
    assert actions._compute_workers(0, 100) == 32


def test_unexpected_error_becomes_file_result(lang_root, monkeypatch):
    files = _files(lang_root)
    real_sort = strings_file.sort_file

    def broken_sort(path):
        if path == files["zh"]:
            raise ValueError("boom")
        return real_sort(path)

    monkeypatch.setattr(strings_file, "sort_file", broken_sort)

    result = actions.run_edit(EditRequest(lang_root, Operation.SORT))

    assert not result.ok
    assert result.first_error.kind is ErrorKind.UNKNOWN_ERROR
    assert "ValueError" in str(result.first_error)
    assert [r.path for r in result.failed] == [files["zh"]]
    assert len(result.succeeded) == 1
