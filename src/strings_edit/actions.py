from __future__ import annotations

import threading
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Callable, Optional

from . import strings_file
from .errors import ErrorKind, FileOperationError, InputError
from .fs import find_localizable_files
from .models import EditRequest, FileResult, Operation, OperationResult
from .validation import validate_inputs

_PRINT_LOCK = threading.Lock()


def _ts_print(*args: object) -> None:
    # Avoid interleaved logs in multi-threading
    with _PRINT_LOCK:
        print(*args, flush=True)


def _compute_workers(max_workers: Optional[int], total_tasks: int) -> int:
    if total_tasks <= 0:
        return 1
    n = max_workers if max_workers and max_workers > 0 else min(32, total_tasks)
    return max(1, min(n, total_tasks))


def apply_to_file(request: EditRequest, path: Path) -> FileResult:
    """对单个文件执行一次操作；失败不抛出，转成 FileResult。"""
    t0 = time.perf_counter()
    op = request.operation
    try:
        if op is Operation.ADD:
            strings_file.append_entry(path, request.key, request.value)
        elif op is Operation.DELETE:
            strings_file.delete_key(path, request.key)
        elif op is Operation.UPDATE:
            strings_file.update_value(path, request.key, request.value)
        elif op is Operation.SORT:
            strings_file.sort_file(path)
        else:
            raise FileOperationError(ErrorKind.UNKNOWN_ERROR, path=path, reason=f"未知操作：{op}")
    except FileOperationError as e:
        return FileResult(path=path, ok=False, error=e, elapsed_sec=time.perf_counter() - t0)
    except Exception as e:
        # 单个文件的意外异常不能中断整个 fan-out
        err = FileOperationError(ErrorKind.UNKNOWN_ERROR, path=path, reason=f"{type(e).__name__}: {e}")
        return FileResult(path=path, ok=False, error=err, elapsed_sec=time.perf_counter() - t0)
    return FileResult(path=path, ok=True, elapsed_sec=time.perf_counter() - t0)


def preflight(request: EditRequest) -> Optional[FileOperationError]:
    """输入校验 + 目录检查；返回错误则不触碰任何文件。"""
    op = request.operation
    if op.needs_key:
        try:
            validate_inputs(request.key, request.value, require_value=op.needs_value)
        except InputError as e:
            return e
    if request.root is None:
        return FileOperationError(ErrorKind.FILE_NOT_FOUND, reason="未选择语言目录根路径")
    return None


def run_edit(
    request: EditRequest,
    *,
    max_workers: Optional[int] = None,
    on_result: Optional[Callable[[FileResult, int, int], None]] = None,
) -> OperationResult:
    """
    fan-out：对 root 下每个 Localizable.strings 独立执行同一个操作。
    - 文件之间无顺序依赖（线程池并发）
    - 全部成功才算成功；first_error 取完成顺序中的第一个失败
    - 不回滚：部分文件已写入是可接受的结果
    """
    result = OperationResult(operation=request.operation)

    err = preflight(request)
    if err is not None:
        result.error = err
        return result

    paths = find_localizable_files(request.root)
    if not paths:
        return result

    total = len(paths)
    workers = _compute_workers(max_workers, total)
    done = 0
    with ThreadPoolExecutor(max_workers=workers) as ex:
        futs = [ex.submit(apply_to_file, request, p) for p in paths]
        for fut in as_completed(futs):
            done += 1
            res = fut.result()
            result.files.append(res)
            if on_result is not None:
                on_result(res, done, total)

    return result


def print_file_result(res: FileResult, done: int, total: int) -> None:
    if res.ok:
        _ts_print(f"✅ [{done}/{total}] {res.path} ({res.elapsed_sec:.2f}s)")
    else:
        _ts_print(f"❌ [{done}/{total}] {res.path} ({res.elapsed_sec:.2f}s) {res.error}")


def print_summary(result: OperationResult) -> None:
    ok_n = len(result.succeeded)
    fail_n = len(result.failed)
    name = result.operation.value
    if not result.files:
        _ts_print(f"⚠️ [{name}] 未发现任何 *.lproj/Localizable.strings")
        return
    if fail_n:
        _ts_print(f"[{name}] 结束：✅{ok_n} ❌{fail_n}")
        return
    _ts_print(f"[{name}] 结束：全部成功 ✅{ok_n}")
