from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Optional

from .errors import FileOperationError


class Operation(str, Enum):
    ADD = "add"
    UPDATE = "update"
    DELETE = "delete"
    SORT = "sort"

    @property
    def needs_key(self) -> bool:
        return self is not Operation.SORT

    @property
    def needs_value(self) -> bool:
        return self in (Operation.ADD, Operation.UPDATE)


@dataclass(frozen=True)
class EditRequest:
    root: Optional[Path]
    operation: Operation
    key: str = ""
    value: str = ""


@dataclass
class FileResult:
    path: Path
    ok: bool
    error: Optional[FileOperationError] = None
    elapsed_sec: float = 0.0


@dataclass
class OperationResult:
    """
    一次用户动作（add/update/delete/sort）的汇总结果：
    - files：按完成顺序排列的单文件结果
    - error：前置失败（输入校验 / 未选择目录），此时不会触碰任何文件
    """
    operation: Operation
    files: List[FileResult] = field(default_factory=list)
    error: Optional[FileOperationError] = None

    @property
    def failed(self) -> List[FileResult]:
        return [r for r in self.files if not r.ok]

    @property
    def succeeded(self) -> List[FileResult]:
        return [r for r in self.files if r.ok]

    @property
    def ok(self) -> bool:
        return self.error is None and not self.failed

    @property
    def first_error(self) -> Optional[FileOperationError]:
        if self.error is not None:
            return self.error
        for r in self.files:
            if not r.ok:
                return r.error
        return None
