from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Dict, Optional


# ----------------------------
# 错误分类
# ----------------------------
class ErrorKind(str, Enum):
    FILE_NOT_FOUND = "fileNotFound"
    READ_ERROR = "readError"
    WRITE_ERROR = "writeError"
    ENCODING_ERROR = "encodingError"
    DECODING_ERROR = "decodingError"
    REGEX_ERROR = "regexError"
    FILE_OPERATION_ERROR = "fileOperationError"
    UNKNOWN_ERROR = "unknownError"
    INPUT_ERROR = "inputError"


class InputErrorKind(str, Enum):
    KEY_EMPTY = "keyEmpty"
    VALUE_EMPTY = "valueEmpty"
    KEY_NOT_VALID = "keyNotValid"
    VALUE_NOT_VALID = "valueNotValid"


# ----------------------------
# 异常类型
# ----------------------------
class FileOperationError(RuntimeError):
    """单个文件操作失败（只影响该文件，不影响其它 .strings）。"""

    def __init__(
        self,
        kind: ErrorKind = ErrorKind.FILE_OPERATION_ERROR,
        *,
        path: Optional[Path] = None,
        reason: Optional[str] = None,
    ) -> None:
        self.kind = kind
        self.path = path
        self.reason = reason
        super().__init__(self._format())

    def _format(self) -> str:
        parts = [self.kind.value]
        if self.path is not None:
            parts.append(str(self.path))
        if self.reason:
            parts.append(self.reason)
        return ": ".join(parts)


class KeyNotFoundError(FileOperationError):
    """update 找不到 key：对外仍是 writeError，但调用方可以单独识别。"""

    def __init__(self, key: str, *, path: Optional[Path] = None) -> None:
        self.key = key
        super().__init__(ErrorKind.WRITE_ERROR, path=path, reason=f"key 不存在：{key!r}")


class InputError(FileOperationError):
    """输入校验失败（在触碰任何文件之前短路）。"""

    def __init__(self, input_kind: InputErrorKind) -> None:
        self.input_kind = input_kind
        super().__init__(ErrorKind.INPUT_ERROR, reason=input_kind.value)


class ConfigError(RuntimeError):
    """用于 settings 文件的错误（更友好的报错与解决建议）"""
    pass


# ----------------------------
# 展示文案：title / description / suggestion
# ----------------------------
@dataclass(frozen=True)
class ErrorMessage:
    title: str
    description: str
    suggestion: str


_MESSAGES: Dict[ErrorKind, ErrorMessage] = {
    ErrorKind.FILE_NOT_FOUND: ErrorMessage(
        "File Not Found",
        "The specified file could not be found. Please check the file path and ensure the file exists.",
        "Please select a valid file and try again.",
    ),
    ErrorKind.READ_ERROR: ErrorMessage(
        "Read Error",
        "An error occurred while reading the file. This could be due to file permissions, corruption, or other issues.",
        "Please check the file path and try again",
    ),
    ErrorKind.WRITE_ERROR: ErrorMessage(
        "Write Error",
        "An error occurred while writing to the file. This may be caused by insufficient disk space, "
        "permissions issues, or file system errors.",
        "Please check the file permissions and try again.",
    ),
    ErrorKind.ENCODING_ERROR: ErrorMessage(
        "Encoding Error",
        "Failed to encode the content. This usually happens when converting strings to data.",
        "Please ensure the content is properly formatted and try again.",
    ),
    ErrorKind.DECODING_ERROR: ErrorMessage(
        "Decoding Error",
        "Failed to decode the content. This typically occurs when converting data back into the expected format.",
        "Please ensure the file content is in the correct format.",
    ),
    ErrorKind.REGEX_ERROR: ErrorMessage(
        "Regex Error",
        "An error occurred while processing the regular expression. "
        "This could be due to an invalid pattern or a matching error.",
        "Please check the regular expression syntax.",
    ),
    ErrorKind.FILE_OPERATION_ERROR: ErrorMessage(
        "File Operation Error",
        "An unspecified file operation error occurred. Please try again.",
        "Please try the operation again.",
    ),
    ErrorKind.UNKNOWN_ERROR: ErrorMessage(
        "Unknown Error",
        "An unknown error occurred. Please try again later.",
        "Please try again later.",
    ),
}

_INPUT_MESSAGES: Dict[InputErrorKind, ErrorMessage] = {
    InputErrorKind.KEY_EMPTY: ErrorMessage(
        "Key Empty",
        "The key field cannot be empty. Please provide a valid key.",
        "Please enter a valid key and try again.",
    ),
    InputErrorKind.VALUE_EMPTY: ErrorMessage(
        "Value Empty",
        "The value field cannot be empty. Please provide a valid value.",
        "Please enter a valid value and try again.",
    ),
    InputErrorKind.KEY_NOT_VALID: ErrorMessage(
        "Invalid Key",
        "The provided key is not valid. Please ensure it contains at least two characters.",
        "Please enter a valid key with at least two characters and try again.",
    ),
    InputErrorKind.VALUE_NOT_VALID: ErrorMessage(
        "Invalid Value",
        "The provided value is not valid. Please ensure it contains at least two characters.",
        "Please enter a valid value with at least two characters and try again.",
    ),
}


def error_message(err: BaseException) -> ErrorMessage:
    """把异常映射为可展示的三段文案；未知异常统一按 unknownError。"""
    if isinstance(err, InputError):
        return _INPUT_MESSAGES[err.input_kind]
    if isinstance(err, FileOperationError):
        return _MESSAGES[err.kind]
    return _MESSAGES[ErrorKind.UNKNOWN_ERROR]
