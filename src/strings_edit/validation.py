from __future__ import annotations

from .errors import InputError, InputErrorKind

MIN_LENGTH = 2


def validate_inputs(key: str, value: str = "", *, require_value: bool = True) -> None:
    """
    add/update/delete 前的输入校验，按顺序命中第一条即抛出：
    keyEmpty -> valueEmpty -> keyNotValid -> valueNotValid
    （delete 不需要 value：require_value=False 时跳过 value 相关规则）
    """
    if not key:
        raise InputError(InputErrorKind.KEY_EMPTY)
    if require_value and not value:
        raise InputError(InputErrorKind.VALUE_EMPTY)
    if len(key) < MIN_LENGTH:
        raise InputError(InputErrorKind.KEY_NOT_VALID)
    if require_value and len(value) < MIN_LENGTH:
        raise InputError(InputErrorKind.VALUE_NOT_VALID)
