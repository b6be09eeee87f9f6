# -*- coding: utf-8 -*-
"""JSON 格式化引擎 — 纯函数，无 UI 依赖

文本进、文本出。解析失败时原样抛出 JsonParseError，与 validate_json
给出的错误完全一致，绝不输出半截结果。
"""

from dataclasses import dataclass

from core.json_errors import EmptyInputError, JsonParseError, JsonRangeError
from core.json_parser import parse
from core.json_serialize import canonicalize, minify, pretty_print

# 键排序后固定使用 2 空格缩进
SORT_INDENT = 2


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    message: str
    line: int | None = None
    column: int | None = None
    kind: str = 'valid'        # valid / empty / syntax / range

    @property
    def position(self) -> tuple[int, int] | None:
        if self.line is None:
            return None
        return self.line, self.column or 0


def format_json(text, indent=2):
    """格式化（美化）JSON"""
    return pretty_print(parse(text), indent)


def minify_json(text):
    """压缩 JSON（去除空白）"""
    return minify(parse(text))


def sort_json(text):
    """递归排序所有对象的键，并以 2 空格缩进输出"""
    return pretty_print(canonicalize(parse(text)), SORT_INDENT)


def describe_value(obj) -> str:
    if isinstance(obj, dict):
        return f"有效的 JSON 对象，包含 {len(obj)} 个键"
    if isinstance(obj, list):
        return f"有效的 JSON 数组，包含 {len(obj)} 个元素"
    if obj is None:
        kind = 'null'
    elif isinstance(obj, bool):
        kind = 'boolean'
    elif isinstance(obj, str):
        kind = 'string'
    else:
        kind = 'number'
    return f"有效的 JSON 值 (类型: {kind})"


def result_from_error(err: JsonParseError) -> ValidationResult:
    if isinstance(err, EmptyInputError):
        return ValidationResult(False, err.message, kind='empty')
    if isinstance(err, JsonRangeError):
        return ValidationResult(False, f"JSON 数值超出范围: {err}",
                                err.line, err.column, kind='range')
    return ValidationResult(False, f"JSON 语法错误: {err}",
                            err.line, err.column, kind='syntax')


def validate_json(text) -> ValidationResult:
    """验证 JSON 是否合法，永不抛出解析异常"""
    try:
        obj = parse(text)
    except JsonParseError as e:
        return result_from_error(e)
    return ValidationResult(True, describe_value(obj))
