# -*- coding: utf-8 -*-
"""文档指标 — 字节数 / 行数 / 顶层元素数

编辑过程中文档几乎总是暂时无效的，所以 cardinality 对非法输入
只返回 UNKNOWN，从不抛异常。
"""

import enum
import re
from dataclasses import dataclass

from core.json_errors import JsonParseError
from core.json_parser import parse

_LINE_BREAK = re.compile(r'\r\n|\r|\n')


class Unknown(enum.Enum):
    UNKNOWN = '—'

    def __str__(self):
        return self.value


UNKNOWN = Unknown.UNKNOWN

# compute_metrics 的 "未提供解析结果" 标记 (None 本身是合法的 JSON 值)
MISSING = object()


@dataclass(frozen=True)
class DocumentMetrics:
    size: int
    lines: int
    keys: int | Unknown


def byte_size(text: str) -> int:
    return len(text.encode('utf-8', errors='surrogatepass'))


def line_count(text: str) -> int:
    """按换行分段，末尾未结束的一行也计数；末尾换行不产生新行"""
    segments = _LINE_BREAK.split(text)
    if len(segments) > 1 and segments[-1] == '':
        segments.pop()
    return len(segments)


def cardinality_of(value) -> int | Unknown:
    if isinstance(value, (list, dict)):
        return len(value)
    return UNKNOWN


def cardinality(text: str) -> int | Unknown:
    try:
        value = parse(text)
    except JsonParseError:
        return UNKNOWN
    return cardinality_of(value)


def compute_metrics(text: str, value=MISSING) -> DocumentMetrics:
    """一次算出三项指标；已解析过的 value 可直接传入以免重复解析"""
    keys = cardinality(text) if value is MISSING else cardinality_of(value)
    return DocumentMetrics(byte_size(text), line_count(text), keys)
