# -*- coding: utf-8 -*-
"""JSON 文档 — 原始文本 + 最近一次解析结果的缓存

任何文本修改都会无条件清空缓存；每个文档各自持有缓存，互不共享。
"""

from logging import getLogger

from core.json_errors import JsonParseError
from core.json_fmt import SORT_INDENT, describe_value, result_from_error, ValidationResult
from core.json_metrics import DocumentMetrics, compute_metrics
from core.json_parser import parse
from core.json_serialize import canonicalize, minify, pretty_print

logger = getLogger(__name__)


class JsonDocument:

    def __init__(self, text: str = ''):
        self._text = text
        self._cache = None          # (value, error)，二者之一为有效结果
        self.revision = 0

    # ── 文本 ────────────────────────────────────────────────
    @property
    def text(self) -> str:
        return self._text

    def set_text(self, text: str):
        self._text = text
        self.revision += 1
        self.invalidate()

    def clear(self):
        self.set_text('')

    def invalidate(self):
        self._cache = None

    @property
    def is_cached(self) -> bool:
        return self._cache is not None

    # ── 解析 ────────────────────────────────────────────────
    def _parse(self):
        if self._cache is None:
            try:
                self._cache = (parse(self._text), None)
            except JsonParseError as e:
                logger.debug("rev %d 解析失败: %s", self.revision, e)
                self._cache = (None, e)
        return self._cache

    def value(self):
        """返回解析结果；失败时抛出与上次相同的 JsonParseError"""
        value, error = self._parse()
        if error is not None:
            raise error
        return value

    def error(self) -> JsonParseError | None:
        """最近一次解析的错误；解析成功时为 None"""
        return self._parse()[1]

    def validate(self) -> ValidationResult:
        value, error = self._parse()
        if error is not None:
            return result_from_error(error)
        return ValidationResult(True, describe_value(value))

    def metrics(self) -> DocumentMetrics:
        # 解析失败时 value 为 None，顶层元素数即为 UNKNOWN
        value, _ = self._parse()
        return compute_metrics(self._text, value)

    # ── 变换: 成功才替换文本 ─────────────────────────────────
    def format(self, indent: int = 2) -> str:
        new_text = pretty_print(self.value(), indent)
        self.set_text(new_text)
        return new_text

    def minify(self) -> str:
        new_text = minify(self.value())
        self.set_text(new_text)
        return new_text

    def sort_keys(self) -> str:
        new_text = pretty_print(canonicalize(self.value()), SORT_INDENT)
        self.set_text(new_text)
        return new_text
