# -*- coding: utf-8 -*-
"""严格 JSON 解析器 — 纯函数，无 UI 依赖

递归下降实现 RFC 8259 语法，不接受任何扩展写法:
尾随逗号、注释、未加引号的键、单引号字符串、NaN / Infinity 一律报错。

出错时抛出 JsonSyntaxError，行列号 (从 0 开始) 直接指向出错字符；
\\r\\n、\\r、\\n 都视为换行，字符串内的转义序列按原始字符数推进列号。
"""

import math
import re

from core.json_errors import EmptyInputError, JsonRangeError, JsonSyntaxError

JsonValue = None | bool | float | str | list["JsonValue"] | dict[str, "JsonValue"]

# 超过此深度视为语法错误，避免 RecursionError
MAX_DEPTH = 256

WHITESPACE = frozenset(' \t\n\r')

_ESCAPES = {
    '"': '"', '\\': '\\', '/': '/',
    'b': '\b', 'f': '\f', 'n': '\n', 'r': '\r', 't': '\t',
}
_HEX = frozenset('0123456789abcdefABCDEF')

_LINE_BREAK = re.compile(r'\r\n|\r|\n')
_PLAIN_RUN = re.compile(r'[^"\\\x00-\x1f]+')
_DIGIT_RUN = re.compile(r'[0-9]*')


def offset_to_position(text: str, offset: int) -> tuple[int, int]:
    """字符偏移 → (line, column)，均从 0 开始"""
    line = 0
    line_start = 0
    for m in _LINE_BREAK.finditer(text, 0, offset):
        line += 1
        line_start = m.end()
    return line, offset - line_start


def _is_digit(c: str) -> bool:
    return '0' <= c <= '9'


class _Parser:

    def __init__(self, text: str):
        self.text = text
        self.end = len(text)
        self.pos = 0
        self.depth = 0

    # ── 错误 ────────────────────────────────────────────────
    def _error(self, message: str, offset: int | None = None) -> JsonSyntaxError:
        if offset is None:
            offset = self.pos
        line, column = offset_to_position(self.text, offset)
        return JsonSyntaxError(message, line, column)

    def _describe(self, offset: int) -> str:
        if offset >= self.end:
            return "输入结尾"
        c = self.text[offset]
        if c < ' ':
            return f"控制字符 U+{ord(c):04X}"
        return f"'{c}'"

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < self.end else ''

    def _skip_ws(self):
        text, pos, end = self.text, self.pos, self.end
        while pos < end and text[pos] in WHITESPACE:
            pos += 1
        self.pos = pos

    def _enter(self, start: int):
        self.depth += 1
        if self.depth > MAX_DEPTH:
            raise self._error(f"嵌套层级超过上限 {MAX_DEPTH}", start)

    # ── 文档 ────────────────────────────────────────────────
    def parse_document(self):
        self._skip_ws()
        value = self.parse_value()
        self._skip_ws()
        if self.pos < self.end:
            raise self._error(
                f"期望输入结束，遇到 {self._describe(self.pos)}")
        return value

    def parse_value(self):
        c = self._peek()
        if c == '{':
            return self.parse_object()
        if c == '[':
            return self.parse_array()
        if c == '"':
            return self.parse_string()
        if c == '-' or _is_digit(c):
            return self.parse_number()
        if c == 't':
            return self._parse_literal('true', True)
        if c == 'f':
            return self._parse_literal('false', False)
        if c == 'n':
            return self._parse_literal('null', None)
        if c == "'":
            raise self._error("期望一个 JSON 值，字符串必须使用双引号")
        raise self._error(
            "期望一个 JSON 值 (对象、数组、字符串、数字、true、false 或 null)，"
            f"遇到 {self._describe(self.pos)}")

    # ── 容器 ────────────────────────────────────────────────
    def parse_object(self) -> dict:
        start = self.pos
        self._enter(start)
        self.pos += 1
        obj = {}
        self._skip_ws()
        if self._peek() == '}':
            self.pos += 1
            self.depth -= 1
            return obj
        while True:
            if self._peek() != '"':
                raise self._error(
                    f"期望以双引号包裹的对象键，遇到 {self._describe(self.pos)}")
            key = self.parse_string()
            self._skip_ws()
            if self._peek() != ':':
                raise self._error(f"期望 ':'，遇到 {self._describe(self.pos)}")
            self.pos += 1
            self._skip_ws()
            # 重复键: 后出现的值覆盖先前的值
            obj[key] = self.parse_value()
            self._skip_ws()
            c = self._peek()
            if c == ',':
                self.pos += 1
                self._skip_ws()
                continue
            if c == '}':
                self.pos += 1
                break
            raise self._error(f"期望 ',' 或 '}}'，遇到 {self._describe(self.pos)}")
        self.depth -= 1
        return obj

    def parse_array(self) -> list:
        start = self.pos
        self._enter(start)
        self.pos += 1
        arr = []
        self._skip_ws()
        if self._peek() == ']':
            self.pos += 1
            self.depth -= 1
            return arr
        while True:
            arr.append(self.parse_value())
            self._skip_ws()
            c = self._peek()
            if c == ',':
                self.pos += 1
                self._skip_ws()
                continue
            if c == ']':
                self.pos += 1
                break
            raise self._error(f"期望 ',' 或 ']'，遇到 {self._describe(self.pos)}")
        self.depth -= 1
        return arr

    # ── 标量 ────────────────────────────────────────────────
    def parse_string(self) -> str:
        text, end = self.text, self.end
        start = self.pos
        pos = start + 1
        chunks = []
        while True:
            if pos >= end:
                raise self._error("字符串未闭合，期望 '\"'", start)
            c = text[pos]
            if c == '"':
                self.pos = pos + 1
                return ''.join(chunks)
            if c == '\\':
                esc = text[pos + 1:pos + 2]
                if esc == 'u':
                    code = self._read_hex4(pos + 2)
                    pos += 6
                    if 0xD800 <= code <= 0xDBFF:
                        low = self._peek_low_surrogate(pos)
                        if low is not None:
                            code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                            pos += 6
                    chunks.append(chr(code))
                elif esc in _ESCAPES:
                    chunks.append(_ESCAPES[esc])
                    pos += 2
                elif not esc:
                    raise self._error("字符串未闭合，期望 '\"'", start)
                else:
                    raise self._error(
                        f"无效的转义序列 '\\{esc}'，"
                        "期望 \\\" \\\\ \\/ \\b \\f \\n \\r \\t 或 \\uXXXX", pos)
                continue
            if c < ' ':
                raise self._error(
                    f"字符串中不允许出现未转义的控制字符 U+{ord(c):04X}", pos)
            m = _PLAIN_RUN.match(text, pos)
            chunks.append(m.group())
            pos = m.end()

    def _read_hex4(self, at: int) -> int:
        digits = self.text[at:at + 4]
        for i, c in enumerate(digits):
            if c not in _HEX:
                raise self._error("\\u 之后期望 4 位十六进制数字", at + i)
        if len(digits) < 4:
            raise self._error("\\u 之后期望 4 位十六进制数字", at + len(digits))
        return int(digits, 16)

    def _peek_low_surrogate(self, at: int) -> int | None:
        if not self.text.startswith('\\u', at):
            return None
        digits = self.text[at + 2:at + 6]
        if len(digits) < 4 or any(c not in _HEX for c in digits):
            return None
        low = int(digits, 16)
        return low if 0xDC00 <= low <= 0xDFFF else None

    def parse_number(self) -> float:
        text = self.text
        start = self.pos
        pos = start
        if text[pos] == '-':
            pos += 1
        if pos >= self.end or not _is_digit(text[pos]):
            raise self._error(
                f"'-' 之后期望数字，遇到 {self._describe(pos)}", pos)
        if text[pos] == '0':
            pos += 1
            if pos < self.end and _is_digit(text[pos]):
                raise self._error("数字不允许有前导零", pos)
        else:
            pos = _DIGIT_RUN.match(text, pos).end()
        if text.startswith('.', pos):
            pos += 1
            if pos >= self.end or not _is_digit(text[pos]):
                raise self._error(
                    f"小数点之后期望数字，遇到 {self._describe(pos)}", pos)
            pos = _DIGIT_RUN.match(text, pos).end()
        if pos < self.end and text[pos] in 'eE':
            pos += 1
            if pos < self.end and text[pos] in '+-':
                pos += 1
            if pos >= self.end or not _is_digit(text[pos]):
                raise self._error(
                    f"指数部分期望数字，遇到 {self._describe(pos)}", pos)
            pos = _DIGIT_RUN.match(text, pos).end()
        value = float(text[start:pos])
        if math.isinf(value):
            line, column = offset_to_position(text, start)
            raise JsonRangeError("数字超出双精度浮点数范围", line, column)
        self.pos = pos
        return value

    def _parse_literal(self, word: str, value):
        text, pos = self.text, self.pos
        for i, expected in enumerate(word):
            if pos + i >= self.end or text[pos + i] != expected:
                raise self._error(f"期望 '{word}'", pos + i)
        self.pos = pos + len(word)
        return value


def parse(text: str) -> JsonValue:
    """解析 JSON 文本。

    Raises:
        EmptyInputError: 文本为空或只有 JSON 空白
        JsonSyntaxError: 第一个不符合语法的位置
        JsonRangeError: 数字超出双精度浮点数范围
    """
    # 只有空格、制表符、回车、换行才算空白
    if all(c in WHITESPACE for c in text):
        raise EmptyInputError()
    return _Parser(text).parse_document()
