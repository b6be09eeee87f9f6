# -*- coding: utf-8 -*-
"""JSON 序列化 — 美化 / 压缩 / 规范化 (键排序)

三种操作共用同一个递归遍历器 walk()，差别只在每个节点的访问器:
  _Canonicalizer  先排序键再重建
  _Renderer       按原顺序输出文本 (indent=None 即压缩)
"""

import math

_ESCAPE_MAP = {
    '"': '\\"', '\\': '\\\\',
    '\b': '\\b', '\f': '\\f', '\n': '\\n', '\r': '\\r', '\t': '\\t',
}

# U+2028 / U+2029 在编辑器中会被当作换行，输出时一律转义
_LINE_SEPARATORS = frozenset('\u2028\u2029')


def walk(value, visitor, depth: int = 0):
    """自底向上遍历 value，容器的子节点先交给 visitor 处理"""
    if isinstance(value, dict):
        items = []
        for key, child in value.items():
            items.append((key, walk(child, visitor, depth + 1)))
        return visitor.visit_object(items, depth)
    if isinstance(value, list):
        children = []
        for child in value:
            children.append(walk(child, visitor, depth + 1))
        return visitor.visit_array(children, depth)
    return visitor.visit_scalar(value, depth)


# ── 标量 ────────────────────────────────────────────────────

def quote_string(s: str) -> str:
    """JSON 字符串转义；非 ASCII 字符原样输出，孤立代理项与 U+2028 / U+2029 转为 \\uXXXX"""
    out = ['"']
    for c in s:
        esc = _ESCAPE_MAP.get(c)
        if esc is not None:
            out.append(esc)
        elif c < ' ' or c in _LINE_SEPARATORS or '\ud800' <= c <= '\udfff':
            out.append(f'\\u{ord(c):04x}')
        else:
            out.append(c)
    out.append('"')
    return ''.join(out)


def format_number(x: float) -> str:
    """最短往返表示，布局同 ECMAScript Number#toString。

    repr() 给出能精确还原该 double 的最短十进制数字，这里只重新排版:
    整数不带 .0，1e21 及以上、1e-6 以下使用指数形式，-0 输出 0。
    """
    if isinstance(x, bool) or not isinstance(x, (int, float)):
        raise TypeError(f"不是数字: {x!r}")
    x = float(x)
    if not math.isfinite(x):
        raise ValueError(f"JSON 不支持的数字: {x!r}")
    if x == 0:
        return '0'
    sign = '-' if x < 0 else ''
    mantissa, _, exp = repr(abs(x)).partition('e')
    int_part, _, frac = mantissa.partition('.')
    exp = int(exp) if exp else 0
    if int_part != '0':
        digits = int_part + frac
        n = len(int_part) + exp
    else:
        stripped = frac.lstrip('0')
        digits = stripped
        n = exp - (len(frac) - len(stripped))
    digits = digits.rstrip('0')
    k = len(digits)

    # 数值 = 0.d1d2...dk × 10^n
    if k <= n <= 21:
        return sign + digits + '0' * (n - k)
    if 0 < n <= 21:
        return sign + digits[:n] + '.' + digits[n:]
    if -6 < n <= 0:
        return sign + '0.' + '0' * (-n) + digits
    e = n - 1
    e_str = f"e+{e}" if e >= 0 else f"e-{-e}"
    if k == 1:
        return sign + digits + e_str
    return sign + digits[0] + '.' + digits[1:] + e_str


def render_scalar(value) -> str:
    if value is None:
        return 'null'
    if value is True:
        return 'true'
    if value is False:
        return 'false'
    if isinstance(value, str):
        return quote_string(value)
    return format_number(value)


# ── 访问器 ──────────────────────────────────────────────────

class _Canonicalizer:
    """对象键按码点升序排列，数组顺序不变"""

    def visit_object(self, items, depth):
        return dict(sorted(items, key=lambda kv: kv[0]))

    def visit_array(self, children, depth):
        return children

    def visit_scalar(self, value, depth):
        return value


class _Renderer:
    """输出 JSON 文本；indent 为 None 时不输出任何空白"""

    def __init__(self, indent: int | None = None):
        self.indent = indent

    def _wrap(self, open_, close, parts, depth):
        if not parts:
            return open_ + close
        if self.indent is None:
            return open_ + ','.join(parts) + close
        inner = '\n' + ' ' * (self.indent * (depth + 1))
        outer = '\n' + ' ' * (self.indent * depth)
        return open_ + inner + (',' + inner).join(parts) + outer + close

    def visit_object(self, items, depth):
        sep = ':' if self.indent is None else ': '
        parts = [quote_string(key) + sep + text for key, text in items]
        return self._wrap('{', '}', parts, depth)

    def visit_array(self, children, depth):
        return self._wrap('[', ']', children, depth)

    def visit_scalar(self, value, depth):
        return render_scalar(value)


# ── 公共接口 ────────────────────────────────────────────────

def pretty_print(value, indent_width: int = 2) -> str:
    """美化输出，每层缩进 indent_width 个空格，保持原有顺序"""
    if isinstance(indent_width, bool) or not isinstance(indent_width, int) \
            or indent_width < 1:
        raise ValueError(f"缩进必须是正整数: {indent_width!r}")
    return walk(value, _Renderer(indent_width))


def minify(value) -> str:
    """压缩输出，标记之间没有空白"""
    return walk(value, _Renderer(None))


def canonicalize(value):
    """返回新值: 每一层对象的键按码点升序排列"""
    return walk(value, _Canonicalizer())
