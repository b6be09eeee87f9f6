# -*- coding: utf-8 -*-
"""JSON 错误模型 — 解析错误携带结构化的行列位置 (从 0 开始)"""


class JsonParseError(ValueError):
    """解析失败的基类。

    line / column 为 None 表示没有具体位置可供定位。
    """

    def __init__(self, message: str, line: int | None = None,
                 column: int | None = None):
        super().__init__(message)
        self.message = message
        self.line = line
        self.column = column

    @property
    def position(self) -> tuple[int, int] | None:
        if self.line is None:
            return None
        return self.line, self.column or 0

    def __str__(self):
        if self.line is None:
            return self.message
        # 面向用户显示时转换为从 1 开始
        return f"第 {self.line + 1} 行, 第 {(self.column or 0) + 1} 列: {self.message}"


class JsonSyntaxError(JsonParseError):
    """不符合严格 JSON 语法，总是带有位置"""


class JsonRangeError(JsonParseError):
    """语法合法，但数字超出双精度浮点数能表示的范围 (RFC 8259 §6 允许的实现限制)"""


class EmptyInputError(JsonParseError):
    """空白文档 — 没有可解析的内容，不带位置"""

    def __init__(self, message: str = "请输入 JSON。"):
        super().__init__(message)


def locate_error(err: JsonParseError) -> tuple[int, int] | None:
    """返回用于光标定位的 (line, column)，无位置时返回 None"""
    return err.position
