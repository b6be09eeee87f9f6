# -*- coding: utf-8 -*-
"""用户偏好 — 缩进 / 自动验证 / 主题

引擎本身不读取任何持久化配置；界面层负责存取，再把这些值作为参数传入。
"""

from dataclasses import dataclass, replace

INDENT_CHOICES = (2, 4, 8)

KEY_INDENT = 'jsonlint.indent'
KEY_AUTO_VALIDATE = 'jsonlint.autoValidate'
KEY_THEME = 'jsonlint.theme'


def _to_bool(raw, default: bool) -> bool:
    if isinstance(raw, bool):
        return raw
    if isinstance(raw, str):
        low = raw.strip().lower()
        if low in ('true', '1', 'yes', 'on'):
            return True
        if low in ('false', '0', 'no', 'off'):
            return False
    return default


def _to_indent(raw, default: int) -> int:
    try:
        value = int(raw)
    except (TypeError, ValueError):
        return default
    return value if value > 0 else default


@dataclass(frozen=True)
class Preferences:
    indent: int = 2
    auto_validate: bool = True
    dark_mode: bool = False

    def __post_init__(self):
        if isinstance(self.indent, bool) or not isinstance(self.indent, int) \
                or self.indent < 1:
            raise ValueError(f"缩进必须是正整数: {self.indent!r}")

    @classmethod
    def from_mapping(cls, data, system_dark: bool = False) -> 'Preferences':
        """从存储读取；缺失或损坏的值回退为默认值。

        尚未保存过主题时跟随系统配色 (system_dark)。
        """
        default = cls()
        theme = data.get(KEY_THEME)
        if theme in ('dark', 'light'):
            dark = theme == 'dark'
        else:
            dark = bool(system_dark)
        return cls(
            indent=_to_indent(data.get(KEY_INDENT), default.indent),
            auto_validate=_to_bool(data.get(KEY_AUTO_VALIDATE),
                                   default.auto_validate),
            dark_mode=dark,
        )

    def to_mapping(self) -> dict:
        return {
            KEY_INDENT: self.indent,
            KEY_AUTO_VALIDATE: 'true' if self.auto_validate else 'false',
            KEY_THEME: 'dark' if self.dark_mode else 'light',
        }

    def with_indent(self, indent: int) -> 'Preferences':
        return replace(self, indent=indent)

    def with_auto_validate(self, enabled: bool) -> 'Preferences':
        return replace(self, auto_validate=enabled)

    def toggled_theme(self) -> 'Preferences':
        return replace(self, dark_mode=not self.dark_mode)
