# -*- coding: utf-8 -*-
"""浅色 / 深色主题 — Fusion 调色板"""

from PyQt5.QtGui import QPalette, QColor

_LIGHT = {
    QPalette.Window:          "#f0f2f5",
    QPalette.WindowText:      "#1e2433",
    QPalette.Base:            "#ffffff",
    QPalette.AlternateBase:   "#f5f6f8",
    QPalette.Text:            "#1e2433",
    QPalette.Button:          "#e8eaed",
    QPalette.ButtonText:      "#1e2433",
    QPalette.Highlight:       "#0078d4",
    QPalette.HighlightedText: "#ffffff",
    QPalette.ToolTipBase:     "#1e2433",
    QPalette.ToolTipText:     "#ffffff",
}

_DARK = {
    QPalette.Window:          "#1a1f2e",
    QPalette.WindowText:      "#e6e9ef",
    QPalette.Base:            "#212121",
    QPalette.AlternateBase:   "#2a2f3d",
    QPalette.Text:            "#eeffff",
    QPalette.Button:          "#2a2f3d",
    QPalette.ButtonText:      "#e6e9ef",
    QPalette.Highlight:       "#0284c7",
    QPalette.HighlightedText: "#ffffff",
    QPalette.ToolTipBase:     "#e6e9ef",
    QPalette.ToolTipText:     "#1a1f2e",
}

# 错误行高亮背景
ERROR_LINE_LIGHT = "#fde7e9"
ERROR_LINE_DARK = "#5a1d1d"

STATUS_COLORS = {
    'success': "#107c10",
    'danger':  "#d13438",
    None:      "#6b7a8d",
}


def build_palette(dark: bool) -> QPalette:
    palette = QPalette()
    for role, color in (_DARK if dark else _LIGHT).items():
        palette.setColor(role, QColor(color))
    return palette


def apply_theme(app, dark: bool):
    app.setPalette(build_palette(dark))


def error_line_color(dark: bool) -> QColor:
    return QColor(ERROR_LINE_DARK if dark else ERROR_LINE_LIGHT)


def system_prefers_dark(app) -> bool:
    """尚未应用自定义调色板时，按系统窗口底色判断是否为深色配色"""
    if app is None:
        return False
    return app.palette().color(QPalette.Window).lightness() < 128
