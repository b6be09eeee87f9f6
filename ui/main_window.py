# -*- coding: utf-8 -*-
"""主窗口 — 顶栏 (品牌 + 主题切换) + JSON 编辑面板

偏好由窗口持有并通过 SettingsStore 持久化，面板只接收参数。
"""

from logging import getLogger

from PyQt5.QtWidgets import (
    QMainWindow, QWidget, QHBoxLayout, QVBoxLayout, QLabel, QPushButton,
    QApplication,
)
from PyQt5.QtCore import Qt

from ui.panels.json_panel import JsonPanel
from ui.settings_store import SettingsStore
from ui.theme import apply_theme, system_prefers_dark

logger = getLogger(__name__)


class MainWindow(QMainWindow):

    def __init__(self, settings: SettingsStore | None = None):
        super().__init__()
        self._settings = settings or SettingsStore()
        self._prefs = self._settings.load(
            system_dark=system_prefers_dark(QApplication.instance()))

        self._setup_window()
        self._build_ui()
        self._apply_theme()

    # ── 窗口属性 ─────────────────────────────────────────────
    def _setup_window(self):
        self.setWindowTitle("QtJsonLint — JSON 验证 / 格式化 / 压缩")
        self.resize(1100, 720)
        self.setMinimumSize(860, 540)

    # ── 整体布局 ─────────────────────────────────────────────
    def _build_ui(self):
        central = QWidget()
        root = QVBoxLayout(central)
        root.setContentsMargins(0, 0, 0, 0)
        root.setSpacing(0)

        root.addWidget(self._build_header())

        self.panel = JsonPanel(self._prefs)
        self.panel.preferences_changed.connect(self._on_preferences_changed)
        root.addWidget(self.panel, stretch=1)

        self.setCentralWidget(central)

    def _build_header(self):
        header = QWidget()
        header.setFixedHeight(52)
        lay = QHBoxLayout(header)
        lay.setContentsMargins(16, 6, 16, 6)
        lay.setSpacing(12)

        logo = QLabel("{ }")
        logo.setStyleSheet(
            "font-family:Consolas,monospace;font-size:20px;font-weight:800;")
        lay.addWidget(logo)
        title = QLabel("JSON Linter")
        title.setStyleSheet("font-size:16px;font-weight:bold;")
        lay.addWidget(title)
        subtitle = QLabel("验证 • 格式化 • 压缩")
        subtitle.setStyleSheet("color:#6b7a8d;font-size:12px;")
        lay.addWidget(subtitle)
        lay.addStretch()

        hint = QLabel("纯本地处理 • 数据不会离开本机 (加载 URL 除外)")
        hint.setStyleSheet("color:#6b7a8d;font-size:11px;")
        lay.addWidget(hint)

        self._theme_btn = QPushButton()
        self._theme_btn.setFlat(True)
        self._theme_btn.setCursor(Qt.PointingHandCursor)
        self._theme_btn.setStyleSheet(
            "QPushButton{font-size:18px;border:none;padding:4px 8px}")
        self._theme_btn.clicked.connect(self.toggle_theme)
        lay.addWidget(self._theme_btn)
        return header

    # ── 偏好 / 主题 ──────────────────────────────────────────
    def _on_preferences_changed(self, prefs):
        self._prefs = prefs
        self._settings.save(prefs)
        logger.debug("偏好已保存: %s", prefs)

    def toggle_theme(self):
        self._prefs = self._prefs.toggled_theme()
        self._settings.save(self._prefs)
        self.panel.set_preferences(self._prefs)
        self._apply_theme()

    def _apply_theme(self):
        dark = self._prefs.dark_mode
        app = QApplication.instance()
        if app is not None:
            apply_theme(app, dark)
        self._theme_btn.setText("☀️" if dark else "🌙")
        self._theme_btn.setToolTip("切换到浅色模式" if dark else "切换到深色模式")

    def open_file(self, path):
        self.panel.load_file(path)
