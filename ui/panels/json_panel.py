# -*- coding: utf-8 -*-
"""JSON 编辑面板 — 验证 / 格式化 / 压缩 / 键排序

编辑器文本交给 JsonDocument；每次编辑刷新指标，
自动验证经 DebouncedTask 防抖 (400 ms)，按钮操作立即执行。
"""

import os
from logging import getLogger

from PyQt5.QtWidgets import (
    QWidget, QVBoxLayout, QHBoxLayout, QLabel, QPushButton,
    QPlainTextEdit, QComboBox, QCheckBox, QFileDialog, QInputDialog,
    QApplication, QShortcut, QTextEdit, QFrame,
)
from PyQt5.QtGui import (
    QColor, QFont, QKeySequence, QPainter, QPalette, QTextCursor, QTextFormat,
)
from PyQt5.QtCore import Qt, QEvent, QRect, QSize, QThread, QTimer, pyqtSignal

from core.debounce import DebouncedTask, DEFAULT_DELAY_MS
from core.json_document import JsonDocument
from core.json_errors import JsonParseError, locate_error
from core.json_loader import (
    LoadError, INITIAL_TEXT, fetch_url, read_text_file, sample_text,
    write_text_file,
)
from core.preferences import Preferences, INDENT_CHOICES
from ui.theme import STATUS_COLORS, error_line_color

logger = getLogger(__name__)

_BTN_STYLE = (
    "QPushButton{border:1px solid #dfe2e8;border-radius:4px;"
    "padding:0 14px;background:#fff;color:#1e2433;font-size:12px}"
    "QPushButton:hover{background:#f0f2f5}")
_PRIMARY_STYLE = (
    "QPushButton{background:#0078d4;color:#fff;font-weight:bold;"
    "font-size:12px;border-radius:4px;padding:0 18px;border:none}"
    "QPushButton:hover{background:#106ebe}"
    "QPushButton:pressed{background:#005a9e}")


def _btn(text: str, primary: bool = False) -> QPushButton:
    b = QPushButton(text)
    b.setFixedHeight(30)
    b.setStyleSheet(_PRIMARY_STYLE if primary else _BTN_STYLE)
    return b


# ── URL 获取线程 ──────────────────────────────────────────────
class UrlFetchThread(QThread):
    loaded = pyqtSignal(object)    # LoadedText
    failed = pyqtSignal(str)

    def __init__(self, url, timeout=15):
        super().__init__()
        self._url = url
        self._timeout = timeout

    def run(self):
        try:
            self.loaded.emit(fetch_url(self._url, self._timeout))
        except LoadError as e:
            self.failed.emit(str(e))


# ── 编辑器: 行号 + 拖放文件 ──────────────────────────────────
class _LineNumberArea(QWidget):

    def __init__(self, editor):
        super().__init__(editor)
        self._editor = editor

    def sizeHint(self):
        return QSize(self._editor.line_number_width(), 0)

    def paintEvent(self, event):
        self._editor.paint_line_numbers(event)


class JsonEditor(QPlainTextEdit):
    file_dropped = pyqtSignal(str)

    def __init__(self, parent=None):
        super().__init__(parent)
        self._numbers = _LineNumberArea(self)
        self.blockCountChanged.connect(self._update_margin)
        self.updateRequest.connect(self._update_numbers)
        self._update_margin()

    # ── 行号 ────────────────────────────────────────────────
    def line_number_width(self) -> int:
        digits = len(str(max(1, self.blockCount())))
        return 12 + self.fontMetrics().horizontalAdvance('9') * digits

    def _update_margin(self, _count=0):
        self.setViewportMargins(self.line_number_width(), 0, 0, 0)

    def _update_numbers(self, rect, dy):
        if dy:
            self._numbers.scroll(0, dy)
        else:
            self._numbers.update(0, rect.y(), self._numbers.width(), rect.height())
        if rect.contains(self.viewport().rect()):
            self._update_margin()

    def resizeEvent(self, e):
        super().resizeEvent(e)
        cr = self.contentsRect()
        self._numbers.setGeometry(
            QRect(cr.left(), cr.top(), self.line_number_width(), cr.height()))

    def changeEvent(self, e):
        super().changeEvent(e)
        if e.type() == QEvent.FontChange:
            self._update_margin()

    def paint_line_numbers(self, event):
        painter = QPainter(self._numbers)
        painter.fillRect(event.rect(), self.palette().color(QPalette.AlternateBase))
        painter.setPen(QColor("#8a94a6"))
        width = self._numbers.width() - 6
        height = self.fontMetrics().height()

        block = self.firstVisibleBlock()
        number = block.blockNumber()
        top = round(self.blockBoundingGeometry(block)
                    .translated(self.contentOffset()).top())
        bottom = top + round(self.blockBoundingRect(block).height())
        while block.isValid() and top <= event.rect().bottom():
            if block.isVisible() and bottom >= event.rect().top():
                painter.drawText(0, top, width, height,
                                 Qt.AlignRight, str(number + 1))
            block = block.next()
            top = bottom
            bottom = top + round(self.blockBoundingRect(block).height())
            number += 1
        painter.end()

    # ── 拖放 ────────────────────────────────────────────────
    @staticmethod
    def _local_file(event):
        mime = event.mimeData()
        if mime.hasUrls():
            urls = mime.urls()
            if urls and urls[0].isLocalFile():
                return urls[0].toLocalFile()
        return None

    def dragEnterEvent(self, e):
        if self._local_file(e):
            e.acceptProposedAction()
        else:
            super().dragEnterEvent(e)

    def dragMoveEvent(self, e):
        if self._local_file(e):
            e.acceptProposedAction()
        else:
            super().dragMoveEvent(e)

    def dropEvent(self, e):
        path = self._local_file(e)
        if path:
            e.acceptProposedAction()
            self.file_dropped.emit(path)
        else:
            super().dropEvent(e)


# ═════════════════════════════════════════════════════════════
#  面板主体
# ═════════════════════════════════════════════════════════════
class JsonPanel(QWidget):
    preferences_changed = pyqtSignal(object)   # Preferences

    def __init__(self, prefs: Preferences | None = None, parent=None):
        super().__init__(parent)
        self._prefs = prefs or Preferences()
        self._doc = JsonDocument()
        self._fetch_thread = None
        self._error_line = None

        self._debounce = DebouncedTask(DEFAULT_DELAY_MS)
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.PreciseTimer)
        self._timer.timeout.connect(self._on_debounce_timeout)

        self._mono = QFont("Consolas", 10)
        self._mono.setStyleHint(QFont.Monospace)
        self._build_ui()
        self._set_editor_text(INITIAL_TEXT)
        self._set_status("就绪。粘贴 JSON、加载文件/URL，或点击「示例」。")

    # ── 布局 ────────────────────────────────────────────────
    def _build_ui(self):
        root = QVBoxLayout(self)
        root.setContentsMargins(12, 10, 12, 8)
        root.setSpacing(8)

        root.addLayout(self._build_toolbar())

        self.editor = JsonEditor()
        self.editor.setFont(self._mono)
        self.editor.setLineWrapMode(QPlainTextEdit.WidgetWidth)
        self.editor.setPlaceholderText(
            '粘贴 JSON 文本，例如:\n'
            '{"name": "test", "value": 123, "list": [1, 2, 3]}')
        self.editor.setMinimumHeight(320)
        self.editor.textChanged.connect(self._on_text_changed)
        self.editor.file_dropped.connect(self.load_file)
        root.addWidget(self.editor, stretch=1)

        # 指标 + 拖放提示
        info = QHBoxLayout()
        hint = QLabel("可将 .json 文件拖放到编辑器中")
        hint.setStyleSheet("color:#6b7a8d;font-size:11px")
        info.addWidget(hint)
        info.addStretch()
        self._kpi_size = QLabel()
        self._kpi_lines = QLabel()
        self._kpi_keys = QLabel()
        for lbl in (self._kpi_size, self._kpi_lines, self._kpi_keys):
            lbl.setStyleSheet(
                "border:1px solid #dfe2e8;border-radius:10px;"
                "padding:2px 10px;font-size:11px")
            info.addWidget(lbl)
        root.addLayout(info)

        sep = QFrame()
        sep.setFrameShape(QFrame.HLine)
        sep.setStyleSheet("color:#dfe2e8")
        root.addWidget(sep)

        self._status_label = QLabel()
        self._status_label.setWordWrap(True)
        self._status_label.setTextInteractionFlags(Qt.TextSelectableByMouse)
        root.addWidget(self._status_label)

        # 快捷键
        QShortcut(QKeySequence("Ctrl+Return"), self, self.validate)
        QShortcut(QKeySequence("Ctrl+B"), self, self.format_json)
        QShortcut(QKeySequence("Ctrl+M"), self, self.minify_json)
        QShortcut(QKeySequence("Alt+S"), self, self.sort_keys)

    def _build_toolbar(self):
        bar = QHBoxLayout()
        bar.setSpacing(6)

        for text, slot, primary, tip in (
            ("验证", self.validate, True, "Ctrl+Enter"),
            ("格式化", self.format_json, False, "Ctrl+B"),
            ("压缩", self.minify_json, False, "Ctrl+M"),
            ("键排序", self.sort_keys, False, "Alt+S"),
        ):
            b = _btn(text, primary)
            b.setToolTip(tip)
            b.clicked.connect(slot)
            bar.addWidget(b)

        bar.addSpacing(8)
        bar.addWidget(QLabel("缩进:"))
        self._indent_combo = QComboBox()
        for n in INDENT_CHOICES:
            self._indent_combo.addItem(str(n), n)
        if self._prefs.indent not in INDENT_CHOICES:
            self._indent_combo.addItem(str(self._prefs.indent), self._prefs.indent)
        self._indent_combo.setCurrentIndex(
            self._indent_combo.findData(self._prefs.indent))
        self._indent_combo.currentIndexChanged.connect(self._on_indent_changed)
        bar.addWidget(self._indent_combo)

        self._auto_check = QCheckBox("自动验证")
        self._auto_check.setChecked(self._prefs.auto_validate)
        self._auto_check.toggled.connect(self._on_auto_validate_toggled)
        bar.addWidget(self._auto_check)
        bar.addStretch()

        for text, slot in (
            ("打开文件", self._open_file_dialog),
            ("加载 URL", self._load_url_dialog),
            ("示例", self.load_sample),
            ("复制", self.copy_to_clipboard),
            ("清空", self.clear),
            ("保存", self._save_file_dialog),
        ):
            b = _btn(text)
            b.clicked.connect(slot)
            bar.addWidget(b)
        return bar

    # ── 偏好 ────────────────────────────────────────────────
    @property
    def preferences(self) -> Preferences:
        return self._prefs

    def set_preferences(self, prefs: Preferences):
        self._prefs = prefs
        self._refresh_error_highlight()

    def _on_indent_changed(self, _index):
        indent = self._indent_combo.currentData()
        if indent is None:
            return
        self._prefs = self._prefs.with_indent(int(indent))
        self.preferences_changed.emit(self._prefs)

    def _on_auto_validate_toggled(self, checked):
        self._prefs = self._prefs.with_auto_validate(checked)
        if not checked:
            self._debounce.cancel()
            self._timer.stop()
        self.preferences_changed.emit(self._prefs)

    # ── 编辑 → 指标 + 防抖验证 ───────────────────────────────
    def _on_text_changed(self):
        text = self._editor_text()
        if text != self._doc.text:
            self._doc.set_text(text)
        self._clear_error_highlight()
        self._refresh_kpis()
        if self._prefs.auto_validate:
            self._debounce.schedule(self._auto_validate)
            self._timer.start(self._debounce.remaining_ms())

    def _on_debounce_timeout(self):
        if not self._debounce.fire() and self._debounce.pending:
            # 计时器提前触发: 按剩余时间重新等待
            self._timer.start(max(1, self._debounce.remaining_ms()))

    def _auto_validate(self):
        if not self._prefs.auto_validate:
            return
        if self.validate():
            self._set_status("看起来不错 ✓", 'success')

    def _refresh_kpis(self):
        m = self._doc.metrics()
        self._kpi_size.setText(f"大小: {m.size} B")
        self._kpi_lines.setText(f"行数: {m.lines}")
        self._kpi_keys.setText(f"键数: {m.keys}")

    def _set_editor_text(self, text):
        self.editor.setPlainText(text)

    def _editor_text(self) -> str:
        # toPlainText() 会把 NBSP 换成空格；原始文本中段落分隔符 U+2029 即换行
        return self.editor.document().toRawText().replace('\u2029', '\n')

    # ── 操作 ────────────────────────────────────────────────
    def validate(self) -> bool:
        self._debounce.cancel()
        self._timer.stop()
        result = self._doc.validate()
        if result.ok:
            self._clear_error_highlight()
            self._set_status(f"JSON 有效 ✓  {result.message}", 'success')
            return True
        self._set_status(result.message, 'danger')
        position = locate_error(self._doc.error())
        if position is not None:
            self._goto_error(*position)
        return False

    def format_json(self):
        indent = self._prefs.indent
        try:
            text = self._doc.format(indent)
        except JsonParseError:
            self.validate()
            return
        self._set_editor_text(text)
        self._set_status(f"已使用 {indent} 个空格格式化。", 'success')
        logger.info("格式化, 缩进 %d", indent)

    def minify_json(self):
        try:
            text = self._doc.minify()
        except JsonParseError:
            self.validate()
            return
        self._set_editor_text(text)
        self._set_status("已压缩 JSON。", 'success')

    def sort_keys(self):
        try:
            text = self._doc.sort_keys()
        except JsonParseError:
            self.validate()
            return
        self._set_editor_text(text)
        self._set_status("已递归排序所有键。", 'success')

    def copy_to_clipboard(self):
        QApplication.clipboard().setText(self._editor_text())
        self._set_status("已复制到剪贴板。", 'success')

    def clear(self):
        self._doc.clear()
        self.editor.clear()
        self._set_status("已清空。")

    def load_sample(self):
        self._set_editor_text(sample_text(2))
        self._set_status("已加载示例 JSON。", 'success')
        self.editor.setFocus()

    def load_file(self, path):
        try:
            text = read_text_file(path)
        except LoadError as e:
            logger.warning("%s", e)
            self._set_status(str(e), 'danger')
            return
        self._set_editor_text(text)
        self._set_status(f"已加载文件: {os.path.basename(path)}", 'success')

    def save_file(self, path):
        try:
            write_text_file(path, self._editor_text())
        except LoadError as e:
            logger.warning("%s", e)
            self._set_status(str(e), 'danger')
            return
        self._set_status(f"已保存: {os.path.basename(path)}", 'success')

    def load_url(self, url):
        if self._fetch_thread is not None and self._fetch_thread.isRunning():
            self._set_status("正在获取上一个 URL，请稍候…")
            return
        self._set_status(f"正在获取 {url} …")
        self._fetch_thread = UrlFetchThread(url)
        self._fetch_thread.loaded.connect(self._on_url_loaded)
        self._fetch_thread.failed.connect(self._on_url_failed)
        self._fetch_thread.start()

    def _on_url_loaded(self, result):
        self._set_editor_text(result.text)
        if result.valid:
            self._set_status("已从 URL 加载并格式化 JSON。", 'success')
        else:
            self._set_status("已加载响应 (不是严格合法的 JSON)。", 'danger')

    def _on_url_failed(self, msg):
        logger.warning("URL 获取失败: %s", msg)
        self._set_status(f"获取失败: {msg}", 'danger')

    # ── 对话框 ──────────────────────────────────────────────
    def _open_file_dialog(self):
        path, _ = QFileDialog.getOpenFileName(
            self, "打开 JSON 文件", "",
            "JSON 文件 (*.json);;所有文件 (*)")
        if path:
            self.load_file(path)

    def _save_file_dialog(self):
        path, _ = QFileDialog.getSaveFileName(
            self, "保存文件", "data.json",
            "JSON 文件 (*.json);;所有文件 (*)")
        if path:
            self.save_file(path)

    def _load_url_dialog(self):
        url, ok = QInputDialog.getText(
            self, "加载 URL", "输入 JSON 地址 (https://...)")
        if ok and url.strip():
            self.load_url(url.strip())

    # ── 状态 / 错误定位 ─────────────────────────────────────
    def _set_status(self, msg, kind=None):
        self._status_label.setText(msg)
        self._status_label.setStyleSheet(
            f"color:{STATUS_COLORS.get(kind, STATUS_COLORS[None])};font-size:12px")

    def _goto_error(self, line, column):
        block = self.editor.document().findBlockByNumber(line)
        if not block.isValid():
            return
        # column 按 Python 字符计，Qt 位置按 UTF-16 计
        prefix = block.text()[:column]
        offset = min(len(prefix.encode('utf-16-le')) // 2, block.length() - 1)
        cursor = self.editor.textCursor()
        cursor.setPosition(block.position() + offset)
        self.editor.setTextCursor(cursor)
        self.editor.centerCursor()
        self.editor.setFocus()
        self._error_line = line
        self._refresh_error_highlight()

    def _refresh_error_highlight(self):
        line = self._error_line
        if line is None:
            self.editor.setExtraSelections([])
            return
        block = self.editor.document().findBlockByNumber(line)
        if not block.isValid():
            self.editor.setExtraSelections([])
            return
        sel = QTextEdit.ExtraSelection()
        sel.format.setBackground(error_line_color(self._prefs.dark_mode))
        sel.format.setProperty(QTextFormat.FullWidthSelection, True)
        sel.cursor = QTextCursor(block)
        self.editor.setExtraSelections([sel])

    def _clear_error_highlight(self):
        self._error_line = None
        self.editor.setExtraSelections([])
