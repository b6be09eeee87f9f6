#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""QtJsonLint — JSON 验证 / 格式化工具  入口"""

import argparse
import sys

from PyQt5.QtWidgets import QApplication
from PyQt5.QtGui import QFont
from PyQt5.QtCore import Qt

from core.log_setup import LEVELS, set_up_logging


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="qtjsonlint", description="JSON 验证 / 格式化 / 压缩工具")
    parser.add_argument("file", nargs="?", help="启动时打开的 JSON 文件")
    parser.add_argument("--log-level", default="WARNING",
                        choices=LEVELS, help="日志级别 (默认 WARNING)")
    parser.add_argument("--log-file", default=None, help="同时写入日志文件")
    return parser.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    set_up_logging(log_file=args.log_file, log_level=args.log_level)

    # High-DPI 支持
    QApplication.setAttribute(Qt.AA_EnableHighDpiScaling, True)
    QApplication.setAttribute(Qt.AA_UseHighDpiPixmaps, True)

    app = QApplication(sys.argv[:1])
    app.setStyle('Fusion')

    font = QFont("Microsoft YaHei UI", 11)
    font.setStyleHint(QFont.SansSerif)
    app.setFont(font)

    from ui.main_window import MainWindow
    window = MainWindow()
    if args.file:
        window.open_file(args.file)
    window.show()
    sys.exit(app.exec_())


if __name__ == '__main__':
    main()
