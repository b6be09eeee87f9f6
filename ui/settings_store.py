# -*- coding: utf-8 -*-
"""偏好持久化 — QSettings 读写 Preferences"""

from logging import getLogger

from PyQt5.QtCore import QSettings

from core.preferences import (
    Preferences, KEY_INDENT, KEY_AUTO_VALIDATE, KEY_THEME,
)

ORG_NAME = "QtJsonLint"
APP_NAME = "QtJsonLint"

logger = getLogger(__name__)


class SettingsStore:

    def __init__(self, settings: QSettings | None = None):
        self._settings = settings or QSettings(ORG_NAME, APP_NAME)

    def load(self, system_dark: bool = False) -> Preferences:
        data = {}
        for key in (KEY_INDENT, KEY_AUTO_VALIDATE, KEY_THEME):
            value = self._settings.value(key)
            if value is not None:
                data[key] = value
        prefs = Preferences.from_mapping(data, system_dark)
        logger.debug("读取偏好: %s", prefs)
        return prefs

    def save(self, prefs: Preferences):
        for key, value in prefs.to_mapping().items():
            self._settings.setValue(key, value)
        self._settings.sync()
