# -*- coding: utf-8 -*-
"""防抖任务 — 显式、可取消的延迟执行

每次 schedule() 都会取消尚未执行的回调并重新计时，
因此只有最后一次编辑的结果会被看到 (last-edit-wins)。

本类不依赖任何计时器实现: 调用方 (如 Qt 的单次 QTimer) 到点后调用
fire()；时钟可注入，便于脱离 UI 单独测试。
"""

import time

DEFAULT_DELAY_MS = 400


class DebouncedTask:

    def __init__(self, delay_ms: int = DEFAULT_DELAY_MS, clock=time.monotonic):
        if delay_ms < 0:
            raise ValueError(f"延迟不能为负数: {delay_ms}")
        self.delay_ms = delay_ms
        self._clock = clock
        self._callback = None
        self._args = ()
        self._due = None
        self._token = 0

    @property
    def pending(self) -> bool:
        return self._callback is not None

    @property
    def token(self) -> int:
        """最近一次 schedule 的编号"""
        return self._token

    def schedule(self, callback, *args) -> int:
        """取消挂起的回调，重新开始计时；返回本次的编号"""
        self._token += 1
        self._callback = callback
        self._args = args
        self._due = self._clock() + self.delay_ms / 1000.0
        return self._token

    def cancel(self):
        self._callback = None
        self._args = ()
        self._due = None

    def remaining_ms(self) -> int:
        if self._due is None:
            return 0
        return max(0, int(round((self._due - self._clock()) * 1000)))

    def fire(self, token: int | None = None) -> bool:
        """到期则执行回调并返回 True。

        token 不是最新编号 (已被后来的编辑取代) 或尚未到期时什么也不做。
        """
        if self._callback is None:
            return False
        if token is not None and token != self._token:
            return False
        if self._clock() < self._due:
            return False
        callback, args = self._callback, self._args
        self.cancel()
        callback(*args)
        return True

    def flush(self) -> bool:
        """不等到期，立即执行挂起的回调"""
        if self._callback is None:
            return False
        callback, args = self._callback, self._args
        self.cancel()
        callback(*args)
        return True
