# -*- coding: utf-8 -*-
"""文本来源 — 本地文件读写与 URL 获取

这是界面层的协作者: 引擎只接收内存中的文本。
网络/文件错误统一转换为 LoadError，由界面显示在状态栏。
"""

import os
import urllib.error
import urllib.request
from dataclasses import dataclass
from logging import getLogger

from core.json_errors import JsonParseError
from core.json_parser import parse
from core.json_serialize import pretty_print

logger = getLogger(__name__)

ACCEPT_HEADER = 'application/json,*/*;q=0.9'
USER_AGENT = 'QtJsonLint/1.0'
LOADED_INDENT = 2

SAMPLE = {
    "name": "JSON Linter",
    "url": "https://example.com/",
    "features": ["validate", "format", "minify", "lint"],
    "nested": {"a": 1, "b": True, "c": None},
}
INITIAL_TEXT = pretty_print({"message": "Hello, World!"}, 2)


class LoadError(Exception):
    """文件不可读、HTTP 错误或网络故障"""


@dataclass(frozen=True)
class LoadedText:
    text: str
    valid: bool          # 文本是否为合法 JSON
    formatted: bool      # 是否已被重新格式化


def sample_text(indent: int = 2) -> str:
    return pretty_print(SAMPLE, indent)


# ── 文件 ────────────────────────────────────────────────────

def read_text_file(path: str) -> str:
    """读取文本文件：先按 UTF-8 (可带 BOM)，失败则按 GBK 容错读取"""
    try:
        with open(path, 'r', encoding='utf-8-sig') as f:
            return f.read()
    except UnicodeDecodeError:
        logger.warning("%s 不是 UTF-8 编码，改用 GBK 读取", path)
        with open(path, 'r', encoding='gbk', errors='replace') as f:
            return f.read()
    except OSError as e:
        raise LoadError(f"读取文件失败: {os.path.basename(path)} ({e})") from e


def write_text_file(path: str, text: str):
    try:
        with open(path, 'w', encoding='utf-8', newline='') as f:
            f.write(text)
    except OSError as e:
        raise LoadError(f"写入文件失败: {os.path.basename(path)} ({e})") from e


# ── URL ─────────────────────────────────────────────────────

def is_json_content_type(content_type: str) -> bool:
    return 'application/json' in (content_type or '').lower()


def decode_response(body: str, content_type: str = '') -> LoadedText:
    """处理 URL 响应文本。

    声明为 JSON 的响应必须能解析，否则抛出 JsonParseError；
    其他类型先尝试解析，失败则原样返回文本并标记为无效。
    """
    if is_json_content_type(content_type):
        return LoadedText(pretty_print(parse(body), LOADED_INDENT), True, True)
    try:
        value = parse(body)
    except JsonParseError:
        return LoadedText(body, False, False)
    return LoadedText(pretty_print(value, LOADED_INDENT), True, True)


def fetch_url(url: str, timeout: float = 15) -> LoadedText:
    url = url.strip()
    if not url.lower().startswith(('http://', 'https://')):
        raise LoadError(f"不支持的 URL: {url}")
    req = urllib.request.Request(
        url, headers={
            'Accept': ACCEPT_HEADER,
            'User-Agent': USER_AGENT,
        })
    logger.info("获取 %s", url)
    try:
        with urllib.request.urlopen(req, timeout=timeout) as resp:
            content_type = resp.headers.get('Content-Type', '')
            charset = resp.headers.get_content_charset() or 'utf-8'
            raw = resp.read()
    except urllib.error.HTTPError as e:
        raise LoadError(f"HTTP {e.code} {e.reason}") from e
    except (urllib.error.URLError, OSError) as e:
        reason = getattr(e, 'reason', e)
        raise LoadError(str(reason)) from e

    try:
        body = raw.decode(charset, errors='replace')
    except LookupError:
        body = raw.decode('utf-8', errors='replace')

    try:
        return decode_response(body, content_type)
    except JsonParseError as e:
        logger.warning("%s 声明为 JSON 但无法解析: %s", url, e)
        raise LoadError(f"响应声明为 JSON 但无法解析 ({e})") from e
