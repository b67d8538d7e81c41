"""String normalization applied before comparison or pattern matching.

These helpers are not output encoding. Rendering code still escapes whatever
it puts into HTML.
"""

from __future__ import annotations

import re
from typing import Optional

_SCRIPT_BLOCK = re.compile(r"<script\b[^<]*(?:(?!</script>)<[^<]*)*</script>", re.IGNORECASE)
_TAG = re.compile(r"<[^>]*>")
_JS_SCHEME = re.compile(r"javascript:", re.IGNORECASE)
_INLINE_HANDLER = re.compile(r"on\w+\s*=", re.IGNORECASE)
_WHITESPACE = re.compile(r"\s+")
_SEARCH_NOISE = re.compile(r"['\";\\%_]")
_PHONE_NOISE = re.compile(r"[^\d+]")

SEARCH_MAX_LENGTH = 100


def trim_string(value) -> str:
    if value is None:
        return ""
    return str(value).strip()


def normalize_whitespace(value) -> str:
    return _WHITESPACE.sub(" ", trim_string(value))


def _strip_once(text: str) -> str:
    text = _SCRIPT_BLOCK.sub("", text)
    text = _TAG.sub("", text)
    text = _JS_SCHEME.sub("", text)
    return _INLINE_HANDLER.sub("", text)


def strip_markup(value) -> str:
    """Remove script blocks, tags, ``javascript:`` and inline ``on*=`` handlers.

    Runs until nothing changes, so fragments that only form a pattern after an
    inner match is removed (``<scr<b>ipt>``) are removed as well.
    """
    text = "" if value is None else str(value)
    while True:
        stripped = _strip_once(text)
        if stripped == text:
            return text
        text = stripped


def sanitize_input(value, max_length: Optional[int] = None) -> str:
    result = normalize_whitespace(strip_markup(value))
    if max_length and len(result) > max_length:
        # Truncation can leave a trailing space or a half pattern behind.
        result = normalize_whitespace(strip_markup(result[:max_length]))
    return result


def sanitize_search(value) -> str:
    text = trim_string(value)
    while True:
        cleaned = normalize_whitespace(_SEARCH_NOISE.sub("", sanitize_input(text))[:SEARCH_MAX_LENGTH])
        if cleaned == text:
            return text
        text = cleaned


def sanitize_email(value) -> str:
    return trim_string(value).lower()


def sanitize_phone(value) -> str:
    return _PHONE_NOISE.sub("", trim_string(value))


def sanitize_name(value) -> str:
    return sanitize_input(value)


def sanitize_subject_code(value) -> str:
    return trim_string(value).upper()


def sanitize_student_number(value) -> str:
    return trim_string(value).lower()


def sanitize_nfc_id(value) -> str:
    return trim_string(value).upper()


def sanitize_text(value, max_length: Optional[int] = None) -> str:
    """Free text (notes, remarks): markup removed, whitespace collapsed."""
    return sanitize_input(value, max_length)
