#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
safebuf_ops.py — value-producing string operations over SafeBuf.

Every function here returns a brand-new SafeBuf (or a position) and never
touches its inputs. Failure is signalled with None: absent inputs,
out-of-range positions, pattern not found.

Positions are 0-based throughout:
  • inclusive bounds (left, mid, delete) must address an existing byte
  • start positions (right, insert, find, replace) may equal the length

Pattern / insert arguments may be a SafeBuf or a plain bytes-like / str value.
Case mapping and trimming are ASCII only.

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import logging
from typing import List, Optional, Tuple, Union

import safebuf
from safebuf import SafeBuf

logger = logging.getLogger(__name__)

Pattern = Union[SafeBuf, bytes, bytearray, memoryview, str]

# =========================
# Helpers
# =========================

def _content(buf: Optional[SafeBuf]) -> Optional[bytes]:
    if buf is None:
        return None
    if not isinstance(buf, SafeBuf):
        raise TypeError(f"expected SafeBuf, got {type(buf).__name__}")
    return buf.value()

def _pattern(value: Optional[Pattern]) -> Optional[bytes]:
    if value is None:
        return None
    return safebuf.as_bytes(value, what="pattern")

def _check_pos(*positions: int) -> bool:
    """False if any position is negative."""
    for p in positions:
        if not isinstance(p, int) or isinstance(p, bool):
            raise TypeError("positions must be int")
        if p < 0:
            return False
    return True

def _emit(content: bytes) -> Optional[SafeBuf]:
    # result sized exactly to its content
    return safebuf.from_bytes(content)

# =========================
# Substrings
# =========================

def left(buf: Optional[SafeBuf], pos: int) -> Optional[SafeBuf]:
    """Bytes [0, pos] inclusive."""
    src = _content(buf)
    if src is None:
        return None
    if not _check_pos(pos) or pos >= len(src):
        return None
    return _emit(src[: pos + 1])

def right(buf: Optional[SafeBuf], pos: int) -> Optional[SafeBuf]:
    """Bytes from pos to the end."""
    src = _content(buf)
    if src is None:
        return None
    if not _check_pos(pos) or pos > len(src):
        return None
    return _emit(src[pos:])

def mid(buf: Optional[SafeBuf], left_pos: int, right_pos: int) -> Optional[SafeBuf]:
    """Bytes [left_pos, right_pos] inclusive."""
    src = _content(buf)
    if src is None:
        return None
    if not _check_pos(left_pos, right_pos) or left_pos > right_pos or right_pos >= len(src):
        return None
    return _emit(src[left_pos: right_pos + 1])

# =========================
# Composition
# =========================

def concat(a: Optional[SafeBuf], b: Optional[Pattern]) -> Optional[SafeBuf]:
    head = _content(a)
    tail = _pattern(b)
    if head is None or tail is None:
        return None
    return _emit(head + tail)

def insert(buf: Optional[SafeBuf], piece: Optional[Pattern], pos: int) -> Optional[SafeBuf]:
    """buf[0, pos) + piece + buf[pos, end)."""
    src = _content(buf)
    ins = _pattern(piece)
    if src is None or ins is None:
        return None
    if not _check_pos(pos) or pos > len(src):
        return None
    return _emit(src[:pos] + ins + src[pos:])

def delete(buf: Optional[SafeBuf], pos1: int, pos2: int) -> Optional[SafeBuf]:
    """Remove the inclusive range [pos1, pos2]."""
    src = _content(buf)
    if src is None:
        return None
    if not _check_pos(pos1, pos2) or pos1 > pos2 or pos2 >= len(src):
        return None
    return _emit(src[:pos1] + src[pos2 + 1:])

def delete_substring(buf: Optional[SafeBuf], pattern: Optional[Pattern]) -> Optional[SafeBuf]:
    """Remove the first occurrence of pattern; None if it is not there."""
    pat = _pattern(pattern)
    if buf is None or not pat:
        return None
    pos = find(buf, pat, 0)
    if pos is None:
        return None
    return delete(buf, pos, pos + len(pat) - 1)

def delete_prefix(buf: Optional[SafeBuf], prefix: Optional[Pattern]) -> Optional[SafeBuf]:
    src = _content(buf)
    pre = _pattern(prefix)
    if src is None or pre is None or not src.startswith(pre):
        return None
    return _emit(src[len(pre):])

def delete_suffix(buf: Optional[SafeBuf], suffix: Optional[Pattern]) -> Optional[SafeBuf]:
    src = _content(buf)
    suf = _pattern(suffix)
    if src is None or suf is None or not src.endswith(suf):
        return None
    return _emit(src[: len(src) - len(suf)])

# =========================
# Search / replace
# =========================

def find(buf: Optional[SafeBuf], pattern: Optional[Pattern], from_pos: int = 0) -> Optional[int]:
    """Position of the first literal occurrence at or after from_pos, else None."""
    src = _content(buf)
    pat = _pattern(pattern)
    if src is None or pat is None:
        return None
    if not _check_pos(from_pos) or len(pat) > len(src) or from_pos > len(src):
        return None
    p = src.find(pat, from_pos)
    return None if p < 0 else p

def find_char(buf: Optional[SafeBuf], char, from_pos: int = 0) -> Optional[int]:
    """Same as find() for a single byte (int 0..255, or 1-length bytes/str)."""
    if isinstance(char, int) and not isinstance(char, bool):
        if not 0 <= char <= 0xFF:
            raise ValueError("char must be 0..255")
        needle = bytes([char])
    else:
        needle = _pattern(char)
        if needle is not None and len(needle) != 1:
            raise ValueError("char must be a single byte")
    return find(buf, needle, from_pos)

def replace(buf: Optional[SafeBuf], search: Optional[Pattern], replacement: Optional[Pattern],
            from_pos: int = 0) -> Optional[SafeBuf]:
    """Replace the first occurrence of search at/after from_pos."""
    src = _content(buf)
    pat = _pattern(search)
    rep = _pattern(replacement)
    if src is None or not pat or rep is None:
        return None
    if not _check_pos(from_pos) or from_pos > len(src):
        return None
    p = find(buf, pat, from_pos)
    if p is None:
        return None
    return _emit(src[:p] + rep + src[p + len(pat):])

# =========================
# Case / whitespace
# =========================

def to_upper(buf: Optional[SafeBuf]) -> Optional[SafeBuf]:
    src = _content(buf)
    return None if src is None else _emit(src.upper())

def to_lower(buf: Optional[SafeBuf]) -> Optional[SafeBuf]:
    src = _content(buf)
    return None if src is None else _emit(src.lower())

# bytes.strip() with no argument removes ASCII whitespace only (C isspace set)

def ltrim(buf: Optional[SafeBuf]) -> Optional[SafeBuf]:
    src = _content(buf)
    return None if src is None else _emit(src.lstrip())

def rtrim(buf: Optional[SafeBuf]) -> Optional[SafeBuf]:
    src = _content(buf)
    return None if src is None else _emit(src.rstrip())

def trim(buf: Optional[SafeBuf]) -> Optional[SafeBuf]:
    src = _content(buf)
    return None if src is None else _emit(src.strip())

# =========================
# Splitting
# =========================

def split(buf: Optional[SafeBuf], delimiter: Optional[Pattern]) -> Optional[Tuple[SafeBuf, SafeBuf]]:
    """(before, after) around the first delimiter; None if it is absent."""
    src = _content(buf)
    delim = _pattern(delimiter)
    if src is None or not delim:
        return None
    p = find(buf, delim, 0)
    if p is None:
        return None
    head = _emit(src[:p])
    tail = _emit(src[p + len(delim):])
    if head is None or tail is None:
        return None
    return head, tail

def split_all(buf: Optional[SafeBuf], delimiter: Optional[Pattern]) -> Optional[List[SafeBuf]]:
    """
    Split on every non-overlapping delimiter. The count is len() of the result.
    A buffer without the delimiter yields a single fragment.
    """
    src = _content(buf)
    delim = _pattern(delimiter)
    if src is None or not delim:
        return None
    parts: List[SafeBuf] = []
    for chunk in src.split(delim):
        piece = _emit(chunk)
        if piece is None:
            logger.warning("safebuf_ops.split_all: fragment allocation failed")
            return None
        parts.append(piece)
    return parts

__all__ = [
    "concat",
    "delete",
    "delete_prefix",
    "delete_substring",
    "delete_suffix",
    "find",
    "find_char",
    "insert",
    "left",
    "ltrim",
    "mid",
    "replace",
    "right",
    "rtrim",
    "split",
    "split_all",
    "to_lower",
    "to_upper",
    "trim",
]
