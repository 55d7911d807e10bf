#!/usr/bin/env python3
"""
safebuf_check.py — classification predicates and numeric parsing for SafeBuf.

All predicates are ASCII/byte oriented and return False for an absent buffer.
Parsers return None instead of raising on malformed text.

  is_integer   optional '-' then one or more digits
  is_float     optional '-', digits, at most one '.' (a trailing dot is fine)
  is_signed    a number (integer or float form) with a leading '-'
  is_alnum     all bytes after `skip` are [A-Za-z0-9] (and '_' if allowed)
  is_blank     empty or ASCII whitespace only

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import re
from typing import Optional

from safebuf import SafeBuf

# bytes patterns: \d and \s are ASCII-only here
_INTEGER_RE = re.compile(rb"-?\d+")
_FLOAT_RE = re.compile(rb"-?(?:\d+\.?\d*|\.\d+)")
_ALNUM = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789")
_WHITESPACE = frozenset(b" \t\n\r\x0b\x0c")

def _content(buf: Optional[SafeBuf]) -> Optional[bytes]:
    if buf is None:
        return None
    if not isinstance(buf, SafeBuf):
        raise TypeError(f"expected SafeBuf, got {type(buf).__name__}")
    return buf.value()

# =========================
# Predicates
# =========================

def is_integer(buf: Optional[SafeBuf]) -> bool:
    src = _content(buf)
    return src is not None and _INTEGER_RE.fullmatch(src) is not None

def is_float(buf: Optional[SafeBuf]) -> bool:
    src = _content(buf)
    return src is not None and _FLOAT_RE.fullmatch(src) is not None

def is_signed(buf: Optional[SafeBuf]) -> bool:
    src = _content(buf)
    return src is not None and src.startswith(b"-") and is_float(buf)

def is_alnum(buf: Optional[SafeBuf], skip: int = 0, allow_underscore: bool = False) -> bool:
    src = _content(buf)
    if src is None:
        return False
    if skip < 0 or skip > len(src):
        return False
    for b in src[skip:]:
        if b in _ALNUM:
            continue
        if allow_underscore and b == 0x5F:
            continue
        return False
    return True

def is_blank(buf: Optional[SafeBuf]) -> bool:
    src = _content(buf)
    return src is not None and all(b in _WHITESPACE for b in src)

# =========================
# Parsing
# =========================

def to_long(buf: Optional[SafeBuf], base: int = 10) -> Optional[int]:
    """Integer value of the content in the given base, or None if malformed."""
    src = _content(buf)
    if src is None:
        return None
    if base != 0 and not 2 <= base <= 36:
        raise ValueError("base must be 0 or 2..36")
    # int() would also accept digit-group underscores
    if b"_" in src:
        return None
    try:
        return int(src, base)
    except ValueError:
        return None

def to_double(buf: Optional[SafeBuf]) -> Optional[float]:
    """Float value of the content (sign, digits, exponent), or None if malformed."""
    src = _content(buf)
    if src is None or b"_" in src:
        return None
    try:
        return float(src)
    except ValueError:
        return None

__all__ = [
    "is_alnum",
    "is_blank",
    "is_float",
    "is_integer",
    "is_signed",
    "to_double",
    "to_long",
]
