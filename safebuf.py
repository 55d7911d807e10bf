#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
safebuf.py — bounds-checked byte string buffer with an explicit capacity.

Every SafeBuf carries a fixed capacity chosen at construction. Nothing grows
it behind your back: writes that would not fit are rejected whole, and the
only way to change the capacity is an explicit resize().

Layout contract
---------------
  capacity   set by new()/from_bytes(), changed only by resize()
  length     0 <= length <= capacity
  storage    capacity + 1 bytes; storage[length] == 0 (sentinel) at all times

Ownership
---------
  • A SafeBuf is owned by whoever holds it. Operations never alias storage.
  • move(dest, src) consumes src: its storage is dropped and any later use
    (including release) raises BufferReleased.
  • release() is the explicit destroy.

Failure signalling
------------------
  • Constructors return None on failure (allocation, length above MAX_LEN).
  • append()/write() return the number of bytes written, 0 on rejection.
  • resize()/move()/copy() return True/False; False leaves everything intact.
  • Module-level accessors accept None and return 0 / None / False.

Formatted writes
----------------
append()/write() take a %-style format and positional arguments:

    buf = new(10)
    buf.append("foo")                    # -> 3
    buf.append("%s%s%d", "foo", "bar", 1)  # -> 0 (would overflow, untouched)

The text is rendered first (dry run) and committed only if it fits.

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import logging
from typing import Optional

logger = logging.getLogger(__name__)

# =========================
# Constants
# =========================

# unsigned 32-bit range minus one
MAX_LEN = 0xFFFFFFFF - 1

SENTINEL = 0

# =========================
# Exceptions
# =========================

class SafeBufError(Exception):
    """Base class for all safebuf errors."""

class BufferReleased(SafeBufError):
    """Raised when a buffer is used after release() or after being moved from."""

# =========================
# Internal helpers
# =========================

def _alloc(cap: int) -> Optional[bytearray]:
    """capacity + 1 zeroed bytes, or None if the allocation fails."""
    try:
        return bytearray(cap + 1)
    except MemoryError:
        logger.warning("safebuf: allocation of %d bytes failed", cap + 1)
        return None

def as_bytes(value, *, what: str = "value") -> bytes:
    if isinstance(value, SafeBuf):
        return value.value()
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value)
    if isinstance(value, str):
        return value.encode("utf-8")
    raise TypeError(f"{what} must be SafeBuf, bytes-like or str; got {type(value).__name__}")

def _render(fmt, args: tuple) -> bytes:
    """Dry-run pass: produce the exact bytes a formatted write would commit."""
    if isinstance(fmt, (bytes, bytearray)):
        out = bytes(fmt) % args
    elif isinstance(fmt, str):
        out = (fmt % args).encode("utf-8")
    else:
        raise TypeError("format must be str or bytes")
    return out

# =========================
# Buffer
# =========================

class SafeBuf:
    """Fixed-capacity byte buffer. See module docstring for the contract."""

    __slots__ = ("_cap", "_len", "_data")

    def __init__(self, capacity: int):
        if not isinstance(capacity, int) or isinstance(capacity, bool):
            raise TypeError("capacity must be int")
        if capacity < 0 or capacity > MAX_LEN:
            raise ValueError(f"capacity must be 0..{MAX_LEN}")
        data = _alloc(capacity)
        if data is None:
            raise MemoryError(f"cannot allocate SafeBuf of capacity {capacity}")
        self._cap = capacity
        self._len = 0
        self._data: Optional[bytearray] = data

    # ---- lifecycle ----

    def _live(self) -> bytearray:
        if self._data is None:
            raise BufferReleased("buffer was released or moved from")
        return self._data

    @property
    def released(self) -> bool:
        return self._data is None

    def release(self) -> None:
        """Drop the storage. The handle is unusable afterwards."""
        self._live()
        self._data = None
        self._cap = 0
        self._len = 0

    # ---- accessors ----

    @property
    def capacity(self) -> int:
        self._live()
        return self._cap

    @property
    def length(self) -> int:
        self._live()
        return self._len

    @property
    def space(self) -> int:
        """Bytes still writable by append()."""
        self._live()
        return self._cap - self._len

    def raw(self) -> bytes:
        """Content plus the trailing sentinel byte (read-only copy)."""
        return bytes(self._live()[: self._len + 1])

    def value(self) -> bytes:
        """Content without the sentinel."""
        return bytes(self._live()[: self._len])

    def __len__(self) -> int:
        return self.length

    def __bytes__(self) -> bytes:
        return self.value()

    def __repr__(self) -> str:
        if self._data is None:
            return "SafeBuf(<released>)"
        return f"SafeBuf(cap={self._cap}, len={self._len}, data={self.value()!r})"

    # ---- equality ----

    def __eq__(self, other) -> bool:
        if isinstance(other, SafeBuf):
            return self._len == other._len and self.value() == other.value()
        if isinstance(other, (bytes, bytearray, memoryview)):
            return self.value() == bytes(other)
        if isinstance(other, str):
            return self.value() == other.encode("utf-8")
        return NotImplemented

    __hash__ = None  # mutable

    # ---- in-place mutators ----

    def append(self, fmt, *args) -> int:
        """
        Append formatted text. Returns the number of bytes written, or 0 if
        the rendered text does not fit in the remaining space (buffer untouched).
        """
        data = self._live()
        rendered = _render(fmt, args)
        n = len(rendered)
        spc = self._cap - self._len
        if not spc:
            return 0
        if n > spc:
            logger.debug("safebuf.append rejected: need %d, have %d", n, spc)
            return 0
        end = self._len
        data[end:end + n] = rendered
        self._len = end + n
        data[self._len] = SENTINEL
        return n

    def write(self, fmt, *args) -> int:
        """
        Overwrite from offset 0. Returns the new length, or 0 if the rendered
        text exceeds the capacity (buffer untouched).
        """
        data = self._live()
        rendered = _render(fmt, args)
        n = len(rendered)
        if not self._cap:
            return 0
        if n > self._cap:
            logger.debug("safebuf.write rejected: need %d, capacity %d", n, self._cap)
            return 0
        data[0:n] = rendered
        self._len = n
        data[n] = SENTINEL
        return n

    def reset(self) -> None:
        data = self._live()
        self._len = 0
        data[0] = SENTINEL

    def resize(self, new_capacity: int) -> bool:
        """
        Change the capacity. Content beyond new_capacity is truncated.
        On failure the buffer is left exactly as it was.
        """
        data = self._live()
        if not isinstance(new_capacity, int) or isinstance(new_capacity, bool):
            raise TypeError("new_capacity must be int")
        if new_capacity == self._cap:
            return True
        if new_capacity < 0 or new_capacity > MAX_LEN:
            logger.debug("safebuf.resize rejected: capacity %d out of range", new_capacity)
            return False
        fresh = _alloc(new_capacity)
        if fresh is None:
            logger.warning("safebuf.resize failed (cap %d -> %d)", self._cap, new_capacity)
            return False
        keep = min(self._len, new_capacity)
        fresh[:keep] = data[:keep]
        fresh[keep] = SENTINEL
        self._data = fresh
        self._cap = new_capacity
        self._len = keep
        return True

    def dup(self) -> Optional["SafeBuf"]:
        """Independent copy with the same capacity and content."""
        data = self._live()
        out = new(self._cap)
        if out is None:
            return None
        out._data[: self._len + 1] = data[: self._len + 1]
        out._len = self._len
        return out

    def copy_from(self, source) -> bool:
        """
        Replace the content with a plain byte string, growing if needed.
        Fails (no mutation) above MAX_LEN or if growth fails.
        """
        self._live()
        src = as_bytes(source, what="source")
        n = len(src)
        if n > MAX_LEN:
            logger.debug("safebuf.copy rejected: %d bytes exceeds MAX_LEN", n)
            return False
        if n > self._cap and not self.resize(n):
            return False
        data = self._data
        data[:n] = src
        data[n] = SENTINEL
        self._len = n
        return True

    def move_from(self, src: "SafeBuf") -> bool:
        """
        Take over src's content and consume src. Grows self if src does not fit.
        On failure neither buffer is changed.
        """
        self._live()
        if not isinstance(src, SafeBuf):
            raise TypeError("src must be SafeBuf")
        if src is self:
            return True
        sdata = src._live()
        n = src._len
        if n > self._cap and not self.resize(src._cap):
            logger.debug("safebuf.move failed: cannot grow destination to %d", src._cap)
            return False
        data = self._data
        data[: n + 1] = sdata[: n + 1]
        self._len = n
        src.release()
        return True

# =========================
# Constructors
# =========================

def new(capacity: int) -> Optional[SafeBuf]:
    """Empty buffer of the given capacity, or None if it cannot be allocated."""
    try:
        return SafeBuf(capacity)
    except (ValueError, MemoryError) as e:
        logger.debug("safebuf.new(%r) failed: %s", capacity, e)
        return None

def from_bytes(source) -> Optional[SafeBuf]:
    """Buffer sized exactly to source, holding a copy of it."""
    if source is None:
        return None
    src = as_bytes(source, what="source")
    if len(src) > MAX_LEN:
        logger.debug("safebuf.from_bytes rejected: %d bytes exceeds MAX_LEN", len(src))
        return None
    buf = new(len(src))
    if buf is None:
        return None
    buf._data[: len(src)] = src
    buf._len = len(src)
    return buf

# =========================
# None-tolerant helpers
# =========================

def capacity(buf: Optional[SafeBuf]) -> int:
    return 0 if buf is None else buf.capacity

def length(buf: Optional[SafeBuf]) -> int:
    return 0 if buf is None else buf.length

def data(buf: Optional[SafeBuf]) -> Optional[bytes]:
    """Null-terminated raw view, or None for an absent buffer."""
    return None if buf is None else buf.raw()

def dup(buf: Optional[SafeBuf]) -> Optional[SafeBuf]:
    return None if buf is None else buf.dup()

def resize(buf: Optional[SafeBuf], new_capacity: int) -> bool:
    return False if buf is None else buf.resize(new_capacity)

def move(dest: Optional[SafeBuf], src: Optional[SafeBuf]) -> bool:
    """Ownership transfer: src is consumed on success."""
    if dest is None or src is None:
        return False
    return dest.move_from(src)

def copy(dest: Optional[SafeBuf], source) -> bool:
    if dest is None or source is None:
        return False
    return dest.copy_from(source)

def equal(a, b) -> bool:
    """Byte-exact comparison; two absent handles are equal, one is not."""
    if a is None and b is None:
        return True
    if a is None or b is None:
        return False
    if isinstance(a, SafeBuf):
        return a == b
    if isinstance(b, SafeBuf):
        return b == a
    return as_bytes(a) == as_bytes(b)

__all__ = [
    "BufferReleased",
    "MAX_LEN",
    "SafeBuf",
    "SafeBufError",
    "as_bytes",
    "capacity",
    "copy",
    "data",
    "dup",
    "equal",
    "from_bytes",
    "length",
    "move",
    "new",
    "resize",
]
