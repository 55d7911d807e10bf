#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
safebuf_hash.py — keyed, versioned digest over a SafeBuf's bytes.

Versions (closed set):
  0  SIP64    SipHash-2-4,      8-byte output
  1  SIP128   SipHash-2-4,     16-byte output
  2  HSIP32   HalfSipHash-2-4,  4-byte output
  3  HSIP64   HalfSipHash-2-4,  8-byte output

The key is a caller-supplied 16-byte secret (HalfSipHash reads the first 8).
Identical (buffer content, version, key) always yields the identical digest.

Example
-------
    key = bytes(range(16))
    h = hash_buf(from_bytes(b"Esto es un Test para hash"), HashVersion.SIP128, key)
    h.hex()  # '1882ec9b9f416a6330aecc8b1bfafd13'

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Tuple, Union

from safebuf import SafeBuf
from safebuf_sip import halfsiphash, siphash

KEY_LEN = 16

# =========================
# Types
# =========================

class HashVersion(enum.IntEnum):
    SIP64 = 0
    SIP128 = 1
    HSIP32 = 2
    HSIP64 = 3

    @classmethod
    def parse(cls, value: Union[int, str, "HashVersion"]) -> "HashVersion":
        """Accept a member, its number, or its name (case-insensitive)."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"unknown hash version {value!r}") from None
        try:
            return cls(value)
        except ValueError:
            raise ValueError(f"unknown hash version {value!r}") from None

@dataclass(frozen=True)
class HashResult:
    """Digest bytes plus the declared output length (0 for an absent buffer)."""
    out: bytes
    outlen: int

    def hex(self) -> str:
        return self.out[: self.outlen].hex()

# version -> (engine, output length)
_ENGINES: Dict[HashVersion, Tuple[Callable[[bytes, bytes, int], bytes], int]] = {
    HashVersion.SIP64: (siphash, 8),
    HashVersion.SIP128: (siphash, 16),
    HashVersion.HSIP32: (halfsiphash, 4),
    HashVersion.HSIP64: (halfsiphash, 8),
}

def digest_size(version: Union[int, str, HashVersion]) -> int:
    return _ENGINES[HashVersion.parse(version)][1]

# =========================
# Public API
# =========================

def hash_buf(buf: Optional[SafeBuf], version: Union[int, str, HashVersion], key: bytes) -> HashResult:
    ver = HashVersion.parse(version)
    if not (isinstance(key, (bytes, bytearray)) and len(key) == KEY_LEN):
        raise ValueError(f"key must be {KEY_LEN} bytes")
    if buf is None:
        return HashResult(out=b"", outlen=0)
    if not isinstance(buf, SafeBuf):
        raise TypeError(f"expected SafeBuf, got {type(buf).__name__}")
    engine, outlen = _ENGINES[ver]
    return HashResult(out=engine(buf.value(), bytes(key), outlen), outlen=outlen)

__all__ = ["HashResult", "HashVersion", "KEY_LEN", "digest_size", "hash_buf"]
