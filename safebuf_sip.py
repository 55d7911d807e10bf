#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
safebuf_sip.py — SipHash-2-4 and HalfSipHash-2-4 keyed PRFs, pure Python.

  siphash(data, key16, outlen)      64-bit words, outlen 8 or 16
  halfsiphash(data, key, outlen)    32-bit words, outlen 4 or 8
                                    (only the first 8 key bytes are used)

Outputs are little-endian byte strings, matching the reference C
implementation (Aumasson & Bernstein) byte for byte.

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import struct
from typing import List

# =========================
# Constants
# =========================

C_ROUNDS = 2
D_ROUNDS = 4

_M64 = 0xFFFFFFFFFFFFFFFF
_M32 = 0xFFFFFFFF

# "somepseudorandomlygeneratedbytes"
_SIP_IV = (0x736F6D6570736575, 0x646F72616E646F6D, 0x6C7967656E657261, 0x7465646279746573)
_HSIP_IV = (0, 0, 0x6C796765, 0x74656462)

# =========================
# Rounds
# =========================

def _rotl64(x: int, b: int) -> int:
    return ((x << b) | (x >> (64 - b))) & _M64

def _rotl32(x: int, b: int) -> int:
    return ((x << b) | (x >> (32 - b))) & _M32

def _sipround(v: List[int]) -> None:
    v0, v1, v2, v3 = v
    v0 = (v0 + v1) & _M64; v1 = _rotl64(v1, 13); v1 ^= v0; v0 = _rotl64(v0, 32)
    v2 = (v2 + v3) & _M64; v3 = _rotl64(v3, 16); v3 ^= v2
    v0 = (v0 + v3) & _M64; v3 = _rotl64(v3, 21); v3 ^= v0
    v2 = (v2 + v1) & _M64; v1 = _rotl64(v1, 17); v1 ^= v2; v2 = _rotl64(v2, 32)
    v[:] = (v0, v1, v2, v3)

def _hsipround(v: List[int]) -> None:
    v0, v1, v2, v3 = v
    v0 = (v0 + v1) & _M32; v1 = _rotl32(v1, 5); v1 ^= v0; v0 = _rotl32(v0, 16)
    v2 = (v2 + v3) & _M32; v3 = _rotl32(v3, 8); v3 ^= v2
    v0 = (v0 + v3) & _M32; v3 = _rotl32(v3, 7); v3 ^= v0
    v2 = (v2 + v1) & _M32; v1 = _rotl32(v1, 13); v1 ^= v2; v2 = _rotl32(v2, 16)
    v[:] = (v0, v1, v2, v3)

# =========================
# Public PRFs
# =========================

def siphash(data: bytes, key: bytes, outlen: int = 8) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be bytes-like")
    if not (isinstance(key, (bytes, bytearray)) and len(key) == 16):
        raise ValueError("key must be 16 bytes")
    if outlen not in (8, 16):
        raise ValueError("siphash outlen must be 8 or 16")
    data = bytes(data)
    k0, k1 = struct.unpack("<QQ", bytes(key))

    v = [_SIP_IV[0] ^ k0, _SIP_IV[1] ^ k1, _SIP_IV[2] ^ k0, _SIP_IV[3] ^ k1]
    if outlen == 16:
        v[1] ^= 0xEE

    full = len(data) - (len(data) % 8)
    for off in range(0, full, 8):
        m = struct.unpack_from("<Q", data, off)[0]
        v[3] ^= m
        for _ in range(C_ROUNDS):
            _sipround(v)
        v[0] ^= m

    b = ((len(data) & 0xFF) << 56) | int.from_bytes(data[full:], "little")
    v[3] ^= b
    for _ in range(C_ROUNDS):
        _sipround(v)
    v[0] ^= b

    v[2] ^= 0xEE if outlen == 16 else 0xFF
    for _ in range(D_ROUNDS):
        _sipround(v)
    out = struct.pack("<Q", v[0] ^ v[1] ^ v[2] ^ v[3])
    if outlen == 8:
        return out

    v[1] ^= 0xDD
    for _ in range(D_ROUNDS):
        _sipround(v)
    return out + struct.pack("<Q", v[0] ^ v[1] ^ v[2] ^ v[3])

def halfsiphash(data: bytes, key: bytes, outlen: int = 4) -> bytes:
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise TypeError("data must be bytes-like")
    if not (isinstance(key, (bytes, bytearray)) and len(key) >= 8):
        raise ValueError("key must be at least 8 bytes")
    if outlen not in (4, 8):
        raise ValueError("halfsiphash outlen must be 4 or 8")
    data = bytes(data)
    k0, k1 = struct.unpack("<II", bytes(key[:8]))

    v = [_HSIP_IV[0] ^ k0, _HSIP_IV[1] ^ k1, _HSIP_IV[2] ^ k0, _HSIP_IV[3] ^ k1]
    if outlen == 8:
        v[1] ^= 0xEE

    full = len(data) - (len(data) % 4)
    for off in range(0, full, 4):
        m = struct.unpack_from("<I", data, off)[0]
        v[3] ^= m
        for _ in range(C_ROUNDS):
            _hsipround(v)
        v[0] ^= m

    b = ((len(data) & 0xFF) << 24) | int.from_bytes(data[full:], "little")
    v[3] ^= b
    for _ in range(C_ROUNDS):
        _hsipround(v)
    v[0] ^= b

    v[2] ^= 0xEE if outlen == 8 else 0xFF
    for _ in range(D_ROUNDS):
        _hsipround(v)
    out = struct.pack("<I", v[1] ^ v[3])
    if outlen == 4:
        return out

    v[1] ^= 0xDD
    for _ in range(D_ROUNDS):
        _hsipround(v)
    return out + struct.pack("<I", v[1] ^ v[3])

__all__ = ["C_ROUNDS", "D_ROUNDS", "halfsiphash", "siphash"]
