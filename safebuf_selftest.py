#!/usr/bin/env python3
"""
safebuf_selftest.py — reference self-test for the safebuf modules.

Runs the reference scenarios (buffer core, string operations, validation,
hash vectors) and reports each one separately instead of stopping at the
first failure.

Usage:
    import safebuf_selftest as st
    report = st.run_self_test()
    report["all_passed"]  # bool
    report["tests"]       # {name: {"ok": bool, "why": str}}

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Tuple

import safebuf as sb
import safebuf_check as chk
import safebuf_ops as ops
from safebuf_hash import HashVersion, hash_buf

VERSION = "1"

REF_KEY = bytes(range(16))
REF_TEXT = b"es un test"

def _ok(why: str = "") -> Dict[str, Any]:
    return {"ok": True, "why": why}

def _fail(why: str) -> Dict[str, Any]:
    return {"ok": False, "why": why}

def _expect(got, want) -> Dict[str, Any]:
    if sb.equal(got, want):
        return _ok()
    return _fail(f"got {got!r}, want {want!r}")

# =========================
# Buffer core
# =========================

def _check_append() -> Dict[str, Any]:
    buf = sb.new(10)
    rc = buf.append("foo")
    if rc != 3 or buf.length != 3:
        return _fail(f"append returned {rc}, length {buf.length}")
    return _expect(buf, b"foo")

def _check_append_atomic() -> Dict[str, Any]:
    big = b"bigbigbigbigbigbigbigbig"
    buf = sb.new(len(big) - 1)
    buf.append("ab")
    before = buf.raw()
    rc = buf.append(big)
    if rc != 0:
        return _fail(f"overflowing append returned {rc}")
    if buf.raw() != before:
        return _fail("overflowing append modified the buffer")
    return _ok()

def _check_resize_then_append() -> Dict[str, Any]:
    big = b"bigbigbigbigbigbigbigbig"
    buf = sb.new(10)
    buf.append("foo")
    if buf.append(big):
        return _fail("append should not fit before resize")
    if not buf.resize(3 + len(big)):
        return _fail("resize failed")
    if buf.append(big) != len(big):
        return _fail("append failed after resize")
    return _expect(buf, b"foo" + big)

def _check_dup_independent() -> Dict[str, Any]:
    buf = sb.new(10)
    buf.append("foo")
    cpy = buf.dup()
    if not sb.equal(buf, cpy) or cpy.capacity != buf.capacity:
        return _fail("duplicate differs from original")
    cpy.append("bar")
    return _expect(buf, b"foo")

def _check_move() -> Dict[str, Any]:
    a = sb.from_bytes(REF_TEXT)
    b = sb.from_bytes(b" y mas cosas")
    if not sb.move(a, b):
        return _fail("move failed")
    if not b.released:
        return _fail("source still usable after move")
    return _expect(a, b" y mas cosas")

def _check_copy() -> Dict[str, Any]:
    a = sb.from_bytes(REF_TEXT)
    if not sb.copy(a, b"pruebita"):
        return _fail("copy failed")
    return _expect(a, b"pruebita")

# =========================
# String operations
# =========================

def _scenarios() -> List[Tuple[str, Callable[[], Any], Any]]:
    text = sb.from_bytes(REF_TEXT)
    padded = sb.from_bytes(b"   es un test   ")
    return [
        ("left", lambda: ops.left(text, 4), b"es un"),
        ("right", lambda: ops.right(text, 6), b"test"),
        ("mid", lambda: ops.mid(text, 3, 4), b"un"),
        ("concat", lambda: ops.concat(text, b" y mas cosas"), b"es un test y mas cosas"),
        ("insert", lambda: ops.insert(text, b" hermoso", 5), b"es un hermoso test"),
        ("delete", lambda: ops.delete(text, 3, 5), b"es test"),
        ("delete_substring", lambda: ops.delete_substring(text, b"un "), b"es test"),
        ("replace", lambda: ops.replace(text, b"un", b"otro", 2), b"es otro test"),
        ("to_upper", lambda: ops.to_upper(sb.from_bytes(b"es Un test")), b"ES UN TEST"),
        ("to_lower", lambda: ops.to_lower(sb.from_bytes(b"ES un TEST")), b"es un test"),
        ("trim", lambda: ops.trim(padded), b"es un test"),
        ("ltrim", lambda: ops.ltrim(padded), b"es un test   "),
        ("rtrim", lambda: ops.rtrim(padded), b"   es un test"),
    ]

def _check_find() -> Dict[str, Any]:
    text = sb.from_bytes(REF_TEXT)
    got = (ops.find(text, b"un", 0), ops.find(text, b"un", 2), ops.find(text, b"zz", 0))
    return _ok() if got == (3, 3, None) else _fail(f"find results {got}")

def _check_split_all() -> Dict[str, Any]:
    parts = ops.split_all(sb.from_bytes(b"String de Prueba para split_c"), b" ")
    want = [b"String", b"de", b"Prueba", b"para", b"split_c"]
    got = [p.value() for p in parts or []]
    return _ok() if got == want else _fail(f"fragments {got}")

# =========================
# Validation + hashing
# =========================

def _check_numeric() -> Dict[str, Any]:
    got = (
        chk.is_integer(sb.from_bytes(b"-124")),
        chk.is_float(sb.from_bytes(b"-23.89")),
        chk.is_integer(sb.from_bytes(b"-23.89")),
    )
    return _ok() if got == (True, True, False) else _fail(f"predicates {got}")

def _check_hash(version: HashVersion, want_hex: str) -> Callable[[], Dict[str, Any]]:
    def run() -> Dict[str, Any]:
        h = hash_buf(sb.from_bytes(b"Esto es un Test para hash"), version, REF_KEY)
        out = sb.new(32)
        for byte in h.out[: h.outlen]:
            out.append("%02x", byte)
        return _expect(out, want_hex.encode("ascii"))
    return run

# =========================
# Runner
# =========================

def run_self_test() -> Dict[str, Any]:
    checks: Dict[str, Callable[[], Dict[str, Any]]] = {
        "append": _check_append,
        "append_atomic": _check_append_atomic,
        "resize_then_append": _check_resize_then_append,
        "dup_independent": _check_dup_independent,
        "move": _check_move,
        "copy": _check_copy,
        "find": _check_find,
        "split_all": _check_split_all,
        "numeric": _check_numeric,
        "hash_sip128": _check_hash(HashVersion.SIP128, "1882ec9b9f416a6330aecc8b1bfafd13"),
        "hash_hsip64": _check_hash(HashVersion.HSIP64, "eac1d8508e6a7f5a"),
    }
    tests: Dict[str, Dict[str, Any]] = {}
    for name, fn in checks.items():
        try:
            tests[name] = fn()
        except Exception as e:
            tests[name] = _fail(f"exception: {e}")

    for name, fn, want in _scenarios():
        try:
            tests[name] = _expect(fn(), want)
        except Exception as e:
            tests[name] = _fail(f"exception: {e}")

    return {
        "version": VERSION,
        "all_passed": all(t["ok"] for t in tests.values()),
        "tests": tests,
    }

def format_report(rep: Dict[str, Any]) -> str:
    lines = [f"safebuf self-test v{rep['version']}", f"All passed: {rep['all_passed']}"]
    for name, r in rep["tests"].items():
        status = "OK " if r["ok"] else "FAIL"
        why = "" if r["ok"] else f"  ({r['why']})"
        lines.append(f" - {name:20s}: {status}{why}")
    return "\n".join(lines)

if __name__ == "__main__":  # pragma: no cover
    print(format_report(run_self_test()))
