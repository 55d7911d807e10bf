#!/usr/bin/env python3
"""
safebuf_cli.py — command line front end for the safebuf modules.

Usage:
  safebuf hash TEXT [--version V] [--key HEX]
  safebuf split TEXT [--delim D] [--first]
  safebuf trim TEXT [--mode both|left|right]
  safebuf check TEXT [--skip N] [--underscore]
  safebuf selftest

Global options:
  -v, --verbose    Debug logging (default level from SAFEBUF_LOG_LEVEL, else WARNING)

TEXT arguments:
  @path   -> load bytes from file
  literal -> UTF-8 literal

Environment:
  SAFEBUF_LOG_LEVEL     logging level name (DEBUG, INFO, WARNING, ...)
  SAFEBUF_HASH_VERSION  default --version (sip64, sip128, hsip32, hsip64)
  SAFEBUF_HASH_KEY      default --key, 32 hex chars

Exit codes: 0=OK, 1=self-test failure or delimiter not found, 2=usage/error.

Copyright:
  (c) 2025 Robert Dowell. Educational use encouraged.
"""

from __future__ import annotations
import argparse
import logging
import os
import sys

import safebuf as sb
import safebuf_check as chk
import safebuf_ops as ops
import safebuf_selftest
from safebuf_hash import KEY_LEN, HashVersion, hash_buf

logger = logging.getLogger(__name__)

DEFAULT_LOG_LEVEL = os.getenv("SAFEBUF_LOG_LEVEL", "WARNING")
DEFAULT_HASH_VERSION = os.getenv("SAFEBUF_HASH_VERSION", "sip64")
DEFAULT_HASH_KEY = os.getenv("SAFEBUF_HASH_KEY", bytes(range(KEY_LEN)).hex())


# ---------------- helpers ----------------

def _read_text_source(spec: str) -> bytes:
    """
    Parse '@path' or literal into bytes.
    """
    if spec.startswith("@"):
        with open(spec[1:], "rb") as f:
            return f.read()
    return spec.encode("utf-8")


def _parse_key(hexkey: str) -> bytes:
    try:
        key = bytes.fromhex(hexkey.strip())
    except ValueError:
        raise ValueError("key must be hex") from None
    if len(key) != KEY_LEN:
        raise ValueError(f"key must be {KEY_LEN} bytes ({2 * KEY_LEN} hex chars)")
    return key


def _load(spec: str) -> sb.SafeBuf:
    buf = sb.from_bytes(_read_text_source(spec))
    if buf is None:
        raise ValueError("input too large")
    return buf


def _show(buf: sb.SafeBuf) -> str:
    return buf.value().decode("utf-8", errors="replace")


def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else getattr(logging, DEFAULT_LOG_LEVEL.upper(), logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="safebuf",
        description="Bounds-checked string buffer utilities",
    )
    ap.add_argument("-v", "--verbose", action="store_true", help="Debug logging")

    sub = ap.add_subparsers(dest="cmd", required=True)

    p_hash = sub.add_parser("hash", help="Keyed SipHash/HalfSipHash digest of TEXT")
    p_hash.add_argument("text")
    p_hash.add_argument("--version", dest="hash_version", default=DEFAULT_HASH_VERSION,
                        choices=[v.name.lower() for v in HashVersion],
                        help="Digest version (default from SAFEBUF_HASH_VERSION or sip64)")
    p_hash.add_argument("--key", default=DEFAULT_HASH_KEY, help="16-byte key as 32 hex chars")

    p_split = sub.add_parser("split", help="Split TEXT on a delimiter, one fragment per line")
    p_split.add_argument("text")
    p_split.add_argument("--delim", default=" ", help="Delimiter (default: single space)")
    p_split.add_argument("--first", action="store_true", help="Only split at the first delimiter")

    p_trim = sub.add_parser("trim", help="Strip ASCII whitespace from TEXT")
    p_trim.add_argument("text")
    p_trim.add_argument("--mode", choices=("both", "left", "right"), default="both")

    p_check = sub.add_parser("check", help="Classify TEXT (integer/float/alnum/blank)")
    p_check.add_argument("text")
    p_check.add_argument("--skip", type=int, default=0, help="Leading bytes ignored by the alnum check")
    p_check.add_argument("--underscore", action="store_true", help="Allow '_' in the alnum check")

    sub.add_parser("selftest", help="Run the reference self-test")

    return ap


# ---------------- commands ----------------

def _cmd_hash(args) -> int:
    key = _parse_key(args.key)
    h = hash_buf(_load(args.text), args.hash_version, key)
    print(h.hex())
    return 0


def _cmd_split(args) -> int:
    buf = _load(args.text)
    if args.first:
        pair = ops.split(buf, args.delim)
        if pair is None:
            print("Delimiter not found.", file=sys.stderr)
            return 1
        parts = list(pair)
    else:
        parts = ops.split_all(buf, args.delim)
        if parts is None:
            print("Empty delimiter.", file=sys.stderr)
            return 2
    for p in parts:
        print(_show(p))
    return 0


def _cmd_trim(args) -> int:
    fn = {"both": ops.trim, "left": ops.ltrim, "right": ops.rtrim}[args.mode]
    print(_show(fn(_load(args.text))))
    return 0


def _cmd_check(args) -> int:
    buf = _load(args.text)
    report = {
        "integer": chk.is_integer(buf),
        "float": chk.is_float(buf),
        "signed": chk.is_signed(buf),
        "alnum": chk.is_alnum(buf, args.skip, args.underscore),
        "blank": chk.is_blank(buf),
    }
    for name, val in report.items():
        print(f"{name:8s}: {'yes' if val else 'no'}")
    return 0


def _cmd_selftest(args) -> int:
    rep = safebuf_selftest.run_self_test()
    print(safebuf_selftest.format_report(rep))
    return 0 if rep["all_passed"] else 1


_COMMANDS = {
    "hash": _cmd_hash,
    "split": _cmd_split,
    "trim": _cmd_trim,
    "check": _cmd_check,
    "selftest": _cmd_selftest,
}


def main(argv: list[str] | None = None) -> int:
    ap = _build_parser()
    args = ap.parse_args(argv)
    _setup_logging(args.verbose)

    try:
        # Quick existence check for nicer errors
        text = getattr(args, "text", None)
        if text and text.startswith("@") and not os.path.exists(text[1:]):
            print(f"Input file not found: {text[1:]}", file=sys.stderr)
            return 2
        return _COMMANDS[args.cmd](args)

    except KeyboardInterrupt:
        print("\nCancelled.", file=sys.stderr)
        return 2
    except Exception as e:
        logger.debug("command %s failed", args.cmd, exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
