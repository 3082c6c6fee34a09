"""statichuff CLI.

This is the stable CLI entrypoint (console-script: ``statichuff``).

The core never touches the filesystem: this module reads whole files, hands
the bytes to the engine and writes the result back.

Env:
  STATICHUFF_DEBUG=1   same as --debug (re-raise errors with stack traces)
"""

from __future__ import annotations

import argparse
import os
import sys
from pathlib import Path

from statichuff.engine.container import compress, decompress, inspect_container
from statichuff.errors import EXIT_GENERIC, StaticHuffError

DEBUG_ENV = "STATICHUFF_DEBUG"


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")


def _debug_enabled(ns: argparse.Namespace) -> bool:
    if getattr(ns, "debug", False):
        return True
    return os.environ.get(DEBUG_ENV, "").strip() not in {"", "0"}


def _fmt_symbol(sym: int) -> str:
    ch = chr(sym)
    return repr(ch) if ch.isprintable() and sym < 0x80 else f"0x{sym:02x}"


def _file_compress(input_path: Path, output_path: Path) -> int:
    data = input_path.read_bytes()
    print(f"Input file size: {len(data)} bytes")
    blob = compress(data)
    output_path.write_bytes(blob)
    print(f"Compression completed. Output file size: {len(blob)} bytes")
    return 0


def _file_decompress(input_path: Path, output_path: Path) -> int:
    data = decompress(input_path.read_bytes())
    output_path.write_bytes(data)
    print(f"Total decoded bytes: {len(data)}")
    return 0


def _file_show(input_path: Path) -> int:
    info = inspect_container(input_path.read_bytes())
    print(f"Huffman table size: {info.table_size}")
    for code, sym in info.entries:
        print(f"Code: {code} -> Symbol: {_fmt_symbol(sym)}")
    print(f"Encoded text length: {info.bit_length} bits")
    print(f"Payload size: {info.payload_size} bytes")
    return 0


def _file_verify(input_path: Path, *, full: bool) -> int:
    from statichuff.verify import verify_container_file

    verify_container_file(input_path, full=full)
    print("OK")
    return 0


def _file_roundtrip(input_path: Path) -> int:
    from statichuff.verify import verify_roundtrip

    rep = verify_roundtrip(input_path.read_bytes())
    print(f"roundtrip: input={rep.input_size} container={rep.container_size} ratio={rep.ratio:.3f}")
    print(f"roundtrip: sha256={rep.sha256}")
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="statichuff", description="Static Huffman compressor/decompressor"
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    p_c = sub.add_parser("compress", help="Compress a file")
    p_c.add_argument("input", type=Path)
    p_c.add_argument("output", type=Path)
    _add_common_args(p_c)

    p_d = sub.add_parser("decompress", help="Decompress a container file")
    p_d.add_argument("input", type=Path)
    p_d.add_argument("output", type=Path)
    _add_common_args(p_d)

    p_s = sub.add_parser("show", help="Print the code table and header of a container")
    p_s.add_argument("input", type=Path)
    _add_common_args(p_s)

    p_v = sub.add_parser("verify", help="Verify a container file")
    p_v.add_argument("input", type=Path)
    p_v.add_argument("--full", action="store_true", help="Decode the whole payload too")
    _add_common_args(p_v)

    p_r = sub.add_parser(
        "roundtrip", help="Compress + decompress a file in memory and compare with the original"
    )
    p_r.add_argument("input", type=Path)
    _add_common_args(p_r)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    try:
        if ns.cmd == "compress":
            return _file_compress(ns.input, ns.output)
        if ns.cmd == "decompress":
            return _file_decompress(ns.input, ns.output)
        if ns.cmd == "show":
            return _file_show(ns.input)
        if ns.cmd == "verify":
            return _file_verify(ns.input, full=bool(ns.full))
        if ns.cmd == "roundtrip":
            return _file_roundtrip(ns.input)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except StaticHuffError as e:
        if _debug_enabled(ns):
            raise
        print(f"[statichuff] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if _debug_enabled(ns):
            raise
        print(f"[statichuff] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
