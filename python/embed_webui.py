#!/usr/bin/env python3
"""Embed the compressed web UI into the firmware as a PROGMEM byte array.

Usage:
    python3 embed_webui.py [src/index.html.gz] [src/html.gz.h]
"""
import argparse
import gzip
import os
import sys

from c_source import c_identifier, write_lines

# === CONFIG ===
SOURCE = "src/index.html.gz"
DESTINATION = "src/html.gz.h"
SYMBOL = "html_gz"
WRAP = 1000


def gzip_bytes(data):
    # mtime is fixed so identical input gives identical output
    return gzip.compress(data, compresslevel=9, mtime=0)


def byte_array_lines(data, name=SYMBOL, wrap=WRAP):
    """Return the lines of a C header declaring data as a byte array.

    The header holds a ``<name>_len`` define and a ``<name>[]`` array whose
    elements are written as ``0xNN``, with a line break before every element
    whose index is a multiple of wrap.
    """
    c_identifier(name)
    if wrap <= 0:
        raise ValueError(f"wrap must be positive, got {wrap}")
    data = bytes(data)
    if not data:
        raise ValueError("refusing to embed an empty blob")

    lines = [
        f"#define {name}_len {len(data)}",
        f"const uint8_t {name}[] PROGMEM = {{",
    ]
    for i in range(0, len(data), wrap):
        line = ",".join(f"0x{b:02x}" for b in data[i:i + wrap])
        if i + wrap < len(data):
            line += ","
        lines.append(line)
    lines.append("};")
    return lines


def embed_file(source=SOURCE, destination=DESTINATION, name=SYMBOL,
               wrap=WRAP, compress=False):
    with open(source, "rb") as f:
        data = f.read()
    if compress:
        data = gzip_bytes(data)
    write_lines(destination, byte_array_lines(data, name, wrap))
    return len(data)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Embed a binary blob as a C byte array")
    parser.add_argument("source", nargs="?", default=SOURCE,
                        help=f"blob to embed (default {SOURCE})")
    parser.add_argument("destination", nargs="?", default=DESTINATION,
                        help=f"header to write (default {DESTINATION})")
    parser.add_argument("-n", "--name", default=SYMBOL,
                        help=f"C symbol name (default {SYMBOL})")
    parser.add_argument("-w", "--wrap", type=int, default=WRAP,
                        help=f"elements per output line (default {WRAP})")
    parser.add_argument("-z", "--gzip", action="store_true",
                        help="gzip the source before embedding it")
    parser.add_argument("--remove-source", action="store_true",
                        help="delete the source once the header is written")
    args = parser.parse_args(argv)

    try:
        size = embed_file(args.source, args.destination, args.name,
                          args.wrap, args.gzip)
    except ValueError as e:
        print(f"Cannot embed {args.source}: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"Failed to embed {args.source} into {args.destination}: {e}",
              file=sys.stderr)
        return 1

    print(f"{args.destination}: {args.name} ({size} bytes)")

    if args.remove_source:
        try:
            os.unlink(args.source)
        except OSError as e:
            print(f"Failed to remove {args.source}: {e}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
