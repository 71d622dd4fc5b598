"""msch command-line interface.

Usage:
    python3 -m msch tag Schematic.msch name
    python3 -m msch tag Schematic.msch --index 1
    python3 -m msch show Schematic.msch [--json]
    python3 -m msch version
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import List, Optional

from . import (
    DEFAULT_CHUNK_SIZE,
    FORMAT_RAW,
    FORMAT_ZLIB,
    Schematic,
    SchematicError,
    __version__,
    load,
)

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="msch",
        description="msch — inspect binary schematic files",
    )
    parser.add_argument("-v", "--verbose", action="store_true",
                        help="Log decode progress to stderr")
    sub = parser.add_subparsers(dest="command")

    # Options shared by every command that reads a file.
    file_opts = argparse.ArgumentParser(add_help=False)
    file_opts.add_argument("file", metavar="FILE", help="Schematic file to decode")
    file_opts.add_argument("--chunk-size", type=int, default=DEFAULT_CHUNK_SIZE,
                           metavar="N", help="Read size for the compressed body")
    file_opts.add_argument("--zlib", action="store_true",
                           help="Body is zlib-wrapped instead of raw deflate")

    # ── tag ──
    tag_p = sub.add_parser("tag", parents=[file_opts], help="Print one tag's content")
    tag_p.add_argument("label", nargs="?", help="Tag label (first match wins)")
    tag_p.add_argument("--index", "-n", type=int, metavar="N",
                       help="Select the tag by position instead of label")

    # ── show ──
    show_p = sub.add_parser("show", parents=[file_opts], help="Summarise a schematic")
    show_p.add_argument("--json", action="store_true", help="Emit JSON")

    # ── version ──
    sub.add_parser("version", help="Print version and exit")

    return parser


def _load(args: argparse.Namespace) -> Schematic:
    fmt = FORMAT_ZLIB if args.zlib else FORMAT_RAW
    logger.info("decoding %s (%s body, %d-byte chunks)", args.file, fmt, args.chunk_size)
    return load(args.file, chunk_size=args.chunk_size, stream_format=fmt)


def _cmd_tag(args: argparse.Namespace) -> int:
    schem = _load(args)
    if args.index is not None:
        if not 0 <= args.index < schem.tag_count:
            print("msch: no tag at index {} ({} tag(s))".format(args.index, schem.tag_count),
                  file=sys.stderr)
            return 1
        print(schem.tags[args.index].content)
        return 0
    content = schem.tag(args.label)
    if content is None:
        print("msch: no tag labelled {!r}".format(args.label), file=sys.stderr)
        return 1
    print(content)
    return 0


def _cmd_show(args: argparse.Namespace) -> int:
    schem = _load(args)
    if args.json:
        print(json.dumps(schem.to_dict(), ensure_ascii=False, indent=2))
        return 0

    print("magic:    {} ({})".format(schem.magic.hex(),
                                     "standard" if schem.has_standard_magic else "non-standard"))
    print("version:  {} ({})".format(schem.version.hex(), schem.version_number))
    print("size:     {}x{}".format(schem.width, schem.height))
    print("tags:     {}".format(schem.tag_count))
    for t in schem.tags:
        print("  {} = {}".format(t.label, t.content))
    print("blocks:   {}".format(schem.block_name_count))
    for idx, name in enumerate(schem.block_names):
        print("  [{}] {}".format(idx, name))
    print("placed:   {}".format(schem.placed_block_count))
    for b in schem.placed_blocks:
        try:
            name = schem.block_name(b)
        except IndexError:
            name = "<index {} out of range>".format(b.name_index)
        print("  {} pos={} config={} rot={}".format(name, b.position, b.config, b.rotation))
    return 0


def main(argv: Optional[List[str]] = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    if args.command == "version":
        print(f"msch {__version__}")
        return

    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=logging.DEBUG if args.verbose else logging.WARNING,
        stream=sys.stderr,
    )

    if args.chunk_size <= 0:
        parser.error("--chunk-size must be positive")
    if args.command == "tag" and (args.label is None) == (args.index is None):
        parser.error("tag: give exactly one of LABEL or --index")

    try:
        if args.command == "tag":
            rc = _cmd_tag(args)
        else:
            rc = _cmd_show(args)
    except SchematicError as e:
        print(f"msch: error [{e.code}]: {e}", file=sys.stderr)
        sys.exit(2)
    except OSError as e:
        print(f"msch: cannot read {args.file}: {e}", file=sys.stderr)
        sys.exit(2)
    if rc:
        sys.exit(rc)


if __name__ == "__main__":
    main()
