from __future__ import annotations
import argparse, json, sys

from .binary.errors import DecodeError
from .formats.registry import UnsupportedFormatError, decode_file, supported_extensions
from .logging_config import configure_logging

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def cmd_info(args):
    try:
        model = decode_file(args.input, offset=args.offset)
    except (DecodeError, UnsupportedFormatError) as e:
        print(f"{args.input}: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"{args.input}: {e.strerror or e}", file=sys.stderr)
        return 1
    print(json.dumps(model.model_dump(mode="json"), indent=2))
    return 0

def cmd_formats(args):
    for ext in supported_extensions():
        print(ext)
    return 0

def build_parser():
    p = argparse.ArgumentParser(prog="assetbin", description="Game asset binary decoders")
    p.add_argument(
        "--log-level", default=None, type=str.upper, choices=LOG_LEVELS,
        help="Logging level (default: ASSETBIN_LOG_LEVEL or WARNING)",
    )
    sub = p.add_subparsers(dest="cmd")

    sp = sub.add_parser("info", help="decode a file by extension and print it as JSON")
    sp.add_argument("input", help="Path to an asset file")
    sp.add_argument("--offset", type=int, default=0, help="Start decoding at this byte offset")
    sp.set_defaults(func=cmd_info)

    sp = sub.add_parser("formats", help="list supported file extensions")
    sp.set_defaults(func=cmd_formats)

    return p

def main(argv=None):
    p = build_parser()
    ns = p.parse_args(argv)
    if not hasattr(ns, "func"):
        p.print_help()
        return 2
    try:
        configure_logging(ns.log_level)
    except ValueError as e:
        print(f"assetbin: {e}", file=sys.stderr)
        return 2
    return ns.func(ns)


if __name__ == "__main__":
    raise SystemExit(main())
