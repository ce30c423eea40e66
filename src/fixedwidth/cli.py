from __future__ import annotations
import argparse
import logging
import sys
import warnings
from .engine.engine import Engine
from .errors import FixedWidthWarning
from .schema.layout_loader import load_layout
from . import __version__


def main() -> None:
    p = argparse.ArgumentParser("fixedwidth")
    p.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    p.add_argument("--log-level", default="WARNING",
                   choices=["DEBUG", "INFO", "WARNING", "ERROR"],
                   help="Logging verbosity (default: WARNING)")
    sub = p.add_subparsers(dest="cmd", required=True)

    parse = sub.add_parser("parse", help="Split a fixed-width file into rows")
    parse.add_argument("source")
    parse.add_argument("--layout", required=True, help="Path to JSON layout file")
    parse.add_argument("--dest", required=True, help="Output directory")
    parse.add_argument("--output-kind", choices=["jsonl", "parquet"], default="jsonl")
    parse.add_argument("--strict-length", action="store_true",
                       help="Reject lines whose width differs from the layout's total length")
    parse.add_argument("--strip-values", action="store_true",
                       help="Trim surrounding whitespace from parsed values (padding is kept by default)")

    render = sub.add_parser("render", help="Render JSON Lines rows into a fixed-width file")
    render.add_argument("source")
    render.add_argument("--layout", required=True, help="Path to JSON layout file")
    render.add_argument("--dest", required=True, help="Output directory")
    render.add_argument("--newline", choices=["lf", "crlf"], default="lf",
                        help="Record separator written after each line")

    args = p.parse_args()
    logging.basicConfig(level=getattr(logging, args.log_level),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    warnings.simplefilter("default", FixedWidthWarning)

    schema, encoding = load_layout(args.layout)
    if args.cmd == "parse":
        eng = Engine(
            schema,
            input_kind="fixedwidth",
            output_kind=args.output_kind,
            encoding=encoding,
            strict_length=args.strict_length,
            strip_values=args.strip_values,
        )
    else:
        eng = Engine(
            schema,
            input_kind="jsonl",
            output_kind="fixedwidth",
            encoding=encoding,
            newline="\r\n" if args.newline == "crlf" else "\n",
        )
    counters = eng.run(args.source, args.dest)
    print(f"read={counters['read']} kept={counters['kept']} rejected={counters['rejected']}", file=sys.stderr)
