"""Command line entry point for minimising C++ binding-generator bug cases."""

from __future__ import annotations

import argparse
import shutil
import subprocess
import sys
import tempfile
from collections.abc import Sequence
from pathlib import Path

from cxxreduce import steps

LONG_HELP = """\
Command line utility to minimize autocxx bug cases.

This is a wrapper for creduce.

Example command-line:
autocxx-reduce -I my-inc-dir -h my-header -d 'generate!("MyClass")' -k -- --n 64 --remove-pass pass_line_markers
"""

DEFAULT_CREDUCE = "/usr/bin/creduce"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser (arguments after ``--`` go to creduce)."""
    parser = argparse.ArgumentParser(
        prog="autocxx-reduce",
        description=LONG_HELP,
        formatter_class=argparse.RawDescriptionHelpFormatter,
        add_help=False,
    )
    parser.add_argument("--help", action="help", help="show this help message and exit")
    parser.add_argument(
        "-I", "--inc", action="append", default=[], metavar="INCLUDE DIRS",
        help="include path",
    )
    parser.add_argument(
        "-D", "--define", action="append", default=[], metavar="DEFINE",
        help="macro definition",
    )
    parser.add_argument(
        "-h", "--header", action="append", required=True, metavar="HEADER",
        help="header file name",
    )
    parser.add_argument(
        "-d", "--directive", action="append", default=[], metavar="DIRECTIVE",
        help="directives to put within include_cpp!",
    )
    parser.add_argument(
        "-p", "--problem", required=True, metavar="PROBLEM",
        help="problem string we're looking for",
    )
    parser.add_argument(
        "--creduce", default=DEFAULT_CREDUCE, metavar="PATH",
        help="creduce binary location",
    )
    parser.add_argument(
        "-o", "--output", metavar="OUTPUT", help="where to write minimized output"
    )
    parser.add_argument(
        "-k", "--keep-dir", action="store_true",
        help="keep the temporary directory for debugging purposes",
    )
    return parser


def _parse(argv: Sequence[str]) -> argparse.Namespace:
    argv = list(argv)
    if "--" in argv:
        split = argv.index("--")
        own, extra = argv[:split], argv[split + 1:]
    else:
        own, extra = argv, []
    args = build_parser().parse_args(own)
    args.creduce_args = extra
    return args


def _do_run(args: argparse.Namespace, tmp_dir: Path) -> None:
    incs = [Path(inc) for inc in args.inc]
    listing_path = tmp_dir / "listing.h"
    steps.create_concatenated_header(args.header, listing_path)
    concat_path = tmp_dir / "concat.h"
    steps.announce_progress(f'Preprocessing "{listing_path}" to "{concat_path}"')
    steps.preprocess(listing_path, concat_path, incs, args.define)
    rs_path = tmp_dir / "input.rs"
    directives = ['#include "concat.h"\n', *(f"{d}\n" for d in args.directive)]
    steps.create_rs_file(rs_path, directives)
    steps.run_sample_gen_cmd(rs_path, tmp_dir)
    interestingness_test = tmp_dir / "test.sh"
    steps.create_interestingness_test(interestingness_test, args.problem, rs_path)
    steps.run_interestingness_test(interestingness_test)
    steps.run_creduce(
        args.creduce,
        interestingness_test,
        concat_path,
        getattr(args, "creduce_args", []),
    )
    if args.output is None:
        steps.print_minimized_case(concat_path)
    else:
        shutil.copyfile(concat_path, args.output)


def run(args: argparse.Namespace) -> None:
    """Carry out a whole reduction in a fresh temporary directory."""
    tmp_dir = Path(tempfile.mkdtemp())
    try:
        _do_run(args, tmp_dir)
    finally:
        if args.keep_dir:
            print(f"Keeping temp dir created at: {tmp_dir}")
        else:
            shutil.rmtree(tmp_dir, ignore_errors=True)


def main(argv: Sequence[str] | None = None) -> int:
    """Parse the command line and run a reduction."""
    args = _parse(sys.argv[1:] if argv is None else argv)
    try:
        run(args)
    except (OSError, subprocess.CalledProcessError) as exc:
        print(f"autocxx-reduce: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())