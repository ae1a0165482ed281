"""Command line entry point: ``arvak-pauli``.

Usage from terminal:
    $ arvak-pauli ansatz.txt                      # OpenQASM 2.0 to stdout
    $ arvak-pauli ansatz.txt -o ansatz.qasm --qasm-version 3
    $ arvak-pauli ansatz.txt --multiplier 1.0 --workers 4

Optional environment variables
------------------------------
    ARVAK_PAULI_WORKERS  - default worker thread count
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

from .exceptions import ArvakPauliError
from .pipeline import compile_file

logger = logging.getLogger(__name__)


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid worker count: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"worker count must be at least 1, got {number}")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="arvak-pauli",
        description="Compile a Pauli-exponential ansatz into OpenQASM",
    )
    parser.add_argument("input", help="Term file, one '<basis> <coefficient> <parameter>' per line")
    parser.add_argument(
        "-o",
        "--output",
        default=None,
        help="Write the program to this file instead of stdout",
    )
    parser.add_argument(
        "--qasm-version",
        type=int,
        choices=(2, 3),
        default=2,
        help="OpenQASM dialect of the register declarations (default: 2)",
    )
    parser.add_argument(
        "--multiplier",
        type=float,
        default=None,
        help="Angle scale factor (default: 0.5)",
    )
    parser.add_argument(
        "--workers",
        type=_positive_int,
        # argparse runs string defaults through type= as well.
        default=os.environ.get("ARVAK_PAULI_WORKERS") or None,
        help="Worker threads; 1 compiles sequentially (default: $ARVAK_PAULI_WORKERS or executor default)",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for arvak-pauli. Returns the process exit status."""
    args = build_parser().parse_args(argv)
    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    try:
        result = compile_file(
            args.input,
            version=args.qasm_version,
            out_path=args.output,
            multiplier=args.multiplier,
            max_workers=args.workers,
        )
    except ArvakPauliError as exc:
        if exc.line_number is None:
            print(f"Error! {exc.reason}", file=sys.stderr)
        else:
            print(f"Error! At line {exc.line_number}: {exc.reason}", file=sys.stderr)
        return 1
    except OSError as exc:
        print(f"Error! {exc}", file=sys.stderr)
        return 1

    if args.output is None:
        sys.stdout.write(result.text)
    else:
        logger.info("Wrote %d terms to %s", len(result), args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
