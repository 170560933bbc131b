# Copyright Amazon.com, Inc. or its affiliates. All Rights Reserved.
# SPDX-License-Identifier: Apache-2.0

"""Command line entry: multiply two matrix text files and print the product."""

import argparse
import logging
import sys

from gemmkit.backends import Backend
from gemmkit.config import load_config, parse_log_level
from gemmkit.errors import GemmError
from gemmkit.matrix import Matrix
from gemmkit.textio import read_matrix
from gemmkit.utils.logging import setup_logging

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="gemmkit", description="Multiply two whitespace-separated matrix files and print the product."
    )
    parser.add_argument("lhs", help="Path to the left matrix (m x k).")
    parser.add_argument("rhs", help="Path to the right matrix (k x n).")
    parser.add_argument(
        "--backend",
        choices=sorted(Backend.all_backends()),
        default=None,
        help="Compute backend (default: $GEMMKIT_BACKEND or cpu).",
    )
    parser.add_argument("--log-level", default=None, help="Logging level (default: $GEMMKIT_LOG_LEVEL or WARNING).")
    parser.add_argument("--log-file", default=None, help="Write logs to this file instead of stderr.")
    return parser


def run(lhs_path: str, rhs_path: str, backend: type[Backend]) -> str:
    """Read both matrices, multiply them on ``backend`` and return the formatted product.

    Raises:
        OSError: If a file cannot be read.
        GemmError: On parse, shape or backend failures.
    """
    lhs = Matrix.from_host(read_matrix(lhs_path), backend=backend)
    rhs = Matrix.from_host(read_matrix(rhs_path), backend=backend)
    result = lhs.dot(rhs)
    logger.info("%s @ %s -> %r", lhs_path, rhs_path, result)
    return str(result)


def main(argv: list[str] | None = None) -> int:
    """Run the command line tool and return the process exit status."""
    args = build_parser().parse_args(argv)
    try:
        config = load_config()
        level = parse_log_level(args.log_level) if args.log_level else config.log_level
        backend = Backend.get(args.backend or config.backend)
    except (KeyError, ValueError) as exc:
        print(f"error: {exc.args[0]}", file=sys.stderr)
        return 2

    handler = setup_logging(args.log_file or config.log_file, level, show_metadata=False)
    try:
        output = run(args.lhs, args.rhs, backend)
    except (GemmError, OSError) as exc:
        logger.debug("product failed", exc_info=True)
        print(f"error: {exc}", file=sys.stderr)
        return 1
    finally:
        logging.root.removeHandler(handler)
        handler.close()
    sys.stdout.write(output)
    return 0
