#!/usr/bin/env python3
#
# SPDX-License-Identifier: BSD-3-Clause
# Copyright (c) 2024-2026 The XTC Project Authors
#
import argparse
import logging
import os
import sys

from nnop.codegen.fragment import Dialect
from nnop.graphs.loader import GraphLoadError, load_graph
from nnop.operators import OpValidationError

logger = logging.getLogger(__name__)

DIALECT_ENV = "NNOP_DIALECT"


def default_dialect() -> str:
    """
    Return the default dialect name, defined in order as:
    - env var NNOP_DIALECT
    - indexed
    """
    return os.environ.get(DIALECT_ENV) or Dialect.INDEXED.value


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Infer types of a graph description and print its kernels."
    )
    parser.add_argument(
        "filename",
        metavar="F",
        type=str,
        help="The graph description file (YAML).",
    )
    parser.add_argument(
        "--dialect",
        type=str,
        choices=[d.value for d in Dialect],
        default=None,
        help=f"The kernel dialect, default from {DIALECT_ENV} or indexed.",
    )
    parser.add_argument(
        "--print-types",
        action="store_true",
        default=False,
        help="Print the inferred graph outputs types.",
    )
    parser.add_argument(
        "--debug", action="store_true", default=False, help="Print debug messages."
    )
    args = parser.parse_args(argv)

    logging.basicConfig()
    logging.getLogger("nnop").setLevel(logging.DEBUG if args.debug else logging.WARNING)
    logger.setLevel(logging.DEBUG if args.debug else logging.INFO)

    if not os.path.exists(args.filename):
        parser.error(f"{args.filename} does not exist.")
    try:
        dialect = Dialect.from_name(args.dialect or default_dialect())
    except ValueError as e:
        parser.error(str(e))

    with open(args.filename, "r") as f:
        source = f.read()
    try:
        graph = load_graph(source)
        outputs_types = graph.infer_types()
    except (GraphLoadError, OpValidationError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    if args.print_types:
        for name, out_type in zip(graph.outputs, outputs_types):
            print(f"# {name}: {out_type}")
    logger.debug("translating graph %s to the %s dialect", graph.name, dialect.value)
    try:
        fragments = graph.translate(dialect)
    except NotImplementedError as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    for name, fragment in fragments.items():
        print(f"# {name}")
        print(fragment.text)
    return 0


if __name__ == "__main__":
    sys.exit(main())
