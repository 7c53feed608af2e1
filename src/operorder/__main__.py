"""
Command-line calculator.

Usage:
    python -m operorder "(2+3)*4"
    operorder "2^3^2" --trace
    OPERORDER_MODE=single_pop operorder "1-2*3+4"

Environment variables:
    OPERORDER_LOG_LEVEL   - Log level (debug, info, warning, error)
    OPERORDER_CONFIG_FILE - Config file used when --config is not given
    OPERORDER_MODE        - Converter mode (standard, single_pop)
    OPERORDER_TRACE       - Print the expression tree before the result
"""

import argparse
import logging
import os
import sys
from typing import Optional, Sequence

from .config import config_from_env, load_config
from .errors import ExpressionError
from .evaluator import Evaluator, parse_expression
from .shunting_yard import CONVERTER_MODES
from .tree import to_infix

ENV_VAR_LOG_LEVEL = "OPERORDER_LOG_LEVEL"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="operorder", description="Evaluate an arithmetic expression."
    )
    parser.add_argument("expression", help='arithmetic expression, e.g. "(2+3)*4"')
    parser.add_argument("--mode", choices=CONVERTER_MODES, default=None)
    parser.add_argument(
        "--trace", action="store_true", help="print the expression tree in infix form"
    )
    parser.add_argument("--config", default=None, help="YAML or JSON config file")
    return parser


def resolve_log_level(name: Optional[str]) -> int:
    """Maps a level name to a logging level, falling back to WARNING."""
    level = logging.getLevelName((name or "warning").strip().upper())
    return level if isinstance(level, int) else logging.WARNING


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=resolve_log_level(os.getenv(ENV_VAR_LOG_LEVEL)))

    try:
        config = load_config(args.config) if args.config else config_from_env()
        overrides = {}
        if args.mode:
            overrides["mode"] = args.mode
        if args.trace:
            overrides["trace"] = True
        if overrides:
            config = config.model_copy(update=overrides)

        tree = parse_expression(args.expression, config)
        if config.trace:
            print(to_infix(tree), file=sys.stderr)
        value = Evaluator(args.expression).evaluate(tree)
    except ExpressionError as error:
        print(error.format_with_context(), file=sys.stderr)
        return 1

    print(value)
    return 0


if __name__ == "__main__":
    sys.exit(main())
