from __future__ import annotations

import argparse
import logging
import sys

from .config import Settings, load_settings
from .css_parser import parse_css
from .errors import CssMatrixError
from .models import Matrix, format_number

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", help="YAML or JSON settings file")
    common.add_argument(
        "--precision",
        type=int,
        default=None,
        help="Digits after the decimal point in output (default: 6)",
    )
    common.add_argument(
        "--safe-3d",
        action="store_true",
        default=None,
        help="Fail on 3D transform functions instead of skipping them",
    )
    common.add_argument("--verbose", action="store_true", help="Enable debug logging")

    parser = argparse.ArgumentParser(
        prog="cssmatrix",
        description="Parse, compose, invert and decompose CSS 2D transforms.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("parse", parents=[common], help="Print one matrix per transform function")
    p.add_argument("value", help="CSS transform value, e.g. 'rotate(20deg) scale(1.2)'")

    p = sub.add_parser("compose", parents=[common], help="Print the composed matrix")
    p.add_argument("value", help="CSS transform value")

    p = sub.add_parser("decompose", parents=[common], help="Print elementary transforms")
    p.add_argument("value", help="CSS transform value")

    p = sub.add_parser("invert", parents=[common], help="Print the inverse of the composed matrix")
    p.add_argument("value", help="CSS transform value")

    p = sub.add_parser("apply", parents=[common], help="Map a point through the transform")
    p.add_argument("value", help="CSS transform value")
    p.add_argument("x", type=float)
    p.add_argument("y", type=float)
    p.add_argument("--inverse", action="store_true", help="Apply the inverse transform")

    return parser


def resolve_settings(args: argparse.Namespace) -> Settings:
    settings = load_settings(args.config) if args.config else Settings()
    overrides = {}
    if args.precision is not None:
        overrides["precision"] = args.precision
    if args.safe_3d is not None:
        overrides["safe_3d"] = args.safe_3d
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    if overrides:
        settings = Settings.model_validate({**settings.model_dump(), **overrides})
    return settings


def _describe(matrix: Matrix, precision: int) -> str:
    return f"{matrix.kind.value} {matrix.to_css(precision)}"


def run(args: argparse.Namespace, settings: Settings) -> list[str]:
    matrices = parse_css(args.value, safe_3d=settings.safe_3d)
    precision = settings.precision

    if args.command == "parse":
        return [_describe(m, precision) for m in matrices]

    composed = Matrix.compose(matrices)
    if args.command == "compose":
        return [_describe(composed, precision)]
    if args.command == "decompose":
        return [_describe(m, precision) for m in composed.decompose()]
    if args.command == "invert":
        return [_describe(composed.inverse(), precision)]

    target = composed.inverse() if args.inverse else composed
    x, y = target.transform_point(args.x, args.y)
    return [f"{format_number(x, precision)} {format_number(y, precision)}"]


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = resolve_settings(args)
    except (OSError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 1

    logging.basicConfig(level=settings.log_level, format="%(name)s - %(levelname)s - %(message)s")
    logger.debug("running %s with %s", args.command, settings)

    try:
        lines = run(args, settings)
    except CssMatrixError as exc:
        print(f"{args.command} failed: {exc}", file=sys.stderr)
        return 1

    for line in lines:
        print(line)
    return 0


if __name__ == "__main__":
    sys.exit(main())
