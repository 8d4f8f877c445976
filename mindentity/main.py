"""Command-line entry point: print one artwork as JSON."""

from __future__ import annotations

import argparse
import logging
import sys

from dotenv import load_dotenv

from mindentity.config import settings
from mindentity.engine.pipeline import generate
from mindentity.errors import ConfigurationError

load_dotenv()

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Generate deterministic identity artwork as JSON")
    parser.add_argument("--seed", help="Seed text; a fresh seed is generated when omitted")
    parser.add_argument("--grid-size", type=int, default=settings.mindentity_default_grid_size)
    parser.add_argument("--width", type=int, default=settings.mindentity_default_size)
    parser.add_argument("--height", type=int, default=settings.mindentity_default_size)
    parser.add_argument("--mode", choices=["none", "letter", "string"], default="none")
    parser.add_argument("--input", help="Text for letter/string modes")
    parser.add_argument("--background", default="#ffffff", help="Background colour")
    parser.add_argument("--foreground", default="#000000", help="Foreground colour")
    parser.add_argument("--transparent", action="store_true", help="Omit the background rectangle")
    parser.add_argument("--offset-x", type=int, default=0)
    parser.add_argument("--offset-y", type=int, default=0)
    parser.add_argument("--corner-style", choices=["circle", "approx", "hand"], default="circle")
    parser.add_argument("-o", "--output", help="Write JSON to this file instead of stdout")
    parser.add_argument("--pretty", action="store_true", help="Indent the JSON output")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, settings.mindentity_log_level.upper(), logging.INFO),
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        artwork = generate(
            seed=args.seed,
            grid_size=args.grid_size,
            width=args.width,
            height=args.height,
            mode=args.mode,
            input=args.input,
            background_color=args.background,
            foreground_color=args.foreground,
            transparent=args.transparent,
            offset_x=args.offset_x,
            offset_y=args.offset_y,
            corner_style=args.corner_style,
        )
    except ConfigurationError as exc:
        for error in exc.errors:
            print(f"error: {error}", file=sys.stderr)
        return 2

    payload = artwork.model_dump_json(indent=2 if args.pretty else None)
    if args.output:
        with open(args.output, "w", encoding="utf-8") as fh:
            fh.write(payload + "\n")
        logger.info("Wrote %d shapes to %s", len(artwork.shapes), args.output)
    else:
        print(payload)
    return 0


if __name__ == "__main__":
    sys.exit(main())
