"""
どこで: `python -m api`。
何を: コマンドラインから noisegrid を起動する（引数は `run_sketch` の明示指定へ対応）。
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Sequence

from common.logging import setup_default_logging

from .sketch import run_sketch


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="noisegrid", description="Noise-driven animated point grid")
    p.add_argument("--count", type=int, default=None, help="grid resolution per axis")
    p.add_argument("--seed", type=int, default=None, help="random seed (reproducible runs)")
    p.add_argument("--fps", type=int, default=None, help="frame rate")
    p.add_argument("--width", type=int, default=None, help="canvas width [px]")
    p.add_argument("--height", type=int, default=None, help="canvas height [px]")
    p.add_argument("--no-controls", action="store_true", help="keyboard controls only")
    p.add_argument("--hud", action="store_true", help="show status overlay")
    p.add_argument("--log-level", default=None, help="DEBUG/INFO/WARNING/...")
    return p


def main(argv: Sequence[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    if args.log_level:
        setup_default_logging(args.log_level)

    constants = None
    if args.count is not None:
        from util.utils import load_config

        from .sketch_runner.utils import resolve_constants

        constants = resolve_constants(
            None, load_config(), count_override=args.count
        )

    canvas_size = None
    if args.width is not None or args.height is not None:
        if args.width is None or args.height is None:
            logging.getLogger(__name__).error("--width and --height must be given together")
            return 2
        canvas_size = (args.width, args.height)

    run_sketch(
        canvas_size=canvas_size,
        fps=args.fps,
        constants=constants,
        seed=args.seed,
        use_controls=False if args.no_controls else None,
        show_hud=True if args.hud else None,
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
