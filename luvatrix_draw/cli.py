from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import asdict
import json
import logging
from pathlib import Path
import sys

from .commands import command_name
from .config import ExportConfig, validate_export_config
from .demo import build_demo_scene
from .render import render_to_pdf, render_to_png, render_to_svg


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="luvatrix-draw")
    parser.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    sub = parser.add_subparsers(dest="command", required=True)

    render = sub.add_parser("render-demo", help="Record the demo scene and export it.")
    render.add_argument("--format", choices=["svg", "png", "pdf"], default="svg")
    render.add_argument("--out", type=Path, required=True)
    render.add_argument("--width", type=float, default=320.0)
    render.add_argument("--height", type=float, default=200.0)
    render.add_argument(
        "--scale",
        type=float,
        default=None,
        help="Device pixel scale for png output. Default: LUVATRIX_DRAW_SCALE or 1.0.",
    )

    inspect = sub.add_parser("inspect-demo", help="Print command statistics for the demo scene.")
    inspect.add_argument("--width", type=float, default=320.0)
    inspect.add_argument("--height", type=float, default=200.0)
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level), format="%(levelname)s %(name)s: %(message)s")

    if args.command == "render-demo":
        config = ExportConfig.from_env()
        if args.scale is not None:
            config = validate_export_config({**asdict(config), "scale": args.scale})
        ctx = build_demo_scene(args.width, args.height)
        if args.format == "svg":
            args.out.write_text(render_to_svg(ctx, args.width, args.height), encoding="utf-8")
        else:
            if args.format == "png":
                data = render_to_png(ctx, args.width, args.height, config=config)
            else:
                data = render_to_pdf(ctx, args.width, args.height, config=config)
            if data is None:
                print(f"{args.format} export failed; see log output", file=sys.stderr)
                return 1
            args.out.write_bytes(data)
        print(f"wrote {args.out} ({args.format}, {ctx.command_count} commands)")
        return 0

    if args.command == "inspect-demo":
        ctx = build_demo_scene(args.width, args.height)
        bounds = ctx.bounds
        summary = {
            "command_count": ctx.command_count,
            "commands": dict(Counter(command_name(cmd) for cmd in ctx.commands)),
            "bounds": {
                "min_x": bounds.min_x,
                "min_y": bounds.min_y,
                "max_x": bounds.max_x,
                "max_y": bounds.max_y,
            },
        }
        print(json.dumps(summary, indent=2, sort_keys=True))
        return 0

    raise RuntimeError(f"unsupported command: {args.command}")


if __name__ == "__main__":
    raise SystemExit(main())
