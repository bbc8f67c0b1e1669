#!/usr/bin/env python3
"""
Local preview commands for the portfolio site.

Usage:
  python -m portfolio.cli page --data data --lang en -o preview.html
  python -m portfolio.cli resume --data data -o preview_resume.html
  python -m portfolio.cli background --frames 30 --out tmp/frames --seed 7
"""

from __future__ import annotations

import argparse
import logging
import random
from pathlib import Path

from .background import BackgroundAnimation, PillowSurface
from .content_store import load_content
from .localize import Language, coerce_language
from .page import PageDocument, load_skeleton
from .product_config import (
    PORTFOLIO_CANVAS_HEIGHT,
    PORTFOLIO_CANVAS_WIDTH,
    PORTFOLIO_DATA_BASE,
    PORTFOLIO_FRAME_INTERVAL_MS,
)
from .resume import render_resume_page
from .scheduler import ManualScheduler
from .site import open_site


def _page_url(name: str, lang: Language) -> str:
    return f"{name}?lang=en" if lang == Language.EN else name


def _read_skeleton(path: str | None, default_name: str) -> str:
    return Path(path).read_text(encoding="utf-8") if path else load_skeleton(default_name)


def cmd_page(args) -> int:
    lang = coerce_language(args.lang)
    site = open_site(
        args.data,
        url=_page_url("index.html", lang),
        skeleton=_read_skeleton(args.skeleton, "index.html"),
        with_background=False,
    )
    site.close()
    Path(args.output).write_text(site.document.serialize(), encoding="utf-8")
    print(f"Wrote: {args.output}")
    return 0


def cmd_resume(args) -> int:
    lang = coerce_language(args.lang)
    document = PageDocument(_read_skeleton(args.skeleton, "resume.html"), url=_page_url("resume.html", lang))
    render_resume_page(document, load_content(args.data), referrer=args.referrer)
    Path(args.output).write_text(document.serialize(), encoding="utf-8")
    print(f"Wrote: {args.output}")
    return 0


def cmd_background(args) -> int:
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)
    scheduler = ManualScheduler()
    surface = PillowSurface(args.width, args.height, background=(15, 23, 42, 255))
    rng = random.Random(args.seed) if args.seed is not None else None

    def save(frame: int) -> None:
        surface.save(out_dir / f"frame_{frame:04d}.png")
        if frame >= args.frames:
            anim.stop()

    anim = BackgroundAnimation(surface, scheduler, args.width, args.height, rng=rng, on_frame=save)
    if args.pointer:
        anim.pointer_move(*args.pointer)
    anim.start()
    while anim.running:
        scheduler.advance(PORTFOLIO_FRAME_INTERVAL_MS)
    print(f"Wrote {anim.frames} frames to {out_dir}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Portfolio site preview tools")
    parser.add_argument("-v", "--verbose", action="store_true", help="Log at INFO level")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("page", help="Render the main page for one language")
    p.add_argument("--data", default=PORTFOLIO_DATA_BASE, help="Data directory or http(s) base URL")
    p.add_argument("--lang", default="fa", help="fa (default) or en")
    p.add_argument("--skeleton", help="HTML skeleton to fill (default: bundled index.html)")
    p.add_argument("-o", "--output", default="preview.html")
    p.set_defaults(func=cmd_page)

    r = sub.add_parser("resume", help="Render the printable resume page")
    r.add_argument("--data", default=PORTFOLIO_DATA_BASE, help="Data directory or http(s) base URL")
    r.add_argument("--lang", default="fa", help="fa (default) or en")
    r.add_argument("--referrer", help="Referring page URL (lang=en there selects English)")
    r.add_argument("--skeleton", help="HTML skeleton to fill (default: bundled resume.html)")
    r.add_argument("-o", "--output", default="preview_resume.html")
    r.set_defaults(func=cmd_resume)

    b = sub.add_parser("background", help="Render background animation frames to PNG")
    b.add_argument("--width", type=int, default=PORTFOLIO_CANVAS_WIDTH)
    b.add_argument("--height", type=int, default=PORTFOLIO_CANVAS_HEIGHT)
    b.add_argument("--frames", type=int, default=30)
    b.add_argument("--seed", type=int, help="Seed for a reproducible line set")
    b.add_argument("--pointer", type=float, nargs=2, metavar=("X", "Y"), help="Fixed pointer position")
    b.add_argument("--out", default="tmp/frames")
    b.set_defaults(func=cmd_background)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
