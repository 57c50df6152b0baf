"""Command-line entry point: caption the images of an HTML document on stdin."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from typing import Optional, Sequence, TextIO

from bs4 import BeautifulSoup

from .config import CaptionConfig, ElementRecipe, Variant
from .document import DEFAULT_SELECTOR, caption_soup

logger = logging.getLogger("imagecaption.cli")


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Read HTML from STDIN, wrap every titled image in a caption container "
            "and write the result to STDOUT."
        ),
    )
    parser.add_argument(
        "--selector",
        default=DEFAULT_SELECTOR,
        help="CSS selector for candidate images (default: %(default)s)",
    )
    parser.add_argument(
        "--variant",
        choices=[variant.value for variant in Variant],
        default=Variant.BASIC.value,
        help="Preset controlling paragraph collapsing and width handling",
    )
    parser.add_argument(
        "--container",
        type=ElementRecipe.parse,
        default=None,
        help="Recipe for the outer container, e.g. 'figure.caption' or '<span class=\"x\" />'",
    )
    parser.add_argument(
        "--image-wrapper",
        type=ElementRecipe.parse,
        default=None,
        help="Recipe for the element holding the image (and its link)",
    )
    parser.add_argument(
        "--caption-wrapper",
        type=ElementRecipe.parse,
        default=None,
        help="Recipe for the element holding the caption text",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )
    return parser.parse_args(argv)


def build_config(args: argparse.Namespace) -> CaptionConfig:
    overrides = {
        name: getattr(args, name)
        for name in ("container", "image_wrapper", "caption_wrapper")
        if getattr(args, name) is not None
    }
    return CaptionConfig.for_variant(args.variant).with_overrides(overrides)


def run(
    args: argparse.Namespace,
    stdin: TextIO,
    stdout: TextIO,
) -> int:
    config = build_config(args)
    overall_start = time.perf_counter()
    soup = BeautifulSoup(stdin.read(), "html.parser")
    report = caption_soup(soup, args.selector, config)
    stdout.write(soup.decode())
    stdout.flush()
    logger.debug(
        "Finished in %.4fs (%d captioned, %d skipped, variant=%s)",
        time.perf_counter() - overall_start,
        report.transformed,
        report.skipped,
        args.variant,
    )
    return report.transformed


def main(argv: Optional[Sequence[str]] = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stderr,
        force=True,
    )
    run(args, sys.stdin, sys.stdout)


if __name__ == "__main__":
    main()
