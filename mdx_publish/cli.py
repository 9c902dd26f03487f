"""Command-line entry point for the publisher."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, List, Sequence

from .config import (
    DEFAULT_IMAGE_TIMEOUT,
    DEFAULT_OUTPUT_ROOT,
    DEFAULT_USER_AGENT,
    PublishConfig,
)
from .errors import PublishError
from .models import DocumentKind, RenderedDocument
from .publisher import Publisher, write_document

logger = logging.getLogger("mdx_publish.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return argv
    first = argv[0]
    if first in commands or first.startswith("-"):
        return argv
    return ("post", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--output-root",
        default=DEFAULT_OUTPUT_ROOT,
        type=Path,
        help="Output tree that local image references resolve against",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=DEFAULT_IMAGE_TIMEOUT,
        help="Seconds to wait for a remote image before dropping it",
    )
    parser.add_argument(
        "--user-agent",
        default=DEFAULT_USER_AGENT,
        help="User-Agent header sent when fetching remote images",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=1,
        help="Resolve images within a document on this many threads",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def _add_post_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("paths", nargs="+", type=Path, help="Markdown posts to publish")
    parser.add_argument(
        "--root",
        default=Path("."),
        type=Path,
        help="Directory that post destination names are relative to",
    )
    parser.add_argument(
        "--stdout",
        action="store_true",
        help="Print the rendered HTML instead of writing files",
    )
    _add_common_arguments(parser)


def _add_page_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("paths", nargs="+", type=Path, help="Markdown pages to publish")
    parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Write the rendered HTML here (single page only); prints otherwise",
    )
    _add_common_arguments(parser)


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description=(
            "Render Markdown posts and pages with front matter to HTML, "
            "reserving layout space for their images."
        ),
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    post_parser = subparsers.add_parser("post", help="Publish blog posts")
    _add_post_arguments(post_parser)

    page_parser = subparsers.add_parser("page", help="Publish standalone pages")
    _add_page_arguments(page_parser)

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    args = parser.parse_args(argv)
    if args.command == "page" and args.out is not None and len(args.paths) > 1:
        parser.error("--out accepts a single page")
    return args


def _emit(text: str) -> None:
    sys.stdout.write(text if text.endswith("\n") else text + "\n")


def _publish(args: argparse.Namespace, kind: DocumentKind) -> int:
    config = PublishConfig(
        output_root=Path(args.output_root),
        image_timeout=args.timeout,
        user_agent=args.user_agent,
        image_workers=args.workers,
    )
    publisher = Publisher(config)
    results: List[RenderedDocument] = []
    overall_start = time.perf_counter()
    try:
        for path in args.paths:
            try:
                rendered = publisher.load_document(path, kind)
                if kind is DocumentKind.POST and not args.stdout:
                    write_document(rendered, root=args.root)
                elif kind is DocumentKind.PAGE and args.out is not None:
                    write_document(rendered, output_path=args.out)
                else:
                    _emit(rendered.html)
            except (PublishError, OSError, UnicodeDecodeError) as exc:
                logger.error("Skipping %s: %s", path, exc)
                continue
            results.append(rendered)
    finally:
        publisher.close()
    sys.stdout.flush()

    total_elapsed = time.perf_counter() - overall_start
    failures = len(args.paths) - len(results)
    logger.info(
        "Finished in %.2fs (%d/%d succeeded, %d failed)",
        total_elapsed,
        len(results),
        len(args.paths),
        failures,
    )
    return 1 if failures else 0


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )
    try:
        kind = DocumentKind(args.command)
        return _publish(args, kind)
    except PublishError as exc:
        logger.error("%s", exc)
        return 1


if __name__ == "__main__":
    sys.exit(main())
