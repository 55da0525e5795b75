#!/usr/bin/env python3
"""Batch rewrite emoji in text and HTML files.

Usage:
    # Rewrite files in place
    python scripts/rewrite_files.py docs/page.html notes.txt

    # Write results into another directory
    python scripts/rewrite_files.py docs/*.html --output build/

    # Dry run (report match counts only)
    python scripts/rewrite_files.py docs/*.html --dry-run

    # SVG assets
    python scripts/rewrite_files.py docs/*.html --folder svg --ext .svg
"""

import argparse
import logging
import pathlib
import sys


# Add src to path
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent / "src"))

from bs4 import BeautifulSoup

from emoji_rewriter.infra.emoji_parser import EmojiParser, get_emoji_parser


logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(levelname)s - %(message)s",
)
log = logging.getLogger(__name__)

HTML_SUFFIXES = {".html", ".htm"}


def rewrite_file(
    parser: EmojiParser,
    path: pathlib.Path,
    options: dict[str, object],
) -> tuple[str, int]:
    """Rewrite a single file.

    Args:
        parser: Emoji parser
        path: Input file (.html/.htm rewritten as a tree, anything else as text)
        options: Rewrite options mapping

    Returns:
        Rewritten content and the number of matches in the source
    """
    source = path.read_text(encoding="utf-8")
    match_count = parser.matcher.count(source)

    if path.suffix.lower() in HTML_SUFFIXES:
        soup = BeautifulSoup(source, "html.parser")
        parser.rewrite_dom(soup, options)
        return str(soup), match_count

    return parser.rewrite_string(source, options), match_count


def main() -> None:
    """Main entry point."""
    arg_parser = argparse.ArgumentParser(description="Batch rewrite emoji in files")
    arg_parser.add_argument("paths", nargs="+", type=pathlib.Path, help="Input files")
    arg_parser.add_argument("--output", type=pathlib.Path, help="Output directory")
    arg_parser.add_argument("--dry-run", action="store_true", help="Don't write files")
    arg_parser.add_argument("--base", type=str, help="Asset base URL")
    arg_parser.add_argument("--size", type=str, help="Asset size, e.g. 36 or 72x72")
    arg_parser.add_argument("--folder", type=str, help="Asset folder, wins over size")
    arg_parser.add_argument("--ext", type=str, help="Asset extension, e.g. .svg")
    args = arg_parser.parse_args()

    options: dict[str, object] = {
        key: value
        for key, value in {
            "base": args.base,
            "size": int(args.size) if args.size and args.size.isdigit() else args.size,
            "folder": args.folder,
            "ext": args.ext,
        }.items()
        if value
    }

    parser = get_emoji_parser()
    if args.output and not args.dry_run:
        args.output.mkdir(parents=True, exist_ok=True)

    total = 0
    for path in args.paths:
        if not path.is_file():
            log.warning("Skipping %s: not a file", path)
            continue

        content, match_count = rewrite_file(parser, path, options)
        total += match_count
        log.info("%s: %d emoji", path, match_count)

        if args.dry_run or not match_count:
            continue

        target = args.output / path.name if args.output else path
        target.write_text(content, encoding="utf-8")
        log.info("  -> Saved %s", target)

    log.info("Done: %d file(s), %d emoji", len(args.paths), total)


if __name__ == "__main__":
    main()
