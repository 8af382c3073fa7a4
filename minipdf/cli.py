#!/usr/bin/env python3
"""minipdf CLI - Write and check PDF files from the command line.

Usage:
    minipdf demo <output> [options]
    minipdf validate <file>... [options]
    minipdf --version
    minipdf --help

Commands:
    demo        Write a sample document with a few drawn shapes
    validate    Check the structure of PDF files

Examples:
    # Write a sample drawing on an A5 page
    minipdf demo shapes.pdf --width 420 --height 595 --title "Shapes"

    # Check the cross-reference table of a file
    minipdf validate shapes.pdf -v
"""

import argparse
import sys
from typing import List, Optional


def get_version():
    """Get package version."""
    from minipdf import __version__
    return __version__


def draw_demo(doc) -> None:
    """Draw the sample shapes on a new page of doc."""
    from minipdf.graphics import LineCap, LineJoin

    page = doc.new_page()
    w, h = page.width, page.height

    doc.line_width(4)
    doc.line_join(LineJoin.ROUND)
    doc.rectangle(w * 0.1, h * 0.1, w * 0.8, h * 0.8)
    doc.stroke()

    doc.line_cap(LineCap.ROUND)
    doc.move_to(w * 0.2, h * 0.5)
    doc.curve_to(w * 0.35, h * 0.8, w * 0.65, h * 0.2, w * 0.8, h * 0.5)
    doc.stroke()

    doc.move_to(w * 0.4, h * 0.2)
    doc.line_to(w * 0.6, h * 0.2)
    doc.curve_v(w * 0.6, h * 0.35, w * 0.5, h * 0.35)
    doc.curve_y(w * 0.4, h * 0.35, w * 0.4, h * 0.2)
    doc.close_path()
    doc.fill()


def cmd_demo(args):
    """Write a sample document."""
    from minipdf import Config, Document, PdfError
    from minipdf.utils.logging import setup_logging

    config = Config.from_env()
    setup_logging(level=args.log_level or config.log_level)
    if args.width:
        config.page_width = args.width
    if args.height:
        config.page_height = args.height

    doc = Document(config=config)
    if args.title:
        doc.set_info(title=args.title)
    for _ in range(args.pages):
        draw_demo(doc)

    try:
        n = doc.save(args.output)
    except PdfError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"Wrote {args.output}: {len(doc.pages)} page(s), {len(doc.registry)} objects, {n} bytes")
    return 0


def cmd_validate(args):
    """Check the structure of PDF files."""
    from minipdf.validator.cli import run
    return run(args)


def main(argv: Optional[List[str]] = None) -> int:
    from minipdf.validator.cli import build_parser

    parser = argparse.ArgumentParser(
        prog="minipdf",
        description="minipdf - low-level PDF writer",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  minipdf demo shapes.pdf --title "Shapes"
  minipdf validate shapes.pdf
        """
    )
    parser.add_argument("--version", action="version", version=f"minipdf {get_version()}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # demo command
    demo_parser = subparsers.add_parser(
        "demo",
        help="Write a sample document",
        description="Write a document with a rectangle, a curve and a filled shape on each page."
    )
    demo_parser.add_argument("output", help="Output PDF file path")
    demo_parser.add_argument("--width", type=float, help="Page width in points (default: config)")
    demo_parser.add_argument("--height", type=float, help="Page height in points (default: config)")
    demo_parser.add_argument("--pages", type=int, default=1, help="Number of pages (default: 1)")
    demo_parser.add_argument("--title", help="Document title")
    demo_parser.add_argument("--log-level", help="Logging level (default: MINIPDF_LOG_LEVEL)")

    # validate command
    validate_parser = subparsers.add_parser(
        "validate",
        help="Check PDF file structure",
        description="Check header, cross-reference table and trailer of PDF files."
    )
    build_parser(validate_parser)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    commands = {
        "demo": cmd_demo,
        "validate": cmd_validate,
    }
    return commands[args.command](args)


if __name__ == "__main__":
    sys.exit(main())
