"""Routemap CLI — routemap build.

Entry point for the ``routemap`` command-line interface.
"""

from __future__ import annotations

import argparse
import sys


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the routemap CLI."""
    parser = argparse.ArgumentParser(
        prog="routemap",
        description="Generate sitemap.xml documents from declared routes and URLs.",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {_get_version()}",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # routemap build
    build_parser = subparsers.add_parser(
        "build",
        help="Generate and write the sitemap documents",
    )
    build_parser.add_argument("root", nargs="?", default=".", help="Project root directory")
    build_parser.add_argument("--output", default=None, help="Output directory (default: dist)")
    build_parser.add_argument(
        "--base-url", default=None, help="Site origin used for partial locations",
    )
    build_parser.add_argument(
        "--trailing-slash", action="store_true", default=None,
        help="Ensure a trailing slash on every path",
    )
    build_parser.add_argument(
        "--pretty", action="store_true", default=None, help="Indent the XML output",
    )

    return parser


def _get_version() -> str:
    """Get the package version."""
    from routemap import __version__

    return __version__


def main(argv: list[str] | None = None) -> None:
    """CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    from routemap._errors import RoutemapError
    from routemap.app import build

    if args.command == "build":
        try:
            build(
                root=args.root,
                output=args.output,
                base_url=args.base_url,
                trailing_slash=args.trailing_slash,
                pretty=args.pretty,
            )
        except RoutemapError as exc:
            print(f"routemap: error: {exc}", file=sys.stderr)
            sys.exit(1)


if __name__ == "__main__":
    main()
