"""urlfetch CLI entry point.

Maps shell verbs to the fetch and convert tools.

No MCP transport; imports urlfetch directly as a Python library.
"""

import argparse
import logging
import sys

from urlfetch_cli.output import die
from urlfetch_cli.verbs import convert, fetch


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="urlfetch",
        description="Fetch a URL and convert it to JSON, HTML, Markdown or plain text",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Print the full result as JSON instead of the converted text",
    )

    sub = parser.add_subparsers(dest="verb", required=True)

    fetch.register(sub)
    convert.register(sub)

    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    from urlfetch.config import load_settings
    from urlfetch.errors import ConfigurationError

    try:
        settings = load_settings()
    except ConfigurationError as e:
        die(e.message)

    if args.debug or settings.debug:
        settings.debug = True
        logging.basicConfig(
            level=logging.DEBUG,
            format="[%(name)s] %(levelname)s: %(message)s",
            stream=sys.stderr,
        )

    # Dispatch to verb handler
    handler = args.handler
    handler(args, settings)


if __name__ == "__main__":
    main()
