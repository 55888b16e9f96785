"""urlfetch convert <file|-> [--format auto] [--content-type TYPE] [--source-url URL]"""

import sys
from pathlib import Path

from urlfetch.constants import OutputFormat
from urlfetch_cli.output import die, emit, run_async


def register(subparsers):
    p = subparsers.add_parser("convert", help="Convert a local file or stdin")
    p.add_argument("path", help="File to convert, or - for stdin")
    p.add_argument("--format", "-f", choices=OutputFormat.ALL, default=OutputFormat.AUTO,
                   help="Output format (default: auto)")
    p.add_argument("--content-type",
                   help='Media type hint, e.g. "text/csv"')
    p.add_argument("--source-url",
                   help="URL for the source stamp (default: the file path)")
    p.set_defaults(handler=handle)


def handle(args, settings):
    from urlfetch.tools import ConvertTool

    if args.path == "-":
        content = sys.stdin.read()
        source_url = args.source_url or ""
    else:
        try:
            content = Path(args.path).read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            die(f"cannot read {args.path}: {e}")
        source_url = args.source_url or args.path

    tool = ConvertTool(settings)
    result = run_async(tool.handle(
        content=content,
        format=args.format,
        content_type=args.content_type or "",
        source_url=source_url,
    ))
    emit(result, as_json=args.json)
