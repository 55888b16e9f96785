"""urlfetch fetch <url> [--format auto] [--dynamic] [--wait-ms N] [--selector S] [--screenshot PATH]"""

import base64
from pathlib import Path

from urlfetch.constants import OutputFormat
from urlfetch_cli.output import die, emit, run_async


def register(subparsers):
    p = subparsers.add_parser("fetch", help="Fetch a URL and convert it")
    p.add_argument("url", help="URL to fetch (http or https)")
    p.add_argument("--format", "-f", choices=OutputFormat.ALL, default=OutputFormat.AUTO,
                   help="Output format (default: auto)")
    p.add_argument("--dynamic", action="store_true",
                   help="Render the page in a headless browser first")
    p.add_argument("--wait-ms", type=int, default=0,
                   help="Extra wait after page load, in milliseconds")
    p.add_argument("--selector",
                   help="CSS selector to wait for before capturing")
    p.add_argument("--screenshot", metavar="PATH",
                   help="Save a full-page PNG screenshot to PATH")
    p.set_defaults(handler=handle)


async def _fetch(tool, retriever, kwargs):
    try:
        return await tool.handle(**kwargs)
    finally:
        await retriever.aclose()


def handle(args, settings):
    from urlfetch.history import RecentFetches
    from urlfetch.retrieval import Retriever
    from urlfetch.tools import FetchTool

    kwargs = {
        "url": args.url,
        "format": args.format,
        "useDynamicRendering": args.dynamic,
        "renderWaitMs": args.wait_ms,
    }
    if args.selector:
        kwargs["waitForSelector"] = args.selector
    if args.screenshot:
        kwargs["captureScreenshot"] = True

    retriever = Retriever(settings)
    tool = FetchTool(retriever, RecentFetches(settings.history_size), settings)
    result = run_async(_fetch(tool, retriever, kwargs))

    if args.screenshot and result.get("screenshot"):
        try:
            Path(args.screenshot).write_bytes(base64.b64decode(result["screenshot"]))
        except OSError as e:
            die(f"cannot write screenshot: {e}")

    emit(result, as_json=args.json)
