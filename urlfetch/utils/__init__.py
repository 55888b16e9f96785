"""URL fetcher utility modules."""

from urlfetch.utils.html import escape_html, highlight_json, sanitize_html
from urlfetch.utils.logger import get_logger, cleanup_old_logs
from urlfetch.utils.provenance import html_footer, local_timestamp, text_trailer

__all__ = [
    "escape_html",
    "highlight_json",
    "sanitize_html",
    "get_logger",
    "cleanup_old_logs",
    "html_footer",
    "local_timestamp",
    "text_trailer",
]
