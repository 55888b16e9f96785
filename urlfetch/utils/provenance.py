"""Provenance stamps appended to converted output."""

from datetime import datetime, timezone
from typing import Optional

from urlfetch.utils.html import escape_html


def local_timestamp() -> str:
    """Human-readable local time used in provenance stamps."""
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def iso_timestamp() -> str:
    """UTC ISO-8601 timestamp with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def text_trailer(source_url: str) -> str:
    """Two-line ``Source:`` / ``Converted:`` stamp for text and Markdown output."""
    return f"Source: {source_url}\nConverted: {local_timestamp()}"


def html_footer(source_url: str, extra: Optional[str] = None) -> str:
    """Footer shared by every standalone HTML document."""
    lines = [
        "  <footer>",
        f"    <p>Source: {escape_html(source_url)}</p>",
        f"    <p>Converted: {local_timestamp()}</p>",
    ]
    if extra:
        lines.append(f"    <p>{escape_html(extra)}</p>")
    lines.append("  </footer>")
    return "\n".join(lines)
