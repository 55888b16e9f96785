"""Convert any content family to plain text."""

import re

from urlfetch.constants import ContentFamily, TEXT_TABLE_MAX_ROWS
from urlfetch.conversion import dom
from urlfetch.conversion.base import Converter
from urlfetch.conversion.parsers import parse_csv, parse_json, pretty_json, xml_to_tree
from urlfetch.errors import ParseError
from urlfetch.utils.provenance import text_trailer

# Order matters: fenced code first, images before links
MARKDOWN_RULES = (
    (re.compile(r"`{3}[\s\S]*?`{3}"), ""),
    (re.compile(r"!\[([^\]]*)\]\(([^)]*)\)"), r"[Image: \1]"),
    (re.compile(r"\[([^\]]*)\]\(([^)]*)\)"), r"\1 (\2)"),
    (re.compile(r"^[ \t]*#{1,6}[ \t]+", re.MULTILINE), ""),
    (re.compile(r"^[ \t]*[-*+][ \t]+", re.MULTILINE), "- "),
    (re.compile(r"\*\*(.+?)\*\*"), r"\1"),
    (re.compile(r"__(.+?)__"), r"\1"),
    (re.compile(r"\*(.+?)\*"), r"\1"),
    (re.compile(r"(?<!\w)_(.+?)_(?!\w)"), r"\1"),
    (re.compile(r"`(.*?)`"), r"\1"),
)

WHITESPACE = re.compile(r"\s+")


def strip_markdown(content: str) -> str:
    text = content
    for pattern, replacement in MARKDOWN_RULES:
        text = pattern.sub(replacement, text)
    return text


def with_trailer(text: str, source_url: str) -> str:
    return f"{text}\n\n{text_trailer(source_url)}"


class TextConverter(Converter):
    """Plain text output."""

    target = ContentFamily.TEXT
    display_name = "Text"

    def from_html(self, content: str, source_url: str) -> str:
        soup = dom.drop_invisible(dom.load(content))
        text = WHITESPACE.sub(" ", dom.body_text(soup, separator=" ")).strip()
        return with_trailer(text, source_url)

    def from_json(self, content: str, source_url: str) -> str:
        try:
            return with_trailer(pretty_json(parse_json(content)), source_url)
        except ParseError:
            return with_trailer(content, source_url)

    def from_markdown(self, content: str, source_url: str) -> str:
        return with_trailer(strip_markdown(content), source_url)

    def from_csv(self, content: str, source_url: str) -> str:
        table = parse_csv(content)
        if not table.rows:
            return with_trailer("Empty or invalid CSV data", source_url)

        headers = table.headers
        lines = [
            " | ".join(headers),
            "-|-".join("---" for _ in headers),
        ]
        for row in table.rows[:TEXT_TABLE_MAX_ROWS]:
            lines.append(" | ".join(row[h] for h in headers))

        if len(table) > TEXT_TABLE_MAX_ROWS:
            lines += ["", f"[Table truncated. Total rows: {len(table)}]"]

        return with_trailer("\n".join(lines), source_url)

    def from_xml(self, content: str, source_url: str) -> str:
        try:
            return with_trailer(pretty_json(xml_to_tree(content)), source_url)
        except ParseError:
            return with_trailer(content, source_url)

    def from_text(self, content: str, source_url: str) -> str:
        return with_trailer(content, source_url)
