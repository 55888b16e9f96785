"""Convert any content family to Markdown."""

from markdownify import ATX, markdownify

from urlfetch.constants import ContentFamily, MARKDOWN_FENCE_THRESHOLD, MARKDOWN_TABLE_MAX_ROWS
from urlfetch.conversion.base import Converter
from urlfetch.conversion.parsers import parse_csv, parse_json, pretty_json, xml_to_tree
from urlfetch.errors import ConversionError, ParseError
from urlfetch.utils.html import CONTENT_ALLOWED_ATTRIBUTES, CONTENT_ALLOWED_TAGS, sanitize_html
from urlfetch.utils.provenance import text_trailer


def fenced(content: str, language: str = "") -> str:
    return f"```{language}\n{content}\n```"


def html_to_markdown(markup: str) -> str:
    """Map headings, lists, links, emphasis and code blocks to Markdown."""
    return markdownify(
        markup,
        heading_style=ATX,
        bullets="-",
        code_language="",
    ).strip()


def escape_cell(value: str) -> str:
    return value.replace("|", "\\|").replace("\n", " ")


class MarkdownConverter(Converter):
    """Markdown output."""

    target = ContentFamily.MARKDOWN
    display_name = "Markdown"

    def from_markdown(self, content: str, source_url: str) -> str:
        return content

    def from_html(self, content: str, source_url: str) -> str:
        sanitized = sanitize_html(content, CONTENT_ALLOWED_TAGS, CONTENT_ALLOWED_ATTRIBUTES)
        return f"{html_to_markdown(sanitized)}\n\n---\n\n{text_trailer(source_url)}\n"

    def from_json(self, content: str, source_url: str) -> str:
        try:
            value = parse_json(content)
        except ParseError:
            return f"{fenced(content)}\n\n{text_trailer(source_url)}\n"
        return (
            "# JSON Content\n\n"
            f"{fenced(pretty_json(value), 'json')}\n\n"
            f"{text_trailer(source_url)}\n"
        )

    def from_csv(self, content: str, source_url: str) -> str:
        table = parse_csv(content)
        if not table.rows:
            raise ConversionError(
                self.display_name, ValueError("CSV data appears to be empty or invalid")
            )

        headers = table.headers
        lines = [
            "# CSV Data",
            "",
            f"| {' | '.join(escape_cell(h) for h in headers)} |",
            f"| {' | '.join('---' for _ in headers)} |",
        ]
        for row in table.rows[:MARKDOWN_TABLE_MAX_ROWS]:
            lines.append(f"| {' | '.join(escape_cell(row[h]) for h in headers)} |")

        if len(table) > MARKDOWN_TABLE_MAX_ROWS:
            lines += ["", f"*Table truncated. Total rows: {len(table)}*"]

        return "\n".join(lines) + f"\n\n{text_trailer(source_url)}\n"

    def from_xml(self, content: str, source_url: str) -> str:
        try:
            tree = xml_to_tree(content)
        except ParseError:
            return f"{fenced(content)}\n\n{text_trailer(source_url)}\n"
        return (
            "# XML Content\n\n"
            f"## As JSON\n\n{fenced(pretty_json(tree), 'json')}\n\n"
            f"## Original XML\n\n{fenced(content, 'xml')}\n\n"
            f"{text_trailer(source_url)}\n"
        )

    def from_text(self, content: str, source_url: str) -> str:
        body = fenced(content) if len(content) < MARKDOWN_FENCE_THRESHOLD else content
        return f"# Content\n\n{body}\n\n{text_trailer(source_url)}\n"
