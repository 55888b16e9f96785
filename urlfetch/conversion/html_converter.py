"""Convert any content family to HTML.

Everything except HTML input is emitted as a standalone document with a
provenance footer. HTML input is sanitized and returned as a fragment.
"""

from typing import Optional

from urlfetch.constants import ContentFamily
from urlfetch.conversion import dom
from urlfetch.conversion.base import Converter
from urlfetch.conversion.parsers import parse_csv, parse_json, pretty_json, xml_to_tree
from urlfetch.errors import ConversionError, ParseError
from urlfetch.utils.html import (
    CONTENT_ALLOWED_ATTRIBUTES,
    CONTENT_ALLOWED_TAGS,
    escape_html,
    highlight_json,
    sanitize_html,
)
from urlfetch.utils.provenance import html_footer

BASE_STYLE = (
    "body { font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, "
    "'Helvetica Neue', sans-serif; line-height: 1.6; padding: 20px; }\n"
    "    pre { background-color: #f5f5f5; padding: 15px; border-radius: 5px; overflow-x: auto; }"
)

JSON_STYLE = (
    ".json-key { color: #0033b3; }\n"
    "    .json-string { color: #388E3C; }\n"
    "    .json-number { color: #1976D2; }\n"
    "    .json-boolean { color: #7E57C2; }\n"
    "    .json-null { color: #5D4037; }"
)

MARKDOWN_STYLE = (
    "body { max-width: 800px; margin: 0 auto; }\n"
    "    img { max-width: 100%; height: auto; }\n"
    "    code { background-color: #f5f5f5; padding: 2px 4px; border-radius: 3px; }\n"
    "    blockquote { border-left: 4px solid #ddd; padding-left: 15px; color: #666; }\n"
    "    table { border-collapse: collapse; width: 100%; }\n"
    "    table, th, td { border: 1px solid #ddd; }\n"
    "    th, td { padding: 8px; text-align: left; }"
)

TABLE_STYLE = (
    "table { border-collapse: collapse; width: 100%; margin-bottom: 20px; }\n"
    "    th, td { padding: 8px; text-align: left; border: 1px solid #ddd; }\n"
    "    th { background-color: #f5f5f5; position: sticky; top: 0; }\n"
    "    tr:nth-child(even) { background-color: #f9f9f9; }\n"
    "    .container { max-height: 600px; overflow-y: auto; margin-top: 20px; }"
)

TEXT_STYLE = "pre { white-space: pre-wrap; }"


def render_document(
    title: str,
    body: str,
    source_url: str,
    style: str = "",
    footer_note: Optional[str] = None,
) -> str:
    """Wrap body markup in a minimal standalone document with a footer."""
    styles = BASE_STYLE + (f"\n    {style}" if style else "")
    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{escape_html(title)}</title>
  <style>
    {styles}
  </style>
</head>
<body>
{body}
{html_footer(source_url, footer_note)}
</body>
</html>"""


def raw_pre(content: str) -> str:
    return f"<pre>{escape_html(content)}</pre>"


class HtmlConverter(Converter):
    """HTML output."""

    target = ContentFamily.HTML
    display_name = "HTML"

    def from_html(self, content: str, source_url: str) -> str:
        return sanitize_html(content, CONTENT_ALLOWED_TAGS, CONTENT_ALLOWED_ATTRIBUTES)

    def from_json(self, content: str, source_url: str) -> str:
        try:
            value = parse_json(content)
        except ParseError:
            return raw_pre(content)
        body = (
            "  <h1>JSON Content</h1>\n"
            f"  <pre>{highlight_json(pretty_json(value))}</pre>"
        )
        return render_document("JSON Viewer", body, source_url, JSON_STYLE)

    def from_markdown(self, content: str, source_url: str) -> str:
        rendered = sanitize_html(
            dom.render_markdown(content), CONTENT_ALLOWED_TAGS, CONTENT_ALLOWED_ATTRIBUTES
        )
        return render_document("Markdown Content", rendered, source_url, MARKDOWN_STYLE)

    def from_csv(self, content: str, source_url: str) -> str:
        table = parse_csv(content)
        if not table.rows:
            raise ConversionError(
                self.display_name, ValueError("CSV data appears to be empty or invalid")
            )

        header_cells = "".join(f"<th>{escape_html(h)}</th>" for h in table.headers)
        body_rows = "".join(
            "<tr>" + "".join(f"<td>{escape_html(row[h])}</td>" for h in table.headers) + "</tr>"
            for row in table.rows
        )
        markup = (
            '<table border="1">'
            f"<thead><tr>{header_cells}</tr></thead>"
            f"<tbody>{body_rows}</tbody>"
            "</table>"
        )
        body = (
            "  <h1>CSV Data</h1>\n"
            '  <div class="container">\n'
            f"    {markup}\n"
            "  </div>"
        )
        return render_document(
            "CSV Data", body, source_url, TABLE_STYLE, footer_note=f"Total rows: {len(table)}"
        )

    def from_xml(self, content: str, source_url: str) -> str:
        try:
            tree = xml_to_tree(content)
        except ParseError:
            return raw_pre(content)
        body = (
            "  <h1>XML Content</h1>\n"
            "  <h2>Original XML</h2>\n"
            f"  {raw_pre(content)}\n"
            "  <h2>As JSON</h2>\n"
            f"  <pre>{highlight_json(pretty_json(tree))}</pre>"
        )
        return render_document("XML Content", body, source_url, JSON_STYLE)

    def from_text(self, content: str, source_url: str) -> str:
        body = f"  <h1>Text Content</h1>\n  {raw_pre(content)}"
        return render_document("Text Content", body, source_url, TEXT_STYLE)
