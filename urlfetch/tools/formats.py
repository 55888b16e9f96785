"""Single-format fetch tools: fetch-json, fetch-html, fetch-markdown, fetch-text."""

import json
from typing import Any, Dict

from urlfetch.constants import ContentFamily, OutputFormat
from urlfetch.models import ConversionResult, RetrievedPayload
from urlfetch.tools.base import FetchToolBase
from urlfetch.utils.html import escape_html


class FetchJsonTool(FetchToolBase):
    """Fetch and convert to JSON, optionally compact."""

    error_prefix = "Error converting to JSON: "
    output_format = OutputFormat.JSON

    def render(
        self, payload: RetrievedPayload, source: ContentFamily, arguments: Dict[str, Any]
    ) -> ConversionResult:
        result = self.run_conversion(payload.text, source, ContentFamily.JSON, payload.url)
        if result.success and arguments.get("prettyPrint") is False:
            result.text = json.dumps(json.loads(result.text), ensure_ascii=False, separators=(",", ":"))
        return result


class FetchHtmlTool(FetchToolBase):
    """Fetch and convert to HTML, or to escaped plain text in a <pre> block."""

    error_prefix = "Error converting to HTML: "
    output_format = OutputFormat.HTML

    def render(
        self, payload: RetrievedPayload, source: ContentFamily, arguments: Dict[str, Any]
    ) -> ConversionResult:
        if not arguments.get("extractText"):
            return self.run_conversion(payload.text, source, ContentFamily.HTML, payload.url)

        result = self.run_conversion(payload.text, source, ContentFamily.TEXT, payload.url)
        if not result.success:
            return result
        return ConversionResult.ok(f"<pre>{escape_html(result.text)}</pre>", ContentFamily.HTML)


class FetchMarkdownTool(FetchToolBase):
    """Fetch and convert to Markdown."""

    error_prefix = "Error converting to Markdown: "
    output_format = OutputFormat.MARKDOWN

    def render(
        self, payload: RetrievedPayload, source: ContentFamily, arguments: Dict[str, Any]
    ) -> ConversionResult:
        return self.run_conversion(payload.text, source, ContentFamily.MARKDOWN, payload.url)


class FetchTextTool(FetchToolBase):
    """Fetch and convert to plain text."""

    error_prefix = "Error converting to text: "
    output_format = OutputFormat.TEXT

    def render(
        self, payload: RetrievedPayload, source: ContentFamily, arguments: Dict[str, Any]
    ) -> ConversionResult:
        return self.run_conversion(payload.text, source, ContentFamily.TEXT, payload.url)
