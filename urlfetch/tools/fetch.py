"""Fetch tool - fetch a URL and convert it to a chosen or detected format."""

from typing import Any, Dict, Optional

from urlfetch.constants import ContentFamily, OutputFormat
from urlfetch.conversion import resolve_target
from urlfetch.models import ConversionResult, RetrievedPayload
from urlfetch.tools.base import FetchToolBase


class FetchTool(FetchToolBase):
    """Fetch with automatic content type detection."""

    error_prefix = "Error fetching content from URL: "

    def validate(self, arguments: Dict[str, Any]) -> Optional[str]:
        output_format = arguments.get("format") or OutputFormat.AUTO
        if output_format not in OutputFormat.ALL:
            return f"Unknown format: {output_format}. Must be one of {', '.join(OutputFormat.ALL)}"
        return None

    def render(
        self, payload: RetrievedPayload, source: ContentFamily, arguments: Dict[str, Any]
    ) -> ConversionResult:
        target = resolve_target(arguments.get("format") or OutputFormat.AUTO, source)
        return self.run_conversion(payload.text, source, target, payload.url)

    def format_text(self, url: str, output_format: str, text: str) -> str:
        return f"# Content from {url} converted to {output_format}:\n\n{text}"
