"""Format detection and conversion engine.

``convert`` is the engine's boundary: converter failures come back as a
failed ConversionResult, never as an exception.
"""

import logging
from typing import Dict, Optional

from urlfetch.constants import ContentFamily, OutputFormat
from urlfetch.conversion.base import Converter
from urlfetch.conversion.classifier import classify
from urlfetch.conversion.html_converter import HtmlConverter
from urlfetch.conversion.json_converter import JsonConverter
from urlfetch.conversion.markdown_converter import MarkdownConverter
from urlfetch.conversion.text_converter import TextConverter
from urlfetch.errors import ConversionError
from urlfetch.models import ConversionRequest, ConversionResult

logger = logging.getLogger(__name__)

# Source families that have an output converter of their own
_AUTO_TARGETS = {
    ContentFamily.JSON: ContentFamily.JSON,
    ContentFamily.HTML: ContentFamily.HTML,
    ContentFamily.MARKDOWN: ContentFamily.MARKDOWN,
}


def build_converters(strict_xml: bool = True) -> Dict[ContentFamily, Converter]:
    """One converter per output family."""
    return {
        ContentFamily.JSON: JsonConverter(strict_xml=strict_xml),
        ContentFamily.HTML: HtmlConverter(),
        ContentFamily.MARKDOWN: MarkdownConverter(),
        ContentFamily.TEXT: TextConverter(),
    }


_DEFAULT_CONVERTERS = build_converters()


def resolve_target(output_format: str, source: ContentFamily) -> ContentFamily:
    """Map a requested output format to the converter's family.

    ``auto`` keeps the source family when it has a converter, otherwise
    (XML, CSV, text) it falls back to plain text.

    Raises:
        ValueError: unknown output format
    """
    if output_format == OutputFormat.AUTO:
        return _AUTO_TARGETS.get(source, ContentFamily.TEXT)
    try:
        return OutputFormat.FAMILIES[output_format]
    except KeyError:
        raise ValueError(
            f"Unknown format: {output_format}. Must be one of {', '.join(OutputFormat.ALL)}"
        ) from None


def convert(
    request: ConversionRequest,
    converters: Optional[Dict[ContentFamily, Converter]] = None,
) -> ConversionResult:
    """Run the converter for ``request.target`` on the request's content."""
    converter = (converters or _DEFAULT_CONVERTERS)[request.target]
    try:
        text = converter.convert(request.content, request.source, request.source_url)
    except ConversionError as e:
        logger.warning(
            f"{request.source.value} -> {request.target.value} failed for {request.source_url}: {e}",
            extra={
                "url": request.source_url,
                "source_format": request.source.value,
                "target_format": request.target.value,
            },
        )
        return ConversionResult.failed(e.message, request.target)
    return ConversionResult.ok(text, request.target)


__all__ = [
    "Converter",
    "HtmlConverter",
    "JsonConverter",
    "MarkdownConverter",
    "TextConverter",
    "build_converters",
    "classify",
    "convert",
    "resolve_target",
]
