"""Convert tool - run detection and conversion on caller-supplied content."""

import logging
from typing import Any, Dict

from urlfetch.constants import OutputFormat
from urlfetch.conversion import classify, resolve_target
from urlfetch.errors import ErrorResponse
from urlfetch.tools.base import ConvertingTool

logger = logging.getLogger(__name__)

ERROR_PREFIX = "Error converting content: "

# Source stamp used when the caller gives no URL
INLINE_SOURCE = "inline"


class ConvertTool(ConvertingTool):
    """Convert content without retrieving anything. Nothing is recorded in history."""

    async def handle(self, **kwargs) -> Dict[str, Any]:
        """Handle convert request."""
        content = kwargs.get("content")
        output_format = kwargs.get("format") or OutputFormat.AUTO
        content_type = kwargs.get("content_type") or ""
        source_url = kwargs.get("source_url") or INLINE_SOURCE

        if not isinstance(content, str):
            return ErrorResponse.invalid_argument(f"{ERROR_PREFIX}content is required").to_dict()

        source = classify(content_type, source_url, content)
        try:
            target = resolve_target(output_format, source)
        except ValueError as e:
            return ErrorResponse.invalid_argument(f"{ERROR_PREFIX}{e}").to_dict()

        logger.debug(f"Convert: {source.value} -> {target.value} ({len(content)} chars)")
        result = self.run_conversion(content, source, target, source_url)
        if not result.success:
            return ErrorResponse.conversion_failed(ERROR_PREFIX, result.error).to_dict()

        return {
            "status": "success",
            "text": result.text,
            "source_format": source.value,
            "format": target.value,
        }
