"""Shared plumbing for the fetch tools: retrieve, classify, convert, record."""

import base64
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional
from urllib.parse import urlparse

from urlfetch.config import Settings
from urlfetch.constants import ContentFamily
from urlfetch.conversion import build_converters, classify, convert
from urlfetch.errors import ErrorCode, ErrorResponse, RetrievalError
from urlfetch.history import RecentFetches
from urlfetch.models import ConversionRequest, ConversionResult, RetrievalOptions, RetrievedPayload
from urlfetch.retrieval import Retriever

logger = logging.getLogger(__name__)

ALLOWED_URL_SCHEMES = ("http", "https")


def validate_url(url: Any) -> Optional[str]:
    """Return an error message for an unusable URL, None if it is fine."""
    if not url or not isinstance(url, str):
        return "url is required"
    parsed = urlparse(url)
    if parsed.scheme not in ALLOWED_URL_SCHEMES or not parsed.netloc:
        return f"Invalid URL: {url}"
    return None


class ConvertingTool:
    """Base for tools that run the conversion engine."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or Settings()
        self.converters = build_converters(strict_xml=self.settings.strict_xml)

    def run_conversion(
        self, content: str, source: ContentFamily, target: ContentFamily, source_url: str
    ) -> ConversionResult:
        request = ConversionRequest(
            content=content, source=source, target=target, source_url=source_url
        )
        return convert(request, self.converters)


class FetchToolBase(ConvertingTool, ABC):
    """Retrieve a URL once, convert it, and record the fetch.

    Subclasses implement ``render`` and set ``error_prefix``. The history
    label is ``output_format`` when set, else the converter's target family.
    """

    error_prefix: str = ""
    output_format: Optional[str] = None

    def __init__(
        self,
        retriever: Retriever,
        history: RecentFetches,
        settings: Optional[Settings] = None,
    ):
        super().__init__(settings or retriever.settings)
        self.retriever = retriever
        self.history = history

    @abstractmethod
    def render(
        self, payload: RetrievedPayload, source: ContentFamily, arguments: Dict[str, Any]
    ) -> ConversionResult:
        """Convert the retrieved payload for this tool."""

    def validate(self, arguments: Dict[str, Any]) -> Optional[str]:
        """Extra argument checks; return an error message or None."""
        return None

    async def handle(self, **kwargs) -> Dict[str, Any]:
        """Handle fetch request."""
        url = kwargs.get("url")
        logger.debug(f"{type(self).__name__}: url={url}")

        problem = validate_url(url) or self.validate(kwargs)
        if problem:
            return ErrorResponse.invalid_argument(f"{self.error_prefix}{problem}").to_dict()

        try:
            options = RetrievalOptions.from_arguments(kwargs)
        except (TypeError, ValueError) as e:
            return ErrorResponse.invalid_argument(f"{self.error_prefix}{e}").to_dict()

        try:
            payload = await self.retriever.retrieve(url, options)
            source = classify(payload.declared_media_type, url, payload.text)
            result = self.render(payload, source, kwargs)
        except RetrievalError as e:
            logger.warning(f"Retrieval failed for {url}: {e.message}")
            return ErrorResponse.retrieval_failed(self.error_prefix, e).to_dict()
        except Exception as e:
            logger.error(f"Unexpected error handling {url}", exc_info=True)
            return ErrorResponse(
                code=ErrorCode.UNKNOWN_ERROR, message=f"{self.error_prefix}{e}"
            ).to_dict()

        if not result.success:
            return ErrorResponse.conversion_failed(self.error_prefix, result.error).to_dict()

        output_format = self.output_format or result.target.value
        self.history.record(url, output_format, payload.method)

        response: Dict[str, Any] = {
            "status": "success",
            "text": self.format_text(url, output_format, result.text),
            "url": url,
            "source_format": source.value,
            "format": output_format,
        }
        if payload.screenshot:
            response["screenshot"] = base64.b64encode(payload.screenshot).decode("ascii")
        return response

    def format_text(self, url: str, output_format: str, text: str) -> str:
        return text
