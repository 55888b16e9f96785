"""Data model shared by retrieval, conversion and the tool handlers."""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from urlfetch.constants import ContentFamily, RetrievalMethod


@dataclass
class RetrievalOptions:
    """How a URL should be retrieved."""
    use_dynamic_rendering: bool = False
    render_wait_ms: int = 0
    wait_for_selector: Optional[str] = None
    capture_screenshot: bool = False

    @property
    def needs_browser(self) -> bool:
        """Selector waits and screenshots only exist on the browser path."""
        return (
            self.use_dynamic_rendering
            or self.capture_screenshot
            or bool(self.wait_for_selector)
        )

    @classmethod
    def from_arguments(cls, arguments: Dict[str, Any]) -> "RetrievalOptions":
        """Build options from tool arguments (camelCase, as the tools expose them)."""
        wait_ms = arguments.get("renderWaitMs") or 0
        return cls(
            use_dynamic_rendering=bool(arguments.get("useDynamicRendering", False)),
            render_wait_ms=max(int(wait_ms), 0),
            wait_for_selector=arguments.get("waitForSelector") or None,
            capture_screenshot=bool(arguments.get("captureScreenshot", False)),
        )


@dataclass
class RetrievedPayload:
    """Raw content produced once per request by the retriever."""
    text: str
    declared_media_type: str
    url: str
    raw_headers: Dict[str, str] = field(default_factory=dict)
    screenshot: Optional[bytes] = None
    method: str = RetrievalMethod.HTTP


@dataclass(frozen=True)
class ConversionRequest:
    """Everything a conversion depends on."""
    content: str
    source: ContentFamily
    target: ContentFamily
    source_url: str


@dataclass
class ConversionResult:
    """Outcome of one conversion: text on success, a message on failure."""
    success: bool
    text: Optional[str] = None
    error: Optional[str] = None
    target: Optional[ContentFamily] = None

    @classmethod
    def ok(cls, text: str, target: ContentFamily) -> "ConversionResult":
        return cls(success=True, text=text, target=target)

    @classmethod
    def failed(cls, error: str, target: ContentFamily) -> "ConversionResult":
        return cls(success=False, error=error, target=target)
