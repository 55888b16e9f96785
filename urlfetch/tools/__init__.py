"""Tool handlers, one class per tool name."""

from typing import Dict, Optional

from urlfetch.config import Settings
from urlfetch.constants import ToolName
from urlfetch.history import RecentFetches
from urlfetch.retrieval import Retriever
from urlfetch.tools.convert import ConvertTool
from urlfetch.tools.fetch import FetchTool
from urlfetch.tools.formats import FetchHtmlTool, FetchJsonTool, FetchMarkdownTool, FetchTextTool

FETCH_TOOLS = {
    ToolName.FETCH: FetchTool,
    ToolName.FETCH_JSON: FetchJsonTool,
    ToolName.FETCH_HTML: FetchHtmlTool,
    ToolName.FETCH_MARKDOWN: FetchMarkdownTool,
    ToolName.FETCH_TEXT: FetchTextTool,
}


def build_tools(
    retriever: Retriever, history: RecentFetches, settings: Optional[Settings] = None
) -> Dict[str, object]:
    """Instantiate every tool against one retriever and one history ring."""
    settings = settings or retriever.settings
    tools: Dict[str, object] = {
        name: cls(retriever, history, settings) for name, cls in FETCH_TOOLS.items()
    }
    tools[ToolName.CONVERT] = ConvertTool(settings)
    return tools


__all__ = [
    "ConvertTool",
    "FetchHtmlTool",
    "FetchJsonTool",
    "FetchMarkdownTool",
    "FetchTextTool",
    "FetchTool",
    "build_tools",
]
