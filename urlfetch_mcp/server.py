"""MCP server for the URL fetcher.

Exposes 6 tools:
- fetch
- fetch-json
- fetch-html
- fetch-markdown
- fetch-text
- convert

and one resource, recent-urls://list.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional, Union

from mcp.server import Server
from mcp.server.lowlevel import NotificationOptions
from mcp.server.lowlevel.helper_types import ReadResourceContents
from mcp.server.models import InitializationOptions
from mcp.server.stdio import stdio_server
from mcp.types import ImageContent, Resource, TextContent, Tool

from urlfetch.config import Settings, load_settings
from urlfetch.constants import (
    HISTORY_RESOURCE_URI,
    SERVER_NAME,
    SERVER_VERSION,
    OutputFormat,
    ToolName,
)
from urlfetch.errors import ErrorResponse
from urlfetch.history import RecentFetches
from urlfetch.retrieval import Retriever
from urlfetch.tool_descriptions import (
    CAPTURE_SCREENSHOT_DESC,
    CONVERT_CONTENT_DESC,
    CONVERT_CONTENT_TYPE_DESC,
    CONVERT_SOURCE_URL_DESC,
    CONVERT_TOOL_DESC,
    FETCH_FORMAT_DESC,
    FETCH_HTML_EXTRACT_TEXT_DESC,
    FETCH_HTML_TOOL_DESC,
    FETCH_JSON_PRETTY_PRINT_DESC,
    FETCH_JSON_TOOL_DESC,
    FETCH_MARKDOWN_TOOL_DESC,
    FETCH_TEXT_TOOL_DESC,
    FETCH_TOOL_DESC,
    RECENT_URLS_RESOURCE_DESC,
    RENDER_WAIT_MS_DESC,
    URL_DESC,
    USE_DYNAMIC_RENDERING_DESC,
    WAIT_FOR_SELECTOR_DESC,
)
from urlfetch.tools import build_tools
from urlfetch.utils.logger import cleanup_old_logs, get_logger


logger = logging.getLogger(__name__)

ToolContent = Union[TextContent, ImageContent]


class ToolCallError(Exception):
    """A tool returned an error payload; the MCP layer reports it as isError."""


def _fetch_schema(**extra: Dict[str, Any]) -> Dict[str, Any]:
    """Input schema shared by the fetch tools: url plus retrieval options."""
    properties: Dict[str, Any] = {
        "url": {"type": "string", "format": "uri", "description": URL_DESC},
        **extra,
        "useDynamicRendering": {
            "type": "boolean",
            "default": False,
            "description": USE_DYNAMIC_RENDERING_DESC,
        },
        "renderWaitMs": {
            "type": "integer",
            "minimum": 0,
            "description": RENDER_WAIT_MS_DESC,
        },
        "waitForSelector": {"type": "string", "description": WAIT_FOR_SELECTOR_DESC},
        "captureScreenshot": {
            "type": "boolean",
            "default": False,
            "description": CAPTURE_SCREENSHOT_DESC,
        },
    }
    return {"type": "object", "properties": properties, "required": ["url"]}


class URLFetcherServer:
    """MCP Server for the URL fetcher."""

    def __init__(self, settings: Optional[Settings] = None, retriever: Optional[Retriever] = None):
        """Initialize URL fetcher server."""
        self.settings = settings or load_settings()
        self.retriever = retriever or Retriever(self.settings)
        self.history = RecentFetches(maxlen=self.settings.history_size)
        self.tools = build_tools(self.retriever, self.history, self.settings)
        self.server = Server(SERVER_NAME)
        self._setup_handlers()

    def tool_definitions(self) -> List[Tool]:
        return [
            Tool(
                name=ToolName.FETCH,
                description=FETCH_TOOL_DESC,
                inputSchema=_fetch_schema(
                    format={
                        "type": "string",
                        "enum": OutputFormat.ALL,
                        "default": OutputFormat.AUTO,
                        "description": FETCH_FORMAT_DESC,
                    },
                ),
            ),
            Tool(
                name=ToolName.FETCH_JSON,
                description=FETCH_JSON_TOOL_DESC,
                inputSchema=_fetch_schema(
                    prettyPrint={
                        "type": "boolean",
                        "default": True,
                        "description": FETCH_JSON_PRETTY_PRINT_DESC,
                    },
                ),
            ),
            Tool(
                name=ToolName.FETCH_HTML,
                description=FETCH_HTML_TOOL_DESC,
                inputSchema=_fetch_schema(
                    extractText={
                        "type": "boolean",
                        "default": False,
                        "description": FETCH_HTML_EXTRACT_TEXT_DESC,
                    },
                ),
            ),
            Tool(
                name=ToolName.FETCH_MARKDOWN,
                description=FETCH_MARKDOWN_TOOL_DESC,
                inputSchema=_fetch_schema(),
            ),
            Tool(
                name=ToolName.FETCH_TEXT,
                description=FETCH_TEXT_TOOL_DESC,
                inputSchema=_fetch_schema(),
            ),
            Tool(
                name=ToolName.CONVERT,
                description=CONVERT_TOOL_DESC,
                inputSchema={
                    "type": "object",
                    "properties": {
                        "content": {"type": "string", "description": CONVERT_CONTENT_DESC},
                        "format": {
                            "type": "string",
                            "enum": OutputFormat.ALL,
                            "default": OutputFormat.AUTO,
                            "description": FETCH_FORMAT_DESC,
                        },
                        "content_type": {
                            "type": "string",
                            "description": CONVERT_CONTENT_TYPE_DESC,
                        },
                        "source_url": {
                            "type": "string",
                            "description": CONVERT_SOURCE_URL_DESC,
                        },
                    },
                    "required": ["content"],
                },
            ),
        ]

    async def dispatch(self, name: str, arguments: Optional[Dict[str, Any]]) -> List[ToolContent]:
        """Run a tool and turn its result dict into MCP content.

        Raises:
            ToolCallError: the tool reported an error
        """
        tool = self.tools.get(name)
        if tool is None:
            raise ToolCallError(ErrorResponse.unknown_tool(name).message)

        result = await tool.handle(**(arguments or {}))
        if result.get("status") != "success":
            raise ToolCallError(result["error"])

        content: List[ToolContent] = [TextContent(type="text", text=result["text"])]
        if result.get("screenshot"):
            content.append(
                ImageContent(type="image", data=result["screenshot"], mimeType="image/png")
            )
        return content

    def _setup_handlers(self):
        """Register MCP handlers."""

        @self.server.list_tools()
        async def list_tools() -> list[Tool]:
            return self.tool_definitions()

        @self.server.call_tool()
        async def call_tool(name: str, arguments: dict) -> list[ToolContent]:
            """Dispatch to appropriate tool."""
            return await self.dispatch(name, arguments)

        @self.server.list_resources()
        async def list_resources() -> list[Resource]:
            return [
                Resource(
                    uri=HISTORY_RESOURCE_URI,
                    name="recent-urls",
                    description=RECENT_URLS_RESOURCE_DESC,
                    mimeType="text/plain",
                )
            ]

        @self.server.read_resource()
        async def read_resource(uri) -> list[ReadResourceContents]:
            return self.read_history(str(uri))

    def read_history(self, uri: str) -> List[ReadResourceContents]:
        """Contents of the recent-urls resource.

        Raises:
            ValueError: unknown resource URI
        """
        if uri.rstrip("/") != HISTORY_RESOURCE_URI:
            raise ValueError(f"Unknown resource: {uri}")
        return [ReadResourceContents(content=self.history.render(), mime_type="text/plain")]

    async def start(self):
        """Start the MCP server. The retriever is always closed on exit."""
        try:
            async with stdio_server() as (read_stream, write_stream):
                await self.server.run(
                    read_stream,
                    write_stream,
                    InitializationOptions(
                        server_name=SERVER_NAME,
                        server_version=SERVER_VERSION,
                        capabilities=self.server.get_capabilities(
                            notification_options=NotificationOptions(),
                            experimental_capabilities={},
                        ),
                    ),
                )
        finally:
            await self.retriever.aclose()


async def run_stdio(settings: Optional[Settings] = None):
    """Run in stdio mode."""
    server = URLFetcherServer(settings)
    await server.start()


def main():
    """Entry point: configure logging, prune old log backups, serve on stdio."""
    settings = load_settings()
    root_logger = get_logger("urlfetch", level=logging.DEBUG if settings.debug else logging.INFO)
    if settings.log_retention_days > 0:
        removed = cleanup_old_logs(settings.log_retention_days)
        if removed:
            root_logger.info(f"Removed {removed} log backups older than {settings.log_retention_days} days")
    root_logger.info("Starting URL fetcher MCP server")
    asyncio.run(run_stdio(settings))


if __name__ == "__main__":
    main()
