"""Tool and resource descriptions for the MCP surface.

Used by urlfetch_mcp/server.py when listing tools and resources.
"""

# ---------------------------------------------------------------------------
# Shared field descriptions (used across multiple tools)
# ---------------------------------------------------------------------------

URL_DESC = "URL to fetch content from (http or https)."

USE_DYNAMIC_RENDERING_DESC = (
    "Render the page in a headless browser so JavaScript runs before the "
    "content is captured. Slower than a plain fetch (default: false)."
)

RENDER_WAIT_MS_DESC = (
    "Extra milliseconds to wait after the page loads before capturing it. "
    "Only used with browser rendering."
)

WAIT_FOR_SELECTOR_DESC = (
    'CSS selector to wait for before capturing (e.g. "#content"). '
    "Implies browser rendering."
)

CAPTURE_SCREENSHOT_DESC = (
    "Return a full-page PNG screenshot alongside the converted content. "
    "Implies browser rendering."
)

# ---------------------------------------------------------------------------
# fetch
# ---------------------------------------------------------------------------

FETCH_TOOL_DESC = (
    "Fetch content from a URL with automatic content type detection. "
    "The source is classified as JSON, HTML, Markdown, XML, CSV or plain text from its "
    "content-type header, URL extension or content, then converted to the requested format. "
    "With format auto, JSON, HTML and Markdown sources keep their own format and "
    "everything else becomes plain text."
)

FETCH_FORMAT_DESC = 'Format to convert to: "auto" (default), "html", "json", "markdown" or "text".'

# ---------------------------------------------------------------------------
# fetch-json
# ---------------------------------------------------------------------------

FETCH_JSON_TOOL_DESC = (
    "Fetch content from any URL and convert to JSON format. HTML pages become a record "
    "of title, description, headings, text and links; CSV becomes a list of row records; "
    "XML becomes a nested tree with attributes prefixed by @_."
)

FETCH_JSON_PRETTY_PRINT_DESC = "Whether to pretty-print the JSON (default: true)."

# ---------------------------------------------------------------------------
# fetch-html
# ---------------------------------------------------------------------------

FETCH_HTML_TOOL_DESC = (
    "Fetch content from any URL and convert to HTML format. HTML sources are sanitized; "
    "other sources are rendered into a standalone document with a source footer."
)

FETCH_HTML_EXTRACT_TEXT_DESC = (
    "Whether to extract text content only, wrapped in a <pre> block (default: false)."
)

# ---------------------------------------------------------------------------
# fetch-markdown / fetch-text
# ---------------------------------------------------------------------------

FETCH_MARKDOWN_TOOL_DESC = (
    "Fetch content from any URL and convert to Markdown format. Markdown sources are "
    "returned unchanged; CSV tables are capped at 50 rows."
)

FETCH_TEXT_TOOL_DESC = (
    "Fetch content from any URL and convert to plain text format. Markup is stripped; "
    "CSV tables are capped at 25 rows."
)

# ---------------------------------------------------------------------------
# convert
# ---------------------------------------------------------------------------

CONVERT_TOOL_DESC = (
    "Convert content you already have, without fetching anything. Uses the same "
    "detection and conversion rules as fetch."
)

CONVERT_CONTENT_DESC = "The source content to convert."

CONVERT_CONTENT_TYPE_DESC = (
    'Optional media type hint for detection (e.g. "text/csv"). '
    "If omitted, the source URL extension and the content itself are used."
)

CONVERT_SOURCE_URL_DESC = (
    "Optional URL the content came from. Used for detection by extension and in the source stamp."
)

# ---------------------------------------------------------------------------
# recent-urls resource
# ---------------------------------------------------------------------------

RECENT_URLS_RESOURCE_DESC = "Recently fetched URLs, newest first."
