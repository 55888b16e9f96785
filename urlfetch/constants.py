"""URL fetcher constants

Centralized constants for content families, output formats, tool names and
the limits applied by the converters.
"""

from enum import Enum


# Every space follows: base_path / HOME_DIR / {logs, config.yaml}
HOME_DIR = ".urlfetch"

SERVER_NAME = "url-fetcher"
SERVER_VERSION = "1.0.0"

HISTORY_RESOURCE_URI = "recent-urls://list"


class ContentFamily(Enum):
    """The six content shapes a payload can be classified as.

    Values double as the wire names used in tool output and in the
    plain-text wrapper's ``type`` field.
    """

    JSON = "json"
    HTML = "html"
    MARKDOWN = "markdown"
    XML = "xml"
    CSV = "csv"
    TEXT = "text"


class OutputFormat:
    """Output format constants accepted by the fetch tools."""

    AUTO = "auto"
    HTML = "html"
    JSON = "json"
    MARKDOWN = "markdown"
    TEXT = "text"

    ALL = [AUTO, HTML, JSON, MARKDOWN, TEXT]

    # Target family for each explicit output format
    FAMILIES = {
        HTML: ContentFamily.HTML,
        JSON: ContentFamily.JSON,
        MARKDOWN: ContentFamily.MARKDOWN,
        TEXT: ContentFamily.TEXT,
    }


class ToolName:
    """Tool name constants."""

    FETCH = "fetch"
    FETCH_JSON = "fetch-json"
    FETCH_HTML = "fetch-html"
    FETCH_MARKDOWN = "fetch-markdown"
    FETCH_TEXT = "fetch-text"
    CONVERT = "convert"

    ALL = [FETCH, FETCH_JSON, FETCH_HTML, FETCH_MARKDOWN, FETCH_TEXT, CONVERT]


class RetrievalMethod:
    """How a payload was retrieved."""

    HTTP = "http"
    BROWSER = "browser"


# Table rendering caps
MARKDOWN_TABLE_MAX_ROWS = 50
TEXT_TABLE_MAX_ROWS = 25

# Plain text shorter than this is fenced when rendered as Markdown
MARKDOWN_FENCE_THRESHOLD = 1000

# Attribute keys in the XML -> JSON tree carry this prefix
XML_ATTRIBUTE_PREFIX = "@_"
XML_TEXT_KEY = "#text"
