"""Content family classification.

Evidence is checked in a fixed order and the first match wins:
1. Declared media type (substring match)
2. URL path suffix
3. Content sniffing
4. Plain text
"""

from typing import Optional
from urllib.parse import urlparse

from urlfetch.constants import ContentFamily
from urlfetch.conversion.parsers import load_json

# Checked in order; "md" also catches text/x-md style types
MEDIA_TYPE_HINTS = (
    (("json",), ContentFamily.JSON),
    (("html",), ContentFamily.HTML),
    (("markdown", "md"), ContentFamily.MARKDOWN),
    (("xml",), ContentFamily.XML),
    (("csv",), ContentFamily.CSV),
)

SUFFIX_HINTS = (
    ((".json",), ContentFamily.JSON),
    ((".html", ".htm"), ContentFamily.HTML),
    ((".md", ".markdown"), ContentFamily.MARKDOWN),
    ((".xml",), ContentFamily.XML),
    ((".csv",), ContentFamily.CSV),
)


def classify(declared_media_type: str, url: str, content: str) -> ContentFamily:
    """Assign exactly one content family to a payload."""
    return (
        from_media_type(declared_media_type)
        or from_url(url)
        or sniff(content)
        or ContentFamily.TEXT
    )


def from_media_type(declared_media_type: str) -> Optional[ContentFamily]:
    media_type = (declared_media_type or "").lower()
    if not media_type:
        return None
    for needles, family in MEDIA_TYPE_HINTS:
        if any(needle in media_type for needle in needles):
            return family
    return None


def from_url(url: str) -> Optional[ContentFamily]:
    if not url:
        return None
    path = urlparse(url).path.lower()
    for suffixes, family in SUFFIX_HINTS:
        if path.endswith(suffixes):
            return family
    return None


def sniff(content: str) -> Optional[ContentFamily]:
    """Guess the family from the content's shape."""
    if not content:
        return None
    stripped = content.strip()

    if stripped.startswith("{") and stripped.endswith("}") and _parses_as_json(stripped):
        return ContentFamily.JSON

    if stripped.startswith("<") and "</html>" in stripped.lower():
        return ContentFamily.HTML

    if "<?xml" in content or ("<" in content and "/>" in content):
        return ContentFamily.XML

    if _looks_like_csv(content):
        return ContentFamily.CSV

    return None


def _parses_as_json(text: str) -> bool:
    try:
        load_json(text)
    except (ValueError, RecursionError):
        return False
    return True


def _looks_like_csv(content: str) -> bool:
    if "," not in content or "\n" not in content:
        return False
    if "<" in content or "{" in content:
        return False
    lines = content.strip().splitlines()
    if len(lines) < 2:
        return False
    first, second = lines[0].count(","), lines[1].count(",")
    return first > 0 and first == second
