"""Convert any content family to pretty-printed JSON."""

import logging

from urlfetch.constants import ContentFamily
from urlfetch.conversion import dom
from urlfetch.conversion.base import Converter
from urlfetch.conversion.parsers import parse_csv, parse_json, pretty_json, xml_to_tree
from urlfetch.errors import ParseError
from urlfetch.utils.html import sanitize_html
from urlfetch.utils.provenance import iso_timestamp

logger = logging.getLogger(__name__)


class JsonConverter(Converter):
    """JSON output.

    Args:
        strict_xml: Raise on malformed XML instead of wrapping the raw
            content like the other branches do.
    """

    target = ContentFamily.JSON
    display_name = "JSON"

    def __init__(self, strict_xml: bool = True):
        self.strict_xml = strict_xml

    def from_json(self, content: str, source_url: str) -> str:
        try:
            return pretty_json(parse_json(content))
        except ParseError:
            return pretty_json({"content": content})

    def from_html(self, content: str, source_url: str) -> str:
        sanitized = sanitize_html(content)
        soup = dom.load(content)
        page_title = dom.title(soup)
        dom.drop_invisible(soup)
        return pretty_json({
            "title": page_title,
            "metaDescription": dom.meta_description(soup),
            "h1": [tag.get_text() for tag in soup.find_all("h1")],
            "text": dom.body_text(soup),
            "links": dom.links(soup),
            "htmlLength": len(sanitized.encode("utf-8")),
        })

    def from_markdown(self, content: str, source_url: str) -> str:
        soup = dom.load(dom.render_markdown(content))
        first_h1 = soup.find("h1")
        return pretty_json({
            "title": first_h1.get_text() if first_h1 else "",
            "headings": dom.headings(soup),
            "text": dom.body_text(soup),
            "links": dom.links(soup),
        })

    def from_xml(self, content: str, source_url: str) -> str:
        try:
            return pretty_json(xml_to_tree(content))
        except ParseError:
            if self.strict_xml:
                raise
            logger.warning(f"Malformed XML from {source_url}, wrapping raw content")
            return pretty_json({"content": content})

    def from_csv(self, content: str, source_url: str) -> str:
        return pretty_json(parse_csv(content).rows)

    def from_text(self, content: str, source_url: str) -> str:
        return pretty_json({
            "content": content,
            "type": ContentFamily.TEXT.value,
            "source": source_url,
            "timestamp": iso_timestamp(),
            "length": len(content),
        })
