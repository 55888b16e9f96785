"""HTML helpers: escaping, allow-list sanitizing and JSON highlighting.

The sanitizer keeps an allow-list of tags and attributes. Disallowed tags are
unwrapped (their text survives) except for the non-text tags, which are
dropped together with everything inside them.
"""

import html
import re
from typing import Dict, Iterable, Mapping

from bs4 import BeautifulSoup, CData, Comment, Declaration, Doctype, ProcessingInstruction

DEFAULT_ALLOWED_TAGS = frozenset([
    "address", "article", "aside", "footer", "header",
    "h1", "h2", "h3", "h4", "h5", "h6", "hgroup", "main", "nav", "section",
    "blockquote", "dd", "div", "dl", "dt", "figcaption", "figure", "hr", "li",
    "ol", "p", "pre", "ul",
    "a", "abbr", "b", "bdi", "bdo", "br", "cite", "code", "data", "dfn", "em",
    "i", "kbd", "mark", "q", "rb", "rp", "rt", "rtc", "ruby", "s", "samp",
    "small", "span", "strong", "sub", "sup", "time", "u", "var", "wbr",
    "caption", "col", "colgroup", "table", "tbody", "td", "tfoot", "th",
    "thead", "tr",
])

DEFAULT_ALLOWED_ATTRIBUTES: Dict[str, frozenset] = {
    "a": frozenset(["href", "name", "target"]),
}

# Allow-list used when HTML is emitted or turned into Markdown
CONTENT_ALLOWED_TAGS = DEFAULT_ALLOWED_TAGS | {"img"}

CONTENT_ALLOWED_ATTRIBUTES: Dict[str, frozenset] = {
    **DEFAULT_ALLOWED_ATTRIBUTES,
    "img": frozenset(["src", "alt", "title", "width", "height"]),
}

NON_TEXT_TAGS = (
    "script", "style", "textarea", "option", "noscript",
    "head", "template", "iframe", "object", "embed",
)

ALLOWED_SCHEMES = frozenset(["http", "https", "ftp", "mailto", "tel"])

URL_ATTRIBUTES = frozenset(["href", "src"])

_NON_CONTENT_STRINGS = (CData, Comment, Declaration, Doctype, ProcessingInstruction)
_SCHEME = re.compile(r"^([a-zA-Z][a-zA-Z0-9+.\-]*):")
_CONTROL_AND_SPACE = re.compile(r"[\x00-\x20]+")

_JSON_TOKEN = re.compile(
    r'"(?:\\u[a-fA-F0-9]{4}|\\[^u]|[^\\"])*"(?P<colon>\s*:)?'
    r"|\b(?:true|false|null)\b"
    r"|-?\d+(?:\.\d+)?(?:[eE][+\-]?\d+)?"
)


def escape_html(text: str) -> str:
    """Escape text for embedding inside generated HTML."""
    return html.escape(text, quote=True)


def sanitize_html(
    markup: str,
    allowed_tags: Iterable[str] = DEFAULT_ALLOWED_TAGS,
    allowed_attributes: Mapping[str, Iterable[str]] = DEFAULT_ALLOWED_ATTRIBUTES,
) -> str:
    """Strip every tag and attribute not on the allow-list.

    Args:
        markup: HTML document or fragment
        allowed_tags: Tag names kept in the output
        allowed_attributes: Per-tag attribute names kept in the output

    Returns:
        Sanitized HTML fragment
    """
    allowed_tags = frozenset(allowed_tags)
    soup = BeautifulSoup(markup, "html.parser")

    for node in soup.find_all(string=lambda s: isinstance(s, _NON_CONTENT_STRINGS)):
        node.extract()

    for tag in soup.find_all(NON_TEXT_TAGS):
        if not tag.decomposed:
            tag.decompose()

    for tag in soup.find_all(True):
        if tag.name not in allowed_tags:
            tag.unwrap()
            continue
        permitted = allowed_attributes.get(tag.name, ())
        tag.attrs = {
            name: value
            for name, value in tag.attrs.items()
            if name in permitted and _is_safe_attribute(name, value)
        }

    return str(soup)


def _is_safe_attribute(name: str, value) -> bool:
    """URL attributes may only use an allowed scheme (or none)."""
    if name not in URL_ATTRIBUTES:
        return True
    if isinstance(value, list):
        value = " ".join(value)
    match = _SCHEME.match(_CONTROL_AND_SPACE.sub("", value))
    if not match:
        return True
    return match.group(1).lower() in ALLOWED_SCHEMES


def highlight_json(pretty_json: str) -> str:
    """Escape pretty-printed JSON and wrap tokens in classed spans.

    Keys, strings, numbers, booleans and null get ``json-key``,
    ``json-string``, ``json-number``, ``json-boolean`` and ``json-null``.
    """
    parts = []
    position = 0
    for match in _JSON_TOKEN.finditer(pretty_json):
        parts.append(escape_html(pretty_json[position:match.start()]))
        token = match.group(0)
        colon = match.group("colon")
        if colon:
            key = token[: -len(colon)]
            parts.append(f'<span class="json-key">{escape_html(key)}</span>{colon}')
        else:
            parts.append(f'<span class="{_token_class(token)}">{escape_html(token)}</span>')
        position = match.end()
    parts.append(escape_html(pretty_json[position:]))
    return "".join(parts)


def _token_class(token: str) -> str:
    if token.startswith('"'):
        return "json-string"
    if token in ("true", "false"):
        return "json-boolean"
    if token == "null":
        return "json-null"
    return "json-number"
