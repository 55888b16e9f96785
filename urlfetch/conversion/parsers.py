"""Parsers shared by the converters: JSON, CSV and XML -> JSON tree."""

import csv
import io
import json
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Union

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError as XMLSyntaxError
from defusedxml.ElementTree import fromstring

from urlfetch.constants import ContentFamily, XML_ATTRIBUTE_PREFIX, XML_TEXT_KEY
from urlfetch.errors import ParseError


def reject_constant(name: str) -> Any:
    """``parse_constant`` hook: NaN and Infinity are not JSON."""
    raise ValueError(f"{name} is not valid JSON")


def load_json(content: str) -> Any:
    """``json.loads`` without the NaN/Infinity extension.

    Raises:
        ValueError: malformed JSON
        RecursionError: nesting deeper than the interpreter can decode
    """
    return json.loads(content, parse_constant=reject_constant)


def parse_json(content: str) -> Any:
    """Parse JSON, raising ParseError on malformed or too deeply nested input."""
    try:
        return load_json(content)
    except (ValueError, RecursionError) as e:
        raise ParseError(f"Invalid JSON: {e}", ContentFamily.JSON, cause=e) from e


def pretty_json(value: Any) -> str:
    """Serialize with 2-space indentation."""
    return json.dumps(value, indent=2, ensure_ascii=False)


# ---------------------------------------------------------------------------
# CSV
# ---------------------------------------------------------------------------


@dataclass
class CsvTable:
    """CSV parsed with the first row as field names."""
    headers: List[str] = field(default_factory=list)
    rows: List[Dict[str, str]] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rows)


def parse_csv(content: str) -> CsvTable:
    """Parse CSV text into records keyed by the header row.

    Blank lines are skipped. Short rows are padded with empty strings and
    cells beyond the header width are dropped.
    """
    reader = csv.reader(io.StringIO(content.lstrip("\ufeff")))
    try:
        records = [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise ParseError(f"Invalid CSV: {e}", ContentFamily.CSV, cause=e) from e

    if not records:
        return CsvTable()

    headers = [cell.strip() for cell in records[0]]
    rows = []
    for record in records[1:]:
        cells = [cell.strip() for cell in record]
        cells += [""] * (len(headers) - len(cells))
        rows.append(dict(zip(headers, cells)))
    return CsvTable(headers=headers, rows=rows)


# ---------------------------------------------------------------------------
# XML -> JSON tree
# ---------------------------------------------------------------------------

# Private-use character; cannot appear in a well-formed attribute by accident
_BOOLEAN_MARK = "\ue000"

_DECLARATION = re.compile(r"^<\?xml\s+(?P<attrs>.*?)\?>", re.DOTALL)
_DECLARATION_ATTRIBUTE = re.compile(r"""([\w.:\-]+)\s*=\s*(?:"([^"]*)"|'([^']*)')""")
_START_TAG = re.compile(
    r"<(?P<name>[A-Za-z_][\w:.\-]*)"
    r"(?P<attrs>(?:\s+[^\s=/>]+(?:\s*=\s*(?:\"[^\"]*\"|'[^']*'))?)+)"
    r"(?P<tail>\s*/?)>"
)
_LITERAL_SPAN = re.compile(r"(<!\[CDATA\[.*?\]\]>|<!--.*?-->)", re.DOTALL)
_ATTRIBUTE_TOKEN = re.compile(r"""\s+([^\s=/>]+)(\s*=\s*(?:"[^"]*"|'[^']*'))?""")
_NUMBER = re.compile(r"^-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+\-]?\d+)?$")

XmlValue = Union[Dict[str, Any], List[Any], str, int, float]


def xml_to_tree(content: str) -> Dict[str, Any]:
    """Parse XML into a nested key/value tree.

    - attributes become ``@_name`` keys, valueless attributes become True
    - repeated child elements collapse into a list
    - mixed text is stored under ``#text``
    - numeric leaf text becomes int/float
    - an XML declaration is kept under ``?xml``

    Raises:
        ParseError: content is not well-formed XML
    """
    source = content.lstrip("\ufeff").strip()
    try:
        root = fromstring(_expand_boolean_attributes(source))
    except (XMLSyntaxError, DefusedXmlException) as e:
        raise ParseError(f"Failed to parse XML: {e}", ContentFamily.XML, cause=e) from e

    tree: Dict[str, Any] = {}
    declaration = _DECLARATION.match(source)
    if declaration:
        tree["?xml"] = {
            f"{XML_ATTRIBUTE_PREFIX}{name}": double or single
            for name, double, single in _DECLARATION_ATTRIBUTE.findall(declaration.group("attrs"))
        }
    try:
        tree[_local_name(root.tag)] = _element_value(root)
    except RecursionError as e:
        raise ParseError(
            "Failed to parse XML: elements nested too deeply", ContentFamily.XML, cause=e
        ) from e
    return tree


def _expand_boolean_attributes(xml: str) -> str:
    """Give valueless attributes (``<input disabled>``) a marker value.

    CDATA sections and comments are character data, so tag-like text
    inside them is left alone.
    """

    def fix_attribute(match: re.Match) -> str:
        if match.group(2):
            return match.group(0)
        return f' {match.group(1)}="{_BOOLEAN_MARK}"'

    def fix_tag(match: re.Match) -> str:
        attrs = _ATTRIBUTE_TOKEN.sub(fix_attribute, match.group("attrs"))
        return f"<{match.group('name')}{attrs}{match.group('tail')}>"

    # re.split with a capture group puts the literal spans at odd indexes
    parts = _LITERAL_SPAN.split(xml)
    for i in range(0, len(parts), 2):
        parts[i] = _START_TAG.sub(fix_tag, parts[i])
    return "".join(parts)


def _element_value(element) -> XmlValue:
    attributes = {
        f"{XML_ATTRIBUTE_PREFIX}{_local_name(name)}": True if value == _BOOLEAN_MARK else value
        for name, value in element.attrib.items()
    }
    children = list(element)
    text = "".join(_text_nodes(element)).strip()

    if not children and not attributes:
        return _scalar(text)

    node: Dict[str, Any] = dict(attributes)
    repeated = set()
    for child in children:
        key = _local_name(child.tag)
        value = _element_value(child)
        if key not in node:
            node[key] = value
        elif key in repeated:
            node[key].append(value)
        else:
            node[key] = [node[key], value]
            repeated.add(key)

    if text:
        node[XML_TEXT_KEY] = _scalar(text)
    return node


def _text_nodes(element):
    if element.text:
        yield element.text
    for child in element:
        if child.tail:
            yield child.tail


def _scalar(text: str) -> Union[str, int, float]:
    if _NUMBER.match(text):
        number = float(text)
        if number.is_integer() and "." not in text and "e" not in text.lower():
            return int(text)
        return number
    return text


def _local_name(tag: str) -> str:
    if tag.startswith("{"):
        return tag.split("}", 1)[1]
    return tag
