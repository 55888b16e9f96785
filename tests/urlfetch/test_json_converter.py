"""Tests for the JSON converter."""

import json

import pytest

from urlfetch.constants import ContentFamily
from urlfetch.conversion.base import Converter
from urlfetch.conversion.json_converter import JsonConverter
from urlfetch.errors import ConversionError
from urlfetch.utils.html import sanitize_html

URL = "https://example.com/page"

PAGE = (
    "<html><head><title>T</title>"
    '<meta name="description" content="D"></head>'
    '<body><h1>One</h1><p>Hi <a href="/x">link</a></p>'
    "<script>var secret = 1;</script><h1>Two</h1></body></html>"
)


@pytest.fixture
def converter():
    return JsonConverter()


class TestFromJson:
    def test_reformats(self, converter):
        out = converter.convert('{"a":[1,2]}', ContentFamily.JSON, URL)
        assert out == '{\n  "a": [\n    1,\n    2\n  ]\n}'

    def test_malformed_is_wrapped(self, converter):
        out = converter.convert("{oops", ContentFamily.JSON, URL)
        assert json.loads(out) == {"content": "{oops"}


class TestFromHtml:
    def test_extracts_page_summary(self, converter):
        record = json.loads(converter.convert(PAGE, ContentFamily.HTML, URL))
        assert record["title"] == "T"
        assert record["metaDescription"] == "D"
        assert record["h1"] == ["One", "Two"]
        assert record["links"] == [{"text": "link", "href": "/x"}]
        assert "Hi link" in record["text"]
        assert "secret" not in record["text"]
        assert record["htmlLength"] == len(sanitize_html(PAGE).encode("utf-8"))

    def test_missing_fields(self, converter):
        record = json.loads(converter.convert("<p>bare</p>", ContentFamily.HTML, URL))
        assert record["title"] == ""
        assert record["metaDescription"] == ""
        assert record["h1"] == []
        assert record["text"] == "bare"


class TestFromMarkdown:
    def test_structure(self, converter):
        source = "# Title\n\nSome [link](https://example.com).\n\n## Sub\n\nMore text.\n"
        record = json.loads(converter.convert(source, ContentFamily.MARKDOWN, URL))
        assert record["title"] == "Title"
        assert record["headings"] == [
            {"level": 1, "text": "Title"},
            {"level": 2, "text": "Sub"},
        ]
        assert record["links"] == [{"text": "link", "href": "https://example.com"}]
        assert "More text." in record["text"]

    def test_no_heading(self, converter):
        record = json.loads(converter.convert("plain", ContentFamily.MARKDOWN, URL))
        assert record["title"] == ""
        assert record["headings"] == []


class TestFromCsv:
    def test_records_in_order(self, converter):
        out = converter.convert("a,b\n1,2\n3,4\n", ContentFamily.CSV, URL)
        assert json.loads(out) == [{"a": "1", "b": "2"}, {"a": "3", "b": "4"}]

    def test_empty(self, converter):
        assert json.loads(converter.convert("", ContentFamily.CSV, URL)) == []


class TestFromXml:
    def test_tree(self, converter):
        out = converter.convert('<root lang="en"><v>1</v></root>', ContentFamily.XML, URL)
        assert json.loads(out) == {"root": {"@_lang": "en", "v": 1}}

    def test_malformed_propagates(self, converter):
        with pytest.raises(ConversionError) as exc_info:
            converter.convert("<a><b></a>", ContentFamily.XML, URL)
        assert exc_info.value.target == "JSON"
        assert exc_info.value.message.startswith("JSON conversion error: Failed to parse XML")

    def test_malformed_wrapped_when_not_strict(self):
        converter = JsonConverter(strict_xml=False)
        out = converter.convert("<a><b></a>", ContentFamily.XML, URL)
        assert json.loads(out) == {"content": "<a><b></a>"}


class TestFromText:
    def test_wrapper(self, converter):
        record = json.loads(converter.convert("hello", ContentFamily.TEXT, URL))
        assert record["content"] == "hello"
        assert record["type"] == "text"
        assert record["source"] == URL
        assert record["length"] == 5
        assert record["timestamp"].endswith("Z")


class TestConverterContract:
    def test_every_family_is_required(self):
        """A converter missing one family handler cannot be built."""

        class Partial(Converter):
            target = ContentFamily.TEXT
            display_name = "Partial"

            def from_json(self, content, source_url):
                return content

            def from_html(self, content, source_url):
                return content

            def from_markdown(self, content, source_url):
                return content

            def from_xml(self, content, source_url):
                return content

            def from_text(self, content, source_url):
                return content

        with pytest.raises(TypeError):
            Partial()
