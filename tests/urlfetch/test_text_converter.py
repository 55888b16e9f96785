"""Tests for the plain text converter."""

import json

import pytest

from urlfetch.constants import ContentFamily
from urlfetch.conversion.text_converter import TextConverter, strip_markdown
from urlfetch.utils import provenance

URL = "https://example.com/source"
STAMP = "2024-05-01 12:00:00"
TRAILER = f"Source: {URL}\nConverted: {STAMP}"


@pytest.fixture
def converter():
    return TextConverter()


@pytest.fixture(autouse=True)
def _fixed_clock(monkeypatch):
    monkeypatch.setattr(provenance, "local_timestamp", lambda: STAMP)


def body_of(out):
    assert out.endswith(f"\n\n{TRAILER}")
    return out[: -len(f"\n\n{TRAILER}")]


class TestFromHtml:
    def test_visible_text_collapsed(self, converter):
        markup = (
            "<html><head><style>p { color: red }</style></head>"
            "<body><h1>T</h1>\n<p>a   b</p><script>s()</script></body></html>"
        )
        assert body_of(converter.convert(markup, ContentFamily.HTML, URL)) == "T a b"


class TestFromJson:
    def test_pretty(self, converter):
        out = body_of(converter.convert('{"a":1}', ContentFamily.JSON, URL))
        assert json.loads(out) == {"a": 1}
        assert out == '{\n  "a": 1\n}'

    def test_malformed_passes_through(self, converter):
        assert body_of(converter.convert("{oops", ContentFamily.JSON, URL)) == "{oops"


class TestFromMarkdown:
    def test_syntax_is_stripped(self):
        source = (
            "# Head\n\n"
            "**bold** and *it* and `code`\n\n"
            "![alt](i.png) [text](https://example.com)\n\n"
            "* item\n\n"
            "```\ncode block\n```\n"
        )
        out = strip_markdown(source)
        assert "Head\n" in out
        assert "#" not in out
        assert "bold and it and code" in out
        assert "[Image: alt] text (https://example.com)" in out
        assert "- item" in out
        assert "code block" not in out

    def test_trailer(self, converter):
        assert body_of(converter.convert("## x", ContentFamily.MARKDOWN, URL)) == "x"


class TestFromCsv:
    def test_table(self, converter):
        out = body_of(converter.convert("a,b\n1,2\n", ContentFamily.CSV, URL))
        assert out == "a | b\n----|----\n1 | 2"

    def test_truncated_at_twenty_five_rows(self, converter):
        source = "n,sq\n" + "".join(f"{i},{i * i}\n" for i in range(60))
        out = body_of(converter.convert(source, ContentFamily.CSV, URL))
        lines = out.splitlines()
        data = [line for line in lines[2:] if " | " in line]
        assert len(data) == 25
        assert data[-1] == "24 | 576"
        assert lines[-1] == "[Table truncated. Total rows: 60]"

    def test_zero_rows_notice(self, converter):
        out = converter.convert("a,b\n", ContentFamily.CSV, URL)
        assert body_of(out) == "Empty or invalid CSV data"


class TestFromXml:
    def test_tree(self, converter):
        out = body_of(converter.convert("<r><v>1</v></r>", ContentFamily.XML, URL))
        assert json.loads(out) == {"r": {"v": 1}}

    def test_malformed_passes_through(self, converter):
        out = converter.convert("<a><b></a>", ContentFamily.XML, URL)
        assert body_of(out) == "<a><b></a>"


class TestFromText:
    def test_pass_through(self, converter):
        assert converter.convert("hello", ContentFamily.TEXT, URL) == f"hello\n\n{TRAILER}"
