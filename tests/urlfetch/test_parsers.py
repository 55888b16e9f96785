"""Tests for the JSON, CSV and XML parsers."""

import pytest

from urlfetch.constants import ContentFamily
from urlfetch.conversion.parsers import parse_csv, parse_json, pretty_json, xml_to_tree
from urlfetch.errors import ParseError


class TestJson:
    def test_pretty_json_uses_two_spaces(self):
        assert pretty_json({"a": 1}) == '{\n  "a": 1\n}'

    def test_pretty_json_keeps_unicode(self):
        assert pretty_json({"city": "Zürich"}) == '{\n  "city": "Zürich"\n}'

    def test_parse_error(self):
        with pytest.raises(ParseError) as exc_info:
            parse_json("{oops")
        assert exc_info.value.family is ContentFamily.JSON

    @pytest.mark.parametrize("constant", ["NaN", "Infinity", "-Infinity"])
    def test_non_standard_constants_are_rejected(self, constant):
        with pytest.raises(ParseError, match=f"{constant} is not valid JSON"):
            parse_json(f'{{"a": {constant}}}')

    def test_deep_nesting_is_a_parse_error(self):
        deep = '{"a":' * 5000 + "1" + "}" * 5000
        with pytest.raises(ParseError) as exc_info:
            parse_json(deep)
        assert isinstance(exc_info.value.cause, RecursionError)


class TestCsv:
    def test_header_row_names_fields(self):
        table = parse_csv("name,age\nAnn,30\n\nBob,41\n")
        assert table.headers == ["name", "age"]
        assert table.rows == [{"name": "Ann", "age": "30"}, {"name": "Bob", "age": "41"}]
        assert len(table) == 2

    def test_quoted_commas(self):
        table = parse_csv('a,b\n"x, y",2\n')
        assert table.rows == [{"a": "x, y", "b": "2"}]

    def test_short_rows_are_padded(self):
        table = parse_csv("a,b,c\n1\n")
        assert table.rows == [{"a": "1", "b": "", "c": ""}]

    def test_extra_cells_are_dropped(self):
        table = parse_csv("a,b\n1,2,3\n")
        assert table.rows == [{"a": "1", "b": "2"}]

    def test_header_only(self):
        table = parse_csv("a,b\n")
        assert table.headers == ["a", "b"]
        assert len(table) == 0

    def test_empty(self):
        assert len(parse_csv("")) == 0


class TestXmlTree:
    def test_repeated_children_become_list(self):
        tree = xml_to_tree('<root><item id="1">a</item><item id="2">b</item></root>')
        assert tree == {
            "root": {
                "item": [
                    {"@_id": "1", "#text": "a"},
                    {"@_id": "2", "#text": "b"},
                ]
            }
        }

    def test_numeric_text(self):
        tree = xml_to_tree("<r><n>42</n><f>1.5</f><s>007</s><w>hi</w></r>")
        assert tree == {"r": {"n": 42, "f": 1.5, "s": "007", "w": "hi"}}

    def test_declaration_is_kept(self):
        tree = xml_to_tree('<?xml version="1.0" encoding="UTF-8"?>\n<a>x</a>')
        assert tree["?xml"] == {"@_version": "1.0", "@_encoding": "UTF-8"}
        assert tree["a"] == "x"

    def test_boolean_attribute(self):
        tree = xml_to_tree('<option selected name="x"/>')
        assert tree == {"option": {"@_selected": True, "@_name": "x"}}

    def test_attribute_and_child_with_same_name(self):
        tree = xml_to_tree('<book title="A"><title>B</title></book>')
        assert tree == {"book": {"@_title": "A", "title": "B"}}

    def test_namespaces_are_stripped(self):
        tree = xml_to_tree('<a:root xmlns:a="urn:x"><a:item>1</a:item></a:root>')
        assert tree == {"root": {"item": 1}}

    def test_malformed(self):
        with pytest.raises(ParseError) as exc_info:
            xml_to_tree("<a><b></a>")
        assert exc_info.value.family is ContentFamily.XML
        assert exc_info.value.message.startswith("Failed to parse XML")

    def test_entity_expansion_is_refused(self):
        bomb = (
            '<?xml version="1.0"?>'
            '<!DOCTYPE lolz [<!ENTITY lol "lol"><!ENTITY lol2 "&lol;&lol;">]>'
            "<lolz>&lol2;</lolz>"
        )
        with pytest.raises(ParseError):
            xml_to_tree(bomb)

    def test_deep_nesting_is_a_parse_error(self):
        deep = "<a>" * 3000 + "x" + "</a>" * 3000
        with pytest.raises(ParseError) as exc_info:
            xml_to_tree(deep)
        assert exc_info.value.family is ContentFamily.XML
        assert exc_info.value.message == "Failed to parse XML: elements nested too deeply"

    def test_cdata_text_is_not_rewritten(self):
        assert xml_to_tree("<r><![CDATA[<input disabled>]]></r>") == {"r": "<input disabled>"}

    def test_comments_are_not_rewritten(self):
        tree = xml_to_tree("<r><!-- <old checked> --><input checked/></r>")
        assert tree == {"r": {"input": {"@_checked": True}}}
