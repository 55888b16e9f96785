"""Tests for escaping, sanitizing and JSON highlighting."""

from urlfetch.utils.html import (
    CONTENT_ALLOWED_ATTRIBUTES,
    CONTENT_ALLOWED_TAGS,
    escape_html,
    highlight_json,
    sanitize_html,
)


class TestEscape:
    def test_escapes_markup_and_quotes(self):
        assert escape_html('<a href="x">&\'</a>') == (
            "&lt;a href=&quot;x&quot;&gt;&amp;&#x27;&lt;/a&gt;"
        )


class TestSanitize:
    def test_drops_script_with_contents(self):
        assert sanitize_html("<p>hi</p><script>alert(1)</script>") == "<p>hi</p>"

    def test_drops_style_and_head(self):
        markup = "<html><head><title>T</title><style>p{}</style></head><body><p>x</p></body></html>"
        assert sanitize_html(markup) == "<p>x</p>"

    def test_unwraps_disallowed_tags(self):
        assert sanitize_html("<div><font color='red'>t</font></div>") == "<div>t</div>"

    def test_strips_disallowed_attributes(self):
        assert sanitize_html('<p onclick="x()" class="c">t</p>') == "<p>t</p>"

    def test_keeps_anchor_attributes(self):
        out = sanitize_html('<a href="https://example.com" target="_blank" onclick="x">e</a>')
        assert out == '<a href="https://example.com" target="_blank">e</a>'

    def test_rejects_javascript_urls(self):
        assert sanitize_html('<a href=" javascript:alert(1)">x</a>') == "<a>x</a>"

    def test_relative_urls_are_fine(self):
        assert sanitize_html('<a href="/docs">d</a>') == '<a href="/docs">d</a>'

    def test_removes_comments(self):
        assert sanitize_html("<p>a<!-- secret --></p>") == "<p>a</p>"

    def test_removes_cdata_sections(self):
        out = sanitize_html("<p>x</p><![CDATA[<script>alert(1)</script>]]>")
        assert out.startswith("<p>x</p>")
        assert "<script>" not in out
        assert "CDATA" not in out

    def test_images_need_content_allow_list(self):
        markup = '<img src="a.png" alt="A" onerror="x()">'
        assert "<img" not in sanitize_html(markup)

        out = sanitize_html(markup, CONTENT_ALLOWED_TAGS, CONTENT_ALLOWED_ATTRIBUTES)
        assert 'src="a.png"' in out
        assert 'alt="A"' in out
        assert "onerror" not in out


class TestHighlightJson:
    def test_token_classes(self):
        out = highlight_json('{\n  "a": 1,\n  "b": "x<y",\n  "c": true,\n  "d": null\n}')
        assert '<span class="json-key">&quot;a&quot;</span>:' in out
        assert '<span class="json-number">1</span>' in out
        assert '<span class="json-string">&quot;x&lt;y&quot;</span>' in out
        assert '<span class="json-boolean">true</span>' in out
        assert '<span class="json-null">null</span>' in out

    def test_escaped_quotes_inside_strings(self):
        out = highlight_json('"say \\"hi\\""')
        assert out == '<span class="json-string">&quot;say \\&quot;hi\\&quot;&quot;</span>'
