"""Unit tests for bulletproof button expansion."""

import pytest

from mailmarker import Marker, MarkerOptions
from mailmarker.constants import VML_NAMESPACES


@pytest.mark.unit
class TestButtonTransformer:
    """Test VML and anchor rendering of buttons."""

    def test_full_markup(self, marker):
        result = marker.mark_up('<button href="https://example.com" id="cta">Go</button>')
        assert result == (
            f'<!--[if mso]><v:roundrect {VML_NAMESPACES} href="https://example.com" id="cta" class="btn">'
            "<w:anchorlock/><center><![endif]-->"
            '<a href="https://example.com" id="cta" class="btn">Go</a>'
            "<!--[if mso]></center></v:roundrect><![endif]-->"
        )

    def test_attributes_outside_allow_list_are_dropped(self, marker):
        result = marker.mark_up('<button href="#" onclick="track()" data-x="1" small="6">Go</button>')
        assert "onclick" not in result
        assert "data-x" not in result
        assert "small" not in result
        assert '<a href="#" class="btn">Go</a>' in result

    def test_style_and_existing_class_are_kept(self, marker):
        result = marker.mark_up('<button class="primary" style="color:#fff">Go</button>')
        assert '<a class="primary btn" style="color:#fff">Go</a>' in result

    def test_inner_markup_is_kept(self, marker):
        result = marker.mark_up('<button href="#"><b>Buy</b> now</button>')
        assert '<a href="#" class="btn"><b>Buy</b> now</a>' in result

    def test_attribute_values_are_escaped_inside_comments(self, marker):
        result = marker.mark_up('<button href="/a?x=1&amp;y=&quot;2&quot;">Go</button>')
        assert 'href="/a?x=1&amp;y=&quot;2&quot;" class="btn"><w:anchorlock/>' in result

    def test_custom_allow_list(self):
        options = MarkerOptions(allowed_button_attributes=("href", "title"))
        result = Marker(options).mark_up('<button href="#" title="t" id="x">Go</button>')
        assert '<a href="#" title="t">Go</a>' in result

    def test_button_inside_column(self, marker):
        result = marker.mark_up('<row><column><button href="#">Go</button></column></row>')
        assert '<td class="column"><!--[if mso]><v:roundrect' in result
        assert "<![endif]--></td>" in result
