"""Unit tests for the BeautifulSoup helpers."""

import pytest
from bs4.element import Comment, NavigableString, Tag

from mailmarker.exceptions import MalformedMarkupError
from mailmarker.utils.html_utils import (
    add_class,
    attrs_as_text,
    check_balanced_components,
    copy_attributes,
    element_siblings,
    find_ancestor_with_class,
    get_attributes,
    get_classes,
    has_class,
    is_conditional_comment,
    parse_document,
    parse_fragment,
    protect_references,
    restore_references,
)

COMPONENTS = ("row", "column", "button")


@pytest.mark.unit
class TestClasses:
    """Test class list helpers."""

    def test_get_classes_of_tag_without_class(self):
        assert get_classes(parse_document("<p>x</p>").p) == []

    def test_get_classes_splits_values(self):
        tag = parse_document('<p class="a  b">x</p>').p
        assert get_classes(tag) == ["a", "b"]

    def test_add_class_skips_duplicates(self):
        tag = parse_document('<p class="a">x</p>').p
        add_class(tag, "a", "b")
        add_class(tag, "b c")
        assert get_classes(tag) == ["a", "b", "c"]
        assert has_class(tag, "c")
        assert not has_class(tag, "d")

    def test_add_empty_class_leaves_tag_alone(self):
        tag = parse_document("<p>x</p>").p
        add_class(tag, "")
        assert not tag.has_attr("class")


@pytest.mark.unit
class TestAttributes:
    """Test attribute reading and copying."""

    def test_get_attributes_joins_class(self):
        tag = parse_document('<td class="a b" colspan="2" nowrap>x</td>').td
        assert get_attributes(tag) == {"class": "a b", "colspan": "2", "nowrap": ""}

    def test_copy_with_block_list(self):
        soup = parse_document('<row id="r" small="6" class="x"></row><table class="row"></table>')
        copy_attributes(soup.row, soup.table, exclude=("small",))
        assert soup.table.attrs == {"class": ["row", "x"], "id": "r"}

    def test_copy_with_allow_list(self):
        soup = parse_document('<button href="#" onclick="x()" style="s"></button><a></a>')
        copy_attributes(soup.button, soup.a, only=("href", "style"))
        assert get_attributes(soup.a) == {"href": "#", "style": "s"}

    def test_copy_overwrites_other_attributes(self):
        soup = parse_document('<p style="new"></p><div style="old"></div>')
        copy_attributes(soup.p, soup.div)
        assert soup.div["style"] == "new"

    def test_attrs_as_text_escapes_values(self):
        assert attrs_as_text({"href": 'a"b&c', "id": "x"}) == 'href="a&quot;b&amp;c" id="x"'

    def test_attrs_as_text_empty(self):
        assert attrs_as_text({}) == ""


@pytest.mark.unit
class TestTreeHelpers:
    """Test parsing and navigation helpers."""

    def test_parse_fragment_returns_detached_nodes(self):
        nodes = parse_fragment("<td>a</td> <td>b</td>")
        assert len(nodes) == 3
        assert all(node.parent is None for node in nodes)
        assert isinstance(nodes[1], NavigableString)

    def test_parse_fragment_of_empty_string(self):
        assert parse_fragment("") == []

    def test_protected_references_survive_a_parse(self):
        html = '<p title="a&amp;b">&nbsp;&copy;</p>'
        protected = protect_references(html)
        assert "&" not in protected
        assert restore_references(parse_document(protected).decode()) == html

    def test_find_ancestor_with_class(self):
        soup = parse_document('<table class="ul list"><tr><td><span>x</span></td></tr></table>')
        ancestor = find_ancestor_with_class(soup.span, ["ol", "ul"])
        assert ancestor is soup.table
        assert find_ancestor_with_class(soup.span, ["missing"]) is None

    def test_element_siblings_skip_text(self):
        soup = parse_document("<div>a<p>1</p> <p>2</p></div>")
        siblings = element_siblings(soup.p)
        assert [tag.get_text() for tag in siblings] == ["1", "2"]
        assert all(isinstance(tag, Tag) for tag in siblings)

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("[if mso]><td><![endif]", True),
            ("[if !mso]><!--", True),
            (" <![endif]", True),
            (" a normal comment ", False),
        ],
    )
    def test_is_conditional_comment(self, text, expected):
        assert is_conditional_comment(Comment(text)) is expected

    def test_text_is_not_a_conditional_comment(self):
        assert not is_conditional_comment(NavigableString("[if mso]"))
        assert not is_conditional_comment(None)


@pytest.mark.unit
class TestBalancedComponents:
    """Test the custom tag balance check."""

    def test_balanced_document(self):
        check_balanced_components("<row><column><p>x</column></row>", COMPONENTS)

    def test_self_closing_component(self):
        check_balanced_components("<row><column/></row>", COMPONENTS)

    def test_unterminated(self):
        with pytest.raises(MalformedMarkupError, match="Unterminated <row>"):
            check_balanced_components("<row>\n  <column>x</column>\n", COMPONENTS)

    def test_mismatched_reports_open_tag_position(self):
        with pytest.raises(MalformedMarkupError) as exc_info:
            check_balanced_components("<row>\n  <column>x</row>", COMPONENTS)
        error = exc_info.value
        assert error.tag_name == "column"
        assert (error.line, error.column) == (2, 2)

    def test_unexpected_close(self):
        with pytest.raises(MalformedMarkupError, match="Unexpected closing tag </button>"):
            check_balanced_components("x</button>", COMPONENTS)

    def test_components_in_comments_are_ignored(self):
        check_balanced_components("<!-- <row> --><p>x</p>", COMPONENTS)
