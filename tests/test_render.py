import pytest

from worker_rpc.deserializer import deserialize
from worker_rpc.models.ui import CompositeReference, Fragment, HostElement, h
from worker_rpc.render import render_html


def test_primitives():
    assert render_html(None) == ""
    assert render_html(True) == ""
    assert render_html(False) == ""
    assert render_html(7) == "7"
    assert render_html(5.0) == "5"
    assert render_html(2.5) == "2.5"
    assert render_html("<b>&</b>") == "&lt;b&gt;&amp;&lt;/b&gt;"


def test_element_attributes():
    node = h(
        "label",
        {"className": "field", "htmlFor": "q", "hidden": True, "title": None, "disabled": False, "data-x": 'say "hi"'},
        "Query",
    )

    assert render_html(node) == '<label class="field" for="q" hidden data-x="say &quot;hi&quot;">Query</label>'


def test_style_dict_becomes_css():
    node = h("div", {"style": {"marginBottom": "8px", "fontWeight": "bold", "zIndex": 2}})

    assert render_html(node) == '<div style="margin-bottom: 8px; font-weight: bold; z-index: 2"></div>'


def test_void_tags_self_close():
    assert render_html(h("br")) == "<br />"
    assert render_html(h("img", {"src": "/a.png", "alt": "a"})) == '<img src="/a.png" alt="a" />'


def test_fragments_and_sequences_render_their_children():
    node = [Fragment(children=("a",), key=0), Fragment(children=(h("i", None, "b"),), key=1)]

    assert render_html(node) == "a<i>b</i>"


def test_nested_tree():
    node = HostElement(tag="ul", props={}, children=[h("li", None, "one"), h("li", None, "two", 2)])

    assert render_html(node) == "<ul><li>one</li><li>two2</li></ul>"


def test_composite_reference_cannot_be_rendered_by_caller():
    with pytest.raises(TypeError, match="cannot be rendered"):
        render_html(CompositeReference(component="Chart"))


def test_tag_names_that_are_not_plain_names_are_rejected():
    node = deserialize({"tag": "img src=x onerror=alert(1)", "properties": {}})

    with pytest.raises(TypeError, match="Invalid tag name"):
        render_html(node)

    with pytest.raises(TypeError, match="Invalid tag name"):
        render_html(h("div\n"))


def test_attribute_names_that_are_not_plain_names_are_dropped():
    node = deserialize({"tag": "p", "properties": {'a"><script>x</script>': 1, "data-ok": "y"}, "children": ["t"]})

    html_out = render_html(node)

    assert html_out == '<p data-ok="y">t</p>'
    assert "<script>" not in html_out
