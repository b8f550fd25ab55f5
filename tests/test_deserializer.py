import pytest

from worker_rpc.deserializer import deserialize
from worker_rpc.models.ui import Fragment, HostElement, h
from worker_rpc.serializer import serialize


def test_element_is_rebuilt_with_tag_props_and_children():
    wire = {
        "tag": "div",
        "properties": {"className": "card"},
        "children": ["hello", {"tag": "b", "properties": {}, "children": [1]}],
    }

    node = deserialize(wire)

    assert node == HostElement(
        tag="div",
        props={"className": "card"},
        children=["hello", HostElement(tag="b", props={}, children=[1])],
    )


def test_element_without_children_gets_empty_children():
    node = deserialize({"tag": "hr", "properties": {}})

    assert node == HostElement(tag="hr", props={}, children=[])


def test_list_becomes_positionally_keyed_fragments():
    node = deserialize(["a", {"tag": "i", "properties": {}}, None])

    assert node == [
        Fragment(children=("a",), key=0),
        Fragment(children=(HostElement(tag="i", props={}, children=[]),), key=1),
        Fragment(children=(None,), key=2),
    ]


@pytest.mark.parametrize(
    "malformed",
    [
        {"foo": 1},
        {"tag": 5, "properties": {}},
        {"tag": "div", "properties": "nope"},
        {"tag": "div", "properties": None},
        {"tag": "div", "properties": {}, "children": "nope"},
        object(),
    ],
)
def test_malformed_input_degrades_to_absent(malformed):
    assert deserialize(malformed) is None


def test_malformed_child_only_blanks_that_child():
    node = deserialize({"tag": "p", "properties": {}, "children": ["ok", {"foo": 1}]})

    assert node.children == ["ok", None]


def test_children_key_in_properties_is_ignored():
    node = deserialize({"tag": "p", "properties": {"children": "sneaky", "id": "x"}, "children": ["real"]})

    assert node.props == {"id": "x"}
    assert node.children == ["real"]


def test_round_trip_preserves_host_tree():
    tree = h(
        "div",
        {"style": {"padding": "4px"}},
        h("h2", None, "Title"),
        h("p", {"title": "t"}, "Body ", 3),
    )

    rebuilt = deserialize(serialize(tree))

    assert serialize(rebuilt) == serialize(tree)
    assert rebuilt.tag == "div"
    assert [child.tag for child in rebuilt.children] == ["h2", "p"]
