import pytest

from percyhtml.vnode import VElement, VText, element, iterable_nodes, text


def test_text_root_renders_its_text():
    assert str(text("some text")) == "some text"


def test_element_with_text_child():
    div = element("div")
    div.children.append(text("Hello World"))
    assert str(div) == "<div>Hello World</div>"


def test_self_closing_child_has_no_closing_tag():
    div = VElement("div", children=[text("Hello "), element("img"), text(" world")])
    assert str(div) == "<div>Hello <img> world</div>"


def test_attribute_rendering():
    div = VElement("div", attrs={"id": "hello-world"})
    assert str(div) == '<div id="hello-world"></div>'


def test_element_equality_ignores_events():
    first = VElement("div", events={"onclick": object()})
    second = element("div")
    assert first == second
    assert VElement("div", children=[element("span")]) != second


def test_insert_space_around_text():
    node = text("Hello")
    node.insert_space_before_text()
    node.insert_space_after_text()
    assert node.text == " Hello "


def test_iterable_nodes_none_is_empty():
    assert iterable_nodes(None) == []


def test_iterable_nodes_single_node():
    em = element("em")
    assert iterable_nodes(em) == [em]


def test_iterable_nodes_string_and_numbers():
    assert iterable_nodes("hello world") == [VText("hello world")]
    assert iterable_nodes(3) == [VText("3")]


def test_iterable_nodes_list_of_nodes():
    children = [element("div"), element("strong")]
    assert iterable_nodes(children) == children


def test_iterable_nodes_empty_list():
    assert iterable_nodes([]) == []


def test_iterable_nodes_renders_views():
    class Child:
        def render(self):
            return element("span")

    assert iterable_nodes(Child()) == [element("span")]
    assert iterable_nodes([Child(), Child()]) == [element("span"), element("span")]


@pytest.mark.parametrize("value", [True, {"a": 1}, b"bytes", object()])
def test_iterable_nodes_rejects_other_values(value):
    with pytest.raises(TypeError):
        iterable_nodes(value)


def test_nested_rendering_round_trip():
    span = VElement("span", children=[text("Counter = "), text("1")])
    div = VElement("div", children=[span])
    rendered = str(div)
    assert rendered.startswith("<div><span>")
    assert rendered.endswith("</span></div>")
    assert "Counter = 1" in rendered