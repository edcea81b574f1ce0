import pytest

from percyhtml.validation import (
    is_self_closing,
    is_self_closing_svg_tag,
    is_svg_namespace,
    is_valid_tag,
)

HTML_SELF_CLOSING = [
    "area", "base", "br", "col", "hr", "img", "input", "link", "meta",
    "param", "command", "keygen", "source",
]


def test_is_self_closing_documented_examples():
    assert is_self_closing("br") is True
    assert is_self_closing("div") is False


def test_is_svg_namespace_documented_examples():
    assert is_svg_namespace("svg") is True
    assert is_svg_namespace("circle") is True
    assert is_svg_namespace("div") is False


def test_is_valid_tag_documented_examples():
    assert is_valid_tag("br") is True
    assert is_valid_tag("random") is False


@pytest.mark.parametrize("tag", HTML_SELF_CLOSING)
def test_html_self_closing_tags_are_valid_and_self_closing(tag):
    assert is_self_closing(tag) is True
    assert is_valid_tag(tag) is True
    assert is_svg_namespace(tag) is False


@pytest.mark.parametrize("tag", ["circle", "rect", "path", "use", "feBlend"])
def test_self_closing_svg_tags(tag):
    assert is_self_closing_svg_tag(tag) is True
    assert is_self_closing(tag) is True
    assert is_valid_tag(tag) is True


@pytest.mark.parametrize("tag", ["svg", "g", "defs", "text", "clipPath"])
def test_container_svg_tags_are_not_self_closing(tag):
    assert is_svg_namespace(tag) is True
    assert is_self_closing_svg_tag(tag) is False
    assert is_self_closing(tag) is False


@pytest.mark.parametrize("tag", ["div", "span", "random", "invalidtagname"])
def test_non_svg_tags_are_not_self_closing_svg(tag):
    assert is_self_closing_svg_tag(tag) is False


def test_invalid_tag_name_rejected():
    assert is_valid_tag("invalidtagname") is False


def test_svg_names_are_case_sensitive():
    assert is_svg_namespace("feBlend") is True
    assert is_svg_namespace("feblend") is False


@pytest.mark.parametrize("tag", ["div", "strong", "em", "ul", "label", "audio"])
def test_common_html_tags_valid_not_self_closing(tag):
    assert is_valid_tag(tag) is True
    assert is_self_closing(tag) is False