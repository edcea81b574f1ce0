import pytest

from percyhtml.css import CssCollector, css


def _squash(text):
    return text.replace(" ", "").replace("\n", "")


def test_css_classes_increment():
    collector = CssCollector(None)
    class1 = collector.css(
        """
        :host {
            background-color: red;
        }
        """
    )
    class2 = collector.css(
        """
        :host {
            color: red;
        }
        :host > div { color: blue; }
        """
    )
    assert class1 == "_css_rs_0"
    assert class2 == "_css_rs_1"


def test_writes_to_provided_file(tmp_path):
    out = tmp_path / "percy-test-css.css"
    collector = CssCollector(out)
    class1 = collector.css(
        """
    :host {
     color: red;
     background-color: blue;
    }
    """
    )
    class2 = collector.css(
        """
    :host {
        display: flex;
    }
    """
    )
    assert class1 != class2
    expected = """
        ._css_rs_0 {
            color: red;
            background-color: blue;
        }
        ._css_rs_1 {
            display: flex;
        }
        """
    assert _squash(out.read_text(encoding="utf-8")) == _squash(expected)


def test_first_call_replaces_existing_file(tmp_path):
    out = tmp_path / "out.css"
    out.write_text("stale content\n", encoding="utf-8")
    collector = CssCollector(out)
    collector.css(":host { color: red; }")
    assert out.read_text(encoding="utf-8") == "._css_rs_0 { color: red; }\n"


def test_reset_restarts_numbering_and_file(tmp_path):
    out = tmp_path / "out.css"
    collector = CssCollector(out)
    collector.css(":host { a: b; }")
    collector.css(":host { c: d; }")
    collector.reset()
    assert collector.css(":host { e: f; }") == "_css_rs_0"
    assert out.read_text(encoding="utf-8") == "._css_rs_0 { e: f; }\n"


def test_append_to_missing_file_raises(tmp_path):
    out = tmp_path / "out.css"
    collector = CssCollector(out)
    collector.css(":host {}")
    out.unlink()
    with pytest.raises(FileNotFoundError):
        collector.css(":host {}")


def test_module_css_increments(monkeypatch):
    monkeypatch.delenv("OUTPUT_CSS", raising=False)
    first = css(":host { color: red; }")
    second = css(":host { display: flex; }")
    assert first.startswith("_css_rs_")
    assert int(second.removeprefix("_css_rs_")) == int(first.removeprefix("_css_rs_")) + 1


def test_module_css_writes_to_env_file(monkeypatch, tmp_path):
    out = tmp_path / "env.css"
    monkeypatch.delenv("OUTPUT_CSS", raising=False)
    css(":host {}")
    out.write_text("", encoding="utf-8")
    monkeypatch.setenv("OUTPUT_CSS", str(out))
    name = css(":host { display: flex; }")
    assert out.read_text(encoding="utf-8") == f".{name} {{ display: flex; }}\n"