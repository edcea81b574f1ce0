# percyhtml

Build virtual DOM trees from a compact HTML-like template language, check
tag names against the HTML and SVG vocabularies, and write component-scoped
CSS.

## Installation

```
pip install percyhtml
```

## Templates

`percyhtml.builder.html(source, context)` parses a template and returns a
virtual node (`VElement` or `VText` from `percyhtml.vnode`). Names inside
`{ ... }` blocks and in attribute values are looked up in `context`.
Calling `str()` on a node gives its HTML.

```python
from percyhtml.builder import html

node = html("<div> Hello {name} </div>", {"name": "World"})
print(str(node))   # <div> Hello World </div>
```

Blocks and attribute values accept a small set of expressions: names with
dotted attribute access, string, raw-string (`r#"..."#`) and number
literals, `true` / `false`, and `if cond { ... } else { ... }` chains. An
`if` without an `else` stands for an empty text node when the condition is
false. A block may hold a node, a string or number, `None` (nothing), a
list of any of these, or an object with a `render()` method.

Whitespace around text follows what is written in the template: a space
between a tag and its text is kept, and a missing space stays missing.

```python
html("<div>{a}{b}</div>", {"a": "Hello", "b": "World"})   # <div>HelloWorld</div>
html("<div>{a} {b}</div>", {"a": "Hello", "b": "World"})  # <div>Hello World</div>
```

Self-closing tags such as `<br>` and `<img />` need no closing tag.

Capitalised tag names are components: the name is looked up in `context`,
called with the attributes as keyword arguments, and the result of its
`render()` takes the tag's place.

### Events

An attribute whose value is a callable becomes an event handler (see
`percyhtml.events.insert_closure`). A callable taking no arguments is
stored as a no-argument handler; an `onclick` callable taking an argument
is stored as a mouse-event handler; other callables that take arguments are
not stored. `on_create_element` and `on_remove_element` callables are kept
in the element's `special_attributes` together with the element's `key`
attribute.

```python
node = html('<div key="my-key" on_create_element={cb}></div>', {"cb": lambda: None})
node.special_attributes.on_create_element_key()   # "my-key"
```

### Errors

`percyhtml.tag.TemplateSyntaxError` is raised for templates that cannot be
split into tags (for example an unclosed `{`). `percyhtml.builder.HtmlError`
is raised for a misspelt tag name, a closing tag that does not match its
opening tag, a closing tag for a self-closing element such as `</br>`, an
unknown name or component, or an unsupported expression.
`percyhtml.events.MissingKeyError` is raised when `on_create_element` or
`on_remove_element` is used without a `key` attribute.

## Tag validation

```python
from percyhtml.validation import is_valid_tag, is_self_closing, is_svg_namespace

is_valid_tag("br")          # True
is_valid_tag("random")      # False
is_self_closing("br")       # True
is_svg_namespace("circle")  # True
```

## Scoped CSS

Each call hands out the next class name, `_css_rs_0`, `_css_rs_1`, …, and
replaces `:host` in the stylesheet with that class.

```python
from percyhtml.css import CssCollector

collector = CssCollector("styles.css")
collector.css(":host { color: red; }")   # "_css_rs_0", written as "._css_rs_0 { color: red; }"
```

The first call starts a fresh output file; later calls append to it.
`CssCollector()` with no path only hands out names, and `reset()` starts
numbering from zero again. The module-level `percyhtml.css.css(source)` uses
a shared collector that writes to the path named by the `OUTPUT_CSS`
environment variable when it is set.

## What this package does not do

There is no command-line tool and no browser DOM: nodes are built,
compared and rendered to HTML strings, but never mounted, diffed or
patched, and stored event handlers are never fired by the package itself.

## Running the tests

```
pip install percyhtml[test]
pytest
```