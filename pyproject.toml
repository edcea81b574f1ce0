[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "percyhtml"
version = "0.1.0"
description = "Build virtual DOM trees from HTML-like templates, validate HTML and SVG tag names, and scope CSS to generated class names"
requires-python = ">=3.10"
dependencies = []
keywords = ["html", "svg", "validation", "virtual-dom", "css", "template"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Text Processing :: Markup :: HTML",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["percyhtml"]

[tool.pytest.ini_options]
addopts = "-ra"
