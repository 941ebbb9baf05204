"""Tests for Jinja2 rendering of the base application templates
(codecache.codegen.templates).
"""

from __future__ import annotations

import json
import re
from pathlib import Path

import pytest
from jinja2 import TemplateNotFound, UndefinedError

from codecache.codegen.templates import (
    TemplateRenderer,
    _js_string_filter,
    _pascal_case_filter,
    _to_js_filter,
)

pytestmark = pytest.mark.unit


class TestFilters:
    def test_pascal_case(self):
        assert _pascal_case_filter("web-os") == "WebOs"
        assert _pascal_case_filter("pc") == "Pc"
        assert _pascal_case_filter("smart_tv.v2") == "SmartTvV2"

    def test_js_string(self):
        assert _js_string_filter("it's \"x\"") == '"it\'s \\"x\\""'

    def test_to_js(self):
        assert json.loads(_to_js_filter({"a": [1, None]})) == {"a": [1, None]}


class TestTemplateRenderer:
    def test_missing_template(self, renderer: TemplateRenderer):
        with pytest.raises(TemplateNotFound):
            renderer.render("nope.j2", {})

    def test_missing_context_variable(self, renderer: TemplateRenderer):
        with pytest.raises(UndefinedError):
            renderer.render("app.js.j2", {})

    def test_custom_template_dir(self, tmp_path: Path):
        (tmp_path / "x.j2").write_text("{{ v }}\n", encoding="utf-8")
        renderer = TemplateRenderer(tmp_path)
        assert renderer.render("x.j2", {"v": 1}) == "1\n"


class TestBaseApplicationTemplate:
    def test_platform_order_preserved(self, renderer: TemplateRenderer):
        text = renderer.render("base-application.js.j2", {"platforms": ["tizen", "webos", "pc"]})
        imports = re.findall(r"from '(\w+)/factory'", text)
        assert imports == ["tizen", "webos", "pc"]

    def test_factories_list(self, renderer: TemplateRenderer):
        text = renderer.render("base-application.js.j2", {"platforms": ["tizen", "pc"]})
        assert "\tTizenFactory,\n\tPcFactory\n];" in text

    def test_no_platforms(self, renderer: TemplateRenderer):
        text = renderer.render("base-application.js.j2", {"platforms": []})
        assert "const factories = [\n];" in text


class TestAppTemplate:
    def test_imports_entry(self, renderer: TemplateRenderer):
        text = renderer.render("app.js.j2", {"path": "demo/application"})
        assert "import Application from \"demo/application\";" in text


class TestPackageInfoTemplate:
    def test_embeds_descriptor(self, renderer: TemplateRenderer):
        descriptor = {"name": "demo", "version": "1.0.0", "scripts": {"build": "x"}}
        text = renderer.render("package-info.js.j2", {"config": descriptor})
        literal = re.search(r"const packageInfo = (.+?);\n", text, re.S).group(1)
        assert json.loads(literal) == descriptor
