"""Jinja2 template rendering for generated code.

Provides the TemplateRenderer class which loads Jinja2 templates from the
``codecache/codegen/templates/`` directory and renders them with build
context data.  Output is JavaScript source, so autoescaping is disabled and
values are embedded through the ``js_string`` / ``to_js`` filters instead.
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, StrictUndefined, select_autoescape


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------


class TemplateRenderer:
    """Renders Jinja2 templates for generated code.

    Template names are paths relative to the template directory, e.g.
    ``"app.js.j2"``.  Undefined context variables raise instead of rendering
    as empty strings.
    """

    def __init__(self, template_dir: str | Path | None = None) -> None:
        if template_dir is None:
            template_dir = _DEFAULT_TEMPLATE_DIR
        self.template_dir = Path(template_dir)
        self.env = Environment(
            loader=FileSystemLoader(str(self.template_dir)),
            autoescape=select_autoescape([]),
            undefined=StrictUndefined,
            keep_trailing_newline=True,
            trim_blocks=True,
            lstrip_blocks=True,
        )
        # Register custom filters
        self.env.filters["pascal_case"] = _pascal_case_filter
        self.env.filters["js_string"] = _js_string_filter
        self.env.filters["to_js"] = _to_js_filter

    def render(self, template_path: str, context: dict[str, Any]) -> str:
        """Render a single template with the provided context.

        Args:
            template_path: Path relative to the template directory.
            context: Dictionary of variables available inside the template.

        Returns:
            The rendered template content as a string.

        Raises:
            jinja2.TemplateNotFound: If the template does not exist.
        """
        template = self.env.get_template(template_path)
        return template.render(**context)


# ---------------------------------------------------------------------------
# Jinja2 custom filters
# ---------------------------------------------------------------------------

def _pascal_case_filter(value: str) -> str:
    """Convert ``some-thing`` or ``some_thing`` to ``SomeThing``."""
    parts = re.split(r"[-_.\s]+", value)
    return "".join(word[:1].upper() + word[1:] for word in parts if word)


def _js_string_filter(value: Any) -> str:
    """Quote *value* as a JavaScript string literal."""
    return json.dumps(str(value), ensure_ascii=False)


def _to_js_filter(value: Any) -> str:
    """Serialise a JSON-compatible value as a tab-indented JS literal."""
    return json.dumps(value, indent="\t", ensure_ascii=False)
