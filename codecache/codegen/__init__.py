"""codecache code generation -- materialises the generated source tree.

Quick usage::

    from codecache.codegen import CodeCacheProvider, PathHelper, TemplateRenderer

    provider = CodeCacheProvider(
        code_source, addons, PathHelper(project_root), TemplateRenderer(),
        build_config, package_json,
    )
    await provider.ready()
    provider.build_code()
"""

from codecache.codegen.defines import (
    DefineTypeError,
    FunctionText,
    infer_type_tag,
    render_defines,
    to_define_value,
)
from codecache.codegen.output import OutputDirectory
from codecache.codegen.paths import PathHelper
from codecache.codegen.provider import CodeCacheProvider
from codecache.codegen.templates import TemplateRenderer

__all__ = [
    "CodeCacheProvider",
    "DefineTypeError",
    "FunctionText",
    "OutputDirectory",
    "PathHelper",
    "TemplateRenderer",
    "infer_type_tag",
    "render_defines",
    "to_define_value",
]
