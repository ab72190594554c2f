"""
Module map generator — the clang module declaration for a framework.
"""

from __future__ import annotations

from fmake.core.models.bundle import ModuleHeader
from fmake.core.models.template import GeneratedFile

MODULE_MAP_PATH = "Modules/module.modulemap"


def render_module_map(name: str, headers: ModuleHeader) -> str:
    """Render a module map exporting everything under ``headers``.

    >>> print(render_module_map("Foo", ModuleHeader.umbrella("Foo.h")))
    module Foo {
      umbrella header "Foo.h"
    <BLANKLINE>
      export *
    }
    """
    return (
        f"module {name} {{\n"
        f"  {headers.module_code()}\n"
        "\n"
        "  export *\n"
        "}"
    )


def generate_module_map(name: str, headers: ModuleHeader) -> GeneratedFile:
    return GeneratedFile(
        path=MODULE_MAP_PATH,
        content=render_module_map(name, headers) + "\n",
        reason=f"Module map for {name} ({headers.module_code()})",
    )
