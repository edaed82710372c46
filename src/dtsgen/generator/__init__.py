"""Declaration generator -- turn class descriptors into TypeScript text.

Typical usage::

    from dtsgen.generator import ImportSet, render_declaration

    imports = ImportSet()
    body = render_declaration(descriptor, imports)
    text = imports.render_all() + "\n" + body

Sub-modules:

* :mod:`~dtsgen.generator.type_mapper` -- Java to TypeScript type names,
  registering imports for qualified types.
* :mod:`~dtsgen.generator.imports` -- The per-descriptor import collector.
* :mod:`~dtsgen.generator.emitter` -- Parameter lists and the
  ``export class`` block, rendered through a Jinja2 template.
"""

from dtsgen.generator.emitter import render_declaration, render_file, render_parameters
from dtsgen.generator.imports import ImportSet
from dtsgen.generator.type_mapper import map_type

__all__ = [
    "ImportSet",
    "map_type",
    "render_declaration",
    "render_file",
    "render_parameters",
]
