"""Render a :class:`~dtsgen.models.ClassDescriptor` as TypeScript declaration text.

The emitter works in two steps, mirroring how the rest of the generator
treats templates:

1. :func:`_build_context` resolves every type reference through
   :func:`~dtsgen.generator.type_mapper.map_type`, collecting imports into
   the caller's :class:`~dtsgen.generator.imports.ImportSet`, and returns a
   plain dict of already-rendered strings.
2. The ``declaration.d.ts.j2`` template lays those strings out.

Resolution order is superclass, constructors, methods, then fields, so
imports appear in the order their types are first referenced.

Example output::

    export class Dog extends Animal {
      constructor(name: string);
      bark(): void;
      static count: number;
    }
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Any, Mapping

from jinja2 import Environment, FileSystemLoader, select_autoescape

from dtsgen.generator.imports import ImportSet
from dtsgen.generator.type_mapper import map_type
from dtsgen.models import ClassDescriptor


TEMPLATE_DIR = Path(__file__).parent / "templates"
"""Path to the Jinja2 template directory (``generator/templates/``)."""

_DECLARATION_TEMPLATE = "declaration.d.ts.j2"


def render_parameters(params: Mapping[str, str], imports: ImportSet) -> str:
    """Render ``name: type`` pairs separated by ``", "``, in input order.

    An empty mapping renders as ``""``.
    """
    return ", ".join(
        f"{name}: {map_type(type_name, imports)}" for name, type_name in params.items()
    )


def render_declaration(descriptor: ClassDescriptor, imports: ImportSet) -> str:
    """Render the ``export class`` block for *descriptor*.

    Args:
        descriptor: The loaded class descriptor.
        imports: Collector receiving one statement per imported type.

    Returns:
        The declaration block, ending with ``"}\\n"``.

    Raises:
        InvalidTypeError: If any referenced type name is malformed.
    """
    context = _build_context(descriptor, imports)
    return _get_env().get_template(_DECLARATION_TEMPLATE).render(context)


def render_file(descriptor: ClassDescriptor) -> str:
    """Render the complete ``.d.ts`` content for *descriptor*.

    Imports are collected into a fresh :class:`ImportSet`, so the result
    only ever contains statements for this descriptor's own types.

    Returns:
        Import lines, a blank line, then the declaration block.
    """
    imports = ImportSet()
    declaration = render_declaration(descriptor, imports)
    return imports.render_all() + "\n" + declaration


@lru_cache(maxsize=1)
def _get_env() -> Environment:
    """Create the Jinja2 environment for declaration templates.

    Autoescape is disabled for ``.ts.j2`` templates since they produce
    TypeScript, not HTML. Block trimming keeps the template readable
    without leaking blank lines into the output.
    """
    return Environment(
        loader=FileSystemLoader(str(TEMPLATE_DIR)),
        autoescape=select_autoescape(disabled_extensions=("ts.j2",)),
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
    )


def _build_context(descriptor: ClassDescriptor, imports: ImportSet) -> dict[str, Any]:
    """Resolve all type references of *descriptor* into template variables."""
    super_class = None
    if descriptor.super_class:
        super_class = map_type(descriptor.super_class, imports)

    constructors = [
        render_parameters(ctor.params, imports)
        for ctor in descriptor.constructors or []
    ]

    methods = [
        {
            "name": method.name,
            "is_static": method.is_static,
            "return_type": map_type(method.return_type, imports),
            "params": render_parameters(method.params, imports),
        }
        for method in descriptor.methods
    ]

    fields = [
        {
            "name": field.name,
            "is_static": field.is_static,
            "type": map_type(field.type, imports),
        }
        for field in descriptor.fields or []
    ]

    return {
        "name": descriptor.short_name,
        "super_class": super_class,
        "constructors": constructors,
        "methods": methods,
        "fields": fields,
    }
