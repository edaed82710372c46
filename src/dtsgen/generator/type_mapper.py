"""Map Java type names to TypeScript type names.

Java types arrive either as bare names (``boolean``, ``String``, ``Foo``) or
fully qualified (``com.example.Animal``). Qualified names are reduced to
their short name, and unless that short name maps to a TypeScript primitive,
an ``import { Short } from 'package'`` statement is registered in the
:class:`~dtsgen.generator.imports.ImportSet` passed in by the caller.

**Mapping rules:**

* ``boolean`` maps to ``boolean``, ``String`` to ``string``, ``void`` to
  ``void``.
* Any other bare name is assumed to be valid TypeScript already (a locally
  declared or previously generated type) and is returned unchanged.
* ``java.lang.String`` therefore maps to ``string`` with no import, while
  ``com.example.Animal`` maps to ``Animal`` and imports it from
  ``'com.example'``.
"""

from __future__ import annotations

from dtsgen.exceptions import InvalidTypeError
from dtsgen.generator.imports import ImportSet


_TYPE_MAP: dict[str, str] = {
    "boolean": "boolean",
    "String": "string",
    "void": "void",
}

TS_PRIMITIVES: frozenset[str] = frozenset(_TYPE_MAP.values())
"""TypeScript names that never need an import."""


def split_qualified_name(type_name: str) -> tuple[str, str]:
    """Split *type_name* at its last dot into ``(package, short_name)``.

    Bare names return an empty package.

    Raises:
        InvalidTypeError: If the name ends with a dot.
    """
    package, _, short_name = type_name.rpartition(".")
    if not short_name:
        raise InvalidTypeError(type_name)
    return package, short_name


def map_type(type_name: str, imports: ImportSet) -> str:
    """Translate a Java type name into its TypeScript equivalent.

    Args:
        type_name: Bare or dot-qualified Java type name.
        imports: Collector that receives the import statement for a
            qualified, non-primitive type.

    Returns:
        The TypeScript type name. Qualified inputs return the mapped short
        name; the import is registered as a side effect.

    Raises:
        InvalidTypeError: If a qualified name has nothing after its last dot.

    Example::

        >>> imports = ImportSet()
        >>> map_type("com.example.Animal", imports)
        'Animal'
        >>> list(imports)
        ["import { Animal } from 'com.example'"]
        >>> map_type("java.lang.String", imports)
        'string'
    """
    if "." in type_name:
        package, short_name = split_qualified_name(type_name)
        resolved = map_type(short_name, imports)
        if resolved not in TS_PRIMITIVES:
            imports.register_binding(short_name, package)
        return resolved

    return _TYPE_MAP.get(type_name, type_name)

