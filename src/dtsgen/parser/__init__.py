"""Descriptor input -- find descriptor files and load them.

Typical usage::

    from dtsgen.parser import iter_descriptor_files, load_descriptor

    for path in iter_descriptor_files("JvTypeGen/output/json", ".json"):
        descriptor = load_descriptor(path)

Sub-modules:

* :mod:`~dtsgen.parser.walker` -- Recursive directory traversal.
* :mod:`~dtsgen.parser.loader` -- JSON/YAML parsing and validation into
  :class:`~dtsgen.models.ClassDescriptor`.
"""

from dtsgen.parser.loader import load_descriptor, parse_descriptor
from dtsgen.parser.walker import iter_descriptor_files, walk_files

__all__ = ["load_descriptor", "parse_descriptor", "iter_descriptor_files", "walk_files"]
