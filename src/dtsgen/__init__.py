"""dtsgen -- Generate TypeScript declaration files from Java class descriptors.

The Java side of the toolchain dumps one JSON descriptor per class (name,
superclass, constructors, methods, fields). dtsgen walks a directory of
those descriptors and writes a sibling ``.d.ts`` file for each one, mapping
Java types to TypeScript and importing qualified types from their package.

Typical workflow::

    dtsgen generate JvTypeGen/output/json    # writes Foo.d.ts next to Foo.json
    dtsgen render path/to/Foo.json           # preview one file on stdout

Modules:
    app: Typer application and CLI entry point.
    driver: Per-file pipeline over a descriptor tree.
    models: Pydantic models shared across the entire package.
    config: Configuration precedence, atomic writes, data directory.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr formatting system with Rich support.
"""

__version__ = "0.1.0"
