"""Run the generator over a descriptor tree.

For every file under ``config.source_dir`` whose name ends with
``config.descriptor_suffix``:

1. Load the descriptor (:func:`~dtsgen.parser.load_descriptor`).
2. Render imports and declaration with a fresh import collector
   (:func:`~dtsgen.generator.render_file`).
3. Write the result atomically to the sibling path given by
   :func:`output_path_for`, unless the file already holds exactly that
   content.

**Error policy.** By default a failing descriptor is logged, recorded as
:attr:`~dtsgen.models.FileStatus.FAILED` in the report, and the run moves
on to the next file. With ``config.fail_fast`` the first
:class:`~dtsgen.exceptions.DtsgenError` propagates instead. A missing or
unreadable source directory always aborts the run.
"""

from __future__ import annotations

from pathlib import Path

from dtsgen.config import atomic_write
from dtsgen.exceptions import DtsgenError, IOError_
from dtsgen.generator import render_file
from dtsgen.models import FileResult, FileStatus, GenerationReport, GeneratorConfig
from dtsgen.output import debug, progress, warning
from dtsgen.parser import iter_descriptor_files, load_descriptor


def output_path_for(path: Path, config: GeneratorConfig) -> Path:
    """Return the declaration path for descriptor *path*.

    Only the trailing descriptor suffix is replaced, so
    ``types.json/Foo.json`` becomes ``types.json/Foo.d.ts``.
    """
    name = path.name
    if name.endswith(config.descriptor_suffix):
        name = name[: -len(config.descriptor_suffix)]
    return path.with_name(name + config.declaration_suffix)


def generate(config: GeneratorConfig, dry_run: bool = False) -> GenerationReport:
    """Generate declaration files for every descriptor under ``config.source_dir``.

    Args:
        config: Effective generator configuration.
        dry_run: Render everything but write nothing; files are reported
            as :attr:`~dtsgen.models.FileStatus.PLANNED`.

    Returns:
        A :class:`~dtsgen.models.GenerationReport` with one entry per
        descriptor, in traversal order.

    Raises:
        IOError_: If the source directory cannot be walked.
        DtsgenError: The first per-file failure, when ``config.fail_fast``
            is set.
    """
    report = GenerationReport(source_dir=config.source_dir, dry_run=dry_run)

    for path in iter_descriptor_files(config.source_dir, config.descriptor_suffix):
        try:
            result = process_file(path, config, dry_run=dry_run)
        except DtsgenError as exc:
            if config.fail_fast:
                raise
            warning(f"Skipping {path}: {exc}")
            result = FileResult(
                source=str(path),
                status=FileStatus.FAILED,
                error=str(exc),
                exit_code=exc.exit_code,
            )
        report.files.append(result)

    return report


def process_file(path: Path, config: GeneratorConfig, dry_run: bool = False) -> FileResult:
    """Load, render and write a single descriptor.

    Raises:
        ParseError: If the descriptor is malformed.
        InvalidTypeError: If the descriptor references a malformed type name.
        IOError_: If the descriptor cannot be read or the output cannot be
            written.
    """
    debug(f"Loading {path}")
    descriptor = load_descriptor(path)
    content = render_file(descriptor)
    output = output_path_for(path, config)

    if dry_run:
        progress(f"Would write {output}")
        return FileResult(source=str(path), output=str(output), status=FileStatus.PLANNED)

    if _has_content(output, content):
        debug(f"Unchanged {output}")
        return FileResult(source=str(path), output=str(output), status=FileStatus.UNCHANGED)

    try:
        atomic_write(output, content)
    except OSError as exc:
        raise IOError_(f"Failed to write {output}: {exc}", path=output) from exc

    progress(f"Wrote {output}")
    return FileResult(source=str(path), output=str(output), status=FileStatus.WRITTEN)


def _has_content(path: Path, content: str) -> bool:
    """Whether *path* exists and holds exactly *content* (UTF-8)."""
    try:
        return path.read_bytes() == content.encode("utf-8")
    except OSError:
        return False
