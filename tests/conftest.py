"""Shared test fixtures for dtsgen.

Provides reusable fixtures for copying the descriptor fixture tree,
isolating configuration, managing output state, and running CLI commands.
These fixtures are automatically discovered by pytest and available to
all test modules without explicit imports.
"""

from __future__ import annotations

import shutil
from pathlib import Path

import pytest

from dtsgen.models import ClassDescriptor
from dtsgen.output import OutputFormat, OutputManager, reset_output, set_output


FIXTURES_DIR = Path(__file__).parent / "fixtures"

DOG_DTS = """\
import { Animal } from 'com.example'
import { Ball } from 'com.example.toys'
import { Dog } from 'com.example'
import { Person } from 'com.example'

export class Dog extends Animal {
  constructor(name: string, age: int);
  bark(): void;
  fetch(toy: Ball, loud: boolean): Ball;
  static create(): Dog;
  static count: int;
  owner: Person;
}
"""

ANIMAL_DTS = """\

export class Animal {
}
"""

PLAIN_DTS = """\

export class Plain {
  isReady(): boolean;
}
"""


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager caches references to sys.stdout/sys.stderr at
    creation time. When Typer's CliRunner redirects those streams during
    a test and the test finishes, the cached references become stale.
    Resetting forces a fresh manager to be created on next use.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# Descriptor fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def descriptor_tree(tmp_path: Path) -> Path:
    """A writable copy of ``fixtures/descriptors``.

    Layout::

        descriptors/
            README.txt
            com/example/Animal.json
            com/example/Dog.json
            plain/Plain.json
    """
    root = tmp_path / "descriptors"
    shutil.copytree(FIXTURES_DIR / "descriptors", root)
    return root


@pytest.fixture
def dog_descriptor() -> ClassDescriptor:
    """The descriptor from the README example."""
    return ClassDescriptor.model_validate(
        {
            "name": "com.example.Dog",
            "superClass": "com.example.Animal",
            "methods": [
                {"name": "bark", "params": {}, "returnType": "void", "isStatic": False},
            ],
        }
    )


@pytest.fixture
def expected_dts() -> dict[str, str]:
    """Expected generated content, keyed by descriptor path relative to the tree."""
    return {
        "com/example/Dog.json": DOG_DTS,
        "com/example/Animal.json": ANIMAL_DTS,
        "plain/Plain.json": PLAIN_DTS,
    }


# ---------------------------------------------------------------------------
# Config isolation fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Isolate configuration to a temporary directory.

    Points XDG_DATA_HOME into tmp_path, clears all DTSGEN_* environment
    variables, and changes the working directory to tmp_path so that no
    real ``dtsgen.json`` is picked up.

    Returns:
        The tmp_path root directory for additional file creation.
    """
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    for var in [
        "DTSGEN_SOURCE_DIR",
        "DTSGEN_DESCRIPTOR_SUFFIX",
        "DTSGEN_DECLARATION_SUFFIX",
    ]:
        monkeypatch.delenv(var, raising=False)

    monkeypatch.chdir(tmp_path)
    return tmp_path


# ---------------------------------------------------------------------------
# Output fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def quiet_output() -> OutputManager:
    """Install a PLAIN-format, quiet OutputManager for tests that don't check output."""
    output = OutputManager(format=OutputFormat.PLAIN, quiet=True, no_color=True)
    set_output(output)
    yield output
    reset_output()


# ---------------------------------------------------------------------------
# CLI runner fixture
# ---------------------------------------------------------------------------


@pytest.fixture
def cli_runner():
    """Typer CLI test runner."""
    from typer.testing import CliRunner

    return CliRunner()
