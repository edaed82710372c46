"""Tests for dtsgen.generator.imports."""

from __future__ import annotations

from dtsgen.generator.imports import ImportSet, format_import


def test_format_import() -> None:
    assert format_import("Animal", "com.example") == "import { Animal } from 'com.example'"


class TestImportSet:
    def test_empty_renders_empty_string(self) -> None:
        assert ImportSet().render_all() == ""

    def test_register_is_idempotent(self) -> None:
        imports = ImportSet()
        imports.register("import { A } from 'x'")
        imports.register("import { A } from 'x'")
        assert len(imports) == 1

    def test_render_all_keeps_insertion_order(self) -> None:
        imports = ImportSet()
        imports.register_binding("Zebra", "z")
        imports.register_binding("Apple", "a")
        imports.register_binding("Zebra", "z")
        assert imports.render_all() == (
            "import { Zebra } from 'z'\n"
            "import { Apple } from 'a'\n"
        )

    def test_contains(self) -> None:
        imports = ImportSet()
        imports.register_binding("A", "x")
        assert "import { A } from 'x'" in imports
        assert "import { B } from 'x'" not in imports

    def test_clear(self) -> None:
        imports = ImportSet()
        imports.register_binding("A", "x")
        imports.clear()
        assert len(imports) == 0
        assert imports.render_all() == ""

    def test_separate_sets_do_not_share_state(self) -> None:
        first = ImportSet()
        first.register_binding("A", "x")
        assert len(ImportSet()) == 0
