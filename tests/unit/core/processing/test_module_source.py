from __future__ import annotations

"""
Unit tests for the TypeScript Module Source Editor.

Verifies:
1. Bracket matching that ignores strings and comments.
2. Top-level list splitting.
3. Idempotent insertion of import statements and 'imports' entries.
4. Creation of a missing 'imports' property and failure without metadata.
5. Renaming of the exported class only.
"""

import pytest

from snippet4ng.core.processing.module_source import (
    add_declared_import,
    add_import_statement,
    code_mask,
    find_matching,
    find_ngmodule_metadata,
    find_property_list,
    rename_exported_class,
    split_top_level,
)
from snippet4ng.domain.errors import ModuleSourceError

GENERATED_MODULE = """import { NgModule } from '@angular/core';
import { CommonModule } from '@angular/common';



@NgModule({
  declarations: [],
  imports: [
    CommonModule
  ]
})
export class BasicModule { }
"""


# -----------------------------------------------------------------------------
# Scanner
# -----------------------------------------------------------------------------
def test_code_mask_excludes_strings_and_comments():
    src = "a('x]') // ]\n/* ] */b"
    mask = code_mask(src)

    assert mask[0] is True
    assert not any(mask[i] for i, ch in enumerate(src) if ch == "]")
    assert mask[-1] is True


def test_find_matching_skips_brackets_in_strings():
    src = "[ 'a]', [1, 2], \"]\" ] tail"
    assert find_matching(src, 0) == src.index(" tail") - 1


def test_find_matching_unbalanced_raises():
    with pytest.raises(ModuleSourceError):
        find_matching("[ (1, 2 ]", 0)


def test_split_top_level_respects_nesting():
    text = "\n    CommonModule,\n    RouterModule.forChild([{ path: '', a: [1, 2] }]),\n  "
    assert split_top_level(text) == [
        "CommonModule",
        "RouterModule.forChild([{ path: '', a: [1, 2] }])",
    ]


def test_split_top_level_drops_trailing_comma():
    assert split_top_level("A, B,") == ["A", "B"]


# -----------------------------------------------------------------------------
# NgModule lookup
# -----------------------------------------------------------------------------
def test_find_ngmodule_metadata_ignores_commented_decorator():
    src = "// @NgModule({ imports: [] })\n" + GENERATED_MODULE
    start, end = find_ngmodule_metadata(src)

    assert src[start] == "{"
    assert src[end] == "}"
    assert start > src.index("\n")


def test_find_property_list_only_matches_top_level_keys():
    src = "@NgModule({ providers: [{ imports: [X] }], imports: [A] })"
    meta = find_ngmodule_metadata(src)
    start, end = find_property_list(src, "imports", meta)

    assert src[start:end + 1] == "[A]"


# -----------------------------------------------------------------------------
# add_declared_import
# -----------------------------------------------------------------------------
def test_add_declared_import_appends_entry():
    new_src, changed = add_declared_import(GENERATED_MODULE, "CardsModule")

    assert changed
    assert "imports: [\n    CommonModule,\n    CardsModule\n  ]" in new_src
    assert new_src.endswith("export class BasicModule { }\n")


def test_add_declared_import_is_idempotent():
    once, _ = add_declared_import(GENERATED_MODULE, "CardsModule")
    twice, changed = add_declared_import(once, "CardsModule")

    assert not changed
    assert twice == once
    assert twice.count("CardsModule") == 1


def test_add_declared_import_preserves_complex_entries():
    src = (
        "@NgModule({\n"
        "  imports: [CommonModule, RouterModule.forChild([{ path: 'a', component: X }])],\n"
        "  exports: [Y]\n"
        "})\nexport class M {}\n"
    )
    new_src, changed = add_declared_import(src, "ParentModule")

    assert changed
    assert "RouterModule.forChild([{ path: 'a', component: X }]),\n    ParentModule" in new_src
    assert "exports: [Y]" in new_src


def test_add_declared_import_creates_missing_property():
    src = "@NgModule({\n  declarations: [A]\n})\nexport class M {}\n"
    new_src, changed = add_declared_import(src, "ParentModule")

    assert changed
    meta = find_ngmodule_metadata(new_src)
    start, end = find_property_list(new_src, "imports", meta)
    assert split_top_level(new_src[start + 1:end]) == ["ParentModule"]
    assert "declarations: [A]" in new_src


def test_add_declared_import_on_empty_metadata():
    new_src, changed = add_declared_import("@NgModule({})\nexport class M {}\n", "P")

    assert changed
    assert new_src.startswith("@NgModule({\n  imports: [\n    P\n  ]\n})")


def test_add_declared_import_without_ngmodule_raises():
    with pytest.raises(ModuleSourceError):
        add_declared_import("export class NotAModule {}\n", "ParentModule")


@pytest.mark.parametrize("value", ["SHARED", "getImports()", "SHARED.concat(X)"])
def test_add_declared_import_non_array_imports_raises(value):
    src = f"@NgModule({{ declarations: [], imports: {value} }})\nexport class M {{}}\n"

    with pytest.raises(ModuleSourceError, match="not an array literal"):
        add_declared_import(src, "CardsModule")


def test_find_property_list_skips_comment_before_array():
    src = "@NgModule({ imports: /* shared */ [A] })"
    start, end = find_property_list(src, "imports", find_ngmodule_metadata(src))

    assert src[start:end + 1] == "[A]"


def test_add_declared_import_ignores_comments_when_matching():
    src = (
        "@NgModule({\n"
        "  imports: [\n"
        "    CommonModule,\n"
        "    // shared\n"
        "    CardsModule\n"
        "  ]\n"
        "})\nexport class M {}\n"
    )

    new_src, changed = add_declared_import(src, "CardsModule")

    assert not changed
    assert new_src == src


def test_add_declared_import_keeps_comma_outside_trailing_comment():
    src = "@NgModule({\n  imports: [CommonModule, CardsModule // parent\n  ]\n})\nexport class M {}\n"

    once, changed = add_declared_import(src, "LayoutModule")
    twice, changed_again = add_declared_import(once, "LayoutModule")

    assert changed
    assert "CardsModule, // parent\n    LayoutModule\n  ]" in once
    assert not changed_again
    assert twice == once
    meta = find_ngmodule_metadata(once)
    start, end = find_property_list(once, "imports", meta)
    assert len(split_top_level(once[start + 1:end])) == 3


# -----------------------------------------------------------------------------
# Import statements and class renaming
# -----------------------------------------------------------------------------
def test_add_import_statement_prepends_once():
    once, changed = add_import_statement(GENERATED_MODULE, "CardsModule", "../cards.module")
    twice, changed_again = add_import_statement(once, "CardsModule", "../cards.module")

    assert changed
    assert once.startswith("import { CardsModule } from '../cards.module';\n")
    assert not changed_again
    assert twice == once


def test_rename_exported_class_replaces_first_only():
    src = "export class NgGeneratedComponent {\n}\nexport class Other {}\n"
    new_src, renamed = rename_exported_class(src, "BasicCardComponent")

    assert renamed
    assert new_src == "export class BasicCardComponent {\n}\nexport class Other {}\n"


def test_rename_exported_class_missing():
    src = "const x = 1;\n"
    assert rename_exported_class(src, "A") == (src, False)
