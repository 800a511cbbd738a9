from __future__ import annotations

import pytest

from wit_formatter.formatting.classify import ConstructKind, classify
from wit_formatter.formatting.rules import (
    REWRITERS,
    rewrite,
    rewrite_block_opener,
    rewrite_field_decl,
    rewrite_function_decl,
    rewrite_import_export,
    rewrite_package,
    rewrite_type_alias,
    rewrite_use,
)


def test_every_kind_has_a_rewriter() -> None:
    assert set(REWRITERS) == set(ConstructKind)


def test_package_collapses_spaces_and_semicolon() -> None:
    assert rewrite_package("package   foo:bar   ;") == "package foo:bar;"
    assert rewrite_package("package foo:bar ;;") == "package foo:bar;"


def test_use_collapses_spaces() -> None:
    assert rewrite_use("use   another   as   alias;") == "use another as alias;"
    assert rewrite_use("use   my-interface.{type1,  type2}  ;") == "use my-interface.{type1, type2};"


def test_type_alias_spacing() -> None:
    assert rewrite_type_alias("type  my-type  =  u32 ;") == "type my-type = u32;"
    assert rewrite_type_alias("type   my-list=list<u32>;") == "type my-list = list<u32>;"
    # Multi-line openers have no terminator to normalize.
    assert rewrite_type_alias("type x=future<tuple<") == "type x = future<tuple<"


def test_block_opener_single_space_before_brace() -> None:
    assert rewrite_block_opener("interface   test{") == "interface test {"
    assert rewrite_block_opener("record   person   {") == "record person {"
    assert rewrite_block_opener("world w") == "world w"


@pytest.mark.parametrize(
    ("line", "expected"),
    [
        ("my-func:func();", "my-func: func();"),
        ("my-func:func()->string;", "my-func: func() -> string;"),
        ("my-func:func(a:u32,b:string)->bool;", "my-func: func(a: u32, b: string) -> bool;"),
        ("f : func (a :u8) ->  u8 ;", "f: func(a: u8) -> u8;"),
        ("f: func() -> tuple<u32,string>;", "f: func() -> tuple<u32, string>;"),
        ("my-func: func(", "my-func: func("),
        (")->result<_, error>;", ") -> result<_, error>;"),
        ("cb: func() -> u8 ,", "cb: func() -> u8,"),
    ],
)
def test_function_decl(line: str, expected: str) -> None:
    assert rewrite_function_decl(line) == expected


def test_function_paren_rule_leaves_identifiers_ending_in_func() -> None:
    assert rewrite_function_decl("my-func (x) -> u8;") == "my-func (x) -> u8;"


def test_import_export_keyword_spacing() -> None:
    assert rewrite_import_export("import   test-interface;") == "import test-interface;"
    assert rewrite_import_export("import   wasi:io/poll@0.2.0 ;") == "import wasi:io/poll@0.2.0;"


def test_import_export_with_signature_uses_function_rules() -> None:
    assert rewrite_import_export("export   run:func()->result;") == "export run: func() -> result;"
    assert rewrite_import_export("import log:func(level:u8,msg:string);") == "import log: func(level: u8, msg: string);"


def test_import_export_inline_interface_untouched() -> None:
    assert rewrite_import_export("export   handler: interface {") == "export handler: interface {"


def test_field_decl() -> None:
    assert rewrite_field_decl("name:string,") == "name: string,"
    assert rewrite_field_decl("first : option<u8> ,") == "first: option<u8>,"
    assert rewrite_field_decl("other(result<a,b>),") == "other(result<a, b>),"
    assert rewrite_field_decl("pending") == "pending"


def test_unrecognized_is_untouched() -> None:
    assert rewrite("include   wasi:cli/imports;", ConstructKind.UNRECOGNIZED) == "include   wasi:cli/imports;"


@pytest.mark.parametrize(
    "line",
    [
        "package   foo:bar   ;",
        "interface   test{",
        "type   a=b;",
        "f:func(a:u32,b:string)->bool;",
        "export   run:func()->result;",
        "use   a   as   b;",
        "name:string,",
        "other(string) ,",
    ],
)
def test_rewrite_is_stable(line: str) -> None:
    once = rewrite(line, classify(line))
    assert classify(once) is classify(line)
    assert rewrite(once, classify(once)) == once
