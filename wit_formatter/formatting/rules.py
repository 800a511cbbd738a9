from __future__ import annotations

import re
from collections.abc import Callable

from wit_formatter.formatting.classify import ConstructKind, has_func_signature

_ws_re = re.compile(r"\s+")
_semicolon_re = re.compile(r"\s*;[\s;]*$")
_open_brace_re = re.compile(r"\s*\{\s*$")
_equals_re = re.compile(r"\s*=\s*")
_colon_re = re.compile(r"\s*:\s*")
_comma_re = re.compile(r"\s*,\s*")
_arrow_re = re.compile(r"\s*->\s*")
_func_paren_re = re.compile(r"(?<![\w-])func\s*\(")
_import_export_re = re.compile(r"^(import|export)\s+")


def _collapse_spaces(line: str) -> str:
    return _ws_re.sub(" ", line)


def _ensure_semicolon(line: str) -> str:
    # Only normalizes an existing terminator; multi-line openers carry none.
    return _semicolon_re.sub(";", line)


def rewrite_package(line: str) -> str:
    # package namespace:name;
    return _ensure_semicolon(_collapse_spaces(line))


def rewrite_use(line: str) -> str:
    # use pkg:iface/types.{a, b} / use other as alias;
    return _ensure_semicolon(_collapse_spaces(line))


def rewrite_type_alias(line: str) -> str:
    out = _collapse_spaces(line)
    out = _equals_re.sub(" = ", out, count=1)
    return _ensure_semicolon(out)


def rewrite_block_opener(line: str) -> str:
    # interface name {, world name {, record name {, ...
    return _open_brace_re.sub(" {", _collapse_spaces(line))


def rewrite_function_decl(line: str) -> str:
    """Canonical shape: `name: func(p1: t1, p2: t2) -> ret;`.

    The comma rule runs after the arrow and `func(` rules so it never splits
    what they produced.
    """

    out = _colon_re.sub(": ", line)
    out = _func_paren_re.sub("func(", out)
    out = _arrow_re.sub(" -> ", out)
    out = _comma_re.sub(", ", out)
    out = _ensure_semicolon(out)
    return out.rstrip()


def rewrite_import_export(line: str) -> str:
    out = _import_export_re.sub(r"\1 ", line)
    if has_func_signature(out):
        return rewrite_function_decl(out)
    return _ensure_semicolon(out)


def rewrite_field_decl(line: str) -> str:
    out = _colon_re.sub(": ", line)
    out = _comma_re.sub(", ", out)
    # A trailing comma keeps no space on either side.
    return out.rstrip()


def _unchanged(line: str) -> str:
    return line


REWRITERS: dict[ConstructKind, Callable[[str], str]] = {
    ConstructKind.PACKAGE: rewrite_package,
    ConstructKind.NAMED_BLOCK_OPENER: rewrite_block_opener,
    ConstructKind.TYPE_DECL_OPENER: rewrite_block_opener,
    ConstructKind.TYPE_ALIAS: rewrite_type_alias,
    ConstructKind.FUNCTION_DECL: rewrite_function_decl,
    ConstructKind.IMPORT_EXPORT: rewrite_import_export,
    ConstructKind.USE: rewrite_use,
    ConstructKind.FIELD_DECL: rewrite_field_decl,
    ConstructKind.UNRECOGNIZED: _unchanged,
}


def rewrite(line: str, kind: ConstructKind) -> str:
    return REWRITERS.get(kind, _unchanged)(line)
