from __future__ import annotations

import re
from enum import StrEnum


class ConstructKind(StrEnum):
    PACKAGE = "package"
    NAMED_BLOCK_OPENER = "named_block_opener"
    TYPE_DECL_OPENER = "type_decl_opener"
    TYPE_ALIAS = "type_alias"
    FUNCTION_DECL = "function_decl"
    IMPORT_EXPORT = "import_export"
    USE = "use"
    FIELD_DECL = "field_decl"
    UNRECOGNIZED = "unrecognized"


_COMMENT_PREFIXES = ("//", "/*", "*/", "*")

_type_decl_re = re.compile(r"^(record|variant|enum|flags|resource)\s+")
_func_sig_re = re.compile(r":\s*(?:async\s+|static\s+)?func\b")
_field_re = re.compile(r"^%?[a-zA-Z][a-zA-Z0-9-]*\s*[:,(]")
_bare_member_re = re.compile(r"^%?[a-zA-Z][a-zA-Z0-9-]*\s*,?\s*$")


def is_comment_line(trimmed: str) -> bool:
    """True for `//`, `///`, `/*`, `*/` and block-comment continuation lines."""

    return trimmed.startswith(_COMMENT_PREFIXES)


def opens_block_comment(trimmed: str) -> bool:
    # `/* ...` left open; the body lines that follow need not start with `*`.
    return trimmed.startswith("/*") and "*/" not in trimmed[2:]


def closes_block_comment(line: str) -> bool:
    return "*/" in line


def split_trailing_comment(line: str) -> tuple[str, str]:
    """Split `code // note` into the code and the verbatim `// note`.

    Returns `(line, "")` when there is no trailing line comment.
    """

    idx = line.find("//")
    if idx <= 0:
        return line, ""
    return line[:idx].rstrip(), line[idx:]


def is_import_export(line: str) -> bool:
    return line.startswith(("import ", "export "))


def has_func_signature(line: str) -> bool:
    return _func_sig_re.search(line) is not None


def _is_function_decl(line: str) -> bool:
    if is_import_export(line):
        return False
    return has_func_signature(line) or "->" in line


def _is_field_decl(line: str) -> bool:
    return _field_re.match(line) is not None or _bare_member_re.match(line) is not None


def classify(trimmed: str) -> ConstructKind:
    """Assign a construct kind to a trimmed, non-blank, non-comment line.

    Patterns overlap, so the order matters: type aliases are checked before
    functions (`type t = func-like-name`), and field declarations are the
    catch-all for record/variant/enum/flags members.
    """

    if trimmed.startswith("package "):
        return ConstructKind.PACKAGE
    if trimmed.startswith(("interface ", "world ")):
        return ConstructKind.NAMED_BLOCK_OPENER
    if _type_decl_re.match(trimmed):
        return ConstructKind.TYPE_DECL_OPENER
    if trimmed.startswith("type ") and "=" in trimmed:
        return ConstructKind.TYPE_ALIAS
    if _is_function_decl(trimmed):
        return ConstructKind.FUNCTION_DECL
    if is_import_export(trimmed):
        return ConstructKind.IMPORT_EXPORT
    if trimmed.startswith("use "):
        return ConstructKind.USE
    if _is_field_decl(trimmed):
        return ConstructKind.FIELD_DECL
    return ConstructKind.UNRECOGNIZED
