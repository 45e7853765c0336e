#!/usr/bin/python3
# Copyright (c) 2023 Peace-Maker
import functools
import logging
import pathlib
import re
from datetime import datetime, timezone

import tree_sitter_typescript
from tree_sitter import Language, Node, Parser

from tstranslate.classes import Catalog, TranslationLocation
from tstranslate.writer import PoHeader, render

logger = logging.getLogger(__name__)

SOURCE_SUFFIXES = (".ts", ".tsx")
SINGULAR_MARKER = "__"
PLURAL_MARKER = "__n"

_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v"}
_LINE_TERMINATORS = "\r\n\u2028\u2029"
_LONE_SURROGATE = re.compile("[\ud800-\udfff]")


class ExtractionError(Exception):
    def __init__(self, path: str | pathlib.Path, message: str) -> None:
        super().__init__(f"{path}: {message}")
        self.path = str(path)


class FileReadError(ExtractionError):
    pass


class ParseError(ExtractionError):
    def __init__(self, path: str | pathlib.Path, line: int) -> None:
        super().__init__(path, f"syntax error on line {line}")
        self.line = line


def find_source_files(root: str | pathlib.Path) -> list[pathlib.Path]:
    files = []
    for entry in sorted(pathlib.Path(root).resolve().iterdir()):
        if entry.is_dir() and not entry.is_symlink():
            files.extend(find_source_files(entry))
        elif entry.is_file() and not entry.is_symlink() and entry.name.endswith(SOURCE_SUFFIXES):
            files.append(entry)
    return files


@functools.cache
def _get_parser(suffix: str) -> Parser:
    if suffix == ".tsx":
        language = Language(tree_sitter_typescript.language_tsx())
    else:
        language = Language(tree_sitter_typescript.language_typescript())
    return Parser(language)


def _decode_escape(sequence: str) -> str:
    body = sequence[1:]
    first = body[0]
    if first in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[first]
    if first in _LINE_TERMINATORS:
        # Line continuation
        return ""
    if first == "x":
        return chr(int(body[1:3], 16))
    if first == "u":
        digits = body[2:-1] if body[1] == "{" else body[1:5]
        return chr(int(digits, 16))
    if first in "01234567":
        return chr(int(body, 8))
    return body


def _literal_text(node: Node) -> str:
    # Text between the delimiters with escapes resolved and ${...} dropped
    text = node.text
    start = node.start_byte + 1
    end = node.end_byte - 1
    pos = start
    parts = []
    for child in node.children:
        if child.start_byte < start or child.end_byte > end:
            continue
        parts.append(text[pos - node.start_byte : child.start_byte - node.start_byte].decode())
        if child.type == "escape_sequence":
            parts.append(_decode_escape(child.text.decode()))
        elif child.type != "template_substitution":
            parts.append(child.text.decode())
        pos = child.end_byte
    parts.append(text[pos - node.start_byte : end - node.start_byte].decode())
    value = "".join(parts)
    # Join surrogate pairs written as two \u escapes
    value = value.encode("utf-16", "surrogatepass").decode("utf-16", "surrogatepass")
    return _LONE_SURROGATE.sub("\ufffd", value)


def extract_literal(node: Node | None) -> str | None:
    """Return the text of a string or template literal argument.

    Template substitutions are not evaluated; they are left out and the
    literal segments around them are joined. Any other expression yields
    ``None``.
    """
    while node is not None and node.type == "parenthesized_expression":
        inner = [child for child in node.named_children if child.type != "comment"]
        node = inner[0] if len(inner) == 1 else None
    if node is None:
        return None
    if node.type in ("string", "template_string"):
        return _literal_text(node)
    return None


def _iter_nodes(root: Node):
    stack = [root]
    while stack:
        node = stack.pop()
        yield node
        stack.extend(reversed(node.children))


def _first_error_line(root: Node) -> int:
    for node in _iter_nodes(root):
        if node.type == "ERROR" or node.is_missing:
            return node.start_point[0] + 1
    return root.start_point[0] + 1


def _marker_arguments(node: Node) -> tuple[str, list[Node]] | None:
    callee = node.child_by_field_name("function")
    arguments = node.child_by_field_name("arguments")
    if callee is None or callee.type != "identifier":
        return None
    # Tagged templates put a template_string where the argument list would be
    if arguments is None or arguments.type != "arguments":
        return None
    if node.child_by_field_name("optional_chain") is not None or any(
        child.type in ("optional_chain", "?.") for child in node.children
    ):
        return None
    return callee.text.decode(), [
        child for child in arguments.named_children if child.type != "comment"
    ]


def scan_file(path: str | pathlib.Path, catalog: Catalog) -> None:
    path = pathlib.Path(path)
    try:
        code = path.read_text("utf-8-sig")
    except (OSError, UnicodeDecodeError) as ex:
        raise FileReadError(path, str(ex)) from ex

    tree = _get_parser(path.suffix).parse(code.encode("utf-8"))
    if tree.root_node.has_error:
        raise ParseError(path, _first_error_line(tree.root_node))

    found = 0
    for node in _iter_nodes(tree.root_node):
        if node.type != "call_expression":
            continue
        marker = _marker_arguments(node)
        if marker is None:
            continue
        name, args = marker
        location = TranslationLocation(str(path), node.start_point[0] + 1)

        if name == SINGULAR_MARKER and len(args) >= 1:
            msgid = extract_literal(args[0])
            if msgid:
                catalog.add_singular(msgid, location)
                found += 1
        elif name == PLURAL_MARKER and len(args) >= 2:
            singular = extract_literal(args[0])
            plural = extract_literal(args[1])
            if singular and plural:
                catalog.add_plural(singular, plural, location)
                found += 1

    logger.debug(f"Found {found} translatable strings in {path}")


def scan_files(
    paths: list[pathlib.Path], catalog: Catalog, keep_going: bool = False
) -> list[tuple[pathlib.Path, ExtractionError]]:
    skipped = []
    for path in paths:
        logger.debug(f"Scanning {path}")
        try:
            scan_file(path, catalog)
        except ExtractionError as ex:
            if not keep_going:
                raise
            logger.error(f"Skipping {ex}")
            skipped.append((path, ex))
    return skipped


def run(
    *,
    source_folder_path: str,
    output_path: str,
    header: PoHeader | None = None,
    keep_going: bool = False,
    timestamp: datetime | None = None,
) -> Catalog:
    logger.info(f"Looking for source files in {source_folder_path}...")
    files = find_source_files(source_folder_path)
    logger.info(f"Source files: {len(files)}")

    catalog = Catalog()
    skipped = scan_files(files, catalog, keep_going=keep_going)
    if skipped:
        logger.error(f"Skipped {len(skipped)} files that could not be scanned")
    logger.info(f"Translatable strings: {len(catalog)}")

    if timestamp is None:
        timestamp = datetime.now(timezone.utc)
    po_content = render(catalog, timestamp, header=header)
    data = po_content.encode("utf-8")
    pathlib.Path(output_path).write_bytes(data)
    print(f"Translations written to {output_path}")
    return catalog
