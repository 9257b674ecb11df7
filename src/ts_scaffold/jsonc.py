"""Edit JSON-with-comments documents (tsconfig.json and friends) in place.

Edits are computed as text replacements against the original document, so
comments, trailing commas and the formatting of untouched parts survive.
New values are written with 4-space indentation matching their depth.

:func:`loads` and :func:`to_python` read a document into plain Python
values. The scaffolder only writes, so they serve callers that inspect
the result, such as the test suite.
"""

from __future__ import annotations

import json
import re
from collections.abc import Sequence
from dataclasses import dataclass, field
from json.decoder import scanstring
from typing import Any, NamedTuple, NoReturn

INDENT = " " * 4

_LITERAL_RE = re.compile(r"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?|true|false|null")
_WHITESPACE = " \t\r\n\ufeff"


class JSONCError(ValueError):
    pass


class Edit(NamedTuple):
    offset: int
    length: int
    content: str


@dataclass
class Node:
    """A value in the parsed document, located by character offsets.

    ``property`` nodes hold the key in ``value`` and the value node in ``children[0]``.
    """

    kind: str
    offset: int
    length: int = 0
    value: Any = None
    children: list[Node] = field(default_factory=list)

    @property
    def end(self) -> int:
        return self.offset + self.length


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def fail(self, message: str) -> NoReturn:
        raise JSONCError(f"{message} at offset {self.pos}")

    def peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def skip_trivia(self) -> None:
        text = self.text
        while self.pos < len(text):
            if text[self.pos] in _WHITESPACE:
                self.pos += 1
            elif text.startswith("//", self.pos):
                newline = text.find("\n", self.pos)
                self.pos = len(text) if newline == -1 else newline + 1
            elif text.startswith("/*", self.pos):
                close = text.find("*/", self.pos + 2)
                if close == -1:
                    self.fail("unterminated block comment")
                self.pos = close + 2
            else:
                return

    def document(self) -> Node | None:
        self.skip_trivia()
        if self.pos == len(self.text):
            return None
        root = self.value()
        self.skip_trivia()
        if self.pos != len(self.text):
            self.fail("unexpected content after the document")
        return root

    def value(self) -> Node:
        ch = self.peek()
        if ch == "{":
            return self.object()
        if ch == "[":
            return self.array()
        if ch == '"':
            start = self.pos
            return Node("string", start, value=self.string(), length=self.pos - start)

        match = _LITERAL_RE.match(self.text, self.pos)
        if match is None:
            self.fail("expected a value")
        token = match.group()
        self.pos = match.end()
        if token in ("true", "false"):
            return Node("boolean", match.start(), len(token), value=token == "true")
        if token == "null":
            return Node("null", match.start(), len(token))
        return Node("number", match.start(), len(token), value=json.loads(token))

    def string(self) -> str:
        try:
            value, self.pos = scanstring(self.text, self.pos + 1)
        except json.JSONDecodeError as exc:
            raise JSONCError(f"invalid string at offset {self.pos}: {exc.msg}") from exc
        return value

    def object(self) -> Node:
        node = Node("object", self.pos)
        self.pos += 1
        self.skip_trivia()
        while self.peek() != "}":
            if self.peek() != '"':
                self.fail("expected a property name")
            prop = Node("property", self.pos)
            prop.value = self.string()
            self.skip_trivia()
            if self.peek() != ":":
                self.fail("expected ':'")
            self.pos += 1
            self.skip_trivia()
            child = self.value()
            prop.children.append(child)
            prop.length = child.end - prop.offset
            node.children.append(prop)
            if not self.separator("}"):
                break
        self.pos += 1
        node.length = self.pos - node.offset
        return node

    def array(self) -> Node:
        node = Node("array", self.pos)
        self.pos += 1
        self.skip_trivia()
        while self.peek() != "]":
            node.children.append(self.value())
            if not self.separator("]"):
                break
        self.pos += 1
        node.length = self.pos - node.offset
        return node

    def separator(self, closing: str) -> bool:
        """Consume a ',' (trailing ones allowed) and report whether more items may follow."""
        self.skip_trivia()
        if self.peek() == ",":
            self.pos += 1
            self.skip_trivia()
            return True
        if self.peek() != closing:
            self.fail(f"expected ',' or '{closing}'")
        return False


def parse_tree(text: str) -> Node | None:
    """Parse ``text``; returns None for a document holding only whitespace and comments."""
    return _Parser(text).document()


def to_python(node: Node | None) -> Any:
    if node is None:
        return None
    if node.kind == "object":
        return {prop.value: to_python(prop.children[0]) for prop in node.children}
    if node.kind == "array":
        return [to_python(child) for child in node.children]
    return node.value


def loads(text: str) -> Any:
    return to_python(parse_tree(text))


def _dump(value: Any, level: int) -> str:
    dumped = json.dumps(value, indent=len(INDENT), ensure_ascii=False)
    return dumped.replace("\n", "\n" + INDENT * level)


def _nest(path: Sequence[str], value: Any) -> Any:
    for key in reversed(path):
        value = {key: value}
    return value


def _find_property(obj: Node, key: str) -> Node | None:
    # Duplicate keys resolve to the last one, as JSON.parse does
    for prop in reversed(obj.children):
        if prop.value == key:
            return prop
    return None


def _insert_property(text: str, obj: Node, key: str, value: Any, level: int) -> Edit:
    entry = f"{json.dumps(key, ensure_ascii=False)}: {_dump(value, level)}"
    if obj.children:
        return Edit(obj.children[-1].end, 0, f",\n{INDENT * level}{entry}")

    inner_start, inner_end = obj.offset + 1, obj.end - 1
    content = f"\n{INDENT * level}{entry}\n{INDENT * (level - 1)}"
    if text[inner_start:inner_end].strip():
        # Only comments inside; keep them and append before the closing brace
        return Edit(inner_end, 0, content)
    return Edit(inner_start, inner_end - inner_start, content)


def modify(text: str, path: Sequence[str], value: Any) -> list[Edit]:
    """Compute the edits that set ``path`` to ``value``, creating missing objects on the way."""
    root = parse_tree(text)
    if not path:
        return [Edit(0, len(text), _dump(value, 0) + "\n")]
    if root is None:
        if not text.strip():
            return [Edit(0, len(text), _dump(_nest(path, value), 0) + "\n")]
        # Only comments so far; they stay ahead of the new object
        separator = "" if text.endswith("\n") else "\n"
        return [Edit(len(text), 0, separator + _dump(_nest(path, value), 0) + "\n")]

    node = root
    for depth, key in enumerate(path):
        if node.kind != "object":
            raise JSONCError(f"cannot set {'.'.join(path)}: {'.'.join(path[:depth]) or 'document'} is not an object")
        prop = _find_property(node, key)
        if prop is None:
            return [_insert_property(text, node, key, _nest(path[depth + 1 :], value), depth + 1)]
        node = prop.children[0]

    return [Edit(node.offset, node.length, _dump(value, len(path)))]


def apply_edits(text: str, edits: Sequence[Edit]) -> str:
    for edit in sorted(edits, key=lambda e: e.offset, reverse=True):
        text = text[: edit.offset] + edit.content + text[edit.offset + edit.length :]
    return text


def set_value(text: str, path: Sequence[str], value: Any) -> str:
    """Set ``path`` to ``value`` and check the result still parses."""
    edited = apply_edits(text, modify(text, path, value))
    parse_tree(edited)
    return edited
