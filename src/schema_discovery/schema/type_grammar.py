"""Tokenizer and declaration splitter for free-text column types.

A declaration such as ``decimal(10,2) unsigned zerofill`` or
``timestamp(3) with time zone`` is split into its words (lower-cased, with the
parenthesized argument list removed) and its arguments. Resolving the words against
a dialect's name table and applying modifiers happens in ``ColumnType.parse``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import List, Optional, Union

from schema_discovery.common.errors import TypeDecodeError

_TOKEN_RE = re.compile(
    r"\s*(?:"
    r"(?P<string>'(?:[^']|'')*')"
    r"|(?P<number>\d+)"
    r"|(?P<word>[A-Za-z_][A-Za-z0-9_$]*)"
    r"|(?P<punct>[(),=])"
    r")"
)


@dataclass(frozen=True)
class Token:
    kind: str
    text: str

    @property
    def value(self) -> Union[str, int]:
        if self.kind == "number":
            return int(self.text)
        if self.kind == "string":
            return self.text[1:-1].replace("''", "'")
        return self.text


@dataclass
class TypeDeclaration:
    """A type declaration split into words and arguments.

    ``words`` keeps the original spelling; ``names`` is the lower-cased view used for
    matching. ``args`` is None when no parenthesized list was present.
    """

    words: List[str] = field(default_factory=list)
    args: Optional[List[Union[str, int]]] = None

    @property
    def names(self) -> List[str]:
        return [w.lower() for w in self.words]


def tokenize(text: str) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    stripped = text.rstrip()
    while pos < len(stripped):
        match = _TOKEN_RE.match(stripped, pos)
        if match is None or match.end() == pos:
            raise TypeDecodeError(f"Unexpected character {stripped[pos]!r} at offset {pos}")
        kind = match.lastgroup
        tokens.append(Token(kind, match.group(kind)))
        pos = match.end()
    return tokens


def split_declaration(text: str) -> TypeDeclaration:
    """Split ``text`` into words and at most one argument list.

    Raises:
        TypeDecodeError: On an empty declaration or a malformed argument list.
    """
    tokens = tokenize(text)
    if not tokens:
        raise TypeDecodeError("Empty type declaration")
    if tokens[0].kind != "word":
        raise TypeDecodeError(f"Type declaration must start with a name, got {tokens[0].text!r}")

    decl = TypeDeclaration()
    i = 0
    while i < len(tokens):
        token = tokens[i]
        if token.kind == "word":
            decl.words.append(token.text)
            i += 1
        elif token.text == "(":
            if decl.args is not None:
                raise TypeDecodeError("More than one argument list")
            decl.args, i = _parse_args(tokens, i + 1)
        else:
            raise TypeDecodeError(f"Unexpected token {token.text!r}")
    return decl


def _parse_args(tokens: List[Token], i: int):
    args: List[Union[str, int]] = []
    expect_value = True
    while i < len(tokens):
        token = tokens[i]
        if token.text == ")":
            if expect_value and args:
                raise TypeDecodeError("Trailing comma in argument list")
            return args, i + 1
        if expect_value:
            if token.kind not in ("number", "string"):
                raise TypeDecodeError(f"Unexpected argument {token.text!r}")
            args.append(token.value)
            expect_value = False
        else:
            if token.text != ",":
                raise TypeDecodeError(f"Expected ',' between arguments, got {token.text!r}")
            expect_value = True
        i += 1
    raise TypeDecodeError("Unterminated argument list")
