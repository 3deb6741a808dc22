"""Parser for the path schema language.

A schema is a ``/``-separated list of parts, for example::

    $gitlab_path.strip_last_prefix("helm-")/$[technologies]/+
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterator, NamedTuple, Optional


class SchemaSyntaxError(ValueError):
    """Raised when schema text cannot be tokenized or parsed."""

    def __init__(self, message: str, position: int) -> None:
        super().__init__(f"{message} (at offset {position})")
        self.position = position


@dataclass
class Modifier:
    """A modifier call attached to a variable, such as ``strip_last_prefix("helm-")``."""

    func: str
    args: list[str] = field(default_factory=list)


@dataclass
class Var:
    """A ``$name`` reference with an optional modifier."""

    name: str
    modifier: Optional[Modifier] = None


@dataclass
class VarSet:
    """A ``$[name]`` reference to a variable set."""

    name: str


@dataclass
class Part:
    """One ``/``-separated part of a schema; exactly one field is set."""

    var: Optional[Var] = None
    var_set: Optional[VarSet] = None
    wildcard: Optional[str] = None
    literal: Optional[str] = None

    def __str__(self) -> str:
        if self.var is not None:
            text = f"Variable: {self.var.name}"
            if self.var.modifier is not None:
                args = ", ".join(self.var.modifier.args)
                text += (
                    f"\n    Modifier: {self.var.modifier.func}({args}), "
                    f"Arguments: {args}"
                )
            return text
        if self.var_set is not None:
            return f"VarSet:{self.var_set.name}"
        if self.wildcard is not None:
            return f"Wildcard:{self.wildcard}"
        if self.literal is not None:
            return f"Literal:{self.literal}"
        return ""


@dataclass
class SchemaAST:
    """The parsed form of a schema."""

    parts: list[Part] = field(default_factory=list)

    def __str__(self) -> str:
        return "\n".join(str(part) for part in self.parts)


class _Token(NamedTuple):
    kind: str
    value: str
    pos: int


_TOKEN_RULES = (
    ("Ident", r"[a-zA-Z_][a-zA-Z0-9_-]*"),
    ("String", r'"(?:\\.|[^"])*"'),
    ("Slash", r"/"),
    ("Dot", r"\."),
    ("Comma", r","),
    ("Plus", r"\+"),
    ("Star", r"\*"),
    ("Dollar", r"\$"),
    ("LParen", r"\("),
    ("RParen", r"\)"),
    ("LBracket", r"\["),
    ("RBracket", r"\]"),
    ("Whitespace", r"[ \t\n\r]+"),
)

_TOKEN_RE = re.compile("|".join(f"(?P<{name}>{pattern})" for name, pattern in _TOKEN_RULES))

_SIMPLE_ESCAPES = {
    "a": "\a",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
    "\\": "\\",
    '"': '"',
}

_ESCAPE_RE = re.compile(
    r"\\(?:([abfnrtv\\\"])|x([0-9a-fA-F]{2})|u([0-9a-fA-F]{4})"
    r"|U([0-9a-fA-F]{8})|([0-7]{3})|(.|$))",
    re.DOTALL,
)


def _tokenize(text: str) -> Iterator[_Token]:
    pos = 0
    while pos < len(text):
        match = _TOKEN_RE.match(text, pos)
        if match is None:
            raise SchemaSyntaxError(f"invalid input text {text[pos:pos + 10]!r}", pos)
        kind = match.lastgroup or ""
        yield _Token(kind, match.group(), pos)
        pos = match.end()


def _unquote(token: _Token) -> str:
    body = token.value[1:-1]

    def replace(match: re.Match[str]) -> str:
        simple, hex2, hex4, hex8, octal, bad = match.groups()
        if simple is not None:
            return _SIMPLE_ESCAPES[simple]
        if bad is not None:
            raise SchemaSyntaxError(f"invalid escape sequence in {token.value}", token.pos)
        if octal is not None:
            value = int(octal, 8)
            if value > 0xFF:
                raise SchemaSyntaxError(f"invalid octal escape in {token.value}", token.pos)
            return chr(value)
        digits = hex2 or hex4 or hex8
        value = int(digits, 16)
        if hex2 is None and (value > 0x10FFFF or 0xD800 <= value <= 0xDFFF):
            raise SchemaSyntaxError(f"invalid unicode escape in {token.value}", token.pos)
        return chr(value)

    return _ESCAPE_RE.sub(replace, body)


class _Parser:
    def __init__(self, tokens: list[_Token], length: int) -> None:
        self._tokens = tokens
        self._index = 0
        self._length = length

    def _peek(self) -> Optional[_Token]:
        if self._index < len(self._tokens):
            return self._tokens[self._index]
        return None

    def _accept(self, kind: str) -> Optional[_Token]:
        token = self._peek()
        if token is not None and token.kind == kind:
            self._index += 1
            return token
        return None

    def _unexpected(self, expected: str) -> SchemaSyntaxError:
        token = self._peek()
        if token is None:
            return SchemaSyntaxError(f"unexpected end of input (expected {expected})", self._length)
        return SchemaSyntaxError(
            f"unexpected token {token.value!r} (expected {expected})", token.pos
        )

    def _expect(self, kind: str) -> _Token:
        token = self._accept(kind)
        if token is None:
            raise self._unexpected(kind)
        return token

    def parse(self) -> SchemaAST:
        parts = [self._part()]
        while self._accept("Slash"):
            parts.append(self._part())
        if self._peek() is not None:
            raise self._unexpected("'/' or end of input")
        return SchemaAST(parts)

    def _part(self) -> Part:
        token = self._peek()
        if token is None:
            raise self._unexpected("schema part")
        if token.kind == "Dollar":
            self._index += 1
            if self._accept("LBracket"):
                name = self._expect("Ident").value
                self._expect("RBracket")
                return Part(var_set=VarSet(name))
            name = self._expect("Ident").value
            modifier = self._modifier() if self._accept("Dot") else None
            return Part(var=Var(name, modifier))
        if token.kind in ("Plus", "Star"):
            self._index += 1
            return Part(wildcard=token.value)
        if token.kind == "Ident":
            self._index += 1
            return Part(literal=token.value)
        raise self._unexpected("schema part")

    def _modifier(self) -> Modifier:
        func = self._expect("Ident").value
        self._expect("LParen")
        self._accept("Whitespace")
        args = [_unquote(self._expect("String"))]
        while True:
            saved = self._index
            self._accept("Whitespace")
            if not self._accept("Comma"):
                self._index = saved
                break
            self._accept("Whitespace")
            args.append(_unquote(self._expect("String")))
        self._accept("Whitespace")
        self._expect("RParen")
        return Modifier(func, args)


def parse_schema(text: str) -> SchemaAST:
    """Parse schema text into a :class:`SchemaAST`, raising :class:`SchemaSyntaxError`."""
    return _Parser(list(_tokenize(text)), len(text)).parse()