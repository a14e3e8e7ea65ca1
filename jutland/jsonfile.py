"""Reading JSON5 configuration files."""

from __future__ import annotations

import math
import os
import re
from typing import Any

_IDENT = re.compile(r"(?:[^\W\d]|\$)(?:\w|\$)*")
_NUMBER = re.compile(
    r"[+-]?(?:Infinity|NaN|0[xX][0-9a-fA-F]+|(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)"
)
_LINE_COMMENT = re.compile(r"//[^\n\r\u2028\u2029]*")
_LITERALS = {"true": True, "false": False, "null": None}
_ESCAPES = {"b": "\b", "f": "\f", "n": "\n", "r": "\r", "t": "\t", "v": "\v", "0": "\0"}
_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


class Json5Error(ValueError):
    """A JSON5 document could not be parsed."""

    def __init__(self, message: str, text: str, pos: int) -> None:
        self.msg = message
        self.pos = pos
        self.line = text.count("\n", 0, pos) + 1
        self.column = pos - (text.rfind("\n", 0, pos) + 1) + 1
        super().__init__(f"{message} at line {self.line}, column {self.column}")


class _Parser:
    def __init__(self, text: str) -> None:
        self._text = text
        self._pos = 0

    def parse(self) -> Any:
        self._skip()
        value = self._value()
        self._skip()
        if self._pos < len(self._text):
            raise self._error("unexpected trailing content")
        return value

    def _error(self, message: str, pos: int | None = None) -> Json5Error:
        return Json5Error(message, self._text, self._pos if pos is None else pos)

    def _peek(self) -> str:
        return self._text[self._pos] if self._pos < len(self._text) else ""

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            raise self._error(f"expected {ch!r}")
        self._pos += 1

    def _skip(self) -> None:
        text = self._text
        while self._pos < len(text):
            ch = text[self._pos]
            if ch.isspace() or ch == "\ufeff":
                self._pos += 1
            elif text.startswith("//", self._pos):
                self._pos = _LINE_COMMENT.match(text, self._pos).end()
            elif text.startswith("/*", self._pos):
                end = text.find("*/", self._pos + 2)
                if end < 0:
                    raise self._error("unterminated comment")
                self._pos = end + 2
            else:
                return

    def _value(self) -> Any:
        ch = self._peek()
        if not ch:
            raise self._error("unexpected end of input")
        if ch == "{":
            return self._object()
        if ch == "[":
            return self._array()
        if ch in "\"'":
            return self._string()
        match = _NUMBER.match(self._text, self._pos)
        if match:
            self._pos = match.end()
            return self._number(match.group())
        match = _IDENT.match(self._text, self._pos)
        if match and match.group() in _LITERALS:
            self._pos = match.end()
            return _LITERALS[match.group()]
        raise self._error(f"unexpected character {ch!r}")

    @staticmethod
    def _number(token: str) -> int | float:
        negative = token.startswith("-")
        body = token.lstrip("+-")
        value: int | float
        if body == "Infinity":
            value = math.inf
        elif body == "NaN":
            value = math.nan
        elif body[:2] in ("0x", "0X"):
            value = int(body, 16)
        elif any(c in body for c in ".eE"):
            value = float(body)
        else:
            value = int(body)
        return -value if negative else value

    def _key(self) -> str:
        if self._peek() in ("'", '"'):
            return self._string()
        match = _IDENT.match(self._text, self._pos)
        if not match:
            raise self._error("expected property name")
        self._pos = match.end()
        return match.group()

    def _object(self) -> dict[str, Any]:
        self._pos += 1
        result: dict[str, Any] = {}
        self._skip()
        if self._peek() == "}":
            self._pos += 1
            return result
        while True:
            key = self._key()
            self._skip()
            self._expect(":")
            self._skip()
            result[key] = self._value()
            self._skip()
            ch = self._peek()
            if ch == ",":
                self._pos += 1
                self._skip()
                if self._peek() == "}":
                    self._pos += 1
                    return result
            elif ch == "}":
                self._pos += 1
                return result
            else:
                raise self._error("expected ',' or '}'")

    def _array(self) -> list[Any]:
        self._pos += 1
        result: list[Any] = []
        self._skip()
        if self._peek() == "]":
            self._pos += 1
            return result
        while True:
            result.append(self._value())
            self._skip()
            ch = self._peek()
            if ch == ",":
                self._pos += 1
                self._skip()
                if self._peek() == "]":
                    self._pos += 1
                    return result
            elif ch == "]":
                self._pos += 1
                return result
            else:
                raise self._error("expected ',' or ']'")

    def _hex_escape(self, length: int) -> str:
        digits = self._text[self._pos : self._pos + length]
        if len(digits) != length or not set(digits) <= _HEX_DIGITS:
            raise self._error("invalid hexadecimal escape")
        self._pos += length
        return chr(int(digits, 16))

    def _string(self) -> str:
        text = self._text
        start = self._pos
        quote = text[self._pos]
        self._pos += 1
        parts: list[str] = []
        while True:
            if self._pos >= len(text):
                raise self._error("unterminated string", start)
            ch = text[self._pos]
            if ch == quote:
                self._pos += 1
                break
            if ch in "\n\r":
                raise self._error("unterminated string", start)
            if ch != "\\":
                parts.append(ch)
                self._pos += 1
                continue
            self._pos += 1
            if self._pos >= len(text):
                raise self._error("unterminated string", start)
            esc = text[self._pos]
            self._pos += 1
            if esc in _ESCAPES:
                parts.append(_ESCAPES[esc])
            elif esc == "u":
                parts.append(self._hex_escape(4))
            elif esc == "x":
                parts.append(self._hex_escape(2))
            elif esc == "\r":
                if self._peek() == "\n":
                    self._pos += 1
            elif esc in "\n\u2028\u2029":
                pass
            elif esc.isdigit():
                raise self._error("invalid escape", self._pos - 2)
            else:
                parts.append(esc)
        value = "".join(parts)
        try:
            return value.encode("utf-16", "surrogatepass").decode("utf-16")
        except UnicodeDecodeError:
            return value


def parse_json5(text: str) -> Any:
    """Parse a JSON5 document into Python values.

    Raises :class:`Json5Error` if the text is not valid JSON5.
    """
    return _Parser(text).parse()


def load_json5(path: str | os.PathLike[str]) -> Any:
    """Read and parse a JSON5 file."""
    with open(path, encoding="utf-8") as fh:
        return parse_json5(fh.read())