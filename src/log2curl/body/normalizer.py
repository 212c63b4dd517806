"""Turn log-style object dumps into valid JSON.

Logs rarely print real JSON: keys are bare, string values are bare, empty
values show up as ``key: ,`` and Python reprs bring ``True``/``None`` and
single quotes. :func:`normalize_body` runs an ordered chain of strategies,
cheapest first, and the first one that yields a JSON value wins:

  1. ``strict``     - the text already is JSON.
  2. ``quote-swap`` - Python/Ruby style single-quoted JSON.
  3. ``tolerant``   - :class:`LogBodyParser`, a forgiving recursive-descent
                      parser whose output is re-checked with :func:`json.loads`.

New strategies can be slotted into :data:`DEFAULT_STRATEGIES` without touching
the others.
"""

from __future__ import annotations

import json
import re
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..utils.logging import get_logger

logger = get_logger(__name__)


class BodyParseError(ValueError):
    """The body could not be coerced into JSON."""

    def __init__(self, message: str, position: Optional[int] = None, char: Optional[str] = None):
        super().__init__(message)
        self.position = position
        self.char = char


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def loads_strict(text: str) -> Any:
    # NaN / Infinity are not JSON
    return json.loads(text, parse_constant=_reject_constant)


def swap_single_quotes(text: str) -> str:
    """Rewrite ``'...'`` literals as ``"..."``, escaping inner double quotes.

    Naive on purpose: an apostrophe inside a double-quoted string is taken as
    the start of a single-quoted literal.
    """
    out: List[str] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch != "'":
            out.append(ch)
            i += 1
            continue
        out.append('"')
        i += 1
        while i < n and text[i] != "'":
            if text[i] == "\\" and i + 1 < n:
                out.append(text[i : i + 2])
                i += 2
            elif text[i] == '"':
                out.append('\\"')
                i += 1
            else:
                out.append(text[i])
                i += 1
        out.append('"')
        i += 1
    return "".join(out)


# ---------------------------------------------------------------- strategies

Strategy = Callable[[str], Any]


def parse_strict(text: str) -> Any:
    return loads_strict(text)


def parse_quote_swapped(text: str) -> Any:
    return loads_strict(swap_single_quotes(text))


def parse_tolerant(text: str) -> Any:
    emitted = LogBodyParser(text).parse()
    try:
        return loads_strict(emitted)
    except json.JSONDecodeError as e:
        char = emitted[e.pos] if e.pos < len(emitted) else ""
        raise BodyParseError(f"Normalized body is not valid JSON: {e.msg} at position {e.pos}", e.pos, char) from e


DEFAULT_STRATEGIES: Tuple[Tuple[str, Strategy], ...] = (
    ("strict", parse_strict),
    ("quote-swap", parse_quote_swapped),
    ("tolerant", parse_tolerant),
)


def normalize_value(raw: str, strategies: Sequence[Tuple[str, Strategy]] = DEFAULT_STRATEGIES) -> Any:
    """Parse ``raw`` with the first strategy that succeeds and return the value."""
    text = raw.strip()
    error: Optional[ValueError] = None
    for name, strategy in strategies:
        try:
            value = strategy(text)
        except ValueError as e:
            error = e
            continue
        except RecursionError:
            error = BodyParseError(f"Body nesting too deep for the {name} strategy")
            continue
        logger.debug("body normalized by %s strategy", name)
        return value
    if isinstance(error, BodyParseError):
        raise error
    raise BodyParseError(str(error) if error else "No normalization strategy configured") from error


def normalize_body(raw: str, indent: int = 2) -> str:
    """Return ``raw`` as pretty-printed JSON text; raises :class:`BodyParseError`."""
    return json.dumps(normalize_value(raw), indent=indent, ensure_ascii=False)


# ---------------------------------------------------------------- tolerant parser

MAX_DEPTH = 128
_JSON_ESCAPES = '"\\/bfnrtu'
_COMMENT_PREFIXES = ("//", "#")
_KEY_RE = re.compile(r"[\w\-.$]+")
_DELIM = r"(?=[,\s}\]]|\Z)"
_NULL_RE = re.compile(rf"(?:null|none){_DELIM}", re.IGNORECASE)
_TRUE_RE = re.compile(rf"true{_DELIM}", re.IGNORECASE)
_FALSE_RE = re.compile(rf"false{_DELIM}", re.IGNORECASE)
_NUMBER_RE = re.compile(rf"-?(?:0|[1-9]\d*)(?:\.\d+)?(?:[eE][+-]?\d+)?{_DELIM}")
# after a newline: does the next line open a new "key:" or close the container?
_NEXT_FIELD_RE = re.compile(r"\s*(?:[\w\"'][\w\-.$]*[\"']?\s*:|[}\]])")


def _escape_char(ch: str) -> str:
    if ch == '"':
        return '\\"'
    if ch < " ":
        return json.dumps(ch)[1:-1]
    return ch


def strip_comment_lines(text: str) -> str:
    return "\n".join(line for line in text.split("\n") if not line.lstrip().startswith(_COMMENT_PREFIXES))


class LogBodyParser:
    """Recursive-descent parser emitting JSON text for one log-style value.

    Tolerates bare keys and values, missing or trailing commas, empty values
    (emitted as ``null``), Python literals and a missing closing bracket at
    end of input. Structural errors raise :class:`BodyParseError`.
    """

    def __init__(self, text: str):
        self.text = strip_comment_lines(text)
        self.pos = 0
        self.depth = 0

    def parse(self) -> str:
        self._skip_ws()
        return self._parse_value()

    # ---- values

    def _parse_value(self) -> str:
        self._skip_ws()
        ch = self._peek()
        if ch in ("{", "["):
            return self._parse_container(ch)
        if ch in ('"', "'"):
            return self._parse_quoted()
        return self._parse_unquoted()

    def _parse_container(self, ch: str) -> str:
        if self.depth >= MAX_DEPTH:
            raise BodyParseError(f"Nesting deeper than {MAX_DEPTH} levels at position {self.pos}", self.pos, ch)
        self.depth += 1
        try:
            return self._parse_object() if ch == "{" else self._parse_array()
        finally:
            self.depth -= 1

    def _parse_object(self) -> str:
        self._expect("{")
        self._skip_ws()
        entries: List[str] = []
        while not self._eof() and self._peek() != "}":
            if entries:
                if self._peek() == ",":
                    self.pos += 1
                self._skip_ws()
                if self._eof() or self._peek() == "}":
                    break
            key = self._parse_key()
            self._skip_ws()
            self._expect(":")
            self._skip_ws()
            if self._peek() in (",", "}"):
                value = "null"
            else:
                value = self._parse_value()
            entries.append(f"{key}: {value}")
            self._skip_ws()
        if not self._eof():
            self._expect("}")
        return "{" + ", ".join(entries) + "}"

    def _parse_array(self) -> str:
        self._expect("[")
        self._skip_ws()
        elements: List[str] = []
        while not self._eof() and self._peek() != "]":
            if elements:
                if self._peek() == ",":
                    self.pos += 1
                self._skip_ws()
                if self._eof() or self._peek() == "]":
                    break
            before = self.pos
            elements.append(self._parse_value())
            if self.pos == before and self._peek() != ",":
                raise self._error("']'")
            self._skip_ws()
        if not self._eof():
            self._expect("]")
        return "[" + ", ".join(elements) + "]"

    def _parse_key(self) -> str:
        self._skip_ws()
        if self._peek() in ('"', "'"):
            return self._parse_quoted()
        m = _KEY_RE.match(self.text, self.pos)
        if m is None:
            raise self._error("key")
        self.pos = m.end()
        return f'"{m.group(0)}"'

    def _parse_quoted(self) -> str:
        quote = self.text[self.pos]
        self.pos += 1
        out: List[str] = []
        while not self._eof() and self._peek() != quote:
            ch = self.text[self.pos]
            self.pos += 1
            if ch != "\\":
                out.append(_escape_char(ch))
                continue
            if self._eof():
                break
            esc = self.text[self.pos]
            self.pos += 1
            # keep JSON escapes, drop the backslash of anything else
            out.append("\\" + esc if esc in _JSON_ESCAPES else _escape_char(esc))
        if not self._eof():
            self.pos += 1
        return '"' + "".join(out) + '"'

    def _parse_unquoted(self) -> str:
        self._skip_ws()
        for regex, literal in ((_NULL_RE, "null"), (_TRUE_RE, "true"), (_FALSE_RE, "false")):
            m = regex.match(self.text, self.pos)
            if m:
                self.pos = m.end()
                return literal
        m = _NUMBER_RE.match(self.text, self.pos)
        if m:
            self.pos = m.end()
            return m.group(0)

        start = self.pos
        while not self._eof():
            ch = self._peek()
            if ch in ",}]":
                break
            if ch == "\n" and _NEXT_FIELD_RE.match(self.text, self.pos + 1):
                break
            self.pos += 1
        raw = self.text[start : self.pos].strip()
        if not raw:
            return "null"
        return json.dumps(raw, ensure_ascii=False)

    # ---- primitives

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _eof(self) -> bool:
        return self.pos >= len(self.text)

    def _skip_ws(self) -> None:
        while not self._eof() and self.text[self.pos].isspace():
            self.pos += 1

    def _error(self, expected: str) -> BodyParseError:
        got = self._peek()
        return BodyParseError(f"Expected {expected} at position {self.pos}, got '{got}'", self.pos, got)

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            raise self._error(f"'{ch}'")
        self.pos += 1
