"""Validation of glob patterns used in workflow filters (branches, tags, paths).

Rules checked:

- ``+`` or ``?`` at the top of a pattern, or right after a special character,
  is an error.
- ``[...]`` must be closed, must not be empty, must not hold a single
  character, and every range in it must be complete and ordered.
- ``\\`` escapes special characters; elsewhere it is an ordinary character
  in file paths and an invalid character in Git ref names.
- Newlines are never allowed.
- Ref names may not contain spaces, ``~``, ``^`` or ``:``, may not start
  with ``/``, and may not end with ``/`` or ``.``.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

__all__ = ["InvalidGlobPattern", "validate_ref_glob", "validate_path_glob"]

_SIMPLE_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
}

_REF_FORBIDDEN = "ref name cannot contain spaces, ~, ^, :, [, ?, *"


def _escape_char(ch: str, quote: str) -> str:
    if ch == quote or ch == "\\":
        return "\\" + ch
    if ch in _SIMPLE_ESCAPES:
        return _SIMPLE_ESCAPES[ch]
    if ch.isprintable():
        return ch
    code = ord(ch)
    if code < 0x20 or code == 0x7F:
        return f"\\x{code:02x}"
    if code < 0x10000:
        return f"\\u{code:04x}"
    return f"\\U{code:08x}"


def _quote_char(ch: str | None) -> str:
    """Quote a single character in single quotes; ``None`` (end of input) is shown as U+FFFD."""
    if ch is None:
        return "'\ufffd'"
    return "'" + _escape_char(ch, "'") + "'"


def _quote_string(text: str) -> str:
    return '"' + "".join(_escape_char(ch, '"') for ch in text) + '"'


@dataclass(frozen=True)
class InvalidGlobPattern:
    """An error found in a glob pattern.

    ``column`` is 1-based; zero means the error happened before the first
    character was read, or on a line after a newline in the pattern.
    """

    message: str
    column: int

    def __str__(self) -> str:
        return f"{self.column}: {self.message}"


class _Scanner:
    """Character reader with one character of lookahead.

    The reported position is always that of the lookahead character.
    ``None`` stands for the end of input.
    """

    def __init__(self, text: str, on_error: Callable[[str], None]) -> None:
        self._text = text
        self._on_error = on_error
        self._idx = 0
        self._loaded = False

    def _load(self) -> None:
        if self._idx < len(self._text) and self._text[self._idx] == "\x00":
            self._on_error("invalid character NUL")

    def peek(self) -> str | None:
        if not self._loaded:
            self._loaded = True
            if self._text.startswith("\ufeff"):
                self._idx = 1
            self._load()
        if self._idx < len(self._text):
            return self._text[self._idx]
        return None

    def next(self) -> str | None:
        ch = self.peek()
        if ch is not None:
            self._idx += 1
            self._load()
        return ch

    def column(self) -> int:
        """Column of the last read character, or 0 once a newline was passed."""
        if "\n" in self._text[: self._idx]:
            return 0
        return self._idx


class _GlobValidator:
    def __init__(self, pattern: str, is_ref: bool) -> None:
        self._pattern = pattern
        self._is_ref = is_ref
        self._prec = False
        self.errors: list[InvalidGlobPattern] = []
        self._scan = _Scanner(pattern, self._scan_error)

    def _scan_error(self, msg: str) -> None:
        self._error(
            f"error while scanning glob pattern {_quote_string(self._pattern)}: {msg}"
        )

    def _error(self, msg: str) -> None:
        self.errors.append(InvalidGlobPattern(msg, self._scan.column()))

    def _unexpected(self, char: str | None, what: str, why: str) -> None:
        if char is None:
            unexpected = "unexpected EOF"
        else:
            unexpected = f"unexpected character {_quote_char(char)}"
        while_ = f" while checking {what}" if what else ""
        self._error(f"invalid glob pattern. {unexpected}{while_}. {why}")

    def _invalid_ref_char(self, char: str | None, why: str) -> None:
        if char is not None and char.isprintable():
            shown = f"'{char}'"
        else:
            shown = _quote_char(char)
        self._error(
            f"character {shown} is invalid for branch and tag names. {why}. "
            "see `man git-check-ref-format` for more details. "
            "note that regular expression is unavailable"
        )

    def _validate_next(self) -> bool:
        scan = self._scan
        c = scan.next()
        prec = True

        if c == "\\":
            following = scan.peek()
            if following in ("[", "?", "*"):
                c = scan.next()
                if self._is_ref:
                    self._invalid_ref_char(scan.peek(), _REF_FORBIDDEN)
            elif following in ("+", "\\", "!"):
                c = scan.next()
            elif self._is_ref:
                # File paths may contain '\', ref names may not.
                self._invalid_ref_char(
                    "\\", "only special characters [, ?, +, *, \\ ! can be escaped with \\"
                )
                c = scan.next()
        elif c == "?":
            if not self._prec:
                self._unexpected(
                    "?",
                    "special character ? (zero or one)",
                    "the preceding character must not be special character",
                )
            prec = False
        elif c == "+":
            if not self._prec:
                self._unexpected(
                    "+",
                    "special character + (one or more)",
                    "the preceding character must not be special character",
                )
            prec = False
        elif c == "*":
            prec = False
        elif c == "[":
            if scan.peek() == "]":
                c = scan.next()
                self._unexpected(
                    "]", "content of character match []", "character match must not be empty"
                )
            else:
                chars = 0
                while True:
                    c = scan.next()
                    if c == "]":
                        break
                    if c is None:
                        self._unexpected(c, "end of character match []", "missing ]")
                        return False
                    if scan.peek() != "-":
                        chars += 1
                        continue
                    # A range like 0-9; counting two is enough for the check below.
                    chars += 2
                    start = c
                    c = scan.next()  # '-'
                    following = scan.peek()
                    if following == "]":
                        c = scan.next()
                        self._unexpected(c, "character range in []", "end of range is missing")
                        break
                    if following is not None:
                        c = scan.next()
                        if start > c:
                            why = (
                                f"start of range {_quote_char(start)} ({ord(start)}) is larger "
                                f"than end of range {_quote_char(c)} ({ord(c)})"
                            )
                            self._unexpected(c, "character range in []", why)
                if chars == 1:
                    self._unexpected(
                        c,
                        "character match []",
                        "character match with single character is useless. "
                        "simply use x instead of [x]",
                    )
        elif c == "\r":
            if scan.peek() == "\n":
                c = scan.next()
            self._unexpected(c, "", "newline cannot be contained")
        elif c == "\n":
            self._unexpected("\n", "", "newline cannot be contained")
        elif c in (" ", "\t", "~", "^", ":"):
            if self._is_ref:
                self._invalid_ref_char(c, _REF_FORBIDDEN)

        self._prec = prec

        if scan.peek() is None:
            if self._is_ref and c in ("/", "."):
                self._invalid_ref_char(c, "ref name must not end with / and .")
            return False
        return True

    def validate(self) -> list[InvalidGlobPattern]:
        scan = self._scan
        if self._pattern == "":
            self._error("glob pattern cannot be empty")
            return self.errors

        first = scan.peek()
        if first == "/":
            if self._is_ref:
                scan.next()
                self._invalid_ref_char("/", "ref name must not start with /")
                self._prec = True
        elif first == "!":
            scan.next()
            if scan.peek() is None:
                self._unexpected(
                    "!",
                    "! at first character (negate pattern)",
                    "at least one character must follow !",
                )
                return self.errors
            self._prec = False

        while self._validate_next():
            pass
        return self.errors


def validate_ref_glob(pattern: str) -> list[InvalidGlobPattern]:
    """Validate a glob pattern matching Git ref names; return the errors found."""
    return _GlobValidator(pattern, True).validate()


def validate_path_glob(pattern: str) -> list[InvalidGlobPattern]:
    """Validate a glob pattern matching file paths; return the errors found."""
    return _GlobValidator(pattern, False).validate()