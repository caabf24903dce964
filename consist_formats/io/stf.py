"""Reader for the legacy STF block format used by `.con` consist files.

STF text is a tree of `name ( ... )` blocks whose bodies hold bare items,
quoted strings and further blocks:

    SIMISA@@@@@@@@@@JINX0D0t______

    Train (
        TrainCfg ( "Freight"
            MaxVelocity ( 60mph 0.001 )
            Engine ( UiD ( 0 ) EngineData ( dash9 GE ) )
        )
    )

Tokens come from a small pyparsing grammar scanned lazily over the document.
`STFReader` is a cursor over that token stream with typed reads on top.
Block bodies are walked with `iter_block()`, which yields the lower-cased name
of each token in the block and consumes the block's closing `)`; the caller
decides what to do with each name and hands unknown ones to `skip_unknown()`.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import NamedTuple

from pyparsing import Literal, QuotedString, Regex, Suppress, ZeroOrMore, lineno

from consist_formats.core.exceptions import STFError
from consist_formats.core.units import (
    normalise_speed_unit,
    split_unit_literal,
    to_meters_per_second,
)

LOGGER = logging.getLogger(__name__)

OPEN = "("
CLOSE = ")"

_HEADER_PREFIX = "SIMISA@"
_COMPRESSED_HEADER_PREFIX = "SIMISA@F"


class TokenKind(Enum):
    OPEN = "open"
    CLOSE = "close"
    QUOTED = "quoted"
    BARE = "bare"


class Token(NamedTuple):
    kind: TokenKind
    text: str
    line: int


class Units(Enum):
    """Physical quantity of a float read; decides how unit suffixes are handled."""

    NONE = "none"
    SPEED = "speed"


def _as_token(kind: TokenKind):
    def action(s: str, loc: int, toks) -> list[Token]:
        return [Token(kind, "".join(toks), lineno(loc, s))]

    return action


# Quoted strings do not span lines; `"abc" + "def"` concatenates (across lines too).
_QUOTED = QuotedString('"', esc_char="\\", convert_whitespace_escapes=True)
_STRING = (_QUOTED + ZeroOrMore(Suppress(Literal("+")) + _QUOTED)).set_parse_action(
    _as_token(TokenKind.QUOTED)
)
_OPEN = Literal(OPEN).set_parse_action(_as_token(TokenKind.OPEN))
_CLOSE = Literal(CLOSE).set_parse_action(_as_token(TokenKind.CLOSE))
_BARE = Regex(r'[^\s()"]+').set_parse_action(_as_token(TokenKind.BARE))
STF_TOKEN = _OPEN | _CLOSE | _STRING | _BARE


def sniff_encoding(path: Path) -> str:
    """STF files are UTF-16 with a BOM (as written by MSTS tools) or plain UTF-8."""
    with path.open("rb") as f:
        head = f.read(2)
    if head in (b"\xff\xfe", b"\xfe\xff"):
        return "utf-16"
    return "utf-8-sig"


def _check_gap(text: str, start: int, end: int, path: str | Path | None) -> None:
    """Only whitespace may sit between tokens; anything else is a dangling quote."""
    gap = text[start:end]
    rest = gap.lstrip()
    if rest:
        loc = start + len(gap) - len(rest)
        raise STFError(
            f"unterminated string near {rest.strip()[:20]!r}", path=path, line=lineno(loc, text)
        )


def tokenize(text: str, *, path: str | Path | None = None) -> Iterator[Token]:
    """Yield tokens of `text` in order, lazily."""
    prev = 0
    for toks, start, end in STF_TOKEN.scan_string(text):
        _check_gap(text, prev, start, path)
        prev = end
        yield toks[0]
    _check_gap(text, prev, len(text), path)


class STFReader:
    """Token stream over one STF document with typed, delimiter-aware reads."""

    def __init__(self, text: str, *, path: str | Path | None = None) -> None:
        self.path = None if path is None else str(path)
        self._tokens = tokenize(text, path=path)
        self._pushback: list[Token] = []
        self._line = 0
        self._skip_header()

    @classmethod
    @contextmanager
    def open(cls, path: str | Path) -> Iterator[STFReader]:
        """Open `path` for reading; the file is closed before the reader is handed out."""
        path = Path(path)
        encoding = sniff_encoding(path)
        with path.open("r", encoding=encoding, errors="replace") as fh:
            text = fh.read()
        yield cls(text, path=path)

    @classmethod
    def from_text(cls, text: str, *, path: str | Path | None = None) -> STFReader:
        return cls(text, path=path)

    # -- token plumbing ---------------------------------------------------

    def _advance(self) -> Token | None:
        if self._pushback:
            tok = self._pushback.pop()
        else:
            tok = next(self._tokens, None)
        if tok is not None:
            self._line = tok.line
        return tok

    def _peek(self) -> Token | None:
        tok = self._advance()
        if tok is not None:
            self._pushback.append(tok)
        return tok

    def _next(self) -> Token:
        tok = self._advance()
        if tok is None:
            raise self.error("unexpected end of file")
        return tok

    def _skip_header(self) -> None:
        tok = self._peek()
        if tok is None or tok.kind is not TokenKind.BARE:
            return
        head = tok.text.upper()
        if head.startswith(_COMPRESSED_HEADER_PREFIX):
            raise self.error("compressed STF files are not supported")
        if head.startswith(_HEADER_PREFIX):
            self._next()

    def error(self, message: str, *, line: int | None = None) -> STFError:
        return STFError(message, path=self.path, line=self._line if line is None else line)

    def at_close(self) -> bool:
        """True when the next token is a `)` (not consumed)."""
        tok = self._peek()
        return tok is not None and tok.kind is TokenKind.CLOSE

    def at_eof(self) -> bool:
        return self._peek() is None

    # -- delimiters and blocks -------------------------------------------

    def must_match(self, expected: str) -> None:
        """Consume the next token, failing unless it is `expected` (case-insensitive)."""
        tok = self._next()
        if expected == OPEN:
            ok = tok.kind is TokenKind.OPEN
        elif expected == CLOSE:
            ok = tok.kind is TokenKind.CLOSE
        else:
            ok = tok.kind in (TokenKind.BARE, TokenKind.QUOTED) and tok.text.lower() == expected.lower()
        if not ok:
            raise self.error(f"expected {expected!r}, found {tok.text!r}", line=tok.line)

    def skip_block(self) -> None:
        """Skip to the `)` matching an already consumed `(`."""
        depth = 1
        while depth:
            tok = self._next()
            if tok.kind is TokenKind.OPEN:
                depth += 1
            elif tok.kind is TokenKind.CLOSE:
                depth -= 1

    def skip_unknown(self, name: str | None = None) -> None:
        """Ignore an unrecognized token together with its block, if it has one."""
        LOGGER.debug("%s:%d: skipping unknown token %r", self.path or "<stf>", self._line, name)
        tok = self._peek()
        if tok is not None and tok.kind is TokenKind.OPEN:
            self._next()
            self.skip_block()

    def iter_block(self) -> Iterator[str]:
        """Yield lower-cased token names until the block's `)` (consumed)."""
        while True:
            tok = self._next()
            if tok.kind is TokenKind.CLOSE:
                return
            if tok.kind is TokenKind.OPEN:
                # anonymous group, nothing can claim it
                self.skip_block()
                continue
            yield tok.text.lower()

    def iter_file(self) -> Iterator[str]:
        """Yield lower-cased top-level token names until end of file."""
        while not self.at_eof():
            tok = self._next()
            if tok.kind is TokenKind.CLOSE:
                raise self.error("unbalanced ')' at top level", line=tok.line)
            if tok.kind is TokenKind.OPEN:
                self.skip_block()
                continue
            yield tok.text.lower()

    # -- literal reads ----------------------------------------------------

    def read_item(self) -> str:
        """Return the next token's text, whatever it is (delimiters included)."""
        return self._next().text

    def read_string(self) -> str:
        tok = self._next()
        if tok.kind in (TokenKind.OPEN, TokenKind.CLOSE):
            raise self.error(f"expected a string, found {tok.text!r}", line=tok.line)
        return tok.text

    def read_int(self) -> int:
        text = self.read_string()
        try:
            return int(text)
        except ValueError:
            raise self.error(f"expected an integer, found {text!r}") from None

    def read_float(self, units: Units = Units.NONE) -> float:
        text = self.read_string()
        try:
            value, suffix = split_unit_literal(text)
        except STFError:
            raise self.error(f"expected a number, found {text!r}") from None
        if suffix is None:
            return value
        if units is Units.SPEED:
            return to_meters_per_second(value, normalise_speed_unit(suffix))
        raise self.error(f"unexpected unit suffix {suffix!r} in {text!r}")

    def read_string_block(self) -> str:
        self.must_match(OPEN)
        value = self.read_string()
        self.must_match(CLOSE)
        return value

    def read_int_block(self) -> int:
        self.must_match(OPEN)
        value = self.read_int()
        self.must_match(CLOSE)
        return value

    def read_float_block(self, units: Units = Units.NONE) -> float:
        self.must_match(OPEN)
        value = self.read_float(units)
        self.must_match(CLOSE)
        return value
