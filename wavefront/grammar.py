# -*- coding: utf-8 -*-
"""
Line scanner shared by the .obj and .mtl grammars.

Both formats are line oriented: every physical line is tokenized on its
own, so a scanner only ever sees one line of text.
"""

from typing import Iterator, Tuple, Final
import re
import numpy as np
from wavefront import (SourceSpan, InvalidSyntaxException, InvalidNumberException,
                       ExpectedIndexException, ZeroIndexException,
                       InvalidEncodingException)


COMMENT_PREFIX: Final[str] = '#'
PREPROCESSOR_MARKER: Final[str] = '>>>'
BLANKS: Final[str] = ' \t\x0c'

IDENTIFIER_PATTERN: Final[re.Pattern] = re.compile(r'[A-Za-z0-9_.\-]+')
NUMBER_PATTERN: Final[re.Pattern] = re.compile(
    r'[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?')
INDEX_PATTERN: Final[re.Pattern] = re.compile(r'\d+')


def decode(data: bytes) -> str:
    """Decodes UTF-8 source bytes, pointing at the first bad byte on failure"""
    try:
        return data.decode('utf-8')
    except UnicodeDecodeError as e:
        good = data[:e.start].decode('utf-8')
        lineno = good.count('\n') + 1
        linestart = good.rfind('\n') + 1
        column = len(good) - linestart
        span = SourceSpan(lineno, column, column + 1, len(good))
        raise InvalidEncodingException(
            f"invalid UTF-8 byte 0x{data[e.start]:02x}", span, good[linestart:]) from e


def source_lines(text: str) -> Iterator[Tuple[int, int, str]]:
    """Yields (line number, offset of line start, line) for each line.

    Lines end at '\\n' only, one '\\r' before it is dropped. Other Unicode
    line breaks (form feed, U+0085, U+2028 ...) stay part of the line.
    """
    offset = 0
    for lineno, line in enumerate(text.split('\n'), 1):
        yield lineno, offset, line.removesuffix('\r')
        offset += len(line) + 1


class LineScanner:
    """Cursor over a single source line"""

    def __init__(self, line: str, lineno: int, offset: int = 0):
        self.line = line
        self.lineno = lineno
        self.offset = offset
        self.pos = 0
        self.end = len(line)

    def span(self, start: int, end: int) -> SourceSpan:
        return SourceSpan(self.lineno, start, end, self.offset + start)

    def error(self, message: str, start: int, end: int,
              exception: type = InvalidSyntaxException) -> InvalidSyntaxException:
        return exception(message, self.span(start, end), self.line)

    def strip_trailing_comment(self) -> None:
        """Text after an inline '#' is not part of the directive"""
        comment = self.line.find(COMMENT_PREFIX, self.pos)
        if comment >= 0:
            self.end = comment

    def consume(self, prefix: str) -> bool:
        if self.line.startswith(prefix, self.pos, self.end):
            self.pos += len(prefix)
            return True
        return False

    def skip_blanks(self) -> None:
        while self.pos < self.end and self.line[self.pos] in BLANKS:
            self.pos += 1

    def at_end(self) -> bool:
        self.skip_blanks()
        return self.pos >= self.end

    def token_end(self) -> int:
        """End of the whitespace delimited token at the cursor"""
        end = self.pos
        while end < self.end and self.line[end] not in BLANKS:
            end += 1
        return end

    def word(self) -> Tuple[str, int, int]:
        self.skip_blanks()
        start, end = self.pos, self.token_end()
        self.pos = end
        return self.line[start:end], start, end

    def rest(self) -> str:
        """Consumes everything up to the end of the physical line"""
        self.skip_blanks()
        text = self.line[self.pos:]
        self.pos = self.end = len(self.line)
        return text

    def identifier(self, what: str) -> str:
        self.skip_blanks()
        start = self.pos
        if start >= self.end:
            raise self.error(f"expected {what}", start, start + 1)

        match = IDENTIFIER_PATTERN.match(self.line, start, self.end)
        end = self.token_end()
        if not match or match.end() != end:
            raise self.error(
                f"invalid {what} '{self.line[start:end]}' "
                '(allowed characters are A-Z a-z 0-9 _ . -)', start, end)
        self.pos = end
        return match.group()

    def number(self, what: str) -> float:
        """Parses a single precision float"""
        self.skip_blanks()
        start, end = self.pos, self.token_end()
        if start >= self.end:
            raise self.error(f"expected a number in `{what}`", start, start + 1,
                             InvalidNumberException)

        match = NUMBER_PATTERN.fullmatch(self.line, start, end)
        if not match:
            raise self.error(f"invalid number '{self.line[start:end]}' in `{what}`",
                             start, end, InvalidNumberException)
        self.pos = end
        with np.errstate(over='ignore'):
            return float(np.float32(match.group()))

    def index(self, what: str) -> int:
        """Parses a strictly positive 1-based index and returns it 0-based"""
        start = self.pos
        match = INDEX_PATTERN.match(self.line, start, self.end)
        if not match:
            raise self.error(f"expected an index in `{what}`", start, start + 1,
                             ExpectedIndexException)
        self.pos = match.end()

        value = int(match.group())
        if value == 0:
            raise self.error(f"index in `{what}` must be non-zero",
                             start, self.pos, ZeroIndexException)
        return value - 1

    def expect(self, char: str, what: str) -> None:
        if self.pos < self.end and self.line[self.pos] == char:
            self.pos += 1
            return
        raise self.error(f"expected '{char}' in `{what}`", self.pos, self.pos + 1,
                         ExpectedIndexException)

    def finish(self, what: str) -> None:
        """Fails if anything but blanks or a trailing comment is left"""
        if self.at_end():
            return
        start, end = self.pos, self.token_end()
        raise self.error(f"unexpected '{self.line[start:end]}' after `{what}`", start, end)
