# -*- coding: utf-8 -*-
"""
Wavefront .obj/.mtl importer.

Failures are all subclasses of WavefrontException. Syntax failures carry
a SourceSpan so they can be rendered as a pointer diagnostic without
parsing the file again.
"""

from typing import Optional
from dataclasses import dataclass


@dataclass(frozen=True)
class SourceSpan:
    """Location of a token: 1-based line, 0-based columns within the line
    and the absolute character offset of the start column."""
    line: int
    start: int
    end: int
    offset: int = 0

    def __str__(self):
        return f"line {self.line}, column {self.start + 1}"


def render_pointer(span: SourceSpan, source_line: str) -> str:
    """Renders the source line with a caret marker under the span"""
    gutter = f"{span.line:>5} | "
    width = max(1, span.end - span.start)
    # Tabs keep their width in the marker row so the carets line up
    padding = ''.join(c if c == '\t' else ' ' for c in source_line[:span.start])
    return (f"{gutter}{source_line}\n"
            f"{' ' * (len(gutter) - 2)}| {padding}{'^' * width}")


class WavefrontException(Exception):
    pass


class InvalidSyntaxException(WavefrontException):
    def __init__(self, message: str, span: SourceSpan, source_line: str = ''):
        self.message = message
        self.span = span
        self.source_line = source_line
        super().__init__(self.render())

    def render(self) -> str:
        text = f"{self.span}: {self.message}"
        if self.source_line:
            text += "\n" + render_pointer(self.span, self.source_line)
        return text


class UnexpectedDirectiveException(InvalidSyntaxException):
    def __init__(self, token: str, span: SourceSpan, source_line: str = ''):
        self.token = token
        super().__init__(f"unexpected directive '{token}'", span, source_line)


class ExpectedIndexException(InvalidSyntaxException):
    pass


class InvalidNumberException(InvalidSyntaxException):
    pass


class InvalidEncodingException(InvalidSyntaxException):
    pass


class MissingDirectiveException(WavefrontException):
    """A directive appeared before (or without) the directive it requires"""
    def __init__(self, directive: str, line: Optional[int] = None,
                 obj: Optional[str] = None):
        self.directive = directive
        self.line = line
        self.obj = obj
        where = '' if obj is None else f" in object '{obj}'"
        super().__init__(with_line(f"Missing `{directive}`{where}.", line))


class MultipleDirectiveException(WavefrontException):
    def __init__(self, directive: str, line: Optional[int] = None):
        self.directive = directive
        self.line = line
        super().__init__(with_line(f"Multiple `{directive}` is not supported.", line))


class DuplicateNameException(WavefrontException):
    kind = 'name'

    def __init__(self, name: str, line: Optional[int] = None):
        self.name = name
        self.line = line
        super().__init__(with_line(f"Duplicated {self.kind} '{name}'.", line))


class DuplicateObjectException(DuplicateNameException):
    kind = 'object'


class DuplicateMaterialException(DuplicateNameException):
    kind = 'material'


class IndexRangeException(WavefrontException):
    pass


class OutOfRangeIndexException(IndexRangeException):
    def __init__(self, index: int, max: int, attribute: str = 'v',
                 line: Optional[int] = None):
        self.index = index
        self.max = max
        self.attribute = attribute
        self.line = line
        super().__init__(with_line(
            f"Vertex attribute index out of range: `{attribute}` {index} > {max}.", line))


class ZeroIndexException(InvalidSyntaxException, IndexRangeException):
    pass


class InvalidPreprocessorException(WavefrontException):
    def __init__(self, flag: str, span: Optional[SourceSpan] = None,
                 source_line: str = ''):
        self.flag = flag
        self.span = span
        message = f"Invalid preprocessor '{flag}'."
        if span is not None:
            message = f"{span}: {message}"
            if source_line:
                message += "\n" + render_pointer(span, source_line)
        super().__init__(message)


class ReferenceException(WavefrontException):
    pass


class UnknownMaterialException(ReferenceException):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown material '{name}'.")


class UnresolvedLibraryException(ReferenceException):
    def __init__(self, path: str):
        self.path = path
        super().__init__(f"Could not load material library '{path}'.")


class AssetIOException(WavefrontException):
    def __init__(self, path: str, reason: str = ''):
        self.path = path
        super().__init__(f"Could not read '{path}'" + (f": {reason}" if reason else '.'))


class InvalidPathException(AssetIOException):
    def __init__(self, path: str, reason: str = 'path escapes the asset root'):
        super().__init__(path, reason)


class InvalidImageException(AssetIOException):
    pass


def with_line(message: str, line: Optional[int]) -> str:
    return message if line is None else f"{message} (line {line})"
