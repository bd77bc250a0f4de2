# -*- coding: utf-8 -*-
"""
Grammar for .obj geometry files.

Supported directives:
    # >>> flag ...        preprocessor flags
    # text                comment
    mtllib <path>
    o <name>
    v x y z
    vt u v
    vn x y z
    usemtl <name>
    f v/vt/vn v/vt/vn v/vt/vn [...]

Face indices are 1-based in the file and 0-based in the parsed directives.
"""

from typing import List, Tuple, Union, Optional, Final, FrozenSet, TypeAlias
from dataclasses import dataclass, field
from wavefront import UnexpectedDirectiveException, InvalidPreprocessorException
from wavefront.grammar import (LineScanner, source_lines,
                               COMMENT_PREFIX, PREPROCESSOR_MARKER)


PREPROCESSOR_FLAGS: Final[FrozenSet[str]] = frozenset({'check_cull'})
MIN_FACE_VERTICES: Final[int] = 3

VertexKey: TypeAlias = Tuple[int, int, int]  # (position, uv, normal), 0-based


@dataclass(frozen=True)
class Comment:
    text: str
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Preprocess:
    flags: Tuple[str, ...]
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Mtllib:
    path: str
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class ObjectStart:
    name: str
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Position:
    x: float
    y: float
    z: float
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class TexCoord:
    u: float
    v: float
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Normal:
    x: float
    y: float
    z: float
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Usemtl:
    name: str
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Face:
    vertices: Tuple[VertexKey, ...]
    line: Optional[int] = field(default=None, compare=False)


ObjDirective: TypeAlias = Union[Comment, Preprocess, Mtllib, ObjectStart,
                                Position, TexCoord, Normal, Usemtl, Face]


def parse_comment(scanner: LineScanner) -> Union[Comment, Preprocess]:
    scanner.skip_blanks()
    if not scanner.consume(PREPROCESSOR_MARKER):
        return Comment(scanner.rest(), scanner.lineno)

    scanner.strip_trailing_comment()
    flags: List[str] = []
    while not scanner.at_end():
        start = scanner.pos
        flag = scanner.identifier('preprocessor flag')
        if flag not in PREPROCESSOR_FLAGS:
            raise InvalidPreprocessorException(
                flag, scanner.span(start, scanner.pos), scanner.line)
        flags.append(flag)

    if not flags:
        raise scanner.error('expected at least one preprocessor flag',
                            scanner.pos, scanner.pos + 1)
    return Preprocess(tuple(flags), scanner.lineno)


def parse_face(scanner: LineScanner) -> Face:
    vertices: List[VertexKey] = []
    while not scanner.at_end():
        position = scanner.index('f')
        scanner.expect('/', 'f')
        uv = scanner.index('f')
        scanner.expect('/', 'f')
        normal = scanner.index('f')
        vertices.append((position, uv, normal))

        # Each triple must be followed by a blank or the end of the directive
        if scanner.pos < scanner.end and scanner.token_end() != scanner.pos:
            raise scanner.error(f"unexpected '{scanner.line[scanner.pos]}' in `f`",
                                scanner.pos, scanner.token_end())

    if len(vertices) < MIN_FACE_VERTICES:
        raise scanner.error(
            f"`f` needs at least {MIN_FACE_VERTICES} vertices, found {len(vertices)}",
            0, scanner.end)
    return Face(tuple(vertices), scanner.lineno)


def parse_directive(scanner: LineScanner) -> ObjDirective:
    if scanner.consume(COMMENT_PREFIX):
        return parse_comment(scanner)

    scanner.strip_trailing_comment()
    keyword, start, end = scanner.word()
    lineno = scanner.lineno

    directive: ObjDirective
    if keyword == 'mtllib':
        directive = Mtllib(scanner.identifier('material library path'), lineno)
    elif keyword == 'o':
        directive = ObjectStart(scanner.identifier('object name'), lineno)
    elif keyword == 'v':
        directive = Position(scanner.number('v'), scanner.number('v'),
                             scanner.number('v'), lineno)
    elif keyword == 'vt':
        directive = TexCoord(scanner.number('vt'), scanner.number('vt'), lineno)
    elif keyword == 'vn':
        directive = Normal(scanner.number('vn'), scanner.number('vn'),
                           scanner.number('vn'), lineno)
    elif keyword == 'usemtl':
        directive = Usemtl(scanner.identifier('material name'), lineno)
    elif keyword == 'f':
        directive = parse_face(scanner)
    else:
        raise UnexpectedDirectiveException(keyword, scanner.span(start, end), scanner.line)

    scanner.finish(keyword)
    return directive


def parse_geometry(text: str) -> List[ObjDirective]:
    """Parses .obj source text into directives, in file order"""
    directives: List[ObjDirective] = []
    for lineno, offset, line in source_lines(text):
        scanner = LineScanner(line, lineno, offset)
        if scanner.at_end():
            continue
        directives.append(parse_directive(scanner))
    return directives
