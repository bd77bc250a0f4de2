# -*- coding: utf-8 -*-
"""
Grammar for .mtl material files.

Supported directives:
    # text                comment
    newmtl <name>
    map_Kd <path>
"""

from typing import List, Union, Optional, TypeAlias
from dataclasses import dataclass, field
from wavefront import UnexpectedDirectiveException
from wavefront.grammar import LineScanner, source_lines, COMMENT_PREFIX


@dataclass(frozen=True)
class Comment:
    text: str
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class Newmtl:
    name: str
    line: Optional[int] = field(default=None, compare=False)

@dataclass(frozen=True)
class MapKd:
    path: str
    line: Optional[int] = field(default=None, compare=False)


MtlDirective: TypeAlias = Union[Comment, Newmtl, MapKd]


def parse_directive(scanner: LineScanner) -> MtlDirective:
    if scanner.consume(COMMENT_PREFIX):
        return Comment(scanner.rest(), scanner.lineno)

    scanner.strip_trailing_comment()
    keyword, start, end = scanner.word()

    directive: MtlDirective
    if keyword == 'newmtl':
        directive = Newmtl(scanner.identifier('material name'), scanner.lineno)
    elif keyword == 'map_Kd':
        directive = MapKd(scanner.identifier('texture path'), scanner.lineno)
    else:
        raise UnexpectedDirectiveException(keyword, scanner.span(start, end), scanner.line)

    scanner.finish(keyword)
    return directive


def parse_material(text: str) -> List[MtlDirective]:
    """Parses .mtl source text into directives, in file order"""
    directives: List[MtlDirective] = []
    for lineno, offset, line in source_lines(text):
        scanner = LineScanner(line, lineno, offset)
        if scanner.at_end():
            continue
        directives.append(parse_directive(scanner))
    return directives
