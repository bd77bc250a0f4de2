"""
Folds .obj directives into deduplicated, triangulated objects.

Attribute tables are local to the object that is currently open: face
indices are resolved against the positions, texture coordinates and
normals declared since the last `o`, and two objects never share
deduplicated vertices.
"""

from typing import Dict, List, Optional, Sequence, Tuple
from dataclasses import dataclass, field
import logging
from geoutil import Vector2D, Vector3D, Vertex
from triangulate.triangulate import fan_triangulate
from wavefront import (MissingDirectiveException, MultipleDirectiveException,
                       DuplicateObjectException, OutOfRangeIndexException,
                       InvalidPreprocessorException)
from wavefront.base_classes import Obj, Cull
from wavefront.obj_parser import (ObjDirective, Comment, Preprocess, Mtllib, ObjectStart,
                                  Position, TexCoord, Normal, Usemtl, Face,
                                  VertexKey, PREPROCESSOR_FLAGS)


logger = logging.getLogger(__name__)

DEFAULT_SCALE = 2.0
DEFAULT_FLIP_V = True


class ObjBuilder:
    """Accumulates the raw attribute tables and the render buffers of one object"""

    def __init__(self, name: str, line: Optional[int] = None):
        self.name = name
        self.line = line
        self.material: Optional[str] = None

        self.positions: List[Vector3D] = []
        self.texcoords: List[Vector2D] = []
        self.normals: List[Vector3D] = []

        self.lookup: Dict[VertexKey, int] = {}
        self.vertices: List[Vertex] = []
        self.faces: List[Tuple[int, int, int]] = []

    def vertex(self, key: VertexKey, line: Optional[int] = None) -> int:
        """Returns the dense index of the vertex, adding it on first use"""
        if key in self.lookup:
            return self.lookup[key]

        position, uv, normal = key
        for index, table, attribute in ((position, self.positions, 'v'),
                                        (uv, self.texcoords, 'vt'),
                                        (normal, self.normals, 'vn')):
            if index >= len(table):
                raise OutOfRangeIndexException(index + 1, len(table), attribute, line)

        dense = len(self.vertices)
        self.vertices.append(Vertex(
            self.positions[position], self.texcoords[uv], self.normals[normal]))
        self.lookup[key] = dense
        return dense

    def add_face(self, face: Face) -> None:
        indices = [self.vertex(key, face.line) for key in face.vertices]
        self.faces.extend(fan_triangulate(indices))

    def calculate_culls(self) -> Tuple[Cull, ...]:
        # Hidden face detection is not implemented, no face is culled
        logger.debug(f"Face culling requested for '{self.name}', leaving all faces visible")
        return tuple(Cull.NONE for _ in self.faces)

    def build(self, cull: bool) -> Obj:
        if self.material is None:
            raise MissingDirectiveException('usemtl', self.line, obj=self.name)
        return Obj(
            name=self.name,
            vertices=tuple(self.vertices),
            faces=tuple(self.faces),
            material_key=self.material,
            culls=self.calculate_culls() if cull else (),
        )


@dataclass
class FoldState:
    """Everything the fold carries from one directive to the next"""
    scale: float
    flip_v: bool
    objects: Dict[str, ObjBuilder] = field(default_factory=dict)
    current: Optional[ObjBuilder] = None
    mtllib: Optional[str] = None
    cull: bool = False

    def current_object(self, line: Optional[int]) -> ObjBuilder:
        if self.current is None:
            raise MissingDirectiveException('o', line)
        return self.current


@dataclass(frozen=True)
class Geometry:
    objects: Dict[str, Obj]
    mtllib: str


def apply(state: FoldState, directive: ObjDirective) -> None:
    if isinstance(directive, Comment):
        return
    elif isinstance(directive, Preprocess):
        for flag in directive.flags:
            if flag not in PREPROCESSOR_FLAGS:
                raise InvalidPreprocessorException(flag)
            if flag == 'check_cull':
                state.cull = True
    elif isinstance(directive, Mtllib):
        if state.mtllib is not None:
            raise MultipleDirectiveException('mtllib', directive.line)
        state.mtllib = directive.path
    elif isinstance(directive, ObjectStart):
        if directive.name in state.objects:
            raise DuplicateObjectException(directive.name, directive.line)
        logger.debug(f"Reading object '{directive.name}'")
        state.current = state.objects[directive.name] = ObjBuilder(directive.name, directive.line)
    elif isinstance(directive, Position):
        state.current_object(directive.line).positions.append(
            Vector3D(directive.x, directive.y, directive.z).scaled(state.scale))
    elif isinstance(directive, TexCoord):
        uv = Vector2D(directive.u, directive.v)
        state.current_object(directive.line).texcoords.append(
            uv.flipped() if state.flip_v else uv)
    elif isinstance(directive, Normal):
        state.current_object(directive.line).normals.append(
            Vector3D(directive.x, directive.y, directive.z))
    elif isinstance(directive, Usemtl):
        current = state.current_object(directive.line)
        if current.material is not None:
            raise MultipleDirectiveException('usemtl', directive.line)
        current.material = directive.name
    elif isinstance(directive, Face):
        state.current_object(directive.line).add_face(directive)
    else:
        raise TypeError(f"Unexpected directive: {directive!r}")


def load_geometry(directives: Sequence[ObjDirective],
                  scale: float = DEFAULT_SCALE,
                  flip_v: bool = DEFAULT_FLIP_V) -> Geometry:
    """Folds the directives of one .obj file into its objects.

    The returned material library reference still has to be loaded and
    bound by the caller, see wavefront.mtl_reader.bind_materials.
    """
    state = FoldState(scale, flip_v)
    for directive in directives:
        apply(state, directive)

    if state.mtllib is None:
        raise MissingDirectiveException('mtllib')

    objects = {name: builder.build(state.cull) for name, builder in state.objects.items()}
    return Geometry(objects, state.mtllib)
