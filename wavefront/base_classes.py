"""
Assets produced by the .obj and .mtl loaders
"""

from typing import Dict, Iterator, Optional, Tuple, Final, TYPE_CHECKING
from dataclasses import dataclass, field
from enum import Flag
from types import MappingProxyType
import numpy as np
from geoutil import Vertex
from wavefront import UnknownMaterialException

if TYPE_CHECKING:
    from wavefront.assets import AssetHandle


OBJ_LABEL_PREFIX: Final[str] = 'obj:'
MAP_KD_LABEL: Final[str] = 'map_Kd'


class Cull(Flag):
    NONE = 0
    UP = 1
    DOWN = 1 << 1


@dataclass(frozen=True)
class Material:
    name: str
    map_kd: Optional[str] = None
    """Diffuse texture path as written in the .mtl file"""
    diffuse_texture: Optional['AssetHandle'] = field(default=None, compare=False)
    """Lazily loaded texture, set once the path is resolved by the loader"""

    def __repr__(self) -> str: return f"Material({self.name})"


@dataclass(frozen=True)
class Obj:
    name: str
    vertices: Tuple[Vertex, ...]
    faces: Tuple[Tuple[int, int, int], ...]
    material_key: str
    material: Optional[Material] = None
    culls: Tuple[Cull, ...] = ()

    @property
    def positions(self): return tuple(vertex.v for vertex in self.vertices)
    @property
    def uvs(self): return tuple(vertex.t for vertex in self.vertices)
    @property
    def normals(self): return tuple(vertex.n for vertex in self.vertices)
    @property
    def label(self) -> str: return f"{OBJ_LABEL_PREFIX}{self.name}"
    def __repr__(self) -> str:
        return f"Obj({self.name}, {len(self.vertices)} vertices, {len(self.faces)} faces)"

    def to_arrays(self) -> Dict[str, np.ndarray]:
        """Render buffers: float32 attributes and uint32 triangle indices"""
        count = len(self.vertices)
        return {
            'positions': np.array(self.positions, dtype=np.float32).reshape(count, 3),
            'uvs': np.array(self.uvs, dtype=np.float32).reshape(count, 2),
            'normals': np.array(self.normals, dtype=np.float32).reshape(count, 3),
            'indices': np.array(self.faces, dtype=np.uint32).reshape(len(self.faces), 3),
        }


class MtlCollection:
    """Materials of a single .mtl file, keyed by name"""

    def __init__(self, materials: Dict[str, Material]):
        self._materials = MappingProxyType(dict(materials))

    @property
    def materials(self): return self._materials

    def __getitem__(self, name: str) -> Material:
        if name not in self._materials:
            raise UnknownMaterialException(name)
        return self._materials[name]

    def __contains__(self, name: str) -> bool: return name in self._materials
    def __iter__(self) -> Iterator[str]: return iter(self._materials)
    def __len__(self) -> int: return len(self._materials)
    def __repr__(self) -> str: return f"MtlCollection({len(self)} materials)"

    def labeled(self, label: str) -> 'AssetHandle':
        """Looks up '<material>/map_Kd' sub-assets"""
        name, _, sub = label.rpartition('/')
        material = self._materials[name]
        if sub != MAP_KD_LABEL or material.diffuse_texture is None:
            raise KeyError(label)
        return material.diffuse_texture

    def dependencies(self) -> Iterator['AssetHandle']:
        for material in self._materials.values():
            if material.diffuse_texture is not None:
                yield material.diffuse_texture


class ObjCollection:
    """Every object of a single .obj file together with its resolved materials"""

    def __init__(self, objects: Dict[str, Obj], materials: MtlCollection):
        self._objects = MappingProxyType(dict(objects))
        self._materials = materials

    @property
    def objects(self): return self._objects
    @property
    def materials(self) -> MtlCollection: return self._materials

    def __getitem__(self, name: str) -> Obj: return self._objects[name]
    def __contains__(self, name: str) -> bool: return name in self._objects
    def __iter__(self) -> Iterator[str]: return iter(self._objects)
    def __len__(self) -> int: return len(self._objects)
    def __repr__(self) -> str: return f"ObjCollection({len(self)} objects)"

    def labeled(self, label: str) -> Obj:
        """Looks up an 'obj:<name>' sub-asset"""
        if not label.startswith(OBJ_LABEL_PREFIX):
            raise KeyError(label)
        return self._objects[label[len(OBJ_LABEL_PREFIX):]]

    def dependencies(self) -> Iterator['AssetHandle']:
        return self._materials.dependencies()
