"""
Entry points loading .obj and .mtl assets from raw bytes.

Parsing and folding are pure; the only calls into the asset source are
reading the referenced material library and handing out texture handles.
"""

from typing import Any, Dict, Optional, Union, Final
from dataclasses import dataclass
import dataclasses
import logging
from wavefront import AssetIOException, UnresolvedLibraryException
from wavefront.assets import (AssetPath, AssetSource, AssetHandle, load_image_info)
from wavefront.base_classes import ObjCollection, MtlCollection, MAP_KD_LABEL
from wavefront.grammar import decode
from wavefront.mtl_parser import parse_material
from wavefront.mtl_reader import load_materials, bind_materials
from wavefront.obj_parser import parse_geometry
from wavefront.obj_reader import load_geometry, DEFAULT_SCALE, DEFAULT_FLIP_V
from geoutil import ImageInfo


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObjSettings:
    scale: float = DEFAULT_SCALE
    flip_v: bool = DEFAULT_FLIP_V


class LoadContext:
    """The asset being loaded and the source its dependencies come from"""

    def __init__(self, path: AssetPath, source: AssetSource):
        self.path = path
        self.source = source

    def resolve_embed(self, relative: str) -> AssetPath:
        return self.path.resolve_embed(relative)

    def read(self, path: AssetPath) -> bytes:
        return self.source.read_bytes(path)

    def texture(self, path: AssetPath) -> AssetHandle[ImageInfo]:
        return AssetHandle(path, self.source, load_image_info)

    def nested(self, path: AssetPath) -> 'LoadContext':
        return LoadContext(path, self.source)


class MtlLoader:
    extensions: Final = ('mtl',)

    def load(self, data: bytes, settings: Any, context: LoadContext) -> MtlCollection:
        materials = load_materials(parse_material(decode(data)))

        for name, material in materials.items():
            if material.map_kd is None:
                continue
            texture = context.resolve_embed(material.map_kd)
            materials[name] = dataclasses.replace(
                material, diffuse_texture=context.texture(texture))
            logger.debug(f"Material '{name}' {MAP_KD_LABEL} -> {texture}")

        return MtlCollection(materials)


class ObjLoader:
    extensions: Final = ('obj',)

    def load(self, data: bytes, settings: Optional[ObjSettings],
             context: LoadContext) -> ObjCollection:
        settings = settings or ObjSettings()
        geometry = load_geometry(parse_geometry(decode(data)),
                                 settings.scale, settings.flip_v)

        try:
            mtllib = context.resolve_embed(geometry.mtllib)
            mtldata = context.read(mtllib)
        except AssetIOException as e:
            raise UnresolvedLibraryException(geometry.mtllib) from e
        logger.debug(f"Loading material library {mtllib} for {context.path}")
        materials = MtlLoader().load(mtldata, None, context.nested(mtllib))

        objects = bind_materials(geometry.objects, materials)
        logger.info(f"Loaded {context.path}: {len(objects)} objects, "
                    f"{len(materials)} materials")
        return ObjCollection(objects, materials)


LOADERS: Final[Dict[str, Union[ObjLoader, MtlLoader]]] = {
    extension: loader
    for loader in (ObjLoader(), MtlLoader())
    for extension in loader.extensions
}


def load(data: bytes, settings: Optional[ObjSettings] = None, *,
         context: LoadContext) -> ObjCollection:
    """Loads a .obj file and the material library it references"""
    return ObjLoader().load(data, settings, context)


def load_path(path: Union[str, AssetPath], source: AssetSource,
              settings: Optional[ObjSettings] = None) -> Any:
    """Loads an asset by path, returning the labeled sub-asset if a label is given"""
    if isinstance(path, str):
        path = AssetPath.parse(path)
    if path.extension not in LOADERS:
        raise AssetIOException(str(path), f"no loader for '.{path.extension}' files")

    loader = LOADERS[path.extension]
    asset = loader.load(source.read_bytes(path), settings, LoadContext(path.without_label(), source))
    if path.label is None:
        return asset
    try:
        return asset.labeled(path.label)
    except KeyError:
        raise AssetIOException(str(path), f"no sub-asset labeled '{path.label}'") from None
