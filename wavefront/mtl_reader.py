"""
Folds .mtl directives into named materials and binds them to objects.
"""

from typing import Dict, Optional, Sequence
import dataclasses
import logging
from wavefront import (MissingDirectiveException, MultipleDirectiveException,
                       DuplicateMaterialException, UnknownMaterialException)
from wavefront.base_classes import Material, Obj, MtlCollection
from wavefront.mtl_parser import MtlDirective, Comment, Newmtl, MapKd


logger = logging.getLogger(__name__)


def load_materials(directives: Sequence[MtlDirective]) -> Dict[str, Material]:
    materials: Dict[str, Material] = {}
    current: Optional[str] = None

    for directive in directives:
        if isinstance(directive, Comment):
            continue
        elif isinstance(directive, Newmtl):
            if directive.name in materials:
                raise DuplicateMaterialException(directive.name, directive.line)
            materials[directive.name] = Material(directive.name)
            current = directive.name
        elif isinstance(directive, MapKd):
            if current is None:
                raise MissingDirectiveException('mtllib', directive.line)
            if materials[current].map_kd is not None:
                raise MultipleDirectiveException('map_Kd', directive.line)
            materials[current] = dataclasses.replace(materials[current], map_kd=directive.path)
        else:
            raise TypeError(f"Unexpected directive: {directive!r}")

    return materials


def bind_materials(objects: Dict[str, Obj], materials: MtlCollection) -> Dict[str, Obj]:
    """Replaces every object's material name with the material it refers to"""
    bound: Dict[str, Obj] = {}
    for name, obj in objects.items():
        if obj.material_key not in materials:
            raise UnknownMaterialException(obj.material_key)
        bound[name] = dataclasses.replace(obj, material=materials[obj.material_key])
    logger.debug(f"Bound {len(bound)} objects to {len(materials)} materials")
    return bound
