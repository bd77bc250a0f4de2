"""
Tests for folding .mtl directives and binding materials to objects
"""

import unittest
from wavefront import (MissingDirectiveException, MultipleDirectiveException,
                       DuplicateMaterialException, UnknownMaterialException)
from wavefront.base_classes import Material, MtlCollection
from wavefront.mtl_parser import Comment, Newmtl, MapKd
from wavefront.mtl_reader import load_materials, bind_materials
from wavefront.obj_parser import Mtllib, ObjectStart, Position, TexCoord, Normal, Usemtl, Face
from wavefront.obj_reader import load_geometry


def geometry(material: str):
    return load_geometry([
        Mtllib('tiles.mtl'), ObjectStart('tile'),
        Position(0, 0, 0), TexCoord(0, 0), Normal(0, 0, 1),
        Usemtl(material),
        Face(((0, 0, 0), (0, 0, 0), (0, 0, 0))),
    ])


class TestLoadMaterials(unittest.TestCase):

    def test_materials_by_name(self):
        result = load_materials([
            Comment('tiles'),
            Newmtl('stone'), MapKd('stone.png'),
            Newmtl('grass'),
        ])
        self.assertEqual(['stone', 'grass'], list(result))
        self.assertEqual('stone.png', result['stone'].map_kd)
        self.assertIsNone(result['grass'].map_kd)
        self.assertIsNone(result['stone'].diffuse_texture)

    def test_duplicate_material(self):
        with self.assertRaises(DuplicateMaterialException) as cm:
            load_materials([Newmtl('stone'), Newmtl('grass'), Newmtl('stone', line=3)])
        self.assertEqual('stone', cm.exception.name)
        self.assertEqual(3, cm.exception.line)

    def test_second_map_kd(self):
        with self.assertRaises(MultipleDirectiveException) as cm:
            load_materials([Newmtl('stone'), MapKd('a.png'), MapKd('b.png')])
        self.assertEqual('map_Kd', cm.exception.directive)

    def test_map_kd_per_material(self):
        result = load_materials([Newmtl('stone'), MapKd('a.png'),
                                 Newmtl('grass'), MapKd('b.png')])
        self.assertEqual('b.png', result['grass'].map_kd)

    def test_map_kd_before_newmtl(self):
        with self.assertRaises(MissingDirectiveException) as cm:
            load_materials([MapKd('a.png')])
        self.assertEqual('mtllib', cm.exception.directive)

    def test_empty(self):
        self.assertEqual({}, load_materials([Comment('nothing here')]))


class TestBindMaterials(unittest.TestCase):

    def test_bound_by_name(self):
        materials = MtlCollection({'stone': Material('stone', 'stone.png')})
        objects = bind_materials(geometry('stone').objects, materials)

        self.assertIs(materials['stone'], objects['tile'].material)
        self.assertEqual('stone', objects['tile'].material_key)

    def test_unknown_material(self):
        materials = MtlCollection({'stone': Material('stone')})
        with self.assertRaises(UnknownMaterialException) as cm:
            bind_materials(geometry('unknown_name').objects, materials)
        self.assertEqual('unknown_name', cm.exception.name)
        self.assertIn("'unknown_name'", str(cm.exception))

    def test_collection_lookup(self):
        materials = MtlCollection({'stone': Material('stone')})
        self.assertIn('stone', materials)
        self.assertEqual(1, len(materials))
        with self.assertRaises(UnknownMaterialException):
            materials['grass']


if __name__ == '__main__':
    unittest.main()
