"""
Tests for geometric functions
"""

import unittest
from geoutil import Vector2D, Vector3D, f32
from triangulate.triangulate import fan_triangulate, triangulate, InvalidPolygonException


class TestGeoutil(unittest.TestCase):

    def test_fan_triangulate(self):
        expected = [(0, 1, 2), (0, 2, 3), (0, 3, 4)]
        result = triangulate([0, 1, 2, 3, 4])
        self.assertEqual(expected, result)

    def test_fan_keeps_winding(self):
        result = triangulate(['a', 'b', 'c'])
        self.assertEqual([('a', 'b', 'c')], result)

    def test_fan_triangle_count(self):
        for n in range(3, 12):
            # We expect n - 2 triangles for n vertices
            self.assertEqual(n - 2, len(list(fan_triangulate(range(n)))))

    def test_fan_needs_a_polygon(self):
        with self.assertRaises(InvalidPolygonException):
            triangulate([0, 1])

    def test_scaled(self):
        self.assertEqual(Vector3D(2.0, 4.0, 6.0), Vector3D(1.0, 2.0, 3.0).scaled(2.0))
        self.assertEqual(Vector3D(f32(f32(0.1) * 3), 0.0, 0.0),
                         Vector3D(f32(0.1), 0.0, 0.0).scaled(3))

    def test_flipped(self):
        self.assertEqual(Vector2D(0.25, 0.25), Vector2D(0.25, 0.75).flipped())
        self.assertEqual(Vector2D(0.0, 1.0), Vector2D.zero().flipped())

    def test_eq(self):
        self.assertTrue(Vector3D(1, 2, 3).eq((1.0001, 2, 3)))
        self.assertFalse(Vector3D(1, 2, 3).eq((1.1, 2, 3)))


if __name__ == '__main__':
    unittest.main()
