from typing import Sequence, Tuple, TypeVar, Generator, List


T = TypeVar('T')


class InvalidPolygonException(Exception):
    def __init__(self, message: str, vertices: Sequence):
        self.message = message
        self.vertices = list(vertices)
        super().__init__(f"{self.message}\nVertices:\n{self.vertices}")


def fan_triangulate(polygon: Sequence[T]) -> Generator[Tuple[T, T, T], None, None]:
    """
    Converts a convex polygon to n - 2 triangles sharing the first vertex.

    The first vertex is the pivot of the fan, every triangle keeps the
    winding order of the source polygon:
        (p0, p1, p2), (p0, p2, p3), ..., (p0, pn-2, pn-1)

    Returns:
        a generator of triangles (tuple of three items from the polygon)
    """

    if len(polygon) < 3:
        raise InvalidPolygonException('Polygon needs at least 3 vertices', polygon)

    pivot = polygon[0]
    for i in range(1, len(polygon) - 1):
        yield pivot, polygon[i], polygon[i + 1]


def triangulate(polygon: Sequence[T]) -> List[Tuple[T, T, T]]:
    return list(fan_triangulate(polygon))
