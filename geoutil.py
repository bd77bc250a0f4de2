"""
Geometric types shared by the readers
"""

from typing import NamedTuple, Union, TypeAlias, Final
from dataclasses import dataclass
import numpy as np


Number: TypeAlias = Union[int, float]
EPSILON: Final[float] = 1/(2**10)


def f32(value: Number) -> float:
    """Round a value to IEEE-754 single precision"""
    return float(np.float32(value))


class Vector2D(NamedTuple):
    u: float
    v: float

    @classmethod
    def zero(cls): return cls(0.0, 0.0)

    def flipped(self) -> 'Vector2D':
        """Flip the v axis so the origin moves from bottom-left to top-left"""
        return Vector2D(self.u, f32(1.0 - self.v))

    def __format__(self, format_spec: str):
        return f"({self.u:f}, {self.v:f})"


class Vector3D(NamedTuple):
    x: float
    y: float
    z: float

    @classmethod
    def zero(cls): return cls(0.0, 0.0, 0.0)

    def scaled(self, factor: Number) -> 'Vector3D':
        scale = np.float32(factor)
        return Vector3D(
            float(np.float32(self.x) * scale),
            float(np.float32(self.y) * scale),
            float(np.float32(self.z) * scale),
        )

    def eq(self, b) -> bool:
        return (
            abs(self.x - b[0]) < EPSILON and
            abs(self.y - b[1]) < EPSILON and
            abs(self.z - b[2]) < EPSILON
        )

    def __format__(self, format_spec: str):
        return f"({self.x:f}, {self.y:f}, {self.z:f})"


@dataclass(frozen=True)
class Vertex:
    v: Vector3D
    t: Vector2D
    n: Vector3D


@dataclass(frozen=True)
class ImageInfo:
    width: int
    height: int
    mode: str = 'RGBA'
