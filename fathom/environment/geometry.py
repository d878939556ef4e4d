"""
Geometry kernel - 2D points and vectors for the arena.

Includes:
- Coordinate: integer map position
- Vector2D: floating-point displacement / velocity
- Trigonometric tables for whole-degree headings
- Candidate rings used by the escape search
"""

import math
import numpy as np
from typing import Iterator, Tuple
from dataclasses import dataclass


# Whole-degree trigonometric tables, computed once
DEGREES = np.arange(360)
COSINE = np.cos(np.radians(DEGREES))
SINE = np.sin(np.radians(DEGREES))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, ties toward +infinity."""
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class Vector2D:
    """
    A floating-point 2D vector.

    Attributes:
        x: X component
        y: Y component (grows with depth)
    """
    x: float
    y: float

    @classmethod
    def zero(cls) -> 'Vector2D':
        return cls(0.0, 0.0)

    @classmethod
    def between(cls, start: 'Coordinate', end: 'Coordinate') -> 'Vector2D':
        """Vector going from start to end."""
        return cls(float(end.x - start.x), float(end.y - start.y))

    def __add__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Vector2D') -> 'Vector2D':
        return Vector2D(self.x - other.x, self.y - other.y)

    def __neg__(self) -> 'Vector2D':
        return Vector2D(-self.x, -self.y)

    def __iter__(self) -> Iterator[float]:
        yield self.x
        yield self.y

    def dot(self, other: 'Vector2D') -> float:
        return self.x * other.x + self.y * other.y

    def norm(self) -> float:
        """Euclidean length."""
        return float(np.hypot(self.x, self.y))

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def scaled(self, factor: float) -> 'Vector2D':
        return Vector2D(self.x * factor, self.y * factor)

    def normalized(self) -> 'Vector2D':
        """
        Unit vector in the same direction.

        Returns:
            The zero vector when this vector has no length
        """
        length = self.norm()
        if length == 0.0:
            return Vector2D.zero()
        return self.scaled(1.0 / length)

    def project(self, onto: 'Vector2D') -> 'Vector2D':
        """
        Projection of this vector onto another one.

        Args:
            onto: Direction to project on

        Returns:
            onto * (self . onto / |onto|^2), or zero when onto has no length
        """
        length_sq = onto.dot(onto)
        if length_sq == 0.0:
            return Vector2D.zero()
        return onto.scaled(self.dot(onto) / length_sq)

    def rotate(self, degrees: float) -> 'Vector2D':
        """
        Rotate counter-clockwise (in x-right, y-up terms) by an angle.

        Whole-degree angles come from the precomputed tables.

        Args:
            degrees: Rotation angle in degrees

        Returns:
            Rotated vector (zero stays zero)
        """
        if self.is_zero():
            return Vector2D.zero()
        if float(degrees).is_integer():
            index = int(degrees) % 360
            cos_a, sin_a = COSINE[index], SINE[index]
        else:
            radians = np.radians(degrees)
            cos_a, sin_a = np.cos(radians), np.sin(radians)
        return Vector2D(float(self.x * cos_a - self.y * sin_a),
                        float(self.x * sin_a + self.y * cos_a))

    def rounded(self) -> 'Vector2D':
        """Component-wise round to the nearest integer value."""
        return Vector2D(float(round_half_up(self.x)), float(round_half_up(self.y)))

    def __repr__(self):
        return f"Vector2D({self.x:.1f}, {self.y:.1f})"


@dataclass(frozen=True)
class Coordinate:
    """
    An integer map position.

    Attributes:
        x: Horizontal position, 0 at the left edge
        y: Depth, 0 at the surface
    """
    x: int
    y: int

    @classmethod
    def zero(cls) -> 'Coordinate':
        return cls(0, 0)

    def __add__(self, other) -> 'Coordinate':
        """Offset by another coordinate or by a vector (rounded half-up)."""
        if isinstance(other, Vector2D):
            return Coordinate(self.x + round_half_up(other.x), self.y + round_half_up(other.y))
        return Coordinate(self.x + other.x, self.y + other.y)

    def __sub__(self, other: 'Coordinate') -> Vector2D:
        """Vector from other to this coordinate."""
        return Vector2D.between(other, self)

    def __iter__(self) -> Iterator[int]:
        yield self.x
        yield self.y

    def distance_to(self, other: 'Coordinate') -> float:
        return float(np.hypot(other.x - self.x, other.y - self.y))

    def is_on_map(self, map_size: int) -> bool:
        return 0 <= self.x <= map_size and 0 <= self.y <= map_size

    def clamped(self, map_size: int) -> 'Coordinate':
        return Coordinate(min(map_size, max(0, self.x)), min(map_size, max(0, self.y)))

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)


def heading_offsets(distance: float, step: int = 1) -> np.ndarray:
    """
    Integer offsets for moves of a given length at every step-th degree.

    Args:
        distance: Length of each move
        step: Degrees between consecutive headings

    Returns:
        Array of shape (360 // step, 2) of rounded (dx, dy) offsets
    """
    indices = DEGREES[::step]
    dx = np.floor(distance * COSINE[indices] + 0.5)
    dy = np.floor(distance * SINE[indices] + 0.5)
    return np.stack([dx, dy], axis=1).astype(int)
