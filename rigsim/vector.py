# rigsim/vector.py
"""Immutable 2D vector used for node positions, rope directions and forces."""

from dataclasses import dataclass
import math

from .config import CONFIG


@dataclass(frozen=True)
class Vector2:
    """
    A 2D vector with value semantics.

    Every operation returns a NEW vector; nothing mutates in place.
    Positions follow screen coordinates: +x right, +y DOWN.

    Examples:
    ---------
    >>> Vector2(3.0, 4.0).length()
    5.0
    >>> Vector2(0.0, 0.0).normalize()
    Vector2(x=0.0, y=0.0)
    """
    x: float
    y: float

    @staticmethod
    def zero() -> "Vector2":
        return Vector2(0.0, 0.0)

    def add(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x + other.x, self.y + other.y)

    def sub(self, other: "Vector2") -> "Vector2":
        return Vector2(self.x - other.x, self.y - other.y)

    def scale(self, k: float) -> "Vector2":
        return Vector2(self.x * k, self.y * k)

    def dot(self, other: "Vector2") -> float:
        return self.x * other.x + self.y * other.y

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalize(self) -> "Vector2":
        """
        Unit vector in the same direction.

        A (near) zero-length vector normalizes to the zero vector, so two
        coincident nodes contribute no direction instead of NaN.
        """
        L = self.length()
        if L < CONFIG.zero_length_tol:
            return Vector2.zero()
        return Vector2(self.x / L, self.y / L)

    def __add__(self, other: "Vector2") -> "Vector2":
        return self.add(other)

    def __sub__(self, other: "Vector2") -> "Vector2":
        return self.sub(other)

    def __mul__(self, k: float) -> "Vector2":
        return self.scale(k)

    __rmul__ = __mul__

    def __neg__(self) -> "Vector2":
        return Vector2(-self.x, -self.y)
