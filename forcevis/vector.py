import math
from typing import NamedTuple, Tuple


class Vec2(NamedTuple):
    """2D point / vector. Positions, velocities and forces all use it."""

    x: float
    y: float

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0)

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, k):
        return Vec2(self.x * k, self.y * k)

    __rmul__ = __mul__

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    def dot(self, other):
        return self.x * other.x + self.y * other.y

    def magnitude(self):
        return math.hypot(self.x, self.y)

    def break_down(self) -> Tuple[float, "Vec2"]:
        """Split into (magnitude, unit direction).

        The zero vector gives (0.0, Vec2(0, 0)) so callers can multiply the
        direction out without checking for division by zero.
        """
        mag = self.magnitude()
        if mag == 0:
            return 0.0, Vec2.zero()
        return mag, Vec2(self.x / mag, self.y / mag)

    def clamp(self, bound):
        """Clamp each coordinate into [0, bound]."""
        return Vec2(min(max(self.x, 0.0), bound), min(max(self.y, 0.0), bound))
