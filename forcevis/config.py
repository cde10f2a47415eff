"""Default physics, interaction and display settings."""

import math
from dataclasses import dataclass


NODE_RADIUS = 3.0


@dataclass(frozen=True)
class PhysicsSettings:
    # Node body
    mass: float = 10.0
    radius: float = NODE_RADIUS

    # Forces
    repulsion: float = 1_000_000.0
    spring: float = 50.0
    rest_length: float = 60.0
    fluid_density: float = 998.2071 * (1 / 3000)
    drag_coefficient: float = 0.47
    min_distance: float = 1.0

    # Interaction / host
    hover_radius: float = 10.0
    target_fps: int = 30
    layout_size: float = 600.0

    @property
    def area(self):
        """Cross-sectional area seen by the drag force."""
        return math.pi * self.radius ** 2


settings = PhysicsSettings()
