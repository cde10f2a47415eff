import logging

from .config import settings as default_settings
from .graph_model import Graph
from .vector import Vec2

logger = logging.getLogger(__name__)


class GraphEngine:
    """Force-directed layout: computes forces and integrates one frame.

    Every method is pure. Forces are computed from the graph passed in and
    the result is a new Graph; the input is never modified.
    """

    def __init__(self, settings=None):
        self.settings = settings or default_settings

        # Physics constants
        self.mass = self.settings.mass
        self.repulsion = self.settings.repulsion
        self.spring_k = self.settings.spring
        self.spring_length = self.settings.rest_length
        self.min_distance = self.settings.min_distance
        # 0.5 * rho * Cd * A, the speed independent part of quadratic drag
        self.drag_factor = (
            self.settings.fluid_density
            * self.settings.drag_coefficient
            * self.settings.area
            / 2
        )

    def _separation(self, n, cn):
        """(distance, unit direction) from n towards cn."""
        distance, direction = (cn.position - n.position).break_down()
        if distance == 0:
            # Coincident nodes: split them along x, ordered by uid
            direction = Vec2(1.0, 0.0) if cn.uid > n.uid else Vec2(-1.0, 0.0)
        return distance, direction

    def repulsion_forces(self, graph):
        """Coulomb-like push between every pair of distinct nodes."""
        forces = {}
        for n in graph.nodes.values():
            total = Vec2.zero()
            for cn in graph.nodes.values():
                if cn.uid == n.uid:
                    continue
                distance, direction = self._separation(n, cn)
                distance = max(distance, self.min_distance)
                total = total + direction * (-self.repulsion / distance ** 2)
            forces[n.uid] = total
        return forces

    def attraction_forces(self, graph):
        """Hookean spring along every connected pair, edge direction ignored."""
        forces = {}
        for n in graph.nodes.values():
            total = Vec2.zero()
            for cn in graph.nodes.values():
                if cn.uid == n.uid or not n.connected_to(cn):
                    continue
                distance, direction = self._separation(n, cn)
                # F = k * (current_dist - target_dist)
                total = total + direction * (self.spring_k * (distance - self.spring_length))
            forces[n.uid] = total
        return forces

    def drag_forces(self, graph):
        """Quadratic fluid drag, always against the direction of motion."""
        forces = {}
        for n in graph.nodes.values():
            speed, direction = n.velocity.break_down()
            forces[n.uid] = direction * -(speed ** 2 * self.drag_factor)
        return forces

    def accelerate(self, velocity, force, dt):
        """Velocity after `force` acts on one node for `dt` seconds."""
        magnitude, direction = force.break_down()
        return velocity + direction * (magnitude * dt / self.mass)

    def decelerate(self, velocity, drag, dt):
        """Like accelerate, but the result never outruns `velocity`.

        Drag can stop a node within a frame but never push it backwards or
        speed it up.
        """
        speed = velocity.magnitude()
        slowed = self.accelerate(velocity, drag, dt)
        if slowed.dot(velocity) <= 0:
            return Vec2.zero()
        new_speed, direction = slowed.break_down()
        if new_speed > speed:
            return direction * speed
        return slowed

    def physics_step(self, dt, graph):
        """Advance the layout by `dt` seconds.

        A non-positive `dt` is a no-op and returns `graph` itself.
        """
        if dt <= 0:
            return graph

        repulsion = self.repulsion_forces(graph)
        attraction = self.attraction_forces(graph)
        drag = self.drag_forces(graph)

        nodes = {}
        for uid, node in graph.nodes.items():
            v = self.accelerate(node.velocity, repulsion[uid], dt)
            v = self.accelerate(v, attraction[uid], dt)
            v = self.decelerate(v, drag[uid], dt)
            nodes[uid] = node.moved(node.position + v * dt, v)

        return Graph(nodes, dict(graph.edges))

    def run(self, graph, steps, dt=None):
        """Relax `graph` for a fixed number of frames, headless."""
        if dt is None:
            dt = 1.0 / self.settings.target_fps
        for _ in range(steps):
            graph = self.physics_step(dt, graph)
        logger.debug("Relaxed %d nodes over %d steps", len(graph.nodes), steps)
        return graph
