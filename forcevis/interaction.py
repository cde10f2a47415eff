"""
Program mode and the per-frame entry point.

The host keeps one ProgramState and threads it through `step` once per
frame. In Simulation mode the physics engine runs; in Edit mode the
simulation is paused and the node under the pointer can be dragged.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple, Union

from .graph_engine import GraphEngine
from .graph_model import Graph, Node
from .vector import Vec2

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Simulation:
    pass


@dataclass(frozen=True)
class Edit:
    selected: Optional[int] = None


Mode = Union[Simulation, Edit]


@dataclass(frozen=True)
class ProgramState:
    graph: Graph
    mode: Mode = Simulation()


@dataclass(frozen=True)
class FrameInput:
    dt: float
    simulation_running: bool = True
    pointer_down: bool = False
    # Graph space: origin at the center, y pointing up
    pointer: Vec2 = Vec2(0.0, 0.0)


def pointer_to_graph(x, y, layout_size):
    """Map a point in the layout square's pixel space to graph space.

    The point is clamped into the square, moved so the origin sits in the
    middle, and flipped so y grows upwards like the simulation.
    """
    p = Vec2(x, y).clamp(layout_size)
    half = layout_size / 2
    return Vec2(p.x - half, half - p.y)


def hit_test(graph, pointer, radius) -> List[Node]:
    """Nodes whose hover circle contains `pointer`, lowest uid first."""
    return [
        node
        for uid, node in sorted(graph.nodes.items())
        if (node.position - pointer).magnitude() <= radius
    ]


def _next_mode(mode, running):
    match mode:
        case Simulation():
            return mode if running else Edit()
        case Edit():
            return Simulation() if running else mode


def step(state: ProgramState, frame: FrameInput, engine=None) -> Tuple[ProgramState, List[Node]]:
    """Advance the program by one frame.

    Returns the next state and the nodes to draw as hovered.
    """
    engine = engine or GraphEngine()
    radius = engine.settings.hover_radius
    mode = _next_mode(state.mode, frame.simulation_running)

    match mode:
        case Simulation():
            graph = engine.physics_step(frame.dt, state.graph)
            return ProgramState(graph, mode), hit_test(graph, frame.pointer, radius)

        case Edit(selected=None):
            hovered = hit_test(state.graph, frame.pointer, radius)
            if frame.pointer_down and hovered:
                picked = hovered[0]
                logger.debug("Picked node %s (%s)", picked.uid, picked.label)
                return ProgramState(state.graph, Edit(picked.uid)), hovered
            return ProgramState(state.graph, mode), hovered

        case Edit(selected=uid):
            if not frame.pointer_down:
                logger.debug("Released node %s", uid)
                return ProgramState(state.graph, Edit()), [state.graph.nodes[uid]]
            graph = state.graph.with_position(uid, frame.pointer)
            return ProgramState(graph, mode), [graph.nodes[uid]]
