from dataclasses import dataclass, field, replace
from typing import Dict, FrozenSet

from .vector import Vec2


@dataclass(frozen=True)
class Edge:
    uid: int
    source: int
    target: int
    label: str = ""


@dataclass(frozen=True)
class Node:
    uid: int
    label: str
    position: Vec2 = Vec2(0.0, 0.0)
    velocity: Vec2 = Vec2(0.0, 0.0)
    # Adjacency cache, filled once at construction
    outgoing: FrozenSet[int] = frozenset()
    incoming: FrozenSet[int] = frozenset()

    def moved(self, position, velocity=None):
        """Copy of the node at a new position (and optionally velocity)."""
        if velocity is None:
            velocity = self.velocity
        return replace(self, position=position, velocity=velocity)

    def connected_to(self, other):
        """Edge ids linking the two nodes, in either direction."""
        return (self.outgoing & other.incoming) | (other.outgoing & self.incoming)


@dataclass
class Graph:
    nodes: Dict[int, Node] = field(default_factory=dict)
    edges: Dict[int, Edge] = field(default_factory=dict)

    def with_position(self, uid, position):
        """New graph with one node repositioned; velocities are kept."""
        nodes = dict(self.nodes)
        nodes[uid] = nodes[uid].moved(position)
        return Graph(nodes, dict(self.edges))

    def edges_touching(self, uids):
        """Edges with at least one endpoint in `uids`."""
        return [e for e in self.edges.values() if e.source in uids or e.target in uids]

    def adjacency_problems(self):
        """List every violation of the node/edge adjacency invariant."""
        problems = []
        for edge in self.edges.values():
            if edge.source not in self.nodes:
                problems.append(f"edge {edge.uid}: unknown source node {edge.source}")
            elif edge.uid not in self.nodes[edge.source].outgoing:
                problems.append(f"edge {edge.uid}: missing from outgoing of node {edge.source}")
            if edge.target not in self.nodes:
                problems.append(f"edge {edge.uid}: unknown target node {edge.target}")
            elif edge.uid not in self.nodes[edge.target].incoming:
                problems.append(f"edge {edge.uid}: missing from incoming of node {edge.target}")

        for node in self.nodes.values():
            for eid in node.outgoing:
                edge = self.edges.get(eid)
                if edge is None or edge.source != node.uid:
                    problems.append(f"node {node.uid}: outgoing edge {eid} does not start here")
            for eid in node.incoming:
                edge = self.edges.get(eid)
                if edge is None or edge.target != node.uid:
                    problems.append(f"node {node.uid}: incoming edge {eid} does not end here")
        return problems
