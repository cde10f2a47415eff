"""
Builds Graph values from node/edge records, TGF text or networkx graphs.

TGF (Trivial Graph Format) layout::

    1 first node
    2 second node
    #
    1 2 edge label

Node lines are ``id label``, then a single ``#`` line, then edge lines
``from to label``. Labels are optional and may contain spaces.
"""

import logging
import random
from pathlib import Path

from .exceptions import GraphConsistencyError, GraphFormatError
from .graph_model import Edge, Graph, Node
from .vector import Vec2

logger = logging.getLogger(__name__)

SEPARATOR = "#"


def build_graph(nodes, edges, spread=100.0, seed=None):
    """Build a consistent Graph.

    `nodes` is an iterable of (id, label), `edges` of (from_id, to_id, label).
    Edge ids are assigned sequentially from 0 in input order. Nodes start
    at random positions in [-spread, spread] on both axes, at rest.
    """
    rng = random.Random(seed)

    labels = {}
    for uid, label in nodes:
        if uid in labels:
            raise GraphFormatError(f"Duplicate node id {uid}")
        labels[uid] = label

    outgoing = {uid: set() for uid in labels}
    incoming = {uid: set() for uid in labels}
    edge_table = {}
    for eid, (source, target, label) in enumerate(edges):
        for end in (source, target):
            if end not in labels:
                raise GraphFormatError(
                    f"Edge {source} -> {target} references unknown node {end}"
                )
        edge_table[eid] = Edge(eid, source, target, label)
        outgoing[source].add(eid)
        incoming[target].add(eid)

    node_table = {}
    for uid, label in labels.items():
        position = Vec2(rng.uniform(-spread, spread), rng.uniform(-spread, spread))
        node_table[uid] = Node(
            uid,
            label,
            position=position,
            outgoing=frozenset(outgoing[uid]),
            incoming=frozenset(incoming[uid]),
        )

    graph = Graph(node_table, edge_table)
    validate_graph(graph)
    logger.info(f"Built graph with {len(node_table)} nodes and {len(edge_table)} edges.")
    return graph


def validate_graph(graph):
    """Raise GraphConsistencyError if the adjacency sets are out of sync."""
    problems = graph.adjacency_problems()
    if problems:
        raise GraphConsistencyError(
            "Inconsistent graph adjacency: " + "; ".join(problems[:5]),
            context={"problems": len(problems)},
        )


def _parse_id(token, lineno, what):
    try:
        return int(token)
    except ValueError:
        raise GraphFormatError(f"Bad {what} id {token!r}", line=lineno) from None


def parse_tgf(text):
    """Parse TGF text into (node records, edge records)."""
    nodes = []
    edges = []
    in_edges = False

    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if line == SEPARATOR:
            if in_edges:
                raise GraphFormatError("Second separator line", line=lineno)
            in_edges = True
            continue

        if not in_edges:
            parts = line.split(maxsplit=1)
            uid = _parse_id(parts[0], lineno, "node")
            nodes.append((uid, parts[1] if len(parts) > 1 else ""))
        else:
            parts = line.split(maxsplit=2)
            if len(parts) < 2:
                raise GraphFormatError(f"Edge line needs two node ids: {line!r}", line=lineno)
            source = _parse_id(parts[0], lineno, "source node")
            target = _parse_id(parts[1], lineno, "target node")
            edges.append((source, target, parts[2] if len(parts) > 2 else ""))

    return nodes, edges


def graph_from_tgf(text, spread=100.0, seed=None):
    nodes, edges = parse_tgf(text)
    return build_graph(nodes, edges, spread=spread, seed=seed)


def load_tgf(path, spread=100.0, seed=None):
    path = Path(path)
    logger.info(f"Loading {path.name}")
    try:
        return graph_from_tgf(path.read_text(encoding="utf-8"), spread=spread, seed=seed)
    except GraphFormatError as e:
        e.context.setdefault("file", str(path))
        raise


def dump_tgf(graph):
    """Serialize node labels and edges (positions are not stored)."""
    lines = []
    for uid, node in sorted(graph.nodes.items()):
        lines.append(f"{uid} {node.label}".rstrip())
    lines.append(SEPARATOR)
    for _, edge in sorted(graph.edges.items()):
        lines.append(f"{edge.source} {edge.target} {edge.label}".rstrip())
    return "\n".join(lines) + "\n"


def save_tgf(graph, path):
    Path(path).write_text(dump_tgf(graph), encoding="utf-8")
    logger.info(f"Saved graph to {path}")


def from_networkx(nx_graph, spread=100.0, seed=None):
    """Build a Graph from any networkx graph.

    Nodes are renumbered 0..n-1 in iteration order; labels come from the
    ``label`` attribute when present, otherwise from the node name.
    Undirected edges become a single directed edge (springs ignore
    direction anyway).
    """
    ids = {}
    nodes = []
    for i, (n, data) in enumerate(nx_graph.nodes(data=True)):
        ids[n] = i
        nodes.append((i, str(data.get("label", n))))

    edges = []
    for u, v, data in nx_graph.edges(data=True):
        edges.append((ids[u], ids[v], str(data.get("label", ""))))

    return build_graph(nodes, edges, spread=spread, seed=seed)
