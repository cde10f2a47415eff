import networkx as nx

from .graph_loader import from_networkx, graph_from_tgf

DEFAULT_TGF = """\
1 parser
2 lexer
3 ast
4 codegen
5 optimizer
#
1 2 tokens
1 3 builds
3 4 lowers
5 3 rewrites
4 5
"""


def _triangle_with_tail():
    g = nx.DiGraph()
    g.add_edges_from([("a", "b"), ("b", "c"), ("c", "a"), ("c", "d")])
    return g


SAMPLES = {
    "Pipeline": None,
    "Triangle with tail": _triangle_with_tail,
    "Cycle (8)": lambda: nx.cycle_graph(8),
    "Star (7)": lambda: nx.star_graph(7),
    "Binary tree": lambda: nx.balanced_tree(2, 3),
    "Petersen": nx.petersen_graph,
    "Cube": lambda: nx.hypercube_graph(3),
}


def sample_names():
    return list(SAMPLES)


def load_sample(name, seed=None):
    """Build one of the named sample graphs."""
    factory = SAMPLES[name]
    if factory is None:
        return graph_from_tgf(DEFAULT_TGF, seed=seed)
    return from_networkx(factory(), seed=seed)
