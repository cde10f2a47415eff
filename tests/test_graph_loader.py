"""Tests for graph construction from records, TGF and networkx."""

import networkx as nx
import pytest

from forcevis.exceptions import GraphConsistencyError, GraphFormatError
from forcevis.graph_loader import (
    build_graph,
    dump_tgf,
    from_networkx,
    graph_from_tgf,
    load_tgf,
    parse_tgf,
    save_tgf,
    validate_graph,
)
from forcevis.graph_model import Edge, Graph, Node
from forcevis.samples import DEFAULT_TGF, load_sample, sample_names
from forcevis.vector import Vec2


class TestBuildGraph:
    def test_adjacency_sets(self):
        graph = build_graph([(1, "a"), (2, "b"), (3, "c")], [(1, 2, "x"), (2, 3, "y"), (3, 1, "")])
        assert graph.edges[0] == Edge(0, 1, 2, "x")
        assert graph.edges[2] == Edge(2, 3, 1, "")
        assert graph.nodes[1].outgoing == {0}
        assert graph.nodes[1].incoming == {2}
        assert graph.nodes[2].outgoing == {1}
        assert graph.adjacency_problems() == []

    def test_edge_ids_are_sequential(self):
        graph = build_graph([(0, "a"), (1, "b")], [(0, 1, "")] * 4)
        assert sorted(graph.edges) == [0, 1, 2, 3]

    def test_nodes_start_at_rest_within_spread(self):
        graph = build_graph([(i, "") for i in range(20)], [], spread=50.0, seed=3)
        for node in graph.nodes.values():
            assert node.velocity == Vec2(0.0, 0.0)
            assert -50.0 <= node.position.x <= 50.0
            assert -50.0 <= node.position.y <= 50.0

    def test_seed_is_reproducible(self):
        a = build_graph([(0, "a"), (1, "b")], [], seed=42)
        b = build_graph([(0, "a"), (1, "b")], [], seed=42)
        assert a == b

    def test_duplicate_node(self):
        with pytest.raises(GraphFormatError, match="Duplicate node id 1"):
            build_graph([(1, "a"), (1, "b")], [])

    def test_unknown_edge_endpoint(self):
        with pytest.raises(GraphFormatError, match="unknown node 9"):
            build_graph([(1, "a")], [(1, 9, "")])

    def test_empty(self):
        assert build_graph([], []) == Graph()


class TestValidateGraph:
    def test_missing_outgoing_entry(self):
        graph = Graph(
            {0: Node(0, "a"), 1: Node(1, "b", incoming=frozenset({0}))},
            {0: Edge(0, 0, 1)},
        )
        with pytest.raises(GraphConsistencyError, match="outgoing of node 0"):
            validate_graph(graph)

    def test_dangling_reference(self):
        graph = Graph({0: Node(0, "a", outgoing=frozenset({5}))}, {})
        with pytest.raises(GraphConsistencyError) as excinfo:
            validate_graph(graph)
        assert excinfo.value.context == {"problems": 1}


class TestTgf:
    def test_parse(self):
        nodes, edges = parse_tgf(DEFAULT_TGF)
        assert nodes[0] == (1, "parser")
        assert edges[0] == (1, 2, "tokens")
        assert edges[-1] == (4, 5, "")

    def test_labels_with_spaces_and_blank_lines(self):
        nodes, edges = parse_tgf("1 first node\n\n2\n#\n1 2 goes to\n")
        assert nodes == [(1, "first node"), (2, "")]
        assert edges == [(1, 2, "goes to")]

    def test_no_separator_means_no_edges(self):
        nodes, edges = parse_tgf("1 a\n2 b\n")
        assert len(nodes) == 2
        assert edges == []

    def test_bad_node_id(self):
        with pytest.raises(GraphFormatError) as excinfo:
            parse_tgf("1 a\nx b\n#\n")
        assert excinfo.value.line == 2

    def test_edge_needs_two_ids(self):
        with pytest.raises(GraphFormatError, match="two node ids"):
            parse_tgf("1 a\n#\n1\n")

    def test_bad_edge_target(self):
        with pytest.raises(GraphFormatError, match="target node"):
            parse_tgf("1 a\n#\n1 b\n")

    def test_second_separator(self):
        with pytest.raises(GraphFormatError) as excinfo:
            parse_tgf("1 a\n#\n#\n")
        assert excinfo.value.line == 3

    def test_edge_to_missing_node(self):
        with pytest.raises(GraphFormatError):
            graph_from_tgf("1 a\n#\n1 2\n")

    def test_dump(self):
        graph = graph_from_tgf("2 b\n1 a\n#\n1 2 ab\n2 1\n")
        assert dump_tgf(graph) == "1 a\n2 b\n#\n1 2 ab\n2 1\n"

    def test_save_and_load(self, tmp_path):
        graph = graph_from_tgf(DEFAULT_TGF, seed=5)
        path = tmp_path / "pipeline.tgf"
        save_tgf(graph, path)
        loaded = load_tgf(path, seed=5)
        assert loaded == graph

    def test_load_error_names_file(self, tmp_path):
        path = tmp_path / "broken.tgf"
        path.write_text("1 a\n#\n1 q\n")
        with pytest.raises(GraphFormatError) as excinfo:
            load_tgf(path)
        assert excinfo.value.context["file"] == str(path)
        assert "broken.tgf" in str(excinfo.value)


class TestNetworkx:
    def test_labels_and_edges(self):
        g = nx.DiGraph()
        g.add_node("main", label="entry")
        g.add_edge("main", "helper", label="calls")
        graph = from_networkx(g)
        assert graph.nodes[0].label == "entry"
        assert graph.nodes[1].label == "helper"
        assert graph.edges[0] == Edge(0, 0, 1, "calls")

    def test_undirected_graph(self):
        graph = from_networkx(nx.path_graph(4))
        assert len(graph.edges) == 3
        assert graph.adjacency_problems() == []


@pytest.mark.parametrize("name", sample_names())
def test_samples_are_consistent(name):
    graph = load_sample(name, seed=0)
    assert graph.nodes
    assert graph.adjacency_problems() == []
