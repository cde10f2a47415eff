"""Pytest fixtures for forcevis tests."""

import os

import pytest

from forcevis.graph_engine import GraphEngine
from forcevis.graph_loader import build_graph
from forcevis.graph_model import Graph
from forcevis.vector import Vec2


def place(graph, positions):
    """Return a copy of `graph` with nodes moved to fixed positions."""
    for uid, pos in positions.items():
        graph = graph.with_position(uid, Vec2(*pos))
    return graph


@pytest.fixture
def engine():
    return GraphEngine()


@pytest.fixture
def three_nodes():
    """A -> B, plus an unconnected C."""
    graph = build_graph([(0, "A"), (1, "B"), (2, "C")], [(0, 1, "ab")], seed=1)
    return place(graph, {0: (0.0, 0.0), 1: (100.0, 0.0), 2: (0.0, 100.0)})


@pytest.fixture
def pair():
    graph = build_graph([(0, "A"), (1, "B")], [(0, 1, "")], seed=1)
    return place(graph, {0: (0.0, 0.0), 1: (60.0, 0.0)})


@pytest.fixture
def empty_graph():
    return Graph()


@pytest.fixture
def qt_app():
    """Offscreen QApplication shared by the widget tests."""
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    widgets = pytest.importorskip("PyQt6.QtWidgets")
    return widgets.QApplication.instance() or widgets.QApplication([])
