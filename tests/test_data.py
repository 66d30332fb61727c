"""
Tests for city data, distance matrices and TSPLIB loading.
"""

import networkx as nx
import numpy as np
import pytest

from ga_tsp.data import (
    SAMPLE_CITIES,
    distance_matrix,
    graph_distance_matrix,
    load_instance,
    sample_instance,
)
from ga_tsp.errors import InvalidParameter


SQUARE_TSP = """NAME: square4
TYPE: TSP
COMMENT: unit square
DIMENSION: 4
EDGE_WEIGHT_TYPE: EUC_2D
NODE_COORD_SECTION
1 0 0
2 0 1
3 1 1
4 1 0
EOF
"""

SQUARE_TOUR = """NAME: square4.opt.tour
TYPE: TOUR
DIMENSION: 4
TOUR_SECTION
1
2
3
4
-1
EOF
"""

EXPLICIT_TSP = """NAME: tri3
TYPE: TSP
DIMENSION: 3
EDGE_WEIGHT_TYPE: EXPLICIT
EDGE_WEIGHT_FORMAT: FULL_MATRIX
EDGE_WEIGHT_SECTION
0 2 3
2 0 4
3 4 0
EOF
"""


class TestDistanceMatrix:
    def test_symmetric_with_zero_diagonal(self):
        rng = np.random.default_rng(0)
        coords = rng.uniform(0, 100, size=(25, 2))
        dist = distance_matrix(coords)
        assert dist.shape == (25, 25)
        assert np.array_equal(dist, dist.T)
        assert np.all(np.diag(dist) == 0.0)
        assert np.all(dist >= 0.0)

    def test_euclidean_values(self):
        dist = distance_matrix([(0, 0), (3, 4), (0, 4)])
        assert dist[0, 1] == pytest.approx(5.0)
        assert dist[1, 2] == pytest.approx(3.0)
        assert dist[0, 2] == pytest.approx(4.0)

    def test_read_only(self):
        dist = distance_matrix([(0, 0), (1, 0)])
        with pytest.raises(ValueError):
            dist[0, 1] = 7.0

    def test_fewer_than_two_cities(self):
        with pytest.raises(InvalidParameter):
            distance_matrix([(0, 0)])
        with pytest.raises(InvalidParameter):
            distance_matrix(np.empty((0, 2)))

    def test_rejects_malformed_coordinates(self):
        with pytest.raises(InvalidParameter):
            distance_matrix([(0, 0, 0), (1, 1, 1)])
        with pytest.raises(InvalidParameter):
            distance_matrix([(0, 0), (float("nan"), 1)])

    def test_invalid_parameter_is_a_value_error(self):
        with pytest.raises(ValueError):
            distance_matrix([(1, 1)])


class TestGraphDistanceMatrix:
    def test_from_weighted_graph(self):
        graph = nx.Graph()
        graph.add_edge("a", "b", weight=2.0)
        graph.add_edge("b", "c", weight=4.0)
        graph.add_edge("a", "c", weight=3.0)
        dist = graph_distance_matrix(graph)
        expected = np.array([[0, 2, 3], [2, 0, 4], [3, 4, 0]], dtype=float)
        assert np.array_equal(dist, expected)

    def test_incomplete_graph_rejected(self):
        graph = nx.Graph()
        graph.add_edge(0, 1, weight=5.0)
        graph.add_edge(1, 2, weight=5.0)
        with pytest.raises(InvalidParameter):
            graph_distance_matrix(graph)

    def test_directed_graph_rejected(self):
        graph = nx.DiGraph()
        graph.add_edge(0, 1, weight=1.0)
        graph.add_edge(1, 0, weight=2.0)
        with pytest.raises(InvalidParameter):
            graph_distance_matrix(graph)

    def test_self_loops_do_not_count_as_edges(self):
        graph = nx.complete_graph(3)
        nx.set_edge_attributes(graph, 1.0, "weight")
        graph.add_edge(0, 0, weight=0.0)
        dist = graph_distance_matrix(graph)
        assert np.array_equal(dist, dist.T)
        assert np.all(np.diag(dist) == 0.0)

    def test_single_node_graph_rejected(self):
        graph = nx.Graph()
        graph.add_node(1)
        with pytest.raises(InvalidParameter):
            graph_distance_matrix(graph)


class TestInstances:
    def test_sample_instance(self):
        inst = sample_instance()
        assert inst.name == "sample14"
        assert inst.dist.shape == (len(SAMPLE_CITIES), len(SAMPLE_CITIES))
        assert inst.optimum is None

    def test_load_coordinate_instance_with_optimum(self, tmp_path):
        path = tmp_path / "square4.tsp"
        path.write_text(SQUARE_TSP)
        (tmp_path / "square4.opt.tour").write_text(SQUARE_TOUR)
        inst = load_instance(path)
        assert inst.name == "square4"
        assert inst.coords.shape == (4, 2)
        assert inst.dist[0, 2] == pytest.approx(np.sqrt(2.0))
        assert inst.optimum == pytest.approx(4.0)

    def test_load_explicit_instance(self, tmp_path):
        path = tmp_path / "tri3.tsp"
        path.write_text(EXPLICIT_TSP)
        inst = load_instance(path)
        assert inst.coords is None
        expected = np.array([[0, 2, 3], [2, 0, 4], [3, 4, 0]], dtype=float)
        assert np.array_equal(inst.dist, expected)
        assert inst.optimum is None

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_instance(tmp_path / "nope.tsp")
