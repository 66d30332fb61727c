from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Sequence, Tuple

import networkx as nx
import numpy as np
import tsplib95

from .errors import InvalidParameter
from .solvers.base import tour_length


City = Tuple[float, float]

# 14-city benchmark used by the classic GA/TSP teaching example.
SAMPLE_CITIES: Tuple[City, ...] = (
    (16.47, 96.10),
    (16.47, 94.44),
    (20.09, 92.54),
    (22.39, 93.37),
    (25.23, 97.24),
    (22.00, 96.05),
    (20.47, 97.02),
    (17.20, 96.29),
    (16.30, 97.38),
    (14.05, 98.12),
    (16.53, 97.38),
    (21.52, 95.59),
    (19.41, 97.13),
    (20.09, 92.55),
)


@dataclass
class Instance:
    name: str
    path: Optional[Path]
    coords: Optional[np.ndarray]
    dist: np.ndarray
    optimum: Optional[float]


def as_coordinates(coords: Sequence[Sequence[float]]) -> np.ndarray:
    arr = np.asarray(coords, dtype=np.float64)
    if arr.ndim != 2 or arr.shape[1] != 2:
        raise InvalidParameter(f"Expected a sequence of (x, y) pairs, got shape {arr.shape}.")
    if arr.shape[0] < 2:
        raise InvalidParameter(f"At least 2 cities are required, got {arr.shape[0]}.")
    if not np.all(np.isfinite(arr)):
        raise InvalidParameter("City coordinates must be finite.")
    return arr


def distance_matrix(coords: Sequence[Sequence[float]]) -> np.ndarray:
    """Pairwise Euclidean distances between cities.

    The result is symmetric with an exact zero diagonal and is returned
    read-only, since every solver component shares the same matrix.
    """
    xy = as_coordinates(coords)
    diff = xy[:, None, :] - xy[None, :, :]
    dist = np.sqrt((diff ** 2).sum(axis=-1))
    dist.setflags(write=False)
    return dist


def check_distance_matrix(dist: np.ndarray) -> np.ndarray:
    if dist.ndim != 2 or dist.shape[0] != dist.shape[1]:
        raise InvalidParameter(f"Distance matrix must be square, got shape {dist.shape}.")
    if dist.shape[0] < 2:
        raise InvalidParameter(f"At least 2 cities are required, got {dist.shape[0]}.")
    return dist


def graph_distance_matrix(graph: nx.Graph, nodes: Optional[List] = None) -> np.ndarray:
    """Distance matrix of a complete, undirected weighted graph."""
    if graph.is_directed():
        raise InvalidParameter("Asymmetric (directed) instances are not supported.")
    nodes = nodes if nodes is not None else sorted(graph.nodes())
    n = len(nodes)
    edges = sum(1 for u, v in graph.subgraph(nodes).edges() if u != v)
    if edges != n * (n - 1) // 2:
        raise InvalidParameter(
            f"Graph must be complete: expected {n * (n - 1) // 2} edges between {n} cities, got {edges}."
        )
    dist = nx.to_numpy_array(graph, nodelist=nodes, weight="weight", dtype=np.float64)
    np.fill_diagonal(dist, 0.0)
    dist = check_distance_matrix(dist)
    dist.setflags(write=False)
    return dist


def _solution_candidates(path: Path) -> Iterable[Path]:
    yield path.with_suffix(".opt.tour")
    for ext in (".opt.tour", ".opt", ".tour"):
        yield path.parent / "solutions" / f"{path.stem}{ext}"


def _load_optimum(dist: np.ndarray, nodes: List, path: Path) -> Optional[float]:
    # Measured on our own matrix, not TSPLIB's rounded weights, so gaps compare like with like.
    index = {n: i for i, n in enumerate(nodes)}
    for candidate in _solution_candidates(path):
        if not candidate.exists():
            continue
        tour_file = tsplib95.load(candidate)
        return tour_length(dist, [index[n] for n in tour_file.tours[0]])
    return None


def load_instance(path: Path) -> Instance:
    """Load a TSPLIB ``.tsp`` file.

    Coordinate instances are re-measured with true Euclidean distances so they
    behave like any other coordinate list. Instances that only carry explicit
    edge weights go through their networkx graph instead.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"No TSPLIB instance at {path}")
    problem = tsplib95.load(path)
    nodes = sorted(problem.get_nodes())
    coords = None
    if problem.node_coords:
        coords = as_coordinates([problem.node_coords[n][:2] for n in nodes])
        dist = distance_matrix(coords)
    else:
        dist = graph_distance_matrix(problem.get_graph(), nodes)
    optimum = _load_optimum(dist, nodes, path)
    return Instance(name=problem.name or path.stem, path=path, coords=coords, dist=dist, optimum=optimum)


def sample_instance() -> Instance:
    coords = as_coordinates(SAMPLE_CITIES)
    return Instance(name="sample14", path=None, coords=coords, dist=distance_matrix(coords), optimum=None)
