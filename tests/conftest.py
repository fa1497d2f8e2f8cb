import pathlib
import sys

import numpy as np
import pytest

ROOT = pathlib.Path(__file__).resolve().parents[1]  # project root
sys.path.insert(0, str(ROOT))

from propgraphml.core.graph import PropertyGraph  # noqa: E402


@pytest.fixture
def graph():
    return PropertyGraph()


@pytest.fixture
def movies_graph():
    """Small graph with one consistently typed value per property key."""
    g = PropertyGraph(name="movies")
    keanu = g.create_node(["Person", "Actor"], {
        "name": "Keanu Reeves",
        "born": np.int64(1964),
        "rating": np.float64(8.7),
        "active": True,
        "aliases": ["Neo", "John Wick"],
    })
    carrie = g.create_node(["Person"], {
        "name": "Carrie-Anne Moss",
        "born": np.int64(1967),
        "rating": np.float64(7.9),
        "active": False,
        "aliases": ["Trinity"],
    })
    matrix = g.create_node(["Movie"], {
        "name": "The Matrix",
        "released": np.int32(1999),
        "score": np.float32(0.5),
        "years": [np.int32(1999), np.int32(2003), np.int32(2003)],
    })
    g.create_relationship(keanu, matrix, "ACTED_IN", {"role": "Neo", "minutes": np.int64(136)})
    g.create_relationship(carrie, matrix, "ACTED_IN", {"role": "Trinity", "minutes": np.int64(98)})
    g.create_relationship(keanu, carrie, "KNOWS")
    return g
