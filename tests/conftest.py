import os

# in-memory database for every test, must be set before the app is imported
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient

from konigsberg.core.database import Base, engine
from konigsberg.engine import Edge, Node, create_graph
from konigsberg.main import app


def build_graph(node_ids, edges, land_groups=None):
    """ edges: (id, a, b) tuples"""
    return create_graph(
        [Node(node_id) for node_id in node_ids],
        [Edge(id=edge_id, a=a, b=b) for edge_id, a, b in edges],
        land_groups=land_groups,
    )


@pytest.fixture
def square():
    return build_graph("ABCD", [("ab", "A", "B"), ("bc", "B", "C"), ("cd", "C", "D"), ("da", "D", "A")])


@pytest.fixture
def path3():
    return build_graph("ABC", [("ab", "A", "B"), ("bc", "B", "C")])


@pytest.fixture
def client():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    with TestClient(app) as test_client:
        yield test_client
