import random
from enum import Enum
from typing import Optional, Tuple

from konigsberg.engine.errors import InvalidTopology
from konigsberg.engine.graph import Edge, Graph, Node, create_graph

MARGIN = 80


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# (node_count, edge_count)
DIFFICULTY_SIZES = {
    Difficulty.EASY: (4, 5),
    Difficulty.MEDIUM: (6, 8),
    Difficulty.HARD: (8, 12),
}


def difficulty_size(difficulty) -> Tuple[int, int]:
    return DIFFICULTY_SIZES[Difficulty(difficulty)]


def generate_random_graph(
        node_count: int = 4,
        edge_count: int = 5,
        width: float = 800,
        height: float = 500,
        rng: Optional[random.Random] = None,
) -> Graph:
    """
    Random connected multigraph.
    A random spanning tree comes first (node i hangs off a random earlier node),
    then random extra bridges between distinct nodes until edge_count is reached.
    Parallel bridges are allowed, self-loops are not. Positions are display only.
    """
    rng = rng or random.Random()
    if node_count < 1:
        raise InvalidTopology("A puzzle needs at least one node")
    if node_count == 1 and edge_count > 0:
        raise InvalidTopology("A single node cannot carry bridges")

    nodes = [
        Node(
            id=str(i),
            x=MARGIN + rng.random() * (width - 2 * MARGIN),
            y=MARGIN + rng.random() * (height - 2 * MARGIN),
        )
        for i in range(node_count)
    ]

    edges = []
    for i in range(1, node_count):
        a = nodes[i].id
        b = nodes[rng.randrange(i)].id
        edges.append(Edge(id=f"e{len(edges)}", a=a, b=b))

    while len(edges) < edge_count:
        a = rng.choice(nodes).id
        b = rng.choice(nodes).id
        if a == b:
            continue
        edges.append(Edge(id=f"e{len(edges)}", a=a, b=b))

    return create_graph(nodes, edges)


def generate_for_difficulty(difficulty, width: float = 800, height: float = 500,
                            rng: Optional[random.Random] = None) -> Graph:
    node_count, edge_count = difficulty_size(difficulty)
    return generate_random_graph(node_count, edge_count, width, height, rng)
