from konigsberg.engine.graph import Edge, Graph, Node, create_graph

# sub-node layout, one entry per bridge end
KONIGSBERG_NODES = [
    # A-land
    ("A1", 270, 270), ("A2", 230, 270), ("A4", 250, 225),
    # B-land
    ("B5", 675, 270), ("B6", 635, 270), ("B7", 655, 225),
    # C-land
    ("C3", 450, 125), ("C4", 425, 100), ("C7", 475, 100),
    # D-land
    ("D1", 420, 440), ("D2", 420, 490), ("D3", 450, 420), ("D5", 480, 490), ("D6", 480, 440),
]

KONIGSBERG_BRIDGES = [
    ("A1", "D1", 1),
    ("A2", "D2", 2),
    ("C3", "D3", 3),
    ("A4", "C4", 4),
    ("B5", "D5", 5),
    ("B6", "D6", 6),
    ("B7", "C7", 7),
]

KONIGSBERG_LANDS = {
    "A": ["A1", "A2", "A4"],
    "B": ["B5", "B6", "B7"],
    "C": ["C3", "C4", "C7"],
    "D": ["D1", "D2", "D3", "D5", "D6"],
}

KONIGSBERG_CENTERS = {
    "A": (250, 250),
    "B": (655, 250),
    "C": (450, 100),
    "D": (450, 460),
}


def konigsberg_graph() -> Graph:
    """ The seven bridges of Königsberg, players stand on whole land masses"""
    nodes = [Node(node_id, x, y) for node_id, x, y in KONIGSBERG_NODES]
    edges = [Edge(id=str(number), a=a, b=b, label=number) for a, b, number in KONIGSBERG_BRIDGES]
    return create_graph(nodes, edges, land_groups=KONIGSBERG_LANDS, land_centers=KONIGSBERG_CENTERS)
