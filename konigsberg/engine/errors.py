class PuzzleError(Exception):
    """ Base class for everything the bridge engine raises"""


class InvalidTopology(PuzzleError):
    """ Graph definition rejected at construction time"""


class UnknownNode(PuzzleError):
    def __init__(self, node_id):
        super().__init__(f"Unknown node {node_id}")
        self.node_id = node_id


class UnknownEdge(PuzzleError):
    def __init__(self, edge_id):
        super().__init__(f"Unknown bridge {edge_id}")
        self.edge_id = edge_id


class EdgeAlreadyUsed(PuzzleError):
    def __init__(self, edge_id):
        super().__init__(f"Bridge {edge_id} is already used")
        self.edge_id = edge_id


class EdgeNotUsed(PuzzleError):
    def __init__(self, edge_id):
        super().__init__(f"Bridge {edge_id} has not been used")
        self.edge_id = edge_id


class NoBridgeAvailable(PuzzleError):
    """ Player asked to cross where no unused bridge exists. Recoverable."""

    def __init__(self, from_unit, target, message=None):
        super().__init__(message or f"No available bridge to cross from {from_unit} to {target}")
        self.from_unit = from_unit
        self.target = target


class MoveRejected(PuzzleError):
    """ Move attempted in a state that does not accept moves (stranded, completed, AI playing)"""
