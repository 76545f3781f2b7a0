from konigsberg.models.puzzle_model import Puzzle
from konigsberg.models.node_model import Node
from konigsberg.models.edge_model import Edge
from konigsberg.models.land_group_model import LandGroup
