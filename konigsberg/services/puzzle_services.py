import logging
import random
from typing import List, Optional
from uuid import uuid4

from fastapi import HTTPException
from sqlalchemy.orm import joinedload

from konigsberg import models
from konigsberg.core.config import settings
from konigsberg.engine import (
    Edge, Graph, InvalidTopology, Node, classify, create_graph, difficulty_size, generate_random_graph,
    suggest_bridges,
)
from konigsberg.schemas import (
    EdgeRead, LandGroupRead, NodeRead, PuzzleAnalysis, PuzzleCreate, PuzzleData, PuzzleGenerate,
)

logger = logging.getLogger(__name__)


def graph_from_schema(puzzle_data: PuzzleCreate) -> Graph:
    """ Build and validate an engine graph from a puzzle definition"""
    nodes = [Node(n.id, n.x, n.y) for n in puzzle_data.nodes]
    edges = [Edge(id=e.id, a=e.start, b=e.end, label=e.label) for e in puzzle_data.edges]

    # land order: declared groups first, then groups only named on nodes
    group_keys = [group.id for group in puzzle_data.land_groups]
    for node in puzzle_data.nodes:
        if node.land_group is not None and node.land_group not in group_keys:
            group_keys.append(node.land_group)
    if not group_keys:
        return create_graph(nodes, edges)

    land_groups = {key: [n.id for n in puzzle_data.nodes if n.land_group == key] for key in group_keys}
    centers = {group.id: (group.x, group.y) for group in puzzle_data.land_groups
               if group.x is not None and group.y is not None}
    return create_graph(nodes, edges, land_groups=land_groups, land_centers=centers)


def serialize_graph(graph: Graph) -> PuzzleData:
    """ Graph -> JSON friendly data for drawing"""
    traversal = graph.traversal
    land_groups = []
    if graph.is_grouped:
        for key, members in traversal.groups.items():
            x, y = traversal.centers.get(key, (None, None))
            land_groups.append(LandGroupRead(id=key, x=x, y=y, members=members))

    return PuzzleData(
        variant=traversal.kind,
        nodes=[
            NodeRead(
                id=node.id,
                x=node.x,
                y=node.y,
                land_group=traversal.unit_of(node.id) if graph.is_grouped else None,
            )
            for node in graph.nodes
        ],
        edges=[EdgeRead(id=e.id, start=e.a, end=e.b, label=e.label, used=e.used) for e in graph.edges],
        land_groups=land_groups,
    )


def analyse_graph(graph: Graph) -> PuzzleAnalysis:
    classification = classify(graph)
    return PuzzleAnalysis(
        kind=classification.kind,
        odd_nodes=list(classification.odd_nodes),
        degrees=dict(classification.degrees),
        connected=classification.connected,
        suggestions=suggest_bridges(classification),
    )


class PuzzleServices:
    """ Handles all puzzle related DB operation"""

    def __init__(self, db):
        self.db = db

    # create puzzle
    def create_puzzle(self, puzzle_data: PuzzleCreate):
        """Validate the definition and store it"""
        try:
            graph = graph_from_schema(puzzle_data)
        except InvalidTopology as e:
            logger.warning("Rejected puzzle %s: %s", puzzle_data.name, e)
            raise HTTPException(status_code=422, detail=str(e))

        return self.store_graph(graph, puzzle_data.name, puzzle_data.description, puzzle_data.difficulty)

    def store_graph(self, graph: Graph, name: str, description: Optional[str] = "",
                    difficulty: Optional[str] = None):
        """Insert puzzle to DB table puzzles and its nodes, edges and land groups"""
        puzzle = models.Puzzle(
            id=uuid4(),
            name=name,
            variant=graph.traversal.kind,
            difficulty=difficulty,
            node_count=len(graph.nodes),
            edge_count=len(graph.edges),
            description=description,
        )
        self.db.add(puzzle)
        self.db.flush()

        for index, node in enumerate(graph.nodes):
            self.db.add(models.Node(
                id=uuid4(),
                node_key=node.id,
                node_index=index,
                x_position=node.x,
                y_position=node.y,
                land_group=graph.traversal.unit_of(node.id) if graph.is_grouped else None,
                puzzle_id=puzzle.id,
            ))

        for index, edge in enumerate(graph.edges):
            self.db.add(models.Edge(
                id=uuid4(),
                edge_key=edge.id,
                edge_index=index,
                start_node=edge.a,
                end_node=edge.b,
                label=edge.label,
                puzzle_id=puzzle.id,
            ))

        if graph.is_grouped:
            for index, key in enumerate(graph.traversal.groups):
                x, y = graph.traversal.centers.get(key, (None, None))
                self.db.add(models.LandGroup(
                    id=uuid4(),
                    group_key=key,
                    group_index=index,
                    x_position=x,
                    y_position=y,
                    puzzle_id=puzzle.id,
                ))

        self.db.commit()
        logger.info("Stored puzzle %s (%s, %d nodes, %d bridges)",
                    puzzle.id, puzzle.variant, puzzle.node_count, puzzle.edge_count)
        return puzzle

    # generate puzzle
    def generate_puzzle(self, puzzle_config: PuzzleGenerate):
        """Generate a random puzzle and store it"""
        node_count, edge_count = difficulty_size(puzzle_config.difficulty)
        if puzzle_config.node_count is not None:
            node_count = puzzle_config.node_count
        if puzzle_config.edge_count is not None:
            edge_count = puzzle_config.edge_count

        try:
            graph = generate_random_graph(
                node_count,
                edge_count,
                settings.CANVAS_WIDTH,
                settings.CANVAS_HEIGHT,
                random.Random(puzzle_config.seed),
            )
        except InvalidTopology as e:
            raise HTTPException(status_code=422, detail=str(e))

        return self.store_graph(graph, puzzle_config.name, puzzle_config.description,
                                puzzle_config.difficulty.value)

    # get all puzzle
    def get_all_puzzle(
            self,
            name: Optional[str] = None,
            variant: Optional[str] = None,  # default None if no filter is selected
            difficulty: Optional[str] = None,
            sort_by: Optional[str] = None,
            order: Optional[str] = "asc"  # default asc
    ) -> List[models.Puzzle]:  # returns a list of Puzzle objects
        """Fetch puzzle with filter"""
        query = self.db.query(models.Puzzle)

        if name:
            query = query.filter(models.Puzzle.name == name)
        if variant:
            query = query.filter(models.Puzzle.variant == variant)
        if difficulty:
            query = query.filter(models.Puzzle.difficulty == difficulty)
        if sort_by:
            sort_column = getattr(models.Puzzle, sort_by, None)
            if sort_column is not None:
                query = query.order_by(sort_column.desc() if order == "desc" else sort_column.asc())

        return query.all()

    # get one puzzle by id
    def get_puzzle_by_id(self, puzzle_id):
        """Fetch puzzle by id"""
        puzzle = (self.db.query(models.Puzzle)
                  .options(joinedload(models.Puzzle.nodes))  # get related nodes
                  .options(joinedload(models.Puzzle.edges))  # get related edges
                  .options(joinedload(models.Puzzle.land_groups))
                  .filter(models.Puzzle.id == puzzle_id).first())
        if not puzzle:
            raise HTTPException(status_code=404, detail="Puzzle not found")
        return puzzle

    # delete one puzzle
    def delete_puzzle(self, puzzle_id):
        """Fetch puzzle by id an delete"""
        puzzle = self.get_puzzle_by_id(puzzle_id)
        self.db.delete(puzzle)
        self.db.commit()
        logger.info("Deleted puzzle %s", puzzle_id)

    def to_graph(self, puzzle_id) -> Graph:
        """Load a stored puzzle as a fresh engine graph"""
        puzzle = self.get_puzzle_by_id(puzzle_id)
        db_nodes = sorted(puzzle.nodes, key=lambda n: n.node_index)
        nodes = [Node(n.node_key, n.x_position, n.y_position) for n in db_nodes]
        edges = [
            Edge(id=e.edge_key, a=e.start_node, b=e.end_node, label=e.label)
            for e in sorted(puzzle.edges, key=lambda e: e.edge_index)
        ]
        if puzzle.variant != "grouped":
            return create_graph(nodes, edges)

        groups = sorted(puzzle.land_groups, key=lambda g: g.group_index)
        land_groups = {g.group_key: [n.node_key for n in db_nodes if n.land_group == g.group_key] for g in groups}
        centers = {g.group_key: (g.x_position, g.y_position) for g in groups
                   if g.x_position is not None and g.y_position is not None}
        return create_graph(nodes, edges, land_groups=land_groups, land_centers=centers)

    # Serialize puzzle data to JSON
    def serialize_puzzle(self, puzzle_id) -> PuzzleData:
        return serialize_graph(self.to_graph(puzzle_id))

    def analyse_puzzle(self, puzzle_id) -> PuzzleAnalysis:
        return analyse_graph(self.to_graph(puzzle_id))
