import random

from conftest import build_graph
from konigsberg.engine import classify, generate_random_graph, hierholzer, konigsberg_graph, solve


def assert_full_traversal(graph, solution):
    """Every edge exactly once, each step leaving from where the last one arrived"""
    assert sorted(solution.edges) == sorted(edge.id for edge in graph.edges)
    assert len(solution.walk) == len(solution.edges) + 1
    for i, edge_id in enumerate(solution.edges):
        assert graph.edge(edge_id).connects(solution.walk[i], solution.walk[i + 1])


class TestHierholzer:

    def test_square_closes_the_circuit(self, square):
        solution = solve(square)
        assert_full_traversal(square, solution)
        assert len(solution.edges) == 4
        assert solution.walk[0] == solution.walk[-1] == "A"

    def test_path_starts_at_an_odd_end(self, path3):
        sequence = hierholzer(path3)
        assert sequence == ["ab", "bc"]
        assert path3.edge(sequence[0]).touches("A")

    def test_parallel_bridges_each_used_once(self):
        graph = build_graph("ABC", [
            ("ab1", "A", "B"), ("ab2", "A", "B"), ("ab3", "A", "B"), ("bc", "B", "C"),
        ])
        # A: 3, B: 4, C: 1
        solution = solve(graph)
        assert_full_traversal(graph, solution)
        assert len(set(solution.edges)) == 4

    def test_self_loop_is_traversed(self):
        graph = build_graph("AB", [("ab", "A", "B"), ("bb", "B", "B")])
        solution = solve(graph)
        assert_full_traversal(graph, solution)
        assert solution.walk == ("A", "B", "B")

    def test_start_skips_isolated_first_node(self):
        graph = build_graph("QABC", [("ab", "A", "B"), ("bc", "B", "C"), ("ca", "C", "A")])
        solution = solve(graph)
        assert solution.start == "A"
        assert_full_traversal(graph, solution)

    def test_no_edges_means_nothing_to_solve(self):
        assert hierholzer(build_graph("AB", [])) is None

    def test_only_unused_edges_are_walked(self, path3):
        path3.mark_edge_used("ab")
        assert hierholzer(path3) == ["bc"]
        path3.mark_edge_used("bc")
        assert solve(path3) is None

    def test_konigsberg_with_extra_bridge(self):
        graph = konigsberg_graph()
        graph.add_edge("A1", "B5")
        units = graph.unit_graph()
        solution = solve(units)
        assert_full_traversal(units, solution)
        # odd lands are C and D
        assert solution.walk[0] == "C"
        assert solution.walk[-1] == "D"

    def test_random_solvable_graphs(self):
        solved = 0
        for seed in range(60):
            graph = generate_random_graph(8, 12, rng=random.Random(seed))
            if not classify(graph).solvable:
                continue
            assert_full_traversal(graph, solve(graph))
            solved += 1
        assert solved > 0

    def test_partly_used_graph_starts_from_live_parity(self, square):
        square.mark_edge_used("cd")
        solution = solve(square)
        assert sorted(solution.edges) == ["ab", "bc", "da"]
        assert {solution.walk[0], solution.walk[-1]} == {"C", "D"}
        for i, edge_id in enumerate(solution.edges):
            assert square.edge(edge_id).connects(solution.walk[i], solution.walk[i + 1])

    def test_unused_bridges_with_four_odd_ends(self, square):
        square.mark_edge_used("ab")
        square.mark_edge_used("cd")
        # bc and da left: A, B, C, D all odd
        assert solve(square) is None

    def test_separate_networks_are_refused(self):
        graph = build_graph("ABCXYZ", [
            ("ab", "A", "B"), ("bc", "B", "C"), ("ca", "C", "A"),
            ("xy", "X", "Y"), ("yz", "Y", "Z"), ("zx", "Z", "X"),
        ])
        assert solve(graph) is None
        assert hierholzer(graph) is None

    def test_impossible_graph_is_refused(self):
        assert solve(konigsberg_graph().unit_graph()) is None
