import pytest

from konigsberg.engine import (
    CompletionOutcome, MoveRejected, MoveValidator, NoBridgeAvailable, PlayerStatus, UnknownNode, classify,
    completion_outcome, konigsberg_graph,
)


class TestSelectStart:

    def test_any_node_can_start(self, path3):
        validator = MoveValidator(path3)
        state = validator.select_start("B")
        assert state.status == PlayerStatus.POSITIONED
        assert state.position == "B"
        assert not any(edge.used for edge in path3.edges)

    def test_unknown_start(self, path3):
        with pytest.raises(UnknownNode):
            MoveValidator(path3).select_start("Q")

    def test_start_only_once(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        with pytest.raises(MoveRejected):
            validator.select_start("B")

    def test_cross_before_start(self, path3):
        with pytest.raises(MoveRejected):
            MoveValidator(path3).cross("B")


class TestCross:

    def test_no_bridge_leaves_state_unchanged(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        with pytest.raises(NoBridgeAvailable):
            validator.cross("C")
        assert validator.state.position == "A"
        assert validator.history == []
        assert not any(edge.used for edge in path3.edges)

    def test_crossing_uses_the_bridge(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        result = validator.cross("B")
        assert result.edge.id == "ab"
        assert result.position == "B"
        assert result.remaining == 1
        assert path3.edge("ab").used
        assert validator.history[0].from_node == "A"

    def test_used_bridge_cannot_be_crossed_back(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        validator.cross("B")
        with pytest.raises(NoBridgeAvailable):
            validator.cross("A")

    def test_next_targets(self, path3):
        validator = MoveValidator(path3)
        assert validator.next_targets() == []
        validator.select_start("B")
        assert validator.next_targets() == ["A", "C"]

    def test_trail_completion(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        validator.cross("B")
        result = validator.cross("C")
        assert result.status == PlayerStatus.COMPLETED
        assert result.outcome == CompletionOutcome.TRAIL_COMPLETED

    def test_circuit_completion(self, square):
        validator = MoveValidator(square)
        validator.select_start("A")
        for target in "BCD":
            validator.cross(target)
        result = validator.cross("A")
        assert result.outcome == CompletionOutcome.CIRCUIT_COMPLETED
        with pytest.raises(MoveRejected):
            validator.cross("B")


class TestStranding:

    def test_stranded_when_bridges_remain_elsewhere(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("B")
        result = validator.cross("A")
        assert result.status == PlayerStatus.STRANDED
        with pytest.raises(MoveRejected):
            validator.cross("B")

    def test_undo_clears_stranded(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("B")
        validator.cross("A")
        validator.undo()
        assert validator.state.status == PlayerStatus.POSITIONED
        assert validator.state.position == "B"

    def test_detection_can_be_switched_off(self, path3):
        validator = MoveValidator(path3, detect_stranding=False)
        validator.select_start("B")
        assert validator.cross("A").status == PlayerStatus.POSITIONED


class TestUndoReset:

    def test_cross_then_undo_is_a_no_op(self, square):
        validator = MoveValidator(square)
        validator.select_start("A")
        validator.cross("B")
        before = [(edge.id, edge.used) for edge in square.edges]
        position = validator.state.position

        validator.cross("C")
        record = validator.undo()

        assert record.edge_id == "bc"
        assert [(edge.id, edge.used) for edge in square.edges] == before
        assert validator.state.position == position
        assert len(validator.history) == 1

    def test_undo_with_empty_history(self, square):
        validator = MoveValidator(square)
        assert validator.undo() is None
        validator.select_start("A")
        assert validator.undo() is None
        assert validator.state.position == "A"

    def test_undo_after_completion(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        validator.cross("B")
        validator.cross("C")
        validator.undo()
        assert validator.state.status == PlayerStatus.POSITIONED
        assert validator.state.outcome is None

    def test_reset_from_stranded(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("B")
        validator.cross("A")
        state = validator.reset()
        assert state.status == PlayerStatus.NOT_STARTED
        assert state.position is None
        assert validator.history == []
        assert not any(edge.used for edge in path3.edges)

    def test_reset_from_completed(self, path3):
        validator = MoveValidator(path3)
        validator.select_start("A")
        validator.cross("B")
        validator.cross("C")
        assert validator.state.status == PlayerStatus.COMPLETED

        state = validator.reset()
        assert state.status == PlayerStatus.NOT_STARTED
        assert state.outcome is None
        assert validator.history == []
        assert not any(edge.used for edge in path3.edges)


class TestGroupedLand:

    def test_crossing_snaps_to_land_representative(self):
        graph = konigsberg_graph()
        validator = MoveValidator(graph)
        validator.select_start("A2")
        assert validator.state.unit == "A"

        result = validator.cross("D5")
        assert result.edge.id == "1"
        assert result.unit == "D"
        assert result.position == "D1"
        assert validator.history[0].from_unit == "A"
        assert validator.history[0].from_node == "A2"

    def test_any_node_of_the_target_land_works(self):
        validator = MoveValidator(konigsberg_graph())
        validator.select_start("A1")
        validator.cross("D3")
        result = validator.cross("A4")
        assert result.edge.id == "2"
        assert result.position == "A1"

    def test_no_bridge_between_lands(self):
        validator = MoveValidator(konigsberg_graph())
        validator.select_start("A1")
        with pytest.raises(NoBridgeAvailable) as info:
            validator.cross("B6")
        assert info.value.from_unit == "A"

    def test_undo_restores_sub_node(self):
        validator = MoveValidator(konigsberg_graph())
        validator.select_start("A4")
        validator.cross("C7")
        validator.undo()
        assert validator.state.position == "A4"
        assert validator.state.unit == "A"


class TestCompletionOutcome:

    def test_trail_ending_on_even_node_is_an_anomaly(self, path3):
        assert completion_outcome(classify(path3), "B") == CompletionOutcome.INVALID_END

    def test_trail_ending_on_odd_node(self, path3):
        assert completion_outcome(classify(path3), "C") == CompletionOutcome.TRAIL_COMPLETED

    def test_impossible_graph(self):
        assert completion_outcome(classify(konigsberg_graph()), "A") == CompletionOutcome.NO_EULERIAN_PATH
