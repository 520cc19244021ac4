import pytest

from LunarGraph.nn.rnn import RNNOp, RNNState, RNNStateMachine, RNNStateMachineError


def test_starts_fresh():
    sm = RNNStateMachine()
    assert sm.state == RNNState.fresh


def test_legal_sequence_of_calls():
    sm = RNNStateMachine()
    assert sm.transition(RNNOp.new_graph) == RNNState.graph_bound
    assert sm.transition(RNNOp.start_new_sequence) == RNNState.sequence_active
    for _ in range(3):
        assert sm.transition(RNNOp.add_input) == RNNState.sequence_active
    # restart on the same graph
    assert sm.transition(RNNOp.start_new_sequence) == RNNState.sequence_active
    # and move to a new graph
    assert sm.transition(RNNOp.new_graph) == RNNState.graph_bound


def test_new_graph_allowed_twice_in_a_row():
    sm = RNNStateMachine()
    sm.transition(RNNOp.new_graph)
    assert sm.transition(RNNOp.new_graph) == RNNState.graph_bound


@pytest.mark.parametrize(
    "prefix, op",
    [
        ([], RNNOp.start_new_sequence),
        ([], RNNOp.add_input),
        ([RNNOp.new_graph], RNNOp.add_input),
        ([RNNOp.new_graph, RNNOp.start_new_sequence, RNNOp.new_graph], RNNOp.add_input),
    ],
)
def test_illegal_calls_raise_and_keep_state(prefix, op):
    sm = RNNStateMachine()
    for p in prefix:
        sm.transition(p)
    before = sm.state
    assert not sm.can(op)

    with pytest.raises(RNNStateMachineError) as excinfo:
        sm.transition(op)

    assert sm.state == before
    assert excinfo.value.op == op
    assert excinfo.value.state == before
    assert op in str(excinfo.value)


def test_unknown_op_is_rejected():
    sm = RNNStateMachine()
    with pytest.raises(RNNStateMachineError):
        sm.transition("rewind")
