class RNNOp:
    """Calls that drive a recurrent builder."""
    new_graph = "new_graph"
    start_new_sequence = "start_new_sequence"
    add_input = "add_input"


class RNNState:
    fresh = "fresh"
    graph_bound = "graph_bound"
    sequence_active = "sequence_active"


class RNNStateMachineError(RuntimeError):
    """A builder call was made out of protocol order."""
    def __init__(self, state, op):
        self.state = state
        self.op = op
        super().__init__(f"Illegal RNN builder call '{op}' in state '{state}'. "
                         f"Expected order: new_graph -> start_new_sequence -> add_input*")


class RNNStateMachine:
    """
    Guards the call order of a recurrent builder:

        fresh --new_graph--> graph_bound --start_new_sequence--> sequence_active
                                                                  |  add_input (loop)
                                                                  |  start_new_sequence (restart)

    `new_graph` is legal from every state and resets the builder to
    `graph_bound`. Every other call outside the table raises
    `RNNStateMachineError`.
    """
    TRANSITIONS = {
        (RNNState.fresh, RNNOp.new_graph): RNNState.graph_bound,
        (RNNState.graph_bound, RNNOp.new_graph): RNNState.graph_bound,
        (RNNState.sequence_active, RNNOp.new_graph): RNNState.graph_bound,
        (RNNState.graph_bound, RNNOp.start_new_sequence): RNNState.sequence_active,
        (RNNState.sequence_active, RNNOp.start_new_sequence): RNNState.sequence_active,
        (RNNState.sequence_active, RNNOp.add_input): RNNState.sequence_active,
    }

    def __init__(self):
        self.state = RNNState.fresh

    def can(self, op):
        return (self.state, op) in self.TRANSITIONS

    def transition(self, op):
        """Move to the next state for `op`, or raise if `op` is illegal now."""
        key = (self.state, op)
        if key not in self.TRANSITIONS:
            raise RNNStateMachineError(self.state, op)
        self.state = self.TRANSITIONS[key]
        return self.state

    def __repr__(self):
        return f"RNNStateMachine(state={self.state})"
