from LunarGraph.nn.rnn.state_machine import RNNOp, RNNStateMachine, RNNStateMachineError


class RNNBuilder:
    """
    Base class for recurrent graph builders.

    A builder owns the learnable parameters of a recurrence and, for each
    computation graph, emits the nodes of that recurrence one timestep at a
    time. Calls must follow the protocol enforced by `RNNStateMachine`:

        new_graph(cg) -> start_new_sequence(cg, ...) -> add_input(x, cg)*

    `start_new_sequence` may be repeated to begin another sequence on the
    same graph, and `new_graph` may be called at any time to move to a new
    graph. Subclasses implement the `_new_graph`, `_start_new_sequence` and
    `_add_input` hooks; the protocol check runs before each hook, so an
    illegal call never touches builder state. `_check_initial_states`
    validates the arguments of `start_new_sequence` before the transition,
    so a rejected sequence start leaves the builder where it was.

    Attributes:
        h (list[list[int]]): Hidden-state handles, indexed [timestep][layer].
        h0 (list[int]): Initial hidden-state handles of the current sequence.
    """
    def __init__(self, layers, hidden_dim):
        self.layers = layers
        self.hidden_dim = hidden_dim
        self.sm = RNNStateMachine()
        self.h = []
        self.h0 = []

    @property
    def state(self):
        return self.sm.state

    @property
    def num_steps(self):
        return len(self.h)

    # -------------------------------
    # Protocol
    # -------------------------------
    def new_graph(self, cg):
        """Bind this builder's parameters into computation graph `cg`."""
        self.sm.transition(RNNOp.new_graph)
        self._new_graph(cg)

    def start_new_sequence(self, cg, *initial_states):
        """Begin a new sequence on the currently bound graph."""
        if not self.sm.can(RNNOp.start_new_sequence):
            raise RNNStateMachineError(self.state, RNNOp.start_new_sequence)
        self._check_initial_states(*initial_states)
        self.sm.transition(RNNOp.start_new_sequence)
        self._start_new_sequence(cg, *initial_states)

    def add_input(self, x, cg):
        """Emit one timestep for input handle `x`; return the top layer's output handle."""
        self.sm.transition(RNNOp.add_input)
        return self._add_input(x, cg)

    bind = new_graph
    start = start_new_sequence
    step = add_input

    # -------------------------------
    # History access
    # -------------------------------
    def get_h(self, t):
        """Per-layer hidden-state handles at timestep `t`."""
        return list(self.h[t])

    def final_h(self):
        """Per-layer hidden-state handles after the last step (initial state if none)."""
        return list(self.h[-1]) if self.h else list(self.h0)

    def back(self):
        """Handle of the top layer's most recent hidden state."""
        return self.final_h()[-1]

    def final_s(self):
        """Full per-layer recurrent state after the last step."""
        return self.final_h()

    # -------------------------------
    # Abstracts (implemented in child)
    # -------------------------------
    def _check_initial_states(self, *initial_states):
        pass

    def _new_graph(self, cg):
        raise NotImplementedError

    def _start_new_sequence(self, cg, *initial_states):
        raise NotImplementedError

    def _add_input(self, x, cg):
        raise NotImplementedError
