import logging
import operator

from LunarGraph.core.graph import ops
from LunarGraph.nn.rnn.rnn_base import RNNBuilder

logger = logging.getLogger(__name__)


class InitialStateError(ValueError):
    """Initial state lists do not provide one handle per layer."""


class LayerParameters:
    """
    The 11 tensors of one LSTM layer, by name.

    Holds Parameters when owned by a builder and graph handles when bound
    into a computation graph (see `map`).

        input gate:   x2i, h2i, c2i, bi
        output gate:  x2o, h2o, c2o, bo
        cell update:  x2c, h2c, bc
    """
    NAMES = ("x2i", "h2i", "c2i", "bi",
             "x2o", "h2o", "c2o", "bo",
             "x2c", "h2c", "bc")

    __slots__ = NAMES

    def __init__(self, **fields):
        missing = set(self.NAMES) - set(fields)
        extra = set(fields) - set(self.NAMES)
        if missing or extra:
            raise TypeError(f"LayerParameters needs exactly {self.NAMES}; "
                            f"missing {sorted(missing)}, unexpected {sorted(extra)}")
        for name in self.NAMES:
            setattr(self, name, fields[name])

    def __iter__(self):
        for name in self.NAMES:
            yield getattr(self, name)

    def __len__(self):
        return len(self.NAMES)

    def items(self):
        return [(name, getattr(self, name)) for name in self.NAMES]

    def map(self, fn):
        """New record with `fn` applied to every field, in `NAMES` order."""
        return LayerParameters(**{name: fn(value) for name, value in self.items()})

    def __repr__(self):
        fields = ", ".join(f"{name}={value!r}" for name, value in self.items())
        return f"LayerParameters({fields})"


class LSTMBuilder(RNNBuilder):
    """
    Stacked LSTM with peephole connections, emitted into a computation graph.

    For every layer, at timestep t, with `x` the layer input (the external
    input for layer 0, the hidden state of the layer below otherwise):

        i_t = sigmoid(bi + X2I x + H2I h_{t-1} + C2I c_{t-1})
        f_t = 1 - i_t
        w_t = tanh(bc + X2C x + H2C h_{t-1})
        c_t = f_t * c_{t-1} + i_t * w_t
        o_t = sigmoid(bo + X2O x + H2O h_{t-1} + C2O c_t)
        h_t = o_t * tanh(c_t)

    The forget gate is coupled to the input gate, and the output gate peeks
    at the updated cell c_t while the input gate sees c_{t-1}.

    Parameters are registered with `model` once, here; each `new_graph`
    binds them into the given graph. Layer 0's input weights are
    `hidden_dim x input_dim`, every other layer's are `hidden_dim x hidden_dim`.

    Args:
        layers (int): Number of stacked layers.
        input_dim (int): Size of the external input vector.
        hidden_dim (int): Size of hidden and cell states.
        model (Model): Parameter owner; must provide `add_parameters(dims)`.

    Attributes:
        params (list[LayerParameters]): Parameters per layer.
        param_vars (list[LayerParameters]): Graph handles of the bound graph.
        h, c (list[list[int]]): Hidden / cell handles, [timestep][layer].
        h0, c0 (list[int]): Initial hidden / cell handles of the sequence.
        zero_input (int or None): Shared zero-state handle of the sequence.
    """
    def __init__(self, layers, input_dim, hidden_dim, model):
        for name, value in (("layers", layers), ("input_dim", input_dim), ("hidden_dim", hidden_dim)):
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise ValueError(f"{name} must be a positive integer, got {value!r}")
        if not hasattr(model, "add_parameters"):
            raise TypeError(f"model must provide add_parameters(dims), got {type(model).__name__}")

        super().__init__(layers, hidden_dim)
        self.input_dim = input_dim

        self.params = []
        layer_input_dim = input_dim
        for i in range(layers):
            def add(name, dims):
                return model.add_parameters(dims, name=f"lstm.{i}.{name}")

            self.params.append(LayerParameters(
                # i
                x2i=add("x2i", (hidden_dim, layer_input_dim)),
                h2i=add("h2i", (hidden_dim, hidden_dim)),
                c2i=add("c2i", (hidden_dim, hidden_dim)),
                bi=add("bi", (hidden_dim,)),
                # o
                x2o=add("x2o", (hidden_dim, layer_input_dim)),
                h2o=add("h2o", (hidden_dim, hidden_dim)),
                c2o=add("c2o", (hidden_dim, hidden_dim)),
                bo=add("bo", (hidden_dim,)),
                # c
                x2c=add("x2c", (hidden_dim, layer_input_dim)),
                h2c=add("h2c", (hidden_dim, hidden_dim)),
                bc=add("bc", (hidden_dim,)),
            ))
            layer_input_dim = hidden_dim  # hidden output of this layer feeds the next

        self.param_vars = []
        self.c = []
        self.c0 = []
        self.zero_input = None

        logger.debug("LSTMBuilder: layers=%d input_dim=%d hidden_dim=%d", layers, input_dim, hidden_dim)

    def __repr__(self):
        return (f"LSTMBuilder(layers={self.layers}, input_dim={self.input_dim}, "
                f"hidden_dim={self.hidden_dim}, state={self.state})")

    # -------------------------------
    # Graph binding
    # -------------------------------
    def _new_graph(self, cg):
        self.param_vars = [p.map(cg.add_parameter) for p in self.params]
        self.h, self.c = [], []
        self.h0, self.c0 = [], []
        self.zero_input = None
        logger.debug("LSTMBuilder bound %d parameters into %r", len(self.params) * len(LayerParameters.NAMES), cg)

    # -------------------------------
    # Sequence initialization
    # -------------------------------
    def _check_initial_states(self, c_0, h_0):
        for kind, states in (("cell", c_0), ("hidden", h_0)):
            if states and len(states) != self.layers:
                raise InitialStateError(
                    f"Expected {self.layers} initial {kind} states (or none), got {len(states)}"
                )

    def _start_new_sequence(self, cg, c_0, h_0):
        self.h, self.c = [], []
        self.h0, self.c0 = list(h_0), list(c_0)
        self.zero_input = None
        if not self.h0 or not self.c0:
            self.zero_input = cg.add_input((self.hidden_dim,), [0.0] * self.hidden_dim)
            if not self.c0:
                self.c0 = [self.zero_input] * self.layers
            if not self.h0:
                self.h0 = [self.zero_input] * self.layers
        logger.debug("LSTMBuilder started sequence (zero default: %s)", self.zero_input is not None)

    def start_new_sequence(self, cg, c_0=None, h_0=None):
        """
        Begin a new sequence on the bound graph.

        Args:
            cg (ComputationGraph): The bound graph.
            c_0 (sequence[int], optional): Initial cell-state handle per layer.
            h_0 (sequence[int], optional): Initial hidden-state handle per layer.
                An empty or missing list defaults every layer to one shared
                zero input of length `hidden_dim`.

        Raises:
            RNNStateMachineError: If no graph is bound.
            InitialStateError: If a non-empty list does not hold one handle
                per layer. The builder is left unchanged.
        """
        c_0 = [operator.index(c) for c in c_0] if c_0 is not None else []
        h_0 = [operator.index(h) for h in h_0] if h_0 is not None else []
        super().start_new_sequence(cg, c_0, h_0)

    start = start_new_sequence

    # -------------------------------
    # Timestep expansion
    # -------------------------------
    def _add_input(self, x, cg):
        t = len(self.h)
        ht = [None] * self.layers
        ct = [None] * self.layers
        self.h.append(ht)
        self.c.append(ct)

        logger.debug("LSTMBuilder step t=%d", t)

        inp = x
        for i in range(self.layers):
            v = self.param_vars[i]
            if t == 0:
                h_tm1 = self.h0[i]
                c_tm1 = self.c0[i]
            else:
                h_tm1 = self.h[t - 1][i]
                c_tm1 = self.c[t - 1][i]

            # input
            ait = cg.add_function(ops.AFFINE_TRANSFORM, [v.bi, v.x2i, inp, v.h2i, h_tm1, v.c2i, c_tm1])
            it = cg.add_function(ops.LOGISTIC_SIGMOID, [ait])
            # forget
            ft = cg.add_function(ops.CONSTANT_MINUS_X, [it], 1.0)
            # write memory cell
            awt = cg.add_function(ops.AFFINE_TRANSFORM, [v.bc, v.x2c, inp, v.h2c, h_tm1])
            wt = cg.add_function(ops.TANH, [awt])
            # output
            nwt = cg.add_function(ops.CWISE_MULTIPLY, [it, wt])
            crt = cg.add_function(ops.CWISE_MULTIPLY, [ft, c_tm1])
            ct[i] = cg.add_function(ops.SUM, [crt, nwt])

            aot = cg.add_function(ops.AFFINE_TRANSFORM, [v.bo, v.x2o, inp, v.h2o, h_tm1, v.c2o, ct[i]])
            ot = cg.add_function(ops.LOGISTIC_SIGMOID, [aot])
            ph_t = cg.add_function(ops.TANH, [ct[i]])
            inp = ht[i] = cg.add_function(ops.CWISE_MULTIPLY, [ot, ph_t])

        return ht[-1]

    # -------------------------------
    # History access
    # -------------------------------
    def get_c(self, t):
        """Per-layer cell-state handles at timestep `t`."""
        return list(self.c[t])

    def final_c(self):
        """Per-layer cell-state handles after the last step (initial state if none)."""
        return list(self.c[-1]) if self.c else list(self.c0)

    def final_s(self):
        """Cell states followed by hidden states, the layout `start_new_sequence` takes back."""
        return self.final_c() + self.final_h()
