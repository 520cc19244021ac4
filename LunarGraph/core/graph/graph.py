import logging

import LunarGraph.backend.backend as backend
from LunarGraph.core.graph.ops import get_op

logger = logging.getLogger(__name__)

PARAMETER = "parameter"
INPUT = "input"


def _as_dims(dims):
    if isinstance(dims, int):
        dims = (dims,)
    dims = tuple(int(d) for d in dims)
    if not dims or any(d < 1 for d in dims):
        raise ValueError(f"Invalid dims {dims}")
    return dims


class Node:
    """
    One node of a ComputationGraph.

    Attributes:
        index (int): Handle of the node (position in the graph).
        op (str): "parameter", "input", or an operator kind from `ops.OPS`.
        args (tuple[int]): Operand handles, in operator order.
        scalars (tuple): Scalar arguments passed to the operator.
        dims (tuple[int]): Output dimensions.
        source: Parameter for parameter nodes, value array for input nodes.
    """
    __slots__ = ("index", "op", "args", "scalars", "dims", "source")

    def __init__(self, index, op, args=(), scalars=(), dims=None, source=None):
        self.index = index
        self.op = op
        self.args = tuple(args)
        self.scalars = tuple(scalars)
        self.dims = dims
        self.source = source

    def __repr__(self):
        args = ", ".join(str(a) for a in self.args)
        extra = f", scalars={list(self.scalars)}" if self.scalars else ""
        return f"Node({self.index}: {self.op}({args}){extra} -> {self.dims})"


class ComputationGraph:
    """
    Append-only computation graph.

    Nodes are registered in creation order and addressed by integer handles,
    so operands always precede the nodes that use them and the node list is
    already a topological order. Building the graph never evaluates it;
    `forward()` and `incremental_forward()` compute node values on demand.
    """
    def __init__(self):
        self.nodes = []
        self._values = []

    def __len__(self):
        return len(self.nodes)

    def __repr__(self):
        return f"ComputationGraph(nodes={len(self.nodes)}, evaluated={len(self._values)})"

    def node(self, index):
        """Return the node behind a handle."""
        self._check_handle(index)
        return self.nodes[index]

    def _check_handle(self, index):
        if isinstance(index, bool) or not isinstance(index, int):
            raise TypeError(f"Node handle must be an int, got {type(index).__name__}")
        if not 0 <= index < len(self.nodes):
            raise IndexError(f"Unknown node handle {index} (graph has {len(self.nodes)} nodes)")

    def _append(self, node):
        self.nodes.append(node)
        return node.index

    # -------------------------------
    # Graph construction
    # -------------------------------
    def add_parameter(self, param):
        """Register a model parameter as a graph input and return its handle."""
        dims = _as_dims(param.shape)
        return self._append(Node(len(self.nodes), PARAMETER, dims=dims, source=param))

    def add_input(self, dims, values):
        """
        Register a constant input.

        Args:
            dims (int or tuple): Dimensions of the input.
            values: Array-like holding prod(dims) numbers. Arrays of the
                backend type are kept by reference.

        Returns:
            int: Handle of the new input node.
        """
        xp = backend.xp
        dims = _as_dims(dims)
        if not isinstance(values, xp.ndarray):
            values = xp.asarray(values, dtype=backend.DTYPE)
        size = 1
        for d in dims:
            size *= d
        if values.size != size:
            raise ValueError(f"Input of dims {dims} needs {size} values, got {values.size}")
        return self._append(Node(len(self.nodes), INPUT, dims=dims, source=values))

    def add_function(self, op, args, *scalars):
        """
        Emit an operator node.

        Args:
            op (str or Op): Operator kind, one of `ops.OPS`.
            args (sequence[int]): Operand handles.
            *scalars: Scalar arguments of the operator (e.g. the constant of
                `constant_minus_x`).

        Returns:
            int: Handle of the new node.
        """
        op = get_op(op)
        args = tuple(args)
        for a in args:
            self._check_handle(a)
        dims = op.check([self.nodes[a].dims for a in args], scalars)
        return self._append(Node(len(self.nodes), op.name, args=args, scalars=scalars, dims=dims))

    # Collaborator-contract names
    bind_parameter = add_parameter
    add_constant_input = add_input
    emit = add_function

    # -------------------------------
    # Evaluation
    # -------------------------------
    def _evaluate(self, node):
        xp = backend.xp
        if node.op == PARAMETER:
            return xp.array(node.source.data, dtype=backend.DTYPE).reshape(node.dims)
        if node.op == INPUT:
            return xp.array(node.source, dtype=backend.DTYPE).reshape(node.dims)
        xs = [self._values[a] for a in node.args]
        return get_op(node.op)(xs, node.scalars)

    def incremental_forward(self):
        """Evaluate nodes added since the last evaluation and return the last value."""
        start = len(self._values)
        if start < len(self.nodes):
            logger.debug("Evaluating nodes %d..%d", start, len(self.nodes) - 1)
        for node in self.nodes[start:]:
            self._values.append(self._evaluate(node))
        if not self._values:
            raise ValueError("Cannot evaluate an empty graph")
        return self._values[-1]

    def forward(self):
        """Re-evaluate every node and return the value of the last one."""
        self._values = []
        return self.incremental_forward()

    def get_value(self, index):
        """Return the value of a node, evaluating pending nodes if needed."""
        self._check_handle(index)
        if index >= len(self._values):
            self.incremental_forward()
        return self._values[index]

    def invalidate(self):
        """Drop cached values (e.g. after parameters or inputs changed in place)."""
        self._values = []
