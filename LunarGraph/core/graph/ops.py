import LunarGraph.backend.backend as backend

# ============================================================================
# Shape rules
# ============================================================================

def _affine_dims(dims, scalars):
    if len(dims) % 2 != 1:
        raise ValueError(
            f"affine_transform expects a bias followed by (weight, input) pairs, got {len(dims)} operands"
        )
    out = dims[0]
    for W, x in zip(dims[1::2], dims[2::2]):
        if len(W) != 2:
            raise ValueError(f"affine_transform weight must be 2-D, got dims {W}")
        if W[1] != x[0]:
            raise ValueError(f"affine_transform cannot multiply {W} by {x}")
        if (W[0],) + tuple(x[1:]) != out:
            raise ValueError(f"affine_transform term {W} x {x} does not match bias dims {out}")
    return out

def _same_dims(dims, scalars):
    for d in dims[1:]:
        if d != dims[0]:
            raise ValueError(f"Operands must share dims, got {dims}")
    return dims[0]

def _unary_dims(dims, scalars):
    return dims[0]

# ============================================================================
# Forward kernels
# ============================================================================

def affine_transform(xs):
    """b + W_1 @ x_1 + W_2 @ x_2 + ..."""
    xp = backend.xp
    out = xs[0].copy()
    for W, x in zip(xs[1::2], xs[2::2]):
        out += xp.matmul(W, x)
    return out

def logistic_sigmoid(xs):
    xp = backend.xp
    return 1 / (1 + xp.exp(-xs[0]))

def tanh(xs):
    return backend.xp.tanh(xs[0])

def cwise_multiply(xs):
    return xs[0] * xs[1]

def sum_(xs):
    out = xs[0].copy()
    for x in xs[1:]:
        out += x
    return out

def constant_minus_x(xs, c):
    return c - xs[0]

# ============================================================================
# Operator table
# ============================================================================

class Op:
    """
    One operator kind of the graph.

    Args:
        name (str): Operator kind, also stored on every node it emits.
        fn (callable): Forward kernel taking the list of operand values
            followed by the scalar arguments.
        arity (tuple): (min_operands, max_operands); max is None if unbounded.
        n_scalars (int): Number of scalar arguments the kernel expects.
        dims_fn (callable): Output dims from operand dims, raising ValueError
            when the operands do not compose.
    """
    def __init__(self, name, fn, arity, n_scalars, dims_fn):
        self.name = name
        self.fn = fn
        self.arity = arity
        self.n_scalars = n_scalars
        self.dims_fn = dims_fn

    def check(self, dims, scalars):
        lo, hi = self.arity
        n = len(dims)
        if n < lo or (hi is not None and n > hi):
            expected = f"{lo}" if lo == hi else f"{lo}..{hi if hi is not None else 'n'}"
            raise ValueError(f"{self.name} expects {expected} operands, got {n}")
        if len(scalars) != self.n_scalars:
            raise ValueError(f"{self.name} expects {self.n_scalars} scalar arguments, got {len(scalars)}")
        return self.dims_fn(dims, scalars)

    def __call__(self, xs, scalars=()):
        return self.fn(xs, *scalars)

    def __repr__(self):
        return f"Op({self.name})"


AFFINE_TRANSFORM = "affine_transform"
LOGISTIC_SIGMOID = "logistic_sigmoid"
TANH = "tanh"
CWISE_MULTIPLY = "cwise_multiply"
SUM = "sum"
CONSTANT_MINUS_X = "constant_minus_x"

OPS = {
    AFFINE_TRANSFORM: Op(AFFINE_TRANSFORM, affine_transform, (1, None), 0, _affine_dims),
    LOGISTIC_SIGMOID: Op(LOGISTIC_SIGMOID, logistic_sigmoid, (1, 1), 0, _unary_dims),
    TANH: Op(TANH, tanh, (1, 1), 0, _unary_dims),
    CWISE_MULTIPLY: Op(CWISE_MULTIPLY, cwise_multiply, (2, 2), 0, _same_dims),
    SUM: Op(SUM, sum_, (1, None), 0, _same_dims),
    CONSTANT_MINUS_X: Op(CONSTANT_MINUS_X, constant_minus_x, (1, 1), 1, _unary_dims),
}

def get_op(name_or_op):
    """
    Resolve an operator kind.
    - If `name_or_op` is an Op, return it directly.
    - If it's a string, resolve it against the operator table.
    """
    if isinstance(name_or_op, Op):
        return name_or_op

    if isinstance(name_or_op, str):
        name = name_or_op.lower()
        if name not in OPS:
            raise ValueError(
                f"Unsupported operator '{name_or_op}'. "
                f"Available: {list(OPS.keys())}"
            )
        return OPS[name]

    raise TypeError("Operator must be a string or an Op")
