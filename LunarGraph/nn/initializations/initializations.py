import LunarGraph.backend.backend as backend

def calculate_fan_in_and_fan_out(shape):
    """
    Compute fan_in and fan_out from a given weight shape.
    Weights are stored (out_features, in_features) so they left-multiply
    column inputs.
    """
    if len(shape) == 2:
        fan_out, fan_in = shape[0], shape[1]
    else:
        # vectors (biases) and scalars
        fan_in = fan_out = shape[0] if len(shape) == 1 else 1
    return fan_in, fan_out

def He(shape, uniform=False):
    xp, DTYPE = backend.xp, backend.DTYPE
    fan_in, _ = calculate_fan_in_and_fan_out(shape)
    if uniform:
        limit = xp.sqrt(6.0 / fan_in)
        return xp.random.uniform(-limit, limit, shape).astype(DTYPE)
    else:
        return xp.random.randn(*shape).astype(DTYPE) * DTYPE(xp.sqrt(2.0 / fan_in))

def Xavier(shape, uniform=True):
    xp, DTYPE = backend.xp, backend.DTYPE
    fan_in, fan_out = calculate_fan_in_and_fan_out(shape)
    if uniform:
        limit = xp.sqrt(6.0 / (fan_in + fan_out))
        return xp.random.uniform(-limit, limit, shape).astype(DTYPE)
    else:
        return xp.random.randn(*shape).astype(DTYPE) * DTYPE(xp.sqrt(2.0 / (fan_in + fan_out)))

def LeCun(shape, uniform=False):
    xp, DTYPE = backend.xp, backend.DTYPE
    fan_in, _ = calculate_fan_in_and_fan_out(shape)
    if uniform:
        limit = xp.sqrt(3.0 / fan_in)
        return xp.random.uniform(-limit, limit, shape).astype(DTYPE)
    else:
        return xp.random.randn(*shape).astype(DTYPE) * DTYPE(xp.sqrt(1.0 / fan_in))

def Orthogonal(shape, gain=1.0):
    """
    Orthogonal initialization.
    - gain=1.0 for tanh / sigmoid gates
    """
    xp, DTYPE = backend.xp, backend.DTYPE
    if len(shape) < 2:
        raise ValueError("Orthogonal initializer requires at least 2D shape")

    rows, cols = shape[0], int(xp.prod(xp.asarray(shape[1:])))
    a = xp.random.randn(max(rows, cols), min(rows, cols)).astype(DTYPE)

    # QR decomposition
    q, r = xp.linalg.qr(a)

    # Make Q uniform (fix sign)
    q *= xp.sign(xp.diag(r))
    if rows < cols:
        q = q.T

    return (q.reshape(shape) * gain).astype(DTYPE)

def Zeros(shape):
    return backend.xp.zeros(shape, dtype=backend.DTYPE)

INITIALIZATION = {
    "he": He,
    "xavier": Xavier,
    "lecun": LeCun,
    "orthogonal": Orthogonal,
    "zeros": Zeros
}

ALIASES = {
    "he_normal": He,
    "he_uniform": lambda shape: He(shape, uniform=True),
    "xavier_normal": lambda shape: Xavier(shape, uniform=False),
    "xavier_uniform": Xavier,
    "glorot": Xavier,
    "lecun_normal": LeCun,
    "lecun_uniform": lambda shape: LeCun(shape, uniform=True),
}

ALL_INITIALIZATIONS = {**INITIALIZATION, **ALIASES}

def get_initialization(name_or_fn):
    """
    Return an initialization function.
    - If `name_or_fn` is callable, return it directly.
    - If it's a string, resolve it against initializers + aliases.
    """
    if callable(name_or_fn):
        return name_or_fn

    if isinstance(name_or_fn, str):
        name = name_or_fn.lower()
        if name not in ALL_INITIALIZATIONS:
            raise ValueError(
                f"Unsupported weight initialization '{name_or_fn}'. "
                f"Available: {list(INITIALIZATION.keys())}, "
                f"Aliases: {list(ALIASES.keys())}"
            )
        return ALL_INITIALIZATIONS[name]

    raise TypeError("Weight initialization must be a string or a callable")

def initialize_tensor(shape, init):
    """
    Initialize one tensor: matrices use `init`, vectors (biases) start at zero.

    Args:
        shape (tuple): Shape of the tensor.
        init (str or callable): Initializer name or function taking a shape.

    Returns:
        ndarray: Initialized values of the backend dtype.
    """
    if len(shape) < 2:
        return Zeros(shape)
    return get_initialization(init)(shape)
