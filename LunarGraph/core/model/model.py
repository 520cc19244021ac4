import logging

from LunarGraph.backend.config import CONFIG
from LunarGraph.core.model.parameter import Parameter

logger = logging.getLogger(__name__)


class Model:
    """
    Registry of learnable parameters.

    Builders register their tensors here once, at construction time, and
    keep only the returned Parameter objects. The Model owns storage for the
    whole training run and outlives every computation graph built from it.

    Args:
        init (str or callable, optional): Default initializer for matrices.
            Defaults to `CONFIG["init"]`.
    """
    def __init__(self, init=None):
        self.init = init if init is not None else CONFIG.get("init", "xavier")
        self._params = []

    def __len__(self):
        return len(self._params)

    def __iter__(self):
        return iter(self._params)

    def __repr__(self):
        return f"Model(parameters={len(self._params)}, size={self.count_parameters()})"

    def add_parameters(self, dims, name=None, init=None):
        """
        Create, initialize and register a new parameter tensor.

        Args:
            dims (int or tuple): Shape of the tensor. Vectors are zero-initialized.
            name (str, optional): Parameter name.
            init (str or callable, optional): Overrides the model's initializer.

        Returns:
            Parameter: The registered parameter.
        """
        from LunarGraph.nn.initializations import initialize_tensor

        if isinstance(dims, int):
            dims = (dims,)
        dims = tuple(int(d) for d in dims)
        if not dims or any(d < 1 for d in dims):
            raise ValueError(f"Invalid parameter dims {dims}")

        if name is None:
            name = f"p{len(self._params)}"
        data = initialize_tensor(dims, init if init is not None else self.init)
        param = Parameter(data, name=name)
        self._params.append(param)
        logger.debug("Registered parameter %s with dims %s", name, dims)
        return param

    register_parameter = add_parameters

    def parameters(self):
        return list(self._params)

    def named_parameters(self):
        return [(p.name, p) for p in self._params]

    def count_parameters(self) -> int:
        """Return the total number of scalars held by this model."""
        return sum(p.size for p in self._params)
