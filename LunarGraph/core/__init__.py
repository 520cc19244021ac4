from .graph import ComputationGraph
from .graph import ops
from .model import Parameter
from .model import Model

__all__ = [
    "ComputationGraph",
    "ops",
    "Parameter",
    "Model"
]
