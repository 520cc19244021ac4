from .parameter import Parameter
from .model import Model

__all__ = [
    "Parameter",
    "Model"
]
