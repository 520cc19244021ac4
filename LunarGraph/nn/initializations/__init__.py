from .initializations import He
from .initializations import Xavier
from .initializations import Orthogonal
from .initializations import LeCun
from .initializations import Zeros
from .initializations import get_initialization
from .initializations import initialize_tensor

__all__ = [
    "He",
    "Xavier",
    "Orthogonal",
    "LeCun",
    "Zeros",
    "get_initialization",
    "initialize_tensor"
]
