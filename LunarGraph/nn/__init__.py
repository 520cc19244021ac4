from . import initializations
from . import rnn

from .rnn import LSTMBuilder

__all__ = [
    "initializations",
    "rnn",
    "LSTMBuilder"
]
