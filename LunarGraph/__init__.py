import logging

from .backend import CONFIG
from .backend.config import resolve_log_level
from .core import ComputationGraph
from .core import Parameter
from .core import Model
from .core import ops
from .nn.rnn import LSTMBuilder
from .nn.rnn import LayerParameters
from .nn.rnn import RNNStateMachineError
from .nn.rnn import InitialStateError

logging.getLogger(__name__).setLevel(resolve_log_level(CONFIG.get("log_level", "WARNING")))
logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "CONFIG",
    "ComputationGraph",
    "Parameter",
    "Model",
    "ops",
    "LSTMBuilder",
    "LayerParameters",
    "RNNStateMachineError",
    "InitialStateError"
]
