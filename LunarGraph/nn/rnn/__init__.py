from .state_machine import RNNOp
from .state_machine import RNNState
from .state_machine import RNNStateMachine
from .state_machine import RNNStateMachineError
from .rnn_base import RNNBuilder
from .lstm import LayerParameters
from .lstm import LSTMBuilder
from .lstm import InitialStateError

__all__ = [
    "RNNOp",
    "RNNState",
    "RNNStateMachine",
    "RNNStateMachineError",
    "RNNBuilder",
    "LayerParameters",
    "LSTMBuilder",
    "InitialStateError"
]
