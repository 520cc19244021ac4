from .graph import ComputationGraph
from .graph import Node
from . import ops

from .utils import debug_topo
from .utils import trace_graph
from .utils import graph_signature
from .utils import ancestors

__all__ = [
    "ComputationGraph",
    "Node",
    "ops",
    "debug_topo",
    "trace_graph",
    "graph_signature",
    "ancestors"
]
