import LunarGraph.backend.backend as backend


class Parameter:
    """
    Learnable tensor owned by a Model.

    Graphs never copy a Parameter: `ComputationGraph.add_parameter` keeps a
    reference and reads `data` when the graph is evaluated, so updates made
    between evaluations are picked up by every graph.

    Args:
        data (ndarray): Initial values.
        name (str, optional): Name used in reports.
    """
    def __init__(self, data, name=None):
        self.data = data.astype(backend.DTYPE, copy=False)
        self.name = name

    @property
    def shape(self):
        return tuple(self.data.shape)

    @property
    def dims(self):
        return self.shape

    @property
    def size(self):
        return int(self.data.size)

    def __repr__(self):
        name = f"name={self.name!r}, " if self.name else ""
        return f"Parameter({name}shape={self.shape}, dtype={self.data.dtype})"
