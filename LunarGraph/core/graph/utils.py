def debug_topo(graph):
    """
    Prints the graph in topological order.
    Shows each node's op, operands and dims.
    """
    for node in graph.nodes:
        print(node)

def trace_graph(graph, index, depth=0, visited=None):
    """Print the operand tree below one node, each node once."""
    if visited is None:
        visited = set()
    if index in visited:
        return
    visited.add(index)
    node = graph.node(index)
    print("  " * depth + f"Node(id={node.index}, op={node.op}, dims={node.dims})")
    for a in node.args:
        trace_graph(graph, a, depth + 1, visited)

def graph_signature(graph, start=0):
    """
    Structural signature of a graph: one (op, operand count, scalars) entry
    per node from `start` on. Two graphs built by the same sequence of calls
    produce equal signatures regardless of the parameter values behind them.
    """
    return [(n.op, len(n.args), n.scalars) for n in graph.nodes[start:]]

def ancestors(graph, index):
    """Return the set of handles `index` transitively depends on."""
    seen = set()
    stack = list(graph.node(index).args)
    while stack:
        a = stack.pop()
        if a in seen:
            continue
        seen.add(a)
        stack.extend(graph.nodes[a].args)
    return seen
