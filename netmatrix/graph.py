import networkx as nx

from netmatrix.model.matrix import Matrix


def create_metrics_graph(matrix: Matrix) -> nx.DiGraph:
    """
    Converts a matrix into a directed graph with one edge per (source, target) pair that has at least one metric.
    Missing metrics are stored as -1, since GraphML cannot hold null attributes.
    """
    g = nx.DiGraph()
    g.add_nodes_from(matrix.sources)
    g.add_nodes_from(matrix.targets)

    for (src, dst), cell in matrix.cells.items():
        if src == dst:
            continue
        if cell.avg_latency is None and cell.tcp_bitrate is None and cell.udp_bitrate is None:
            continue

        g.add_edge(src, dst,
                   latency=_or_missing(cell.avg_latency),
                   tcp_bitrate=_or_missing(cell.tcp_bitrate),
                   udp_bitrate=_or_missing(cell.udp_bitrate))

    return g


def _or_missing(value):
    return -1.0 if value is None else float(value)


def save_graph(g: nx.Graph, path: str) -> None:
    nx.write_graphml(g, path=path)


def load_graph(path: str) -> nx.Graph:
    return nx.read_graphml(path)
