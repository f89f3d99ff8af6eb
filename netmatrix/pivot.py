from typing import Iterable

from netmatrix.fetch.data import MetricRecord
from netmatrix.model.matrix import CellValue, Matrix, empty_cell


def create_matrix(records: Iterable[MetricRecord]) -> Matrix:
    """
    Pivots a flat list of metric records into a dense source x target matrix. Rows and columns are sorted
    lexicographically, duplicate (source, target) pairs are resolved by keeping the last record, and pairs without a
    record are filled with an empty cell.
    """
    sources = set()
    targets = set()
    cells = dict()

    for record in records:
        sources.add(record.source_region)
        targets.add(record.target_region)

        cells[(record.source_region, record.target_region)] = CellValue(
            avg_latency=record.avg_latency,
            tcp_bitrate=record.tcp_bitrate,
            udp_bitrate=record.udp_bitrate
        )

    sources = sorted(sources)
    targets = sorted(targets)

    dense = dict()
    for source in sources:
        for target in targets:
            dense[(source, target)] = cells.get((source, target), empty_cell)

    return Matrix(sources, targets, dense)
