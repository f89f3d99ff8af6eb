from typing import List, NamedTuple, Optional

from jinja2 import Environment, PackageLoader, select_autoescape

from netmatrix.model.matrix import CellValue, Matrix

placeholder = '-'

notice_kinds = ('loading', 'error', 'no-data')

_env = Environment(
    loader=PackageLoader('netmatrix', 'templates'),
    autoescape=select_autoescape(['html']),
    trim_blocks=True,
    lstrip_blocks=True
)


class Cell(NamedTuple):
    lines: List[str]
    css_class: str = ''


def get_latency_class(latency: Optional[float]) -> str:
    if latency is None:
        return ''
    if latency <= 100:
        return 'good'
    if latency <= 200:
        return 'average'
    return 'poor'


def format_latency(latency: Optional[float]) -> str:
    if latency is None:
        return placeholder
    return f'{latency:.2f} ms'


def format_bitrate(bitrate: Optional[float]) -> str:
    """
    Formats a throughput given in Mbps, switching to Gbps from 1000 Mbps upwards.
    """
    if bitrate is None:
        return placeholder
    if bitrate >= 1000:
        return f'{bitrate / 1000:.2f} Gbps'
    return f'{bitrate:.2f} Mbps'


def format_cell(value: Optional[CellValue], advanced: bool = False) -> Cell:
    if value is None:
        return Cell([placeholder])

    css_class = get_latency_class(value.avg_latency)

    if not advanced:
        return Cell([format_latency(value.avg_latency)], css_class)

    return Cell([
        f'Latency: {format_latency(value.avg_latency)}',
        f'TCP: {format_bitrate(value.tcp_bitrate)}',
        f'UDP: {format_bitrate(value.udp_bitrate)}',
    ], css_class)


def render_table(matrix: Matrix, advanced: bool = False) -> str:
    """
    Renders the matrix as an HTML table fragment, or a no-data notice if the matrix has no rows or no columns.

    :param matrix: the pivoted matrix
    :param advanced: show TCP/UDP throughput in addition to the latency
    :return: the HTML fragment
    """
    if matrix.is_empty():
        return render_notice('no-data', 'No data available for the selected time range.')

    rows = [(source, [format_cell(value, advanced) for value in values]) for source, values in matrix.rows()]

    return _env.get_template('table.html').render(targets=matrix.targets, rows=rows, advanced=advanced)


def render_notice(kind: str, message: str) -> str:
    if kind not in notice_kinds:
        raise ValueError(f'unknown notice kind {kind}')

    return _env.get_template('notice.html').render(kind=kind, message=message)


def render_page(content: str, time_ranges: List[str], time_range: str, advanced: bool = False,
                title: str = 'Network Metrics') -> str:
    return _env.get_template('page.html').render(
        content=content,
        time_ranges=time_ranges,
        time_range=time_range,
        advanced=advanced,
        title=title
    )
