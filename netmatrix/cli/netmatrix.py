import argparse
import logging
import os
from concurrent.futures.thread import ThreadPoolExecutor

from netmatrix.dashboard import Dashboard
from netmatrix.errors import MetricsError
from netmatrix.fetch.metrics import default_time_range, fetch, time_ranges
from netmatrix.graph import create_metrics_graph, save_graph
from netmatrix.pivot import create_matrix
from netmatrix.render import render_page

logger = logging.getLogger(__name__)


def render_to_file(dirname: str, time_range: str, advanced: bool = False) -> str:
    # each time range is an independent cycle, so each gets its own dashboard
    update = Dashboard().update(time_range, advanced)

    filename = os.path.join(dirname, f'metrics_{time_range}.html')
    with open(filename, 'w') as fd:
        fd.write(render_page(update.content, time_ranges, time_range, advanced))

    if update.failed:
        logger.warning('rendered error page for %s to %s', time_range, filename)
    else:
        logger.info('saved %s', filename)

    return filename


def render(args) -> int:
    os.makedirs(args.output, exist_ok=True)
    selected = args.time_range or time_ranges

    with ThreadPoolExecutor(4) as pool:
        futures = [pool.submit(render_to_file, args.output, time_range, args.advanced) for time_range in selected]

        for ftr in futures:
            ftr.result()

    return 0


def serve(args) -> int:
    from netmatrix.web import create_app

    app = create_app()
    app.run(host=args.host, port=args.port, threaded=True)
    return 0


def export(args) -> int:
    logger.info('fetching metrics for %s', args.time_range)
    try:
        matrix = create_matrix(fetch(args.time_range))
    except MetricsError as e:
        logger.error('could not fetch metrics: %s', e)
        return 1

    save_graph(create_metrics_graph(matrix), args.output)
    logger.info('saved %s', args.output)
    return 0


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog='netmatrix', description='Render network metrics between regions')
    subparsers = parser.add_subparsers(dest='command', required=True)

    p = subparsers.add_parser('render', help='render static HTML snapshots, one per time range')
    p.add_argument('--time-range', action='append', choices=time_ranges,
                   help='time range to render, can be repeated (default: all)')
    p.add_argument('--advanced', action='store_true', help='include TCP/UDP throughput')
    p.add_argument('--output', default='.', help='output directory')
    p.set_defaults(func=render)

    p = subparsers.add_parser('serve', help='serve the dashboard')
    p.add_argument('--host', default=os.getenv('NETMATRIX_HOST', '127.0.0.1'))
    p.add_argument('--port', type=int, default=int(os.getenv('NETMATRIX_PORT', '8080')))
    p.set_defaults(func=serve)

    p = subparsers.add_parser('export', help='export a matrix as GraphML')
    p.add_argument('--time-range', choices=time_ranges, default=default_time_range)
    p.add_argument('--output', required=True, help='GraphML file to write')
    p.set_defaults(func=export)

    return parser


def main(argv=None) -> int:
    logging.basicConfig(level=os.getenv('NETMATRIX_LOG_LEVEL', 'INFO'),
                        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')

    args = create_parser().parse_args(argv)
    return args.func(args)


if __name__ == '__main__':
    raise SystemExit(main())
