import logging

from flask import Flask, Response, jsonify, request

from netmatrix.dashboard import Dashboard
from netmatrix.fetch.metrics import check_time_range, default_time_range, time_ranges
from netmatrix.render import render_notice, render_page

logger = logging.getLogger(__name__)

truthy = {'1', 'true', 'on'}


def create_app(dashboard: Dashboard = None) -> Flask:
    app = Flask(__name__)
    dashboard = dashboard or Dashboard()

    @app.route('/')
    def index():
        time_range, advanced = _parse_args()
        try:
            check_time_range(time_range)
        except ValueError as e:
            content = render_notice('error', str(e))
            return render_page(content, time_ranges, default_time_range, advanced), 400

        update = dashboard.update(time_range, advanced)
        content = update.content if update.committed else dashboard.view
        return render_page(content, time_ranges, time_range, advanced)

    @app.route('/table')
    def table():
        time_range, advanced = _parse_args()
        try:
            check_time_range(time_range)
        except ValueError as e:
            return render_notice('error', str(e)), 400

        update = dashboard.update(time_range, advanced)

        if not update.committed:
            logger.info('update %d for %s was superseded by a newer cycle', update.sequence, time_range)
            return _fragment('', update.sequence, 409)

        return _fragment(update.content, update.sequence, 502 if update.failed else 200)

    @app.route('/view')
    def view():
        return _fragment(dashboard.view, dashboard.view_sequence)

    @app.route('/health')
    def health():
        return jsonify({'status': 'ok'})

    return app


def _parse_args():
    time_range = request.args.get('timeRange', default_time_range)
    advanced = request.args.get('advanced', '').lower() in truthy
    return time_range, advanced


def _fragment(content: str, sequence: int, status: int = 200) -> Response:
    response = Response(content, status=status, mimetype='text/html')
    response.headers['X-Update-Sequence'] = str(sequence)
    return response
