import logging
import threading
from typing import Callable, List, NamedTuple

from netmatrix.errors import MetricsError
from netmatrix.fetch.data import MetricRecord
from netmatrix.fetch.metrics import fetch
from netmatrix.pivot import create_matrix
from netmatrix.render import render_notice, render_table

logger = logging.getLogger(__name__)

Fetcher = Callable[[str], List[MetricRecord]]


class Update(NamedTuple):
    sequence: int
    time_range: str
    advanced: bool
    content: str
    failed: bool = False
    committed: bool = False


class Dashboard:
    """
    Runs fetch -> pivot -> render cycles and owns the single rendered view. Every cycle draws a sequence number when
    it starts, and its result only replaces the view if no newer cycle has been started in the meantime, so a slow
    response can never overwrite a more recent render.
    """

    def __init__(self, fetcher: Fetcher = None) -> None:
        self.fetcher = fetcher or fetch
        self._lock = threading.Lock()
        self._sequence = 0
        self._view = render_notice('loading', 'Loading data...')
        self._view_sequence = 0

    @property
    def view(self) -> str:
        with self._lock:
            return self._view

    @property
    def view_sequence(self) -> int:
        with self._lock:
            return self._view_sequence

    def begin(self) -> int:
        with self._lock:
            self._sequence += 1
            seq = self._sequence
            self._view = render_notice('loading', 'Loading data...')
            self._view_sequence = seq
            return seq

    def run(self, sequence: int, time_range: str, advanced: bool = False) -> Update:
        try:
            records = self.fetcher(time_range)
            matrix = create_matrix(records)
            content = render_table(matrix, advanced)
        except (MetricsError, ValueError) as e:
            logger.error('update %d for time range %s failed: %s', sequence, time_range, e)
            return Update(sequence, time_range, advanced, render_notice('error', f'Failed to load data: {e}'), True)

        logger.debug('update %d rendered %d sources x %d targets', sequence, len(matrix.sources), len(matrix.targets))
        return Update(sequence, time_range, advanced, content)

    def commit(self, update: Update) -> Update:
        with self._lock:
            if update.sequence != self._sequence:
                logger.debug('discarding stale update %d, latest is %d', update.sequence, self._sequence)
                return update

            self._view = update.content
            self._view_sequence = update.sequence
            return update._replace(committed=True)

    def update(self, time_range: str, advanced: bool = False) -> Update:
        """
        Runs a complete update cycle.

        :param time_range: the time range token to fetch
        :param advanced: render throughput values in addition to latency
        :return: the cycle's result, with ``committed`` set if it became the current view
        """
        sequence = self.begin()
        return self.commit(self.run(sequence, time_range, advanced))
