import logging
import os
from typing import Any, List

import requests

from netmatrix.errors import FetchError, ParseError
from netmatrix.fetch.data import MetricRecord, parse_record

logger = logging.getLogger(__name__)

resource = os.getenv('NETMATRIX_API_URL', 'https://long-snowflake-cf70.sd-api.workers.dev/metrics')

request_timeout = float(os.getenv('NETMATRIX_TIMEOUT', '10'))

time_ranges = ['5m', '15m', '1h', '6h', '24h', '7d']

default_time_range = '1h'


def fetch(time_range: str, url: str = None, session: requests.Session = None, timeout: float = None) -> List[MetricRecord]:
    """
    Fetches the aggregated metric records for the given time range.

    :param time_range: one of ``time_ranges``
    :param url: the metrics endpoint, defaults to ``resource``
    :param session: optional requests session to issue the call with
    :param timeout: request timeout in seconds
    :return: the parsed records in the order the API returned them
    :raises FetchError: on network failures or non-2xx responses
    :raises ParseError: if the body is not JSON or has an unexpected shape
    """
    data = _get_json(time_range, url, session, timeout)

    return [parse_record(item) for item in _unwrap(data)]


def check_time_range(time_range: str) -> str:
    if time_range not in time_ranges:
        raise ValueError(f'unknown time range {time_range!r}, expected one of {", ".join(time_ranges)}')
    return time_range


def _get_json(time_range: str, url: str = None, session: requests.Session = None, timeout: float = None) -> Any:
    check_time_range(time_range)

    url = url or resource
    http = session or requests
    timeout = timeout if timeout is not None else request_timeout

    logger.debug('fetching metrics from %s for time range %s', url, time_range)

    try:
        response = http.get(url, params={'timeRange': time_range}, timeout=timeout)
    except requests.RequestException as e:
        raise FetchError(f'Error fetching metrics: {e}') from e

    if not 200 <= response.status_code < 300:
        raise FetchError(f'Error fetching metrics: {response.reason}', response.status_code, response.reason)

    try:
        return response.json()
    except ValueError as e:
        raise ParseError(f'Error parsing metrics: {e}') from e


def _unwrap(data: Any) -> List[Any]:
    if isinstance(data, dict):
        data = data.get('results')

    if not isinstance(data, list):
        raise ParseError('Error parsing metrics: expected a list of records or an object with "results"')

    return data
