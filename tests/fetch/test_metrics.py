import os
import unittest
from unittest.mock import Mock

import requests

import netmatrix.fetch.metrics as metrics
from netmatrix.errors import FetchError, ParseError
from netmatrix.fetch.data import MetricRecord

records = [
    {'source_region': 'eu-west-1', 'target_region': 'us-east-1', 'avg_latency': 75.1, 'tcp_bitrate': 940,
     'udp_bitrate': 1020},
    {'source_region': 'us-east-1', 'target_region': 'eu-west-1', 'avg_latency': 74.8, 'tcp_bitrate': None,
     'udp_bitrate': None},
]


def create_session(status_code=200, reason='OK', body=None, json_error=None) -> Mock:
    response = Mock()
    response.status_code = status_code
    response.reason = reason
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body

    session = Mock()
    session.get.return_value = response
    return session


class TestFetchMetrics(unittest.TestCase):

    def test_fetch_bare_array(self):
        session = create_session(body=records)

        result = metrics.fetch('1h', url='http://localhost/metrics', session=session, timeout=1)

        self.assertEqual(2, len(result))
        self.assertEqual(MetricRecord('eu-west-1', 'us-east-1', 75.1, 940.0, 1020.0), result[0])
        session.get.assert_called_once_with('http://localhost/metrics', params={'timeRange': '1h'}, timeout=1)

    def test_fetch_results_object(self):
        session = create_session(body={'results': records})

        result = metrics.fetch('24h', session=session)

        self.assertEqual(['eu-west-1', 'us-east-1'], [m.source_region for m in result])

    def test_fetch_uses_default_resource(self):
        session = create_session(body=[])

        metrics.fetch('5m', session=session)

        args, kwargs = session.get.call_args
        self.assertEqual(metrics.resource, args[0])
        self.assertEqual({'timeRange': '5m'}, kwargs['params'])
        self.assertEqual(metrics.request_timeout, kwargs['timeout'])

    def test_fetch_error_status(self):
        session = create_session(status_code=500, reason='Internal Server Error')

        with self.assertRaises(FetchError) as ctx:
            metrics.fetch('1h', session=session)

        self.assertEqual(500, ctx.exception.status)
        self.assertIn('Internal Server Error', str(ctx.exception))

    def test_fetch_redirect_status(self):
        for status_code, reason in [(300, 'Multiple Choices'), (304, 'Not Modified')]:
            response = requests.Response()
            response.status_code = status_code
            response.reason = reason
            response._content = b'[]'

            session = Mock()
            session.get.return_value = response

            with self.assertRaises(FetchError) as ctx:
                metrics.fetch('1h', session=session)

            self.assertEqual(status_code, ctx.exception.status)
            self.assertIn(reason, str(ctx.exception))

    def test_fetch_network_error(self):
        session = Mock()
        session.get.side_effect = requests.ConnectionError('connection refused')

        with self.assertRaises(FetchError) as ctx:
            metrics.fetch('1h', session=session)

        self.assertIsNone(ctx.exception.status)
        self.assertIn('connection refused', str(ctx.exception))

    def test_fetch_invalid_json(self):
        session = create_session(json_error=ValueError('Expecting value'))

        with self.assertRaises(ParseError):
            metrics.fetch('1h', session=session)

    def test_fetch_unexpected_shape(self):
        with self.assertRaises(ParseError):
            metrics.fetch('1h', session=create_session(body={'data': records}))

        with self.assertRaises(ParseError):
            metrics.fetch('1h', session=create_session(body='nope'))

    def test_fetch_unknown_time_range(self):
        session = create_session(body=[])

        with self.assertRaises(ValueError):
            metrics.fetch('2h', session=session)

        session.get.assert_not_called()


@unittest.skipUnless(os.getenv('NETMATRIX_LIVE_TESTS'), 'metrics api tests need network access')
class TestFetchMetricsLive(unittest.TestCase):

    def test_fetch(self):
        result = metrics.fetch('24h')

        self.assertTrue(len(result) > 0, 'Metrics API should return records')
        self.assertIsInstance(result[0].source_region, str)
