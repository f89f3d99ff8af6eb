from netmatrix.fetch import metrics
from netmatrix.fetch.data import MetricRecord
from netmatrix.fetch.metrics import fetch, time_ranges, default_time_range

name = 'fetch'

__all__ = [
    'MetricRecord',
    'metrics',
    'fetch',
    'time_ranges',
    'default_time_range',
]
