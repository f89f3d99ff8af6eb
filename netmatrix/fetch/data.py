import math
from typing import Any, Dict, NamedTuple, Optional

from netmatrix.errors import ParseError

metric_fields = ('avg_latency', 'tcp_bitrate', 'udp_bitrate')


class MetricRecord(NamedTuple):
    source_region: str
    target_region: str

    avg_latency: Optional[float] = None
    tcp_bitrate: Optional[float] = None
    udp_bitrate: Optional[float] = None


def parse_record(data: Dict[str, Any]) -> MetricRecord:
    if not isinstance(data, dict):
        raise ParseError(f'expected a metric object, got {type(data).__name__}')

    source = data.get('source_region')
    target = data.get('target_region')

    if not isinstance(source, str) or not isinstance(target, str):
        raise ParseError(f'metric record without source/target region: {data}')

    values = {field: _parse_value(data, field) for field in metric_fields}

    return MetricRecord(source, target, **values)


def _parse_value(data: Dict[str, Any], field: str) -> Optional[float]:
    # 0 is a valid reading, only a missing key or null means "no value"
    value = data.get(field)
    if value is None:
        return None

    if isinstance(value, bool):
        raise ParseError(f'invalid value for {field}: {value!r}')

    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ParseError(f'invalid value for {field}: {value!r}')

    if not math.isfinite(number):
        raise ParseError(f'invalid value for {field}: {value!r}')

    return number
