class MetricsError(Exception):
    pass


class FetchError(MetricsError):
    """
    Raised when the metrics endpoint cannot be reached or answers with a non-2xx status.
    """

    def __init__(self, message: str, status: int = None, reason: str = None):
        super().__init__(message)
        self.status = status
        self.reason = reason


class ParseError(MetricsError):
    """
    Raised when the response body is not valid JSON or does not contain metric records.
    """
    pass
