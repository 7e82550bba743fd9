"""Custom exceptions for job board adapters."""


class AdapterError(Exception):
    """Base exception for all adapter errors.

    Raised inside an adapter while reaching or parsing its board.
    BaseAdapter.fetch() converts these into an empty result so one failing
    board never aborts a run.
    """

    pass


class AdapterHTTPError(AdapterError):
    """HTTP request failed (4xx/5xx status or connection error)."""

    def __init__(self, message: str, status_code: int, url: str) -> None:
        """
        Args:
            message: Human-readable error message
            status_code: HTTP status code (0 for connection errors)
            url: URL that failed
        """
        super().__init__(message)
        self.status_code = status_code
        self.url = url


class AdapterTimeoutError(AdapterError):
    """Request did not complete within the configured timeout."""

    def __init__(self, message: str, url: str) -> None:
        super().__init__(message)
        self.url = url


class AdapterResponseError(AdapterError):
    """Response body could not be parsed into postings."""

    pass


class AdapterConfigurationError(AdapterError):
    """Invalid adapter configuration (unknown source type, bad timeout)."""

    pass
