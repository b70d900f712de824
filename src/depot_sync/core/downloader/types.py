"""Types for URL downloads."""


class DownloadError(Exception):
    """Fetching a URL did not produce a 200 response.

    ``status`` and ``reason`` come from the HTTP response when there was one,
    otherwise both are None (connection errors, timeouts).
    """

    def __init__(self, message: str, status: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.reason = reason

    def __str__(self) -> str:
        if self.status is None:
            return self.message
        reason = f" {self.reason}" if self.reason else ""
        return f"{self.message} (HTTP {self.status}{reason})"
