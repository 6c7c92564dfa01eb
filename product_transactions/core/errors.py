"""Error taxonomy for the Product Transactions API.

``ClientError`` maps to HTTP 400 and ``ServerError`` to HTTP 500; the handlers
that perform the mapping are registered on the application in ``main.py``.
"""


class ClientError(Exception):
    """Bad input supplied by the caller."""

    status_code = 400

    def __init__(self, message: str) -> None:
        """Initialize the error with a user-facing message."""
        super().__init__(message)
        self.message = message


class InvalidMonthError(ClientError):
    """Raised when a month name does not resolve to a calendar month."""

    def __init__(self, month: str) -> None:
        """Initialize the error for the rejected month name."""
        super().__init__("Invalid month")
        self.month = month


class ServerError(Exception):
    """A store, upstream or unexpected failure while serving a request."""

    status_code = 500

    def __init__(self, message: str, error: BaseException | str) -> None:
        """Initialize the error with a message and the underlying cause."""
        super().__init__(message)
        self.message = message
        self.error = str(error)


class SeedError(Exception):
    """Raised when seed data cannot be fetched or mapped to transactions."""
