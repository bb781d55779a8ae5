class AIGatewayError(Exception):
    """Upstream AI failure that must reach the caller with a specific HTTP status."""

    def __init__(self, status_code: int, message: str) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message


class ScrapeError(Exception):
    """Page could not be fetched or yielded no readable text."""

    def __init__(self, message: str, status_code: int = 502) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
