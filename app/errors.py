class GatewayError(Exception):
    """Base error for the portfolio gateway."""


class MissingCredentialsError(GatewayError):
    status_code = 400

    def __init__(self, message: str = "access_key and secret_key are required") -> None:
        super().__init__(message)
        self.message = message


class UpstreamAccountsError(GatewayError):
    """Account listing failed upstream; carries the upstream status and raw body."""

    def __init__(self, status_code: int, detail: str) -> None:
        super().__init__(f"upstream accounts call failed with status {status_code}")
        self.status_code = status_code
        self.detail = detail
