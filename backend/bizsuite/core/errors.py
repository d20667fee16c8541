from typing import Optional


class BusinessDataError(Exception):
    """
    Raised when a call to the upstream business API fails.
    status_code is None for transport failures (connection refused, timeout).
    """

    def __init__(self, message: str, *, endpoint: str, status_code: Optional[int] = None, detail: Optional[str] = None):
        super().__init__(message)
        self.endpoint = endpoint
        self.status_code = status_code
        self.detail = detail

    def __str__(self) -> str:
        base = super().__str__()
        if self.status_code is not None:
            return f"{base} (HTTP {self.status_code} on {self.endpoint})"
        return f"{base} ({self.endpoint})"
