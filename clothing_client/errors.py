from __future__ import annotations


class ClientError(Exception):
    """Base class for failures raised by the client package."""


class ApiError(ClientError):
    def __init__(self, status_code: int, message: str, *, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload

    def __str__(self) -> str:
        return f"[{self.status_code}] {self.message}"


class NotLoggedInError(ClientError):
    pass


class StockLimitError(ClientError):
    def __init__(self, message: str, *, available: int):
        super().__init__(message)
        self.available = available
