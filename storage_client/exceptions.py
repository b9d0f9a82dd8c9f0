"""Custom exception classes for the storage client.

Network failures are not wrapped: httpx.TransportError subclasses reach the
caller unchanged, as do OSError subclasses raised while reading upload
sources or writing saved objects.
"""

import json
from typing import Union


class StorageClientError(Exception):
    """
    Base exception class for failures classified by the client.
    """
    pass


class ServerError(StorageClientError):
    """
    Raised when the server answers with an unexpected status code.

    The response body is kept verbatim in ``detail``.
    """

    def __init__(self, status_code: int, detail: Union[str, bytes]):
        self.status_code = status_code
        self.detail = detail
        if isinstance(detail, bytes):
            message = detail.decode('utf-8', errors='replace')
        else:
            message = detail
        super().__init__(message)


class ParseError(StorageClientError):
    """
    Raised when a successful response does not carry valid JSON.
    """

    def __init__(self, error: json.JSONDecodeError, body: str):
        self.error = error
        self.body = body
        super().__init__(f"Invalid JSON in response: {error}")
