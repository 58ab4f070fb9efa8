"""Exceptions raised by the BigQuery client."""

from typing import Any


class BigqueryError(Exception):
    """Base class for all client errors."""


class MissingParameterError(BigqueryError, ValueError):
    """One or more required parameters were not supplied."""

    def __init__(self, missing: list[str]):
        self.missing = list(missing)
        super().__init__("Missing required parameters: " + ", ".join(self.missing))


class UnknownMethodError(BigqueryError, KeyError):
    """No method is registered under the requested resource/action."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(name)

    def __str__(self) -> str:
        return f"Unknown method: {self.name}"


class TransportError(BigqueryError):
    """The HTTP request could not be completed."""


class ApiError(BigqueryError):
    """The server answered with an error status."""

    def __init__(
        self,
        status_code: int,
        message: str,
        errors: list[dict] | None = None,
        body: Any = None,
    ):
        self.status_code = status_code
        self.message = message
        self.errors = errors or []
        self.body = body
        super().__init__(f"{status_code}: {message}")
