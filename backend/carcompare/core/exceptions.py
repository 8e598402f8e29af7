from __future__ import annotations

from fastapi import status


class CompareError(Exception):
    """Base exception for failures surfaced by the compare API."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MissingParameterError(CompareError):
    """Raised when a required query parameter is absent."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, parameter: str):
        super().__init__(f'Parameter "{parameter}" fehlt.')
        self.parameter = parameter


class MalformedInputError(CompareError):
    """Raised when the listing URL or an override cannot be interpreted."""
