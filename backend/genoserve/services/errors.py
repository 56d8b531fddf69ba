"""Data access errors — each carries the HTTP status it maps to."""

from __future__ import annotations


class DataAccessError(Exception):
    """Base class for failures serving or listing the data directory."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(DataAccessError):
    status_code = 404


class ForbiddenError(DataAccessError):
    status_code = 403


class BadRequestError(DataAccessError):
    status_code = 400


class RangeNotSatisfiable(DataAccessError):
    """Requested byte range lies outside the file."""

    status_code = 416

    def __init__(self, file_size: int):
        super().__init__("Requested range not satisfiable")
        self.file_size = file_size
