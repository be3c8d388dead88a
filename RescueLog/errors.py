"""
Errors raised while fetching and parsing RescueTime data.

Every error carries ``records``: the rows converted before the failure.
Callers must treat any raised error as incomplete data, not as "no data".
"""
from __future__ import annotations

from typing import Any, List, Optional, TYPE_CHECKING

import requests

if TYPE_CHECKING:
    from .models import Record


class RescueTimeError(Exception):
    def __init__(self, message: str, records: Optional[List["Record"]] = None):
        super().__init__(message)
        self.records: List["Record"] = list(records or [])


class BadStatusError(RescueTimeError):
    """Non-200 response. The raw body is kept for diagnosis."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"bad request, {body}")
        self.status_code = status_code
        self.body = body


class ResponseDecodeError(RescueTimeError):
    pass


class RowError(RescueTimeError):
    def __init__(self, message: str, row_index: int, records: Optional[List["Record"]] = None):
        super().__init__(f"row {row_index}: {message}", records)
        self.row_index = row_index


class RowLengthError(RowError):
    def __init__(self, length: int, row_index: int, records: Optional[List["Record"]] = None):
        super().__init__(f"record length wrong: expected 6 fields, got {length}", row_index, records)
        self.length = length


class FieldTypeError(RowError):
    def __init__(self, field: str, value: Any, row_index: int, records: Optional[List["Record"]] = None):
        super().__init__(
            f"parsing {field} wrong: {value!r} ({type(value).__name__})", row_index, records
        )
        self.field = field
        self.value = value


class TimeParseError(FieldTypeError):
    def __init__(self, value: Any, row_index: int, records: Optional[List["Record"]] = None):
        super().__init__("time", value, row_index, records)


class RequestDeadlineExceeded(requests.exceptions.Timeout):
    """The overall request deadline passed while the response was being read."""
