"""
RescueLog package.

Fetches RescueTime interval reports for a single day and turns them into
typed five-minute usage records.
"""
import logging

# Applications using this package should configure their own logging.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .config import Settings
from .errors import (
    BadStatusError,
    FieldTypeError,
    RequestDeadlineExceeded,
    RescueTimeError,
    ResponseDecodeError,
    RowError,
    RowLengthError,
    TimeParseError,
)
from .ingestion.rescuetime import RescueTimeClient, get_records
from .models import Record

VERSION = "0.1.0"

__all__ = [
    "BadStatusError",
    "FieldTypeError",
    "Record",
    "RequestDeadlineExceeded",
    "RescueTimeClient",
    "RescueTimeError",
    "ResponseDecodeError",
    "RowError",
    "RowLengthError",
    "Settings",
    "TimeParseError",
    "get_records",
]
