"""RescueLog – RescueTime ingestion layer (interval report, minute resolution)"""

from __future__ import annotations

import logging
import math
import re
import time
from datetime import date, datetime
from typing import Any, List, Optional, Sequence, Tuple, Union

import requests
from pydantic import StrictStr, TypeAdapter, ValidationError, confloat

from RescueLog.config import Settings
from RescueLog.errors import (
    BadStatusError,
    FieldTypeError,
    RequestDeadlineExceeded,
    ResponseDecodeError,
    RowLengthError,
    TimeParseError,
)
from RescueLog.models import RawResponse, Record

# ────────────────────────────────────────────────────────────────────────────
# Logging
# ────────────────────────────────────────────────────────────────────────────
log = logging.getLogger(__name__)

# ────────────────────────────────────────────────────────────────────────────
# Request / Row Schema
# ────────────────────────────────────────────────────────────────────────────
REQUEST_PATH = "/anapi/data?pv=interval&rb={day}&re={day}&key={key}&format=json&rs=minute"
TIME_LAYOUT = "%Y-%m-%dT%H:%M:%S"
# Zero-padded layout with an optional fractional-seconds suffix
TIME_PATTERN = re.compile(r"([0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2})(?:\.([0-9]+))?")
ROW_LENGTH = 6
READ_CHUNK_SIZE = 8192

# date, time spent (s), number of people, activity, category, productivity
JsonNumber = confloat(strict=True, allow_inf_nan=False)
RowSchema = Tuple[StrictStr, JsonNumber, Any, StrictStr, StrictStr, JsonNumber]
ROW_ADAPTER: TypeAdapter = TypeAdapter(RowSchema)
ROW_FIELDS = ("time", "duration", "people", "activity", "category", "productivity")

# ────────────────────────────────────────────────────────────────────────────
# Helpers
# ────────────────────────────────────────────────────────────────────────────
def build_request_url(day: Union[str, date], key: str, base_url: str) -> str:
    """`day` is passed through unvalidated; the service decides what a bad value means."""
    if isinstance(day, date):
        day = day.isoformat()
    return base_url.rstrip("/") + REQUEST_PATH.format(day=day, key=key)

def _redact(url: str, key: str) -> str:
    return url.replace(f"key={key}", "key=***") if key else url

def _read_body(response: requests.Response, deadline: float) -> bytes:
    chunks = []
    for chunk in response.iter_content(chunk_size=READ_CHUNK_SIZE):
        if time.monotonic() > deadline:
            raise RequestDeadlineExceeded("request deadline exceeded while reading response body")
        chunks.append(chunk)
    return b"".join(chunks)

def _people(value: Any) -> Optional[int]:
    if isinstance(value, (int, float)) and not isinstance(value, bool) and math.isfinite(value):
        return int(value)
    return None

def parse_row(row: Optional[Sequence[Any]], index: int, records: Sequence[Record] = ()) -> Record:
    """
    Converts one positional row into a Record.

    Raises a RowError subclass naming the offending field. `records` are the
    rows already converted; they ride along on the error.
    """
    row = list(row or [])
    if len(row) != ROW_LENGTH:
        raise RowLengthError(len(row), index, records)

    try:
        when, spent, people, activity, category, productivity = ROW_ADAPTER.validate_python(tuple(row))
    except ValidationError as e:
        position = e.errors()[0]["loc"][0]
        if position == 0:
            raise TimeParseError(row[0], index, records) from e
        raise FieldTypeError(ROW_FIELDS[position], row[position], index, records) from e

    match = TIME_PATTERN.fullmatch(when)
    if match is None:
        raise TimeParseError(when, index, records)
    try:
        begin = datetime.strptime(match.group(1), TIME_LAYOUT)
    except ValueError as e:
        raise TimeParseError(when, index, records) from e
    if match.group(2):
        # datetime keeps microseconds only; extra digits are truncated
        begin = begin.replace(microsecond=int(match.group(2)[:6].ljust(6, "0")))

    score = int(productivity)
    if not -128 <= score <= 127:
        raise FieldTypeError("productivity", productivity, index, records)

    return Record(
        begin=begin,
        spent=int(spent),
        activity=activity,
        category=category,
        productivity=score,
        people=_people(people),
    )

def parse_response(body: Union[bytes, str]) -> List[Record]:
    try:
        envelope = RawResponse.model_validate_json(body)
    except ValidationError as e:
        raise ResponseDecodeError(f"decoding response failed: {e}") from e

    records: List[Record] = []
    for i, row in enumerate(envelope.rows or []):
        records.append(parse_row(row, i, records))
    return records

# ────────────────────────────────────────────────────────────────────────────
# Client
# ────────────────────────────────────────────────────────────────────────────
class RescueTimeClient:
    """Fetches interval reports. Reuses one HTTP session across calls."""

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or Settings()
        self._owns_session = session is None
        self.session = session or requests.Session()

    def close(self) -> None:
        if self._owns_session:
            self.session.close()

    def __enter__(self) -> "RescueTimeClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def get_records(self, day: Union[str, date], key: str) -> List[Record]:
        """
        Records of a certain day, day format "YYYY-MM-DD".

        Network and timeout failures propagate as `requests` exceptions.
        Everything else raises a RescueTimeError; row errors carry the
        records parsed before the failing row.
        """
        url = build_request_url(day, key, self.settings.api_base_url)
        deadline = time.monotonic() + self.settings.request_timeout_s
        log.debug(f"GET {_redact(url, key)}")

        response = self.session.get(
            url,
            timeout=(self.settings.connect_timeout_s, self.settings.request_timeout_s),
            stream=True,
        )
        try:
            if time.monotonic() > deadline:
                raise RequestDeadlineExceeded("request deadline exceeded waiting for response headers")
            body = _read_body(response, deadline)
        finally:
            response.close()

        if response.status_code != 200:
            text = body.decode("utf-8", errors="replace")
            log.debug(f"RescueTime returned {response.status_code} for {day}")
            raise BadStatusError(response.status_code, text)

        records = parse_response(body)
        log.debug(f"Parsed {len(records)} records for {day}")
        return records

def get_records(
    day: Union[str, date],
    key: str,
    *,
    settings: Optional[Settings] = None,
    session: Optional[requests.Session] = None,
) -> List[Record]:
    """One-shot fetch. A passed-in session is left open."""
    with RescueTimeClient(settings, session) as client:
        return client.get_records(day, key)
