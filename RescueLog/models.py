from __future__ import annotations
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

class Record(BaseModel):
    """
    Usage information for one five-minute slot of a RescueTime interval report.
    """
    model_config = ConfigDict(frozen=True)

    begin: datetime = Field(..., description="Slot start, local time without offset")
    spent: int = Field(..., description="Seconds spent in the slot")
    activity: str = Field(..., description="Application or site name, e.g. 'Coding'")
    category: str = Field(..., description="RescueTime category, e.g. 'Software Development'")
    productivity: int = Field(..., ge=-128, le=127, description="Productivity score, usually -2..2")
    people: Optional[int] = Field(None, description="'Number of People' column, when numeric")


class RawResponse(BaseModel):
    """Envelope of an /anapi/data JSON response. Rows are validated separately."""
    notes: Any = None
    row_headers: Any = None
    rows: Optional[List[Optional[List[Any]]]] = None
