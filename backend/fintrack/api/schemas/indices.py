from __future__ import annotations

import datetime as dt

from pydantic import BaseModel


class IndexSeriesOut(BaseModel):
    name: str
    history: dict[dt.date, str]


class IndexHistoryOut(BaseModel):
    indices: dict[str, IndexSeriesOut]
    updatedAt: dt.datetime | None = None
