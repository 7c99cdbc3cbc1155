from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Dict, Iterable, List, Union

import numpy as np
import pandas as pd

from .errors import InvalidInputError

DateLike = Union[str, date, datetime, pd.Timestamp, pd.Period]


@dataclass(frozen=True)
class SalesRecord:
    month: str
    sales: int

    def to_dict(self) -> Dict[str, Any]:
        return {"month": self.month, "sales": self.sales}


@dataclass(frozen=True)
class ForecastRecord:
    month: str
    forecast: int
    upper_bound: int
    lower_bound: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "month": self.month,
            "forecast": self.forecast,
            "upperBound": self.upper_bound,
            "lowerBound": self.lower_bound,
            "type": "forecast",
        }


# ====== helpers ======
def round_half_up(x: float) -> int:
    """Round .5 away from the lower neighbour (Python's round() is banker's)."""
    return int(math.floor(x + 0.5))


def to_month(value: DateLike) -> pd.Period:
    try:
        return pd.Period(value, freq="M")
    except (ValueError, TypeError) as exc:
        raise InvalidInputError(f"Cannot interpret {value!r} as a month: {exc}") from exc


def month_str(p: pd.Period) -> str:
    return p.strftime("%Y-%m")


def month_index(p: pd.Period) -> int:
    """Zero-based month of year (January = 0)."""
    return p.month - 1


def check_count(count) -> int:
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        raise InvalidInputError(f"count must be an integer, got {type(count).__name__}")
    return max(0, int(count))


def records_to_frame(records: Iterable[Union[SalesRecord, ForecastRecord]]) -> pd.DataFrame:
    rows: List[Dict[str, Any]] = [r.to_dict() for r in records]
    return pd.DataFrame.from_records(rows)
