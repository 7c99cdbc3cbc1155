from __future__ import annotations

import argparse
import math
import numbers
import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional, Sequence, Union

import pandas as pd

from .records import SalesRecord, round_half_up

REQUIRED_COLUMNS = ("month", "sales")
MONTH_RE = re.compile(r"^\d{4}-\d{2}$")


@dataclass
class ValidationStats:
    records: int
    date_range: str
    avg_sales: int

    def to_dict(self) -> Dict[str, Any]:
        return {"records": self.records, "dateRange": self.date_range, "avgSales": self.avg_sales}


@dataclass
class ValidationResult:
    valid: bool
    errors: List[str] = field(default_factory=list)
    stats: Optional[ValidationStats] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"valid": self.valid, "errors": list(self.errors)}
        if self.stats is not None:
            out["stats"] = self.stats.to_dict()
        return out


# ====== per-row classification ======
@dataclass(frozen=True)
class ValidRow:
    index: int
    record: SalesRecord


@dataclass(frozen=True)
class InvalidRow:
    index: int
    reasons: List[str]


RowCheck = Union[ValidRow, InvalidRow]


def _field(row: Any, name: str) -> Any:
    return row.get(name) if isinstance(row, Mapping) else None


def _is_sales(v: Any) -> bool:
    if isinstance(v, bool) or not isinstance(v, numbers.Real):
        return False
    try:
        f = float(v)
    except OverflowError:
        # int too large for a float
        return False
    return math.isfinite(f) and f >= 0


def _is_month(v: Any) -> bool:
    return isinstance(v, str) and MONTH_RE.match(v) is not None


def classify_row(index: int, row: Any) -> RowCheck:
    """`index` is 1-based, as used in the error messages."""
    sales, month = _field(row, "sales"), _field(row, "month")
    reasons = []
    if not _is_sales(sales):
        reasons.append(f"Invalid sales value at row {index}")
    if not _is_month(month):
        reasons.append(f"Invalid month format at row {index} (expected YYYY-MM)")
    if reasons:
        return InvalidRow(index, reasons)
    return ValidRow(index, SalesRecord(month=month, sales=sales))


def _as_rows(rows: Any) -> Optional[Sequence[Any]]:
    if isinstance(rows, pd.DataFrame):
        return rows.to_dict("records")
    if isinstance(rows, (list, tuple)):
        return rows
    return None


def validate(rows: Any) -> ValidationResult:
    """
    Check rows against the month/sales schema. Never raises: every problem is
    reported in `errors`, in row order. Stats are only computed for valid input.
    """
    data = _as_rows(rows)
    if not data:
        return ValidationResult(valid=False, errors=["Data must be a non-empty array"])

    errors = []
    first = data[0]
    for col in REQUIRED_COLUMNS:
        if not isinstance(first, Mapping) or col not in first:
            errors.append(f"Missing required column: {col}")

    checks = [classify_row(i, row) for i, row in enumerate(data, start=1)]
    for c in checks:
        if isinstance(c, InvalidRow):
            errors.extend(c.reasons)

    if errors:
        return ValidationResult(valid=False, errors=errors)

    recs = [c.record for c in checks]
    n = len(recs)
    avg = sum(r.sales for r in recs) / n
    if not math.isfinite(avg):
        # float sum overflowed; every value is finite so the scaled sum is too
        avg = math.fsum(r.sales / n for r in recs)
    stats = ValidationStats(
        records=len(recs),
        date_range=f"{recs[0].month} - {recs[-1].month}",
        avg_sales=round_half_up(avg),
    )
    return ValidationResult(valid=True, errors=[], stats=stats)


def main(input_path: str) -> ValidationResult:
    df = pd.read_csv(input_path, dtype={"month": str})
    res = validate(df)
    if res.valid:
        s = res.stats
        print(f"OK: records={s.records} range={s.date_range} avg_sales={s.avg_sales}")
    else:
        for e in res.errors:
            print(f"ERROR: {e}")
    return res


if __name__ == "__main__":
    ap = argparse.ArgumentParser()
    ap.add_argument("--input", required=True, help="CSV: month (YYYY-MM), sales")
    args = ap.parse_args()
    raise SystemExit(0 if main(args.input).valid else 1)
