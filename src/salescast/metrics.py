from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

import numpy as np

from .errors import DegenerateMetricError, InvalidInputError
from .records import ForecastRecord, SalesRecord


@dataclass
class AccuracyReport:
    mae: float
    rmse: float
    mape: Optional[float]
    r2: Optional[float]
    # one message per metric that is undefined for the input (mape / r2 then None)
    issues: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"mae": self.mae, "rmse": self.rmse, "mape": self.mape, "r2": self.r2}


def _as_array(x: Sequence[float], n: int, name: str) -> np.ndarray:
    try:
        arr = np.asarray(list(x)[:n], dtype=float)
    except (TypeError, ValueError) as exc:
        raise InvalidInputError(f"{name} must contain numbers only: {exc}") from exc
    if not np.isfinite(arr).all():
        raise InvalidInputError(f"{name} contains NaN or infinite values")
    return arr


def compute_accuracy(actual: Sequence[float], predicted: Sequence[float],
                     strict: bool = False) -> AccuracyReport:
    """
    MAE, RMSE, MAPE (%) and R2 over the first min(len(actual), len(predicted)) points.

    MAPE is None when an actual value is zero, R2 is None when the actuals have
    zero variance; the reason lands in `issues`. With strict=True both cases
    raise DegenerateMetricError instead.
    """
    n = min(len(actual), len(predicted))
    if n == 0:
        raise InvalidInputError("actual and predicted must both be non-empty")
    y = _as_array(actual, n, "actual")
    yhat = _as_array(predicted, n, "predicted")

    err = y - yhat
    mae = float(np.abs(err).mean())
    rmse = float(np.sqrt((err ** 2).mean()))
    issues = []

    zeros = np.flatnonzero(y == 0)
    if zeros.size:
        issues.append(f"MAPE undefined: actual value is zero at position {int(zeros[0]) + 1}")
        mape = None
    else:
        mape = float(np.abs(err / y).mean() * 100)

    # compare values, not the float sum of squares: equal 0.1s give ss_tot ~1e-30
    if np.all(y == y[0]):
        issues.append("R2 undefined: actual values have zero variance")
        r2 = None
    else:
        ss_tot = float(((y - y.mean()) ** 2).sum())
        r2 = float(1 - (err ** 2).sum() / ss_tot)

    if strict and issues:
        raise DegenerateMetricError("; ".join(issues))
    return AccuracyReport(mae=mae, rmse=rmse, mape=mape, r2=r2, issues=issues)


# ====== dashboard summary ======
@dataclass
class DashboardSummary:
    current_sales: float
    growth_pct: Optional[float]
    avg_sales: Optional[float]
    forecast_avg: Optional[float]
    forecast_growth_pct: Optional[float]
    total_forecast: float


def _pct_change(new: Optional[float], old: Optional[float]) -> Optional[float]:
    if new is None or old is None or old == 0:
        return None
    return (new - old) / old * 100


def summarize(history: Sequence[SalesRecord], forecast: Sequence[ForecastRecord]) -> DashboardSummary:
    """Headline numbers for the metrics panel."""
    sales = [r.sales for r in history]
    fc = [r.forecast for r in forecast]
    current = sales[-1] if sales else 0
    previous = sales[-2] if len(sales) >= 2 else None
    avg = float(np.mean(sales)) if sales else None
    fc_avg = float(np.mean(fc)) if fc else None
    return DashboardSummary(
        current_sales=current,
        growth_pct=_pct_change(current, previous),
        avg_sales=avg,
        forecast_avg=fc_avg,
        forecast_growth_pct=_pct_change(fc_avg, avg),
        total_forecast=float(sum(fc)),
    )
