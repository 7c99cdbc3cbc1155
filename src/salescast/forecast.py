from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, List, Optional

import numpy as np
import pandas as pd

from .config import Config, HOLIDAY_MONTHS, ModelParams
from .records import (DateLike, ForecastRecord, check_count, month_index, month_str,
                      records_to_frame, round_half_up, to_month)


def _start_month(reference_date: Optional[DateLike]) -> pd.Period:
    ref = pd.Timestamp.now() if reference_date is None else reference_date
    return to_month(ref) + 1


def generate_forecast(count: int, params: Optional[Any] = None,
                      reference_date: Optional[DateLike] = None) -> List[ForecastRecord]:
    """
    Forecast `count` months starting the month after `reference_date` (now if omitted).
    Deterministic: same count, params and reference month give the same records.
    The band half-width grows linearly with the horizon: interval_base + interval_step*i.
    """
    mp = ModelParams.from_any(params)
    start = _start_month(reference_date)
    out = []
    for i in range(check_count(count)):
        p = start + i
        trend = 1 + mp.growth * (i / 12)
        seas = 1 + mp.seasonal_amplitude * np.sin((month_index(p) - 2) * np.pi / 6)
        boost = mp.holiday_boost if p.month in HOLIDAY_MONTHS else 1
        value = max(0, round_half_up(mp.base_forecast * trend * seas * boost))
        margin = value * (mp.interval_base + mp.interval_step * i)
        out.append(ForecastRecord(
            month=month_str(p),
            forecast=value,
            upper_bound=round_half_up(value + margin),
            lower_bound=round_half_up(value - margin),
        ))
    return out


def main(months: int, start: Optional[str], outdir: str = 'outputs', model: str = 'ARIMA'):
    # --start is the reference month; the forecast begins the month after it
    recs = generate_forecast(months, ModelParams(model=model), reference_date=start)
    out = Path(outdir) / 'forecast.csv'
    out.parent.mkdir(parents=True, exist_ok=True)
    records_to_frame(recs).to_csv(out, index=False)
    print(f"Saved: {out} rows={len(recs)}")
    return out


if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('--months', type=int, default=Config.default_horizon)
    ap.add_argument('--start', default=None, help='Reference month YYYY-MM (default: current month)')
    ap.add_argument('--outdir', default='outputs')
    ap.add_argument('--model', choices=['ARIMA', 'SARIMA', 'AUTO_ARIMA'], default='ARIMA')
    args = ap.parse_args()
    main(args.months, args.start, args.outdir, args.model)
