import argparse
from pathlib import Path
from typing import List, Optional

import numpy as np

from .config import Config, HOLIDAY_MONTHS
from .records import SalesRecord, check_count, month_index, month_str, records_to_frame, round_half_up, to_month


def generate_series(count: int, rng: Optional[np.random.Generator] = None,
                    config: Optional[Config] = None) -> List[SalesRecord]:
    """Synthetic monthly history: seasonal sinusoid * linear trend * jitter * holiday boost."""
    cfg = config or Config()
    rng = rng if rng is not None else np.random.default_rng()
    anchor = to_month(cfg.history_anchor)
    recs = []
    for i in range(check_count(count)):
        p = anchor + i
        seas = 1 + cfg.history_amplitude * np.sin((month_index(p) - 2) * np.pi / 6)
        trend = 1 + cfg.history_growth * (i / 12)
        noise = 1 + (rng.random() - 0.5) * cfg.jitter
        boost = cfg.history_holiday_boost if p.month in HOLIDAY_MONTHS else 1
        sales = max(0, round_half_up(cfg.base_sales * seas * trend * noise * boost))
        recs.append(SalesRecord(month=month_str(p), sales=sales))
    return recs


def main(months: int = 36, seed: Optional[int] = None, out: str = 'data/sales_history.csv'):
    rng = np.random.default_rng(seed)
    df = records_to_frame(generate_series(months, rng))
    Path(out).parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(out, index=False)
    print(f"Saved: {out} rows={len(df)}")


if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('--months', type=int, default=Config.default_history_months)
    ap.add_argument('--seed', type=int, default=None)
    ap.add_argument('--out', default='data/sales_history.csv')
    args = ap.parse_args()
    main(args.months, args.seed, args.out)
