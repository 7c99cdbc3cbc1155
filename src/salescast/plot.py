import argparse
from pathlib import Path

import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt
import pandas as pd


def main(history_csv: str, forecast_csv: str, outdir: str = 'outputs') -> Path:
    hist = pd.read_csv(history_csv, dtype={'month': str})
    fc = pd.read_csv(forecast_csv, dtype={'month': str})
    hist['date'] = pd.PeriodIndex(hist['month'], freq='M').to_timestamp()
    fc['date'] = pd.PeriodIndex(fc['month'], freq='M').to_timestamp()

    Path(outdir).mkdir(parents=True, exist_ok=True)
    plt.figure(figsize=(9, 4.5))
    plt.plot(hist['date'], hist['sales'], label='History (sales)')
    plt.plot(fc['date'], fc['forecast'], linestyle='--', label='Forecast')
    if {'lowerBound', 'upperBound'}.issubset(fc.columns):
        plt.fill_between(fc['date'].values, fc['lowerBound'].values, fc['upperBound'].values,
                         alpha=0.2, label='Confidence band')
    plt.title('Sales history and forecast')
    plt.xlabel('Month'); plt.ylabel('Sales'); plt.legend(); plt.tight_layout()
    out_path = Path(outdir) / 'forecast.png'
    plt.savefig(out_path, dpi=160); plt.close()
    print(f'Saved plot → {out_path}')
    return out_path


if __name__ == '__main__':
    ap = argparse.ArgumentParser()
    ap.add_argument('--history', required=True)
    ap.add_argument('--forecast', required=True)
    ap.add_argument('--outdir', default='outputs')
    args = ap.parse_args()
    main(args.history, args.forecast, args.outdir)
