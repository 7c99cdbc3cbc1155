import numpy as np
import pandas as pd
import pytest

from salescast.config import Config
from salescast.errors import InvalidInputError
from salescast.generate_data import generate_series, main


@pytest.mark.parametrize("count", [0, 1, 13, 48])
def test_length_matches_count(count):
    assert len(generate_series(count, np.random.default_rng(1))) == count


def test_non_positive_count_is_empty():
    assert generate_series(-3) == []


@pytest.mark.parametrize("bad", [2.5, "12", True, None])
def test_non_integer_count_rejected(bad):
    with pytest.raises(InvalidInputError):
        generate_series(bad)


def test_starts_at_anchor():
    months = [r.month for r in generate_series(3, np.random.default_rng(0))]
    assert months == ["2021-01", "2021-02", "2021-03"]


def test_months_are_consecutive_across_years():
    recs = generate_series(30, np.random.default_rng(0))
    periods = [pd.Period(r.month, freq="M") for r in recs]
    assert all((b - a).n == 1 for a, b in zip(periods, periods[1:]))
    assert recs[12].month == "2022-01"


def test_seeded_rng_is_reproducible():
    a = generate_series(24, np.random.default_rng(42))
    b = generate_series(24, np.random.default_rng(42))
    assert a == b
    assert all(r.sales > 0 for r in a)


def test_exact_values_without_jitter():
    recs = generate_series(11, np.random.default_rng(0), Config(jitter=0))
    assert recs[0].sales == 30453   # January trough
    assert recs[5].sales == 41089   # June peak
    assert recs[10].sales == 41239  # November holiday boost


def test_jitter_stays_within_ten_percent():
    base = generate_series(12, np.random.default_rng(0), Config(jitter=0))
    for seed in range(5):
        noisy = generate_series(12, np.random.default_rng(seed))
        for a, b in zip(base, noisy):
            assert 0.9 * a.sales - 2 <= b.sales <= 1.1 * a.sales + 2


def test_custom_anchor():
    recs = generate_series(2, np.random.default_rng(0), Config(history_anchor="2019-12"))
    assert [r.month for r in recs] == ["2019-12", "2020-01"]


def test_cli_writes_csv(tmp_path):
    out = tmp_path / "data" / "hist.csv"
    main(months=6, seed=3, out=str(out))
    df = pd.read_csv(out, dtype={"month": str})
    assert list(df.columns) == ["month", "sales"]
    assert len(df) == 6
    assert df["month"].iloc[0] == "2021-01"


@pytest.mark.parametrize("kwargs", [
    {"jitter": 3},
    {"history_amplitude": 1.5},
    {"base_sales": -1},
    {"history_growth": "fast"},
    {"base_sales": float("nan")},
])
def test_invalid_config_rejected(kwargs):
    with pytest.raises(InvalidInputError):
        Config(**kwargs)


def test_sales_never_negative_with_shrinking_trend():
    recs = generate_series(60, np.random.default_rng(0), Config(history_growth=-0.5))
    assert all(r.sales >= 0 for r in recs)
    assert recs[-1].sales == 0
