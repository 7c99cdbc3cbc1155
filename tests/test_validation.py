import numpy as np
import pandas as pd
import pytest

from salescast.validation import InvalidRow, ValidRow, classify_row, main, validate


@pytest.mark.parametrize("rows", [[], (), None, {"month": "2021-01", "sales": 1}, "month,sales", pd.DataFrame()])
def test_not_a_non_empty_array(rows):
    res = validate(rows)
    assert res.valid is False
    assert res.errors == ["Data must be a non-empty array"]
    assert res.stats is None


def test_format_and_negative_sales_errors():
    res = validate([{"month": "2021-01", "sales": 100}, {"month": "bad", "sales": -5}])
    assert res.valid is False
    assert res.errors == [
        "Invalid sales value at row 2",
        "Invalid month format at row 2 (expected YYYY-MM)",
    ]
    assert res.stats is None


def test_missing_columns_probe_first_row():
    res = validate([{"date": "2021-01", "qty": 5}])
    assert res.errors[:2] == ["Missing required column: month", "Missing required column: sales"]
    assert "Invalid sales value at row 1" in res.errors
    assert "Invalid month format at row 1 (expected YYYY-MM)" in res.errors


def test_accumulates_over_all_rows():
    rows = [
        {"month": "2021-01", "sales": "100"},
        {"month": "2021-2", "sales": 10},
        {"month": "2021-03", "sales": True},
        {"month": 202104, "sales": float("nan")},
    ]
    res = validate(rows)
    assert res.errors == [
        "Invalid sales value at row 1",
        "Invalid month format at row 2 (expected YYYY-MM)",
        "Invalid sales value at row 3",
        "Invalid sales value at row 4",
        "Invalid month format at row 4 (expected YYYY-MM)",
    ]


def test_valid_rows_produce_stats():
    res = validate([{"month": "2021-01", "sales": 1}, {"month": "2021-02", "sales": 2.0},
                    {"month": "2021-03", "sales": np.int64(3)}, {"month": "2021-04", "sales": 0}])
    assert res.valid is True
    assert res.errors == []
    assert res.stats.records == 4
    assert res.stats.date_range == "2021-01 - 2021-04"
    assert res.stats.avg_sales == 2   # 1.5 rounds half up
    assert res.to_dict()["stats"] == {"records": 4, "dateRange": "2021-01 - 2021-04", "avgSales": 2}


def test_dataframe_input():
    df = pd.DataFrame({"month": ["2022-01", "2022-02"], "sales": [10, 20]})
    res = validate(df)
    assert res.valid and res.stats.avg_sales == 15


def test_non_mapping_rows():
    res = validate([["2021-01", 5]])
    assert not res.valid
    assert res.errors[0] == "Missing required column: month"


def test_classify_row():
    ok = classify_row(1, {"month": "2021-01", "sales": 7})
    assert isinstance(ok, ValidRow) and ok.record.sales == 7 and ok.record.month == "2021-01"
    bad = classify_row(3, {"month": "2021-01"})
    assert isinstance(bad, InvalidRow)
    assert bad.reasons == ["Invalid sales value at row 3"]


def test_cli(tmp_path, capsys):
    good = tmp_path / "good.csv"
    good.write_text("month,sales\n2021-01,100\n2021-02,300\n")
    assert main(str(good)).valid
    assert "records=2" in capsys.readouterr().out

    bad = tmp_path / "bad.csv"
    bad.write_text("month,sales\n2021-01,abc\n")
    res = main(str(bad))
    assert res.errors == ["Invalid sales value at row 1"]


def test_int_beyond_float_range_is_invalid_sales():
    res = validate([{"month": "2021-01", "sales": 10 ** 400}])
    assert res.valid is False
    assert res.errors == ["Invalid sales value at row 1"]


def test_huge_float_sales_average():
    res = validate([{"month": "2021-01", "sales": 1.7e308}, {"month": "2021-02", "sales": 1.7e308}])
    assert res.valid
    assert res.stats.avg_sales == pytest.approx(1.7e308)
