import io
from typing import Any, Dict, List

import pandas as pd

TEMPLATE_FILENAME = "sales_data_template.csv"
TEMPLATE_CSV = (
    "month,sales\n"
    "2020-01,45000\n"
    "2020-02,47500\n"
    "2020-03,52000\n"
)


def template_rows() -> List[Dict[str, Any]]:
    df = pd.read_csv(io.StringIO(TEMPLATE_CSV), dtype={"month": str})
    return [{"month": r.month, "sales": int(r.sales)} for r in df.itertuples(index=False)]
