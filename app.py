# app.py
import io
import traceback
from typing import List, Optional

import numpy as np
import pandas as pd
import plotly.graph_objects as go
import streamlit as st

from salescast.backtest import holdout_accuracy
from salescast.config import MODELS, Config, ModelParams
from salescast.errors import SalescastError
from salescast.forecast import generate_forecast
from salescast.generate_data import generate_series
from salescast.metrics import summarize
from salescast.records import ForecastRecord, SalesRecord, records_to_frame
from salescast.template import TEMPLATE_CSV, TEMPLATE_FILENAME
from salescast.validation import validate

CFG = Config()

st.set_page_config(page_title="Sales Forecasting Dashboard", page_icon="📈", layout="wide")

# ====== session_state ======
ss = st.session_state
def _init(k, v):
    if k not in ss: ss[k] = v

_init("history", None)            # List[SalesRecord]
_init("source", "Sample Dataset")
_init("validation", None)
_init("upload_id", None)

err_box = st.empty()

# ====== Helpers ======
def load_sample(months: int, seed: Optional[int]) -> List[SalesRecord]:
    return generate_series(months, np.random.default_rng(seed))

def read_upload(uploaded) -> pd.DataFrame:
    return pd.read_csv(io.BytesIO(uploaded.getvalue()), dtype={CFG.month_col: str})

def _fmt(x: Optional[float], suffix: str = "", digits: int = 0) -> str:
    return "—" if x is None else f"{x:,.{digits}f}{suffix}"

# ====== Plotters ======
def plot_forecast_interactive(history: List[SalesRecord], forecast: List[ForecastRecord],
                              show_band: bool = True, show_points: bool = True):
    h = records_to_frame(history)
    f = records_to_frame(forecast)
    if h.empty and f.empty:
        st.info("No data to plot.")
        return

    fig = go.Figure()
    if len(h):
        h["date"] = pd.PeriodIndex(h["month"], freq="M").to_timestamp()
        fig.add_scatter(x=h["date"], y=h["sales"],
                        mode="lines+markers" if show_points else "lines",
                        name="History (sales)",
                        hovertemplate="Month: %{x|%Y-%m}<br>Sales: %{y:,}<extra></extra>")
    if len(f):
        f["date"] = pd.PeriodIndex(f["month"], freq="M").to_timestamp()
        fig.add_scatter(x=f["date"], y=f["forecast"], mode="lines",
                        name="Forecast", line=dict(dash="dash"),
                        hovertemplate="Month: %{x|%Y-%m}<br>Forecast: %{y:,}<extra></extra>")
        if show_band:
            fig.add_scatter(x=f["date"], y=f["upperBound"], mode="lines", line=dict(width=0),
                            name="Upper bound", hoverinfo="skip", showlegend=False)
            fig.add_scatter(x=f["date"], y=f["lowerBound"], mode="lines", line=dict(width=0),
                            fill="tonexty", name="Confidence band",
                            hovertemplate="Month: %{x|%Y-%m}<br>Lower: %{y:,}<extra></extra>")

    fig.update_layout(
        margin=dict(l=10, r=10, t=50, b=20),
        xaxis=dict(title="Month",
                   rangeslider=dict(visible=True),
                   rangeselector=dict(buttons=list([
                        dict(count=6, label="6M", step="month", stepmode="backward"),
                        dict(count=1, label="1Y", step="year", stepmode="backward"),
                        dict(step="all", label="All")
                   ]))),
        yaxis=dict(title="Sales"),
        legend=dict(orientation="h", yanchor="bottom", y=1.02, xanchor="right", x=1)
    )
    st.plotly_chart(fig, use_container_width=True, config=dict(displaylogo=False))

# ====== Sidebar ======
st.sidebar.title("⚙️ Parameters")

history_months = st.sidebar.slider("History length (months)", 12, 60, CFG.default_history_months)
seed_val = st.sidebar.number_input("Random seed (0 = unseeded)", min_value=0, max_value=10_000, value=0)
seed = int(seed_val) if seed_val > 0 else None

st.sidebar.markdown("---")
model = st.sidebar.selectbox("Forecasting model", list(MODELS), index=0)
horizon = st.sidebar.slider("Forecast period (months)", 1, 24, CFG.default_horizon)

st.sidebar.markdown("**ARIMA (p, d, q)**")
c1, c2, c3 = st.sidebar.columns(3)
p = c1.number_input("p", 0, 5, 2)
d = c2.number_input("d", 0, 2, 1)
q = c3.number_input("q", 0, 5, 2)

if model != "ARIMA":
    st.sidebar.markdown("**Seasonal (P, D, Q, s)**")
    s1, s2, s3, s4 = st.sidebar.columns(4)
    P = s1.number_input("P", 0, 2, 1)
    D = s2.number_input("D", 0, 1, 1)
    Q = s3.number_input("Q", 0, 2, 1)
    s = s4.number_input("s", 1, 24, 12)
else:
    P, D, Q, s = 1, 1, 1, 12

st.sidebar.markdown("---")
if st.sidebar.button("Use sample data") or ss.history is None:
    ss.history = load_sample(history_months, seed)
    ss.source = "Sample Dataset"
    ss.validation = validate([r.to_dict() for r in ss.history])

st.sidebar.download_button("⬇️ Download template", TEMPLATE_CSV,
                           file_name=TEMPLATE_FILENAME, mime="text/csv")

# ====== Header ======
st.markdown("<h1 style='margin:0'>📈 Sales Forecasting Dashboard</h1>", unsafe_allow_html=True)
st.caption(f"{model} model · {horizon} month forecast · data: {ss.source}")

try:
    params = ModelParams(model=model, p=int(p), d=int(d), q=int(q),
                         P=int(P), D=int(D), Q=int(Q), s=int(s))
    forecast = generate_forecast(horizon, params)
except SalescastError as e:
    err_box.error(f"Invalid model parameters: {e}")
    st.stop()

history: List[SalesRecord] = ss.history

tab_fc, tab_metrics, tab_data = st.tabs(["Forecast", "Metrics", "Data"])

# ====== Forecast ======
with tab_fc:
    cb1, cb2 = st.columns(2)
    show_band = cb1.checkbox("Show confidence band", value=True)
    show_points = cb2.checkbox("Show points", value=True)
    plot_forecast_interactive(history, forecast, show_band=show_band, show_points=show_points)
    st.dataframe(records_to_frame(forecast), use_container_width=True, hide_index=True)

# ====== Metrics ======
with tab_metrics:
    summ = summarize(history, forecast)
    m1, m2, m3, m4 = st.columns(4)
    m1.metric("Current sales", _fmt(summ.current_sales), _fmt(summ.growth_pct, "%", 1))
    m2.metric("Average sales", _fmt(summ.avg_sales))
    m3.metric("Forecast average", _fmt(summ.forecast_avg), _fmt(summ.forecast_growth_pct, "%", 1))
    m4.metric("Total forecast", _fmt(summ.total_forecast))

    st.subheader("Holdout accuracy (seasonal naive, last 12 months)")
    try:
        rep = holdout_accuracy(history, horizon=12, season=params.s)
        a1, a2, a3, a4 = st.columns(4)
        a1.metric("MAE", _fmt(rep.mae))
        a2.metric("RMSE", _fmt(rep.rmse))
        a3.metric("MAPE", _fmt(rep.mape, "%", 2))
        a4.metric("R²", _fmt(rep.r2, digits=3))
        for issue in rep.issues:
            st.warning(issue)
    except SalescastError as e:
        st.info(str(e))

# ====== Data ======
with tab_data:
    uploaded_csv = st.file_uploader("Upload sales CSV", type=["csv"],
                                    help="Columns: month (YYYY-MM), sales (number ≥ 0).")
    if uploaded_csv is not None and uploaded_csv.file_id != ss.upload_id:
        ss.upload_id = uploaded_csv.file_id
        try:
            df_up = read_upload(uploaded_csv)
            res = validate(df_up)
            ss.validation = res
            if res.valid:
                ss.history = [SalesRecord(month=r[CFG.month_col], sales=r[CFG.sales_col])
                              for r in df_up.to_dict("records")]
                ss.source = uploaded_csv.name
                st.success(f"Processed {res.stats.records} records from {uploaded_csv.name}")
            else:
                st.error("Upload failed: please check the file format.")
        except Exception:
            err_box.error("Could not read the CSV:\n\n" + "".join(traceback.format_exc()))

    res = ss.validation
    if res is not None and res.valid:
        v1, v2, v3 = st.columns(3)
        v1.metric("Records", f"{res.stats.records:,}")
        v2.metric("Date range", res.stats.date_range)
        v3.metric("Avg sales", f"{res.stats.avg_sales:,}")
    elif res is not None:
        for e in res.errors:
            st.error(e)

    st.markdown("**Required columns:** `month` (YYYY-MM), `sales` (numeric)")
    st.dataframe(records_to_frame(history), use_container_width=True, hide_index=True)
